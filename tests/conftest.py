import pytest

from account_helpers.delete_user_account.accountstuff.account_clients import ProfileRecord


class FakeIdentityProvider:
    """In-memory user pool that records calls into a shared list."""

    def __init__(self, accounts, calls, error=None):
        self.accounts = set(accounts)
        self.calls = calls
        self.error = error

    def delete_user(self, uid):
        self.calls.append(("delete_user", uid))
        if self.error is not None:
            raise self.error
        if uid not in self.accounts:
            raise LookupError(f"There is no user record corresponding to {uid}.")
        self.accounts.remove(uid)


class FakeProfileStore:
    """In-memory users table that records calls into a shared list."""

    def __init__(self, documents, calls, delete_error=None):
        self.documents = {uid: dict(doc) for uid, doc in documents.items()}
        self.calls = calls
        self.delete_error = delete_error

    def get_profile(self, uid):
        self.calls.append(("get_profile", uid))
        if uid not in self.documents:
            return ProfileRecord(uid=uid, exists=False)
        return ProfileRecord(uid=uid, exists=True, data=dict(self.documents[uid]))

    def delete_profile(self, uid):
        self.calls.append(("delete_profile", uid))
        if self.delete_error is not None:
            raise self.delete_error
        self.documents.pop(uid, None)


@pytest.fixture
def calls():
    """Ordered record of every collaborator call."""
    return []


@pytest.fixture
def identity(calls):
    """User pool holding an admin (u1), an editor (u3) and a target (u2)."""
    return FakeIdentityProvider({"u1", "u2", "u3"}, calls)


@pytest.fixture
def profiles(calls):
    """Profiles matching the accounts in the identity fixture."""
    return FakeProfileStore(
        {
            "u1": {"uid": "u1", "role": "admin"},
            "u2": {"uid": "u2", "role": "member"},
            "u3": {"uid": "u3", "role": "editor"},
        },
        calls,
    )
