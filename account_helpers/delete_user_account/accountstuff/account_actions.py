"""High-level helpers for the admin account deletion workflow."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .account_clients import IdentityProvider, ProfileStore
from .errors import (
    CallableError,
    ErrorKind,
    describe_exception,
)

ADMIN_ROLE = "admin"

LogFn = Callable[[str], None]


@dataclass(slots=True, frozen=True)
class CallerIdentity:
    """Authenticated identity of whoever invoked the function."""

    uid: str


@dataclass(slots=True)
class DeleteUserAccountResult:
    """Result of the delete_user_account workflow."""

    uid: str
    message: str

    def to_dict(self) -> dict:
        return {"message": self.message}


def _emit(log: LogFn | None, message: str) -> None:
    if log:
        log(message)


def require_caller(caller: CallerIdentity | None) -> CallerIdentity:
    if caller is None:
        raise CallableError(ErrorKind.UNAUTHENTICATED, "Request must be authenticated.")
    return caller


def caller_is_admin(profiles: ProfileStore, caller: CallerIdentity) -> bool:
    profile = profiles.get_profile(caller.uid)
    return profile.exists and profile.role == ADMIN_ROLE


def delete_user_account(
    payload: dict,
    caller: CallerIdentity | None,
    *,
    identity: IdentityProvider,
    profiles: ProfileStore,
    log: LogFn | None = None,
) -> DeleteUserAccountResult:
    """
    Delete the account named by payload["uid"] and its profile document.

    The caller must be authenticated and hold the admin role in its own
    profile. The Cognito account is deleted first, then the profile; a
    failed profile delete does not restore the account.
    """
    caller = require_caller(caller)

    # A missing caller profile and a non-admin role are reported the same way.
    if not caller_is_admin(profiles, caller):
        raise CallableError(ErrorKind.PERMISSION_DENIED, "Only admins can delete users.")

    uid_to_delete = payload.get("uid")
    if not uid_to_delete:
        raise CallableError(ErrorKind.INVALID_ARGUMENT, "UID not provided.")

    try:
        identity.delete_user(uid_to_delete)
        _emit(log, f"Deleted account {uid_to_delete} from the user pool")
        profiles.delete_profile(uid_to_delete)
        _emit(log, f"Deleted profile {uid_to_delete}")
    except Exception as exc:
        _emit(log, f"Error deleting user: {exc}")
        raise CallableError(ErrorKind.UNKNOWN, str(exc), describe_exception(exc)) from exc

    _emit(log, f"User {uid_to_delete} deleted by {caller.uid}")
    return DeleteUserAccountResult(
        uid=uid_to_delete,
        message=f"Successfully deleted user {uid_to_delete}",
    )
