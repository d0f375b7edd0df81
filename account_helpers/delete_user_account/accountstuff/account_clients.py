"""Cognito and DynamoDB collaborators used by the account deletion workflow."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

import boto3

DEFAULT_REGION = "us-east-1"
DEFAULT_USERS_TABLE = "users"
PROFILE_KEY = "uid"


@dataclass(slots=True)
class ProfileRecord:
    """A profile document, possibly absent."""

    uid: str
    exists: bool
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def role(self) -> str | None:
        return self.data.get("role")


class IdentityProvider:
    """Deletes accounts from a Cognito user pool."""

    def __init__(self, user_pool_id: str, *, client: Any | None = None, region_name: str = DEFAULT_REGION) -> None:
        self.user_pool_id = user_pool_id
        self.client = client or boto3.client("cognito-idp", region_name=region_name)

    def delete_user(self, uid: str) -> None:
        self.client.admin_delete_user(UserPoolId=self.user_pool_id, Username=uid)


class ProfileStore:
    """Profile documents keyed by uid in a DynamoDB table."""

    def __init__(
        self,
        table_name: str = DEFAULT_USERS_TABLE,
        *,
        table: Any | None = None,
        region_name: str = DEFAULT_REGION,
    ) -> None:
        if table is None:
            dynamodb = boto3.resource("dynamodb", region_name=region_name)
            table = dynamodb.Table(table_name)
        self.table = table

    def get_profile(self, uid: str) -> ProfileRecord:
        response = self.table.get_item(Key={PROFILE_KEY: uid})
        item = response.get("Item")
        if item is None:
            return ProfileRecord(uid=uid, exists=False)
        return ProfileRecord(uid=uid, exists=True, data=dict(item))

    def delete_profile(self, uid: str) -> None:
        self.table.delete_item(Key={PROFILE_KEY: uid})


def get_parameters(parameters: list, region_name: str = DEFAULT_REGION) -> dict:
    """
    Fetch parameters from AWS Parameter Store.
    """
    try:
        aws = boto3.session.Session()
        ssm = aws.client("ssm", region_name=region_name)
        response = ssm.get_parameters(Names=parameters, WithDecryption=True)
        invalid = response.get("InvalidParameters") or []
        if invalid:
            raise RuntimeError(f"Missing parameters in SSM: {', '.join(invalid)}")
        return {param["Name"].split("/")[-1]: param["Value"] for param in response["Parameters"]}
    except Exception as e:
        raise RuntimeError(f"Failed to fetch parameters: {e}") from e


@dataclass(slots=True)
class AccountSettings:
    env: str
    region: str
    user_pool_id: str | None
    users_table: str


def load_settings(environ: dict | None = None, *, need_user_pool: bool = True) -> AccountSettings:
    """
    Resolve settings from the environment, falling back to SSM for the pool id.

    The pool id is only looked up when need_user_pool is set.
    """
    env_vars = os.environ if environ is None else environ

    env = env_vars.get("ENV")
    if not env:
        raise RuntimeError("Missing required environment variable: ENV")

    region = env_vars.get("AWS_REGION") or DEFAULT_REGION
    user_pool_id = env_vars.get("USER_POOL_ID") or None
    if not user_pool_id and need_user_pool:
        ssm_base_path = env_vars.get("SSM_BASE_PATH")
        if not ssm_base_path:
            raise RuntimeError("Missing required environment variable: USER_POOL_ID or SSM_BASE_PATH")
        params = get_parameters([f"{ssm_base_path}/user-pool-id"], region_name=region)
        user_pool_id = params["user-pool-id"]

    return AccountSettings(
        env=env,
        region=region,
        user_pool_id=user_pool_id,
        users_table=env_vars.get("USERS_TABLE") or DEFAULT_USERS_TABLE,
    )


def ensure_clients(
    identity: IdentityProvider | None = None,
    profiles: ProfileStore | None = None,
    *,
    settings: AccountSettings | None = None,
) -> tuple[IdentityProvider, ProfileStore]:
    """Return the supplied collaborators, building any missing ones from settings."""
    if identity is not None and profiles is not None:
        return identity, profiles

    resolved = settings or load_settings(need_user_pool=identity is None)
    if identity is None:
        if not resolved.user_pool_id:
            raise RuntimeError("No user pool id configured")
        identity = IdentityProvider(resolved.user_pool_id, region_name=resolved.region)
    if profiles is None:
        profiles = ProfileStore(resolved.users_table, region_name=resolved.region)
    return identity, profiles
