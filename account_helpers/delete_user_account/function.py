"""
Delete a user account and its profile on behalf of an admin caller.

Invoked as a callable function: the request body is {"data": {"uid": ...}}
and the caller identity comes from the API Gateway authorizer claims.
"""
from __future__ import annotations

import base64
import binascii
import json

from .accountstuff.account_actions import (
    CallerIdentity,
    delete_user_account,
    require_caller,
)
from .accountstuff.account_clients import (
    IdentityProvider,
    ProfileStore,
    ensure_clients,
)
from .accountstuff.errors import CallableError, ErrorKind


def _response(status_code: int, body: dict) -> dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _caller_from_event(event: dict) -> CallerIdentity | None:
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    claims = authorizer.get("claims") or (authorizer.get("jwt") or {}).get("claims") or {}
    uid = claims.get("sub")
    if not uid:
        uid = (event.get("auth") or {}).get("uid")
    return CallerIdentity(uid=uid) if uid else None


def _read_body(event: dict):
    body = event["body"] or "{}"
    if event.get("isBase64Encoded"):
        body = base64.b64decode(body, validate=True).decode("utf-8")
    return json.loads(body)


def parse_invocation(event: dict) -> tuple[dict, CallerIdentity | None]:
    """
    Split a Lambda event into the callable payload and the caller identity.
    """
    if "body" in event:
        try:
            envelope = _read_body(event)
        except (TypeError, ValueError, binascii.Error) as e:
            raise CallableError(ErrorKind.INVALID_ARGUMENT, "Bad Request") from e
        if not isinstance(envelope, dict):
            raise CallableError(ErrorKind.INVALID_ARGUMENT, "Bad Request")
    else:
        envelope = event

    payload = envelope.get("data")
    if not isinstance(payload, dict):
        payload = {}
    return payload, _caller_from_event(event)


def main(
    event: dict,
    *,
    identity: IdentityProvider | None = None,
    profiles: ProfileStore | None = None,
) -> dict:
    """
    Main function to authorize the caller and delete the requested account.
    """
    log_messages: list[str] = []

    def log(message: str) -> None:
        log_messages.append(message)
        print(f"[delete_user_account] {message}")

    try:
        payload, caller = parse_invocation(event)
        # Anonymous calls never reach settings, SSM or the AWS clients.
        caller = require_caller(caller)
        identity, profiles = ensure_clients(identity, profiles)
        result = delete_user_account(
            payload,
            caller,
            identity=identity,
            profiles=profiles,
            log=log,
        )
    except CallableError as e:
        err = _response(e.kind.http_status, e.to_dict())
        print(err)
        return err
    except Exception as e:
        log(f"Unhandled error: {e!r}")
        err = _response(
            ErrorKind.INTERNAL.http_status,
            CallableError(ErrorKind.INTERNAL, "INTERNAL").to_dict(),
        )
        print(err)
        return err

    return _response(200, {"result": result.to_dict(), "messages": log_messages})


def lambda_handler(event, context):
    """
    AWS Lambda entry point.
    """
    return main(event)


if __name__ == "__main__":
    # Simulated direct invocation for local testing
    test_event = {
        "auth": {"uid": "admin-uid"},
        "data": {"uid": "target-uid"},
    }
    print(main(test_event))
