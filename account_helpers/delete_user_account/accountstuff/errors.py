"""Error kinds returned to callers of the delete-user-account function."""
from __future__ import annotations

from enum import Enum
from typing import Any

from botocore.exceptions import ClientError


class ErrorKind(Enum):
    UNAUTHENTICATED = ("UNAUTHENTICATED", 401)
    PERMISSION_DENIED = ("PERMISSION_DENIED", 403)
    INVALID_ARGUMENT = ("INVALID_ARGUMENT", 400)
    UNKNOWN = ("UNKNOWN", 500)
    INTERNAL = ("INTERNAL", 500)

    def __init__(self, status: str, http_status: int) -> None:
        self.status = status
        self.http_status = http_status


class CallableError(Exception):
    """Error surfaced to the caller as a structured callable error."""

    def __init__(self, kind: ErrorKind, message: str, details: Any | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        error: dict[str, Any] = {"status": self.kind.status, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}


def describe_exception(exc: Exception) -> dict:
    """Diagnostic details for a downstream failure."""
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        return {
            "code": error.get("Code"),
            "message": error.get("Message"),
            "operation": exc.operation_name,
        }
    return {"type": type(exc).__name__}
