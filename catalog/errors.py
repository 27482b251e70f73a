"""
Error taxonomy and the outcome type returned by route logic.

Expected failures (bad input, unknown id, bad key) are returned as
``CatalogError`` values inside an ``Outcome`` rather than raised.  The
same classes are still real exceptions so that anything raised by
accident is rendered identically by the app's exception handlers.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union


class CatalogError(Exception):
    """Base class for errors rendered into the JSON error envelope."""

    name = "Error"
    status_code = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    name = "ValidationError"
    status_code = 400


class NotFoundError(CatalogError):
    name = "NotFoundError"
    status_code = 404


class AuthenticationError(CatalogError):
    name = "AuthenticationError"
    status_code = 401


@dataclass
class Ok:
    value: Any
    status_code: int = 200


Outcome = Union[Ok, CatalogError]


def first_error(*checks: Callable[[], Optional[CatalogError]]) -> Optional[CatalogError]:
    """Run checks in order and return the first error, skipping the rest."""
    for check in checks:
        err = check()
        if err is not None:
            return err
    return None


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def error_envelope(exc: BaseException) -> Dict[str, Any]:
    if isinstance(exc, CatalogError):
        name, message, status_code = exc.name, exc.message, exc.status_code
    else:
        # never echo internals of unexpected failures back to the client
        name, message, status_code = "Error", "Internal Server Error", 500
    return {
        "error": {
            "name": name,
            "message": message,
            "statusCode": status_code,
            "timestamp": utc_timestamp(),
        }
    }


def route_not_found_envelope(path: str) -> Dict[str, Any]:
    return {
        "error": {
            "name": NotFoundError.name,
            "message": f"Route {path} not found",
            "statusCode": 404,
        }
    }
