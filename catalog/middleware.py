"""
Request-level checks shared by the routes.

- ``log_requests``: HTTP middleware, one log line per inbound request.
- ``check_api_key``: write routes, compares ``x-api-key`` with the configured key.
- ``read_json_body`` / ``validate_product_payload``: create and update bodies.

The checks return an error value (or ``None``) instead of raising, so a
route can chain them with ``first_error`` and hand the result to the
single response-mapping stage in ``main``.
"""

import json
import logging
import math
import secrets
from typing import Any, Dict, Optional, Union

from fastapi import Request

from .errors import AuthenticationError, ValidationError, utc_timestamp

request_logger = logging.getLogger("catalog.requests")


def original_url(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


async def log_requests(request: Request, call_next):
    request_logger.info("[%s] %s %s", utc_timestamp(), request.method, original_url(request))
    return await call_next(request)


def check_api_key(provided: Optional[str], expected: str) -> Optional[AuthenticationError]:
    if not provided or not secrets.compare_digest(provided.encode(), expected.encode()):
        return AuthenticationError("Invalid or missing API key")
    return None


async def read_json_body(request: Request) -> Union[Dict[str, Any], ValidationError]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        return ValidationError("Request body must be valid JSON")
    if not isinstance(body, dict):
        return ValidationError("Request body must be a JSON object")
    return body


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_price(value: Any) -> bool:
    # bool is an int subclass in Python, but not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


_RULES = (
    ("name", _is_text, "Product name is required and must be a string"),
    ("description", _is_text, "Product description is required and must be a string"),
    ("price", _is_price, "Product price is required and must be a positive number"),
    ("category", _is_text, "Product category is required and must be a string"),
)


def validate_product_payload(body: Dict[str, Any], partial: bool = False) -> Optional[ValidationError]:
    """Check a create/update body and return the first violation found.

    With ``partial=True`` (updates) a field absent from the body is
    skipped, but a field that is present must still satisfy its rule.
    """
    for field, is_valid, message in _RULES:
        if partial and field not in body:
            continue
        if not is_valid(body.get(field)):
            return ValidationError(message)
    if "inStock" in body and not isinstance(body["inStock"], bool):
        return ValidationError("inStock must be a boolean value")
    return None
