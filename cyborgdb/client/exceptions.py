"""
Error envelope translation for CyborgDB client operations.

Every HTTP or transport failure reaching the public API is re-raised as a
:class:`CyborgDBError` whose message is built by :func:`format_api_error`.
"""

import json
from typing import Any, Optional

from cyborgdb.openapi_client.exceptions import ApiException

__all__ = ["CyborgDBError", "format_api_error"]


class CyborgDBError(ValueError):
    """Raised when the CyborgDB service rejects a request or cannot be reached."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def _to_json(value: Any) -> str:
    return json.dumps(value, default=str)


def format_api_error(error: BaseException) -> str:
    """
    Build the user-facing message for a failed call.

    Rules, applied in order:

    1. body ``detail`` is a list: ``"Validation failed: <detail json>"``
    2. body has ``detail`` and a status code (``status_code``/``statusCode``
       in the body, else the HTTP status): ``"<status> - <detail>"``
    3. any other response body: ``"Unhandled error format: <body json>"``
    4. no response at all: ``"Unexpected error: <message>"``
    """
    if not isinstance(error, ApiException):
        return f"Unexpected error: {error}"

    body = error.body
    if isinstance(body, (str, bytes)):
        try:
            body = json.loads(body)
        except ValueError:
            pass

    if isinstance(body, dict) and "detail" in body:
        detail = body["detail"]
        if isinstance(detail, list):
            return f"Validation failed: {_to_json(detail)}"
        status = body.get("status_code", body.get("statusCode", error.status))
        if status is not None:
            if not isinstance(detail, str):
                detail = _to_json(detail)
            return f"{status} - {detail}"

    if body is None:
        return f"Unexpected error: {error.status} {error.reason}".rstrip()
    return f"Unhandled error format: {_to_json(body)}"
