"""Exceptions raised by the low-level REST client."""

from typing import Any, Mapping, Optional


class OpenApiException(Exception):
    """The base exception class for all OpenAPIExceptions"""


class ApiValueError(OpenApiException, ValueError):
    """Raised when a request cannot be built from the given arguments."""


class ApiException(OpenApiException):
    """
    Raised for any non-2xx HTTP response.

    Attributes:
        status: HTTP status code.
        reason: HTTP reason phrase.
        body: Response body, parsed from JSON when possible, else raw text.
        headers: Response headers.
    """

    def __init__(
        self,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ):
        self.status = status
        self.reason = reason
        self.body = body
        self.headers = headers
        super().__init__(str(self))

    def __str__(self) -> str:
        message = f"({self.status})\nReason: {self.reason}\n"
        if self.headers:
            message += f"HTTP response headers: {dict(self.headers)}\n"
        if self.body is not None:
            message += f"HTTP response body: {self.body}\n"
        return message
