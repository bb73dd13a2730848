"""Connection settings shared by an ApiClient and its APIs."""

import copy
from typing import Dict, Optional

API_KEY_HEADER = "X-API-Key"


class Configuration:
    """
    Settings for talking to a CyborgDB service.

    Args:
        host: Base URL of the service, e.g. ``https://cyborgdb.example.com``.
        api_key: Mapping of auth header name to key, e.g. ``{"X-API-Key": "..."}``.
        verify_ssl: Whether TLS certificates are verified.
    """

    def __init__(
        self,
        host: str = "http://localhost:8000",
        api_key: Optional[Dict[str, str]] = None,
        verify_ssl: bool = True,
    ):
        self.host = host
        self.api_key = dict(api_key or {})
        self.verify_ssl = verify_ssl

    @property
    def host(self) -> str:
        return self._host

    @host.setter
    def host(self, value: str) -> None:
        self._host = value.rstrip("/")

    def auth_headers(self) -> Dict[str, str]:
        """Headers that authenticate every request."""
        key = self.api_key.get(API_KEY_HEADER)
        return {API_KEY_HEADER: key} if key else {}

    def copy(self) -> "Configuration":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return f"Configuration(host={self.host!r}, verify_ssl={self.verify_ssl!r})"
