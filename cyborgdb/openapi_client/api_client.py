"""
Generic HTTP client for the CyborgDB REST API.

Serializes request models, sends them with a ``requests`` session and
deserializes the response body into the expected model.
"""

import json
import logging
from typing import Any, Dict, Optional, Type

import requests

from cyborgdb.openapi_client.configuration import Configuration
from cyborgdb.openapi_client.exceptions import ApiException, ApiValueError
from cyborgdb.openapi_client.models.wire_model import WireModel

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Owns the HTTP session used by the generated API classes.

    Args:
        configuration: Connection settings. A default Configuration is used
            when omitted.
    """

    def __init__(self, configuration: Optional[Configuration] = None):
        self.configuration = configuration or Configuration()
        self.session = requests.Session()
        self.session.verify = self.configuration.verify_ssl
        self.default_headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self.default_headers.update(self.configuration.auth_headers())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self) -> None:
        self.session.close()

    def set_default_header(self, header_name: str, header_value: str) -> None:
        self.default_headers[header_name] = header_value

    @staticmethod
    def sanitize_for_serialization(body: Any) -> Any:
        """Turn a model (or plain structure of models) into JSON-ready data."""
        if body is None:
            return None
        if isinstance(body, WireModel):
            return body.to_dict()
        if isinstance(body, (list, tuple)):
            return [ApiClient.sanitize_for_serialization(item) for item in body]
        if isinstance(body, dict):
            return {key: ApiClient.sanitize_for_serialization(value) for key, value in body.items()}
        return body

    @staticmethod
    def _parse_body(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def call_api(
        self,
        method: str,
        resource_path: str,
        body: Any = None,
        response_type: Optional[Type[WireModel]] = None,
        _headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Issue one HTTP request and return the deserialized response.

        Args:
            method: HTTP method, ``GET`` or ``POST``.
            resource_path: Path below the configured host, e.g. ``/v1/health``.
            body: Request model (or JSON-ready data) to send as the body.
            response_type: Model class for a 2xx body. The parsed JSON is
                returned as-is when omitted.
            _headers: Extra headers for this call only.

        Raises:
            ApiException: For any non-2xx response.
            requests.RequestException: For transport failures.
        """
        method = method.upper()
        if method not in ("GET", "POST"):
            raise ApiValueError(f"Unsupported HTTP method: {method}")

        headers = dict(self.default_headers)
        if _headers:
            headers.update(_headers)

        url = self.configuration.host + resource_path
        payload = self.sanitize_for_serialization(body)
        data = json.dumps(payload) if payload is not None else None

        logger.debug("%s %s", method, url)
        response = self.session.request(method, url, data=data, headers=headers)

        if not 200 <= response.status_code <= 299:
            raise ApiException(
                status=response.status_code,
                reason=response.reason,
                body=self._parse_body(response),
                headers=response.headers,
            )

        return self.deserialize(self._parse_body(response), response_type)

    @staticmethod
    def deserialize(data: Any, response_type: Optional[Type[WireModel]]) -> Any:
        if response_type is None or data is None:
            return data
        return response_type.from_dict(data)
