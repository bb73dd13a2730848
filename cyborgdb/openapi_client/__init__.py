# flake8: noqa
"""Low-level REST client for the CyborgDB service."""

from cyborgdb.openapi_client.api.default_api import DefaultApi
from cyborgdb.openapi_client.api_client import ApiClient
from cyborgdb.openapi_client.configuration import Configuration
from cyborgdb.openapi_client.exceptions import ApiException, ApiValueError, OpenApiException
