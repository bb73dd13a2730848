"""
CyborgDB REST Client

This module provides a Python client for interacting with the CyborgDB REST API.
"""

from typing import Any, Dict, List, NoReturn, Optional, Union
from urllib.parse import urlparse
import binascii
import logging
import secrets

import requests
import urllib3
from pydantic import ValidationError

from cyborgdb.client.encrypted_index import EncryptedIndex
from cyborgdb.client.exceptions import CyborgDBError, format_api_error
from cyborgdb.openapi_client.api.default_api import DefaultApi
from cyborgdb.openapi_client.api_client import ApiClient
from cyborgdb.openapi_client.configuration import API_KEY_HEADER, Configuration
from cyborgdb.openapi_client.exceptions import ApiException
from cyborgdb.openapi_client.models import (
    CreateIndexRequest,
    IndexConfig,
    IndexIVFFlatModel,
    IndexIVFModel,
    IndexIVFPQModel,
    IndexOperationRequest,
)

logger = logging.getLogger(__name__)

__all__ = [
    "Client",
    "EncryptedIndex",
    "IndexConfig",
    "IndexIVF",
    "IndexIVFPQ",
    "IndexIVFFlat",
    "generate_key",
]

# Re-export with the public names
IndexIVF = IndexIVFModel
IndexIVFPQ = IndexIVFPQModel
IndexIVFFlat = IndexIVFFlatModel

KEY_SIZE = 32
LOCAL_HOSTS = ("localhost", "127.0.0.1")
REQUEST_ERRORS = (ApiException, requests.RequestException)


def generate_key() -> bytes:
    """
    Generate a secure 32-byte key for use with CyborgDB indexes.

    Returns:
        bytes: A cryptographically secure 32-byte key.
    """
    return secrets.token_bytes(KEY_SIZE)


def resolve_ssl_verification(base_url: str, verify_ssl: Optional[bool] = None) -> bool:
    """
    Decide whether TLS certificates are verified for ``base_url``.

    * ``http://`` URLs never verify, and a warning is logged whatever
      ``verify_ssl`` says, since the setting cannot be honored in plaintext.
    * An explicit ``verify_ssl`` wins for ``https://`` URLs; ``False`` logs
      a warning.
    * Otherwise verification is disabled for localhost and 127.0.0.1
      (logged at info level) and enabled for every other host.
    """
    parsed = urlparse(base_url)

    if parsed.scheme == "http":
        logger.warning("SSL verification is disabled. Not recommended for production.")
        return False

    if verify_ssl is None:
        if parsed.hostname in LOCAL_HOSTS:
            logger.info("SSL verification disabled for localhost (development mode)")
            return False
        return True

    if not verify_ssl:
        logger.warning("SSL verification is disabled. Not recommended for production.")
    return bool(verify_ssl)


class Client:
    """
    Client for interacting with CyborgDB via REST API.

    This class provides methods for creating, loading, and managing encrypted indexes.

    Args:
        base_url: Base URL of the CyborgDB service.
        api_key: API key sent as the ``X-API-Key`` header on every request.
        verify_ssl: Whether to verify TLS certificates. Auto-detected from
            ``base_url`` when omitted.
    """

    def __init__(self, base_url: str, api_key: Optional[str], verify_ssl: Optional[bool] = None):
        if not base_url:
            raise ValueError("base_url is required")

        self.verify_ssl = resolve_ssl_verification(base_url, verify_ssl)
        if not self.verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        # Set up the OpenAPI client configuration
        self.config = Configuration(
            host=base_url,
            api_key={API_KEY_HEADER: api_key} if api_key else None,
            verify_ssl=self.verify_ssl,
        )
        self.api_client = ApiClient(self.config)
        self.api = DefaultApi(self.api_client)

    @staticmethod
    def generate_key() -> bytes:
        """
        Generate a secure 32-byte key for use with CyborgDB indexes.

        Returns:
            bytes: A cryptographically secure 32-byte key.
        """
        return generate_key()

    def get_health(self) -> Dict[str, Any]:
        """
        Check the health of the server.

        Returns:
            The health payload, always containing a 'status' key.
        """
        try:
            response = self.api.health_check_v1_health_get()
        except REQUEST_ERRORS as e:
            self._raise_api_error("Health check", e)
        return response.to_dict()

    def list_indexes(self) -> List[str]:
        """
        Get a list of all encrypted index names accessible via the client.

        Returns:
            A list of index names.

        Raises:
            CyborgDBError: If the list of indexes could not be retrieved.
        """
        try:
            response = self.api.list_indexes_v1_indexes_list_get()
        except REQUEST_ERRORS as e:
            self._raise_api_error("List indexes", e)
        return list(response.indexes) if response else []

    def is_training(self) -> Dict[str, Any]:
        """
        Check which indexes are currently being trained.

        Returns:
            A dictionary with 'training_indexes' (names of indexes being
            trained) and 'retrain_threshold' (the retraining multiplier).
        """
        try:
            response = self.api.get_training_status_v1_indexes_training_status_get()
        except REQUEST_ERRORS as e:
            self._raise_api_error("Training status check", e)
        return {
            "training_indexes": list(response.training_indexes),
            "retrain_threshold": response.retrain_threshold,
        }

    def create_index(
        self,
        index_name: str,
        index_key: bytes,
        index_config: Optional[Union[IndexIVFModel, IndexIVFPQModel, IndexIVFFlatModel]] = None,
        embedding_model: Optional[str] = None,
        metric: Optional[str] = None,
    ) -> EncryptedIndex:
        """
        Create and return a new encrypted index based on the provided configuration.

        Args:
            index_name: Name of the new index.
            index_key: 32-byte encryption key for the index.
            index_config: Index configuration. Defaults to ``IndexIVFFlat()``.
            embedding_model: Optional server-side embedding model name.
            metric: Distance metric ('euclidean', 'squared_euclidean' or 'cosine').

        Raises:
            ValueError: If the key or the configuration is invalid.
            CyborgDBError: If the server refused to create the index.
        """
        self._check_key(index_key)
        if not isinstance(index_name, str) or not index_name:
            raise ValueError("index_name must be a non-empty string")

        try:
            config_values = (index_config or IndexIVFFlat()).model_dump(exclude_none=True)
            if metric is not None:
                config_values["metric"] = metric
            config = IndexConfig(**config_values)
        except ValidationError as ve:
            error_msg = f"Validation error while creating index: {ve}"
            logger.error(error_msg)
            raise ValueError(error_msg) from ve

        if config.dimension == 0 and embedding_model is None:
            raise ValueError("dimension must be positive unless an embedding_model is given")

        request = CreateIndexRequest(
            index_name=index_name,
            index_key=self._key_to_hex(index_key),
            index_config=config,
            embedding_model=embedding_model,
        )
        try:
            self.api.create_index_v1_indexes_create_post(request)
        except REQUEST_ERRORS as e:
            self._raise_api_error("Create index", e)

        return EncryptedIndex(
            index_name=index_name,
            index_key=index_key,
            api=self.api,
            index_config=config,
            embedding_model=embedding_model,
        )

    def load_index(self, index_name: str, index_key: bytes) -> EncryptedIndex:
        """
        Load an existing encrypted index.

        Args:
            index_name: Name of the existing index.
            index_key: The exact 32-byte key the index was created with.

        Raises:
            ValueError: If the key is not 32 bytes.
            CyborgDBError: If the index does not exist or the key is wrong.
        """
        self._check_key(index_key)
        request = IndexOperationRequest(index_name=index_name, index_key=self._key_to_hex(index_key))
        try:
            info = self.api.get_index_info_v1_indexes_describe_post(request)
        except REQUEST_ERRORS as e:
            self._raise_api_error("Load index", e)

        return EncryptedIndex(
            index_name=info.index_name,
            index_key=index_key,
            api=self.api,
            index_config=info.index_config,
        )

    @staticmethod
    def _check_key(index_key: bytes) -> None:
        if not isinstance(index_key, bytes) or len(index_key) != KEY_SIZE:
            raise ValueError("index_key must be a 32-byte bytes object")

    @staticmethod
    def _key_to_hex(index_key: bytes) -> str:
        return binascii.hexlify(index_key).decode("ascii")

    @staticmethod
    def _raise_api_error(operation: str, error: Exception) -> NoReturn:
        message = f"{operation} failed: {format_api_error(error)}"
        logger.error(message)
        raise CyborgDBError(message, status=getattr(error, "status", None)) from error
