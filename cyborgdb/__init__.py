"""CyborgDB: Python client for the confidential vector database."""

# Re-export classes from client module
from cyborgdb.client.client import (
    Client,
    IndexConfig,
    IndexIVF,
    IndexIVFPQ,
    IndexIVFFlat,
    generate_key
)

# Re-export from encrypted_index.py
from cyborgdb.client.encrypted_index import EncryptedIndex

from cyborgdb.client.exceptions import CyborgDBError
from cyborgdb.demo import get_demo_api_key

__version__ = "0.9.0"

__all__ = [
    "Client",
    "CyborgDBError",
    "EncryptedIndex",
    "IndexConfig",
    "IndexIVF",
    "IndexIVFPQ",
    "IndexIVFFlat",
    "generate_key",
    "get_demo_api_key",
]
