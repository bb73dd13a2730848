"""Client module for CyborgDB."""

# Import from client.py
from cyborgdb.client.client import (
    Client,
    IndexConfig,
    IndexIVF,
    IndexIVFPQ,
    IndexIVFFlat,
    generate_key
)

# Import from encrypted_index.py
from cyborgdb.client.encrypted_index import EncryptedIndex

from cyborgdb.client.exceptions import CyborgDBError

__all__ = [
    "Client",
    "CyborgDBError",
    "EncryptedIndex",
    "IndexConfig",
    "IndexIVF",
    "IndexIVFPQ",
    "IndexIVFFlat",
    "generate_key"
]
