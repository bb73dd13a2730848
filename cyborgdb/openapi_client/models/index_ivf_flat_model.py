from typing import Literal

from pydantic import Field

from cyborgdb.openapi_client.models.index_config import INDEX_TYPE_KEYS, IndexConfig


class IndexIVFFlatModel(IndexConfig):
    """IVFFlat index: uncompressed vectors, highest recall."""

    index_type: Literal["ivfflat"] = Field(
        default="ivfflat",
        validation_alias=INDEX_TYPE_KEYS,
        serialization_alias="type",
    )
