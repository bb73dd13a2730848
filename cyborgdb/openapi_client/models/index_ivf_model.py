from typing import Literal

from pydantic import Field

from cyborgdb.openapi_client.models.index_config import INDEX_TYPE_KEYS, IndexConfig


class IndexIVFModel(IndexConfig):
    """IVF index: inverted file with encrypted residual storage."""

    index_type: Literal["ivf"] = Field(
        default="ivf",
        validation_alias=INDEX_TYPE_KEYS,
        serialization_alias="type",
    )
