from typing import Literal

from pydantic import Field

from cyborgdb.openapi_client.models.index_config import INDEX_TYPE_KEYS, IndexConfig


class IndexIVFPQModel(IndexConfig):
    """
    IVFPQ index: product-quantized vectors.

    Args:
        pq_dim: Number of sub-vectors each embedding is split into.
        pq_bits: Bits used to encode each sub-vector code.
    """

    index_type: Literal["ivfpq"] = Field(
        default="ivfpq",
        validation_alias=INDEX_TYPE_KEYS,
        serialization_alias="type",
    )
    pq_dim: int = Field(alias="pqDim", gt=0)
    pq_bits: int = Field(alias="pqBits", gt=0)
