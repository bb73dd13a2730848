"""Index topology sent on create and returned by describe."""

from typing import Literal, Optional

from pydantic import AliasChoices, Field, model_validator

from cyborgdb.openapi_client.models.wire_model import WireModel

Metric = Literal["euclidean", "squared_euclidean", "cosine"]
IndexType = Literal["ivf", "ivfflat", "ivfpq"]

# Older servers report the index type under any of these keys.
INDEX_TYPE_KEYS = AliasChoices("type", "indexType", "index_type")


class IndexConfig(WireModel):
    """
    Configuration of an encrypted index.

    ``pq_dim`` and ``pq_bits`` apply to ``ivfpq`` indexes only, where both
    are required and must be positive.
    """

    dimension: Optional[int] = Field(default=None, ge=0)
    metric: Optional[Metric] = None
    index_type: IndexType = Field(
        default="ivfflat",
        validation_alias=INDEX_TYPE_KEYS,
        serialization_alias="type",
    )
    pq_dim: Optional[int] = Field(default=None, alias="pqDim")
    pq_bits: Optional[int] = Field(default=None, alias="pqBits")

    @model_validator(mode="after")
    def _check_quantization(self) -> "IndexConfig":
        if self.index_type == "ivfpq":
            for name in ("pq_dim", "pq_bits"):
                value = getattr(self, name)
                if value is None or value <= 0:
                    raise ValueError(f"{name} must be a positive integer for ivfpq indexes")
        return self
