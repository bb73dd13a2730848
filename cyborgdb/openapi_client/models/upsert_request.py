from typing import List

from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.vector_item import VectorItem
from cyborgdb.openapi_client.models.wire_model import WireModel


class UpsertRequest(WireModel):
    """Body of ``POST /v1/vectors/upsert``."""

    index_name: StrictStr = Field(alias="indexName")
    index_key: StrictStr = Field(alias="indexKey")
    items: List[VectorItem]
