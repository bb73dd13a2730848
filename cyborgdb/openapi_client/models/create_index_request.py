from typing import Optional

from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.index_config import IndexConfig
from cyborgdb.openapi_client.models.wire_model import WireModel


class CreateIndexRequest(WireModel):
    """Body of ``POST /v1/indexes/create``."""

    index_name: StrictStr = Field(alias="indexName")
    index_key: StrictStr = Field(alias="indexKey", description="32-byte key, hex encoded")
    index_config: Optional[IndexConfig] = Field(default=None, alias="indexConfig")
    embedding_model: Optional[StrictStr] = Field(default=None, alias="embeddingModel")
