from typing import Optional

from pydantic import AliasChoices, Field, StrictBool, StrictStr

from cyborgdb.openapi_client.models.index_config import IndexConfig
from cyborgdb.openapi_client.models.wire_model import WireModel


class IndexInfoResponseModel(WireModel):
    """Body returned by ``POST /v1/indexes/describe``."""

    index_name: StrictStr = Field(alias="indexName")
    index_type: Optional[StrictStr] = Field(default=None, alias="indexType")
    is_trained: StrictBool = Field(default=False, alias="isTrained")
    index_config: Optional[IndexConfig] = Field(
        default=None,
        validation_alias=AliasChoices("indexConfig", "index_config", "config"),
        serialization_alias="indexConfig",
    )
