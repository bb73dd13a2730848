from typing import List

from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class GetRequest(WireModel):
    """Body of ``POST /v1/vectors/get``."""

    index_name: StrictStr = Field(alias="indexName")
    index_key: StrictStr = Field(alias="indexKey")
    ids: List[StrictStr]
    include: List[StrictStr] = Field(default_factory=lambda: ["vector", "contents", "metadata"])
