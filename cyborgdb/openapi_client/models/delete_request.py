from typing import List

from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class DeleteRequest(WireModel):
    """Body of ``POST /v1/vectors/delete``."""

    index_name: StrictStr = Field(alias="indexName")
    index_key: StrictStr = Field(alias="indexKey")
    ids: List[StrictStr]
