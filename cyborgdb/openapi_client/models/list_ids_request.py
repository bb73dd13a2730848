from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class ListIDsRequest(WireModel):
    """Body of ``POST /v1/vectors/list-ids``."""

    index_name: StrictStr = Field(alias="indexName")
    index_key: StrictStr = Field(alias="indexKey")
