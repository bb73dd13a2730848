from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class IndexOperationRequest(WireModel):
    """Identifies an index; used by describe and delete."""

    index_name: StrictStr = Field(alias="indexName")
    index_key: StrictStr = Field(alias="indexKey", description="32-byte key, hex encoded")
