from typing import List

from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class ListIDsResponse(WireModel):
    ids: List[StrictStr] = Field(default_factory=list)
    count: int = 0
