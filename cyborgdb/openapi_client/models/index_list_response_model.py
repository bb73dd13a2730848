from typing import List

from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class IndexListResponseModel(WireModel):
    indexes: List[StrictStr] = Field(default_factory=list)
