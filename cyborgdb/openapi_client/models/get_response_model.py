from typing import List, Optional

from pydantic import Field

from cyborgdb.openapi_client.models.get_result_item_model import GetResultItemModel
from cyborgdb.openapi_client.models.wire_model import WireModel


class GetResponseModel(WireModel):
    """Body returned by ``POST /v1/vectors/get``. Unknown ids are simply absent."""

    results: List[Optional[GetResultItemModel]] = Field(default_factory=list)
