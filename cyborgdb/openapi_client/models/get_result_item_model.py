from typing import Any, Dict, List, Optional, Union

from pydantic import StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class GetResultItemModel(WireModel):
    id: StrictStr
    vector: Optional[List[float]] = None
    contents: Optional[Union[StrictStr, bytes]] = None
    metadata: Optional[Union[Dict[str, Any], str]] = None
