from typing import Any, Dict, List, Optional

from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class VectorItem(WireModel):
    """
    One record of an upsert.

    ``contents`` travels as a string: binary contents are base64 encoded by
    the caller before the item is built.
    """

    id: StrictStr = Field(min_length=1)
    vector: Optional[List[float]] = None
    contents: Optional[StrictStr] = None
    metadata: Optional[Dict[str, Any]] = None
