from typing import Any, Dict, Optional, Union

from pydantic import AliasChoices, Field, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class QueryResultItem(WireModel):
    """A single nearest-neighbour match. Some servers label the distance ``score``."""

    id: StrictStr
    distance: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("distance", "score"),
        serialization_alias="distance",
    )
    metadata: Optional[Union[Dict[str, Any], str]] = None
