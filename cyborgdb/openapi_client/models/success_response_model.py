from typing import Optional

from pydantic import StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class SuccessResponseModel(WireModel):
    """Generic ``{"status": ..., "message": ...}`` acknowledgement."""

    status: StrictStr = "success"
    message: Optional[StrictStr] = None
