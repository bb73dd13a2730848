from pydantic import ConfigDict, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class HealthResponse(WireModel):
    """Body of ``GET /v1/health``; any extra keys are kept."""

    model_config = ConfigDict(extra="allow")

    status: StrictStr
