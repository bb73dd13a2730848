from typing import List

from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class TrainingStatusResponse(WireModel):
    """Body returned by ``GET /v1/indexes/training-status``."""

    training_indexes: List[StrictStr] = Field(default_factory=list, alias="trainingIndexes")
    retrain_threshold: float = Field(default=0, alias="retrainThreshold")
