from typing import Optional

from pydantic import Field, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class TrainRequest(WireModel):
    """
    Body of ``POST /v1/indexes/train``.

    Every tuning parameter is optional; the server applies its own default
    for any field left out of the payload.
    """

    index_name: StrictStr = Field(alias="indexName")
    index_key: StrictStr = Field(alias="indexKey")
    batch_size: Optional[int] = Field(default=None, alias="batchSize", gt=0)
    max_iters: Optional[int] = Field(default=None, alias="maxIters", gt=0)
    tolerance: Optional[float] = Field(default=None, gt=0)
    n_lists: Optional[int] = Field(default=None, alias="nLists", gt=0)
    max_memory: Optional[int] = Field(default=None, alias="maxMemory", ge=0)
