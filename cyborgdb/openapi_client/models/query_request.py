from typing import Any, Dict, List, Optional

from pydantic import Field, StrictBool, StrictStr

from cyborgdb.openapi_client.models.wire_model import WireModel


class QueryRequest(WireModel):
    """
    Body of ``POST /v1/vectors/query``.

    Query vectors are always sent batch-shaped, even for a single vector.
    ``n_probes == 0`` lets the server choose the probe count.
    """

    index_name: StrictStr = Field(alias="indexName")
    index_key: StrictStr = Field(alias="indexKey")
    query_vectors: Optional[List[List[float]]] = Field(default=None, alias="queryVectors")
    query_contents: Optional[StrictStr] = Field(default=None, alias="queryContents")
    top_k: int = Field(default=100, alias="topK", gt=0)
    n_probes: int = Field(default=0, alias="nProbes", ge=0)
    greedy: StrictBool = False
    filters: Optional[Dict[str, Any]] = None
    include: List[StrictStr] = Field(default_factory=lambda: ["distance", "metadata"])
