from typing import List, Union

from pydantic import Field

from cyborgdb.openapi_client.models.query_result_item import QueryResultItem
from cyborgdb.openapi_client.models.wire_model import WireModel


class QueryResponse(WireModel):
    """
    Body returned by ``POST /v1/vectors/query``.

    ``results`` holds one list of matches per query vector; older servers
    return a flat list for single-vector queries.
    """

    results: Union[List[List[QueryResultItem]], List[QueryResultItem]] = Field(default_factory=list)

    def result_sets(self) -> List[List[QueryResultItem]]:
        """Return ``results`` in batch shape regardless of how it was received."""
        if not self.results:
            return []
        if all(isinstance(entry, list) for entry in self.results):
            return list(self.results)
        return [list(self.results)]
