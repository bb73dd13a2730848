"""Endpoints of the CyborgDB REST API, one method per operation."""

from typing import Dict, Optional

from cyborgdb.openapi_client.api_client import ApiClient
from cyborgdb.openapi_client.models import (
    CreateIndexRequest,
    DeleteRequest,
    GetRequest,
    GetResponseModel,
    HealthResponse,
    IndexInfoResponseModel,
    IndexListResponseModel,
    IndexOperationRequest,
    ListIDsRequest,
    ListIDsResponse,
    QueryRequest,
    QueryResponse,
    SuccessResponseModel,
    TrainingStatusResponse,
    TrainRequest,
    UpsertRequest,
)

Headers = Optional[Dict[str, str]]


class DefaultApi:
    def __init__(self, api_client: Optional[ApiClient] = None):
        self.api_client = api_client or ApiClient()

    def health_check_v1_health_get(self, _headers: Headers = None) -> HealthResponse:
        """Health Check"""
        return self.api_client.call_api(
            "GET", "/v1/health", response_type=HealthResponse, _headers=_headers
        )

    def list_indexes_v1_indexes_list_get(self, _headers: Headers = None) -> IndexListResponseModel:
        """List Indexes"""
        return self.api_client.call_api(
            "GET", "/v1/indexes/list", response_type=IndexListResponseModel, _headers=_headers
        )

    def get_training_status_v1_indexes_training_status_get(
        self, _headers: Headers = None
    ) -> TrainingStatusResponse:
        """Names of the indexes currently being trained"""
        return self.api_client.call_api(
            "GET",
            "/v1/indexes/training-status",
            response_type=TrainingStatusResponse,
            _headers=_headers,
        )

    def create_index_v1_indexes_create_post(
        self, create_index_request: CreateIndexRequest, _headers: Headers = None
    ) -> SuccessResponseModel:
        """Create Encrypted Index"""
        return self.api_client.call_api(
            "POST",
            "/v1/indexes/create",
            body=create_index_request,
            response_type=SuccessResponseModel,
            _headers=_headers,
        )

    def get_index_info_v1_indexes_describe_post(
        self, index_operation_request: IndexOperationRequest, _headers: Headers = None
    ) -> IndexInfoResponseModel:
        """Describe Encrypted Index"""
        return self.api_client.call_api(
            "POST",
            "/v1/indexes/describe",
            body=index_operation_request,
            response_type=IndexInfoResponseModel,
            _headers=_headers,
        )

    def delete_index_v1_indexes_delete_post(
        self, index_operation_request: IndexOperationRequest, _headers: Headers = None
    ) -> SuccessResponseModel:
        """Delete Encrypted Index"""
        return self.api_client.call_api(
            "POST",
            "/v1/indexes/delete",
            body=index_operation_request,
            response_type=SuccessResponseModel,
            _headers=_headers,
        )

    def train_index_v1_indexes_train_post(
        self, train_request: TrainRequest, _headers: Headers = None
    ) -> SuccessResponseModel:
        """Train Encrypted Index"""
        return self.api_client.call_api(
            "POST",
            "/v1/indexes/train",
            body=train_request,
            response_type=SuccessResponseModel,
            _headers=_headers,
        )

    def upsert_vectors_v1_vectors_upsert_post(
        self, upsert_request: UpsertRequest, _headers: Headers = None
    ) -> SuccessResponseModel:
        """Add Vectors"""
        return self.api_client.call_api(
            "POST",
            "/v1/vectors/upsert",
            body=upsert_request,
            response_type=SuccessResponseModel,
            _headers=_headers,
        )

    def query_vectors_v1_vectors_query_post(
        self, query_request: QueryRequest, _headers: Headers = None
    ) -> QueryResponse:
        """Query Vectors"""
        return self.api_client.call_api(
            "POST",
            "/v1/vectors/query",
            body=query_request,
            response_type=QueryResponse,
            _headers=_headers,
        )

    def get_vectors_v1_vectors_get_post(
        self, get_request: GetRequest, _headers: Headers = None
    ) -> GetResponseModel:
        """Get Vectors"""
        return self.api_client.call_api(
            "POST",
            "/v1/vectors/get",
            body=get_request,
            response_type=GetResponseModel,
            _headers=_headers,
        )

    def delete_vectors_v1_vectors_delete_post(
        self, delete_request: DeleteRequest, _headers: Headers = None
    ) -> SuccessResponseModel:
        """Delete Vectors"""
        return self.api_client.call_api(
            "POST",
            "/v1/vectors/delete",
            body=delete_request,
            response_type=SuccessResponseModel,
            _headers=_headers,
        )

    def list_ids_v1_vectors_list_ids_post(
        self, list_ids_request: ListIDsRequest, _headers: Headers = None
    ) -> ListIDsResponse:
        """List Vector IDs"""
        return self.api_client.call_api(
            "POST",
            "/v1/vectors/list-ids",
            body=list_ids_request,
            response_type=ListIDsResponse,
            _headers=_headers,
        )
