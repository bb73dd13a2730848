# flake8: noqa
"""Request and response models of the CyborgDB REST API."""

from cyborgdb.openapi_client.models.wire_model import WireModel
from cyborgdb.openapi_client.models.index_config import IndexConfig
from cyborgdb.openapi_client.models.index_ivf_model import IndexIVFModel
from cyborgdb.openapi_client.models.index_ivf_flat_model import IndexIVFFlatModel
from cyborgdb.openapi_client.models.index_ivfpq_model import IndexIVFPQModel
from cyborgdb.openapi_client.models.create_index_request import CreateIndexRequest
from cyborgdb.openapi_client.models.index_operation_request import IndexOperationRequest
from cyborgdb.openapi_client.models.train_request import TrainRequest
from cyborgdb.openapi_client.models.vector_item import VectorItem
from cyborgdb.openapi_client.models.upsert_request import UpsertRequest
from cyborgdb.openapi_client.models.query_request import QueryRequest
from cyborgdb.openapi_client.models.get_request import GetRequest
from cyborgdb.openapi_client.models.delete_request import DeleteRequest
from cyborgdb.openapi_client.models.list_ids_request import ListIDsRequest
from cyborgdb.openapi_client.models.health_response import HealthResponse
from cyborgdb.openapi_client.models.index_list_response_model import IndexListResponseModel
from cyborgdb.openapi_client.models.index_info_response_model import IndexInfoResponseModel
from cyborgdb.openapi_client.models.success_response_model import SuccessResponseModel
from cyborgdb.openapi_client.models.query_result_item import QueryResultItem
from cyborgdb.openapi_client.models.query_response import QueryResponse
from cyborgdb.openapi_client.models.get_result_item_model import GetResultItemModel
from cyborgdb.openapi_client.models.get_response_model import GetResponseModel
from cyborgdb.openapi_client.models.list_ids_response import ListIDsResponse
from cyborgdb.openapi_client.models.training_status_response import TrainingStatusResponse
