"""
Encrypted index handle for the CyborgDB REST API.

This module normalizes the call shapes accepted by the public index methods
into a single request model per operation, validates them before any network
call, and reshapes responses back into plain Python structures.
"""

import base64
import binascii
import json
import logging
import numbers
from typing import Any, Dict, List, NoReturn, Optional, Sequence, Tuple, Union

import numpy as np
import requests

from cyborgdb.client.exceptions import CyborgDBError, format_api_error
from cyborgdb.openapi_client.api.default_api import DefaultApi
from cyborgdb.openapi_client.exceptions import ApiException
from cyborgdb.openapi_client.models import (
    DeleteRequest,
    GetRequest,
    IndexConfig,
    IndexInfoResponseModel,
    IndexOperationRequest,
    ListIDsRequest,
    QueryRequest,
    QueryResultItem,
    TrainRequest,
    UpsertRequest,
    VectorItem,
)

logger = logging.getLogger(__name__)

__all__ = ["EncryptedIndex"]

QUERY_INCLUDE_FIELDS = ("distance", "metadata")
GET_INCLUDE_FIELDS = ("vector", "contents", "metadata")

VectorLike = Union[Sequence[float], np.ndarray]
REQUEST_ERRORS = (ApiException, requests.RequestException)


def _success(message: str) -> Dict[str, Any]:
    return {"status": "success", "message": message}


def _encode_contents(contents: Union[str, bytes, bytearray]) -> str:
    if isinstance(contents, (bytes, bytearray)):
        return base64.b64encode(bytes(contents)).decode("ascii")
    if isinstance(contents, str):
        return contents
    raise TypeError(f"contents must be str or bytes, got {type(contents).__name__}")


def _decode_contents(contents: Optional[Union[str, bytes]]) -> Optional[Union[str, bytes]]:
    # Contents that are not valid base64 are returned untouched.
    if not isinstance(contents, str):
        return contents
    try:
        return base64.b64decode(contents, validate=True)
    except (binascii.Error, ValueError):
        return contents


def _parse_metadata(metadata: Any) -> Any:
    if isinstance(metadata, str):
        try:
            return json.loads(metadata)
        except json.JSONDecodeError:
            return metadata
    return metadata


def _check_int(value: Any, name: str, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < minimum:
        qualifier = "positive" if minimum > 0 else "non-negative"
        raise ValueError(f"{name} must be a {qualifier} integer, got {value!r}")


def _check_numeric(values: Any, label: str) -> None:
    """Reject strings, booleans and other non-numbers before any float cast."""
    if isinstance(values, np.ndarray):
        if values.dtype.kind not in "iuf":
            raise ValueError(f"{label}: vector must contain only numbers, got dtype {values.dtype}")
        return
    if isinstance(values, (str, bytes)):
        raise ValueError(f"{label}: vector must contain only numbers, got {values!r}")
    try:
        elements = iter(values)
    except TypeError:
        return
    for value in elements:
        if isinstance(value, (list, tuple, np.ndarray)):
            _check_numeric(value, label)
        elif isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
            raise ValueError(f"{label}: vector must contain only numbers, got {value!r}")


def _validate_vector(vector: VectorLike, dimension: Optional[int], label: str) -> List[float]:
    """Return ``vector`` as a list of floats or raise ValueError."""
    _check_numeric(vector, label)
    try:
        array = np.asarray(vector, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{label}: vector must contain only numbers") from e

    if array.ndim != 1:
        raise ValueError(f"{label}: vector must be one-dimensional, got shape {array.shape}")
    if array.size == 0:
        raise ValueError(f"{label}: vector must not be empty")
    if not np.all(np.isfinite(array)):
        raise ValueError(f"{label}: vector contains NaN or infinite values")
    if dimension and array.size != dimension:
        raise ValueError(
            f"{label}: vector has dimension {array.size}, but the index expects {dimension}"
        )
    return array.tolist()


def _validate_ids(ids: Any) -> List[str]:
    if isinstance(ids, (str, bytes)) or ids is None:
        raise TypeError("ids must be a list of strings")
    ids = list(ids)
    for item_id in ids:
        if not isinstance(item_id, str) or not item_id:
            raise ValueError(f"ids must be non-empty strings, got {item_id!r}")
    return ids


def _as_rows(vectors: Any) -> List[Any]:
    if isinstance(vectors, np.ndarray):
        if vectors.size == 0:
            return []
        if vectors.ndim != 2:
            raise ValueError(f"vectors must be a 2D array, got shape {vectors.shape}")
    if isinstance(vectors, (str, bytes)):
        raise TypeError("vectors must be a sequence of vectors")
    return list(vectors)


class EncryptedIndex:
    """
    Provides access to an encrypted vector index via the REST API.

    An instance caches the index name, its key and the last known index
    configuration. The cache is not synchronized: callers sharing one
    instance across threads must serialize access themselves.

    Args:
        index_name: Name of the index.
        index_key: 32-byte encryption key of the index.
        api: DefaultApi instance used for all calls.
        index_config: Known configuration of the index, if any.
        embedding_model: Name of the server-side embedding model, if any.
    """

    def __init__(
        self,
        index_name: str,
        index_key: bytes,
        api: DefaultApi,
        index_config: Optional[Union[IndexConfig, Dict[str, Any]]] = None,
        embedding_model: Optional[str] = None,
    ):
        self._index_name = index_name
        self._index_key = index_key
        self._api = api
        if isinstance(index_config, dict):
            index_config = IndexConfig.from_dict(index_config)
        self._index_config: Optional[IndexConfig] = index_config
        self._embedding_model = embedding_model

    def __repr__(self) -> str:
        return f"EncryptedIndex(index_name={self._index_name!r})"

    @property
    def index_name(self) -> str:
        """Get the name of the index."""
        return self._index_name

    @property
    def index_type(self) -> Optional[str]:
        """Get the type of the index (``ivf``, ``ivfflat`` or ``ivfpq``)."""
        config = self._config()
        return config.index_type if config else None

    @property
    def index_config(self) -> Dict[str, Any]:
        """Get the configuration of the index as a dictionary."""
        return self.get_index_config()

    def get_index_config(self, refresh: bool = False) -> Dict[str, Any]:
        """
        Return the index configuration.

        Args:
            refresh: Fetch the configuration from the server even if one is
                already cached.
        """
        config = self._config(refresh=refresh)
        return config.model_dump(exclude_none=True) if config else {}

    def is_trained(self) -> bool:
        """
        Check if the index has been trained.

        Returns:
            bool: True if the index is trained, otherwise False.
        """
        return self._describe().is_trained

    def is_training(self) -> bool:
        """Check whether the server is currently training this index."""
        try:
            status = self._api.get_training_status_v1_indexes_training_status_get()
        except REQUEST_ERRORS as e:
            self._raise_api_error("Training status check", e)
        return self._index_name in status.training_indexes

    def delete_index(self) -> Dict[str, Any]:
        """
        Delete the current index and all its associated data.

        Deleting an index that no longer exists is not an error.

        Warning:
            This action is irreversible.

        Returns:
            The server acknowledgement, or a success status noting the index
            was already deleted.

        Raises:
            CyborgDBError: If the index could not be deleted.
        """
        request = self._operation_request()
        try:
            self._api.get_index_info_v1_indexes_describe_post(request)
        except ApiException as e:
            if self._reports_missing_index(e):
                logger.info("Index %s does not exist, skipping deletion", self._index_name)
                return _success(f"Index '{self._index_name}' was already deleted")
            self._raise_api_error("Delete index operation", e)
        except requests.RequestException as e:
            self._raise_api_error("Delete index operation", e)

        try:
            response = self._api.delete_index_v1_indexes_delete_post(request)
        except REQUEST_ERRORS as e:
            self._raise_api_error("Delete index operation", e)
        return response.to_dict() if response else _success(f"Index '{self._index_name}' deleted")

    def get(self, ids: List[str], include: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        """
        Retrieve and decrypt items associated with the specified IDs.

        Args:
            ids: IDs to retrieve.
            include: Item fields to return. Can include 'vector', 'contents',
                and 'metadata'. Default is all three.

        Returns:
            One dictionary per stored item, holding 'id' and exactly the
            requested fields. IDs that do not exist are left out.
            Contents sent back base64 encoded are decoded to bytes.
        """
        ids = _validate_ids(ids)
        include = list(GET_INCLUDE_FIELDS) if include is None else list(include)
        unknown = set(include) - set(GET_INCLUDE_FIELDS)
        if unknown:
            raise ValueError(f"Unsupported include fields for get: {sorted(unknown)}")
        if not ids:
            return []

        request = GetRequest(
            index_name=self._index_name,
            index_key=self._key_to_hex(),
            ids=ids,
            include=include,
        )
        try:
            response = self._api.get_vectors_v1_vectors_get_post(request)
        except REQUEST_ERRORS as e:
            self._raise_api_error("Get operation", e)

        items = []
        for item in response.results if response else []:
            if item is None:
                continue
            result: Dict[str, Any] = {"id": item.id}
            if "vector" in include:
                result["vector"] = item.vector
            if "contents" in include:
                result["contents"] = _decode_contents(item.contents)
            if "metadata" in include:
                result["metadata"] = _parse_metadata(item.metadata)
            items.append(result)
        return items

    def train(
        self,
        n_lists: Optional[int] = None,
        batch_size: Optional[int] = None,
        max_iters: Optional[int] = None,
        tolerance: Optional[float] = None,
        max_memory: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Start building the index with the given training configuration.

        Training runs asynchronously on the server; poll :meth:`is_trained`
        or :meth:`is_training` to observe completion. Until then queries use
        encrypted exhaustive search.

        Args:
            n_lists: Number of inverted lists to build. Server default if omitted.
            batch_size: Size of each batch for training.
            max_iters: Maximum iterations for training.
            tolerance: Convergence tolerance for training.
            max_memory: Maximum memory (MB) usage during training, 0 for no limit.

        Raises:
            ValueError: If a parameter is out of range.
            CyborgDBError: If the server rejected the request.
        """
        if n_lists is not None:
            _check_int(n_lists, "n_lists", 1)

        request = TrainRequest(
            index_name=self._index_name,
            index_key=self._key_to_hex(),
            n_lists=n_lists,
            batch_size=batch_size,
            max_iters=max_iters,
            tolerance=tolerance,
            max_memory=max_memory,
        )
        try:
            response = self._api.train_index_v1_indexes_train_post(request)
        except REQUEST_ERRORS as e:
            self._raise_api_error("Train operation", e)
        return response.to_dict() if response else _success("Training started")

    def upsert(
        self,
        arg1: Optional[Union[List[Dict[str, Any]], List[str]]] = None,
        arg2: Optional[Union[np.ndarray, List[VectorLike]]] = None,
        *,
        items: Optional[List[Dict[str, Any]]] = None,
        ids: Optional[List[str]] = None,
        vectors: Optional[Union[np.ndarray, List[VectorLike]]] = None,
    ) -> Dict[str, Any]:
        """
        Add or update vector embeddings in the index.

        If an item already exists at the specified ID, it will be overwritten.

        This method can be called in one of two ways:
        1. With a list of dictionaries, each containing 'id', 'vector', and
           optional 'contents' and 'metadata' (``upsert(items)`` or
           ``upsert(items=items)``). If the index has an embedding model,
           'vector' may be left out and 'contents' is embedded server-side.
        2. With separate IDs and vectors (``upsert(ids, vectors)`` or
           ``upsert(ids=ids, vectors=vectors)``).

        Binary 'contents' are base64 encoded before transmission. Large
        batches are sent as one request; chunk them yourself if needed.

        Returns:
            The server acknowledgement as a dictionary.

        Raises:
            ValueError: If the input shape is invalid, lengths mismatch, an
                id is repeated or a vector does not match the index dimension.
            TypeError: If the arguments do not match expected types.
            CyborgDBError: If the server rejected the request.
        """
        records = self._resolve_upsert_input(arg1, arg2, items, ids, vectors)
        if not records:
            return _success("No items to upsert")

        dimension = self._known_dimension()
        seen = set()
        wire_items = [self._build_item(record, seen, dimension) for record in records]

        request = UpsertRequest(
            index_name=self._index_name,
            index_key=self._key_to_hex(),
            items=wire_items,
        )
        try:
            response = self._api.upsert_vectors_v1_vectors_upsert_post(request)
        except REQUEST_ERRORS as e:
            self._raise_api_error("Upsert operation", e)
        return response.to_dict() if response else _success(f"Upserted {len(wire_items)} vectors")

    def delete(self, ids: List[str]) -> Dict[str, Any]:
        """
        Delete the specified encrypted items stored in the index.

        Removes all associated fields (vector, contents, metadata) for the
        given IDs. IDs that do not exist are ignored.

        Warning:
            This action is irreversible.

        Args:
            ids: IDs to delete.
        """
        ids = _validate_ids(ids)
        if not ids:
            return _success("No ids to delete")

        request = DeleteRequest(
            index_name=self._index_name,
            index_key=self._key_to_hex(),
            ids=ids,
        )
        try:
            response = self._api.delete_vectors_v1_vectors_delete_post(request)
        except REQUEST_ERRORS as e:
            self._raise_api_error("Delete operation", e)
        return response.to_dict() if response else _success(f"Deleted {len(ids)} vectors")

    def list_ids(self) -> List[str]:
        """Return the IDs of every item stored in the index."""
        request = ListIDsRequest(index_name=self._index_name, index_key=self._key_to_hex())
        try:
            response = self._api.list_ids_v1_vectors_list_ids_post(request)
        except REQUEST_ERRORS as e:
            self._raise_api_error("List IDs operation", e)
        return list(response.ids) if response else []

    def query(
        self,
        query_vectors: Optional[Union[VectorLike, List[VectorLike], np.ndarray]] = None,
        query_contents: Optional[str] = None,
        top_k: int = 100,
        n_probes: int = 0,
        filters: Optional[Dict[str, Any]] = None,
        include: Optional[List[str]] = None,
        greedy: bool = False,
    ) -> Union[List[Dict[str, Any]], List[List[Dict[str, Any]]]]:
        """
        Retrieve the nearest neighbors for given query vectors.

        The result mirrors the input shape: a single (1D) vector returns a
        flat list of matches, a batch (2D) returns one list per query vector,
        even for a batch of one.

        Args:
            query_vectors: A single vector or a batch of vectors.
            query_contents: Text to embed server-side instead of vectors.
                Requires an index created with an embedding model.
            top_k: Number of nearest neighbors to return.
            n_probes: Number of lists probed; 0 lets the server choose.
            filters: MongoDB-style metadata filter. An empty dict means no filter.
            include: Result fields, any of 'distance' and 'metadata'.
            greedy: Whether to use greedy search.

        Raises:
            ValueError: If the arguments are invalid.
            CyborgDBError: If the server rejected the request.
        """
        if (query_vectors is None) == (query_contents is None):
            raise ValueError("Provide exactly one of `query_vectors` or `query_contents`.")
        _check_int(top_k, "top_k", 1)
        _check_int(n_probes, "n_probes", 0)
        if filters is not None and not isinstance(filters, dict):
            raise TypeError("filters must be a dictionary")
        include = list(QUERY_INCLUDE_FIELDS) if include is None else list(include)
        unknown = set(include) - set(QUERY_INCLUDE_FIELDS)
        if unknown:
            raise ValueError(f"Unsupported include fields for query: {sorted(unknown)}")

        single = True
        vector_rows = None
        if query_vectors is not None:
            vector_rows, single = self._normalize_query_vectors(query_vectors)
        elif not isinstance(query_contents, str) or not query_contents.strip():
            raise ValueError("`query_contents` must be a non-empty string")

        request = QueryRequest(
            index_name=self._index_name,
            index_key=self._key_to_hex(),
            query_vectors=vector_rows,
            query_contents=query_contents,
            top_k=int(top_k),
            n_probes=int(n_probes),
            greedy=greedy,
            filters=filters or None,
            include=include,
        )
        try:
            response = self._api.query_vectors_v1_vectors_query_post(request)
        except REQUEST_ERRORS as e:
            self._raise_api_error("Query operation", e)

        result_sets = [
            [self._format_match(match, include) for match in matches]
            for matches in (response.result_sets() if response else [])
        ]
        if single:
            if not result_sets:
                return []
            if len(result_sets) == 1:
                return result_sets[0]
        return result_sets

    # -- helpers -----------------------------------------------------------

    def _key_to_hex(self) -> str:
        """Convert the binary key to a hex string for API calls."""
        return binascii.hexlify(self._index_key).decode("ascii")

    def _operation_request(self) -> IndexOperationRequest:
        return IndexOperationRequest(index_name=self._index_name, index_key=self._key_to_hex())

    def _describe(self) -> IndexInfoResponseModel:
        """Fetch index info from the server and refresh the cached config."""
        try:
            info = self._api.get_index_info_v1_indexes_describe_post(self._operation_request())
        except REQUEST_ERRORS as e:
            self._raise_api_error("Describe index operation", e)
        if info.index_config is not None:
            self._index_config = info.index_config
        return info

    def _config(self, refresh: bool = False) -> Optional[IndexConfig]:
        if refresh or self._index_config is None:
            self._describe()
        return self._index_config

    def _known_dimension(self) -> Optional[int]:
        # Only the cached config is consulted; upsert never adds a describe call.
        if self._index_config is None:
            return None
        return self._index_config.dimension or None

    @staticmethod
    def _reports_missing_index(error: ApiException) -> bool:
        body = error.body
        detail = body.get("detail") if isinstance(body, dict) else body
        return isinstance(detail, str) and "not exist" in detail.lower()

    def _raise_api_error(self, operation: str, error: Exception) -> NoReturn:
        message = f"{operation} failed: {format_api_error(error)}"
        logger.error(message)
        raise CyborgDBError(message, status=getattr(error, "status", None)) from error

    @staticmethod
    def _resolve_upsert_input(arg1, arg2, items, ids, vectors) -> List[Dict[str, Any]]:
        """Reduce every accepted upsert call shape to a list of item dicts."""
        if arg1 is not None or arg2 is not None:
            if items is not None or ids is not None or vectors is not None:
                raise ValueError("Pass upsert input either positionally or by keyword, not both")
            if arg2 is None:
                items = arg1
            else:
                ids, vectors = arg1, arg2

        has_items = items is not None
        has_arrays = ids is not None or vectors is not None
        if has_items and has_arrays:
            raise ValueError("Provide either `items` or `ids` and `vectors`, not both")
        if not has_items and not has_arrays:
            raise ValueError("upsert requires either `items` or both `ids` and `vectors`")

        if has_items:
            if isinstance(items, dict) or not isinstance(items, (list, tuple)):
                raise TypeError("items must be a list of dictionaries")
            if not all(isinstance(item, dict) for item in items):
                raise TypeError("items must be a list of dictionaries")
            return list(items)

        if ids is None or vectors is None:
            raise ValueError("`ids` and `vectors` must be provided together")
        ids = _validate_ids(ids)
        rows = _as_rows(vectors)
        if len(ids) != len(rows):
            raise ValueError(
                f"Number of IDs ({len(ids)}) must match number of vectors ({len(rows)})"
            )
        return [{"id": item_id, "vector": row} for item_id, row in zip(ids, rows)]

    @staticmethod
    def _build_item(record: Dict[str, Any], seen: set, dimension: Optional[int]) -> VectorItem:
        if "id" not in record:
            raise ValueError("Each item dictionary must contain an 'id' field")
        item_id = record["id"]
        if not isinstance(item_id, str) or not item_id:
            raise ValueError(f"Item ids must be non-empty strings, got {item_id!r}")
        if item_id in seen:
            raise ValueError(f"Duplicate id in upsert: {item_id!r}")
        seen.add(item_id)

        vector = record.get("vector")
        contents = record.get("contents")
        if vector is None and contents is None:
            raise ValueError(f"Item {item_id!r} must have a 'vector' or 'contents'")
        if vector is not None:
            vector = _validate_vector(vector, dimension, f"Item {item_id!r}")
        if contents is not None:
            contents = _encode_contents(contents)

        metadata = record.get("metadata")
        if metadata is not None and not isinstance(metadata, dict):
            raise TypeError(f"Item {item_id!r}: metadata must be a dictionary")

        return VectorItem(id=item_id, vector=vector, contents=contents, metadata=metadata)

    def _normalize_query_vectors(self, query_vectors: Any) -> Tuple[List[List[float]], bool]:
        """Return the batch-shaped rows and whether the caller passed one vector."""
        _check_numeric(query_vectors, "`query_vectors`")
        try:
            array = np.asarray(query_vectors, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise ValueError(
                "`query_vectors` must be a vector or a list of equal-length vectors"
            ) from e

        if array.ndim == 1:
            rows, single = [array], True
        elif array.ndim == 2:
            rows, single = list(array), False
        else:
            raise ValueError(f"Expected a 1D or 2D `query_vectors`, got shape {array.shape}")
        if not rows:
            raise ValueError("`query_vectors` must not be empty")

        dimension = self._known_dimension()
        return [
            _validate_vector(row, dimension, f"Query vector {position}")
            for position, row in enumerate(rows)
        ], single

    @staticmethod
    def _format_match(match: QueryResultItem, include: List[str]) -> Dict[str, Any]:
        result: Dict[str, Any] = {"id": match.id}
        if "distance" in include and match.distance is not None:
            result["distance"] = match.distance
        if "metadata" in include and match.metadata is not None:
            result["metadata"] = _parse_metadata(match.metadata)
        return result
