"""
LangChain integration for CyborgDB-py REST API.

This module requires the langchain extra:
    pip install cyborgdb[langchain]
"""

import asyncio
import base64
import binascii
import logging
import uuid
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from cyborgdb import (
    Client,
    EncryptedIndex,
    IndexIVF,
    IndexIVFPQ,
    IndexIVFFlat,
    generate_key,
)

logger = logging.getLogger(__name__)

CONTENT_KEY = "_content"
INDEX_TYPES = ("ivfflat", "ivf", "ivfpq")

try:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings
    from langchain_core.vectorstores import VectorStore, VectorStoreRetriever
    from langchain_core.vectorstores.utils import maximal_marginal_relevance

    class CyborgVectorStore(VectorStore):
        """
        CyborgDB vector store for use with LangChain.

        This class implements the LangChain VectorStore interface on top of
        an encrypted CyborgDB index. Document text is stored in the item
        metadata under the ``_content`` key.
        """

        def __init__(self,
                     index_name: str,
                     index_key: Union[bytes, str],
                     api_key: str,
                     base_url: str,
                     embedding: Union[str, Embeddings, Callable[[List[str]], Any]],
                     index_type: str = "ivfflat",
                     index_config_params: Optional[Dict[str, Any]] = None,
                     dimension: Optional[int] = None,
                     metric: str = "cosine",
                     verify_ssl: Optional[bool] = None) -> None:
            """
            Initialize a new CyborgVectorStore, loading the index if it
            exists and creating it otherwise.

            Args:
                index_name: Name of the index
                index_key: 32-byte encryption key, as bytes or a base64 string
                api_key: API key for CyborgDB
                base_url: URL of the CyborgDB API server
                embedding: LangChain Embeddings, SentenceTransformer, model name
                    (loaded with sentence-transformers) or a callable
                index_type: Type of index ("ivfflat", "ivf", or "ivfpq")
                index_config_params: Extra index parameters ("pq_dim", "pq_bits")
                dimension: Dimension of embeddings (inferred from the model if omitted)
                metric: Distance metric ("cosine", "euclidean", "squared_euclidean")
                verify_ssl: TLS verification override passed to the client
            """
            if index_type not in INDEX_TYPES:
                raise ValueError(f"Invalid index type: {index_type}. Must be one of {list(INDEX_TYPES)}")

            self.index_name = index_name
            index_key = self._decode_key(index_key)
            self.index_key = index_key
            self.metric = metric

            if isinstance(embedding, str):
                self.embedding_model_name = embedding
                self.embedding_model = None
            else:
                self.embedding_model = embedding
                self.embedding_model_name = getattr(embedding, "model_name", "") or ""

            self.client = Client(base_url=base_url, api_key=api_key, verify_ssl=verify_ssl)

            if index_name in self.client.list_indexes():
                self.index: EncryptedIndex = self.client.load_index(index_name, index_key)
                config_metric = self.index.index_config.get("metric")
                if config_metric:
                    self.metric = config_metric
            else:
                embedding_dim = dimension if dimension is not None else self._infer_dimension()
                config = self._build_index_config(index_type, embedding_dim, index_config_params or {})
                self.index = self.client.create_index(
                    index_name=index_name,
                    index_key=index_key,
                    index_config=config,
                    metric=metric,
                )

        @staticmethod
        def generate_key() -> bytes:
            """Generate a secure 32-byte key for use with CyborgDB indexes."""
            return generate_key()

        @staticmethod
        def _decode_key(index_key: Union[bytes, str]) -> bytes:
            if not isinstance(index_key, str):
                return index_key
            try:
                return base64.b64decode(index_key, validate=True)
            except (binascii.Error, ValueError) as e:
                raise ValueError("index_key string must be base64 encoded") from e

        @staticmethod
        def _build_index_config(index_type: str, dimension: int, params: Dict[str, Any]):
            if index_type == "ivf":
                return IndexIVF(dimension=dimension)
            if index_type == "ivfpq":
                return IndexIVFPQ(
                    dimension=dimension,
                    pq_dim=params.get("pq_dim", 8),
                    pq_bits=params.get("pq_bits", 8),
                )
            return IndexIVFFlat(dimension=dimension)

        @property
        def embeddings(self) -> Optional[Embeddings]:
            if isinstance(self.embedding_model, Embeddings):
                return self.embedding_model
            return None

        def _load_embedding_model(self):
            # Lazy load by name
            if self.embedding_model is None and self.embedding_model_name:
                from sentence_transformers import SentenceTransformer

                self.embedding_model = SentenceTransformer(self.embedding_model_name)
            if self.embedding_model is None:
                raise RuntimeError("No embedding model available")
            return self.embedding_model

        def _infer_dimension(self) -> int:
            model = self._load_embedding_model()
            if hasattr(model, "get_sentence_embedding_dimension"):
                return model.get_sentence_embedding_dimension()
            return int(self.get_embeddings("dimension check").shape[0])

        def get_embeddings(self, texts: Union[str, List[str]]) -> np.ndarray:
            """
            Generate embeddings for the given texts.

            Returns a 1-D array for a single string, otherwise a 2-D array
            with one row per text.
            """
            model = self._load_embedding_model()

            is_single = isinstance(texts, str)
            texts_list = [texts] if is_single else list(texts)

            # 1) SentenceTransformer path
            if hasattr(model, "encode") and hasattr(model, "get_sentence_embedding_dimension"):
                embeddings = np.asarray(model.encode(texts_list, convert_to_numpy=True), dtype=np.float32)

            # 2) LangChain Embeddings path
            elif hasattr(model, "embed_documents") and hasattr(model, "embed_query"):
                if is_single:
                    embeddings = np.array(model.embed_query(texts), dtype=np.float32)[None, :]
                else:
                    embeddings = np.array(model.embed_documents(texts_list), dtype=np.float32)

            # 3) Generic callable
            elif callable(model):
                embeddings = np.asarray(model(texts_list), dtype=np.float32)
            else:
                raise TypeError(
                    f"Unsupported embedding model type: {type(model)}. "
                    "Must be SentenceTransformer, LangChain Embeddings, or callable."
                )

            if is_single:
                return embeddings[0]
            return embeddings

        def _upsert(self, vectors: Sequence[Sequence[float]], texts: List[str],
                    metadatas: Optional[List[dict]], ids: Optional[List[str]]) -> List[str]:
            num_texts = len(texts)
            if ids is not None:
                if len(ids) != num_texts:
                    raise ValueError("Length of ids must match length of texts.")
                id_list = [str(doc_id) for doc_id in ids]
            else:
                id_list = [str(uuid.uuid4()) for _ in range(num_texts)]

            if metadatas is not None and len(metadatas) != num_texts:
                raise ValueError("Length of metadatas must match length of texts.")

            items = []
            for i, (text, doc_id) in enumerate(zip(texts, id_list)):
                metadata = dict(metadatas[i] or {}) if metadatas is not None else {}
                metadata[CONTENT_KEY] = text
                items.append({"id": doc_id, "vector": vectors[i], "metadata": metadata})

            self.index.upsert(items)
            return id_list

        def add_texts(self, texts: Iterable[str], metadatas: Optional[List[dict]] = None,
                      *, ids: Optional[List[str]] = None, **kwargs: Any) -> List[str]:
            """
            Embed texts and add them to the vector store.
            """
            texts_list = list(texts)
            if not texts_list:
                return []
            embeddings = self.get_embeddings(texts_list)
            return self._upsert(list(embeddings), texts_list, metadatas, ids)

        def add_documents(self, documents: List[Document], **kwargs: Any) -> List[str]:
            """
            Add documents to the vector store.
            """
            ids = kwargs.pop("ids", None)
            if ids is None and any(doc.id for doc in documents):
                ids = [doc.id or str(uuid.uuid4()) for doc in documents]
            texts = [doc.page_content for doc in documents]
            metadatas = [doc.metadata for doc in documents]
            return self.add_texts(texts, metadatas, ids=ids, **kwargs)

        def add_vectors(self, vectors: Sequence[Sequence[float]], documents: List[Document],
                        ids: Optional[List[str]] = None) -> List[str]:
            """Add precomputed embeddings for the given documents."""
            if len(vectors) != len(documents):
                raise ValueError("Length of vectors must match length of documents.")
            if not documents:
                return []
            texts = [doc.page_content for doc in documents]
            metadatas = [doc.metadata for doc in documents]
            return self._upsert(list(vectors), texts, metadatas, ids)

        def delete(self, ids: Optional[List[str]] = None, **kwargs: Any) -> Optional[bool]:
            """
            Delete documents by id, or the entire index with ``delete_index=True``.
            """
            if kwargs.get("delete_index", False):
                self.index.delete_index()
                return True
            if not ids:
                return False
            self.index.delete(list(ids))
            return True

        def get_by_ids(self, ids: Sequence[str], /) -> List[Document]:
            """Return the stored documents for ``ids``; unknown ids are skipped."""
            items = self.index.get(list(ids), include=["metadata"])
            return [self._to_document(item["id"], item.get("metadata")) for item in items]

        def list_ids(self) -> List[str]:
            """Return the ids of every document in the store."""
            return self.index.list_ids()

        @staticmethod
        def _to_document(doc_id: str, metadata: Optional[Dict[str, Any]]) -> Document:
            metadata = dict(metadata or {})
            content = metadata.pop(CONTENT_KEY, "")
            if isinstance(content, bytes):
                content = content.decode("utf-8", errors="replace")
            return Document(id=doc_id, page_content=content, metadata=metadata)

        def _execute_query(self, embedding: Sequence[float], k: int, filter: Optional[Dict],
                           n_probes: int = 0) -> List[Dict[str, Any]]:
            """Run a single-vector query and return the flat list of matches."""
            return self.index.query(
                query_vectors=np.asarray(embedding, dtype=np.float32),
                top_k=k,
                n_probes=n_probes,
                filters=filter,
                include=["distance", "metadata"],
            )

        def _normalize_score(self, distance: float) -> float:
            """
            Normalize a distance score to a similarity score in the range [0, 1].
            """
            if self.metric == "cosine":
                # Cosine distance: 0 (identical) to 2 (opposite)
                return max(0.0, 1.0 - (distance / 2.0))
            if self.metric == "euclidean":
                return float(np.exp(-distance))
            if self.metric == "squared_euclidean":
                return float(np.exp(-np.sqrt(distance)))
            return 1.0 / (1.0 + distance)

        def _select_relevance_score_fn(self) -> Callable[[float], float]:
            return self._normalize_score

        def similarity_search_with_score_by_vector(self, embedding: List[float], k: int = 4,
                                                   filter: Optional[Dict] = None,
                                                   **kwargs: Any) -> List[Tuple[Document, float]]:
            """
            Return documents most similar to embedding vector with similarity scores.
            """
            results = self._execute_query(embedding, k, filter, kwargs.get("n_probes", 0))
            return [
                (self._to_document(item["id"], item.get("metadata")),
                 self._normalize_score(item.get("distance", 0.0)))
                for item in results
            ]

        def similarity_search_with_score(self, query: str, k: int = 4, filter: Optional[Dict] = None,
                                         **kwargs: Any) -> List[Tuple[Document, float]]:
            """
            Return documents most similar to query along with relevance scores.
            """
            embedding = self.get_embeddings(query)
            return self.similarity_search_with_score_by_vector(embedding, k, filter, **kwargs)

        def similarity_search_by_vector(self, embedding: List[float], k: int = 4,
                                        filter: Optional[Dict] = None, **kwargs: Any) -> List[Document]:
            """
            Return documents most similar to embedding vector.
            """
            pairs = self.similarity_search_with_score_by_vector(embedding, k, filter, **kwargs)
            return [doc for doc, _ in pairs]

        def similarity_search(self, query: str, k: int = 4, filter: Optional[Dict] = None,
                              **kwargs: Any) -> List[Document]:
            """
            Return documents most similar to query.
            """
            return self.similarity_search_by_vector(self.get_embeddings(query), k, filter, **kwargs)

        def max_marginal_relevance_search_by_vector(self, embedding: List[float], k: int = 4,
                                                    fetch_k: int = 20, lambda_mult: float = 0.5,
                                                    filter: Optional[Dict] = None,
                                                    **kwargs: Any) -> List[Document]:
            """
            Return documents selected using maximal marginal relevance.

            Fetches ``fetch_k`` candidates, loads their stored vectors and
            reranks them locally to balance similarity and diversity.

            Args:
                embedding: Query embedding.
                k: Number of documents to return.
                fetch_k: Number of candidates to rerank.
                lambda_mult: 1 for pure similarity, 0 for maximum diversity.
                filter: Metadata filter for the candidate query.
            """
            candidates = self._execute_query(embedding, fetch_k, filter, kwargs.get("n_probes", 0))
            if not candidates:
                return []

            stored = self.index.get([item["id"] for item in candidates], include=["vector", "metadata"])
            stored = [item for item in stored if item.get("vector")]
            if not stored:
                return []

            selected = maximal_marginal_relevance(
                np.asarray(embedding, dtype=np.float32),
                [item["vector"] for item in stored],
                lambda_mult=lambda_mult,
                k=min(k, len(stored)),
            )
            return [self._to_document(stored[i]["id"], stored[i].get("metadata")) for i in selected]

        def max_marginal_relevance_search(self, query: str, k: int = 4, fetch_k: int = 20,
                                          lambda_mult: float = 0.5, filter: Optional[Dict] = None,
                                          **kwargs: Any) -> List[Document]:
            """Embed ``query`` and run :meth:`max_marginal_relevance_search_by_vector`."""
            return self.max_marginal_relevance_search_by_vector(
                self.get_embeddings(query), k, fetch_k, lambda_mult, filter, **kwargs
            )

        def as_retriever(self, **kwargs: Any) -> VectorStoreRetriever:
            """Return a retriever object for this vectorstore."""
            search_type = kwargs.pop("search_type", None) or "similarity"
            search_kwargs = kwargs.pop("search_kwargs", None) or {}
            return VectorStoreRetriever(
                vectorstore=self,
                search_type=search_type,
                search_kwargs=search_kwargs,
                **kwargs,
            )

        @classmethod
        def from_texts(cls, texts: List[str], embedding: Union[str, Embeddings],
                       metadatas: Optional[List[Dict]] = None, **kwargs: Any) -> "CyborgVectorStore":
            """
            Create a vector store from texts.

            Keyword arguments are passed to the constructor; ``index_key`` and
            ``api_key`` are required. Accepts ``ids`` for the texts.
            """
            ids = kwargs.pop("ids", None)
            if kwargs.get("index_key") is None:
                raise ValueError(
                    "index_key must be provided for CyborgVectorStore. "
                    "Use generate_key() to generate a secure 32-byte key."
                )
            if kwargs.get("api_key") is None:
                raise ValueError("api_key must be provided for CyborgVectorStore.")

            kwargs.setdefault("index_name", "langchain_index")
            kwargs.setdefault("base_url", "http://localhost:8000")
            index_config_params = kwargs.pop("index_config_params", None) or {}
            for key in ("pq_dim", "pq_bits"):
                if key in kwargs:
                    index_config_params[key] = kwargs.pop(key)

            store = cls(embedding=embedding, index_config_params=index_config_params, **kwargs)
            if texts:
                store.add_texts(texts, metadatas, ids=ids)
            return store

        @classmethod
        def from_documents(cls, documents: List[Document], embedding: Union[str, Embeddings],
                           **kwargs: Any) -> "CyborgVectorStore":
            """
            Create a vector store from documents.
            """
            texts = [doc.page_content for doc in documents]
            metadatas = [doc.metadata for doc in documents]
            return cls.from_texts(texts, embedding, metadatas, **kwargs)

        @classmethod
        def from_existing_index(cls, index_name: str, index_key: bytes, api_key: str, base_url: str,
                                embedding: Union[str, Embeddings], **kwargs: Any) -> "CyborgVectorStore":
            """Connect to an index that must already exist."""
            client = Client(base_url=base_url, api_key=api_key, verify_ssl=kwargs.get("verify_ssl"))
            if index_name not in client.list_indexes():
                raise ValueError(f"Index '{index_name}' does not exist")
            return cls(index_name=index_name, index_key=index_key, api_key=api_key,
                       base_url=base_url, embedding=embedding, **kwargs)

        # Async variants for compatibility
        async def aadd_texts(self, texts: Iterable[str], metadatas: Optional[List[dict]] = None,
                             *, ids: Optional[List[str]] = None, **kwargs: Any) -> List[str]:
            """Async version of add_texts"""
            return await asyncio.to_thread(self.add_texts, texts, metadatas, ids=ids, **kwargs)

        async def aadd_documents(self, documents: List[Document], **kwargs: Any) -> List[str]:
            """Async version of add_documents"""
            return await asyncio.to_thread(self.add_documents, documents, **kwargs)

        async def asimilarity_search(self, query: str, k: int = 4, filter: Optional[Dict] = None,
                                     **kwargs: Any) -> List[Document]:
            """Async version of similarity_search"""
            return await asyncio.to_thread(self.similarity_search, query, k, filter, **kwargs)

        async def asimilarity_search_with_score(self, query: str, k: int = 4,
                                                filter: Optional[Dict] = None,
                                                **kwargs: Any) -> List[Tuple[Document, float]]:
            """Async version of similarity_search_with_score"""
            return await asyncio.to_thread(self.similarity_search_with_score, query, k, filter, **kwargs)

        async def asimilarity_search_by_vector(self, embedding: List[float], k: int = 4,
                                               filter: Optional[Dict] = None,
                                               **kwargs: Any) -> List[Document]:
            """Async version of similarity_search_by_vector"""
            return await asyncio.to_thread(self.similarity_search_by_vector, embedding, k, filter, **kwargs)

        async def adelete(self, ids: Optional[List[str]] = None, **kwargs: Any) -> Optional[bool]:
            """Async version of delete"""
            return await asyncio.to_thread(self.delete, ids, **kwargs)

    __all__ = ["CyborgVectorStore"]

except ImportError as e:
    _original_error = str(e)
    logger.debug("LangChain integration unavailable: %s", _original_error)

    def _missing_dependency_error():
        raise ImportError(
            "To use the LangChain integration with cyborgdb, "
            "please install the required dependencies: pip install cyborgdb[langchain]\n"
            f"Original error: {_original_error}"
        )

    class _MissingDependency:
        def __init__(self, *args, **kwargs):
            _missing_dependency_error()

        def __getattr__(self, name):
            _missing_dependency_error()

    # Replace with a class that raises a helpful error
    CyborgVectorStore = _MissingDependency
    __all__ = []
