"""
LangChain integration tests for CyborgDB-py.

This module tests the LangChain VectorStore implementation for CyborgDB
against a mocked client.
"""

import asyncio
import base64
import unittest
from typing import List
from unittest.mock import MagicMock, patch

import numpy as np

from cyborgdb import generate_key
from cyborgdb.integrations.langchain import CyborgVectorStore

# Test imports
try:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

    LANGCHAIN_AVAILABLE = True
except ImportError:
    LANGCHAIN_AVAILABLE = False

    # Define a dummy Embeddings class if langchain is not available
    class Embeddings:
        pass


class MockEmbeddings(Embeddings):
    """Deterministic bag-of-characters embeddings for testing."""

    def __init__(self, dimension: int = 4):
        self.dimension = dimension

    def _text_to_vector(self, text: str) -> List[float]:
        vector = np.zeros(self.dimension)
        for position, char in enumerate(text.lower()):
            vector[(ord(char) + position) % self.dimension] += 1.0
        norm = np.linalg.norm(vector)
        return (vector / norm if norm > 0 else vector).tolist()

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        return [self._text_to_vector(text) for text in texts]

    def embed_query(self, text: str) -> List[float]:
        return self._text_to_vector(text)


def stored_item(doc_id, content, distance=None, **metadata):
    item = {"id": doc_id, "metadata": dict(metadata, _content=content)}
    if distance is not None:
        item["distance"] = distance
    return item


@unittest.skipUnless(LANGCHAIN_AVAILABLE, "LangChain dependencies not available")
class TestCyborgVectorStore(unittest.TestCase):
    """Test the CyborgVectorStore adapter."""

    def setUp(self):
        self.client_patcher = patch("cyborgdb.integrations.langchain.Client")
        self.mock_client_cls = self.client_patcher.start()
        self.mock_client = MagicMock()
        self.mock_client_cls.return_value = self.mock_client
        self.mock_client.list_indexes.return_value = []

        self.index = MagicMock()
        self.index.index_config = {"dimension": 4, "metric": "cosine", "index_type": "ivfflat"}
        self.mock_client.create_index.return_value = self.index
        self.mock_client.load_index.return_value = self.index

        self.key = generate_key()
        self.embeddings = MockEmbeddings(4)

    def tearDown(self):
        self.client_patcher.stop()

    def make_store(self, **kwargs):
        params = dict(
            index_name="langchain_test",
            index_key=self.key,
            api_key="test-key",
            base_url="https://db.example.com",
            embedding=self.embeddings,
        )
        params.update(kwargs)
        return CyborgVectorStore(**params)

    def test_creates_index_with_inferred_dimension(self):
        store = self.make_store()

        self.assertIs(store.index, self.index)
        self.assertIs(store.embeddings, self.embeddings)
        kwargs = self.mock_client.create_index.call_args.kwargs
        self.assertEqual(kwargs["index_name"], "langchain_test")
        self.assertEqual(kwargs["index_config"].dimension, 4)
        self.assertEqual(kwargs["index_config"].index_type, "ivfflat")
        self.assertEqual(kwargs["metric"], "cosine")

    def test_ivfpq_parameters(self):
        self.make_store(index_type="ivfpq", index_config_params={"pq_dim": 2, "pq_bits": 4})
        config = self.mock_client.create_index.call_args.kwargs["index_config"]
        self.assertEqual((config.index_type, config.pq_dim, config.pq_bits), ("ivfpq", 2, 4))

    def test_loads_existing_index(self):
        self.mock_client.list_indexes.return_value = ["langchain_test"]
        self.index.index_config = {"dimension": 4, "metric": "euclidean", "index_type": "ivf"}

        store = self.make_store()

        self.mock_client.load_index.assert_called_once_with("langchain_test", self.key)
        self.mock_client.create_index.assert_not_called()
        self.assertEqual(store.metric, "euclidean")

    def test_base64_string_key(self):
        encoded = base64.b64encode(self.key).decode("ascii")
        store = self.make_store(index_key=encoded)
        self.assertEqual(store.index_key, self.key)
        self.assertEqual(self.mock_client.create_index.call_args.kwargs["index_key"], self.key)
        with self.assertRaises(ValueError):
            self.make_store(index_key="not base64!")

    def test_generate_key(self):
        key = CyborgVectorStore.generate_key()
        self.assertIsInstance(key, bytes)
        self.assertEqual(len(key), 32)

    def test_invalid_index_type(self):
        with self.assertRaises(ValueError):
            self.make_store(index_type="hnsw")

    def test_add_texts_stores_content_in_metadata(self):
        store = self.make_store()
        ids = store.add_texts(["hello world", "goodbye"], [{"tag": "a"}, {"tag": "b"}], ids=["1", "2"])

        self.assertEqual(ids, ["1", "2"])
        items = self.index.upsert.call_args.args[0]
        self.assertEqual(items[0]["id"], "1")
        self.assertEqual(items[0]["metadata"], {"tag": "a", "_content": "hello world"})
        self.assertEqual(len(items[1]["vector"]), 4)

    def test_add_texts_generates_ids(self):
        store = self.make_store()
        ids = store.add_texts(["one", "two"])
        self.assertEqual(len(set(ids)), 2)
        self.assertEqual(store.add_texts([]), [])

    def test_add_texts_length_mismatch(self):
        store = self.make_store()
        with self.assertRaises(ValueError):
            store.add_texts(["one", "two"], ids=["1"])
        with self.assertRaises(ValueError):
            store.add_texts(["one"], metadatas=[{}, {}])

    def test_add_documents_and_vectors(self):
        store = self.make_store()
        docs = [Document(page_content="alpha", metadata={"n": 1}, id="doc-1")]

        self.assertEqual(store.add_documents(docs), ["doc-1"])
        self.assertEqual(store.add_vectors([[1.0, 0.0, 0.0, 0.0]], docs, ids=["v-1"]), ["v-1"])
        item = self.index.upsert.call_args.args[0][0]
        self.assertEqual(item["vector"], [1.0, 0.0, 0.0, 0.0])
        self.assertEqual(item["metadata"]["_content"], "alpha")

    def test_similarity_search_with_score(self):
        self.index.query.return_value = [stored_item("a", "hello", distance=0.5, tag="x")]
        store = self.make_store()

        results = store.similarity_search_with_score("hello", k=3, filter={"tag": "x"})

        doc, score = results[0]
        self.assertEqual(doc.id, "a")
        self.assertEqual(doc.page_content, "hello")
        self.assertEqual(doc.metadata, {"tag": "x"})
        self.assertAlmostEqual(score, 0.75)
        kwargs = self.index.query.call_args.kwargs
        self.assertEqual(kwargs["top_k"], 3)
        self.assertEqual(kwargs["filters"], {"tag": "x"})
        self.assertEqual(kwargs["include"], ["distance", "metadata"])

    def test_similarity_search(self):
        self.index.query.return_value = [stored_item("a", "hello", distance=0.1)]
        store = self.make_store()
        docs = store.similarity_search("hello")
        self.assertEqual([doc.page_content for doc in docs], ["hello"])
        docs = store.similarity_search_by_vector([1.0, 0.0, 0.0, 0.0], k=1)
        self.assertEqual(docs[0].id, "a")

    def test_score_normalization(self):
        store = self.make_store()
        store.metric = "euclidean"
        self.assertAlmostEqual(store._normalize_score(0.0), 1.0)
        self.assertAlmostEqual(store._normalize_score(1.0), np.exp(-1.0))
        store.metric = "squared_euclidean"
        self.assertAlmostEqual(store._normalize_score(4.0), np.exp(-2.0))
        store.metric = "cosine"
        self.assertEqual(store._normalize_score(3.0), 0.0)

    def test_max_marginal_relevance_prefers_diversity(self):
        self.index.query.return_value = [
            stored_item("a", "first", distance=0.0),
            stored_item("b", "near duplicate", distance=0.01),
            stored_item("c", "different", distance=1.0),
        ]
        self.index.get.return_value = [
            dict(stored_item("a", "first"), vector=[1.0, 0.0, 0.0, 0.0]),
            dict(stored_item("b", "near duplicate"), vector=[0.99, 0.01, 0.0, 0.0]),
            dict(stored_item("c", "different"), vector=[0.0, 1.0, 0.0, 0.0]),
        ]
        store = self.make_store()

        docs = store.max_marginal_relevance_search_by_vector(
            [1.0, 0.0, 0.0, 0.0], k=2, fetch_k=3, lambda_mult=0.3
        )

        self.assertEqual([doc.id for doc in docs], ["a", "c"])
        self.assertEqual(self.index.query.call_args.kwargs["top_k"], 3)
        self.index.get.assert_called_once_with(["a", "b", "c"], include=["vector", "metadata"])

    def test_max_marginal_relevance_no_candidates(self):
        self.index.query.return_value = []
        store = self.make_store()
        self.assertEqual(store.max_marginal_relevance_search("hello"), [])
        self.index.get.assert_not_called()

    def test_get_by_ids(self):
        self.index.get.return_value = [stored_item("a", "hello", tag="x")]
        store = self.make_store()
        docs = store.get_by_ids(["a", "missing"])
        self.assertEqual(len(docs), 1)
        self.assertEqual((docs[0].id, docs[0].page_content), ("a", "hello"))

    def test_delete(self):
        store = self.make_store()
        self.assertTrue(store.delete(["a"]))
        self.index.delete.assert_called_once_with(["a"])
        self.assertFalse(store.delete())
        self.assertTrue(store.delete(delete_index=True))
        self.index.delete_index.assert_called_once()

    def test_list_ids(self):
        self.index.list_ids.return_value = ["a", "b"]
        self.assertEqual(self.make_store().list_ids(), ["a", "b"])

    def test_as_retriever(self):
        self.index.query.return_value = [stored_item("a", "hello", distance=0.2)]
        store = self.make_store()
        retriever = store.as_retriever(search_kwargs={"k": 1})
        docs = retriever.invoke("hello")
        self.assertEqual(docs[0].page_content, "hello")
        self.assertEqual(self.index.query.call_args.kwargs["top_k"], 1)

    def test_from_texts(self):
        store = CyborgVectorStore.from_texts(
            ["alpha", "beta"],
            self.embeddings,
            metadatas=[{"n": 1}, {"n": 2}],
            ids=["1", "2"],
            index_key=self.key,
            api_key="test-key",
        )
        self.assertIsInstance(store, CyborgVectorStore)
        self.mock_client_cls.assert_called_with(
            base_url="http://localhost:8000", api_key="test-key", verify_ssl=None
        )
        items = self.index.upsert.call_args.args[0]
        self.assertEqual([item["id"] for item in items], ["1", "2"])

    def test_from_texts_requires_keys(self):
        with self.assertRaises(ValueError):
            CyborgVectorStore.from_texts(["alpha"], self.embeddings, api_key="test-key")
        with self.assertRaises(ValueError):
            CyborgVectorStore.from_texts(["alpha"], self.embeddings, index_key=self.key)

    def test_from_documents(self):
        docs = [Document(page_content="alpha", metadata={"n": 1})]
        CyborgVectorStore.from_documents(docs, self.embeddings, index_key=self.key, api_key="test-key")
        items = self.index.upsert.call_args.args[0]
        self.assertEqual(items[0]["metadata"], {"n": 1, "_content": "alpha"})

    def test_from_existing_index(self):
        with self.assertRaises(ValueError):
            CyborgVectorStore.from_existing_index(
                "missing", self.key, "test-key", "https://db.example.com", self.embeddings
            )
        self.mock_client.list_indexes.return_value = ["langchain_test"]
        store = CyborgVectorStore.from_existing_index(
            "langchain_test", self.key, "test-key", "https://db.example.com", self.embeddings
        )
        self.assertIs(store.index, self.index)

    def test_async_operations(self):
        self.index.query.return_value = [stored_item("a", "hello", distance=0.0)]
        store = self.make_store()

        async def run():
            ids = await store.aadd_texts(["hello"], ids=["a"])
            docs = await store.asimilarity_search("hello", k=1)
            deleted = await store.adelete(["a"])
            return ids, docs, deleted

        ids, docs, deleted = asyncio.run(run())
        self.assertEqual(ids, ["a"])
        self.assertEqual(docs[0].id, "a")
        self.assertTrue(deleted)

    def test_callable_embedding(self):
        store = self.make_store(embedding=lambda texts: [[1.0, 0.0, 0.0] for _ in texts])
        self.assertEqual(self.mock_client.create_index.call_args.kwargs["index_config"].dimension, 3)
        self.assertIsNone(store.embeddings)
        self.assertEqual(store.get_embeddings("x").tolist(), [1.0, 0.0, 0.0])


if __name__ == "__main__":
    unittest.main()
