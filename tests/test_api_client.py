"""
Unit tests for the low-level HTTP client and endpoint bindings.
"""

import json
import unittest
from unittest.mock import MagicMock, patch

from cyborgdb.openapi_client import ApiClient, ApiException, Configuration, DefaultApi
from cyborgdb.openapi_client.exceptions import ApiValueError
from cyborgdb.openapi_client.models import (
    HealthResponse,
    IndexOperationRequest,
    QueryRequest,
    QueryResponse,
)


def make_response(status_code=200, body=None, reason="OK"):
    """Build a mock requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.headers = {"Content-Type": "application/json"}
    response.content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.json.side_effect = lambda: json.loads(response.content)
    response.text = response.content.decode("utf-8")
    return response


class TestConfiguration(unittest.TestCase):

    def test_host_trailing_slash_removed(self):
        config = Configuration(host="https://db.example.com/")
        self.assertEqual(config.host, "https://db.example.com")

    def test_auth_headers(self):
        self.assertEqual(
            Configuration(api_key={"X-API-Key": "secret"}).auth_headers(),
            {"X-API-Key": "secret"},
        )
        self.assertEqual(Configuration().auth_headers(), {})


class TestApiClient(unittest.TestCase):
    """Request building and response handling."""

    def setUp(self):
        self.config = Configuration(
            host="https://db.example.com", api_key={"X-API-Key": "secret"}, verify_ssl=False
        )
        self.client = ApiClient(self.config)
        self.client.session = MagicMock()

    def tearDown(self):
        self.client.close()

    def test_session_verify_follows_configuration(self):
        self.assertFalse(ApiClient(self.config).session.verify)
        self.assertTrue(ApiClient(Configuration(verify_ssl=True)).session.verify)

    def test_post_sends_wire_body_and_headers(self):
        self.client.session.request.return_value = make_response(body={"results": [[{"id": "a"}]]})
        request = QueryRequest(index_name="docs", index_key="00", query_vectors=[[1.0, 2.0]], top_k=5)

        result = self.client.call_api("POST", "/v1/vectors/query", body=request, response_type=QueryResponse)

        args, kwargs = self.client.session.request.call_args
        self.assertEqual(args, ("POST", "https://db.example.com/v1/vectors/query"))
        sent = json.loads(kwargs["data"])
        self.assertEqual(sent["indexName"], "docs")
        self.assertEqual(sent["queryVectors"], [[1.0, 2.0]])
        self.assertEqual(sent["topK"], 5)
        self.assertEqual(kwargs["headers"]["X-API-Key"], "secret")
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")
        self.assertIsInstance(result, QueryResponse)
        self.assertEqual(result.result_sets()[0][0].id, "a")

    def test_get_sends_no_body(self):
        self.client.session.request.return_value = make_response(body={"status": "healthy"})
        result = self.client.call_api("GET", "/v1/health", response_type=HealthResponse)
        self.assertIsNone(self.client.session.request.call_args.kwargs["data"])
        self.assertEqual(result.status, "healthy")

    def test_non_2xx_raises_api_exception(self):
        self.client.session.request.return_value = make_response(
            status_code=404, reason="Not Found", body={"detail": "Index does not exist"}
        )
        with self.assertRaises(ApiException) as ctx:
            self.client.call_api("POST", "/v1/indexes/describe", body={"indexName": "x"})
        self.assertEqual(ctx.exception.status, 404)
        self.assertEqual(ctx.exception.body, {"detail": "Index does not exist"})

    def test_unsupported_method(self):
        with self.assertRaises(ApiValueError):
            self.client.call_api("PUT", "/v1/health")

    def test_per_call_headers(self):
        self.client.session.request.return_value = make_response(body={"status": "ok"})
        self.client.call_api("GET", "/v1/health", _headers={"X-Request-ID": "abc"})
        headers = self.client.session.request.call_args.kwargs["headers"]
        self.assertEqual(headers["X-Request-ID"], "abc")
        self.assertEqual(headers["X-API-Key"], "secret")


class TestDefaultApi(unittest.TestCase):
    """Each endpoint binds the right method and path."""

    def setUp(self):
        self.api_client = MagicMock()
        self.api = DefaultApi(self.api_client)

    def test_describe_endpoint(self):
        request = IndexOperationRequest(index_name="docs", index_key="00")
        self.api.get_index_info_v1_indexes_describe_post(request)
        args = self.api_client.call_api.call_args.args
        self.assertEqual(args[:2], ("POST", "/v1/indexes/describe"))

    def test_training_status_endpoint(self):
        self.api.get_training_status_v1_indexes_training_status_get()
        args = self.api_client.call_api.call_args.args
        self.assertEqual(args[:2], ("GET", "/v1/indexes/training-status"))

    def test_default_api_client(self):
        with patch("cyborgdb.openapi_client.api.default_api.ApiClient") as mock_client:
            DefaultApi()
            mock_client.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
