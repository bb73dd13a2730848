"""
Unit tests for demo API key generation.
"""

import os
import time
import unittest
from unittest.mock import MagicMock, patch

import requests

from cyborgdb import get_demo_api_key
from cyborgdb.demo import DEFAULT_DEMO_ENDPOINT, format_time_left


def mock_response(payload=None, error=None):
    response = MagicMock()
    response.json.return_value = payload
    if error is not None:
        response.raise_for_status.side_effect = error
    return response


class TestGetDemoApiKey(unittest.TestCase):

    def setUp(self):
        self.env_patcher = patch.dict(os.environ, {}, clear=False)
        self.env_patcher.start()
        os.environ.pop("CYBORGDB_DEMO_ENDPOINT", None)

    def tearDown(self):
        self.env_patcher.stop()

    @patch("cyborgdb.demo.requests.post")
    def test_returns_key(self, mock_post):
        mock_post.return_value = mock_response({"apiKey": "demo_key_123"})

        self.assertEqual(get_demo_api_key(), "demo_key_123")

        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], DEFAULT_DEMO_ENDPOINT)
        self.assertEqual(kwargs["json"], {"description": "Temporary demo API key"})

    @patch("cyborgdb.demo.requests.post")
    def test_custom_description_and_endpoint(self, mock_post):
        os.environ["CYBORGDB_DEMO_ENDPOINT"] = "https://demo.example.com/keys"
        mock_post.return_value = mock_response({"apiKey": "demo_key_456"})

        get_demo_api_key("integration tests")

        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "https://demo.example.com/keys")
        self.assertEqual(kwargs["json"], {"description": "integration tests"})

    @patch("cyborgdb.demo.requests.post")
    def test_logs_expiry(self, mock_post):
        mock_post.return_value = mock_response(
            {"apiKey": "demo_key", "expiresAt": time.time() + 2 * 3600 + 120}
        )
        with self.assertLogs("cyborgdb.demo", level="INFO") as logs:
            get_demo_api_key()
        self.assertIn("Demo API key will expire in 2 hours", logs.output[0])

    @patch("cyborgdb.demo.requests.post")
    def test_missing_key(self, mock_post):
        mock_post.return_value = mock_response({"message": "ok"})
        with self.assertRaises(ValueError) as ctx:
            get_demo_api_key()
        self.assertIn("Demo API key not found in response", str(ctx.exception))

    @patch("cyborgdb.demo.requests.post")
    def test_http_error(self, mock_post):
        mock_post.return_value = mock_response(error=requests.HTTPError("500 Server Error"))
        with self.assertRaises(ValueError) as ctx:
            get_demo_api_key()
        self.assertTrue(str(ctx.exception).startswith("Failed to generate demo API key:"))

    @patch("cyborgdb.demo.requests.post")
    def test_network_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("unreachable")
        with self.assertRaises(ValueError):
            get_demo_api_key()


class TestFormatTimeLeft(unittest.TestCase):

    def test_units(self):
        self.assertEqual(format_time_left(45), "45 seconds")
        self.assertEqual(format_time_left(61), "1 minute, 1 second")
        self.assertEqual(format_time_left(3 * 3600 + 5 * 60), "3 hours, 5 minutes")
        self.assertEqual(format_time_left(86400 + 3600), "1 day, 1 hour")
        self.assertEqual(format_time_left(-10), "0 seconds")


if __name__ == "__main__":
    unittest.main()
