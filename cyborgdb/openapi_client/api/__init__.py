# flake8: noqa

from cyborgdb.openapi_client.api.default_api import DefaultApi
