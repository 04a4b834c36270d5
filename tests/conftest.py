"""
Shared fixtures for Cosmos DB client tests.
"""

import base64
import json

import pytest

from cosmosdb_client import Container, CosmosConfig, RawResponse

SECRET = b"test-secret-key"
TEST_KEY = base64.b64encode(SECRET).decode('ascii')
TEST_HOST = "myaccount.documents.azure.com"
TEST_DATE = "tue, 01 nov 1994 08:12:31 gmt"


def raw_response(status, body, headers=None):
    """Build a RawResponse with a JSON-encoded body."""
    if not isinstance(body, bytes):
        body = json.dumps(body).encode('utf-8')
    return RawResponse(status, list(headers or []), body)


@pytest.fixture
def config():
    return CosmosConfig(TEST_KEY, TEST_HOST)


@pytest.fixture
def container():
    return Container("TestItems", "Items")
