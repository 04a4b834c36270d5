"""
Cosmos DB Client Library

A Python client for the Azure Cosmos DB SQL REST API that signs each
request with the account's master key.

Example usage:
    from cosmosdb_client import Container, CosmosClient, CosmosConfig, OutcomeKind

    client = CosmosClient(CosmosConfig.from_env())
    container = Container("database", "container")
    kind, result = client.get_document(container, "item-id", "item-id")
    if kind is OutcomeKind.OK:
        print(result.body)
"""

from .auth import sign, rfc7231_date
from .client import (
    CosmosClient,
    configure,
    create_document,
    get_document,
    get_documents,
    query
)
from .config import CosmosConfig
from .container import Container
from .documents import Identifiable
from .exceptions import (
    CosmosClientError,
    ConfigurationError,
    InvalidInputError,
    InvalidKeyError,
    MalformedResponseBodyError,
    TransportError,
    UnexpectedStatusError
)
from .request import Operation, RequestBuilder, RequestEnvelope
from .response import OutcomeKind, RawResponse, ResultEnvelope, classify
from .transport import RequestsTransport

__version__ = "0.2.0"
__all__ = [
    "CosmosClient",
    "CosmosConfig",
    "Container",
    "Identifiable",
    "Operation",
    "OutcomeKind",
    "RawResponse",
    "RequestBuilder",
    "RequestEnvelope",
    "RequestsTransport",
    "ResultEnvelope",
    "classify",
    "configure",
    "create_document",
    "get_document",
    "get_documents",
    "query",
    "rfc7231_date",
    "sign",
    "CosmosClientError",
    "ConfigurationError",
    "InvalidInputError",
    "InvalidKeyError",
    "MalformedResponseBodyError",
    "TransportError",
    "UnexpectedStatusError"
]
