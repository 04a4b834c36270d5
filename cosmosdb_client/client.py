"""
Cosmos DB document client.

This module ties together request signing, the HTTP transport and
response classification. Every operation returns a ``(kind, result)``
tuple: the service's own failures (not found, conflict, ...) are
outcomes, not exceptions.
"""

import logging
import threading
from collections.abc import Mapping
from typing import Any, Optional

from .config import CosmosConfig
from .constants import DEFAULT_MAX_ITEM_COUNT
from .container import Container
from .exceptions import TransportError
from .request import Operation, QueryParams, RequestBuilder
from .response import Outcome, OutcomeKind, classify
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)


class CosmosClient:
    """
    Client for the document endpoints of a Cosmos DB account.

    Example:
        config = CosmosConfig.from_env()
        with CosmosClient(config) as client:
            kind, result = client.get_document(container, "42", "42")
    """

    def __init__(self, config: CosmosConfig, transport: Optional[Transport] = None):
        """
        Initialize the client.

        Args:
            config: Account credentials and options
            transport: Anything with ``send(envelope)``; defaults to a
                pooled requests session
        """
        self.config = config
        self.builder = RequestBuilder(config)
        self.transport = transport if transport is not None else RequestsTransport(config)

    def _execute(self, container: Container, operation: Operation, **kwargs) -> Outcome:
        envelope = self.builder.build(container, operation, **kwargs)

        try:
            raw = self.transport.send(envelope)
        except TransportError as e:
            logger.debug("Transport failure for %s %s: %s", envelope.method, envelope.url, e)
            return OutcomeKind.ERROR, e

        return classify(raw)

    def get_document(self, container: Container, id: str, partition_key: Any) -> Outcome:
        """Read one document by id and partition key."""
        return self._execute(container, Operation.GET_ITEM,
                             id=id, partition_key=partition_key)

    def get_documents(self, container: Container,
                      max_item_count: Any = DEFAULT_MAX_ITEM_COUNT,
                      continuation_token: Any = None) -> Outcome:
        """
        Read a page of documents from a container.

        When more documents remain, the result's ``continuation_token`` is
        set; pass it back unchanged to fetch the next page. A mapping given
        as ``max_item_count`` is taken as the continuation token with the
        default page size.
        """
        if isinstance(max_item_count, Mapping) and continuation_token is None:
            max_item_count, continuation_token = DEFAULT_MAX_ITEM_COUNT, max_item_count

        return self._execute(container, Operation.GET_ITEMS,
                             max_item_count=max_item_count,
                             continuation_token=continuation_token)

    def query(self, container: Container, query_text: str,
              params: Optional[QueryParams] = None) -> Outcome:
        """
        Run a SQL query against a container.

        Each parameter key is referenced in the query text with an ``@``
        prefix, e.g. ``SELECT * FROM c WHERE c.id = @id`` with
        ``[("id", "ACME-HD-WOLF01234")]``.
        """
        return self._execute(container, Operation.QUERY,
                             query_text=query_text, params=params)

    def create_document(self, container: Container, document: Any, partition_key: Any) -> Outcome:
        """
        Create a document.

        The document must expose an id, either through ``get_id()`` or an
        ``id`` key or attribute.
        """
        return self._execute(container, Operation.CREATE_ITEM,
                             document=document, partition_key=partition_key)

    def close(self):
        """Close the underlying transport, if it can be closed."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


_default_client: Optional[CosmosClient] = None
_default_lock = threading.Lock()


def configure(config: Optional[CosmosConfig] = None,
              transport: Optional[Transport] = None) -> CosmosClient:
    """
    Set up the client used by the module-level functions.

    Without a config, the key and host are read from the environment.

    Raises:
        ConfigurationError: If the key or host is missing
    """
    if config is None:
        config = CosmosConfig.from_env()
    with _default_lock:
        return _install(CosmosClient(config, transport))


def _install(client: CosmosClient) -> CosmosClient:
    # caller holds _default_lock
    global _default_client
    if _default_client is not None:
        _default_client.close()
    _default_client = client
    return client


def default_client() -> CosmosClient:
    """Return the module-level client, creating it from the environment once."""
    client = _default_client
    if client is not None:
        return client
    with _default_lock:
        if _default_client is None:
            _install(CosmosClient(CosmosConfig.from_env()))
        return _default_client


def get_document(container: Container, id: str, partition_key: Any) -> Outcome:
    return default_client().get_document(container, id, partition_key)


def get_documents(container: Container, max_item_count: Any = DEFAULT_MAX_ITEM_COUNT,
                  continuation_token: Any = None) -> Outcome:
    return default_client().get_documents(container, max_item_count, continuation_token)


def query(container: Container, query_text: str, params: Optional[QueryParams] = None) -> Outcome:
    return default_client().query(container, query_text, params)


def create_document(container: Container, document: Any, partition_key: Any) -> Outcome:
    return default_client().create_document(container, document, partition_key)
