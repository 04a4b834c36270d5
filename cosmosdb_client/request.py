"""
Builds signed, transport-ready requests for document operations.
"""

import enum
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Tuple, Union

from .auth import rfc7231_date, sign
from .config import CosmosConfig
from .constants import (
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_QUERY,
    DEFAULT_MAX_ITEM_COUNT,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_CONTINUATION,
    HEADER_DATE,
    HEADER_IS_QUERY,
    HEADER_MAX_ITEM_COUNT,
    HEADER_PARTITION_KEY,
    HEADER_USER_AGENT,
    HEADER_VERSION,
    MAX_ITEM_COUNT_LIMIT,
)
from .container import Container
from .documents import document_body
from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)

QueryParams = Union[Mapping, Iterable[Tuple[str, Any]]]


class Operation(enum.Enum):
    GET_ITEM = "get-item"
    GET_ITEMS = "get-items"
    QUERY = "query"
    CREATE_ITEM = "create-item"

    @property
    def method(self) -> str:
        if self in (Operation.QUERY, Operation.CREATE_ITEM):
            return "POST"
        return "GET"

    @property
    def item_scoped(self) -> bool:
        return self in (Operation.GET_ITEM, Operation.CREATE_ITEM)


@dataclass
class RequestEnvelope:
    """A single HTTP request, ready to hand to a transport."""

    method: str
    url: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: Optional[bytes] = None

    def header(self, name: str) -> Optional[str]:
        """Return the first value of a header, matched case-insensitively."""
        name = name.lower()
        for key, value in self.headers:
            if key.lower() == name:
                return value
        return None


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(',', ':'))


def _encode(value: Any) -> bytes:
    try:
        return _dumps(value).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Request body is not JSON serializable: {e}") from e


def build_query_body(query_text: str, params: Optional[QueryParams]) -> dict:
    """
    Build the body of a query request.

    Each parameter key is prefixed with ``@``, matching how it is
    referenced in the query text. Order is preserved.
    """
    if params is None:
        pairs = []
    elif isinstance(params, Mapping):
        pairs = list(params.items())
    else:
        pairs = list(params)

    parameters = []
    for key, value in pairs:
        key = str(key)
        name = key if key.startswith("@") else f"@{key}"
        parameters.append({"name": name, "value": value})

    return {"query": query_text, "parameters": parameters}


class RequestBuilder:
    """Assembles headers and bodies for document operations and signs them."""

    def __init__(self, config: CosmosConfig):
        self.config = config

    def build(self, container: Container, operation: Operation,
              id: Optional[str] = None, partition_key: Any = None,
              document: Any = None, query_text: Optional[str] = None,
              params: Optional[QueryParams] = None,
              max_item_count: int = DEFAULT_MAX_ITEM_COUNT,
              continuation_token: Any = None,
              date: Optional[str] = None) -> RequestEnvelope:
        """
        Build the request for one operation.

        Args:
            container: Target container
            operation: Which document operation to perform
            id: Document id (GET_ITEM)
            partition_key: Partition key value (GET_ITEM, CREATE_ITEM)
            document: Document to create (CREATE_ITEM)
            query_text: SQL query text (QUERY)
            params: Query parameters as pairs or a mapping (QUERY)
            max_item_count: Page size (GET_ITEMS)
            continuation_token: Token from a previous page (GET_ITEMS)
            date: Pre-formatted ``x-ms-date`` value, defaults to now

        Returns:
            RequestEnvelope with a fresh Authorization header

        Raises:
            InvalidInputError: If a value the operation requires is missing
                or the body cannot be encoded
        """
        self._validate(container, operation, id, partition_key,
                       query_text, max_item_count)

        body = None
        if operation is Operation.QUERY:
            body = _encode(build_query_body(query_text, params))
        elif operation is Operation.CREATE_ITEM:
            body = _encode(document_body(document))

        if operation is Operation.GET_ITEM:
            path = container.doc_path(id)
        else:
            path = container.docs_path

        if date is None:
            date = rfc7231_date()

        headers = self._common_headers(operation.method, path, date)

        if operation.item_scoped:
            headers.append((HEADER_PARTITION_KEY, _dumps([partition_key])))

        if operation is Operation.GET_ITEMS:
            headers.append((HEADER_MAX_ITEM_COUNT, str(max_item_count)))
            if continuation_token is not None:
                headers.append((HEADER_CONTINUATION, _dumps(continuation_token)))

        elif operation is Operation.QUERY:
            headers.append((HEADER_IS_QUERY, "true"))
            headers.append((HEADER_CONTENT_TYPE, CONTENT_TYPE_QUERY))

        elif operation is Operation.CREATE_ITEM:
            headers.append((HEADER_CONTENT_TYPE, CONTENT_TYPE_JSON))

        url = f"{self.config.base_url}/{path}"
        logger.debug("Built %s %s with headers %s", operation.method, url,
                     [name for name, _ in headers])

        return RequestEnvelope(operation.method, url, headers, body)

    def _validate(self, container, operation, id, partition_key,
                  query_text, max_item_count):
        if not isinstance(container, Container):
            raise InvalidInputError("Cannot send a request without a valid Container.")

        if operation is Operation.GET_ITEM and not id:
            raise InvalidInputError("Cannot get a document without a valid id.")

        if operation.item_scoped and partition_key is None:
            raise InvalidInputError("Cannot access a document without a valid partition key.")

        if operation is Operation.GET_ITEMS:
            if isinstance(max_item_count, bool) or not isinstance(max_item_count, int):
                raise InvalidInputError("max_item_count must be an integer")
            if not 0 < max_item_count <= MAX_ITEM_COUNT_LIMIT:
                raise InvalidInputError(
                    f"max_item_count must be between 1 and {MAX_ITEM_COUNT_LIMIT}"
                )

        if operation is Operation.QUERY and not query_text:
            raise InvalidInputError("Cannot send a query without query text.")

    def _common_headers(self, method: str, path: str, date: str) -> List[Tuple[str, str]]:
        config = self.config
        auth_signature = sign(method, path, date, config.key,
                              config.key_type, config.token_version)
        return [
            (HEADER_AUTHORIZATION, auth_signature),
            (HEADER_ACCEPT, CONTENT_TYPE_JSON),
            (HEADER_DATE, date),
            (HEADER_VERSION, config.api_version),
            (HEADER_USER_AGENT, config.user_agent),
        ]
