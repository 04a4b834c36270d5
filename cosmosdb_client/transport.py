"""
HTTP transport for signed requests.

The client only depends on ``send(envelope) -> RawResponse``. The
default implementation uses a pooled ``requests.Session``.
"""

import logging
from typing import Optional, Protocol

import requests
from requests.adapters import HTTPAdapter

from .config import CosmosConfig
from .exceptions import TransportError
from .request import RequestEnvelope
from .response import RawResponse

logger = logging.getLogger(__name__)


class Transport(Protocol):
    def send(self, envelope: RequestEnvelope) -> RawResponse:
        ...


class RequestsTransport:
    """
    Sends request envelopes over a pooled requests session.

    Connection pooling, timeouts and TLS live here; the transport does
    not retry.
    """

    def __init__(self, config: CosmosConfig, session: Optional[requests.Session] = None):
        self.timeout = config.timeout

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=1, pool_maxsize=config.pool_size)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        self.session = session

    def send(self, envelope: RequestEnvelope) -> RawResponse:
        """
        Send one request.

        Raises:
            TransportError: If the request fails before a response arrives
        """
        try:
            response = self.session.request(
                envelope.method,
                envelope.url,
                headers=dict(envelope.headers),
                data=envelope.body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}") from e

        logger.debug("%s %s -> %s", envelope.method, envelope.url, response.status_code)
        return RawResponse(response.status_code, list(response.headers.items()), response.content)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

