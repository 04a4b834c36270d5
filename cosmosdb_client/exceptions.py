"""
Custom exceptions for the Cosmos DB client library.
"""


class CosmosClientError(Exception):
    """Base exception for Cosmos DB client errors."""
    pass


class ConfigurationError(CosmosClientError):
    """Raised when the account key, host or client options are invalid."""
    pass


class InvalidInputError(CosmosClientError, ValueError):
    """Raised when a container, id, partition key or document is missing."""
    pass


class InvalidKeyError(CosmosClientError):
    """Raised when the account key is not valid base64."""
    pass


class MalformedResponseBodyError(CosmosClientError):
    """Raised when a response body cannot be decoded as JSON."""

    def __init__(self, message: str, status_code: int = None, body: bytes = b""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportError(CosmosClientError):
    """Raised when the HTTP request itself fails."""
    pass


class UnexpectedStatusError(CosmosClientError):
    """Describes a response whose status has no mapped outcome."""

    def __init__(self, status_code: int, headers=None, body: bytes = b""):
        super().__init__(f"Unexpected response status {status_code}")
        self.status_code = status_code
        self.headers = list(headers or [])
        self.body = body
