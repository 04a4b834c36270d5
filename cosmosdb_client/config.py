"""
Client configuration.

A CosmosConfig is built once at startup and handed to the client. Core
code never reads the environment itself; only ``from_env`` does.
"""

import logging
import os
from typing import Mapping, Optional

from .constants import DEFAULT_CONFIG, ENV_DB_KEY, ENV_HOST_URL
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CosmosConfig:
    """
    Account credentials and client options.

    Args:
        key: Base64 encoded account key (primary or secondary)
        host: Account host, e.g. ``myaccount.documents.azure.com``
        **config: Options overriding DEFAULT_CONFIG (key_type,
            token_version, api_version, timeout, pool_size, user_agent)
    """

    def __init__(self, key: str, host: str, **config):
        self.key = key
        self.host = host

        unknown = set(config) - set(DEFAULT_CONFIG)
        if unknown:
            raise ConfigurationError(f"Unknown configuration options: {sorted(unknown)}")

        # Merge default config with user overrides
        self.options = {**DEFAULT_CONFIG, **config}

        self._validate_config()

    def _validate_config(self):
        """Validate client configuration."""
        if not self.key:
            raise ConfigurationError("A Cosmos DB key is required.")

        if not self.host:
            raise ConfigurationError("A host url for Cosmos DB is required.")

        if self.options['timeout'] <= 0:
            raise ConfigurationError("timeout must be positive")

        if self.options['pool_size'] <= 0:
            raise ConfigurationError("pool_size must be positive")

    @classmethod
    def from_env(cls, key: Optional[str] = None, host: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None, **config) -> "CosmosConfig":
        """
        Build a config from explicit values, falling back to the environment.

        ``COSMOS_DB_KEY`` and ``COSMOS_DB_HOST_URL`` are consulted only for
        values not given explicitly.

        Raises:
            ConfigurationError: If the key or host cannot be resolved
        """
        if environ is None:
            environ = os.environ

        if not key:
            logger.debug("Attempting to retrieve Cosmos DB key from the environment.")
            key = environ.get(ENV_DB_KEY)

        if not host:
            logger.debug("Attempting to retrieve Cosmos DB host url from the environment.")
            host = environ.get(ENV_HOST_URL)

        return cls(key, host, **config)

    @property
    def base_url(self) -> str:
        host = self.host.rstrip('/')
        if host.startswith(("http://", "https://")):
            return host
        return f"https://{host}"

    @property
    def key_type(self) -> str:
        return self.options['key_type']

    @property
    def token_version(self) -> str:
        return self.options['token_version']

    @property
    def api_version(self) -> str:
        return self.options['api_version']

    @property
    def timeout(self):
        return self.options['timeout']

    @property
    def pool_size(self) -> int:
        return self.options['pool_size']

    @property
    def user_agent(self) -> str:
        return self.options['user_agent']

    def __repr__(self):
        # never include the key
        return f"CosmosConfig(host={self.host!r}, options={self.options!r})"
