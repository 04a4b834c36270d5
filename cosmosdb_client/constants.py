"""
Constants for the Cosmos DB client library.
Header names and protocol values follow the Cosmos DB SQL REST API.
"""

# Request headers
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"
HEADER_DATE = "x-ms-date"
HEADER_VERSION = "x-ms-version"
HEADER_PARTITION_KEY = "x-ms-documentdb-partitionkey"
HEADER_IS_QUERY = "x-ms-documentdb-isquery"
HEADER_MAX_ITEM_COUNT = "x-ms-max-item-count"
HEADER_CONTINUATION = "x-ms-continuation"

# Response headers
HEADER_REQUEST_CHARGE = "x-ms-request-charge"
HEADER_REQUEST_DURATION = "x-ms-request-duration-ms"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_QUERY = "application/query+json"

# Resource path segments, in nesting order
RESOURCE_TYPES = ("dbs", "colls", "docs")

API_VERSION = "2018-12-31"
KEY_TYPE_MASTER = "master"
TOKEN_VERSION = "1.0"

DEFAULT_MAX_ITEM_COUNT = 100
MAX_ITEM_COUNT_LIMIT = 1000  # service maximum per page

# Environment variables read by CosmosConfig.from_env
ENV_DB_KEY = "COSMOS_DB_KEY"
ENV_HOST_URL = "COSMOS_DB_HOST_URL"

# Default configuration values
DEFAULT_CONFIG = {
    'key_type': KEY_TYPE_MASTER,
    'token_version': TOKEN_VERSION,
    'api_version': API_VERSION,
    'timeout': 30,              # HTTP timeout in seconds
    'pool_size': 32,            # connections kept per host
    'user_agent': "cosmosdb-client-python",
}
