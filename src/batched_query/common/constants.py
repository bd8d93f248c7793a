"""Constants used throughout the package."""

# SQL Server rejects statements with more than 2100 parameters
BATCH_SIZE = 2000

# Default Knex mssql pool max size
DEFAULT_MAX_POOL_SIZE = 10

DEFAULT_STRATEGY = "auto"

# Settings
ENV_PREFIX = "BATCHED_QUERY_"
PACKAGE_LOGGER = "batched_query"
