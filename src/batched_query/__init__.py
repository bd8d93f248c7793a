"""Run async lookups over large ID lists in batches."""

from .batching import (
    BatchExecutor,
    BatchOptions,
    BatchPlan,
    ExecutionMode,
    Strategy,
    execute_batched_query,
    execute_batched_query_parallel,
    execute_batched_query_sequential,
    plan_batches,
    split_into_batches,
)
from .common.exceptions import BatchedQueryError, BatchExecutionError, ConfigError
from .common.logging import setup_logging
from .config.settings import Settings, get_settings

# Default entry point
execute = execute_batched_query

__version__ = "0.1.0"

__all__ = [
    "BatchExecutionError",
    "BatchExecutor",
    "BatchOptions",
    "BatchPlan",
    "BatchedQueryError",
    "ConfigError",
    "ExecutionMode",
    "Settings",
    "Strategy",
    "execute",
    "execute_batched_query",
    "execute_batched_query_parallel",
    "execute_batched_query_sequential",
    "get_settings",
    "plan_batches",
    "setup_logging",
    "split_into_batches",
]
