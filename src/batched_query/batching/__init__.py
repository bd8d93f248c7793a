"""Batch orchestration over async lookup functions."""

from .executor import (
    BatchExecutor,
    execute_batched_query,
    execute_batched_query_parallel,
    execute_batched_query_sequential,
    plan_batches,
)
from .models import BatchOptions, BatchPlan, ExecutionMode, Strategy, split_into_batches
from .strategies import get_strategy, resolve_mode

__all__ = [
    "BatchExecutor",
    "BatchOptions",
    "BatchPlan",
    "ExecutionMode",
    "Strategy",
    "execute_batched_query",
    "execute_batched_query_parallel",
    "execute_batched_query_sequential",
    "get_strategy",
    "plan_batches",
    "resolve_mode",
    "split_into_batches",
]
