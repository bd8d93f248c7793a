"""Batched lookup execution with automatic strategy selection."""

from typing import Any, Optional, Sequence, TypeVar

from ..common.logging import get_logger
from .models import BatchOptions, BatchPlan, ExecutionMode, Strategy, split_into_batches
from .strategies import QueryFn, get_strategy, resolve_mode

logger = get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")


def plan_batches(items: Sequence[T], options: BatchOptions) -> BatchPlan[T]:
    """Split items and resolve the execution mode.

    Small inputs (at most one batch) always run directly, whatever the
    requested strategy.

    Args:
        items: Items to process
        options: Validated batch options

    Returns:
        Batch plan for the call
    """
    if len(items) <= options.batch_size:
        batches = [list(items)] if len(items) > 0 else []
    else:
        batches = split_into_batches(items, options.batch_size)

    mode = resolve_mode(options.strategy, len(batches), options.max_concurrent)
    return BatchPlan(batches=batches, mode=mode, max_concurrent=options.max_concurrent)


class BatchExecutor:
    """Runs an async lookup over items in batches."""

    def __init__(self, options: Optional[BatchOptions] = None) -> None:
        """Initialize batch executor.

        Args:
            options: Batch options (defaults apply when omitted)
        """
        self.options = options or BatchOptions()

    async def execute(self, items: Sequence[T], query_fn: QueryFn) -> list[U]:
        """Run query_fn over items in batches.

        Strategy:
        - Empty input: no lookup calls
        - One batch or less: a single direct call with all items
        - Up to max_concurrent batches (auto): all batches in parallel
        - More than max_concurrent batches (auto): parallel groups of
          max_concurrent, one group after another

        Args:
            items: Items to process
            query_fn: Async function taking a batch and returning its results

        Returns:
            Flattened results in batch order

        Raises:
            BatchExecutionError: If any lookup call fails
        """
        if len(items) == 0:
            return []

        plan = plan_batches(items, self.options)
        logger.debug(
            f"Executing {plan.item_count} items in {plan.batch_count} batch(es) "
            f"using {plan.mode.value} mode"
        )
        if plan.mode == ExecutionMode.PARALLEL and plan.batch_count > self.options.max_concurrent:
            logger.warning(
                f"Parallel execution of {plan.batch_count} batches exceeds "
                f"max_concurrent={self.options.max_concurrent}"
            )

        strategy = get_strategy(plan.mode, plan.max_concurrent)
        results: list[U] = await strategy.run(plan.batches, query_fn)

        logger.debug(f"Collected {len(results)} results from {plan.batch_count} batch(es)")
        return results


async def execute_batched_query(
    items: Sequence[T],
    query_fn: QueryFn,
    options: Optional[BatchOptions] = None,
    **overrides: Any,
) -> list[U]:
    """Smart batched query execution with automatic strategy selection.

    Args:
        items: Items (typically IDs) to process
        query_fn: Async function taking a batch and returning its results
        options: Batch options; defaults apply when omitted
        **overrides: batch_size, max_concurrent or strategy replacing
            values from options

    Returns:
        Flattened results in batch order

    Raises:
        ConfigError: If the options are invalid
        BatchExecutionError: If any lookup call fails
    """
    resolved = (options or BatchOptions()).with_overrides(**overrides)
    return await BatchExecutor(resolved).execute(items, query_fn)


async def execute_batched_query_parallel(
    items: Sequence[T],
    query_fn: QueryFn,
    **overrides: Any,
) -> list[U]:
    """Run every batch in parallel regardless of batch count."""
    return await execute_batched_query(
        items, query_fn, **{**overrides, "strategy": Strategy.PARALLEL}
    )


async def execute_batched_query_sequential(
    items: Sequence[T],
    query_fn: QueryFn,
    **overrides: Any,
) -> list[U]:
    """Run batches strictly one at a time."""
    return await execute_batched_query(
        items, query_fn, **{**overrides, "strategy": Strategy.SEQUENTIAL}
    )
