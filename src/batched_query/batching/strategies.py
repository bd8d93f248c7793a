"""Execution strategies for dispatching lookup calls over batches."""

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar, Union

from ..common.constants import DEFAULT_MAX_POOL_SIZE
from ..common.exceptions import BatchExecutionError, ConfigError
from ..common.logging import get_logger
from .models import ExecutionMode, Strategy

logger = get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")

QueryFn = Callable[[list[T]], Awaitable[Iterable[U]]]


async def run_batch(index: int, batch: list[T], query_fn: QueryFn) -> list[U]:
    """Run the lookup for one batch.

    Args:
        index: Position of the batch in the plan
        batch: Items passed to the lookup
        query_fn: Caller-supplied async lookup

    Returns:
        The lookup output as a list

    Raises:
        BatchExecutionError: If the lookup raises
    """
    logger.debug(f"Dispatching batch {index + 1} ({len(batch)} items)")
    try:
        results = await query_fn(batch)
    except Exception as e:
        logger.warning(f"Batch {index + 1} failed: {e!r}")
        raise BatchExecutionError(index, len(batch)) from e
    return list(results)


def _flatten(batch_results: Iterable[list[U]]) -> list[U]:
    results: list[U] = []
    for batch_result in batch_results:
        results.extend(batch_result)
    return results


class ExecutionStrategy:
    """Base class for execution strategies."""

    mode: ExecutionMode

    async def run(self, batches: list[list[T]], query_fn: QueryFn) -> list[U]:
        """Run the lookup over all batches.

        Args:
            batches: Batches in input order
            query_fn: Caller-supplied async lookup

        Returns:
            Lookup outputs concatenated in batch order
        """
        raise NotImplementedError


class DirectStrategy(ExecutionStrategy):
    """Single lookup call without batching."""

    mode = ExecutionMode.DIRECT

    async def run(self, batches: list[list[T]], query_fn: QueryFn) -> list[U]:
        """Run the only batch."""
        if len(batches) != 1:
            raise ValueError(f"Direct execution expects one batch, got {len(batches)}")
        return await run_batch(0, batches[0], query_fn)


class ParallelStrategy(ExecutionStrategy):
    """Dispatch every batch at once (fastest, uses one connection per batch)."""

    mode = ExecutionMode.PARALLEL

    async def run(self, batches: list[list[T]], query_fn: QueryFn) -> list[U]:
        """Gather all batches."""
        batch_results = await asyncio.gather(
            *(run_batch(i, batch, query_fn) for i, batch in enumerate(batches))
        )
        return _flatten(batch_results)


class SequentialStrategy(ExecutionStrategy):
    """Run batches one after another (slowest, uses one connection)."""

    mode = ExecutionMode.SEQUENTIAL

    async def run(self, batches: list[list[T]], query_fn: QueryFn) -> list[U]:
        """Await each batch before starting the next."""
        results: list[U] = []
        for i, batch in enumerate(batches):
            results.extend(await run_batch(i, batch, query_fn))
        return results


class ChunkedParallelStrategy(ExecutionStrategy):
    """Run batches in concurrent groups of at most max_concurrent.

    Each group is joined before the next one starts, so no more than
    ``max_concurrent`` lookups are ever in flight.
    """

    mode = ExecutionMode.CHUNKED

    def __init__(self, max_concurrent: int = DEFAULT_MAX_POOL_SIZE) -> None:
        if max_concurrent <= 0:
            raise ConfigError(f"max_concurrent must be positive, got {max_concurrent}")
        self.max_concurrent = max_concurrent

    async def run(self, batches: list[list[T]], query_fn: QueryFn) -> list[U]:
        """Gather one group at a time."""
        results: list[U] = []

        for start in range(0, len(batches), self.max_concurrent):
            group = batches[start : start + self.max_concurrent]
            logger.debug(
                f"Processing group {start // self.max_concurrent + 1} "
                f"(batches {start + 1}-{start + len(group)})"
            )
            group_results = await asyncio.gather(
                *(run_batch(i, batch, query_fn) for i, batch in enumerate(group, start=start))
            )
            results.extend(_flatten(group_results))

        return results


def resolve_mode(
    strategy: Union[Strategy, str],
    batch_count: int,
    max_concurrent: int,
) -> ExecutionMode:
    """Decide how a call with the given batch count should run.

    Args:
        strategy: Requested strategy
        batch_count: Number of batches in the call
        max_concurrent: Ceiling on in-flight lookups

    Returns:
        Resolved execution mode

    Raises:
        ConfigError: If the strategy name is invalid
    """
    try:
        strategy = Strategy(strategy)
    except ValueError as e:
        raise ConfigError(
            f"Invalid strategy '{strategy}'. "
            f"Valid options: {', '.join(s.value for s in Strategy)}"
        ) from e

    if batch_count <= 1:
        return ExecutionMode.DIRECT

    if strategy == Strategy.AUTO:
        if batch_count <= max_concurrent:
            return ExecutionMode.PARALLEL
        return ExecutionMode.CHUNKED

    return ExecutionMode(strategy.value)


def get_strategy(
    mode: Union[ExecutionMode, str],
    max_concurrent: int = DEFAULT_MAX_POOL_SIZE,
) -> ExecutionStrategy:
    """Get execution strategy by mode.

    Args:
        mode: Execution mode (direct, parallel, sequential, chunked)
        max_concurrent: Group size for chunked execution

    Returns:
        ExecutionStrategy instance

    Raises:
        ConfigError: If the mode is invalid; "auto" must go through resolve_mode first
    """
    strategies = {
        ExecutionMode.DIRECT.value: DirectStrategy,
        ExecutionMode.PARALLEL.value: ParallelStrategy,
        ExecutionMode.SEQUENTIAL.value: SequentialStrategy,
        ExecutionMode.CHUNKED.value: ChunkedParallelStrategy,
    }

    name = mode.value if isinstance(mode, ExecutionMode) else str(mode).lower()
    strategy_class = strategies.get(name)
    if not strategy_class:
        raise ConfigError(
            f"Invalid execution mode '{mode}'. "
            f"Valid options: {', '.join(strategies.keys())}"
        )

    if strategy_class is ChunkedParallelStrategy:
        return ChunkedParallelStrategy(max_concurrent)
    return strategy_class()
