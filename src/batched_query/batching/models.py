"""Data models for batch options and execution plans."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..common.constants import BATCH_SIZE, DEFAULT_MAX_POOL_SIZE
from ..common.exceptions import ConfigError

T = TypeVar("T")


class Strategy(str, Enum):
    """Requested execution strategy."""

    AUTO = "auto"
    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"
    CHUNKED = "chunked"


class ExecutionMode(str, Enum):
    """Execution mode actually used for one call."""

    DIRECT = "direct"
    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"
    CHUNKED = "chunked"


class BatchOptions(BaseModel):
    """Options for one batched execution."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    batch_size: int = Field(
        default=BATCH_SIZE,
        gt=0,
        description="Maximum number of items passed to one lookup call",
    )
    max_concurrent: int = Field(
        default=DEFAULT_MAX_POOL_SIZE,
        gt=0,
        description="Maximum lookup calls in flight under auto/chunked",
    )
    strategy: Strategy = Field(
        default=Strategy.AUTO,
        description="Execution strategy (auto, parallel, sequential, chunked)",
    )

    @classmethod
    def build(cls, **values: Any) -> "BatchOptions":
        """Validate options, raising ConfigError instead of ValidationError."""
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid batch options: {e}") from e

    def with_overrides(self, **overrides: Any) -> "BatchOptions":
        """Return a validated copy with the given fields replaced."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return self.build(**values)


@dataclass
class BatchPlan(Generic[T]):
    """Batches of one call and the mode chosen to run them."""

    batches: list[list[T]]
    mode: ExecutionMode
    max_concurrent: int

    @property
    def batch_count(self) -> int:
        """Number of batches."""
        return len(self.batches)

    @property
    def item_count(self) -> int:
        """Total number of items across all batches."""
        return sum(len(batch) for batch in self.batches)

    @property
    def peak_concurrency(self) -> int:
        """Maximum number of lookup calls in flight under this plan."""
        if not self.batches:
            return 0
        if self.mode in (ExecutionMode.DIRECT, ExecutionMode.SEQUENTIAL):
            return 1
        if self.mode == ExecutionMode.PARALLEL:
            return self.batch_count
        return min(self.batch_count, self.max_concurrent)


def split_into_batches(items: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split items into contiguous batches.

    Args:
        items: Items to split
        batch_size: Maximum batch length

    Returns:
        Batches in input order; only the last one may be shorter

    Raises:
        ConfigError: If batch_size is not positive
    """
    if batch_size <= 0:
        raise ConfigError(f"batch_size must be positive, got {batch_size}")

    return [list(items[i : i + batch_size]) for i in range(0, len(items), batch_size)]
