"""Custom exception hierarchy."""

from typing import Optional


class BatchedQueryError(Exception):
    """Base exception for all batched-query errors."""


class ConfigError(BatchedQueryError):
    """Invalid batching options."""


class BatchExecutionError(BatchedQueryError):
    """A lookup call failed for one batch.

    The original exception is available as ``__cause__``.
    """

    def __init__(
        self,
        batch_index: int,
        batch_size: int,
        message: Optional[str] = None,
    ) -> None:
        self.batch_index = batch_index
        self.batch_size = batch_size
        super().__init__(
            message or f"Lookup failed for batch {batch_index} ({batch_size} items)"
        )
