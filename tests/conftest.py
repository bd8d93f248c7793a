"""Shared pytest fixtures."""

import asyncio
import logging
from typing import Callable, Optional

import pytest

from batched_query.common.constants import PACKAGE_LOGGER
from batched_query.config.settings import reset_settings


class RecordingLookup:
    """Async lookup fake that records calls and concurrency.

    Returns the batch items unchanged, so a correct execution returns the
    input list.
    """

    def __init__(
        self,
        fail_on: Optional[int] = None,
        delay: Callable[[int], float] = lambda index: 0.001,
    ) -> None:
        self.fail_on = fail_on
        self.delay = delay
        self.calls: list[list] = []
        self.events: list[tuple[str, int]] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def __call__(self, batch: list) -> list:
        index = len(self.calls)
        self.calls.append(list(batch))
        self.events.append(("start", index))
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay(index))
            if index == self.fail_on:
                raise RuntimeError(f"lookup failed on call {index}")
            return list(batch)
        finally:
            self.in_flight -= 1
            self.events.append(("end", index))

    @property
    def call_sizes(self) -> list[int]:
        """Batch length of each call, in call order."""
        return [len(batch) for batch in self.calls]

    def start_waves(self) -> list[int]:
        """Lengths of consecutive runs of call starts.

        Parallel groups show up as one wave per group; sequential calls as
        waves of one.
        """
        waves: list[int] = []
        previous = None
        for kind, _ in self.events:
            if kind == "start":
                if previous == "start":
                    waves[-1] += 1
                else:
                    waves.append(1)
            previous = kind
        return waves


@pytest.fixture
def make_lookup() -> Callable[..., RecordingLookup]:
    """Factory for recording lookups."""
    return RecordingLookup


@pytest.fixture
def lookup() -> RecordingLookup:
    """A recording lookup that always succeeds."""
    return RecordingLookup()


@pytest.fixture
def ids() -> Callable[[int], list[int]]:
    """Factory for sequential integer ID lists."""
    return lambda count: list(range(1, count + 1))


@pytest.fixture
def clean_settings(tmp_path, monkeypatch):
    """Isolate settings from the working directory and environment."""
    monkeypatch.chdir(tmp_path)
    for name in ("BATCH_SIZE", "MAX_CONCURRENT", "STRATEGY", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(f"BATCHED_QUERY_{name}", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def package_logger():
    """Package logger restored to its default state after the test."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
