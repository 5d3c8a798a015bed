"""Shared test configuration, fixtures and test doubles for all tests."""

import asyncio
import itertools
import os
from typing import List, Optional, Sequence
from unittest.mock import patch

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

from loadcli.benchmark.exceptions import TransportError
from loadcli.benchmark.models import BenchmarkSettings
from loadcli.benchmark.progress import ProgressCallback, ProgressChannel
from loadcli.benchmark.requester import Requester
from .test_const import ALTERNATING_STATUSES, TEST_CONNECTIONS, TEST_REQUESTS, TEST_TARGET


class MockRequester(Requester):
    """Requester returning a fixed status, or failing when status is None."""

    def __init__(self, status: Optional[int]):
        self.status = status
        self.calls = 0
        self.closed = False

    async def get(self, uri: str) -> int:
        self.calls += 1
        if self.status is None:
            raise TransportError("Test", uri=uri)
        return self.status

    async def aclose(self) -> None:
        self.closed = True


class CyclingRequester(Requester):
    """Requester returning statuses in a fixed cycle, shared by every connection."""

    def __init__(self, statuses: Sequence[int]):
        self._statuses = itertools.cycle(statuses)
        self.calls = 0

    async def get(self, uri: str) -> int:
        self.calls += 1
        await asyncio.sleep(0)
        return next(self._statuses)


class BlockingRequester(Requester):
    """Requester that never completes until cancelled."""

    def __init__(self):
        self.cancelled = False
        self.closed = False

    async def get(self, uri: str) -> int:
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return 200

    async def aclose(self) -> None:
        self.closed = True


class RecordingProgress(ProgressCallback):
    """Progress callback remembering every call it receives."""

    def __init__(self):
        self.updates: List[int] = []
        self.finish_calls = 0

    def update(self, count: int) -> None:
        self.updates.append(count)

    def finish(self) -> None:
        self.finish_calls += 1

    @property
    def total(self) -> int:
        return sum(self.updates)


class RecordingChannel(ProgressChannel):
    """Progress channel remembering every message the consumer received."""

    instances: List["RecordingChannel"] = []

    def __init__(self, connection_count: int):
        super().__init__(connection_count)
        self.received: List[int] = []
        RecordingChannel.instances.append(self)

    async def receive(self) -> int:
        message = await super().receive()
        self.received.append(message)
        return message


async def drain_channel(channel: ProgressChannel) -> List[int]:
    """Receive every message already buffered in channel."""
    messages = []
    while channel.pending():
        messages.append(await channel.receive())
    return messages


@pytest.fixture
def settings():
    """Benchmark settings for the 4 connection, 40 request scenario."""
    return BenchmarkSettings(
        connection_count=TEST_CONNECTIONS,
        total_requests=TEST_REQUESTS,
        target=TEST_TARGET,
        batch_size=3,
    )


@pytest.fixture
def recording_progress():
    """Progress callback that records its calls."""
    return RecordingProgress()


@pytest.fixture
def alternating_requester():
    """Shared requester cycling 200/200/200/500."""
    return CyclingRequester(ALTERNATING_STATUSES)


@pytest.fixture
def recording_channel():
    """Replace the coordinator's progress channel with a recording one."""
    RecordingChannel.instances = []
    with patch('loadcli.benchmark.coordinator.ProgressChannel', RecordingChannel):
        yield RecordingChannel.instances
