"""Progress notifications from connection workers to the coordinator."""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from .constants import BenchmarkConstants


# Configure logging
logger = logging.getLogger(__name__)


class ProgressChannel:
    """Bounded many-producer, single-consumer queue of progress messages.

    A message is either a positive batch count or ``WORKER_DONE`` (0), sent
    once by each worker after its last batch.
    """

    def __init__(self, connection_count: int):
        if connection_count < 1:
            raise ValueError("connection_count must be at least 1")
        self.capacity = connection_count
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=connection_count)

    async def send_batch(self, count: int) -> None:
        if count <= 0:
            raise ValueError(f"batch count must be positive, got {count}")
        await self._queue.put(count)

    async def send_done(self) -> None:
        await self._queue.put(BenchmarkConstants.WORKER_DONE)

    async def receive(self) -> int:
        return await self._queue.get()

    def pending(self) -> int:
        """Number of messages sent but not yet received."""
        return self._queue.qsize()

    @staticmethod
    def is_done(message: int) -> bool:
        return message == BenchmarkConstants.WORKER_DONE


class ProgressCallback(ABC):
    """Consumer of progress increments, driven only by the coordinator."""

    @abstractmethod
    def update(self, count: int) -> None:
        """Advance progress by count completed requests."""
        pass

    @abstractmethod
    def finish(self) -> None:
        """Called once after every worker has been joined."""
        pass

    def close(self) -> None:
        """Release any display, whether or not the run finished."""
        pass


class NullProgress(ProgressCallback):
    """Silent progress callback used when no display is wanted."""

    def update(self, count: int) -> None:
        pass

    def finish(self) -> None:
        pass


class RichProgress(ProgressCallback):
    """Progress bar rendered with rich."""

    def __init__(self, total: int, description: str = "Requests", console: Optional[Console] = None):
        self.total = total
        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=console,
        )
        self._task_id = self._progress.add_task(description, total=total)
        self._started = False

    def update(self, count: int) -> None:
        if not self._started:
            self._progress.start()
            self._started = True
        self._progress.advance(self._task_id, count)

    def finish(self) -> None:
        self.close()
        logger.debug(f"Progress finished at {self.completed}/{self.total}")

    def close(self) -> None:
        if self._started:
            self._progress.stop()
            self._started = False

    @property
    def completed(self) -> float:
        return self._progress.tasks[0].completed
