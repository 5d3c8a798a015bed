"""Drives one logical connection through its share of requests."""
import time
import logging

from .models import ConnectionSettings, ConnectionSummary, RequestOutcome
from .constants import BenchmarkConstants
from .progress import ProgressChannel
from .requester import Requester


# Configure logging
logger = logging.getLogger(__name__)


class ConnectionWorker:
    """Handles sequential request execution and timing for one connection."""

    def __init__(
        self,
        requester: Requester,
        channel: ProgressChannel,
        settings: ConnectionSettings,
        batch_size: int = BenchmarkConstants.PROGRESS_BATCH_SIZE,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.requester = requester
        self.channel = channel
        self.settings = settings
        self.batch_size = batch_size

    async def run(self) -> ConnectionSummary:
        """
        Issue request_count sequential requests against the target.

        Progress is reported on the channel in batches of ``batch_size``; the
        final partial batch is flushed and followed by the done sentinel.

        Returns:
            The summary of every completed request.

        Raises:
            TransportError: If a request fails. No sentinel is sent.
        """
        summary = ConnectionSummary(connection_id=self.settings.connection_id)
        batch = 0
        started = time.perf_counter()

        for _ in range(self.settings.request_count):
            request_started = time.perf_counter()
            status = await self.requester.get(self.settings.target)
            latency = time.perf_counter() - request_started

            summary.record(RequestOutcome(latency=latency, status_code=status))
            batch += 1
            if batch >= self.batch_size:
                await self.channel.send_batch(batch)
                batch = 0

        if batch:
            await self.channel.send_batch(batch)
        await self.channel.send_done()

        summary.duration = time.perf_counter() - started
        logger.debug(
            f"Connection {summary.connection_id} finished: {summary.success_count} ok, "
            f"{summary.fail_count} failed in {summary.duration:.3f}s"
        )
        return summary
