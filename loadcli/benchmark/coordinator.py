"""Fans connection workers out, drains their progress and joins their results."""
import asyncio
import functools
import logging
import time
from typing import Callable, Dict, List, Optional

from .models import BenchmarkResult, BenchmarkSettings, ConnectionSettings, ConnectionSummary, RemainderPolicy
from .connection_worker import ConnectionWorker
from .exceptions import BenchmarkError, TaskFailureError
from .progress import NullProgress, ProgressCallback, ProgressChannel
from .requester import HttpxRequester, Requester


# Configure logging
logger = logging.getLogger(__name__)

RequesterFactory = Callable[[], Requester]


class BenchmarkCoordinator:
    """Runs one benchmark pass to completion or to its first failure."""

    def __init__(
        self,
        settings: BenchmarkSettings,
        requester_factory: Optional[RequesterFactory] = None,
        progress: Optional[ProgressCallback] = None,
    ):
        self.settings = settings
        self.requester_factory = requester_factory or self._default_requester_factory
        self.progress = progress or NullProgress()

    def _default_requester_factory(self) -> Requester:
        return HttpxRequester(timeout=self.settings.request_timeout)

    def connection_settings(self) -> List[ConnectionSettings]:
        """Derive every worker's share, in spawn order."""
        return [
            ConnectionSettings.for_connection(self.settings, connection_id)
            for connection_id in range(self.settings.connection_count)
        ]

    async def run(self) -> BenchmarkResult:
        """
        Execute the benchmark.

        Returns:
            BenchmarkResult with every recorded outcome.

        Raises:
            InvalidSettingsError: If the settings are rejected.
            TransportError: If any request fails.
            TaskFailureError: If a worker could not be created or run.
        """
        self.settings.validate()
        self._log_plan()

        requesters: List[Requester] = []
        try:
            self._create_requesters(requesters)
            return await self._execute(requesters)
        finally:
            await self._close_requesters(requesters)

    def _log_plan(self) -> None:
        settings = self.settings
        logger.info(
            f"Benchmarking {settings.target} with {settings.connection_count} connections, "
            f"{settings.requests_per_connection} requests each"
        )
        if settings.remainder and settings.remainder_policy == RemainderPolicy.DROP:
            logger.warning(
                f"{settings.total_requests} requests do not divide evenly across "
                f"{settings.connection_count} connections; {settings.remainder} requests will not be issued"
            )

    def _create_requesters(self, requesters: List[Requester]) -> None:
        for connection_id in range(self.settings.connection_count):
            try:
                requesters.append(self.requester_factory())
            except Exception as e:
                logger.error(f"Could not create requester for connection {connection_id}: {e}")
                raise TaskFailureError(f"Could not create requester for connection {connection_id}", connection_id) from e

    async def _execute(self, requesters: List[Requester]) -> BenchmarkResult:
        channel = ProgressChannel(self.settings.connection_count)
        failed: asyncio.Future = asyncio.get_running_loop().create_future()
        started = time.perf_counter()

        tasks: Dict[asyncio.Task, int] = {}
        try:
            for conn_settings, requester in zip(self.connection_settings(), requesters):
                worker = ConnectionWorker(requester, channel, conn_settings, self.settings.batch_size)
                task = asyncio.create_task(worker.run(), name=f"connection-{conn_settings.connection_id}")
                task.add_done_callback(functools.partial(self._report_failure, failed))
                tasks[task] = conn_settings.connection_id

            await self._drain(channel, tasks, failed)
            summaries = await self._join(tasks)
        except BaseException:
            await self._cancel(tasks)
            raise

        elapsed = time.perf_counter() - started
        outcomes = [outcome for summary in summaries for outcome in summary.outcomes]
        self.progress.finish()

        logger.info(f"Completed {len(outcomes)} requests in {elapsed:.3f}s")
        return BenchmarkResult(
            target=self.settings.target,
            total_wall_time=elapsed,
            outcomes=outcomes,
            connection_summaries=summaries,
        )

    @staticmethod
    def _report_failure(failed: asyncio.Future, task: asyncio.Task) -> None:
        """Done callback resolving ``failed`` with the first worker that did not succeed."""
        if failed.done():
            return
        if task.cancelled() or task.exception() is not None:
            failed.set_result(task)

    async def _drain(self, channel: ProgressChannel, tasks: Dict[asyncio.Task, int], failed: asyncio.Future) -> None:
        """Feed progress until every worker has sent its done sentinel.

        Each wait covers only the pending receive and ``failed``, so the first
        failed worker ends the drain immediately whatever the connection count.
        """
        finished = 0
        receiver: Optional[asyncio.Future] = None
        try:
            while finished < self.settings.connection_count:
                if receiver is None:
                    receiver = asyncio.ensure_future(channel.receive())
                await asyncio.wait({receiver, failed}, return_when=asyncio.FIRST_COMPLETED)

                if failed.done():
                    task = failed.result()
                    raise self._failure(task, tasks[task])

                message = receiver.result()
                receiver = None
                if channel.is_done(message):
                    finished += 1
                else:
                    self.progress.update(message)
        finally:
            if receiver is not None and not receiver.done():
                receiver.cancel()

    async def _join(self, tasks: Dict[asyncio.Task, int]) -> List[ConnectionSummary]:
        summaries = []
        for task, connection_id in tasks.items():
            try:
                summaries.append(await task)
            except BenchmarkError:
                raise
            except Exception as e:
                raise TaskFailureError(f"Connection {connection_id} failed: {e}", connection_id) from e
        return summaries

    @staticmethod
    def _failure(task: asyncio.Task, connection_id: int) -> BenchmarkError:
        if task.cancelled():
            logger.error(f"Connection {connection_id} was cancelled")
            return TaskFailureError(f"Connection {connection_id} was cancelled", connection_id)

        error = task.exception()
        logger.error(f"Connection {connection_id} failed: {error}")
        if isinstance(error, BenchmarkError):
            return error
        failure = TaskFailureError(f"Connection {connection_id} failed: {error}", connection_id)
        failure.__cause__ = error
        return failure

    @staticmethod
    async def _cancel(tasks: Dict[asyncio.Task, int]) -> None:
        for task in tasks:
            if not task.done():
                task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    @staticmethod
    async def _close_requesters(requesters: List[Requester]) -> None:
        results = await asyncio.gather(*(requester.aclose() for requester in requesters), return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                logger.warning(f"Failed to close requester: {result}")


async def run_benchmark(
    settings: BenchmarkSettings,
    progress: Optional[ProgressCallback] = None,
    requester_factory: Optional[RequesterFactory] = None,
) -> BenchmarkResult:
    """Run one benchmark pass and return its raw result set."""
    coordinator = BenchmarkCoordinator(settings, requester_factory=requester_factory, progress=progress)
    return await coordinator.run()
