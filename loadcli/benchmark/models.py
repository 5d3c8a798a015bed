"""Data models for the benchmarking engine."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Union

from loadcli.const import DEFAULT_REQUEST_TIMEOUT
from loadcli.shared.httpx_util import HTTPX_Util

from .constants import BenchmarkConstants
from .exceptions import InvalidSettingsError


STATISTICS_COLUMNS = ["status", "requests", "min", "max", "mean", "std", "p90", "p99"]


class RemainderPolicy(str, Enum):
    """What happens to requests that do not divide evenly across connections."""
    DROP = "drop"
    DISTRIBUTE = "distribute"


@dataclass(frozen=True)
class BenchmarkSettings:
    """Settings for one benchmark run. Immutable once the run starts."""
    connection_count: int
    total_requests: int
    target: str
    batch_size: int = BenchmarkConstants.PROGRESS_BATCH_SIZE
    remainder_policy: RemainderPolicy = RemainderPolicy.DROP
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def validate(self) -> None:
        """
        Check the run preconditions.

        Raises:
            InvalidSettingsError: If any precondition is violated.
        """
        if self.connection_count < 1:
            raise InvalidSettingsError(f"connection_count must be at least 1, got {self.connection_count}")
        if self.total_requests < 0:
            raise InvalidSettingsError(f"total_requests must not be negative, got {self.total_requests}")
        if self.batch_size < 1:
            raise InvalidSettingsError(f"batch_size must be at least 1, got {self.batch_size}")
        if not HTTPX_Util.is_absolute_http_url(self.target):
            raise InvalidSettingsError(f"target must be an absolute http(s) URI, got {self.target!r}")

    @property
    def requests_per_connection(self) -> int:
        return self.total_requests // self.connection_count

    @property
    def remainder(self) -> int:
        return self.total_requests % self.connection_count

    @property
    def planned_requests(self) -> int:
        """Number of requests the run will actually issue."""
        if self.remainder_policy == RemainderPolicy.DISTRIBUTE:
            return self.total_requests
        return self.connection_count * self.requests_per_connection


@dataclass(frozen=True)
class ConnectionSettings:
    """One worker's share of the run."""
    connection_id: int
    request_count: int
    target: str

    @classmethod
    def for_connection(cls, settings: BenchmarkSettings, connection_id: int) -> "ConnectionSettings":
        """Derive the share for the worker spawned at position connection_id."""
        request_count = settings.requests_per_connection
        if settings.remainder_policy == RemainderPolicy.DISTRIBUTE and connection_id < settings.remainder:
            request_count += 1
        return cls(connection_id=connection_id, request_count=request_count, target=settings.target)


@dataclass(frozen=True)
class RequestOutcome:
    """Latency (seconds) and raw status of one completed request."""
    latency: float
    status_code: int

    @property
    def latency_ms(self) -> float:
        return self.latency * BenchmarkConstants.SECONDS_TO_MS

    @property
    def is_success(self) -> bool:
        return self.status_code < BenchmarkConstants.SUCCESS_STATUS_LIMIT


@dataclass
class ConnectionSummary:
    """Everything one connection worker recorded."""
    connection_id: int
    outcomes: List[RequestOutcome] = field(default_factory=list)
    success_count: int = 0
    fail_count: int = 0
    duration: float = 0.0

    def record(self, outcome: RequestOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.is_success:
            self.success_count += 1
        else:
            self.fail_count += 1

    @property
    def total_count(self) -> int:
        return self.success_count + self.fail_count


@dataclass
class BenchmarkResult:
    """Raw result set of a completed run."""
    target: str
    total_wall_time: float
    outcomes: List[RequestOutcome]
    connection_summaries: List[ConnectionSummary] = field(default_factory=list)

    @property
    def total_requests(self) -> int:
        return len(self.outcomes)

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.is_success)

    @property
    def fail_count(self) -> int:
        return self.total_requests - self.success_count


@dataclass(frozen=True)
class StatusStatistics:
    """Latency statistics (milliseconds) for one status code."""
    status_code: int
    request_count: int
    min: float
    max: float
    mean: float
    std_dev: float
    p90: float
    p99: float

    def as_row(self) -> Dict[str, Union[int, float]]:
        """Return the statistics keyed by the CSV column names."""
        return {
            "status": self.status_code,
            "requests": self.request_count,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "std": self.std_dev,
            "p90": self.p90,
            "p99": self.p99,
        }


@dataclass(frozen=True)
class BenchmarkSummary:
    """Throughput figures derived from a BenchmarkResult."""
    target: str
    connections: int
    total_requests: int
    success_count: int
    fail_count: int
    total_time_s: float
    requests_per_second: float
    success_rate: float

    @classmethod
    def from_result(cls, result: BenchmarkResult, connections: int) -> "BenchmarkSummary":
        total = result.total_requests
        success = result.success_count
        elapsed = result.total_wall_time
        return cls(
            target=result.target,
            connections=connections,
            total_requests=total,
            success_count=success,
            fail_count=total - success,
            total_time_s=elapsed,
            requests_per_second=total / elapsed if elapsed > 0 else 0.0,
            success_rate=success / total if total > 0 else 0.0,
        )
