"""Analyzes and computes per-status latency statistics."""
import logging
import math
from typing import Dict, List, Sequence

import numpy as np

from .constants import BenchmarkConstants
from .models import RequestOutcome, StatusStatistics


# Configure logging
logger = logging.getLogger(__name__)


class LatencyAnalyzer:
    """Analyzes and computes latency statistics.

    Percentiles use the nearest-rank estimator: on the sorted latencies of a
    group of size n the p-th fraction selects index ``floor(p * n)``, clamped
    to ``[0, n - 1]``. An observed value is always returned, never an
    interpolation between neighbours, so small groups can differ from what
    ``numpy.percentile`` with its default linear method would report.
    """

    @staticmethod
    def group_latencies_by_status(outcomes: Sequence[RequestOutcome]) -> Dict[int, List[float]]:
        """
        Partition latencies by status code.

        Args:
            outcomes: Completed request outcomes.

        Returns:
            Mapping of status code to latencies in milliseconds, in completion order.
        """
        groups: Dict[int, List[float]] = {}
        for outcome in outcomes:
            groups.setdefault(outcome.status_code, []).append(outcome.latency_ms)
        return groups

    @staticmethod
    def nearest_rank(sorted_values: Sequence[float], fraction: float) -> float:
        """
        Select the nearest-rank percentile from already sorted values.

        Raises:
            ValueError: If sorted_values is empty.
        """
        n = len(sorted_values)
        if n == 0:
            raise ValueError("cannot take a percentile of an empty sequence")
        index = min(max(math.floor(fraction * n), 0), n - 1)
        return float(sorted_values[index])

    @classmethod
    def compute_status_statistics(cls, status_code: int, latencies_ms: Sequence[float]) -> StatusStatistics:
        """
        Compute statistics for one status group.

        Args:
            status_code: Status code shared by the group.
            latencies_ms: Latencies in milliseconds; must not be empty.

        Returns:
            StatusStatistics for the group.
        """
        values = np.sort(np.asarray(latencies_ms, dtype=float))
        if values.size == 0:
            raise ValueError(f"no latencies recorded for status {status_code}")

        return StatusStatistics(
            status_code=status_code,
            request_count=int(values.size),
            min=float(values.min()),
            max=float(values.max()),
            mean=float(values.mean()),
            std_dev=float(values.std(ddof=0)),
            p90=cls.nearest_rank(values, BenchmarkConstants.P90),
            p99=cls.nearest_rank(values, BenchmarkConstants.P99),
        )

    @classmethod
    def compute_statistics(cls, outcomes: Sequence[RequestOutcome]) -> List[StatusStatistics]:
        """
        Compute statistics for every status code observed.

        Args:
            outcomes: Completed request outcomes from all connections.

        Returns:
            One StatusStatistics per status code, ordered by status code.
        """
        groups = cls.group_latencies_by_status(outcomes)
        statistics = [cls.compute_status_statistics(status, groups[status]) for status in sorted(groups)]
        logger.debug(f"Computed statistics for {len(statistics)} status codes from {len(outcomes)} outcomes")
        return statistics
