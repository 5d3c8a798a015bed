"""Constants for the benchmarking engine."""
from loadcli.const import DEFAULT_PROGRESS_BATCH_SIZE, HTTP_BAD_REQUEST


class BenchmarkConstants:
    """Centralized constants for benchmark execution."""
    PROGRESS_BATCH_SIZE = DEFAULT_PROGRESS_BATCH_SIZE
    WORKER_DONE = 0  # progress channel sentinel, never a batch count
    SUCCESS_STATUS_LIMIT = HTTP_BAD_REQUEST  # status < limit counts as success
    P90 = 0.90
    P99 = 0.99
    SECONDS_TO_MS = 1000.0
