"""Custom exceptions for the benchmarking engine."""


class BenchmarkError(Exception):
    """Base class for every error that aborts a benchmark run."""
    pass


class InvalidSettingsError(BenchmarkError):
    """Raised when benchmark settings are rejected before any task spawns."""
    pass


class TransportError(BenchmarkError):
    """Exception raised when a single request cannot complete."""

    def __init__(self, message: str, uri: str = ""):
        super().__init__(message)
        self.uri = uri


class TaskFailureError(BenchmarkError):
    """Raised when a connection worker dies for a reason other than transport."""

    def __init__(self, message: str, connection_id: int = -1):
        super().__init__(message)
        self.connection_id = connection_id


class OutputError(BenchmarkError):
    """Raised when a completed run's results cannot be written."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
