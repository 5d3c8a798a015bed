"""Benchmark package initialization."""
from .models import (
    BenchmarkResult,
    BenchmarkSettings,
    BenchmarkSummary,
    ConnectionSettings,
    ConnectionSummary,
    RemainderPolicy,
    RequestOutcome,
    StatusStatistics,
)
from .constants import BenchmarkConstants
from .exceptions import BenchmarkError, InvalidSettingsError, OutputError, TaskFailureError, TransportError
from .requester import HttpxRequester, Requester, SimulatedRequester
from .progress import NullProgress, ProgressCallback, ProgressChannel, RichProgress
from .connection_worker import ConnectionWorker
from .coordinator import BenchmarkCoordinator, run_benchmark
from .latency_analyzer import LatencyAnalyzer
from .result_exporter import ResultExporter
from .report_printer import ReportPrinter
from .visualization_generator import VisualizationGenerator
from .runner import BenchmarkReport, BenchmarkRunner

__all__ = [
    'BenchmarkResult',
    'BenchmarkSettings',
    'BenchmarkSummary',
    'ConnectionSettings',
    'ConnectionSummary',
    'RemainderPolicy',
    'RequestOutcome',
    'StatusStatistics',
    'BenchmarkConstants',
    'BenchmarkError',
    'InvalidSettingsError',
    'OutputError',
    'TaskFailureError',
    'TransportError',
    'HttpxRequester',
    'Requester',
    'SimulatedRequester',
    'NullProgress',
    'ProgressCallback',
    'ProgressChannel',
    'RichProgress',
    'ConnectionWorker',
    'BenchmarkCoordinator',
    'run_benchmark',
    'LatencyAnalyzer',
    'ResultExporter',
    'ReportPrinter',
    'VisualizationGenerator',
    'BenchmarkReport',
    'BenchmarkRunner',
]
