"""Benchmark runner to orchestrate one run and its outputs."""
import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from rich.console import Console

from loadcli.shared.config import Config

from .coordinator import RequesterFactory, run_benchmark
from .exceptions import OutputError
from .latency_analyzer import LatencyAnalyzer
from .models import BenchmarkResult, BenchmarkSettings, BenchmarkSummary, StatusStatistics
from .progress import NullProgress, ProgressCallback, RichProgress
from .report_printer import ReportPrinter
from .requester import HttpxRequester, Requester, SimulatedRequester
from .result_exporter import ResultExporter
from .visualization_generator import VisualizationGenerator


# Configure logging
logger = logging.getLogger(__name__)


@dataclass
class BenchmarkReport:
    """Everything a completed run produced."""
    result: BenchmarkResult
    summary: BenchmarkSummary
    statistics: List[StatusStatistics]


class BenchmarkRunner:
    """Orchestrates the execution of a benchmark and manages output."""

    def __init__(
        self,
        settings: BenchmarkSettings,
        config: Optional[Config] = None,
        output_file: Optional[Path] = None,
        detailed_output: Optional[Path] = None,
        plot_file: Optional[Path] = None,
        simulate: bool = False,
        show_progress: bool = True,
        console: Optional[Console] = None,
        requester_factory: Optional[RequesterFactory] = None,
    ):
        self.settings = settings
        self.config = config or Config()
        self.output_file = output_file
        self.detailed_output = detailed_output
        self.plot_file = plot_file
        self.simulate = simulate
        self.show_progress = show_progress
        self.console = console or Console()
        self.requester_factory = requester_factory or self._build_requester
        self.latency_analyzer = LatencyAnalyzer()
        self.result_exporter = ResultExporter()
        self.visualization_generator = VisualizationGenerator()
        self.report_printer = ReportPrinter(self.console)

    def _build_requester(self) -> Requester:
        if self.simulate:
            return SimulatedRequester(
                mean_delay_ms=self.config.simulate_mean_delay_ms,
                std_delay_ms=self.config.simulate_std_delay_ms,
                seed=None,
            )
        return HttpxRequester(timeout=self.settings.request_timeout)

    def _build_progress(self) -> ProgressCallback:
        if not self.show_progress:
            return NullProgress()
        return RichProgress(total=self.settings.planned_requests, console=self.console)

    def run(self) -> BenchmarkReport:
        """Run the benchmark, print the report and write the requested files."""
        progress = self._build_progress()
        try:
            result = asyncio.run(run_benchmark(
                self.settings,
                progress=progress,
                requester_factory=self.requester_factory,
            ))
        except Exception as e:
            logger.error(f"Benchmark failed: {e}")
            raise
        finally:
            progress.close()

        statistics = self.latency_analyzer.compute_statistics(result.outcomes)
        summary = BenchmarkSummary.from_result(result, self.settings.connection_count)
        self.report_printer.print_report(summary, statistics)
        self._write_outputs(result, statistics)

        logger.info("Benchmark completed successfully!")
        return BenchmarkReport(result=result, summary=summary, statistics=statistics)

    def _write_outputs(self, result: BenchmarkResult, statistics: List[StatusStatistics]) -> None:
        if self.output_file is not None:
            with self._writing(self.output_file):
                self.result_exporter.save_statistics_to_csv(statistics, self.output_file)
        if self.detailed_output is not None:
            with self._writing(self.detailed_output):
                self.result_exporter.save_detailed_results_to_csv(result, self.detailed_output)
        if self.plot_file is not None:
            with self._writing(self.plot_file):
                self.visualization_generator.plot_latency_distribution(result, statistics, self.plot_file)

    @staticmethod
    @contextmanager
    def _writing(path: Path) -> Iterator[None]:
        try:
            yield
        except OSError as e:
            logger.error(f"Could not write {path}: {e}")
            raise OutputError(f"Could not write {path}: {e}", str(path)) from e
