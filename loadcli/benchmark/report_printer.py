"""Renders the benchmark summary and per-status statistics as tables."""
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .models import BenchmarkSummary, StatusStatistics


class ReportPrinter:
    """Prints run results to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def summary_table(self, summary: BenchmarkSummary) -> Table:
        table = Table(title="Benchmark summary", show_header=False)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Target", escape(summary.target))
        table.add_row("Connections", str(summary.connections))
        table.add_row("Requests", str(summary.total_requests))
        table.add_row("Succeeded", str(summary.success_count))
        table.add_row("Failed", str(summary.fail_count))
        table.add_row("Total time", f"{summary.total_time_s:.3f} s")
        table.add_row("Requests/s", f"{summary.requests_per_second:.1f}")
        table.add_row("Success rate", f"{summary.success_rate:.1%}")
        return table

    def statistics_table(self, statistics: Sequence[StatusStatistics]) -> Table:
        table = Table(title="Latency by status (ms)")
        table.add_column("status")
        table.add_column("requests", justify="right")
        for column in ("min", "max", "mean", "std", "p90", "p99"):
            table.add_column(column, justify="right")

        for stat in statistics:
            table.add_row(
                str(stat.status_code),
                str(stat.request_count),
                f"{stat.min:.3f}",
                f"{stat.max:.3f}",
                f"{stat.mean:.3f}",
                f"{stat.std_dev:.3f}",
                f"{stat.p90:.3f}",
                f"{stat.p99:.3f}",
            )
        return table

    def print_report(self, summary: BenchmarkSummary, statistics: Sequence[StatusStatistics]) -> None:
        self.console.print(self.summary_table(summary))
        if statistics:
            self.console.print(self.statistics_table(statistics))
        else:
            self.console.print("No requests were issued.")

    def print_error(self, message: str) -> None:
        self.console.print(f"[bold red]error:[/bold red] {escape(message)}")
