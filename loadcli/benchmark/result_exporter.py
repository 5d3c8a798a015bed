"""Handles exporting benchmark results to CSV."""
import logging
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from .models import STATISTICS_COLUMNS, BenchmarkResult, StatusStatistics


# Configure logging
logger = logging.getLogger(__name__)


class ResultExporter:
    """Handles exporting benchmark results to CSV."""

    @staticmethod
    def statistics_frame(statistics: Sequence[StatusStatistics]) -> pd.DataFrame:
        """Build a DataFrame with one row per status code and the CSV column order."""
        return pd.DataFrame([stat.as_row() for stat in statistics], columns=STATISTICS_COLUMNS)

    @staticmethod
    def save_statistics_to_csv(statistics: Sequence[StatusStatistics], output_path: Union[Path, str]) -> None:
        """
        Save per-status statistics to CSV.

        Args:
            statistics: Statistics to write, one row each.
            output_path: Path to save CSV.
        """
        df = ResultExporter.statistics_frame(statistics)
        df.to_csv(output_path, index=False)
        logger.info(f"CSV saved: {output_path}")

    @staticmethod
    def load_statistics_from_csv(input_path: Union[Path, str]) -> List[StatusStatistics]:
        """
        Load per-status statistics from CSV.

        Args:
            input_path: Path to load CSV from.

        Returns:
            List of StatusStatistics in file order.
        """
        df = pd.read_csv(input_path)
        missing = [column for column in STATISTICS_COLUMNS if column not in df.columns]
        if missing:
            raise ValueError(f"{input_path} is missing columns: {', '.join(missing)}")

        statistics = []
        for _, row in df.iterrows():
            statistics.append(StatusStatistics(
                status_code=int(row['status']),
                request_count=int(row['requests']),
                min=float(row['min']),
                max=float(row['max']),
                mean=float(row['mean']),
                std_dev=float(row['std']),
                p90=float(row['p90']),
                p99=float(row['p99']),
            ))

        logger.info(f"Results loaded from CSV: {input_path}")
        return statistics

    @staticmethod
    def save_detailed_results_to_csv(result: BenchmarkResult, output_path: Union[Path, str]) -> None:
        """
        Save every request outcome to CSV for further analysis.

        Args:
            result: Result of a completed benchmark.
            output_path: Path to save detailed results CSV.
        """
        if not result.outcomes:
            logger.warning("No request outcomes available for detailed CSV export")
            return

        df = pd.DataFrame({
            'status': [outcome.status_code for outcome in result.outcomes],
            'latency_ms': [outcome.latency_ms for outcome in result.outcomes],
        })
        df.to_csv(output_path, index=False)
        logger.info(f"Detailed results saved to CSV: {output_path}")
