"""Generates visualizations from benchmark results."""
import logging
from pathlib import Path
from typing import Sequence, Union

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from .models import BenchmarkResult, StatusStatistics


# Configure logging
logger = logging.getLogger(__name__)


class VisualizationGenerator:
    """Generates visualizations from benchmark results."""

    def plot_latency_distribution(
        self,
        result: BenchmarkResult,
        statistics: Sequence[StatusStatistics],
        output_path: Union[Path, str],
    ) -> bool:
        """
        Generate and save a per-status latency graph.

        The left panel is a box plot of every latency grouped by status code,
        the right panel compares p90 and p99 per status code.

        Args:
            result: Result of a completed benchmark.
            statistics: Statistics computed from the same result.
            output_path: Path to save plot.

        Returns:
            True when a graph was written.
        """
        if not result.outcomes or not statistics:
            logger.warning("No request outcomes available. Skipping plot.")
            return False

        df = pd.DataFrame({
            'status': [str(outcome.status_code) for outcome in result.outcomes],
            'latency_ms': [outcome.latency_ms for outcome in result.outcomes],
        })
        order = [str(stat.status_code) for stat in statistics]

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))
        fig.suptitle(f"Latency by status: {result.target}", fontsize=14)

        # Box plot on the left
        sns.boxplot(data=df, x='status', y='latency_ms', order=order, ax=ax1)
        ax1.set_title("Latency distribution")
        ax1.set_xlabel("Status")
        ax1.set_ylabel("Latency (ms)")
        ax1.grid(True, alpha=0.3)

        # Percentile bars on the right
        x = np.arange(len(statistics))
        width = 0.35
        p90 = [stat.p90 for stat in statistics]
        p99 = [stat.p99 for stat in statistics]
        bars1 = ax2.bar(x - width/2, p90, width, label="p90")
        bars2 = ax2.bar(x + width/2, p99, width, label="p99")
        ax2.set_title("Percentiles")
        ax2.set_xticks(x)
        ax2.set_xticklabels(order)
        ax2.set_xlabel("Status")
        ax2.set_ylabel("Latency (ms)")
        ax2.legend()

        # Add values on top of bars
        for bar, val in zip(bars1, p90):
            ax2.text(bar.get_x() + bar.get_width()/2, bar.get_height(), f'{val:.1f}', ha='center', va='bottom', fontsize=8)
        for bar, val in zip(bars2, p99):
            ax2.text(bar.get_x() + bar.get_width()/2, bar.get_height(), f'{val:.1f}', ha='center', va='bottom', fontsize=8)

        plt.tight_layout()
        try:
            plt.savefig(output_path)
        finally:
            plt.close(fig)
        logger.info(f"Graph saved: {output_path}")
        return True
