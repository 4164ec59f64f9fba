"""
Bar chart rendering for income summaries.

Rendering sits behind the ChartRenderer protocol so aggregation can be
tested without drawing anything.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from paysurvey.aggregation.income import IncomeSummary
from paysurvey.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ChartLabels:
    """Text shown on a summary chart."""

    title: str
    category_label: str
    value_label: str = "Mean annual income"


class ChartRenderer(Protocol):
    """Anything that turns a summary and its labels into a figure."""

    def render(self, summary: IncomeSummary, labels: ChartLabels) -> Figure: ...


def _format_income(value: float, _position: int) -> str:
    """Axis tick formatter: 85000 -> '85k'."""
    if abs(value) >= 1000:
        return f"{value / 1000:,.0f}k"
    return f"{value:,.0f}"


class MatplotlibBarChartRenderer:
    """Horizontal bar chart, one bar per group, in summary order."""

    def __init__(self, color: str = "steelblue") -> None:
        self.color = color

    def render(self, summary: IncomeSummary, labels: ChartLabels) -> Figure:
        """
        Render a summary as a horizontal bar chart.

        The first summary row is drawn at the top. An empty summary gives
        an empty chart with a note instead of bars.

        Args:
            summary: Income summary in report order.
            labels: Chart title and axis labels.

        Returns:
            Matplotlib figure. The caller is responsible for closing it.
        """
        rows = summary.rows
        n_rows = len(rows)

        fig, ax = plt.subplots(figsize=(10, max(4, n_rows * 0.4)))
        ax.set_title(labels.title, fontsize=12)
        ax.set_xlabel(labels.value_label, fontsize=11)
        ax.set_ylabel(labels.category_label, fontsize=11)

        if n_rows == 0:
            ax.text(
                0.5,
                0.5,
                "No data",
                ha="center",
                va="center",
                transform=ax.transAxes,
                fontsize=11,
                color="gray",
            )
            ax.set_yticks([])
            fig.tight_layout()
            return fig

        positions = range(n_rows)
        values = [row.mean_income for row in rows]
        ax.barh(positions, values, color=self.color, edgecolor="none")
        ax.set_yticks(list(positions))
        ax.set_yticklabels([row.group_key for row in rows], fontsize=9)
        ax.invert_yaxis()  # first row on top
        ax.xaxis.set_major_formatter(FuncFormatter(_format_income))
        ax.grid(axis="x", alpha=0.3)

        max_val = max(values)
        if max_val > 0:
            ax.set_xlim(0, max_val * 1.05)

        fig.tight_layout()
        return fig


def render_bar_chart(
    summary: IncomeSummary,
    labels: ChartLabels,
    renderer: ChartRenderer | None = None,
) -> Figure:
    """
    Render a summary with the given renderer (default: matplotlib bars).

    Args:
        summary: Income summary in report order.
        labels: Chart title and axis labels.
        renderer: Optional renderer replacing the default.

    Returns:
        Rendered figure.
    """
    renderer = renderer or MatplotlibBarChartRenderer()
    return renderer.render(summary, labels)


def save_chart(fig: Figure, path: Path, dpi: int = 150) -> Path:
    """
    Write a figure to disk and close it.

    The image format follows the file suffix.

    Args:
        fig: Figure to write.
        path: Output path; parent directories are created.
        dpi: Resolution for raster formats.

    Returns:
        The written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        fig.savefig(path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    log.info("Saved chart", path=str(path))
    return path
