"""Charts, console tables and structured exports for income summaries."""

from paysurvey.reporting.charts import (
    ChartLabels,
    ChartRenderer,
    MatplotlibBarChartRenderer,
    render_bar_chart,
    save_chart,
)
from paysurvey.reporting.console import ConsoleReporter
from paysurvey.reporting.export import export_summary

__all__ = [
    "ChartLabels",
    "ChartRenderer",
    "ConsoleReporter",
    "MatplotlibBarChartRenderer",
    "export_summary",
    "render_bar_chart",
    "save_chart",
]
