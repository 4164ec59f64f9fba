"""
Console output for summaries and normalization counts.

Formats results using Rich for clear, colored output.
"""

from rich.console import Console
from rich.table import Table

from paysurvey.aggregation.income import IncomeSummary
from paysurvey.normalization.survey import NormalizationStats


class ConsoleReporter:
    """Formats and displays pipeline results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_summary(self, summary: IncomeSummary, title: str) -> None:
        """
        Print an income summary as a table, in summary order.

        Args:
            summary: Income summary to display.
            title: Table title.
        """
        table = Table(title=title, show_header=True)
        table.add_column(summary.group_by, style="cyan")
        table.add_column("Mean income", justify="right", style="green")
        table.add_column("Respondents", justify="right")

        for row in summary.rows:
            table.add_row(
                row.group_key,
                f"{row.mean_income:,.0f}",
                str(row.respondents),
            )

        self.console.print(table)

        if summary.is_empty:
            self.console.print("[yellow]No records to summarize[/yellow]")

    def print_stats(self, stats: NormalizationStats) -> None:
        """
        Print soft-filter counts from normalization.

        Args:
            stats: Normalization counts.
        """
        table = Table(title="Normalization", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right", style="green")

        table.add_row("Input records", str(stats.input_rows))
        table.add_row("Unparsed salary values", str(stats.unparsed_salary))
        table.add_row("Unparsed bonus values", str(stats.unparsed_bonus))
        table.add_row("Dropped (country)", str(stats.dropped_country))
        table.add_row("Dropped (industry)", str(stats.dropped_industry))
        table.add_row("Retained records", str(stats.output_rows))
        table.add_row("Retained share", f"{stats.retained_share:.1%}")

        self.console.print(table)
