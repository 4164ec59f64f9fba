"""Command-line interface for the paysurvey pipeline."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer
from rich.console import Console

if TYPE_CHECKING:
    from paysurvey.config.settings import PipelineConfig

app = typer.Typer(
    name="paysurvey",
    help="Salary survey normalization and income summaries.",
    no_args_is_help=True,
)

console = Console()


def _resolve_config(
    config: Path | None,
    input_path: Path | None,
    *,
    lenient_header: bool,
    output_dir: Path | None = None,
    log_level: str | None = None,
    json_logs: bool = False,
) -> "PipelineConfig":
    """Build the pipeline config from an optional YAML file and CLI flags."""
    from paysurvey.config.loader import build_config, load_config

    if config is None:
        if input_path is None:
            console.print("[red]Error: Provide --input or --config.[/red]")
            raise typer.Exit(code=1)
        return build_config(
            input_path,
            strict_header=not lenient_header,
            output_dir=output_dir,
            log_level=log_level or "INFO",
            json_logs=json_logs,
        )

    overrides: dict[str, Any] = {}
    if input_path is not None:
        overrides.setdefault("input", {})["path"] = str(input_path)
    if lenient_header:
        overrides.setdefault("input", {})["strict_header"] = False
    if output_dir is not None:
        overrides.setdefault("report", {})["output_dir"] = str(output_dir)
    if log_level is not None:
        overrides.setdefault("logging", {})["level"] = log_level
    if json_logs:
        overrides.setdefault("logging", {})["json_output"] = True

    return load_config(config, overrides=overrides)


ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]
InputOption = Annotated[
    Path | None,
    typer.Option(
        "--input",
        "-i",
        help="Path to the survey export CSV (overrides input.path).",
    ),
]
LenientHeaderOption = Annotated[
    bool,
    typer.Option(
        "--lenient-header",
        help="Only check the column count, not the header text.",
    ),
]


@app.command()
def report(
    config: ConfigOption = None,
    input_path: InputOption = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for charts and exports.",
        ),
    ] = None,
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            "-m",
            help="Output mode: 'chart', 'table', 'csv' or 'json'.",
        ),
    ] = "chart",
    lenient_header: LenientHeaderOption = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)."),
    ] = None,
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit logs as JSON."),
    ] = False,
) -> None:
    """Build income summaries by industry and by experience."""
    from paysurvey.config.settings import OutputMode
    from paysurvey.exceptions import PaysurveyError
    from paysurvey.pipeline import ReportPipeline
    from paysurvey.reporting.console import ConsoleReporter
    from paysurvey.utils.logging import configure_logging

    try:
        output_mode = OutputMode(mode)
    except ValueError:
        valid = ", ".join(m.value for m in OutputMode)
        console.print(f"[red]Error: Invalid mode '{mode}'. Use one of: {valid}.[/red]")
        raise typer.Exit(code=1) from None

    try:
        pipeline_config = _resolve_config(
            config,
            input_path,
            lenient_header=lenient_header,
            output_dir=output_dir,
            log_level=log_level,
            json_logs=json_logs,
        )
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(code=1) from e

    configure_logging(
        pipeline_config.logging.level, json_output=pipeline_config.logging.json_output
    )

    console.print(f"[blue]Reading survey export {pipeline_config.input_path}[/blue]")
    console.print(f"[dim]Mode: {output_mode.value}[/dim]")

    try:
        result = ReportPipeline(pipeline_config).run(mode=output_mode)
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except PaysurveyError as e:
        console.print(f"[red]Schema error: {e}[/red]")
        raise typer.Exit(code=1) from e

    reporter = ConsoleReporter(console)
    reporter.print_stats(result.stats)
    if output_mode == OutputMode.TABLE:
        reporter.print_summary(result.by_industry, "Mean income by industry")
        reporter.print_summary(result.by_experience, "Mean income by experience")

    for name, path in result.outputs.items():
        console.print(f"[green]Saved {name} to: {path}[/green]")


@app.command()
def check(
    config: ConfigOption = None,
    input_path: InputOption = None,
    lenient_header: LenientHeaderOption = False,
) -> None:
    """Load and normalize a survey export, reporting what was filtered."""
    from paysurvey.exceptions import PaysurveyError
    from paysurvey.ingestion.survey import SurveyLoader
    from paysurvey.normalization.survey import SurveyNormalizer
    from paysurvey.reporting.console import ConsoleReporter
    from paysurvey.utils.logging import configure_logging

    try:
        pipeline_config = _resolve_config(
            config, input_path, lenient_header=lenient_header
        )
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(code=1) from e

    configure_logging(
        pipeline_config.logging.level, json_output=pipeline_config.logging.json_output
    )

    try:
        raw = SurveyLoader(
            pipeline_config.input_path,
            strict_header=pipeline_config.input.strict_header,
        ).load()
        normalized = SurveyNormalizer().run(raw)
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except PaysurveyError as e:
        console.print(f"[red]Schema error: {e}[/red]")
        raise typer.Exit(code=1) from e

    ConsoleReporter(console).print_stats(normalized.stats)
    console.print("[green]Survey export is usable[/green]")


if __name__ == "__main__":
    app()
