"""
Report pipeline implementation.

Orchestrates loading, normalization, aggregation and output for one
survey export. Each run is independent; nothing is cached between runs.
"""

from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from paysurvey.aggregation.income import IncomeSummary, aggregate_income
from paysurvey.config.settings import OutputMode, PipelineConfig
from paysurvey.ingestion.survey import SurveyLoader
from paysurvey.normalization.survey import NormalizationStats, SurveyNormalizer
from paysurvey.reporting.charts import (
    ChartLabels,
    ChartRenderer,
    MatplotlibBarChartRenderer,
    save_chart,
)
from paysurvey.reporting.export import export_summary
from paysurvey.utils.logging import get_logger, log_context

log = get_logger(__name__)

INDUSTRY_SUMMARY = "income_by_industry"
EXPERIENCE_SUMMARY = "income_by_experience"

_EXPERIENCE_LABELS = {
    "exp_general": "Years of experience (overall)",
    "exp_industry": "Years of experience (in field)",
}


@dataclass
class ReportResult:
    """
    Result of a report pipeline run.

    Attributes:
        records: Normalized survey records.
        stats: Soft-filter counts from normalization.
        by_industry: Mean income per industry.
        by_experience: Mean income per experience bracket.
        mode: Output mode the run was executed with.
        outputs: Files written by the run, keyed by summary name.
    """

    records: pd.DataFrame
    stats: NormalizationStats
    by_industry: IncomeSummary
    by_experience: IncomeSummary
    mode: OutputMode = OutputMode.CHART
    outputs: dict[str, Path] = field(default_factory=dict)

    @property
    def summaries(self) -> dict[str, IncomeSummary]:
        """Both summaries keyed by output name."""
        return {
            INDUSTRY_SUMMARY: self.by_industry,
            EXPERIENCE_SUMMARY: self.by_experience,
        }


class ReportPipeline:
    """
    Report pipeline for salary survey exports.

    Loads the export, normalizes records, builds the industry and
    experience summaries, and writes them in the requested output mode.
    """

    def __init__(
        self,
        config: PipelineConfig,
        *,
        renderer: ChartRenderer | None = None,
    ) -> None:
        """
        Initialize report pipeline.

        Args:
            config: Pipeline configuration.
            renderer: Chart renderer; defaults to matplotlib bars in the
                configured color.
        """
        self.config = config
        self.renderer = renderer or MatplotlibBarChartRenderer(
            color=config.report.bar_color
        )

    def load(self) -> pd.DataFrame:
        """Load the configured survey export."""
        loader = SurveyLoader(
            self.config.input_path, strict_header=self.config.input.strict_header
        )
        return loader.load()

    def summarize(self, records: pd.DataFrame) -> tuple[IncomeSummary, IncomeSummary]:
        """Build the industry and experience summaries."""
        by_industry = aggregate_income(records, "industry")
        by_experience = aggregate_income(records, self.config.experience_field)
        return by_industry, by_experience

    def run(self, mode: OutputMode = OutputMode.CHART) -> ReportResult:
        """
        Run the full pipeline.

        Nothing is written if loading or normalization fails.

        Args:
            mode: What to produce; TABLE writes no files.

        Returns:
            ReportResult with records, counts, summaries and written files.

        Raises:
            FileNotFoundError: If the input file does not exist.
            OSError: If the input file cannot be read.
            SchemaError: If the input does not match the survey layout.
        """
        with log_context(input_path=str(self.config.input_path)):
            log.info("Starting report pipeline", mode=mode.value)

            raw = self.load()
            normalized = SurveyNormalizer().run(raw)
            by_industry, by_experience = self.summarize(normalized.data)

            result = ReportResult(
                records=normalized.data,
                stats=normalized.stats,
                by_industry=by_industry,
                by_experience=by_experience,
                mode=mode,
            )
            result.outputs = self._write_outputs(result, mode)

            log.info("Report pipeline complete", outputs=len(result.outputs))
            return result

    def _labels(self, name: str) -> ChartLabels:
        """Chart labels for a summary."""
        if name == INDUSTRY_SUMMARY:
            return ChartLabels(
                title="Mean annual income by industry (U.S.)",
                category_label="Industry",
            )
        return ChartLabels(
            title="Mean annual income by experience (U.S.)",
            category_label=_EXPERIENCE_LABELS[self.config.experience_field],
        )

    def _write_outputs(self, result: ReportResult, mode: OutputMode) -> dict[str, Path]:
        """
        Write charts or exports for both summaries.

        Either every output is written or none is: files written before a
        failure are removed and the error is re-raised.
        """
        outputs: dict[str, Path] = {}
        if mode == OutputMode.TABLE:
            return outputs

        try:
            for name, summary in result.summaries.items():
                if mode == OutputMode.CHART:
                    fig = self.renderer.render(summary, self._labels(name))
                    outputs[name] = save_chart(
                        fig, self.config.chart_path(name), dpi=self.config.report.dpi
                    )
                else:
                    outputs[name] = export_summary(
                        summary, self.config.export_path(name, mode)
                    )
        except Exception:
            for path in outputs.values():
                path.unlink(missing_ok=True)
            log.error("Writing report outputs failed", removed=len(outputs))
            raise
        return outputs


def run_report(
    config: PipelineConfig,
    mode: OutputMode = OutputMode.CHART,
) -> ReportResult:
    """
    Convenience function to run the report pipeline.

    Args:
        config: Pipeline configuration.
        mode: What to produce.

    Returns:
        ReportResult with summaries and written files.
    """
    pipeline = ReportPipeline(config)
    return pipeline.run(mode=mode)
