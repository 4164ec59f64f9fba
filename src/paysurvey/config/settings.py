"""
Typed configuration models using Pydantic.

All configuration is defined here with explicit typing and validation.
Category lists used for filtering are fixed in the normalization layer
and are intentionally not configurable.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExperienceField(str, Enum):
    """Survey field used for the experience bracket summary."""

    GENERAL = "exp_general"  # Years of professional experience overall
    INDUSTRY = "exp_industry"  # Years of experience in the respondent's field


class ImageFormat(str, Enum):
    """Supported chart image formats."""

    PNG = "png"
    SVG = "svg"
    PDF = "pdf"


class OutputMode(str, Enum):
    """What a report run produces."""

    CHART = "chart"  # Bar chart images
    TABLE = "table"  # Console tables only
    CSV = "csv"  # Aggregate tables as CSV
    JSON = "json"  # Aggregate tables as JSON


class InputConfig(BaseModel):
    """Survey export input configuration."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Path to the survey export CSV")
    strict_header: bool = Field(
        default=True,
        description="Check header text per column, not just the column count",
    )


class ReportConfig(BaseModel):
    """Report output configuration."""

    model_config = ConfigDict(frozen=True)

    output_dir: Path = Field(
        default=Path("./output"), description="Directory for charts and exports"
    )
    experience_field: ExperienceField = Field(
        default=ExperienceField.GENERAL,
        description="Experience bracket used for the second summary",
    )
    dpi: int = Field(default=150, ge=72, le=600)
    image_format: ImageFormat = Field(default=ImageFormat.PNG)
    bar_color: str = Field(default="steelblue", description="Matplotlib color")

    @field_validator("bar_color")
    @classmethod
    def validate_bar_color(cls, v: str) -> str:
        """Ensure the bar color is a non-empty string."""
        if not v.strip():
            msg = "bar_color must not be empty"
            raise ValueError(msg)
        return v.strip()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is a known logging level name."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            msg = f"Log level must be one of {sorted(valid)}, got: {v!r}"
            raise ValueError(msg)
        return v.upper()


class PipelineConfig(BaseModel):
    """
    Complete pipeline configuration.

    Output files are named after the grouping they summarize:
    ./output/income_by_industry.png, ./output/income_by_experience.csv, etc.
    """

    model_config = ConfigDict(frozen=True)

    input: InputConfig
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def input_path(self) -> Path:
        """Convenience accessor for the survey export path."""
        return self.input.path

    @property
    def experience_field(self) -> str:
        """Column name of the configured experience bracket."""
        return self.report.experience_field.value

    def chart_path(self, name: str) -> Path:
        """Path for a chart image named after its summary."""
        return self.report.output_dir / f"{name}.{self.report.image_format.value}"

    def export_path(self, name: str, mode: OutputMode) -> Path:
        """Path for a structured aggregate export."""
        if mode not in (OutputMode.CSV, OutputMode.JSON):
            msg = f"No export file for output mode {mode.value!r}"
            raise ValueError(msg)
        return self.report.output_dir / f"{name}.{mode.value}"
