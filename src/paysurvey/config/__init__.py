"""
Configuration management with typed Pydantic models.

Provides YAML loading with environment interpolation and
direct construction from command-line values.
"""

from paysurvey.config.loader import build_config, config_from_dict, load_config
from paysurvey.config.settings import (
    ExperienceField,
    ImageFormat,
    InputConfig,
    LoggingConfig,
    OutputMode,
    PipelineConfig,
    ReportConfig,
)

__all__ = [
    "ExperienceField",
    "ImageFormat",
    "InputConfig",
    "LoggingConfig",
    "OutputMode",
    "PipelineConfig",
    "ReportConfig",
    "build_config",
    "config_from_dict",
    "load_config",
]
