"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
Minimal configs only need: input.path
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from paysurvey.config.settings import (
    InputConfig,
    LoggingConfig,
    PipelineConfig,
    ReportConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def config_from_dict(data: dict[str, Any]) -> PipelineConfig:
    """
    Build a validated PipelineConfig from a plain dictionary.

    Args:
        data: Mapping with 'input', and optionally 'report' and 'logging'.

    Returns:
        Fully validated PipelineConfig instance.
    """
    input_data = data.get("input", {})
    if not input_data.get("path"):
        msg = "Config must specify 'input.path'"
        raise ValueError(msg)

    return PipelineConfig(
        input=InputConfig(**input_data),
        report=ReportConfig(**data.get("report", {})),
        logging=LoggingConfig(**data.get("logging", {})),
    )


def load_config(
    config_path: Path,
    base_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> PipelineConfig:
    """
    Load pipeline configuration from YAML file(s).

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.
        overrides: Values taking precedence over both files (e.g. CLI flags).

    Returns:
        Fully validated PipelineConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        potential_base = config_path.parent / "base.yaml"
        if potential_base.exists() and potential_base != config_path:
            base_data = load_yaml(potential_base)
        else:
            base_data = {}

    merged = _deep_merge(base_data, load_yaml(config_path))
    if overrides:
        merged = _deep_merge(merged, overrides)

    return config_from_dict(merged)


def build_config(
    input_path: Path,
    *,
    strict_header: bool = True,
    output_dir: Path | None = None,
    log_level: str = "INFO",
    json_logs: bool = False,
) -> PipelineConfig:
    """
    Build a configuration without a YAML file.

    Args:
        input_path: Path to the survey export CSV.
        strict_header: Whether to check header text per column.
        output_dir: Directory for charts and exports.
        log_level: Logging level name.
        json_logs: Whether to emit JSON logs.

    Returns:
        Fully validated PipelineConfig instance.
    """
    report: dict[str, Any] = {}
    if output_dir is not None:
        report["output_dir"] = output_dir

    return config_from_dict(
        {
            "input": {"path": input_path, "strict_header": strict_header},
            "report": report,
            "logging": {"level": log_level, "json_output": json_logs},
        }
    )
