"""Structured export of income summaries."""

from pathlib import Path

from paysurvey.aggregation.income import IncomeSummary
from paysurvey.utils.logging import get_logger

log = get_logger(__name__)


def export_summary(summary: IncomeSummary, path: Path) -> Path:
    """
    Write a summary as CSV or JSON, chosen by file suffix.

    Args:
        summary: Income summary to write.
        path: Output path ending in .csv or .json.

    Returns:
        The written path.

    Raises:
        ValueError: If the suffix is not supported.
    """
    suffix = path.suffix.lower()
    if suffix not in (".csv", ".json"):
        msg = f"Unsupported export format: {suffix}"
        raise ValueError(msg)

    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        summary.to_csv(path)
    else:
        path.write_text(summary.to_json(), encoding="utf-8")

    log.info("Exported summary", path=str(path), groups=len(summary))
    return path
