"""Column presence checks shared by the normalization steps."""

import pandas as pd

from paysurvey.exceptions import SchemaError
from paysurvey.utils.logging import get_logger

log = get_logger(__name__)


def validate_required_columns(
    df: pd.DataFrame,
    required: list[str] | tuple[str, ...],
    *,
    raise_on_missing: bool = True,
) -> list[str]:
    """
    Check that required columns are present.

    Args:
        df: DataFrame to check.
        required: Required column names.
        raise_on_missing: Whether to raise error if columns missing.

    Returns:
        List of missing columns.

    Raises:
        SchemaError: If raise_on_missing and columns are missing.
    """
    missing = [col for col in required if col not in df.columns]

    if missing and raise_on_missing:
        msg = f"Missing required columns: {missing}"
        raise SchemaError(msg)

    if missing:
        log.warning("Missing columns", missing=missing)

    return missing
