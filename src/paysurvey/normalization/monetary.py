"""
Monetary field coercion.

Salary and bonus are free-text answers. Anything that does not parse as
a non-negative finite number counts as zero.
"""

import numpy as np
import pandas as pd

from paysurvey.schemas.survey import MONETARY_FIELDS
from paysurvey.utils.logging import get_logger

log = get_logger(__name__)


def _clean_amount(value: object) -> object:
    """Strip whitespace and thousands separators from a text amount."""
    if isinstance(value, str):
        return value.strip().replace(",", "").replace(" ", "")
    return value


def _parse_amounts(values: pd.Series) -> tuple[pd.Series, pd.Series]:
    """Parse amounts, returning the floats and a mask of usable values."""
    cleaned = values.astype(object).map(_clean_amount)
    numeric = pd.to_numeric(cleaned, errors="coerce").astype(float)
    array = numeric.to_numpy()
    valid = pd.Series(np.isfinite(array) & (array >= 0), index=values.index)
    return numeric, valid


def coerce_amounts(values: pd.Series) -> pd.Series:
    """
    Parse a column of free-text amounts as floats.

    Args:
        values: Raw amounts (text or numbers, possibly missing).

    Returns:
        Float series where unparseable, missing, negative and infinite
        values are 0.0.
    """
    numeric, valid = _parse_amounts(values)
    return numeric.where(valid, 0.0)


def count_unparsed(values: pd.Series) -> int:
    """
    Count non-empty values that do not parse as a valid amount.

    Empty answers are expected and not counted.
    """
    _, valid = _parse_amounts(values)
    text = values.astype(object)
    present = text.notna() & (text.astype(str).str.strip() != "")
    return int((present & ~valid).sum())


def coerce_monetary_columns(
    df: pd.DataFrame,
    columns: tuple[str, ...] = MONETARY_FIELDS,
) -> pd.DataFrame:
    """
    Coerce monetary columns to floats, with zero for anything unusable.

    Args:
        df: Survey records.
        columns: Monetary columns to coerce.

    Returns:
        New DataFrame with the coerced columns.
    """
    missing = [col for col in columns if col not in df.columns]
    if missing:
        msg = f"Missing monetary columns: {missing}"
        raise ValueError(msg)

    return df.assign(**{col: coerce_amounts(df[col]) for col in columns})


def derive_income(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add income_annual as the sum of salary and bonus.

    Expects monetary columns already coerced.

    Returns:
        New DataFrame with the income_annual column.
    """
    return df.assign(income_annual=df["salary"] + df["bonus"])
