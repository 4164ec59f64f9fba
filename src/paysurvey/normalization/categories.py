"""
Categorical field canonicalization and allow-list filtering.

Country answers are free text; only the U.S. spellings below are
recognized. Industry answers are kept only when they exactly match one
of the survey's industry categories. Both lists are fixed: extending
them changes analysis results.
"""

import pandas as pd

from paysurvey.schemas.survey import INDUSTRY_ALLOW_LIST, US_COUNTRY
from paysurvey.utils.logging import get_logger

log = get_logger(__name__)

# Lowercased spellings treated as the United States
US_COUNTRY_SYNONYMS: frozenset[str] = frozenset(
    {
        "america",
        "usa",
        "us",
        "u.s.",
        "u.s",
        "u.s.a",
        "u.s.a.",
        "united states",
    }
)

_TRAILING_PUNCTUATION = ".,;:!?"


def is_us_country(value: object) -> bool:
    """
    Check whether a country answer names the United States.

    Matching is case-insensitive, ignores surrounding whitespace, and
    accepts trailing punctuation ("USA.", "us!").
    """
    if not isinstance(value, str):
        return False
    key = value.strip().lower()
    if key in US_COUNTRY_SYNONYMS:
        return True
    return key.rstrip(_TRAILING_PUNCTUATION) in US_COUNTRY_SYNONYMS


def canonicalize_country(df: pd.DataFrame) -> pd.DataFrame:
    """
    Replace U.S. spellings with the canonical country name.

    Other values pass through unchanged.

    Returns:
        New DataFrame with the canonicalized country column.
    """
    is_us = df["country"].map(is_us_country).astype(bool)
    log.debug("Canonicalized country", matched=int(is_us.sum()))
    return df.assign(country=df["country"].where(~is_us, US_COUNTRY))


def filter_country(df: pd.DataFrame, country: str = US_COUNTRY) -> pd.DataFrame:
    """
    Keep only records from a single country.

    Args:
        df: Survey records with a canonicalized country column.
        country: Exact country value to keep.

    Returns:
        New DataFrame with the matching records.
    """
    kept = df.loc[df["country"] == country].copy()
    log.debug("Filtered country", kept=len(kept), dropped=len(df) - len(kept))
    return kept


def filter_industry(
    df: pd.DataFrame,
    allow_list: tuple[str, ...] = INDUSTRY_ALLOW_LIST,
) -> pd.DataFrame:
    """
    Keep only records whose industry exactly matches the allow-list.

    Free-text answers such as "Other: Freelance Writer" never match.

    Returns:
        New DataFrame with the matching records.
    """
    kept = df.loc[df["industry"].isin(allow_list)].copy()
    log.debug("Filtered industry", kept=len(kept), dropped=len(df) - len(kept))
    return kept
