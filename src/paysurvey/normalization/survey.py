"""
Survey record normalization.

Runs the field-level transforms in a fixed order. Each step returns a
new DataFrame, so any intermediate stage can be replayed in isolation.
"""

from dataclasses import dataclass

import pandas as pd
from pandera.errors import SchemaError as PanderaSchemaError
from pandera.errors import SchemaErrors as PanderaSchemaErrors

from paysurvey.exceptions import SchemaError
from paysurvey.normalization.categories import (
    canonicalize_country,
    filter_country,
    filter_industry,
)
from paysurvey.normalization.columns import validate_required_columns
from paysurvey.normalization.monetary import (
    coerce_monetary_columns,
    count_unparsed,
    derive_income,
)
from paysurvey.schemas.survey import NormalizedSurveySchema
from paysurvey.utils.logging import get_logger

log = get_logger(__name__)

REQUIRED_COLUMNS = ("salary", "bonus", "country", "industry")


@dataclass(frozen=True)
class NormalizationStats:
    """
    Record counts for the soft filtering steps.

    Attributes:
        input_rows: Records before normalization.
        unparsed_salary: Non-empty salary answers that were set to zero.
        unparsed_bonus: Non-empty bonus answers that were set to zero.
        dropped_country: Records dropped as non-U.S.
        dropped_industry: Records dropped for an unlisted industry.
        output_rows: Records after normalization.
    """

    input_rows: int
    unparsed_salary: int
    unparsed_bonus: int
    dropped_country: int
    dropped_industry: int
    output_rows: int

    @property
    def retained_share(self) -> float:
        """Fraction of input records that survived filtering."""
        if self.input_rows == 0:
            return 0.0
        return self.output_rows / self.input_rows


@dataclass
class NormalizationResult:
    """Normalized records together with their filtering stats."""

    data: pd.DataFrame
    stats: NormalizationStats


class SurveyNormalizer:
    """
    Normalizer for loaded survey records.

    Steps, in order:
    1. Coerce salary and bonus to numbers (zero when unusable)
    2. Derive income_annual = salary + bonus
    3. Canonicalize U.S. country spellings
    4. Drop non-U.S. records
    5. Drop records outside the industry allow-list
    """

    def __init__(self, *, validate: bool = True) -> None:
        """
        Initialize normalizer.

        Args:
            validate: Whether to validate the output against the schema.
        """
        self.validate = validate

    def run(self, df: pd.DataFrame) -> NormalizationResult:
        """
        Normalize survey records.

        Args:
            df: Loaded survey records. Not modified.

        Returns:
            NormalizationResult with the surviving records and counts.

        Raises:
            SchemaError: If required columns are missing.
        """
        validate_required_columns(df, REQUIRED_COLUMNS)

        unparsed_salary = count_unparsed(df["salary"])
        unparsed_bonus = count_unparsed(df["bonus"])

        coerced = derive_income(coerce_monetary_columns(df))
        canonical = canonicalize_country(coerced)
        domestic = filter_country(canonical)
        listed = filter_industry(domestic)

        result = listed.reset_index(drop=True)
        if self.validate:
            result = self._validate(result)

        stats = NormalizationStats(
            input_rows=len(df),
            unparsed_salary=unparsed_salary,
            unparsed_bonus=unparsed_bonus,
            dropped_country=len(canonical) - len(domestic),
            dropped_industry=len(domestic) - len(listed),
            output_rows=len(result),
        )
        log.info(
            "Normalized survey records",
            input_rows=stats.input_rows,
            output_rows=stats.output_rows,
            dropped_country=stats.dropped_country,
            dropped_industry=stats.dropped_industry,
            unparsed_salary=stats.unparsed_salary,
            unparsed_bonus=stats.unparsed_bonus,
        )
        return NormalizationResult(data=result, stats=stats)

    def _validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """Validate normalized records against NormalizedSurveySchema."""
        try:
            return NormalizedSurveySchema.validate(df)
        except (PanderaSchemaError, PanderaSchemaErrors) as e:
            msg = f"Normalized records violate NormalizedSurveySchema: {e}"
            raise SchemaError(msg) from e


def normalize(df: pd.DataFrame) -> pd.DataFrame:
    """
    Convenience function to normalize survey records.

    Args:
        df: Loaded survey records. Not modified.

    Returns:
        New DataFrame of U.S. records in listed industries, with numeric
        salary, bonus and income_annual columns.
    """
    return SurveyNormalizer().run(df).data
