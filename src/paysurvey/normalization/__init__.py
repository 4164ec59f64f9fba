"""
Data normalization layer for survey records.

Handles monetary coercion, derived income, country canonicalization
and industry allow-list filtering.
"""

from paysurvey.normalization.categories import (
    US_COUNTRY_SYNONYMS,
    canonicalize_country,
    filter_country,
    filter_industry,
    is_us_country,
)
from paysurvey.normalization.columns import validate_required_columns
from paysurvey.normalization.monetary import (
    coerce_amounts,
    coerce_monetary_columns,
    count_unparsed,
    derive_income,
)
from paysurvey.normalization.survey import (
    NormalizationResult,
    NormalizationStats,
    SurveyNormalizer,
    normalize,
)

__all__ = [
    "US_COUNTRY_SYNONYMS",
    "NormalizationResult",
    "NormalizationStats",
    "SurveyNormalizer",
    "canonicalize_country",
    "coerce_amounts",
    "coerce_monetary_columns",
    "count_unparsed",
    "derive_income",
    "filter_country",
    "filter_industry",
    "is_us_country",
    "normalize",
    "validate_required_columns",
]
