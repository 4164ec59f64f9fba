"""
Schema definitions using Pandera for data validation.

All data contracts are defined here to ensure explicit,
validated data structures throughout the pipeline.
"""

from paysurvey.schemas.survey import (
    CATEGORICAL_FIELDS,
    INDUSTRY_ALLOW_LIST,
    MONETARY_FIELDS,
    SURVEY_COLUMNS,
    SURVEY_FIELDS,
    US_COUNTRY,
    IncomeSummarySchema,
    NormalizedSurveySchema,
    RawSurveySchema,
)

__all__ = [
    "CATEGORICAL_FIELDS",
    "INDUSTRY_ALLOW_LIST",
    "MONETARY_FIELDS",
    "SURVEY_COLUMNS",
    "SURVEY_FIELDS",
    "US_COUNTRY",
    "IncomeSummarySchema",
    "NormalizedSurveySchema",
    "RawSurveySchema",
]
