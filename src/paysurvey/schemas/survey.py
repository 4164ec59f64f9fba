"""
Pandera schemas for salary survey data.

The survey export uses the full question text as its header row. The
loader maps those 18 columns by position onto short internal names:

    timestamp         - Submission time
    age_range         - "How old are you?"
    industry          - "What industry do you work in?"
    job_title         - "Job title"
    job_context       - Additional context on the job title
    salary            - "What is your annual salary?"
    bonus             - Additional monetary compensation
    currency          - Currency of salary and bonus
    currency_other    - Free-text currency when "Other" was selected
    income_context    - Additional context on income
    country           - "What country do you work in?"
    state             - U.S. state
    city              - City
    exp_general       - Years of professional experience overall
    exp_industry      - Years of professional experience in the field
    education         - Highest level of education completed
    gender            - Gender
    race              - Race
"""

import numpy as np
import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series

US_COUNTRY = "United States"

# Industry categories offered by the survey form, plus the few free-text
# entries frequent enough to keep. Order follows the survey form.
INDUSTRY_ALLOW_LIST: tuple[str, ...] = (
    "Accounting, Banking & Finance",
    "Agriculture or Forestry",
    "Art & Design",
    "Business or Consulting",
    "Computing or Tech",
    "Education (Primary/Secondary)",
    "Education (Higher Education)",
    "Engineering or Manufacturing",
    "Entertainment",
    "Government and Public Administration",
    "Health care",
    "Hospitality & Events",
    "Insurance",
    "Law",
    "Law Enforcement & Security",
    "Leisure, Sport & Tourism",
    "Marketing, Advertising & PR",
    "Media & Digital",
    "Nonprofits",
    "Property or Construction",
    "Recruitment or HR",
    "Retail",
    "Sales",
    "Social Work",
    "Transport or Logistics",
    "Utilities & Telecommunications",
    "Architecture",
    "Biotech",
    "Libraries",
    "Pharmaceuticals",
    "Publishing",
)

# (field name, header keyword) in file order. A header cell matches its
# position when it contains the keyword, case-insensitively.
SURVEY_COLUMNS: tuple[tuple[str, str], ...] = (
    ("timestamp", "timestamp"),
    ("age_range", "how old"),
    ("industry", "industry"),
    ("job_title", "job title"),
    ("job_context", "additional context"),
    ("salary", "annual salary"),
    ("bonus", "additional monetary compensation"),
    ("currency", "currency"),
    ("currency_other", "other"),
    ("income_context", "income needs additional context"),
    ("country", "country"),
    ("state", "state"),
    ("city", "city"),
    ("exp_general", "overall"),
    ("exp_industry", "in your field"),
    ("education", "education"),
    ("gender", "gender"),
    ("race", "race"),
)

SURVEY_FIELDS: tuple[str, ...] = tuple(name for name, _ in SURVEY_COLUMNS)

MONETARY_FIELDS: tuple[str, ...] = ("salary", "bonus")

# Fields that can be used as a grouping key
CATEGORICAL_FIELDS: tuple[str, ...] = (
    "industry",
    "exp_general",
    "exp_industry",
    "age_range",
    "education",
    "gender",
    "state",
)


class RawSurveySchema(pa.DataFrameModel):
    """
    Schema for a freshly loaded survey export.

    Every cell is text; no value has been transformed yet.
    """

    timestamp: Series[str] = pa.Field(nullable=True)
    age_range: Series[str] = pa.Field(nullable=True)
    industry: Series[str] = pa.Field(nullable=True)
    job_title: Series[str] = pa.Field(nullable=True)
    job_context: Series[str] = pa.Field(nullable=True)
    salary: Series[str] = pa.Field(nullable=True)
    bonus: Series[str] = pa.Field(nullable=True)
    currency: Series[str] = pa.Field(nullable=True)
    currency_other: Series[str] = pa.Field(nullable=True)
    income_context: Series[str] = pa.Field(nullable=True)
    country: Series[str] = pa.Field(nullable=True)
    state: Series[str] = pa.Field(nullable=True)
    city: Series[str] = pa.Field(nullable=True)
    exp_general: Series[str] = pa.Field(nullable=True)
    exp_industry: Series[str] = pa.Field(nullable=True)
    education: Series[str] = pa.Field(nullable=True)
    gender: Series[str] = pa.Field(nullable=True)
    race: Series[str] = pa.Field(nullable=True)

    class Config:
        """Schema configuration."""

        name = "RawSurveySchema"
        strict = True
        ordered = True
        coerce = True


class NormalizedSurveySchema(pa.DataFrameModel):
    """
    Schema for survey records after normalization.

    Only the fields the normalizer guarantees are checked; the remaining
    survey columns pass through unchanged.
    """

    salary: Series[float] = pa.Field(ge=0, description="Annual salary, 0 if unknown")
    bonus: Series[float] = pa.Field(ge=0, description="Additional compensation")
    income_annual: Series[float] = pa.Field(ge=0, description="salary + bonus")
    country: Series[str] = pa.Field(isin=[US_COUNTRY])
    industry: Series[str] = pa.Field(isin=list(INDUSTRY_ALLOW_LIST))

    @pa.check("income_annual", name="finite")
    @classmethod
    def income_is_finite(cls, series: Series[float]) -> Series[bool]:
        """Reject infinite income values."""
        return pd.Series(np.isfinite(series.to_numpy()), index=series.index)

    class Config:
        """Schema configuration."""

        name = "NormalizedSurveySchema"
        strict = False  # Remaining survey columns pass through
        coerce = True


class IncomeSummarySchema(pa.DataFrameModel):
    """Schema for a grouped income summary, ordered by mean income."""

    group_key: Series[str] = pa.Field(description="Category value of the group")
    mean_income: Series[float] = pa.Field(ge=0, description="Mean income_annual")
    respondents: Series[int] = pa.Field(ge=1, description="Records in the group")

    @pa.dataframe_check(name="sorted_by_mean_income")
    @classmethod
    def sorted_descending(cls, df: pd.DataFrame) -> bool:
        """Rows must be ordered by descending mean income."""
        return bool(df["mean_income"].is_monotonic_decreasing)

    class Config:
        """Schema configuration."""

        name = "IncomeSummarySchema"
        strict = True
        coerce = True
