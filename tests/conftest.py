"""Pytest configuration and shared fixtures."""

import csv
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from paysurvey.schemas.survey import SURVEY_FIELDS

# Header row as it appears in the survey export
SURVEY_HEADER = [
    "Timestamp",
    "How old are you?",
    "What industry do you work in?",
    "Job title",
    "If your job title needs additional context, please clarify here:",
    "What is your annual salary? (You'll indicate the currency in a later question.)",
    "How much additional monetary compensation do you get, if any "
    "(for example, bonuses or overtime in an average year)?",
    "Please indicate the currency",
    'If "Other," please indicate the currency here:',
    "If your income needs additional context, please provide it here:",
    "What country do you work in?",
    "If you're in the U.S., what state do you work in?",
    "What city do you work in?",
    "How many years of professional work experience do you have overall?",
    "How many years of professional work experience do you have in your field?",
    "What is your highest level of education completed?",
    "What is your gender?",
    "What is your race? (Choose all that apply.)",
]

# (salary, bonus, country, industry, exp_general)
SAMPLE_ANSWERS = [
    ("100000", "", "USA", "Law", "5-7 years"),
    ("50000", "10000", "United States", "Law", "2 - 4 years"),
    ("120,000", "5000", "us.", "Computing or Tech", "5-7 years"),
    ("90000", "", "Canada", "Computing or Tech", "5-7 years"),
    ("70000", "", "U.S.", "Other: Freelance Writer", "2 - 4 years"),
    ("not sure", "2000", "america", "Nonprofits", "2 - 4 years"),
    ("80000", "-500", "United States", "Nonprofits", "11 - 20 years"),
    ("65000", "", "United Kingdom", "Law", "5-7 years"),
]


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_records() -> Callable[[list[dict[str, Any]]], pd.DataFrame]:
    """Build raw survey records; unspecified fields are empty strings."""

    def _make(rows: list[dict[str, Any]]) -> pd.DataFrame:
        return pd.DataFrame(
            [{field: row.get(field, "") for field in SURVEY_FIELDS} for row in rows],
            columns=list(SURVEY_FIELDS),
        )

    return _make


@pytest.fixture
def sample_rows() -> list[dict[str, Any]]:
    """Eight survey answers covering every soft-filter path."""
    return [
        {
            "timestamp": f"4/27/2021 11:0{i}:00",
            "age_range": "25-34",
            "salary": salary,
            "bonus": bonus,
            "currency": "USD",
            "country": country,
            "industry": industry,
            "exp_general": exp,
            "exp_industry": exp,
            "state": "Ohio",
            "city": "Columbus",
            "education": "College degree",
            "gender": "Woman",
            "race": "White",
        }
        for i, (salary, bonus, country, industry, exp) in enumerate(SAMPLE_ANSWERS)
    ]


@pytest.fixture
def raw_survey(
    make_records: Callable[[list[dict[str, Any]]], pd.DataFrame],
    sample_rows: list[dict[str, Any]],
) -> pd.DataFrame:
    """Sample survey records as loaded from an export."""
    return make_records(sample_rows)


@pytest.fixture
def write_survey(
    tmp_path: Path,
) -> Callable[..., Path]:
    """Write survey rows to a CSV with the question-text header."""

    def _write(
        rows: list[dict[str, Any]],
        header: list[str] | None = None,
        name: str = "survey.csv",
    ) -> Path:
        path = tmp_path / name
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header or SURVEY_HEADER)
            for row in rows:
                writer.writerow([row.get(field, "") for field in SURVEY_FIELDS])
        return path

    return _write


@pytest.fixture
def survey_file(
    write_survey: Callable[..., Path],
    sample_rows: list[dict[str, Any]],
) -> Path:
    """Sample survey export on disk."""
    return write_survey(sample_rows)


@pytest.fixture
def survey_header() -> list[str]:
    """Question-text header row of the survey export."""
    return list(SURVEY_HEADER)
