"""Tests for grouped income aggregation."""

import json
from pathlib import Path

import pandas as pd
import pytest

from paysurvey.aggregation import AggregateRow, IncomeSummary, aggregate_income
from paysurvey.normalization import normalize


@pytest.fixture
def normalized(raw_survey: pd.DataFrame) -> pd.DataFrame:
    """Normalized sample survey."""
    return normalize(raw_survey)


class TestAggregateIncome:
    """Tests for aggregate_income."""

    def test_two_law_records(self) -> None:
        """Test the mean of two records in one industry."""
        df = pd.DataFrame(
            {"industry": ["Law", "Law"], "income_annual": [100000.0, 60000.0]}
        )
        summary = aggregate_income(df, "industry")
        assert summary.rows == (
            AggregateRow(group_key="Law", mean_income=80000.0, respondents=2),
        )

    def test_by_industry(self, normalized: pd.DataFrame) -> None:
        """Test industry summary of the sample survey."""
        summary = aggregate_income(normalized, "industry")

        assert [row.group_key for row in summary.rows] == [
            "Computing or Tech",
            "Law",
            "Nonprofits",
        ]
        assert [row.mean_income for row in summary.rows] == [
            125000.0,
            80000.0,
            41000.0,
        ]
        assert [row.respondents for row in summary.rows] == [1, 2, 2]

    def test_by_experience(self, normalized: pd.DataFrame) -> None:
        """Test experience summary of the sample survey."""
        summary = aggregate_income(normalized, "exp_general")

        assert [(row.group_key, row.mean_income) for row in summary.rows] == [
            ("5-7 years", 112500.0),
            ("11 - 20 years", 80000.0),
            ("2 - 4 years", 31000.0),
        ]

    def test_sorted_descending(self, normalized: pd.DataFrame) -> None:
        """Test that rows are ordered by descending mean income."""
        summary = aggregate_income(normalized, "industry")
        means = summary.table["mean_income"].tolist()
        assert means == sorted(means, reverse=True)

    def test_ties_keep_input_order(self) -> None:
        """Test that equal means keep first-appearance order."""
        df = pd.DataFrame(
            {
                "industry": ["Sales", "Law", "Retail", "Law"],
                "income_annual": [50000.0, 50000.0, 90000.0, 50000.0],
            }
        )
        summary = aggregate_income(df, "industry")
        assert [row.group_key for row in summary.rows] == ["Retail", "Sales", "Law"]

    def test_groups_only_from_present_data(self, normalized: pd.DataFrame) -> None:
        """Test that categories without records do not appear."""
        summary = aggregate_income(normalized, "industry")
        assert "Insurance" not in summary.table["group_key"].tolist()

    def test_null_keys_not_grouped(self) -> None:
        """Test that records with a missing key are skipped."""
        df = pd.DataFrame(
            {"exp_general": ["5-7 years", None], "income_annual": [10.0, 20.0]}
        )
        summary = aggregate_income(df, "exp_general")
        assert summary.rows == (
            AggregateRow(group_key="5-7 years", mean_income=10.0, respondents=1),
        )

    def test_blank_keys_not_grouped(self) -> None:
        """Test that empty or whitespace-only keys are skipped."""
        df = pd.DataFrame(
            {
                "exp_general": ["5-7 years", "", "   "],
                "income_annual": [100000.0, 40000.0, 30000.0],
            }
        )
        summary = aggregate_income(df, "exp_general")
        assert summary.rows == (
            AggregateRow(group_key="5-7 years", mean_income=100000.0, respondents=1),
        )

    def test_only_blank_keys(self) -> None:
        """Test that a frame with only blank keys gives an empty summary."""
        df = pd.DataFrame({"industry": [""], "income_annual": [50000.0]})
        assert aggregate_income(df, "industry").is_empty

    def test_empty_input(self) -> None:
        """Test that an empty frame gives an empty summary."""
        df = pd.DataFrame(
            {
                "industry": pd.Series(dtype=object),
                "income_annual": pd.Series(dtype=float),
            }
        )
        summary = aggregate_income(df, "industry")
        assert summary.is_empty
        assert summary.rows == ()
        assert len(summary) == 0

    def test_invalid_group_by(self, normalized: pd.DataFrame) -> None:
        """Test that non-categorical fields are rejected."""
        with pytest.raises(ValueError, match="Cannot group by"):
            aggregate_income(normalized, "salary")

    def test_missing_column(self) -> None:
        """Test that a missing grouping column is rejected."""
        df = pd.DataFrame({"income_annual": [1.0]})
        with pytest.raises(ValueError, match="Missing columns"):
            aggregate_income(df, "industry")

    def test_input_not_mutated(self, normalized: pd.DataFrame) -> None:
        """Test that aggregation leaves its input untouched."""
        before = normalized.copy()
        aggregate_income(normalized, "industry")
        pd.testing.assert_frame_equal(normalized, before)


class TestIncomeSummary:
    """Tests for IncomeSummary exports."""

    @pytest.fixture
    def summary(self) -> IncomeSummary:
        df = pd.DataFrame(
            {
                "industry": ["Law", "Sales", "Law"],
                "income_annual": [90000.0, 40000.0, 70000.0],
            }
        )
        return aggregate_income(df, "industry")

    def test_to_records(self, summary: IncomeSummary) -> None:
        """Test records are keyed by the grouping field."""
        assert summary.to_records() == [
            {"industry": "Law", "mean_income": 80000.0, "respondents": 2},
            {"industry": "Sales", "mean_income": 40000.0, "respondents": 1},
        ]

    def test_to_json(self, summary: IncomeSummary) -> None:
        """Test JSON export contains the grouping field and rows."""
        payload = json.loads(summary.to_json())
        assert payload["group_by"] == "industry"
        assert payload["rows"][0]["industry"] == "Law"

    def test_to_csv(self, summary: IncomeSummary, tmp_path: Path) -> None:
        """Test CSV export uses the grouping field as first column."""
        path = tmp_path / "summary.csv"
        summary.to_csv(path)

        df = pd.read_csv(path)
        assert list(df.columns) == ["industry", "mean_income", "respondents"]
        assert df["industry"].tolist() == ["Law", "Sales"]
