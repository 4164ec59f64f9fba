"""
Grouped income summaries.

Groups normalized survey records by a categorical field and computes the
mean annual income per group.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from pandera.errors import SchemaError as PanderaSchemaError

from paysurvey.exceptions import SchemaError
from paysurvey.schemas.survey import CATEGORICAL_FIELDS, IncomeSummarySchema
from paysurvey.utils.logging import get_logger

log = get_logger(__name__)

SUMMARY_COLUMNS = ("group_key", "mean_income", "respondents")


@dataclass(frozen=True)
class AggregateRow:
    """One group of an income summary."""

    group_key: str
    mean_income: float
    respondents: int


@dataclass(frozen=True)
class IncomeSummary:
    """
    Mean income per group, ordered by descending mean income.

    Attributes:
        group_by: Survey field the records were grouped by.
        table: DataFrame with group_key, mean_income and respondents.
    """

    group_by: str
    table: pd.DataFrame

    @property
    def rows(self) -> tuple[AggregateRow, ...]:
        """Summary rows in report order."""
        return tuple(
            AggregateRow(
                group_key=str(row.group_key),
                mean_income=float(row.mean_income),
                respondents=int(row.respondents),
            )
            for row in self.table.itertuples(index=False)
        )

    @property
    def is_empty(self) -> bool:
        """Whether the summary has no groups."""
        return self.table.empty

    def __len__(self) -> int:
        return len(self.table)

    def to_records(self) -> list[dict[str, Any]]:
        """Rows as plain dictionaries, keyed by the grouping field."""
        return [
            {
                self.group_by: row.group_key,
                "mean_income": row.mean_income,
                "respondents": row.respondents,
            }
            for row in self.rows
        ]

    def to_json(self, indent: int | None = 2) -> str:
        """Summary as a JSON document."""
        return json.dumps(
            {"group_by": self.group_by, "rows": self.to_records()},
            indent=indent,
        )

    def to_csv(self, path: Path) -> None:
        """Write the summary as CSV with the grouping field as first column."""
        self.table.rename(columns={"group_key": self.group_by}).to_csv(
            path, index=False
        )


def _empty_table() -> pd.DataFrame:
    """Summary table with no groups."""
    return pd.DataFrame(
        {
            "group_key": pd.Series(dtype=object),
            "mean_income": pd.Series(dtype=float),
            "respondents": pd.Series(dtype="int64"),
        }
    )


def aggregate_income(df: pd.DataFrame, group_by: str) -> IncomeSummary:
    """
    Compute mean annual income per category.

    Groups are taken from the data present; a category with no records
    does not appear. Records with a missing or blank key are not grouped.
    Rows are sorted by descending mean income, with ties kept in order of
    first appearance.

    Args:
        df: Normalized survey records with an income_annual column.
        group_by: Categorical field to group by.

    Returns:
        IncomeSummary ordered by descending mean income.

    Raises:
        ValueError: If group_by is not a categorical field or a required
            column is missing.
    """
    if group_by not in CATEGORICAL_FIELDS:
        expected = ", ".join(CATEGORICAL_FIELDS)
        msg = f"Cannot group by {group_by!r}; expected one of: {expected}"
        raise ValueError(msg)

    missing = [col for col in (group_by, "income_annual") if col not in df.columns]
    if missing:
        msg = f"Missing columns for aggregation: {missing}"
        raise ValueError(msg)

    keys = df[group_by]
    present = keys.notna() & (keys.astype(str).str.strip() != "")
    if not present.all():
        log.debug(
            "Skipping records without a group key",
            group_by=group_by,
            skipped=int((~present).sum()),
        )
        df = df.loc[present]

    if df.empty:
        log.info("No records to aggregate", group_by=group_by)
        return IncomeSummary(group_by=group_by, table=_empty_table())

    grouped = (
        df.groupby(group_by, sort=False, dropna=True)["income_annual"]
        .agg(mean_income="mean", respondents="size")
        .reset_index()
        .rename(columns={group_by: "group_key"})
    )
    table = grouped.sort_values(
        "mean_income", ascending=False, kind="mergesort"
    ).reset_index(drop=True)
    table = table.astype({"group_key": object, "mean_income": float})

    try:
        table = IncomeSummarySchema.validate(table.loc[:, list(SUMMARY_COLUMNS)])
    except PanderaSchemaError as e:
        msg = f"Income summary by {group_by} violates IncomeSummarySchema: {e}"
        raise SchemaError(msg) from e

    log.info("Aggregated income", group_by=group_by, groups=len(table))
    return IncomeSummary(group_by=group_by, table=table)
