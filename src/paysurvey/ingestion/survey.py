"""
Survey export ingestion.

Loads the survey CSV and maps its question-text header onto the fixed
internal field names.
"""

import warnings
from pathlib import Path

import pandas as pd

from paysurvey.exceptions import SchemaError
from paysurvey.ingestion.base import DataLoader
from paysurvey.schemas.survey import SURVEY_COLUMNS, SURVEY_FIELDS, RawSurveySchema
from paysurvey.utils.logging import get_logger

log = get_logger(__name__)


def _normalize_header(text: object) -> str:
    """Lowercase a header cell and collapse internal whitespace."""
    return " ".join(str(text).lower().split())


def check_header(columns: list[str], *, strict: bool = True) -> None:
    """
    Check a header row against the fixed survey layout.

    Args:
        columns: Header cells in file order.
        strict: Also check each cell against its position's keyword. A cell
            that already equals the field name is accepted.

    Raises:
        SchemaError: If the column count or any header cell does not match.
    """
    expected = len(SURVEY_COLUMNS)
    if len(columns) != expected:
        msg = f"Expected {expected} columns, found {len(columns)}"
        raise SchemaError(msg)

    if not strict:
        return

    mismatched = [
        position
        for position, (column, (field, keyword)) in enumerate(
            zip(columns, SURVEY_COLUMNS, strict=True), start=1
        )
        if _normalize_header(column) != field
        and keyword not in _normalize_header(column)
    ]
    if mismatched:
        details = ", ".join(
            f"{pos}: {columns[pos - 1]!r} (expected {SURVEY_COLUMNS[pos - 1][0]})"
            for pos in mismatched
        )
        msg = f"Header does not match the survey layout at column(s) {details}"
        raise SchemaError(msg, positions=mismatched)


def _check_row_widths(df: pd.DataFrame) -> None:
    """
    Reject rows with fewer fields than the header.

    Cells are read with `keep_default_na=False`, so an empty answer is an
    empty string and only a missing trailing field is NaN.
    """
    short = df.index[df.isna().any(axis=1)]
    if len(short):
        # File line numbers: one header line, 1-based
        lines = ", ".join(str(row + 2) for row in short[:10])
        msg = f"Input file has rows narrower than its header at line(s) {lines}"
        raise SchemaError(msg)


class SurveyLoader(DataLoader[RawSurveySchema]):
    """Loader for the survey export CSV."""

    def __init__(self, path: Path, *, strict_header: bool = True) -> None:
        """Initialize survey loader."""
        super().__init__(path, RawSurveySchema)
        self.strict_header = strict_header

    def _load_raw(self) -> pd.DataFrame:
        """Load survey CSV with every cell as text and rename the header."""
        self._check_readable()

        try:
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter("always", pd.errors.ParserWarning)
                df = pd.read_csv(
                    self.path,
                    dtype=str,
                    encoding="utf-8",
                    keep_default_na=False,
                    index_col=False,
                )
        except UnicodeDecodeError as e:
            msg = f"Input file is not valid UTF-8: {self.path}"
            raise OSError(msg) from e
        except pd.errors.EmptyDataError as e:
            msg = f"Input file has no header row: {self.path}"
            raise SchemaError(msg) from e
        except pd.errors.ParserError as e:
            msg = f"Input file rows do not match its header: {e}"
            raise SchemaError(msg) from e

        if any(issubclass(w.category, pd.errors.ParserWarning) for w in caught):
            msg = f"Input file has rows wider than its header: {self.path}"
            raise SchemaError(msg)

        check_header(list(df.columns), strict=self.strict_header)
        _check_row_widths(df)

        log.debug("Renaming survey columns", columns=len(SURVEY_FIELDS))
        return df.set_axis(list(SURVEY_FIELDS), axis="columns")


def load_survey(path: Path, *, strict_header: bool = True) -> pd.DataFrame:
    """
    Load and validate a survey export.

    Args:
        path: Path to the survey CSV.
        strict_header: Whether to check header text per column.

    Returns:
        DataFrame with the 18 survey fields as text columns.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read or decoded.
        SchemaError: If the header does not match the survey layout.
    """
    return SurveyLoader(path, strict_header=strict_header).load()
