"""
Base classes and utilities for data ingestion.

Provides common functionality for all data loaders.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

import pandas as pd
import pandera.pandas as pa
from pandera.errors import SchemaError as PanderaSchemaError
from pandera.errors import SchemaErrors as PanderaSchemaErrors

from paysurvey.exceptions import SchemaError
from paysurvey.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=pa.DataFrameModel)


class DataLoader(ABC, Generic[T]):
    """
    Abstract base class for data loaders.

    All data loaders inherit from this class to ensure consistent
    schema validation at system boundaries.
    """

    def __init__(self, path: Path, schema: type[T]) -> None:
        """
        Initialize data loader.

        Args:
            path: Path to the source file.
            schema: Pandera schema for validation.
        """
        self.path = Path(path)
        self.schema = schema

    @abstractmethod
    def _load_raw(self) -> pd.DataFrame:
        """Load raw data from source. Implemented by subclasses."""
        ...

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load and optionally validate data.

        Args:
            validate: Whether to validate against schema.

        Returns:
            Loaded (and optionally validated) DataFrame.

        Raises:
            FileNotFoundError: If data file not found.
            OSError: If the file cannot be read.
            SchemaError: If validation fails.
        """
        log.info("Loading data", loader=self.__class__.__name__, path=str(self.path))

        df = self._load_raw()
        log.info("Loaded raw data", rows=len(df), columns=len(df.columns))

        if validate:
            df = self._validate(df)
            log.info("Schema validation passed", schema=self.schema.__name__)

        return df

    def _validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Validate DataFrame against schema.

        Args:
            df: DataFrame to validate.

        Returns:
            Validated DataFrame.

        Raises:
            SchemaError: If the frame violates the schema.
        """
        try:
            return self.schema.validate(df)
        except (PanderaSchemaError, PanderaSchemaErrors) as e:
            msg = f"{self.path} does not match {self.schema.__name__}: {e}"
            raise SchemaError(msg) from e

    def _check_readable(self) -> None:
        """
        Fail early on paths that cannot be opened as files.

        Raises:
            FileNotFoundError: If the path does not exist.
            IsADirectoryError: If the path is a directory.
        """
        if not self.path.exists():
            msg = f"Input file not found: {self.path}"
            raise FileNotFoundError(msg)
        if self.path.is_dir():
            msg = f"Input path is a directory: {self.path}"
            raise IsADirectoryError(msg)
