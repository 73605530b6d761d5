"""Base factory for creating raw source records from various input formats."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Generic, List, TypeVar
import logging

import pandas as pd
from pydantic import BaseModel, ValidationError

from ..adapters import RecordSkip
from ..models import SourceSystem
from ..utils import safe_str

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


@dataclass
class RecordBatch(Generic[RecordT]):
    """Records built from one input, plus the rows that could not be built."""

    source_system: SourceSystem
    records: List[RecordT] = field(default_factory=list)
    rejected: List[RecordSkip] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


class BaseRecordFactory(ABC, Generic[RecordT]):
    """Creates immutable raw records from DataFrames, CSV files or JSON.

    Subclasses declare their JSON field mappings and required columns and
    build one record from one normalized row. A row that cannot be built
    (bad timestamp, unparseable amount) is returned as a rejected
    RecordSkip so that it shows up in the run's skip counts.
    """

    source_system: SourceSystem
    # JSON field -> DataFrame column
    field_mappings: Dict[str, str] = {}
    required_fields: List[str] = []

    def from_dataframe(self, df: pd.DataFrame) -> RecordBatch[RecordT]:
        """Create records from a pandas DataFrame.

        Args:
            df: DataFrame containing raw rows for this source

        Returns:
            RecordBatch with the validated records and the rejected rows

        Raises:
            ValueError: If required columns are missing
        """
        source = self.source_system.value
        batch: RecordBatch[RecordT] = RecordBatch(source_system=self.source_system)
        if df.empty:
            logger.warning(f"Empty DataFrame provided for {source} records")
            return batch

        logger.info(f"Creating {len(df)} {source} records from DataFrame")

        # Ensure DataFrame has proper column names (lowercase snake case)
        df = df.copy()
        df.columns = (
            df.columns.str.strip().str.lower().str.replace(" ", "_").str.replace("/", "_")
        )
        self._validate_required_fields(df)

        # Reset index to ensure consistent 0-based indices
        df = df.reset_index(drop=True)

        for i, (_, row) in enumerate(df.iterrows()):
            try:
                batch.records.append(self._create_record(row, i))
            except (ValidationError, ValueError, TypeError) as e:
                skip = RecordSkip(
                    source_system=self.source_system,
                    record_id=self._record_id(row, i),
                    error_type=type(e).__name__,
                    reason=self._describe_error(e),
                )
                batch.rejected.append(skip)
                logger.warning(f"Rejecting {source} row {i} ({skip.record_id}): {skip.reason}")

        logger.info(
            f"Created {len(batch.records)} {source} records, "
            f"rejected {len(batch.rejected)} rows"
        )
        return batch

    def from_csv(self, csv_path: Path) -> RecordBatch[RecordT]:
        """Create records from a CSV file.

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValueError: If CSV has invalid format
        """
        source = self.source_system.value
        logger.info(f"Loading {source} data from {csv_path}")

        if not csv_path.exists():
            raise FileNotFoundError(f"{source} CSV file not found: {csv_path}")

        try:
            # Identifier columns stay strings so leading zeros survive
            df = pd.read_csv(csv_path, encoding="utf-8-sig", dtype=str)
        except (OSError, pd.errors.ParserError, UnicodeDecodeError) as e:
            logger.error(f"Error loading {source} CSV {csv_path}: {e}")
            raise ValueError(f"Failed to load {source} CSV: {e}") from e

        logger.info(f"Loaded {len(df)} rows from {source} CSV")
        return self.from_dataframe(df)

    def from_json(self, json_data: List[Dict[str, Any]]) -> RecordBatch[RecordT]:
        """Create records directly from JSON data.

        Args:
            json_data: List of record dictionaries from JSON

        Returns:
            RecordBatch with the validated records and the rejected rows
        """
        if not json_data:
            logger.warning(f"Empty JSON data provided for {self.source_system.value} records")
            return RecordBatch(source_system=self.source_system)

        df = self._json_to_dataframe(json_data)
        return self.from_dataframe(df)

    @staticmethod
    def _describe_error(error: Exception) -> str:
        if isinstance(error, ValidationError):
            return "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'row'}: {err['msg']}"
                for err in error.errors()
            )
        return str(error)

    def _json_to_dataframe(self, json_data: List[Dict[str, Any]]) -> pd.DataFrame:
        """Convert JSON data to DataFrame with field mapping applied."""
        rows = []
        for item in json_data:
            rows.append(
                {self.field_mappings.get(key, key): value for key, value in item.items()}
            )
        # object dtype keeps Decimal/str values intact
        return pd.DataFrame(rows, dtype=object)

    def _validate_required_fields(self, df: pd.DataFrame) -> None:
        """Ensure all required columns are present."""
        missing = [col for col in self.required_fields if col not in df.columns]
        if missing:
            raise ValueError(
                f"Missing required {self.source_system.value} columns: {missing}"
            )

    def _record_id(self, row: pd.Series, index: int) -> str:
        """Use the row's record_id when present, else generate one."""
        record_id = safe_str(row.get("record_id"))
        return record_id or f"{self.source_system.value}_{index}"

    @abstractmethod
    def _create_record(self, row: pd.Series, index: int) -> RecordT:
        """Build one record from a normalized row."""
        pass
