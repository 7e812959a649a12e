# csvreport/table_model.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from csvreport.errors import SchemaError

__all__ = ["ColumnKind", "Column", "TableModel"]


class ColumnKind(str, Enum):
    NUMERIC = "numeric"
    TEXT = "text"


@dataclass(frozen=True)
class Column:
    name: str
    raw: Tuple[Optional[str], ...]
    kind: ColumnKind
    values: Tuple[Optional[float], ...] = ()   # only filled for numeric columns

    @property
    def is_numeric(self) -> bool:
        return self.kind is ColumnKind.NUMERIC

    @property
    def missing_count(self) -> int:
        return sum(1 for v in self.raw if v is None)

    @property
    def present_values(self) -> list[float]:
        return [v for v in self.values if v is not None]


@dataclass(frozen=True)
class TableModel:
    columns: Tuple[Column, ...]
    row_count: int

    @classmethod
    def build(cls, rows: Sequence[Mapping[str, Any]]) -> "TableModel":
        """
        Turn parsed rows into typed columns.

        Blank cells are absent. A column is numeric only when every present
        cell parses as a number; one stray word turns the whole column to text.
        """
        if not rows:
            raise SchemaError("Table has no rows.")
        keys = _row_keys(rows[0], 0)
        for i, row in enumerate(rows[1:], start=1):
            other = _row_keys(row, i)
            if set(other) != set(keys):
                missing = sorted(set(keys) - set(other))
                extra = sorted(set(other) - set(keys))
                raise SchemaError(
                    f"Row {i} has inconsistent columns (missing: {missing}, unexpected: {extra})."
                )

        columns = tuple(
            _coerce_column(name, [_clean(row[name]) for row in rows]) for name in keys
        )
        return cls(columns=columns, row_count=len(rows))

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def numeric_columns(self) -> list[Column]:
        return [c for c in self.columns if c.is_numeric]

    def column(self, name: str) -> Column:
        for c in self.columns:
            if c.name == name:
                return c
        raise KeyError(name)

    def to_frame(self) -> pd.DataFrame:
        """Numeric columns as float64 (NaN = absent), text columns as object."""
        data = {}
        for c in self.columns:
            if c.is_numeric:
                data[c.name] = pd.Series(
                    [np.nan if v is None else v for v in c.values], dtype="float64"
                )
            else:
                data[c.name] = pd.Series(list(c.raw), dtype=object)
        return pd.DataFrame(data, columns=self.column_names)


# ---------- helpers ----------

def _row_keys(row: Any, index: int) -> list[str]:
    if not isinstance(row, Mapping):
        raise SchemaError(f"Row {index} is not a mapping of column name to value.")
    return list(row.keys())

def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None

def _coerce_column(name: str, raw: list[Optional[str]]) -> Column:
    s = pd.Series(raw, dtype=object)
    present = s.notna()
    parsed = pd.to_numeric(s, errors="coerce").astype("float64")
    # a present cell that failed to parse, or parsed to nan/inf, forces text
    if bool((present & ~np.isfinite(parsed)).any()):
        return Column(name=name, raw=tuple(raw), kind=ColumnKind.TEXT)
    values = tuple(None if pd.isna(v) else float(v) for v in parsed)
    return Column(name=name, raw=tuple(raw), kind=ColumnKind.NUMERIC, values=values)
