# csvreport/stats_engine.py
from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from csvreport.errors import AnalysisError
from csvreport.table_model import TableModel

__all__ = [
    "ColumnSummary",
    "CorrelationMatrix",
    "AnalysisResult",
    "analyze",
]

STAT_LABELS = ("count", "mean", "std", "min", "25%", "50%", "75%", "max")


@dataclass(frozen=True)
class ColumnSummary:
    count: int
    mean: Optional[float] = None
    std: Optional[float] = None
    min: Optional[float] = None
    p25: Optional[float] = None
    p50: Optional[float] = None
    p75: Optional[float] = None
    max: Optional[float] = None

    def items(self) -> Iterator[Tuple[str, Optional[float]]]:
        """(label, value) pairs in describe() order."""
        values = (self.count, self.mean, self.std, self.min,
                  self.p25, self.p50, self.p75, self.max)
        return iter(zip(STAT_LABELS, values))


@dataclass(frozen=True)
class CorrelationMatrix:
    """
    Square, symmetric Pearson matrix over numeric columns.

    A coefficient is None when it is undefined for the pair: one side has
    zero variance on the shared rows, or fewer than two rows are complete.
    """
    columns: Tuple[str, ...] = ()
    values: Mapping[Tuple[str, str], Optional[float]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def is_empty(self) -> bool:
        return len(self.columns) == 0

    def __len__(self) -> int:
        return len(self.columns)

    def get(self, a: str, b: str) -> Optional[float]:
        return self.values[(a, b)]

    def row(self, a: str) -> Dict[str, Optional[float]]:
        return {b: self.values[(a, b)] for b in self.columns}


@dataclass(frozen=True)
class AnalysisResult:
    columns: Tuple[str, ...]
    row_count: int
    summary: Mapping[str, ColumnSummary]
    column_types: Mapping[str, str]
    missing_values: Mapping[str, int]
    correlations: CorrelationMatrix

    @property
    def numeric_columns(self) -> list[str]:
        return [c for c in self.columns if c in self.summary]


# ---------- public entry ----------

def analyze(table: TableModel) -> AnalysisResult:
    """
    Summaries, type labels, missing counts and correlations for one table.

    The table is serialized into a DataFrame, pandas does the numeric work,
    and the outputs are read back into typed, read-only structures.
    """
    if not table.columns:
        raise AnalysisError("Table has no columns.")

    frame = table.to_frame()
    numeric_names = [c.name for c in table.numeric_columns]
    try:
        summary = {name: _summarize(frame[name]) for name in numeric_names}
        missing = {name: int(n) for name, n in frame.isna().sum().items()}
        eligible = [n for n in numeric_names if summary[n].count > 0]
        correlations = _correlate(frame[eligible]) if len(eligible) >= 2 else CorrelationMatrix()
    except (ValueError, TypeError, ArithmeticError, np.linalg.LinAlgError) as e:
        raise AnalysisError(f"Statistics computation failed: {e}") from e

    return AnalysisResult(
        columns=tuple(table.column_names),
        row_count=table.row_count,
        summary=MappingProxyType(summary),
        column_types=MappingProxyType({c.name: c.kind.value for c in table.columns}),
        missing_values=MappingProxyType(missing),
        correlations=correlations,
    )


# ---------- helpers ----------

def _opt(v) -> Optional[float]:
    if v is None or pd.isna(v):
        return None
    return float(v)

def _summarize(s: pd.Series) -> ColumnSummary:
    present = s.dropna()
    if present.empty:
        return ColumnSummary(count=0)
    d = present.describe()
    return ColumnSummary(
        count=int(d["count"]),
        mean=_opt(d["mean"]),
        std=_opt(d["std"]),       # NaN for a single value -> None
        min=_opt(d["min"]),
        p25=_opt(d["25%"]),
        p50=_opt(d["50%"]),
        p75=_opt(d["75%"]),
        max=_opt(d["max"]),
    )

def _correlate(num_df: pd.DataFrame) -> CorrelationMatrix:
    # pandas drops incomplete rows per pair, not with one shared mask
    corr = num_df.corr(method="pearson", min_periods=2)
    cols = tuple(num_df.columns)
    values: Dict[Tuple[str, str], Optional[float]] = {}
    for a in cols:
        for b in cols:
            if a == b:
                values[(a, b)] = 1.0
                continue
            v = _opt(corr.loc[a, b])
            values[(a, b)] = None if v is None else float(np.clip(v, -1.0, 1.0))
    return CorrelationMatrix(columns=cols, values=MappingProxyType(values))
