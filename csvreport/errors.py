# csvreport/errors.py
from __future__ import annotations

__all__ = ["ReportError", "SchemaError", "AnalysisError", "RenderError"]


class ReportError(Exception):
    """Base class for every failure raised by the report pipeline."""


class SchemaError(ReportError):
    """Input table is empty or malformed (no rows, inconsistent columns)."""


class AnalysisError(ReportError):
    """Statistics could not be computed (zero columns, numeric failure)."""


class RenderError(ReportError):
    """Heatmap rasterization or PDF layout failed."""
