"""CSV analysis report: descriptive statistics, correlations and a PDF with a heatmap.

Public entry points:
    generate_report(rows, *, config=None) -> bytes
    run_analysis(rows, *, config=None)    -> ReportRun (result, heatmap, pdf)
    read_rows(upload)                     -> list of row dicts parsed from a CSV
"""

from .errors import ReportError, SchemaError, AnalysisError, RenderError  # noqa: F401
from .config import HeatmapConfig, ReportConfig, PipelineConfig  # noqa: F401
from .data_io import read_rows  # noqa: F401
from .pipeline import ReportRun, run_analysis, generate_report  # noqa: F401

__all__ = [
    "generate_report",
    "run_analysis",
    "read_rows",
    "ReportRun",
    "HeatmapConfig",
    "ReportConfig",
    "PipelineConfig",
    "ReportError",
    "SchemaError",
    "AnalysisError",
    "RenderError",
]
