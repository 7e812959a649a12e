# csvreport/pipeline.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from csvreport.config import PipelineConfig
from csvreport.heatmap import HeatmapBitmap, render_heatmap
from csvreport.report import compose_report
from csvreport.stats_engine import AnalysisResult, analyze
from csvreport.table_model import TableModel

__all__ = ["ReportRun", "run_analysis", "generate_report"]


@dataclass(frozen=True)
class ReportRun:
    result: AnalysisResult
    heatmap: Optional[HeatmapBitmap]
    pdf: bytes


def run_analysis(
    rows: Sequence[Mapping[str, Any]], *, config: Optional[PipelineConfig] = None
) -> ReportRun:
    """
    parse -> analyze -> heatmap -> compose, each step finishing before the next.

    Nothing here is shared between calls and nothing is logged; SchemaError,
    AnalysisError and RenderError reach the caller unchanged.
    """
    cfg = config or PipelineConfig()
    table = TableModel.build(rows)
    result = analyze(table)
    heatmap = None
    if not result.correlations.is_empty:
        heatmap = render_heatmap(result.correlations, config=cfg.heatmap)
    pdf = compose_report(result, heatmap, config=cfg.report)
    return ReportRun(result=result, heatmap=heatmap, pdf=pdf)


def generate_report(
    rows: Sequence[Mapping[str, Any]], *, config: Optional[PipelineConfig] = None
) -> bytes:
    """Rows in, PDF bytes out."""
    return run_analysis(rows, config=config).pdf
