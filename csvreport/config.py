# csvreport/config.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from reportlab.lib.pagesizes import A4

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class HeatmapConfig:
    grid_px: int = 500                  # target grid side before clamping cells
    min_cell_px: int = 12               # smallest legible cell
    max_cell_px: int = 50
    label_margin_px: int = 80           # room for row labels / rotated column labels
    pad_px: int = 10
    dpi: int = 100
    pale_rgb: RGB = (255, 255, 255)     # |r| == 0
    saturated_rgb: RGB = (0, 0, 255)    # |r| == 1
    undefined_rgb: RGB = (211, 211, 211)
    label_font_size: float = 9.0


@dataclass(frozen=True)
class ReportConfig:
    title: str = "Data Analysis Report"
    pagesize: Tuple[float, float] = A4
    left_margin: float = 28
    right_margin: float = 28
    top_margin: float = 28
    bottom_margin: float = 28
    title_size: float = 20
    heading_size: float = 16
    body_size: float = 12
    line_height: float = 14             # leading of every emitted line
    section_gap: float = 20             # spacer between sections
    column_gap: float = 5               # spacer after each column block in the summary
    image_max_height: float = 0.8       # fraction of the frame height


@dataclass(frozen=True)
class PipelineConfig:
    heatmap: HeatmapConfig = field(default_factory=HeatmapConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
