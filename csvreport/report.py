# csvreport/report.py
from __future__ import annotations
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Flowable, Image, Paragraph, SimpleDocTemplate, Spacer
from reportlab.platypus.doctemplate import LayoutError

from csvreport.config import ReportConfig
from csvreport.errors import RenderError
from csvreport.heatmap import HeatmapBitmap
from csvreport.stats_engine import AnalysisResult

__all__ = ["compose_report", "format_value"]


def format_value(v: Optional[float]) -> str:
    return "n/a" if v is None else f"{v:.2f}"


def compose_report(
    result: AnalysisResult,
    heatmap: Optional[HeatmapBitmap] = None,
    *,
    config: Optional[ReportConfig] = None,
) -> bytes:
    """
    Lay out the analysis as a PDF:
      - Title (+ rows × columns)
      - Summary Statistics (numeric columns only)
      - Column Types
      - Missing Values
      - Correlation Heatmap (only when a bitmap is given)

    Every line advances by the same leading; sections are separated by a
    larger spacer. Content that reaches the bottom margin continues on a new page.
    """
    cfg = config or ReportConfig()

    # ---- styles (fresh per call) -----------------------------------------
    base = getSampleStyleSheet()
    title = ParagraphStyle(
        "report_title", parent=base["Title"], fontSize=cfg.title_size,
        leading=cfg.title_size + 4, alignment=TA_CENTER, spaceAfter=0,
    )
    h2 = ParagraphStyle(
        "report_h2", parent=base["Heading2"], fontSize=cfg.heading_size,
        leading=cfg.heading_size + 4, spaceBefore=0, spaceAfter=cfg.line_height / 2,
        keepWithNext=1,
    )
    body = ParagraphStyle(
        "report_body", parent=base["BodyText"], fontSize=cfg.body_size,
        leading=cfg.line_height, spaceBefore=0, spaceAfter=0,
    )
    indented = ParagraphStyle("report_indented", parent=body, leftIndent=cfg.body_size)

    def line(text: str, style: ParagraphStyle = body) -> Paragraph:
        return Paragraph(escape(text), style)

    # ---- content ------------------------------------------------------------
    buff = BytesIO()
    doc = SimpleDocTemplate(
        buff, pagesize=cfg.pagesize,
        leftMargin=cfg.left_margin, rightMargin=cfg.right_margin,
        topMargin=cfg.top_margin, bottomMargin=cfg.bottom_margin,
        title=cfg.title,
    )
    story: List[Flowable] = []

    # Title
    story.append(line(cfg.title, title))
    story.append(line(f"{result.row_count:,} rows × {len(result.columns):,} columns"))
    story.append(Spacer(1, cfg.section_gap))

    # Summary statistics
    story.append(line("Summary Statistics", h2))
    if result.summary:
        for col in result.numeric_columns:
            story.append(line(f"{col}:"))
            for stat, value in result.summary[col].items():
                story.append(line(f"{stat}: {format_value(value)}", indented))
            story.append(Spacer(1, cfg.column_gap))
    else:
        story.append(line("No numeric columns."))
    story.append(Spacer(1, cfg.section_gap))

    # Column types
    story.append(line("Column Types", h2))
    for col in result.columns:
        story.append(line(f"{col}: {result.column_types[col]}"))
    story.append(Spacer(1, cfg.section_gap))

    # Missing values
    story.append(line("Missing Values", h2))
    for col in result.columns:
        story.append(line(f"{col}: {result.missing_values[col]}"))

    # Correlation heatmap
    if heatmap is not None:
        story.append(Spacer(1, cfg.section_gap))
        story.append(line("Correlation Heatmap", h2))
        story.append(_heatmap_image(heatmap, doc.width, doc.height * cfg.image_max_height))

    try:
        doc.build(story)
    except LayoutError as e:
        raise RenderError(f"Report layout failed: {e}") from e
    return buff.getvalue()


def _heatmap_image(heatmap: HeatmapBitmap, max_w: float, max_h: float) -> Image:
    # fit inside the frame, keep aspect ratio
    scale = min(max_w / heatmap.width, max_h / heatmap.height)
    return Image(
        BytesIO(heatmap.png),
        width=heatmap.width * scale,
        height=heatmap.height * scale,
    )
