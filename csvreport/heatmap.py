# csvreport/heatmap.py
from __future__ import annotations
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Sequence, Tuple

import numpy as np
import seaborn as sns
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.figure import Figure

from csvreport.config import HeatmapConfig, RGB
from csvreport.errors import RenderError
from csvreport.stats_engine import CorrelationMatrix

__all__ = ["HeatmapBitmap", "render_heatmap", "cell_size_for", "abs_corr_cmap"]


@dataclass(frozen=True)
class HeatmapBitmap:
    png: bytes
    width: int
    height: int
    columns: Tuple[str, ...]
    cells: Tuple[Tuple[Optional[float], ...], ...]   # row-major, same order on both axes
    cell_size: int

    @property
    def cell_count(self) -> int:
        return sum(len(row) for row in self.cells)


def cell_size_for(n_columns: int, cfg: HeatmapConfig) -> int:
    """Cells shrink as columns grow, never below the legible minimum."""
    raw = cfg.grid_px / max(1, n_columns)
    return int(max(cfg.min_cell_px, min(cfg.max_cell_px, raw)))

def _unit(rgb: RGB) -> Tuple[float, float, float]:
    return tuple(c / 255.0 for c in rgb)

def abs_corr_cmap(cfg: HeatmapConfig) -> LinearSegmentedColormap:
    # two stops -> each channel interpolates linearly in |r|
    return LinearSegmentedColormap.from_list(
        "abs_corr", [_unit(cfg.pale_rgb), _unit(cfg.saturated_rgb)]
    )


def render_heatmap(
    matrix: CorrelationMatrix,
    *,
    columns: Optional[Sequence[str]] = None,
    config: Optional[HeatmapConfig] = None,
) -> HeatmapBitmap:
    """
    Rasterize a correlation matrix to PNG.

    Colour depends on |r| only (pale at 0, saturated at 1), so a strong
    negative correlation looks the same as a strong positive one. Each cell
    carries its signed coefficient as text; undefined cells are grey "n/a".
    """
    cfg = config or HeatmapConfig()
    order = tuple(columns) if columns is not None else tuple(matrix.columns)
    if matrix.is_empty or not order:
        raise RenderError("Cannot render a heatmap from an empty correlation matrix.")
    if len(set(order)) != len(order):
        raise RenderError("Heatmap column ordering contains duplicates.")
    unknown = [c for c in order if c not in matrix.columns]
    if unknown:
        raise RenderError(f"Heatmap ordering names columns missing from the matrix: {unknown}")

    cells = tuple(tuple(matrix.get(a, b) for b in order) for a in order)
    n = len(order)
    cell = cell_size_for(n, cfg)
    grid = n * cell
    margin = cfg.label_margin_px
    width = margin + grid + cfg.pad_px
    height = margin + grid + cfg.pad_px

    data = np.array([[np.nan if v is None else abs(v) for v in row] for row in cells], dtype=float)
    annot = np.array([["n/a" if v is None else f"{v:.2f}" for v in row] for row in cells], dtype=object)
    annot_size = max(4.0, min(10.0, cell * 0.25))

    try:
        # fresh figure + canvas per call; pyplot's global state is never touched
        fig = Figure(figsize=(width / cfg.dpi, height / cfg.dpi), dpi=cfg.dpi)
        canvas = FigureCanvasAgg(fig)
        ax = fig.add_axes([margin / width, cfg.pad_px / height, grid / width, grid / height])
        ax.set_facecolor(_unit(cfg.undefined_rgb))
        sns.heatmap(
            data, ax=ax, mask=np.isnan(data),
            cmap=abs_corr_cmap(cfg), vmin=0.0, vmax=1.0, cbar=False,
            annot=annot, fmt="", annot_kws={"fontsize": annot_size, "color": "black"},
            square=True, linewidths=0,
            xticklabels=list(order), yticklabels=list(order),
        )
        # seaborn skips masked cells when annotating
        for i, row in enumerate(cells):
            for j, v in enumerate(row):
                if v is None:
                    ax.text(j + 0.5, i + 0.5, "n/a", ha="center", va="center",
                            fontsize=annot_size, color="black")
        ax.xaxis.tick_top()
        ax.tick_params(axis="both", length=0, labelsize=cfg.label_font_size)
        ax.set_xticklabels(list(order), rotation=90)
        ax.set_yticklabels(list(order), rotation=0)

        buf = BytesIO()
        fig.savefig(buf, format="png", dpi=cfg.dpi)
        px_w, px_h = canvas.get_width_height()
    except (ValueError, RuntimeError, MemoryError) as e:
        raise RenderError(f"Heatmap rasterization failed: {e}") from e

    return HeatmapBitmap(
        png=buf.getvalue(),
        width=int(px_w),
        height=int(px_h),
        columns=order,
        cells=cells,
        cell_size=cell,
    )
