import io
from types import MappingProxyType

import pytest
from PIL import Image

from csvreport.config import HeatmapConfig
from csvreport.errors import RenderError
from csvreport.heatmap import abs_corr_cmap, cell_size_for, render_heatmap
from csvreport.stats_engine import CorrelationMatrix


def _matrix(cols, off=0.5):
    values = {(a, b): (1.0 if a == b else off) for a in cols for b in cols}
    return CorrelationMatrix(columns=tuple(cols), values=MappingProxyType(values))


def test_two_columns_give_two_by_two_grid():
    bmp = render_heatmap(_matrix(["a", "b"], off=1.0))
    assert bmp.columns == ("a", "b")
    assert bmp.cell_count == 4
    assert bmp.cells == ((1.0, 1.0), (1.0, 1.0))


def test_cell_count_is_square_of_columns():
    cols = [f"c{i}" for i in range(7)]
    assert render_heatmap(_matrix(cols)).cell_count == 49


def test_png_matches_reported_size():
    bmp = render_heatmap(_matrix(["a", "b", "c"]))
    assert bmp.png.startswith(b"\x89PNG")
    with Image.open(io.BytesIO(bmp.png)) as img:
        assert img.size == (bmp.width, bmp.height)


def test_size_derives_from_column_count():
    cfg = HeatmapConfig()
    small = render_heatmap(_matrix(["a", "b"]), config=cfg)
    large = render_heatmap(_matrix([f"c{i}" for i in range(20)]), config=cfg)
    assert small.cell_size == cfg.max_cell_px
    assert large.cell_size == 25
    assert large.width > small.width


def test_cell_size_bounded_below():
    cfg = HeatmapConfig()
    assert cell_size_for(2, cfg) == 50
    assert cell_size_for(10, cfg) == 50
    assert cell_size_for(20, cfg) == 25
    assert cell_size_for(1000, cfg) == cfg.min_cell_px


def test_many_columns_still_render():
    cols = [f"col_{i}" for i in range(60)]
    bmp = render_heatmap(_matrix(cols))
    assert bmp.cell_size == HeatmapConfig().min_cell_px
    assert bmp.cell_count == 3600


def test_caller_supplied_ordering_applies_to_both_axes():
    values = {("a", "a"): 1.0, ("b", "b"): 1.0, ("a", "b"): 0.3, ("b", "a"): 0.3}
    m = CorrelationMatrix(columns=("a", "b"), values=MappingProxyType(values))
    bmp = render_heatmap(m, columns=["b", "a"])
    assert bmp.columns == ("b", "a")
    assert bmp.cells == ((1.0, 0.3), (0.3, 1.0))


def test_undefined_cells_render():
    values = {("a", "a"): 1.0, ("k", "k"): 1.0, ("a", "k"): None, ("k", "a"): None}
    m = CorrelationMatrix(columns=("a", "k"), values=MappingProxyType(values))
    bmp = render_heatmap(m)
    assert bmp.cells[0][1] is None
    assert bmp.png.startswith(b"\x89PNG")


def test_colour_depends_on_magnitude_only():
    cfg = HeatmapConfig()
    cmap = abs_corr_cmap(cfg)
    assert cmap(0.0)[:3] == pytest.approx((1.0, 1.0, 1.0))
    assert cmap(1.0)[:3] == pytest.approx((0.0, 0.0, 1.0))
    r, g, b, _ = cmap(0.5)
    assert r == pytest.approx(0.5, abs=0.01)
    assert g == pytest.approx(0.5, abs=0.01)
    assert b == pytest.approx(1.0)


def test_sign_does_not_change_pixels():
    pos = render_heatmap(_matrix(["a", "b"], off=0.8))
    neg = render_heatmap(_matrix(["a", "b"], off=-0.8))
    cell = pos.cell_size
    margin = HeatmapConfig().label_margin_px
    # top-left corner of the off-diagonal cell, away from the centred label
    xy = (margin + cell + 2, margin + 2)
    with Image.open(io.BytesIO(pos.png)) as p, Image.open(io.BytesIO(neg.png)) as n:
        assert p.convert("RGB").getpixel(xy) == n.convert("RGB").getpixel(xy)


def test_empty_matrix_rejected():
    with pytest.raises(RenderError):
        render_heatmap(CorrelationMatrix())


def test_bad_ordering_rejected():
    m = _matrix(["a", "b"])
    with pytest.raises(RenderError):
        render_heatmap(m, columns=["a", "z"])
    with pytest.raises(RenderError):
        render_heatmap(m, columns=["a", "a"])
    with pytest.raises(RenderError):
        render_heatmap(m, columns=[])
