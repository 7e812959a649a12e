import streamlit as st
import pandas as pd
from typing import Iterable, Tuple

from csvreport.stats_engine import AnalysisResult
from csvreport.report import format_value

__all__ = ["header_bar", "kpi_row", "section", "render_table", "render_analysis"]


def header_bar(title: str):
    st.markdown(
        f"""
        <div style='display:flex;align-items:center;gap:0.5rem;margin-bottom:0.75rem;'>
            <h2 style='margin:0'>{title}</h2>
        </div>
        <hr style='margin-top:0.25rem;margin-bottom:1rem;'>
        """,
        unsafe_allow_html=True,
    )


def kpi_row(items: Iterable[Tuple[str, str]]):
    items = list(items)
    cols = st.columns(len(items))
    for col, (label, value) in zip(cols, items):
        with col:
            st.metric(label, value)


class section:
    def __init__(self, title: str, expandable: bool = True, expanded: bool = True):
        self.title = title
        self.expandable = expandable
        self.expanded = expanded
        self.ctx = None
    def __enter__(self):
        if self.expandable:
            self.ctx = st.expander(self.title, expanded=self.expanded)
        else:
            self.ctx = st.container()
        self.ctx.__enter__()
        if not self.expandable:
            st.subheader(self.title)
        return self.ctx
    def __exit__(self, exc_type, exc, tb):
        if self.ctx is not None:
            self.ctx.__exit__(exc_type, exc, tb)


def render_table(df: pd.DataFrame, height: int = 360):
    st.dataframe(df, use_container_width=True, height=height)


def render_analysis(result: AnalysisResult):
    """On-page mirror of the PDF sections (summary, types, missing)."""
    kpi_row([
        ("Rows", f"{result.row_count:,}"),
        ("Cols", f"{len(result.columns):,}"),
        ("Numeric cols", f"{len(result.numeric_columns):,}"),
        ("Missing cells", f"{sum(result.missing_values.values()):,}"),
    ])

    with section("Summary Statistics"):
        if not result.summary:
            st.caption("No numeric columns.")
        else:
            rows = [
                {"column": col, **{stat: format_value(v) for stat, v in result.summary[col].items()}}
                for col in result.numeric_columns
            ]
            render_table(pd.DataFrame(rows), height=240)

    with section("Column Types & Missing Values"):
        tbl = pd.DataFrame({
            "column": list(result.columns),
            "type": [result.column_types[c] for c in result.columns],
            "missing": [result.missing_values[c] for c in result.columns],
        })
        render_table(tbl, height=260)
