# app.py
import logging

import streamlit as st

from csvreport import PipelineConfig, ReportConfig, ReportError, read_rows, run_analysis
from csvreport.data_io import upload_size
from ui.components import header_bar, section, render_analysis

logger = logging.getLogger(__name__)

MAX_UPLOAD_MB = 200            # uploads above this are rejected before parsing

st.set_page_config(page_title="CSV Analysis Report", layout="wide")

# -----------------
# Session bootstrap
# -----------------
ss = st.session_state
ss.setdefault("activity_log", [])
ss.setdefault("last_run", None)        # ReportRun of the latest successful request
ss.setdefault("last_name", None)
ss.setdefault("uploader_key", 0)

# -----------------
# Utilities
# -----------------
def log(msg: str):
    ss.activity_log.append(msg)

def run_report(upload, title: str) -> None:
    name = getattr(upload, "name", "uploaded.csv")
    size = upload_size(upload)
    if size > MAX_UPLOAD_MB * 1024 * 1024:
        st.error(f"'{name}' is {size / 1024 ** 2:.1f} MB; the limit is {MAX_UPLOAD_MB} MB.")
        log(f"Rejected '{name}' (too large).")
        return
    try:
        rows = read_rows(upload)
        cfg = PipelineConfig(report=ReportConfig(title=title or ReportConfig.title))
        ss.last_run = run_analysis(rows, config=cfg)
        ss.last_name = name.rsplit(".", 1)[0]
        log(f"Analyzed '{name}' ({len(rows):,} rows).")
    except ReportError as e:
        logger.exception("Report pipeline failed for %s", name)
        ss.last_run = None
        st.error(f"An error occurred while processing the file: {e}")
        log(f"Failed on '{name}': {type(e).__name__}.")

# ------------- LAYOUT -------------
left, right = st.columns([0.22, 0.78], gap="large")

with left:
    st.markdown("**Activity log**")
    if ss.activity_log:
        for line in ss.activity_log[-12:]:
            st.write("• ", line)
    else:
        st.caption("—")

    if st.button("Clear", use_container_width=True):
        ss.activity_log.clear()
        ss.last_run = None
        ss.last_name = None
        ss.uploader_key += 1
        st.rerun()

with right:
    header_bar("CSV Analysis Report")

    with section("Select File", expandable=False):
        st.caption(f"Limit {MAX_UPLOAD_MB}MB • CSV with a header row")
        upload = st.file_uploader(
            "Drag and drop or browse", type=["csv"], key=f"uploader_{ss.uploader_key}",
        )
        title = st.text_input("Report title", value=ReportConfig.title)
        if st.button("Analyze", type="primary", disabled=upload is None):
            run_report(upload, title)

    run = ss.last_run
    if run is None:
        st.info("Upload a CSV file to begin.")
        st.stop()

    render_analysis(run.result)

    with section("Correlation Heatmap"):
        if run.heatmap is None:
            st.caption("Need at least two numeric columns.")
        else:
            st.image(run.heatmap.png, width=run.heatmap.width)

    st.markdown("---")
    st.download_button(
        label="⬇️ Download report (PDF)",
        data=run.pdf,
        file_name=f"{ss.last_name or 'report'}_analysis.pdf",
        mime="application/pdf",
        key="download_report_pdf",
    )
