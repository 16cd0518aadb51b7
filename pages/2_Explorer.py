import logging

import streamlit as st

from explorer.charts import default_selected_columns, filter_columns, toggle_column
from explorer.config import get_settings, setup_logger
from explorer.insights import ask_about_data, generate_data_insights
from explorer.llm import get_openai_client
from explorer.profiler import analyze_data
from explorer.render import (
    inject_global_css,
    note_box,
    render_ai_insights,
    render_chart_grid,
    render_data_summary,
)
from explorer.session import init_session_state, require_sign_in
from explorer.upload import UploadError, load_upload
from sidebar import render_sidebar

st.set_page_config(page_title="Data Insight Explorer", layout="wide")

inject_global_css()
settings = get_settings()
setup_logger(settings.log_verbosity)
init_session_state()
user = require_sign_in()

if "openai_client" not in st.session_state:
    st.session_state.openai_client = get_openai_client(settings)
client = st.session_state.openai_client


def refresh_insights() -> None:
    summary = st.session_state["summary"]
    rows = st.session_state["current_data"].head(5).to_dict(orient="records")
    with st.spinner("Generating AI insights..."):
        st.session_state["ai_insights"] = generate_data_insights(
            summary, rows, client, model=settings.openai_model
        )


st.title("📊 Data Insight Explorer")
st.caption("Advanced Data Analysis Platform")

render_sidebar()

# ── STEP 1 ─ Upload data ───────────────────────────────────────────────────────
if st.session_state["current_data"] is None:
    note_box(
        "Upload your dataset",
        f"Drag and drop your CSV file here, or click to browse. "
        f"Maximum file size: {settings.max_upload_mb}MB.",
    )
    data_file = st.file_uploader(
        label="Upload a CSV file",
        type="csv",
        label_visibility="collapsed",
    )

    if data_file:
        try:
            with st.spinner("Processing..."):
                df, enc_used, delim_used = load_upload(data_file, settings.max_upload_bytes)
                summary = analyze_data(df)
        except UploadError as e:
            st.error(f"❌ {e}")
            st.stop()

        logging.info(f"{user.email} uploaded {data_file.name} ({data_file.size} bytes)")
        st.session_state["current_data"] = df
        st.session_state["file_name"] = data_file.name
        st.session_state["summary"] = summary
        st.session_state["selected_columns"] = default_selected_columns(summary.columns)
        st.session_state["ai_response"] = None
        st.success(f"Loaded {len(df):,} rows "
                   f"(encoding = **{enc_used}**, delimiter = **'{delim_used}'**).")

        refresh_insights()
        st.rerun()

    st.stop()

df = st.session_state["current_data"]
summary = st.session_state["summary"]

# ── STEP 2 ─ Summary ───────────────────────────────────────────────────────────
with st.expander("Preview data", expanded=False):
    st.dataframe(df.head(20), use_container_width=True)

render_data_summary(summary)

# ── STEP 3 ─ Ask AI ────────────────────────────────────────────────────────────
st.subheader("🧠 Ask AI About Your Data")
with st.form(key="ai_prompt", clear_on_submit=False):
    question = st.text_area(
        "Ask a question about your data...",
        key="ai_question",
        height=90,
        label_visibility="collapsed",
        placeholder="Ask a question about your data...",
    )
    asked = st.form_submit_button("Send")

if asked and question.strip():
    with st.spinner("Thinking..."):
        rows = df.head(5).to_dict(orient="records")
        st.session_state["ai_response"] = ask_about_data(
            question, rows, client, model=settings.openai_model
        )

if st.session_state["ai_response"]:
    st.markdown("**AI Response:**")
    st.text(st.session_state["ai_response"])

# ── STEP 4 ─ AI insights ───────────────────────────────────────────────────────
render_ai_insights(st.session_state["ai_insights"])
if st.button("🔄 Regenerate insights"):
    refresh_insights()
    st.rerun()

# ── STEP 5 ─ Visualization ─────────────────────────────────────────────────────
title_col, search_col = st.columns([2, 1])
with title_col:
    st.subheader("Data Visualization")
with search_col:
    query = st.text_input("Search columns...", key="column_search",
                          label_visibility="collapsed", placeholder="🔍 Search columns...")

visible = filter_columns(summary.columns, query)
if not visible:
    st.info("No columns match your search.")

chip_cols = st.columns(6)
for i, column in enumerate(visible):
    selected = column.name in st.session_state["selected_columns"]
    if chip_cols[i % 6].button(
        column.name,
        key=f"chip_{column.name}",
        type="primary" if selected else "secondary",
        use_container_width=True,
    ):
        st.session_state["selected_columns"] = toggle_column(
            st.session_state["selected_columns"], column.name
        )
        st.rerun()

render_chart_grid(df, summary.columns, st.session_state["selected_columns"])
