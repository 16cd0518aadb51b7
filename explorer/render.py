# explorer/render.py
"""Streamlit rendering helpers shared by the pages."""

from typing import List, Sequence

import pandas as pd
import streamlit as st

from explorer.charts import build_figure, choose_chart_type
from explorer.profiler import format_number
from schemas import AIInsight, ColumnKind, DataColumn, DatasetSummary, InsightType

INSIGHT_ICONS = {
    InsightType.TREND: "📈",
    InsightType.ANOMALY: "⚠️",
    InsightType.INSIGHT: "💡",
}

KIND_ICONS = {
    ColumnKind.NUMERIC: "🔢",
    ColumnKind.CATEGORICAL: "🏷️",
    ColumnKind.DATE: "📅",
}


def inject_global_css() -> None:
    st.markdown(
        """
        <style>
        .block-container { padding-top: 2rem; }
        .note-box { background-color:#fff3cd; padding: 1em; border-radius: 10px; border: 1px solid #ffeeba; }
        .chip { display:inline-block; padding:2px 10px; border-radius:999px; font-size:0.85rem; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def note_box(title: str, body: str) -> None:
    st.markdown(
        f'<div class="note-box"><h4>{title}</h4><p>{body}</p></div>',
        unsafe_allow_html=True,
    )


def describe_column(column: DataColumn) -> List[str]:
    """Human-readable summary lines for one column card."""
    s = column.summary
    if column.type == ColumnKind.NUMERIC:
        return [
            f"Min: {format_number(s.min)}",
            f"Max: {format_number(s.max)}",
            f"Mean: {s.mean:.2f}",
            f"Median: {format_number(s.median)}",
        ]
    if column.type == ColumnKind.DATE:
        return [
            f"Unique values: {s.unique_values}",
            f"Earliest: {s.earliest}",
            f"Latest: {s.latest}",
        ]
    lines = [f"Unique values: {s.unique_values}"]
    if s.most_common:
        lines.append("Most common: " + ", ".join(v if v else "(blank)" for v in s.most_common))
    return lines


def render_data_summary(summary: DatasetSummary) -> None:
    st.subheader("Dataset Summary")
    rows_col, cols_col = st.columns(2)
    rows_col.metric("Rows", f"{summary.row_count:,}")
    cols_col.metric("Columns", summary.column_count)

    grid = st.columns(3)
    for i, column in enumerate(summary.columns):
        with grid[i % 3]:
            with st.container(border=True):
                st.markdown(f"**{KIND_ICONS[column.type]} {column.name}**  \n*{column.type.value}*")
                for line in describe_column(column):
                    st.caption(line)

    if summary.insights:
        st.markdown("##### Key findings")
        for insight in summary.insights:
            st.markdown(f"- **{insight.insight_type}** · {insight.description} "
                        f"(significance {insight.significance:.0%})")


def render_ai_insights(insights: Sequence[AIInsight], *, is_loading: bool = False) -> None:
    st.subheader("AI Insights")
    if is_loading:
        st.info("Generating insights...")
        return
    if not insights:
        st.info("No insights available yet.")
        return

    for insight in insights:
        with st.container(border=True):
            st.markdown(f"{INSIGHT_ICONS[insight.type]} **{insight.title}**")
            if insight.description:
                st.write(insight.description)
            if insight.recommendation:
                st.markdown(f"**Recommendation:** {insight.recommendation}")
            st.progress(insight.confidence, text=f"Confidence: {insight.confidence:.0%}")


def render_chart_grid(df: pd.DataFrame, columns: Sequence[DataColumn], selected: Sequence[str]) -> None:
    by_name = {c.name: c for c in columns}
    charts = [by_name[name] for name in selected if name in by_name]
    if not charts:
        st.info("Select one or more columns to visualize.")
        return

    left, right = st.columns(2)
    for i, column in enumerate(charts):
        with (left if i % 2 == 0 else right):
            fig = build_figure(df, column, choose_chart_type(column, len(df)))
            st.plotly_chart(fig, use_container_width=True, key=f"chart_{column.name}")
