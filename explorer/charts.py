# explorer/charts.py

from typing import List, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from explorer.profiler import ordered_value_counts
from schemas import ColumnKind, DataColumn

COLORS = ["#4F46E5", "#7C3AED", "#EC4899", "#F59E0B", "#10B981"]
LINE_ROW_THRESHOLD = 20
PIE_UNIQUE_LIMIT = 10
DEFAULT_SELECTION = 4


def choose_chart_type(column: DataColumn, row_count: int) -> str:
    if column.type == ColumnKind.NUMERIC:
        return "line" if row_count > LINE_ROW_THRESHOLD else "bar"
    if column.type == ColumnKind.DATE:
        return "line"
    unique = column.summary.unique_values
    return "pie" if unique and unique < PIE_UNIQUE_LIMIT else "bar"


def value_counts_frame(df: pd.DataFrame, column: str) -> pd.DataFrame:
    counts = ordered_value_counts(df[column].astype(str))
    return pd.DataFrame({"name": counts.index.astype(str), "value": counts.values})


def _numeric_frame(df: pd.DataFrame, column: str) -> pd.DataFrame:
    return pd.DataFrame({
        "row": range(1, len(df) + 1),
        column: pd.to_numeric(df[column], errors="coerce").values,
    })


def build_figure(df: pd.DataFrame, column: DataColumn, chart_type: str) -> go.Figure:
    name = column.name

    if column.type == ColumnKind.DATE:
        dates = pd.to_datetime(df[name], errors="coerce", format="mixed").dropna()
        per_date = dates.dt.normalize().value_counts().sort_index()
        data = pd.DataFrame({"date": per_date.index, "count": per_date.values})
        fig = px.line(data, x="date", y="count", markers=True, color_discrete_sequence=COLORS)
    elif chart_type == "pie":
        fig = px.pie(value_counts_frame(df, name), names="name", values="value",
                     color_discrete_sequence=COLORS)
    elif column.type == ColumnKind.NUMERIC and chart_type == "line":
        fig = px.line(_numeric_frame(df, name), x="row", y=name, markers=True,
                      color_discrete_sequence=COLORS)
    elif column.type == ColumnKind.NUMERIC:
        data = _numeric_frame(df, name)
        data["label"] = data["row"].astype(str)
        fig = px.bar(data, x="row", y=name, color="label", color_discrete_sequence=COLORS)
        fig.update_layout(showlegend=False)
    else:
        data = value_counts_frame(df, name)
        fig = px.bar(data, x="name", y="value", color="name", color_discrete_sequence=COLORS)
        fig.update_layout(showlegend=False, xaxis_title=name, yaxis_title="count")

    fig.update_layout(title=name, margin=dict(l=10, r=10, t=40, b=10), height=320)
    return fig


def default_selected_columns(columns: Sequence[DataColumn], limit: int = DEFAULT_SELECTION) -> List[str]:
    return [c.name for c in columns[:limit]]


def filter_columns(columns: Sequence[DataColumn], query: str) -> List[DataColumn]:
    query = (query or "").strip().lower()
    if not query:
        return list(columns)
    return [c for c in columns if query in c.name.lower()]


def toggle_column(selected: Sequence[str], name: str) -> List[str]:
    if name in selected:
        return [c for c in selected if c != name]
    return [*selected, name]
