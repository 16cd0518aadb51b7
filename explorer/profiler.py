# explorer/profiler.py
"""
Column profiling for uploaded datasets.

Every cell arrives as a string (see ``upload.robust_read_csv``). Each column is
classified as numeric, date or categorical and gets a kind-dependent summary;
a few derived insights (distribution, outliers, correlations) are computed on
top of the numeric columns.
"""

import re
import logging
from itertools import combinations
from typing import Iterable, List, Optional

import pandas as pd

from schemas import ColumnKind, ColumnStats, DataColumn, DataInsight, DatasetSummary

MOST_COMMON_LIMIT = 5
DISTRIBUTION_SIGNIFICANCE = 0.8
CORRELATION_THRESHOLD = 0.7
OUTLIER_IQR_FACTOR = 1.5

_DATE_TIME = r"(?:[ T]\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?)?(?:Z|[+-]\d{2}:?\d{2})?"
DATE_PATTERN = re.compile(
    r"^(?:\d{4}[-/.]\d{1,2}[-/.]\d{1,2}|\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4})" + _DATE_TIME + r"$"
)


def format_number(value: Optional[float]) -> str:
    """Render integral floats without the trailing '.0'."""
    if value is None or pd.isna(value):
        return "n/a"
    value = float(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


def _as_strings(values: Iterable) -> pd.Series:
    series = pd.Series(list(values), dtype=object)
    return series.where(series.notna(), "").astype(str)


def _non_blank(series: pd.Series) -> pd.Series:
    return series[series.str.strip() != ""]


def _to_numeric(series: pd.Series) -> pd.Series:
    """Blank cells become NaN; anything else that isn't a number too."""
    stripped = series.str.strip()
    return pd.to_numeric(stripped.mask(stripped == ""), errors="coerce")


def _parse_dates(series: pd.Series) -> Optional[pd.Series]:
    if not series.str.strip().str.match(DATE_PATTERN.pattern).all():
        return None
    try:
        parsed = pd.to_datetime(series.str.strip(), errors="coerce", format="mixed")
    except (ValueError, TypeError):
        return None
    if parsed.isna().any():
        return None
    return parsed


def classify_column(values: Iterable) -> ColumnKind:
    series = _non_blank(_as_strings(values))
    if series.empty:
        return ColumnKind.CATEGORICAL
    if _to_numeric(series).notna().all():
        return ColumnKind.NUMERIC
    if _parse_dates(series) is not None:
        return ColumnKind.DATE
    return ColumnKind.CATEGORICAL


def ordered_value_counts(series: pd.Series) -> pd.Series:
    """Value counts indexed in order of first appearance."""
    first_seen = series.drop_duplicates()
    return series.value_counts().reindex(first_seen.values)


def most_common_values(series: pd.Series, limit: int = MOST_COMMON_LIMIT) -> List[str]:
    # stable sort keeps first-appearance order for ties
    counts = ordered_value_counts(series).sort_values(ascending=False, kind="stable")
    return [str(v) for v in counts.index[:limit]]


def profile_column(name: str, values: Iterable) -> DataColumn:
    series = _as_strings(values)
    kind = classify_column(series)
    non_blank = _non_blank(series)

    if kind == ColumnKind.NUMERIC:
        numbers = _to_numeric(non_blank)
        stats = ColumnStats(
            min=float(numbers.min()),
            max=float(numbers.max()),
            mean=float(numbers.mean()),
            median=float(numbers.median()),
        )
    elif kind == ColumnKind.DATE:
        dates = _parse_dates(non_blank)
        stats = ColumnStats(
            unique_values=int(series.nunique()),
            earliest=dates.min().isoformat(),
            latest=dates.max().isoformat(),
        )
    else:
        stats = ColumnStats(
            unique_values=int(series.nunique()),
            most_common=most_common_values(series),
        )

    return DataColumn(name=str(name), type=kind, summary=stats)


# ───────────────────────── derived insights ──────────────────────────

def _distribution_insight(column: DataColumn) -> DataInsight:
    s = column.summary
    return DataInsight(
        column_name=column.name,
        insight_type="distribution",
        description=(
            f"{column.name} ranges from {format_number(s.min)} to {format_number(s.max)} "
            f"with an average of {s.mean:.2f}"
        ),
        significance=DISTRIBUTION_SIGNIFICANCE,
    )


def _outlier_insight(name: str, numbers: pd.Series) -> Optional[DataInsight]:
    numbers = numbers.dropna()
    if len(numbers) < 4:
        return None
    q1, q3 = numbers.quantile(0.25), numbers.quantile(0.75)
    iqr = q3 - q1
    if iqr == 0:
        return None
    low, high = q1 - OUTLIER_IQR_FACTOR * iqr, q3 + OUTLIER_IQR_FACTOR * iqr
    count = int(((numbers < low) | (numbers > high)).sum())
    if not count:
        return None
    share = count / len(numbers)
    return DataInsight(
        column_name=name,
        insight_type="outlier",
        description=(
            f"{name} has {count} potential outlier{'s' if count > 1 else ''} "
            f"outside [{format_number(round(low, 4))}, {format_number(round(high, 4))}]"
        ),
        significance=round(min(1.0, 0.5 + share), 2),
    )


def _correlation_insights(numeric: pd.DataFrame) -> List[DataInsight]:
    insights: List[DataInsight] = []
    if numeric.shape[1] < 2:
        return insights
    corr = numeric.corr()
    for a, b in combinations(numeric.columns, 2):
        r = corr.loc[a, b]
        if pd.isna(r) or abs(r) < CORRELATION_THRESHOLD:
            continue
        direction = "positively" if r > 0 else "negatively"
        insights.append(DataInsight(
            column_name=f"{a} & {b}",
            insight_type="correlation",
            description=f"{a} and {b} are {direction} correlated (r = {r:.2f})",
            significance=round(min(1.0, abs(float(r))), 2),
        ))
    return insights


def derive_insights(df: pd.DataFrame, columns: List[DataColumn]) -> List[DataInsight]:
    insights: List[DataInsight] = []
    numeric_names = [c.name for c in columns if c.type == ColumnKind.NUMERIC]
    numeric = pd.DataFrame({
        name: _to_numeric(_as_strings(df[name])) for name in numeric_names
    })

    for column in columns:
        if column.type != ColumnKind.NUMERIC:
            continue
        insights.append(_distribution_insight(column))
        outlier = _outlier_insight(column.name, numeric[column.name])
        if outlier:
            insights.append(outlier)

    insights.extend(_correlation_insights(numeric))
    return insights


def analyze_data(df: pd.DataFrame) -> DatasetSummary:
    """Profile every column of ``df`` and collect the derived insights."""
    # duplicate header names are de-duplicated by pandas on read (a, a.1, ...)
    columns = [profile_column(name, df[name]) for name in df.columns]
    insights = derive_insights(df, columns)

    logging.info(
        f"Profiled {df.shape[1]} columns over {len(df)} rows "
        f"({sum(c.type == ColumnKind.NUMERIC for c in columns)} numeric), {len(insights)} insights"
    )

    return DatasetSummary(
        row_count=len(df),
        column_count=df.shape[1],
        columns=columns,
        insights=insights,
    )
