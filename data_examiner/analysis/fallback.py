"""
Local Fallback Analysis

Templated markdown summary built only from local statistics, used when the
analysis service cannot be reached.
"""

from typing import List, Optional

from ..charts.models import ChartSpec
from ..profiling.models import ColumnProfile, DataProfile, NumericStats, TemporalStats, TextStats

UNAVAILABLE_NOTE = (
    "_The analysis service is currently unavailable, so this summary was "
    "generated from local statistics._"
)


def _fmt(number: float) -> str:
    if float(number).is_integer():
        return f"{int(number):,}"
    return f"{number:,.2f}"


def describe_column(column: ColumnProfile) -> str:
    """One markdown bullet summarizing a column."""
    header = f"- **{column.name}** ({column.inferred_type.value})"
    stats = column.statistics
    if isinstance(stats, NumericStats):
        detail = (
            f"min {_fmt(stats.min)}, max {_fmt(stats.max)}, mean {_fmt(stats.mean)}, "
            f"median {_fmt(stats.median)}, sum {_fmt(stats.sum)}"
        )
    elif isinstance(stats, TemporalStats):
        detail = f"{stats.earliest} to {stats.latest}, {stats.distinct_day_count} distinct days"
    elif isinstance(stats, TextStats):
        detail = f"{stats.unique_count} unique values"
        if stats.most_common:
            detail += (
                f", most common \"{stats.most_common.value}\" "
                f"({stats.most_common.count}, {stats.most_common.percentage}%)"
            )
    else:
        detail = "no values"
    if column.missing_count:
        detail += f", {column.missing_count} missing"
    return f"{header}: {detail}"


def build_fallback_analysis(profile: DataProfile, chart: Optional[ChartSpec]) -> str:
    """
    Build a markdown analysis from local statistics only.

    Args:
        profile: Profile of the analysed dataset
        chart: Locally selected chart, if any

    Returns:
        Markdown analysis text
    """
    lines: List[str] = [
        "# Overview",
        f"The dataset contains {profile.row_count:,} rows and {profile.column_count} columns.",
        "",
    ]

    if profile.columns:
        lines.append("## Column Summary")
        lines.extend(describe_column(column) for column in profile.columns)
        lines.append("")

    lines.extend([
        "## Data Quality",
        f"Missing values: {profile.total_missing:,}. Duplicate rows: {profile.duplicate_rows:,}.",
        "",
        "## Chart",
    ])
    if chart is not None:
        lines.append(f"A {chart.chart_type.value} chart of {len(chart.labels)} points is shown: {chart.title}.")
    else:
        lines.append("No numeric column was available for a chart.")

    lines.extend(["", UNAVAILABLE_NOTE])
    return "\n".join(lines)
