"""
Statistical Summarizer

Builds column profiles and the data quality rollup for a dataset.
"""

from typing import List, Set, Tuple
from collections import Counter
import logging

import numpy as np

from ..ingestion.dataset import Dataset, Record
from ..ingestion.values import Scalar, as_datetime, as_number, is_missing, to_display
from .inference import infer_column_type
from .models import (
    ColumnProfile, ColumnType, DataProfile, MostCommon,
    NumericStats, ProfileSettings, TemporalStats, TextStats,
)

logger = logging.getLogger(__name__)


class DataProfiler:
    """Computes column profiles for a dataset on demand."""

    def __init__(self, settings: ProfileSettings = None):
        self.settings = settings or ProfileSettings()

    def profile(self, dataset: Dataset) -> DataProfile:
        """
        Profile every column of the dataset.

        Args:
            dataset: Parsed dataset

        Returns:
            DataProfile with per-column profiles and quality metrics
        """
        row_count = len(dataset)
        if row_count == 0:
            return DataProfile(row_count=0)

        columns = [
            self.profile_column(name, dataset.column(name), row_count)
            for name in dataset.fields
        ]
        profile = DataProfile(
            row_count=row_count,
            columns=columns,
            total_missing=sum(column.missing_count for column in columns),
            duplicate_rows=count_duplicate_rows(dataset.records),
        )
        types = {column.name: column.inferred_type.value for column in columns}
        logger.debug(f"Profiled {row_count} rows: {types}")
        return profile

    def profile_column(self, name: str, values: List[Scalar], row_count: int) -> ColumnProfile:
        present = [value for value in values if not is_missing(value)]
        column_type = infer_column_type(present, row_count, self.settings)

        if column_type == ColumnType.NUMERIC:
            statistics = numeric_stats([as_number(value) for value in present])
        elif column_type == ColumnType.TEMPORAL:
            statistics = self._temporal_stats(present)
        elif column_type in (ColumnType.CATEGORICAL, ColumnType.TEXT):
            statistics = self._text_stats(present)
        else:
            statistics = None

        return ColumnProfile(
            name=name,
            inferred_type=column_type,
            present_count=len(present),
            missing_count=len(values) - len(present),
            statistics=statistics,
        )

    def _temporal_stats(self, present: List[Scalar]) -> TemporalStats:
        moments = [as_datetime(value) for value in present]
        days = {moment.date() for moment in moments}
        return TemporalStats(
            count=len(moments),
            earliest=min(moments).date().isoformat(),
            latest=max(moments).date().isoformat(),
            distinct_day_count=len(days),
        )

    def _text_stats(self, present: List[Scalar]) -> TextStats:
        displays = [to_display(value) for value in present]
        # Counter keeps first-seen order, and most_common sorts stably,
        # so ties resolve to the first encountered value.
        counts = Counter(displays)
        most_common = None
        if counts:
            value, count = counts.most_common(1)[0]
            most_common = MostCommon(
                value=value,
                count=count,
                percentage=round(count / len(displays) * 100, self.settings.percentage_precision),
            )
        return TextStats(
            count=len(displays),
            unique_count=len(counts),
            most_common=most_common,
            sample_values=list(counts)[:self.settings.max_sample_values],
        )


def numeric_stats(numbers: List[float]) -> NumericStats:
    """Population statistics (stddev divides by N)."""
    values = np.asarray(numbers, dtype=float)
    return NumericStats(
        count=int(values.size),
        min=float(values.min()),
        max=float(values.max()),
        mean=float(values.mean()),
        median=float(np.median(values)),
        sum=float(values.sum()),
        stddev=float(values.std(ddof=0)),
    )


def _canonical_record(record: Record) -> Tuple[Tuple[str, Scalar], ...]:
    present = [(key, value) for key, value in record.items() if not is_missing(value)]
    return tuple(sorted(present, key=lambda item: item[0]))


def count_duplicate_rows(records: List[Record]) -> int:
    """Rows structurally equal to an earlier row."""
    seen: Set[Tuple] = set()
    duplicates = 0
    for record in records:
        key = _canonical_record(record)
        if key in seen:
            duplicates += 1
        seen.add(key)
    return duplicates
