"""
Profiling Package - Type inference and statistical summaries

Core Components:
- infer_column_type: numeric / temporal / categorical / text / unknown classification
- DataProfiler: per-column statistics and the data quality rollup
"""

from .models import (
    ColumnType, ColumnProfile, DataProfile, ProfileSettings,
    NumericStats, TemporalStats, TextStats, MostCommon,
)
from .inference import infer_column_type, is_categorical
from .summarizer import DataProfiler, count_duplicate_rows, numeric_stats

__all__ = [
    'ColumnType',
    'ColumnProfile',
    'DataProfile',
    'ProfileSettings',
    'NumericStats',
    'TemporalStats',
    'TextStats',
    'MostCommon',
    'infer_column_type',
    'is_categorical',
    'DataProfiler',
    'count_duplicate_rows',
    'numeric_stats',
]
