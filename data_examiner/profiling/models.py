"""
Profiling Data Models

Column profiles and dataset-level summaries produced by type inference.
"""

from typing import Dict, List, Any, Optional, Union
from enum import Enum
from dataclasses import dataclass, field


class ColumnType(str, Enum):
    """Inferred column types."""
    NUMERIC = "numeric"
    TEMPORAL = "temporal"
    CATEGORICAL = "categorical"
    TEXT = "text"
    UNKNOWN = "unknown"


@dataclass
class NumericStats:
    count: int
    min: float
    max: float
    mean: float
    median: float
    sum: float
    stddev: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'count': self.count,
            'min': self.min,
            'max': self.max,
            'mean': self.mean,
            'median': self.median,
            'sum': self.sum,
            'stddev': self.stddev
        }


@dataclass
class TemporalStats:
    count: int
    earliest: str
    latest: str
    distinct_day_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'count': self.count,
            'earliest': self.earliest,
            'latest': self.latest,
            'distinct_day_count': self.distinct_day_count
        }


@dataclass
class MostCommon:
    value: str
    count: int
    percentage: float

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'count': self.count, 'percentage': self.percentage}


@dataclass
class TextStats:
    count: int
    unique_count: int
    most_common: Optional[MostCommon]
    sample_values: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'count': self.count,
            'unique_count': self.unique_count,
            'most_common': self.most_common.to_dict() if self.most_common else None,
            'sample_values': list(self.sample_values)
        }


ColumnStats = Union[NumericStats, TemporalStats, TextStats]


@dataclass
class ColumnProfile:
    """Inferred type plus statistics for one column."""
    name: str
    inferred_type: ColumnType
    present_count: int
    missing_count: int
    statistics: Optional[ColumnStats] = None

    @property
    def is_categorical(self) -> bool:
        return self.inferred_type == ColumnType.CATEGORICAL

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'name': self.name,
            'type': self.inferred_type.value,
            'present': self.present_count,
            'missing': self.missing_count,
            'statistics': self.statistics.to_dict() if self.statistics else None
        }


@dataclass
class DataProfile:
    """Per-column profiles plus the data quality rollup for one dataset."""
    row_count: int
    columns: List[ColumnProfile] = field(default_factory=list)
    total_missing: int = 0
    duplicate_rows: int = 0

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def column(self, name: str) -> Optional[ColumnProfile]:
        for profile in self.columns:
            if profile.name == name:
                return profile
        return None

    def columns_of_type(self, column_type: ColumnType) -> List[ColumnProfile]:
        return [profile for profile in self.columns if profile.inferred_type == column_type]

    def numeric_columns(self) -> List[str]:
        return [profile.name for profile in self.columns_of_type(ColumnType.NUMERIC)]

    def temporal_columns(self) -> List[str]:
        return [profile.name for profile in self.columns_of_type(ColumnType.TEMPORAL)]

    def categorical_columns(self) -> List[str]:
        return [profile.name for profile in self.columns_of_type(ColumnType.CATEGORICAL)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'row_count': self.row_count,
            'column_count': self.column_count,
            'columns': [profile.to_dict() for profile in self.columns],
            'data_quality': {
                'total_missing': self.total_missing,
                'duplicate_rows': self.duplicate_rows
            }
        }

    def to_summary(self) -> Dict[str, Any]:
        """Compact column summary sent along with analysis requests."""
        return {
            'rows': self.row_count,
            'columns': {
                profile.name: {
                    'type': profile.inferred_type.value,
                    'missing': profile.missing_count,
                    **(profile.statistics.to_dict() if profile.statistics else {})
                }
                for profile in self.columns
            },
            'total_missing': self.total_missing,
            'duplicate_rows': self.duplicate_rows
        }


class ProfileSettings:
    """Thresholds used by type inference."""

    def __init__(self):
        # Categorical eligibility
        self.max_categorical_unique = 10
        self.max_categorical_ratio = 0.2

        # Text statistics
        self.max_sample_values = 5
        self.percentage_precision = 2
