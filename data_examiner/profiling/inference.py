"""
Column Type Inference

Classifies a column from its present values. Order of precedence:
unknown (all missing), numeric, temporal, then categorical or text.
"""

from typing import List

from ..ingestion.values import Scalar, as_datetime, as_number, to_display
from .models import ColumnType, ProfileSettings


def is_numeric_column(present: List[Scalar]) -> bool:
    return bool(present) and all(as_number(value) is not None for value in present)


def is_temporal_column(present: List[Scalar]) -> bool:
    return bool(present) and all(as_datetime(value) is not None for value in present)


def is_categorical(unique_count: int, row_count: int, settings: ProfileSettings) -> bool:
    """Low-cardinality text: at most 10 distinct values and at most 20% of rows."""
    return (
        unique_count <= settings.max_categorical_unique
        and unique_count <= row_count * settings.max_categorical_ratio
    )


def infer_column_type(present: List[Scalar], row_count: int, settings: ProfileSettings = None) -> ColumnType:
    """
    Infer the type of a column.

    Args:
        present: Non-missing values of the column
        row_count: Total number of rows in the dataset
        settings: Categorical thresholds

    Returns:
        The inferred ColumnType
    """
    settings = settings or ProfileSettings()
    if not present:
        return ColumnType.UNKNOWN
    if is_numeric_column(present):
        return ColumnType.NUMERIC
    if is_temporal_column(present):
        return ColumnType.TEMPORAL

    unique_count = len({to_display(value) for value in present})
    if is_categorical(unique_count, row_count, settings):
        return ColumnType.CATEGORICAL
    return ColumnType.TEXT
