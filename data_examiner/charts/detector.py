"""
Chart Type Detector

Picks a chart type from the shape of the labels and values. Rules are
evaluated in order and the first match wins:

1. pie   - at most 6 distinct labels and values summing to 100 +/- 5
2. line  - temporal labels with at least 5 distinct values
3. bar   - at most 7 distinct labels
4. line  - everything else
"""

from typing import Sequence
import logging

from ..ingestion.values import looks_like_date
from .models import ChartType, ChartSettings

logger = logging.getLogger(__name__)


class ChartTypeDetector:
    """Deterministically detects the chart type for a labelled series."""

    def __init__(self, settings: ChartSettings = None):
        self.settings = settings or ChartSettings()

    def detect(self, labels: Sequence[str], values: Sequence[float], temporal_labels: bool) -> ChartType:
        """
        Detect the chart type.

        Args:
            labels: Chart labels, one per value
            values: Values of the primary series
            temporal_labels: Whether the labels come from a temporal column

        Returns:
            The selected ChartType
        """
        distinct_labels = len(set(labels))

        if self.is_pie_candidate(distinct_labels, values):
            return ChartType.PIE
        if self.is_temporal_line_candidate(distinct_labels, temporal_labels):
            return ChartType.LINE
        if self.is_bar_candidate(distinct_labels):
            return ChartType.BAR
        return ChartType.LINE

    def is_pie_candidate(self, distinct_labels: int, values: Sequence[float]) -> bool:
        if distinct_labels > self.settings.max_pie_labels:
            return False
        return abs(sum(values) - self.settings.pie_total) <= self.settings.pie_tolerance

    def is_temporal_line_candidate(self, distinct_labels: int, temporal_labels: bool) -> bool:
        return temporal_labels and distinct_labels >= self.settings.min_temporal_line_labels

    def is_bar_candidate(self, distinct_labels: int) -> bool:
        return distinct_labels <= self.settings.max_bar_labels

    @staticmethod
    def labels_look_temporal(labels: Sequence[str]) -> bool:
        """Whether every label is date-shaped (used for externally supplied charts)."""
        return bool(labels) and all(looks_like_date(str(label)) for label in labels)
