"""
Chart Selection Data Models

Internal data models for the chart selection system.
These are separate from API models to maintain clean separation of concerns.
"""

from typing import Dict, List, Any, Optional, Tuple
from enum import Enum
from dataclasses import dataclass, field


class ChartType(str, Enum):
    """Supported chart types."""
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    DOUGHNUT = "doughnut"

    @property
    def is_radial(self) -> bool:
        return self in (ChartType.PIE, ChartType.DOUGHNUT)


# (red, green, blue) entries, indexed by series position modulo length.
PALETTE: List[Tuple[int, int, int]] = [
    (16, 163, 127),
    (102, 126, 234),
    (255, 107, 107),
    (255, 159, 64),
    (75, 192, 192),
    (153, 102, 255),
    (255, 205, 86),
    (54, 162, 235),
]

OPAQUE_ALPHA = 1
FILL_ALPHA = 0.2


def palette_color(index: int, alpha: float = OPAQUE_ALPHA) -> str:
    red, green, blue = PALETTE[index % len(PALETTE)]
    return f"rgba({red}, {green}, {blue}, {alpha})"


@dataclass
class ChartSeries:
    """One named series of values, aligned with the chart labels."""
    name: str
    values: List[float]
    border_color: Optional[str] = None
    background_color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'values': list(self.values)}


@dataclass
class ChartSpec:
    """Render-ready chart description."""
    chart_type: ChartType
    title: str
    labels: List[str]
    series: List[ChartSeries] = field(default_factory=list)

    def is_aligned(self) -> bool:
        """Every series carries exactly one value per label."""
        return all(len(series.values) == len(self.labels) for series in self.series)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'chart_type': self.chart_type.value,
            'title': self.title,
            'labels': list(self.labels),
            'series': [series.to_dict() for series in self.series]
        }

    def to_chart_data(self) -> Dict[str, Any]:
        """Chart.js style {labels, datasets} payload for the frontend."""
        datasets = []
        for series in self.series:
            dataset = {
                'label': series.name,
                'data': list(series.values),
                'borderColor': series.border_color,
                'backgroundColor': series.background_color,
                'borderWidth': 2,
            }
            if self.chart_type.is_radial:
                dataset['backgroundColor'] = [palette_color(i) for i in range(len(self.labels))]
                dataset['borderWidth'] = 1
            datasets.append(dataset)
        return {'labels': list(self.labels), 'datasets': datasets}


@dataclass
class EligibilityResult:
    """Result of chart eligibility analysis."""
    eligible: bool
    reason: str
    primary_column: Optional[str] = None
    label_column: Optional[str] = None
    numeric_columns: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'eligible': self.eligible,
            'reason': self.reason,
            'primary_column': self.primary_column,
            'label_column': self.label_column,
            'numeric_columns': list(self.numeric_columns)
        }


class ChartSettings:
    """Configuration settings for chart selection."""

    def __init__(self):
        # Payload bound
        self.max_sample_rows = 50

        # Pie detection: few labels whose values add up to roughly 100
        self.max_pie_labels = 6
        self.pie_total = 100.0
        self.pie_tolerance = 5.0

        # Line detection for temporal labels
        self.min_temporal_line_labels = 5

        # Bar detection
        self.max_bar_labels = 7

        self.default_title = "Data Visualization"
