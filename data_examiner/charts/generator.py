"""
Chart Generator

Builds render-ready chart specs, either from a local dataset or from a
chart description returned by the analysis service, and applies the
deterministic color palette.
"""

from typing import Dict, List, Any, Optional, Tuple
import logging

from ..ingestion.dataset import Dataset
from ..ingestion.values import as_datetime, as_number, format_temporal, parse_number
from .models import (
    ChartType, ChartSpec, ChartSeries, ChartSettings, EligibilityResult,
    FILL_ALPHA, OPAQUE_ALPHA, palette_color,
)
from .detector import ChartTypeDetector
from .exceptions import ChartConfigurationError, ChartGenerationError

logger = logging.getLogger(__name__)


class ChartGenerator:
    """Generates chart specs from datasets and external descriptions."""

    def __init__(self, settings: ChartSettings = None, detector: ChartTypeDetector = None):
        self.settings = settings or ChartSettings()
        self.detector = detector or ChartTypeDetector(self.settings)

    def generate_chart(self, dataset: Dataset, eligibility: EligibilityResult) -> ChartSpec:
        """
        Generate a chart for the primary numeric column.

        Args:
            dataset: Parsed dataset
            eligibility: Analyzer result naming the primary and label columns

        Returns:
            ChartSpec with one series aligned to its labels

        Raises:
            ChartGenerationError: If no record carries a usable value
        """
        primary = eligibility.primary_column
        label_column = eligibility.label_column
        labels, values, dated = self._extract_points(dataset, primary, label_column)

        if not values:
            raise ChartGenerationError(
                f"No numeric values for '{primary}' in the first {self.settings.max_sample_rows} rows",
                data_size=len(dataset),
            )

        # Labels count as temporal only when no record fell back to an ordinal label.
        temporal = label_column is not None and dated == len(labels)
        chart_type = self.detector.detect(labels, values, temporal_labels=temporal)
        title = f"{primary} over {label_column}" if label_column else f"Analysis of {primary}"

        spec = ChartSpec(
            chart_type=chart_type,
            title=title,
            labels=labels,
            series=[ChartSeries(name=primary, values=values)],
        )
        return self.finalize(spec)

    def _extract_points(self, dataset: Dataset, primary: str, label_column: Optional[str]) -> Tuple[List[str], List[float], int]:
        labels: List[str] = []
        values: List[float] = []
        dated = 0
        for position, record in enumerate(dataset.records[:self.settings.max_sample_rows]):
            number = as_number(dataset.value(record, primary))
            if number is None:
                continue
            values.append(number)
            label = self._temporal_label(dataset, record, label_column)
            if label is None:
                label = f"Item {position + 1}"
            else:
                dated += 1
            labels.append(label)
        return labels, values, dated

    @staticmethod
    def _temporal_label(dataset: Dataset, record, label_column: Optional[str]) -> Optional[str]:
        if label_column is None:
            return None
        moment = as_datetime(dataset.value(record, label_column))
        return format_temporal(moment) if moment is not None else None

    def finalize(self, spec: ChartSpec) -> ChartSpec:
        """Apply the radial single-series guard and assign palette colors."""
        if spec.chart_type.is_radial and len(spec.series) > 1:
            logger.info(f"{spec.chart_type.value} chart: keeping only the first of {len(spec.series)} series")
            spec.series = spec.series[:1]

        for index, series in enumerate(spec.series):
            series.border_color = palette_color(index, OPAQUE_ALPHA)
            series.background_color = palette_color(index, FILL_ALPHA)
        return spec

    def from_description(self, description: Dict[str, Any]) -> ChartSpec:
        """
        Build a chart spec from an externally supplied description.

        Accepted shapes: {"chart": {...}}, {"data": {...}, "title", "type"},
        {"labels", "datasets"}, {"labels", "series"} and
        {"chartData": {...}, "chartTitle"}.

        Raises:
            ChartConfigurationError: If the description is not a usable chart
        """
        title, declared_type, body = self._unwrap(description)
        labels = body.get("labels")
        if not isinstance(labels, list) or not labels:
            raise ChartConfigurationError("labels must be a non-empty list")
        labels = [str(label) for label in labels]

        series = self._read_series(body)
        for item in series:
            if len(item.values) != len(labels):
                raise ChartConfigurationError(
                    f"series '{item.name}' has {len(item.values)} values for {len(labels)} labels"
                )

        chart_type = self._resolve_type(declared_type, labels, series[0].values)
        spec = ChartSpec(
            chart_type=chart_type,
            title=str(title or self.settings.default_title),
            labels=labels,
            series=series,
        )
        return self.finalize(spec)

    def _unwrap(self, description: Any) -> Tuple[Optional[str], Optional[str], Dict[str, Any]]:
        if not isinstance(description, dict):
            raise ChartConfigurationError("chart description must be an object")

        if isinstance(description.get("chart"), dict):
            return self._unwrap(description["chart"])
        if isinstance(description.get("chartData"), dict):
            return description.get("chartTitle"), description.get("chartType"), description["chartData"]
        if isinstance(description.get("data"), dict):
            return description.get("title"), description.get("type"), description["data"]
        if "labels" in description:
            return description.get("title"), description.get("type"), description
        raise ChartConfigurationError("no chart data found")

    def _read_series(self, body: Dict[str, Any]) -> List[ChartSeries]:
        raw_series = body.get("series")
        if raw_series is None:
            raw_series = body.get("datasets")
        if not isinstance(raw_series, list) or not raw_series:
            raise ChartConfigurationError("at least one series is required")

        series: List[ChartSeries] = []
        for index, item in enumerate(raw_series):
            if not isinstance(item, dict):
                raise ChartConfigurationError("each series must be an object")
            name = item.get("name") or item.get("label") or f"Dataset {index + 1}"
            raw_values = item.get("values")
            if raw_values is None:
                raw_values = item.get("data")
            if not isinstance(raw_values, list):
                raise ChartConfigurationError(f"series '{name}' has no values")
            series.append(ChartSeries(name=str(name), values=[self._number(value) for value in raw_values]))
        return series

    @staticmethod
    def _number(value: Any) -> float:
        if isinstance(value, bool):
            raise ChartConfigurationError(f"non-numeric value: {value!r}")
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            number = parse_number(value)
            if number is not None:
                return number
        raise ChartConfigurationError(f"non-numeric value: {value!r}")

    def _resolve_type(self, declared_type: Optional[str], labels: List[str], values: List[float]) -> ChartType:
        if isinstance(declared_type, str):
            try:
                return ChartType(declared_type.strip().lower())
            except ValueError:
                logger.debug(f"Unrecognized chart type {declared_type!r}, detecting instead")
        temporal = self.detector.labels_look_temporal(labels)
        return self.detector.detect(labels, values, temporal_labels=temporal)
