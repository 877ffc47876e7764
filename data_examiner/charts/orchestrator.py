"""
Chart Orchestrator

Main coordinator for chart selection.
Manages the flow from profile analysis to a render-ready chart spec, and
reconciles locally selected charts with externally supplied ones.
"""

from typing import Dict, Any, Optional
import logging

from ..ingestion.dataset import Dataset
from ..profiling.models import DataProfile
from .models import ChartSettings, ChartSpec
from .analyzer import ChartEligibilityAnalyzer
from .detector import ChartTypeDetector
from .generator import ChartGenerator
from .exceptions import ChartConfigurationError, ChartGenerationError, DataIneligibleError

logger = logging.getLogger(__name__)


class ChartOrchestrator:
    """Main class that orchestrates chart selection."""

    def __init__(self, settings: ChartSettings = None):
        self.settings = settings or ChartSettings()
        self.analyzer = ChartEligibilityAnalyzer(self.settings)
        self.detector = ChartTypeDetector(self.settings)
        self.generator = ChartGenerator(self.settings, self.detector)

    def select_chart(self, dataset: Dataset, profile: DataProfile) -> Optional[ChartSpec]:
        """
        Select a chart for the dataset.

        Args:
            dataset: Parsed dataset
            profile: Column profiles computed from the same dataset

        Returns:
            ChartSpec, or None when the data has nothing to chart
        """
        try:
            eligibility = self.analyzer.analyze(profile)
        except DataIneligibleError as e:
            logger.info(f"Data not eligible for charts: {e.reason}")
            return None

        try:
            spec = self.generator.generate_chart(dataset, eligibility)
        except ChartGenerationError as e:
            logger.info(f"Chart generation skipped: {e}")
            return None

        logger.info(f"Selected {spec.chart_type.value} chart for '{eligibility.primary_column}' with {len(spec.labels)} points")
        return spec

    def reconcile(self, local: Optional[ChartSpec], description: Optional[Dict[str, Any]]) -> Optional[ChartSpec]:
        """
        Prefer a valid external chart description over the local chart.

        Args:
            local: Locally selected chart, if any
            description: Chart description parsed from the analysis response

        Returns:
            The external chart when it is valid, otherwise the local one
        """
        if description is None:
            return local
        try:
            return self.generator.from_description(description)
        except ChartConfigurationError as e:
            logger.warning(f"Ignoring invalid chart description: {e}")
            return local
