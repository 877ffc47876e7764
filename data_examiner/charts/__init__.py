"""
Charts Package - Automatic Chart Selection for Data Examiner

This package picks a chart shape for a profiled dataset and builds
render-ready series with deterministic colors.

Core Components:
- ChartOrchestrator: Main interface for chart selection and reconciliation
- ChartEligibilityAnalyzer: Determines if data is suitable for charts
- ChartTypeDetector: Ordered chart type rules (pie, temporal line, bar, line)
- ChartGenerator: Builds ChartSpec objects and assigns palette colors

Usage:
    from data_examiner.charts import ChartOrchestrator

    orchestrator = ChartOrchestrator()
    spec = orchestrator.select_chart(dataset, profile)
"""

from .orchestrator import ChartOrchestrator
from .analyzer import ChartEligibilityAnalyzer
from .detector import ChartTypeDetector
from .generator import ChartGenerator
from .models import ChartType, ChartSpec, ChartSeries, ChartSettings, EligibilityResult, PALETTE
from .exceptions import ChartGenerationError, DataIneligibleError, ChartConfigurationError

__all__ = [
    'ChartOrchestrator',
    'ChartEligibilityAnalyzer',
    'ChartTypeDetector',
    'ChartGenerator',
    'ChartType',
    'ChartSpec',
    'ChartSeries',
    'ChartSettings',
    'EligibilityResult',
    'PALETTE',
    'ChartGenerationError',
    'DataIneligibleError',
    'ChartConfigurationError'
]
