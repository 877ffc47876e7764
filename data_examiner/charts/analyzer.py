"""
Chart Eligibility Analyzer

Analyzes a data profile to determine whether a chart can be built and
which columns feed it.
"""

import logging

from ..profiling.models import DataProfile
from .models import EligibilityResult, ChartSettings
from .exceptions import DataIneligibleError, NoNumericDataError

logger = logging.getLogger(__name__)


class ChartEligibilityAnalyzer:
    """Decides chart eligibility and picks the value and label columns."""

    def __init__(self, settings: ChartSettings = None):
        self.settings = settings or ChartSettings()

    def analyze(self, profile: DataProfile) -> EligibilityResult:
        """
        Analyze a profile to determine chart eligibility.

        Args:
            profile: Column profiles of the dataset

        Returns:
            EligibilityResult naming the primary numeric column and,
            when one exists, the temporal label column

        Raises:
            DataIneligibleError: If the data cannot be charted
        """
        if profile.row_count == 0:
            raise DataIneligibleError("No data to visualize", data_size=0)

        numeric_columns = profile.numeric_columns()
        if not numeric_columns:
            raise NoNumericDataError(data_size=profile.row_count)

        temporal_columns = profile.temporal_columns()
        label_column = temporal_columns[0] if temporal_columns else None

        return EligibilityResult(
            eligible=True,
            reason="Data is suitable for chart generation",
            primary_column=numeric_columns[0],
            label_column=label_column,
            numeric_columns=numeric_columns,
        )
