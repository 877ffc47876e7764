"""
Chart Selection Exceptions

Custom exceptions for the chart selection system.
"""


class ChartGenerationError(Exception):
    """Base exception for chart generation errors."""

    def __init__(self, message: str, chart_type: str = None, data_size: int = None):
        super().__init__(message)
        self.chart_type = chart_type
        self.data_size = data_size


class DataIneligibleError(ChartGenerationError):
    """Raised when data is not eligible for chart generation."""

    def __init__(self, reason: str, data_size: int = None):
        super().__init__(f"Data not eligible for charts: {reason}", data_size=data_size)
        self.reason = reason


class NoNumericDataError(DataIneligibleError):
    """Raised when no column is numeric."""

    def __init__(self, data_size: int = None):
        super().__init__("No numeric columns available for visualization", data_size=data_size)


class ChartConfigurationError(ChartGenerationError):
    """Raised when a chart description is invalid."""

    def __init__(self, message: str, chart_type: str = None):
        super().__init__(f"Chart configuration error: {message}", chart_type=chart_type)
