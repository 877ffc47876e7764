"""Custom exceptions for the data examiner service."""


class DataExaminerError(Exception):
    """Base exception for all data examiner errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseError(DataExaminerError):
    """Raised when input is empty or cannot be parsed into a dataset."""

    def __init__(self, message: str, input_format: str = None):
        super().__init__(message)
        self.input_format = input_format


class UnsupportedFormatError(DataExaminerError):
    """Raised when a file extension or content type is not recognized."""

    def __init__(self, extension: str):
        super().__init__(f"Unsupported file format: {extension or '(none)'}")
        self.extension = extension


class ValidationError(DataExaminerError):
    """Raised when a required request field is missing or invalid."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class UpstreamAnalysisError(DataExaminerError):
    """Raised when the analysis service is unreachable, fails or returns garbage."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(f"Analysis service error: {message}")
        self.status_code = status_code
