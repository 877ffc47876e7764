from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from ..exceptions import DataExaminerError, ParseError, UnsupportedFormatError, ValidationError

logger = logging.getLogger(__name__)


def error_status(error: Exception) -> int:
    """HTTP status code for an application error."""
    if isinstance(error, HTTPException):
        return error.status_code
    elif isinstance(error, UnsupportedFormatError):
        return status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    elif isinstance(error, (ParseError, ValidationError)):
        return status.HTTP_400_BAD_REQUEST
    else:
        return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_message(error: Exception) -> str:
    if isinstance(error, HTTPException):
        return str(error.detail)
    elif isinstance(error, DataExaminerError) and error_status(error) != status.HTTP_500_INTERNAL_SERVER_ERROR:
        return error.message
    else:
        return f"Unexpected error: {str(error)}"


def handle_error(error: Exception) -> JSONResponse:
    """Convert an application error into a structured failure response."""
    code = error_status(error)
    if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.exception(f"Unexpected error: {str(error)}")
    else:
        logger.warning(f"Request failed ({code}): {error_message(error)}")
    return JSONResponse(
        status_code=code,
        content={"success": False, "error": error_message(error)}
    )


def validate_question(question: Optional[str]) -> str:
    """Validate the question string."""
    if not question or not isinstance(question, str) or not question.strip():
        raise ValidationError("No question provided", field="question")
    return question.strip()
