"""
Analysis API Endpoints

File upload, pasted text and follow-up analysis. Every route returns the
same response shape; analysis service failures degrade to local statistics
instead of failing the request.
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
import logging

from ..analysis import AnalysisOrchestrator
from ..config import AppConfig, get_config
from ..models import AnalysisResponse, ErrorResponse, FollowUpRequest, TextAnalysisRequest
from ..security import limiter
from ..utils import ClientDisconnected, handle_error, run_until_disconnected, staged_upload, validate_question
from .dependencies import get_app_config, get_orchestrator

logger = logging.getLogger(__name__)

# Create router for analysis endpoints
router = APIRouter(prefix="/api", tags=["analysis"])

CLIENT_CLOSED_REQUEST = 499
ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    415: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _rate_limit() -> str:
    return get_config().RATE_LIMIT


@router.post("/analyze/file", response_model=AnalysisResponse, responses=ERROR_RESPONSES)
@limiter.limit(_rate_limit)
async def analyze_file(
    request: Request,
    file: UploadFile = File(...),
    question: Optional[str] = Form(default=None),
    conversationId: Optional[str] = Form(default=None),
    sheet: Optional[str] = Form(default=None),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
    app_config: AppConfig = Depends(get_app_config),
):
    """
    Analyze an uploaded CSV, TSV, JSON, Excel or text file.

    The upload is staged on disk for the duration of the request and removed
    afterwards, whether or not parsing succeeded.
    """
    try:
        async with staged_upload(file, app_config.UPLOAD_DIR, app_config.max_upload_bytes) as path:
            result = await run_until_disconnected(
                request,
                orchestrator.analyze_file(
                    path,
                    file.filename or "",
                    question=question,
                    conversation_id=conversationId or None,
                    sheet=sheet or None,
                ),
            )
        return result.to_response()
    except ClientDisconnected:
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    except Exception as e:
        return handle_error(e)


@router.post("/analyze/text", response_model=AnalysisResponse, responses=ERROR_RESPONSES)
@limiter.limit(_rate_limit)
async def analyze_text(
    request: Request,
    body: TextAnalysisRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """
    Analyze pasted text.

    Blank text with a conversation ID continues that conversation.
    """
    try:
        question = validate_question(body.question)
        result = await run_until_disconnected(
            request,
            orchestrator.analyze_text(body.text, question, conversation_id=body.conversationId or None),
        )
        return result.to_response()
    except ClientDisconnected:
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    except Exception as e:
        return handle_error(e)


@router.post("/chat/followup", response_model=AnalysisResponse, responses=ERROR_RESPONSES)
@limiter.limit(_rate_limit)
async def follow_up(
    request: Request,
    body: FollowUpRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """Answer a follow-up question using the conversation so far."""
    try:
        result = await run_until_disconnected(
            request,
            orchestrator.follow_up(body.question, body.conversationId),
        )
        return result.to_response()
    except ClientDisconnected:
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    except Exception as e:
        return handle_error(e)
