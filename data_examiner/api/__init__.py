"""
API Package - FastAPI Route Modules

Organized API endpoints for the Data Examiner application.
Separates analysis requests from conversation management.
"""

from .analyze import router as analyze_router
from .conversation import router as conversation_router
from .dependencies import get_app_config, get_orchestrator, get_session_store

__all__ = [
    'analyze_router',
    'conversation_router',
    'get_app_config',
    'get_orchestrator',
    'get_session_store',
]
