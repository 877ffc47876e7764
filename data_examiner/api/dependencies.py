"""
Shared request dependencies.

Each is a FastAPI dependency so tests can swap it through
``app.dependency_overrides``.
"""

from typing import Optional

from ..analysis import AnalysisOrchestrator
from ..config import AppConfig, get_config
from ..conversation import InMemorySessionStore, SessionStore

# Global instances
_session_store: Optional[SessionStore] = None
_orchestrator: Optional[AnalysisOrchestrator] = None


def get_session_store() -> SessionStore:
    """Get or create the conversation store."""
    global _session_store
    if _session_store is None:
        app_config = get_config()
        _session_store = InMemorySessionStore(
            max_turns=app_config.MAX_CONVERSATION_TURNS,
            max_sessions=app_config.MAX_SESSIONS,
        )
    return _session_store


def get_orchestrator() -> AnalysisOrchestrator:
    """Get or create the analysis orchestrator."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = AnalysisOrchestrator(get_session_store())
    return _orchestrator


def get_app_config() -> AppConfig:
    return get_config()
