"""
Conversation Package - Bounded per-session turn history.
"""

from .store import (
    ConversationSession,
    InMemorySessionStore,
    Role,
    SessionStore,
    Turn,
    sweep_periodically,
)

__all__ = [
    'ConversationSession',
    'InMemorySessionStore',
    'Role',
    'SessionStore',
    'Turn',
    'sweep_periodically',
]
