"""
Conversation API Endpoints

Read and clear the turns held for a conversation.
"""

from fastapi import APIRouter, Depends
import logging

from ..conversation import SessionStore
from ..models import ClearConversationResponse, ConversationResponse
from .dependencies import get_session_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/conversation", tags=["conversation"])


@router.get("/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(conversation_id: str, store: SessionStore = Depends(get_session_store)):
    """Get the turns of a conversation; unknown IDs return an empty list."""
    turns = store.get(conversation_id)
    return {"success": True, "conversation": [turn.to_dict() for turn in turns]}


@router.delete("/{conversation_id}", response_model=ClearConversationResponse)
async def clear_conversation(conversation_id: str, store: SessionStore = Depends(get_session_store)):
    """Clear a conversation."""
    store.clear(conversation_id)
    logger.info(f"Cleared conversation {conversation_id}")
    return {"success": True, "message": "Conversation cleared"}
