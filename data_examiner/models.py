from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List


class TextAnalysisRequest(BaseModel):
    """Request model for the text analysis endpoint."""
    text: Optional[str] = Field(default=None, description="Pasted CSV, JSON or free text; blank continues the conversation")
    question: Optional[str] = Field(default=None, description="Question to answer about the data")
    conversationId: Optional[str] = Field(default=None, description="Optional conversation ID for follow-up questions")


class FollowUpRequest(BaseModel):
    """Request model for the follow-up endpoint."""
    question: Optional[str] = Field(default=None, description="Follow-up question")
    conversationId: Optional[str] = Field(default=None, description="Conversation to continue")


class AnalysisResponse(BaseModel):
    """Response model for analysis endpoints."""
    success: bool = True
    analysis: str = Field(description="Markdown analysis of the data")
    chartData: Optional[Dict[str, Any]] = Field(default=None, description="Chart.js compatible labels and datasets")
    chartTitle: Optional[str] = Field(default=None, description="Chart title")
    chartType: Optional[str] = Field(default=None, description="One of bar, line, pie, doughnut")
    conversationId: str = Field(description="Conversation ID to use for follow-up questions")
    degraded: bool = Field(default=False, description="True when the analysis was built from local statistics only")
    error: Optional[str] = None


class TurnModel(BaseModel):
    role: str
    content: str
    timestamp: float


class ConversationResponse(BaseModel):
    """Response model for conversation history."""
    success: bool = True
    conversation: List[TurnModel] = Field(default_factory=list)


class ClearConversationResponse(BaseModel):
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""
    status: str = "ok"
    uptime: float = Field(description="Seconds since the application started")
    conversations: int = Field(description="Number of conversations held in memory")


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = False
    error: str
