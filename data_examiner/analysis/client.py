"""
Analysis Service Client

Submits analysis requests to an OpenAI-compatible chat completion service
and normalizes every failure into UpstreamAnalysisError.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
import asyncio
import json
import logging

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from openai import APIConnectionError, APIError, APIStatusError, APITimeoutError, RateLimitError

from ..config import AppConfig, get_config
from ..conversation.store import Role, Turn
from ..exceptions import UpstreamAnalysisError
from .prompts import CONTEXT_TEMPLATE, SYSTEM_PROMPT, USER_MESSAGE_TEMPLATE

logger = logging.getLogger(__name__)


@dataclass
class AnalysisRequest:
    """Bounded payload submitted to the analysis service."""
    question: str
    sample_rows: List[Dict[str, Any]]
    profile_summary: Dict[str, Any]
    history: List[Turn] = field(default_factory=list)
    context: Optional[str] = None


class AnalysisClient:
    """Thin async wrapper around a LangChain chat model."""

    def __init__(self, app_config: AppConfig = None, llm: Any = None):
        self.config = app_config or get_config()
        self._llm = llm

    @property
    def llm(self) -> Optional[Any]:
        if self._llm is None and self.config.is_analysis_configured():
            self._llm = ChatOpenAI(
                model=self.config.OPENAI_MODEL,
                api_key=self.config.OPENAI_API_KEY,
                base_url=self.config.OPENAI_BASE_URL,
                temperature=self.config.ANALYSIS_TEMPERATURE,
                max_tokens=self.config.ANALYSIS_MAX_TOKENS,
                timeout=self.config.ANALYSIS_TIMEOUT,
                max_retries=self.config.ANALYSIS_MAX_RETRIES,
            )
            logger.info(f"Analysis client initialized with model {self.config.OPENAI_MODEL}")
        return self._llm

    def is_available(self) -> bool:
        return self.llm is not None

    def build_messages(self, request: AnalysisRequest) -> List[BaseMessage]:
        """System prompt, prior turns, then the current question with its data."""
        messages: List[BaseMessage] = [SystemMessage(content=SYSTEM_PROMPT)]
        for turn in request.history:
            if turn.role == Role.USER:
                messages.append(HumanMessage(content=turn.content))
            else:
                messages.append(AIMessage(content=turn.content))

        content = USER_MESSAGE_TEMPLATE.format(
            question=request.question,
            sample_size=len(request.sample_rows),
            sample=json.dumps(request.sample_rows, indent=2, default=str),
            profile=json.dumps(request.profile_summary, indent=2, default=str),
        )
        if request.context:
            content += CONTEXT_TEMPLATE.format(context=request.context)
        messages.append(HumanMessage(content=content))
        return messages

    async def analyze(self, request: AnalysisRequest) -> str:
        """
        Request an analysis.

        Args:
            request: Bounded analysis payload

        Returns:
            Raw markdown content of the response

        Raises:
            UpstreamAnalysisError: On missing configuration, timeout, API
                failure or an empty response
        """
        llm = self.llm
        if llm is None:
            raise UpstreamAnalysisError("analysis service is not configured (set OPENAI_API_KEY)")

        messages = self.build_messages(request)
        timeout = self.config.ANALYSIS_TIMEOUT
        logger.info(f"Sending analysis request ({len(messages)} messages, {len(request.sample_rows)} sample rows)")
        try:
            result = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout)
        except (asyncio.TimeoutError, APITimeoutError) as e:
            raise UpstreamAnalysisError(f"timed out after {timeout}s") from e
        except RateLimitError as e:
            raise UpstreamAnalysisError("rate limit exceeded", status_code=429) from e
        except APIStatusError as e:
            raise UpstreamAnalysisError(f"HTTP {e.status_code}: {e.message}", status_code=e.status_code) from e
        except (APIConnectionError, APIError) as e:
            raise UpstreamAnalysisError(str(e)) from e
        except Exception as e:
            logger.exception("Unexpected analysis service failure")
            raise UpstreamAnalysisError(f"unexpected failure: {e}") from e

        content = getattr(result, "content", result)
        if not isinstance(content, str) or not content.strip():
            raise UpstreamAnalysisError("empty or unparseable response")
        logger.info("Analysis response received")
        return content
