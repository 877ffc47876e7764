"""
Analysis Orchestrator

Sequences parsing, profiling and chart selection around the analysis
service call, reconciles its output with local results and records the
exchange in the conversation store.
"""

from dataclasses import dataclass
from typing import Dict, List, Any, Optional
import logging
import re
import uuid

from ..charts import ChartOrchestrator, ChartSpec
from ..config import AppConfig, get_config
from ..conversation.store import Role, SessionStore, Turn
from ..exceptions import ParseError, UpstreamAnalysisError, ValidationError
from ..ingestion import Dataset, InputFormat, Text, parse_content, parse_file
from ..profiling import DataProfiler
from .client import AnalysisClient, AnalysisRequest
from .fallback import build_fallback_analysis
from .prompts import DEFAULT_FILE_QUESTION, FOLLOW_UP_PLACEHOLDER
from .response import parse_analysis_response

logger = logging.getLogger(__name__)

_NUMBERED_LINE_RE = re.compile(r"^\d+\.")
PLACEHOLDER_QUESTIONS = 3


@dataclass
class AnalysisResult:
    """Outcome of one analysis exchange."""
    analysis: str
    chart_spec: Optional[ChartSpec]
    conversation_id: str
    degraded: bool = False

    def to_response(self) -> Dict[str, Any]:
        """Convert to the dictionary shape returned by the API."""
        response = {
            'success': True,
            'analysis': self.analysis,
            'chartData': None,
            'chartTitle': None,
            'chartType': None,
            'conversationId': self.conversation_id,
            'degraded': self.degraded
        }
        if self.chart_spec is not None:
            response['chartData'] = self.chart_spec.to_chart_data()
            response['chartTitle'] = self.chart_spec.title
            response['chartType'] = self.chart_spec.chart_type.value
        return response


def extract_insights(turns: List[Turn]) -> str:
    """Key lines (metrics, bullets, numbered items) from earlier assistant turns."""
    insights = []
    for turn in turns:
        if turn.role != Role.ASSISTANT:
            continue
        key_lines = [
            line for line in turn.content.split("\n")
            if ":" in line or line.startswith("-") or _NUMBERED_LINE_RE.match(line)
        ]
        block = "\n".join(key_lines)
        if len(block) > 10:
            insights.append(block)
    return "\n\n".join(insights)


def placeholder_dataset(turns: List[Turn]) -> Dataset:
    """Minimal dataset standing in for data on a follow-up without new input."""
    questions = [turn.content for turn in turns if turn.role == Role.USER][-PLACEHOLDER_QUESTIONS:]
    if questions:
        return Dataset(records=[{"question": Text(question)} for question in questions])
    return Dataset(records=[{"context": Text(FOLLOW_UP_PLACEHOLDER)}])


def _require_question(question: Optional[str]) -> str:
    if not question or not question.strip():
        raise ValidationError("No question provided", field="question")
    return question.strip()


class AnalysisOrchestrator:
    """Main class that orchestrates one analysis exchange."""

    def __init__(
        self,
        store: SessionStore,
        client: AnalysisClient = None,
        app_config: AppConfig = None,
        profiler: DataProfiler = None,
        charts: ChartOrchestrator = None,
    ):
        self.config = app_config or get_config()
        self.store = store
        self.client = client or AnalysisClient(self.config)
        self.profiler = profiler or DataProfiler()
        self.charts = charts or ChartOrchestrator()

    async def analyze_file(
        self,
        path: str,
        filename: str,
        question: Optional[str] = None,
        conversation_id: Optional[str] = None,
        sheet: Optional[str] = None,
    ) -> AnalysisResult:
        """
        Analyze a staged upload.

        Raises:
            UnsupportedFormatError: If the file extension is not recognized
            ParseError: If the file is empty or malformed
        """
        question = question.strip() if question and question.strip() else DEFAULT_FILE_QUESTION
        dataset = parse_file(path, filename, sheet=sheet)
        logger.info(f"Processing file {filename}: {len(dataset)} rows")
        return await self.analyze_dataset(dataset, question, conversation_id)

    async def analyze_text(
        self,
        text: Optional[str],
        question: Optional[str],
        conversation_id: Optional[str] = None,
    ) -> AnalysisResult:
        """
        Analyze pasted text. Blank text on an existing conversation is a follow-up.

        Raises:
            ValidationError: If the question is blank
            ParseError: If there is neither text nor a conversation to continue
        """
        question = _require_question(question)
        if text and text.strip():
            dataset = parse_content(text, InputFormat.AUTO)
            return await self.analyze_dataset(dataset, question, conversation_id)
        if not conversation_id:
            raise ParseError("No data provided")
        return await self.follow_up(question, conversation_id)

    async def follow_up(self, question: Optional[str], conversation_id: Optional[str]) -> AnalysisResult:
        """
        Answer a follow-up question from conversation context alone.

        Raises:
            ValidationError: If the question or conversation id is missing
        """
        question = _require_question(question)
        if not conversation_id or not conversation_id.strip():
            raise ValidationError("No conversation ID provided", field="conversationId")

        async with self.store.lock(conversation_id):
            turns = self.store.get(conversation_id)
            dataset = placeholder_dataset(turns)
            context = extract_insights(turns) or None
            return await self._exchange(conversation_id, dataset, question, context)

    async def analyze_dataset(
        self,
        dataset: Dataset,
        question: str,
        conversation_id: Optional[str] = None,
    ) -> AnalysisResult:
        """
        Run one exchange over a parsed dataset.

        Args:
            dataset: Parsed input
            question: User question
            conversation_id: Existing conversation, or None to start one

        Returns:
            AnalysisResult; never fails because of the analysis service
        """
        conversation_id = conversation_id or str(uuid.uuid4())
        async with self.store.lock(conversation_id):
            return await self._exchange(conversation_id, dataset, question, None)

    async def _exchange(
        self,
        conversation_id: str,
        dataset: Dataset,
        question: str,
        context: Optional[str],
    ) -> AnalysisResult:
        profile = self.profiler.profile(dataset)
        local_chart = self.charts.select_chart(dataset, profile)

        history = self.store.get(conversation_id)[-self.config.MAX_CONVERSATION_TURNS:]
        request = AnalysisRequest(
            question=question,
            sample_rows=dataset.to_json_rows(limit=self.config.SAMPLE_ROWS),
            profile_summary=profile.to_summary(),
            history=history,
            context=context,
        )

        try:
            raw = await self.client.analyze(request)
        except UpstreamAnalysisError as e:
            logger.warning(f"Falling back to local statistics: {e}")
            analysis = build_fallback_analysis(profile, local_chart)
            self._record(conversation_id, question, analysis)
            return AnalysisResult(
                analysis=analysis,
                chart_spec=local_chart,
                conversation_id=conversation_id,
                degraded=True,
            )

        parsed = parse_analysis_response(raw)
        chart = self.charts.reconcile(local_chart, parsed.chart_description)
        self._record(conversation_id, question, parsed.raw)

        return AnalysisResult(
            analysis=parsed.analysis or build_fallback_analysis(profile, chart),
            chart_spec=chart,
            conversation_id=conversation_id,
        )

    def _record(self, conversation_id: str, question: str, answer: str) -> None:
        self.store.append(conversation_id, Role.USER.value, question)
        self.store.append(conversation_id, Role.ASSISTANT.value, answer)
