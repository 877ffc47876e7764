import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from data_examiner.analysis import AnalysisClient, AnalysisOrchestrator
from data_examiner.api import get_app_config, get_orchestrator, get_session_store
from data_examiner.config import AppConfig
from data_examiner.conversation import InMemorySessionStore
from data_examiner.security import limiter
from data_examiner.server import app

SAMPLE_ANALYSIS = """# Overview
Sales grew steadily over the period.

## Key Metrics
Total Sales: 1,234
Average: 411

## Key Insights
- March was the strongest month
"""

SAMPLE_CHART_BLOCK = """```json
{"chart": {"title": "Sales by Month", "type": "bar", "labels": ["Jan", "Feb", "Mar"], "series": [{"name": "Sales", "values": [100, 200, 300]}]}}
```"""


class FakeClock:
    """Manually advanced clock for access-time ordering."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """Session store with a controllable clock."""
    return InMemorySessionStore(max_turns=20, max_sessions=100, clock=clock)


@pytest.fixture
def app_config(monkeypatch, tmp_path):
    """Configuration with an API key and a private upload directory."""
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    return AppConfig()


@pytest.fixture
def mock_llm():
    """Chat model stand-in returning an analysis with a chart block."""
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content=SAMPLE_ANALYSIS + "\n" + SAMPLE_CHART_BLOCK))
    return llm


@pytest.fixture
def orchestrator(store, mock_llm, app_config):
    client = AnalysisClient(app_config, llm=mock_llm)
    return AnalysisOrchestrator(store, client=client, app_config=app_config)


@pytest.fixture
def test_client(orchestrator, store, app_config):
    """Create a test client wired to the test store and orchestrator."""
    app.dependency_overrides = {}
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_session_store] = lambda: store
    app.dependency_overrides[get_app_config] = lambda: app_config

    # Fresh rate limit window for every test
    limiter.reset()

    client = TestClient(app)
    yield client

    # Clean up after test
    app.dependency_overrides = {}
