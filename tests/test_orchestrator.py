import asyncio
import pytest
from unittest.mock import AsyncMock
from langchain_core.messages import AIMessage

from data_examiner.analysis import extract_insights, placeholder_dataset
from data_examiner.analysis.prompts import DEFAULT_FILE_QUESTION, FOLLOW_UP_PLACEHOLDER
from data_examiner.charts import ChartType
from data_examiner.conversation import Role, Turn
from data_examiner.exceptions import ParseError, UnsupportedFormatError, ValidationError
from data_examiner.ingestion import Text, parse_content


@pytest.mark.asyncio
async def test_analysis_uses_collaborator_chart_and_records_turns(orchestrator, store):
    result = await orchestrator.analyze_dataset(parse_content("A,B\n1,2\n3,4\n5,6"), "What stands out?")

    assert not result.degraded
    assert result.chart_spec.title == "Sales by Month"
    assert "```" not in result.analysis
    assert result.analysis.startswith("# Overview")

    turns = store.get(result.conversation_id)
    assert [turn.role for turn in turns] == [Role.USER, Role.ASSISTANT]
    assert turns[0].content == "What stands out?"
    assert "```json" in turns[1].content


@pytest.mark.asyncio
async def test_timeout_degrades_to_local_statistics(orchestrator, store, mock_llm, app_config):
    app_config.ANALYSIS_TIMEOUT = 0.01

    async def slow(messages):
        await asyncio.sleep(1)

    mock_llm.ainvoke = slow
    result = await orchestrator.analyze_dataset(parse_content("A,B\n1,2\n3,4\n5,6"), "Summarize")

    assert result.degraded
    assert "3 rows and 2 columns" in result.analysis
    assert result.chart_spec.chart_type == ChartType.BAR
    assert result.chart_spec.labels == ["Item 1", "Item 2", "Item 3"]
    response = result.to_response()
    assert response["success"] is True
    assert response["degraded"] is True
    assert len(store.get(result.conversation_id)) == 2


@pytest.mark.asyncio
async def test_malformed_chart_keeps_analysis_and_local_chart(orchestrator, mock_llm):
    mock_llm.ainvoke = AsyncMock(return_value=AIMessage(content="Great data\n```json\n{broken\n```"))
    result = await orchestrator.analyze_dataset(parse_content("A,B\n1,2\n3,4\n5,6"), "Summarize")

    assert not result.degraded
    assert result.analysis.startswith("Great data")
    assert result.chart_spec.title == "Analysis of A"


@pytest.mark.asyncio
async def test_mismatched_chart_description_falls_back_to_local(orchestrator, mock_llm):
    content = 'Done\n```json\n{"chart": {"labels": ["a", "b"], "series": [{"name": "s", "values": [1]}]}}\n```'
    mock_llm.ainvoke = AsyncMock(return_value=AIMessage(content=content))
    result = await orchestrator.analyze_dataset(parse_content("A,B\n1,2\n3,4"), "Summarize")
    assert result.chart_spec.title == "Analysis of A"


@pytest.mark.asyncio
async def test_history_is_sent_on_the_next_turn(orchestrator, mock_llm):
    first = await orchestrator.analyze_dataset(parse_content("A,B\n1,2\n3,4"), "First question")
    await orchestrator.analyze_dataset(parse_content("A,B\n1,2\n3,4"), "Second question", first.conversation_id)

    messages = mock_llm.ainvoke.call_args.args[0]
    contents = [message.content for message in messages]
    assert "First question" in contents
    assert "Second question" in messages[-1].content


@pytest.mark.asyncio
async def test_payload_is_bounded_to_sample_rows(orchestrator, mock_llm, app_config):
    app_config.SAMPLE_ROWS = 5
    text = "n,m\n" + "\n".join(f"{i},0" for i in range(30))
    await orchestrator.analyze_text(text, "Q")
    last = mock_llm.ainvoke.call_args.args[0][-1].content
    assert "first 5 rows" in last


@pytest.mark.asyncio
async def test_analyze_text_validation(orchestrator):
    with pytest.raises(ValidationError):
        await orchestrator.analyze_text("a,b\n1,2", "   ")
    with pytest.raises(ParseError):
        await orchestrator.analyze_text("", "Question?")


@pytest.mark.asyncio
async def test_blank_text_with_conversation_is_a_follow_up(orchestrator, mock_llm, store):
    first = await orchestrator.analyze_text("A,B\n1,2\n3,4", "First question")
    result = await orchestrator.analyze_text("  ", "And then?", conversation_id=first.conversation_id)

    assert result.conversation_id == first.conversation_id
    assert len(store.get(first.conversation_id)) == 4
    last = mock_llm.ainvoke.call_args.args[0][-1].content
    assert "First question" in last
    assert "Previous analysis insights" in last


@pytest.mark.asyncio
async def test_follow_up_requires_question_and_conversation(orchestrator):
    with pytest.raises(ValidationError):
        await orchestrator.follow_up("", "abc")
    with pytest.raises(ValidationError):
        await orchestrator.follow_up("Why?", None)


@pytest.mark.asyncio
async def test_follow_up_on_new_conversation_uses_placeholder(orchestrator, mock_llm):
    result = await orchestrator.follow_up("Why?", "fresh-id")
    assert result.conversation_id == "fresh-id"
    last = mock_llm.ainvoke.call_args.args[0][-1].content
    assert FOLLOW_UP_PLACEHOLDER in last


@pytest.mark.asyncio
async def test_concurrent_follow_ups_do_not_interleave(orchestrator, store):
    await asyncio.gather(
        orchestrator.follow_up("one?", "shared"),
        orchestrator.follow_up("two?", "shared"),
    )
    roles = [turn.role for turn in store.get("shared")]
    assert roles == [Role.USER, Role.ASSISTANT, Role.USER, Role.ASSISTANT]


@pytest.mark.asyncio
async def test_analyze_file_defaults_question(orchestrator, mock_llm, tmp_path):
    path = tmp_path / "staged"
    path.write_text("x,y\n1,2\n")
    await orchestrator.analyze_file(str(path), "data.csv")
    assert DEFAULT_FILE_QUESTION in mock_llm.ainvoke.call_args.args[0][-1].content

    with pytest.raises(UnsupportedFormatError):
        await orchestrator.analyze_file(str(path), "data.pdf")


def test_placeholder_dataset_uses_last_three_user_turns():
    turns = [Turn(Role.USER, f"q{i}", float(i)) for i in range(5)]
    turns.append(Turn(Role.ASSISTANT, "answer", 6.0))
    dataset = placeholder_dataset(turns)
    assert dataset.records == [{"question": Text("q2")}, {"question": Text("q3")}, {"question": Text("q4")}]
    assert placeholder_dataset([]).records == [{"context": Text(FOLLOW_UP_PLACEHOLDER)}]


def test_extract_insights_keeps_key_lines():
    answer = "# Overview\nPlain sentence\nTotal Sales: 1,234\n- Strong March\n1. Expand north\nok"
    turns = [Turn(Role.USER, "Revenue: ignored", 1.0), Turn(Role.ASSISTANT, answer, 2.0)]
    insights = extract_insights(turns)
    assert insights == "Total Sales: 1,234\n- Strong March\n1. Expand north"
    assert extract_insights([Turn(Role.ASSISTANT, "a: b", 1.0)]) == ""
