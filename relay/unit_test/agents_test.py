import pytest
from unittest.mock import AsyncMock, Mock
from langchain_core.messages import AIMessage
from langchain_core.outputs import ChatGeneration, LLMResult

from relay.agents import AIAgent
from relay.errors import EmptyResponseError, GenerationError


def _result(*candidates):
    return LLMResult(generations=[[ChatGeneration(message=AIMessage(content=c)) for c in candidates]])

@pytest.mark.asyncio
async def test_reply_returns_parsed_result():
    # Arrange
    mock_llm = Mock()
    mock_llm.agenerate = AsyncMock(return_value=_result("raw_response"))
    mock_builder = Mock()
    mock_builder.build = Mock(return_value=["built_prompt"])
    mock_parser = Mock()
    mock_parser.parse_result = Mock(return_value="parsed_result")
    agent = AIAgent(mock_llm, mock_builder, mock_parser)

    # Act
    result = await agent.reply("Hello")

    # Assert
    mock_builder.build.assert_called_once_with("Hello")
    mock_llm.agenerate.assert_awaited_once_with([["built_prompt"]])
    candidates = mock_parser.parse_result.call_args.args[0]
    assert candidates[0].message.content == "raw_response"
    assert result == "parsed_result"

@pytest.mark.asyncio
async def test_reply_with_no_generations_passes_empty_candidates():
    mock_llm = Mock()
    mock_llm.agenerate = AsyncMock(return_value=LLMResult(generations=[]))
    mock_builder = Mock()
    mock_builder.build = Mock(return_value=["prompt"])
    mock_parser = Mock()
    mock_parser.parse_result = Mock(side_effect=EmptyResponseError("no candidates"))
    agent = AIAgent(mock_llm, mock_builder, mock_parser)

    with pytest.raises(EmptyResponseError):
        await agent.reply("Test")

    mock_parser.parse_result.assert_called_once_with([])

@pytest.mark.asyncio
async def test_reply_wraps_llm_exception():
    mock_llm = Mock()
    mock_llm.agenerate = AsyncMock(side_effect=RuntimeError("LLM error"))
    mock_builder = Mock()
    mock_builder.build = Mock(return_value=["prompt"])
    mock_parser = Mock()
    agent = AIAgent(mock_llm, mock_builder, mock_parser)

    with pytest.raises(GenerationError, match="LLM error") as excinfo:
        await agent.reply("msg")

    assert isinstance(excinfo.value.__cause__, RuntimeError)
    mock_parser.parse_result.assert_not_called()

@pytest.mark.asyncio
async def test_reply_propagates_parser_exception():
    mock_llm = Mock()
    mock_llm.agenerate = AsyncMock(return_value=_result("raw"))
    mock_builder = Mock()
    mock_builder.build = Mock(return_value=["prompt"])
    mock_parser = Mock()
    mock_parser.parse_result = Mock(side_effect=ValueError("Parse error"))
    agent = AIAgent(mock_llm, mock_builder, mock_parser)

    with pytest.raises(ValueError, match="Parse error"):
        await agent.reply("msg")
