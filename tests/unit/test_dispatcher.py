"""
Unit tests for the engine dispatcher.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from unified_search.core.dispatcher import EngineDispatcher, search, search_as, web_search
from unified_search.core.state import EngineId, ErrorKind, SearchOutcome
from unified_search.llm.search_adapter import LLMSearchAdapter


@pytest.fixture
def fake_adapter():
    adapter = LLMSearchAdapter()
    adapter.invoke_engine = AsyncMock(return_value=SearchOutcome.success("grounded answer"))
    return adapter


@pytest.fixture
def dispatcher(fake_adapter):
    return EngineDispatcher(llm_adapter=fake_adapter)


class TestValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("engine", ["unknown-engine", "bing", "BRAVE", ""])
    async def test_unknown_engine(self, dispatcher, engine):
        outcome = await dispatcher.dispatch(engine, "q", 5)

        assert outcome.error_kind is ErrorKind.UNKNOWN_ENGINE
        assert outcome.message == f"Error: Invalid or unsupported search engine {engine}"

    @pytest.mark.asyncio
    async def test_non_string_query(self, dispatcher):
        outcome = await dispatcher.dispatch("brave", 42, 5)

        assert outcome.error_kind is ErrorKind.BAD_INPUT
        assert outcome.message == "Error: Search query must be a string, received int: 42"

    @pytest.mark.asyncio
    async def test_non_string_engine_reports_query_type(self, dispatcher):
        outcome = await dispatcher.dispatch(123, "query", 5)

        assert outcome.message.startswith("Error: Search query must be a string")
        assert "received int: 123" in outcome.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query,num_results", [(42, 5), ("q", 0), (None, "five")])
    async def test_unknown_engine_reported_before_other_input_errors(self, dispatcher, query, num_results):
        outcome = await dispatcher.dispatch("bogus-engine", query, num_results)

        assert outcome.error_kind is ErrorKind.UNKNOWN_ENGINE
        assert outcome.message == "Error: Invalid or unsupported search engine bogus-engine"

    @pytest.mark.asyncio
    async def test_bad_input_reported_before_missing_credential(self, dispatcher, fake_brave):
        outcome = await dispatcher.dispatch("brave", "q", 0)

        assert outcome.error_kind is ErrorKind.BAD_INPUT
        assert fake_brave.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("num_results", [0, -1, 2.5, "5", True])
    async def test_invalid_num_results(self, dispatcher, brave_env, fake_brave, num_results):
        outcome = await dispatcher.dispatch("brave", "q", num_results)

        assert outcome.error_kind is ErrorKind.BAD_INPUT
        assert outcome.message.startswith("Error: Number of results must be a positive integer")
        assert fake_brave.calls == []

    @pytest.mark.asyncio
    async def test_integral_float_and_none_num_results(self, dispatcher, brave_env, fake_brave):
        fake_brave.payload = {"web": {"results": []}}

        await dispatcher.dispatch("brave", "q", 3.0)
        await dispatcher.dispatch("brave", "q", None)

        assert [call["params"]["count"] for call in fake_brave.calls] == [3, 5]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("engine,label", [
        ("brave", "Brave"),
        ("brave-images", "Brave"),
        ("anthropic", "Anthropic"),
        ("openai", "OpenAI"),
        ("google", "Google"),
        ("xai", "X.AI"),
        ("sonar", "OpenRouter"),
        ("sonar-pro", "OpenRouter"),
        ("sonar-deep-research", "OpenRouter"),
    ])
    async def test_missing_credential_makes_no_calls(self, dispatcher, fake_adapter, fake_brave, engine, label):
        outcome = await dispatcher.dispatch(engine, "q", 5)

        assert outcome.error_kind is ErrorKind.MISSING_CONFIGURATION
        assert outcome.message == f"Error: {label} API key not configured."
        assert fake_brave.calls == []
        fake_adapter.invoke_engine.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_configuration(self, dispatcher, monkeypatch):
        monkeypatch.setenv("SEARCH_TIMEOUT", "not-a-number")

        outcome = await dispatcher.dispatch("brave", "q", 5)

        assert outcome.error_kind is ErrorKind.MISSING_CONFIGURATION
        assert outcome.message.startswith("Error: Invalid configuration")


class TestRouting:

    @pytest.mark.asyncio
    async def test_brave_routes_to_http(self, dispatcher, fake_adapter, brave_env, fake_brave, brave_web_payload):
        fake_brave.payload = brave_web_payload

        outcome = await dispatcher.dispatch("brave", "rust programming", 3)

        assert outcome.ok
        assert len(json.loads(outcome.payload)) == 3
        assert fake_brave.calls[0]["headers"]["X-Subscription-Token"] == "test_brave_api_key"
        fake_adapter.invoke_engine.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_http_timeout_from_config(self, dispatcher, brave_env, fake_brave, monkeypatch):
        monkeypatch.setenv("SEARCH_TIMEOUT", "7")
        fake_brave.payload = {"results": []}

        await dispatcher.dispatch(EngineId.BRAVE_IMAGES, "q", 1)

        assert fake_brave.calls[0]["timeout"].total == 7.0

    @pytest.mark.asyncio
    async def test_llm_engine_routes_to_adapter(self, dispatcher, fake_adapter, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test_anthropic_api_key")

        outcome = await dispatcher.dispatch("anthropic", "latest news", 5, caller_agent_id="agent-7")

        assert outcome.payload == "grounded answer"
        args, kwargs = fake_adapter.invoke_engine.call_args
        assert args[0].engine is EngineId.ANTHROPIC
        assert args[1] == "latest news"
        assert kwargs["caller_agent_id"] == "agent-7"

    @pytest.mark.asyncio
    async def test_credentials_reread_each_call(self, dispatcher, fake_brave, monkeypatch):
        fake_brave.payload = {"web": {"results": []}}

        first = await dispatcher.dispatch("brave", "q", 5)
        monkeypatch.setenv("BRAVE_API_KEY", "rotated-key")
        second = await dispatcher.dispatch("brave", "q", 5)

        assert first.error_kind is ErrorKind.MISSING_CONFIGURATION
        assert second.ok
        assert fake_brave.calls[0]["headers"]["X-Subscription-Token"] == "rotated-key"

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_outcome(self, dispatcher, fake_adapter, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "test_openai_api_key")
        fake_adapter.invoke_engine.side_effect = RuntimeError("boom")

        outcome = await dispatcher.dispatch("openai", "q", 5)

        assert outcome.error_kind is ErrorKind.AGENT_FAILURE
        assert outcome.message == "Error: boom"


class TestEntryPoints:
    """Module-level string entry points."""

    @pytest.mark.asyncio
    async def test_search_returns_legacy_string(self):
        result = await search("unknown-engine", "q", 5)

        assert result == "Error: Invalid or unsupported search engine unknown-engine"

    @pytest.mark.asyncio
    async def test_search_as_forwards_agent_id(self):
        with patch("unified_search.core.dispatcher.dispatch", new=AsyncMock(
            return_value=SearchOutcome.success("ok")
        )) as mock_dispatch:
            result = await search_as("agent-1", "google", "q", 2)

        assert result == "ok"
        mock_dispatch.assert_awaited_once_with("google", "q", 2, caller_agent_id="agent-1")

    @pytest.mark.asyncio
    async def test_web_search_engine_form(self):
        with patch("unified_search.core.dispatcher.search_as", new=AsyncMock()) as mock_search_as, \
             patch("unified_search.core.dispatcher.search", new=AsyncMock(return_value="[]")) as mock_search:
            result = await web_search("brave", "python", 3)

        assert result == "[]"
        mock_search.assert_awaited_once_with("brave", "python", 3)
        mock_search_as.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_web_search_agent_form(self):
        with patch("unified_search.core.dispatcher.search_as", new=AsyncMock(return_value="text")) as mock_search_as:
            result = await web_search("agent-9", "openai", "python")

        assert result == "text"
        mock_search_as.assert_awaited_once_with("agent-9", "openai", "python", 5)

    @pytest.mark.asyncio
    async def test_web_search_defaults_num_results(self):
        with patch("unified_search.core.dispatcher.search", new=AsyncMock(return_value="[]")) as mock_search:
            await web_search("brave", "python")

        mock_search.assert_awaited_once_with("brave", "python", 5)
