"""
Unit tests for the engine registry and capability queries.
"""

import pytest

from unified_search.core.engines import (
    ENGINE_REGISTRY,
    engine_descriptions,
    enabled_engines,
    get_descriptor,
    is_engine_enabled,
)
from unified_search.core.state import EngineId, TransportKind


class TestEngineRegistry:

    def test_registry_covers_every_engine(self):
        assert set(ENGINE_REGISTRY) == set(EngineId)

    def test_registry_order(self):
        assert [engine.value for engine in ENGINE_REGISTRY] == [
            "anthropic",
            "brave",
            "brave-images",
            "openai",
            "google",
            "xai",
            "sonar",
            "sonar-pro",
            "sonar-deep-research",
        ]

    def test_brave_engines_use_direct_http(self):
        for engine in (EngineId.BRAVE, EngineId.BRAVE_IMAGES):
            descriptor = ENGINE_REGISTRY[engine]
            assert descriptor.transport is TransportKind.DIRECT_HTTP
            assert descriptor.env_var == "BRAVE_API_KEY"
            assert descriptor.model is None

    @pytest.mark.parametrize("engine,model,name,signal_tool", [
        (EngineId.ANTHROPIC, "claude-3-7-sonnet-latest", "ClaudeSearch", "claude_web_search"),
        (EngineId.OPENAI, "gpt-4.1", "OpenAISearch", "openai_web_search"),
        (EngineId.GOOGLE, "gemini-2.5-flash-preview-04-17", "GoogleSearch", "google_web_search"),
        (EngineId.XAI, "grok-3-latest", "GrokSearch", "grok_web_search"),
        (EngineId.SONAR, "perplexity/sonar-reasoning", "PerplexitySearch", None),
        (EngineId.SONAR_PRO, "perplexity/sonar-reasoning-pro", "PerplexityProSearch", None),
        (EngineId.SONAR_DEEP_RESEARCH, "perplexity/sonar-deep-research", "PerplexityResearch", None),
    ])
    def test_llm_engine_parameters(self, engine, model, name, signal_tool):
        descriptor = ENGINE_REGISTRY[engine]

        assert descriptor.transport is TransportKind.LLM_AGENT
        assert descriptor.model == model
        assert descriptor.display_name == name
        assert descriptor.signal_tool == signal_tool

    def test_instructions_per_engine(self):
        assert ENGINE_REGISTRY[EngineId.GOOGLE].instructions == "Please answer this using search grounding."
        assert ENGINE_REGISTRY[EngineId.SONAR].instructions == (
            "Please answer this using the latest information available."
        )
        assert ENGINE_REGISTRY[EngineId.ANTHROPIC].instructions == "Please search the web for this query."

    def test_get_descriptor(self):
        assert get_descriptor("brave-images").engine is EngineId.BRAVE_IMAGES
        assert get_descriptor(EngineId.XAI).provider == "xai"
        assert get_descriptor("bing") is None
        assert get_descriptor(123) is None


class TestCapabilityQueries:

    def test_enabled_engines_reads_environment(self, monkeypatch):
        assert enabled_engines() == []

        monkeypatch.setenv("GOOGLE_API_KEY", "g-key")

        assert enabled_engines() == [EngineId.GOOGLE]

    def test_is_engine_enabled(self, brave_env):
        assert is_engine_enabled("brave")
        assert is_engine_enabled(EngineId.BRAVE_IMAGES)
        assert not is_engine_enabled("openai")
        assert not is_engine_enabled("unknown-engine")

    def test_engine_descriptions(self, brave_env):
        assert engine_descriptions() == [
            "- brave: privacy-first, independent index (good for niche/controversial)",
            "- brave-images: privacy-first image search with direct URLs to images",
        ]
