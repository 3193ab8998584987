"""Engine registry: which backends exist, what gates them and how they are reached."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .state import EngineId, TransportKind


SEARCH_INSTRUCTIONS = "Please search the web for this query."
GROUNDING_INSTRUCTIONS = "Please answer this using search grounding."
LATEST_INFO_INSTRUCTIONS = "Please answer this using the latest information available."


@dataclass(frozen=True)
class EngineDescriptor:
    """Static description of one engine.

    ``credential`` names the :class:`~unified_search.utils.config.APIConfig`
    field that must be set for the engine to be usable; ``env_var`` is the
    matching environment variable.
    """

    engine: EngineId
    credential: str
    env_var: str
    provider_label: str
    transport: TransportKind
    description: str
    provider: str
    model: Optional[str] = None
    display_name: Optional[str] = None
    instructions: Optional[str] = None
    signal_tool: Optional[str] = None


def _llm_engine(engine, credential, env_var, label, provider, model, display_name,
                instructions, description, signal_tool=None) -> EngineDescriptor:
    return EngineDescriptor(
        engine=engine,
        credential=credential,
        env_var=env_var,
        provider_label=label,
        transport=TransportKind.LLM_AGENT,
        description=description,
        provider=provider,
        model=model,
        display_name=display_name,
        instructions=instructions,
        signal_tool=signal_tool,
    )


# Insertion order is the order engines are offered to agents.
ENGINE_REGISTRY: Dict[EngineId, EngineDescriptor] = {
    EngineId.ANTHROPIC: _llm_engine(
        EngineId.ANTHROPIC, "anthropic_api_key", "ANTHROPIC_API_KEY", "Anthropic", "anthropic",
        "claude-3-7-sonnet-latest", "ClaudeSearch", SEARCH_INSTRUCTIONS,
        "deep multi-hop research, strong source citations",
        signal_tool="claude_web_search",
    ),
    EngineId.BRAVE: EngineDescriptor(
        engine=EngineId.BRAVE,
        credential="brave_api_key",
        env_var="BRAVE_API_KEY",
        provider_label="Brave",
        transport=TransportKind.DIRECT_HTTP,
        description="privacy-first, independent index (good for niche/controversial)",
        provider="brave",
    ),
    EngineId.BRAVE_IMAGES: EngineDescriptor(
        engine=EngineId.BRAVE_IMAGES,
        credential="brave_api_key",
        env_var="BRAVE_API_KEY",
        provider_label="Brave",
        transport=TransportKind.DIRECT_HTTP,
        description="privacy-first image search with direct URLs to images",
        provider="brave",
    ),
    EngineId.OPENAI: _llm_engine(
        EngineId.OPENAI, "openai_api_key", "OPENAI_API_KEY", "OpenAI", "openai",
        "gpt-4.1", "OpenAISearch", SEARCH_INSTRUCTIONS,
        "ChatGPT-grade contextual search, cited results",
        signal_tool="openai_web_search",
    ),
    EngineId.GOOGLE: _llm_engine(
        EngineId.GOOGLE, "google_api_key", "GOOGLE_API_KEY", "Google", "google",
        "gemini-2.5-flash-preview-04-17", "GoogleSearch", GROUNDING_INSTRUCTIONS,
        "freshest breaking-news facts via Gemini grounding",
        signal_tool="google_web_search",
    ),
    EngineId.XAI: _llm_engine(
        EngineId.XAI, "xai_api_key", "XAI_API_KEY", "X.AI", "xai",
        "grok-3-latest", "GrokSearch", SEARCH_INSTRUCTIONS,
        "real-time web search via Grok",
        signal_tool="grok_web_search",
    ),
    EngineId.SONAR: _llm_engine(
        EngineId.SONAR, "openrouter_api_key", "OPENROUTER_API_KEY", "OpenRouter", "openrouter",
        "perplexity/sonar-reasoning", "PerplexitySearch", LATEST_INFO_INSTRUCTIONS,
        "(perplexity) lightweight, cost-effective search model with grounding",
    ),
    EngineId.SONAR_PRO: _llm_engine(
        EngineId.SONAR_PRO, "openrouter_api_key", "OPENROUTER_API_KEY", "OpenRouter", "openrouter",
        "perplexity/sonar-reasoning-pro", "PerplexityProSearch", LATEST_INFO_INSTRUCTIONS,
        "(perplexity) advanced search offering with grounding, supporting complex queries and follow-ups",
    ),
    EngineId.SONAR_DEEP_RESEARCH: _llm_engine(
        EngineId.SONAR_DEEP_RESEARCH, "openrouter_api_key", "OPENROUTER_API_KEY", "OpenRouter", "openrouter",
        "perplexity/sonar-deep-research", "PerplexityResearch", LATEST_INFO_INSTRUCTIONS,
        "(perplexity) expert-level research model conducting exhaustive searches "
        "and generating comprehensive reports",
    ),
}


def get_descriptor(engine) -> Optional[EngineDescriptor]:
    engine_id = EngineId.parse(engine)
    if engine_id is None:
        return None
    return ENGINE_REGISTRY[engine_id]


def enabled_engines(config=None) -> List[EngineId]:
    """Engines whose credential is present, in registry order."""
    if config is None:
        from ..utils.config import load_config
        config = load_config()
    return config.enabled_engines()


def is_engine_enabled(engine, config=None) -> bool:
    engine_id = EngineId.parse(engine)
    if engine_id is None:
        return False
    return engine_id in enabled_engines(config)


def engine_descriptions(config=None) -> List[str]:
    """One documentation line per enabled engine, e.g. ``- brave: privacy-first, ...``."""
    return [
        f"- {engine.value}: {ENGINE_REGISTRY[engine].description}"
        for engine in enabled_engines(config)
    ]
