"""Single-turn streaming runtime for search-grounded LLM agents.

Chat models come from LangChain provider packages. xAI and OpenRouter speak
the OpenAI wire protocol, so both go through ``ChatOpenAI`` with their own
``base_url``. Web search runs server-side through each provider's built-in
search tool.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Tuple, Union

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from ..core.state import SearchOutcome, ErrorKind, ERROR_PREFIX
from ..exceptions.custom_exceptions import LLMConfigError
from ..utils.config import Config, load_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignalTool:
    """Names the provider-native search capability a model should switch on."""

    name: str
    description: str = ""


ANTHROPIC_WEB_SEARCH = {"type": "web_search_20250305", "name": "web_search", "max_uses": 5}
OPENAI_WEB_SEARCH = {"type": "web_search_preview"}
GOOGLE_SEARCH = {"google_search": {}}
XAI_SEARCH_PARAMETERS = {"mode": "on", "return_citations": True}

# signal name -> (provider that serves it, server-side tool definition)
# xAI Live Search is switched on through request parameters, not a tool.
NATIVE_SEARCH: Dict[str, Tuple[str, Optional[Dict[str, Any]]]] = {
    "claude_web_search": ("anthropic", ANTHROPIC_WEB_SEARCH),
    "openai_web_search": ("openai", OPENAI_WEB_SEARCH),
    "google_web_search": ("google", GOOGLE_SEARCH),
    "grok_web_search": ("xai", None),
}


@dataclass(frozen=True)
class AgentSpec:
    """Configuration for one single-turn agent run."""

    model: str
    name: str
    instructions: str
    description: str = "Search the web"
    tools: Tuple[SignalTool, ...] = field(default_factory=tuple)
    parent_id: Optional[str] = None
    provider: Optional[str] = None


@dataclass(frozen=True)
class MessageDelta:
    content: str
    type: str = "message_delta"


@dataclass(frozen=True)
class ErrorEvent:
    error: str
    type: str = "error"


AgentEvent = Union[MessageDelta, ErrorEvent]
AgentStream = Callable[[str, AgentSpec, Optional[Config]], AsyncIterator[AgentEvent]]


def infer_provider(model: str) -> str:
    """Guess the provider from a model identifier."""
    if "/" in model:
        return "openrouter"
    if model.startswith("claude"):
        return "anthropic"
    if model.startswith("gemini"):
        return "google"
    if model.startswith("grok"):
        return "xai"
    return "openai"


def native_search_tools(spec: AgentSpec, provider: str) -> List[Dict[str, Any]]:
    """Resolve the spec's signal tools to the provider's server-side search tools."""
    resolved = []
    for tool in spec.tools:
        serving_provider, definition = NATIVE_SEARCH.get(tool.name, (None, None))
        if serving_provider != provider:
            raise LLMConfigError(f"Provider {provider} has no native search tool {tool.name}")
        if definition is not None:
            resolved.append(definition)
    return resolved


def build_chat_model(spec: AgentSpec, config: Config) -> BaseChatModel:
    """Create the LangChain chat model for ``spec`` with native web search switched on."""
    provider = spec.provider or infer_provider(spec.model)
    api = config.api
    search_tools = native_search_tools(spec, provider)

    if provider == "anthropic":
        if not api.anthropic_api_key:
            raise LLMConfigError("Anthropic API key not configured")
        chat_model = ChatAnthropic(model=spec.model, api_key=api.anthropic_api_key)
    elif provider == "openai":
        if not api.openai_api_key:
            raise LLMConfigError("OpenAI API key not configured")
        if search_tools:
            # Built-in tools are only served by the Responses API.
            chat_model = ChatOpenAI(model=spec.model, api_key=api.openai_api_key, use_responses_api=True)
        else:
            chat_model = ChatOpenAI(model=spec.model, api_key=api.openai_api_key)
    elif provider == "google":
        if not api.google_api_key:
            raise LLMConfigError("Google API key not configured")
        chat_model = ChatGoogleGenerativeAI(model=spec.model, google_api_key=api.google_api_key)
    elif provider == "xai":
        if not api.xai_api_key:
            raise LLMConfigError("X.AI API key not configured")
        extra = {}
        if spec.tools:
            extra["extra_body"] = {"search_parameters": XAI_SEARCH_PARAMETERS}
        chat_model = ChatOpenAI(model=spec.model, api_key=api.xai_api_key, base_url=api.xai_base_url, **extra)
    elif provider == "openrouter":
        if not api.openrouter_api_key:
            raise LLMConfigError("OpenRouter API key not configured")
        chat_model = ChatOpenAI(
            model=spec.model,
            api_key=api.openrouter_api_key,
            base_url=api.openrouter_base_url,
        )
    else:
        raise LLMConfigError(f"Unsupported model provider: {provider}")

    if search_tools:
        return chat_model.bind_tools(search_tools)
    return chat_model


def chunk_text(chunk: Any) -> str:
    """Extract the text carried by a streamed message chunk."""
    content = getattr(chunk, "content", chunk)
    if isinstance(content, str):
        return content
    parts: List[str] = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def _run_config(spec: AgentSpec) -> Dict[str, Any]:
    metadata = {"agent_name": spec.name, "agent_description": spec.description}
    if spec.parent_id:
        metadata["parent_id"] = spec.parent_id
    return {"run_name": spec.name, "metadata": metadata, "tags": ["web_search"]}


async def stream_agent(
    prompt: str,
    spec: AgentSpec,
    config: Optional[Config] = None,
) -> AsyncIterator[AgentEvent]:
    """Drive one agent turn and yield text deltas, or a single error event."""
    messages = [
        SystemMessage(content=spec.instructions),
        HumanMessage(content=prompt),
    ]
    answered = False
    requested: List[str] = []
    try:
        chat_model = build_chat_model(spec, config or load_config())
        async for chunk in chat_model.astream(messages, config=_run_config(spec)):
            text = chunk_text(chunk)
            if text:
                answered = True
                yield MessageDelta(text)
            for call in getattr(chunk, "tool_call_chunks", None) or []:
                if call.get("name"):
                    requested.append(call["name"])
    except Exception as e:
        logger.error(f"{spec.name} ({spec.model}) stream failed: {e}")
        yield ErrorEvent(str(e))
        return

    # Client-side tool calls are never executed here, so a turn that only
    # asks for one has no answer.
    if not answered and requested:
        logger.warning(f"{spec.name} ({spec.model}) requested tools without answering: {requested}")
        yield ErrorEvent(f"{spec.name} requested tool call(s) {', '.join(requested)} instead of answering")


async def run_single_turn(
    prompt: str,
    spec: AgentSpec,
    stream: AgentStream = stream_agent,
    config: Optional[Config] = None,
) -> SearchOutcome:
    """Collect a streamed agent turn into one outcome.

    Text deltas are concatenated. The first error event wins and no partial
    text is returned with it. A turn that produced no text is a failure.
    """
    parts: List[str] = []
    async for event in stream(prompt, spec, config):
        if isinstance(event, ErrorEvent):
            return SearchOutcome.failure(ErrorKind.AGENT_FAILURE, f"{ERROR_PREFIX} {event.error}")
        if isinstance(event, MessageDelta):
            parts.append(event.content)
    answer = "".join(parts)
    if not answer.strip():
        return SearchOutcome.failure(ErrorKind.AGENT_FAILURE, f"{ERROR_PREFIX} {spec.name} returned no answer text")
    return SearchOutcome.success(answer)
