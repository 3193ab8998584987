"""
Research agent that drives a multi-round LangGraph ReAct loop over the search tool.

The agent sees the dispatcher as a single ``web_search`` tool whose engine
enum lists the configured backends. LangGraph decides how many rounds to
run and executes parallel tool calls; this module only tracks each call and
collects the streamed report.
"""

import logging
import time
import uuid
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from langchain_core.messages import AIMessage, HumanMessage
from langgraph.prebuilt import create_react_agent

from .dispatcher import EngineDispatcher
from .state import DEFAULT_RESULTS_COUNT, ERROR_PREFIX
from ..exceptions.custom_exceptions import ConfigurationError
from ..llm.runtime import AgentSpec, build_chat_model, chunk_text
from ..tools.search_tools import list_search_tools
from ..utils.config import Config, load_config
from ..utils.logging import SearchMetrics, get_struct_logger

logger = logging.getLogger(__name__)


class ModelClass(str, Enum):
    """Model classes a research run can be asked to use."""
    STANDARD = "standard"
    MINI = "mini"
    REASONING = "reasoning"
    REASONING_MINI = "reasoning_mini"
    MONOLOGUE = "monologue"
    METACOGNITION = "metacognition"
    CODE = "code"
    WRITING = "writing"
    SUMMARY = "summary"
    VISION = "vision"
    VISION_MINI = "vision_mini"
    IMAGE_GENERATION = "image_generation"
    EMBEDDING = "embedding"
    VOICE = "voice"


PROVIDER_CREDENTIALS = {
    "openai": "openai_api_key",
    "anthropic": "anthropic_api_key",
    "google": "google_api_key",
    "xai": "xai_api_key",
    "openrouter": "openrouter_api_key",
}

_STANDARD = [
    ("openai", "gpt-4.1"),
    ("anthropic", "claude-sonnet-4-20250514"),
    ("google", "gemini-2.5-flash"),
    ("xai", "grok-3-latest"),
    ("openrouter", "openai/gpt-4.1"),
]
_MINI = [
    ("openai", "gpt-4.1-mini"),
    ("anthropic", "claude-3-5-haiku-latest"),
    ("google", "gemini-2.5-flash-lite"),
    ("xai", "grok-3-mini"),
    ("openrouter", "openai/gpt-4.1-mini"),
]
_REASONING = [
    ("openai", "o3"),
    ("anthropic", "claude-opus-4-20250514"),
    ("google", "gemini-2.5-pro"),
    ("xai", "grok-3-latest"),
    ("openrouter", "openai/o3"),
]
_REASONING_MINI = [
    ("openai", "o4-mini"),
    ("anthropic", "claude-sonnet-4-20250514"),
    ("google", "gemini-2.5-flash"),
    ("xai", "grok-3-mini"),
    ("openrouter", "openai/o4-mini"),
]

# Classes without a chat-capable model of their own use the standard list.
MODEL_CLASS_MODELS: Dict[ModelClass, List[Tuple[str, str]]] = {
    ModelClass.STANDARD: _STANDARD,
    ModelClass.MINI: _MINI,
    ModelClass.REASONING: _REASONING,
    ModelClass.REASONING_MINI: _REASONING_MINI,
    ModelClass.MONOLOGUE: _REASONING,
    ModelClass.METACOGNITION: _REASONING,
    ModelClass.CODE: [("anthropic", "claude-sonnet-4-20250514")] + _STANDARD,
    ModelClass.WRITING: _STANDARD,
    ModelClass.SUMMARY: _MINI,
    ModelClass.VISION: _STANDARD,
    ModelClass.VISION_MINI: _MINI,
}

RESEARCH_INSTRUCTIONS = """You are a comprehensive research agent. Your goal is to conduct thorough research on the given topic by:

1. Breaking down the query into key aspects that need investigation
2. Using web_search tools to gather information from multiple sources
3. Running searches in PARALLEL when possible to maximize efficiency
4. Identifying gaps in the collected information and filling them with targeted searches
5. Cross-referencing information from different sources for accuracy
6. Synthesizing all findings into a comprehensive, well-structured report

IMPORTANT GUIDELINES:
- Use multiple search engines for diverse perspectives (if available)
- Run searches in parallel using multiple tool calls in a single message
- Be thorough - continue searching until all aspects are covered
- Verify contradictory information by searching for additional sources
- Include relevant quotes and citations in your final report
- Structure the report with clear sections and subsections
- End with a summary of key findings and any remaining open questions

Start by analyzing the query and planning your research approach."""

RESEARCH_PROMPT = (
    "Research the following topic comprehensively: {query}\n\n"
    "Please provide a detailed report with multiple perspectives, citations, and a clear structure."
)

NO_ENGINES_MESSAGE = (
    f"{ERROR_PREFIX} No search engines are configured. "
    "Please set API keys for at least one search provider."
)

# Graph node whose model output is the report. Chat models run inside the
# search tool (LLM engines) stream under the "tools" node.
REPORT_NODE = "agent"


def resolve_model(model_class, config: Config) -> Tuple[str, str]:
    """Pick the first configured ``(provider, model)`` for a model class."""
    model_class = ModelClass(model_class)
    candidates = MODEL_CLASS_MODELS.get(model_class, _STANDARD)
    for provider, model in candidates:
        if getattr(config.api, PROVIDER_CREDENTIALS[provider]):
            return provider, model
    raise ConfigurationError(f"No configured provider offers a model for class '{model_class.value}'")


class TrackedSearch:
    """Search callable that logs timing and outcome of every call."""

    def __init__(self, dispatcher: EngineDispatcher, metrics: Optional[SearchMetrics] = None):
        self.dispatcher = dispatcher
        self.metrics = metrics or SearchMetrics()
        self.executions: Dict[str, float] = {}
        self.log = get_struct_logger()

    async def __call__(self, engine: str, query: str, num_results: Optional[int] = DEFAULT_RESULTS_COUNT) -> str:
        execution_id = f"{engine}-{uuid.uuid4().hex[:8]}"
        self.log.info("search_started", engine=engine, query=query)
        start = time.monotonic()
        try:
            outcome = await self.dispatcher.dispatch(engine, query, num_results)
        except Exception as e:
            duration_ms = round((time.monotonic() - start) * 1000)
            self.log.error("search_exception", engine=engine, duration_ms=duration_ms, error=str(e))
            self.metrics.record_error(str(engine), "exception")
            raise

        duration = time.monotonic() - start
        self.executions[execution_id] = duration
        self.metrics.record_search(str(engine), duration)

        if outcome.ok:
            self.log.info(
                "search_complete",
                engine=engine,
                duration_ms=round(duration * 1000),
                preview=outcome.payload[:100],
            )
        else:
            self.log.warning(
                "search_failed",
                engine=engine,
                duration_ms=round(duration * 1000),
                error=outcome.message,
            )
            self.metrics.record_error(str(engine), outcome.error_kind.value)
        return outcome.to_legacy()

    def log_summary(self) -> None:
        summary = self.metrics.get_summary()
        self.log.info(
            "research_search_summary",
            total_searches=summary["total_searches"],
            total_time_ms=round(summary["total_time"] * 1000),
            average_time_ms=round(summary["average_time"] * 1000),
        )


class ResearchAgent:
    """Autonomous multi-round research over every configured engine."""

    def __init__(
        self,
        config: Optional[Config] = None,
        dispatcher: Optional[EngineDispatcher] = None,
        model_factory: Callable = build_chat_model,
        agent_factory: Callable = create_react_agent,
    ):
        self.config = config or load_config()
        self.dispatcher = dispatcher or EngineDispatcher(config=self.config)
        self.model_factory = model_factory
        self.agent_factory = agent_factory
        self.tracker = TrackedSearch(self.dispatcher)

    async def run(self, query: str, model_class=ModelClass.REASONING_MINI) -> str:
        """
        Research ``query`` and return the synthesized report.

        Args:
            query: Research topic
            model_class: ModelClass (or its value) used for the driving model

        Returns:
            The report text, or an error string
        """
        tools = list_search_tools(self.config, search_fn=self.tracker)
        if not tools:
            return NO_ENGINES_MESSAGE

        try:
            provider, model = resolve_model(model_class, self.config)
        except ValueError:
            return f"{ERROR_PREFIX} Unsupported model class {model_class}"
        except ConfigurationError as e:
            return f"{ERROR_PREFIX} {e.message}"

        log = get_struct_logger()
        log.info(
            "research_started",
            query=query,
            engines=tools[0].engines,
            model_class=ModelClass(model_class).value,
            model=model,
        )

        spec = AgentSpec(
            model=model,
            name="ResearchAgent",
            description="Comprehensive web research agent",
            instructions=RESEARCH_INSTRUCTIONS,
            provider=provider,
        )
        parts: List[str] = []
        try:
            chat_model = self.model_factory(spec, self.config)
            agent = self.agent_factory(
                chat_model,
                [tool.to_langchain_tool() for tool in tools],
                prompt=RESEARCH_INSTRUCTIONS,
            )
            stream = agent.astream(
                {"messages": [HumanMessage(content=RESEARCH_PROMPT.format(query=query))]},
                config={
                    "recursion_limit": self.config.agent.research_recursion_limit,
                    "run_name": spec.name,
                },
                stream_mode="messages",
            )
            async for message, metadata in stream:
                if isinstance(message, AIMessage) and metadata.get("langgraph_node") == REPORT_NODE:
                    text = chunk_text(message)
                    if text:
                        parts.append(text)
        except Exception as e:
            logger.error(f"Research failed: {e}")
            return f"Error during research: {e}"

        self.tracker.log_summary()
        log.info("research_complete", searches=len(self.tracker.executions))
        return "".join(parts)


async def research_task(query: str, model_class=ModelClass.REASONING_MINI) -> str:
    """Run a research task with configuration read from the environment."""
    return await ResearchAgent().run(query, model_class)
