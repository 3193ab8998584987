"""
Unified Search - one web search interface over keyword and LLM search engines.

This package routes a query to one of several backends and returns a
uniform outcome: Brave web and image search over HTTP, or a search-grounded
model (Anthropic, OpenAI, Google, xAI, or Perplexity Sonar via OpenRouter)
answering in free text. Engines are enabled by the presence of their API
key. A LangGraph research agent builds multi-round reports on top of the
same search tool.

Example Usage:
    from unified_search import search

    results = await search("brave", "python asyncio tutorial", 5)
    print(results)
"""

from .core.agent import ResearchAgent, ModelClass, research_task
from .core.dispatcher import EngineDispatcher, dispatch, search, search_as, web_search
from .core.engines import ENGINE_REGISTRY, EngineDescriptor, enabled_engines
from .core.state import (
    EngineId,
    ErrorKind,
    SearchResult,
    ImageSearchResult,
    SearchOutcome,
)
from .tools.search_tools import ToolDescriptor, list_search_tools
from .utils.config import Config
from .utils.logging import setup_logging, get_logger
from .exceptions.custom_exceptions import (
    UnifiedSearchError,
    ConfigurationError,
    MissingCredentialError,
    APIError,
    LLMError,
)

# Version information
__version__ = "1.0.0"
__license__ = "MIT"

# Package metadata
__title__ = "unified-search"
__description__ = "Unified web search over Brave and search-grounded LLM engines"

# Export main classes and functions
__all__ = [
    # Search entry points
    "search",
    "search_as",
    "web_search",
    "dispatch",
    "research_task",
    "list_search_tools",

    # Main classes
    "EngineDispatcher",
    "ResearchAgent",
    "ModelClass",
    "ToolDescriptor",
    "Config",

    # Data model
    "ENGINE_REGISTRY",
    "EngineDescriptor",
    "EngineId",
    "ErrorKind",
    "SearchResult",
    "ImageSearchResult",
    "SearchOutcome",
    "enabled_engines",

    # Utility functions
    "setup_logging",
    "get_logger",

    # Exceptions
    "UnifiedSearchError",
    "ConfigurationError",
    "MissingCredentialError",
    "APIError",
    "LLMError",

    # Version info
    "__version__",
]

# Initialize logging by default
setup_logging()

# Module-level logger
logger = get_logger(__name__)
