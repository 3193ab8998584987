"""Expose the dispatcher as a schema-described tool for agent runtimes."""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Type

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field, create_model

from ..core.engines import enabled_engines, engine_descriptions
from ..core.state import DEFAULT_RESULTS_COUNT
from ..utils.config import Config, load_config

logger = logging.getLogger(__name__)

SEARCH_TOOL_NAME = "web_search"
SEARCH_TOOL_DESCRIPTION = "Adaptive web search - pick the engines that best fit the query."
QUERY_DESCRIPTION = (
    "Plain-language search query. Each engine has AI interpretation, "
    "so you can leave it up to the engine to decide how to search."
)
NUM_RESULTS_DESCRIPTION = f"Max results to return (default = {DEFAULT_RESULTS_COUNT})."

SearchFunction = Callable[[str, str, Optional[int]], Awaitable[str]]


@dataclass
class ToolDescriptor:
    """A callable tool plus the metadata an agent runtime needs to offer it."""

    name: str
    description: str
    engines: List[str]
    parameters: Dict[str, Any]
    args_schema: Type[BaseModel]
    function: SearchFunction

    def to_dict(self) -> Dict[str, Any]:
        """Function-calling definition in the common ``{"type": "function"}`` shape."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }

    def to_langchain_tool(self) -> StructuredTool:
        search_fn = self.function

        async def _run(engine: str, query: str, num_results: Optional[int] = DEFAULT_RESULTS_COUNT) -> str:
            return await search_fn(engine, query, num_results)

        return StructuredTool.from_function(
            coroutine=_run,
            name=self.name,
            description=self.description,
            args_schema=self.args_schema,
        )


def _engine_field_description(descriptions: List[str]) -> str:
    return "Engine to use:\n" + "\n".join(descriptions)


def build_parameters(engines: List[str], descriptions: List[str]) -> Dict[str, Any]:
    """JSON schema for the tool arguments."""
    return {
        "type": "object",
        "properties": {
            "engine": {
                "type": "string",
                "description": _engine_field_description(descriptions),
                "enum": list(engines),
            },
            "query": {
                "type": "string",
                "description": QUERY_DESCRIPTION,
            },
            "num_results": {
                "type": "integer",
                "description": NUM_RESULTS_DESCRIPTION,
                "default": DEFAULT_RESULTS_COUNT,
            },
        },
        "required": ["engine", "query"],
    }


def build_args_schema(engines: List[str], descriptions: List[str]) -> Type[BaseModel]:
    """Pydantic model mirroring :func:`build_parameters`, used for argument validation."""
    return create_model(
        "WebSearchArgs",
        engine=(Literal[tuple(engines)], Field(description=_engine_field_description(descriptions))),
        query=(str, Field(description=QUERY_DESCRIPTION)),
        num_results=(Optional[int], Field(default=DEFAULT_RESULTS_COUNT, description=NUM_RESULTS_DESCRIPTION)),
    )


def list_search_tools(
    config: Optional[Config] = None,
    search_fn: Optional[SearchFunction] = None,
) -> List[ToolDescriptor]:
    """
    Build the search tool for the currently enabled engines.

    Args:
        config: Resolved configuration; read from the environment when omitted
        search_fn: Callable backing the tool; defaults to :func:`unified_search.search`

    Returns:
        A one-element list, or an empty list when no engine is configured
    """
    config = config or load_config()
    engines = [engine.value for engine in enabled_engines(config)]
    if not engines:
        logger.info("No search engines configured; no search tool exposed")
        return []

    if search_fn is None:
        from ..core.dispatcher import search as search_fn

    descriptions = engine_descriptions(config)
    return [
        ToolDescriptor(
            name=SEARCH_TOOL_NAME,
            description=SEARCH_TOOL_DESCRIPTION,
            engines=engines,
            parameters=build_parameters(engines, descriptions),
            args_schema=build_args_schema(engines, descriptions),
            function=search_fn,
        )
    ]
