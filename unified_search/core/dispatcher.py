"""
Engine dispatcher.

Validates a request, checks the credential gating the engine, routes to the
direct-HTTP transport or the LLM adapter, and turns every failure into an
error outcome. Nothing raised by a backend escapes :meth:`EngineDispatcher.dispatch`.
"""

import json
import logging
from typing import Any, Optional, Tuple

from pydantic import ValidationError

from .engines import EngineDescriptor, get_descriptor
from .state import (
    DEFAULT_RESULTS_COUNT,
    ERROR_PREFIX,
    EngineId,
    ErrorKind,
    SearchOutcome,
    TransportKind,
)
from ..exceptions.custom_exceptions import (
    InvalidQueryError,
    MissingCredentialError,
    UnifiedSearchError,
    UnknownEngineError,
)
from ..llm.search_adapter import LLMSearchAdapter
from ..tools.brave_search import BraveSearchTool, BraveImageSearchTool
from ..utils.config import Config, load_config

logger = logging.getLogger(__name__)

HTTP_TOOLS = {
    EngineId.BRAVE: BraveSearchTool,
    EngineId.BRAVE_IMAGES: BraveImageSearchTool,
}


def _describe_value(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def _require_string(value: Any) -> None:
    if not isinstance(value, str):
        raise InvalidQueryError(
            f"{ERROR_PREFIX} Search query must be a string, "
            f"received {type(value).__name__}: {_describe_value(value)}"
        )


def _coerce_num_results(value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidQueryError(
            f"{ERROR_PREFIX} Number of results must be a positive integer, "
            f"received {_describe_value(value)}"
        )
    return value


class EngineDispatcher:
    """Routes search requests to the engine that serves them.

    When no ``config`` is given, credentials are re-read from the
    environment on every call.
    """

    def __init__(self, config: Optional[Config] = None, llm_adapter: Optional[LLMSearchAdapter] = None):
        self._config = config
        self.llm_adapter = llm_adapter or LLMSearchAdapter()

    def _validate(self, engine: Any, query: Any, num_results: Any, config: Config) -> Tuple[EngineDescriptor, int]:
        # Order: engine type, engine name, query, count, credential.
        # Under the overloaded legacy signature a shifted call lands the query in the engine slot.
        _require_string(engine)
        descriptor = get_descriptor(engine)
        if descriptor is None:
            raise UnknownEngineError(f"{ERROR_PREFIX} Invalid or unsupported search engine {engine}")

        _require_string(query)
        count = _coerce_num_results(num_results, config.agent.default_num_results)

        if not config.credential_for(descriptor):
            raise MissingCredentialError(descriptor.provider_label, descriptor.env_var)
        return descriptor, count

    async def dispatch(
        self,
        engine: Any,
        query: Any,
        num_results: Optional[int] = DEFAULT_RESULTS_COUNT,
        caller_agent_id: Optional[str] = None,
    ) -> SearchOutcome:
        """
        Run one search.

        Args:
            engine: Engine identifier, e.g. ``"brave"``
            query: Search query text
            num_results: Result count hint (default 5)
            caller_agent_id: Optional correlation token for LLM engines

        Returns:
            SearchOutcome holding a JSON array, free text, or an error message
        """
        try:
            config = self._config or load_config()
            descriptor, count = self._validate(engine, query, num_results, config)
        except UnifiedSearchError as e:
            logger.warning(f"Rejected {engine!r} search: {e.message}")
            return SearchOutcome.failure(e.kind, e.message)
        except ValidationError as e:
            logger.error(f"Invalid configuration: {e}")
            return SearchOutcome.failure(ErrorKind.MISSING_CONFIGURATION, f"{ERROR_PREFIX} Invalid configuration: {e}")

        logger.info(f"Dispatching {descriptor.engine.value} search ({count} results): {query}")
        try:
            if descriptor.transport is TransportKind.DIRECT_HTTP:
                tool = HTTP_TOOLS[descriptor.engine](
                    api_key=config.credential_for(descriptor),
                    timeout=config.agent.http_timeout,
                    base_url=config.api.brave_base_url,
                )
                return await tool.run(query, count)
            return await self.llm_adapter.invoke_engine(
                descriptor, query, caller_agent_id=caller_agent_id, config=config
            )
        except Exception as e:
            logger.exception(f"Unexpected failure in {descriptor.engine.value} search")
            kind = (
                ErrorKind.TRANSPORT_FAILURE
                if descriptor.transport is TransportKind.DIRECT_HTTP
                else ErrorKind.AGENT_FAILURE
            )
            return SearchOutcome.failure(kind, f"{ERROR_PREFIX} {e}")


_default_dispatcher: Optional[EngineDispatcher] = None


def get_dispatcher() -> EngineDispatcher:
    """Get the process-wide dispatcher (configuration is still read per call)."""
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = EngineDispatcher()
    return _default_dispatcher


async def dispatch(
    engine: Any,
    query: Any,
    num_results: Optional[int] = DEFAULT_RESULTS_COUNT,
    caller_agent_id: Optional[str] = None,
) -> SearchOutcome:
    return await get_dispatcher().dispatch(engine, query, num_results, caller_agent_id)


async def search(engine: Any, query: Any, num_results: Optional[int] = DEFAULT_RESULTS_COUNT) -> str:
    """Search and return the legacy string outcome (JSON, text, or ``Error: ...``)."""
    outcome = await dispatch(engine, query, num_results)
    return outcome.to_legacy()


async def search_as(
    caller_agent_id: Optional[str],
    engine: Any,
    query: Any,
    num_results: Optional[int] = DEFAULT_RESULTS_COUNT,
) -> str:
    """Like :func:`search`, tagging LLM engine runs with the calling agent's id."""
    outcome = await dispatch(engine, query, num_results, caller_agent_id=caller_agent_id)
    return outcome.to_legacy()


async def web_search(
    engine_or_agent_id: Any,
    query_or_engine: Any = None,
    num_results_or_query: Any = None,
    num_results: Optional[int] = None,
) -> str:
    """Compatibility entry point accepting both historical call shapes.

    ``web_search(engine, query, n)`` and ``web_search(agent_id, engine, query, n)``
    are told apart by whether the second and third arguments are both strings.
    """
    if isinstance(query_or_engine, str) and isinstance(num_results_or_query, str):
        return await search_as(
            engine_or_agent_id,
            query_or_engine,
            num_results_or_query,
            DEFAULT_RESULTS_COUNT if num_results is None else num_results,
        )
    return await search(
        engine_or_agent_id,
        query_or_engine,
        DEFAULT_RESULTS_COUNT if num_results_or_query is None else num_results_or_query,
    )
