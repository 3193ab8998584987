"""Adapter exposing search-grounded LLM agents behind the search tool interface."""

import logging
from typing import Optional, Sequence, Union

from .runtime import AgentSpec, AgentStream, SignalTool, run_single_turn, stream_agent
from ..core.engines import EngineDescriptor
from ..core.state import SearchOutcome, ErrorKind, ERROR_PREFIX
from ..utils.config import Config

logger = logging.getLogger(__name__)


class LLMSearchAdapter:
    """Runs a one-message conversation against a search-capable model."""

    def __init__(self, stream: Optional[AgentStream] = None):
        self._stream = stream or stream_agent

    async def invoke(
        self,
        query: str,
        model: str,
        name: str,
        instructions: str,
        tools: Optional[Sequence[Union[str, SignalTool]]] = None,
        caller_agent_id: Optional[str] = None,
        provider: Optional[str] = None,
        config: Optional[Config] = None,
    ) -> SearchOutcome:
        """
        Ask ``model`` to answer ``query`` and return its accumulated text.

        Args:
            query: Raw user query, sent as the only user message
            model: Provider model identifier
            name: Agent display name
            instructions: System instructions for the agent
            tools: Optional signal tools (names or SignalTool instances)
            caller_agent_id: Correlation token forwarded as run metadata
            provider: Provider key; inferred from the model when omitted
            config: Resolved configuration carrying the credentials

        Returns:
            Success with free text, or an ``Error:`` outcome
        """
        spec = AgentSpec(
            model=model,
            name=name,
            instructions=instructions,
            tools=tuple(SignalTool(tool) if isinstance(tool, str) else tool for tool in tools or ()),
            parent_id=caller_agent_id,
            provider=provider,
        )
        logger.info(f"Running {name} ({model}) search for: {query}")
        try:
            return await run_single_turn(query, spec, stream=self._stream, config=config)
        except Exception as e:
            logger.error(f"{name} search failed: {e}")
            return SearchOutcome.failure(ErrorKind.AGENT_FAILURE, f"{ERROR_PREFIX} {e}")

    async def invoke_engine(
        self,
        descriptor: EngineDescriptor,
        query: str,
        caller_agent_id: Optional[str] = None,
        config: Optional[Config] = None,
    ) -> SearchOutcome:
        """Invoke the model configured for a registry entry."""
        tools = [descriptor.signal_tool] if descriptor.signal_tool else None
        return await self.invoke(
            query,
            descriptor.model,
            descriptor.display_name,
            descriptor.instructions,
            tools=tools,
            caller_agent_id=caller_agent_id,
            provider=descriptor.provider,
            config=config,
        )
