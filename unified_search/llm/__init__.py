"""
LLM integration: streaming runtime and the search-grounded model adapter.
"""

from .runtime import AgentSpec, SignalTool, MessageDelta, ErrorEvent, run_single_turn, stream_agent
from .search_adapter import LLMSearchAdapter

__all__ = [
    "AgentSpec",
    "SignalTool",
    "MessageDelta",
    "ErrorEvent",
    "run_single_turn",
    "stream_agent",
    "LLMSearchAdapter",
]
