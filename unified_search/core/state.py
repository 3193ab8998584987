"""Data model shared by the registry, transports, adapter and dispatcher."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_RESULTS_COUNT = 5

ERROR_PREFIX = "Error:"


class EngineId(str, Enum):
    """Supported search engines."""
    BRAVE = "brave"
    BRAVE_IMAGES = "brave-images"
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GOOGLE = "google"
    SONAR = "sonar"
    SONAR_PRO = "sonar-pro"
    SONAR_DEEP_RESEARCH = "sonar-deep-research"
    XAI = "xai"

    @classmethod
    def parse(cls, value) -> Optional["EngineId"]:
        """Return the member for ``value`` or None when it is not a known engine."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class TransportKind(str, Enum):
    """How an engine is reached."""
    DIRECT_HTTP = "direct-http"
    LLM_AGENT = "llm-agent"


class ErrorKind(str, Enum):
    """Failure taxonomy carried by error outcomes."""
    BAD_INPUT = "bad_input"
    UNKNOWN_ENGINE = "unknown_engine"
    MISSING_CONFIGURATION = "missing_configuration"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT_FAILURE = "transport_failure"
    AGENT_FAILURE = "agent_failure"


class SearchResult(BaseModel):
    """Normalized web search result."""
    model_config = ConfigDict(frozen=True)

    title: str = ""
    url: str = Field(min_length=1)
    snippet: str = ""


class ImageSearchResult(BaseModel):
    """Normalized image search result."""
    model_config = ConfigDict(frozen=True)

    title: str = "Untitled"
    url: str = Field(min_length=1)
    thumbnail: str
    source: str = "Unknown"
    width: Optional[int] = None
    height: Optional[int] = None


class SearchOutcome(BaseModel):
    """Result of a dispatch: either a payload or a classified error message.

    ``message`` keeps the historical human readable text so that
    :meth:`to_legacy` can reproduce the old string convention exactly.
    """
    model_config = ConfigDict(frozen=True)

    ok: bool
    payload: str = ""
    error_kind: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, payload: str) -> "SearchOutcome":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "SearchOutcome":
        return cls(ok=False, error_kind=kind, message=message)

    def to_legacy(self) -> str:
        """Serialize to the single-string form (payload, or the error text)."""
        return self.payload if self.ok else self.message


def is_error_text(text: str) -> bool:
    """Check a legacy outcome string for the error convention."""
    return text.startswith((ERROR_PREFIX, "Error performing ", "Error during "))
