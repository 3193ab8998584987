"""Custom exceptions for the unified search façade."""

from typing import Optional, Dict, Any

from ..core.state import ErrorKind


class UnifiedSearchError(Exception):
    """Base exception for all unified search errors."""

    kind: ErrorKind = ErrorKind.TRANSPORT_FAILURE

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidQueryError(UnifiedSearchError):
    """Caller passed arguments of the wrong type or range."""
    kind = ErrorKind.BAD_INPUT


class UnknownEngineError(UnifiedSearchError):
    """Engine identifier is outside the supported set."""
    kind = ErrorKind.UNKNOWN_ENGINE


class ConfigurationError(UnifiedSearchError):
    """Configuration error."""
    kind = ErrorKind.MISSING_CONFIGURATION


class MissingCredentialError(ConfigurationError):
    """The credential gating an engine is not set."""

    def __init__(self, provider: str, env_var: str, **kwargs):
        self.provider = provider
        self.env_var = env_var
        super().__init__(f"Error: {provider} API key not configured.", **kwargs)


class APIError(UnifiedSearchError):
    """API related error."""
    kind = ErrorKind.TRANSPORT_FAILURE


class APIQuotaExceededError(APIError):
    """API quota exceeded."""
    pass


class APIAuthenticationError(APIError):
    """API authentication failed."""
    pass


class APITimeoutError(APIError):
    """API request timed out."""
    pass


class APIRateLimitError(APIError):
    """API rate limit hit."""
    pass


class MalformedResponseError(APIError):
    """Upstream body is missing the expected nested structure."""
    kind = ErrorKind.MALFORMED_RESPONSE


class LLMError(UnifiedSearchError):
    """LLM processing error."""
    kind = ErrorKind.AGENT_FAILURE


class LLMConfigError(LLMError):
    """LLM configuration error."""
    pass
