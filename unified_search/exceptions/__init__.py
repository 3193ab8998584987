"""Exception hierarchy for unified search."""

from .custom_exceptions import (
    UnifiedSearchError,
    InvalidQueryError,
    UnknownEngineError,
    ConfigurationError,
    MissingCredentialError,
    APIError,
    APIQuotaExceededError,
    APIAuthenticationError,
    APITimeoutError,
    APIRateLimitError,
    MalformedResponseError,
    LLMError,
    LLMConfigError,
)

__all__ = [
    "UnifiedSearchError",
    "InvalidQueryError",
    "UnknownEngineError",
    "ConfigurationError",
    "MissingCredentialError",
    "APIError",
    "APIQuotaExceededError",
    "APIAuthenticationError",
    "APITimeoutError",
    "APIRateLimitError",
    "MalformedResponseError",
    "LLMError",
    "LLMConfigError",
]
