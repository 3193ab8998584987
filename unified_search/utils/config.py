"""Configuration management for the unified search façade."""

from typing import Optional, Dict, Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

from ..core.engines import ENGINE_REGISTRY, EngineDescriptor
from ..core.state import EngineId

# Load environment variables
load_dotenv()

_PLACEHOLDER_KEYS = {"your_api_key_here", "changeme"}


class APIConfig(BaseSettings):
    """Provider credentials and endpoints."""
    model_config = SettingsConfigDict(extra="ignore")

    # Keyword search
    brave_api_key: Optional[str] = Field(None, validation_alias="BRAVE_API_KEY")
    brave_base_url: str = Field("https://api.search.brave.com/res/v1", validation_alias="BRAVE_BASE_URL")

    # Search-grounded LLM providers
    anthropic_api_key: Optional[str] = Field(None, validation_alias="ANTHROPIC_API_KEY")
    openai_api_key: Optional[str] = Field(None, validation_alias="OPENAI_API_KEY")
    google_api_key: Optional[str] = Field(None, validation_alias="GOOGLE_API_KEY")
    xai_api_key: Optional[str] = Field(None, validation_alias="XAI_API_KEY")
    xai_base_url: str = Field("https://api.x.ai/v1", validation_alias="XAI_BASE_URL")
    openrouter_api_key: Optional[str] = Field(None, validation_alias="OPENROUTER_API_KEY")
    openrouter_base_url: str = Field("https://openrouter.ai/api/v1", validation_alias="OPENROUTER_BASE_URL")

    @field_validator(
        "brave_api_key",
        "anthropic_api_key",
        "openai_api_key",
        "google_api_key",
        "xai_api_key",
        "openrouter_api_key",
        mode="before",
    )
    @classmethod
    def _blank_means_unset(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        if not value or value.lower() in _PLACEHOLDER_KEYS or value.startswith("your_"):
            return None
        return value


class AgentConfig(BaseSettings):
    """Search and research settings."""
    model_config = SettingsConfigDict(extra="ignore")

    default_engine: str = Field("brave", validation_alias="DEFAULT_ENGINE")
    default_num_results: int = Field(5, ge=1, validation_alias="DEFAULT_NUM_RESULTS")
    http_timeout: float = Field(30.0, gt=0, validation_alias="SEARCH_TIMEOUT")

    research_model_class: str = Field("reasoning_mini", validation_alias="RESEARCH_MODEL_CLASS")
    research_recursion_limit: int = Field(50, ge=1, validation_alias="RESEARCH_RECURSION_LIMIT")


class LoggingConfig(BaseSettings):
    """Logging settings."""
    model_config = SettingsConfigDict(extra="ignore")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_format: str = Field("console", validation_alias="LOG_FORMAT")
    log_file: Optional[str] = Field(None, validation_alias="LOG_FILE")


class Config:
    """Main configuration object combining every settings group."""

    def __init__(self):
        self.api = APIConfig()
        self.agent = AgentConfig()
        self.logging = LoggingConfig()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dict with credentials redacted."""
        api = self.api.model_dump()
        for key in api:
            if key.endswith("_api_key") and api[key]:
                api[key] = "***"
        return {
            "api": api,
            "agent": self.agent.model_dump(),
            "logging": self.logging.model_dump(),
        }

    def credential_for(self, descriptor: EngineDescriptor) -> Optional[str]:
        return getattr(self.api, descriptor.credential)

    def is_engine_enabled(self, engine: EngineId) -> bool:
        descriptor = ENGINE_REGISTRY.get(engine)
        return descriptor is not None and bool(self.credential_for(descriptor))

    def enabled_engines(self) -> List[EngineId]:
        return [engine for engine in ENGINE_REGISTRY if self.is_engine_enabled(engine)]


# Global config instance, lazily loaded
_config_instance = None


def get_config() -> Config:
    """Get the cached process-wide configuration."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def load_config() -> Config:
    """Resolve configuration from the current environment, bypassing the cache."""
    return Config()
