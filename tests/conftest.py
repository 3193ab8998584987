"""
Test configuration and fixtures for unified search.
"""

import pytest
from typing import Any, Dict, List, Optional

from unified_search.core import dispatcher as dispatcher_module
from unified_search.llm.runtime import ErrorEvent, MessageDelta
from unified_search.utils.config import reset_config

# Every variable the configuration layer reads
CONFIG_ENV_VARS = [
    "BRAVE_API_KEY",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "GOOGLE_API_KEY",
    "XAI_API_KEY",
    "OPENROUTER_API_KEY",
    "BRAVE_BASE_URL",
    "XAI_BASE_URL",
    "OPENROUTER_BASE_URL",
    "DEFAULT_ENGINE",
    "DEFAULT_NUM_RESULTS",
    "SEARCH_TIMEOUT",
    "RESEARCH_MODEL_CLASS",
    "RESEARCH_RECURSION_LIMIT",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test with no credentials and default settings."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(dispatcher_module, "_default_dispatcher", None)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def brave_env(monkeypatch):
    monkeypatch.setenv("BRAVE_API_KEY", "test_brave_api_key")


@pytest.fixture
def all_keys_env(monkeypatch):
    """Credentials for every provider."""
    monkeypatch.setenv("BRAVE_API_KEY", "test_brave_api_key")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test_anthropic_api_key")
    monkeypatch.setenv("OPENAI_API_KEY", "test_openai_api_key")
    monkeypatch.setenv("GOOGLE_API_KEY", "test_google_api_key")
    monkeypatch.setenv("XAI_API_KEY", "test_xai_api_key")
    monkeypatch.setenv("OPENROUTER_API_KEY", "test_openrouter_api_key")


class FakeResponse:
    """Stand-in for an aiohttp response used as an async context manager."""

    def __init__(self, status: int, payload: Any = None, text: str = ""):
        self.status = status
        self._payload = payload
        self._text = text

    async def json(self):
        return self._payload

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    def __init__(self, backend: "FakeBrave", timeout=None):
        self.backend = backend
        self.timeout = timeout

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    def get(self, url, headers=None, params=None):
        self.backend.calls.append({
            "url": url,
            "headers": headers,
            "params": params,
            "timeout": self.timeout,
        })
        if self.backend.error is not None:
            raise self.backend.error
        return FakeResponse(self.backend.status, self.backend.payload, self.backend.text)


class FakeBrave:
    """Deterministic Brave backend recording every request."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.status = 200
        self.payload: Any = {}
        self.text = ""
        self.error: Optional[BaseException] = None

    def session(self, *args, **kwargs):
        return FakeSession(self, kwargs.get("timeout"))


@pytest.fixture
def fake_brave(monkeypatch):
    """Replace aiohttp.ClientSession in the Brave transport with FakeBrave."""
    backend = FakeBrave()
    monkeypatch.setattr("unified_search.tools.brave_search.aiohttp.ClientSession", backend.session)
    return backend


def make_stream(*events, record: Optional[list] = None):
    """Build an agent stream yielding ``events``; str items become deltas."""

    async def stream(prompt, spec, config=None):
        if record is not None:
            record.append({"prompt": prompt, "spec": spec, "config": config})
        for event in events:
            yield MessageDelta(event) if isinstance(event, str) else event

    return stream


@pytest.fixture
def stream_factory():
    return make_stream


@pytest.fixture
def failing_stream():
    """Stream that emits partial text and then an error event."""
    return make_stream("partial ", "answer", ErrorEvent("upstream model overloaded"))


@pytest.fixture
def brave_web_payload():
    """Brave web search body with three results."""
    return {
        "type": "search",
        "web": {
            "results": [
                {
                    "title": "Rust Programming Language",
                    "url": "https://www.rust-lang.org/",
                    "description": "A language empowering everyone to build reliable software.",
                },
                {
                    "title": "The Rust Book",
                    "url": "https://doc.rust-lang.org/book/",
                    "description": "An introductory book about Rust.",
                },
                {
                    "title": "Rust by Example",
                    "url": "https://doc.rust-lang.org/rust-by-example/",
                    "description": "A collection of runnable examples.",
                },
            ]
        },
    }


@pytest.fixture
def brave_image_payload():
    """Brave image search body; the second entry lacks title, thumbnail and properties."""
    return {
        "type": "images",
        "results": [
            {
                "title": "Sunset over the bay",
                "url": "https://images.example.com/sunset.jpg",
                "source": "example.com",
                "thumbnail": {"src": "https://imgs.search.brave.com/thumb/sunset.jpg"},
                "properties": {"url": "https://images.example.com/sunset.jpg", "width": 1920, "height": 1080},
            },
            {
                "url": "https://images.example.com/dusk.png",
            },
        ],
    }
