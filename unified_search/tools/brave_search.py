"""Brave Search API tools (web and image)."""

import asyncio
from typing import List, Dict, Any

import aiohttp

from .base import BaseSearchTool
from ..core.state import SearchResult, ImageSearchResult
from ..exceptions.custom_exceptions import (
    APIError,
    APIQuotaExceededError,
    APIAuthenticationError,
    APIRateLimitError,
    APITimeoutError,
    MalformedResponseError,
)

BRAVE_BASE_URL = "https://api.search.brave.com/res/v1"


class BraveSearchTool(BaseSearchTool):
    """Brave web search."""

    endpoint_path = "/web/search"

    def __init__(self, api_key: str, timeout: float = 30.0, base_url: str = BRAVE_BASE_URL):
        super().__init__(api_key, timeout)
        self.base_url = base_url.rstrip("/") + self.endpoint_path

    @property
    def tool_name(self) -> str:
        return "Brave"

    @property
    def api_name(self) -> str:
        return "Brave Search API"

    async def _execute_search(self, query: str, num_results: int) -> Dict[str, Any]:
        """Issue one GET against the Brave endpoint."""
        headers = {
            "Accept": "application/json",
            "X-Subscription-Token": self.api_key,
        }
        params = {
            "q": query,
            "count": num_results,
        }

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(self.base_url, headers=headers, params=params) as response:
                    if response.status == 200:
                        return await response.json()

                    elif response.status == 401:
                        raise APIAuthenticationError(f"{self.api_name} authentication failed")

                    elif response.status == 402:
                        raise APIQuotaExceededError(f"{self.api_name} quota exceeded")

                    elif response.status == 429:
                        raise APIRateLimitError(f"{self.api_name} rate limit exceeded")

                    else:
                        error_text = await response.text()
                        raise APIError(f"{self.api_name} error: {response.status} - {error_text}")

        except aiohttp.ClientError as e:
            raise APIError(f"Network error during {self.tool_name} search: {str(e)}")
        except asyncio.TimeoutError:
            raise APITimeoutError(f"{self.api_name} timed out after {self.timeout} seconds")

    def _extract_entries(self, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        web = payload.get("web") if isinstance(payload, dict) else None
        results = web.get("results") if isinstance(web, dict) else None
        if not isinstance(results, list):
            raise MalformedResponseError("missing web.results", details={"payload": payload})
        return results

    def _standardize_result(self, raw_result: Dict[str, Any]) -> SearchResult:
        return SearchResult(
            title=raw_result.get("title") or "",
            url=raw_result.get("url"),
            snippet=raw_result.get("description") or "",
        )


class BraveImageSearchTool(BraveSearchTool):
    """Brave image search."""

    endpoint_path = "/images/search"

    @property
    def tool_name(self) -> str:
        return "Brave image"

    @property
    def api_name(self) -> str:
        return "Brave Image Search API"

    def _extract_entries(self, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise MalformedResponseError("missing results", details={"payload": payload})
        return results

    def _standardize_result(self, raw_result: Dict[str, Any]) -> ImageSearchResult:
        url = raw_result.get("url")
        thumbnail = raw_result.get("thumbnail") or {}
        properties = raw_result.get("properties") or {}
        return ImageSearchResult(
            title=raw_result.get("title") or "Untitled",
            url=url,
            thumbnail=thumbnail.get("src") or url,
            source=raw_result.get("source") or "Unknown",
            width=properties.get("width"),
            height=properties.get("height"),
        )
