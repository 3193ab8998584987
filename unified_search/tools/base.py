"""Base class for direct-HTTP search tools."""

import json
import logging
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional

from pydantic import BaseModel, ValidationError

from ..core.state import SearchOutcome, ErrorKind, ERROR_PREFIX
from ..exceptions.custom_exceptions import UnifiedSearchError, MalformedResponseError

logger = logging.getLogger(__name__)


class BaseSearchTool(ABC):
    """Search tool base class.

    Subclasses fetch a raw provider payload, point at the list of entries
    inside it and map each entry to a result model. :meth:`run` is the
    component boundary: every failure below it becomes an error outcome.
    """

    def __init__(self, api_key: str, timeout: float = 30.0):
        self.api_key = api_key
        self.timeout = timeout

    @property
    @abstractmethod
    def tool_name(self) -> str:
        """Tool name used in error messages, e.g. ``Brave``."""
        pass

    @property
    @abstractmethod
    def api_name(self) -> str:
        """Upstream API name used in malformed-response messages."""
        pass

    @abstractmethod
    async def _execute_search(self, query: str, num_results: int) -> Dict[str, Any]:
        """Perform the request and return the decoded body."""
        pass

    @abstractmethod
    def _extract_entries(self, payload: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Return the raw result entries, raising MalformedResponseError when the shape is wrong."""
        pass

    @abstractmethod
    def _standardize_result(self, raw_result: Dict[str, Any]) -> BaseModel:
        """Map one raw entry to a result model."""
        pass

    def normalize(self, payload: Dict[str, Any]) -> List[BaseModel]:
        """Map a raw payload to result models, keeping provider order.

        Entries that cannot form a valid record (no url) are skipped.
        """
        standardized_results = []
        for raw_result in self._extract_entries(payload):
            try:
                standardized_results.append(self._standardize_result(raw_result))
            except (ValidationError, AttributeError, TypeError) as e:
                logger.warning(f"Skipping malformed entry from {self.api_name}: {e}")
        return standardized_results

    async def run(self, query: str, num_results: int) -> SearchOutcome:
        """
        Execute a search and serialize the normalized results.

        Args:
            query: Search query
            num_results: Result count hint forwarded to the API

        Returns:
            A success outcome holding a JSON array, or an error outcome
        """
        logger.info(f"Performing {self.api_name} search for: {query}")
        try:
            payload = await self._execute_search(query, num_results)
            results = self.normalize(payload)
        except MalformedResponseError as e:
            logger.error(f"Invalid response structure from {self.api_name}: {e.details.get('payload')!r}")
            return SearchOutcome.failure(
                ErrorKind.MALFORMED_RESPONSE,
                f"{ERROR_PREFIX} Received an invalid response structure from {self.api_name}.",
            )
        except Exception as e:
            logger.error(f"Error during {self.api_name} search: {e}")
            message = e.message if isinstance(e, UnifiedSearchError) else str(e)
            return SearchOutcome.failure(
                ErrorKind.TRANSPORT_FAILURE,
                f"Error performing {self.tool_name} search: {message}",
            )

        return SearchOutcome.success(
            json.dumps([result.model_dump(exclude_none=True) for result in results])
        )

    def get_tool_info(self) -> Dict[str, Any]:
        """Get tool information."""
        return {
            "name": self.tool_name,
            "api": self.api_name,
            "timeout": self.timeout,
        }
