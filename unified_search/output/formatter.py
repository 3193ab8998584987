"""
Human-readable rendering of search payloads for the command line.
"""

import json
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

IMAGE_QUERY_KEYWORDS = frozenset({
    "image", "images", "photo", "photos", "picture", "pictures", "pic", "pics",
    "logo", "logos", "icon", "icons", "screenshot", "screenshots",
    "jpg", "jpeg", "png", "gif", "svg", "webp", "bmp",
    "wallpaper", "wallpapers", "background", "backgrounds",
    "thumbnail", "thumbnails", "avatar", "avatars",
})

IMAGE_QUERY_HINT = "🔍 Detected image query. Consider using --engine brave-images for better results."


def is_image_query(query: str) -> bool:
    """Whether any image-related keyword occurs in the query, even inside a longer word."""
    lowered = query.lower()
    return any(keyword in lowered for keyword in IMAGE_QUERY_KEYWORDS)


def parse_results(payload: str) -> Optional[List[Dict[str, Any]]]:
    """Decode a JSON result array; None when the payload is free text."""
    try:
        data = json.loads(payload)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, list):
        return None
    return [item for item in data if isinstance(item, dict)]


class ResultFormatter:
    """Formats dispatcher payloads as numbered listings."""

    def format_listing(self, query: str, results: List[Dict[str, Any]]) -> str:
        lines = [f'\nSearch results for: "{query}"\n']
        for index, result in enumerate(results, start=1):
            lines.append(f"{index}. {result.get('title', '')}")
            lines.append(f"   {result.get('url', '')}")
            if "thumbnail" in result:
                lines.extend(self._image_lines(result))
            elif result.get("snippet"):
                lines.append(f"   {result['snippet']}")
            lines.append("")
        return "\n".join(lines)

    def _image_lines(self, result: Dict[str, Any]) -> List[str]:
        lines = [
            f"   Source: {result.get('source', 'Unknown')}",
            f"   Thumbnail: {result['thumbnail']}",
        ]
        if result.get("width") and result.get("height"):
            lines.append(f"   Dimensions: {result['width']}x{result['height']}")
        return lines

    def format_payload(self, query: str, payload: str, as_json: bool = False) -> str:
        """
        Render a successful payload.

        JSON arrays become a listing. With ``as_json``, and for anything
        that is not a JSON array, the payload is returned unchanged.
        """
        if as_json:
            return payload
        results = parse_results(payload)
        if results is None:
            return payload
        return self.format_listing(query, results)
