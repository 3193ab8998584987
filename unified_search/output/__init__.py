"""
Output formatting for search results.
"""

from .formatter import ResultFormatter, is_image_query, parse_results, IMAGE_QUERY_HINT

__all__ = ["ResultFormatter", "is_image_query", "parse_results", "IMAGE_QUERY_HINT"]
