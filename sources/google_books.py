"""
================================================================================
MagFinder v1.0 - Google Books Fetcher
================================================================================
Book metadata search via the Google Books volumes API.

API: https://www.googleapis.com/books/v1/volumes?q=intitle:"<name>"

NOTE: Unlike every other fetcher, a volume whose publishedDate has no year in
the valid window is dropped instead of being tagged "Unknown".
================================================================================
"""

import logging
from typing import List, Optional, Dict, Any

from .base import BaseFetcher, SearchResult
from .matching import UNKNOWN_YEAR, extract_year, verify_identity

logger = logging.getLogger(__name__)


class GoogleBooksFetcher(BaseFetcher):
    """Fetcher for Google Books volumes."""

    id = "google_books"
    name = "Google Books"
    base_url = "https://www.googleapis.com"

    SEARCH_URL = "https://www.googleapis.com/books/v1/volumes"
    MAX_RESULTS = 40

    def _params(self, target_name: str) -> Dict[str, Any]:
        return {
            'q': f'intitle:"{target_name}"',
            'maxResults': self.MAX_RESULTS,
        }

    def _parse_item(self, item: Dict[str, Any], target_name: str) -> Optional[SearchResult]:
        volume_info = item.get('volumeInfo') or {}
        title = (volume_info.get('title') or "").strip()
        if not title:
            return None

        year = extract_year(volume_info.get('publishedDate') or "")
        if year == UNKNOWN_YEAR or not verify_identity(title, target_name):
            return None

        url = volume_info.get('previewLink') or volume_info.get('infoLink')
        if not url:
            return None

        return SearchResult(
            source=self.id,
            title=title,
            year=year,
            url=url,
            description=volume_info.get('description') or ""
        )

    async def search(self, target_name: str) -> List[SearchResult]:
        self.warnings = []
        results = []
        try:
            data = await self._get_json(self.SEARCH_URL, params=self._params(target_name))
            for item in data.get('items') or []:
                if not isinstance(item, dict):
                    continue
                result = self._parse_item(item, target_name)
                if result:
                    results.append(result)
        except Exception as e:
            self._record_failure("volumes", e)
            return []

        logger.info(f"[{self.name}] {len(results)} volumes matched '{target_name}'")
        return results
