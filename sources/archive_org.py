"""
================================================================================
MagFinder v1.0 - Internet Archive Catalog Fetcher
================================================================================
Structured search against the archive.org advanced search API.

API: https://archive.org/advancedsearch.php
  - Solr-style query: title:("<name>") AND mediatype:(texts)
  - Up to 100 rows, sorted by year ascending
  - Detail pages live at /details/<identifier>
================================================================================
"""

import logging
from typing import List, Optional, Dict, Any

from .base import BaseFetcher, SearchResult
from .matching import verify_identity, normalize_year

logger = logging.getLogger(__name__)


def _flatten(value: Any) -> str:
    """Archive metadata fields may repeat; join list values into one string."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value if v)
    return str(value)


class ArchiveOrgFetcher(BaseFetcher):
    """Fetcher for archive.org text items."""

    id = "archive-catalog"
    name = "Internet Archive Catalog"
    base_url = "https://archive.org"

    SEARCH_URL = "https://archive.org/advancedsearch.php"
    DETAILS_URL = "https://archive.org/details/"

    ROWS = 100
    FIELDS = ['identifier', 'title', 'year', 'mediatype', 'description']

    def _params(self, target_name: str) -> Dict[str, Any]:
        return {
            'q': f'title:("{target_name}") AND mediatype:(texts)',
            'fl[]': self.FIELDS,
            'sort[]': ['year asc'],
            'rows': str(self.ROWS),
            'output': 'json',
        }

    def _parse_doc(self, doc: Dict[str, Any], target_name: str) -> Optional[SearchResult]:
        """Map one Solr doc to a SearchResult, or None if it doesn't qualify."""
        title = _flatten(doc.get('title')).strip()
        identifier = _flatten(doc.get('identifier')).strip()
        if not identifier or not verify_identity(title, target_name):
            return None

        return SearchResult(
            source=self.id,
            title=title,
            year=normalize_year(doc.get('year')),
            url=f"{self.DETAILS_URL}{identifier}",
            description=_flatten(doc.get('description'))
        )

    async def search(self, target_name: str) -> List[SearchResult]:
        self.warnings = []
        results = []
        try:
            data = await self._get_json(self.SEARCH_URL, params=self._params(target_name))
            docs = (data.get('response') or {}).get('docs') or []
            for doc in docs:
                if not isinstance(doc, dict):
                    continue
                result = self._parse_doc(doc, target_name)
                if result:
                    results.append(result)
        except Exception as e:
            self._record_failure("advancedsearch", e)
            return []

        logger.info(f"[{self.name}] {len(results)} docs matched '{target_name}'")
        return results
