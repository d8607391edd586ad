"""
================================================================================
MagFinder v1.0 - Search Result Deduplicator
================================================================================
Collapses results that point at the same URL.

Problem:
  archive.org shows up through the catalog API AND the scraped search page,
  and search engines link straight to the same detail pages.

Solution:
  Keep the first result seen for each URL, in flatten order. Which duplicate
  wins depends on which fetcher happened to be listed first, so callers must
  not rely on it.
================================================================================
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List

from sources.base import SearchResult

logger = logging.getLogger(__name__)


def deduplicate_by_url(results: Iterable[SearchResult]) -> List[SearchResult]:
    """Keep only the first result for each distinct url."""
    seen = set()
    unique: List[SearchResult] = []
    dropped = 0

    for result in results:
        if result.url in seen:
            dropped += 1
            continue
        seen.add(result.url)
        unique.append(result)

    if dropped:
        logger.debug(f"Dropped {dropped} duplicate URLs")
    return unique


def group_by_source(results: Iterable[SearchResult]) -> Dict[str, List[SearchResult]]:
    """Group results by source, sources in first-seen order."""
    groups: Dict[str, List[SearchResult]] = OrderedDict()
    for result in results:
        groups.setdefault(result.source, []).append(result)
    return groups
