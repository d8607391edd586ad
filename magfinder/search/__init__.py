"""
================================================================================
MagFinder v1.0 - Search Package
================================================================================
Concurrent multi-source search with URL deduplication.

Components:
  - aggregator.py - Runs all fetchers in parallel and merges results
  - deduplicator.py - First-seen-wins URL dedup and source grouping
================================================================================
"""

from .aggregator import PeriodicalSearch, SearchReport, search_all, search_all_sync
from .deduplicator import deduplicate_by_url, group_by_source

__all__ = [
    'PeriodicalSearch', 'SearchReport', 'search_all', 'search_all_sync',
    'deduplicate_by_url', 'group_by_source',
]
