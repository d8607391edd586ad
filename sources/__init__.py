"""
================================================================================
MagFinder v1.0 - Source Registry
================================================================================
Central registry of the periodical source fetchers.

THE FIVE STRATEGIES:
  - archive-catalog    archive.org advanced search (JSON)
  - google_books       Google Books volumes (JSON)
  - reddit             archival subreddits (JSON, sequential + paced)
  - digital-libraries  HathiTrust / IA / DPLA / WorldCat (HTML, sequential + paced)
  - general-web        Google / Bing (HTML, sequential + paced)

The aggregator instantiates one of each per run and shares a single
HTTP client between them.
================================================================================
"""

from typing import Dict, List, Optional, Type

import httpx

from .base import BaseFetcher, FetchError, SearchResult, SourceWarning
from .archive_org import ArchiveOrgFetcher
from .google_books import GoogleBooksFetcher
from .reddit import RedditFetcher
from .digital_libraries import DigitalLibraryFetcher
from .general_web import GeneralWebFetcher

# Fan-out order; results are flattened in this order after the join
FETCHER_CLASSES: List[Type[BaseFetcher]] = [
    ArchiveOrgFetcher,
    GoogleBooksFetcher,
    RedditFetcher,
    DigitalLibraryFetcher,
    GeneralWebFetcher,
]

FETCHERS_BY_ID: Dict[str, Type[BaseFetcher]] = {cls.id: cls for cls in FETCHER_CLASSES}


def create_fetchers(
    client: Optional[httpx.AsyncClient] = None,
    pace_delays: Optional[Dict[str, float]] = None,
    only: Optional[List[str]] = None,
    exclude: Optional[List[str]] = None,
    user_agent: Optional[str] = None,
    request_timeout: Optional[float] = None
) -> List[BaseFetcher]:
    """
    Instantiate the registered fetchers.

    Args:
        client: Shared HTTP client (each fetcher makes its own if None)
        pace_delays: Per-fetcher-id override of the inter-unit delay
        only: Restrict to these fetcher ids
        exclude: Skip these fetcher ids
        user_agent: Override the browser User-Agent header
        request_timeout: Per-request timeout in seconds

    Raises:
        KeyError: If `only` names an unknown fetcher id
    """
    pace_delays = pace_delays or {}
    if only:
        unknown = [fid for fid in only if fid not in FETCHERS_BY_ID]
        if unknown:
            raise KeyError(f"Unknown source(s): {', '.join(unknown)}")
        classes = [FETCHERS_BY_ID[fid] for fid in only]
    else:
        classes = list(FETCHER_CLASSES)

    excluded = set(exclude or [])
    return [
        cls(
            client=client,
            pace_delay=pace_delays.get(cls.id),
            request_timeout=request_timeout,
            user_agent=user_agent
        )
        for cls in classes
        if cls.id not in excluded
    ]


__all__ = [
    'BaseFetcher', 'FetchError', 'SearchResult', 'SourceWarning',
    'ArchiveOrgFetcher', 'GoogleBooksFetcher', 'RedditFetcher',
    'DigitalLibraryFetcher', 'GeneralWebFetcher',
    'FETCHER_CLASSES', 'FETCHERS_BY_ID', 'create_fetchers',
]
