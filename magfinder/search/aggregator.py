"""
================================================================================
MagFinder v1.0 - Search Aggregator
================================================================================
Runs every source fetcher concurrently and merges their output.

Flow:
  1. Open one shared HTTP client
  2. Start all five fetchers at once (asyncio.gather)
  3. Flatten results in fetcher order, collect per-source warnings
  4. Deduplicate by URL
  5. Return a SearchReport (or just the results via search_all)

A fetcher that blows up past its own handlers only loses its own results;
if the join itself fails the run returns an empty list.
================================================================================
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from sources import create_fetchers
from sources.base import BaseFetcher, SearchResult, SourceWarning
from ..config import Settings
from ..log import debug_log_event
from .deduplicator import deduplicate_by_url, group_by_source

logger = logging.getLogger(__name__)


@dataclass
class SearchReport:
    """Everything one run produced."""
    target: str
    results: List[SearchResult] = field(default_factory=list)
    warnings: List[SourceWarning] = field(default_factory=list)
    elapsed: float = 0.0

    def grouped_by_source(self) -> Dict[str, List[SearchResult]]:
        return group_by_source(self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'target': self.target,
            'count': len(self.results),
            'elapsed': round(self.elapsed, 3),
            'results': [r.to_dict() for r in self.results],
            'warnings': [w.to_dict() for w in self.warnings],
        }


class PeriodicalSearch:
    """
    Fan-out search orchestrator.

    Usage:
        search = PeriodicalSearch(Settings.from_env())
        results = await search.search_all("Widget Monthly")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fetchers: Optional[Sequence[BaseFetcher]] = None,
        sources: Optional[List[str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            settings: Runtime settings (defaults if None)
            fetchers: Pre-built fetchers; skips the registry entirely
            sources: Restrict the registry to these fetcher ids
            transport: Custom httpx transport for the shared client
        """
        self.settings = settings or Settings()
        self._fetchers = list(fetchers) if fetchers is not None else None
        self._sources = sources
        self._transport = transport

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.request_timeout,
            headers={'User-Agent': self.settings.user_agent},
            follow_redirects=True,
            transport=self._transport
        )

    def _build_fetchers(self, client: httpx.AsyncClient) -> List[BaseFetcher]:
        return create_fetchers(
            client=client,
            pace_delays=self.settings.pace_delays,
            only=self._sources,
            exclude=self.settings.disabled_sources,
            user_agent=self.settings.user_agent,
            request_timeout=self.settings.request_timeout
        )

    async def _gather(
        self,
        fetchers: List[BaseFetcher],
        target: str
    ) -> List[Tuple[BaseFetcher, Any]]:
        logger.info(f"Searching for '{target}' across {len(fetchers)} sources...")
        outcomes = await asyncio.gather(
            *(fetcher.search(target) for fetcher in fetchers),
            return_exceptions=True
        )
        return list(zip(fetchers, outcomes))

    async def _run_fetchers(self, target: str) -> List[Tuple[BaseFetcher, Any]]:
        if self._fetchers is not None:
            return await self._gather(self._fetchers, target)

        async with self._make_client() as client:
            return await self._gather(self._build_fetchers(client), target)

    async def run(self, target: str) -> SearchReport:
        """
        Search every source and return results plus warnings.

        Raises:
            ValueError: If target is empty
        """
        target = (target or "").strip()
        if not target:
            raise ValueError("target name must not be empty")

        start_time = time.time()
        report = SearchReport(target=target)

        try:
            outcomes = await self._run_fetchers(target)
        except Exception as e:
            logger.error(f"Search failed for '{target}': {e}")
            report.elapsed = time.time() - start_time
            return report

        all_results: List[SearchResult] = []
        for fetcher, outcome in outcomes:
            if isinstance(outcome, BaseException):
                logger.error(f"Source {fetcher.id} crashed: {outcome}")
                report.warnings.append(SourceWarning(
                    source=fetcher.id,
                    unit="search",
                    error=str(outcome) or outcome.__class__.__name__
                ))
                continue
            report.warnings.extend(fetcher.warnings)
            all_results.extend(outcome)

        logger.info(f"Got {len(all_results)} raw results from sources")
        report.results = deduplicate_by_url(all_results)
        report.elapsed = time.time() - start_time

        for warning in report.warnings:
            debug_log_event({'event': 'source_warning', 'target': target, **warning.to_dict()})

        logger.info(
            f"Search completed in {report.elapsed:.2f}s: "
            f"{len(report.results)} unique results, {len(report.warnings)} warnings"
        )
        return report

    async def search_all(self, target: str) -> List[SearchResult]:
        """Deduplicated, identity-verified results for target."""
        report = await self.run(target)
        return report.results


async def search_all(target: str, settings: Optional[Settings] = None) -> List[SearchResult]:
    """Single entry point: search every source for a periodical."""
    return await PeriodicalSearch(settings).search_all(target)


def search_all_sync(target: str, settings: Optional[Settings] = None) -> List[SearchResult]:
    """Synchronous wrapper for scripts and the CLI."""
    return asyncio.run(search_all(target, settings))
