"""
================================================================================
MagFinder v1.0 - Base Fetcher
================================================================================
Abstract base class for all periodical source fetchers.

Every source implements one method:
  search(target_name) -> List[SearchResult]

No matter if we're calling the archive.org JSON API or scraping WorldCat HTML,
the aggregator always receives this same structure.

FAILURE ISOLATION:
  - search() never raises outward
  - Each request unit (one API call, one community, one site) is wrapped
  - A failed unit is logged, recorded as a SourceWarning, and yields nothing

PACING:
  - Multi-unit fetchers sleep a fixed delay after every unit
  - No retries, no backoff
================================================================================
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import List, Optional, Dict, Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


# =============================================================================
# ERRORS & DATA CLASSES
# =============================================================================

class FetchError(Exception):
    """Raised inside a unit when a response has an unexpected shape."""


@dataclass(frozen=True)
class SearchResult:
    """
    Standardized periodical hit that works across ALL sources.

    Built once by its fetcher and never mutated afterwards.
    """
    source: str                      # Origin identifier
    title: str                       # Display title
    year: str                        # Four digits or "Unknown"
    url: str                         # Absolute URL, dedup key
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class SourceWarning:
    """A unit that failed during one run."""
    source: str                      # Fetcher id
    unit: str                        # Endpoint, community, site or engine
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# BASE FETCHER CLASS
# =============================================================================

class BaseFetcher(ABC):
    """
    Abstract base class for source fetchers.

    INHERITANCE:
        ArchiveOrgFetcher, GoogleBooksFetcher, RedditFetcher and the
        HTML scrapers inherit from this class and implement search().

    CLIENT:
        The aggregator passes one shared httpx.AsyncClient. A fetcher used on
        its own creates (and later closes) a private client.

    Example:
        class ExampleFetcher(BaseFetcher):
            id = "example"
            name = "Example"
            base_url = "https://example.org"

            async def search(self, target_name):
                data = await self._get_json(self.base_url, params={...})
                ...
    """

    # =========================================================================
    # SOURCE CONFIGURATION (Override in subclass)
    # =========================================================================

    id: str = "base"                 # Unique identifier
    name: str = "Base Source"        # Display name
    base_url: str = ""               # Root URL

    pace_delay: float = 0.0          # Seconds to sleep after each unit
    request_timeout: float = 20.0
    user_agent: str = DEFAULT_USER_AGENT

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        pace_delay: Optional[float] = None,
        request_timeout: Optional[float] = None,
        user_agent: Optional[str] = None
    ):
        self._client = client
        self._owns_client = client is None
        if pace_delay is not None:
            self.pace_delay = max(0.0, float(pace_delay))
        if request_timeout is not None:
            self.request_timeout = float(request_timeout)
        if user_agent:
            self.user_agent = user_agent

        self.warnings: List[SourceWarning] = []

    # =========================================================================
    # CLIENT LIFECYCLE
    # =========================================================================

    def _headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": "application/json, text/html, */*",
            "Accept-Language": "en-US,en;q=0.9",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.request_timeout,
                headers=self._headers(),
                follow_redirects=True
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BaseFetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # =========================================================================
    # REQUEST HELPERS
    # =========================================================================

    async def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        """GET with browser headers; non-2xx raises httpx.HTTPStatusError."""
        client = await self._get_client()
        response = await client.get(
            url,
            params=params,
            headers=self._headers(),
            timeout=self.request_timeout
        )
        response.raise_for_status()
        return response

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response = await self._get(url, params)
        data = response.json()
        if not isinstance(data, dict):
            raise FetchError(f"expected a JSON object from {url}, got {type(data).__name__}")
        return data

    async def _get_html(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        response = await self._get(url, params)
        return response.text

    async def _pace(self) -> None:
        """Fixed politeness delay between sequential units."""
        if self.pace_delay > 0:
            await asyncio.sleep(self.pace_delay)

    # =========================================================================
    # FAILURE TRACKING
    # =========================================================================

    def _record_failure(self, unit: str, error: BaseException) -> None:
        """Log a failed unit and keep it as a structured warning."""
        message = str(error) or error.__class__.__name__
        logger.warning(f"[{self.name}] {unit} failed: {message}")
        self.warnings.append(SourceWarning(source=self.id, unit=unit, error=message))

    # =========================================================================
    # ABSTRACT METHODS (Must implement in subclass)
    # =========================================================================

    @abstractmethod
    async def search(self, target_name: str) -> List[SearchResult]:
        """
        Search the source for editions of a periodical.

        Args:
            target_name: Periodical name

        Returns:
            Identity-verified SearchResult list (empty on failure)
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id='{self.id}' pace_delay={self.pace_delay}>"
