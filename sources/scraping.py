"""
================================================================================
MagFinder v1.0 - HTML Scraping Fetcher
================================================================================
Shared routine for sources that only offer HTML search pages.

Each site is described by a SiteConfig record instead of scattered literals:

    SiteConfig(
        name="WorldCat",
        url="https://www.worldcat.org/search",
        params={"q": "<name>"},
        selectors=Selectors(container=".result", title=".title",
                            link=".title a", date=".date",
                            description=".description"),
    )

ScrapingFetcher walks its configs SEQUENTIALLY, sleeping pace_delay after
each site, and turns every matching container into a SearchResult.
================================================================================
"""

import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Dict
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from .base import BaseFetcher, SearchResult
from .matching import verify_identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selectors:
    """CSS selectors for one site's result list."""
    container: str
    title: str
    link: str
    date: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class SiteConfig:
    """One scraped search page: where to ask and how to read the answer."""
    name: str
    url: str
    params: Dict[str, str]
    selectors: Selectors


def select_text(element: Tag, selector: Optional[str]) -> str:
    """Stripped text of the first match, or "" when absent."""
    if not selector:
        return ""
    found = element.select_one(selector)
    return found.get_text(strip=True) if found else ""


def select_href(element: Tag, selector: str) -> str:
    """
    href of the first match. Selectors sometimes land on a wrapper rather
    than the anchor itself, so fall back to the first nested a[href].
    """
    found = element.select_one(selector)
    if found is None:
        return ""
    href = found.get('href')
    if not href:
        anchor = found.select_one('a[href]')
        href = anchor.get('href') if anchor else ""
    return (href or "").strip()


class ScrapingFetcher(BaseFetcher):
    """
    Base for fetchers that iterate a list of SiteConfig records.

    Subclasses provide sites() and _build_result(); the request loop,
    pacing and per-site failure isolation live here.
    """

    parser: str = 'html.parser'

    @abstractmethod
    def sites(self, target_name: str) -> List[SiteConfig]:
        """Site configs for this target, in query order."""
        pass

    @abstractmethod
    def _build_result(self, site: SiteConfig, element: Tag, title: str) -> Optional[SearchResult]:
        """Turn one identity-verified container into a SearchResult."""
        pass

    def resolve_url(self, site: SiteConfig, href: str) -> str:
        return urljoin(site.url, href)

    def _parse_page(self, site: SiteConfig, html: str, target_name: str) -> List[SearchResult]:
        soup = BeautifulSoup(html, self.parser)
        results = []

        for element in soup.select(site.selectors.container):
            try:
                title = select_text(element, site.selectors.title)
                if not title or not verify_identity(title, target_name):
                    continue
                result = self._build_result(site, element, title)
                if result:
                    results.append(result)
            except Exception as e:
                logger.debug(f"[{site.name}] Failed to parse result: {e}")
                continue

        return results

    async def search(self, target_name: str) -> List[SearchResult]:
        self.warnings = []
        results: List[SearchResult] = []

        for site in self.sites(target_name):
            try:
                html = await self._get_html(site.url, params=site.params)
                found = self._parse_page(site, html, target_name)
                logger.info(f"[{site.name}] {len(found)} results matched '{target_name}'")
                results.extend(found)
            except Exception as e:
                self._record_failure(site.name, e)
            finally:
                await self._pace()

        return results
