"""
================================================================================
MagFinder v1.0 - Digital Library Fetcher
================================================================================
Scrapes the public search pages of four library/catalog sites:

  - HathiTrust full-text search
  - Internet Archive search page
  - Digital Public Library of America
  - WorldCat

Sites are queried one at a time with a 2s pause after each.
Relative result links are resolved against the site's search URL.
================================================================================
"""

import logging
from typing import List, Optional

from bs4.element import Tag

from .base import SearchResult
from .matching import UNKNOWN_YEAR, extract_year
from .scraping import ScrapingFetcher, SiteConfig, Selectors, select_href, select_text

logger = logging.getLogger(__name__)


class DigitalLibraryFetcher(ScrapingFetcher):
    """Fetcher for HTML digital library catalogs."""

    id = "digital-libraries"
    name = "Digital Libraries"

    pace_delay = 2.0

    def sites(self, target_name: str) -> List[SiteConfig]:
        return [
            SiteConfig(
                name="HathiTrust",
                url="https://babel.hathitrust.org/cgi/ls",
                params={'q': target_name},
                selectors=Selectors(
                    container='.record',
                    title='.title',
                    date='.date',
                    description='.description',
                    link='.title a'
                )
            ),
            SiteConfig(
                name="Internet Archive",
                url="https://archive.org/search.php",
                params={'query': target_name},
                selectors=Selectors(
                    container='.item-ia',
                    title='.ttl',
                    date='.date',
                    description='.C234',
                    link='.ttl'
                )
            ),
            SiteConfig(
                name="Digital Public Library of America",
                url="https://dp.la/search",
                params={'q': target_name, 'type': 'text'},
                selectors=Selectors(
                    container='.search-result',
                    title='.title',
                    description='.description',
                    link='.title a'
                )
            ),
            SiteConfig(
                name="WorldCat",
                url="https://www.worldcat.org/search",
                params={'q': target_name},
                selectors=Selectors(
                    container='.result',
                    title='.title',
                    date='.date',
                    description='.description',
                    link='.title a'
                )
            ),
        ]

    def _year_for(self, site: SiteConfig, element: Tag) -> str:
        # Prefer the dedicated date field, then scan the whole record
        if site.selectors.date:
            year = extract_year(select_text(element, site.selectors.date))
            if year != UNKNOWN_YEAR:
                return year
        return extract_year(element.get_text(" ", strip=True))

    def _build_result(self, site: SiteConfig, element: Tag, title: str) -> Optional[SearchResult]:
        href = select_href(element, site.selectors.link)
        if not href:
            logger.debug(f"[{site.name}] '{title}' has no link, skipping")
            return None

        return SearchResult(
            source=site.name,
            title=title,
            year=self._year_for(site, element),
            url=self.resolve_url(site, href),
            description=select_text(element, site.selectors.description)
        )
