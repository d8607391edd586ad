"""
================================================================================
MagFinder v1.0 - General Web Fetcher
================================================================================
Scrapes Google and Bing result pages for '"<name>" magazine'.

Search engine hits carry no structured date, so the year is read from the
title and snippet text. Engines are queried one at a time with a 3s pause.
================================================================================
"""

import logging
from typing import List, Optional
from urllib.parse import urlparse, parse_qs

from bs4.element import Tag

from .base import SearchResult
from .matching import extract_year
from .scraping import ScrapingFetcher, SiteConfig, Selectors, select_href, select_text

logger = logging.getLogger(__name__)


class GeneralWebFetcher(ScrapingFetcher):
    """Fetcher for general-purpose search engines."""

    id = "general-web"
    name = "General Web"

    pace_delay = 3.0

    def sites(self, target_name: str) -> List[SiteConfig]:
        query = f'"{target_name}" magazine'
        return [
            SiteConfig(
                name="Google",
                url="https://www.google.com/search",
                params={'q': query, 'num': '100'},
                selectors=Selectors(
                    container='.g',
                    title='.LC20lb',
                    description='.VwiC3b',
                    link='a[href]'
                )
            ),
            SiteConfig(
                name="Bing",
                url="https://www.bing.com/search",
                params={'q': query, 'count': '50'},
                selectors=Selectors(
                    container='.b_algo',
                    title='h2',
                    description='.b_caption p',
                    link='a[href]'
                )
            ),
        ]

    def resolve_url(self, site: SiteConfig, href: str) -> str:
        # Google wraps outbound links as /url?q=<target>&sa=...
        parsed = urlparse(href)
        if parsed.path == '/url' and not parsed.netloc:
            target = parse_qs(parsed.query).get('q')
            if target and target[0].startswith(('http://', 'https://')):
                return target[0]
        return super().resolve_url(site, href)

    def _build_result(self, site: SiteConfig, element: Tag, title: str) -> Optional[SearchResult]:
        href = select_href(element, site.selectors.link)
        if not href:
            return None

        description = select_text(element, site.selectors.description)
        return SearchResult(
            source=site.name,
            title=title,
            year=extract_year(f"{title} {description}"),
            url=self.resolve_url(site, href),
            description=description
        )
