"""
================================================================================
MagFinder v1.0 - Reddit Fetcher
================================================================================
Searches a fixed set of archival/magazine subreddits for posts that share
scans or links of the periodical.

RATE LIMITS:
  - Communities are queried one after another, never in parallel
  - A fixed delay (default 2s) follows every community query,
    whether it succeeded or not
================================================================================
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any
from urllib.parse import urljoin

from .base import BaseFetcher, SearchResult
from .matching import UNKNOWN_YEAR, normalize_year, verify_identity

logger = logging.getLogger(__name__)


class RedditFetcher(BaseFetcher):
    """Fetcher for subreddit search results."""

    id = "reddit"
    name = "Reddit"
    base_url = "https://reddit.com"

    SEARCH_URL = "https://www.reddit.com/r/{community}/search.json"
    COMMUNITIES = ['magazines', 'archival', 'vintageculture', 'OldSchoolCool']

    # Post bodies are unbounded, so they are cut here rather than at display time
    DESCRIPTION_LIMIT = 200

    pace_delay = 2.0

    def _params(self, target_name: str) -> Dict[str, Any]:
        return {
            'q': f'title:"{target_name}"',
            'restrict_sr': 'on',
            'sort': 'top',
            't': 'all',
        }

    @staticmethod
    def _year_from_timestamp(created_utc: Any) -> str:
        try:
            year = datetime.fromtimestamp(float(created_utc), tz=timezone.utc).year
        except (TypeError, ValueError, OverflowError, OSError):
            return UNKNOWN_YEAR
        return normalize_year(year)

    def _parse_post(self, post: Dict[str, Any], community: str, target_name: str) -> Optional[SearchResult]:
        data = post.get('data') or {}
        title = (data.get('title') or "").strip()
        permalink = data.get('permalink')
        if not permalink or not verify_identity(title, target_name):
            return None

        return SearchResult(
            source=f"reddit/r/{community}",
            title=title,
            year=self._year_from_timestamp(data.get('created_utc')),
            url=urljoin(self.base_url, permalink),
            description=(data.get('selftext') or "")[:self.DESCRIPTION_LIMIT]
        )

    async def _search_community(self, community: str, target_name: str) -> List[SearchResult]:
        url = self.SEARCH_URL.format(community=community)
        data = await self._get_json(url, params=self._params(target_name))

        results = []
        for post in (data.get('data') or {}).get('children') or []:
            if not isinstance(post, dict):
                continue
            result = self._parse_post(post, community, target_name)
            if result:
                results.append(result)
        return results

    async def search(self, target_name: str) -> List[SearchResult]:
        self.warnings = []
        results: List[SearchResult] = []

        for community in self.COMMUNITIES:
            try:
                found = await self._search_community(community, target_name)
                logger.info(f"[{self.name}] r/{community}: {len(found)} posts matched")
                results.extend(found)
            except Exception as e:
                self._record_failure(f"r/{community}", e)
            finally:
                await self._pace()

        return results
