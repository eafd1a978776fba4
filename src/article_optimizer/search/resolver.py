"""Reference resolution: find top-ranking article URLs for a topic.

Two strategies share one contract:
1. SerpAPI (reliable, needs SERPAPI_KEY)
2. Scraping the Google results page (free, may be blocked)

The API is tried first when a key is configured; any failure falls back to
scraping. Scraping failures yield an empty list rather than an exception.
"""

import logging
import os
from typing import Optional

import httpx

from ..errors import SearchTransportError
from .filters import is_blog_or_article
from .heuristics import GOOGLE_RESULT_HEURISTICS, ResultBlockHeuristic, RawResult, parse_results_page
from .models import SearchResult

logger = logging.getLogger(__name__)

SERPAPI_ENDPOINT = "https://serpapi.com/search.json"
GOOGLE_SEARCH_URL = "https://www.google.com/search"

_BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


def keep_article_results(candidates: list[RawResult], limit: int) -> list[SearchResult]:
    """Filter, dedupe and rank raw candidates, stopping at ``limit``."""
    results: list[SearchResult] = []
    seen: set[str] = set()
    for candidate in candidates:
        if len(results) >= limit:
            break
        url = candidate.url
        if not url or not candidate.title or url in seen:
            continue
        if not is_blog_or_article(url):
            continue
        seen.add(url)
        results.append(
            SearchResult(
                title=candidate.title,
                url=url,
                snippet=candidate.snippet,
                rank=len(results) + 1,
            )
        )
        logger.info("[RESOLVER]   Found: %s", candidate.title[:60])
    return results


class ReferenceResolver:
    """
    Resolves a topic string to a short list of reference article URLs.

    Usage:
        resolver = ReferenceResolver()
        results = await resolver.resolve("chatbots guide 2023", limit=2)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        result_count: int = 10,
        timeout: float = 15.0,
        heuristics: tuple[ResultBlockHeuristic, ...] = GOOGLE_RESULT_HEURISTICS,
    ):
        """
        Initialize the resolver.

        Args:
            api_key: SerpAPI key. Read from SERPAPI_KEY when not given;
                empty means scraping only.
            result_count: Results requested per query, before filtering
            timeout: HTTP timeout in seconds
            heuristics: Ordered result-page layouts for the scraping strategy
        """
        self.api_key = api_key if api_key is not None else os.getenv("SERPAPI_KEY", "")
        self.result_count = result_count
        self.timeout = timeout
        self.heuristics = heuristics

    async def resolve(self, topic: str, limit: int = 2) -> list[SearchResult]:
        """Return at most ``limit`` ranked, filtered reference candidates."""
        if limit < 1:
            raise ValueError("limit must be >= 1")

        logger.info("[RESOLVER] Searching for: %r", topic)

        if self.api_key:
            try:
                results = await self._search_with_api(topic, limit)
                logger.info("[RESOLVER] Found %d relevant articles via SerpAPI", len(results))
                return results
            except SearchTransportError as e:
                logger.warning("[RESOLVER] SerpAPI error: %s. Falling back to scraping", e)
        else:
            logger.warning("[RESOLVER] SERPAPI_KEY not set, using web scraping (may be blocked)")

        return await self._search_with_scraping(topic, limit)

    async def _search_with_api(self, topic: str, limit: int) -> list[SearchResult]:
        params = {
            "engine": "google",
            "q": topic,
            "num": self.result_count,
            "api_key": self.api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(SERPAPI_ENDPOINT, params=params)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SearchTransportError(str(e)) from e

        if not isinstance(data, dict):
            raise SearchTransportError("Unexpected SerpAPI payload")
        if data.get("error"):
            raise SearchTransportError(str(data["error"]))

        try:
            candidates = [
                RawResult(
                    title=item.get("title") or "",
                    url=item.get("link") or "",
                    snippet=item.get("snippet") or "",
                )
                for item in data.get("organic_results") or []
            ]
            return keep_article_results(candidates, limit)
        except Exception as e:
            raise SearchTransportError(f"Malformed SerpAPI results: {e}") from e

    async def _search_with_scraping(self, topic: str, limit: int) -> list[SearchResult]:
        params = {"q": topic, "num": self.result_count, "hl": "en"}
        try:
            async with httpx.AsyncClient(
                follow_redirects=True, timeout=self.timeout, headers=_BROWSER_HEADERS
            ) as client:
                resp = await client.get(GOOGLE_SEARCH_URL, params=params)
                resp.raise_for_status()
                html = resp.text
        except httpx.HTTPError as e:
            logger.error("[RESOLVER] Search request failed: %s", e)
            return []

        try:
            candidates = parse_results_page(html, self.heuristics)
            results = keep_article_results(candidates, limit)
        except Exception as e:
            logger.error("[RESOLVER] Could not parse search results: %s", e)
            return []

        if not results:
            logger.warning(
                "[RESOLVER] No results found with current selectors "
                "(search engine may be blocking or the layout changed)"
            )
            return []

        logger.info("[RESOLVER] Found %d relevant articles", len(results))
        return results
