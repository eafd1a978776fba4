"""Ordered extraction heuristics for search engine result pages.

Result page markup changes without notice, so the layouts we know about are
kept here as data. The first heuristic whose block selector matches anything
on the page wins; adding a layout means appending an entry, nothing else.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, unquote, urlparse

from bs4 import BeautifulSoup, Tag

SNIPPET_SELECTORS = (".VwiC3b", ".lyLwlc", ".s", "span", "div.VwiC3b")
MIN_SNIPPET_CHARS = 20


@dataclass(frozen=True)
class ResultBlockHeuristic:
    """How to find result blocks and the fields inside each one."""

    name: str
    block_selector: str
    link_selector: str = "a[href]"
    title_selector: str = "h3, h2, h1"
    snippet_selectors: tuple[str, ...] = SNIPPET_SELECTORS


GOOGLE_RESULT_HEURISTICS: tuple[ResultBlockHeuristic, ...] = (
    ResultBlockHeuristic("classic", "div.g"),
    ResultBlockHeuristic("sokoban", "div[data-sokoban-container]"),
    ResultBlockHeuristic("gx5zad", "div.Gx5Zad"),
    ResultBlockHeuristic("jscontroller", "div[jscontroller]"),
)


@dataclass
class RawResult:
    """Fields scraped from one result block, before filtering."""

    title: str
    url: str
    snippet: str


def unwrap_redirect(href: str) -> str:
    """Return the target of a ``/url?q=...`` redirect link, or href unchanged."""
    if not href:
        return href

    parsed = urlparse(href)
    if parsed.path == "/url" and (not parsed.netloc or "google." in parsed.netloc):
        params = parse_qs(parsed.query)
        for key in ("q", "url"):
            if params.get(key):
                return unquote(params[key][0])
    return href


def select_result_blocks(
    soup: BeautifulSoup,
    heuristics: tuple[ResultBlockHeuristic, ...] = GOOGLE_RESULT_HEURISTICS,
) -> tuple[Optional[ResultBlockHeuristic], list[Tag]]:
    """Apply heuristics in order and return the first that matches any block."""
    for heuristic in heuristics:
        blocks = soup.select(heuristic.block_selector)
        if blocks:
            return heuristic, blocks
    return None, []


def parse_result_block(block: Tag, heuristic: ResultBlockHeuristic) -> Optional[RawResult]:
    """Extract link, title and snippet from a single block."""
    link = block.select_one(heuristic.link_selector)
    title_elem = block.select_one(heuristic.title_selector)
    if link is None or title_elem is None:
        return None

    url = unwrap_redirect(link.get("href", ""))
    title = title_elem.get_text(strip=True)
    if not url or not title:
        return None

    snippet = ""
    for selector in heuristic.snippet_selectors:
        elem = block.select_one(selector)
        if elem is None:
            continue
        text = elem.get_text(" ", strip=True)
        if len(text) > MIN_SNIPPET_CHARS:
            snippet = text
            break

    return RawResult(title=title, url=url, snippet=snippet)


def parse_results_page(
    html: str,
    heuristics: tuple[ResultBlockHeuristic, ...] = GOOGLE_RESULT_HEURISTICS,
) -> list[RawResult]:
    """Parse a results page into raw candidates, in page order."""
    soup = BeautifulSoup(html, "html.parser")
    heuristic, blocks = select_result_blocks(soup, heuristics)
    if heuristic is None:
        return []

    results = []
    for block in blocks:
        parsed = parse_result_block(block, heuristic)
        if parsed:
            results.append(parsed)
    return results
