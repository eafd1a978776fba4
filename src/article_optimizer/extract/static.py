"""Static extraction tier: plain HTTP fetch + BeautifulSoup, no scripts run."""

import logging

import httpx
from bs4 import BeautifulSoup

from .models import ExtractedContent
from .text import (
    CONTENT_SELECTORS,
    MAX_CONTENT_CHARS,
    NON_CONTENT_SELECTORS,
    keep_heading,
    normalize_content,
)

logger = logging.getLogger(__name__)

_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
}


def strip_non_content(soup: BeautifulSoup) -> None:
    """Remove scripts, chrome and ads in place."""
    for selector in NON_CONTENT_SELECTORS:
        for elem in soup.select(selector):
            elem.decompose()


def extract_headings(soup: BeautifulSoup) -> list[str]:
    """Heading text for levels 1-4 in document order, duplicates kept."""
    headings = []
    for elem in soup.find_all(["h1", "h2", "h3", "h4"]):
        text = elem.get_text(" ", strip=True)
        if keep_heading(text):
            headings.append(text)
    return headings


def extract_title(soup: BeautifulSoup) -> str:
    h1 = soup.find("h1")
    if h1:
        text = h1.get_text(" ", strip=True)
        if text:
            return text
    if soup.title and soup.title.string:
        return soup.title.string.strip()
    return ""


def extract_body_text(soup: BeautifulSoup, min_container_chars: int = 200) -> str:
    """Text of the first content container that is long enough.

    Falls back to every paragraph on the page when no container qualifies.
    """
    for selector in CONTENT_SELECTORS:
        elem = soup.select_one(selector)
        if elem is None:
            continue
        text = elem.get_text().strip()
        if len(text) > min_container_chars:
            return text

    paragraphs = [p.get_text(" ", strip=True) for p in soup.find_all("p")]
    return "\n\n".join(p for p in paragraphs if p)


def parse_static_html(
    url: str,
    html: str,
    min_container_chars: int = 200,
    max_chars: int = MAX_CONTENT_CHARS,
) -> ExtractedContent:
    """Turn raw markup into ExtractedContent. Content may be empty."""
    soup = BeautifulSoup(html, "html.parser")
    strip_non_content(soup)

    return ExtractedContent(
        url=url,
        title=extract_title(soup),
        content=normalize_content(extract_body_text(soup, min_container_chars), max_chars),
        headings=extract_headings(soup),
        method="static",
    )


async def fetch_static(
    url: str,
    timeout: float = 10.0,
    min_container_chars: int = 200,
    max_chars: int = MAX_CONTENT_CHARS,
) -> ExtractedContent:
    """Fetch a page without rendering and extract its content.

    Raises:
        httpx.HTTPError: On transport failure or non-2xx status
    """
    async with httpx.AsyncClient(
        follow_redirects=True, timeout=timeout, headers=_HEADERS
    ) as client:
        resp = await client.get(url)
        resp.raise_for_status()
        html = resp.text

    result = parse_static_html(url, html, min_container_chars, max_chars)
    logger.debug("[EXTRACTOR] Static pass for %s: %d chars", url, result.length)
    return result
