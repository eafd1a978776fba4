"""Tiered content extraction for reference pages.

Order:
1. static fetch (httpx + BeautifulSoup)
2. rendered DOM (Playwright), only when the static body is too short

Returns None when neither tier yields text, or when either tier raises.
"""

import logging
from typing import Optional

from .dynamic import fetch_dynamic
from .models import ExtractedContent
from .static import fetch_static
from .text import MAX_CONTENT_CHARS

logger = logging.getLogger(__name__)


class ContentExtractor:
    """Extracts clean article text from arbitrary URLs."""

    def __init__(
        self,
        timeout: float = 10.0,
        render_timeout_ms: int = 10000,
        min_container_chars: int = 200,
        dynamic_fallback_chars: int = 100,
        max_chars: int = MAX_CONTENT_CHARS,
    ):
        """
        Initialize the extractor.

        Args:
            timeout: Static fetch timeout in seconds
            render_timeout_ms: Navigation timeout for the rendering tier
            min_container_chars: Text a content container needs to be chosen
            dynamic_fallback_chars: Static bodies shorter than this trigger rendering
            max_chars: Character budget for normalized bodies
        """
        self.timeout = timeout
        self.render_timeout_ms = render_timeout_ms
        self.min_container_chars = min_container_chars
        self.dynamic_fallback_chars = dynamic_fallback_chars
        self.max_chars = max_chars

    async def extract(self, url: str) -> Optional[ExtractedContent]:
        """Extract content from ``url``, or None if nothing usable was found."""
        logger.info("[EXTRACTOR] Scraping content from: %s", url)

        try:
            content = await fetch_static(
                url,
                timeout=self.timeout,
                min_container_chars=self.min_container_chars,
                max_chars=self.max_chars,
            )

            if content.length < self.dynamic_fallback_chars:
                logger.info(
                    "[EXTRACTOR] Static pass gave %d chars, trying dynamic scraping",
                    content.length,
                )
                content = await fetch_dynamic(
                    url,
                    timeout_ms=self.render_timeout_ms,
                    max_chars=self.max_chars,
                )
        except Exception as e:
            logger.error("[EXTRACTOR] Error scraping %s: %s", url, e)
            return None

        if not content.content:
            logger.warning("[EXTRACTOR] No extractable content at %s", url)
            return None

        logger.info("[EXTRACTOR] Scraped %d characters (%s)", content.length, content.method)
        return content
