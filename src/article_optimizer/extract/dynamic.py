"""Dynamic extraction tier: render the page in headless Chromium.

Used only for pages whose static markup carries too little text, typically
because the body is built client-side. Each call launches its own browser
and always closes it before returning.
"""

import logging

from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from .models import ExtractedContent
from .text import MAX_CONTENT_CHARS, NON_CONTENT_SELECTORS, keep_heading, normalize_content

logger = logging.getLogger(__name__)

_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

_BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

_MAIN_CONTAINER = "article, .article-content, .post-content, .entry-content, main"

# Runs inside the page. Strips non-content nodes from the live DOM, then
# reads rendered text.
_EXTRACT_SCRIPT = """
({removeSelectors, mainSelector}) => {
  for (const sel of removeSelectors) {
    document.querySelectorAll(sel).forEach(el => el.remove());
  }
  const h1 = document.querySelector('h1');
  const title = (h1 && h1.innerText.trim()) || document.title || '';
  const main = document.querySelector(mainSelector);
  const content = main ? main.innerText : (document.body ? document.body.innerText : '');
  const headings = Array.from(document.querySelectorAll('h1, h2, h3'))
    .map(h => h.innerText.trim());
  return {title, content, headings};
}
"""


async def fetch_dynamic(
    url: str,
    timeout_ms: int = 10000,
    max_chars: int = MAX_CONTENT_CHARS,
) -> ExtractedContent:
    """Render a page and extract its visible content.

    A navigation timeout is not fatal: whatever has rendered by then is read.

    Raises:
        playwright.async_api.Error: If the browser cannot launch or navigate
    """
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True, args=_BROWSER_ARGS)
        try:
            page = await browser.new_page(user_agent=_USER_AGENT)
            try:
                await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
            except PlaywrightTimeoutError:
                logger.warning("[EXTRACTOR] Network never settled for %s, reading partial DOM", url)

            data = await page.evaluate(
                _EXTRACT_SCRIPT,
                {"removeSelectors": list(NON_CONTENT_SELECTORS), "mainSelector": _MAIN_CONTAINER},
            )
        finally:
            await browser.close()

    headings = [h for h in data.get("headings") or [] if keep_heading(h)]
    return ExtractedContent(
        url=url,
        title=(data.get("title") or "").strip(),
        content=normalize_content(data.get("content") or "", max_chars),
        headings=headings,
        method="dynamic",
    )
