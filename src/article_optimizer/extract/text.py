"""Shared text normalization and selector lists for both extraction tiers."""

import re

MAX_CONTENT_CHARS = 5000

# Removed before any text is read
NON_CONTENT_SELECTORS = (
    "script",
    "style",
    "noscript",
    "nav",
    "header",
    "footer",
    "aside",
    ".ad",
    ".ads",
    ".advertisement",
    ".sidebar",
    ".comments",
    "#comments",
)

# Tried in order; first container with enough text wins
CONTENT_SELECTORS = (
    "article",
    ".article-content",
    ".post-content",
    ".entry-content",
    ".content",
    "main",
    '[role="main"]',
    ".blog-post",
    ".post-body",
)

MIN_HEADING_CHARS = 3

_HORIZONTAL_WS = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" *\n *")
_EXTRA_NEWLINES = re.compile(r"\n{3,}")


def normalize_content(text: str, max_chars: int = MAX_CONTENT_CHARS) -> str:
    """Collapse whitespace, cap blank lines at one, trim and truncate.

    Idempotent: normalizing an already normalized string returns it unchanged.
    """
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    # Only horizontal runs collapse; newlines stay so paragraph breaks are kept
    text = _HORIZONTAL_WS.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    text = _EXTRA_NEWLINES.sub("\n\n", text)
    text = text.strip()
    if len(text) > max_chars:
        text = text[:max_chars].rstrip()
    return text


def keep_heading(text: str) -> bool:
    """Headings of trivial length (icons, numbering) are dropped."""
    return len(text) > MIN_HEADING_CHARS
