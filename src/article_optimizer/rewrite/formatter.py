"""Prompt construction, response parsing and the references section."""

import re
from typing import Protocol, Sequence

from ..articles.models import Article
from ..extract.models import ExtractedContent
from .loader import render
from .models import ParsedRewrite

MIN_WORDS = 800

REFERENCES_HEADING = "## References"
REFERENCES_DISCLOSURE = (
    "This article was optimized based on insights from the following "
    "top-ranking articles:"
)

_TITLE_RE = re.compile(r"TITLE:\s*(.*?)\s*(?:\n|CONTENT:)", re.IGNORECASE)
_CONTENT_RE = re.compile(r"CONTENT:\s*([\s\S]+)", re.IGNORECASE)


class Citable(Protocol):
    title: str
    url: str


def format_reference_block(index: int, ref: ExtractedContent) -> str:
    headings = ", ".join(ref.headings) if ref.headings else "N/A"
    return (
        f"### Reference Article {index}: {ref.title}\n"
        f"URL: {ref.url}\n"
        f"Content: {ref.content}\n"
        f"Headings: {headings}\n"
    )


def build_prompt(original: Article, references: Sequence[ExtractedContent]) -> str:
    """Build the rewrite prompt for one article and its extracted references."""
    blocks = "\n".join(
        format_reference_block(i, ref) for i, ref in enumerate(references, start=1)
    )
    return render(
        "optimize_article",
        title=original.title,
        body=original.description,
        url=original.url,
        references=blocks,
        min_words=str(MIN_WORDS),
    )


def parse_response(raw: str) -> ParsedRewrite:
    """Split raw model output into title and body.

    Without a CONTENT: marker the whole response is the body and no title is
    extracted; callers fall back to the article's existing title.
    """
    raw = raw or ""
    content_match = _CONTENT_RE.search(raw)
    if not content_match:
        return ParsedRewrite(title=None, body=raw.strip())

    title = None
    title_match = _TITLE_RE.search(raw)
    if title_match:
        title = title_match.group(1).strip() or None

    return ParsedRewrite(title=title, body=content_match.group(1).strip())


def append_references(body: str, references: Sequence[Citable]) -> str:
    """Append a numbered markdown list of sources to ``body``.

    Pure function of its inputs: the same body and reference order always
    yield the same text. An empty reference list leaves the body unchanged.
    """
    if not references:
        return body

    lines = [
        body,
        "",
        "---",
        "",
        REFERENCES_HEADING,
        "",
        REFERENCES_DISCLOSURE,
        "",
    ]
    lines.extend(f"{i}. [{ref.title}]({ref.url})" for i, ref in enumerate(references, start=1))
    return "\n".join(lines) + "\n"
