"""Content extraction: pull clean article text out of web pages."""

from .extractor import ContentExtractor
from .models import ExtractedContent
from .text import normalize_content

__all__ = [
    "ContentExtractor",
    "ExtractedContent",
    "normalize_content",
]
