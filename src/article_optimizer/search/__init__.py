"""Reference search: find competing top-ranking articles for a topic."""

from .filters import is_blog_or_article
from .models import SearchResult
from .resolver import ReferenceResolver

__all__ = [
    "ReferenceResolver",
    "SearchResult",
    "is_blog_or_article",
]
