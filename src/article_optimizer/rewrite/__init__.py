"""Rewrite step: prompt building, model call and output formatting."""

from .formatter import append_references, build_prompt, parse_response
from .models import OptimizedArticle, ParsedRewrite, ReferenceCitation
from .optimizer import ArticleOptimizer

__all__ = [
    "ArticleOptimizer",
    "OptimizedArticle",
    "ParsedRewrite",
    "ReferenceCitation",
    "append_references",
    "build_prompt",
    "parse_response",
]
