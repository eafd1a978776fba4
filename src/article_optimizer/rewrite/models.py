"""Data models for the rewrite step."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ReferenceCitation:
    """A source listed in the references section."""

    title: str
    url: str


@dataclass
class ParsedRewrite:
    """Model output split into its TITLE and CONTENT parts."""

    title: Optional[str]  # None when the output carries no usable title
    body: str


@dataclass
class OptimizedArticle:
    """Rewritten article ready to be formatted and published."""

    title: str
    body: str
    references: list[ReferenceCitation] = field(default_factory=list)
    model: str = ""
    input_tokens: int = 0
    output_tokens: int = 0
    cost_usd: float = 0.0
