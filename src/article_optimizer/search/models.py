"""Data models for reference search."""

from dataclasses import dataclass


@dataclass
class SearchResult:
    """One candidate reference article for a topic."""

    title: str
    url: str
    snippet: str
    rank: int  # 1-based position among the kept results
