"""Data models for extracted reference content."""

from dataclasses import dataclass, field


@dataclass
class ExtractedContent:
    """Clean text pulled from one reference page."""

    url: str
    title: str
    content: str  # normalized, bounded body text
    headings: list[str] = field(default_factory=list)
    length: int = 0
    method: str = "static"  # "static" | "dynamic"

    def __post_init__(self) -> None:
        self.length = len(self.content)
