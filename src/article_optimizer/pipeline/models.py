"""Per-article outcomes and batch summary."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ArticleStatus(str, Enum):
    PUBLISHED = "published"
    SKIPPED = "skipped"


class PipelineStep(str, Enum):
    RESOLVE = "resolve"
    EXTRACT = "extract"
    REWRITE = "rewrite"
    FORMAT = "format"
    PUBLISH = "publish"


@dataclass
class ArticleOutcome:
    """What happened to one article in a run."""

    article_id: str
    original_title: str
    status: ArticleStatus
    step: PipelineStep  # last step entered
    reason: Optional[str] = None  # why it was skipped
    reference_urls: list[str] = field(default_factory=list)
    new_title: Optional[str] = None
    body_length: int = 0

    @property
    def published(self) -> bool:
        return self.status == ArticleStatus.PUBLISHED


@dataclass
class BatchSummary:
    """Running tally for a batch; the only state shared across articles."""

    started_at: datetime
    outcomes: list[ArticleOutcome] = field(default_factory=list)
    finished_at: Optional[datetime] = None
    single_article: bool = False  # run was limited to one index, no summary report

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.published)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def record(self, outcome: ArticleOutcome) -> None:
        self.outcomes.append(outcome)
