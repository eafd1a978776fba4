"""Run report output.

Writes a JSON record of a batch: counts, per-article outcomes and model
cost, so skipped articles can be inspected after the fact.
"""

import json
from pathlib import Path
from typing import Optional

from ..utils.cost_tracker import PipelineCosts
from .models import ArticleOutcome, BatchSummary


class RunReportWriter:
    """Formats and saves batch results."""

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir

    def save(self, summary: BatchSummary, costs: Optional[PipelineCosts] = None) -> Path:
        """Write ``run_<timestamp>.json`` and return its path."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = summary.started_at.strftime("%Y-%m-%d_%H-%M-%S")
        path = self.output_dir / f"run_{timestamp}.json"
        path.write_text(json.dumps(self.format_run(summary, costs), indent=2, default=str))
        return path

    def format_run(self, summary: BatchSummary, costs: Optional[PipelineCosts] = None) -> dict:
        return {
            "started_at": summary.started_at.isoformat(),
            "finished_at": summary.finished_at.isoformat() if summary.finished_at else None,
            "single_article": summary.single_article,
            "counts": {
                "total": summary.total,
                "succeeded": summary.succeeded,
                "failed": summary.failed,
            },
            "articles": [self.format_outcome(o) for o in summary.outcomes],
            "costs": costs.to_dict() if costs else None,
        }

    def format_outcome(self, outcome: ArticleOutcome) -> dict:
        return {
            "id": outcome.article_id,
            "original_title": outcome.original_title,
            "status": outcome.status.value,
            "step": outcome.step.value,
            "reason": outcome.reason,
            "new_title": outcome.new_title,
            "body_length": outcome.body_length,
            "references": outcome.reference_urls,
        }
