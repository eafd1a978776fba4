"""Tests for pipeline.report."""

import json
from datetime import datetime, timezone

from article_optimizer.pipeline.models import (
    ArticleOutcome,
    ArticleStatus,
    BatchSummary,
    PipelineStep,
)
from article_optimizer.pipeline.report import RunReportWriter
from article_optimizer.utils.cost_tracker import PipelineCosts


def make_summary() -> BatchSummary:
    summary = BatchSummary(started_at=datetime(2024, 3, 1, 9, 30, 5, tzinfo=timezone.utc))
    summary.record(
        ArticleOutcome(
            article_id="a1",
            original_title="Chatbots Guide",
            status=ArticleStatus.PUBLISHED,
            step=PipelineStep.PUBLISH,
            reference_urls=["https://one.example.com/blog/a"],
            new_title="New Headline",
            body_length=1234,
        )
    )
    summary.record(
        ArticleOutcome(
            article_id="a2",
            original_title="Obscure Topic",
            status=ArticleStatus.SKIPPED,
            step=PipelineStep.RESOLVE,
            reason="NoReferencesFound: No search results for 'Obscure Topic'",
        )
    )
    summary.finished_at = datetime(2024, 3, 1, 9, 31, 0, tzinfo=timezone.utc)
    return summary


class TestRunReportWriter:
    def test_format_run(self) -> None:
        report = RunReportWriter(output_dir=None).format_run(make_summary())

        assert report["counts"] == {"total": 2, "succeeded": 1, "failed": 1}
        assert report["costs"] is None
        assert report["articles"][0]["status"] == "published"
        assert report["articles"][1]["step"] == "resolve"
        assert report["articles"][1]["reason"].startswith("NoReferencesFound")

    def test_save_writes_timestamped_json(self, tmp_path) -> None:
        costs = PipelineCosts()
        costs.add_usage("rewrite", "gemini/gemini-2.5-flash", 100, 200, 0.0005)

        path = RunReportWriter(tmp_path / "runs").save(make_summary(), costs)

        assert path.name == "run_2024-03-01_09-30-05.json"
        data = json.loads(path.read_text())
        assert data["finished_at"] == "2024-03-01T09:31:00+00:00"
        assert data["costs"]["steps"]["rewrite"]["call_count"] == 1
        assert data["articles"][0]["references"] == ["https://one.example.com/blog/a"]
