"""Batch pipeline: per-article orchestration and run reporting."""

from .models import ArticleOutcome, ArticleStatus, BatchSummary, PipelineStep
from .orchestrator import PipelineOrchestrator
from .report import RunReportWriter

__all__ = [
    "ArticleOutcome",
    "ArticleStatus",
    "BatchSummary",
    "PipelineOrchestrator",
    "PipelineStep",
    "RunReportWriter",
]
