"""Orchestrator for the per-article optimization workflow.

Manages the full pipeline for each article:
1. Resolve reference URLs for the article title
2. Extract content from each reference, one at a time
3. Rewrite the article with the model
4. Append the references section
5. Publish the update through the Article API

Everything is strictly sequential. Any failure skips the current article and
the batch moves on; only an unavailable article list aborts the run.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from ..articles.client import ArticleApiError, ArticleClient
from ..articles.models import Article, ArticleUpdate
from ..errors import (
    ArticleListError,
    NoExtractableContent,
    NoReferencesFound,
    PipelineError,
    PublishFailure,
)
from ..extract.extractor import ContentExtractor
from ..extract.models import ExtractedContent
from ..rewrite.formatter import append_references
from ..rewrite.optimizer import ArticleOptimizer
from ..search.resolver import ReferenceResolver
from .models import ArticleOutcome, ArticleStatus, BatchSummary, PipelineStep

logger = logging.getLogger(__name__)

OPTIMIZED_TAGS = ("optimized", "ai-enhanced")


def merge_tags(existing: list[str], markers: tuple[str, ...] = OPTIMIZED_TAGS) -> list[str]:
    """Existing tags in order, then any marker not already present."""
    merged: list[str] = []
    for tag in [*existing, *markers]:
        if tag not in merged:
            merged.append(tag)
    return merged


def build_update(article: Article, title: str, body: str) -> ArticleUpdate:
    """Update request for a rewritten article.

    The pre-optimization body is snapshotted only the first time.
    """
    return ArticleUpdate(
        title=title,
        description=body,
        tags=merge_tags(article.tags),
        original_description=None if article.has_snapshot else article.description,
    )


class PipelineOrchestrator:
    """
    Drives resolve -> extract -> rewrite -> format -> publish per article.

    Usage:
        orchestrator = PipelineOrchestrator(articles, resolver, extractor, optimizer)
        summary = await orchestrator.run()
    """

    def __init__(
        self,
        articles: ArticleClient,
        resolver: ReferenceResolver,
        extractor: ContentExtractor,
        optimizer: ArticleOptimizer,
        reference_limit: int = 2,
        reference_delay: float = 2.0,
        article_delay: float = 5.0,
        dry_run: bool = False,
    ):
        """
        Initialize orchestrator.

        Args:
            articles: Client for the external Article API
            resolver: Finds reference URLs for a title
            extractor: Pulls text out of reference pages
            optimizer: Rewrite capability
            reference_limit: References requested per article
            reference_delay: Seconds between reference extractions
            article_delay: Seconds between articles in a batch
            dry_run: Run every step except the publish call
        """
        self.articles = articles
        self.resolver = resolver
        self.extractor = extractor
        self.optimizer = optimizer
        self.reference_limit = reference_limit
        self.reference_delay = reference_delay
        self.article_delay = article_delay
        self.dry_run = dry_run

    async def _pause(self, seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)

    async def run(self, article_index: Optional[int] = None) -> BatchSummary:
        """
        Process one article by index, or the whole collection.

        Args:
            article_index: 0-based index; None or out of range means all

        Returns:
            BatchSummary with one outcome per processed article

        Raises:
            ArticleListError: If the article list cannot be fetched
        """
        summary = BatchSummary(started_at=datetime.now(timezone.utc))

        logger.info("[PIPELINE] Fetching articles from API...")
        try:
            articles = await self.articles.list()
        except ArticleApiError as e:
            raise ArticleListError(f"Could not fetch articles: {e}") from e

        if not articles:
            logger.warning("[PIPELINE] No articles found")
            summary.finished_at = datetime.now(timezone.utc)
            return summary

        if article_index is not None:
            if 0 <= article_index < len(articles):
                summary.single_article = True
                summary.record(await self.process_article(articles[article_index]))
                summary.finished_at = datetime.now(timezone.utc)
                return summary
            logger.warning(
                "[PIPELINE] Index %d out of range (0-%d), processing all articles",
                article_index,
                len(articles) - 1,
            )

        logger.info("[PIPELINE] Processing all %d articles...", len(articles))
        for i, article in enumerate(articles):
            summary.record(await self.process_article(article))

            if i < len(articles) - 1:
                logger.info("[PIPELINE] Waiting before processing next article...")
                await self._pause(self.article_delay)

        summary.finished_at = datetime.now(timezone.utc)
        logger.info(
            "[PIPELINE] Batch done: %d total, %d optimized, %d failed",
            summary.total,
            summary.succeeded,
            summary.failed,
        )
        return summary

    async def process_article(self, article: Article) -> ArticleOutcome:
        """Run every step for one article. Never raises."""
        outcome = ArticleOutcome(
            article_id=article.id,
            original_title=article.title,
            status=ArticleStatus.SKIPPED,
            step=PipelineStep.RESOLVE,
        )
        logger.info("[PIPELINE] Processing: %s", article.title)

        try:
            await self._process(article, outcome)
        except PipelineError as e:
            outcome.reason = f"{type(e).__name__}: {e}"
            logger.warning("[PIPELINE] Skipping %r at %s: %s", article.title, outcome.step.value, outcome.reason)
        except Exception as e:
            outcome.reason = f"Unexpected error: {e}"
            logger.exception("[PIPELINE] Error processing %r at %s", article.title, outcome.step.value)

        return outcome

    async def _process(self, article: Article, outcome: ArticleOutcome) -> None:
        outcome.step = PipelineStep.RESOLVE
        results = await self.resolver.resolve(article.title, limit=self.reference_limit)
        if not results:
            raise NoReferencesFound(f"No search results for {article.title!r}")
        for result in results:
            logger.info("[PIPELINE]   %d. %s (%s)", result.rank, result.title, result.url)

        outcome.step = PipelineStep.EXTRACT
        references = await self._extract_references([r.url for r in results])
        if not references:
            raise NoExtractableContent("Could not scrape any reference articles")
        outcome.reference_urls = [r.url for r in references]

        outcome.step = PipelineStep.REWRITE
        optimized = await self.optimizer.optimize(article, references)

        outcome.step = PipelineStep.FORMAT
        body = append_references(optimized.body, optimized.references)
        outcome.new_title = optimized.title
        outcome.body_length = len(body)

        outcome.step = PipelineStep.PUBLISH
        update = build_update(article, optimized.title, body)
        if self.dry_run:
            logger.info("[PIPELINE] Dry run, not publishing %r", optimized.title)
        else:
            try:
                await self.articles.update(article.id, update)
            except ArticleApiError as e:
                raise PublishFailure(str(e)) from e

        outcome.status = ArticleStatus.PUBLISHED
        logger.info(
            "[PIPELINE] Optimized %r -> %r (%d chars, %d references)",
            article.title,
            optimized.title,
            len(body),
            len(optimized.references),
        )

    async def _extract_references(self, urls: list[str]) -> list[ExtractedContent]:
        """Extract each URL in turn, keeping only successes."""
        references = []
        for i, url in enumerate(urls):
            if i > 0:
                await self._pause(self.reference_delay)
            content = await self.extractor.extract(url)
            if content:
                references.append(content)
        logger.info("[PIPELINE] Scraped %d/%d reference articles", len(references), len(urls))
        return references
