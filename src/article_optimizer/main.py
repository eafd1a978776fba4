#!/usr/bin/env python3
"""
Article Optimizer

Entry point for the batch optimizer. For each stored article: finds
top-ranking competing articles, extracts their content, rewrites the
article with an LLM and publishes the result back through the Article API.

Usage:
    python -m article_optimizer.main                 # All articles
    python -m article_optimizer.main 3               # Only the article at index 3
    python -m article_optimizer.main --dry-run       # Everything but publishing
    python -m article_optimizer.main --diagnose      # Smoke-test each component
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from .articles.client import ArticleClient
from .articles.models import Article
from .config.settings import settings
from .errors import ArticleListError, RewriteFailure
from .extract.extractor import ContentExtractor
from .extract.models import ExtractedContent
from .pipeline.models import BatchSummary
from .pipeline.orchestrator import PipelineOrchestrator
from .pipeline.report import RunReportWriter
from .rewrite.optimizer import ArticleOptimizer, uses_anthropic
from .search.resolver import ReferenceResolver

logger = logging.getLogger(__name__)

DIAGNOSE_QUERY = "chatbots guide 2023"
DIAGNOSE_URL = "https://www.ibm.com/topics/chatbots"


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Optimize stored articles against top-ranking references"
    )

    parser.add_argument(
        "index",
        nargs="?",
        type=int,
        default=None,
        help="Index of a single article to optimize (default: all)",
    )

    parser.add_argument(
        "--model",
        default=settings.rewrite_model,
        help=f"Rewrite model (default: {settings.rewrite_model})",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run every step except publishing",
    )

    parser.add_argument(
        "--save-report",
        action="store_true",
        help=f"Write a JSON run report to {settings.output_dir}",
    )

    parser.add_argument(
        "--diagnose",
        action="store_true",
        help="Test search, extraction and rewriting individually, then exit",
    )

    return parser.parse_args(argv)


def rewrite_api_key(model_id: str) -> Optional[str]:
    """Key for the backend serving ``model_id``; None when LiteLLM reads the env."""
    if uses_anthropic(model_id):
        return settings.anthropic_api_key
    if model_id.startswith("gemini/"):
        return settings.gemini_api_key
    return None


def build_optimizer(model_id: str) -> ArticleOptimizer:
    return ArticleOptimizer(
        model_id=model_id,
        max_tokens=settings.rewrite_max_tokens,
        temperature=settings.rewrite_temperature,
        api_key=rewrite_api_key(model_id),
    )


def build_resolver() -> ReferenceResolver:
    return ReferenceResolver(
        api_key=settings.serpapi_key,
        result_count=settings.search_result_count,
    )


def build_extractor() -> ContentExtractor:
    return ContentExtractor(
        timeout=settings.request_timeout_seconds,
        render_timeout_ms=settings.render_timeout_ms,
        min_container_chars=settings.min_container_chars,
        dynamic_fallback_chars=settings.dynamic_fallback_chars,
        max_chars=settings.max_content_chars,
    )


def print_summary(summary: BatchSummary) -> None:
    print("\n" + "=" * 70)
    print("📊 Summary:")
    print(f"  Total articles: {summary.total}")
    print(f"  Successfully optimized: {summary.succeeded}")
    print(f"  Failed: {summary.failed}")
    print("=" * 70)


async def diagnose(model_id: str) -> int:
    """Exercise each component once, without touching the Article API."""
    failures = 0

    print("=" * 60)
    print("Test 1: Reference search")
    print("=" * 60)
    results = await build_resolver().resolve(DIAGNOSE_QUERY, limit=settings.reference_limit)
    if results:
        print(f"✓ Found {len(results)} results:")
        for r in results:
            print(f"  {r.rank}. {r.title}\n     {r.url}")
    else:
        failures += 1
        print("✗ No results (search may be blocked)")

    print("\n" + "=" * 60)
    print("Test 2: Content extraction")
    print("=" * 60)
    content = await build_extractor().extract(DIAGNOSE_URL)
    if content:
        print(f"✓ {content.title} ({content.length} chars, {len(content.headings)} headings, {content.method})")
    else:
        failures += 1
        print(f"✗ Could not extract {DIAGNOSE_URL}")

    print("\n" + "=" * 60)
    print("Test 3: Rewrite model")
    print("=" * 60)
    test_article = Article(
        _id="diagnose",
        title="Test Article",
        description="This is a short test article about chatbots.",
        url="https://test.com",
    )
    test_refs = [
        ExtractedContent(
            url="https://example.com",
            title="Reference Article",
            content="Chatbots are AI-powered tools that help businesses automate customer service.",
            headings=["Introduction", "Benefits"],
        )
    ]
    try:
        optimized = await build_optimizer(model_id).optimize(test_article, test_refs)
        print(f"✓ {model_id} works: {optimized.title!r} ({len(optimized.body)} chars)")
    except RewriteFailure as e:
        failures += 1
        print(f"✗ {e}")

    print("\n" + "=" * 60)
    print(f"Diagnostics complete: {3 - failures}/3 components OK")
    print("=" * 60)
    return 0 if failures == 0 else 1


async def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    api_key = rewrite_api_key(args.model)
    if api_key is not None and not api_key:
        env_var = "ANTHROPIC_API_KEY" if uses_anthropic(args.model) else "GEMINI_API_KEY"
        print(f"❌ {env_var} not set in .env file")
        return 1

    if args.diagnose:
        return await diagnose(args.model)

    print("=" * 70)
    print("🚀 Article Optimizer")
    print("=" * 70)
    print(f"API: {settings.api_base_url}")
    print(f"Model: {args.model}")
    print(f"Search: {'SerpAPI' if settings.serpapi_key else 'web scraping'}")
    if args.dry_run:
        print("Mode: dry run (nothing will be published)")

    optimizer = build_optimizer(args.model)

    async with ArticleClient(settings.api_base_url) as articles:
        orchestrator = PipelineOrchestrator(
            articles=articles,
            resolver=build_resolver(),
            extractor=build_extractor(),
            optimizer=optimizer,
            reference_limit=settings.reference_limit,
            reference_delay=settings.reference_delay_seconds,
            article_delay=settings.article_delay_seconds,
            dry_run=args.dry_run,
        )
        try:
            summary = await orchestrator.run(args.index)
        except ArticleListError as e:
            print(f"\n❌ Fatal error: {e}")
            return 1

    if not summary.single_article:
        print_summary(summary)

    if args.save_report:
        path = RunReportWriter(settings.output_dir).save(summary, optimizer.costs)
        print(f"\n📁 Report saved to: {path}")

    print(f"\n✅ Article optimization complete! (LLM cost: ${optimizer.costs.total_cost():.4f})\n")
    return 0


def cli() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
