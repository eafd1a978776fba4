"""Tests for the tiered ContentExtractor."""

from unittest.mock import AsyncMock, patch

import httpx

from article_optimizer.extract.extractor import ContentExtractor
from article_optimizer.extract.models import ExtractedContent

URL = "https://ref.example.com/blog/post"


def content_of(length: int, method: str = "static") -> ExtractedContent:
    return ExtractedContent(url=URL, title="T", content="x" * length, method=method)


class TestContentExtractor:
    async def test_long_static_result_skips_rendering(self) -> None:
        static = AsyncMock(return_value=content_of(500))
        dynamic = AsyncMock()
        with patch("article_optimizer.extract.extractor.fetch_static", static), \
                patch("article_optimizer.extract.extractor.fetch_dynamic", dynamic):
            result = await ContentExtractor().extract(URL)

        assert result.length == 500
        assert result.method == "static"
        dynamic.assert_not_called()

    async def test_threshold_is_exclusive(self) -> None:
        dynamic = AsyncMock()
        with patch("article_optimizer.extract.extractor.fetch_static", AsyncMock(return_value=content_of(100))), \
                patch("article_optimizer.extract.extractor.fetch_dynamic", dynamic):
            result = await ContentExtractor(dynamic_fallback_chars=100).extract(URL)

        assert result.length == 100
        dynamic.assert_not_called()

    async def test_short_static_result_triggers_rendering(self) -> None:
        rendered = content_of(1200, method="dynamic")
        dynamic = AsyncMock(return_value=rendered)
        with patch("article_optimizer.extract.extractor.fetch_static", AsyncMock(return_value=content_of(40))), \
                patch("article_optimizer.extract.extractor.fetch_dynamic", dynamic):
            result = await ContentExtractor(render_timeout_ms=3000).extract(URL)

        assert result is rendered
        dynamic.assert_awaited_once_with(URL, timeout_ms=3000, max_chars=5000)

    async def test_static_error_returns_none_without_rendering(self) -> None:
        dynamic = AsyncMock()
        with patch("article_optimizer.extract.extractor.fetch_static",
                   AsyncMock(side_effect=httpx.ConnectError("refused"))), \
                patch("article_optimizer.extract.extractor.fetch_dynamic", dynamic):
            assert await ContentExtractor().extract(URL) is None

        dynamic.assert_not_called()

    async def test_dynamic_error_returns_none(self) -> None:
        with patch("article_optimizer.extract.extractor.fetch_static", AsyncMock(return_value=content_of(0))), \
                patch("article_optimizer.extract.extractor.fetch_dynamic",
                      AsyncMock(side_effect=RuntimeError("browser crashed"))):
            assert await ContentExtractor().extract(URL) is None

    async def test_empty_after_both_tiers_returns_none(self) -> None:
        with patch("article_optimizer.extract.extractor.fetch_static", AsyncMock(return_value=content_of(0))), \
                patch("article_optimizer.extract.extractor.fetch_dynamic",
                      AsyncMock(return_value=content_of(0, method="dynamic"))):
            assert await ContentExtractor().extract(URL) is None

    async def test_short_rendered_content_still_returned(self) -> None:
        with patch("article_optimizer.extract.extractor.fetch_static", AsyncMock(return_value=content_of(10))), \
                patch("article_optimizer.extract.extractor.fetch_dynamic",
                      AsyncMock(return_value=content_of(30, method="dynamic"))):
            result = await ContentExtractor().extract(URL)

        assert result.length == 30
