"""Tests for extract.static."""

from unittest.mock import patch

import httpx
import pytest

from article_optimizer.extract.static import fetch_static, parse_static_html

from conftest import make_response, make_status_error, mock_async_client

LONG = "Chatbots answer customer questions around the clock. " * 10

ARTICLE_PAGE = f"""
<html><head><title>Page Title</title><style>.x {{}}</style></head>
<body>
  <header><h1>Site Header Brand</h1><nav>Home | Blog</nav></header>
  <article>
    <h1>How Chatbots Work</h1>
    <h2>Overview</h2>
    <p>{LONG}</p>
    <script>var tracking = 1;</script>
    <div class="ad">Buy now!</div>
    <h3>FAQ</h3>
    <h2>Overview</h2>
  </article>
  <div class="comments">Nice post!</div>
  <footer>Copyright</footer>
</body></html>
"""

PARAGRAPH_PAGE = """
<html><head><title>Only Paragraphs</title></head>
<body>
  <div><p>First paragraph.</p><p>   </p><p>Second paragraph.</p></div>
</body></html>
"""


class TestParseStaticHtml:
    def test_extracts_article_container(self) -> None:
        result = parse_static_html("https://e.com/blog/bots", ARTICLE_PAGE)

        assert result.url == "https://e.com/blog/bots"
        assert result.method == "static"
        assert "Chatbots answer customer questions" in result.content
        assert result.length == len(result.content)

    def test_strips_non_content(self) -> None:
        result = parse_static_html("https://e.com", ARTICLE_PAGE)

        for noise in ("tracking", "Buy now!", "Nice post!", "Copyright", "Home | Blog"):
            assert noise not in result.content

    def test_headings_in_order_without_dedup_or_trivial_entries(self) -> None:
        result = parse_static_html("https://e.com", ARTICLE_PAGE)
        assert result.headings == ["How Chatbots Work", "Overview", "Overview"]

    def test_title_prefers_first_remaining_h1(self) -> None:
        result = parse_static_html("https://e.com", ARTICLE_PAGE)
        assert result.title == "How Chatbots Work"

    def test_falls_back_to_paragraphs(self) -> None:
        result = parse_static_html("https://e.com", PARAGRAPH_PAGE)

        assert result.content == "First paragraph.\n\nSecond paragraph."
        assert result.title == "Only Paragraphs"

    def test_short_container_skipped_for_later_selector(self) -> None:
        html = f"<article>tiny</article><main><p>{LONG}</p></main>"
        result = parse_static_html("https://e.com", html)
        assert result.content.startswith("Chatbots answer")

    def test_respects_budget(self) -> None:
        result = parse_static_html("https://e.com", ARTICLE_PAGE, max_chars=50)
        assert result.length <= 50

    def test_empty_page(self) -> None:
        result = parse_static_html("https://e.com", "<html><body></body></html>")
        assert result.content == ""
        assert result.headings == []


class TestFetchStatic:
    async def test_fetches_with_browser_user_agent(self) -> None:
        factory, client = mock_async_client(make_response(text=ARTICLE_PAGE))
        with patch("article_optimizer.extract.static.httpx.AsyncClient", factory):
            result = await fetch_static("https://e.com/blog/bots", timeout=7.0)

        assert "Chatbots answer" in result.content
        client.get.assert_awaited_once_with("https://e.com/blog/bots")
        kwargs = factory.call_args.kwargs
        assert kwargs["timeout"] == 7.0
        assert "Mozilla" in kwargs["headers"]["User-Agent"]

    async def test_http_error_propagates(self) -> None:
        factory, _ = mock_async_client(make_response(status_error=make_status_error(403)))
        with patch("article_optimizer.extract.static.httpx.AsyncClient", factory):
            with pytest.raises(httpx.HTTPStatusError):
                await fetch_static("https://e.com")
