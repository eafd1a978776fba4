"""
Shared fixtures for the article optimizer test suite.

All tests run without network access: HTTP clients, the browser and the
rewrite model are replaced with mocks.
"""

from unittest.mock import AsyncMock, MagicMock, Mock

import httpx
import pytest

from article_optimizer.articles.models import Article
from article_optimizer.extract.models import ExtractedContent


def make_article(**overrides) -> Article:
    defaults = {
        "_id": "a1",
        "title": "Chatbots Guide",
        "author": "Jane",
        "date": "2023-01-01",
        "url": "https://blog.example.com/chatbots-guide",
        "description": "Original body about chatbots.",
        "tags": ["ai"],
    }
    defaults.update(overrides)
    return Article.model_validate(defaults)


def make_reference(**overrides) -> ExtractedContent:
    defaults = {
        "url": "https://ref.example.com/blog/one",
        "title": "Reference One",
        "content": "Reference body text.",
        "headings": ["Intro", "Benefits"],
    }
    defaults.update(overrides)
    return ExtractedContent(**defaults)


def make_response(text: str = "", json_data=None, status_error: Exception = None) -> Mock:
    """A stand-in for httpx.Response."""
    resp = Mock()
    resp.text = text
    resp.json = Mock(return_value=json_data)
    resp.raise_for_status = Mock(side_effect=status_error)
    return resp


def make_status_error(status: int = 500) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://example.com")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError(f"{status} error", request=request, response=response)


def mock_async_client(response=None, error: Exception = None):
    """Build a patch target for ``httpx.AsyncClient`` used as ``async with``.

    Returns (factory, client) where ``client.get`` is the awaited call.
    """
    client = MagicMock()
    client.get = AsyncMock(return_value=response, side_effect=error)

    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=client)
    ctx.__aexit__ = AsyncMock(return_value=False)

    factory = MagicMock(return_value=ctx)
    return factory, client


@pytest.fixture
def article() -> Article:
    return make_article()


@pytest.fixture
def reference() -> ExtractedContent:
    return make_reference()
