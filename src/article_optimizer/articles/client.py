"""Async client for the external Article CRUD API.

The pipeline only ever lists articles and updates one at a time; creation
and deletion belong to the ingestion process and are not exposed here.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .models import Article, ArticleUpdate

logger = logging.getLogger(__name__)


class ArticleApiError(Exception):
    """Raised when the Article API is unreachable or reports a failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ArticleClient:
    """
    Thin wrapper over the Article REST endpoints.

    Responses are expected in the envelope ``{"success": bool, "data": ...}``.
    Anything else (transport error, non-2xx status, ``success: false``,
    malformed payload) is raised as ArticleApiError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Collection URL, e.g. http://localhost:5000/api/articles
            timeout: Per-request timeout in seconds
            client: Optional pre-built httpx client (tests inject one)
        """
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "ArticleClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list(self) -> list[Article]:
        """Fetch every article in the collection."""
        payload = await self._request("GET", self.base_url)
        records = payload.get("data") or []
        try:
            articles = [Article.model_validate(r) for r in records]
        except ValidationError as e:
            raise ArticleApiError(f"Malformed article in listing: {e}") from e

        logger.info("[ARTICLES] Listed %d articles", len(articles))
        return articles

    async def update(self, article_id: str, update: ArticleUpdate) -> Article:
        """Apply a partial update and return the stored article."""
        payload = await self._request(
            "PUT", f"{self.base_url}/{article_id}", json=update.to_payload()
        )
        try:
            return Article.model_validate(payload.get("data") or {})
        except ValidationError as e:
            raise ArticleApiError(f"Malformed article in update response: {e}") from e

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict:
        try:
            resp = await self._client.request(method, url, **kwargs)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as e:
            raise ArticleApiError(
                f"{method} {url} returned {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ArticleApiError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise ArticleApiError(f"{method} {url} returned invalid JSON") from e

        if not isinstance(payload, dict) or not payload.get("success"):
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ArticleApiError(message or f"{method} {url} was not successful")

        return payload
