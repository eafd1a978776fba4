"""Article collaborator: models and CRUD API client."""

from .client import ArticleApiError, ArticleClient
from .models import Article, ArticleUpdate

__all__ = [
    "Article",
    "ArticleApiError",
    "ArticleClient",
    "ArticleUpdate",
]
