"""Pydantic models for the external Article CRUD API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Article(BaseModel):
    """Article record as served by the CRUD API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    title: str
    author: str = ""
    date: str = ""
    url: str
    description: str = ""
    original_description: Optional[str] = None
    tags: list[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def none_tags_to_empty(cls, v):
        return v or []

    @property
    def has_snapshot(self) -> bool:
        """True once the pre-optimization body has been preserved."""
        return bool(self.original_description)


class ArticleUpdate(BaseModel):
    """Body of a PUT request against a single article."""

    title: str
    description: str
    tags: list[str]
    original_description: Optional[str] = None

    def to_payload(self) -> dict:
        """Serialize, omitting the snapshot field when it must not be written."""
        return self.model_dump(exclude_none=True)
