"""Pydantic models for drafts and Qiita submissions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Accepts snake_case or camelCase, serialises camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------


class Draft(_CamelModel):
    """A locally persisted, not yet published article."""

    id: str
    title: str = ""
    tags: str = Field("", description="Comma-separated tag names")
    markdown: str = ""
    is_private: bool = False
    created_at: str = Field(..., description="ISO-8601 creation timestamp")
    updated_at: str = Field(..., description="ISO-8601 last update timestamp")


class DraftFields(_CamelModel):
    """Editable draft fields. ``None`` means "not supplied"."""

    title: str | None = None
    tags: str | None = None
    markdown: str | None = None
    is_private: bool | None = None

    def supplied(self) -> dict[str, Any]:
        """Fields the caller actually provided, keyed by attribute name."""
        return self.model_dump(exclude_none=True)


class DraftCreatedResponse(BaseModel):
    success: bool = True
    id: str
    message: str


class DraftMutationResponse(BaseModel):
    success: bool = True
    message: str


# ---------------------------------------------------------------------------
# Qiita submission
# ---------------------------------------------------------------------------


class QiitaTag(BaseModel):
    """Tag entry in Qiita's item payload."""

    name: str
    versions: list[str] = Field(default_factory=list)


def parse_tags(raw: str) -> list[QiitaTag]:
    """Split a comma-separated tag string into Qiita tags.

    Order is preserved; blank entries are dropped.
    """
    names = (part.strip() for part in raw.split(","))
    return [QiitaTag(name=name) for name in names if name]


class ArticleSubmission(BaseModel):
    """Publish request body, forwarded to ``POST /items``."""

    title: str = ""
    body: str = ""
    tags: list[QiitaTag] = Field(default_factory=list)
    private: bool = False

    @field_validator("title", "body", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tag_string(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return parse_tags(value)
        return value

    def missing_fields(self) -> list[str]:
        """Names of required fields that are blank after trimming."""
        return [name for name in ("title", "body") if not getattr(self, name).strip()]


class PublishResponse(BaseModel):
    success: bool = True
    url: str
    id: str
    message: str


class ErrorResponse(BaseModel):
    message: str
