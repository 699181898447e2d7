"""Schemas for markdown documents, listings and the page tree."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class CreateDocumentRequest(BaseModel):
    """Body of POST /admin/documents. slug and title are checked by the handler."""

    slug: str | None = Field(default=None, description="Slash-separated document path, e.g. guide/intro")
    title: str | None = Field(default=None, description="Document title stored in frontmatter")
    content: str = Field(default="", description="Markdown body")
    frontmatter: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra frontmatter keys merged after title.",
    )


class UpdateDocumentRequest(BaseModel):
    """Body of PUT /admin/documents/{slug}. content is typed loosely so non-strings answer 400."""

    frontmatter: dict[str, Any] | None = None
    content: Any = None


class CreatedDocumentResponse(BaseModel):
    success: bool = True
    path: str = Field(..., description="Path of the new file relative to the content root")
    slug: str


class DocumentContent(BaseModel):
    """A single document split into frontmatter and body."""

    frontmatter: dict[str, Any] = Field(default_factory=dict)
    content: str
    raw_content: str = Field(..., serialization_alias="rawContent")


class DocumentSummary(BaseModel):
    """Flat listing entry."""

    slug: str
    title: str
    excerpt: str | None = None
    last_modified: datetime | None = Field(default=None, serialization_alias="lastModified")


class DocumentsResponse(BaseModel):
    documents: list[DocumentSummary]


class PageNode(BaseModel):
    """Node of the sidebar tree: a directory with children or a markdown file."""

    slug: str
    title: str
    kind: Literal["dir", "file"]
    filename: str | None = None
    has_index: bool | None = Field(default=None, serialization_alias="hasIndex")
    children: list[PageNode] | None = None


class PagesResponse(BaseModel):
    pages: list[PageNode]


class DocPage(BaseModel):
    """A public documentation page with its "next" link inside the section."""

    slug: str
    title: str
    content: str
    next_slug: str | None = Field(default=None, serialization_alias="nextSlug")
