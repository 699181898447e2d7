"""Schemas for manual ordering records."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GlobalOrderRequest(BaseModel):
    """Full slugs in display order for the flat document listing."""

    documents: Any = Field(default=None, description="Array of document slugs")


class DirectoryOrderRequest(BaseModel):
    """Entry names (files without .md, or subdirectories) in display order for one directory."""

    model_config = ConfigDict(populate_by_name=True)

    dir_slug: str | None = Field(
        default=None,
        alias="dirSlug",
        description="Directory under the content root; empty for the root itself",
    )
    order: Any = Field(default=None, description="Array of entry names")
