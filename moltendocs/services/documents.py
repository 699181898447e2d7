"""Markdown documents stored as files under the content root, addressed by slug."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from moltendocs.core.config import get_settings
from moltendocs.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from moltendocs.schemas.documents import DocumentContent, DocumentSummary, PageNode
from moltendocs.services.frontmatter import (
    FrontmatterError,
    parse_frontmatter,
    serialize_frontmatter,
    title_from_metadata,
)
from moltendocs.services.ordering import OrderStore, sort_by_order

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"
INDEX_STEM = "index"
INDEX_FILENAME = INDEX_STEM + MARKDOWN_SUFFIX
EXCERPT_MAX_LENGTH = 200

# First run of heading markers, e.g. "## " in "## Overview".
_HEADING_MARKER = re.compile(r"#+\s*")


def split_slug(slug: str) -> list[str]:
    """
    Split a slug into path segments.

    Empty segments are dropped ("a//b/" -> ["a", "b"]). Raises
    InvalidArgumentError for an empty slug and for segments that could
    escape the content root.
    """
    if not isinstance(slug, str):
        raise InvalidArgumentError("Invalid slug")
    parts = [p for p in slug.split("/") if p]
    if not parts:
        raise InvalidArgumentError("Invalid slug")
    for part in parts:
        if part in (".", "..") or "\\" in part or "\x00" in part:
            raise InvalidArgumentError("Invalid slug")
    return parts


def is_index_file(name: str) -> bool:
    return name.lower() == INDEX_FILENAME


def extract_excerpt(body: str) -> str | None:
    """First paragraph of body with its heading marker removed, if short enough to preview."""
    first_paragraph = body.strip().split("\n\n")[0]
    excerpt = _HEADING_MARKER.sub("", first_paragraph, count=1).strip()
    if 0 < len(excerpt) < EXCERPT_MAX_LENGTH:
        return excerpt
    return None


def _write_text(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


class DocumentRepository:
    """
    CRUD and listings over `<content_dir>/<slug>.md`.

    No locking: concurrent writers to one slug race and the last write wins.
    """

    def __init__(self, content_dir: Path | str, order_store: OrderStore) -> None:
        self.content_dir = Path(content_dir)
        self.order_store = order_store

    def path_for(self, slug: str) -> Path:
        """Absolute file path for slug; raises InvalidArgumentError if it would leave the content root."""
        parts = split_slug(slug)
        root = self.content_dir.resolve()
        *dirs, name = parts
        path = root.joinpath(*dirs, name + MARKDOWN_SUFFIX).resolve()
        if not path.is_relative_to(root):
            raise InvalidArgumentError("Invalid slug")
        return path

    def create(
        self,
        slug: str,
        title: str,
        content: str = "",
        extra_frontmatter: dict[str, Any] | None = None,
    ) -> str:
        """
        Write a new document; raises ConflictError if the file already exists.

        Returns the file path relative to the content root, e.g. "/guide/intro.md".
        """
        path = self.path_for(slug)
        if path.exists():
            raise ConflictError("Document already exists")
        path.parent.mkdir(parents=True, exist_ok=True)
        metadata = {"title": title, **(extra_frontmatter or {})}
        _write_text(path, serialize_frontmatter(metadata, content))
        logger.info("Created document %s", slug)
        return "/" + path.relative_to(self.content_dir.resolve()).as_posix()

    def read(self, slug: str) -> DocumentContent:
        path = self.path_for(slug)
        if not path.is_file():
            raise NotFoundError("Document not found")
        raw = path.read_text(encoding="utf-8")
        metadata, body = parse_frontmatter(raw)
        return DocumentContent(frontmatter=metadata, content=body, raw_content=raw)

    def update(self, slug: str, frontmatter: dict[str, Any] | None, content: Any) -> None:
        """
        Replace a document's frontmatter and body.

        Unlike create, the file does not need to exist beforehand.
        """
        if not isinstance(content, str):
            raise InvalidArgumentError("Content must be a string")
        if frontmatter is not None and not isinstance(frontmatter, dict):
            raise InvalidArgumentError("Frontmatter must be an object")
        path = self.path_for(slug)
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_text(path, serialize_frontmatter(frontmatter or {}, content))
        logger.info("Updated document %s", slug)

    def delete(self, slug: str) -> None:
        path = self.path_for(slug)
        if not path.is_file():
            raise NotFoundError("Document not found")
        path.unlink()
        logger.info("Deleted document %s", slug)

    def _read_metadata(self, path: Path) -> tuple[dict[str, Any], str]:
        raw = path.read_text(encoding="utf-8")
        return parse_frontmatter(raw)

    def _summarize(self, path: Path, slug: str) -> DocumentSummary:
        fallback = path.stem
        try:
            metadata, body = self._read_metadata(path)
        except (OSError, UnicodeDecodeError, FrontmatterError) as e:
            logger.warning("Could not read frontmatter of %s: %s", path, e)
            title, excerpt = fallback, None
        else:
            title = title_from_metadata(metadata, fallback)
            excerpt = extract_excerpt(body)
        last_modified = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
        return DocumentSummary(slug=slug, title=title, excerpt=excerpt, last_modified=last_modified)

    def _collect(self, directory: Path, base_slug: str) -> list[DocumentSummary]:
        documents: list[DocumentSummary] = []
        for entry in directory.iterdir():
            slug_prefix = f"{base_slug}/" if base_slug else ""
            if entry.is_dir():
                documents.extend(self._collect(entry, slug_prefix + entry.name))
            elif (
                entry.is_file()
                and entry.name.endswith(MARKDOWN_SUFFIX)
                and not is_index_file(entry.name)
            ):
                documents.append(self._summarize(entry, slug_prefix + entry.stem))
        return documents

    def list_flat(self) -> list[DocumentSummary]:
        """Every non-index document, sorted by the global `documents` order record."""
        if not self.content_dir.is_dir():
            logger.warning("Content directory %s does not exist", self.content_dir)
            return []
        documents = self._collect(self.content_dir, "")
        return sort_by_order(
            documents,
            self.order_store.global_documents(),
            key=lambda d: d.slug,
            title=lambda d: d.title,
        )

    def _file_title(self, path: Path) -> str:
        try:
            metadata, _ = self._read_metadata(path)
        except (OSError, UnicodeDecodeError, FrontmatterError) as e:
            logger.warning("Could not read frontmatter of %s: %s", path, e)
            return path.stem
        return title_from_metadata(metadata, path.stem)

    def _build_tree(self, directory: Path, base_slug: str) -> list[PageNode]:
        nodes: list[PageNode] = []
        for entry in directory.iterdir():
            if entry.is_dir():
                head_slug = f"{base_slug}/{entry.name}" if base_slug else entry.name
                nodes.append(
                    PageNode(
                        slug=head_slug,
                        # Directory name, not the title from its index.md.
                        title=entry.name,
                        kind="dir",
                        has_index=(entry / INDEX_FILENAME).is_file(),
                        children=self._build_tree(entry, head_slug),
                    )
                )
            elif (
                entry.is_file()
                and entry.name.endswith(MARKDOWN_SUFFIX)
                and not is_index_file(entry.name)
            ):
                slug = f"{base_slug}/{entry.stem}" if base_slug else entry.stem
                nodes.append(
                    PageNode(
                        slug=slug,
                        title=self._file_title(entry),
                        kind="file",
                        filename=entry.name,
                    )
                )
        return sort_by_order(
            nodes,
            self.order_store.names_for_directory(directory),
            key=lambda n: n.slug.rsplit("/", 1)[-1],
            title=lambda n: n.title,
        )

    def list_tree(self) -> list[PageNode]:
        """Directory/file tree; each directory sorted by its sidecar or the global `order` list."""
        if not self.content_dir.is_dir():
            logger.warning("Content directory %s does not exist", self.content_dir)
            return []
        return self._build_tree(self.content_dir, "")

    def exists(self, slug: str) -> bool:
        return self.path_for(slug).is_file()


def get_order_store() -> OrderStore:
    settings = get_settings()
    return OrderStore(settings.DATA_DIR, settings.CONTENT_DIR)


def get_document_repository() -> DocumentRepository:
    """Build a repository from settings. Cheap; used as a FastAPI dependency."""
    return DocumentRepository(get_settings().CONTENT_DIR, get_order_store())
