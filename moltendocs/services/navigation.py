"""Sidebar tree, section-local "next" links and public page resolution."""

from __future__ import annotations

import logging

from moltendocs.core.errors import NotFoundError
from moltendocs.schemas.documents import DocPage, PageNode
from moltendocs.services.documents import INDEX_STEM, DocumentRepository, split_slug
from moltendocs.services.frontmatter import FrontmatterError, title_from_metadata

logger = logging.getLogger(__name__)


def flatten_section(section: PageNode) -> list[str]:
    """
    Reading order of a top-level section.

    The section's own slug comes first when it has an index document, then
    every file node depth-first in display order.
    """
    flat: list[str] = []
    if section.has_index:
        flat.append(section.slug)

    def walk(nodes: list[PageNode]) -> None:
        for node in nodes:
            if node.kind == "file":
                flat.append(node.slug)
            if node.children:
                walk(node.children)

    walk(section.children or [])
    return flat


class NavigationBuilder:
    """Derived views over a DocumentRepository. The filesystem is read on every call."""

    def __init__(self, repository: DocumentRepository) -> None:
        self.repository = repository

    def build_tree(self) -> list[PageNode]:
        return self.repository.list_tree()

    def next_in_section(self, slug: str, tree: list[PageNode] | None = None) -> str | None:
        """Slug following `slug` within its top-level section, or None if it is last or absent."""
        head_slug = split_slug(slug)[0]
        pages = tree if tree is not None else self.build_tree()
        section = next((p for p in pages if p.slug == head_slug), None)
        if section is None:
            return None
        flat = flatten_section(section)
        normalized = "/".join(split_slug(slug))
        if normalized not in flat:
            return None
        index = flat.index(normalized)
        if index < len(flat) - 1:
            return flat[index + 1]
        return None

    def resolve_page(self, slug: str) -> DocPage:
        """
        Load a public page.

        A single-segment slug whose directory has an index.md resolves to that
        landing document; everything else maps to `<slug>.md`.
        """
        parts = split_slug(slug)
        normalized = "/".join(parts)
        target = normalized
        if len(parts) == 1:
            index_slug = f"{parts[0]}/{INDEX_STEM}"
            if self.repository.exists(index_slug):
                target = index_slug
        try:
            document = self.repository.read(target)
        except NotFoundError:
            raise NotFoundError("Page not found") from None
        except FrontmatterError as e:
            # Same fallback as the listings: no metadata, whole file as body.
            logger.warning("Could not read frontmatter of %s: %s", target, e)
            metadata, content = {}, self.repository.path_for(target).read_text(encoding="utf-8")
        else:
            metadata, content = document.frontmatter, document.content
        tree = self.build_tree()
        return DocPage(
            slug=normalized,
            title=title_from_metadata(metadata, normalized),
            content=content,
            next_slug=self.next_in_section(normalized, tree),
        )
