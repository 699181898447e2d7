"""Tests for moltendocs.services.documents against a temporary content root."""

import json
import os
import tempfile
import unittest
from pathlib import Path

from moltendocs.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from moltendocs.services.documents import DocumentRepository, extract_excerpt, split_slug
from moltendocs.services.ordering import OrderStore


class RepositoryTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.content_dir = root / "content"
        self.data_dir = root / "data"
        self.content_dir.mkdir()
        self.repo = DocumentRepository(self.content_dir, OrderStore(self.data_dir, self.content_dir))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def write(self, relative: str, text: str) -> Path:
        path = self.content_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def write_global_order(self, **data: list[str]) -> None:
        self.data_dir.mkdir(exist_ok=True)
        (self.data_dir / "order.json").write_text(json.dumps(data), encoding="utf-8")


class TestSplitSlug(unittest.TestCase):
    def test_drops_empty_segments(self) -> None:
        self.assertEqual(split_slug("/guide//intro/"), ["guide", "intro"])

    def test_rejects_empty_and_traversal(self) -> None:
        for bad in ("", "/", "..", "guide/../../etc", "./x", "a\\b", "a\x00b"):
            with self.subTest(slug=bad), self.assertRaises(InvalidArgumentError):
                split_slug(bad)


class TestExtractExcerpt(unittest.TestCase):
    def test_first_paragraph_without_heading_marker(self) -> None:
        self.assertEqual(extract_excerpt("## Overview\n\nSecond paragraph"), "Overview")

    def test_plain_paragraph(self) -> None:
        self.assertEqual(extract_excerpt("\n\nShort intro.\n\nMore."), "Short intro.")

    def test_too_long_or_empty_is_dropped(self) -> None:
        self.assertIsNone(extract_excerpt("x" * 200))
        self.assertIsNone(extract_excerpt(""))
        self.assertIsNone(extract_excerpt("#"))


class TestCreate(RepositoryTestCase):
    def test_writes_title_and_extra_frontmatter(self) -> None:
        path = self.repo.create("guide/intro", "Intro", "Hello", {"author": "Ada"})
        self.assertEqual(path, "/guide/intro.md")
        document = self.repo.read("guide/intro")
        self.assertEqual(document.frontmatter, {"title": "Intro", "author": "Ada"})
        self.assertEqual(document.content, "Hello")

    def test_existing_slug_conflicts_and_file_is_untouched(self) -> None:
        original = self.write("intro.md", "---\ntitle: Original\n---\nkeep me")
        with self.assertRaises(ConflictError):
            self.repo.create("intro", "Replacement", "new body")
        self.assertEqual(original.read_text(encoding="utf-8"), "---\ntitle: Original\n---\nkeep me")

    def test_rejects_traversal(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            self.repo.create("../outside", "Nope", "")
        self.assertFalse((self.content_dir.parent / "outside.md").exists())

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks not supported")
    def test_rejects_symlinked_directory_leaving_root(self) -> None:
        outside = self.content_dir.parent / "outside"
        outside.mkdir()
        (outside / "secret.md").write_text("secret", encoding="utf-8")
        try:
            os.symlink(outside, self.content_dir / "link", target_is_directory=True)
        except OSError as e:
            self.skipTest(f"cannot create symlink: {e}")

        with self.assertRaises(InvalidArgumentError):
            self.repo.read("link/secret")
        with self.assertRaises(InvalidArgumentError):
            self.repo.create("link/new", "New", "")
        self.assertFalse((outside / "new.md").exists())


class TestReadUpdateDelete(RepositoryTestCase):
    def test_update_then_read_round_trip(self) -> None:
        self.repo.update("notes/today", {"title": "T"}, "body")
        document = self.repo.read("notes/today")
        self.assertEqual(document.frontmatter["title"], "T")
        self.assertEqual(document.content, "body")
        self.assertEqual(document.raw_content, "---\ntitle: T\n---\nbody")

    def test_update_without_frontmatter_writes_body_only(self) -> None:
        self.repo.update("plain", {}, "# Plain\n")
        self.assertEqual((self.content_dir / "plain.md").read_text(encoding="utf-8"), "# Plain\n")
        self.repo.update("plain", None, "again")
        self.assertEqual(self.repo.read("plain").content, "again")

    def test_update_is_upsert(self) -> None:
        self.assertFalse((self.content_dir / "new" / "page.md").exists())
        self.repo.update("new/page", {"title": "New"}, "x")
        self.assertTrue((self.content_dir / "new" / "page.md").exists())

    def test_update_rejects_non_string_content(self) -> None:
        for content in (None, 42, ["a"], {"a": 1}):
            with self.subTest(content=content), self.assertRaises(InvalidArgumentError):
                self.repo.update("page", {"title": "T"}, content)
        self.assertFalse((self.content_dir / "page.md").exists())

    def test_read_missing(self) -> None:
        with self.assertRaises(NotFoundError):
            self.repo.read("missing")

    def test_delete(self) -> None:
        self.write("guide/intro.md", "x")
        self.repo.delete("guide/intro")
        self.assertFalse((self.content_dir / "guide" / "intro.md").exists())
        # Parent directory is kept.
        self.assertTrue((self.content_dir / "guide").is_dir())

    def test_delete_missing(self) -> None:
        with self.assertRaises(NotFoundError):
            self.repo.delete("missing")


class TestListFlat(RepositoryTestCase):
    def test_order_record_then_alphabetical(self) -> None:
        for name in ("a", "b", "c"):
            self.write(f"{name}.md", f"---\ntitle: {name}\n---\n")
        self.write_global_order(documents=["b", "a"])
        self.assertEqual([d.slug for d in self.repo.list_flat()], ["b", "a", "c"])

    def test_unlisted_sorted_by_title(self) -> None:
        self.write("one.md", "---\ntitle: Zulu\n---\n")
        self.write("two.md", "---\ntitle: alpha\n---\n")
        self.write("three.md", "no frontmatter")
        self.assertEqual([d.slug for d in self.repo.list_flat()], ["two", "three", "one"])

    def test_skips_index_and_non_markdown(self) -> None:
        self.write("guide/index.md", "---\ntitle: Guide\n---\n")
        self.write("guide/setup.md", "---\ntitle: Setup\n---\n")
        self.write("guide/_order.json", "{}")
        self.write("notes.txt", "x")
        documents = self.repo.list_flat()
        self.assertEqual([d.slug for d in documents], ["guide/setup"])

    def test_uppercase_index_is_skipped(self) -> None:
        self.write("Index.md", "x")
        self.write("page.md", "x")
        self.assertEqual([d.slug for d in self.repo.list_flat()], ["page"])

    def test_summary_fields(self) -> None:
        self.write("guide/setup.md", "---\ntitle: Setup\n---\n# Install\n\nRun the installer.")
        (document,) = self.repo.list_flat()
        self.assertEqual(document.title, "Setup")
        self.assertEqual(document.excerpt, "Install")
        self.assertIsNotNone(document.last_modified)
        self.assertIsNotNone(document.last_modified.tzinfo)

    def test_title_falls_back_to_filename(self) -> None:
        self.write("getting-started.md", "Body only")
        self.write("broken.md", "---\ntitle: [oops\n---\nbody")
        titles = {d.slug: d.title for d in self.repo.list_flat()}
        self.assertEqual(titles, {"getting-started": "getting-started", "broken": "broken"})

    def test_missing_content_dir(self) -> None:
        repo = DocumentRepository(self.content_dir / "nope", OrderStore(self.data_dir, self.content_dir))
        self.assertEqual(repo.list_flat(), [])
        self.assertEqual(repo.list_tree(), [])


class TestListTree(RepositoryTestCase):
    def test_dirs_and_files(self) -> None:
        self.write("guide/index.md", "---\ntitle: The Guide\n---\n")
        self.write("guide/setup.md", "---\ntitle: Setup\n---\n")
        self.write("api/endpoints.md", "")
        self.write("about.md", "---\ntitle: About\n---\n")

        tree = {node.slug: node for node in self.repo.list_tree()}
        self.assertEqual(set(tree), {"guide", "api", "about"})

        guide = tree["guide"]
        self.assertEqual(guide.kind, "dir")
        self.assertTrue(guide.has_index)
        # Directory titles are the directory name, not the index.md title.
        self.assertEqual(guide.title, "guide")
        self.assertEqual([c.slug for c in guide.children], ["guide/setup"])
        self.assertEqual(guide.children[0].filename, "setup.md")

        self.assertFalse(tree["api"].has_index)
        self.assertEqual(tree["about"].kind, "file")
        self.assertEqual(tree["about"].title, "About")

    def test_directory_sidecar_orders_children(self) -> None:
        self.write("guide/a.md", "---\ntitle: A\n---\n")
        self.write("guide/b.md", "---\ntitle: B\n---\n")
        self.write("guide/c.md", "---\ntitle: C\n---\n")
        self.write("guide/_order.json", json.dumps({"order": ["c", "a"]}))
        (guide,) = self.repo.list_tree()
        self.assertEqual([c.slug for c in guide.children], ["guide/c", "guide/a", "guide/b"])

    def test_global_names_used_without_sidecar(self) -> None:
        self.write("zeta/page.md", "")
        self.write("alpha/page.md", "")
        self.write("middle.md", "")
        self.write_global_order(order=["zeta"])
        self.assertEqual([n.slug for n in self.repo.list_tree()], ["zeta", "alpha", "middle"])

    def test_default_order_is_title(self) -> None:
        self.write("x.md", "---\ntitle: Beta\n---\n")
        self.write("y.md", "---\ntitle: alpha\n---\n")
        self.assertEqual([n.slug for n in self.repo.list_tree()], ["y", "x"])


if __name__ == "__main__":
    unittest.main()
