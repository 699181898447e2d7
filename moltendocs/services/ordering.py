"""Manual ordering records and the sort rule shared by the document listings.

Two records exist:

- the global record `<DATA_DIR>/order.json`: `documents` holds full slugs
  for the flat listing, `order` holds entry names used by the tree when a
  directory has no sidecar;
- per-directory sidecars `<dir>/_order.json` with an `order` array of
  entry names (file stems or subdirectory names) for that directory.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any, TypeVar

from moltendocs.core.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)

GLOBAL_ORDER_FILENAME = "order.json"
DIRECTORY_ORDER_FILENAME = "_order.json"

T = TypeVar("T")


def sort_by_order(
    entries: Iterable[T],
    order: Sequence[str],
    key: Callable[[T], str],
    title: Callable[[T], str],
) -> list[T]:
    """
    Sort entries by their position in `order`.

    Entries whose key is not listed go after all listed ones, alphabetically
    by title (case-insensitive); the key breaks remaining ties.
    """
    positions: dict[str, int] = {}
    for index, name in enumerate(order):
        positions.setdefault(name, index)

    def sort_key(entry: T) -> tuple[int, int, str, str]:
        k = key(entry)
        if k in positions:
            return (0, positions[k], "", k)
        return (1, 0, title(entry).casefold(), k)

    return sorted(entries, key=sort_key)


def _string_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def _read_json_object(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable order file %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring order file %s: expected a JSON object", path)
        return None
    return data


def _write_json_object(path: Path, data: dict[str, Any]) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def validate_order_list(value: Any, field: str) -> list[str]:
    """Require a JSON array of strings; raises InvalidArgumentError otherwise."""
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise InvalidArgumentError(f"{field} must be an array of strings")
    return list(value)


class OrderStore:
    """Reads and writes order records. Nothing is cached: files are re-read on every call."""

    def __init__(self, data_dir: Path | str, content_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        self.content_dir = Path(content_dir)

    @property
    def global_path(self) -> Path:
        return self.data_dir / GLOBAL_ORDER_FILENAME

    def global_documents(self) -> list[str]:
        """Slugs listed under `documents` in the global record (empty if none)."""
        data = _read_json_object(self.global_path) or {}
        return _string_list(data.get("documents")) or []

    def global_names(self) -> list[str]:
        """Entry names listed under `order` in the global record (empty if none)."""
        data = _read_json_object(self.global_path) or {}
        return _string_list(data.get("order")) or []

    def directory_order(self, directory: Path) -> list[str] | None:
        """The sidecar order of one directory, or None when it has no usable sidecar."""
        data = _read_json_object(directory / DIRECTORY_ORDER_FILENAME)
        if data is None:
            return None
        return _string_list(data.get("order"))

    def names_for_directory(self, directory: Path) -> list[str]:
        """Sidecar order if present, else the global `order` list."""
        local = self.directory_order(directory)
        if local is not None:
            return local
        return self.global_names()

    def save_global_documents(self, documents: list[str]) -> None:
        """Replace the `documents` list of the global record, keeping any `order` list."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        data = _read_json_object(self.global_path) or {}
        data["documents"] = documents
        _write_json_object(self.global_path, data)

    def save_directory_order(self, dir_slug: str | None, order: list[str]) -> Path:
        """
        Write `{"order": [...]}` to the sidecar of a content directory.

        dir_slug is relative to the content root; empty means the root itself.
        Raises NotFoundError if the directory does not exist.
        """
        root = self.content_dir.resolve()
        parts = [p for p in (dir_slug or "").split("/") if p]
        if any(p in (".", "..") or "\\" in p or "\x00" in p for p in parts):
            raise InvalidArgumentError("Invalid directory")
        target = root.joinpath(*parts).resolve()
        if target != root and not target.is_relative_to(root):
            raise InvalidArgumentError("Invalid directory")
        if not target.is_dir():
            raise NotFoundError("Directory not found")
        path = target / DIRECTORY_ORDER_FILENAME
        _write_json_object(path, {"order": order})
        return path
