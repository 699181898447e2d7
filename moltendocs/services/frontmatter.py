"""Parse and serialize the YAML frontmatter block at the top of markdown files."""

from __future__ import annotations

from typing import Any

import yaml

DELIMITER = "---"


class FrontmatterError(ValueError):
    """Raised when a frontmatter block exists but is not a YAML mapping."""


def parse_frontmatter(raw: str) -> tuple[dict[str, Any], str]:
    """
    Split raw file text into (metadata, body).

    The block must start on the first line with `---` and end at the next line
    that is exactly `---`. Files without a block return ({}, raw).
    """
    lines = raw.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n").rstrip() != DELIMITER:
        return {}, raw

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n").rstrip() == DELIMITER:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        # Opening delimiter without a closing one: treat the whole file as body.
        return {}, raw

    try:
        metadata = yaml.safe_load(block) if block.strip() else {}
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid frontmatter: {e}") from e
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise FrontmatterError("Frontmatter must be a mapping of key: value pairs")
    return metadata, body


def serialize_frontmatter(metadata: dict[str, Any], body: str) -> str:
    """Render metadata as a `---` delimited block followed by body. Empty metadata writes body only."""
    if not metadata:
        return body
    block = yaml.safe_dump(
        metadata,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    return f"{DELIMITER}\n{block}{DELIMITER}\n{body}"


def title_from_metadata(metadata: dict[str, Any], fallback: str) -> str:
    """Non-empty string title from metadata, stripped; fallback otherwise."""
    title = metadata.get("title")
    if isinstance(title, str) and title.strip():
        return title.strip()
    return fallback
