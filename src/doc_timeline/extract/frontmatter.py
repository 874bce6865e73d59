"""Frontmatter and snippet extraction for Markdown notes.

A note may start with a YAML block fenced by lines of three dashes:

    ---
    tags: [timeline, work]
    creation_date: 2023-06-01
    ---

Malformed blocks never fail the extraction; they yield empty metadata
so selection can still fall back to inline tags and file dates.
"""

import logging
import re
from typing import Any

import yaml

logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r"^---\r?\n(.*?)\r?\n---", re.DOTALL)
FRONTMATTER_BLOCK_RE = re.compile(r"^---\r?\n(.*?)\r?\n---\r?\n", re.DOTALL)

DEFAULT_SNIPPET_LENGTH = 100


def extract_frontmatter(content: str) -> dict[str, Any]:
    """Parse the leading YAML block of a note.

    Args:
        content: Raw note text.

    Returns:
        The parsed mapping, or an empty dict if there is no block, the
        YAML is malformed, or it does not parse to a mapping.
    """
    match = FRONTMATTER_RE.match(content)
    if not match:
        return {}
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse frontmatter: {e}")
        return {}
    if not isinstance(data, dict):
        if data is not None:
            logger.debug(f"Frontmatter is {type(data).__name__}, not a mapping")
        return {}
    return data


def strip_frontmatter(content: str) -> str:
    """Remove the leading YAML block (and its closing newline) from a note."""
    return FRONTMATTER_BLOCK_RE.sub("", content, count=1)


def extract_snippet(content: str, max_length: int = DEFAULT_SNIPPET_LENGTH) -> str:
    """Build a short preview from the first two non-empty body lines.

    Args:
        content: Raw note text, frontmatter included.
        max_length: Longer previews are cut here and get a "..." suffix.

    Returns:
        The preview text.
    """
    body = strip_frontmatter(content)
    lines = [line for line in body.splitlines() if line.strip()]
    snippet = " ".join(lines[:2])
    if len(snippet) > max_length:
        return snippet[:max_length] + "..."
    return snippet
