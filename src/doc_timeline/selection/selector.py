"""Select notes carrying the configured tag.

Tags are looked up in two places:
1. Frontmatter `tags` field: a YAML list or a comma-separated string,
   compared against the tag with its leading '#' removed.
2. Inline content: a plain substring search for the tag exactly as
   configured, '#' included.

In `both` mode the frontmatter check runs first and the inline search
only runs when it did not match.
"""

import logging
from typing import Any, Iterable

from doc_timeline.config import SearchMode

logger = logging.getLogger(__name__)

TAGS_FIELD = "tags"


def normalize_tag(tag: str) -> str:
    """Strip a single leading '#' from a tag."""
    return tag[1:] if tag.startswith("#") else tag


def _metadata_tags(value: Any) -> list[str]:
    if isinstance(value, list):
        return [t for t in value if isinstance(t, str)]
    if isinstance(value, str):
        return [t.strip() for t in value.split(",")]
    return []


def has_metadata_tag(metadata: dict, tag: str) -> bool:
    """True if the frontmatter tag list contains the normalized tag."""
    value = metadata.get(TAGS_FIELD)
    if not value:
        return False
    return normalize_tag(tag) in _metadata_tags(value)


def has_inline_tag(content: str, tag: str) -> bool:
    """True if the raw content contains the tag as configured."""
    return bool(tag) and tag in content


def matches_tag(content: str, metadata: dict, tag: str, mode: SearchMode) -> bool:
    """Decide whether one note carries the tag under the given search mode."""
    mode = SearchMode(mode)
    found = False
    if mode in (SearchMode.METADATA, SearchMode.BOTH):
        found = has_metadata_tag(metadata, tag)
    if not found and mode in (SearchMode.INLINE, SearchMode.BOTH):
        found = has_inline_tag(content, tag)
    return found


def select_documents(documents: Iterable, tag: str, mode: SearchMode) -> list:
    """Filter documents down to those carrying the tag.

    Args:
        documents: Objects with `content` and `metadata` attributes.
        tag: Tag as configured, with or without a leading '#'.
        mode: Where to look for the tag.

    Returns:
        Matching documents, in input order. May be empty.
    """
    selected = []
    for doc in documents:
        if matches_tag(doc.content, doc.metadata, tag, mode):
            selected.append(doc)
            logger.debug(f"Selected {doc.doc_id}")
    logger.info(f"Notes matching {tag!r} ({SearchMode(mode).value}): {len(selected)}")
    return selected
