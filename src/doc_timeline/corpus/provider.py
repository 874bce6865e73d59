"""Corpus provider — enumerate notes on disk.

Notes are identified by their path relative to the corpus root, in
POSIX form, so identifiers are stable across platforms.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentRef:
    """A note known to the corpus but not yet read."""

    doc_id: str
    path: Path

    @property
    def label(self) -> str:
        """Display name: the file name without extension."""
        return self.path.stem


@dataclass(frozen=True)
class Document:
    """A note that has been read, with its parsed frontmatter."""

    doc_id: str
    path: Path
    content: str
    metadata: dict
    created: datetime | None = None

    @property
    def label(self) -> str:
        return self.path.stem


class DirectoryCorpus:
    """Reads Markdown notes from a directory tree.

    Args:
        root: Directory to scan recursively.
        pattern: Glob pattern for note files.
    """

    def __init__(self, root: Path, pattern: str = "*.md"):
        self.root = Path(root)
        self.pattern = pattern

    def list_documents(self) -> list[DocumentRef]:
        """Enumerate matching notes in a stable (sorted) order."""
        if not self.root.is_dir():
            raise FileNotFoundError(f"Notes directory not found: {self.root}")
        paths = sorted(p for p in self.root.rglob(self.pattern) if p.is_file())
        logger.info(f"Found {len(paths)} notes under {self.root}")
        return [
            DocumentRef(doc_id=p.relative_to(self.root).as_posix(), path=p)
            for p in paths
        ]

    def read(self, ref: DocumentRef) -> str:
        """Read a note as UTF-8 text. Errors propagate to the caller."""
        return ref.path.read_text(encoding="utf-8")

    def created(self, ref: DocumentRef) -> datetime | None:
        """Creation time of a note, or None if the filesystem can't tell."""
        try:
            stats = ref.path.stat()
        except OSError as e:
            logger.debug(f"No stat for {ref.doc_id}: {e}")
            return None
        # st_birthtime exists on macOS/BSD; elsewhere fall back to st_ctime
        ts = getattr(stats, "st_birthtime", None) or stats.st_ctime
        if not ts:
            return None
        return datetime.fromtimestamp(ts, tz=timezone.utc)
