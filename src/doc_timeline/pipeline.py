"""Timeline application — wires the collaborators and runs one batch.

Run stages:
1. Enumerate notes and read them concurrently (content, frontmatter,
   creation time). A note that fails to read is recorded and skipped.
2. Wait for every read, then select notes carrying the tag.
3. Resolve one date per selected note and build the TimedItems.
4. Lay the items out and hand the layout to the renderer.

Nothing is cached between runs. Settings are loaded at init() and
passed explicitly into every stage.
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any

from tqdm import tqdm

from doc_timeline.config import TimelineSettings
from doc_timeline.corpus.provider import Document, DocumentRef
from doc_timeline.dates.resolver import resolve_date
from doc_timeline.extract.frontmatter import extract_frontmatter, extract_snippet
from doc_timeline.layout.engine import Layout, TimedItem, build_layout
from doc_timeline.output.sink import NoOutputTargetError, RendererSink
from doc_timeline.selection.selector import select_documents
from doc_timeline.settings import load_settings, save_settings

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 8

STATUS_RENDERED = "rendered"
STATUS_EMPTY = "empty"
STATUS_NO_OUTPUT = "no_output_target"

NOTICE_EMPTY = "No files found with the specified tag."
NOTICE_NO_OUTPUT = "Unable to open an output target for the timeline."


@dataclass
class RunReport:
    """Outcome of one timeline run."""

    status: str
    total: int = 0
    matched: list[str] = field(default_factory=list)
    failures: list[dict] = field(default_factory=list)
    date_sources: dict[str, int] = field(default_factory=dict)
    layout: Layout | None = None
    artifact: Any = None
    notice: str | None = None

    @property
    def rendered(self) -> bool:
        return self.status == STATUS_RENDERED


class TimelineApp:
    """Document timeline with an explicit init/shutdown lifecycle.

    Args:
        corpus: Provides list_documents(), read(ref) and created(ref).
        sink: Renderer with render(layout); None means no output target.
        settings_store: Key-value store with load() and save(values).
        num_workers: Threads used to read notes.
        progress: Show a tqdm progress bar while reading.
    """

    def __init__(
        self,
        corpus,
        sink: RendererSink | None,
        settings_store,
        num_workers: int = DEFAULT_WORKERS,
        progress: bool = True,
    ):
        self.corpus = corpus
        self.sink = sink
        self.settings_store = settings_store
        self.num_workers = num_workers
        self.progress = progress
        self.settings: TimelineSettings | None = None

    # ------------------------------------------------------------------ #
    #  Lifecycle                                                          #
    # ------------------------------------------------------------------ #

    def init(self) -> "TimelineApp":
        logger.info("Loading document timeline")
        self.settings = load_settings(self.settings_store)
        return self

    def shutdown(self) -> None:
        logger.info("Unloading document timeline")
        self.settings = None

    def __enter__(self) -> "TimelineApp":
        return self.init()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def _require_init(self) -> TimelineSettings:
        if self.settings is None:
            raise RuntimeError("TimelineApp.init() must be called before use")
        return self.settings

    def update_settings(self, **changes) -> TimelineSettings:
        """Validate and persist new settings values.

        Raises:
            pydantic.ValidationError: If a value is invalid.
        """
        current = self._require_init()
        updated = TimelineSettings.model_validate({**current.model_dump(), **changes})
        save_settings(self.settings_store, updated)
        self.settings = updated
        return updated

    # ------------------------------------------------------------------ #
    #  Run                                                                #
    # ------------------------------------------------------------------ #

    def _load_document(self, ref: DocumentRef) -> Document:
        content = self.corpus.read(ref)
        return Document(
            doc_id=ref.doc_id,
            path=ref.path,
            content=content,
            metadata=extract_frontmatter(content),
            created=self.corpus.created(ref),
        )

    def load_documents(self, refs: list[DocumentRef]) -> tuple[list[Document], list[dict]]:
        """Read all notes concurrently and join the results.

        Returns:
            (documents in corpus order, failures as {"doc_id", "error"} dicts)
        """
        loaded: dict[int, Document] = {}
        failures: list[dict] = []
        if not refs:
            return [], failures

        with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
            futures = {
                executor.submit(self._load_document, ref): (index, ref)
                for index, ref in enumerate(refs)
            }
            with tqdm(total=len(refs), desc="Reading notes", disable=not self.progress) as pbar:
                for future in as_completed(futures):
                    index, ref = futures[future]
                    try:
                        loaded[index] = future.result()
                    except (OSError, UnicodeDecodeError) as e:
                        logger.warning(f"Skipping {ref.doc_id}: {e}")
                        failures.append({"doc_id": ref.doc_id, "error": str(e)})
                    pbar.update(1)

        # as_completed yields in finish order; restore corpus order
        documents = [loaded[i] for i in sorted(loaded)]
        failures.sort(key=lambda f: f["doc_id"])
        return documents, failures

    def build_items(self, documents: list[Document], settings: TimelineSettings) -> tuple[list[TimedItem], Counter]:
        """Resolve dates and snippets for the selected notes."""
        items = []
        sources: Counter = Counter()
        for doc in documents:
            resolution = resolve_date(doc.metadata, settings.date_property, doc.created)
            sources[resolution.source.value] += 1
            logger.debug(f"Date for {doc.doc_id}: {resolution.date} ({resolution.source.value})")
            items.append(
                TimedItem(
                    id=doc.doc_id,
                    date=resolution.date,
                    label=doc.label,
                    snippet=extract_snippet(doc.content, settings.snippet_length),
                )
            )
        return items, sources

    def run(self, settings: TimelineSettings | None = None) -> RunReport:
        """Build and render the timeline once.

        Args:
            settings: Overrides the loaded settings for this run only.
        """
        settings = settings or self._require_init()
        logger.info("Render timeline triggered")

        refs = self.corpus.list_documents()
        documents, failures = self.load_documents(refs)
        report = RunReport(status=STATUS_EMPTY, total=len(refs), failures=failures)

        selected = select_documents(documents, settings.tag, settings.search_in)
        report.matched = [doc.doc_id for doc in selected]
        if not selected:
            report.notice = NOTICE_EMPTY
            logger.info("No files matched the tag.")
            return report

        items, sources = self.build_items(selected, settings)
        report.date_sources = dict(sources)
        layout = build_layout(items, threshold=settings.threshold, order=settings.order)

        if self.sink is None:
            report.status = STATUS_NO_OUTPUT
            report.notice = NOTICE_NO_OUTPUT
            logger.info("No output target to render the timeline.")
            return report
        try:
            report.artifact = self.sink.render(layout)
        except NoOutputTargetError as e:
            report.status = STATUS_NO_OUTPUT
            report.notice = NOTICE_NO_OUTPUT
            logger.info(f"No output target to render the timeline: {e}")
            return report

        report.status = STATUS_RENDERED
        report.layout = layout
        return report
