"""Renderer interface shared by all timeline outputs."""

from typing import Protocol

from doc_timeline.layout.engine import Layout


class NoOutputTargetError(RuntimeError):
    """Raised by a renderer that has nowhere to draw the timeline."""


class RendererSink(Protocol):
    def render(self, layout: Layout):
        """Draw the layout and return what was produced (path, text, ...).

        Raises:
            NoOutputTargetError: If there is no active output target.
        """
        ...


DATE_FORMAT = "%a %b %d %Y"


def format_date(when) -> str:
    """Human-readable date shown on timeline cards."""
    return when.strftime(DATE_FORMAT)
