"""Standalone HTML timeline.

A central vertical line with note cards alternating left and right,
and a label for every year. Positions are percentages of the container
height, taken directly from the layout.
"""

import html
import logging
from pathlib import Path

from doc_timeline.layout.engine import Layout, PositionedItem, YearMarker
from doc_timeline.output.sink import NoOutputTargetError, format_date

logger = logging.getLogger(__name__)

TIMELINE_CSS = """
.timeline-container {
    position: relative;
    width: 80%;
    height: __HEIGHT__px;
    margin: 20px auto;
    padding: 40px 0;
}

/* Central vertical line */
.timeline-container::before {
    content: '';
    position: absolute;
    left: 50%;
    top: 0;
    bottom: 0;
    width: 4px;
    background: #ccc;
    transform: translateX(-50%);
}

.timeline-item {
    position: absolute;
    width: 45%;
    padding: 10px 20px;
    box-sizing: border-box;
}

.timeline-item.left {
    left: 0;
    text-align: right;
}

.timeline-item.right {
    left: 55%;
    text-align: left;
}

.timeline-item::before {
    content: '';
    position: absolute;
    top: 20px;
    width: 0;
    height: 0;
    border: 10px solid transparent;
}

.timeline-item.left::before {
    right: -20px;
    border-left-color: #fff;
}

.timeline-item.right::before {
    left: -20px;
    border-right-color: #fff;
}

.timeline-note {
    background-color: #fff;
    border: 1px solid #ddd;
    padding: 15px;
    border-radius: 5px;
    box-shadow: 0 2px 5px rgba(0,0,0,0.1);
    transition: transform 0.2s;
}

.timeline-note:hover {
    transform: scale(1.05);
}

.timeline-note h4 {
    margin: 0 0 5px 0;
    font-size: 16px;
}

.timeline-note p {
    margin: 0 0 5px 0;
    font-size: 12px;
    color: #555;
}

.timeline-note span {
    font-size: 10px;
    color: #999;
}

.year-label {
    position: absolute;
    left: 50%;
    transform: translateX(-50%) translateY(-50%);
    background: #f0f0f0;
    padding: 2px 8px;
    border-radius: 4px;
    font-size: 12px;
    color: #333;
}
"""

HTML_SHELL = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>__TITLE__</title>
<style>__CSS_BLOCK__</style>
</head>
<body>
<div class="timeline-container">
__BODY_MARKUP__
</div>
</body>
</html>
"""

# Container height grows with the number of cards so they have room
PX_PER_ITEM = 60
MIN_HEIGHT_PX = 600


def _year_label(marker: YearMarker) -> str:
    return f'<div class="year-label" style="top: {marker.position:.4f}%;">{marker.year}</div>'


def _item_card(entry: PositionedItem, link_root: Path | None) -> str:
    label = html.escape(entry.label)
    if link_root is not None:
        href = html.escape((link_root / entry.id).as_uri(), quote=True)
        label = f'<a href="{href}">{label}</a>'
    return (
        f'<div class="timeline-item {entry.side.value}" style="top: {entry.position:.4f}%;">'
        f'<div class="timeline-note" data-id="{html.escape(entry.id, quote=True)}">'
        f"<h4>{label}</h4>"
        f"<p>{html.escape(entry.snippet)}</p>"
        f"<span>{format_date(entry.date)}</span>"
        "</div></div>"
    )


def build_html(layout: Layout, title: str = "Document Timeline", link_root: Path | None = None) -> str:
    """Render a layout as a complete HTML document.

    Args:
        layout: The computed timeline.
        title: Page title.
        link_root: Absolute notes directory. When given, card titles link
            to the note files.
    """
    height = max(MIN_HEIGHT_PX, PX_PER_ITEM * len(layout.items))
    markup = "\n".join(
        [_year_label(m) for m in layout.year_markers]
        + [_item_card(entry, link_root) for entry in layout.items]
    )
    return (
        HTML_SHELL
        .replace("__TITLE__", html.escape(title))
        .replace("__CSS_BLOCK__", TIMELINE_CSS.replace("__HEIGHT__", str(height)))
        .replace("__BODY_MARKUP__", markup)
    )


class HtmlRenderer:
    """Writes the timeline to an HTML file."""

    def __init__(self, output_path: Path | None, title: str = "Document Timeline", link_root: Path | None = None):
        self.output_path = Path(output_path) if output_path is not None else None
        self.title = title
        self.link_root = link_root.resolve() if link_root is not None else None

    def render(self, layout: Layout) -> Path:
        if self.output_path is None:
            raise NoOutputTargetError("No output file configured for the HTML timeline")
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(
            build_html(layout, title=self.title, link_root=self.link_root), encoding="utf-8"
        )
        logger.info(f"Timeline written to {self.output_path}")
        return self.output_path
