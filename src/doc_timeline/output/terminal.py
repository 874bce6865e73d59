"""Terminal timeline using rich.

Rows follow axis position. Year markers go in the middle column and
notes in the left or right column according to their side.
"""

import logging

from rich.console import Console
from rich.table import Table
from rich.text import Text

from doc_timeline.layout.engine import Layout, Side
from doc_timeline.output.sink import NoOutputTargetError, format_date

logger = logging.getLogger(__name__)


def _note_cell(entry) -> Text:
    cell = Text()
    cell.append(entry.label, style="bold")
    if entry.snippet:
        cell.append(f"\n{entry.snippet}", style="dim")
    cell.append(f"\n{format_date(entry.date)}", style="cyan")
    if entry.overflow:
        cell.append("  (overflow)", style="yellow")
    return cell


def build_table(layout: Layout) -> Table:
    """Arrange year markers and notes into a three-column table."""
    table = Table(show_header=True, header_style="bold", expand=True, show_lines=False)
    table.add_column("Left", justify="right", ratio=4)
    table.add_column("Axis", justify="center", ratio=1)
    table.add_column("Right", justify="left", ratio=4)

    # Year markers sort before notes at the same position
    rows = [(m.position, 0, m) for m in layout.year_markers]
    rows += [(entry.position, 1, entry) for entry in layout.items]
    rows.sort(key=lambda r: (r[0], r[1]))

    for position, kind, obj in rows:
        if kind == 0:
            table.add_row("", Text(str(obj.year), style="reverse"), "")
            continue
        axis = Text(f"{position:5.1f}%", style="dim")
        if obj.side is Side.LEFT:
            table.add_row(_note_cell(obj), axis, "")
        else:
            table.add_row("", axis, _note_cell(obj))
    return table


class TerminalRenderer:
    """Prints the timeline to a rich console."""

    def __init__(self, console: Console | None):
        self.console = console

    def render(self, layout: Layout) -> Table:
        if self.console is None:
            raise NoOutputTargetError("No console available for the terminal timeline")
        table = build_table(layout)
        self.console.print(table)
        logger.debug(f"Printed timeline with {len(layout.items)} notes")
        return table
