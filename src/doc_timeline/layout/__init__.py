"""Timeline layout engine.

Key names:
- build_layout: position a batch of TimedItems and compute year markers
- compute_position / adjust_position: the placement and collision rules
"""

from doc_timeline.layout.engine import (
    DEFAULT_THRESHOLD,
    DateRange,
    Layout,
    PositionedItem,
    Side,
    TimedItem,
    YearMarker,
    adjust_position,
    build_layout,
    compute_position,
    sort_items,
    year_markers,
)

__all__ = [
    "DEFAULT_THRESHOLD",
    "DateRange",
    "Layout",
    "PositionedItem",
    "Side",
    "TimedItem",
    "YearMarker",
    "adjust_position",
    "build_layout",
    "compute_position",
    "sort_items",
    "year_markers",
]
