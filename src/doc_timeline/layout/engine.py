"""Date-based timeline layout.

Maps dated items onto a 0-100% vertical axis:

- Positions are proportional to time within the span of all items.
  By default the most recent item sits at 0% and the oldest at 100%.
- Items alternate between the left and right side of the axis.
- Overlapping items are pushed down by `threshold` until they clear
  every item placed before them. Placement is greedy and follows the
  sorted order, so the same input always gives the same layout.
- One year marker is placed at January 1 of every year in the span.

The computation is a single sequential pass over an in-memory list.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Sequence

from doc_timeline.config import SortOrder

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 2.0
AXIS_MIN = 0.0
AXIS_MAX = 100.0


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class TimedItem:
    """A selected note with its resolved date."""

    id: str
    date: datetime
    label: str
    snippet: str = ""


@dataclass(frozen=True)
class PositionedItem:
    """A TimedItem placed on the axis."""

    item: TimedItem
    position: float
    side: Side

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def date(self) -> datetime:
        return self.item.date

    @property
    def label(self) -> str:
        return self.item.label

    @property
    def snippet(self) -> str:
        return self.item.snippet

    @property
    def overflow(self) -> bool:
        """True if collision resolution pushed the item past the axis end."""
        return self.position > AXIS_MAX


@dataclass(frozen=True)
class YearMarker:
    year: int
    position: float


@dataclass(frozen=True)
class DateRange:
    """Earliest and latest date of one batch of items."""

    earliest: datetime
    latest: datetime

    @classmethod
    def from_items(cls, items: Iterable[TimedItem]) -> "DateRange":
        dates = [item.date for item in items]
        if not dates:
            raise ValueError("Cannot derive a date range from zero items")
        return cls(earliest=min(dates), latest=max(dates))

    @property
    def is_degenerate(self) -> bool:
        return self.latest == self.earliest

    @property
    def years(self) -> range:
        return range(self.earliest.year, self.latest.year + 1)


@dataclass
class Layout:
    """Result of laying out one batch: positioned items plus year markers."""

    items: list[PositionedItem]
    year_markers: list[YearMarker]
    date_range: DateRange
    order: SortOrder = SortOrder.DESCENDING
    threshold: float = DEFAULT_THRESHOLD
    overflowed: list[str] = field(default_factory=list)


def clamp(value: float, low: float = AXIS_MIN, high: float = AXIS_MAX) -> float:
    return min(max(value, low), high)


def compute_position(
    when: datetime,
    earliest: datetime,
    latest: datetime,
    order: SortOrder = SortOrder.DESCENDING,
) -> float:
    """Position of a timestamp on the axis, as a percentage.

    Args:
        when: Timestamp to place.
        earliest: Start of the date range.
        latest: End of the date range.
        order: DESCENDING puts `latest` at 0%, ASCENDING puts `earliest` there.

    Returns:
        A value in [0, 100]. A zero-length range places everything at 0.
    """
    total = (latest - earliest).total_seconds()
    if total == 0:
        return AXIS_MIN
    if SortOrder(order) is SortOrder.DESCENDING:
        elapsed = (latest - when).total_seconds()
    else:
        elapsed = (when - earliest).total_seconds()
    return clamp(elapsed / total * 100)


def adjust_position(
    candidate: float,
    occupied: Sequence[float],
    threshold: float = DEFAULT_THRESHOLD,
) -> float:
    """Push a position down until it clears every occupied position.

    Stops as soon as the candidate passes the end of the axis, so the
    result may exceed 100 or still sit within `threshold` of a
    neighbour. That overflow is accepted rather than treated as an error.
    """
    if threshold <= 0:
        raise ValueError(f"threshold must be positive, got {threshold}")
    position = candidate
    while any(abs(p - position) < threshold for p in occupied):
        position += threshold
        if position > AXIS_MAX:
            break
    return position


def sort_items(
    items: Iterable[TimedItem], order: SortOrder = SortOrder.DESCENDING
) -> list[TimedItem]:
    """Sort by date; equal dates keep their input order."""
    # sorted() stays stable with reverse=True
    return sorted(items, key=lambda i: i.date, reverse=SortOrder(order) is SortOrder.DESCENDING)


def year_markers(date_range: DateRange, order: SortOrder = SortOrder.DESCENDING) -> list[YearMarker]:
    """One marker per calendar year, placed at its January 1."""
    tz = date_range.earliest.tzinfo
    return [
        YearMarker(
            year=year,
            position=compute_position(
                datetime(year, 1, 1, tzinfo=tz),
                date_range.earliest,
                date_range.latest,
                order,
            ),
        )
        for year in date_range.years
    ]


def build_layout(
    items: Iterable[TimedItem],
    threshold: float = DEFAULT_THRESHOLD,
    order: SortOrder = SortOrder.DESCENDING,
) -> Layout:
    """Lay out a batch of dated items.

    Args:
        items: Items in any order; they are sorted here.
        threshold: Minimum spacing between items, in percent.
        order: Axis direction (most recent first by default).

    Returns:
        The full layout. Items appear in placement order.

    Raises:
        ValueError: If `items` is empty or `threshold` is not positive.
    """
    if threshold <= 0:
        raise ValueError(f"threshold must be positive, got {threshold}")
    ordered = sort_items(items, order)
    date_range = DateRange.from_items(ordered)
    logger.info(
        f"Date range: {date_range.earliest.date()} to {date_range.latest.date()} "
        f"({len(ordered)} items)"
    )

    placed: list[PositionedItem] = []
    occupied: list[float] = []
    overflowed: list[str] = []
    for index, item in enumerate(ordered):
        side = Side.LEFT if index % 2 == 0 else Side.RIGHT
        raw = compute_position(item.date, date_range.earliest, date_range.latest, order)
        position = adjust_position(raw, occupied, threshold)
        occupied.append(position)
        if position != raw:
            logger.debug(f"Moved {item.id} from {raw:.2f}% to {position:.2f}%")
        if position > AXIS_MAX:
            overflowed.append(item.id)
        placed.append(PositionedItem(item=item, position=position, side=side))

    if overflowed:
        logger.warning(f"{len(overflowed)} items pushed past the end of the timeline")

    return Layout(
        items=placed,
        year_markers=year_markers(date_range, order),
        date_range=date_range,
        order=SortOrder(order),
        threshold=threshold,
        overflowed=overflowed,
    )
