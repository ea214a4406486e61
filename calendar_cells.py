"""Calendar cell derivation — grid, range classification and cell records.

``build_calendar`` is a pure function of its inputs: it enumerates the
weeks covering a month, classifies every date against the primary and the
secondary range and returns one immutable ``CellDescriptor`` per grid
position. Interaction hooks are plain data (date + input snapshot) that the
rendering layer fires later; nothing is called while building.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from calendar_logic import SUNDAY, month_dates, normalize_month

logger = logging.getLogger(__name__)

DateCallback = Callable[[date], None]


def _ignore(_day: date) -> None:
    pass


class SelectionMode(enum.Enum):
    """Which endpoint of which range the next click assigns."""

    PRIMARY_START = "primary_start"
    PRIMARY_END = "primary_end"
    SECONDARY_START = "secondary_start"
    SECONDARY_END = "secondary_end"


class BoundaryRole(enum.Enum):
    START = "start"
    END = "end"
    INSIDE = "inside"
    NONE = "none"


@dataclass(frozen=True)
class DateRange:
    """Pair of optional endpoints. Ordering is the caller's business."""

    start: date | None = None
    end: date | None = None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None


@dataclass(frozen=True)
class RangeClass:
    """Classification of one date against one range."""

    role: BoundaryRole = BoundaryRole.NONE

    @property
    def is_in_range(self) -> bool:
        return self.role is not BoundaryRole.NONE


@dataclass(frozen=True)
class CalendarInput:
    """Immutable snapshot of everything one build depends on."""

    year: int
    month: int
    primary_range: DateRange = DateRange()
    secondary_range: DateRange = DateRange()
    hovering_date: date | None = None
    selection_mode: SelectionMode = SelectionMode.PRIMARY_START
    on_date_click: DateCallback = field(default=_ignore, compare=False)
    on_date_hover_enter: DateCallback = field(default=_ignore, compare=False)
    on_date_hover_leave: DateCallback = field(default=_ignore, compare=False)
    week_start: int = SUNDAY


class HookKind(enum.Enum):
    CLICK = "click"
    HOVER_ENTER = "hover_enter"
    HOVER_LEAVE = "hover_leave"


@dataclass(frozen=True)
class CellHook:
    """A deferred interaction: which callback, for which date, from which build."""

    kind: HookKind
    date: date
    snapshot: CalendarInput = field(repr=False, compare=False)
    is_in_month: bool = True

    @property
    def is_active(self) -> bool:
        """Filler days only ever dispatch clicks."""
        return self.kind is HookKind.CLICK or self.is_in_month

    def fire(self) -> None:
        if not self.is_active:
            return
        if self.kind is HookKind.CLICK:
            self.snapshot.on_date_click(self.date)
        elif self.kind is HookKind.HOVER_ENTER:
            self.snapshot.on_date_hover_enter(self.date)
        else:
            self.snapshot.on_date_hover_leave(self.date)

    __call__ = fire


@dataclass(frozen=True)
class CellDescriptor:
    """Everything a renderer needs to paint and wire one grid cell."""

    date: date
    is_in_month: bool
    primary: RangeClass
    secondary: RangeClass
    is_in_both: bool
    is_hovered: bool
    on_click: CellHook = field(repr=False)
    on_hover_enter: CellHook = field(repr=False)
    on_hover_leave: CellHook = field(repr=False)

    @property
    def boundary_role(self) -> BoundaryRole:
        return self.primary.role

    @property
    def is_in_primary(self) -> bool:
        return self.primary.is_in_range

    @property
    def is_in_secondary(self) -> bool:
        return self.secondary.is_in_range

    @property
    def day_label(self) -> str:
        return str(self.date.day) if self.is_in_month else ""

    @property
    def weekday(self) -> int:
        return self.date.weekday()


@dataclass(frozen=True)
class CalendarResult:
    year: int
    month: int
    selection_mode: SelectionMode
    cells: tuple[CellDescriptor, ...]

    def weeks(self) -> list[tuple[CellDescriptor, ...]]:
        """Return the cells chunked into rows of seven."""
        return [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]


def classify(day: date, date_range: DateRange | None) -> RangeClass:
    """Classify ``day`` against ``date_range``.

    A start endpoint wins over an end endpoint on the same date. Inverted
    ranges are not repaired, so their interior is never reported.
    """
    if date_range is None:
        return RangeClass()
    start, end = date_range.start, date_range.end
    if start is not None and day == start:
        return RangeClass(BoundaryRole.START)
    if end is not None and day == end:
        return RangeClass(BoundaryRole.END)
    if start is not None and end is not None and start < day < end:
        return RangeClass(BoundaryRole.INSIDE)
    return RangeClass()


def _project(day: date, snapshot: CalendarInput, overlap: bool) -> CellDescriptor:
    in_month = (day.year, day.month) == (snapshot.year, snapshot.month)
    return CellDescriptor(
        date=day,
        is_in_month=in_month,
        primary=classify(day, snapshot.primary_range),
        secondary=classify(day, snapshot.secondary_range),
        is_in_both=overlap,
        is_hovered=in_month and snapshot.hovering_date == day,
        on_click=CellHook(HookKind.CLICK, day, snapshot, in_month),
        on_hover_enter=CellHook(HookKind.HOVER_ENTER, day, snapshot, in_month),
        on_hover_leave=CellHook(HookKind.HOVER_LEAVE, day, snapshot, in_month),
    )


def build_from_input(snapshot: CalendarInput) -> CalendarResult:
    """Build the cell list for an already-normalized snapshot."""
    # Coarse: set on every cell as soon as both ranges are complete
    overlap = snapshot.primary_range.is_complete and snapshot.secondary_range.is_complete
    cells = tuple(
        _project(day, snapshot, overlap)
        for day in month_dates(snapshot.year, snapshot.month, snapshot.week_start)
    )
    logger.debug("Built %d cells for %04d-%02d", len(cells), snapshot.year, snapshot.month)
    return CalendarResult(
        year=snapshot.year,
        month=snapshot.month,
        selection_mode=snapshot.selection_mode,
        cells=cells,
    )


def build_calendar(
    year: int,
    month: int,
    *,
    primary_range: DateRange | None = None,
    secondary_range: DateRange | None = None,
    hovering_date: date | None = None,
    selection_mode: SelectionMode = SelectionMode.PRIMARY_START,
    on_date_click: DateCallback | None = None,
    on_date_hover_enter: DateCallback | None = None,
    on_date_hover_leave: DateCallback | None = None,
    week_start: int = SUNDAY,
) -> CalendarResult:
    """Return the cell descriptors for ``month`` of ``year``.

    Args:
        year: Target year.
        month: 1-based month; out-of-range values roll into adjacent years.
        primary_range: Range classified into the boundary role of each cell.
        secondary_range: Second, independently classified range.
        hovering_date: Current hover cursor, if any.
        selection_mode: Endpoint the next click assigns (passed through).
        on_date_click: Called with the date when a cell's click hook fires.
        on_date_hover_enter: Called when an in-month cell is entered.
        on_date_hover_leave: Called when an in-month cell is left.
        week_start: ``calendar`` weekday constant the grid rows start on.

    Returns:
        CalendarResult with the normalized year/month and the ordered cells.
    """
    year, month = normalize_month(year, month)
    snapshot = CalendarInput(
        year=year,
        month=month,
        primary_range=primary_range or DateRange(),
        secondary_range=secondary_range or DateRange(),
        hovering_date=hovering_date,
        selection_mode=selection_mode,
        on_date_click=on_date_click or _ignore,
        on_date_hover_enter=on_date_hover_enter or _ignore,
        on_date_hover_leave=on_date_hover_leave or _ignore,
        week_start=week_start,
    )
    return build_from_input(snapshot)
