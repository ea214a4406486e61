"""Date-range selection state machine and hover cursor.

The host keeps one ``SelectionState`` and replaces it wholesale with the
value each function here returns.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, timedelta

from calendar_cells import DateRange, SelectionMode
from calendar_logic import days_between

RANGE_DATE_FORMAT = "%y.%m.%d"
_MISSING_DATE = "--.--.--"


@dataclass(frozen=True)
class SelectionState:
    primary: DateRange = DateRange()
    secondary: DateRange = DateRange()
    mode: SelectionMode = SelectionMode.PRIMARY_START
    hovering: date | None = None


def initial_state(today: date) -> SelectionState:
    """Starting ranges: the coming week, and the eight days before today."""
    return SelectionState(
        primary=DateRange(today, today + timedelta(days=6)),
        secondary=DateRange(today - timedelta(days=8), today - timedelta(days=1)),
        mode=SelectionMode.PRIMARY_START,
    )


def apply_click(state: SelectionState, day: date) -> SelectionState:
    """Assign ``day`` to the endpoint selected by ``state.mode``.

    Only PRIMARY_START advances (to PRIMARY_END). Endpoints are never
    swapped, so a click can leave a range inverted.
    """
    mode = state.mode
    if mode is SelectionMode.PRIMARY_START:
        return replace(
            state,
            primary=DateRange(day, state.primary.end),
            mode=SelectionMode.PRIMARY_END,
        )
    if mode is SelectionMode.PRIMARY_END:
        return replace(state, primary=DateRange(state.primary.start, day))
    if mode is SelectionMode.SECONDARY_START:
        return replace(state, secondary=DateRange(day, state.secondary.end))
    return replace(state, secondary=DateRange(state.secondary.start, day))


def set_mode(state: SelectionState, mode: SelectionMode) -> SelectionState:
    return replace(state, mode=mode)


def hover_enter(state: SelectionState, day: date) -> SelectionState:
    return replace(state, hovering=day)


def hover_leave(state: SelectionState) -> SelectionState:
    """Clear the hover cursor; a no-op when none is set."""
    if state.hovering is None:
        return state
    return replace(state, hovering=None)


def format_range(date_range: DateRange) -> str:
    """Return a ``YY.MM.DD ~ YY.MM.DD`` label for a range."""
    def _fmt(d: date | None) -> str:
        return d.strftime(RANGE_DATE_FORMAT) if d is not None else _MISSING_DATE

    return f"{_fmt(date_range.start)} ~ {_fmt(date_range.end)}"


def range_length(date_range: DateRange) -> int | None:
    """Inclusive day count of a complete range, None otherwise.

    Inverted ranges yield zero or a negative count.
    """
    if not date_range.is_complete:
        return None
    return days_between(date_range.start, date_range.end) + 1
