"""Tests for calendar_cells: classification, projection and hooks."""

from datetime import date

import pytest

from calendar_cells import (
    BoundaryRole,
    CalendarInput,
    DateRange,
    HookKind,
    SelectionMode,
    build_calendar,
    build_from_input,
    classify,
)
from calendar_logic import MONDAY


def _cell(result, day: date):
    return next(c for c in result.cells if c.date == day)


class TestDateRange:
    """Tests for DateRange flags."""

    def test_empty(self) -> None:
        assert DateRange().is_empty
        assert not DateRange().is_complete

    def test_half_open(self) -> None:
        r = DateRange(start=date(2024, 7, 1))
        assert not r.is_empty
        assert not r.is_complete

    def test_complete(self) -> None:
        assert DateRange(date(2024, 7, 1), date(2024, 7, 2)).is_complete


class TestClassify:
    """Tests for classify."""

    r = DateRange(date(2024, 7, 10), date(2024, 7, 16))

    def test_start(self) -> None:
        c = classify(date(2024, 7, 10), self.r)
        assert c.role is BoundaryRole.START
        assert c.is_in_range

    def test_end(self) -> None:
        c = classify(date(2024, 7, 16), self.r)
        assert c.role is BoundaryRole.END
        assert c.is_in_range

    @pytest.mark.parametrize("day", range(11, 16))
    def test_strictly_inside(self, day: int) -> None:
        c = classify(date(2024, 7, day), self.r)
        assert c.role is BoundaryRole.INSIDE
        assert c.is_in_range

    @pytest.mark.parametrize("day", [date(2024, 7, 9), date(2024, 7, 17), date(2023, 7, 12)])
    def test_outside(self, day: date) -> None:
        c = classify(day, self.r)
        assert c.role is BoundaryRole.NONE
        assert not c.is_in_range

    def test_start_wins_when_endpoints_coincide(self) -> None:
        d = date(2024, 7, 10)
        assert classify(d, DateRange(d, d)).role is BoundaryRole.START

    def test_half_open_range_has_no_interior(self) -> None:
        r = DateRange(start=date(2024, 7, 10))
        assert classify(date(2024, 7, 10), r).role is BoundaryRole.START
        assert classify(date(2024, 7, 11), r).role is BoundaryRole.NONE

    def test_end_only_range(self) -> None:
        r = DateRange(end=date(2024, 7, 16))
        assert classify(date(2024, 7, 16), r).role is BoundaryRole.END
        assert classify(date(2024, 7, 15), r).role is BoundaryRole.NONE

    def test_missing_range(self) -> None:
        assert classify(date(2024, 7, 10), None).role is BoundaryRole.NONE

    def test_inverted_range_is_not_repaired(self) -> None:
        """Endpoints still match, but nothing lies inside."""
        r = DateRange(date(2024, 7, 16), date(2024, 7, 10))
        assert classify(date(2024, 7, 16), r).role is BoundaryRole.START
        assert classify(date(2024, 7, 10), r).role is BoundaryRole.END
        assert classify(date(2024, 7, 12), r).role is BoundaryRole.NONE


class TestBuildCalendar:
    """Tests for build_calendar."""

    def test_july_2024_grid(self) -> None:
        result = build_calendar(2024, 7)

        assert len(result.cells) == 35
        assert result.cells[0].date == date(2024, 6, 30)
        assert result.cells[-1].date == date(2024, 8, 3)
        assert (result.year, result.month) == (2024, 7)

    def test_filler_days_flagged(self) -> None:
        result = build_calendar(2024, 7)

        assert not result.cells[0].is_in_month
        assert result.cells[0].day_label == ""
        assert _cell(result, date(2024, 7, 1)).is_in_month
        assert _cell(result, date(2024, 7, 1)).day_label == "1"
        assert sum(c.is_in_month for c in result.cells) == 31

    def test_month_overflow_normalized(self) -> None:
        result = build_calendar(2024, 13)
        assert (result.year, result.month) == (2025, 1)
        assert _cell(result, date(2025, 1, 1)).is_in_month

    def test_same_month_other_year_is_filler(self) -> None:
        """December filler days in a January grid belong to the prior year."""
        result = build_calendar(2025, 1)
        assert result.cells[0].date == date(2024, 12, 29)
        assert not result.cells[0].is_in_month

    def test_week_start_configurable(self) -> None:
        result = build_calendar(2024, 7, week_start=MONDAY)
        assert result.cells[0].date == date(2024, 7, 1)
        assert all(row[0].weekday == MONDAY for row in result.weeks())

    def test_weeks_chunked_by_seven(self) -> None:
        weeks = build_calendar(2024, 7).weeks()
        assert len(weeks) == 5
        assert all(len(w) == 7 for w in weeks)

    def test_primary_and_secondary_classified_independently(self) -> None:
        result = build_calendar(
            2024, 7,
            primary_range=DateRange(date(2024, 7, 10), date(2024, 7, 16)),
            secondary_range=DateRange(date(2024, 7, 2), date(2024, 7, 9)),
        )

        start = _cell(result, date(2024, 7, 10))
        assert start.boundary_role is BoundaryRole.START
        assert start.is_in_primary
        assert not start.is_in_secondary

        sub = _cell(result, date(2024, 7, 5))
        assert sub.boundary_role is BoundaryRole.NONE
        assert sub.secondary.role is BoundaryRole.INSIDE
        assert sub.is_in_secondary

    def test_no_ranges_no_highlighting(self) -> None:
        result = build_calendar(2024, 7)
        assert not any(c.is_in_primary or c.is_in_secondary or c.is_in_both
                       for c in result.cells)

    def test_overlap_flag_is_set_on_every_cell(self) -> None:
        """Both ranges complete flags every cell, in range or not."""
        result = build_calendar(
            2024, 7,
            primary_range=DateRange(date(2024, 7, 10), date(2024, 7, 16)),
            secondary_range=DateRange(date(2024, 8, 20), date(2024, 8, 25)),
        )
        assert all(c.is_in_both for c in result.cells)

    def test_overlap_flag_needs_both_ranges_complete(self) -> None:
        result = build_calendar(
            2024, 7,
            primary_range=DateRange(date(2024, 7, 10), date(2024, 7, 16)),
            secondary_range=DateRange(start=date(2024, 7, 12)),
        )
        assert not any(c.is_in_both for c in result.cells)

    def test_hovered_in_month(self) -> None:
        result = build_calendar(2024, 7, hovering_date=date(2024, 7, 20))
        assert _cell(result, date(2024, 7, 20)).is_hovered
        assert sum(c.is_hovered for c in result.cells) == 1

    def test_hovered_filler_day_is_not_reported(self) -> None:
        result = build_calendar(2024, 7, hovering_date=date(2024, 6, 30))
        assert not any(c.is_hovered for c in result.cells)

    def test_selection_mode_passed_through(self) -> None:
        result = build_calendar(2024, 7, selection_mode=SelectionMode.SECONDARY_END)
        assert result.selection_mode is SelectionMode.SECONDARY_END

    def test_build_does_not_invoke_callbacks(self) -> None:
        calls: list[tuple[str, date]] = []
        build_calendar(
            2024, 7,
            on_date_click=lambda d: calls.append(("click", d)),
            on_date_hover_enter=lambda d: calls.append(("enter", d)),
            on_date_hover_leave=lambda d: calls.append(("leave", d)),
        )
        assert calls == []

    def test_build_is_deterministic(self) -> None:
        kwargs = dict(
            primary_range=DateRange(date(2024, 7, 10), date(2024, 7, 16)),
            hovering_date=date(2024, 7, 3),
        )
        assert build_calendar(2024, 7, **kwargs) == build_calendar(2024, 7, **kwargs)

    def test_build_from_input(self) -> None:
        snapshot = CalendarInput(year=2024, month=2)
        result = build_from_input(snapshot)
        assert sum(c.is_in_month for c in result.cells) == 29


class TestCellHooks:
    """Tests for the interaction hooks bound to each cell."""

    def _build(self, calls: list):
        return build_calendar(
            2024, 7,
            on_date_click=lambda d: calls.append(("click", d)),
            on_date_hover_enter=lambda d: calls.append(("enter", d)),
            on_date_hover_leave=lambda d: calls.append(("leave", d)),
        )

    def test_in_month_hooks_dispatch_with_their_date(self) -> None:
        calls: list = []
        cell = _cell(self._build(calls), date(2024, 7, 4))

        cell.on_click.fire()
        cell.on_hover_enter()
        cell.on_hover_leave.fire()

        d = date(2024, 7, 4)
        assert calls == [("click", d), ("enter", d), ("leave", d)]

    def test_filler_day_click_dispatches(self) -> None:
        calls: list = []
        cell = self._build(calls).cells[0]

        cell.on_click.fire()

        assert calls == [("click", date(2024, 6, 30))]

    def test_filler_day_hover_is_suppressed(self) -> None:
        calls: list = []
        cell = self._build(calls).cells[-1]

        cell.on_hover_enter.fire()
        cell.on_hover_leave.fire()

        assert calls == []
        assert not cell.on_hover_enter.is_active
        assert cell.on_click.is_active

    def test_hook_carries_kind_and_snapshot(self) -> None:
        result = build_calendar(2024, 7, selection_mode=SelectionMode.PRIMARY_END)
        hook = result.cells[3].on_hover_enter
        assert hook.kind is HookKind.HOVER_ENTER
        assert hook.date == result.cells[3].date
        assert hook.snapshot.selection_mode is SelectionMode.PRIMARY_END

    def test_missing_callbacks_are_inert(self) -> None:
        result = build_calendar(2024, 7)
        for cell in result.cells:
            cell.on_click.fire()
            cell.on_hover_enter.fire()
            cell.on_hover_leave.fire()
