"""Dual-month range picker window (tkinter)."""

import calendar as _cal
import logging
from datetime import date
from tkinter import colorchooser
from tkinter import font as tkfont
import tkinter as tk

from calendar_cells import CalendarResult, CellDescriptor, SelectionMode, build_calendar
from calendar_logic import DAY_NAMES, next_month, prev_month, weekday_headers
from cell_colors import GRID_BG, CellPaint, cell_paint
from selection import (
    SelectionState,
    apply_click,
    format_range,
    hover_enter,
    hover_leave,
    initial_state,
    range_length,
    set_mode,
)
from settings import DEFAULT_COLORS, load_settings, save_settings, week_start_of

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
HEADER_BG = "#F3F3F3"

_MODE_LABELS = [
    (SelectionMode.PRIMARY_START, "Range start"),
    (SelectionMode.PRIMARY_END, "Range end"),
    (SelectionMode.SECONDARY_START, "Compare start"),
    (SelectionMode.SECONDARY_END, "Compare end"),
]


class _MonthPanel:
    """Pre-allocated widget pool for a single month (header + 6 weeks max)."""

    __slots__ = ("frame", "header", "day_headers", "day_cells", "cells")

    def __init__(self, parent: tk.Frame, fonts: dict) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.header = tk.Label(
            self.frame, font=fonts["header"], bg=HEADER_BG, fg="#333333",
        )
        self.header.grid(row=0, column=0, columnspan=7, sticky="we", pady=(0, 2))

        self.day_headers: list[tk.Label] = []
        for col in range(7):
            lbl = tk.Label(
                self.frame, font=fonts["bold"], bg=GRID_BG, fg="#333333", width=3,
            )
            lbl.grid(row=1, column=col)
            self.day_headers.append(lbl)

        # Canvas id -> descriptor of the last build
        self.cells: dict[int, CellDescriptor] = {}

        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(6):  # max 6 weeks
            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    self.frame, width=fonts["cell_w"], height=fonts["cell_h"],
                    bg=GRID_BG, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=r + 2, column=c)
                cell.bind("<Button-1>", self._on_click)
                cell.bind("<Enter>", self._on_enter)
                cell.bind("<Leave>", self._on_leave)
                row_cells.append(cell)
            self.day_cells.append(row_cells)

    # Hooks come from the build that painted the widget
    def _on_click(self, event: tk.Event) -> None:
        cell = self.cells.get(id(event.widget))
        if cell is not None:
            cell.on_click.fire()

    def _on_enter(self, event: tk.Event) -> None:
        cell = self.cells.get(id(event.widget))
        if cell is not None:
            cell.on_hover_enter.fire()

    def _on_leave(self, event: tk.Event) -> None:
        cell = self.cells.get(id(event.widget))
        if cell is not None:
            cell.on_hover_leave.fire()


class CalendarWindow:
    """Two month panels sharing a primary and a secondary date range."""

    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title("Range Calendar")
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._setup_fonts()

        settings = load_settings()
        self.week_start: int = week_start_of(settings)
        self._colors: dict[str, str] = dict(settings["colors"])
        self._log_level: str = settings["log_level"]

        today = date.today()
        self.year = today.year
        self.month = today.month
        self.state: SelectionState = initial_state(today)

        # Font dict for _MonthPanel — includes cell pixel dims
        _tmp = tk.Label(self.root, text="00", font=self.font_normal, width=3)
        _tmp.update_idletasks()
        _cw = _tmp.winfo_reqwidth()
        _ch = _tmp.winfo_reqheight()
        _tmp.destroy()
        self._panel_fonts = {
            "header": self.font_header, "bold": self.font_bold,
            "normal": self.font_normal, "cell_w": _cw, "cell_h": _ch,
        }

        self._mode_var = tk.StringVar(value=self.state.mode.value)
        self._panels: list[_MonthPanel] = []
        self._build_shell()
        self._render()

        self.root.bind("<Escape>", self._on_escape)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=10, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=12, weight="bold")
        self.font_footer = tkfont.Font(family=base, size=9)

    # ------------------------------------------------------------------
    # Build shell (once) — range buttons, nav bar, mode row, panels, footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        outer = tk.Frame(self.root, bg=GRID_BG)
        outer.pack(padx=6, pady=4)

        ranges = tk.Frame(outer, bg=GRID_BG)
        ranges.pack(fill="x", pady=(0, 4))
        self._primary_btn = tk.Button(
            ranges, font=self.font_normal,
            command=lambda: self._change_mode(SelectionMode.PRIMARY_START),
        )
        self._primary_btn.pack(side="left", padx=4)
        self._secondary_btn = tk.Button(
            ranges, font=self.font_normal,
            command=lambda: self._change_mode(SelectionMode.SECONDARY_START),
        )
        self._secondary_btn.pack(side="left", padx=4)

        # Navigation row: ◀◀  ◀  Today  ▶  ▶▶
        nav = tk.Frame(outer, bg=GRID_BG)
        nav.pack(fill="x", pady=(0, 2))
        for text, side, action in (
            ("◀◀", "left", lambda _e: self._navigate_year(-1)),
            ("◀", "left", lambda _e: self._navigate(-1)),
            ("▶▶", "right", lambda _e: self._navigate_year(1)),
            ("▶", "right", lambda _e: self._navigate(1)),
        ):
            btn = tk.Label(nav, text=text, font=self.font_nav, bg=GRID_BG, cursor="hand2")
            btn.pack(side=side, padx=6)
            btn.bind("<Button-1>", action)

        btn_today = tk.Label(
            nav, text="Today", font=self.font_bold, bg=GRID_BG, fg=ACCENT,
            cursor="hand2",
        )
        btn_today.pack(side="left", padx=6)
        btn_today.bind("<Button-1>", lambda _e: self._go_today())

        modes = tk.Frame(outer, bg=GRID_BG)
        modes.pack(fill="x", pady=(0, 2))
        for mode, label in _MODE_LABELS:
            tk.Radiobutton(
                modes, text=label, value=mode.value, variable=self._mode_var,
                font=self.font_normal, bg=GRID_BG,
                command=lambda m=mode: self._change_mode(m),
            ).pack(side="left", padx=2)

        months = tk.Frame(outer, bg=GRID_BG)
        months.pack()
        for col in range(2):
            panel = _MonthPanel(months, self._panel_fonts)
            panel.frame.grid(row=0, column=col, padx=6, pady=2, sticky="n")
            self._panels.append(panel)

        self._footer_label = tk.Label(
            outer, font=self.font_footer, bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

    # ------------------------------------------------------------------
    # Build both months from the current state
    # ------------------------------------------------------------------
    def build_panels(self) -> tuple[CalendarResult, CalendarResult]:
        state = self.state
        left = build_calendar(
            self.year, self.month,
            primary_range=state.primary,
            secondary_range=state.secondary,
            hovering_date=state.hovering,
            selection_mode=state.mode,
            on_date_click=self._on_date_click,
            on_date_hover_enter=self._on_date_hover_enter,
            on_date_hover_leave=self._on_date_hover_leave,
            week_start=self.week_start,
        )
        # Second panel is display-only
        right = build_calendar(
            self.year, self.month + 1,
            primary_range=state.primary,
            secondary_range=state.secondary,
            hovering_date=state.hovering,
            selection_mode=state.mode,
            week_start=self.week_start,
        )
        return left, right

    def _render(self) -> None:
        for panel, result in zip(self._panels, self.build_panels()):
            self._fill_panel(panel, result)

        self._primary_btn.configure(text=format_range(self.state.primary))
        self._secondary_btn.configure(text=format_range(self.state.secondary))
        self._mode_var.set(self.state.mode.value)
        self._footer_label.configure(text=self._footer_text())

    def _fill_panel(self, panel: _MonthPanel, result: CalendarResult) -> None:
        """Reconfigure an existing panel's widgets — no widget creation."""
        panel.header.configure(text=f"{_cal.month_name[result.month]} {result.year}")
        for lbl, abbr in zip(panel.day_headers, weekday_headers(self.week_start)):
            lbl.configure(text=abbr)

        panel.cells.clear()
        weeks = result.weeks()
        for r in range(6):
            for c in range(7):
                canvas = panel.day_cells[r][c]
                if r >= len(weeks):
                    canvas.delete("all")
                    canvas.configure(bg=GRID_BG, cursor="")
                    continue
                cell = weeks[r][c]
                panel.cells[id(canvas)] = cell
                self._draw_cell(canvas, cell_paint(cell, self._colors))

    # ------------------------------------------------------------------
    # Canvas cell drawing (range band + hover square + day number)
    # ------------------------------------------------------------------
    def _draw_cell(self, cell: tk.Canvas, paint: CellPaint) -> None:
        cell.delete("all")
        cell.configure(bg=GRID_BG)
        w = cell.winfo_width()
        h = cell.winfo_height()
        if w <= 1:
            w = int(cell["width"]) + 2
        if h <= 1:
            h = int(cell["height"]) + 2

        if paint.band_color:
            x1 = 2 if paint.band_edge == "left" else 0
            x2 = w - 2 if paint.band_edge == "right" else w
            cell.create_rectangle(x1, 2, x2, h - 2, fill=paint.band_color, outline="")
        if paint.hover_color:
            cell.create_rectangle(3, 3, w - 3, h - 3, fill=paint.hover_color, outline="")
        if paint.text:
            cell.create_text(w // 2, h // 2, text=paint.text, fill=paint.text_color,
                             font=self.font_normal)
        cell.configure(cursor="hand2" if paint.text else "")

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------
    def _set_state(self, new_state: SelectionState) -> None:
        old = self.state
        if new_state == old:
            return
        if new_state.primary != old.primary:
            logger.debug("primary range -> %s", format_range(new_state.primary))
        if new_state.secondary != old.secondary:
            logger.debug("secondary range -> %s", format_range(new_state.secondary))
        if new_state.hovering != old.hovering:
            logger.debug("hovering -> %s", new_state.hovering)
        self.state = new_state
        self._render()

    def _on_date_click(self, day: date) -> None:
        self._set_state(apply_click(self.state, day))

    def _on_date_hover_enter(self, day: date) -> None:
        self._set_state(hover_enter(self.state, day))

    def _on_date_hover_leave(self, _day: date) -> None:
        self._set_state(hover_leave(self.state))

    def _change_mode(self, mode: SelectionMode) -> None:
        logger.debug("selection mode -> %s", mode.value)
        self._set_state(set_mode(self.state, mode))

    def reset_ranges(self) -> None:
        self._set_state(initial_state(date.today()))

    # ------------------------------------------------------------------
    # Footer text
    # ------------------------------------------------------------------
    def _footer_text(self) -> str:
        today_str = f"Today: {date.today().strftime('%d.%m.%Y')}"
        total_days = range_length(self.state.primary)
        if total_days is None:
            return today_str
        if total_days <= 0:
            return f"Range end is before its start     {today_str}"
        full_weeks, rem_days = divmod(total_days, 7)

        parts: list[str] = []
        if full_weeks:
            parts.append(f"{full_weeks} week{'s' if full_weeks != 1 else ''}")
        if rem_days:
            parts.append(f"{rem_days} day{'s' if rem_days != 1 else ''}")
        return f"{total_days} days  ({', '.join(parts)})     {today_str}"

    # ------------------------------------------------------------------
    # ESC resets ranges first, then hides
    # ------------------------------------------------------------------
    def _on_escape(self, _event: tk.Event) -> None:
        fresh = initial_state(date.today())
        if (self.state.primary, self.state.secondary) != (fresh.primary, fresh.secondary):
            self._set_state(fresh)
        else:
            self.hide()

    # ------------------------------------------------------------------
    # Settings dialog
    # ------------------------------------------------------------------
    def open_settings(self) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title("Settings")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        tk.Label(frame, text="Week starts on:", font=self.font_normal).grid(
            row=0, column=0, sticky="w", pady=4,
        )
        week_var = tk.StringVar(value=DAY_NAMES[self.week_start])
        tk.OptionMenu(frame, week_var, *DAY_NAMES).grid(
            row=0, column=1, padx=(8, 0), pady=4, sticky="w",
        )

        tk.Label(frame, text="Log level:", font=self.font_normal).grid(
            row=1, column=0, sticky="w", pady=4,
        )
        level_var = tk.StringVar(value=self._log_level)
        tk.OptionMenu(frame, level_var, "DEBUG", "INFO", "WARNING", "ERROR").grid(
            row=1, column=1, padx=(8, 0), pady=4, sticky="w",
        )

        # --- Colour section ---
        color_frame = tk.LabelFrame(
            frame, text="Colours", font=self.font_bold, padx=8, pady=4,
        )
        color_frame.grid(row=2, column=0, columnspan=2, sticky="we", pady=(8, 0))
        color_vals: dict[str, str] = dict(self._colors)

        for row, key in enumerate(DEFAULT_COLORS):
            tk.Label(color_frame, text=key.capitalize(), font=self.font_normal).grid(
                row=row, column=0, sticky="w",
            )
            swatch = tk.Label(
                color_frame, text="    ", bg=color_vals[key],
                relief="raised", borderwidth=1, cursor="hand2",
            )
            swatch.grid(row=row, column=1, padx=(8, 0), pady=2)

            def _make_picker(k=key, sw=swatch):
                def _pick(_e=None):
                    result = colorchooser.askcolor(
                        color=color_vals[k], parent=dlg, title=f"Colour for {k}")
                    if result[1]:
                        color_vals[k] = result[1]
                        sw.configure(bg=result[1])
                return _pick

            swatch.bind("<Button-1>", _make_picker())

        # --- Buttons ---
        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=3, column=0, columnspan=2, pady=(8, 0))

        def on_ok() -> None:
            try:
                week_start = DAY_NAMES.index(week_var.get())
            except ValueError:
                return

            settings = load_settings()
            settings["week_start"] = DAY_NAMES[week_start]
            settings["log_level"] = level_var.get()
            settings["colors"] = color_vals
            save_settings(settings)

            self.week_start = week_start
            self._colors = dict(color_vals)
            self._log_level = level_var.get()
            logging.getLogger().setLevel(self._log_level)
            logger.info("Settings saved (week starts on %s)", DAY_NAMES[week_start])
            dlg.destroy()
            self._render()

        tk.Button(btn_frame, text="OK", width=8, command=on_ok).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Cancel", width=8, command=dlg.destroy).pack(
            side="left", padx=4,
        )

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _navigate(self, direction: int) -> None:
        if direction < 0:
            self.year, self.month = prev_month(self.year, self.month)
        else:
            self.year, self.month = next_month(self.year, self.month)
        self._render()

    def _navigate_year(self, direction: int) -> None:
        self.year += direction
        self._render()

    def _go_today(self) -> None:
        today = date.today()
        self.year = today.year
        self.month = today.month
        self._render()

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self._render()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self._set_state(hover_leave(self.state))
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position bottom-right of the screen
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        x = self.root.winfo_screenwidth() - win_w - 12
        # Leave room for a taskbar
        y = self.root.winfo_screenheight() - win_h - 60
        self.root.geometry(f"{win_w}x{win_h}+{x}+{y}")
