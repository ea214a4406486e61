"""Paint decisions for a single calendar cell — no UI dependencies."""

from dataclasses import dataclass

from calendar_cells import BoundaryRole, CellDescriptor
from settings import DEFAULT_COLORS

GRID_BG = "white"
TEXT_FG = "#333333"
WEEKEND_FG = "#CC0000"


@dataclass(frozen=True)
class CellPaint:
    """How to draw one cell.

    ``band_edge`` is "left" for a range start, "right" for a range end and
    None for a band spanning the whole cell.
    """

    band_color: str | None
    band_edge: str | None
    hover_color: str | None
    text: str
    text_color: str


def cell_paint(cell: CellDescriptor, colors: dict | None = None) -> CellPaint:
    colors = colors or DEFAULT_COLORS
    role = cell.boundary_role

    if cell.is_in_both and cell.is_in_primary and cell.is_in_secondary:
        band = colors["overlap"]
    elif cell.is_in_primary:
        band = colors["primary"]
    elif cell.is_in_secondary:
        band = colors["secondary"]
    else:
        band = None

    if role is BoundaryRole.START:
        edge = "left"
    elif role is BoundaryRole.END:
        edge = "right"
    else:
        edge = None

    return CellPaint(
        band_color=band,
        band_edge=edge if band is not None else None,
        hover_color=colors["hover"] if cell.is_hovered else None,
        text=cell.day_label,
        text_color=WEEKEND_FG if cell.weekday >= 5 else TEXT_FG,
    )
