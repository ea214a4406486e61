"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from PIL import Image, ImageDraw

from settings import DEFAULT_COLORS

_OUTLINE = "#333333"


def create_icon_image(colors: dict | None = None) -> Image.Image:
    """Return a 64×64 RGBA image: a 4-week grid crossed by two range bands."""
    colors = colors or DEFAULT_COLORS
    size = 64
    cell = 8
    left = (size - 7 * cell) // 2
    top = 14

    img = Image.new("RGBA", (size, size), "white")
    draw = ImageDraw.Draw(img)
    draw.rectangle((left, 4, size - left - 1, top - 3), fill=_OUTLINE)

    # Secondary band on week 2, primary band on week 3
    draw.rectangle((left, top + cell, left + 5 * cell, top + 2 * cell - 1),
                   fill=colors["secondary"])
    draw.rectangle((left + 3 * cell, top + 2 * cell, size - left - 1, top + 3 * cell - 1),
                   fill=colors["primary"], outline=_OUTLINE)

    for row in range(5):
        y = top + row * cell
        draw.line((left, y, size - left - 1, y), fill=_OUTLINE)
    for col in range(8):
        x = left + col * cell
        draw.line((x, top, x, top + 4 * cell), fill=_OUTLINE)

    return img
