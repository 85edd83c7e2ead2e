"""Draw difference regions over a copy of the actual image."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from PIL import Image, ImageDraw

from .geometry import Rect

RGBA = Tuple[int, int, int, int]

DEFAULT_OUTLINE: RGBA = (255, 0, 0, 128)


@dataclass(frozen=True)
class OverlayStyle:
    outline: RGBA = DEFAULT_OUTLINE
    width: int = 1


def _clamp(value: int, minimum: int = 0, maximum: int = 255) -> int:
    return max(minimum, min(int(value), maximum))


def make_overlay_style(color: Optional[str] = None, *, width: int = 1, alpha: Optional[int] = None) -> OverlayStyle:
    """Build a style from an optional colour string.

    ``alpha`` overrides the alpha channel of the parsed colour; without a
    colour the default translucent red is used.
    """

    outline = parse_color(color) or DEFAULT_OUTLINE
    if alpha is not None:
        outline = outline[:3] + (_clamp(alpha),)
    return OverlayStyle(outline=outline, width=max(1, int(width)))


def parse_color(value: Optional[str]) -> Optional[RGBA]:
    """Parse ``#RRGGBB``, ``#RRGGBBAA`` or ``r,g,b[,a]`` (0-255) colours."""

    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if value.startswith("#"):
        hex_value = value[1:]
        if len(hex_value) not in (6, 8):
            raise ValueError("Hex colors must be #RRGGBB or #RRGGBBAA")
        channels = [int(hex_value[i : i + 2], 16) for i in range(0, len(hex_value), 2)]
    else:
        parts = value.replace(";", ",").split(",")
        if len(parts) not in (3, 4):
            raise ValueError("RGB colors must provide three or four comma separated numbers")
        try:
            channels = [_clamp(int(p.strip())) for p in parts]
        except ValueError as exc:
            raise ValueError(f"Invalid color '{value}'") from exc
    if len(channels) == 3:
        channels.append(DEFAULT_OUTLINE[3])
    return tuple(channels)  # type: ignore[return-value]


def draw_regions(image: Image.Image, areas: Iterable[Rect], style: OverlayStyle = OverlayStyle()) -> Image.Image:
    """Return an RGBA copy of ``image`` with a border drawn around each area.

    The border runs along ``x .. x + width`` and ``y .. y + height`` so it
    sits just outside the last differing column and row.
    """

    base = image.convert("RGBA")
    layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    for area in areas:
        if area.is_empty:
            continue
        draw.rectangle(
            [area.x, area.y, area.right, area.bottom],
            outline=style.outline,
            width=style.width,
        )
    return Image.alpha_composite(base, layer)
