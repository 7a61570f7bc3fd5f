from __future__ import annotations

from PIL import Image

from watermarker.models.settings import AnchorPosition


def _div_toward_zero(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def place(
    anchor: AnchorPosition,
    background_width: int,
    background_height: int,
    logo_width: int,
    logo_height: int,
) -> tuple[int, int]:
    """Top-left corner of the logo on the background.

    Offsets go negative when the logo is larger than the background.
    """
    right = background_width - logo_width
    bottom = background_height - logo_height

    if anchor is AnchorPosition.TOP_LEFT:
        return 0, 0
    if anchor is AnchorPosition.TOP_RIGHT:
        return right, 0
    if anchor is AnchorPosition.BOTTOM_LEFT:
        return 0, bottom
    if anchor is AnchorPosition.BOTTOM_RIGHT:
        return right, bottom
    if anchor is AnchorPosition.CENTER:
        return _div_toward_zero(right, 2), _div_toward_zero(bottom, 2)

    raise ValueError(f"Unsupported anchor position: {anchor}")


def overlay(background: Image.Image, logo: Image.Image, x: int, y: int) -> Image.Image:
    """Alpha-composite *logo* over a copy of *background* at ``(x, y)``.

    Parts of the logo outside the background are clipped.
    """
    base = background.convert("RGBA") if background.mode != "RGBA" else background.copy()
    mark = logo if logo.mode == "RGBA" else logo.convert("RGBA")

    left = max(x, 0)
    top = max(y, 0)
    right = min(x + mark.width, base.width)
    bottom = min(y + mark.height, base.height)
    if right <= left or bottom <= top:
        return base

    source_box = (left - x, top - y, right - x, bottom - y)
    base.alpha_composite(mark, dest=(left, top), source=source_box)
    return base
