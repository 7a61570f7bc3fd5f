from __future__ import annotations

import math

from watermarker.models.settings import Resolution


def _round_half_up(value: float) -> int:
    # Inputs are always positive, so this is round-half-away-from-zero.
    return math.floor(value + 0.5)


def scale_ratio(target: Resolution, source_width: int, source_height: int) -> float:
    """Linear factor that gives the source the same pixel count as *target*.

    Multiplying both source dimensions by this ratio keeps the source aspect
    ratio while matching ``target.width * target.height`` in area.
    """
    if source_width <= 0 or source_height <= 0:
        raise ValueError(f"Source dimensions must be positive, got {source_width}x{source_height}")
    return math.sqrt(target.area / (source_width * source_height))


def scaled_size(target: Resolution, source_width: int, source_height: int) -> tuple[int, int]:
    ratio = scale_ratio(target, source_width, source_height)
    width = max(1, _round_half_up(source_width * ratio))
    height = max(1, _round_half_up(source_height * ratio))
    return width, height
