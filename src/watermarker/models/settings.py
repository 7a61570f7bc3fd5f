from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from PIL import Image

from watermarker.exceptions import ConfigurationError, ResolutionFormatError

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class Resolution:
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Resolution must be positive, got {self.width}x{self.height}")

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def area(self) -> int:
        return self.width * self.height

    @classmethod
    def parse(cls, token: str) -> Resolution:
        """Parse a preset name (case-insensitive) or a ``<width>x<height>`` literal.

        Presets are tried first; the literal form needs exactly one ``x``
        between two positive integers. Surrounding whitespace is ignored.
        """
        text = token.strip()
        preset = PRESET_RESOLUTIONS.get(text.lower())
        if preset is not None:
            return preset

        parts = text.split("x")
        if len(parts) != 2:
            raise ResolutionFormatError(token, "invalid separator, expected a preset name or <width>x<height>")

        width_text, height_text = parts
        if not _DIGITS.fullmatch(width_text) or int(width_text) == 0:
            raise ResolutionFormatError(token, f"invalid width {width_text!r}")
        if not _DIGITS.fullmatch(height_text) or int(height_text) == 0:
            raise ResolutionFormatError(token, f"invalid height {height_text!r}")

        return cls(int(width_text), int(height_text))


PRESET_RESOLUTIONS: dict[str, Resolution] = {
    "qvga": Resolution(320, 240),
    "vga": Resolution(640, 480),
    "svga": Resolution(800, 600),
    "hd": Resolution(1280, 720),
    "quadvga": Resolution(1280, 960),
    "fullhd": Resolution(1920, 1080),
}


class AnchorPosition(Enum):
    TOP_LEFT = "TOP-LEFT"
    TOP_RIGHT = "TOP-RIGHT"
    BOTTOM_LEFT = "BOTTOM-LEFT"
    BOTTOM_RIGHT = "BOTTOM-RIGHT"
    CENTER = "CENTER"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: str) -> AnchorPosition:
        normalized = token.strip().upper().replace("_", "-")
        try:
            return cls(normalized)
        except ValueError as exc:
            choices = ", ".join(member.value for member in cls)
            raise ConfigurationError(f"invalid logo position {token!r} (expected one of {choices})") from exc


@dataclass(slots=True)
class RawConfigLayer:
    """One precedence tier of settings; ``None`` means "not set here"."""

    logo_path: Path | None = None
    anchor: AnchorPosition | None = None
    resolution: Resolution | None = None
    output_dir: Path | None = None
    overwrite: bool | None = None
    inputs: tuple[Path, ...] | None = None


@dataclass(frozen=True, slots=True)
class EffectiveSettings:
    """Fully merged and validated settings for one run."""

    config_path: Path | None
    logo_path: Path
    logo_image: Image.Image
    anchor: AnchorPosition
    resolution: Resolution
    output_dir: Path
    overwrite: bool
    inputs: tuple[Path, ...]
