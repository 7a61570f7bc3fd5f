from __future__ import annotations

from pathlib import Path

from PIL import Image

from watermarker.exceptions import ProcessingError


def decode_jpeg(path: Path) -> Image.Image:
    """Decode a JPEG file into an RGBA image.

    Pillow's decompression-bomb limit is lifted while decoding so that large
    panoramas are accepted.
    """
    pixel_limit = Image.MAX_IMAGE_PIXELS
    Image.MAX_IMAGE_PIXELS = None
    try:
        with Image.open(path, formats=["JPEG"]) as image:
            return image.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise ProcessingError(f"failed to decode {path}: {exc}", path=path) from exc
    finally:
        Image.MAX_IMAGE_PIXELS = pixel_limit


def load_logo(path: Path) -> Image.Image:
    """Decode the logo (any format Pillow reads) into an RGBA image.

    Errors are left to the caller, which reports them as a validation failure.
    """
    with Image.open(path) as image:
        return image.convert("RGBA")


def resize_image(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    try:
        return image.resize(size, Image.Resampling.LANCZOS)
    except (OSError, ValueError) as exc:
        raise ProcessingError(f"failed to resize to {size[0]}x{size[1]}: {exc}") from exc
