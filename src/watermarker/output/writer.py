from __future__ import annotations

from pathlib import Path

from PIL import Image

from watermarker.exceptions import ProcessingError

JPEG_QUALITY = 90


def save_jpeg(image: Image.Image, output_path: Path) -> None:
    try:
        image.convert("RGB").save(output_path, format="JPEG", quality=JPEG_QUALITY, optimize=True)
    except (OSError, ValueError) as exc:
        raise ProcessingError(f"failed to write {output_path}: {exc}", path=output_path) from exc
