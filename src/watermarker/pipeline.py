from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from watermarker.exceptions import ProcessingError
from watermarker.imaging.codec import decode_jpeg, resize_image
from watermarker.imaging.compositor import overlay, place
from watermarker.imaging.scaling import scaled_size
from watermarker.models.settings import EffectiveSettings
from watermarker.output.metrics import RunMetrics, Timer
from watermarker.output.writer import save_jpeg

logger = logging.getLogger(__name__)

JPEG_SUFFIXES = frozenset({".jpg", ".jpeg"})


def iter_jpeg_files(root: Path) -> Iterator[Path]:
    """Recursively yield regular files under *root* with a JPEG suffix."""
    for path in sorted(root.rglob("*")):
        if path.is_file() and path.suffix.lower() in JPEG_SUFFIXES:
            yield path


def iter_targets(inputs: Iterable[Path]) -> Iterator[Path]:
    for path in inputs:
        if path.is_file():
            yield path
        elif path.is_dir():
            yield from iter_jpeg_files(path)


def output_path_for(settings: EffectiveSettings, input_path: Path) -> Path:
    return settings.output_dir / input_path.name


def process_file(settings: EffectiveSettings, input_path: Path) -> bool:
    """Watermark one JPEG. Returns ``False`` when the file was skipped.

    An existing output is only replaced when ``settings.overwrite`` is set.
    """
    output_path = output_path_for(settings, input_path)

    if output_path.exists() and not settings.overwrite:
        logger.info("%s => %s skip (already exists)", input_path, output_path)
        return False

    image = decode_jpeg(input_path)

    try:
        width, height = scaled_size(settings.resolution, image.width, image.height)
    except ValueError as exc:
        raise ProcessingError(f"cannot scale {input_path}: {exc}", path=input_path) from exc

    background = resize_image(image, (width, height))

    logo = settings.logo_image
    x, y = place(settings.anchor, width, height, logo.width, logo.height)
    composed = overlay(background, logo, x, y)

    save_jpeg(composed, output_path)

    logger.info("%s => %s", input_path, output_path)
    return True


def run_pipeline(settings: EffectiveSettings) -> RunMetrics:
    """Process every target in order, stopping at the first error.

    Outputs written before a failure are left in place.
    """
    timer = Timer()
    metrics = RunMetrics()

    for input_path in iter_targets(settings.inputs):
        if process_file(settings, input_path):
            metrics.files_processed += 1
        else:
            metrics.files_skipped += 1

    metrics.execution_time_seconds = round(timer.elapsed(), 3)
    logger.info("Batch completed")
    return metrics
