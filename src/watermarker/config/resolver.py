from __future__ import annotations

import os
from dataclasses import fields
from pathlib import Path

from PIL import Image

from watermarker.exceptions import ConfigurationError, SettingsValidationError
from watermarker.imaging.codec import load_logo
from watermarker.models.settings import (
    PRESET_RESOLUTIONS,
    AnchorPosition,
    EffectiveSettings,
    RawConfigLayer,
)


def default_layer() -> RawConfigLayer:
    """Built-in defaults; a fresh record on every call."""
    return RawConfigLayer(
        anchor=AnchorPosition.BOTTOM_RIGHT,
        resolution=PRESET_RESOLUTIONS["hd"],
        output_dir=Path("."),
        overwrite=False,
    )


def merge_layers(*layers: RawConfigLayer) -> RawConfigLayer:
    """Field by field, keep the first value that is set, highest priority first."""
    merged = RawConfigLayer()
    for item in fields(RawConfigLayer):
        for layer in layers:
            value = getattr(layer, item.name)
            if value is not None:
                setattr(merged, item.name, value)
                break
    return merged


def validate_settings(merged: RawConfigLayer, config_path: Path | None = None) -> EffectiveSettings:
    """Check every path in *merged* and decode the logo.

    Returns the frozen settings record, or raises on the first failed check.
    """
    if merged.logo_path is None:
        raise ConfigurationError("logo file path is not specified")
    if not merged.inputs:
        raise ConfigurationError("no input files or directories given")
    if merged.anchor is None or merged.resolution is None or merged.output_dir is None:
        raise ConfigurationError("incomplete settings: merge with the default layer first")

    output_dir = merged.output_dir
    if not output_dir.is_dir():
        raise SettingsValidationError("output_dir", output_dir, f'output path "{output_dir}" is not a directory')

    logo_path = merged.logo_path
    if not logo_path.is_file():
        raise SettingsValidationError("logo_path", logo_path, f'logo file path "{logo_path}" is not a file')
    if not os.access(logo_path, os.R_OK):
        raise SettingsValidationError("logo_path", logo_path, f'logo file path "{logo_path}" is not readable')

    for input_path in merged.inputs:
        if not (input_path.is_file() or input_path.is_dir()):
            raise SettingsValidationError(
                "inputs", input_path, f'input path "{input_path}" is not a file or directory'
            )

    try:
        logo_image = load_logo(logo_path)
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise SettingsValidationError(
            "logo_path", logo_path, f'logo file "{logo_path}" could not be decoded: {exc}'
        ) from exc

    return EffectiveSettings(
        config_path=config_path,
        logo_path=logo_path,
        logo_image=logo_image,
        anchor=merged.anchor,
        resolution=merged.resolution,
        output_dir=output_dir,
        overwrite=bool(merged.overwrite),
        inputs=tuple(merged.inputs),
    )


def resolve(
    cli_layer: RawConfigLayer,
    file_layer: RawConfigLayer,
    defaults: RawConfigLayer | None = None,
    config_path: Path | None = None,
) -> EffectiveSettings:
    if defaults is None:
        defaults = default_layer()
    return validate_settings(merge_layers(cli_layer, file_layer, defaults), config_path)
