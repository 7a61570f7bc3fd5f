import os
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from watermarker.config.resolver import default_layer, merge_layers, resolve, validate_settings
from watermarker.exceptions import ConfigurationError, SettingsValidationError
from watermarker.models.settings import AnchorPosition, RawConfigLayer, Resolution


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    path = tmp_path / "photos"
    path.mkdir()
    return path


def _cli(logo_file: Path, input_dir: Path, **overrides) -> RawConfigLayer:
    layer = RawConfigLayer(logo_path=logo_file, output_dir=input_dir.parent, inputs=(input_dir,))
    for name, value in overrides.items():
        setattr(layer, name, value)
    return layer


def test_cli_anchor_beats_file_anchor(logo_file: Path, input_dir: Path) -> None:
    settings = resolve(
        _cli(logo_file, input_dir, anchor=AnchorPosition.CENTER),
        RawConfigLayer(anchor=AnchorPosition.TOP_LEFT),
    )
    assert settings.anchor is AnchorPosition.CENTER


def test_file_anchor_used_when_cli_absent(logo_file: Path, input_dir: Path) -> None:
    settings = resolve(_cli(logo_file, input_dir), RawConfigLayer(anchor=AnchorPosition.TOP_LEFT))
    assert settings.anchor is AnchorPosition.TOP_LEFT


def test_default_anchor_and_resolution(logo_file: Path, input_dir: Path) -> None:
    settings = resolve(_cli(logo_file, input_dir), RawConfigLayer())
    assert settings.anchor is AnchorPosition.BOTTOM_RIGHT
    assert settings.resolution == Resolution(1280, 720)
    assert settings.overwrite is False
    assert settings.config_path is None


def test_file_resolution_used_when_cli_absent(logo_file: Path, input_dir: Path) -> None:
    settings = resolve(_cli(logo_file, input_dir), RawConfigLayer(resolution=Resolution(640, 480)))
    assert settings.resolution == Resolution(640, 480)


def test_merge_picks_first_defined_value_per_field() -> None:
    merged = merge_layers(
        RawConfigLayer(overwrite=True),
        RawConfigLayer(logo_path=Path("file-logo.png"), overwrite=False),
        default_layer(),
    )
    assert merged.overwrite is True
    assert merged.logo_path == Path("file-logo.png")
    assert merged.output_dir == Path(".")


def test_logo_path_from_file_layer(logo_file: Path, input_dir: Path) -> None:
    cli = RawConfigLayer(output_dir=input_dir.parent, inputs=(input_dir,))
    settings = resolve(cli, RawConfigLayer(logo_path=logo_file), config_path=Path("cfg.toml"))
    assert settings.logo_path == logo_file
    assert settings.config_path == Path("cfg.toml")


def test_missing_logo_path_is_configuration_error(input_dir: Path) -> None:
    with pytest.raises(ConfigurationError) as exc:
        resolve(RawConfigLayer(inputs=(input_dir,)), RawConfigLayer())
    assert "logo file path" in str(exc.value)


def test_output_dir_must_be_directory(logo_file: Path, input_dir: Path) -> None:
    with pytest.raises(SettingsValidationError) as exc:
        resolve(_cli(logo_file, input_dir, output_dir=logo_file), RawConfigLayer())
    assert exc.value.field == "output_dir"
    assert exc.value.path == logo_file


def test_logo_must_be_file(tmp_path: Path, input_dir: Path) -> None:
    with pytest.raises(SettingsValidationError) as exc:
        resolve(_cli(tmp_path / "missing.png", input_dir), RawConfigLayer())
    assert exc.value.field == "logo_path"


def test_inputs_must_exist(logo_file: Path, input_dir: Path, tmp_path: Path) -> None:
    missing = tmp_path / "missing.jpg"
    with pytest.raises(SettingsValidationError) as exc:
        resolve(_cli(logo_file, input_dir, inputs=(input_dir, missing)), RawConfigLayer())
    assert exc.value.field == "inputs"
    assert str(missing) in str(exc.value)


def test_undecodable_logo_is_validation_error(tmp_path: Path, input_dir: Path) -> None:
    bogus = tmp_path / "logo.png"
    bogus.write_bytes(b"not an image")
    with pytest.raises(SettingsValidationError) as exc:
        resolve(_cli(bogus, input_dir), RawConfigLayer())
    assert exc.value.field == "logo_path"
    assert "could not be decoded" in str(exc.value)


def test_validated_settings_are_frozen(logo_file: Path, input_dir: Path) -> None:
    settings = validate_settings(merge_layers(_cli(logo_file, input_dir), default_layer()))
    assert settings.logo_image.mode == "RGBA"
    assert settings.logo_image.size == (20, 10)
    with pytest.raises(FrozenInstanceError):
        settings.overwrite = True  # type: ignore[misc]


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root can read any file")
def test_unreadable_logo_is_validation_error(logo_file: Path, input_dir: Path) -> None:
    logo_file.chmod(0o000)
    try:
        with pytest.raises(SettingsValidationError) as exc:
            resolve(_cli(logo_file, input_dir), RawConfigLayer())
    finally:
        logo_file.chmod(0o644)

    assert exc.value.field == "logo_path"
    assert "is not readable" in str(exc.value)


def test_default_layer_is_fresh_on_every_call() -> None:
    first = default_layer()
    first.anchor = AnchorPosition.TOP_LEFT
    first.output_dir = Path("elsewhere")

    second = default_layer()

    assert second.anchor is AnchorPosition.BOTTOM_RIGHT
    assert second.output_dir == Path(".")
