from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError as JsonSchemaValidationError
from jsonschema import validate
from pydantic import BaseModel, ValidationError

from watermarker.config.paths import PlatformInfo, default_config_path
from watermarker.exceptions import ConfigurationError
from watermarker.models.settings import AnchorPosition, RawConfigLayer, Resolution

logger = logging.getLogger(__name__)

MIN_VALID_EXAMPLE_TOML = """[logo]
file_path = "/path/to/logo.png"
position = "BOTTOM-RIGHT"

[output]
resolution = "HD"
output_path = "/path/to/output"
"""


class LogoSection(BaseModel):
    file_path: str | None = None
    position: str | None = None


class OutputSection(BaseModel):
    resolution: str | None = None
    output_path: str | None = None


class ConfigFile(BaseModel):
    logo: LogoSection | None = None
    output: OutputSection | None = None

    def to_layer(self) -> RawConfigLayer:
        layer = RawConfigLayer()
        if self.logo is not None:
            if self.logo.file_path:
                layer.logo_path = Path(self.logo.file_path)
            if self.logo.position:
                layer.anchor = AnchorPosition.parse(self.logo.position)
        if self.output is not None:
            if self.output.resolution:
                layer.resolution = Resolution.parse(self.output.resolution)
            if self.output.output_path:
                layer.output_dir = Path(self.output.output_path)
        return layer


def _parse_config_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    content = path.read_text(encoding="utf-8")

    if suffix in {".yaml", ".yml"}:
        parsed = yaml.safe_load(content)
    elif suffix == ".json":
        parsed = json.loads(content)
    else:
        parsed = tomllib.loads(content)

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigurationError(f"Config file {path} must contain a top-level table/map")
    return parsed


def _default_schema_path() -> Path:
    return Path(__file__).resolve().parents[1] / "schemas" / "config.schema.json"


def read_config_file(path: Path) -> RawConfigLayer:
    try:
        data = _parse_config_file(path)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to parse config file {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Unable to read config file {path}: {exc}") from exc

    schema_path = _default_schema_path()
    if schema_path.exists():
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            validate(instance=data, schema=schema)
        except JsonSchemaValidationError as exc:
            location = ".".join(str(part) for part in exc.absolute_path) or "<root>"
            raise ConfigurationError(f"Config file {path} is invalid at {location}: {exc.message}") from exc

    try:
        config = ConfigFile.model_validate(data)
    except ValidationError as exc:
        errors = []
        for item in exc.errors():
            location = ".".join(str(part) for part in item["loc"])
            errors.append(f"{location}: {item['msg']}")
        raise ConfigurationError(f"Config file {path} is invalid: " + "; ".join(errors)) from exc

    return config.to_layer()


def load_config_layer(
    explicit_path: Path | None,
    platform: PlatformInfo,
) -> tuple[RawConfigLayer, Path | None]:
    """Read the persisted settings tier.

    An explicit path must exist. The per-user default location is optional:
    when nothing is there an empty layer is returned together with ``None``.
    """
    if explicit_path is not None:
        if not explicit_path.exists():
            raise ConfigurationError(f"Config file {explicit_path} does not exist")
        path = explicit_path
    else:
        path = default_config_path(platform)
        if not path.exists():
            logger.debug("No config file at %s", path)
            return RawConfigLayer(), None

    if not path.is_file():
        raise ConfigurationError(f"Config file {path} is not a file")

    logger.info("Using config file %s", path)
    return read_config_file(path), path
