from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

APP_NAME = "watermarker"
CONFIG_FILE_NAME = "config.toml"


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    """The platform facts needed to locate the per-user config directory."""

    system: str
    home: Path
    environ: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def current(cls) -> PlatformInfo:
        return cls(system=sys.platform, home=Path.home(), environ=dict(os.environ))


def config_base_dir(platform: PlatformInfo) -> Path:
    if platform.system == "win32":
        local_app_data = platform.environ.get("LOCALAPPDATA")
        if local_app_data:
            return Path(local_app_data)
        return platform.home / "AppData" / "Local"

    if platform.system == "darwin":
        return platform.home / "Library" / "Application Support"

    xdg_config_home = platform.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home and Path(xdg_config_home).is_absolute():
        return Path(xdg_config_home)
    return platform.home / ".config"


def default_config_path(platform: PlatformInfo) -> Path:
    return config_base_dir(platform) / APP_NAME / CONFIG_FILE_NAME
