from pathlib import Path

import pytest
from PIL import Image


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch) -> Path:
    """Keep tests away from the real per-user config file."""
    config_home = tmp_path / "config-home"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("LOCALAPPDATA", str(config_home))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("USERPROFILE", str(tmp_path / "home"))
    return config_home


@pytest.fixture
def logo_file(tmp_path: Path) -> Path:
    logo = Image.new("RGBA", (20, 10), (255, 0, 0, 255))
    path = tmp_path / "logo.png"
    logo.save(path)
    return path


@pytest.fixture
def make_jpeg():
    def _make(path: Path, size: tuple[int, int], color=(0, 0, 255)) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color).save(path, format="JPEG")
        return path

    return _make
