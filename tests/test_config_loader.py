from __future__ import annotations

from pathlib import Path

import pytest

from grimoire.config_loader import load_config_file
from grimoire.exceptions import ConfigurationError


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "session.yaml"
    path.write_text(content)
    return path


def test_load_full_config(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
default_edition: bmr
catalog_dir: data
snapshot_path: /var/lib/grimoire/session.json
logging:
  enhanced: true
  dir: logs
  level: DEBUG
grimoire:
  zoom: 2
  image_opt_in: true
""",
    )

    config = load_config_file(path)

    assert config.default_edition == "bmr"
    assert config.catalog_dir == tmp_path / "data"
    assert config.snapshot_path == Path("/var/lib/grimoire/session.json")
    assert config.enhanced_logging is True
    assert config.log_dir == tmp_path / "logs"
    assert config.log_level == "DEBUG"
    assert config.zoom == 2
    assert config.is_image_opt_in is True


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    config = load_config_file(_write(tmp_path, ""))
    assert config.default_edition == "tb"
    assert config.snapshot_path is None


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config_file(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("default_edition: [tb]\n", "default_edition"),
        ("- tb\n", "YAML mapping"),
        ("logging: verbose\n", "'logging' must be a mapping"),
        ("logging:\n  enhanced: maybe\n", "logging.enhanced"),
        ("logging:\n  dir: 3\n", "logging.dir"),
        ("logging:\n  level: LOUD\n", "Invalid log level"),
        ("grimoire:\n  zoom: big\n", "grimoire.zoom"),
        ("grimoire:\n  zoom: true\n", "grimoire.zoom"),
        ("grimoire:\n  image_opt_in: 1\n", "grimoire.image_opt_in"),
        ("default_edition: [unclosed\n", "Invalid YAML"),
    ],
)
def test_invalid_config(tmp_path: Path, content: str, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        load_config_file(_write(tmp_path, content))
