"""YAML configuration file loader for session startup."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore[import-untyped]

from .config import SessionConfig
from .exceptions import ConfigurationError


def load_config_file(config_path: str | Path) -> SessionConfig:
    """Load session configuration from a YAML file.

    Relative paths inside the file are resolved against the file's directory.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        SessionConfig built from the file.

    Raises:
        ConfigurationError: If the file is invalid or a field has the wrong type.
        FileNotFoundError: If the config file doesn't exist.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open("r") as f:
        try:
            data: Any = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML file: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("Config file must contain a YAML mapping")

    base_dir = path.parent

    default_edition = data.get("default_edition", "tb")
    if not isinstance(default_edition, str):
        raise ConfigurationError("'default_edition' must be a string")

    catalog_dir = _optional_path(data, "catalog_dir", base_dir)
    snapshot_path = _optional_path(data, "snapshot_path", base_dir)

    # Parse logging options
    logging_config = data.get("logging", {})
    if not isinstance(logging_config, dict):
        raise ConfigurationError("'logging' must be a mapping")

    enhanced = logging_config.get("enhanced", False)
    if not isinstance(enhanced, bool):
        raise ConfigurationError("'logging.enhanced' must be true or false")
    log_dir = _optional_path(logging_config, "dir", base_dir, label="logging.dir")
    log_level = logging_config.get("level", "INFO")
    if not isinstance(log_level, str):
        raise ConfigurationError("'logging.level' must be a string")

    # Parse initial grimoire settings
    grimoire_config = data.get("grimoire", {})
    if not isinstance(grimoire_config, dict):
        raise ConfigurationError("'grimoire' must be a mapping")

    zoom = grimoire_config.get("zoom", 0)
    if isinstance(zoom, bool) or not isinstance(zoom, int):
        raise ConfigurationError("'grimoire.zoom' must be an integer")
    image_opt_in = grimoire_config.get("image_opt_in", False)
    if not isinstance(image_opt_in, bool):
        raise ConfigurationError("'grimoire.image_opt_in' must be true or false")

    return SessionConfig(
        default_edition=default_edition,
        catalog_dir=catalog_dir,
        snapshot_path=snapshot_path,
        enhanced_logging=enhanced,
        log_dir=log_dir,
        log_level=log_level,
        zoom=zoom,
        is_image_opt_in=image_opt_in,
    )


def _optional_path(
    data: dict[str, Any], key: str, base_dir: Path, *, label: Optional[str] = None
) -> Optional[Path]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"'{label or key}' must be a path string")
    candidate = Path(value)
    return candidate if candidate.is_absolute() else base_dir / candidate
