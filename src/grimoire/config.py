"""Session configuration model and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError
from .logging_manager import LOG_LEVELS


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Immutable startup configuration for a session."""

    default_edition: str = "tb"
    catalog_dir: Optional[Path] = None
    snapshot_path: Optional[Path] = None
    enhanced_logging: bool = False
    log_dir: Optional[Path] = None
    log_level: str = "INFO"
    zoom: int = 0
    is_image_opt_in: bool = False

    def __post_init__(self) -> None:
        if not self.default_edition:
            raise ConfigurationError("default_edition may not be empty")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}. Must be one of {', '.join(LOG_LEVELS)}"
            )
