"""Serialization helpers for saving and restoring session state."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog

from .catalog import Catalog, default_catalog, load_catalog
from .compactor import encode_roles
from .config import SessionConfig
from .editions import Edition, edition_travelers, roles_for_edition
from .players import NightResponseRoster
from .session import GrimoireFlags, SessionState

LOGGER = structlog.get_logger(__name__)

SNAPSHOT_VERSION = 1


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Structured representation of a :class:`SessionState` suitable for persistence."""

    payload: dict[str, Any]

    def to_json(self, *, indent: int = 2) -> str:
        """Serialise the snapshot to JSON."""

        return json.dumps(self.payload, indent=indent)

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the underlying payload."""

        return json.loads(json.dumps(self.payload))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionSnapshot":
        """Wrap a decoded snapshot payload, rejecting unknown versions early."""

        _check_version(data)
        return cls(payload=dict(data))

    @classmethod
    def from_session(cls, state: SessionState) -> "SessionSnapshot":
        """Capture the provided session as a snapshot."""

        return cls(payload=_state_to_payload(state))

    def restore(
        self, catalog: Catalog, *, roster: Optional[NightResponseRoster] = None
    ) -> SessionState:
        """Rehydrate the snapshot back into a :class:`SessionState`."""

        return _payload_to_state(self.payload, catalog, roster)

    def save(self, path: str | Path, *, indent: int = 2) -> None:
        """Persist the snapshot to disk as JSON."""

        Path(path).write_text(self.to_json(indent=indent), encoding="utf-8")

    @classmethod
    def load(cls, path: str | Path) -> "SessionSnapshot":
        """Load a snapshot from disk."""

        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.from_dict(data)


def snapshot_session(state: SessionState) -> SessionSnapshot:
    """Produce a :class:`SessionSnapshot` for the supplied state."""

    return SessionSnapshot.from_session(state)


def restore_session(
    snapshot: SessionSnapshot,
    catalog: Catalog,
    *,
    roster: Optional[NightResponseRoster] = None,
) -> SessionState:
    """Restore a :class:`SessionState` instance from ``snapshot``."""

    return snapshot.restore(catalog, roster=roster)


def start_session(
    catalog: Optional[Catalog] = None,
    *,
    config: Optional[SessionConfig] = None,
    snapshot: Optional[SessionSnapshot] = None,
    roster: Optional[NightResponseRoster] = None,
) -> SessionState:
    """Create the session state from a snapshot (warm start) or catalog defaults.

    Without an explicit ``snapshot``, the config's ``snapshot_path`` is used
    when that file exists.
    """

    config = config or SessionConfig()
    if catalog is None:
        catalog = load_catalog(config.catalog_dir) if config.catalog_dir else default_catalog()

    if snapshot is None and config.snapshot_path is not None and config.snapshot_path.exists():
        snapshot = SessionSnapshot.load(config.snapshot_path)

    if snapshot is not None:
        LOGGER.info("session.warm_start", edition=snapshot.payload.get("edition", {}).get("id"))
        return snapshot.restore(catalog, roster=roster)

    LOGGER.info("session.cold_start", edition=config.default_edition)
    grimoire = GrimoireFlags(zoom=config.zoom, is_image_opt_in=config.is_image_opt_in)
    return SessionState.from_catalog(
        catalog, config.default_edition, roster=roster, grimoire=grimoire
    )


def _state_to_payload(state: SessionState) -> dict[str, Any]:
    custom_fabled = [role for role in state.fabled.values() if role.is_custom]
    return {
        "version": SNAPSHOT_VERSION,
        "customScript": _has_custom_script(state),
        "grimoire": state.grimoire.to_dict(),
        "modals": dict(state.modals),
        "edition": state.edition.to_dict(),
        "roles": encode_roles(state.roles.values()),
        "fabled": encode_roles(custom_fabled),
    }


def _payload_to_state(
    payload: Mapping[str, Any],
    catalog: Catalog,
    roster: Optional[NightResponseRoster],
) -> SessionState:
    _check_version(payload)

    state = SessionState.from_catalog(catalog, roster=roster)
    state.set_edition(Edition.from_dict(payload["edition"]))
    if payload.get("customScript", state.is_custom_edition):
        state.set_custom_roles([*payload.get("roles", []), *payload.get("fabled", [])])

    state.grimoire = GrimoireFlags.from_dict(payload.get("grimoire", {}))
    for name, is_open in payload.get("modals", {}).items():
        if name in state.modals:
            state.modals[name] = bool(is_open)
    return state


def _has_custom_script(state: SessionState) -> bool:
    """True when the role set came from a script import rather than the edition."""

    if state.is_custom_edition:
        return True
    official = roles_for_edition(state.catalog, state.edition)
    travelers = edition_travelers(state.catalog, state.edition)
    return (
        list(state.roles) != list(official)
        or list(state.travelers) != list(travelers)
        or any(role.is_custom for role in state.fabled.values())
    )


def _check_version(payload: Mapping[str, Any]) -> None:
    version = payload.get("version")
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported snapshot version: {version}")


__all__ = [
    "SNAPSHOT_VERSION",
    "SessionSnapshot",
    "restore_session",
    "snapshot_session",
    "start_session",
]
