from __future__ import annotations

from pathlib import Path

import pytest

from grimoire.catalog import default_catalog
from grimoire.config import SessionConfig
from grimoire.persistence import (
    SNAPSHOT_VERSION,
    SessionSnapshot,
    restore_session,
    snapshot_session,
    start_session,
)
from grimoire.players import Player, PlayerRoster
from grimoire.session import SessionState

MONSTER = {"id": "mymonster", "name": "My Monster", "ability": "Kills at night.", "team": "demon"}
FABLE = {"id": "myfable", "name": "My Fable", "ability": "Something.", "team": "fabled"}


def _custom_state() -> SessionState:
    state = SessionState.from_catalog(default_catalog())
    state.set_edition({"id": "custom", "name": "Homebrew", "author": "Sam"})
    state.set_custom_roles(["chambermaid", MONSTER, FABLE, "gunslinger"])
    state.toggle_night(True)
    state.set_zoom(2)
    state.toggle_modal("nightOrder")
    return state


def test_cold_start_defaults() -> None:
    state = start_session()
    assert state.edition.id == "tb"
    assert state.grimoire.is_night is False


def test_cold_start_applies_config() -> None:
    roster = PlayerRoster([Player("p1", "Alice")])
    config = SessionConfig(default_edition="bmr", zoom=1, is_image_opt_in=True)

    state = start_session(config=config, roster=roster)

    assert state.edition.id == "bmr"
    assert state.grimoire.zoom == 1
    assert state.grimoire.is_image_opt_in is True
    assert state.roster is roster


def test_official_edition_snapshot_round_trip() -> None:
    state = SessionState.from_catalog(default_catalog(), "snv")
    state.toggle_muted()

    restored = restore_session(snapshot_session(state), default_catalog())

    assert restored.edition == state.edition
    assert restored.roles == state.roles
    assert restored.travelers == state.travelers
    assert restored.grimoire == state.grimoire


def test_custom_script_survives_save_and_load(tmp_path: Path) -> None:
    state = _custom_state()
    path = tmp_path / "session.json"
    SessionSnapshot.from_session(state).save(path)

    restored = SessionSnapshot.load(path).restore(default_catalog())

    assert restored.edition == state.edition
    assert restored.roles == state.roles
    assert restored.fabled == state.fabled
    assert restored.other_travelers == state.other_travelers
    assert restored.grimoire == state.grimoire
    assert restored.modals == state.modals


def test_snapshot_payload_is_compact() -> None:
    payload = snapshot_session(_custom_state()).to_dict()

    assert payload["version"] == SNAPSHOT_VERSION
    assert {"id": "chambermaid"} in payload["roles"]
    assert payload["fabled"] == [{"0": "myfable", "1": "My Fable", "3": "Something.", "12": "fabled"}]
    assert payload["grimoire"]["isNight"] is True


def test_warm_start_from_configured_snapshot(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    snapshot_session(_custom_state()).save(path)

    state = start_session(config=SessionConfig(snapshot_path=path))

    assert state.edition.id == "custom"
    assert "mymonster" in state.roles
    assert state.grimoire.zoom == 2


def test_missing_snapshot_file_falls_back_to_cold_start(tmp_path: Path) -> None:
    state = start_session(config=SessionConfig(snapshot_path=tmp_path / "absent.json"))
    assert state.edition.id == "tb"


def test_unsupported_snapshot_version() -> None:
    payload = {"version": 99, "edition": {"id": "tb"}}
    with pytest.raises(ValueError, match="Unsupported snapshot version"):
        SessionSnapshot.from_dict(payload)
    with pytest.raises(ValueError, match="Unsupported snapshot version"):
        SessionSnapshot(payload=payload).restore(default_catalog())


def test_script_imported_on_official_edition_survives_restore() -> None:
    state = SessionState.from_catalog(default_catalog())
    state.set_custom_roles(["imp", MONSTER])

    payload = snapshot_session(state).to_dict()
    restored = SessionSnapshot.from_dict(payload).restore(default_catalog())

    assert payload["customScript"] is True
    assert restored.edition.id == "tb"
    assert list(restored.roles) == ["imp", "mymonster"]
    assert restored.roles == state.roles
    assert restored.travelers == {}


def test_untouched_official_edition_is_not_marked_custom() -> None:
    state = SessionState.from_catalog(default_catalog(), "bmr")

    payload = snapshot_session(state).to_dict()
    restored = restore_session(SessionSnapshot.from_dict(payload), default_catalog())

    assert payload["customScript"] is False
    assert restored.roles == state.roles
    assert restored.travelers == state.travelers
