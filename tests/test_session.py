from __future__ import annotations

from grimoire.catalog import default_catalog
from grimoire.players import Player, PlayerRoster
from grimoire.session import MODAL_NAMES, ActiveJinx, GrimoireFlags, SessionState

MONSTER = {"id": "mymonster", "name": "My Monster", "ability": "Kills at night.", "team": "demon"}


def _state(**kwargs) -> SessionState:
    return SessionState.from_catalog(default_catalog(), **kwargs)


def test_cold_start_uses_default_edition() -> None:
    state = _state()

    assert state.edition.id == "tb"
    assert len(state.roles) == 22
    assert list(state.travelers) == ["bureaucrat", "thief", "gunslinger", "scapegoat", "beggar"]
    assert len(state.other_travelers) == 10
    assert len(state.fabled) == 12
    assert state.grimoire == GrimoireFlags()
    assert set(state.modals) == set(MODAL_NAMES)
    assert not any(state.modals.values())


def test_cold_start_with_named_edition() -> None:
    state = _state(edition_id="snv")
    assert state.edition.id == "snv"
    assert "mathematician" in state.roles
    assert "barista" in state.travelers


def test_toggles_flip_or_apply_explicit_values() -> None:
    state = _state()

    assert state.toggle_muted() is True
    assert state.toggle_muted() is False
    assert state.toggle_menu(True) is True
    assert state.toggle_menu(True) is True
    assert state.toggle_night_order(False) is False
    assert state.toggle_static("yes") is True
    assert state.toggle_grimoire() is False
    assert state.toggle_image_opt_in() is True
    assert state.grimoire.is_static is True


def test_zoom_and_background() -> None:
    state = _state()
    state.set_zoom(3)
    state.set_background("https://example.com/bg.png")
    assert state.grimoire.zoom == 3
    assert state.grimoire.background == "https://example.com/bg.png"


def test_toggle_night_clears_night_responses() -> None:
    roster = PlayerRoster([Player("p1", "Alice"), Player("p2", "Bob")])
    state = _state(roster=roster)

    roster.get("p1").mark_responded("fortuneteller")
    assert state.toggle_night() is True
    assert roster.get("p1").has_responded == {}

    roster.get("p2").mark_responded("empath")
    assert state.toggle_night(True) is True
    assert roster.get("p2").has_responded == {}
    assert state.toggle_night(False) is False


def test_toggle_modal_is_exclusive() -> None:
    state = _state()

    state.toggle_modal("fabled")
    state.toggle_modal("role")
    assert state.modals["role"] is True
    assert sum(state.modals.values()) == 1

    state.toggle_modal("role")
    assert not any(state.modals.values())


def test_toggle_modal_without_name_closes_everything() -> None:
    state = _state()
    state.toggle_modal("reference")
    state.toggle_modal(None)
    assert not any(state.modals.values())

    state.toggle_modal("nightOrder")
    state.toggle_modal("does-not-exist")
    assert not any(state.modals.values())
    assert "does-not-exist" not in state.modals


def test_set_known_edition_replaces_pools_and_closes_modal() -> None:
    state = _state()
    state.toggle_modal("edition")

    state.set_edition({"id": "bmr"})

    assert state.edition.name
    assert state.edition.is_official
    assert len(state.roles) == 25
    assert list(state.roles)[0] == "zombuul"
    assert "apprentice" in state.travelers
    assert "bureaucrat" in state.other_travelers
    assert state.modals["edition"] is False
    assert not state.is_custom_edition


def test_set_unknown_edition_is_ad_hoc() -> None:
    state = _state()
    before = dict(state.roles)
    state.toggle_modal("edition")

    state.set_edition({"id": "custom", "name": "My Script", "author": "Me"})

    assert state.edition.id == "custom"
    assert state.edition.author == "Me"
    assert state.roles == before
    assert state.modals["edition"] is False
    assert state.is_custom_edition


def test_set_custom_roles_replaces_role_set() -> None:
    state = _state()
    result = state.set_custom_roles(["washerwoman", MONSTER, "beggar"])

    assert list(state.roles) == ["mymonster", "washerwoman", "beggar"]
    assert state.travelers == {}
    assert "beggar" not in state.other_travelers
    assert len(state.other_travelers) == 14
    assert state.last_import is result


def test_active_jinxes_cover_role_pairs() -> None:
    state = _state()
    state.set_custom_roles(["chambermaid", "mathematician", "lunatic"])

    assert state.active_jinxes() == (
        ActiveJinx("lunatic", "mathematician", state.jinx("lunatic", "mathematician")),
        ActiveJinx("chambermaid", "mathematician", state.jinx("mathematician", "chambermaid")),
    )
    assert _state().active_jinxes() == ()


def test_first_night_order_includes_travelers() -> None:
    state = _state()
    assert [role.id for role in state.night_order(first_night=True)] == [
        "poisoner",
        "washerwoman",
        "librarian",
        "investigator",
        "chef",
        "empath",
        "fortuneteller",
        "butler",
        "spy",
        "bureaucrat",
        "thief",
    ]


def test_other_night_order_is_sorted_by_rank() -> None:
    ranks = [role.other_night for role in _state().night_order(first_night=False)]
    assert ranks == sorted(ranks)
    assert all(rank > 0 for rank in ranks)


def test_role_lookup_searches_pools_then_catalog() -> None:
    state = _state()
    state.set_custom_roles([MONSTER])

    assert state.role("my-monster").is_custom
    assert state.role("fortune-teller").id == "fortuneteller"
    assert state.role("djinn").id == "djinn"
    assert state.role("nobody") is None
