from __future__ import annotations

import pytest

from grimoire.players import Player, PlayerRoster


def test_roster_keeps_insertion_order() -> None:
    roster = PlayerRoster([Player("p1", "Alice"), Player("p2", "Bob", role_id="imp")])

    assert [player.name for player in roster] == ["Alice", "Bob"]
    assert roster.get("p2").role_id == "imp"
    assert roster.get("p3") is None
    assert len(roster.players) == 2


def test_duplicate_player_ids_are_rejected() -> None:
    roster = PlayerRoster([Player("p1", "Alice")])
    with pytest.raises(ValueError, match="Duplicate player id"):
        roster.add(Player("p1", "Alicia"))


def test_empty_name_is_rejected() -> None:
    with pytest.raises(ValueError, match="name"):
        Player("p1", "")


def test_reset_night_responses() -> None:
    roster = PlayerRoster([Player("p1", "Alice"), Player("p2", "Bob")])
    for player in roster:
        player.mark_responded("vote")

    roster.reset_night_responses()
    assert all(player.has_responded == {} for player in roster)
