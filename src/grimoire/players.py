"""Player roster models used by the session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Protocol

PlayerId = str


class NightResponseRoster(Protocol):
    """What the session needs from a roster: clearing per-night responses."""

    def reset_night_responses(self) -> None:
        """Forget which players have responded during the current night."""


@dataclass(slots=True)
class Player:
    """A seated participant and the role token in front of them."""

    player_id: PlayerId
    name: str
    role_id: str = ""
    has_responded: dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("name may not be empty")

    def mark_responded(self, prompt: str) -> None:
        self.has_responded[prompt] = True


class PlayerRoster:
    """Ordered collection of players keyed by id."""

    def __init__(self, players: Iterable[Player] | None = None) -> None:
        self._players: dict[PlayerId, Player] = {}
        for player in players or ():
            self.add(player)

    def add(self, player: Player) -> None:
        if player.player_id in self._players:
            raise ValueError(f"Duplicate player id: {player.player_id}")
        self._players[player.player_id] = player

    def get(self, player_id: PlayerId) -> Optional[Player]:
        return self._players.get(player_id)

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players.values())

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players.values())

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._players)

    def reset_night_responses(self) -> None:
        for player in self._players.values():
            player.has_responded = {}


__all__ = ["NightResponseRoster", "Player", "PlayerId", "PlayerRoster"]
