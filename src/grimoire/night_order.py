"""Night-order ranks for the first night and every other night."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from .roles import RoleDefinition

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


def clean_id(raw: Any) -> str:
    """Strip every character outside ``[A-Za-z0-9]`` from a role id."""

    if raw is None:
        return ""
    return _NON_ALPHANUMERIC.sub("", str(raw))


def rank(sequence: Sequence[str], role_id: str) -> int:
    """Return the 1-based position of ``role_id`` in ``sequence``, or 0 if absent."""

    cleaned = clean_id(role_id)
    try:
        return sequence.index(cleaned) + 1
    except ValueError:
        return 0


@dataclass(frozen=True, slots=True)
class NightOrderTable:
    """The two wake-order sequences from the night sheet."""

    first_night: tuple[str, ...]
    other_night: tuple[str, ...]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NightOrderTable":
        """Build the table from ``{"firstNight": [...], "otherNight": [...]}``."""

        first = data["firstNight"]
        other = data["otherNight"]
        if not isinstance(first, list) or not isinstance(other, list):
            raise ValueError("firstNight and otherNight must be lists")
        return cls(
            first_night=tuple(clean_id(item) for item in first),
            other_night=tuple(clean_id(item) for item in other),
        )

    def first_night_rank(self, role_id: str) -> int:
        return rank(self.first_night, role_id)

    def other_night_rank(self, role_id: str) -> int:
        return rank(self.other_night, role_id)

    def sheet(
        self, roles: Iterable[RoleDefinition], *, first_night: bool = True
    ) -> tuple[RoleDefinition, ...]:
        """Return the roles that wake on the chosen night, in wake order.

        Ranks are read from the roles themselves so custom roles with their
        own ranks slot in alongside catalog roles.
        """

        if first_night:
            acting = [role for role in roles if role.first_night > 0]
            acting.sort(key=lambda role: role.first_night)
        else:
            acting = [role for role in roles if role.other_night > 0]
            acting.sort(key=lambda role: role.other_night)
        return tuple(acting)


__all__ = ["NightOrderTable", "clean_id", "rank"]
