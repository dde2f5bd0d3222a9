"""Role metadata, the custom-role field table and ordering helpers."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping

from .enums import Team

# Version of the compact field-index encoding. Bump whenever
# CUSTOM_ROLE_FIELDS changes order or content.
COMPACT_PROTOCOL_VERSION = 1

# Index -> wire field name used by the compact encoding.
CUSTOM_ROLE_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "image",
    "ability",
    "edition",
    "firstNight",
    "firstNightReminder",
    "otherNight",
    "otherNightReminder",
    "reminders",
    "remindersGlobal",
    "setup",
    "team",
    "isCustom",
)

# Values filled into any field a custom role leaves unspecified.
CUSTOM_ROLE_DEFAULT: Mapping[str, Any] = {
    "id": "",
    "name": "",
    "image": "",
    "ability": "",
    "edition": "custom",
    "firstNight": 0,
    "firstNightReminder": "",
    "otherNight": 0,
    "otherNightReminder": "",
    "reminders": [],
    "remindersGlobal": [],
    "setup": False,
    "team": Team.TOWNSFOLK.value,
    "isCustom": True,
}

_WIRE_TO_ATTR: Mapping[str, str] = {
    "id": "id",
    "name": "name",
    "image": "image",
    "ability": "ability",
    "edition": "edition",
    "firstNight": "first_night",
    "firstNightReminder": "first_night_reminder",
    "otherNight": "other_night",
    "otherNightReminder": "other_night_reminder",
    "reminders": "reminders",
    "remindersGlobal": "reminders_global",
    "setup": "setup",
    "team": "team",
    "isCustom": "is_custom",
    "imageAlt": "image_alt",
}

TEAM_SORT_ORDER: Mapping[Team, int] = {
    Team.DEMON: 0,
    Team.MINION: 1,
    Team.OUTSIDER: 2,
    Team.TOWNSFOLK: 3,
    Team.TRAVELER: 4,
    Team.FABLED: 5,
}

GENERIC_ICONS: Mapping[Team, str] = {
    Team.TOWNSFOLK: "good",
    Team.OUTSIDER: "outsider",
    Team.MINION: "minion",
    Team.DEMON: "evil",
    Team.FABLED: "fabled",
}


@dataclass(frozen=True, slots=True)
class RoleDefinition:
    """A single character, either from the catalog or from a custom script."""

    id: str
    name: str
    team: Team
    ability: str = ""
    image: str = ""
    edition: str = ""
    first_night: int = 0
    first_night_reminder: str = ""
    other_night: int = 0
    other_night_reminder: str = ""
    reminders: tuple[str, ...] = ()
    reminders_global: tuple[str, ...] = ()
    setup: bool = False
    is_custom: bool = False
    image_alt: str = ""

    def wire_value(self, key: str) -> Any:
        """Return the value for a camelCase wire key in its JSON shape."""

        value = getattr(self, _WIRE_TO_ATTR[key])
        if isinstance(value, Team):
            return value.value
        if isinstance(value, tuple):
            return list(value)
        return value

    def to_dict(self) -> dict[str, Any]:
        """Convert the role into a JSON-serialisable dictionary."""

        return {key: self.wire_value(key) for key in _WIRE_TO_ATTR}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoleDefinition":
        """Build a role from a camelCase mapping.

        Values are coerced to the declared field types. Raises ``ValueError``
        when the team is not one of the known categories.
        """

        return cls(
            id=_as_text(data.get("id")),
            name=_as_text(data.get("name")),
            team=Team(_as_text(data.get("team"))),
            ability=_as_text(data.get("ability")),
            image=_as_text(data.get("image")),
            edition=_as_text(data.get("edition")),
            first_night=_as_rank(data.get("firstNight")),
            first_night_reminder=_as_text(data.get("firstNightReminder")),
            other_night=_as_rank(data.get("otherNight")),
            other_night_reminder=_as_text(data.get("otherNightReminder")),
            reminders=_as_texts(data.get("reminders")),
            reminders_global=_as_texts(data.get("remindersGlobal")),
            setup=bool(data.get("setup", False)),
            is_custom=bool(data.get("isCustom", False)),
            image_alt=_as_text(data.get("imageAlt")),
        )

    def replace(self, **changes: Any) -> "RoleDefinition":
        """Return a copy of the role with ``changes`` applied."""

        return dataclasses.replace(self, **changes)


ResolvedRoleSet = Dict[str, RoleDefinition]


def team_sort_key(role: RoleDefinition) -> int:
    return TEAM_SORT_ORDER[role.team]


def sort_by_team(roles: Iterable[RoleDefinition]) -> list[RoleDefinition]:
    """Stable sort placing demons first, then minions, outsiders and townsfolk."""

    return sorted(roles, key=team_sort_key)


def to_role_set(roles: Iterable[RoleDefinition]) -> ResolvedRoleSet:
    """Key roles by id, keeping iteration order. Later duplicates replace values."""

    return {role.id: role for role in roles}


def generic_icon(team: Team) -> str:
    """Return the placeholder icon name used for a custom role of ``team``."""

    return GENERIC_ICONS.get(team, "custom")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_rank(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return abs(int(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _as_texts(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if item is not None)


__all__ = [
    "COMPACT_PROTOCOL_VERSION",
    "CUSTOM_ROLE_DEFAULT",
    "CUSTOM_ROLE_FIELDS",
    "GENERIC_ICONS",
    "ResolvedRoleSet",
    "RoleDefinition",
    "TEAM_SORT_ORDER",
    "generic_icon",
    "sort_by_team",
    "team_sort_key",
    "to_role_set",
]
