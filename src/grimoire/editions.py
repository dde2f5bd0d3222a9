"""Edition metadata and role-set resolution for official scripts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

from .enums import Team
from .night_order import clean_id
from .roles import ResolvedRoleSet, RoleDefinition, sort_by_team, to_role_set

if TYPE_CHECKING:  # pragma: no cover - import only for type hints
    from .catalog import Catalog


@dataclass(frozen=True, slots=True)
class Edition:
    """An official or ad-hoc script."""

    id: str
    name: str = ""
    roles: tuple[str, ...] = ()
    author: str = ""
    description: str = ""
    level: str = ""
    is_official: bool = False

    def lists(self, role_id: str) -> bool:
        """Return ``True`` when the edition explicitly names ``role_id``."""

        return role_id in self.roles

    def includes(self, role: RoleDefinition) -> bool:
        """Return ``True`` when the role is tagged with or listed by this edition."""

        return role.edition == self.id or self.lists(role.id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "roles": list(self.roles),
            "author": self.author,
            "description": self.description,
            "level": self.level,
            "isOfficial": self.is_official,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Edition":
        """Build an edition from raw data. ``id`` is required."""

        edition_id = data.get("id")
        if not isinstance(edition_id, str) or not edition_id:
            raise ValueError("Edition id must be a non-empty string")
        roles_raw = data.get("roles") or []
        if not isinstance(roles_raw, (list, tuple)):
            raise ValueError(f"Edition {edition_id}: roles must be a list")
        return cls(
            id=edition_id,
            name=str(data.get("name") or ""),
            roles=tuple(clean_id(item) for item in roles_raw),
            author=str(data.get("author") or ""),
            description=str(data.get("description") or ""),
            level=str(data.get("level") or ""),
            is_official=bool(data.get("isOfficial", False)),
        )


def roles_for_edition(catalog: "Catalog", edition: Edition) -> ResolvedRoleSet:
    """Return the characters of ``edition`` sorted demons first.

    Travelers and fabled are kept in their own pools and never appear here.
    """

    selected = [
        role
        for role in catalog.roles_by_id.values()
        if role.team not in (Team.TRAVELER, Team.FABLED) and edition.includes(role)
    ]
    return to_role_set(sort_by_team(selected))


def edition_travelers(catalog: "Catalog", edition: Edition) -> ResolvedRoleSet:
    """Return the travelers that belong to or are listed by ``edition``."""

    return to_role_set(
        role
        for role in catalog.roles_by_id.values()
        if role.team is Team.TRAVELER and edition.includes(role)
    )


def extension_pool(catalog: "Catalog", edition: Edition) -> ResolvedRoleSet:
    """Return travelers from other editions that are available to add."""

    return to_role_set(
        role
        for role in catalog.roles_by_id.values()
        if role.team is Team.TRAVELER and not edition.includes(role)
    )


__all__ = ["Edition", "edition_travelers", "extension_pool", "roles_for_edition"]
