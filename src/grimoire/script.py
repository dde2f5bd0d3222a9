"""Custom script import: turn an untrusted role list into a resolved role set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

import structlog

from .enums import Team
from .exceptions import ScriptImportError
from .night_order import clean_id
from .roles import (
    CUSTOM_ROLE_DEFAULT,
    CUSTOM_ROLE_FIELDS,
    ResolvedRoleSet,
    RoleDefinition,
    generic_icon,
    sort_by_team,
    to_role_set,
)

if TYPE_CHECKING:  # pragma: no cover - import only for type hints
    from .catalog import Catalog

LOGGER = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RejectedEntry:
    """A script entry that was dropped during import, with the reason."""

    index: int
    entry: Any
    reason: str


@dataclass(frozen=True, slots=True)
class ScriptImportResult:
    """Partitioned outcome of a script import."""

    roles: ResolvedRoleSet
    fabled: ResolvedRoleSet
    other_travelers: ResolvedRoleSet
    rejected: tuple[RejectedEntry, ...] = ()

    @property
    def custom_roles(self) -> tuple[RoleDefinition, ...]:
        """Roles in the imported set that are not catalog characters."""

        return tuple(role for role in self.roles.values() if role.is_custom)


class _Rejected(Exception):
    """Internal signal carrying the reason an entry was dropped."""


def is_compact(entry: Any) -> bool:
    """Return ``True`` when ``entry`` uses numeric field-index keys."""

    if not isinstance(entry, Mapping):
        return False
    return bool(entry.get("0") or entry.get(0))


def expand_compact(entry: Mapping[Any, Any]) -> dict[str, Any]:
    """Replace numeric field-index keys with field names. Unknown keys are dropped."""

    expanded: dict[str, Any] = {}
    for key, value in entry.items():
        if isinstance(key, bool):
            continue
        try:
            index = int(key)
        except (TypeError, ValueError):
            continue
        if 0 <= index < len(CUSTOM_ROLE_FIELDS):
            expanded[CUSTOM_ROLE_FIELDS[index]] = value
    return expanded


def normalize_script(
    catalog: "Catalog",
    entries: Any,
    current_roles: Optional[Mapping[str, RoleDefinition]] = None,
    *,
    strict: bool = False,
) -> ScriptImportResult:
    """Resolve a custom script into roles, fabled and the remaining traveler pool.

    Entries may be bare ids, ``{"id": ..., ...}`` mappings or compact
    ``{"0": id, "1": name, ...}`` mappings. Known ids always resolve to the
    catalog definition; ids already in ``current_roles`` are reused as-is;
    anything else becomes a custom role filled from the defaults. Entries
    without an id, name, ability or valid team are dropped and reported in
    :attr:`ScriptImportResult.rejected`.

    Raises:
        ScriptImportError: Only when ``strict`` is set and an entry was rejected.
    """
    existing = current_roles or {}
    rejected: list[RejectedEntry] = []

    if isinstance(entries, (list, tuple)):
        raw_entries = list(entries)
    else:
        raw_entries = []
        rejected.append(RejectedEntry(index=-1, entry=entries, reason="script must be a list"))
        LOGGER.debug("script.entry_rejected", index=-1, reason="script must be a list")

    resolved: list[RoleDefinition] = []
    for index, entry in enumerate(raw_entries):
        try:
            resolved.append(_resolve_entry(catalog, existing, entry))
        except _Rejected as exc:
            rejected.append(RejectedEntry(index=index, entry=entry, reason=str(exc)))
            LOGGER.debug("script.entry_rejected", index=index, reason=str(exc))

    ordered = sort_by_team(resolved)
    roles = to_role_set(role for role in ordered if role.team is not Team.FABLED)
    custom_fabled = to_role_set(role for role in ordered if role.team is Team.FABLED)
    fabled = {**custom_fabled, **catalog.fabled}

    listed_ids = set(_raw_ids(raw_entries))
    other_travelers = to_role_set(
        role for role in catalog.travelers if role.id not in listed_ids
    )

    LOGGER.info(
        "script.imported",
        entries=len(raw_entries),
        roles=len(roles),
        custom_fabled=len(custom_fabled),
        rejected=len(rejected),
    )
    if strict and rejected:
        raise ScriptImportError(f"{len(rejected)} script entries rejected", tuple(rejected))

    return ScriptImportResult(
        roles=roles,
        fabled=fabled,
        other_travelers=other_travelers,
        rejected=tuple(rejected),
    )


def _resolve_entry(
    catalog: "Catalog", existing: Mapping[str, RoleDefinition], entry: Any
) -> RoleDefinition:
    fields = _decompact(entry)
    role_id = clean_id(fields.get("id"))
    if not role_id:
        raise _Rejected("missing id")

    known = catalog.role(role_id)
    if known is not None:
        return known

    role = existing.get(role_id)
    if role is None:
        merged = {**CUSTOM_ROLE_DEFAULT, **fields, "id": role_id, "isCustom": True}
        try:
            role = RoleDefinition.from_dict(merged)
        except ValueError:
            raise _Rejected(f"invalid team {merged.get('team')!r}") from None

    role = role.replace(
        image_alt=generic_icon(role.team),
        first_night=abs(role.first_night),
        other_night=abs(role.other_night),
    )
    if not role.name:
        raise _Rejected("missing name")
    if not role.ability:
        raise _Rejected("missing ability")
    return role


def _decompact(entry: Any) -> Mapping[str, Any]:
    if isinstance(entry, str):
        return {"id": entry}
    if is_compact(entry):
        return expand_compact(entry)
    if isinstance(entry, Mapping):
        return entry
    raise _Rejected("entry must be a role id or a mapping")


def _raw_ids(entries: Iterable[Any]) -> Iterable[str]:
    for entry in entries:
        if isinstance(entry, str):
            yield clean_id(entry)
        elif isinstance(entry, Mapping) and "id" in entry:
            yield clean_id(entry["id"])


__all__ = [
    "RejectedEntry",
    "ScriptImportResult",
    "expand_compact",
    "is_compact",
    "normalize_script",
]
