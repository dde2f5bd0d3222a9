"""Static catalog loading: roles, editions, night order, fabled and jinxes."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import structlog

from .editions import Edition
from .enums import Team
from .exceptions import CatalogError
from .night_order import NightOrderTable, clean_id
from .roles import RoleDefinition

LOGGER = structlog.get_logger(__name__)

DATA_DIR = Path(__file__).parent / "data"

ROLES_FILE = "roles.json"
EDITIONS_FILE = "editions.json"
NIGHT_ORDER_FILE = "nightsheet.json"
FABLED_FILE = "fabled.json"
JINXES_FILE = "hatred.json"

JinxTable = Mapping[str, Mapping[str, str]]


@dataclass(frozen=True, slots=True)
class Catalog:
    """Read-only lookup tables built once at startup and shared by reference."""

    roles_by_id: Mapping[str, RoleDefinition]
    editions_by_id: Mapping[str, Edition]
    fabled: Mapping[str, RoleDefinition]
    jinxes: JinxTable
    night_order: NightOrderTable

    @property
    def default_edition(self) -> Edition:
        """The first edition listed in the edition catalog."""

        return next(iter(self.editions_by_id.values()))

    @property
    def travelers(self) -> tuple[RoleDefinition, ...]:
        return tuple(role for role in self.roles_by_id.values() if role.team is Team.TRAVELER)

    def edition(self, edition_id: str) -> Optional[Edition]:
        return self.editions_by_id.get(edition_id)

    def role(self, role_id: str) -> Optional[RoleDefinition]:
        """Look up a catalog character or fabled by (uncleaned) id."""

        cleaned = clean_id(role_id)
        return self.roles_by_id.get(cleaned) or self.fabled.get(cleaned)

    def jinx(self, first_id: str, second_id: str) -> Optional[str]:
        """Return the jinx text between two roles, checking both directions."""

        first, second = clean_id(first_id), clean_id(second_id)
        reason = self.jinxes.get(first, {}).get(second)
        if reason is None:
            reason = self.jinxes.get(second, {}).get(first)
        return reason

    def jinxes_for(self, role_id: str) -> dict[str, str]:
        """Return every role jinxed with ``role_id`` mapped to the jinx text."""

        cleaned = clean_id(role_id)
        related = dict(self.jinxes.get(cleaned, {}))
        for other_id, entries in self.jinxes.items():
            if cleaned in entries and other_id not in related:
                related[other_id] = entries[cleaned]
        return related


def load_catalog(data_dir: str | Path | None = None) -> Catalog:
    """Load the catalog from JSON files in ``data_dir`` (package data by default).

    Raises:
        CatalogError: If roles, editions, night order or fabled data is missing
            or malformed. A broken jinx file is logged and treated as empty.
    """
    base = Path(data_dir) if data_dir is not None else DATA_DIR
    catalog = build_catalog(
        roles=_read_json(base / ROLES_FILE),
        editions=_read_json(base / EDITIONS_FILE),
        night_order=_read_json(base / NIGHT_ORDER_FILE),
        fabled=_read_json(base / FABLED_FILE),
        jinxes=load_jinxes(base / JINXES_FILE),
    )
    LOGGER.info(
        "catalog.loaded",
        data_dir=str(base),
        roles=len(catalog.roles_by_id),
        editions=len(catalog.editions_by_id),
        fabled=len(catalog.fabled),
        jinxes=len(catalog.jinxes),
    )
    return catalog


@lru_cache(maxsize=None)
def default_catalog() -> Catalog:
    """Return the packaged catalog, loaded once per process."""

    return load_catalog()


def build_catalog(
    *,
    roles: Any,
    editions: Any,
    night_order: Any,
    fabled: Any,
    jinxes: JinxTable | None = None,
) -> Catalog:
    """Build a :class:`Catalog` from already-decoded JSON data."""

    if not isinstance(night_order, Mapping):
        raise CatalogError("Night order must be a mapping with firstNight and otherNight")
    try:
        night_table = NightOrderTable.from_dict(night_order)
    except (KeyError, ValueError) as exc:
        raise CatalogError(f"Invalid night order: {exc}") from exc

    roles_by_id = _build_roles(roles, night_table, "role")
    fabled_by_id = _build_roles(fabled, night_table, "fabled")
    editions_by_id = _build_editions(editions)

    return Catalog(
        roles_by_id=MappingProxyType(roles_by_id),
        editions_by_id=MappingProxyType(editions_by_id),
        fabled=MappingProxyType(fabled_by_id),
        jinxes=MappingProxyType(dict(jinxes or {})),
        night_order=night_table,
    )


def parse_jinxes(data: Any) -> dict[str, Mapping[str, str]]:
    """Convert ``[{id, jinx: [{id, reason}]}]`` records into a nested lookup."""

    if not isinstance(data, list):
        raise ValueError("Jinx data must be a list")
    table: dict[str, Mapping[str, str]] = {}
    for record in data:
        entries = {clean_id(item["id"]): str(item["reason"]) for item in record["jinx"]}
        table[clean_id(record["id"])] = MappingProxyType(entries)
    return table


def load_jinxes(path: Path) -> dict[str, Mapping[str, str]]:
    """Read the jinx file. Jinxes are advisory, so any failure yields an empty table."""

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return parse_jinxes(data)
    except (OSError, ValueError, KeyError, TypeError) as exc:
        LOGGER.warning("catalog.jinxes_unavailable", path=str(path), error=str(exc))
        return {}


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"Catalog file not readable: {path}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Invalid JSON in {path.name}: {exc}") from exc


def _build_roles(
    records: Any, night_table: NightOrderTable, label: str
) -> dict[str, RoleDefinition]:
    if not isinstance(records, list):
        raise CatalogError(f"The {label} catalog must be a list")

    built: dict[str, RoleDefinition] = {}
    for idx, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise CatalogError(f"{label.capitalize()} entry {idx + 1} must be a mapping")
        role_id = clean_id(record.get("id"))
        if not role_id:
            raise CatalogError(f"{label.capitalize()} entry {idx + 1} is missing 'id'")
        if role_id in built:
            raise CatalogError(f"Duplicate {label} id: {role_id}")
        try:
            role = RoleDefinition.from_dict({**record, "id": role_id, "isCustom": False})
        except ValueError as exc:
            raise CatalogError(f"{label.capitalize()} {role_id}: {exc}") from exc
        if not role.name:
            raise CatalogError(f"{label.capitalize()} {role_id} is missing 'name'")
        built[role_id] = role.replace(
            first_night=night_table.first_night_rank(role_id),
            other_night=night_table.other_night_rank(role_id),
        )
    return built


def _build_editions(records: Any) -> dict[str, Edition]:
    if not isinstance(records, list) or not records:
        raise CatalogError("The edition catalog must be a non-empty list")

    editions: dict[str, Edition] = {}
    for idx, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise CatalogError(f"Edition entry {idx + 1} must be a mapping")
        try:
            edition = Edition.from_dict(record)
        except ValueError as exc:
            raise CatalogError(f"Edition entry {idx + 1}: {exc}") from exc
        if edition.id in editions:
            raise CatalogError(f"Duplicate edition id: {edition.id}")
        editions[edition.id] = edition
    return editions


__all__ = [
    "Catalog",
    "DATA_DIR",
    "JinxTable",
    "build_catalog",
    "default_catalog",
    "load_catalog",
    "load_jinxes",
    "parse_jinxes",
]
