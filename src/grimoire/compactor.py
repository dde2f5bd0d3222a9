"""Bandwidth-minimal wire encoding for resolved role sets."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from .roles import CUSTOM_ROLE_DEFAULT, CUSTOM_ROLE_FIELDS, RoleDefinition
from .script import ScriptImportResult, normalize_script

if TYPE_CHECKING:  # pragma: no cover - import only for type hints
    from .catalog import Catalog


def encode_role(role: RoleDefinition) -> dict[str, Any]:
    """Encode one role.

    Catalog roles travel as ``{"id": ...}`` because every participant holds
    the same catalog. Custom roles travel as ``{"<field index>": value}``
    holding only the fields that differ from the custom-role defaults.
    """

    if not role.is_custom:
        return {"id": role.id}
    stripped: dict[str, Any] = {}
    for index, key in enumerate(CUSTOM_ROLE_FIELDS):
        value = role.wire_value(key)
        if value != CUSTOM_ROLE_DEFAULT[key]:
            stripped[str(index)] = value
    return stripped


def encode_roles(roles: Iterable[RoleDefinition]) -> list[dict[str, Any]]:
    return [encode_role(role) for role in roles]


def decode_roles(
    catalog: "Catalog",
    payload: Any,
    current_roles: Optional[Mapping[str, RoleDefinition]] = None,
) -> ScriptImportResult:
    """Decode a received role list through the regular script import pipeline."""

    return normalize_script(catalog, payload, current_roles)


def encode_script_json(roles: Iterable[RoleDefinition]) -> str:
    """Encode roles as compact JSON text."""

    return json.dumps(encode_roles(roles), separators=(",", ":"))


def decode_script_json(
    catalog: "Catalog",
    raw: str,
    current_roles: Optional[Mapping[str, RoleDefinition]] = None,
) -> ScriptImportResult:
    """Decode JSON text produced by :func:`encode_script_json` or a script file.

    Raises:
        json.JSONDecodeError: If ``raw`` is not valid JSON.
    """

    return decode_roles(catalog, json.loads(raw), current_roles)


__all__ = [
    "decode_roles",
    "decode_script_json",
    "encode_role",
    "encode_roles",
    "encode_script_json",
]
