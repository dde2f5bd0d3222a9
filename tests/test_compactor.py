from __future__ import annotations

import json

from grimoire.catalog import default_catalog
from grimoire.compactor import (
    decode_roles,
    decode_script_json,
    encode_role,
    encode_roles,
    encode_script_json,
)
from grimoire.script import normalize_script

MONSTER = {"id": "mymonster", "name": "My Monster", "ability": "Kills at night.", "team": "demon"}


def test_catalog_roles_encode_as_bare_id() -> None:
    catalog = default_catalog()
    assert encode_role(catalog.roles_by_id["washerwoman"]) == {"id": "washerwoman"}


def test_custom_roles_encode_only_non_default_fields() -> None:
    role = normalize_script(default_catalog(), [MONSTER]).roles["mymonster"]
    assert encode_role(role) == {
        "0": "mymonster",
        "1": "My Monster",
        "3": "Kills at night.",
        "12": "demon",
    }


def test_custom_townsfolk_omits_team() -> None:
    entry = {"id": "owl", "name": "Owl", "ability": "Hoots.", "reminders": ["Hoot"], "setup": True}
    role = normalize_script(default_catalog(), [entry]).roles["owl"]
    assert encode_role(role) == {
        "0": "owl",
        "1": "Owl",
        "3": "Hoots.",
        "9": ["Hoot"],
        "11": True,
    }


def test_mixed_role_set_survives_encoding() -> None:
    catalog = default_catalog()
    original = normalize_script(
        catalog,
        [
            "imp",
            "chambermaid",
            MONSTER,
            {
                "id": "owl",
                "name": "Owl",
                "ability": "Hoots.",
                "edition": "homebrew",
                "firstNight": 3,
                "firstNightReminder": "Wake the Owl.",
                "reminders": ["Hoot"],
                "remindersGlobal": ["Nest"],
            },
        ],
    )

    decoded = decode_roles(catalog, encode_roles(original.roles.values()))
    assert decoded.roles == original.roles
    assert decoded.rejected == ()


def test_script_json_is_compact_text() -> None:
    catalog = default_catalog()
    roles = normalize_script(catalog, ["imp", MONSTER]).roles
    raw = encode_script_json(roles.values())

    assert " " not in raw.replace("My Monster", "").replace("Kills at night.", "")
    assert json.loads(raw)[0] == {"id": "imp"}
    assert decode_script_json(catalog, raw).roles == roles
