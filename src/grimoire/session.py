"""Mutable session aggregate: active edition, role set, pools and UI toggles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

import structlog

from .catalog import Catalog, JinxTable
from .editions import Edition, edition_travelers, extension_pool, roles_for_edition
from .night_order import clean_id
from .players import NightResponseRoster
from .roles import ResolvedRoleSet, RoleDefinition
from .script import ScriptImportResult, normalize_script

LOGGER = structlog.get_logger(__name__)

MODAL_NAMES: tuple[str, ...] = (
    "edition",
    "fabled",
    "gameState",
    "messages",
    "nightOrder",
    "reference",
    "reminder",
    "role",
    "roles",
    "voteHistory",
)

_FLAG_KEYS: Mapping[str, str] = {
    "isNight": "is_night",
    "isNightOrder": "is_night_order",
    "isPublic": "is_public",
    "isMenuOpen": "is_menu_open",
    "isStatic": "is_static",
    "isMuted": "is_muted",
    "isImageOptIn": "is_image_opt_in",
    "zoom": "zoom",
    "background": "background",
}


@dataclass(slots=True)
class GrimoireFlags:
    """Display and phase toggles shared by everyone in the session."""

    is_night: bool = False
    is_night_order: bool = True
    is_public: bool = True
    is_menu_open: bool = False
    is_static: bool = False
    is_muted: bool = False
    is_image_opt_in: bool = False
    zoom: int = 0
    background: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, attr) for key, attr in _FLAG_KEYS.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GrimoireFlags":
        flags = cls()
        for key, attr in _FLAG_KEYS.items():
            if key in data:
                setattr(flags, attr, data[key])
        return flags


@dataclass(frozen=True, slots=True)
class ActiveJinx:
    """Two in-play roles that carry a jinx, with its text."""

    first_id: str
    second_id: str
    reason: str


def closed_modals() -> dict[str, bool]:
    return {name: False for name in MODAL_NAMES}


@dataclass(slots=True)
class SessionState:
    """Authoritative state of one session.

    The role set and both traveler pools are only ever replaced wholesale by
    :meth:`set_edition` or :meth:`set_custom_roles`.
    """

    catalog: Catalog = field(repr=False)
    edition: Edition
    roles: ResolvedRoleSet = field(default_factory=dict)
    travelers: ResolvedRoleSet = field(default_factory=dict)
    other_travelers: ResolvedRoleSet = field(default_factory=dict)
    fabled: ResolvedRoleSet = field(default_factory=dict)
    grimoire: GrimoireFlags = field(default_factory=GrimoireFlags)
    modals: dict[str, bool] = field(default_factory=closed_modals)
    roster: Optional[NightResponseRoster] = field(default=None, repr=False)
    last_import: Optional[ScriptImportResult] = field(default=None, repr=False)

    @classmethod
    def from_catalog(
        cls,
        catalog: Catalog,
        edition_id: Optional[str] = None,
        *,
        roster: Optional[NightResponseRoster] = None,
        grimoire: Optional[GrimoireFlags] = None,
    ) -> "SessionState":
        """Cold-start a session on the catalog's default edition.

        When ``edition_id`` is given it is applied afterwards through
        :meth:`set_edition`, so an unknown id becomes an ad-hoc edition.
        """

        default = catalog.default_edition
        state = cls(
            catalog=catalog,
            edition=default,
            roles=roles_for_edition(catalog, default),
            travelers=edition_travelers(catalog, default),
            other_travelers=extension_pool(catalog, default),
            fabled=dict(catalog.fabled),
            grimoire=grimoire or GrimoireFlags(),
            roster=roster,
        )
        if edition_id is not None and edition_id != default.id:
            state.set_edition(Edition(id=edition_id))
        return state

    @property
    def jinxes(self) -> JinxTable:
        return self.catalog.jinxes

    @property
    def is_custom_edition(self) -> bool:
        """``True`` when the active edition is not part of the catalog."""

        return self.catalog.edition(self.edition.id) is None

    # -- grimoire reducers -------------------------------------------------

    def set_zoom(self, value: int) -> None:
        self.grimoire.zoom = value

    def set_background(self, value: str) -> None:
        self.grimoire.background = value

    def toggle_muted(self, value: Any = None) -> bool:
        return self._toggle("is_muted", value)

    def toggle_menu(self, value: Any = None) -> bool:
        return self._toggle("is_menu_open", value)

    def toggle_night_order(self, value: Any = None) -> bool:
        return self._toggle("is_night_order", value)

    def toggle_static(self, value: Any = None) -> bool:
        return self._toggle("is_static", value)

    def toggle_grimoire(self, value: Any = None) -> bool:
        return self._toggle("is_public", value)

    def toggle_image_opt_in(self, value: Any = None) -> bool:
        return self._toggle("is_image_opt_in", value)

    def toggle_night(self, value: Any = None) -> bool:
        """Switch between day and night and clear every player's night responses.

        An explicit boolean (as pushed by the host) is applied as-is; anything
        else flips the current value.
        """

        if self.roster is not None:
            self.roster.reset_night_responses()
        is_night = self._toggle("is_night", value)
        LOGGER.info("session.night_toggled", is_night=is_night)
        return is_night

    def toggle_modal(self, name: Optional[str] = None) -> None:
        """Flip modal ``name`` and close all others. ``None`` closes everything."""

        if name is not None and name not in self.modals:
            LOGGER.warning("session.unknown_modal", modal=name)
            name = None
        if name is not None:
            self.modals[name] = not self.modals[name]
        for modal in self.modals:
            if modal != name:
                self.modals[modal] = False

    def _toggle(self, attr: str, value: Any) -> bool:
        if value is True or value is False:
            setattr(self.grimoire, attr, value)
        else:
            setattr(self.grimoire, attr, not getattr(self.grimoire, attr))
        return getattr(self.grimoire, attr)

    # -- script changes ----------------------------------------------------

    def set_edition(self, edition: Edition | Mapping[str, Any]) -> None:
        """Switch to ``edition``.

        Catalog editions replace the role set and traveler pools. Unknown
        editions are accepted as ad-hoc scripts and keep the current roles
        until a script import fills them. Always closes the edition modal.
        """

        if not isinstance(edition, Edition):
            edition = Edition.from_dict(edition)
        known = self.catalog.edition(edition.id)
        if known is not None:
            self.edition = known
            self.roles = roles_for_edition(self.catalog, known)
            self.travelers = edition_travelers(self.catalog, known)
            self.other_travelers = extension_pool(self.catalog, known)
        else:
            self.edition = edition
        self.modals["edition"] = False
        LOGGER.info(
            "session.edition_changed",
            edition=edition.id,
            official=known is not None,
            roles=len(self.roles),
        )

    def set_custom_roles(self, entries: Any, *, strict: bool = False) -> ScriptImportResult:
        """Import a custom script, replacing roles, fabled and the traveler pools."""

        result = normalize_script(self.catalog, entries, self.roles, strict=strict)
        self.roles = result.roles
        self.travelers = {}
        self.fabled = result.fabled
        self.other_travelers = result.other_travelers
        self.last_import = result
        return result

    # -- queries -----------------------------------------------------------

    def role(self, role_id: str) -> Optional[RoleDefinition]:
        """Find a role in the active pools, falling back to the catalog."""

        cleaned = clean_id(role_id)
        for pool in (self.roles, self.travelers, self.other_travelers, self.fabled):
            if cleaned in pool:
                return pool[cleaned]
        return self.catalog.role(cleaned)

    def jinx(self, first_id: str, second_id: str) -> Optional[str]:
        return self.catalog.jinx(first_id, second_id)

    def active_jinxes(self) -> tuple[ActiveJinx, ...]:
        """Return every jinx between two roles of the active role set."""

        ids: Sequence[str] = list(self.roles)
        found: list[ActiveJinx] = []
        for position, first_id in enumerate(ids):
            for second_id in ids[position + 1 :]:
                reason = self.jinx(first_id, second_id)
                if reason is not None:
                    found.append(ActiveJinx(first_id, second_id, reason))
        return tuple(found)

    def night_order(self, *, first_night: bool = True) -> tuple[RoleDefinition, ...]:
        """Return the active roles and travelers that wake on the chosen night."""

        in_play = list(self.roles.values()) + list(self.travelers.values())
        return self.catalog.night_order.sheet(in_play, first_night=first_night)


__all__ = [
    "ActiveJinx",
    "GrimoireFlags",
    "MODAL_NAMES",
    "SessionState",
    "closed_modals",
]
