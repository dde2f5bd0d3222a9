"""Enumerations for grimoire entities."""

from __future__ import annotations

from enum import Enum


class Team(str, Enum):
    """Character category a role belongs to."""

    TOWNSFOLK = "townsfolk"
    OUTSIDER = "outsider"
    MINION = "minion"
    DEMON = "demon"
    TRAVELER = "traveler"
    FABLED = "fabled"


class MutationName(str, Enum):
    """Named session mutations exchanged with remote participants."""

    SET_ZOOM = "setZoom"
    SET_BACKGROUND = "setBackground"
    TOGGLE_MUTED = "toggleMuted"
    TOGGLE_MENU = "toggleMenu"
    TOGGLE_NIGHT_ORDER = "toggleNightOrder"
    TOGGLE_STATIC = "toggleStatic"
    TOGGLE_NIGHT = "toggleNight"
    TOGGLE_GRIMOIRE = "toggleGrimoire"
    TOGGLE_IMAGE_OPT_IN = "toggleImageOptIn"
    TOGGLE_MODAL = "toggleModal"
    SET_EDITION = "setEdition"
    SET_CUSTOM_ROLES = "setCustomRoles"
