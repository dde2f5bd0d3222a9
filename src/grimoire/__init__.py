"""Script and role resolution engine for Blood on the Clocktower sessions."""

from .catalog import Catalog, build_catalog, default_catalog, load_catalog
from .compactor import (
    decode_roles,
    decode_script_json,
    encode_role,
    encode_roles,
    encode_script_json,
)
from .config import SessionConfig
from .config_loader import load_config_file
from .editions import Edition, edition_travelers, extension_pool, roles_for_edition
from .enums import MutationName, Team
from .events import MutationEvent, MutationLog, MutationOrigin
from .exceptions import (
    CatalogError,
    ConfigurationError,
    InvalidMutationError,
    ScriptImportError,
)
from .logging_manager import LoggingManager, configure_logging
from .night_order import NightOrderTable, clean_id, rank
from .persistence import (
    SessionSnapshot,
    restore_session,
    snapshot_session,
    start_session,
)
from .players import NightResponseRoster, Player, PlayerId, PlayerRoster
from .roles import (
    COMPACT_PROTOCOL_VERSION,
    CUSTOM_ROLE_DEFAULT,
    CUSTOM_ROLE_FIELDS,
    ResolvedRoleSet,
    RoleDefinition,
    generic_icon,
    sort_by_team,
)
from .script import RejectedEntry, ScriptImportResult, normalize_script
from .session import MODAL_NAMES, ActiveJinx, GrimoireFlags, SessionState
from .transport import MutationPublisher, SessionDispatcher

__all__ = [
    "ActiveJinx",
    "COMPACT_PROTOCOL_VERSION",
    "CUSTOM_ROLE_DEFAULT",
    "CUSTOM_ROLE_FIELDS",
    "Catalog",
    "CatalogError",
    "ConfigurationError",
    "Edition",
    "GrimoireFlags",
    "InvalidMutationError",
    "LoggingManager",
    "MODAL_NAMES",
    "MutationEvent",
    "MutationLog",
    "MutationName",
    "MutationOrigin",
    "MutationPublisher",
    "NightOrderTable",
    "NightResponseRoster",
    "Player",
    "PlayerId",
    "PlayerRoster",
    "RejectedEntry",
    "ResolvedRoleSet",
    "RoleDefinition",
    "ScriptImportError",
    "ScriptImportResult",
    "SessionConfig",
    "SessionDispatcher",
    "SessionSnapshot",
    "SessionState",
    "Team",
    "build_catalog",
    "clean_id",
    "configure_logging",
    "decode_roles",
    "decode_script_json",
    "default_catalog",
    "edition_travelers",
    "encode_role",
    "encode_roles",
    "encode_script_json",
    "extension_pool",
    "generic_icon",
    "load_catalog",
    "load_config_file",
    "normalize_script",
    "rank",
    "restore_session",
    "roles_for_edition",
    "snapshot_session",
    "sort_by_team",
    "start_session",
]
