"""CLI helper for resolving an edition or custom script and printing the result."""

import json
import sys
from pathlib import Path

from grimoire.compactor import encode_script_json
from grimoire.config import SessionConfig
from grimoire.config_loader import load_config_file
from grimoire.exceptions import CatalogError
from grimoire.logging_manager import LoggingManager, configure_logging
from grimoire.persistence import start_session
from grimoire.transport import SessionDispatcher


def main() -> None:
    """Resolve the configured edition, optionally import a script, and print it."""
    if len(sys.argv) < 2:
        print("Usage: python run_script_check.py <config-file> [script.json]")
        print("Example: python run_script_check.py session.yaml my-script.json")
        print()
        print("Use '-' as the config file to run with defaults.")
        sys.exit(1)

    config_path = sys.argv[1]
    script_path = sys.argv[2] if len(sys.argv) > 2 else None

    # Load configuration
    try:
        config = SessionConfig() if config_path == "-" else load_config_file(config_path)
    except Exception as exc:
        print(f"Error loading config file: {exc}")
        sys.exit(1)

    configure_logging(config.log_level)

    try:
        state = start_session(config=config)
    except CatalogError as exc:
        print(f"Error loading catalog: {exc}")
        sys.exit(1)

    # Create logging manager if enhanced logging is enabled
    log_mgr = (
        LoggingManager(enabled=True, base_dir=config.log_dir)
        if config.enhanced_logging
        else None
    )
    if log_mgr and log_mgr.enabled:
        print(f"Enhanced logging enabled: {log_mgr.log_dir}")
        print()

    dispatcher = SessionDispatcher(state, log_manager=log_mgr)

    if script_path:
        try:
            entries = json.loads(Path(script_path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            print(f"Error reading script: {exc}")
            sys.exit(1)
        dispatcher.commit("setEdition", {"id": "custom", "name": Path(script_path).stem})
        dispatcher.commit("setCustomRoles", entries)

    print(f"\n=== {state.edition.name or state.edition.id} ===")
    for role in state.roles.values():
        marker = " (custom)" if role.is_custom else ""
        print(f"  [{role.team.value:<9}] {role.name}{marker}")

    if state.travelers:
        print(f"\nTravelers: {', '.join(role.name for role in state.travelers.values())}")
    print(f"Other travelers available: {len(state.other_travelers)}")

    print("\nFirst night:")
    for role in state.night_order(first_night=True):
        print(f"  {role.first_night:>3}. {role.name}")
    print("\nOther nights:")
    for role in state.night_order(first_night=False):
        print(f"  {role.other_night:>3}. {role.name}")

    jinxes = state.active_jinxes()
    if jinxes:
        print("\nJinxes:")
        for jinx in jinxes:
            print(f"  {jinx.first_id} / {jinx.second_id}: {jinx.reason}")

    if state.last_import is not None and state.last_import.rejected:
        print("\nRejected entries:")
        for rejected in state.last_import.rejected:
            print(f"  #{rejected.index}: {rejected.reason}")

    encoded = encode_script_json(state.roles.values())
    print(f"\nCompact encoding ({len(encoded)} bytes):")
    print(encoded)


if __name__ == "__main__":
    main()
