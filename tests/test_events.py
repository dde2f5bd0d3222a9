from __future__ import annotations

from datetime import datetime, timezone

import pytest

from grimoire.enums import MutationName
from grimoire.events import MutationEvent, MutationLog, MutationOrigin


def test_record_and_query() -> None:
    log = MutationLog()
    log.record(MutationName.TOGGLE_NIGHT, True)
    log.record(MutationName.SET_ZOOM, 2, origin=MutationOrigin.REMOTE)
    log.record(MutationName.TOGGLE_NIGHT, False, origin=MutationOrigin.REMOTE)

    assert len(log.query(name=MutationName.TOGGLE_NIGHT)) == 2
    assert len(log.query(origin=MutationOrigin.REMOTE)) == 2
    remote_night = log.query(name=MutationName.TOGGLE_NIGHT, origin=MutationOrigin.REMOTE)
    assert [event.payload for event in remote_night] == [False]


def test_jsonl_round_trip() -> None:
    timestamp = datetime(2024, 5, 1, 20, 0, tzinfo=timezone.utc)
    log = MutationLog()
    log.record(MutationName.SET_EDITION, {"id": "tb"}, timestamp=timestamp)
    log.record(
        MutationName.SET_CUSTOM_ROLES,
        [{"id": "imp"}],
        origin=MutationOrigin.REMOTE,
        timestamp=timestamp,
    )

    restored = MutationLog.from_jsonl(log.to_jsonl())
    assert restored.events == log.events


def test_event_requires_timestamp() -> None:
    with pytest.raises(ValueError, match="ISO timestamp"):
        MutationEvent.from_dict({"name": "toggleNight"})


def test_clear() -> None:
    log = MutationLog.from_events(
        [MutationEvent(datetime.now(timezone.utc), MutationName.TOGGLE_MENU)]
    )
    log.clear()
    assert log.events == ()
