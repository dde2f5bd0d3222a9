"""Structured log of the mutations applied to a session."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from .enums import MutationName


class MutationOrigin(str, Enum):
    """Where an applied mutation came from."""

    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True, slots=True)
class MutationEvent:
    """Immutable record of one applied mutation."""

    timestamp: datetime
    name: MutationName
    payload: Any = None
    origin: MutationOrigin = MutationOrigin.LOCAL

    def to_dict(self) -> dict[str, Any]:
        """Wire form: ISO timestamp, mutation name, payload and origin."""

        return dict(
            timestamp=self.timestamp.isoformat(),
            name=self.name.value,
            payload=self.payload,
            origin=self.origin.value,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MutationEvent":
        raw_time = data.get("timestamp")
        if not isinstance(raw_time, str):
            raise ValueError("Mutation event needs an ISO timestamp string")
        return cls(
            timestamp=datetime.fromisoformat(raw_time),
            name=MutationName(data["name"]),
            payload=data.get("payload"),
            origin=MutationOrigin(data.get("origin", MutationOrigin.LOCAL.value)),
        )


class MutationLog:
    """Append-only in-memory log of :class:`MutationEvent` instances."""

    def __init__(self, events: Sequence[MutationEvent] | None = None) -> None:
        self._events: list[MutationEvent] = list(events) if events else []

    def record(
        self,
        name: MutationName,
        payload: Any = None,
        *,
        origin: MutationOrigin = MutationOrigin.LOCAL,
        timestamp: datetime | None = None,
    ) -> MutationEvent:
        """Append an applied mutation. Timestamps default to now (UTC)."""

        when = timestamp if timestamp is not None else datetime.now(timezone.utc)
        self._events.append(MutationEvent(when, name, payload, origin))
        return self._events[-1]

    @property
    def events(self) -> tuple[MutationEvent, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        self._events.clear()

    def to_jsonl(self) -> str:
        """One compact JSON object per line, oldest first."""

        lines = [json.dumps(event.to_dict(), separators=(",", ":")) for event in self._events]
        return "\n".join(lines)

    @classmethod
    def from_jsonl(cls, raw: str) -> "MutationLog":
        """Rebuild a log from :meth:`to_jsonl` output. Blank lines are skipped."""

        return cls(
            [MutationEvent.from_dict(json.loads(line)) for line in raw.splitlines() if line.strip()]
        )

    @classmethod
    def from_events(cls, events: Iterable[MutationEvent]) -> "MutationLog":
        return cls(list(events))

    def query(
        self,
        *,
        name: MutationName | None = None,
        origin: MutationOrigin | None = None,
    ) -> tuple[MutationEvent, ...]:
        """Return events matching the given mutation name and/or origin."""

        return tuple(
            event
            for event in self._events
            if (name is None or event.name is name)
            and (origin is None or event.origin is origin)
        )


__all__ = ["MutationEvent", "MutationLog", "MutationOrigin"]
