"""Named-mutation entry points shared by local callers and remote peers."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Protocol

import structlog

from .compactor import encode_roles
from .enums import MutationName
from .events import MutationEvent, MutationLog, MutationOrigin
from .exceptions import InvalidMutationError
from .logging_manager import LoggingManager
from .session import SessionState

LOGGER = structlog.get_logger(__name__)


class MutationPublisher(Protocol):
    """Outbound side of the transport: broadcasts a mutation to other peers."""

    def publish(self, name: str, payload: Any, /) -> None:
        """Send ``(name, payload)`` to every other participant."""


class SessionDispatcher:
    """Applies named mutations to a :class:`SessionState`.

    Local changes go through :meth:`commit`, which applies and then publishes
    the authoritative payload. Remote changes go through :meth:`receive` and
    are never re-published. Each call is one whole-state transition.
    """

    def __init__(
        self,
        state: SessionState,
        *,
        publisher: Optional[MutationPublisher] = None,
        log: Optional[MutationLog] = None,
        log_manager: Optional[LoggingManager] = None,
    ) -> None:
        self.state = state
        self.publisher = publisher
        self.log = log if log is not None else MutationLog()
        self.log_manager = log_manager
        self._handlers: Mapping[MutationName, Callable[[Any], Any]] = {
            MutationName.SET_ZOOM: self._set_zoom,
            MutationName.SET_BACKGROUND: self._set_background,
            MutationName.TOGGLE_MUTED: state.toggle_muted,
            MutationName.TOGGLE_MENU: state.toggle_menu,
            MutationName.TOGGLE_NIGHT_ORDER: state.toggle_night_order,
            MutationName.TOGGLE_STATIC: state.toggle_static,
            MutationName.TOGGLE_NIGHT: state.toggle_night,
            MutationName.TOGGLE_GRIMOIRE: state.toggle_grimoire,
            MutationName.TOGGLE_IMAGE_OPT_IN: state.toggle_image_opt_in,
            MutationName.TOGGLE_MODAL: self._toggle_modal,
            MutationName.SET_EDITION: self._set_edition,
            MutationName.SET_CUSTOM_ROLES: self._set_custom_roles,
        }

    def commit(self, name: MutationName | str, payload: Any = None) -> Optional[MutationEvent]:
        """Apply a local mutation and publish it.

        Returns the logged event, or ``None`` when the payload was unusable.

        Raises:
            InvalidMutationError: If ``name`` is not a known mutation.
        """
        mutation = _mutation_name(name)
        event = self._apply(mutation, payload, MutationOrigin.LOCAL)
        if event is not None and self.publisher is not None:
            self.publisher.publish(mutation.value, event.payload)
        return event

    def receive(self, name: MutationName | str, payload: Any = None) -> Optional[MutationEvent]:
        """Apply a mutation pushed by a remote peer.

        Raises:
            InvalidMutationError: If ``name`` is not a known mutation.
        """
        return self._apply(_mutation_name(name), payload, MutationOrigin.REMOTE)

    def _apply(
        self, mutation: MutationName, payload: Any, origin: MutationOrigin
    ) -> Optional[MutationEvent]:
        try:
            applied = self._handlers[mutation](payload)
        except (TypeError, ValueError, OverflowError) as exc:
            LOGGER.warning(
                "transport.payload_rejected",
                mutation=mutation.value,
                origin=origin.value,
                error=str(exc),
            )
            return None
        event = self.log.record(mutation, applied, origin=origin)
        LOGGER.debug("transport.mutation_applied", mutation=mutation.value, origin=origin.value)
        if self.log_manager is not None:
            self.log_manager.log_mutation(event)
        return event

    def _set_zoom(self, payload: Any) -> int:
        if isinstance(payload, bool):
            raise TypeError("zoom must be a number")
        self.state.set_zoom(int(payload))
        return self.state.grimoire.zoom

    def _set_background(self, payload: Any) -> str:
        self.state.set_background("" if payload is None else str(payload))
        return self.state.grimoire.background

    def _toggle_modal(self, payload: Any) -> Optional[str]:
        name = None if payload is None else str(payload)
        self.state.toggle_modal(name)
        return name

    def _set_edition(self, payload: Any) -> dict[str, Any]:
        if not isinstance(payload, Mapping):
            raise TypeError("edition payload must be a mapping")
        self.state.set_edition(payload)
        return self.state.edition.to_dict()

    def _set_custom_roles(self, payload: Any) -> list[dict[str, Any]]:
        result = self.state.set_custom_roles(payload)
        if self.log_manager is not None:
            self.log_manager.log_import(result)
        custom_fabled = [role for role in result.fabled.values() if role.is_custom]
        return encode_roles([*result.roles.values(), *custom_fabled])


def _mutation_name(name: MutationName | str) -> MutationName:
    try:
        return MutationName(name)
    except ValueError:
        raise InvalidMutationError(f"Unknown mutation: {name}") from None


__all__ = ["MutationPublisher", "SessionDispatcher"]
