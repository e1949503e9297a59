from __future__ import annotations

"""Tiny pub/sub event bus used by stores and sessions to notify observers."""

from typing import Any, Callable, Dict, List

from .explain import trace as xtrace


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> Callable[[], None]:
        """Register ``handler`` for ``event``; returns a callable that unsubscribes it."""
        handlers = self._subs.setdefault(event, [])
        handlers.append(handler)

        def _unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return _unsubscribe

    def emit(self, event: str, payload: Any) -> None:
        for h in list(self._subs.get(event, [])):
            try:
                h(payload)
            except Exception as exc:
                # Best effort; one broken observer must not stop the others
                xtrace("observer_failed", {"event": event, "error": repr(exc)})
