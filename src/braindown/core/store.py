"""Observable store: immutable snapshots broadcast to subscribers."""

from collections.abc import Callable
from typing import Generic, TypeVar

from loguru import logger

S = TypeVar("S")

Listener = Callable[[S], None]


class Store(Generic[S]):
    """Holds one immutable state snapshot and notifies listeners on every change.

    Subclasses compute a new snapshot from the previous one and call
    ``_publish``; listeners never observe a partially-updated state.
    """

    def __init__(self, initial: S) -> None:
        self._state = initial
        self._listeners: list[Listener[S]] = []

    def get_state(self) -> S:
        return self._state

    def subscribe(self, listener: Listener[S]) -> Callable[[], None]:
        """Register listener and call it once with the current state.

        Returns:
            A function removing the listener. Calling it twice is harmless.
        """
        self._listeners.append(listener)
        listener(self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, state: S) -> None:
        if state is self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Store listener {!r} failed", listener)
