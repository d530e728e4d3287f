"""Notification queue: ephemeral toasts that remove themselves after a delay."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from loguru import logger

from braindown.config import DEFAULT_TOAST_TTL_MILLIS
from braindown.core.store import Store
from braindown.protocols import Cancellable, Scheduler


class Severity(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Toast:
    id: str
    message: str
    severity: Severity = Severity.INFO
    ttl_millis: int = DEFAULT_TOAST_TTL_MILLIS


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        return asyncio.get_running_loop().call_later(delay, callback)


class NotificationQueue(Store[tuple[Toast, ...]]):
    """Toasts in display (arrival) order.

    Each toast with a non-zero ttl owns one pending timer, cancelled as soon
    as the toast is removed by any path.
    """

    def __init__(self, scheduler: Scheduler | None = None) -> None:
        super().__init__(())
        self._scheduler = scheduler or AsyncioScheduler()
        self._timers: dict[str, Cancellable] = {}
        self._counter = 0

    def add(
        self,
        message: str,
        severity: Severity | str = Severity.INFO,
        ttl_millis: int = DEFAULT_TOAST_TTL_MILLIS,
    ) -> str:
        """Append a toast and return its id. ttl_millis=0 keeps it until dismissed."""
        if ttl_millis < 0:
            msg = f"ttl_millis must be >= 0, got {ttl_millis}"
            raise ValueError(msg)
        self._counter += 1
        toast = Toast(
            id=f"toast-{self._counter}",
            message=message,
            severity=Severity(severity),
            ttl_millis=ttl_millis,
        )
        if ttl_millis > 0:
            self._timers[toast.id] = self._scheduler.call_later(
                ttl_millis / 1000, lambda: self._expire(toast.id)
            )
        self._publish((*self._state, toast))
        return toast.id

    def info(self, message: str, ttl_millis: int = DEFAULT_TOAST_TTL_MILLIS) -> str:
        return self.add(message, Severity.INFO, ttl_millis)

    def success(self, message: str, ttl_millis: int = DEFAULT_TOAST_TTL_MILLIS) -> str:
        return self.add(message, Severity.SUCCESS, ttl_millis)

    def warning(self, message: str, ttl_millis: int = DEFAULT_TOAST_TTL_MILLIS) -> str:
        return self.add(message, Severity.WARNING, ttl_millis)

    def error(self, message: str, ttl_millis: int = DEFAULT_TOAST_TTL_MILLIS) -> str:
        return self.add(message, Severity.ERROR, ttl_millis)

    def dismiss(self, toast_id: str) -> None:
        """Remove a toast. Dismissing an unknown or already removed id does nothing."""
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()
        remaining = tuple(t for t in self._state if t.id != toast_id)
        if len(remaining) != len(self._state):
            self._publish(remaining)

    def clear(self) -> None:
        """Remove all toasts and cancel their pending timers."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        if self._state:
            self._publish(())

    def _expire(self, toast_id: str) -> None:
        logger.debug("Toast {} expired", toast_id)
        self._timers.pop(toast_id, None)
        self.dismiss(toast_id)
