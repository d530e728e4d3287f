"""Tests for the observable Store base."""

from braindown.core.store import Store


class Counter(Store[int]):
    def __init__(self) -> None:
        super().__init__(0)

    def increment(self) -> None:
        self._publish(self._state + 1)


def test_subscribe_calls_listener_immediately() -> None:
    counter = Counter()
    seen: list[int] = []

    counter.subscribe(seen.append)

    assert seen == [0]


def test_unsubscribe_stops_notifications() -> None:
    counter = Counter()
    seen: list[int] = []
    unsubscribe = counter.subscribe(seen.append)

    counter.increment()
    unsubscribe()
    unsubscribe()
    counter.increment()

    assert seen == [0, 1]
    assert counter.get_state() == 2


def test_failing_listener_does_not_block_others() -> None:
    counter = Counter()
    seen: list[int] = []

    def broken(value: int) -> None:
        if value:
            msg = "boom"
            raise RuntimeError(msg)

    counter.subscribe(broken)
    counter.subscribe(seen.append)
    counter.increment()

    assert seen == [0, 1]
