"""Priority queue used to order listeners attached to a single event."""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Any, Iterator

__all__ = ["ListenerQueue", "OrderingKey"]

OrderingKey = tuple[int, int]


@dataclass(frozen=True, order=True)
class _QueueEntry:
    # heapq pops the smallest item: negate the priority, keep the serial ascending
    sort_key: tuple[int, int]
    priority: int = field(compare=False)
    serial: int = field(compare=False)
    value: Any = field(compare=False)

    @property
    def key(self) -> OrderingKey:
        return (self.priority, self.serial)


class ListenerQueue:
    """Max-priority queue with FIFO ordering among equal priorities.

    Every entry is keyed by ``(priority, serial)``. Higher priorities come out
    first; for equal priorities the lower serial (the earlier insert) wins.
    Serials are assigned from a counter owned by the queue instance.

    Iterating a queue consumes it. Take a :meth:`copy` first when the queue
    must survive the traversal.
    """

    def __init__(self) -> None:
        self._heap: list[_QueueEntry] = []
        self._next_serial = 0

    def insert(self, value: Any, priority: int | OrderingKey) -> bool:
        """Insert ``value`` with an integer priority or a preserved ordering key."""

        if isinstance(priority, tuple):
            explicit, serial = _validate_key(priority)
            # never hand out a serial that an inserted key already owns
            if serial >= self._next_serial:
                self._next_serial = serial + 1
        elif isinstance(priority, int) and not isinstance(priority, bool):
            explicit = priority
            serial = self._next_serial
            self._next_serial += 1
        else:
            raise TypeError(
                f"priority must be an int or a (priority, serial) tuple, got {priority!r}"
            )

        heapq.heappush(
            self._heap,
            _QueueEntry(
                sort_key=(-explicit, serial),
                priority=explicit,
                serial=serial,
                value=value,
            ),
        )
        return True

    def extract(self) -> Any:
        return self.extract_with_key()[0]

    def extract_with_key(self) -> tuple[Any, OrderingKey]:
        """Remove and return the highest ranked value together with its key."""

        if not self._heap:
            raise IndexError("extract from an empty ListenerQueue")
        entry = heapq.heappop(self._heap)
        return entry.value, entry.key

    def peek(self) -> Any:
        return self.peek_with_key()[0]

    def peek_with_key(self) -> tuple[Any, OrderingKey]:
        if not self._heap:
            raise IndexError("peek into an empty ListenerQueue")
        entry = self._heap[0]
        return entry.value, entry.key

    def is_empty(self) -> bool:
        return not self._heap

    def copy(self) -> "ListenerQueue":
        """Return an independent queue holding the same entries and counter."""

        clone = ListenerQueue()
        clone._heap = list(self._heap)
        clone._next_serial = self._next_serial
        return clone

    def drain(self) -> Iterator[Any]:
        while self._heap:
            yield self.extract()

    def drain_with_keys(self) -> Iterator[tuple[Any, OrderingKey]]:
        while self._heap:
            yield self.extract_with_key()

    def __iter__(self) -> Iterator[Any]:
        return self.drain()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"ListenerQueue(size={len(self._heap)})"


def _validate_key(key: tuple) -> OrderingKey:
    if len(key) != 2 or not all(
        isinstance(part, int) and not isinstance(part, bool) for part in key
    ):
        raise TypeError(f"ordering key must be a pair of ints, got {key!r}")
    return key[0], key[1]
