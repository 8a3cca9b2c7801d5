"""Output events scheduled at timeline positions."""

from __future__ import annotations

from bisect import bisect_left, insort

from loom.output.event import OutputEvent
from loom.tapestry.position import TimePosition


class EventScheduler:
    """Events kept in position order, in insertion order within one position."""

    def __init__(self) -> None:
        self._positions: list[TimePosition] = []
        self._events: dict[TimePosition, list[OutputEvent]] = {}

    def __len__(self) -> int:
        return sum(len(events) for events in self._events.values())

    def schedule_event(self, position: TimePosition, event: OutputEvent) -> None:
        """Schedule ``event`` at ``position``."""
        if position not in self._events:
            insort(self._positions, position)
            self._events[position] = []
        self._events[position].append(event)

    def get_events(
        self, start: TimePosition, end: TimePosition
    ) -> list[tuple[TimePosition, OutputEvent]]:
        """Events with ``start <= position < end``, in order."""
        if end <= start:
            return []
        first = bisect_left(self._positions, start)
        last = bisect_left(self._positions, end)
        return [
            (position, event)
            for position in self._positions[first:last]
            for event in self._events[position]
        ]

    def clear(self) -> None:
        """Remove every scheduled event."""
        self._positions.clear()
        self._events.clear()