"""Events published by the controller and the channels that carry them."""

from __future__ import annotations

import enum
import queue
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from loom.tapestry.position import TimePosition

_T = TypeVar("_T")


class ChannelClosed(Exception):
    """Raised when sending on, or receiving from, a closed and drained channel."""


_CLOSED = object()


class _Channel(Generic[_T]):
    """An unbounded FIFO that can be closed by its senders.

    Items sent before closing can still be received; after that receiving
    raises ChannelClosed.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[Any] = queue.Queue()
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, item: _T) -> None:
        with self._lock:
            if self._closed:
                raise ChannelClosed("channel is closed")
            self._queue.put(item)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_CLOSED)

    def get(self, block: bool = True, timeout: float | None = None) -> _T:
        item = self._queue.get(block=block, timeout=timeout)
        if item is _CLOSED:
            # Leave the marker in place so every later receive sees it too.
            self._queue.put(_CLOSED)
            raise ChannelClosed("channel is closed")
        return item

    def __iter__(self) -> Iterator[_T]:
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return


class EventKind(enum.Enum):
    """Every kind of event the controller publishes."""

    PROJECT_CREATED = "project_created"
    PROJECT_OPENED = "project_opened"
    PROJECT_SAVED = "project_saved"
    PROJECT_MODIFIED = "project_modified"

    TRACK_ADDED = "track_added"
    TRACK_REMOVED = "track_removed"
    TRACK_RENAMED = "track_renamed"
    TRACK_OUTPUT_CHANGED = "track_output_changed"
    TRACK_MUTE_CHANGED = "track_mute_changed"
    TRACK_SOLO_CHANGED = "track_solo_changed"

    CONTAINER_ADDED = "container_added"
    CONTAINER_REMOVED = "container_removed"
    CONTAINER_MOVED = "container_moved"
    CONTAINER_RESIZED = "container_resized"
    CONTAINER_LOOP_CHANGED = "container_loop_changed"

    TEMPO_CHANGED = "tempo_changed"
    TIME_SIGNATURE_CHANGED = "time_signature_changed"

    PLAYBACK_STARTED = "playback_started"
    PLAYBACK_STOPPED = "playback_stopped"
    PLAYBACK_PAUSED = "playback_paused"
    PLAYBACK_POSITION_CHANGED = "playback_position_changed"
    RECORDING_STARTED = "recording_started"
    RECORDING_ENDED = "recording_ended"

    OUTPUTS_SCANNED = "outputs_scanned"
    OUTPUT_CONNECTED = "output_connected"
    OUTPUT_DISCONNECTED = "output_disconnected"
    OUTPUT_ERROR = "output_error"

    TIMELINE_VIEW_CHANGED = "timeline_view_changed"

    ERROR = "error"


@dataclass
class Event:
    """An event of a given kind with its named fields.

    Fields are read with ``event["name"]``, e.g. ``event["position"]`` for
    PLAYBACK_POSITION_CHANGED.
    """

    kind: EventKind
    payload: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]


class EventSender:
    """The sending side of an event channel; copies share the channel."""

    def __init__(self, channel: _Channel[Event]) -> None:
        self._channel = channel

    def send(self, event: Event) -> None:
        """Queue ``event``; raises ChannelClosed once the channel is closed."""
        self._channel.put(event)

    def playback_position_changed(self, position: TimePosition) -> None:
        """Send a PLAYBACK_POSITION_CHANGED event."""
        self.send(Event(EventKind.PLAYBACK_POSITION_CHANGED, {"position": position}))

    def error(self, message: str) -> None:
        """Send an ERROR event."""
        self.send(Event(EventKind.ERROR, {"message": message}))

    def close(self) -> None:
        """Close the channel; queued events can still be received."""
        self._channel.close()


class EventReceiver:
    """The receiving side of an event channel."""

    def __init__(self, channel: _Channel[Event]) -> None:
        self._channel = channel

    def recv(self, timeout: float | None = None) -> Event:
        """Wait for the next event.

        Raises queue.Empty if ``timeout`` runs out and ChannelClosed once the
        channel is closed and drained.
        """
        return self._channel.get(timeout=timeout)

    def try_recv(self) -> Event:
        """The next event without waiting; raises queue.Empty or ChannelClosed."""
        return self._channel.get(block=False)

    def __iter__(self) -> Iterator[Event]:
        """Yield events until the channel is closed and drained."""
        return iter(self._channel)


def create_event_channel() -> tuple[EventSender, EventReceiver]:
    """A connected sender and receiver."""
    channel: _Channel[Event] = _Channel()
    return EventSender(channel), EventReceiver(channel)


class EventHub:
    """Fans each dispatched event out to every registered sender."""

    def __init__(self) -> None:
        self._senders: list[EventSender] = []

    def __len__(self) -> int:
        return len(self._senders)

    def add_receiver(self, sender: EventSender) -> None:
        """Register a channel to receive dispatched events."""
        self._senders.append(sender)

    def dispatch(self, event: Event) -> None:
        """Send ``event`` to every channel, skipping closed ones."""
        for sender in self._senders:
            try:
                sender.send(event)
            except ChannelClosed:
                pass