"""Commands sent to the controller and the channel that carries them."""

from __future__ import annotations

import enum
import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from loom.controller.event import ChannelClosed, _Channel
from loom.model.container import MediaContent
from loom.model.track import TrackType
from loom.tapestry.position import TimePosition

__all__ = [
    "ChannelClosed",
    "Command",
    "CommandKind",
    "CommandReceiver",
    "CommandSender",
    "create_command_channel",
]


class CommandKind(enum.Enum):
    """Every kind of command the controller accepts."""

    CREATE_PROJECT = "create_project"
    OPEN_PROJECT = "open_project"
    SAVE_PROJECT = "save_project"

    ADD_TRACK = "add_track"
    REMOVE_TRACK = "remove_track"
    RENAME_TRACK = "rename_track"
    SET_TRACK_OUTPUT = "set_track_output"
    MUTE_TRACK = "mute_track"
    SOLO_TRACK = "solo_track"

    ADD_CONTAINER = "add_container"
    REMOVE_CONTAINER = "remove_container"
    MOVE_CONTAINER = "move_container"
    RESIZE_CONTAINER = "resize_container"
    SET_CONTAINER_LOOP = "set_container_loop"
    SET_CONTAINER_TIME_SCALE = "set_container_time_scale"

    SET_TEMPO = "set_tempo"
    SET_TIME_SIGNATURE = "set_time_signature"

    PLAY = "play"
    STOP = "stop"
    PAUSE = "pause"
    SEEK = "seek"
    RECORD = "record"

    SCAN_OUTPUTS = "scan_outputs"
    CONNECT_OUTPUT = "connect_output"
    DISCONNECT_OUTPUT = "disconnect_output"

    SET_CLOCK_SOURCE = "set_clock_source"

    SHUTDOWN = "shutdown"


@dataclass
class Command:
    """A command of a given kind with its named arguments, read as ``command["name"]``."""

    kind: CommandKind
    payload: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]


class CommandSender:
    """The sending side of a command channel."""

    def __init__(self, channel: _Channel[Command]) -> None:
        self._channel = channel

    def send(self, command: Command) -> None:
        """Queue ``command``; raises ChannelClosed once the channel is closed."""
        self._channel.put(command)

    def play(self) -> None:
        """Send PLAY."""
        self.send(Command(CommandKind.PLAY))

    def stop(self) -> None:
        """Send STOP."""
        self.send(Command(CommandKind.STOP))

    def pause(self) -> None:
        """Send PAUSE."""
        self.send(Command(CommandKind.PAUSE))

    def seek(self, position: TimePosition) -> None:
        """Send SEEK to ``position``."""
        self.send(Command(CommandKind.SEEK, {"position": position}))

    def add_track(self, name: str, track_type: TrackType) -> None:
        """Send ADD_TRACK."""
        self.send(Command(CommandKind.ADD_TRACK, {"name": name, "track_type": track_type}))

    def add_container(
        self, track_id: uuid.UUID, position: TimePosition, content: MediaContent
    ) -> None:
        """Send ADD_CONTAINER."""
        self.send(
            Command(
                CommandKind.ADD_CONTAINER,
                {"track_id": track_id, "position": position, "content": content},
            )
        )

    def shutdown(self) -> None:
        """Send SHUTDOWN."""
        self.send(Command(CommandKind.SHUTDOWN))

    def close(self) -> None:
        """Close the channel; the receiver sees ChannelClosed once drained."""
        self._channel.close()


class CommandReceiver:
    """The receiving side of a command channel."""

    def __init__(self, channel: _Channel[Command]) -> None:
        self._channel = channel

    def recv(self, timeout: float | None = None) -> Command:
        """Wait for the next command; raises queue.Empty on timeout, ChannelClosed when closed."""
        return self._channel.get(timeout=timeout)

    def try_recv(self) -> Command:
        """The next command without waiting; raises queue.Empty or ChannelClosed."""
        return self._channel.get(block=False)

    def __iter__(self) -> Iterator[Command]:
        """Yield commands until the channel is closed and drained."""
        return iter(self._channel)


def create_command_channel() -> tuple[CommandSender, CommandReceiver]:
    """A connected sender and receiver."""
    channel: _Channel[Command] = _Channel()
    return CommandSender(channel), CommandReceiver(channel)