"""The controller: applies commands to the project and publishes events."""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable

from loom.controller.command import Command, CommandKind, CommandReceiver
from loom.controller.event import ChannelClosed, Event, EventHub, EventKind
from loom.controller.snapshot import EndpointSnapshot, ProjectSnapshot, TimelineSnapshot
from loom.engine.playback import PlaybackEngine
from loom.model.project import Project, ProjectHandle
from loom.model.track import Track
from loom.output.system import OutputSystem


class Controller:
    """Receives commands, updates the shared project and engine, and dispatches events."""

    def __init__(
        self,
        command_receiver: CommandReceiver,
        event_hub: EventHub,
        project: ProjectHandle,
        playback_engine: PlaybackEngine,
        output_system: OutputSystem,
        poll_interval: float = 0.001,
    ) -> None:
        self._commands = command_receiver
        self._events = event_hub
        self._project = project
        self._engine = playback_engine
        self.output_system = output_system
        self._poll_interval = poll_interval
        self._running = threading.Event()
        self._handlers: dict[CommandKind, Callable[[Command], None]] = {
            CommandKind.CREATE_PROJECT: self._create_project,
            CommandKind.ADD_TRACK: self._add_track,
            CommandKind.MOVE_CONTAINER: self._move_container,
            CommandKind.RESIZE_CONTAINER: self._resize_container,
            CommandKind.PLAY: self._play,
            CommandKind.STOP: self._stop_playback,
            CommandKind.SEEK: self._seek,
            CommandKind.SHUTDOWN: self._shutdown,
        }

    def __repr__(self) -> str:
        return f"Controller(running={self.is_running})"

    @property
    def is_running(self) -> bool:
        """Whether the command loop is active."""
        return self._running.is_set()

    def run_in_thread(self) -> threading.Thread:
        """Start the command loop on a new thread and return it."""
        thread = threading.Thread(target=self.run, name="loom-controller", daemon=True)
        thread.start()
        return thread

    def run(self) -> None:
        """Process commands until shut down, stopped, or the channel closes."""
        self._running.set()
        while self._running.is_set():
            try:
                command = self._commands.recv(timeout=self._poll_interval)
            except queue.Empty:
                continue
            except ChannelClosed:
                break
            self.handle_command(command)
        self._running.clear()

    def stop(self) -> None:
        """Ask the command loop to finish."""
        self._running.clear()

    def handle_command(self, command: Command) -> None:
        """Apply one command; unsupported ones produce an ERROR event."""
        handler = self._handlers.get(command.kind)
        if handler is None:
            self._events.dispatch(
                Event(EventKind.ERROR, {"message": f"Unhandled command: {command!r}"})
            )
            return
        handler(command)

    def create_project_snapshot(self) -> ProjectSnapshot:
        """A snapshot of the current project for the UI."""
        with self._project.read() as project:
            timeline = project.active_timeline()
            if timeline is None:
                active = None
            else:
                position = (
                    self._engine.current_position() if self._engine.is_playing else None
                )
                active = TimelineSnapshot.from_timeline(timeline, position)
            endpoints = [
                EndpointSnapshot.from_config(config) for config in project.endpoints.values()
            ]
            return ProjectSnapshot(project.name, active, endpoints)

    def _create_project(self, command: Command) -> None:
        new_project = Project(command["name"])
        self._project.replace(new_project)
        self._events.dispatch(Event(EventKind.PROJECT_CREATED, {"project_id": new_project.id}))

    def _add_track(self, command: Command) -> None:
        track_type = command["track_type"]
        with self._project.read() as project:
            timeline = project.active_timeline()
            if timeline is None:
                return
            track_id = timeline.add_track(Track(command["name"], track_type))
        self._events.dispatch(
            Event(EventKind.TRACK_ADDED, {"track_id": track_id, "track_type": track_type})
        )

    def _move_container(self, command: Command) -> None:
        container_id = command["container_id"]
        new_position = command["new_position"]
        with self._project.read() as project:
            timeline = project.active_timeline()
            moved = timeline is not None and timeline.move_container(container_id, new_position)
        if moved:
            self._events.dispatch(
                Event(
                    EventKind.CONTAINER_MOVED,
                    {"container_id": container_id, "position": new_position},
                )
            )

    def _resize_container(self, command: Command) -> None:
        container_id = command["container_id"]
        new_length = command["new_length"]
        with self._project.read() as project:
            timeline = project.active_timeline()
            container = timeline.container(container_id) if timeline is not None else None
            if container is None:
                return
            container.length = new_length
        self._events.dispatch(
            Event(
                EventKind.CONTAINER_RESIZED,
                {"container_id": container_id, "length": new_length},
            )
        )

    def _play(self, command: Command) -> None:
        self._engine.play()
        self._events.dispatch(Event(EventKind.PLAYBACK_STARTED))

    def _stop_playback(self, command: Command) -> None:
        self._engine.stop()
        self._events.dispatch(Event(EventKind.PLAYBACK_STOPPED))

    def _seek(self, command: Command) -> None:
        position = command["position"]
        self._engine.seek(position)
        self._events.dispatch(
            Event(EventKind.PLAYBACK_POSITION_CHANGED, {"position": position})
        )

    def _shutdown(self, command: Command) -> None:
        self._running.clear()