"""Projects: timelines, endpoints, tempo and settings."""

from __future__ import annotations

import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from loom.model.endpoint import EndpointConfig
from loom.model.timeline import Timeline
from loom.tapestry.position import TimePosition
from loom.tapestry.tempo import Tempo, TimeSignature
from loom.tapestry.tempo_map import TempoMap


@dataclass
class ProjectSettings:
    """Per-project defaults."""

    reference_sample_rate: int = 44100
    playback_sample_rate: int = 44100
    default_midi_output: uuid.UUID | None = None
    default_midi_input: str | None = None
    default_midi_channel: int = 0
    default_velocity: int = 100
    default_note_duration: float = 0.25
    snap_to_grid: bool = True
    grid_size: float = 0.25
    auto_quantize: bool = True


class Project:
    """A project with its timelines, endpoints and tempo map."""

    def __init__(self, name: str) -> None:
        self.id = uuid.uuid4()
        self.name = name
        self.settings = ProjectSettings()
        self.version = 1
        self.tempo_map = TempoMap(44100, 44100)
        self.tempo_map.add_tempo_change(TimePosition.zero(), Tempo(120.0))
        self.tempo_map.add_time_signature_change(TimePosition.zero(), TimeSignature(4, 4))
        main = Timeline("Main")
        self.timelines: dict[uuid.UUID, Timeline] = {main.id: main}
        self.endpoints: dict[uuid.UUID, EndpointConfig] = {}
        self.active_timeline_id: uuid.UUID | None = main.id

    def __repr__(self) -> str:
        return f"Project(name={self.name!r}, id={self.id}, version={self.version})"

    def active_timeline(self) -> Timeline | None:
        """The active timeline, if one is set."""
        if self.active_timeline_id is None:
            return None
        return self.timelines.get(self.active_timeline_id)

    def add_timeline(self, name: str) -> uuid.UUID:
        """Create a timeline and return its id."""
        timeline = Timeline(name)
        self.timelines[timeline.id] = timeline
        self.version += 1
        return timeline.id

    def set_active_timeline(self, timeline_id: uuid.UUID) -> None:
        """Make ``timeline_id`` active; raises KeyError if it is unknown."""
        if timeline_id not in self.timelines:
            raise KeyError("Timeline not found")
        self.active_timeline_id = timeline_id
        self.version += 1

    def add_endpoint(self, config: EndpointConfig) -> uuid.UUID:
        """Register an endpoint configuration and return its id."""
        self.endpoints[config.id] = config
        self.version += 1
        return config.id

    def endpoint(self, endpoint_id: uuid.UUID) -> EndpointConfig | None:
        """The endpoint configuration with ``endpoint_id``, if any."""
        return self.endpoints.get(endpoint_id)


class ProjectHandle:
    """A project shared between threads behind a lock."""

    def __init__(self, project: Project) -> None:
        self._project = project
        self._lock = threading.RLock()

    @contextmanager
    def read(self) -> Iterator[Project]:
        """Hold the lock and yield the current project."""
        with self._lock:
            yield self._project

    def replace(self, project: Project) -> None:
        """Swap in a different project."""
        with self._lock:
            self._project = project