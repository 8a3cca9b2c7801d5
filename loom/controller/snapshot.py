"""Read-only views of the project for rendering."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field

from loom.model.container import AudioFile, MediaContainer, MidiClip, Pattern, PlaybackMode
from loom.model.endpoint import EndpointConfig, EndpointType
from loom.model.timeline import Timeline
from loom.model.track import Color, Track
from loom.tapestry.duration import Duration
from loom.tapestry.position import TimePosition


@dataclass(frozen=True)
class TrackSnapshot:
    """What the UI needs to draw a track."""

    id: uuid.UUID
    name: str
    color: Color
    is_muted: bool
    is_solo: bool
    output_id: uuid.UUID | None
    height: int

    @classmethod
    def from_track(cls, track: Track) -> TrackSnapshot:
        """Capture the display state of ``track``."""
        return cls(
            id=track.id,
            name=track.name,
            color=track.color,
            is_muted=track.is_muted,
            is_solo=track.is_solo,
            output_id=track.output_id,
            height=track.height,
        )


class ContainerContentType(enum.Enum):
    """The kind of content a container holds."""

    PATTERN = "pattern"
    MIDI_CLIP = "midi_clip"
    AUDIO_FILE = "audio_file"


@dataclass(frozen=True)
class ContainerSnapshot:
    """What the UI needs to draw a container."""

    id: uuid.UUID
    position: TimePosition
    length: Duration
    content_type: ContainerContentType
    is_looping: bool

    @classmethod
    def from_container(cls, container: MediaContainer) -> ContainerSnapshot:
        """Capture the display state of ``container``."""
        match container.content:
            case Pattern():
                content_type = ContainerContentType.PATTERN
            case MidiClip():
                content_type = ContainerContentType.MIDI_CLIP
            case AudioFile():
                content_type = ContainerContentType.AUDIO_FILE
            case other:
                raise TypeError(f"unknown container content: {other!r}")
        return cls(
            id=container.id,
            position=container.position,
            length=container.length,
            content_type=content_type,
            is_looping=container.playback_mode is PlaybackMode.LOOP,
        )


@dataclass(frozen=True)
class TimelineSnapshot:
    """A timeline's tracks and, per track, its containers in position order."""

    id: uuid.UUID
    name: str
    tracks: list[TrackSnapshot]
    containers: dict[uuid.UUID, list[ContainerSnapshot]]
    playback_position: TimePosition | None = None

    @classmethod
    def from_timeline(
        cls, timeline: Timeline, playback_position: TimePosition | None
    ) -> TimelineSnapshot:
        """Capture ``timeline``, grouping its containers by track."""
        containers: dict[uuid.UUID, list[ContainerSnapshot]] = {}
        for track in timeline.tracks:
            index = timeline.track_containers.get(track.id, {})
            containers[track.id] = [
                ContainerSnapshot.from_container(timeline.containers[container_id])
                for container_id in index.values()
                if container_id in timeline.containers
            ]
        return cls(
            id=timeline.id,
            name=timeline.name,
            tracks=[TrackSnapshot.from_track(track) for track in timeline.tracks],
            containers=containers,
            playback_position=playback_position,
        )


@dataclass(frozen=True)
class EndpointSnapshot:
    """What the UI needs to list an endpoint."""

    id: uuid.UUID
    name: str
    device_id: str
    endpoint_type: EndpointType
    enabled: bool

    @classmethod
    def from_config(cls, config: EndpointConfig) -> EndpointSnapshot:
        """Capture the display state of ``config``."""
        return cls(
            id=config.id,
            name=config.name,
            device_id=config.device_id,
            endpoint_type=config.endpoint_type,
            enabled=config.enabled,
        )


@dataclass(frozen=True)
class ProjectSnapshot:
    """The whole project as the UI sees it."""

    name: str
    active_timeline: TimelineSnapshot | None
    endpoints: list[EndpointSnapshot] = field(default_factory=list)