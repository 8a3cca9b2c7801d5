"""Media containers placed on tracks."""

from __future__ import annotations

import dataclasses
import enum
import uuid
from dataclasses import dataclass, field

from loom.tapestry.duration import Duration
from loom.tapestry.position import TimePosition


class PlaybackMode(enum.Enum):
    """How a container plays its content."""

    NORMAL = "normal"
    LOOP = "loop"
    ONE_SHOT = "one_shot"
    PING_PONG = "ping_pong"


@dataclass(frozen=True)
class Pattern:
    """Reference to a tracker-style pattern."""

    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass(frozen=True)
class MidiClip:
    """Reference to a MIDI clip."""

    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass(frozen=True)
class AudioFile:
    """Reference to an audio file."""

    id: uuid.UUID = field(default_factory=uuid.uuid4)


MediaContent = Pattern | MidiClip | AudioFile


def _default_length() -> Duration:
    return Duration.from_beats(4.0)


@dataclass
class MediaContainer:
    """A block of media content placed on the timeline."""

    position: TimePosition
    content: MediaContent
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    length: Duration = field(default_factory=_default_length)
    playback_mode: PlaybackMode = PlaybackMode.NORMAL
    loop_count: int | None = None
    start_offset: Duration = field(default_factory=Duration.zero)
    end_offset: Duration = field(default_factory=Duration.zero)
    time_scale: float = 1.0

    def with_length(self, length: Duration) -> MediaContainer:
        """A copy with a different length."""
        return dataclasses.replace(self, length=length)

    def with_loop(self, count: int | None) -> MediaContainer:
        """A looping copy; ``count`` of None loops to fill the length."""
        return dataclasses.replace(
            self, playback_mode=PlaybackMode.LOOP, loop_count=count
        )

    def with_crop(self, start: Duration, end: Duration) -> MediaContainer:
        """A copy cropped by ``start`` and ``end`` offsets."""
        return dataclasses.replace(self, start_offset=start, end_offset=end)

    def with_time_scale(self, scale: float) -> MediaContainer:
        """A copy played at ``scale`` times normal speed."""
        return dataclasses.replace(self, time_scale=scale)