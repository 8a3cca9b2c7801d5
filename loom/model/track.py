"""Tracks on a timeline."""

from __future__ import annotations

import dataclasses
import enum
import uuid
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Color:
    """An RGB display colour."""

    r: int
    g: int
    b: int


class TrackType(enum.Enum):
    """The kind of material a track carries."""

    MIDI = "midi"
    AUDIO = "audio"
    INSTRUMENT = "instrument"
    AUTOMATION = "automation"


def _default_color() -> Color:
    return Color(100, 100, 200)


@dataclass
class Track:
    """A track in a timeline."""

    name: str
    track_type: TrackType
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    output_id: uuid.UUID | None = None
    color: Color = field(default_factory=_default_color)
    is_muted: bool = False
    is_solo: bool = False
    height: int = 100

    def with_color(self, color: Color) -> Track:
        """A copy of this track with a different colour."""
        return dataclasses.replace(self, color=color)

    def with_output(self, output_id: uuid.UUID) -> Track:
        """A copy of this track routed to ``output_id``."""
        return dataclasses.replace(self, output_id=output_id)