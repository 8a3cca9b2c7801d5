"""Events sent from the engine to output endpoints."""

from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MidiNoteOn:
    """Start a note."""

    channel: int
    note: int
    velocity: int


@dataclass(frozen=True, slots=True)
class MidiNoteOff:
    """Release a note."""

    channel: int
    note: int


@dataclass(frozen=True, slots=True)
class MidiControlChange:
    """Set a controller value."""

    channel: int
    controller: int
    value: int


@dataclass(frozen=True, slots=True)
class MidiProgramChange:
    """Select a program."""

    channel: int
    program: int


@dataclass(frozen=True, slots=True)
class MidiPitchBend:
    """Bend pitch; ``value`` runs from -8192 to 8191."""

    channel: int
    value: int


@dataclass(frozen=True, slots=True)
class MidiAftertouch:
    """Channel pressure."""

    channel: int
    pressure: int


@dataclass(frozen=True, slots=True)
class MidiPolyAftertouch:
    """Per-note pressure."""

    channel: int
    note: int
    pressure: int


@dataclass(frozen=True, slots=True)
class AudioBuffer:
    """Interleaved audio samples."""

    data: tuple[float, ...]
    channels: int
    frames: int


@dataclass(frozen=True, slots=True)
class VstParameter:
    """Set a plugin parameter."""

    parameter_id: int
    value: float


@dataclass(frozen=True, slots=True)
class SyncPulse:
    """A clock synchronisation pulse."""


@dataclass(frozen=True, slots=True)
class EndOfTrack:
    """Marks the end of a track."""


MidiEventType = (
    MidiNoteOn
    | MidiNoteOff
    | MidiControlChange
    | MidiProgramChange
    | MidiPitchBend
    | MidiAftertouch
    | MidiPolyAftertouch
)

OutputEventType = MidiEventType | AudioBuffer | VstParameter | SyncPulse | EndOfTrack

_MIDI_TYPES = (
    MidiNoteOn,
    MidiNoteOff,
    MidiControlChange,
    MidiProgramChange,
    MidiPitchBend,
    MidiAftertouch,
    MidiPolyAftertouch,
)


@dataclass(frozen=True, slots=True)
class OutputEvent:
    """An event for one endpoint, or for all compatible ones when ``target`` is None."""

    event_type: OutputEventType
    target: uuid.UUID | None = None

    @classmethod
    def midi_note_on(
        cls, channel: int, note: int, velocity: int, target: uuid.UUID | None = None
    ) -> OutputEvent:
        """A note-on event."""
        return cls(MidiNoteOn(channel, note, velocity), target)

    @classmethod
    def midi_note_off(
        cls, channel: int, note: int, target: uuid.UUID | None = None
    ) -> OutputEvent:
        """A note-off event."""
        return cls(MidiNoteOff(channel, note), target)

    @classmethod
    def midi_cc(
        cls, channel: int, controller: int, value: int, target: uuid.UUID | None = None
    ) -> OutputEvent:
        """A control-change event."""
        return cls(MidiControlChange(channel, controller, value), target)

    def is_midi(self) -> bool:
        """True for any MIDI channel message."""
        return isinstance(self.event_type, _MIDI_TYPES)

    def is_audio(self) -> bool:
        """True for an audio buffer."""
        return isinstance(self.event_type, AudioBuffer)

    def is_vst(self) -> bool:
        """True for a plugin parameter change."""
        return isinstance(self.event_type, VstParameter)