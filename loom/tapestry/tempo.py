"""Tempo, time signatures and note values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class Tempo:
    """A musical tempo in beats per minute."""

    bpm: float

    def beat_duration_secs(self) -> float:
        """Length of one beat in seconds."""
        return 60.0 / self.bpm


@dataclass(frozen=True, slots=True)
class TimeSignature:
    """A time signature: beats per bar over the note value of a beat."""

    numerator: int
    denominator: int

    def beats_per_bar(self) -> float:
        """Number of beats in one bar."""
        return float(self.numerator)


@dataclass(frozen=True)
class NoteValue:
    """A note length measured in beats (quarter notes)."""

    beats: float

    WHOLE: ClassVar[NoteValue]
    HALF: ClassVar[NoteValue]
    QUARTER: ClassVar[NoteValue]
    EIGHTH: ClassVar[NoteValue]
    SIXTEENTH: ClassVar[NoteValue]
    THIRTY_SECOND: ClassVar[NoteValue]
    SIXTY_FOURTH: ClassVar[NoteValue]
    DOTTED_HALF: ClassVar[NoteValue]
    DOTTED_QUARTER: ClassVar[NoteValue]
    DOTTED_EIGHTH: ClassVar[NoteValue]
    DOTTED_SIXTEENTH: ClassVar[NoteValue]
    TRIPLET_HALF: ClassVar[NoteValue]
    TRIPLET_QUARTER: ClassVar[NoteValue]
    TRIPLET_EIGHTH: ClassVar[NoteValue]
    TRIPLET_SIXTEENTH: ClassVar[NoteValue]

    def to_beats(self) -> float:
        """Length in beats."""
        return self.beats

    @classmethod
    def from_beats(cls, beats: float) -> NoteValue:
        """Build a note value from a custom beat length."""
        return cls(beats)


NoteValue.WHOLE = NoteValue(4.0)
NoteValue.HALF = NoteValue(2.0)
NoteValue.QUARTER = NoteValue(1.0)
NoteValue.EIGHTH = NoteValue(0.5)
NoteValue.SIXTEENTH = NoteValue(0.25)
NoteValue.THIRTY_SECOND = NoteValue(0.125)
NoteValue.SIXTY_FOURTH = NoteValue(0.0625)

NoteValue.DOTTED_HALF = NoteValue(3.0)
NoteValue.DOTTED_QUARTER = NoteValue(1.5)
NoteValue.DOTTED_EIGHTH = NoteValue(0.75)
NoteValue.DOTTED_SIXTEENTH = NoteValue(0.375)

NoteValue.TRIPLET_HALF = NoteValue(4.0 / 3.0)
NoteValue.TRIPLET_QUARTER = NoteValue(2.0 / 3.0)
NoteValue.TRIPLET_EIGHTH = NoteValue(1.0 / 3.0)
NoteValue.TRIPLET_SIXTEENTH = NoteValue(0.5 / 3.0)