"""Sample-rate independent durations measured in ticks."""

from __future__ import annotations

import math
from dataclasses import dataclass

_U64_MAX = 2**64 - 1

# Ticks per beat used when converting beats without a tempo map
# (one beat = half a second at 44.1 kHz).
_TICKS_PER_BEAT = 22050.0


def _round_ticks(value: float) -> int:
    """Round half away from zero and clamp into the unsigned 64-bit tick range."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= _U64_MAX:
        return _U64_MAX
    floor = math.floor(value)
    return floor + (1 if value - floor >= 0.5 else 0)


@dataclass(frozen=True, slots=True)
class Duration:
    """A length of time expressed in ticks at the reference sample rate."""

    ticks: int = 0

    def __post_init__(self) -> None:
        if self.ticks < 0:
            raise ValueError(f"duration ticks must be non-negative, got {self.ticks}")

    @classmethod
    def zero(cls) -> Duration:
        """Return an empty duration."""
        return cls(0)

    @classmethod
    def from_seconds(cls, seconds: float, reference_sample_rate: int) -> Duration:
        """Build a duration from seconds at the given reference sample rate."""
        return cls(_round_ticks(seconds * reference_sample_rate))

    @classmethod
    def from_beats(cls, beats: float) -> Duration:
        """Build a duration from beats, assuming 22050 ticks per beat."""
        return cls(_round_ticks(beats * _TICKS_PER_BEAT))

    def to_seconds(self, reference_sample_rate: int) -> float:
        """Express this duration in seconds at the given reference sample rate."""
        return self.ticks / reference_sample_rate

    def __add__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.ticks + other.ticks)

    def __sub__(self, other: object) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(max(0, self.ticks - other.ticks))

    def __mul__(self, scalar: object) -> Duration:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Duration(_round_ticks(self.ticks * float(scalar)))

    __rmul__ = __mul__

    def __truediv__(self, scalar: object) -> Duration:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Duration(_round_ticks(self.ticks / float(scalar)))