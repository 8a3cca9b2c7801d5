"""Absolute positions on the timeline measured in ticks."""

from __future__ import annotations

from dataclasses import dataclass

from loom.tapestry.duration import Duration, _round_ticks


@dataclass(frozen=True, order=True, slots=True)
class TimePosition:
    """A point in time expressed in ticks at the reference sample rate."""

    position_ticks: int = 0

    def __post_init__(self) -> None:
        if self.position_ticks < 0:
            raise ValueError(
                f"position ticks must be non-negative, got {self.position_ticks}"
            )

    @classmethod
    def zero(cls) -> TimePosition:
        """Return the start of the timeline."""
        return cls(0)

    @classmethod
    def from_seconds(cls, seconds: float, reference_sample_rate: int) -> TimePosition:
        """Build a position from seconds at the given reference sample rate."""
        return cls(_round_ticks(seconds * reference_sample_rate))

    def to_seconds(self, reference_sample_rate: int) -> float:
        """Express this position in seconds at the given reference sample rate."""
        return self.position_ticks / reference_sample_rate

    def __add__(self, other: object) -> TimePosition:
        if isinstance(other, TimePosition):
            return TimePosition(self.position_ticks + other.position_ticks)
        if isinstance(other, Duration):
            return TimePosition(self.position_ticks + other.ticks)
        return NotImplemented

    def __sub__(self, other: object) -> TimePosition:
        if isinstance(other, TimePosition):
            return TimePosition(max(0, self.position_ticks - other.position_ticks))
        if isinstance(other, Duration):
            return TimePosition(max(0, self.position_ticks - other.ticks))
        return NotImplemented