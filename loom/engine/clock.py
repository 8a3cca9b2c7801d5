"""Clock sources that tell the engine the current time."""

from __future__ import annotations

import enum
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from loom.tapestry.position import TimePosition


class ClockSourceType(enum.Enum):
    """Where timing comes from."""

    INTERNAL = "internal"
    MTC = "mtc"
    LTC = "ltc"


class ClockSource(ABC):
    """A source of the current playback time."""

    @abstractmethod
    def current_time(self) -> TimePosition:
        """The current position."""

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """Ticks per second of the positions this clock reports."""

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Whether the clock is advancing."""


class InternalClock(ClockSource):
    """A clock driven by the system's monotonic timer."""

    def __init__(
        self, sample_rate: int = 44100, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._sample_rate = sample_rate
        self._clock = clock
        self.start_time: float | None = None

    def __repr__(self) -> str:
        return f"InternalClock(sample_rate={self._sample_rate}, running={self.is_running})"

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def is_running(self) -> bool:
        return self.start_time is not None

    def start(self) -> None:
        """Start counting from now."""
        self.start_time = self._clock()

    def stop(self) -> None:
        """Stop the clock; it then reports time zero."""
        self.start_time = None

    def current_time(self) -> TimePosition:
        """Time elapsed since start, or zero when stopped."""
        if self.start_time is None:
            return TimePosition.zero()
        elapsed = self._clock() - self.start_time
        return TimePosition.from_seconds(elapsed, self._sample_rate)