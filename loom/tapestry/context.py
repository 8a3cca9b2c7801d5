"""A shared tempo map paired with a current position."""

from __future__ import annotations

from dataclasses import dataclass, field

from loom.tapestry.position import TimePosition
from loom.tapestry.tempo_map import TempoMap


@dataclass
class TimeContext:
    """A tempo map shared between contexts, each with its own position."""

    tempo_map: TempoMap
    position: TimePosition = field(default_factory=TimePosition.zero)

    def clone_with_new_position(self, position: TimePosition) -> TimeContext:
        """A new context sharing this tempo map, set to ``position``."""
        return TimeContext(self.tempo_map, position)