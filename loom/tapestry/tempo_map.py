"""Conversions between ticks, samples, beats and bars."""

from __future__ import annotations

import math
from bisect import bisect_right, insort
from typing import TypeVar

from loom.tapestry.duration import _round_ticks
from loom.tapestry.position import TimePosition
from loom.tapestry.tempo import Tempo, TimeSignature

_T = TypeVar("_T")


def _saturating_u32(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    return min(int(value), 2**32 - 1)


class _ChangeList(dict[TimePosition, _T]):
    """Changes keyed by position, iterable in position order."""

    def __init__(self) -> None:
        super().__init__()
        self._keys: list[TimePosition] = []

    def __setitem__(self, position: TimePosition, value: _T) -> None:
        if position not in self:
            insort(self._keys, position)
        super().__setitem__(position, value)

    def ordered(self) -> list[tuple[TimePosition, _T]]:
        return [(key, self[key]) for key in self._keys]

    def up_to(self, position: TimePosition) -> list[tuple[TimePosition, _T]]:
        """Changes at or before ``position``, in order."""
        end = bisect_right(self._keys, position)
        return [(key, self[key]) for key in self._keys[:end]]

    def last_at_or_before(self, position: TimePosition) -> _T | None:
        index = bisect_right(self._keys, position)
        if index == 0:
            return None
        return self[self._keys[index - 1]]


class TempoMap:
    """Maps between ticks, playback samples, beats and bars."""

    def __init__(self, reference_sample_rate: int, playback_sample_rate: int) -> None:
        self.reference_sample_rate = reference_sample_rate
        self.playback_sample_rate = playback_sample_rate
        self._tempo_changes: _ChangeList[Tempo] = _ChangeList()
        self._time_signature_changes: _ChangeList[TimeSignature] = _ChangeList()
        self._tempo_changes[TimePosition.zero()] = Tempo(120.0)
        self._time_signature_changes[TimePosition.zero()] = TimeSignature(4, 4)

    def add_tempo_change(self, position: TimePosition, tempo: Tempo) -> None:
        """Set the tempo from ``position`` onwards, replacing any change there."""
        self._tempo_changes[position] = tempo

    def add_time_signature_change(
        self, position: TimePosition, time_signature: TimeSignature
    ) -> None:
        """Set the time signature from ``position`` onwards."""
        self._time_signature_changes[position] = time_signature

    def tempo_at(self, position: TimePosition) -> Tempo:
        """Tempo in effect at ``position``."""
        tempo = self._tempo_changes.last_at_or_before(position)
        if tempo is None:
            raise LookupError("No tempo defined")
        return tempo

    def time_signature_at(self, position: TimePosition) -> TimeSignature:
        """Time signature in effect at ``position``."""
        signature = self._time_signature_changes.last_at_or_before(position)
        if signature is None:
            raise LookupError("No time signature defined")
        return signature

    def ticks_to_playback_samples(self, position: TimePosition) -> int:
        """Convert a tick position to a playback sample count."""
        return _round_ticks(
            position.position_ticks
            * self.playback_sample_rate
            / self.reference_sample_rate
        )

    def playback_samples_to_ticks(self, samples: int) -> TimePosition:
        """Convert a playback sample count to a tick position."""
        return TimePosition(
            _round_ticks(samples * self.reference_sample_rate / self.playback_sample_rate)
        )

    def position_to_beats(self, position: TimePosition) -> float:
        """Number of beats from the start of the timeline to ``position``."""
        result = 0.0
        last_position = TimePosition.zero()
        last_tempo = self.tempo_at(last_position)

        for change_position, tempo in self._tempo_changes.up_to(position):
            if change_position > last_position:
                segment_secs = (
                    change_position.position_ticks - last_position.position_ticks
                ) / self.reference_sample_rate
                result += segment_secs / last_tempo.beat_duration_secs()
                last_position = change_position
                last_tempo = tempo

        if position > last_position:
            final_secs = (
                position.position_ticks - last_position.position_ticks
            ) / self.reference_sample_rate
            result += final_secs / last_tempo.beat_duration_secs()

        return result

    def beats_to_position(self, beats: float) -> TimePosition:
        """Tick position reached after ``beats`` beats from the start."""
        remaining_beats = beats
        current_position = TimePosition.zero()
        current_tempo = self.tempo_at(current_position)

        for change_position, next_tempo in self._tempo_changes.ordered()[1:]:
            current_beats = self.position_to_beats(change_position)
            if remaining_beats <= current_beats:
                break
            current_position = change_position
            current_tempo = next_tempo
            remaining_beats -= current_beats

        segment_secs = remaining_beats * current_tempo.beat_duration_secs()
        additional_ticks = _round_ticks(segment_secs * self.reference_sample_rate)
        return TimePosition(current_position.position_ticks + additional_ticks)

    def position_to_bars_and_beats(self, position: TimePosition) -> tuple[int, float]:
        """Whole bars before ``position`` and the beat within the current bar."""
        remaining_beats = self.position_to_beats(position)
        bars = 0

        last_sig_position = TimePosition.zero()
        last_sig = self.time_signature_at(last_sig_position)

        for sig_position, time_sig in self._time_signature_changes.up_to(position):
            beats_at_change = self.position_to_beats(sig_position)
            if beats_at_change > 0.0:
                beats_in_segment = beats_at_change - self.position_to_beats(
                    last_sig_position
                )
                bars_in_segment = math.floor(beats_in_segment / last_sig.beats_per_bar())
                bars += _saturating_u32(bars_in_segment)
                remaining_beats -= bars_in_segment * last_sig.beats_per_bar()
                last_sig_position = sig_position
                last_sig = time_sig

        final_bars = _saturating_u32(math.floor(remaining_beats / last_sig.beats_per_bar()))
        beat_in_bar = remaining_beats - final_bars * last_sig.beats_per_bar()
        return bars + final_bars, beat_in_bar