"""The playback engine: advances time and emits output events."""

from __future__ import annotations

import math
import threading
import time

from loom.controller.event import ChannelClosed, EventSender
from loom.engine.clock import ClockSource, InternalClock
from loom.model.project import ProjectHandle
from loom.output.event import OutputEvent
from loom.output.system import OutputSystem
from loom.tapestry.position import TimePosition
from loom.tapestry.tempo_map import TempoMap

_BASE_NOTE = 60
_VELOCITY = 100


def beat_events(
    tempo_map: TempoMap, last_position: TimePosition, current_position: TimePosition
) -> list[OutputEvent]:
    """A note-on/note-off pair when a beat boundary falls in (last, current].

    The note steps up a semitone per beat from middle C, wrapping each octave.
    """
    beat = tempo_map.position_to_beats(current_position)
    previous = tempo_map.position_to_beats(last_position)
    if math.floor(beat) <= math.floor(previous):
        return []
    beat_number = min(max(int(beat), 0), 255)
    note = _BASE_NOTE + beat_number % 12
    return [
        OutputEvent.midi_note_on(0, note, _VELOCITY, None),
        OutputEvent.midi_note_off(0, note, None),
    ]


class PlaybackEngine:
    """Runs a background thread that tracks the playhead and sends output.

    While playing it publishes the playhead position on every tick and sends a
    beat tone to the output system whenever the playhead crosses a beat.
    """

    def __init__(
        self,
        project: ProjectHandle,
        event_sender: EventSender,
        output_system: OutputSystem,
        output_lock: threading.Lock | None = None,
        tick_interval: float = 0.001,
    ) -> None:
        self._project = project
        self._event_sender = event_sender
        self._output_system = output_system
        self._output_lock = output_lock if output_lock is not None else threading.Lock()
        self._tick_interval = tick_interval
        self._clock_source: ClockSource = InternalClock(sample_rate=44100)
        self._playing = threading.Event()
        self._thread: threading.Thread | None = None
        self._state_lock = threading.Lock()
        self._start_position = TimePosition.zero()
        self._seek_request: TimePosition | None = None

    def __repr__(self) -> str:
        return f"PlaybackEngine(playing={self.is_playing})"

    @property
    def is_playing(self) -> bool:
        """Whether the playback thread is running."""
        return self._playing.is_set()

    @property
    def clock_source(self) -> ClockSource:
        """The clock reporting the current time."""
        return self._clock_source

    def set_clock_source(self, clock_source: ClockSource) -> None:
        """Replace the clock, stopping playback first if it is running."""
        if self.is_playing:
            self.stop()
        self._clock_source = clock_source

    def play(self) -> None:
        """Start playback from the last seek position; no-op if already playing."""
        if self.is_playing:
            return
        self._playing.set()
        if isinstance(self._clock_source, InternalClock):
            self._clock_source.start()
        self._thread = threading.Thread(target=self._run, name="loom-playback", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop playback and wait for the thread to finish; no-op if stopped."""
        if not self.is_playing:
            return
        self._playing.clear()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        if isinstance(self._clock_source, InternalClock):
            self._clock_source.stop()

    def seek(self, position: TimePosition) -> None:
        """Move the playhead; takes effect immediately when playing."""
        with self._state_lock:
            self._start_position = position
            self._seek_request = position

    def current_position(self) -> TimePosition:
        """The time reported by the clock source."""
        return self._clock_source.current_time()

    def _run(self) -> None:
        with self._state_lock:
            origin = self._start_position
            self._seek_request = None
        started = time.monotonic()
        last_position = origin

        while self._playing.is_set():
            with self._state_lock:
                if self._seek_request is not None:
                    origin = self._seek_request
                    self._seek_request = None
                    started = time.monotonic()
                    last_position = origin

            elapsed = time.monotonic() - started
            with self._project.read() as project:
                current_position = origin + TimePosition.from_seconds(
                    elapsed, project.settings.reference_sample_rate
                )
                if project.active_timeline() is not None:
                    events = beat_events(project.tempo_map, last_position, current_position)
                else:
                    events = []

            try:
                self._event_sender.playback_position_changed(current_position)
            except ChannelClosed:
                pass

            with self._output_lock:
                for event in events:
                    self._output_system.send_event(event)

            last_position = current_position
            time.sleep(self._tick_interval)