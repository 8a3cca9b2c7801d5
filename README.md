# loom

loom is a library that holds the core of a timeline-based music sequencer. It has these parts:

- `loom.tapestry` handles timing. `TimePosition` and `Duration` count ticks at a reference sample rate. The part also provides `Tempo`, `TimeSignature` and `NoteValue`. A `TempoMap` converts between ticks, beats, bars and playback samples.
- `loom.model` holds the data model: `Project`, `Timeline`, `Track`, `MediaContainer` and the `EndpointConfig` for each output. A `ProjectHandle` lets several threads share a project behind a lock.
- `loom.output` handles output. It holds the output events, `encode_midi_message` for MIDI wire encoding, and `MidiOutputEndpoint`. The `OutputSystem` sends events to MIDI ports through `mido`.
- `loom.engine` holds `InternalClock`, `EventScheduler` and the threaded `PlaybackEngine`.
- `loom.controller` holds the command and event channels, the snapshot classes for a UI, and `Controller`. `Controller` applies commands to the shared project and engine, then publishes events.

## Installation

```
pip install .
```

To send to real MIDI ports, `mido` needs a backend it can use, such as `python-rtmidi`.

## Timing

```python
from loom.tapestry.position import TimePosition
from loom.tapestry.tempo import Tempo
from loom.tapestry.tempo_map import TempoMap

tempo_map = TempoMap(44100, 44100)          # 120 BPM, 4/4 at zero
tempo_map.add_tempo_change(TimePosition.from_seconds(4.0, 44100), Tempo(60.0))

position = TimePosition.from_seconds(2.0, 44100)
tempo_map.position_to_beats(position)        # 4.0
tempo_map.position_to_bars_and_beats(position)
tempo_map.beats_to_position(2.0)
```

Some facts about these types:

- `TimePosition` and `Duration` are immutable.
- Subtraction saturates at zero.
- Adding a `Duration` to a `TimePosition` gives a `TimePosition`.
- `Duration.from_beats` assumes 22050 ticks per beat.

## Building a project

```python
from loom.model.project import Project
from loom.model.track import Track, TrackType
from loom.model.container import MediaContainer, Pattern
from loom.tapestry.duration import Duration
from loom.tapestry.position import TimePosition

project = Project("Demo")                    # starts with a "Main" timeline
timeline = project.active_timeline()
track_id = timeline.add_track(Track("Lead", TrackType.MIDI))

container = MediaContainer(TimePosition.zero(), Pattern()).with_length(Duration.from_beats(8.0))
timeline.add_container(track_id, container)

timeline.containers_in_range(TimePosition.zero(), TimePosition(1000))
timeline.move_container(container.id, TimePosition(44100))
```

## MIDI output

```python
from loom.model.endpoint import EndpointConfig
from loom.output.event import OutputEvent
from loom.output.midi import encode_midi_message
from loom.output.system import OutputSystem

encode_midi_message(OutputEvent.midi_note_on(0, 60, 100))   # b"\x90<d"

outputs = OutputSystem()
outputs.scan_midi_outputs()                  # [(index, port name), ...]
config = EndpointConfig.new_midi("Synth", "0:My Port")      # device id is "index:name"
outputs.add_endpoint(config)
outputs.connect_endpoint(config.id)
outputs.send_event(OutputEvent.midi_note_on(0, 60, 100))    # [None] on success
```

`send_event` returns one entry for each delivery attempt. An entry is `None` when delivery succeeded and the `OutputError` when it failed. Unknown endpoints, bad device ids and connection failures raise `OutputError`.

## Driving the controller

```python
from loom.controller.command import create_command_channel
from loom.controller.dispatcher import Controller
from loom.controller.event import EventHub, EventKind, create_event_channel
from loom.engine.playback import PlaybackEngine
from loom.model.project import Project, ProjectHandle
from loom.model.track import TrackType
from loom.output.system import OutputSystem

commands, command_receiver = create_command_channel()
events, event_receiver = create_event_channel()
hub = EventHub()
hub.add_receiver(events)

project = ProjectHandle(Project("Demo"))
outputs = OutputSystem()
engine = PlaybackEngine(project, events, outputs)
controller = Controller(command_receiver, hub, project, engine, outputs)
thread = controller.run_in_thread()

commands.add_track("Lead", TrackType.MIDI)
event = event_receiver.recv(timeout=1.0)
assert event.kind is EventKind.TRACK_ADDED

commands.shutdown()
thread.join()
```

The controller stops in any of these cases:

- it receives a shutdown command;
- `controller.stop()` is called;
- the command sender is closed and the channel is drained.

The controller handles these commands: create project, add track, move container, resize container, play, stop, seek and shutdown. Any other command produces an `EventKind.ERROR` event.

While playback runs, the engine sends `PLAYBACK_POSITION_CHANGED` events on each tick. Each time the playhead crosses a beat, it also sends a short beat tone to the output system.

`controller.create_project_snapshot()` returns a `ProjectSnapshot` that a UI can render.

## What it does not do

- The package has no command-line program and no user interface. It is a library only.
- The package has no project storage. Opening and saving projects are defined as commands, but the controller answers them with an error event.
- Only MIDI endpoints can be created. `OutputSystem.add_endpoint` raises `OutputError` for audio and VST endpoints.
- Playback does not play the contents of patterns, MIDI clips or audio files. It produces only the beat tone.
- The only working clock is `InternalClock`. `ClockSourceType` lists MTC and LTC, but no clock implements them.