import queue

import pytest

from loom.controller.command import Command, CommandKind, create_command_channel
from loom.controller.dispatcher import Controller
from loom.controller.event import EventHub, EventKind, create_event_channel
from loom.engine.playback import PlaybackEngine
from loom.model.container import MediaContainer, Pattern
from loom.model.endpoint import EndpointConfig
from loom.model.project import Project, ProjectHandle
from loom.model.track import Track, TrackType
from loom.output.system import OutputSystem
from loom.tapestry.duration import Duration
from loom.tapestry.position import TimePosition


class _Rig:
    def __init__(self):
        self.sender, receiver = create_command_channel()
        event_sender, self.events = create_event_channel()
        hub = EventHub()
        hub.add_receiver(event_sender)
        self.handle = ProjectHandle(Project("Song"))
        engine_sender, _ = create_event_channel()
        output = OutputSystem()
        self.engine = PlaybackEngine(self.handle, engine_sender, output)
        self.controller = Controller(receiver, hub, self.handle, self.engine, output)

    def project(self):
        with self.handle.read() as project:
            return project

    def next_event(self):
        return self.events.try_recv()


@pytest.fixture
def rig():
    r = _Rig()
    yield r
    r.engine.stop()


def _place_container(rig, position=TimePosition(100)):
    timeline = rig.project().active_timeline()
    track_id = timeline.add_track(Track("A", TrackType.MIDI))
    container = MediaContainer(position, Pattern())
    timeline.add_container(track_id, container)
    return container


def test_create_project_replaces_project_and_reports_id(rig):
    rig.controller.handle_command(Command(CommandKind.CREATE_PROJECT, {"name": "Fresh"}))
    project = rig.project()
    assert project.name == "Fresh"
    event = rig.next_event()
    assert event.kind is EventKind.PROJECT_CREATED
    assert event["project_id"] == project.id


def test_add_track_adds_to_active_timeline(rig):
    rig.controller.handle_command(
        Command(CommandKind.ADD_TRACK, {"name": "Drums", "track_type": TrackType.MIDI})
    )
    tracks = rig.project().active_timeline().tracks
    assert [t.name for t in tracks] == ["Drums"]
    event = rig.next_event()
    assert event.kind is EventKind.TRACK_ADDED
    assert event["track_id"] == tracks[0].id
    assert event["track_type"] is TrackType.MIDI


def test_add_track_without_active_timeline_does_nothing(rig):
    rig.project().active_timeline_id = None
    rig.controller.handle_command(
        Command(CommandKind.ADD_TRACK, {"name": "Drums", "track_type": TrackType.MIDI})
    )
    with pytest.raises(queue.Empty):
        rig.next_event()


def test_move_container_updates_position(rig):
    container = _place_container(rig)
    target = TimePosition(900)
    rig.controller.handle_command(
        Command(
            CommandKind.MOVE_CONTAINER,
            {"container_id": container.id, "new_position": target},
        )
    )
    assert rig.project().active_timeline().container(container.id).position == target
    event = rig.next_event()
    assert event.kind is EventKind.CONTAINER_MOVED
    assert event["position"] == target


def test_move_unknown_container_sends_nothing(rig):
    rig.controller.handle_command(
        Command(
            CommandKind.MOVE_CONTAINER,
            {"container_id": Pattern().id, "new_position": TimePosition(1)},
        )
    )
    with pytest.raises(queue.Empty):
        rig.next_event()


def test_resize_container_sets_length(rig):
    container = _place_container(rig)
    length = Duration.from_beats(8.0)
    rig.controller.handle_command(
        Command(
            CommandKind.RESIZE_CONTAINER,
            {"container_id": container.id, "new_length": length},
        )
    )
    assert rig.project().active_timeline().container(container.id).length == length
    event = rig.next_event()
    assert event.kind is EventKind.CONTAINER_RESIZED
    assert event["length"] == length


def test_seek_reports_position(rig):
    position = TimePosition(4410)
    rig.controller.handle_command(Command(CommandKind.SEEK, {"position": position}))
    event = rig.next_event()
    assert event.kind is EventKind.PLAYBACK_POSITION_CHANGED
    assert event["position"] == position


def test_unhandled_command_reports_error(rig):
    rig.controller.handle_command(Command(CommandKind.PAUSE))
    event = rig.next_event()
    assert event.kind is EventKind.ERROR
    assert event["message"].startswith("Unhandled command:")


def test_play_and_stop_drive_engine(rig):
    rig.controller.handle_command(Command(CommandKind.PLAY))
    assert rig.engine.is_playing is True
    assert rig.next_event().kind is EventKind.PLAYBACK_STARTED
    snapshot = rig.controller.create_project_snapshot()
    assert snapshot.active_timeline.playback_position is not None
    rig.controller.handle_command(Command(CommandKind.STOP))
    assert rig.engine.is_playing is False
    assert rig.next_event().kind is EventKind.PLAYBACK_STOPPED


def test_run_processes_until_shutdown(rig):
    rig.sender.send(
        Command(CommandKind.ADD_TRACK, {"name": "Keys", "track_type": TrackType.INSTRUMENT})
    )
    rig.sender.send(Command(CommandKind.SHUTDOWN))
    rig.controller.run()
    assert rig.controller.is_running is False
    assert [t.name for t in rig.project().active_timeline().tracks] == ["Keys"]


def test_run_exits_when_channel_closed():
    command_sender, command_receiver = create_command_channel()
    handle = ProjectHandle(Project("Song"))
    engine_sender, _ = create_event_channel()
    output = OutputSystem()
    engine = PlaybackEngine(handle, engine_sender, output)
    controller = Controller(command_receiver, EventHub(), handle, engine, output)
    command_sender.close()
    controller.run()
    assert controller.is_running is False


def test_run_in_thread_handles_commands(rig):
    thread = rig.controller.run_in_thread()
    rig.sender.send(
        Command(CommandKind.ADD_TRACK, {"name": "Pad", "track_type": TrackType.AUDIO})
    )
    event = rig.events.recv(timeout=5)
    rig.sender.send(Command(CommandKind.SHUTDOWN))
    thread.join(timeout=5)
    assert event.kind is EventKind.TRACK_ADDED
    assert event["track_type"] is TrackType.AUDIO
    assert thread.is_alive() is False


def test_snapshot_when_stopped(rig):
    config = EndpointConfig.new_midi("Out", "0:Port")
    rig.project().add_endpoint(config)
    _place_container(rig)
    snapshot = rig.controller.create_project_snapshot()
    assert snapshot.name == "Song"
    assert snapshot.active_timeline.name == "Main"
    assert snapshot.active_timeline.playback_position is None
    assert [e.id for e in snapshot.endpoints] == [config.id]
    (containers,) = snapshot.active_timeline.containers.values()
    assert [c.position for c in containers] == [TimePosition(100)]


def test_snapshot_without_active_timeline():
    _, command_receiver = create_command_channel()
    project = Project("Solo")
    project.active_timeline_id = None
    handle = ProjectHandle(project)
    engine_sender, _ = create_event_channel()
    output = OutputSystem()
    engine = PlaybackEngine(handle, engine_sender, output)
    controller = Controller(command_receiver, EventHub(), handle, engine, output)
    snapshot = controller.create_project_snapshot()
    assert snapshot.name == "Solo"
    assert snapshot.active_timeline is None
    assert snapshot.endpoints == []