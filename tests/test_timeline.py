import uuid

from loom.model.container import MediaContainer, Pattern
from loom.model.timeline import Timeline
from loom.model.track import Track, TrackType
from loom.tapestry.duration import Duration
from loom.tapestry.position import TimePosition


def _timeline_with_track():
    timeline = Timeline("Main")
    track_id = timeline.add_track(Track("t", TrackType.MIDI))
    return timeline, track_id


def _container(start, length):
    return MediaContainer(TimePosition(start), Pattern()).with_length(Duration(length))


def test_add_track_and_lookup():
    timeline, track_id = _timeline_with_track()
    assert timeline.track(track_id).name == "t"
    assert timeline.track_containers[track_id] == {}
    assert timeline.track(uuid.uuid4()) is None


def test_add_container_indexes_by_position():
    timeline, track_id = _timeline_with_track()
    container = _container(100, 50)
    cid = timeline.add_container(track_id, container)
    assert cid == container.id
    assert timeline.container(cid) is container
    assert timeline.track_containers[track_id] == {TimePosition(100): cid}


def test_index_kept_in_position_order():
    timeline, track_id = _timeline_with_track()
    later = timeline.add_container(track_id, _container(300, 10))
    earlier = timeline.add_container(track_id, _container(100, 10))
    assert list(timeline.track_containers[track_id].values()) == [earlier, later]


def test_add_container_to_unknown_track_is_stored_but_unplaced():
    timeline, _ = _timeline_with_track()
    cid = timeline.add_container(uuid.uuid4(), _container(0, 10))
    assert timeline.container(cid) is not None
    assert timeline.containers_in_range(TimePosition(0), TimePosition(100)) == []


def test_move_container():
    timeline, track_id = _timeline_with_track()
    cid = timeline.add_container(track_id, _container(100, 10))
    assert timeline.move_container(cid, TimePosition(400)) is True
    assert timeline.container(cid).position == TimePosition(400)
    assert timeline.track_containers[track_id] == {TimePosition(400): cid}


def test_move_unknown_container_fails():
    timeline, _ = _timeline_with_track()
    assert timeline.move_container(uuid.uuid4(), TimePosition(10)) is False


def test_range_includes_starting_and_overlapping():
    timeline, track_id = _timeline_with_track()
    overlapping = timeline.add_container(track_id, _container(0, 150))
    touching = timeline.add_container(track_id, _container(50, 50))
    inside = timeline.add_container(track_id, _container(120, 10))
    at_end = timeline.add_container(track_id, _container(200, 10))
    found = timeline.track_containers_in_range(
        track_id, TimePosition(100), TimePosition(200)
    )
    ids = [c.id for c in found]
    assert ids == [inside, overlapping]
    assert touching not in ids
    assert at_end not in ids


def test_empty_range_excludes_start():
    timeline, track_id = _timeline_with_track()
    timeline.add_container(track_id, _container(100, 10))
    assert timeline.track_containers_in_range(
        track_id, TimePosition(100), TimePosition(100)
    ) == []


def test_containers_in_range_across_tracks():
    timeline, first = _timeline_with_track()
    second = timeline.add_track(Track("u", TrackType.AUDIO))
    a = timeline.add_container(first, _container(10, 5))
    b = timeline.add_container(second, _container(20, 5))
    timeline.add_container(second, _container(500, 5))
    found = {c.id for c in timeline.containers_in_range(TimePosition(0), TimePosition(100))}
    assert found == {a, b}


def test_unknown_track_range_is_empty():
    timeline, _ = _timeline_with_track()
    assert timeline.track_containers_in_range(
        uuid.uuid4(), TimePosition(0), TimePosition(10)
    ) == []