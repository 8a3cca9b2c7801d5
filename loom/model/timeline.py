"""Timelines holding tracks and their containers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from loom.model.container import MediaContainer
from loom.model.track import Track
from loom.tapestry.position import TimePosition


@dataclass
class Timeline:
    """Tracks plus the containers placed on them.

    ``track_containers`` maps each track id to a position-ordered mapping of
    container start positions to container ids.
    """

    name: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    tracks: list[Track] = field(default_factory=list)
    containers: dict[uuid.UUID, MediaContainer] = field(default_factory=dict)
    track_containers: dict[uuid.UUID, dict[TimePosition, uuid.UUID]] = field(
        default_factory=dict
    )

    def add_track(self, track: Track) -> uuid.UUID:
        """Append a track and return its id."""
        self.tracks.append(track)
        self.track_containers[track.id] = {}
        return track.id

    def track(self, track_id: uuid.UUID) -> Track | None:
        """The track with ``track_id``, if any."""
        return next((t for t in self.tracks if t.id == track_id), None)

    def _index(self, track_id: uuid.UUID, position: TimePosition, container_id: uuid.UUID) -> None:
        index = self.track_containers[track_id]
        index[position] = container_id
        self.track_containers[track_id] = dict(sorted(index.items()))

    def add_container(self, track_id: uuid.UUID, container: MediaContainer) -> uuid.UUID:
        """Store a container and place it on the track, if the track exists."""
        self.containers[container.id] = container
        if track_id in self.track_containers:
            self._index(track_id, container.position, container.id)
        return container.id

    def container(self, container_id: uuid.UUID) -> MediaContainer | None:
        """The container with ``container_id``, if any."""
        return self.containers.get(container_id)

    def move_container(self, container_id: uuid.UUID, new_position: TimePosition) -> bool:
        """Move a placed container; False if it is not on any track."""
        found = next(
            (
                (track_id, position)
                for track_id, index in self.track_containers.items()
                for position, cid in index.items()
                if cid == container_id
            ),
            None,
        )
        if found is None:
            return False
        container = self.containers.get(container_id)
        if container is None:
            return False
        track_id, old_position = found
        container.position = new_position
        del self.track_containers[track_id][old_position]
        self._index(track_id, new_position, container_id)
        return True

    def track_containers_in_range(
        self, track_id: uuid.UUID, start: TimePosition, end: TimePosition
    ) -> list[MediaContainer]:
        """Containers on a track that start in [start, end) or overlap ``start``."""
        index = self.track_containers.get(track_id)
        if index is None:
            return []
        starting = [
            self.containers[cid]
            for position, cid in index.items()
            if start <= position < end and cid in self.containers
        ]
        overlapping = [
            self.containers[cid]
            for position, cid in index.items()
            if position < start
            and cid in self.containers
            and self.containers[cid].position + self.containers[cid].length > start
        ]
        return starting + overlapping

    def containers_in_range(
        self, start: TimePosition, end: TimePosition
    ) -> list[MediaContainer]:
        """Containers active in the range across every track."""
        return [
            container
            for track_id in self.track_containers
            for container in self.track_containers_in_range(track_id, start, end)
        ]