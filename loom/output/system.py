"""The registry of output endpoints and event routing."""

from __future__ import annotations

import re
import uuid

import mido

from loom.model.endpoint import EndpointConfig, EndpointType, MidiParameters
from loom.output.endpoint import OutputEndpoint, OutputError
from loom.output.event import OutputEvent
from loom.output.midi import MidiOutputEndpoint

_PORT_INDEX = re.compile(r"\+?[0-9]+")


class OutputSystem:
    """Holds the live endpoints and routes events to them."""

    def __init__(self) -> None:
        self._endpoints: dict[uuid.UUID, OutputEndpoint] = {}

    def __repr__(self) -> str:
        return f"OutputSystem(endpoints={len(self._endpoints)})"

    def scan_midi_outputs(self) -> list[tuple[int, str]]:
        """Available MIDI output ports as (index, name); empty if none can be listed."""
        try:
            names = mido.get_output_names()
        except Exception:
            return []
        return list(enumerate(names))

    def add_endpoint(self, config: EndpointConfig) -> None:
        """Create an endpoint from ``config``; MIDI device ids take the form "index:name"."""
        if config.endpoint_type is not EndpointType.MIDI:
            raise OutputError(
                f"Endpoint type {config.endpoint_type.name.capitalize()} not implemented"
            )
        if not isinstance(config.parameters, MidiParameters):
            raise OutputError("Invalid parameters for MIDI endpoint")
        index_text, sep, port_name = config.device_id.partition(":")
        if not sep:
            raise OutputError("Invalid MIDI device ID format")
        if not _PORT_INDEX.fullmatch(index_text):
            raise OutputError("Invalid MIDI port index")
        self._endpoints[config.id] = MidiOutputEndpoint(
            config.id, config.name, int(index_text), port_name
        )

    def _endpoint(self, endpoint_id: uuid.UUID) -> OutputEndpoint:
        try:
            return self._endpoints[endpoint_id]
        except KeyError:
            raise OutputError(f"Endpoint {endpoint_id} not found") from None

    def connect_endpoint(self, endpoint_id: uuid.UUID) -> None:
        """Connect the endpoint; raises OutputError if unknown or on failure."""
        self._endpoint(endpoint_id).connect()

    def disconnect_endpoint(self, endpoint_id: uuid.UUID) -> None:
        """Disconnect the endpoint if it exists."""
        endpoint = self._endpoints.get(endpoint_id)
        if endpoint is not None:
            endpoint.disconnect()

    def is_endpoint_connected(self, endpoint_id: uuid.UUID) -> bool:
        """Whether a known endpoint is connected; False for unknown ids."""
        endpoint = self._endpoints.get(endpoint_id)
        return endpoint is not None and endpoint.is_connected

    def send_event_to_endpoint(self, endpoint_id: uuid.UUID, event: OutputEvent) -> None:
        """Send to one endpoint; raises OutputError if unknown or on failure."""
        self._endpoint(endpoint_id).send_event(event)

    def send_event(self, event: OutputEvent) -> list[OutputError | None]:
        """Deliver to the target, or to every compatible endpoint.

        Returns one entry per delivery attempt: None on success, otherwise the error.
        """
        if event.target is not None:
            return [self._attempt(lambda: self.send_event_to_endpoint(event.target, event))]
        results: list[OutputError | None] = []
        for endpoint in self._endpoints.values():
            compatible = (event.is_midi() and endpoint.endpoint_type is EndpointType.MIDI) or (
                event.is_audio() and endpoint.endpoint_type is EndpointType.AUDIO
            )
            if compatible:
                results.append(self._attempt(lambda ep=endpoint: ep.send_event(event)))
        return results

    @staticmethod
    def _attempt(action) -> OutputError | None:
        try:
            action()
        except OutputError as exc:
            return exc
        return None