"""MIDI output through hardware or virtual ports."""

from __future__ import annotations

import uuid

import mido

from loom.model.endpoint import EndpointType
from loom.output.endpoint import OutputEndpoint, OutputError
from loom.output.event import (
    MidiAftertouch,
    MidiControlChange,
    MidiNoteOff,
    MidiNoteOn,
    MidiPitchBend,
    MidiPolyAftertouch,
    MidiProgramChange,
    OutputEvent,
)


def encode_midi_message(event: OutputEvent) -> bytes:
    """Wire bytes for a MIDI channel event; raises OutputError for other events."""
    match event.event_type:
        case MidiNoteOn(channel, note, velocity):
            return bytes([0x90 | (channel & 0x0F), note, velocity])
        case MidiNoteOff(channel, note):
            return bytes([0x80 | (channel & 0x0F), note, 0])
        case MidiControlChange(channel, controller, value):
            return bytes([0xB0 | (channel & 0x0F), controller, value])
        case MidiProgramChange(channel, program):
            return bytes([0xC0 | (channel & 0x0F), program])
        case MidiPitchBend(channel, value):
            bend = (value + 8192) & 0xFFFF
            return bytes([0xE0 | (channel & 0x0F), bend & 0x7F, (bend >> 7) & 0x7F])
        case MidiAftertouch(channel, pressure):
            return bytes([0xD0 | (channel & 0x0F), pressure])
        case MidiPolyAftertouch(channel, note, pressure):
            return bytes([0xA0 | (channel & 0x0F), note, pressure])
        case _:
            raise OutputError("Unsupported event type for MIDI endpoint")


class MidiOutputEndpoint(OutputEndpoint):
    """An endpoint writing to the MIDI output port at ``port_index``."""

    def __init__(self, id: uuid.UUID, name: str, port_index: int, port_name: str) -> None:
        self.id = id
        self._name = name
        self.port_index = port_index
        self.port_name = port_name
        self._port: mido.ports.BaseOutput | None = None

    def __repr__(self) -> str:
        return (
            f"MidiOutputEndpoint(name={self._name!r}, port_index={self.port_index}, "
            f"port_name={self.port_name!r})"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_connected(self) -> bool:
        return self._port is not None

    @property
    def endpoint_type(self) -> EndpointType:
        return EndpointType.MIDI

    def connect(self) -> None:
        """Open the port; does nothing if already open."""
        if self.is_connected:
            return
        try:
            names = mido.get_output_names()
        except Exception as exc:
            raise OutputError(f"cannot list MIDI outputs: {exc}") from exc
        if self.port_index >= len(names):
            raise OutputError(f"MIDI port index {self.port_index} out of range")
        try:
            self._port = mido.open_output(names[self.port_index])
        except Exception as exc:
            raise OutputError(f"cannot open MIDI output: {exc}") from exc

    def disconnect(self) -> None:
        """Close the port if it is open."""
        port, self._port = self._port, None
        if port is not None:
            port.close()

    def send_event(self, event: OutputEvent) -> None:
        """Encode ``event`` and write it to the port."""
        data = encode_midi_message(event)
        if self._port is None:
            raise OutputError("MIDI device not connected")
        try:
            message = mido.Message.from_bytes(list(data))
        except ValueError as exc:
            raise OutputError(f"invalid MIDI message: {exc}") from exc
        try:
            self._port.send(message)
        except Exception as exc:
            raise OutputError(f"MIDI send failed: {exc}") from exc