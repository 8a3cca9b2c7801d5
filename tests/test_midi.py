import uuid
from unittest import mock

import mido
import pytest

from loom.model.endpoint import EndpointType
from loom.output.endpoint import OutputError
from loom.output.event import (
    AudioBuffer,
    EndOfTrack,
    MidiAftertouch,
    MidiPitchBend,
    MidiPolyAftertouch,
    MidiProgramChange,
    OutputEvent,
    SyncPulse,
    VstParameter,
)
from loom.output.midi import MidiOutputEndpoint, encode_midi_message


def _decode(event):
    return mido.Message.from_bytes(list(encode_midi_message(event)))


def test_note_on_wire_bytes():
    assert encode_midi_message(OutputEvent.midi_note_on(0, 60, 100)) == bytes([0x90, 60, 100])


def test_note_off_wire_bytes():
    assert encode_midi_message(OutputEvent.midi_note_off(0, 60)) == bytes([0x80, 60, 0])


def test_note_on_decodes():
    message = _decode(OutputEvent.midi_note_on(3, 64, 90))
    assert (message.type, message.channel, message.note, message.velocity) == (
        "note_on",
        3,
        64,
        90,
    )


def test_cc_decodes():
    message = _decode(OutputEvent.midi_cc(5, 7, 80))
    assert (message.type, message.channel, message.control, message.value) == (
        "control_change",
        5,
        7,
        80,
    )


def test_program_change_decodes():
    message = _decode(OutputEvent(MidiProgramChange(9, 12)))
    assert (message.type, message.channel, message.program) == ("program_change", 9, 12)


def test_aftertouch_decodes():
    message = _decode(OutputEvent(MidiAftertouch(2, 33)))
    assert (message.type, message.channel, message.value) == ("aftertouch", 2, 33)


def test_poly_aftertouch_decodes():
    message = _decode(OutputEvent(MidiPolyAftertouch(4, 70, 21)))
    assert (message.type, message.channel, message.note, message.value) == (
        "polytouch",
        4,
        70,
        21,
    )


@pytest.mark.parametrize("value", [-8192, -1, 0, 1, 4000, 8191])
def test_pitch_bend_round_trips(value):
    message = _decode(OutputEvent(MidiPitchBend(1, value)))
    assert message.type == "pitchwheel"
    assert message.channel == 1
    assert message.pitch == value


def test_channel_is_masked_to_four_bits():
    assert encode_midi_message(OutputEvent.midi_note_on(16, 60, 100)) == encode_midi_message(
        OutputEvent.midi_note_on(0, 60, 100)
    )


@pytest.mark.parametrize(
    "event_type",
    [SyncPulse(), EndOfTrack(), VstParameter(1, 0.5), AudioBuffer((0.0,), 1, 1)],
)
def test_non_midi_events_are_rejected(event_type):
    with pytest.raises(OutputError, match="Unsupported event type"):
        encode_midi_message(OutputEvent(event_type))


def _endpoint(index=0):
    return MidiOutputEndpoint(uuid.uuid4(), "Synth", index, "Synth Port")


def test_endpoint_reports_name_and_type():
    endpoint = _endpoint()
    assert endpoint.name == "Synth"
    assert endpoint.endpoint_type is EndpointType.MIDI
    assert not endpoint.is_connected


def test_send_without_connection_fails():
    with pytest.raises(OutputError, match="not connected"):
        _endpoint().send_event(OutputEvent.midi_note_on(0, 60, 100))


@mock.patch("mido.open_output")
@mock.patch("mido.get_output_names", return_value=["Synth Port"])
def test_connect_send_disconnect(get_names, open_output):
    port = open_output.return_value
    endpoint = _endpoint()
    endpoint.connect()
    assert endpoint.is_connected
    open_output.assert_called_once_with("Synth Port")

    event = OutputEvent.midi_note_on(0, 60, 100)
    endpoint.send_event(event)
    sent = port.send.call_args.args[0]
    assert bytes(sent.bytes()) == encode_midi_message(event)

    endpoint.disconnect()
    assert not endpoint.is_connected
    port.close.assert_called_once()


@mock.patch("mido.open_output")
@mock.patch("mido.get_output_names", return_value=["Synth Port"])
def test_connect_twice_opens_once(get_names, open_output):
    endpoint = MidiOutputEndpoint(uuid.uuid4(), "Synth", 0, "Synth Port")
    endpoint.connect()
    endpoint.connect()
    assert endpoint.is_connected is True
    assert open_output.call_count == 1


@mock.patch("mido.open_output")
@mock.patch("mido.get_output_names", return_value=[])
def test_connect_index_out_of_range(get_names, open_output):
    endpoint = _endpoint(3)
    with pytest.raises(OutputError, match="MIDI port index 3 out of range"):
        endpoint.connect()
    assert not endpoint.is_connected
    open_output.assert_not_called()


@mock.patch("mido.open_output", side_effect=OSError("busy"))
@mock.patch("mido.get_output_names", return_value=["Synth Port"])
def test_open_failure_becomes_output_error(get_names, open_output):
    endpoint = _endpoint()
    with pytest.raises(OutputError):
        endpoint.connect()
    assert not endpoint.is_connected


@mock.patch("mido.open_output")
@mock.patch("mido.get_output_names", return_value=["Synth Port"])
def test_unsupported_event_on_connected_endpoint(get_names, open_output):
    endpoint = _endpoint()
    endpoint.connect()
    with pytest.raises(OutputError, match="Unsupported"):
        endpoint.send_event(OutputEvent(SyncPulse()))
    open_output.return_value.send.assert_not_called()