"""Configuration of output endpoints."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field


class EndpointType(enum.Enum):
    """The kind of output an endpoint drives."""

    MIDI = "midi"
    AUDIO = "audio"
    VST = "vst"


@dataclass
class MidiParameters:
    """MIDI endpoint settings; ``channel`` of None means all channels."""

    channel: int | None = None


@dataclass
class AudioParameters:
    """Audio endpoint settings: volume 0..1, pan -1..1."""

    volume: float = 1.0
    pan: float = 0.0


@dataclass
class VstParameters:
    """Plugin endpoint settings."""

    plugin_path: str
    plugin_state: bytes | None = None


EndpointParameters = MidiParameters | AudioParameters | VstParameters


@dataclass
class EndpointConfig:
    """A configured output endpoint."""

    name: str
    endpoint_type: EndpointType
    device_id: str
    parameters: EndpointParameters
    enabled: bool = True
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def new_midi(cls, name: str, device_id: str) -> EndpointConfig:
        """A MIDI endpoint listening on all channels."""
        return cls(name, EndpointType.MIDI, device_id, MidiParameters())

    @classmethod
    def new_audio(cls, name: str, device_id: str) -> EndpointConfig:
        """An audio endpoint at full volume, centred."""
        return cls(name, EndpointType.AUDIO, device_id, AudioParameters())

    @classmethod
    def new_vst(cls, name: str, plugin_path: str) -> EndpointConfig:
        """A plugin endpoint; the plugin path doubles as device id."""
        return cls(name, EndpointType.VST, plugin_path, VstParameters(plugin_path))