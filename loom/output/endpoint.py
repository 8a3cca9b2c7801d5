"""The interface every output endpoint implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from loom.model.endpoint import EndpointType
from loom.output.event import OutputEvent


class OutputError(Exception):
    """Raised when an endpoint cannot be set up, connected or sent to."""


class OutputEndpoint(ABC):
    """A destination that receives output events.

    Used as a context manager it is connected on entry and disconnected on exit.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The endpoint's display name."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the underlying device is open."""

    @property
    @abstractmethod
    def endpoint_type(self) -> EndpointType:
        """The kind of output this endpoint drives."""

    @abstractmethod
    def connect(self) -> None:
        """Open the underlying device; raises OutputError on failure."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the underlying device."""

    @abstractmethod
    def send_event(self, event: OutputEvent) -> None:
        """Deliver ``event``; raises OutputError on failure."""

    def __enter__(self) -> OutputEndpoint:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.disconnect()