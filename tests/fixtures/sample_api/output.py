"""Builder with a property whose value is a structural protocol."""

from __future__ import annotations

from typing import Protocol


class Sink(Protocol):
    """Destination of written records."""

    def write(self, record: str) -> None:
        ...


class OutputBuilder:
    """Output of a recorded session."""

    def sink(self) -> Sink:
        """Where the records go."""
        raise NotImplementedError

    def name(self, name: str) -> OutputBuilder:
        """Name of the output."""
        return self
