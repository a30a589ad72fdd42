"""Step catalog of the sample API."""

from __future__ import annotations

from builderdocs.vocabulary import BaseSequenceBuilder, Locator, StepBuilder, StepBuilderFactory
from sample_api.http import HttpRequestStepBuilder


class SequenceBuilder(BaseSequenceBuilder):
    """Steps executed in order."""

    def step(self, builder: StepBuilder) -> SequenceBuilder:
        return self


class LoopStepBuilder(StepBuilder):
    """Repeats a sequence of steps."""

    def repeats(self, repeats: int) -> LoopStepBuilder:
        """Number of iterations."""
        return self

    def steps(self) -> SequenceBuilder:
        """Steps executed in every iteration."""
        return SequenceBuilder()


class LogStepBuilder(StepBuilder):
    """Writes a message to the log."""

    def message(self, message: str) -> LogStepBuilder:
        """Message written to the log."""
        return self

    def level(self, level: str) -> LogStepBuilder:
        """Log level."""
        return self


class LogStepFactory(StepBuilderFactory):
    def name(self) -> str:
        return "log"

    def accepts_param(self) -> bool:
        return True

    def new_builder(self, locator: Locator, param: str) -> LogStepBuilder:
        """
        Args:
            param: Message to log.
        """
        return LogStepBuilder()


class StepCatalog:
    """Steps available in a sequence."""

    def http_request(self) -> HttpRequestStepBuilder:
        """Issue an HTTP request."""
        return HttpRequestStepBuilder()

    def loop(self) -> LoopStepBuilder:
        return LoopStepBuilder()

    def noop(self) -> SequenceBuilder:
        """Does nothing."""
        return SequenceBuilder()

    def log(self, message: str) -> SequenceBuilder:
        """Log a message.

        Args:
            message: Message written to the log.
        """
        return SequenceBuilder()
