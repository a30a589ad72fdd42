"""HTTP request builders of the sample scenario API."""

from __future__ import annotations

from enum import Enum
from typing import overload

from builderdocs.vocabulary import (
    ActionBuilderFactory,
    BaseSequenceBuilder,
    ListBuilder,
    Locator,
    MappingListBuilder,
    PairBuilder,
    PartialBuilder,
    ProcessorBuilderFactory,
    ServiceLoadedBuilderProvider,
    ServiceLoadedFactory,
    StepBuilder,
)


class HttpMethod(Enum):
    """HTTP request method."""

    GET = "GET"
    """Retrieve the resource."""
    POST = "POST"
    """Submit an entity to the resource."""
    HEAD = "HEAD"


class HeadersBuilder(PairBuilder.OfString):
    """Request headers."""

    def accept(self, key: str, value: str) -> None:
        """Use header name as the key and its value as the value."""


class TagsBuilder(ListBuilder):
    """Tags attached to the request statistics."""

    def next_item(self, item: str) -> None:
        pass


class ServerBuilder:
    """Alternative server the request may be sent to."""

    def host(self, host: str) -> ServerBuilder:
        """Hostname of the server."""
        return self

    def port(self, port: int) -> ServerBuilder:
        """Port of the server."""
        return self


class ServersBuilder(MappingListBuilder):
    def add_item(self) -> ServerBuilder:
        """Server definition."""
        return ServerBuilder()


class VariableBuilder:
    """Session variable definition."""

    def initial(self, value: str) -> VariableBuilder:
        """Initial value of the variable."""
        return self


class VariablesBuilder(PartialBuilder):
    def with_key(self, key: str) -> VariableBuilder:
        """Name of the variable."""
        return VariableBuilder()


class TimeoutBuilder:
    """Request timeouts."""

    def connect(self, millis: int) -> TimeoutBuilder:
        """Connect timeout in milliseconds."""
        return self

    def read(self, millis: int) -> TimeoutBuilder:
        """Read timeout in milliseconds."""
        return self

    def end_timeout(self) -> HttpRequestStepBuilder:
        raise NotImplementedError


class EmptyBuilder:
    """Builder without any configurable property."""


class BodyProcessorFactory(ServiceLoadedFactory):
    """Processors of the response body."""

    group = "sample_api.body"


class JsonBodyBuilder:
    """Extracts values from a JSON body."""

    def query(self, query: str) -> JsonBodyBuilder:
        """Path into the JSON document."""
        return self


class TextBodyBuilder:
    """Searches the body as text."""

    def pattern(self, pattern: str) -> TextBodyBuilder:
        """Regular expression to look for."""
        return self


class JsonBodyFactory(BodyProcessorFactory):
    def name(self) -> str:
        return "json"

    def new_builder(self, locator: Locator, param: str) -> JsonBodyBuilder:
        return JsonBodyBuilder()


class TextBodyFactory(BodyProcessorFactory):
    def name(self) -> str:
        return "text"

    def new_builder(self, locator: Locator, param: str) -> TextBodyBuilder:
        return TextBodyBuilder()


class HandlerBuilder:
    """Handles the response."""

    def status(self) -> ServiceLoadedBuilderProvider[ProcessorBuilderFactory]:
        """Processors of the status code."""
        raise NotImplementedError

    def on_completion(self) -> ServiceLoadedBuilderProvider[ActionBuilderFactory]:
        """Actions run after the response has been handled."""
        raise NotImplementedError

    def body(self) -> ServiceLoadedBuilderProvider[BodyProcessorFactory]:
        """Processors of the response body."""
        raise NotImplementedError


class HttpRequestStepBuilder(StepBuilder):
    """Issues an HTTP request and waits for the response."""

    def method(self, method: HttpMethod) -> HttpRequestStepBuilder:
        """HTTP method used for the request."""
        return self

    def path(self, path: str) -> HttpRequestStepBuilder:
        """Request path.

        Must start with a slash.
        """
        return self

    def sync(self) -> HttpRequestStepBuilder:
        """Block the sequence until the response arrives."""
        return self

    def endless(self) -> HttpRequestStepBuilder:
        """Repeat the request until the phase ends."""
        return self

    @overload
    def timeout(self, millis: int) -> HttpRequestStepBuilder:
        """Request timeout in milliseconds."""

    @overload
    def timeout(self) -> TimeoutBuilder:
        """Detailed timeouts."""

    def timeout(self, millis=None):
        return self if millis is not None else TimeoutBuilder()

    def headers(self) -> HeadersBuilder:
        """HTTP headers sent with the request."""
        return HeadersBuilder()

    def tags(self) -> TagsBuilder:
        """Statistics tags."""
        return TagsBuilder()

    def servers(self) -> ServersBuilder:
        """Servers the request is spread over."""
        return ServersBuilder()

    def variables(self) -> VariablesBuilder:
        """Variables set before the request is sent."""
        return VariablesBuilder()

    def handler(self) -> HandlerBuilder:
        """Response handling."""
        return HandlerBuilder()

    def empty(self) -> EmptyBuilder:
        """Nothing to configure here."""
        return EmptyBuilder()

    def copy(self, locator: Locator) -> HttpRequestStepBuilder:
        return self

    def end_step(self) -> BaseSequenceBuilder:
        raise NotImplementedError

    def _prepare(self) -> HandlerBuilder:
        return HandlerBuilder()

    @staticmethod
    def create() -> HttpRequestStepBuilder:
        return HttpRequestStepBuilder()
