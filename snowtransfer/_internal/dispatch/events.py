"""Lifecycle events emitted by the dispatcher."""

import re
import sys
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict

from snowtransfer._internal.dispatch.models import HTTPMethod, RequestDescriptor

# Ids that scope a rate-limit bucket on their own
MAJOR_PARAMETERS = ("channels", "guilds", "webhooks")

_ID_SEGMENT = re.compile(r"\d+")


class DispatchEvent(BaseModel):
    """Base class for all lifecycle events."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class RequestEvent(DispatchEvent):
    """A request is about to be sent (once per attempt)."""

    request_id: str
    descriptor: RequestDescriptor


class DoneEvent(DispatchEvent):
    """A request finished with a success status."""

    request_id: str
    response: httpx.Response


class RequestErrorEvent(DispatchEvent):
    """A request failed and the error is about to reach the caller."""

    request_id: str
    error: BaseException


class RateLimitEvent(DispatchEvent):
    """The API answered 429 and the request will be retried.

    ``timeout`` is the server-suggested wait in milliseconds (0 when the
    response carried none) and ``limit`` the bucket size, when known.
    """

    timeout: int
    limit: int | None = None
    method: HTTPMethod
    path: str
    route: str


E = TypeVar("E", bound=DispatchEvent)
Handler = Callable[[Any], Any]


def route_for(endpoint: str) -> str:
    """Reduce an endpoint to its rate-limit route.

    Ids following a major parameter are kept, any other numeric id is
    replaced by ``:id``.
    """
    segments = endpoint.split("/")
    for index, segment in enumerate(segments):
        if not _ID_SEGMENT.fullmatch(segment):
            continue
        if index > 0 and segments[index - 1] in MAJOR_PARAMETERS:
            continue
        segments[index] = ":id"
    return "/".join(segments)


class EventChannel:
    """Per-dispatcher observer registry.

    Handlers are registered per event type and called synchronously, in
    registration order, with the event instance as the only argument.
    """

    def __init__(self, *, debug: bool = False) -> None:
        self._handlers: dict[type[DispatchEvent], list[Handler]] = {}
        self._debug = debug

    def on(self, event_type: type[E], handler: Callable[[E], Any]) -> None:
        """Register a handler for an event type."""
        self._handlers.setdefault(event_type, []).append(handler)

    def off(self, event_type: type[E], handler: Callable[[E], Any]) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event_type: type[DispatchEvent]) -> int:
        """Return how many handlers are registered for an event type."""
        return len(self._handlers.get(event_type, []))

    def emit(self, event: DispatchEvent) -> None:
        """Deliver an event to the handlers registered for its type.

        A failing handler does not stop delivery to the others, nor the
        request that produced the event.
        """
        for handler in list(self._handlers.get(type(event), [])):
            try:
                handler(event)
            except Exception as e:
                if self._debug:
                    print(
                        f"[snowtransfer] {type(event).__name__} handler failed: {e}",
                        file=sys.stderr,
                    )
