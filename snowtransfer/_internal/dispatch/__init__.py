"""Request dispatcher for SnowTransfer.

WARNING: Used through the endpoint method wrappers.
Do not call directly from user code.
"""

from snowtransfer._internal.dispatch.client import (
    DispatchClient,
    DispatcherOptions,
    get_dispatch_client,
)
from snowtransfer._internal.dispatch.encoding import encode_json, encode_multipart
from snowtransfer._internal.dispatch.events import (
    DispatchEvent,
    DoneEvent,
    EventChannel,
    RateLimitEvent,
    RequestErrorEvent,
    RequestEvent,
)
from snowtransfer._internal.dispatch.models import EncodedRequest, RequestDescriptor

__all__ = [
    "DispatchClient",
    "DispatcherOptions",
    "get_dispatch_client",
    "encode_json",
    "encode_multipart",
    "DispatchEvent",
    "DoneEvent",
    "EventChannel",
    "RateLimitEvent",
    "RequestErrorEvent",
    "RequestEvent",
    "EncodedRequest",
    "RequestDescriptor",
]
