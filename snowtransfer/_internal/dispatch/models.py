"""Pydantic models for the request dispatcher.

A request is described once by a ``RequestDescriptor`` and turned into an
``EncodedRequest`` by the strategy matching its ``data_kind``.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from snowtransfer._internal.http import DEFAULT_TIMEOUT

# =============================================================================
# Constants
# =============================================================================

MAX_ATTEMPTS = 3
RECOVERABLE_STATUS_CODES = frozenset({429, 502})
MAX_RETRY_AFTER_SECONDS = 60.0
INITIAL_LATENCY_MS = 500

HTTPMethod = Literal["get", "post", "patch", "head", "put", "delete", "connect", "options", "trace"]
DataKind = Literal["json", "multipart"]
DATA_KINDS: frozenset[str] = frozenset({"json", "multipart"})


def is_ok_status(status_code: int) -> bool:
    """Check whether a status code counts as success."""
    return 200 <= status_code < 300


def coerce_payload(payload: Any) -> Any:
    """Normalize a caller-supplied payload.

    ``None`` becomes an empty dict and a bare number becomes its string form,
    so numeric payloads travel as raw bodies.
    """
    if payload is None:
        return {}
    if isinstance(payload, (int, float)) and not isinstance(payload, bool):
        return str(payload)
    return payload


# =============================================================================
# Request Descriptor
# =============================================================================


class RequestDescriptor(BaseModel):
    """One logical request to the API.

    Required fields:
        endpoint: Path relative to the API base (e.g. ``/channels/1/messages``)
        method: Lowercase HTTP method
        data_kind: Encoding strategy, ``json`` or ``multipart``

    Optional fields:
        payload: Query/body data, a raw string, or multipart data (default: {})
        attempt: Number of sends already made for this request (default: 0)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    endpoint: str
    method: HTTPMethod
    data_kind: DataKind = "json"
    payload: Any = Field(default_factory=dict)
    attempt: int = Field(default=0, ge=0)

    def next_attempt(self) -> "RequestDescriptor":
        """Return a copy with the attempt counter advanced by one."""
        return self.model_copy(update={"attempt": self.attempt + 1})


# =============================================================================
# Encoded Request
# =============================================================================


class EncodedRequest(BaseModel):
    """Transport-ready form of a descriptor.

    Exactly one of ``params``, ``json_body``, ``content`` or ``files`` carries
    the payload; the rest stay empty.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    headers: dict[str, str]
    params: Any = None
    json_body: Any = None
    content: str | bytes | None = None
    files: list[tuple[str, tuple[Any, ...]]] | None = None
    timeout: float = DEFAULT_TIMEOUT

    def as_request_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient.request``."""
        kwargs: dict[str, Any] = {"headers": self.headers, "timeout": self.timeout}
        if self.params is not None:
            kwargs["params"] = self.params
        if self.json_body is not None:
            kwargs["json"] = self.json_body
        if self.content is not None:
            kwargs["content"] = self.content
        if self.files is not None:
            kwargs["files"] = self.files
        return kwargs
