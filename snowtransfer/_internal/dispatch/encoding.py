"""Encoding strategies for outbound requests.

Both encoders are pure: the caller's payload is never mutated, and the shared
default headers are copied before anything is added to them.
"""

import json
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import quote

from snowtransfer._internal.dispatch.models import EncodedRequest, RequestDescriptor
from snowtransfer._internal.http import DEFAULT_TIMEOUT, MULTIPART_TIMEOUT
from snowtransfer.exceptions import SnowTransferValidationError

AUDIT_LOG_HEADER = "X-Audit-Log-Reason"

# Endpoints that take their filters as query params regardless of method
QUERY_PARAM_SEGMENTS = ("/bans", "/prune")

# Same set of characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"

Encoder = Callable[[RequestDescriptor, Mapping[str, str]], EncodedRequest]


def uses_query_params(descriptor: RequestDescriptor) -> bool:
    """Check whether payload data should travel as query parameters."""
    if descriptor.method == "get":
        return True
    return any(segment in descriptor.endpoint for segment in QUERY_PARAM_SEGMENTS)


def split_audit_reason(payload: Any) -> tuple[Any, dict[str, str]]:
    """Move a ``reason`` field out of the payload and into a header.

    Args:
        payload: The request payload.

    Returns:
        The payload without ``reason`` (a copy when it had one) and the extra
        headers to send.
    """
    if not isinstance(payload, Mapping) or "reason" not in payload:
        return payload, {}

    headers: dict[str, str] = {}
    if payload["reason"]:
        headers[AUDIT_LOG_HEADER] = quote(str(payload["reason"]), safe=_URI_COMPONENT_SAFE)
    stripped = {key: value for key, value in payload.items() if key != "reason"}
    return stripped, headers


def encode_json(descriptor: RequestDescriptor, base_headers: Mapping[str, str]) -> EncodedRequest:
    """Encode a request as query parameters or a JSON/raw body."""
    payload, extra_headers = split_audit_reason(descriptor.payload)
    headers = {**base_headers, **extra_headers}

    if uses_query_params(descriptor):
        return EncodedRequest(headers=headers, params=payload or None, timeout=DEFAULT_TIMEOUT)

    if isinstance(payload, (Mapping, list)):
        return EncodedRequest(headers=headers, json_body=payload, timeout=DEFAULT_TIMEOUT)
    if payload:
        return EncodedRequest(headers=headers, content=payload, timeout=DEFAULT_TIMEOUT)
    return EncodedRequest(headers=headers, timeout=DEFAULT_TIMEOUT)


def _validate_files(files: Any) -> list[Mapping[str, Any]]:
    if not isinstance(files, list) or not all(
        isinstance(entry, Mapping) and entry.get("name") and entry.get("file") for entry in files
    ):
        raise SnowTransferValidationError("files must be a list of {name, file} entries")
    return files


def encode_multipart(
    descriptor: RequestDescriptor, base_headers: Mapping[str, str]
) -> EncodedRequest:
    """Encode a request as multipart/form-data.

    Each entry of ``payload["files"]`` becomes a ``files[i]`` part. The rest of
    the payload, with the raw file contents left out, is attached as a single
    ``payload_json`` part.
    """
    payload = descriptor.payload
    if not isinstance(payload, Mapping):
        raise SnowTransferValidationError("multipart payload must be a mapping")

    parts: list[tuple[str, tuple[Any, ...]]] = []
    sidecar = dict(payload)

    if "files" in payload:
        files = _validate_files(payload["files"])
        for index, entry in enumerate(files):
            parts.append((f"files[{index}]", (entry["name"], entry["file"])))
        sidecar["files"] = [
            {key: value for key, value in entry.items() if key != "file"} for entry in files
        ]

    payload_json = json.dumps(sidecar).encode("utf-8")
    parts.append(("payload_json", (None, payload_json, "application/json")))

    # boundary Content-Type is added by httpx on top of this copy
    return EncodedRequest(headers=dict(base_headers), files=parts, timeout=MULTIPART_TIMEOUT)


ENCODERS: dict[str, Encoder] = {
    "json": encode_json,
    "multipart": encode_multipart,
}
