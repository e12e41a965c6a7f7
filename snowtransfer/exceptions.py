"""Public exceptions for SnowTransfer."""

import re
from collections.abc import Mapping
from typing import Any


class SnowTransferError(Exception):
    """Base exception for all SnowTransfer errors."""


class SnowTransferConfigError(SnowTransferError):
    """Configuration error (unknown data kind, invalid options)."""


class SnowTransferValidationError(SnowTransferError):
    """Local validation error raised before a request reaches the network."""


class RetryLimitError(SnowTransferValidationError):
    """Raised by a sender once a request has used up its attempts."""


class DiscordAPIError(SnowTransferError):
    """Non-recoverable error response from the Discord API.

    Attributes:
        path: Endpoint path that was requested.
        method: HTTP method used.
        code: Discord error code from the response body, if any.
        http_status: HTTP status code of the response.
        message: Top-level message followed by the flattened field errors.
    """

    def __init__(self, path: str, error: Any, method: str, http_status: int) -> None:
        if isinstance(error, Mapping):
            tree = error.get("errors") or error
            flattened = "\n".join(self.flatten_errors(tree)) if isinstance(tree, (Mapping, list)) else ""
            top = error.get("message") or ""
            if top and flattened:
                message = f"{top}\n{flattened}"
            else:
                message = top or flattened
            code = error.get("code")
        else:
            message = str(error or "")
            code = None

        super().__init__(message)
        self.message = message
        self.path = path
        self.method = method
        self.code = code if isinstance(code, int) else None
        self.http_status = http_status

    @classmethod
    def flatten_errors(cls, obj: Mapping[str, Any] | list[Any], key: str = "") -> list[str]:
        """Flatten a nested validation error tree into "field: reason" lines.

        Args:
            obj: The ``errors`` object from an error response (or a subtree of it).
            key: Dotted/bracketed path of ``obj`` inside the full tree.

        Returns:
            One line per leaf error, in traversal order.
        """
        items = enumerate(obj) if isinstance(obj, list) else obj.items()
        messages: list[str] = []

        for k, v in items:
            k = str(k)
            if k == "message":
                continue
            if key:
                new_key = f"{key}[{k}]" if _is_numeric(k) else f"{key}.{k}"
            else:
                new_key = k

            if isinstance(v, Mapping) and "_errors" in v:
                joined = " ".join(
                    str(e.get("message", "")) if isinstance(e, Mapping) else str(e)
                    for e in v["_errors"] or ()
                )
                messages.append(f"{new_key}: {joined}")
            elif isinstance(v, Mapping) and (v.get("code") or v.get("message")):
                prefix = f"{v['code']}: " if v.get("code") else ""
                messages.append(f"{prefix}{v.get('message', '')}".strip())
            elif isinstance(v, str):
                messages.append(v)
            elif isinstance(v, (Mapping, list)):
                messages.extend(cls.flatten_errors(v, new_key))

        return messages


# Strings that JavaScript's Number() reads as a number other than NaN.
_NUMERIC_KEY = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
    r"|0[xX][0-9a-fA-F]+|0[bB][01]+|0[oO][0-7]+"
)


def _is_numeric(key: str) -> bool:
    key = key.strip()
    return not key or _NUMERIC_KEY.fullmatch(key) is not None
