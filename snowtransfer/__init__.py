"""SnowTransfer, a Discord REST client for Python.

Public API:
    SnowTransfer - User-facing client with endpoint method groups
    exceptions - Error types raised by requests

Internal (not for direct use):
    _internal.dispatch - Request dispatcher (retry, encoding, events)
"""

from snowtransfer._version import __version__
from snowtransfer.client import SnowTransfer
from snowtransfer.exceptions import (
    DiscordAPIError,
    RetryLimitError,
    SnowTransferConfigError,
    SnowTransferError,
    SnowTransferValidationError,
)

__all__ = [
    "__version__",
    "SnowTransfer",
    "DiscordAPIError",
    "RetryLimitError",
    "SnowTransferConfigError",
    "SnowTransferError",
    "SnowTransferValidationError",
]
