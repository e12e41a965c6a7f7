"""Request dispatcher for the Discord REST API."""

import asyncio
import math
import os
import secrets
import sys
import time
import traceback
from typing import Any

import httpx
from pydantic import BaseModel

from snowtransfer._internal.dispatch.encoding import ENCODERS
from snowtransfer._internal.dispatch.events import (
    DoneEvent,
    EventChannel,
    RateLimitEvent,
    RequestErrorEvent,
    RequestEvent,
    route_for,
)
from snowtransfer._internal.dispatch.models import (
    DATA_KINDS,
    INITIAL_LATENCY_MS,
    MAX_ATTEMPTS,
    MAX_RETRY_AFTER_SECONDS,
    RECOVERABLE_STATUS_CODES,
    DataKind,
    HTTPMethod,
    RequestDescriptor,
    coerce_payload,
    is_ok_status,
)
from snowtransfer._internal.http import create_http_client, default_headers
from snowtransfer.endpoints import BASE_HOST, BASE_PATH
from snowtransfer.exceptions import DiscordAPIError, RetryLimitError, SnowTransferConfigError


class DispatcherOptions(BaseModel):
    """Settings shared by every request issued through one dispatcher."""

    base_host: str
    base_path: str
    headers: dict[str, str]


class DispatchClient:
    """Dispatcher turning endpoint calls into HTTP requests.

    Every call to `dispatch` ends in exactly one of: the decoded JSON body,
    None (empty or non-JSON success body), or a raised exception. Responses
    with status 429 or 502 are retried immediately, up to MAX_ATTEMPTS sends
    in total.

    Use `DispatchClient.from_env()` to create a client from environment variables.
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        base_host: str = BASE_HOST,
        base_path: str = BASE_PATH,
        honor_retry_after: bool = False,
        debug: bool = False,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            token: Authorization header value. Omitted from requests when None.
            base_host: Scheme and host of the API (e.g. "https://discord.com").
            base_path: Versioned API prefix (e.g. "/api/v10").
            honor_retry_after: Wait for the server-suggested delay before
                retrying a 429 instead of retrying immediately.
            debug: Enable debug logging to stderr.
            http_client: Optional externally managed client. When None, each
                send opens and closes its own client.
        """
        self.options = DispatcherOptions(
            base_host=base_host,
            base_path=base_path,
            headers=default_headers(token),
        )
        self.api_url = base_host + base_path
        self.latency = INITIAL_LATENCY_MS
        self.events = EventChannel(debug=debug)
        self._honor_retry_after = honor_retry_after
        self._debug = debug
        self._http_client = http_client

    @classmethod
    def from_env(cls) -> "DispatchClient":
        """Create a dispatcher from environment variables.

        Optional environment variables:
            SNOWTRANSFER_TOKEN: Authorization header value.
            SNOWTRANSFER_BASE_HOST: API host (default: https://discord.com).
            SNOWTRANSFER_BASE_PATH: API prefix (default: /api/v10).
            SNOWTRANSFER_HONOR_RETRY_AFTER: Set to "1" to wait on 429 responses.
            SNOWTRANSFER_DEBUG: Set to "1" to enable debug logging.

        Returns:
            A configured DispatchClient.
        """
        return cls(
            token=os.environ.get("SNOWTRANSFER_TOKEN") or None,
            base_host=os.environ.get("SNOWTRANSFER_BASE_HOST", BASE_HOST),
            base_path=os.environ.get("SNOWTRANSFER_BASE_PATH", BASE_PATH),
            honor_retry_after=os.environ.get("SNOWTRANSFER_HONOR_RETRY_AFTER", "") == "1",
            debug=os.environ.get("SNOWTRANSFER_DEBUG", "") == "1",
        )

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[snowtransfer] {message}", file=sys.stderr)

    async def dispatch(
        self,
        endpoint: str,
        method: HTTPMethod,
        data_kind: DataKind = "json",
        payload: Any = None,
        attempt: int = 0,
    ) -> Any:
        """Send a request to the API and decode its response.

        Args:
            endpoint: Path relative to the API base, e.g. "/gateway".
            method: Lowercase HTTP method.
            data_kind: "json" for query/JSON bodies, "multipart" for file uploads.
            payload: Data to send. Numbers are sent as their string form.
            attempt: Number of sends already made for this request.

        Returns:
            The decoded JSON body, or None when the body is empty or not JSON.

        Raises:
            SnowTransferConfigError: If data_kind is not "json" or "multipart".
            RetryLimitError: If the request is still rate limited after MAX_ATTEMPTS sends.
            DiscordAPIError: If the API answers with a non-recoverable error status.
            httpx.HTTPError: If the transport fails.
        """
        call_site = "".join(traceback.format_stack()[:-1])
        request_id = secrets.token_hex(20)

        try:
            if data_kind not in DATA_KINDS:
                raise SnowTransferConfigError("Forbidden dataType. Use json or multipart")

            descriptor = RequestDescriptor(
                endpoint=endpoint,
                method=method,
                data_kind=data_kind,
                payload=coerce_payload(payload),
                attempt=attempt,
            )

            while True:
                self.events.emit(RequestEvent(request_id=request_id, descriptor=descriptor))
                response = await self._send(descriptor)

                if is_ok_status(response.status_code):
                    break
                if response.status_code not in RECOVERABLE_STATUS_CODES:
                    self._log_debug(f"{endpoint} failed with {response.status_code}")
                    raise self._api_error(descriptor, response)

                await self._handle_recoverable(descriptor, response)
                descriptor = descriptor.next_attempt()

            self.events.emit(DoneEvent(request_id=request_id, response=response))
            return self._decode(response)

        except Exception as e:
            e.add_note(f"Dispatched from:\n{call_site}")
            self.events.emit(RequestErrorEvent(request_id=request_id, error=e))
            raise

    async def _send(self, descriptor: RequestDescriptor) -> httpx.Response:
        """Encode and send one attempt of a request."""
        if descriptor.attempt >= MAX_ATTEMPTS:
            raise RetryLimitError("Max amount of retry attempts reached")

        encoded = ENCODERS[descriptor.data_kind](descriptor, self.options.headers)
        self._log_debug(
            f"Sending {descriptor.method.upper()} {descriptor.endpoint} "
            f"({descriptor.data_kind}, attempt {descriptor.attempt + 1})"
        )

        started = time.perf_counter()
        if self._http_client is not None:
            response = await self._http_client.request(
                descriptor.method.upper(),
                self.api_url + descriptor.endpoint,
                **encoded.as_request_kwargs(),
            )
        else:
            async with create_http_client(base_url=self.api_url) as client:
                response = await client.request(
                    descriptor.method.upper(),
                    descriptor.endpoint,
                    **encoded.as_request_kwargs(),
                )
        self.latency = int((time.perf_counter() - started) * 1000)
        return response

    async def _handle_recoverable(
        self, descriptor: RequestDescriptor, response: httpx.Response
    ) -> None:
        """Report a 429/502 and wait before the retry if configured to."""
        self._log_debug(
            f"{descriptor.method.upper()} {descriptor.endpoint} got {response.status_code}, retrying"
        )
        if response.status_code != 429:
            return

        retry_after = _retry_after_seconds(response)
        limit = response.headers.get("x-ratelimit-limit")
        self.events.emit(
            RateLimitEvent(
                timeout=int(retry_after * 1000),
                limit=int(limit) if limit and limit.isdigit() else None,
                method=descriptor.method,
                path=descriptor.endpoint,
                route=route_for(descriptor.endpoint),
            )
        )
        if self._honor_retry_after and retry_after > 0:
            await asyncio.sleep(retry_after)

    def _api_error(self, descriptor: RequestDescriptor, response: httpx.Response) -> DiscordAPIError:
        """Build the normalized error for a non-recoverable response."""
        body: Any = response.text
        if response.headers.get("content-type", "").startswith("application/json"):
            try:
                body = response.json()
            except ValueError:
                pass
        return DiscordAPIError(descriptor.endpoint, body, descriptor.method, response.status_code)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Decode a success body, treating empty or non-JSON bodies as no content."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None


def _retry_after_seconds(response: httpx.Response) -> float:
    """Read the server-suggested retry delay of a 429 response, in seconds.

    Non-finite values count as no delay; others are clamped to
    [0, MAX_RETRY_AFTER_SECONDS].
    """
    delay = 0.0
    header = response.headers.get("retry-after")
    try:
        delay = float(header) if header else _body_retry_after(response)
    except ValueError:
        delay = _body_retry_after(response)
    if not math.isfinite(delay):
        return 0.0
    return min(max(delay, 0.0), MAX_RETRY_AFTER_SECONDS)


def _body_retry_after(response: httpx.Response) -> float:
    try:
        body = response.json()
    except ValueError:
        return 0.0
    if isinstance(body, dict) and isinstance(body.get("retry_after"), (int, float)):
        return float(body["retry_after"])
    return 0.0


def get_dispatch_client() -> DispatchClient:
    """Get a dispatcher configured from environment variables.

    Returns:
        A configured DispatchClient instance.
    """
    return DispatchClient.from_env()
