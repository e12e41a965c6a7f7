"""Methods for bot specific endpoints."""

from typing import Any

from snowtransfer import endpoints
from snowtransfer._internal.dispatch.client import DispatchClient


class BotMethods:
    """Methods for interacting with bot specific endpoints."""

    def __init__(self, request_handler: DispatchClient) -> None:
        self.request_handler = request_handler

    async def get_gateway(self) -> dict[str, Any]:
        """Get the gateway url to connect to.

        Returns:
            Gateway data, e.g. ``{"url": "wss://gateway.discord.gg"}``.
        """
        return await self.request_handler.dispatch(endpoints.GATEWAY, "get", "json")

    async def get_gateway_bot(self) -> dict[str, Any]:
        """Get the gateway url together with the recommended shard count and session limits."""
        return await self.request_handler.dispatch(endpoints.GATEWAY_BOT, "get", "json")
