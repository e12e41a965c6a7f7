"""Methods for guild moderation endpoints."""

from typing import Any

from snowtransfer import endpoints
from snowtransfer._internal.dispatch.client import DispatchClient


class GuildMethods:
    """Methods for guild bans and member pruning.

    Ban and prune endpoints take their options as query parameters, which
    the dispatcher handles based on the path.
    """

    def __init__(self, request_handler: DispatchClient) -> None:
        self.request_handler = request_handler

    async def get_guild_bans(
        self, guild_id: str | int, options: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """List bans of a guild.

        Args:
            guild_id: Id of the guild.
            options: Optional ``limit``, ``before`` and ``after`` filters.
        """
        return await self.request_handler.dispatch(
            endpoints.GUILD_BANS.format(guild_id=guild_id), "get", "json", options
        )

    async def create_guild_ban(
        self, guild_id: str | int, user_id: str | int, data: dict[str, Any] | None = None
    ) -> None:
        """Ban a user. ``data`` may carry ``delete_message_seconds`` and ``reason``."""
        return await self.request_handler.dispatch(
            endpoints.GUILD_BAN.format(guild_id=guild_id, user_id=user_id), "put", "json", data
        )

    async def remove_guild_ban(
        self, guild_id: str | int, user_id: str | int, reason: str | None = None
    ) -> None:
        """Lift a ban, optionally recording a reason in the audit log."""
        payload = {"reason": reason} if reason else {}
        return await self.request_handler.dispatch(
            endpoints.GUILD_BAN.format(guild_id=guild_id, user_id=user_id), "delete", "json", payload
        )

    async def get_guild_prune_count(
        self, guild_id: str | int, options: dict[str, Any] | None = None
    ) -> dict[str, int]:
        """Count the members a prune with ``options`` (``days``, ``include_roles``) would kick."""
        return await self.request_handler.dispatch(
            endpoints.GUILD_PRUNE.format(guild_id=guild_id), "get", "json", options
        )

    async def start_guild_prune(
        self, guild_id: str | int, data: dict[str, Any] | None = None
    ) -> dict[str, int | None]:
        """Begin a prune of inactive guild members and return the pruned count."""
        return await self.request_handler.dispatch(
            endpoints.GUILD_PRUNE.format(guild_id=guild_id), "post", "json", data
        )
