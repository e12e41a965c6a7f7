"""User-facing SnowTransfer client.

Example usage:
    from snowtransfer import SnowTransfer

    client = SnowTransfer("your-bot-token")

    gateway = await client.bot.get_gateway()
    await client.channel.create_message("1234", {"content": "hi", "reason": "greeting"})
"""

import os

from snowtransfer._internal.dispatch.client import DispatchClient
from snowtransfer.endpoints import BASE_HOST, BASE_PATH
from snowtransfer.methods import BotMethods, ChannelMethods, GuildMethods

TOKEN_PREFIXES = ("Bot ", "Bearer ")


class SnowTransfer:
    """Entry point wiring one dispatcher to the endpoint method groups.

    Attributes:
        request_handler: The dispatcher shared by all method groups. Register
            lifecycle listeners on ``request_handler.events``.
        bot: Gateway endpoints.
        channel: Channel and message endpoints.
        guild: Guild ban and prune endpoints.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        base_host: str = BASE_HOST,
        base_path: str = BASE_PATH,
        honor_retry_after: bool = False,
        debug: bool = False,
    ) -> None:
        if token and not token.startswith(TOKEN_PREFIXES):
            token = f"Bot {token}"
        self.token = token
        self.request_handler = DispatchClient(
            token=token,
            base_host=base_host,
            base_path=base_path,
            honor_retry_after=honor_retry_after,
            debug=debug,
        )
        self.bot = BotMethods(self.request_handler)
        self.channel = ChannelMethods(self.request_handler)
        self.guild = GuildMethods(self.request_handler)

    @classmethod
    def from_env(cls) -> "SnowTransfer":
        """Create a client from the same environment variables as `DispatchClient.from_env`."""
        return cls(
            os.environ.get("SNOWTRANSFER_TOKEN") or None,
            base_host=os.environ.get("SNOWTRANSFER_BASE_HOST", BASE_HOST),
            base_path=os.environ.get("SNOWTRANSFER_BASE_PATH", BASE_PATH),
            honor_retry_after=os.environ.get("SNOWTRANSFER_HONOR_RETRY_AFTER", "") == "1",
            debug=os.environ.get("SNOWTRANSFER_DEBUG", "") == "1",
        )
