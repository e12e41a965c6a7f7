"""Methods for channel and message endpoints."""

from typing import Any

from snowtransfer import endpoints
from snowtransfer._internal.dispatch.client import DispatchClient


class ChannelMethods:
    """Methods for interacting with channels and their messages."""

    def __init__(self, request_handler: DispatchClient) -> None:
        self.request_handler = request_handler

    async def get_channel(self, channel_id: str | int) -> dict[str, Any]:
        """Get a channel by id."""
        return await self.request_handler.dispatch(
            endpoints.CHANNEL.format(channel_id=channel_id), "get", "json"
        )

    async def create_message(
        self, channel_id: str | int, data: str | dict[str, Any]
    ) -> dict[str, Any]:
        """Create a message in a channel.

        Args:
            channel_id: Id of the channel to post in.
            data: Message content as a string, or a message object. A message
                object carrying ``files`` (a list of ``{"name", "file"}``) is
                uploaded as multipart/form-data.

        Returns:
            The created message object.
        """
        if isinstance(data, str):
            data = {"content": data}
        path = endpoints.CHANNEL_MESSAGES.format(channel_id=channel_id)
        if data.get("files"):
            return await self.request_handler.dispatch(path, "post", "multipart", data)
        return await self.request_handler.dispatch(path, "post", "json", data)

    async def edit_message(
        self, channel_id: str | int, message_id: str | int, data: str | dict[str, Any]
    ) -> dict[str, Any]:
        """Edit a message. A plain string replaces its content."""
        if isinstance(data, str):
            data = {"content": data}
        path = endpoints.CHANNEL_MESSAGE.format(channel_id=channel_id, message_id=message_id)
        if data.get("files"):
            return await self.request_handler.dispatch(path, "patch", "multipart", data)
        return await self.request_handler.dispatch(path, "patch", "json", data)

    async def delete_message(
        self, channel_id: str | int, message_id: str | int, reason: str | None = None
    ) -> None:
        """Delete a message, optionally recording a reason in the audit log."""
        payload = {"reason": reason} if reason else {}
        path = endpoints.CHANNEL_MESSAGE.format(channel_id=channel_id, message_id=message_id)
        return await self.request_handler.dispatch(path, "delete", "json", payload)
