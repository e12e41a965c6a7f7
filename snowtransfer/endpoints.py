"""Discord REST endpoint paths.

Templates are filled in with ``str.format`` by the method wrappers.
"""

BASE_HOST = "https://discord.com"
BASE_PATH = "/api/v10"

GATEWAY = "/gateway"
GATEWAY_BOT = "/gateway/bot"

CHANNEL = "/channels/{channel_id}"
CHANNEL_MESSAGES = "/channels/{channel_id}/messages"
CHANNEL_MESSAGE = "/channels/{channel_id}/messages/{message_id}"

GUILD_BANS = "/guilds/{guild_id}/bans"
GUILD_BAN = "/guilds/{guild_id}/bans/{user_id}"
GUILD_PRUNE = "/guilds/{guild_id}/prune"
