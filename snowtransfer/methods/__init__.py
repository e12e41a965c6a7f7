"""Endpoint method wrappers.

Each wrapper formats an endpoint path and forwards to the dispatcher; no
retry, error or encoding logic lives here.
"""

from snowtransfer.methods.bot import BotMethods
from snowtransfer.methods.channel import ChannelMethods
from snowtransfer.methods.guild import GuildMethods

__all__ = ["BotMethods", "ChannelMethods", "GuildMethods"]
