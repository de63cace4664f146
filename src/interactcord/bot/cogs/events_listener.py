"""Event listener Cog for Interactcord.

Publishes handler metadata once the bot is connected.
"""

import discord
from discord.ext import commands

from interactcord.bot.publisher import CommandPublisher
from interactcord.util.logger import get_logger

logger = get_logger("events_listener_cog")


class EventsListenerCog(commands.Cog):
    """Cog containing bot lifecycle handlers."""

    def __init__(self, discord_bot_instance):
        self.bot = discord_bot_instance
        self.publisher = CommandPublisher(discord_bot_instance)
        self.published = False
        logger.info("Events listener cog loaded")

    @commands.Cog.listener(name="on_ready")
    async def on_ready(self):
        """Log the connection and publish command metadata on the first ready event.

        ``on_ready`` fires again after every resume, so publishing only happens once
        per process; the console ``publish`` command republishes on demand.
        """
        if self.bot.user:
            logger.info(f"Bot connected as {self.bot.user} (ID: {self.bot.user.id})")
        else:
            logger.warning("Bot partially connected, but user information not yet available.")

        logger.info("--==--==--==--==--==--==--==--==--==--==--==--==--==--==--==--==--")

        if self.published:
            return
        self.published = await self.publisher.publish(self.bot.handler_registry)
        registry = self.bot.handler_registry
        logger.info(
            "Published %d global and %d home guild command(s); %d registration error(s).",
            len(registry.global_metadata),
            len(registry.home_guild_metadata),
            len(registry.registration_errors),
        )


def setup(bot: discord.Bot) -> None:
    """Register the events listener cog with the bot."""
    bot.add_cog(EventsListenerCog(bot))
