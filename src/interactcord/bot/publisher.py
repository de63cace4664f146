"""
Pushes handler metadata to Discord.

The registry builds the records; this module only hands the two partitions to
py-cord's HTTP client: the global set to the application's global commands and
the home-guild set to the configured home guild. Both calls overwrite whatever
was registered before.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import discord

from interactcord.configuration.app_configuration import app_config
from interactcord.datatypes.command_datatypes import CommandMetadata
from interactcord.handlers.registry import HandlerRegistry
from interactcord.util.logger import get_logger

logger = get_logger("command_publisher")


class CommandPublisher:
    """Publish a registry's metadata through a bot's HTTP client."""

    def __init__(self, bot: discord.Bot, home_guild_id: Optional[int] = None) -> None:
        self.bot = bot
        self.home_guild_id = home_guild_id if home_guild_id is not None else app_config.home_guild_id

    @staticmethod
    def payloads(metadata: List[CommandMetadata]) -> List[Dict[str, Any]]:
        return [record.to_payload() for record in metadata]

    async def publish(self, registry: HandlerRegistry) -> bool:
        """Build and publish both partitions; returns False if any upload failed."""
        partitions = registry.publish()
        application_id = self.bot.application_id
        if application_id is None:
            logger.error("[PUBLISHER] Application id unknown; connect the bot before publishing.")
            return False

        success = True
        try:
            await self.bot.http.bulk_upsert_global_commands(application_id, self.payloads(partitions["global"]))
            self._log_partition("Global", partitions["global"])
        except discord.HTTPException as exc:
            logger.error("[PUBLISHER] Failed to publish global commands: %s", exc)
            success = False

        home_guild_metadata = partitions["home_guild"]
        if not self.home_guild_id:
            if home_guild_metadata:
                logger.warning(
                    "[PUBLISHER] %d home guild command(s) not published: no home_guild_id configured.",
                    len(home_guild_metadata),
                )
            return success

        try:
            await self.bot.http.bulk_upsert_guild_commands(
                application_id, self.home_guild_id, self.payloads(home_guild_metadata)
            )
            self._log_partition("Home Guild", home_guild_metadata)
        except discord.HTTPException as exc:
            logger.error("[PUBLISHER] Failed to publish home guild commands to %s: %s", self.home_guild_id, exc)
            success = False
        return success

    @staticmethod
    def _log_partition(label: str, metadata: List[CommandMetadata]) -> None:
        logger.info("[PUBLISHER] %s Commands:", label)
        for record in metadata:
            logger.info(
                "[PUBLISHER] Command Name: %s, Type: %s, Options: %s",
                record.name,
                record.type.name,
                [option.name for option in record.options],
            )
