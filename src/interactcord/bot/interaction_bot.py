"""
py-cord bot that routes application-command interactions through the dispatcher.

The bot does not use py-cord's own application-command system: automatic
command syncing is disabled and ``on_interaction`` is overridden so every
command and context-menu interaction goes to :class:`Dispatcher`.
"""

from __future__ import annotations

from typing import Optional

import discord

from interactcord.configuration.app_configuration import app_config
from interactcord.cooldown.cooldown_engine import CooldownEngine
from interactcord.datatypes.interaction_datatypes import InteractionEvent
from interactcord.handlers.dispatcher import Dispatcher
from interactcord.handlers.registry import HandlerRegistry
from interactcord.util.logger import get_logger

logger = get_logger("interaction_bot")


def build_activity(activity_type: str, name: str, url: str = "") -> Optional[discord.BaseActivity]:
    """Return the presence activity for the configured type, or None without a name."""
    if not name:
        return None
    activity_type = activity_type.upper()
    if activity_type == "WATCHING":
        return discord.Activity(type=discord.ActivityType.watching, name=name)
    if activity_type == "LISTENING":
        return discord.Activity(type=discord.ActivityType.listening, name=name)
    if activity_type == "STREAMING":
        return discord.Streaming(name=name, url=url)
    if activity_type == "COMPETING":
        return discord.Activity(type=discord.ActivityType.competing, name=name)
    return discord.CustomActivity(name=name)


class InteractionBot(discord.Bot):
    """Discord bot owning the handler registry, cooldown engine and dispatcher."""

    def __init__(
        self,
        registry: HandlerRegistry,
        cooldowns: Optional[CooldownEngine] = None,
        *,
        intents: Optional[discord.Intents] = None,
        activity: Optional[discord.BaseActivity] = None,
    ) -> None:
        super().__init__(
            intents=intents or discord.Intents.default(),
            activity=activity,
            auto_sync_commands=False,
        )
        self.handler_registry = registry
        self.cooldowns = cooldowns or CooldownEngine()
        self.dispatcher = Dispatcher(registry, self.cooldowns)

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        if interaction.type is not discord.InteractionType.application_command:
            return

        try:
            event = InteractionEvent.from_interaction(interaction, client=self)
        except (ValueError, TypeError) as exc:
            logger.warning("[INTERACTION BOT] Ignoring malformed interaction %s: %s", interaction.id, exc)
            return

        response = await self.dispatcher.dispatch(event)
        if response.delegated:
            return

        try:
            await interaction.response.send_message(response.content, ephemeral=response.ephemeral)
        except discord.HTTPException as exc:
            logger.error("[INTERACTION BOT] Failed to answer '%s' (%s): %s", event.name, response.kind.value, exc)

    async def close(self) -> None:
        await self.dispatcher.drain()
        await super().close()


def create_bot(registry: Optional[HandlerRegistry] = None) -> InteractionBot:
    """Discover handlers, build the bot and register its cogs."""
    from interactcord.bot.cogs import events_listener

    if registry is None:
        registry = HandlerRegistry()
        registry.discover()

    bot = InteractionBot(
        registry,
        activity=build_activity(app_config.activity_type, app_config.activity_name, app_config.streaming_url),
    )
    events_listener.setup(bot)
    return bot
