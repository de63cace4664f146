"""
Handler definitions: the contract every slash command and context interaction implements.

A handler carries its own metadata (localized names and descriptions, flags,
permissions, option tree, cooldown) and an async ``execute`` callback. Handlers
are built once with a zero-argument constructor and live for the whole process.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import discord

from interactcord.datatypes.command_datatypes import CommandOption
from interactcord.datatypes.cooldown_datatypes import Cooldown
from interactcord.datatypes.discord_datatypes import DEFAULT_LOCALE, DiscordLocale
from interactcord.datatypes.interaction_datatypes import InteractionEvent, InteractionSurface


class UnsupportedInteractionError(Exception):
    """Raised when a handler is executed for an interaction surface it does not serve."""

    def __init__(self, handler_name: str, surface: InteractionSurface) -> None:
        super().__init__(f"'{handler_name}' is not supported for {surface} interactions")
        self.handler_name = handler_name
        self.surface = surface


class BaseHandler(ABC):
    """Shared metadata and flags of slash commands and context interactions."""

    surface: InteractionSurface

    def __init__(self, default_name: str, default_description: str = "") -> None:
        self.names: Dict[DiscordLocale, str] = {DEFAULT_LOCALE: default_name}
        self.descriptions: Dict[DiscordLocale, str] = {DEFAULT_LOCALE: default_description}
        self.guild_only: bool = False
        # Home-guild-only handlers are published to the configured home guild instead of globally
        self.home_guild_only: bool = False
        self.nsfw: bool = False
        self.default_member_permissions: Optional[discord.Permissions] = None
        self.cooldown: Optional[Cooldown] = None
        # Pull localized names and descriptions from languages.commands.<name> at publish time
        self.multilingual: bool = False

    @property
    def default_name(self) -> str:
        return self.names[DEFAULT_LOCALE]

    @property
    def default_description(self) -> str:
        return self.descriptions.get(DEFAULT_LOCALE, "")

    def get_name(self, locale: DiscordLocale) -> Optional[str]:
        return self.names.get(locale)

    def get_description(self, locale: DiscordLocale) -> Optional[str]:
        return self.descriptions.get(locale)

    @property
    def has_additional_names(self) -> bool:
        return len(self.names) > 1

    @property
    def has_additional_descriptions(self) -> bool:
        return len(self.descriptions) > 1

    @property
    def has_cooldown(self) -> bool:
        return self.cooldown is not None

    def supports(self, surface: InteractionSurface) -> bool:
        """Return True when this handler can execute events from ``surface``."""
        return surface is self.surface

    @abstractmethod
    async def execute(self, event: InteractionEvent) -> None:
        """Handle one event; replying to the interaction is the handler's job."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.default_name!r}, surface={self.surface})"


class SlashCommand(BaseHandler):
    """Base class for slash commands.

    Subclasses call ``super().__init__(name, description)`` and then adjust the
    public attributes::

        class DailyCommand(SlashCommand):
            def __init__(self):
                super().__init__("daily", "Claim your daily reward")
                self.cooldown = Cooldown(1, CooldownTime.DAYS, CooldownScope.USER)

            async def execute(self, event):
                await event.respond("Claimed!")
    """

    surface = InteractionSurface.SLASH

    def __init__(self, default_name: str, default_description: str) -> None:
        super().__init__(default_name, default_description)
        self.options: List[CommandOption] = []
        self.subcommands: List[CommandOption] = []
        self.subcommand_groups: List[CommandOption] = []
        # Shown by the built-in help command
        self.help_message: Optional[str] = None

    @property
    def has_options(self) -> bool:
        return bool(self.options)

    @property
    def has_subcommands(self) -> bool:
        return bool(self.subcommands)

    @property
    def has_subcommand_groups(self) -> bool:
        return bool(self.subcommand_groups)

    @property
    def has_help_message(self) -> bool:
        return self.help_message is not None

    def add_option(self, option: CommandOption) -> None:
        self.options.append(option)

    def add_options(self, options: List[CommandOption]) -> None:
        self.options.extend(options)


class ContextInteraction(BaseHandler):
    """Base class for message and user context-menu interactions.

    Override :meth:`execute_message` for MESSAGE interactions or
    :meth:`execute_user` for USER interactions. The other one raises
    :class:`UnsupportedInteractionError`.
    """

    def __init__(self, surface: InteractionSurface, default_name: str) -> None:
        if not surface.is_context:
            raise ValueError(f"Context interactions need a MESSAGE or USER surface, got {surface}")
        super().__init__(default_name)
        self.surface = surface

    async def execute(self, event: InteractionEvent) -> None:
        if event.surface is InteractionSurface.MESSAGE:
            await self.execute_message(event)
        elif event.surface is InteractionSurface.USER:
            await self.execute_user(event)
        else:
            raise UnsupportedInteractionError(self.default_name, event.surface)

    async def execute_message(self, event: InteractionEvent) -> None:
        raise UnsupportedInteractionError(self.default_name, InteractionSurface.MESSAGE)

    async def execute_user(self, event: InteractionEvent) -> None:
        raise UnsupportedInteractionError(self.default_name, InteractionSurface.USER)
