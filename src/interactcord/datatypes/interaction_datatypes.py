"""
Inbound interaction events and the dispatcher's response instructions.

An :class:`InteractionEvent` is the platform-neutral record the dispatcher works
on; :meth:`InteractionEvent.from_interaction` builds one from a py-cord
``discord.Interaction``. A :class:`DispatchResponse` tells the transport what to
do next.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import discord

from interactcord.datatypes.command_datatypes import CommandType
from interactcord.datatypes.discord_datatypes import DEFAULT_LOCALE, DiscordLocale, snowflake_str


class InteractionSurface(Enum):
    """Where an interaction was invoked from."""

    SLASH = "slash"
    MESSAGE = "message"
    USER = "user"

    def __str__(self) -> str:
        return self.value

    @property
    def command_type(self) -> CommandType:
        return {
            InteractionSurface.SLASH: CommandType.CHAT_INPUT,
            InteractionSurface.MESSAGE: CommandType.MESSAGE,
            InteractionSurface.USER: CommandType.USER,
        }[self]

    @property
    def is_context(self) -> bool:
        return self is not InteractionSurface.SLASH

    @classmethod
    def from_command_type(cls, value: int | CommandType) -> "InteractionSurface":
        command_type = CommandType(value)
        for surface in cls:
            if surface.command_type is command_type:
                return surface
        raise ValueError(f"No interaction surface for command type {value!r}")


@dataclass(slots=True)
class InteractionEvent:
    """One inbound application-command interaction.

    Attributes:
        name: Invocation name as sent by the client.
        user_id: Invoking user.
        channel_id: Channel the interaction came from.
        guild_id: Guild the interaction came from, None in direct messages.
        locale: Invoker's client locale.
        surface: Slash command, message context menu or user context menu.
        target_id: Targeted message or user id for context interactions.
        interaction: The raw py-cord interaction, used to reply.
        client: The bot instance that received the interaction.
    """

    name: str
    user_id: str
    channel_id: str
    guild_id: Optional[str]
    locale: DiscordLocale
    surface: InteractionSurface
    target_id: Optional[str] = None
    interaction: Any = None
    client: Any = None

    @classmethod
    def from_interaction(cls, interaction: discord.Interaction, client: Any = None) -> "InteractionEvent":
        """Build an event from an application-command interaction."""
        data = interaction.data or {}
        locale = DiscordLocale.from_str(getattr(interaction, "locale", None))
        return cls(
            name=str(data.get("name", "")),
            user_id=snowflake_str(interaction.user.id) if interaction.user else "",
            channel_id=snowflake_str(interaction.channel_id) or "",
            guild_id=snowflake_str(interaction.guild_id),
            locale=locale if locale is not DiscordLocale.UNKNOWN else DEFAULT_LOCALE,
            surface=InteractionSurface.from_command_type(int(data.get("type", CommandType.CHAT_INPUT.value))),
            target_id=snowflake_str(data.get("target_id")),
            interaction=interaction,
            client=client,
        )

    async def respond(
        self,
        content: Optional[str] = None,
        *,
        ephemeral: bool = False,
        embed: Optional[discord.Embed] = None,
        delete_after: Optional[float] = None,
    ) -> None:
        """Send the initial reply to this interaction."""
        if self.interaction is None:
            raise RuntimeError(f"Interaction event '{self.name}' has no interaction to respond to")
        await self.interaction.response.send_message(
            content,
            ephemeral=ephemeral,
            embed=embed,
            delete_after=delete_after,
        )


class ResponseKind(Enum):
    """Outcome of dispatching one event."""

    DELEGATED = "delegated"
    COOLDOWN = "cooldown"
    NOT_AVAILABLE = "not_available"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class DispatchResponse:
    """Instruction returned by the dispatcher for one event.

    ``content`` is empty for DELEGATED responses; the handler answers the
    interaction itself.
    """

    kind: ResponseKind
    content: str = ""
    ephemeral: bool = True
    handler_name: Optional[str] = None

    @property
    def delegated(self) -> bool:
        return self.kind is ResponseKind.DELEGATED
