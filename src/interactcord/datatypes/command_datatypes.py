"""
Outward-facing application-command records.

These are the structures the registry builds from handler definitions and the
publisher sends to Discord. ``to_payload`` renders the application-command JSON
shape expected by the bulk-overwrite endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import discord

from interactcord.datatypes.discord_datatypes import DiscordLocale


class CommandType(Enum):
    """Discord application-command types."""

    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3


def _localization_payload(localizations: Dict[DiscordLocale, str]) -> Dict[str, str]:
    return {locale.value: text for locale, text in localizations.items() if locale is not DiscordLocale.UNKNOWN}


@dataclass(slots=True)
class OptionChoice:
    """A fixed choice for a string, integer or number option."""

    name: str
    value: str | int | float
    name_localizations: Dict[DiscordLocale, str] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name, "value": self.value}
        if self.name_localizations:
            payload["name_localizations"] = _localization_payload(self.name_localizations)
        return payload


@dataclass(slots=True)
class CommandOption:
    """Node of a slash command's option tree.

    Subcommands are options of type ``sub_command`` and subcommand groups are
    options of type ``sub_command_group`` whose ``options`` are subcommands.
    """

    type: discord.SlashCommandOptionType
    name: str
    description: str
    required: bool = False
    choices: List[OptionChoice] = field(default_factory=list)
    options: List["CommandOption"] = field(default_factory=list)
    name_localizations: Dict[DiscordLocale, str] = field(default_factory=dict)
    description_localizations: Dict[DiscordLocale, str] = field(default_factory=dict)

    @classmethod
    def subcommand(cls, name: str, description: str, options: Optional[List["CommandOption"]] = None) -> "CommandOption":
        return cls(discord.SlashCommandOptionType.sub_command, name, description, options=list(options or []))

    @classmethod
    def group(cls, name: str, description: str, subcommands: List["CommandOption"]) -> "CommandOption":
        return cls(discord.SlashCommandOptionType.sub_command_group, name, description, options=list(subcommands))

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
        }
        # Discord rejects "required" on subcommands and groups
        if self.type not in (discord.SlashCommandOptionType.sub_command, discord.SlashCommandOptionType.sub_command_group):
            payload["required"] = self.required
        if self.choices:
            payload["choices"] = [choice.to_payload() for choice in self.choices]
        if self.options:
            payload["options"] = [option.to_payload() for option in self.options]
        if self.name_localizations:
            payload["name_localizations"] = _localization_payload(self.name_localizations)
        if self.description_localizations:
            payload["description_localizations"] = _localization_payload(self.description_localizations)
        return payload


@dataclass(slots=True)
class CommandMetadata:
    """Published description of one handler.

    Attributes:
        type: Chat-input (slash), user-context or message-context command.
        name: Default (en-US) name.
        description: Default description; empty for context interactions.
        name_localizations: Locale to name map, empty when not multilingual.
        description_localizations: Locale to description map.
        options: Options, subcommands and subcommand groups in publish order.
        default_member_permissions: Permissions required by default, or None for everyone.
        guild_only: When True the command is hidden in direct messages.
        nsfw: When True the command is only usable in age-restricted channels.
    """

    type: CommandType
    name: str
    description: str = ""
    name_localizations: Dict[DiscordLocale, str] = field(default_factory=dict)
    description_localizations: Dict[DiscordLocale, str] = field(default_factory=dict)
    options: List[CommandOption] = field(default_factory=list)
    default_member_permissions: Optional[discord.Permissions] = None
    guild_only: bool = False
    nsfw: bool = False

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "type": self.type.value,
            "name": self.name,
            "dm_permission": not self.guild_only,
            "nsfw": self.nsfw,
        }
        if self.type is CommandType.CHAT_INPUT:
            payload["description"] = self.description
            payload["options"] = [option.to_payload() for option in self.options]
        else:
            payload["description"] = ""
        if self.name_localizations:
            payload["name_localizations"] = _localization_payload(self.name_localizations)
        if self.description_localizations and self.type is CommandType.CHAT_INPUT:
            payload["description_localizations"] = _localization_payload(self.description_localizations)
        if self.default_member_permissions is not None:
            payload["default_member_permissions"] = str(self.default_member_permissions.value)
        return payload
