"""Built-in help command listing every slash command and its help message."""

import discord

from interactcord.configuration.app_configuration import app_config
from interactcord.datatypes.interaction_datatypes import InteractionEvent
from interactcord.handlers.base import SlashCommand
from interactcord.handlers.registry import register_handler
from interactcord.language.language_utils import language_bundles

GLOBAL_BUNDLE = "languages.bot.global"


@register_handler
class HelpCommand(SlashCommand):
    """List the registered slash commands, using each command's help message when it has one."""

    def __init__(self) -> None:
        super().__init__("help", "Lists the available commands")
        self.multilingual = True

    async def execute(self, event: InteractionEvent) -> None:
        registry = getattr(event.client, "handler_registry", None)
        commands = registry.get_commands() if registry is not None else []

        embed = discord.Embed(
            title=language_bundles.get_language_string_or_default(GLOBAL_BUNDLE, "help.title", event.locale),
            color=discord.Color.blurple(),
        )
        if not commands:
            embed.description = language_bundles.get_language_string_or_default(GLOBAL_BUNDLE, "help.empty", event.locale)
        no_help = language_bundles.get_language_string_or_default(GLOBAL_BUNDLE, "help.no_help", event.locale)
        for command in commands:
            if command.home_guild_only and event.guild_id != str(app_config.home_guild_id):
                continue
            name = registry.localized_names(command).get(event.locale) or command.default_name
            description = registry.localized_descriptions(command).get(event.locale)
            text = command.help_message or description or command.default_description or no_help
            if command.has_cooldown:
                text += f"\n*Cooldown: {command.cooldown.time_string} per {command.cooldown.scope_string}*"
            embed.add_field(name=f"/{name}", value=text, inline=False)

        await event.respond(embed=embed, ephemeral=True)
