"""Latency check command."""

from interactcord.datatypes.interaction_datatypes import InteractionEvent
from interactcord.handlers.base import SlashCommand
from interactcord.handlers.registry import register_handler


@register_handler
class PingCommand(SlashCommand):
    """Reply with the bot's gateway latency."""

    def __init__(self) -> None:
        super().__init__("ping", "Shows the ping of the bot")
        self.multilingual = True
        self.help_message = "Shows the current gateway latency of the bot."

    async def execute(self, event: InteractionEvent) -> None:
        await event.respond("Calculating ping...")
        latency_ms = (getattr(event.client, "latency", 0.0) or 0.0) * 1000
        await event.interaction.edit_original_response(content=f"Ping: {latency_ms:.0f}ms")
