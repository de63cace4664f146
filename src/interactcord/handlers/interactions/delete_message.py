"""Message context-menu interaction deleting the targeted message."""

import discord

from interactcord.datatypes.interaction_datatypes import InteractionEvent, InteractionSurface
from interactcord.handlers.base import ContextInteraction
from interactcord.handlers.registry import register_handler
from interactcord.util.logger import get_logger

logger = get_logger("delete_message_interaction")

CONFIRMATION_LIFETIME_SECONDS = 5


@register_handler
class DeleteMessageInteraction(ContextInteraction):

    def __init__(self) -> None:
        super().__init__(InteractionSurface.MESSAGE, "delete Message")
        self.guild_only = True
        self.default_member_permissions = discord.Permissions(manage_messages=True)

    async def execute_message(self, event: InteractionEvent) -> None:
        await event.client.http.delete_message(event.channel_id, event.target_id)
        logger.debug("Deleted message %s in channel %s for user %s", event.target_id, event.channel_id, event.user_id)
        await event.respond(
            f"Deleted message with id {event.target_id}",
            delete_after=CONFIRMATION_LIFETIME_SECONDS,
        )
