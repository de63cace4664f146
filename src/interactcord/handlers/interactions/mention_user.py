"""User context-menu interaction mentioning the targeted user."""

from interactcord.datatypes.interaction_datatypes import InteractionEvent, InteractionSurface
from interactcord.handlers.base import ContextInteraction
from interactcord.handlers.registry import register_handler


@register_handler
class MentionUserInteraction(ContextInteraction):

    def __init__(self) -> None:
        super().__init__(InteractionSurface.USER, "mention User")

    async def execute_user(self, event: InteractionEvent) -> None:
        await event.respond(f"Mentioned user: <@{event.target_id}>")
