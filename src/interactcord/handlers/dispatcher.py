"""
Routing of inbound interaction events to registered handlers.

For each event the dispatcher finds the handler by name, checks that it serves
the event's surface, applies its cooldown and then starts it. The handler runs
as its own asyncio task; ``dispatch`` returns as soon as it has been started.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Set

from interactcord.configuration.app_configuration import app_config
from interactcord.cooldown.cooldown_engine import CooldownEngine
from interactcord.datatypes.interaction_datatypes import DispatchResponse, InteractionEvent, ResponseKind
from interactcord.handlers.base import BaseHandler
from interactcord.handlers.registry import HandlerRegistry
from interactcord.language.language_utils import LanguageBundles, language_bundles
from interactcord.util.logger import get_logger

logger = get_logger("dispatcher")

GLOBAL_BUNDLE = "languages.bot.global"
COMMAND_COOLDOWN_KEY = "command.cooldown.response"
INTERACTION_COOLDOWN_KEY = "interaction.cooldown.response"
INTERACTION_UNSUPPORTED_KEY = "interaction.unsupported.response"


class Dispatcher:
    """Resolve events to handlers and enforce their cooldowns."""

    def __init__(
        self,
        registry: HandlerRegistry,
        cooldowns: Optional[CooldownEngine] = None,
        language: Optional[LanguageBundles] = None,
        not_available_message: Optional[str] = None,
    ) -> None:
        self.registry = registry
        self.cooldowns = cooldowns or CooldownEngine()
        self.language = language or language_bundles
        self.not_available_message = not_available_message or app_config.not_available_message
        self._active_tasks: Set[asyncio.Task] = set()

    async def dispatch(self, event: InteractionEvent) -> DispatchResponse:
        """Route one event and return what the transport should do next."""
        handler = self.registry.find(event.name, event.surface)
        if handler is None:
            # Expected while Discord still caches commands that no longer exist
            logger.debug("[DISPATCHER] No handler for %s '%s'", event.surface, event.name)
            return DispatchResponse(ResponseKind.NOT_AVAILABLE, self.not_available_message)

        if not handler.supports(event.surface):
            logger.warning(
                "[DISPATCHER] '%s' does not support %s interactions", handler.default_name, event.surface
            )
            content = self.language.format_language_string(GLOBAL_BUNDLE, INTERACTION_UNSUPPORTED_KEY, event.locale)
            return DispatchResponse(ResponseKind.UNSUPPORTED, content, handler_name=handler.default_name)

        if handler.has_cooldown and self.cooldowns.check(handler, event):
            key = INTERACTION_COOLDOWN_KEY if event.surface.is_context else COMMAND_COOLDOWN_KEY
            content = self.language.format_language_string(
                GLOBAL_BUNDLE,
                key,
                event.locale,
                time=self.cooldowns.end_time_relative_for(handler, event),
            )
            logger.debug("[DISPATCHER] '%s' is on cooldown for user %s", handler.default_name, event.user_id)
            return DispatchResponse(ResponseKind.COOLDOWN, content, handler_name=handler.default_name)

        self._start(handler, event)
        return DispatchResponse(ResponseKind.DELEGATED, ephemeral=False, handler_name=handler.default_name)

    # --------------------------
    # Handler tasks
    # --------------------------
    def _start(self, handler: BaseHandler, event: InteractionEvent) -> None:
        task = asyncio.create_task(handler.execute(event), name=f"handler:{handler.default_name}")
        self._active_tasks.add(task)
        task.add_done_callback(lambda finished: self._on_task_done(handler, finished))

    def _on_task_done(self, handler: BaseHandler, task: asyncio.Task) -> None:
        self._active_tasks.discard(task)
        if task.cancelled():
            logger.debug("[DISPATCHER] Handler '%s' was cancelled", handler.default_name)
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "[DISPATCHER] Handler '%s' raised an exception",
                handler.default_name,
                exc_info=(type(exc), exc, exc.__traceback__),
            )

    @property
    def pending(self) -> int:
        return len(self._active_tasks)

    async def drain(self) -> None:
        """Wait until every handler started so far has finished."""
        while self._active_tasks:
            await asyncio.gather(*list(self._active_tasks), return_exceptions=True)
