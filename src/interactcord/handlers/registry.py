"""
Handler discovery and metadata publication.

Handler classes register themselves with the :func:`register_handler` decorator
when their module is imported. :meth:`HandlerRegistry.discover` imports the
configured handler modules, instantiates every registered class and keeps the
instances for dispatch. :meth:`HandlerRegistry.publish` turns them into
:class:`CommandMetadata` records split into a global partition and a home-guild
partition for the publisher.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Type, TypeVar

from interactcord.configuration.app_configuration import app_config
from interactcord.datatypes.command_datatypes import CommandMetadata
from interactcord.datatypes.discord_datatypes import DEFAULT_LOCALE, DiscordLocale
from interactcord.datatypes.interaction_datatypes import InteractionSurface
from interactcord.handlers.base import BaseHandler, ContextInteraction, SlashCommand
from interactcord.language.language_utils import (
    COMMAND_BUNDLE_PREFIX,
    COMMAND_DESCRIPTION_KEY,
    COMMAND_NAME_KEY,
    LanguageBundles,
    language_bundles,
)
from interactcord.util.logger import get_logger

logger = get_logger("handler_registry")

# Every handler class registered so far, in import order
HANDLER_CLASSES: List[Type[BaseHandler]] = []

HandlerClass = TypeVar("HandlerClass", bound=Type[BaseHandler])


def register_handler(handler_class: HandlerClass) -> HandlerClass:
    """Class decorator adding a handler to the discovery table."""
    if handler_class not in HANDLER_CLASSES:
        HANDLER_CLASSES.append(handler_class)
    return handler_class


@dataclass(frozen=True, slots=True)
class RegistrationError:
    """A handler (class or module) that could not be registered, and why."""

    source: str
    reason: str


class HandlerRegistry:
    """Owns the discovered handlers and their published metadata.

    The handler list and both metadata partitions are built once during
    startup and only read afterwards.
    """

    def __init__(
        self,
        language: Optional[LanguageBundles] = None,
        validate_cooldowns: Optional[bool] = None,
    ) -> None:
        self.language = language or language_bundles
        self.validate_cooldowns = app_config.validate_cooldowns if validate_cooldowns is None else validate_cooldowns
        self.commands: List[SlashCommand] = []
        self.interactions: List[ContextInteraction] = []
        self.global_metadata: List[CommandMetadata] = []
        self.home_guild_metadata: List[CommandMetadata] = []
        self.registration_errors: List[RegistrationError] = []

    # --------------------------
    # Discovery
    # --------------------------
    def discover(
        self,
        modules: Optional[Iterable[str]] = None,
        handler_classes: Optional[Iterable[Type[BaseHandler]]] = None,
    ) -> List[BaseHandler]:
        """Import handler modules and register an instance of every handler class.

        A module that fails to import or a class that fails to construct is
        logged and recorded in :attr:`registration_errors`; the rest are still
        registered.

        Parameters
        ----------
        modules:
            Modules to import; defaults to the configured handler modules.
        handler_classes:
            Classes to instantiate; defaults to the :data:`HANDLER_CLASSES` table.

        Returns
        -------
        list[BaseHandler]
            The handlers registered by this call.
        """
        for module_name in app_config.handler_modules if modules is None else modules:
            try:
                importlib.import_module(module_name)
            except Exception as exc:
                self._record_error(module_name, f"import failed: {exc}")

        registered: List[BaseHandler] = []
        for handler_class in list(HANDLER_CLASSES if handler_classes is None else handler_classes):
            class_name = f"{handler_class.__module__}.{handler_class.__qualname__}"
            try:
                handler = handler_class()
            except Exception as exc:
                self._record_error(class_name, f"construction failed: {exc!r}")
                continue

            if self.validate_cooldowns and handler.cooldown is not None:
                problems = handler.cooldown.validation_errors()
                if problems:
                    self._record_error(class_name, f"invalid cooldown ({', '.join(problems)})")
                    continue

            if self.register(handler):
                registered.append(handler)
                logger.info("[REGISTRY] Automatically registered %s: %s", handler.surface, handler.default_name)

        return registered

    def _record_error(self, source: str, reason: str) -> None:
        self.registration_errors.append(RegistrationError(source, reason))
        logger.error("[REGISTRY] Failed to register handler from %s: %s", source, reason)

    def register(self, handler: BaseHandler) -> bool:
        """Add a handler instance; returns False when it is of an unknown kind."""
        if isinstance(handler, SlashCommand):
            family: List = self.commands
        elif isinstance(handler, ContextInteraction):
            family = self.interactions
        else:
            self._record_error(repr(handler), "not a SlashCommand or ContextInteraction")
            return False

        if any(existing.default_name.lower() == handler.default_name.lower() for existing in family):
            logger.warning(
                "[REGISTRY] Handler name '%s' is already registered; the first registration wins at dispatch.",
                handler.default_name,
            )
        family.append(handler)
        return True

    # --------------------------
    # Lookup
    # --------------------------
    @property
    def handlers(self) -> List[BaseHandler]:
        return [*self.commands, *self.interactions]

    def get_commands(self) -> List[SlashCommand]:
        return self.commands

    def get_interactions(self) -> List[ContextInteraction]:
        return self.interactions

    def find(self, name: str, surface: InteractionSurface) -> Optional[BaseHandler]:
        """Return the first handler of ``surface``'s family whose default name matches ``name``, ignoring case."""
        family: List = self.interactions if surface.is_context else self.commands
        wanted = name.lower()
        return next((handler for handler in family if handler.default_name.lower() == wanted), None)

    # --------------------------
    # Publication
    # --------------------------
    def _bundle_map(self, handler: BaseHandler, key: str, default: str) -> Dict[DiscordLocale, str]:
        """Translate ``key`` from the handler's command bundle for every locale.

        The default locale is always ``default``. Locales without a translation,
        and lookups that fell back to the key itself, also get ``default``.
        """
        bundle_name = f"{COMMAND_BUNDLE_PREFIX}.{handler.default_name}"
        translated = set(self.language.get_available_locales(bundle_name))
        generated = self.language.generate_language_map(bundle_name, key)
        return {
            locale: value if locale in translated and locale is not DEFAULT_LOCALE and value != key else default
            for locale, value in generated.items()
        }

    def localized_names(self, handler: BaseHandler) -> Dict[DiscordLocale, str]:
        """Return the handler's names per locale without changing the handler."""
        if not handler.multilingual:
            return dict(handler.names)
        return self._bundle_map(handler, COMMAND_NAME_KEY, handler.default_name)

    def localized_descriptions(self, handler: BaseHandler) -> Dict[DiscordLocale, str]:
        """Return the handler's descriptions per locale; context interactions only have their own."""
        if not handler.multilingual or not isinstance(handler, SlashCommand):
            return dict(handler.descriptions)
        return self._bundle_map(handler, COMMAND_DESCRIPTION_KEY, handler.default_description)

    def build_metadata(self, handler: BaseHandler) -> CommandMetadata:
        """Build the outward metadata record for one handler."""
        metadata = CommandMetadata(
            type=handler.surface.command_type,
            name=handler.default_name,
            default_member_permissions=handler.default_member_permissions,
            guild_only=handler.guild_only,
            nsfw=handler.nsfw,
        )
        names = self.localized_names(handler)
        if len(names) > 1:
            metadata.name_localizations = names

        if isinstance(handler, SlashCommand):
            metadata.description = handler.default_description
            descriptions = self.localized_descriptions(handler)
            if len(descriptions) > 1:
                metadata.description_localizations = descriptions
            metadata.options = [*handler.options, *handler.subcommands, *handler.subcommand_groups]
        return metadata

    def publish(self) -> Dict[str, List[CommandMetadata]]:
        """Rebuild the global and home-guild metadata partitions.

        Both partitions are rebuilt from scratch, so calling this more than once
        never duplicates entries.

        Returns
        -------
        dict
            ``{"global": [...], "home_guild": [...]}``
        """
        self.global_metadata = []
        self.home_guild_metadata = []

        for handler in self.handlers:
            try:
                metadata = self.build_metadata(handler)
            except Exception as exc:
                logger.error("[REGISTRY] Failed to build metadata for '%s': %s", handler.default_name, exc)
                continue

            if handler.home_guild_only:
                self.home_guild_metadata.append(metadata)
            else:
                self.global_metadata.append(metadata)
            logger.info("[REGISTRY] Registered %s: %s", handler.surface, handler.default_name)

        return {"global": self.global_metadata, "home_guild": self.home_guild_metadata}
