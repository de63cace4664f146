"""
Localized string lookup backed by YAML language bundles.

A bundle is addressed by a dotted name such as ``languages.bot.global`` and a
locale. The dotted name maps to a directory below the language root (the leading
``languages`` segment is the root itself) holding one ``<locale>.yml`` file per
translation, e.g. ``bot/global/de.yml``. Nested YAML mappings are flattened into
dotted keys, so ``command: {cooldown: {response: ...}}`` and a literal
``command.cooldown.response`` key are equivalent.

Lookups never raise: a missing bundle, a missing key or a blank value all fall
back to returning the key itself.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from interactcord.configuration.app_configuration import app_config
from interactcord.datatypes.discord_datatypes import DEFAULT_LOCALE, DiscordLocale
from interactcord.util.logger import get_logger

logger = get_logger("language_utils")

BUNDLE_ROOT_SEGMENT = "languages"
COMMAND_BUNDLE_PREFIX = "languages.commands"
COMMAND_NAME_KEY = "command.name"
COMMAND_DESCRIPTION_KEY = "command.description"

LocaleLike = Union[DiscordLocale, str, None]


def _flatten(mapping: Dict[Any, Any], prefix: str = "") -> Dict[str, str]:
    flat: Dict[str, str] = {}
    for key, value in mapping.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{full_key}."))
        elif value is not None:
            flat[full_key] = str(value)
    return flat


class LanguageBundles:
    """Cached access to the YAML language bundles below one directory.

    Bundles are cached per (bundle name, locale) for the lifetime of the
    instance, including misses; bundle files are static deploy-time assets.
    """

    def __init__(self, language_dir: Path) -> None:
        self.language_dir = Path(language_dir)
        self._cache: Dict[Tuple[str, DiscordLocale], Optional[Dict[str, str]]] = {}
        self._cache_lock = threading.Lock()

    # --------------------------
    # Bundle loading
    # --------------------------
    def bundle_path(self, bundle_name: str, locale: DiscordLocale) -> Path:
        """Return the file that holds ``bundle_name`` translated to ``locale``."""
        segments = [segment for segment in bundle_name.split(".") if segment]
        if segments and segments[0] == BUNDLE_ROOT_SEGMENT:
            segments = segments[1:]
        return self.language_dir.joinpath(*segments) / f"{locale.value}.yml"

    def _load_bundle(self, bundle_name: str, locale: DiscordLocale) -> Optional[Dict[str, str]]:
        path = self.bundle_path(bundle_name, locale)
        if not path.is_file():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            logger.error("[LANGUAGE] Failed to load bundle %s (%s): %s", bundle_name, locale, exc)
            return None
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.error("[LANGUAGE] Bundle %s (%s) is not a mapping; ignoring it.", bundle_name, locale)
            return None
        return _flatten(data)

    def get_bundle(self, bundle_name: str, locale: LocaleLike) -> Optional[Dict[str, str]]:
        """Return the cached bundle for (bundle_name, locale), or None when it does not exist."""
        resolved = DiscordLocale.from_str(locale)
        cache_key = (bundle_name, resolved)
        with self._cache_lock:
            if cache_key in self._cache:
                return self._cache[cache_key]
        bundle = None if resolved is DiscordLocale.UNKNOWN else self._load_bundle(bundle_name, resolved)
        with self._cache_lock:
            return self._cache.setdefault(cache_key, bundle)

    # --------------------------
    # Lookups
    # --------------------------
    def get_language_string(self, bundle_name: str, key: str, locale: LocaleLike) -> str:
        """Return the translation of ``key``, or ``key`` itself when it has none."""
        bundle = self.get_bundle(bundle_name, locale)
        if not bundle:
            return key
        value = bundle.get(key)
        if value is None or not value.strip():
            return key
        return value

    def get_language_string_or_default(self, bundle_name: str, key: str, locale: LocaleLike) -> str:
        """Like :meth:`get_language_string`, retrying the default locale before giving up on ``key``."""
        value = self.get_language_string(bundle_name, key, locale)
        if value == key and DiscordLocale.from_str(locale) is not DEFAULT_LOCALE:
            value = self.get_language_string(bundle_name, key, DEFAULT_LOCALE)
        return value

    def format_language_string(self, bundle_name: str, key: str, locale: LocaleLike, **values: Any) -> str:
        """Look up a string with default-locale fallback and fill its ``{placeholders}``."""
        template = self.get_language_string_or_default(bundle_name, key, locale)
        try:
            return template.format(**values)
        except (KeyError, IndexError, ValueError) as exc:
            logger.warning("[LANGUAGE] Could not format %s/%s (%s): %s", bundle_name, key, locale, exc)
            return template

    def get_available_locales(self, bundle_name: str) -> List[DiscordLocale]:
        """Return every platform locale for which ``bundle_name`` resolves."""
        return [locale for locale in DiscordLocale.known() if self.get_bundle(bundle_name, locale) is not None]

    # --------------------------
    # Locale maps for publication
    # --------------------------
    def generate_language_map(self, bundle_name: str, key: str) -> Dict[DiscordLocale, str]:
        """Return ``key`` translated for every platform locale.

        Locales without their own bundle get the default-locale value.
        """
        language_map = {
            locale: self.get_language_string(bundle_name, key, locale)
            for locale in self.get_available_locales(bundle_name)
        }
        default_value = self.get_language_string(bundle_name, key, DEFAULT_LOCALE)
        for locale in DiscordLocale.known():
            language_map.setdefault(locale, default_value)
        return language_map

    def generate_command_name_map(self, command_default_name: str) -> Dict[DiscordLocale, str]:
        return self.generate_language_map(f"{COMMAND_BUNDLE_PREFIX}.{command_default_name}", COMMAND_NAME_KEY)

    def generate_command_description_map(self, command_default_name: str) -> Dict[DiscordLocale, str]:
        return self.generate_language_map(f"{COMMAND_BUNDLE_PREFIX}.{command_default_name}", COMMAND_DESCRIPTION_KEY)


# Shared bundle cache for the configured language directory
language_bundles = LanguageBundles(app_config.language_dir)
