"""
Platform-level value types shared across Interactcord.

This module defines the locale codes Discord knows about and the snowflake
normalisation used wherever an identifier is used as a dictionary key.
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class DiscordLocale(Enum):
    """Every locale code the Discord client can report or accept for localizations."""

    INDONESIAN = "id"
    DANISH = "da"
    GERMAN = "de"
    ENGLISH_UK = "en-GB"
    ENGLISH_US = "en-US"
    SPANISH = "es-ES"
    SPANISH_LATAM = "es-419"
    FRENCH = "fr"
    CROATIAN = "hr"
    ITALIAN = "it"
    LITHUANIAN = "lt"
    HUNGARIAN = "hu"
    DUTCH = "nl"
    NORWEGIAN = "no"
    POLISH = "pl"
    PORTUGUESE_BRAZILIAN = "pt-BR"
    ROMANIAN_ROMANIA = "ro"
    FINNISH = "fi"
    SWEDISH = "sv-SE"
    VIETNAMESE = "vi"
    TURKISH = "tr"
    CZECH = "cs"
    GREEK = "el"
    BULGARIAN = "bg"
    RUSSIAN = "ru"
    UKRAINIAN = "uk"
    HINDI = "hi"
    THAI = "th"
    CHINESE_CHINA = "zh-CN"
    JAPANESE = "ja"
    CHINESE_TAIWAN = "zh-TW"
    KOREAN = "ko"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: Union[str, "DiscordLocale", None]) -> "DiscordLocale":
        """Map a locale code such as ``"de"`` or ``"en_us"`` to a member, or UNKNOWN."""
        if isinstance(value, DiscordLocale):
            return value
        if not value:
            return cls.UNKNOWN
        normalized = str(value).strip().replace("_", "-").lower()
        for locale in cls:
            if locale.value.lower() == normalized:
                return locale
        return cls.UNKNOWN

    @classmethod
    def known(cls) -> list["DiscordLocale"]:
        """Return every concrete locale, excluding UNKNOWN."""
        return [locale for locale in cls if locale is not cls.UNKNOWN]


DEFAULT_LOCALE = DiscordLocale.ENGLISH_US


def snowflake_str(value: Union[str, int, None]) -> str | None:
    """Normalise a snowflake given as int or str to its string form, keeping None."""
    if value is None:
        return None
    return str(value).strip()
