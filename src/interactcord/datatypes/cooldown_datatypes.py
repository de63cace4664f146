"""
Cooldown value types.

A :class:`Cooldown` is attached to a handler once and never changes. The live
per-target windows it produces are held by
:class:`interactcord.cooldown.cooldown_engine.CooldownEngine`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CooldownScope(Enum):
    """Identity axis a cooldown window is keyed on."""

    USER = "user"
    CHANNEL = "channel"
    GUILD = "guild"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: str | None) -> "CooldownScope":
        normalized = (value or "").strip().lower()
        for scope in cls:
            if scope.value == normalized:
                return scope
        return cls.UNKNOWN


class CooldownTime(Enum):
    """Unit of a cooldown duration, valued in milliseconds per unit."""

    SECONDS = 1000
    MINUTES = 60_000
    HOURS = 3_600_000
    DAYS = 86_400_000
    UNKNOWN = 0

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def milliseconds(self) -> int:
        return self.value

    @classmethod
    def from_str(cls, value: str | None) -> "CooldownTime":
        normalized = (value or "").strip().upper()
        return cls.__members__.get(normalized, cls.UNKNOWN)


@dataclass(frozen=True, slots=True)
class Cooldown:
    """Rate limit attached to a handler.

    Attributes:
        time: Length of the cooldown in ``time_type`` units.
        time_type: Unit of ``time``; UNKNOWN never limits.
        scope: Whether the window is tracked per user, channel or guild.
    """

    time: int
    time_type: CooldownTime
    scope: CooldownScope

    @classmethod
    def from_strings(cls, time: int, time_type: str, scope: str) -> "Cooldown":
        """Build a cooldown from config-style strings such as ``(5, "seconds", "user")``."""
        return cls(int(time), CooldownTime.from_str(time_type), CooldownScope.from_str(scope))

    @property
    def duration_ms(self) -> int:
        return self.time * self.time_type.milliseconds

    @property
    def time_string(self) -> str:
        return f"{self.time} {self.time_type}"

    @property
    def scope_string(self) -> str:
        return str(self.scope)

    def validation_errors(self) -> list[str]:
        """Return the reasons this cooldown would never limit anything, if any."""
        errors = []
        if self.time <= 0:
            errors.append(f"non-positive duration {self.time}")
        if self.time_type is CooldownTime.UNKNOWN:
            errors.append("unknown time unit")
        if self.scope is CooldownScope.UNKNOWN:
            errors.append("unknown scope")
        return errors
