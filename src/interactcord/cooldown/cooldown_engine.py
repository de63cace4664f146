"""
In-memory cooldown windows for handlers.

The engine keeps one mapping per scope: ``target id -> handler name -> expiry``
with expiries in epoch milliseconds. A window is created the first time a
target uses a handler, replaced once it has expired, and never removed; the
state grows with the number of distinct users, channels and guilds, not with
request volume. Everything is lost on restart.

Each scope's mapping has its own lock and the check-then-set sequence runs
entirely under it, so two concurrent invocations by the same target can never
both open a window.
"""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

import discord

from interactcord.datatypes.cooldown_datatypes import Cooldown, CooldownScope
from interactcord.datatypes.interaction_datatypes import InteractionEvent
from interactcord.handlers.base import BaseHandler
from interactcord.util.logger import get_logger

logger = get_logger("cooldown_engine")

TRACKED_SCOPES = (CooldownScope.USER, CooldownScope.CHANNEL, CooldownScope.GUILD)


def current_time_ms() -> int:
    return time.time_ns() // 1_000_000


class CooldownEngine:
    """Tracks cooldown windows per (scope, target id, handler name).

    Parameters
    ----------
    clock:
        Returns the current time in epoch milliseconds; replaced in tests to
        simulate time passing.
    """

    def __init__(self, clock: Callable[[], int] = current_time_ms) -> None:
        self._clock = clock
        self._windows: Dict[CooldownScope, Dict[str, Dict[str, int]]] = {scope: {} for scope in TRACKED_SCOPES}
        self._locks: Dict[CooldownScope, threading.Lock] = {scope: threading.Lock() for scope in TRACKED_SCOPES}

    def is_on_cooldown(
        self,
        scope: CooldownScope,
        target_id: str,
        handler_name: str,
        cooldown: Optional[Cooldown],
    ) -> bool:
        """Return True when ``target_id`` is inside an active window for ``handler_name``.

        When it is not, a new window of ``cooldown.duration_ms`` is opened
        starting now. Hits during an active window leave its expiry unchanged.
        A missing or zero-length cooldown, or an unknown scope, never limits.
        """
        if cooldown is None or cooldown.duration_ms <= 0:
            return False

        targets = self._windows.get(scope)
        if targets is None:
            return False

        with self._locks[scope]:
            now = self._clock()
            candidate_expiry = now + cooldown.duration_ms

            handler_windows = targets.get(target_id)
            if handler_windows is None:
                targets[target_id] = {handler_name: candidate_expiry}
                return False

            if handler_windows.get(handler_name, 0) < now:
                handler_windows[handler_name] = candidate_expiry
                return False

            return True

    def end_time(self, scope: CooldownScope, target_id: str, handler_name: str) -> int:
        """Return the stored expiry in epoch milliseconds, or 0 when there is none."""
        targets = self._windows.get(scope)
        if targets is None:
            return 0
        with self._locks[scope]:
            return targets.get(target_id, {}).get(handler_name, 0)

    def end_time_relative(self, scope: CooldownScope, target_id: str, handler_name: str) -> str:
        """Render the stored expiry as Discord relative-time markup (``<t:...:R>``)."""
        expiry = datetime.fromtimestamp(self.end_time(scope, target_id, handler_name) / 1000, tz=timezone.utc)
        return discord.utils.format_dt(expiry, "R")

    # --------------------------
    # Event helpers
    # --------------------------
    @staticmethod
    def target_for(scope: CooldownScope, event: InteractionEvent) -> Optional[str]:
        """Return the identifier ``scope`` is keyed on for this event, if it has one."""
        if scope is CooldownScope.USER:
            return event.user_id
        if scope is CooldownScope.CHANNEL:
            return event.channel_id
        if scope is CooldownScope.GUILD:
            return event.guild_id
        return None

    def check(self, handler: BaseHandler, event: InteractionEvent) -> bool:
        """Apply ``handler``'s cooldown to the invoker of ``event``.

        Guild-scoped cooldowns invoked outside a guild do not limit.
        """
        cooldown = handler.cooldown
        if cooldown is None:
            return False
        target_id = self.target_for(cooldown.scope, event)
        if not target_id:
            logger.debug(
                "[COOLDOWN] No %s target for '%s'; not limiting.", cooldown.scope_string, handler.default_name
            )
            return False
        return self.is_on_cooldown(cooldown.scope, target_id, handler.default_name, cooldown)

    def end_time_relative_for(self, handler: BaseHandler, event: InteractionEvent) -> str:
        cooldown = handler.cooldown
        if cooldown is None:
            return ""
        target_id = self.target_for(cooldown.scope, event) or ""
        return self.end_time_relative(cooldown.scope, target_id, handler.default_name)

    def snapshot(self) -> Dict[CooldownScope, int]:
        """Return how many targets each scope currently tracks."""
        counts = {}
        for scope in TRACKED_SCOPES:
            with self._locks[scope]:
                counts[scope] = len(self._windows[scope])
        return counts
