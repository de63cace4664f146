"""
Pytest configuration and fixtures for Interactcord tests.
"""

import sys
import textwrap
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

# Add src directory to path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from interactcord.datatypes.discord_datatypes import DiscordLocale  # noqa: E402
from interactcord.datatypes.interaction_datatypes import InteractionEvent, InteractionSurface  # noqa: E402
from interactcord.language.language_utils import LanguageBundles  # noqa: E402


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, milliseconds: int) -> None:
        self.now_ms += milliseconds


@pytest.fixture
def clock():
    return FakeClock()


def write_bundle(root: Path, bundle_path: str, locale: str, content: str) -> Path:
    path = root.joinpath(*bundle_path.split("/")) / f"{locale}.yml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


@pytest.fixture
def language_dir(tmp_path):
    """Language root with a global bot bundle and a two-locale 'ping' command bundle."""
    root = tmp_path / "languages"
    write_bundle(root, "bot/global", "en-US", """
        command:
          cooldown:
            response: "Command cooldown, try again {time}"
        interaction:
          cooldown:
            response: "Interaction cooldown, try again {time}"
          unsupported:
            response: "Unsupported here"
        blank:
          key: "   "
    """)
    write_bundle(root, "bot/global", "de", """
        command.cooldown.response: "Abklingzeit, versuche es {time} erneut"
    """)
    write_bundle(root, "commands/ping", "en-US", """
        command:
          name: ping
          description: Shows the ping of the bot
    """)
    write_bundle(root, "commands/ping", "de", """
        command:
          name: ping
          description: Zeigt den Ping des Bots an
    """)
    return root


@pytest.fixture
def bundles(language_dir):
    return LanguageBundles(language_dir)


@pytest.fixture
def make_event():
    """Factory for interaction events backed by a fake py-cord interaction."""

    def _make(
        name: str,
        surface: InteractionSurface = InteractionSurface.SLASH,
        user_id: str = "100",
        channel_id: str = "200",
        guild_id: str | None = "300",
        locale: DiscordLocale = DiscordLocale.ENGLISH_US,
        target_id: str | None = None,
        client=None,
    ) -> InteractionEvent:
        interaction = SimpleNamespace(
            response=SimpleNamespace(send_message=AsyncMock()),
            edit_original_response=AsyncMock(),
        )
        return InteractionEvent(
            name=name,
            user_id=user_id,
            channel_id=channel_id,
            guild_id=guild_id,
            locale=locale,
            surface=surface,
            target_id=target_id,
            interaction=interaction,
            client=client,
        )

    return _make
