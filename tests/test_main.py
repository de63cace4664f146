import asyncio
from contextlib import asynccontextmanager
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from interactcord import main


class FakeBot:
    def __init__(self) -> None:
        self._closed = False
        self.close_calls = 0
        self.handler_registry = SimpleNamespace(commands=[1, 2], interactions=[3], registration_errors=[])
        self.dispatcher = SimpleNamespace(drain=AsyncMock())

    def is_closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        self._closed = True
        self.close_calls += 1


@asynccontextmanager
async def fake_console_session(control):
    yield control


@pytest.fixture
def patched_main(monkeypatch):
    bot = FakeBot()
    monkeypatch.setattr(main, "load_environment", lambda: "token")
    monkeypatch.setattr(main, "create_bot", lambda: bot)
    monkeypatch.setattr(main, "console_session", fake_console_session)
    return bot


@pytest.mark.asyncio
async def test_async_main_successful_shutdown(patched_main, monkeypatch):
    start_bot_mock = AsyncMock(side_effect=asyncio.CancelledError())
    monkeypatch.setattr(main, "start_bot", start_bot_mock)

    result = await main.async_main()

    assert result == 0
    start_bot_mock.assert_awaited_once_with(patched_main, "token")
    patched_main.dispatcher.drain.assert_awaited_once()
    assert patched_main.close_calls == 1


@pytest.mark.asyncio
async def test_async_main_runtime_error_returns_one(patched_main, monkeypatch):
    monkeypatch.setattr(main, "start_bot", AsyncMock(side_effect=RuntimeError("gateway down")))

    assert await main.async_main() == 1
    assert patched_main.is_closed()


@pytest.mark.asyncio
async def test_async_main_restart_requested(patched_main, monkeypatch):
    original_session = main.run_bot_session

    async def run_and_restart(bot, token, control):
        control.request_restart()
        return await original_session(bot, token, control)

    monkeypatch.setattr(main, "start_bot", AsyncMock())
    monkeypatch.setattr(main, "run_bot_session", run_and_restart)

    assert await main.async_main() == main.RESTART_EXIT_CODE


@pytest.mark.asyncio
async def test_async_main_handles_bot_creation_failure(monkeypatch):
    monkeypatch.setattr(main, "load_environment", lambda: "token")

    def failing_create_bot():
        raise RuntimeError("no handlers")

    monkeypatch.setattr(main, "create_bot", failing_create_bot)

    assert await main.async_main() == 1


@pytest.mark.asyncio
async def test_shutdown_runtime_without_bot():
    await main.shutdown_runtime(None)


def test_load_environment_requires_token(monkeypatch):
    monkeypatch.setattr(main, "load_dotenv", lambda **kwargs: None)
    monkeypatch.delenv("DISCORD_BOT_TOKEN", raising=False)

    with pytest.raises(SystemExit):
        main.load_environment()


def test_load_environment_returns_token(monkeypatch):
    monkeypatch.setattr(main, "load_dotenv", lambda **kwargs: None)
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "abc")

    assert main.load_environment() == "abc"


def test_resolve_base_dir_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("INTERACTCORD_HOME", str(tmp_path))
    assert main.resolve_base_dir() == tmp_path.resolve()


def test_main_returns_exit_code(monkeypatch):
    async def fake_async_main():
        return 3

    monkeypatch.setattr(main, "async_main", fake_async_main)
    assert main.main() == 3
