"""Tests for console.py module."""
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from interactcord.datatypes.cooldown_datatypes import CooldownScope
from interactcord.handlers.registry import RegistrationError
from interactcord.ui import console


def make_bot(**overrides):
    registry = SimpleNamespace(
        commands=[],
        interactions=[],
        handlers=[],
        registration_errors=[RegistrationError("my_bot.commands.broken", "import failed: boom")],
    )
    bot = SimpleNamespace(
        is_closed=lambda: False,
        close=AsyncMock(),
        guilds=[SimpleNamespace(name="Home", id=1, member_count=3)],
        latency=0.05,
        handler_registry=registry,
        dispatcher=SimpleNamespace(pending=2),
        cooldowns=SimpleNamespace(
            snapshot=lambda: {CooldownScope.USER: 4, CooldownScope.CHANNEL: 0, CooldownScope.GUILD: 1}
        ),
    )
    for key, value in overrides.items():
        setattr(bot, key, value)
    return bot


def printed(mock_print):
    return [call.args[0] for call in mock_print.call_args_list]


@pytest.mark.asyncio
async def test_console_print_without_style():
    """Test console_print without style."""
    with patch("interactcord.ui.console.print_formatted_text") as mock_print:
        console.console_print("Test message")
        mock_print.assert_called_once_with("Test message")


@pytest.mark.asyncio
async def test_console_print_with_style():
    """Test console_print with style."""
    with patch("interactcord.ui.console.print_formatted_text") as mock_print:
        console.console_print("Test message", "ansigreen")
        assert mock_print.call_count == 1


def test_console_control_requests():
    control = console.ConsoleControl()
    assert not control.is_shutdown_requested()
    control.request_restart()
    control.request_shutdown()
    assert control.is_shutdown_requested()
    assert control.is_restart_requested()


def test_box_title_is_aligned():
    lines = console.box_title("Bot Status")
    assert len({len(line) for line in lines}) == 1
    assert "Bot Status" in lines[1]


@pytest.mark.asyncio
async def test_close_bot_instance_when_none():
    await console.close_bot_instance(None)
    await console.close_bot_instance(None, log_close=True)


@pytest.mark.asyncio
async def test_close_bot_instance_when_already_closed():
    bot = SimpleNamespace(is_closed=lambda: True, close=AsyncMock())
    await console.close_bot_instance(bot)
    bot.close.assert_not_awaited()


@pytest.mark.asyncio
async def test_close_bot_instance_with_exception():
    """Test close_bot_instance handles exceptions during close."""
    bot = SimpleNamespace(is_closed=lambda: False, close=AsyncMock(side_effect=RuntimeError("Close failed")))
    await console.close_bot_instance(bot, log_close=True)


@pytest.mark.asyncio
async def test_handle_console_command_empty():
    control = console.ConsoleControl()
    await console.handle_console_command("", control)
    await console.handle_console_command("   ", control)


@pytest.mark.asyncio
async def test_handle_console_command_unknown():
    control = console.ConsoleControl()
    with patch("interactcord.ui.console.console_print") as mock_print:
        await console.handle_console_command("dance", control)

    assert "Unknown command 'dance'" in printed(mock_print)[0]


@pytest.mark.asyncio
async def test_handle_console_command_quit():
    control = console.ConsoleControl()
    fake_bot = make_bot()
    control.set_bot(fake_bot)

    with patch("interactcord.ui.console.console_print"):
        await console.handle_console_command("quit", control)

    assert control.is_shutdown_requested()
    assert not control.is_restart_requested()
    fake_bot.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_handle_console_command_restart():
    control = console.ConsoleControl()
    fake_bot = make_bot()
    control.set_bot(fake_bot)

    with patch("interactcord.ui.console.console_print"):
        await console.handle_console_command("reboot", control)

    assert control.is_restart_requested()
    assert control.is_shutdown_requested()


@pytest.mark.asyncio
async def test_help_lists_every_command():
    control = console.ConsoleControl()
    with patch("interactcord.ui.console.console_print") as mock_print:
        await console.handle_console_command("?", control)

    listed = {line.split()[0] for line in printed(mock_print) if line.startswith("  ") and not line.startswith("    ")}
    assert listed == {command.name for command in console.COMMANDS}
    assert {"status", "handlers", "cooldowns", "publish", "restart", "shutdown"} <= listed


@pytest.mark.asyncio
async def test_status_reports_handlers_and_pending():
    control = console.ConsoleControl()
    control.set_bot(make_bot())

    with patch("interactcord.ui.console.console_print") as mock_print:
        await console.handle_console_command("status", control)

    output = "\n".join(printed(mock_print))
    assert "Registration errors: 1" in output
    assert "Running handlers: 2" in output
    assert "Latency:    50ms" in output


@pytest.mark.asyncio
async def test_status_without_bot():
    control = console.ConsoleControl()
    with patch("interactcord.ui.console.console_print") as mock_print:
        await console.handle_console_command("status", control)

    assert any("Not initialized" in line for line in printed(mock_print))


@pytest.mark.asyncio
async def test_handlers_lists_registration_errors():
    control = console.ConsoleControl()
    control.set_bot(make_bot())

    with patch("interactcord.ui.console.console_print") as mock_print:
        await console.handle_console_command("handlers", control)

    assert any("my_bot.commands.broken" in line for line in printed(mock_print))


@pytest.mark.asyncio
async def test_cooldowns_prints_snapshot():
    control = console.ConsoleControl()
    control.set_bot(make_bot())

    with patch("interactcord.ui.console.console_print") as mock_print:
        await console.handle_console_command("cd", control)

    output = printed(mock_print)
    assert "  user: 4 target(s)" in output
    assert "  guild: 1 target(s)" in output


@pytest.mark.asyncio
async def test_publish_uses_command_publisher():
    control = console.ConsoleControl()
    bot = make_bot()
    control.set_bot(bot)
    publisher = SimpleNamespace(publish=AsyncMock(return_value=True))

    with patch("interactcord.ui.console.CommandPublisher", return_value=publisher) as mock_publisher:
        with patch("interactcord.ui.console.console_print") as mock_print:
            await console.handle_console_command("publish", control)

    mock_publisher.assert_called_once_with(bot)
    publisher.publish.assert_awaited_once_with(bot.handler_registry)
    assert "Commands published." in printed(mock_print)


@pytest.mark.asyncio
async def test_command_errors_are_reported():
    control = console.ConsoleControl()
    control.set_bot(make_bot(cooldowns=SimpleNamespace()))

    with patch("interactcord.ui.console.console_print") as mock_print:
        await console.handle_console_command("cooldowns", control)

    assert any(line.startswith("Error executing command") for line in printed(mock_print))


@pytest.mark.asyncio
async def test_run_console_with_eof():
    """Test run_console handles EOFError."""
    control = console.ConsoleControl()
    fake_bot = make_bot()
    control.set_bot(fake_bot)

    async def fake_prompt():
        raise EOFError()

    fake_session = SimpleNamespace(prompt_async=fake_prompt)

    with patch("interactcord.ui.console.PromptSession", return_value=fake_session):
        with patch("interactcord.ui.console.console_print"):
            with patch("interactcord.ui.console.patch_stdout"):
                await console.run_console(control)

    assert control.is_shutdown_requested()
    fake_bot.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_run_console_with_keyboard_interrupt():
    control = console.ConsoleControl()

    async def fake_prompt():
        raise KeyboardInterrupt()

    fake_session = SimpleNamespace(prompt_async=fake_prompt)

    with patch("interactcord.ui.console.PromptSession", return_value=fake_session):
        with patch("interactcord.ui.console.console_print"):
            with patch("interactcord.ui.console.patch_stdout"):
                await console.run_console(control)

    assert control.is_shutdown_requested()


@pytest.mark.asyncio
async def test_run_console_with_generic_exception():
    """Test run_console keeps reading after an unexpected error."""
    control = console.ConsoleControl()

    call_count = [0]

    async def fake_prompt():
        call_count[0] += 1
        if call_count[0] == 1:
            raise ValueError("Test error")
        control.request_shutdown()
        return ""

    fake_session = SimpleNamespace(prompt_async=fake_prompt)

    with patch("interactcord.ui.console.PromptSession", return_value=fake_session):
        with patch("interactcord.ui.console.console_print"):
            with patch("interactcord.ui.console.patch_stdout"):
                await console.run_console(control)

    assert call_count[0] >= 2


@pytest.mark.asyncio
async def test_console_session_context_manager():
    control = console.ConsoleControl()

    with patch("interactcord.ui.console.run_console", new_callable=AsyncMock):
        async with console.console_session(control) as ctrl:
            assert ctrl is control

        assert control.is_shutdown_requested()


@pytest.mark.asyncio
async def test_handlers_and_cooldowns_without_bot():
    control = console.ConsoleControl()
    with patch("interactcord.ui.console.console_print") as mock_print:
        await console.handle_console_command("handlers", control)
        await console.handle_console_command("cooldowns", control)

    assert printed(mock_print) == ["Bot not initialized.", "Bot not initialized."]
