"""Developer console that runs beside the bot.

Each line typed at the ``> `` prompt is matched against :data:`COMMANDS` by
name or alias. Commands read the live bot's handler registry, dispatcher and
cooldown engine; ``restart`` and ``shutdown`` close the bot and leave the
decision to restart to :mod:`interactcord.main`.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass

import discord
from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.patch_stdout import patch_stdout
from prompt_toolkit.shortcuts import PromptSession

from interactcord.bot.publisher import CommandPublisher
from interactcord.util.logger import get_logger

logger = get_logger("console")

HEADING_WIDTH = 45

ConsoleAction = Callable[["ConsoleControl", list[str]], Awaitable[None]]


def box_title(title: str) -> list[str]:
    """Return ``title`` centred in a three-line double-ruled frame."""
    inner = HEADING_WIDTH - 2
    return [
        f"╔{'═' * inner}╗",
        f"║{title.center(inner)}║",
        f"╚{'═' * inner}╝",
    ]


def console_print(message: str, style: str = "") -> None:
    """Print above the prompt; ``style`` is a prompt_toolkit style string such as ``ansired``."""
    print_formatted_text(FormattedText([(style, message)]) if style else message)


def print_heading(title: str, style: str = "ansiblue") -> None:
    for line in box_title(title):
        console_print(line, style)


@dataclass(frozen=True)
class Command:
    """A console command and the words that invoke it."""
    name: str
    action: ConsoleAction
    aliases: tuple[str, ...]
    description: str

    def matches(self, word: str) -> bool:
        return word == self.name or word in self.aliases


class ConsoleControl:
    """Shared state between the console, the bot and the restart loop in main."""

    def __init__(self) -> None:
        self.shutdown_event = asyncio.Event()
        self.restart_event = asyncio.Event()
        self.bot: discord.Bot | None = None

    def set_bot(self, bot: discord.Bot | None) -> None:
        self.bot = bot

    def request_shutdown(self) -> None:
        self.shutdown_event.set()

    def request_restart(self) -> None:
        self.restart_event.set()

    def is_shutdown_requested(self) -> bool:
        return self.shutdown_event.is_set()

    def is_restart_requested(self) -> bool:
        return self.restart_event.is_set()


async def close_bot_instance(bot: discord.Bot | None, *, log_close: bool = False) -> None:
    """Close ``bot`` unless it is missing or already closed."""
    if bot is None or bot.is_closed():
        return

    try:
        await bot.close()
        if log_close:
            logger.info("[CONSOLE] Bot connection closed.")
    except Exception as exc:  # pragma: no cover
        logger.exception("[CONSOLE] Error while closing the bot: %s", exc)


async def _end_session(control: ConsoleControl, *, restart: bool) -> None:
    if restart:
        control.request_restart()
    control.request_shutdown()
    await close_bot_instance(control.bot)


def _live_bot(control: ConsoleControl) -> discord.Bot | None:
    if control.bot is None:
        console_print("Bot not initialized.", "ansiyellow")
    return control.bot


# --------------------------
# Commands
# --------------------------
async def cmd_help(control: ConsoleControl, args: list[str]) -> None:
    print_heading("Console Commands", "ansigreen")
    for command in COMMANDS:
        aliases = f" ({', '.join(command.aliases)})" if command.aliases else ""
        console_print(f"  {command.name}{aliases}", "ansicyan")
        console_print(f"    {command.description}")
    console_print("")


async def cmd_status(control: ConsoleControl, args: list[str]) -> None:
    """Connection, handler counts and handlers still running."""
    print_heading("Bot Status")

    bot = control.bot
    if bot is None:
        console_print("  Bot:        🔴 Not initialized")
        console_print("")
        return

    console_print(f"  Bot:        {'🔴 Disconnected' if bot.is_closed() else '🟢 Connected'}")
    console_print(f"  Guilds:     {len(bot.guilds)}")
    console_print(f"  Latency:    {bot.latency * 1000:.0f}ms")

    registry = bot.handler_registry
    console_print(f"  Commands:   {len(registry.commands)}")
    console_print(f"  Interactions: {len(registry.interactions)}")
    if registry.registration_errors:
        console_print(f"  Registration errors: {len(registry.registration_errors)}", "ansired")
    console_print(f"  Running handlers: {bot.dispatcher.pending}")
    console_print("")


async def cmd_handlers(control: ConsoleControl, args: list[str]) -> None:
    """One line per registered handler, then one per registration error."""
    bot = _live_bot(control)
    if bot is None:
        return

    registry = bot.handler_registry
    print_heading(f"Handlers ({len(registry.handlers)})")

    for handler in registry.handlers:
        flags = [
            label for label, enabled in (
                ("home guild", handler.home_guild_only),
                ("guild only", handler.guild_only),
                ("nsfw", handler.nsfw),
                ("multilingual", handler.multilingual),
            ) if enabled
        ]
        cooldown = f", cooldown {handler.cooldown.time_string}/{handler.cooldown.scope_string}" if handler.cooldown else ""
        console_print(f"  • [{handler.surface}] {handler.default_name}{cooldown} {', '.join(flags)}".rstrip())

    for error in registry.registration_errors:
        console_print(f"  ✗ {error.source}: {error.reason}", "ansired")
    console_print("")


async def cmd_cooldowns(control: ConsoleControl, args: list[str]) -> None:
    bot = _live_bot(control)
    if bot is None:
        return

    print_heading("Cooldown Windows")
    for scope, count in bot.cooldowns.snapshot().items():
        console_print(f"  {scope}: {count} target(s)")
    console_print("")


async def cmd_publish(control: ConsoleControl, args: list[str]) -> None:
    if control.bot is None or control.bot.is_closed():
        console_print("Bot not connected.", "ansiyellow")
        return

    if await CommandPublisher(control.bot).publish(control.bot.handler_registry):
        console_print("Commands published.", "ansigreen")
    else:
        console_print("Publishing failed; see the log for details.", "ansired")


async def cmd_restart(control: ConsoleControl, args: list[str]) -> None:
    console_print("Restarting: waiting for running handlers, then starting a fresh process.", "ansiyellow")
    await _end_session(control, restart=True)


async def cmd_shutdown(control: ConsoleControl, args: list[str]) -> None:
    console_print("Shutting down.", "ansiyellow")
    await _end_session(control, restart=False)


COMMANDS: list[Command] = [
    Command("help", cmd_help, ("h", "?"), "List console commands"),
    Command("status", cmd_status, ("stat", "info"), "Connection, handler counts and handlers still running"),
    Command("handlers", cmd_handlers, ("commands", "cmds"), "Registered commands and interactions with their flags"),
    Command("cooldowns", cmd_cooldowns, ("cd",), "Number of users, channels and guilds with a cooldown window"),
    Command("publish", cmd_publish, ("sync",), "Republish command metadata to Discord"),
    Command("restart", cmd_restart, ("reboot",), "Close the bot and start a new process"),
    Command("shutdown", cmd_shutdown, ("stop", "quit", "exit"), "Close the bot and exit"),
]


async def handle_console_command(line: str, control: ConsoleControl) -> None:
    """Run the command named by the first word of ``line``; the rest are its arguments."""
    words = line.split()
    if not words:
        return

    name, args = words[0].lower(), words[1:]
    command = next((candidate for candidate in COMMANDS if candidate.matches(name)), None)
    if command is None:
        console_print(f"Unknown command '{name}'. Type 'help' for available commands.", "ansired")
        return

    try:
        await command.action(control, args)
    except Exception as exc:
        logger.exception("[CONSOLE] Command '%s' failed: %s", name, exc)
        console_print(f"Error executing command: {exc}", "ansired")


async def run_console(control: ConsoleControl) -> None:
    """Read commands until a shutdown is requested or input ends."""
    session = PromptSession("> ")

    print_heading("Interactcord Console", "ansigreen")
    console_print("Type 'help' for available commands or 'exit' to quit.\n", "ansibrightblack")

    with patch_stdout():
        while not control.is_shutdown_requested():
            try:
                line = await session.prompt_async()
                await handle_console_command(line, control)
            except (EOFError, KeyboardInterrupt):
                console_print("\nShutdown requested by user.", "ansiyellow")
                await _end_session(control, restart=False)
                break
            except Exception as exc:  # pragma: no cover
                logger.exception("[CONSOLE] Input loop error: %s", exc)
                console_print(f"Error: {exc}", "ansired")


@asynccontextmanager
async def console_session(control: ConsoleControl) -> AsyncIterator[ConsoleControl]:
    """Run :func:`run_console` as a task for the duration of the ``async with`` block."""
    console_task = asyncio.create_task(run_console(control))
    try:
        yield control
    finally:
        control.request_shutdown()
        console_task.cancel()
        try:
            await console_task
        except asyncio.CancelledError:
            pass
