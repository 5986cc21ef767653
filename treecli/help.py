# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Help option handling and usage rendering.

Every command in a tree gets a reserved `--help` bool option (appended once, and
only when the command does not declare its own). After parsing, `check_help()`
walks the invoked commands; the first one whose help option resolved to True
renders its usage and raises `HelpSignal`.

Rendering defers to `Command.usage_func` when set. Otherwise the text is built by
`get_usage_text()`:

    Usage:
        main-cli sub [options]

    Description:
        Run the server.

    options:
        --port, -p (env: PORT, default: 8080)
            port to listen on
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from rich.console import Console

from treecli.console import err_console
from treecli.logger import logger, trace
from treecli.option import BoolOption
from treecli.signals import HelpSignal

if TYPE_CHECKING:
    from treecli.command import Command

HELP_OPTION_NAME = "help"

INDENT = "    "


def get_help_option(command: Command) -> BoolOption | None:
    """Return the `help` bool option of `command`, if declared."""
    return next(
        (
            option
            for option in command.options
            if isinstance(option, BoolOption) and option.name == HELP_OPTION_NAME
        ),
        None,
    )


def append_help_option(command: Command) -> None:
    """Add `--help` to `command` and all its descendants, once."""
    if get_help_option(command) is None:
        command.options.append(
            BoolOption(name=HELP_OPTION_NAME, description="show usage", default=False)
        )
    for subcommand in command.subcommands:
        append_help_option(subcommand)


def check_help(command: Command, log: logging.Logger = logger) -> None:
    """
    Render usage and raise `HelpSignal` if an invoked command requested help.

    Raises:
        HelpSignal: After the usage of the requesting command has been shown.
    """
    trace(log, "check_help: %s", command.name)
    if not command.called_commands:
        return
    help_option = get_help_option(command)
    if help_option is not None and help_option.value is True:
        log.debug("%s: help requested", command.name)
        command.show_usage()
        raise HelpSignal(command=" ".join(command.called_commands))
    for subcommand in command.subcommands:
        check_help(subcommand, log)


def format_default(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _option_line(option: Any) -> str:
    flags = ", ".join(flag for flag in (option.long_flag, option.short_flag) if flag)

    annotations = []
    if option.environment:
        annotations.append(f"env: {option.environment}")
    if option.has_default():
        annotations.append(f"default: {format_default(option.get_default())}")
    elif not option.environment:
        annotations.append("required")

    if annotations:
        return f"{flags} ({', '.join(annotations)})"
    return flags


def get_usage_text(command: Command) -> str:
    """Build the default usage text for `command`."""
    lines = ["Usage:"]
    if command.usage:
        lines.append(INDENT + command.usage)
    else:
        path = " ".join(command.called_commands) or command.name
        if command.options:
            path += " [options]"
        if command.subcommands:
            path += " <subcommand>"
        lines.append(INDENT + path)
    lines.append("")

    lines.append("Description:")
    lines.append(INDENT + command.get_description())

    if command.subcommands:
        lines.append("")
        lines.append("sub commands:")
        for subcommand in command.subcommands:
            lines.append(f"{INDENT}{subcommand.name}: {subcommand.get_description()}")

    if command.options:
        lines.append("")
        lines.append("options:")
        for option in command.options:
            lines.append(INDENT + _option_line(option))
            lines.append(INDENT + INDENT + option.get_description())

    return "\n".join(lines) + "\n"


def render_usage(command: Command, console: Console | None = None) -> None:
    """Print the default usage text of `command` as plain text."""
    console = console or err_console
    console.print(
        get_usage_text(command),
        markup=False,
        highlight=False,
        soft_wrap=True,
        end="",
    )
