# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Structural checks run around parsing.

Pre-checks walk the whole tree before any value is resolved or any token is
consumed:

- `pre_check_subcommands`: sibling subcommands must not share a name or alias.
- `pre_check_options`: within one command, option names and short names are
  unique; environment keys are unique along every root-to-leaf chain, so a
  subcommand cannot silently shadow an ancestor's variable.

The post-check runs after parsing, only over commands that were invoked:

- `post_check_options`: every option of an invoked command has a value. An
  option without default, environment value or matching token is required.

Every check stops at the first failure and names the command path in the error.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from treecli.exceptions import (
    DuplicateOptionNameError,
    DuplicateSubCommandError,
    InvalidOptionTypeError,
    OptionRequiredError,
    TreeCliError,
)
from treecli.logger import logger, trace
from treecli.option import is_option

if TYPE_CHECKING:
    from treecli.command import Command


def _check_duplicate_subcommands(command: Command, log: logging.Logger) -> None:
    names: set[str] = set()
    for subcommand in command.subcommands:
        trace(log, "pre_check_subcommands: %s", subcommand.name)
        for name in (subcommand.name, *subcommand.aliases):
            if not name:
                continue
            if name in names:
                raise DuplicateSubCommandError(f"sub command: {name}")
            names.add(name)

    for subcommand in command.subcommands:
        try:
            _check_duplicate_subcommands(subcommand, log)
        except TreeCliError as error:
            raise error.with_context(subcommand.name)


def pre_check_subcommands(command: Command, log: logging.Logger = logger) -> None:
    """
    Reject sibling subcommands sharing a non-empty name or alias, tree-wide.

    Raises:
        DuplicateSubCommandError: Naming the parent path and the colliding name.
    """
    try:
        _check_duplicate_subcommands(command, log)
    except TreeCliError as error:
        raise error.with_context(command.name)


def _check_duplicate_options(
    command: Command, environments: set[str], log: logging.Logger
) -> None:
    names: set[str] = set()
    shorts: set[str] = set()

    for option in command.options:
        if not is_option(option):
            raise InvalidOptionTypeError(getattr(option, "name", "") or repr(option))
        if option.name:
            trace(log, "pre_check_options: %s: option: %s", command.name, option.name)
            if option.name in names:
                raise DuplicateOptionNameError(f"option: {option.long_flag}")
            names.add(option.name)

        if option.short:
            if option.short in shorts:
                raise DuplicateOptionNameError(f"short option: {option.short_flag}")
            shorts.add(option.short)

        if option.environment:
            if option.environment in environments:
                raise DuplicateOptionNameError(f"environment: {option.environment}")
            environments.add(option.environment)

    for subcommand in command.subcommands:
        try:
            _check_duplicate_options(subcommand, set(environments), log)
        except TreeCliError as error:
            raise error.with_context(subcommand.name)


def pre_check_options(command: Command, log: logging.Logger = logger) -> None:
    """
    Reject duplicate option names, short names and environment keys.

    Raises:
        DuplicateOptionNameError: Naming the command path and the colliding key.
    """
    try:
        _check_duplicate_options(command, set(), log)
    except TreeCliError as error:
        raise error.with_context(command.name)


def _check_required_options(command: Command, log: logging.Logger) -> None:
    for option in command.options:
        trace(log, "post_check_options: %s: option: %s", command.name, option.name)
        if not option.has_value():
            raise OptionRequiredError(f"option: {option.long_flag or option.short_flag}")

    for subcommand in command.subcommands:
        if not subcommand.called_commands:
            continue
        try:
            _check_required_options(subcommand, log)
        except TreeCliError as error:
            raise error.with_context(subcommand.name)


def post_check_options(command: Command, log: logging.Logger = logger) -> None:
    """
    Require a value for every option of every invoked command.

    Raises:
        OptionRequiredError: Naming the command path and the option flag.
    """
    if not command.called_commands:
        return
    try:
        _check_required_options(command, log)
    except TreeCliError as error:
        raise error.with_context(command.name)
