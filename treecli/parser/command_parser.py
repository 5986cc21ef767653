# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements the recursive descent over a `Command` tree.

`parse_command_args()` consumes a flat token list for one command, left to right:

- `--` appends every remaining token to the residual list and stops.
- A token starting with `-` must match an option of the current command, either
  exactly (`--name`, `-s`, value in the next token) or with an embedded value
  (`--name=value`, `-s=value`). Options are tried in declared order and the first
  match wins. There is no abbreviation or fuzzy matching.
- A bare token naming a direct subcommand hands the rest of the tokens to that
  subcommand; the current command stops scanning and returns the subcommand's
  residual list.
- Any other token is residual (positional).

Option values written here override defaults and environment values loaded
earlier. The parse path is recorded in each invoked command's called commands.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

from treecli.exceptions import (
    InvalidOptionTypeError,
    InvalidOptionValueError,
    MissingOptionValueError,
    TreeCliError,
    UnknownOptionError,
)
from treecli.logger import logger, trace
from treecli.option import BaseOption, BoolOption, is_option
from treecli.parser.coerce import coerce_option_value
from treecli.parser.tokens import (
    BREAK_ARG,
    extract_equal_value,
    is_flag_equal_token,
    is_flag_token,
    is_option_token,
)

if TYPE_CHECKING:
    from treecli.command import Command


def _coerce(option: BaseOption, token: str, raw: str) -> Any:
    try:
        return coerce_option_value(option, raw)
    except ValueError as error:
        raise InvalidOptionValueError(token, str(error)) from error


def _consume_option(
    command: Command, args: Sequence[str], index: int, log: logging.Logger
) -> int:
    """Match `args[index]` against the options of `command`.

    Returns the index of the next token to scan.
    """
    token = args[index]
    for option in command.options:
        if not is_option(option):
            raise InvalidOptionTypeError(token)

        if is_flag_token(option, token):
            log.debug("%s: option: %s: %s", command.name, option.name, token)
            if isinstance(option, BoolOption):
                value: Any = True
                next_index = index + 1
            else:
                if index + 1 >= len(args):
                    raise MissingOptionValueError(token)
                value = _coerce(option, token, args[index + 1])
                next_index = index + 2
        elif is_flag_equal_token(option, token):
            log.debug("%s: option: %s: %s", command.name, option.name, token)
            value = _coerce(option, token, extract_equal_value(token))
            next_index = index + 1
        else:
            continue

        option._set_value(value)
        trace(log, "%s: parsed option: %s: %r", command.name, option.name, value)
        return next_index

    raise UnknownOptionError(token)


def parse_command_args(
    command: Command, args: Sequence[str], log: logging.Logger = logger
) -> list[str]:
    """
    Parse `args` for `command`, recursing into the invoked subcommand.

    Returns:
        list[str]: The residual tokens collected at the deepest invoked command.

    Raises:
        UnknownOptionError: An option token matched no option.
        MissingOptionValueError: A value-taking option was the last token.
        InvalidOptionValueError: A value could not be converted.
    """
    command._called_commands.append(command.name)
    command._remaining_args = []

    index = 0
    while index < len(args):
        token = args[index]

        if token == BREAK_ARG:
            command._remaining_args.extend(args[index + 1 :])
            break

        if is_option_token(token):
            index = _consume_option(command, args, index, log)
            continue

        subcommand = command.get_subcommand(token)
        if subcommand is not None:
            trace(log, "parse: subcommand: %s", subcommand.name)
            subcommand._called_commands.extend(command._called_commands)
            try:
                command._remaining_args = parse_command_args(
                    subcommand, args[index + 1 :], log
                )
            except TreeCliError as error:
                raise error.with_context(subcommand.name)
            return command._remaining_args

        command._remaining_args.append(token)
        index += 1

    return command._remaining_args
