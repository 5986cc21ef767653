# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value resolution from declared defaults and environment variables.

Both loaders walk the entire tree, invoked or not, before the command line is
parsed. Running them in order gives the precedence

    default  <  environment  <  command line

because each stage overwrites the value written by the one before.
"""
from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Mapping

from treecli.exceptions import InvalidOptionTypeError, InvalidOptionValueError
from treecli.logger import logger
from treecli.option import is_option
from treecli.parser.coerce import coerce_option_value

if TYPE_CHECKING:
    from treecli.command import Command


def load_defaults(command: Command, log: logging.Logger = logger) -> None:
    """
    Seed every option that declares a default with that default.

    Raises:
        InvalidOptionTypeError: If an option is not one of the four variants.
    """
    for option in command.options:
        if not is_option(option):
            raise InvalidOptionTypeError(getattr(option, "name", "") or repr(option))
        if not option.has_default():
            continue
        log.debug("%s: %s=%r", command.name, option.name, option.default)
        option._set_value(option.default)

    for subcommand in command.subcommands:
        load_defaults(subcommand, log)


def load_environments(
    command: Command,
    environ: Mapping[str, str] | None = None,
    log: logging.Logger = logger,
) -> None:
    """
    Override option values from their bound environment variables.

    Unset and empty variables leave the current value untouched.

    Raises:
        InvalidOptionValueError: The variable cannot be converted; the subject is
            the variable name.
        InvalidOptionTypeError: If an option is not one of the four variants.
    """
    environ = os.environ if environ is None else environ

    for option in command.options:
        if not is_option(option):
            raise InvalidOptionTypeError(getattr(option, "name", "") or repr(option))
        if not option.environment:
            continue
        raw = environ.get(option.environment, "")
        if raw == "":
            continue
        try:
            value = coerce_option_value(option, raw)
        except ValueError as error:
            raise InvalidOptionValueError(option.environment, str(error)) from error
        log.debug("%s: %s=%r (env %s)", command.name, option.name, value, option.environment)
        option._set_value(value)

    for subcommand in command.subcommands:
        load_environments(subcommand, environ, log)
