"""
Treecli CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command import Command
from .context import current_command
from .exceptions import (
    CommandFuncNotSetError,
    CommandNotSetError,
    CommandRunError,
    ConfigError,
    DuplicateOptionNameError,
    DuplicateSubCommandError,
    InvalidOptionTypeError,
    InvalidOptionValueError,
    MissingDefaultError,
    MissingOptionValueError,
    OptionRequiredError,
    TreeCliError,
    UnknownOptionError,
)
from .help import HELP_OPTION_NAME
from .logger import configure_diagnostics, logger
from .option import BoolOption, FloatOption, IntOption, Option, StringOption
from .signals import HelpSignal, is_help

configure_diagnostics(logger)

__version__ = "0.1.0"

__all__ = [
    "Command",
    "current_command",
    "StringOption",
    "BoolOption",
    "IntOption",
    "FloatOption",
    "Option",
    "HELP_OPTION_NAME",
    "HelpSignal",
    "is_help",
    "TreeCliError",
    "DuplicateOptionNameError",
    "DuplicateSubCommandError",
    "MissingOptionValueError",
    "UnknownOptionError",
    "InvalidOptionTypeError",
    "InvalidOptionValueError",
    "OptionRequiredError",
    "MissingDefaultError",
    "CommandFuncNotSetError",
    "CommandNotSetError",
    "CommandRunError",
    "ConfigError",
]
