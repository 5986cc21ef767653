"""
Treecli CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .coerce import coerce_bool, coerce_float, coerce_int, coerce_option_value
from .command_parser import parse_command_args
from .tokens import BREAK_ARG

__all__ = [
    "BREAK_ARG",
    "coerce_bool",
    "coerce_float",
    "coerce_int",
    "coerce_option_value",
    "parse_command_args",
]
