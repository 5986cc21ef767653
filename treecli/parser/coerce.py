# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities for treecli option parsing.

Command-line tokens and environment variables are always strings. This module
converts them to the declared type of an option using strict rules: no
whitespace trimming, no "yes/no" booleans, no underscores in numbers. The same
converters are used for both sources so `PORT=7000` and `--port=7000` behave
identically.

Functions:
- coerce_bool: Strict boolean parsing.
- coerce_int: Base-10 integer parsing.
- coerce_float: Floating point parsing.
- coerce_option_value: Dispatch over the four option variants.
"""
from __future__ import annotations

import re
from typing import Any

from treecli.exceptions import InvalidOptionTypeError
from treecli.option import BoolOption, FloatOption, IntOption, StringOption

TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts `1, t, T, TRUE, true, True` and `0, f, F, FALSE, false, False`.

    Raises:
        ValueError: For any other input, including the empty string.
    """
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"invalid syntax for bool: {value!r}")


def coerce_int(value: str) -> int:
    """
    Convert a base-10 string to an int in the signed 64-bit range.

    Raises:
        ValueError: If `value` is not an optionally signed run of digits, or the
            number does not fit in 64 bits.
    """
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid syntax for int: {value!r}")
    number = int(value, 10)
    if not INT_MIN <= number <= INT_MAX:
        raise ValueError(f"value out of range for int: {value!r}")
    return number


def coerce_float(value: str) -> float:
    """
    Convert a decimal or exponent-notation string to a float.

    Raises:
        ValueError: If `value` is not a float literal.
    """
    if not _FLOAT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid syntax for float: {value!r}")
    return float(value)


def coerce_option_value(option: Any, value: str) -> Any:
    """
    Convert `value` according to the variant of `option`.

    Raises:
        ValueError: If the conversion fails.
        InvalidOptionTypeError: If `option` is not one of the four option variants.
    """
    if isinstance(option, StringOption):
        return value
    elif isinstance(option, BoolOption):
        return coerce_bool(value)
    elif isinstance(option, IntOption):
        return coerce_int(value)
    elif isinstance(option, FloatOption):
        return coerce_float(value)
    raise InvalidOptionTypeError(getattr(option, "name", "") or type(option).__name__)
