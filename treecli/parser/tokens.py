# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Token grammar used by the recursive parser.

- `--name` / `-short`: option, value in the next token (bool options take none).
- `--name=value` / `-short=value`: option with an embedded value.
- `--`: break marker, every following token is positional.
- anything else: a subcommand name or a positional token.
"""
from __future__ import annotations

from treecli.option import LONG_OPTION_PREFIX, SHORT_OPTION_PREFIX, BaseOption

BREAK_ARG = "--"


def is_option_token(token: str) -> bool:
    return token.startswith(SHORT_OPTION_PREFIX)


def is_flag_token(option: BaseOption, token: str) -> bool:
    """`--name` or `-short`, matched exactly."""
    return token in (option.long_flag, option.short_flag) and token != ""


def is_flag_equal_token(option: BaseOption, token: str) -> bool:
    """`--name=...` or `-short=...`."""
    prefixes = tuple(f"{flag}=" for flag in (option.long_flag, option.short_flag) if flag)
    return bool(prefixes) and token.startswith(prefixes)


def extract_equal_value(token: str) -> str:
    """Return everything after the first `=`; later `=` are kept in the value."""
    return token.split("=", 1)[1]


__all__ = [
    "BREAK_ARG",
    "LONG_OPTION_PREFIX",
    "SHORT_OPTION_PREFIX",
    "extract_equal_value",
    "is_flag_equal_token",
    "is_flag_token",
    "is_option_token",
]
