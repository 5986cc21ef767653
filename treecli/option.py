# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the typed option declarations attached to a `Command`.

An option is a single named, typed, independently resolvable setting. Exactly four
variants exist and the set is closed: `BaseOption` refuses subclasses declared
outside this module, and every stage of the pipeline (validation, resolution,
parsing, rendering) dispatches over the four variants only.

Variants:
- StringOption: verbatim text.
- BoolOption: presence flag (`--verbose`) or explicit `--verbose=false`.
- IntOption: base-10 integer.
- FloatOption: floating point number.

Each option declares `name` (long form, `--name`), `short` (`-s`), `environment`
(an environment variable bound to the option), `description` and an optional
`default`. `default=None` means "no default"; `0`, `False` and `""` are real
defaults. The resolved value is written by the resolution pipeline and the
parser, in that order, so the last writer wins:

    declared default  <  environment variable  <  command-line token

Options can be declared as instances or, through the `Option` union, as plain
mappings carrying a `kind` key that selects the variant:

    Command(name="serve", options=[{"kind": "int", "name": "port", "default": 8080}])
"""
from __future__ import annotations

from typing import Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr

from treecli.exceptions import MissingDefaultError

LONG_OPTION_PREFIX = "--"
SHORT_OPTION_PREFIX = "-"


class BaseOption(BaseModel):
    """Common fields and accessors of the four option variants."""

    name: str = ""
    short: str = ""
    environment: str = ""
    description: str = ""

    fallback_description: ClassVar[str] = "value"

    _value: Any = PrivateAttr(default=None)

    model_config = ConfigDict(extra="forbid")

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(
                f"{cls.__name__}: options are limited to StringOption, BoolOption, "
                "IntOption and FloatOption"
            )

    @property
    def long_flag(self) -> str:
        return f"{LONG_OPTION_PREFIX}{self.name}" if self.name else ""

    @property
    def short_flag(self) -> str:
        return f"{SHORT_OPTION_PREFIX}{self.short}" if self.short else ""

    @property
    def value(self) -> Any:
        """The resolved value, or None while no source has populated it."""
        return self._value

    def get_description(self) -> str:
        return self.description or self.fallback_description

    def has_default(self) -> bool:
        return getattr(self, "default", None) is not None

    def get_default(self) -> Any:
        """Return the declared default.

        Raises:
            MissingDefaultError: If the option has no default.
        """
        if not self.has_default():
            raise MissingDefaultError(self.long_flag or self.short_flag or self.environment)
        return getattr(self, "default")

    def has_value(self) -> bool:
        return self._value is not None

    def matches(self, key: str) -> bool:
        """True if `key` equals the name, short name or environment key."""
        return bool(key) and key in (self.name, self.short, self.environment)

    def _set_value(self, value: Any) -> None:
        self._value = value

    def _reset(self) -> None:
        self._value = None

    def __str__(self) -> str:
        flags = ", ".join(flag for flag in (self.long_flag, self.short_flag) if flag)
        return f"{type(self).__name__}({flags or repr(self.environment)})"


class StringOption(BaseOption):
    """Option holding a string value."""

    kind: Literal["string"] = "string"
    default: str | None = None

    fallback_description: ClassVar[str] = "string value"


class BoolOption(BaseOption):
    """Option holding a boolean value.

    A bare `--flag` token sets the value to True without consuming the next token.
    """

    kind: Literal["bool"] = "bool"
    default: bool | None = None

    fallback_description: ClassVar[str] = "bool value"


class IntOption(BaseOption):
    """Option holding an integer value."""

    kind: Literal["int"] = "int"
    default: int | None = None

    fallback_description: ClassVar[str] = "int value"


class FloatOption(BaseOption):
    """Option holding a float value."""

    kind: Literal["float"] = "float"
    default: float | None = None

    fallback_description: ClassVar[str] = "float value"


OPTION_TYPES: tuple[type[BaseOption], ...] = (
    StringOption,
    BoolOption,
    IntOption,
    FloatOption,
)

Option = Union[StringOption, BoolOption, IntOption, FloatOption]


def is_option(obj: Any) -> bool:
    """True if `obj` is an instance of one of the four option variants."""
    return type(obj) in OPTION_TYPES
