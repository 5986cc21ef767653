# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by treecli.

Every error carries a `subject` (the flag, token, environment key or command path
the failure is about), a fixed `reason` per class, and a context list that grows
as the error propagates up through the command tree. `with_context()` prepends
a path element and returns the same instance, so callers can re-raise without
losing the concrete type:

    except TreeCliError as error:
        raise error.with_context(command.name)

`str(error)` joins context, subject and reason with ": ", e.g.
`failed to parse commands and options: main-cli: sub: --port: missing option value`.

Exception Hierarchy:
- TreeCliError
    ├── DuplicateOptionNameError
    ├── DuplicateSubCommandError
    ├── MissingOptionValueError
    ├── UnknownOptionError
    ├── InvalidOptionTypeError
    ├── InvalidOptionValueError
    ├── OptionRequiredError
    ├── MissingDefaultError
    ├── CommandFuncNotSetError
    ├── CommandNotSetError
    ├── CommandRunError
    └── ConfigError

`HelpSignal` is not an error and lives in `treecli.signals`.
"""
from __future__ import annotations


class TreeCliError(Exception):
    """Base exception for treecli."""

    reason: str = "treecli error"

    def __init__(self, subject: str = "", reason: str | None = None) -> None:
        self.subject: str = subject
        if reason is not None:
            self.reason = reason
        self.context: list[str] = []
        super().__init__(subject, self.reason)

    def with_context(self, prefix: str) -> TreeCliError:
        """Prepend `prefix` to the error path and return the same error."""
        if prefix:
            self.context.insert(0, prefix)
        return self

    def __str__(self) -> str:
        return ": ".join(part for part in [*self.context, self.subject, self.reason] if part)


class DuplicateOptionNameError(TreeCliError):
    """Raised when two options of a command share a name, short name or environment key."""

    reason = "duplicate option name"


class DuplicateSubCommandError(TreeCliError):
    """Raised when two sibling subcommands share a name or alias."""

    reason = "duplicate sub command"


class MissingOptionValueError(TreeCliError):
    """Raised when a value-taking option is the last token."""

    reason = "missing option value"


class UnknownOptionError(TreeCliError):
    """Raised for an option token no option matches, or a failed accessor lookup."""

    reason = "unknown option"


class InvalidOptionTypeError(TreeCliError):
    """Raised when an object outside the four option variants reaches the pipeline."""

    reason = "invalid option type"


class InvalidOptionValueError(TreeCliError):
    """Raised when a token or environment value cannot be converted to the option type.

    The reason is the message of the underlying conversion error.
    """


class OptionRequiredError(TreeCliError):
    """Raised when an option of an invoked command ends up without a value."""

    reason = "option required"


class MissingDefaultError(TreeCliError):
    """Raised when the default of an option without one is requested."""

    reason = "option has no default"


class CommandFuncNotSetError(TreeCliError):
    """Raised when the invoked command has no run function."""

    reason = "command func not set"


class CommandNotSetError(TreeCliError):
    """Raised by `current_command()` outside of `Command.run()`."""

    reason = "command not set in context"


class CommandRunError(TreeCliError):
    """Raised when a pre-run, run or post-run function fails."""


class ConfigError(TreeCliError):
    """Raised when a command tree configuration file is invalid."""

    reason = "invalid configuration"
