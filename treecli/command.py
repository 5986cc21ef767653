# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the Command class, a node of a treecli command tree.

A command owns typed options and child commands. The tree is declared once and
then resolved against the process arguments by `Command.parse()`, which runs the
full pipeline:

1. reset transient state (called commands, residual args, option values)
2. append the reserved `--help` option to every command
3. pre-check subcommands and options for duplicates
4. load declared defaults, then environment variables
5. parse the tokens, recursing into the invoked subcommand
6. render usage and raise `HelpSignal` if help was requested
7. post-check that every option of an invoked command has a value

`Command.run()` parses and then dispatches to the deepest invoked command's run
function. Typed accessors (`get_option_string()` and friends) read resolved
values back, the deepest invoked command winning.

Example:
    root = Command(
        name="main-cli",
        options=[BoolOption(name="verbose", environment="VERBOSE", default=False)],
        subcommands=[
            Command(
                name="sub",
                options=[IntOption(name="port", environment="PORT", default=8080)],
                run_func=serve,
            )
        ],
    )
    await root.run(["main-cli", "--verbose", "sub", "--port=9090"])

The tree is mutated in place during a parse. Parse calls sharing one tree must
not run concurrently.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Any, Awaitable, Callable, Iterator, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from treecli.context import ExecutionContext, current_command_var
from treecli.exceptions import (
    CommandFuncNotSetError,
    CommandRunError,
    TreeCliError,
    UnknownOptionError,
)
from treecli.help import append_help_option, check_help, render_usage
from treecli.logger import logger as default_logger
from treecli.option import (
    BaseOption,
    BoolOption,
    FloatOption,
    IntOption,
    Option,
    StringOption,
    is_option,
)
from treecli.parser.command_parser import parse_command_args
from treecli.resolution import load_defaults, load_environments
from treecli.utils import ensure_async
from treecli.validation import (
    post_check_options,
    pre_check_options,
    pre_check_subcommands,
)

RunFunc = Callable[..., Any] | Callable[..., Awaitable[Any]]


async def _call_hook(context: ExecutionContext, hook_name: str) -> Any:
    hook = getattr(context.command, hook_name)
    if hook is None:
        return None
    try:
        return await ensure_async(hook)(context.command, list(context.args))
    except Exception as error:
        context.exception = error
        raise CommandRunError(context.name, f"{hook_name}: {error}") from error


class Command(BaseModel):
    """
    A named node of the command tree.

    Attributes:
        name (str): Name used to invoke the command.
        description (str): Shown in usage text.
        aliases (list[str]): Alternate names accepted in place of `name`.
        usage (str): Custom usage line replacing the generated one.
        usage_func (Callable[[Command], None] | None): Custom usage renderer.
        options (list[Option]): Typed options, in matching order.
        subcommands (list[Command]): Child commands, owned exclusively.
        pre_run_func (RunFunc | None): Called before `run_func`.
        run_func (RunFunc | None): Called by `run()` with `(command, remaining_args)`.
        post_run_func (RunFunc | None): Called after `run_func` succeeds.
    """

    name: str
    description: str = ""
    aliases: list[str] = Field(default_factory=list)
    usage: str = ""
    usage_func: Callable[..., None] | None = None
    options: list[Option] = Field(default_factory=list)
    subcommands: list[Command] = Field(default_factory=list)
    pre_run_func: RunFunc | None = None
    run_func: RunFunc | None = None
    post_run_func: RunFunc | None = None

    _called_commands: list[str] = PrivateAttr(default_factory=list)
    _remaining_args: list[str] = PrivateAttr(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def called_commands(self) -> list[str]:
        """Invocation path of this command in the last parse; empty if not reached."""
        return list(self._called_commands)

    @property
    def remaining_args(self) -> list[str]:
        """Residual tokens collected during the last parse."""
        return list(self._remaining_args)

    def is_command(self, name: str) -> bool:
        """True if `name` is this command's name or one of its aliases."""
        if not name:
            return False
        return name == self.name or name in self.aliases

    def get_subcommand(self, name: str) -> Command | None:
        """Return the direct subcommand called `name` (or aliased so)."""
        return next((sub for sub in self.subcommands if sub.is_command(name)), None)

    def get_description(self) -> str:
        if self.description:
            return self.description
        path = " ".join(self._called_commands) or self.name
        return f'command "{path}" description'

    def next(self) -> Command | None:
        """Return the invoked direct subcommand, if any."""
        if not self._called_commands:
            return None
        return next((sub for sub in self.subcommands if sub._called_commands), None)

    def get_called_commands(self) -> list[str]:
        """Return the invocation path of the deepest invoked command."""
        return self.get_executed_command().called_commands

    def get_executed_command(self) -> Command:
        """Walk down the invoked path and return its last command."""
        command = self
        while (child := command.next()) is not None:
            command = child
        return command

    def iter_commands(self) -> Iterator[Command]:
        """Yield this command and all descendants, pre-order."""
        yield self
        for subcommand in self.subcommands:
            yield from subcommand.iter_commands()

    def show_usage(self) -> None:
        """Render usage through `usage_func` or the default renderer."""
        if self.usage_func is not None:
            self.usage_func(self)
            return
        render_usage(self)

    def _reset(self) -> None:
        for command in self.iter_commands():
            command._called_commands = []
            command._remaining_args = []
            for option in command.options:
                if is_option(option):
                    option._reset()

    def _strip_program_name(self, args: Sequence[str]) -> list[str]:
        args = list(args)
        if args:
            program = sys.argv[0] if sys.argv else ""
            first = args[0]
            if (
                (program and first in (program, os.path.basename(program)))
                or self.is_command(first)
            ):
                return args[1:]
        return args

    def parse(
        self,
        args: Sequence[str] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> list[str]:
        """
        Resolve `args` against the tree and return the residual arguments.

        A leading program name (or the root command's name) is ignored. Values are
        resolved with the precedence command line > environment > default. The call
        is idempotent: transient state is reset first, so the same inputs always
        produce the same result.

        Args:
            args: Process arguments; defaults to `sys.argv`.
            environ: Environment mapping; defaults to `os.environ`.
            logger: Diagnostic logger; defaults to the `treecli` logger.

        Returns:
            list[str]: Positional tokens collected at the deepest invoked command.

        Raises:
            HelpSignal: Usage was rendered for a `--help` request.
            TreeCliError: Any validation or parse failure.
        """
        log = logger or default_logger
        tokens = self._strip_program_name(sys.argv if args is None else args)

        self._reset()
        append_help_option(self)

        phases: list[tuple[str, Callable[[], Any]]] = [
            ("failed to pre-check commands", lambda: pre_check_subcommands(self, log)),
            ("failed to pre-check options", lambda: pre_check_options(self, log)),
            ("failed to load default", lambda: load_defaults(self, log)),
            ("failed to load environment", lambda: load_environments(self, environ, log)),
        ]
        for prefix, phase in phases:
            try:
                phase()
            except TreeCliError as error:
                raise error.with_context(prefix)

        try:
            remaining = parse_command_args(self, tokens, log)
        except TreeCliError as error:
            raise error.with_context(self.name).with_context(
                "failed to parse commands and options"
            )

        check_help(self, log)

        try:
            post_check_options(self, log)
        except TreeCliError as error:
            raise error.with_context("failed to post-check options")

        log.debug(
            "%s: parsed: called=%s remaining=%s",
            self.name,
            self.get_called_commands(),
            remaining,
        )
        return list(remaining)

    async def run(
        self,
        args: Sequence[str] | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> Any:
        """
        Parse `args`, then call the run function of the deepest invoked command.

        `pre_run_func`, `run_func` and `post_run_func` may be plain functions or
        coroutines; each receives `(command, remaining_args)`. While they run,
        `treecli.current_command()` returns the dispatched command.

        Returns:
            Any: The result of `run_func`.

        Raises:
            HelpSignal: Usage was rendered for a `--help` request.
            CommandFuncNotSetError: The invoked command has no `run_func`; checked
                after `pre_run_func` has run.
            CommandRunError: A run hook raised; the original error is chained.
            TreeCliError: Any validation or parse failure.
        """
        log = logger or default_logger
        try:
            remaining = self.parse(args, environ=environ, logger=log)
        except TreeCliError as error:
            raise error.with_context(self.name)

        command = self.get_executed_command()
        path = " ".join(command.called_commands)
        context = ExecutionContext(name=path, command=command, args=remaining)

        context.start_timer()
        token = current_command_var.set(command)
        try:
            await _call_hook(context, "pre_run_func")
            if command.run_func is None:
                error = CommandFuncNotSetError(path)
                context.exception = error
                raise error
            context.result = await _call_hook(context, "run_func")
            await _call_hook(context, "post_run_func")
        finally:
            current_command_var.reset(token)
            context.stop_timer()
            context.log_summary(log)
        return context.result

    def _find_option_value(self, key: str, option_type: type[BaseOption]) -> Any:
        # descendants first, last-declared sibling first
        for subcommand in reversed(self.subcommands):
            try:
                return subcommand._find_option_value(key, option_type)
            except UnknownOptionError:
                continue

        if self._called_commands:
            for option in self.options:
                if (
                    isinstance(option, option_type)
                    and option.matches(key)
                    and option.has_value()
                ):
                    return option.value
        raise UnknownOptionError(key)

    def get_option_string(self, name: str) -> str:
        """
        Return the resolved string option matching `name`.

        `name` may be the option's name, short name or environment key. Invoked
        descendants are searched before this command.

        Raises:
            UnknownOptionError: No invoked command has a matching resolved option.
        """
        return self._find_option_value(name, StringOption)

    def get_option_bool(self, name: str) -> bool:
        """Return the resolved bool option matching `name`."""
        return self._find_option_value(name, BoolOption)

    def get_option_int(self, name: str) -> int:
        """Return the resolved int option matching `name`."""
        return self._find_option_value(name, IntOption)

    def get_option_float(self, name: str) -> float:
        """Return the resolved float option matching `name`."""
        return self._find_option_value(name, FloatOption)

    def __str__(self) -> str:
        return (
            f"Command(name={self.name!r}, options={len(self.options)}, "
            f"subcommands={[sub.name for sub in self.subcommands]})"
        )
