# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Execution context for `Command.run()`.

`ExecutionContext` records one dispatch: which command ran, with which residual
arguments, what it returned or raised, and how long it took. `Command.run()`
creates one per call and logs its summary at DEBUG level when the run finishes.

While the pre-run, run and post-run functions execute, the dispatched command is
also published in a context variable. Code called from those functions (however
deeply, and across `await`s) can fetch it with `current_command()` instead of
threading the command through every call.
"""
from __future__ import annotations

import logging
import time
from contextvars import ContextVar
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from treecli.exceptions import CommandNotSetError

if TYPE_CHECKING:
    from treecli.command import Command

current_command_var: ContextVar[Any] = ContextVar("treecli_current_command")


def current_command() -> Command:
    """
    Return the command whose run functions are executing.

    Raises:
        CommandNotSetError: When called outside of `Command.run()`.
    """
    try:
        return current_command_var.get()
    except LookupError as error:
        raise CommandNotSetError() from error


class ExecutionContext(BaseModel):
    """
    Runtime metadata of a single command dispatch.

    Attributes:
        name (str): Invocation path of the dispatched command (e.g. "main-cli sub").
        command (Any): The dispatched `Command`.
        args (list[str]): Residual arguments passed to the run functions.
        result (Any | None): Return value of `run_func`.
        exception (Exception | None): Error raised by a run function, if any.
        start_time (float | None): High-resolution start time.
        end_time (float | None): High-resolution end time.
        start_wall (datetime | None): Wall-clock start.
        end_wall (datetime | None): Wall-clock end.
    """

    name: str
    command: Any = None
    args: list[str] = Field(default_factory=list)
    result: Any | None = None
    exception: Exception | None = None

    start_time: float | None = None
    end_time: float | None = None
    start_wall: datetime | None = None
    end_wall: datetime | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def start_timer(self) -> None:
        self.start_wall = datetime.now()
        self.start_time = time.perf_counter()

    def stop_timer(self) -> None:
        self.end_time = time.perf_counter()
        self.end_wall = datetime.now()

    @property
    def duration(self) -> float | None:
        if self.start_time is None:
            return None
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def success(self) -> bool:
        return self.exception is None

    @property
    def status(self) -> str:
        return "OK" if self.success else "ERROR"

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "args": list(self.args),
            "result": self.result,
            "exception": repr(self.exception) if self.exception else None,
            "duration": self.duration,
        }

    def to_log_line(self) -> str:
        """Structured flat-line format for logging."""
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        exception_str = (
            f"{type(self.exception).__name__}: {self.exception}"
            if self.exception
            else "None"
        )
        return (
            f"[{self.name}] status={self.status} duration={duration_str} "
            f"args={self.args!r} result={self.result!r} exception={exception_str}"
        )

    def log_summary(self, logger: logging.Logger) -> None:
        logger.debug("[SUMMARY] %s", self.to_log_line())

    def __str__(self) -> str:
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        result_str = (
            f"Result: {self.result!r}" if self.success else f"Exception: {self.exception}"
        )
        return (
            f"<ExecutionContext '{self.name}' | {self.status} | "
            f"Duration: {duration_str} | {result_str}>"
        )
