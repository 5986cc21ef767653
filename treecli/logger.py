# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Package logger and diagnostic switches for treecli.

The library logs through `logging.getLogger("treecli")`. Parsing steps log at
DEBUG and the finer-grained walk (every option checked, every token matched) at
the custom TRACE level. Both are silent unless enabled:

- `TREECLI_DEBUG=true` enables DEBUG output on stderr.
- `TREECLI_TRACE=true` enables TRACE output on stderr.

The variables are read once, when the package is imported. Applications that
configure logging themselves can ignore them and pass their own logger to
`Command.parse(logger=...)`.

`setup_logging()` picks the output format of the `treecli` logger. The console
script calls it on startup, driven by:

- `TREECLI_LOG_MODE`: `cli` (Rich, the default) or `json` (one JSON object per line).
- `TREECLI_LOG_FILE`: also append records to this file.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Mapping

import pythonjsonlogger.json
from rich.logging import RichHandler

from treecli.console import err_console

TREECLI_TRACE = "TREECLI_TRACE"
TREECLI_DEBUG = "TREECLI_DEBUG"
TREECLI_LOG_MODE = "TREECLI_LOG_MODE"
TREECLI_LOG_FILE = "TREECLI_LOG_FILE"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

logger = logging.getLogger("treecli")


def trace(log: logging.Logger, msg: str, *args) -> None:
    """Log `msg` at TRACE level on `log`."""
    if log.isEnabledFor(TRACE):
        log.log(TRACE, msg, *args, stacklevel=2)


def _rich_handler(show_path: bool) -> RichHandler:
    return RichHandler(
        console=err_console, show_path=show_path, markup=False, rich_tracebacks=True
    )


def configure_diagnostics(
    log: logging.Logger = logger, environ: Mapping[str, str] | None = None
) -> int | None:
    """Enable stderr diagnostics on `log` according to the TRACE/DEBUG variables.

    Returns the level that was enabled, or None when both switches are off.
    """
    environ = os.environ if environ is None else environ
    level: int | None = None
    if environ.get(TREECLI_TRACE) == "true":
        level = TRACE
    elif environ.get(TREECLI_DEBUG) == "true":
        level = logging.DEBUG

    if level is None:
        if not log.handlers:
            log.addHandler(logging.NullHandler())
        return None

    handler = _rich_handler(show_path=True)
    handler.setLevel(level)
    log.addHandler(handler)
    log.setLevel(level)
    log.propagate = False
    log.debug("Diagnostics enabled at level %s.", logging.getLevelName(level))
    return level


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = None,
    level: int | None = None,
    log: logging.Logger = logger,
    environ: Mapping[str, str] | None = None,
) -> logging.Handler:
    """
    Replace the handlers of `log` with a stderr handler in the requested format.

    Args:
        mode (str | None): "cli" or "json"; defaults to `TREECLI_LOG_MODE`, then "cli".
        log_filename (str | None): Optional log file; defaults to `TREECLI_LOG_FILE`.
        level (int | None): Handler level. Defaults to the level already set on
            `log` (e.g. by `configure_diagnostics()`), otherwise WARNING.
        log (logging.Logger): Logger to configure.
        environ (Mapping[str, str] | None): Environment; defaults to `os.environ`.

    Returns:
        logging.Handler: The stderr handler.

    Raises:
        ValueError: If `mode` is not "cli" or "json".
    """
    environ = os.environ if environ is None else environ
    mode = mode or environ.get(TREECLI_LOG_MODE) or "cli"
    log_filename = log_filename or environ.get(TREECLI_LOG_FILE) or None

    if mode == "cli":
        console_handler: logging.Handler = _rich_handler(show_path=False)
    elif mode == "json":
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
    else:
        raise ValueError(f"Invalid log mode: {mode}")

    if level is None:
        level = log.level or logging.WARNING

    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    console_handler.setLevel(level)
    log.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT))
        log.addHandler(file_handler)

    log.setLevel(level)
    log.propagate = False
    log.debug("Logging initialized in '%s' mode.", mode)
    return console_handler
