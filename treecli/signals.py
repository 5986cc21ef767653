# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used by treecli.

Signals interrupt parsing without being treated as failures. They inherit from
`FlowSignal`, a subclass of `BaseException`, so they bypass `except Exception`
blocks in user hooks and reach the top-level caller untouched.

Signals:
- HelpSignal: Help text was rendered; the caller should exit successfully.
"""
from __future__ import annotations


class FlowSignal(BaseException):
    """Base class for all flow control signals in treecli.

    These are not errors. They're used to stop parsing early on a user request.
    """


class HelpSignal(FlowSignal):
    """Raised after usage has been rendered for a `--help` request."""

    def __init__(self, message: str = "help requested", command: str = ""):
        super().__init__(message)
        self.command = command


def is_help(error: BaseException | None) -> bool:
    """Return True if `error` is (or was raised from) a help request."""
    while error is not None:
        if isinstance(error, HelpSignal):
            return True
        error = error.__cause__
    return False
