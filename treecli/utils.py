# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py

Helpers for calling user hooks from `Command.run()`, which may be plain functions
or coroutine functions.
"""
from __future__ import annotations

import functools
import inspect
from typing import Any, Awaitable, Callable, TypeVar

T = TypeVar("T")


def is_coroutine(function: Callable[..., Any]) -> bool:
    return inspect.iscoroutinefunction(function)


def ensure_async(function: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    """Return `function` unchanged if it is a coroutine function, else wrap it."""
    if is_coroutine(function):
        return function  # type: ignore

    if not callable(function):
        raise TypeError(f"{function} is not callable")

    @functools.wraps(function)
    async def async_wrapper(*args, **kwargs) -> T:
        return function(*args, **kwargs)

    return async_wrapper
