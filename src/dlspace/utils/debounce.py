"""Debounce wrapper for callbacks driven by an asyncio event loop.

Progress reporters fire far more often than a disk query should run.
Wrapping the query with debounce() collapses a burst of calls into one
trailing call carrying the most recent arguments.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any


class Debouncer:
    """Callable that delays calls to ``func`` until ``wait_ms`` of quiet.

    Each instance owns a single timer handle. Calling the instance cancels
    the pending call, if any, and schedules a new one with the latest
    arguments. The return value of ``func`` is discarded.

    Not thread-safe: call it from the thread running the event loop.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        wait_ms: float,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self.func = func
        self.wait_ms = wait_ms
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        """True while a call is scheduled and has not fired yet."""
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        if self._handle is not None:
            self._handle.cancel()

        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.wait_ms / 1000, self._fire, args, kwargs)

    def _fire(self, args: tuple, kwargs: dict) -> None:
        self._handle = None
        self.func(*args, **kwargs)


def debounce(
    func: Callable[..., Any],
    wait_ms: float,
    loop: asyncio.AbstractEventLoop | None = None,
) -> Debouncer:
    """Wrap ``func`` so that bursts of calls collapse into one trailing call.

    Without ``loop`` the wrapper must be called from a coroutine or callback
    running on an event loop. Synchronous code that calls the wrapper with
    no loop running must pass ``loop`` explicitly; otherwise the call raises
    RuntimeError from asyncio.get_running_loop().

    Args:
        func: Callback to debounce
        wait_ms: Quiet period in milliseconds
        loop: Event loop to schedule on (default: the running loop at call time)

    Returns:
        A new Debouncer with its own timer
    """
    return Debouncer(func, wait_ms, loop=loop)
