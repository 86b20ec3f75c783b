"""Single-slot debounce timer bound to the running asyncio loop."""

from __future__ import annotations

import asyncio
from typing import Any, Callable


class Debouncer:
    """Owns at most one scheduled call.

    Every ``schedule()`` cancels the previously scheduled call before
    arming a new one, so only the latest call can ever fire.
    """

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback, args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callable[..., Any], args: tuple) -> None:
        self._handle = None
        callback(*args)
