"""Single-slot debounce on the running event loop."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Coalesce rapid triggers into one call.

    Each trigger cancels the scheduled call (if any) and schedules a new
    one after `delay` seconds. The returned future resolves True when
    the action ran, False when a later trigger or cancel() replaced it.
    """

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None
        self._future: asyncio.Future | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, action: Callable[..., Any], *args: Any) -> asyncio.Future:
        """Schedule action(*args), replacing any scheduled call."""
        loop = asyncio.get_running_loop()
        self.cancel()

        future = loop.create_future()

        def fire() -> None:
            self._handle = None
            self._future = None
            try:
                action(*args)
            except Exception as e:
                logger.exception(f"Debounced action failed: {e}")
                if not future.done():
                    future.set_exception(e)
                return
            if not future.done():
                future.set_result(True)

        self._future = future
        self._handle = loop.call_later(self.delay, fire)
        return future

    def cancel(self) -> None:
        """Drop the scheduled call; its future resolves False."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._future is not None:
            if not self._future.done():
                self._future.set_result(False)
            self._future = None
