"""Asyncio debouncer for keystroke-driven searches."""

import asyncio
from typing import Any, Callable


class Debouncer:
    """Delay a callback until calls stop arriving for ``wait`` seconds.

    Every ``call`` cancels the pending task and schedules a new one, so only
    the last call of a burst runs. With ``leading=True`` the first call of a
    burst runs at once and the rest of the burst is dropped. A ``wait`` of
    0 calls straight through.

    ``call`` must be made from a running event loop unless ``wait`` is 0.

    Example:
        >>> debouncer = Debouncer(0.2, run_search)
        >>> debouncer.call("val")
        >>> debouncer.call("valu")   # only this one runs, 200 ms later
    """

    def __init__(self, wait: float, callback: Callable[..., Any], leading: bool = False):
        if wait < 0:
            raise ValueError(f"wait must be >= 0, got {wait}")
        self.wait = wait
        self.callback = callback
        self.leading = leading
        self._task: asyncio.Task | None = None
        self._pending: tuple[tuple, dict] | None = None

    @property
    def pending(self) -> bool:
        """Whether a call is scheduled and has not run yet."""
        return self._pending is not None

    def call(self, *args, **kwargs) -> None:
        if self.wait == 0:
            self.callback(*args, **kwargs)
            return

        idle = self._task is None or self._task.done()
        self._cancel_task()

        if self.leading:
            if idle:
                self.callback(*args, **kwargs)
            self._pending = None
        else:
            self._pending = (args, kwargs)
        self._task = asyncio.get_running_loop().create_task(self._fire_later())

    async def _fire_later(self) -> None:
        await asyncio.sleep(self.wait)
        self._task = None
        if self._pending is None:
            return
        args, kwargs = self._pending
        self._pending = None
        self.callback(*args, **kwargs)

    def _cancel_task(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        self._cancel_task()
        self._pending = None

    def flush(self) -> None:
        """Run the pending call now instead of waiting."""
        pending = self._pending
        self.cancel()
        if pending is not None:
            args, kwargs = pending
            self.callback(*args, **kwargs)
