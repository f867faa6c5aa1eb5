"""Deferred, cancellable callbacks for presentation pacing."""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional


LOGGER = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(order=True)
class _Scheduled:
    due: float
    handle: int
    callback: Callable[[], object] = field(compare=False)


class SettleScheduler:
    """Fires callbacks once their delay has elapsed on the injected clock.

    Nothing runs in the background: the owning loop calls ``poll`` once per
    frame.  ``clock`` returns the current time in milliseconds.
    """

    def __init__(self, *, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or _monotonic_ms
        self._queue: List[_Scheduled] = []
        self._live: Dict[int, _Scheduled] = {}
        self._handles = itertools.count(1)

    @property
    def pending(self) -> int:
        return len(self._live)

    def schedule(self, delay_ms: float, callback: Callable[[], object]) -> int:
        handle = next(self._handles)
        entry = _Scheduled(due=self._clock() + max(0.0, float(delay_ms)), handle=handle, callback=callback)
        heapq.heappush(self._queue, entry)
        self._live[handle] = entry
        return handle

    def cancel(self, handle: int) -> bool:
        return self._live.pop(handle, None) is not None

    def cancel_all(self) -> int:
        cancelled = len(self._live)
        self._live.clear()
        self._queue.clear()
        if cancelled:
            LOGGER.debug("Cancelled %d pending settle callbacks", cancelled)
        return cancelled

    def poll(self) -> int:
        """Run every callback that is due, in due order; return how many ran."""
        now = self._clock()
        fired = 0
        while self._queue and self._queue[0].due <= now:
            entry = heapq.heappop(self._queue)
            if self._live.pop(entry.handle, None) is None:
                continue
            entry.callback()
            fired += 1
        return fired
