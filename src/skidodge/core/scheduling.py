"""
Frame scheduling and display sinks.

These interfaces define the contract between the game core and the
host that paces frames and shows text.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict
import itertools


FrameCallback = Callable[[], object]


class FrameScheduler(ABC):
    """Runs a callback once, on the next displayed frame."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """
        Register a callback for the next frame.

        Returns:
            Handle usable with cancel_frame
        """
        ...

    @abstractmethod
    def cancel_frame(self, handle: int) -> None:
        """Drop a pending callback. Unknown handles are ignored."""
        ...


class TextSink(ABC):
    """Write-only text display."""

    @abstractmethod
    def set_text(self, text: str) -> None:
        ...


class FrameQueue(FrameScheduler):
    """
    Collects frame requests until the host runs them.

    The host calls run_pending() once per displayed frame. Callbacks
    requested while running are deferred to the following frame.
    """

    def __init__(self) -> None:
        self._pending: Dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run the callbacks requested before this call.

        Returns:
            Number of callbacks run
        """
        batch = self._pending
        self._pending = {}
        for callback in batch.values():
            callback()
        return len(batch)

    def clear(self) -> None:
        self._pending.clear()
