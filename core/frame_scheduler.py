"""
Frame Scheduler Module
======================
Per-frame callback queue driven by the host loop.

The host calls run_frame() once per rendered frame with a millisecond
timestamp. Callbacks requested while a frame is running wait for the
next frame, so a callback that reschedules itself runs exactly once
per frame.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Optional

FrameCallback = Callable[[float], None]


class FrameScheduler:
    """Queue of one-shot frame callbacks keyed by frame id."""

    def __init__(self):
        self._next_id = 1
        self._pending: Dict[int, FrameCallback] = {}
        self._running: Dict[int, FrameCallback] = {}
        self.last_timestamp: Optional[float] = None

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule `callback` for the next frame. Returns its frame id."""
        frame_id = self._next_id
        self._next_id += 1
        self._pending[frame_id] = callback
        return frame_id

    def cancel_frame(self, frame_id: int):
        # Also drops callbacks of the frame in progress that have not run yet
        self._pending.pop(frame_id, None)
        self._running.pop(frame_id, None)

    def is_pending(self, frame_id: int) -> bool:
        return frame_id in self._pending

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def run_frame(self, timestamp_ms: float) -> int:
        """
        Run every callback queued before this call.

        Returns:
            Number of callbacks that ran
        """
        self.last_timestamp = timestamp_ms
        self._running = self._pending
        self._pending = {}
        ran = 0
        for frame_id in sorted(self._running):
            callback = self._running.pop(frame_id, None)
            if callback is None:
                continue
            callback(timestamp_ms)
            ran += 1
        return ran


class AutoplayState(Enum):
    """Whether a carousel has a frame callback queued."""
    STOPPED = auto()
    RUNNING = auto()


@dataclass
class SchedulerHandle:
    """
    A carousel's claim on the frame scheduler.

    start/stop are idempotent: starting a running handle or stopping a
    stopped one changes nothing.
    """
    scheduler: FrameScheduler
    state: AutoplayState = AutoplayState.STOPPED
    frame_id: Optional[int] = None

    @property
    def running(self) -> bool:
        return self.state == AutoplayState.RUNNING

    def start(self, callback: FrameCallback) -> bool:
        """Queue `callback` unless already running. Returns True if queued."""
        if self.running:
            return False
        self.frame_id = self.scheduler.request_frame(callback)
        self.state = AutoplayState.RUNNING
        return True

    def renew(self, callback: FrameCallback):
        """Queue the next frame from inside a running callback."""
        if not self.running:
            return
        self.frame_id = self.scheduler.request_frame(callback)

    def stop(self) -> bool:
        """Cancel the queued callback. Returns True if it was running."""
        if not self.running:
            return False
        if self.frame_id is not None:
            self.scheduler.cancel_frame(self.frame_id)
        self.frame_id = None
        self.state = AutoplayState.STOPPED
        return True
