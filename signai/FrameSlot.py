"""
Frame hand-off policies.

The detector produces frames faster than they can always be processed.
Neither policy here ever queues more than one frame: late frames are
dropped and counted.

main_loop hands frames over through LatestFrameSlot. FrameGuard is for
embedding SignPipeline behind a push-style camera callback, e.g.

    guard = FrameGuard()
    def on_frame(hands):
        guard.try_process(pipeline.process, hands)
"""

import threading
from queue import Empty, Full, Queue


class LatestFrameSlot:
    """
    Single-slot queue, overwrite when full. The consumer always gets the
    newest frame; an unconsumed older one is discarded.
    """

    def __init__(self):
        self._queue = Queue(maxsize=1)
        self._lock = threading.Lock()
        self.dropped = 0

    def put(self, item):
        with self._lock:
            try:
                self._queue.get_nowait()  # remove older frame
                self.dropped += 1
            except Empty:
                pass
            try:
                self._queue.put_nowait(item)
            except Full:
                self.dropped += 1

    def get(self, timeout=None):
        """Raises queue.Empty when nothing arrives within timeout."""
        return self._queue.get(timeout=timeout)


class FrameGuard:
    """
    Non-reentrant gate for callback-driven delivery. A frame that arrives
    while the previous one is still being processed is skipped.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.processed = 0
        self.dropped = 0

    def try_process(self, func, *args, **kwargs):
        """Run func if the guard is free. Returns (ran, result)."""
        if not self._lock.acquire(blocking=False):
            self.dropped += 1
            return False, None
        try:
            result = func(*args, **kwargs)
            self.processed += 1
            return True, result
        finally:
            self._lock.release()
