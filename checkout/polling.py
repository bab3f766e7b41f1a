"""
Cancellable fixed-interval polling.

start_polling() hands back a handle; cancelling it stops future ticks. A tick
that is already running is not interrupted, so callers must check their own
state before applying its result.
"""
import threading


class PollHandle:
    def __init__(self):
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()


class _TimerPollHandle(PollHandle):
    def __init__(self, interval_seconds, callback):
        super().__init__()
        self._interval_seconds = interval_seconds
        self._callback = callback
        self._timer = None
        self._lock = threading.Lock()

    def _schedule(self):
        with self._lock:
            if self.cancelled:
                return
            self._timer = threading.Timer(self._interval_seconds, self._run)
            self._timer.daemon = True
            self._timer.start()

    def _run(self):
        if self.cancelled:
            return
        try:
            self._callback()
        finally:
            # Next tick is scheduled only after this one returns
            self._schedule()

    def cancel(self) -> None:
        super().cancel()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()


class ThreadingPollScheduler:
    def start_polling(self, interval_seconds: float, callback) -> PollHandle:
        handle = _TimerPollHandle(interval_seconds, callback)
        handle._schedule()
        return handle
