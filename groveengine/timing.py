"""Millisecond clock, worker pool, scheduled tasks and rate limiters."""

from __future__ import annotations

import enum
import logging
import os
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

Clock = Callable[[], float]
Task = Callable[[], object]

_log = logging.getLogger(__name__)

_time_scale = 1.0


def set_time_scale(scale: float) -> None:
    """Set the factor that stretches or shrinks the game clock."""
    global _time_scale
    _time_scale = float(scale)


def get_time() -> int:
    """Return the scaled game clock in milliseconds."""
    return int(time.monotonic() * 1000 * _time_scale)


def thread_sleep(ms: float) -> None:
    """Put the calling thread to sleep for ``ms`` milliseconds."""
    time.sleep(max(ms, 0) / 1000)


def _ms_clock() -> int:
    return time.monotonic_ns() // 1_000_000


def _us_clock() -> int:
    return time.perf_counter_ns() // 1_000


class _Submitter(Protocol):
    def submit(self, task: Task) -> None: ...


class ThreadPool:
    """A fixed set of worker threads draining a shared task queue."""

    def __init__(self, workers: Optional[int] = None) -> None:
        if workers is None:
            workers = (os.cpu_count() or 1) * 2 + 2
        if workers < 1:
            raise ValueError("a pool needs at least one worker")
        self._tasks: deque[Task] = deque()
        self._cond = threading.Condition()
        self._stopped = False
        self._threads = [
            threading.Thread(target=self._run, name=f"pool-worker-{n}", daemon=True)
            for n in range(workers)
        ]
        for thread in self._threads:
            thread.start()

    def submit(self, task: Task) -> None:
        """Queue ``task`` for a worker."""
        with self._cond:
            if self._stopped:
                raise RuntimeError("the pool has been shut down")
            self._tasks.append(task)
            self._cond.notify()

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting tasks; workers finish the queue and exit."""
        with self._cond:
            self._stopped = True
            self._cond.notify_all()
        if wait:
            current = threading.current_thread()
            for thread in self._threads:
                if thread is not current:
                    thread.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown(wait=True)

    def _run(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._stopped or bool(self._tasks))
                if not self._tasks:
                    return
                task = self._tasks.popleft()
            try:
                task()
            except Exception:
                _log.exception("task raised in worker thread")


_shared_pool: Optional[ThreadPool] = None
_shared_lock = threading.Lock()


def _get_shared_pool() -> ThreadPool:
    global _shared_pool
    with _shared_lock:
        if _shared_pool is None:
            _shared_pool = ThreadPool()
        return _shared_pool


class CanRun:
    """Answers true once at least ``delay_ms`` has passed since the last true."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or get_time
        self.time0 = self._clock()

    def ready(self, delay_ms: float) -> bool:
        now = self._clock()
        if now - self.time0 >= delay_ms:
            self.time0 = now
            return True
        return False


@dataclass(eq=False)
class ScheduledTask:
    """A callable run every ``delay_ms`` milliseconds, ``times`` times."""

    start: float
    delay_ms: float
    times: int
    func: Task
    valid: bool = True

    def cancel(self) -> None:
        self.valid = False


class Timer:
    """Runs scheduled tasks on a worker pool when their delay has passed."""

    def __init__(self, pool: Optional[_Submitter] = None,
                 clock: Optional[Clock] = None) -> None:
        self._pool = pool if pool is not None else _get_shared_pool()
        self._clock = clock or get_time
        self._cond = threading.Condition()
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self.tasks: list[ScheduledTask] = []

    def add_task(self, start: float, delay_ms: float, times: int,
                 func: Task) -> ScheduledTask:
        task = ScheduledTask(start, delay_ms, times, func)
        with self._cond:
            self.tasks.append(task)
            self._cond.notify_all()
        return task

    def tick(self) -> int:
        """Fire every due task once; drop spent or cancelled ones. Returns the number fired."""
        due: list[Task] = []
        with self._cond:
            kept: list[ScheduledTask] = []
            for task in self.tasks:
                if task.times <= 0 or not task.valid:
                    continue
                now = self._clock()
                if now - task.start >= task.delay_ms:
                    due.append(task.func)
                    task.start = now
                    task.times -= 1
                kept.append(task)
            self.tasks[:] = kept
        for func in due:
            self._pool.submit(func)
        return len(due)

    def start(self) -> None:
        """Run :meth:`tick` in a background thread until :meth:`stop`."""
        with self._cond:
            if self._thread is not None and self._thread.is_alive():
                return
            self._running = True
            self._thread = threading.Thread(target=self._loop, name="timer", daemon=True)
            self._thread.start()

    def stop(self) -> None:
        with self._cond:
            self._running = False
            self._cond.notify_all()
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _loop(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: not self._running or bool(self.tasks))
                if not self._running:
                    return
            began = self._clock()
            self.tick()
            if self._clock() - began < 1:
                thread_sleep(1)


_timer: Optional[Timer] = None
_timer_lock = threading.Lock()


def get_timer() -> Timer:
    """Return the process-wide running timer."""
    global _timer
    with _timer_lock:
        if _timer is None:
            _timer = Timer()
            _timer.start()
        return _timer


def delay(delay_ms: float, func: Task, times: int = 1) -> ScheduledTask:
    """Run ``func`` every ``delay_ms`` milliseconds from now, ``times`` times."""
    return get_timer().add_task(get_time(), delay_ms, times, func)


def delay_renew(delay_ms: float, times: int, func: Task) -> ScheduledTask:
    """Like :func:`delay`, but the first run happens at once."""
    return get_timer().add_task(0, delay_ms, times, func)


class Unit(enum.IntEnum):
    MICRO = 0
    MILLI = 1


class PeriodicCallback:
    """Calls its callback when invoked, at most once per ``delay``."""

    def __init__(self, delay: float, callback: Task, unit: Unit = Unit.MILLI,
                 clock: Optional[Clock] = None) -> None:
        self.delay = delay
        self.unit = Unit(unit)
        self.running = True
        self._callback = callback
        self._clock = clock or (_ms_clock if self.unit is Unit.MILLI else _us_clock)
        self._last = 0

    def __call__(self) -> bool:
        now = self._clock()
        if self.running and now - self._last >= self.delay:
            self._last = now
            self._callback()
            return True
        return False

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        self.running = False

    def set_delay(self, delay: float) -> None:
        self.delay = delay

    def reset(self) -> None:
        """Count the next delay from now rather than from the start of time."""
        self._last = self._clock()