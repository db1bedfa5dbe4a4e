import threading

import pytest

from groveengine.timing import (
    CanRun,
    PeriodicCallback,
    ThreadPool,
    Timer,
    delay,
    delay_renew,
    get_time,
    get_timer,
    set_time_scale,
    thread_sleep,
)


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


class ImmediatePool:
    def submit(self, task):
        task()


def test_can_run_waits_for_delay():
    clock = FakeClock()
    gate = CanRun(clock)
    assert not gate.ready(10)
    clock.now = 10
    assert gate.ready(10)
    assert not gate.ready(10)
    clock.now = 19
    assert not gate.ready(10)
    clock.now = 20
    assert gate.ready(10)


def test_time_scale_zero_freezes_clock():
    set_time_scale(0)
    try:
        assert get_time() == 0
    finally:
        set_time_scale(1)


def test_get_time_advances_with_sleep():
    before = get_time()
    thread_sleep(20)
    assert get_time() - before >= 15


def test_thread_pool_runs_every_task():
    results = []
    lock = threading.Lock()

    def make(n):
        def task():
            with lock:
                results.append(n)
        return task

    clock = FakeClock()
    with ThreadPool(3) as pool:
        timer = Timer(pool=pool, clock=clock)
        for n in range(20):
            timer.add_task(0, 0, 1, make(n))
        assert timer.tick() == 20
    assert sorted(results) == list(range(20))
    assert timer.tasks == [] or all(task.times == 0 for task in timer.tasks)


def test_thread_pool_rejects_after_shutdown():
    pool = ThreadPool(1)
    pool.shutdown()
    with pytest.raises(RuntimeError):
        pool.submit(lambda: None)


def test_thread_pool_needs_a_worker():
    with pytest.raises(ValueError):
        ThreadPool(0)


def test_timer_fires_given_number_of_times_then_drops_task():
    clock = FakeClock()
    timer = Timer(pool=ImmediatePool(), clock=clock)
    calls = []
    task = timer.add_task(0, 5, 2, lambda: calls.append(clock.now))
    assert timer.tick() == 0
    clock.now = 5
    assert timer.tick() == 1
    clock.now = 7
    assert timer.tick() == 0
    clock.now = 10
    assert timer.tick() == 1
    assert task.times == 0
    clock.now = 100
    assert timer.tick() == 0
    assert calls == [5, 10]
    assert timer.tasks == []


def test_cancelled_task_never_runs():
    clock = FakeClock(50)
    timer = Timer(pool=ImmediatePool(), clock=clock)
    calls = []
    task = timer.add_task(0, 1, 3, lambda: calls.append(1))
    task.cancel()
    timer.tick()
    assert calls == []
    assert timer.tasks == []


def test_task_from_time_zero_fires_at_once():
    clock = FakeClock(5000)
    timer = Timer(pool=ImmediatePool(), clock=clock)
    fired = []
    timer.add_task(0, 1000, 1, lambda: fired.append(True))
    timer.tick()
    assert fired == [True]


def test_timer_thread_runs_tasks():
    timer = Timer()
    timer.start()
    try:
        event = threading.Event()
        timer.add_task(get_time(), 0, 1, event.set)
        assert event.wait(2)
    finally:
        timer.stop()


def test_delay_runs_once():
    event = threading.Event()
    task = delay(0, event.set)
    assert event.wait(2)
    assert task.times == 0


def test_delay_renew_runs_requested_times():
    done = threading.Event()
    count = []
    lock = threading.Lock()
    target = 3

    def hit():
        with lock:
            count.append(1)
            if len(count) == target:
                done.set()

    task = delay_renew(1, target, hit)
    assert done.wait(3)
    thread_sleep(30)
    assert len(count) == target
    assert task.times == 0


def test_get_timer_is_shared():
    first = get_timer()
    second = get_timer()
    assert first is second
    task = delay(60_000, lambda: None)
    try:
        assert task in second.tasks
    finally:
        task.cancel()


def test_periodic_callback_rate_limits():
    clock = FakeClock(0)
    calls = []
    periodic = PeriodicCallback(10, lambda: calls.append(clock.now), clock=clock)
    clock.now = 5
    assert not periodic()
    clock.now = 10
    assert periodic()
    clock.now = 15
    assert not periodic()
    periodic.stop()
    clock.now = 100
    assert not periodic()
    periodic.start()
    assert periodic()
    assert calls == [10, 100]


def test_periodic_callback_reset_and_set_delay():
    clock = FakeClock(200)
    calls = []
    periodic = PeriodicCallback(10, lambda: calls.append(clock.now), clock=clock)
    periodic.set_delay(50)
    periodic.reset()
    assert not periodic()
    clock.now = 249
    assert not periodic()
    clock.now = 250
    assert periodic()
    assert calls == [250]