"""Тесты fan-out поверх пула потоков."""

import threading

import pytest

from lingua.concurrency import run_concurrently


def test_all_results_collected():
    assert sorted(run_concurrently(lambda x: x * x, range(10), max_workers=3)) == [x * x for x in range(10)]


def test_empty_task_list():
    assert run_concurrently(lambda x: x, []) == []


def test_pool_is_bounded():
    active = []
    peak = []
    lock = threading.Lock()
    barrier = threading.Event()

    def task(_):
        with lock:
            active.append(1)
            peak.append(len(active))
        barrier.wait(0.05)
        with lock:
            active.pop()

    run_concurrently(task, range(8), max_workers=2)
    assert max(peak) <= 2


def test_exception_aborts_stage():
    def task(x):
        if x == 3:
            raise ValueError("fatal")
        return x

    with pytest.raises(ValueError):
        run_concurrently(task, range(6), max_workers=2)
