import threading

import pytest

from src.hr_payroll.hr_payroll.common.background import TaskQueue
from src.hr_payroll.hr_payroll.common.locks import KeyedLock


def test_inline_queue_runs_immediately_and_swallows_errors():
    queue = TaskQueue(workers=0)
    seen = []

    def fail():
        raise RuntimeError("boom")

    assert queue.is_inline
    assert queue.enqueue("ok", seen.append, 1) is None
    queue.enqueue("fail", fail)
    assert seen == [1]


def test_threaded_queue_runs_tasks_off_the_caller_thread():
    queue = TaskQueue(workers=1, name="test-bg")
    threads = []

    future = queue.enqueue("record", lambda: threads.append(threading.current_thread().name))
    future.result(timeout=5)
    queue.shutdown()

    assert threads and threads[0].startswith("test-bg")


def test_threaded_queue_logs_failures_instead_of_raising():
    queue = TaskQueue(workers=1)

    def fail():
        raise RuntimeError("boom")

    future = queue.enqueue("fail", fail)
    assert future.result(timeout=5) is None
    queue.shutdown()


def test_keyed_lock_is_reentrant_and_serializes_one_key():
    locks = KeyedLock()
    counter = {"n": 0}

    def bump():
        for _ in range(200):
            with locks.hold(("payroll", 1, 1, 2025)):
                with locks.hold(("payroll", 1, 1, 2025)):
                    value = counter["n"]
                    counter["n"] = value + 1

    workers = [threading.Thread(target=bump) for _ in range(4)]
    for t in workers:
        t.start()
    for t in workers:
        t.join()

    assert counter["n"] == 800


def test_keyed_lock_forgets_keys_nobody_holds():
    locks = KeyedLock()

    for month in range(1, 13):
        with locks.hold(("payroll", 1, month, 2025)):
            with locks.hold(("payroll", 1, month, 2025)):
                assert len(locks) == 1

    assert len(locks) == 0


def test_keyed_lock_released_after_an_error():
    locks = KeyedLock()

    with pytest.raises(RuntimeError):
        with locks.hold(("payroll", 1, 1, 2025)):
            raise RuntimeError("write failed")

    assert len(locks) == 0
    with locks.hold(("payroll", 1, 1, 2025)):
        pass
