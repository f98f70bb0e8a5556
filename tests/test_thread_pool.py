import threading

import pytest

from dragforge.thread_pool import BlockingQueue, ThreadPool


def test_queue_is_fifo():
    q = BlockingQueue(4)
    for x in ("a", "b", "c"):
        q.push(x)
    assert q.size() == 3
    assert [q.pop(), q.pop(), q.pop()] == ["a", "b", "c"]
    assert q.empty()


def test_queue_max_size():
    assert BlockingQueue(5).max_size() == 5


def test_queue_rejects_zero_size():
    with pytest.raises(ValueError):
        BlockingQueue(0)


def test_pop_waits_for_push():
    q = BlockingQueue(1)
    got = []
    t = threading.Thread(target=lambda: got.append(q.pop()))
    t.start()
    t.join(timeout=0.1)
    assert t.is_alive()
    q.push(42)
    t.join(timeout=5)
    assert got == [42]


def test_push_waits_when_full():
    q = BlockingQueue(1)
    q.push(1)
    t = threading.Thread(target=lambda: q.push(2))
    t.start()
    t.join(timeout=0.1)
    assert t.is_alive()
    assert q.pop() == 1
    t.join(timeout=5)
    assert not t.is_alive()
    assert q.pop() == 2


def test_enqueue_task_returns_result():
    with ThreadPool(2, 2) as pool:
        futures = [pool.enqueue_task(lambda a, b: a * b, i, 3) for i in range(10)]
        assert [f.result(timeout=5) for f in futures] == [i * 3 for i in range(10)]


def test_enqueue_work_runs_everything():
    results = []
    lock = threading.Lock()

    def work(x):
        with lock:
            results.append(x)

    pool = ThreadPool(3, 4)
    for i in range(50):
        pool.enqueue_work(work, i)
    pool.close()
    with pytest.raises(RuntimeError):
        pool.enqueue_work(work, 99)
    assert sorted(results) == list(range(50))


def test_task_exception_goes_to_future():
    def fail():
        raise KeyError("boom")

    with ThreadPool(1, 1) as pool:
        fut = pool.enqueue_task(fail)
        with pytest.raises(KeyError):
            fut.result(timeout=5)


def test_work_exception_raised_on_close():
    def fail():
        raise ValueError("bad")

    pool = ThreadPool(1, 1)
    pool.enqueue_work(fail)
    with pytest.raises(ValueError):
        pool.close()


def test_enqueue_after_close_fails():
    pool = ThreadPool(1, 1)
    pool.close()
    with pytest.raises(RuntimeError):
        pool.enqueue_work(print)