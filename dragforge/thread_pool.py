"""A bounded blocking queue and a fixed-size pool of worker threads."""

from __future__ import annotations

import os
import threading
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable


class BlockingQueue:
    """A FIFO queue of bounded capacity.

    :meth:`push` waits while the queue is full and :meth:`pop` waits while
    it is empty.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("queue size must be positive")
        self._size = size
        self._items: deque[Any] = deque()
        self._cond = threading.Condition()

    def push(self, item: Any) -> None:
        """Append ``item``, waiting for a free slot."""
        with self._cond:
            self._cond.wait_for(lambda: len(self._items) < self._size)
            self._items.append(item)
            self._cond.notify_all()

    def pop(self) -> Any:
        """Remove and return the oldest item, waiting for one to arrive."""
        with self._cond:
            self._cond.wait_for(lambda: bool(self._items))
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def empty(self) -> bool:
        """Tell whether the queue holds no items."""
        with self._cond:
            return not self._items

    def size(self) -> int:
        """Number of items currently queued."""
        with self._cond:
            return len(self._items)

    def max_size(self) -> int:
        """Capacity of the queue."""
        return self._size


class ThreadPool:
    """Workers that run callables taken from a bounded queue.

    An exception raised by work given to :meth:`enqueue_work` is raised
    again by :meth:`close`; one raised by a task goes to its future.
    """

    def __init__(self, queue_depth: int | None = None,
                 threads: int | None = None) -> None:
        cpus = os.cpu_count() or 1
        queue_depth = cpus if queue_depth is None else queue_depth
        threads = cpus if threads is None else threads
        if threads <= 0:
            raise ValueError("the pool needs at least one thread")
        self._queue = BlockingQueue(queue_depth)
        self._lock = threading.Lock()
        self._error: BaseException | None = None
        self._closed = False
        self._threads = [threading.Thread(target=self._run, daemon=True)
                         for _ in range(threads)]
        for t in self._threads:
            t.start()

    def _run(self) -> None:
        while True:
            item = self._queue.pop()
            if item is None:
                self._queue.push(None)
                return
            try:
                item()
            except BaseException as exc:  # noqa: BLE001
                with self._lock:
                    if self._error is None:
                        self._error = exc

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("the thread pool is closed")

    def enqueue_work(self, fn: Callable[..., Any], *args: Any) -> None:
        """Queue ``fn(*args)``, waiting while the queue is full."""
        self._check_open()
        self._queue.push(lambda: fn(*args))

    def enqueue_task(self, fn: Callable[..., Any], *args: Any) -> Future:
        """Queue ``fn(*args)`` and return a future for its result."""
        self._check_open()
        future: Future = Future()

        def task() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(fn(*args))
            except BaseException as exc:  # noqa: BLE001
                future.set_exception(exc)

        self._queue.push(task)
        return future

    def close(self) -> None:
        """Finish the queued work and stop the workers."""
        if not self._closed:
            self._closed = True
            self._queue.push(None)
            for t in self._threads:
                t.join()
        with self._lock:
            error, self._error = self._error, None
        if error is not None:
            raise error

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()