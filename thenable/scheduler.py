# -*- coding: utf-8 -*-

"""Deferred-invocation primitives used to run resolver callbacks.

A scheduler is any callable taking a zero-argument task. It must run the task
later (never before the call returns), and tasks scheduled one after the other
must run in the same order.

Three implementations are available:

- ``QueueScheduler``: a FIFO task queue drained by its host, by calling
  ``run()``. It's the default: the host decides when the current call stack
  has unwound (end of a request, of a loop iteration, of a test step, ...).
- ``AsyncioScheduler``: delegates to an asyncio event loop.
- ``ThreadScheduler``: a single worker thread, consuming tasks in order.
"""

import asyncio
from collections import deque
from concurrent.futures import ThreadPoolExecutor
import logging
import threading

_logger = logging.getLogger(__name__)


class QueueScheduler(object):
    """FIFO task queue, drained on demand.

    Tasks can be added from any thread. They are executed by the thread
    calling ``run()``.
    """

    def __init__(self):
        self._tasks = deque()
        self._lock = threading.Lock()

    def __call__(self, task):
        with self._lock:
            self._tasks.append(task)

    defer = __call__

    @property
    def pending(self):
        """int: number of tasks waiting to be executed."""
        with self._lock:
            return len(self._tasks)

    def run(self):
        """Execute all tasks until the queue is empty.

        Tasks scheduled by other tasks while draining are executed in the same
        call.
        If a task raises an exception, it's propagated to the caller. The
        tasks not executed yet stay in the queue, and will be executed by the
        next call to ``run()``.

        Returns:
            int: the number of tasks executed.
        """
        count = 0
        while True:
            with self._lock:
                if not self._tasks:
                    return count
                task = self._tasks.popleft()
            count += 1
            task()


class AsyncioScheduler(object):
    """Schedule tasks on an asyncio event loop.

    The event loop guarantees the FIFO order of ``call_soon()`` callbacks.
    Exceptions escaping a task are handled by the loop's exception handler.
    """

    def __init__(self, loop=None):
        """
        Args:
            loop (AbstractEventLoop, optional): the target event loop. If not
                set, the loop running in the calling thread is used at each
                call. A loop must be set to defer tasks from threads without a
                running loop.
        """
        self._loop = loop

    def __call__(self, task):
        loop = self._loop
        if loop is None:
            loop = asyncio.get_running_loop()
        loop.call_soon_threadsafe(task)

    defer = __call__


class ThreadScheduler(object):
    """Execute tasks in order, in a dedicated worker thread."""

    def __init__(self, name='thenable'):
        """
        Args:
            name (str): prefix of the worker thread's name.
        """
        self._executor = ThreadPoolExecutor(max_workers=1,
                                            thread_name_prefix=name)

    def __call__(self, task):
        future = self._executor.submit(task)
        future.add_done_callback(self._log_failure)

    defer = __call__

    def shutdown(self, wait=True):
        """Stop the worker thread once all scheduled tasks are executed.

        Args:
            wait (boolean): if True, block until the pending tasks are done.
        """
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _log_failure(future):
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            _logger.error('Deferred task raised an exception',
                          exc_info=(type(error), error, error.__traceback__))


_schedulers = {
    'queue': QueueScheduler,
    'asyncio': AsyncioScheduler,
    'thread': ThreadScheduler
}


def create_scheduler(name):
    """Build a scheduler from its name, as found in the config file.

    Args:
        name (str): one of 'queue', 'asyncio' or 'thread'.
    Returns:
        callable: a new scheduler instance.
    Raises:
        ValueError: if the name is unknown.
    """
    try:
        factory = _schedulers[name]
    except KeyError:
        raise ValueError('Unknown scheduler "%s". Valid values are: %s'
                         % (name, ', '.join(sorted(_schedulers))))
    return factory()
