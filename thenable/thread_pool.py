# -*- coding: utf-8 -*-

from concurrent.futures import ThreadPoolExecutor as Executor

from .resolver import Resolver


class ThreadPoolExecutor(object):
    """Execute callables asynchronously on demand, in another threads."""

    def __init__(self, max_workers, settings=None):
        """Initialize the thread pool

        Args:
            max_workers: The maximum number of threads that can be used to
                execute the given calls.
            settings (Settings, optional): settings of the resolvers created
                by ``submit()``.
        """
        self._executor = Executor(max_workers)
        self._settings = settings

    def submit(self, callback, *args, **kwargs):
        """Schedule the callable to be executed and return a View.

        Args:
            callback (callable): callback who will run in another thread.
            *args: argument passed to callback.
            **kwargs: keywords arguments passed to callback.
        Returns:
            View: View who settles after the callback has been executed.
                It's fulfilled with the value returned by the callback.
                If the callback raise an exception, the View is rejected
                with this exception.
        """
        resolver = Resolver(self._settings)

        def on_future_done(f):
            try:
                resolver.fulfill(f.result())
            except Exception as error:
                resolver.reject(error)

        f = self._executor.submit(callback, *args, **kwargs)
        f.add_done_callback(on_future_done)

        return resolver.view()

    def shutdown(self, wait=True):
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)
