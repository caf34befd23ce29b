# -*- coding: utf-8 -*-

"""Propagate an execution context to deferred callbacks.

When many logically independent flows (eg: requests of a server) share the
same scheduler, the callbacks of a flow must run with the ambient state of
this flow, not with the state of the last flow executed.

``ContextScheduler`` wraps another scheduler: it captures a context token
when a task is scheduled, and restores it right before running the task.

Two kinds of context are supported:

- ``contextvars``, by default: the task runs inside a copy of the context
  current at scheduling time.
- an application object, with ``get_context()`` and ``set_context(token)``
  methods, for hosts managing their own notion of request context.
"""

import contextvars
from functools import partial

from .settings import get_default_settings


class ContextScheduler(object):
    """Scheduler restoring, for each task, the context of its scheduling.

    Attributes not defined here (like ``run()`` or ``shutdown()``) are
    delegated to the wrapped scheduler.
    """

    def __init__(self, scheduler, get_context=None, set_context=None):
        """
        Args:
            scheduler (callable): the wrapped scheduler.
            get_context (callable, optional): returns the current context
                token. If not set, ``contextvars`` are used.
            set_context (callable, optional): receives a token, and makes it
                the current context. Required if `get_context` is set.
        """
        if (get_context is None) is not (set_context is None):
            raise ValueError('get_context and set_context must be set '
                             'together')
        self._scheduler = scheduler
        self._get_context = get_context
        self._set_context = set_context

    def __call__(self, task):
        if self._get_context is None:
            context = contextvars.copy_context()
            self._scheduler(partial(context.run, task))
            return

        token = self._get_context()
        set_context = self._set_context

        def run_in_context():
            set_context(token)
            task()

        self._scheduler(run_in_context)

    defer = __call__

    @property
    def wrapped(self):
        return self._scheduler

    def __getattr__(self, name):
        if name == '_scheduler':
            raise AttributeError(name)
        return getattr(self._scheduler, name)


def propagate_context(settings=None, app=None):
    """Install a ContextScheduler in front of the current scheduler.

    Args:
        settings (Settings, optional): settings to modify. Default settings
            if not set.
        app (optional): object with ``get_context()`` and
            ``set_context(context)`` methods. If not set, ``contextvars`` are
            propagated.
    Returns:
        ContextScheduler: the new scheduler of the settings.
    """
    if settings is None:
        settings = get_default_settings()

    if app is None:
        scheduler = ContextScheduler(settings.scheduler)
    else:
        scheduler = ContextScheduler(settings.scheduler, app.get_context,
                                     app.set_context)
    settings.scheduler = scheduler
    return scheduler
