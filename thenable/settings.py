# -*- coding: utf-8 -*-

"""Process-wide settings shared by resolvers.

Each resolver holds a reference to a ``Settings`` instance, given at
construction (or the default instance), and every resolver derived from it by
``then()`` shares the same one. Tests, or independent parts of an application,
can so run with isolated settings.

The module-level functions (``set_exception_capture()``, ``set_scheduler()``,
``enable_instrumentation()``, ...) act on the default settings unless another
instance is passed.
"""

from .common import log
from .scheduler import QueueScheduler, create_scheduler


class Settings(object):
    """Configuration of a family of resolvers.

    Attributes:
        scheduler (callable): deferred-invocation primitive. It takes a
            zero-argument task, and must execute it later, in FIFO order.
        capture_exceptions (boolean): if True, exceptions raised by callbacks
            are caught and converted into rejections. If False, they escape
            the scheduled task (useful to debug).
        bus: instrumentation bus, or None when instrumentation is disabled.
            It must have a ``publish(event, payload)`` method.
    """

    def __init__(self, scheduler=None, capture_exceptions=True, bus=None):
        if scheduler is None:
            scheduler = QueueScheduler()
        self.scheduler = scheduler
        self.capture_exceptions = capture_exceptions
        self.bus = bus

    def defer(self, task):
        self.scheduler(task)

    def publish(self, event, payload):
        bus = self.bus
        if bus is not None:
            bus.publish(event, payload)

    @classmethod
    def from_config(cls, config):
        """Build settings from a config file, and apply its log settings.

        Args:
            config (thenable.common.config.Config): loaded config.
        Returns:
            Settings
        """
        log.set_debug_mode(config.get('debug_mode'))
        log.set_logs_level(config.get('log_levels'))
        return cls(scheduler=create_scheduler(config.get('scheduler')),
                   capture_exceptions=config.get('capture_exceptions'))

    def __repr__(self):
        return 'Settings(scheduler=%r, capture_exceptions=%s, bus=%r)' % (
            self.scheduler, self.capture_exceptions, self.bus)


_default_settings = Settings()


def get_default_settings():
    return _default_settings


def set_default_settings(settings):
    """Replace the default settings, used by resolvers created without any.

    Resolvers already created keep their settings.
    """
    global _default_settings
    _default_settings = settings


def set_exception_capture(enabled, settings=None):
    """Enable or disable the capture of exceptions raised in callbacks.

    Args:
        enabled (boolean)
        settings (Settings, optional): target settings. Default settings if
            not set.
    """
    settings = settings or _default_settings
    settings.capture_exceptions = bool(enabled)


def enable_instrumentation(bus, settings=None):
    """Broadcast the `resolve`, `reject` and `exception` events on a bus.

    Args:
        bus: object with a ``publish(event, payload)`` method, like
            ``thenable.events.EventBus``.
        settings (Settings, optional): target settings.
    Raises:
        TypeError: if the bus has no callable `publish` attribute.
    """
    if not callable(getattr(bus, 'publish', None)):
        raise TypeError('The instrumentation bus must have a publish() method')
    settings = settings or _default_settings
    settings.bus = bus


def disable_instrumentation(settings=None):
    settings = settings or _default_settings
    settings.bus = None


def set_scheduler(scheduler, settings=None):
    """Replace the deferred-invocation primitive.

    Args:
        scheduler (callable): takes a task (callable without argument) and
            run it later, preserving the order of tasks.
        settings (Settings, optional): target settings.
    Raises:
        TypeError: if the scheduler is not callable.
    """
    if not callable(scheduler):
        raise TypeError('The scheduler must be callable')
    settings = settings or _default_settings
    settings.scheduler = scheduler


def run(settings=None):
    """Drain the task queue of the scheduler.

    Only schedulers drained by their host (like ``QueueScheduler``) support
    this operation.

    Returns:
        int: the number of tasks executed.
    Raises:
        TypeError: if the scheduler can't be drained on demand.
    """
    settings = settings or _default_settings
    drain = getattr(settings.scheduler, 'run', None)
    if not callable(drain):
        raise TypeError('Scheduler %r has no task queue to run'
                        % settings.scheduler)
    return drain()
