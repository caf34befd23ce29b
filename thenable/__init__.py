# -*- coding: utf-8 -*-

from .__version__ import __version__  # noqa

from .combinators import all, race
from .context import ContextScheduler, propagate_context
from .decorators import safeguard, wrap_view
from .errors import SelfResolutionError
from .events import EXCEPTION, REJECT, RESOLVE, EventBus
from .reduce_coroutine import reduce_coroutine
from .resolver import (Resolver, View, from_executor, fulfilled, rejected,
                       resolve_thenable, resolved)
from .scheduler import AsyncioScheduler, QueueScheduler, ThreadScheduler
from .settings import (Settings, disable_instrumentation,
                       enable_instrumentation, get_default_settings, run,
                       set_default_settings, set_exception_capture,
                       set_scheduler)
from .thread_pool import ThreadPoolExecutor
from .util import is_thenable

__all__ = [
    'AsyncioScheduler', 'ContextScheduler', 'EventBus', 'EXCEPTION',
    'QueueScheduler', 'REJECT', 'RESOLVE', 'Resolver', 'SelfResolutionError',
    'Settings', 'ThreadPoolExecutor', 'ThreadScheduler', 'View', 'all',
    'disable_instrumentation', 'enable_instrumentation', 'from_executor',
    'fulfilled', 'get_default_settings', 'is_thenable', 'propagate_context',
    'race', 'reduce_coroutine', 'rejected', 'resolve_thenable', 'resolved',
    'run', 'safeguard', 'set_default_settings', 'set_exception_capture',
    'set_scheduler', 'wrap_view'
]
