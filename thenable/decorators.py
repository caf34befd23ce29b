# -*- coding: utf-8 -*-

import functools
import logging

from .resolver import from_executor

_logger = logging.getLogger(__name__)


def wrap_view(f=None, settings=None):
    """Decorator who converts the result in a View object.

    If the function decorated returns a thenable, the View follows it.
    Else, the View is fulfilled with the returned value. If the function
    raises an exception, the View is rejected with it.

    It can be used directly (``@wrap_view``), or with settings for the
    resulting Views (``@wrap_view(settings=my_settings)``).
    """
    if f is None:
        return functools.partial(wrap_view, settings=settings)

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        def executor(resolver):
            resolver.adopt(f(*args, **kwargs))
        return from_executor(executor, settings)

    return wrapper


def safeguard(view, logger=None):
    """Catch all errors and log them with the most details possible.

    This function is aimed to protect the program from uncaught rejected
    Views. If no error handler has been set (via then() or catch()), the
    default behavior is to do nothing, and thus, errors are silently
    ignored.
    Calling `safeguard()` after all chains are set will catch these errors,
    and log them as ERROR with the maximum of details possible.

    Args:
        view (View): the view to watch.
        logger (Logger, optional): logger used to report the rejection.
    """
    logger = logger or _logger

    def guard(reason):
        if isinstance(reason, BaseException):
            logger.error('[SAFEGUARD] %s', view,
                         exc_info=(type(reason), reason, reason.__traceback__))
        else:
            logger.error('[SAFEGUARD] %s rejected with: %r', view, reason)

    view.catch(guard)
