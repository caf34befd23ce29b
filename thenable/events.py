# -*- coding: utf-8 -*-

"""Instrumentation bus broadcasting settlement events.

Resolvers never log. When instrumentation is enabled (see
``thenable.enable_instrumentation()``), they publish three events on the bus:

- ``resolve``: a resolver has been fulfilled. The payload is the value.
- ``reject``: a resolver has been rejected. The payload is the reason.
- ``exception``: an exception raised by a callback (or a thenable) has been
  captured and converted into a rejection. The payload is the exception.

Any object with a ``publish(event, payload)`` method can act as a bus.
``EventBus`` is the default implementation.
"""

import logging
import threading

_logger = logging.getLogger(__name__)

RESOLVE = 'resolve'
REJECT = 'reject'
EXCEPTION = 'exception'


class EventBus(object):
    """Publish/subscribe collaborator, keyed by event name.

    Handlers of an event are called in subscription order. Events are
    published from any thread settling a resolver, so subscriptions can be
    changed while an event is being published.

    A handler raising an exception doesn't stop the publication: the error is
    logged, and the next handlers are still called.

    Example:

        >>> bus = EventBus()
        >>> bus.subscribe(REJECT, lambda reason: print('rejected: %s' % reason))
        >>> bus.publish(REJECT, 'boom')
        rejected: boom
    """

    def __init__(self):
        self._handlers = {}
        self._lock = threading.Lock()

    def subscribe(self, event, handler):
        """Register a handler, called with the payload of each `event`."""
        with self._lock:
            self._handlers.setdefault(event, []).append(handler)

    def unsubscribe(self, event, handler):
        """Remove a handler.

        Returns:
            bool: True if the handler was subscribed to this event.
        """
        with self._lock:
            try:
                self._handlers.get(event, []).remove(handler)
            except ValueError:
                return False
        return True

    def subscribers(self, event):
        """Returns the list of handlers subscribed to `event`."""
        with self._lock:
            return list(self._handlers.get(event, ()))

    def publish(self, event, payload):
        for handler in self.subscribers(event):
            try:
                handler(payload)
            except Exception:
                _logger.exception('Handler %r of event "%s" raised an '
                                  'exception', handler, event)

    def clear(self):
        """Unsubscribe all handlers, from all events."""
        with self._lock:
            self._handlers.clear()
