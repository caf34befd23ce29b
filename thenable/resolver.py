# -*- coding: utf-8 -*-

"""Resolver state machine, chaining and thenable resolution.

A ``Resolver`` is the producer side of an asynchronous value: it starts
pending, then is settled exactly once, either fulfilled with a value or
rejected with a reason. A ``View`` is the consumer side: it only allows to
chain callbacks with ``then()`` and ``catch()``.

Callbacks are never executed synchronously. They are always executed by the
scheduler of the resolver's settings, after the call who registered them (or
who settled the resolver) has returned.

Example:

    >>> from thenable import run
    >>> resolver = Resolver()
    >>> view = resolver.view()
    >>> view.then(lambda value: value * 2).then(print)
    >>> resolver.fulfill(21)
    >>> run()
    42
"""

from collections import deque
from functools import partial
import threading

from .errors import SelfResolutionError
from .events import EXCEPTION, REJECT, RESOLVE
from .settings import get_default_settings

# Values who can't have a `then` attribute; no need to look for it.
_SCALAR_TYPES = (type(None), bool, int, float, complex, str, bytes)


class Resolver(object):
    """Settlement cell of a deferred value.

    All calls to the methods are thread-safe: a resolver can be settled from
    a worker thread while callbacks are chained from another one.
    """

    PENDING = 'pending'
    FULFILLED = 'fulfilled'
    REJECTED = 'rejected'

    def __init__(self, settings=None):
        """
        Args:
            settings (Settings, optional): scheduler, exception capture and
                instrumentation used by this resolver and all resolvers
                chained from it. Default settings if not set.
        """
        if settings is None:
            settings = get_default_settings()
        self._settings = settings
        self._state = self.PENDING
        self._result = None
        self._lock = threading.Lock()
        self._callbacks = deque()
        self._errbacks = deque()
        self._drain_scheduled = False
        self._view = View(self)

    @property
    def state(self):
        """str: one of PENDING, FULFILLED or REJECTED."""
        return self._state

    @property
    def result(self):
        """The fulfillment value or rejection reason. None while pending."""
        return self._result

    @property
    def settings(self):
        return self._settings

    def view(self):
        """Returns the View associated to this resolver.

        There is only one View by resolver: successive calls return the same
        object.
        """
        return self._view

    promise = view

    def fulfill(self, value=None):
        """Fulfill the resolver with a value.

        The value is stored as is, even if it's a thenable. Use ``adopt()`` to
        wait for the outcome of a thenable.
        Calls on an already settled resolver are ignored.
        """
        if self._settle(self.FULFILLED, value):
            self._settings.publish(RESOLVE, value)

    resolve = fulfill

    def reject(self, reason=None):
        """Reject the resolver. Any value can be used as a reason.

        Calls on an already settled resolver are ignored.
        """
        if self._settle(self.REJECTED, reason):
            self._settings.publish(REJECT, reason)

    def adopt(self, value):
        """Settle the resolver with the eventual outcome of `value`.

        If `value` is a thenable, the resolver will follow its state (once
        settled, recursively). Otherwise it's fulfilled with `value`.
        """
        resolve_thenable(self, value)

    def _settle(self, state, result):
        """Change the state, and schedule the drain of the matching queue.

        The drain is scheduled before any event is published: listeners
        added by a subscriber are queued behind the existing ones.

        Returns:
            bool: False if the resolver was already settled.
        """
        with self._lock:
            if self._state != self.PENDING:
                return False
            self._result = result
            self._state = state
            # The queue of the other outcome will never be drained.
            if state == self.FULFILLED:
                self._errbacks.clear()
            else:
                self._callbacks.clear()
            must_drain = bool(self._settled_queue())
            self._drain_scheduled = must_drain
        if must_drain:
            self._settings.defer(self._drain)
        return True

    def _settled_queue(self):
        if self._state == self.FULFILLED:
            return self._callbacks
        return self._errbacks

    def _drain(self):
        # The queue is read at each step: callbacks appended after the drain
        # has been scheduled are executed too.
        queue = self._settled_queue()
        while True:
            with self._lock:
                if not queue:
                    self._drain_scheduled = False
                    return
                callback = queue.popleft()
            try:
                callback(self._result)
            except Exception:
                with self._lock:
                    must_drain = bool(queue)
                    self._drain_scheduled = must_drain
                if must_drain:
                    self._settings.defer(self._drain)
                raise

    def _add_listener(self, state, callback):
        with self._lock:
            if self._state == self.PENDING:
                if state == self.FULFILLED:
                    self._callbacks.append(callback)
                else:
                    self._errbacks.append(callback)
                return
            if self._state != state:
                return
            if self._drain_scheduled:
                # Older callbacks are still queued: run after them.
                self._settled_queue().append(callback)
                return
            result = self._result

        self._settings.defer(partial(callback, result))

    def __repr__(self):
        return 'Resolver(%s)' % self._state


class View(object):
    """Read-only side of a Resolver.

    It can't settle the resolver; it only allows to chain callbacks.
    """

    __slots__ = ('_resolver',)

    def __init__(self, resolver):
        self._resolver = resolver

    def then(self, on_fulfilled=None, on_rejected=None):
        """Create a new View from callbacks called when this one is settled.

        If the resolver is fulfilled, `on_fulfilled` is called with the value.
        If it's rejected, `on_rejected` is called with the reason.
        In any case, the callback defines the state of the returned View. If
        the callback raises an exception, the new View is rejected. The
        callback can return:
        - A value: the new View will be fulfilled with this value.
        - Another View, or any object with a `then` method: when fulfilled
            or rejected, will transfer its status (state and value/reason) to
            the View returned by this method.

        If a callback is not callable, the state of this View is transferred
        to the new View as is (the state and the value/reason).

        The callbacks are never called before this method returns.

        Args:
            on_fulfilled (callable, optional): receives the value.
            on_rejected (callable, optional): receives the rejection reason.
        Returns:
            View: new View depending of self.
        """
        return then(self._resolver, on_fulfilled, on_rejected)

    def catch(self, on_rejected):
        """Alias of `self.then(None, on_rejected)`.

        Returns:
            View: new View chained to `self`. If `self` is fulfilled, the value
                will be the same as `self`. Otherwise, the value returned by
                the `on_rejected()` callback.
        """
        return then(self._resolver, None, on_rejected)

    def __repr__(self):
        return 'View(%s)' % self._resolver.state


def then(resolver, on_fulfilled=None, on_rejected=None):
    """Chain callbacks to a resolver. See ``View.then()``.

    Returns:
        View: the View of a new resolver, settled by the callbacks.
    """
    next_resolver = Resolver(resolver.settings)
    next_view = next_resolver.view()

    if callable(on_fulfilled):
        callback = _wrap_callback(next_resolver, next_view, on_fulfilled)
    else:
        callback = next_resolver.fulfill

    if callable(on_rejected):
        errback = _wrap_callback(next_resolver, next_view, on_rejected)
    else:
        errback = next_resolver.reject

    resolver._add_listener(Resolver.FULFILLED, callback)
    resolver._add_listener(Resolver.REJECTED, errback)
    return next_view


def _wrap_callback(resolver, view, callback):
    """Make a callback settling `resolver` with its own result."""
    settings = resolver.settings

    def wrapper(value):
        if settings.capture_exceptions:
            try:
                result = callback(value)
            except Exception as error:
                settings.publish(EXCEPTION, error)
                resolver.reject(error)
                return
        else:
            result = callback(value)

        if result is view:
            error = SelfResolutionError(
                'A callback returned the View chained to its own result')
            settings.publish(EXCEPTION, error)
            resolver.reject(error)
            return
        resolve_thenable(resolver, result)

    return wrapper


def resolve_thenable(resolver, value):
    """Settle `resolver` with `value`, unwrapping thenables.

    If `value` has a callable `then` attribute, it's called with two
    callbacks. The first one to be called decides the outcome; others calls
    are ignored. A fulfillment value is resolved again (nested thenables are
    fully unwrapped), a rejection reason rejects the resolver.
    Non-thenable values fulfill the resolver directly.

    The `then` attribute is read only once: a thenable may return a different
    value at each access.

    If reading or calling `then` raises an exception before any callback has
    been called, the resolver is rejected with it. Exceptions raised after are
    ignored: the outcome is already decided.
    """
    if isinstance(value, _SCALAR_TYPES):
        resolver.fulfill(value)
        return

    settings = resolver.settings
    called = [False]

    def on_inner_fulfilled(inner_value):
        if called[0]:
            return
        called[0] = True
        resolve_thenable(resolver, inner_value)

    def on_inner_rejected(reason):
        if called[0]:
            return
        called[0] = True
        resolver.reject(reason)

    def work():
        then_attr = getattr(value, 'then', None)
        if callable(then_attr):
            then_attr(on_inner_fulfilled, on_inner_rejected)
        else:
            resolver.fulfill(value)

    if not settings.capture_exceptions:
        work()
        return

    try:
        work()
    except Exception as error:
        if called[0]:
            return
        called[0] = True
        settings.publish(EXCEPTION, error)
        resolver.reject(error)


def from_executor(fn, settings=None):
    """Create a resolver, pass it to `fn` and returns its View.

    `fn` is executed synchronously, before this function returns. It's
    expected to settle the resolver, now or later. If it raises an exception
    (and exceptions are captured), the resolver is rejected with it.

    Args:
        fn (callable): receives the new Resolver as only argument.
        settings (Settings, optional)
    Returns:
        View
    """
    resolver = Resolver(settings)
    settings = resolver.settings

    if settings.capture_exceptions:
        try:
            fn(resolver)
        except Exception as error:
            settings.publish(EXCEPTION, error)
            resolver.reject(error)
    else:
        fn(resolver)
    return resolver.view()


def resolved(value=None, settings=None):
    """Create a View already fulfilled with `value`."""
    resolver = Resolver(settings)
    resolver.fulfill(value)
    return resolver.view()


fulfilled = resolved


def rejected(reason=None, settings=None):
    """Create a View already rejected for the reason specified."""
    resolver = Resolver(settings)
    resolver.reject(reason)
    return resolver.view()
