# -*- coding: utf-8 -*-

"""Combine several Views into one.

Both combinators only use the public `then()` contract: any object with a
Promises/A+ compatible `then` method can be combined, not only Views.
Items who are not thenable are considered as already fulfilled values.

Note: this module defines ``all()``, who shadows the builtin function of the
same name inside the module.
"""

from collections.abc import Iterable
from functools import partial

from .resolver import Resolver, resolved
from .util import is_thenable


def _collect(views):
    """Accept both `f(a, b, c)` and `f([a, b, c])` forms."""
    if len(views) == 1:
        first = views[0]
        if (not is_thenable(first) and isinstance(first, Iterable) and
                not isinstance(first, (str, bytes))):
            return list(first)
    return list(views)


def _as_thenable(item, settings):
    if is_thenable(item):
        return item
    return resolved(item, settings)


def all(*views, settings=None):
    """Create a View who waits a list of Views to be all fulfilled.

    The resulting View is fulfilled when all of the items are fulfilled, with
    the list of all the resulting values, keeping the order of the input list
    (not the order of settlement).
    If an item is rejected, then the resulting View is rejected with the same
    reason, and all results from other items are ignored.

    Args:
        *views: Views (or thenables), or a single list of them.
        settings (Settings, optional): settings of the resulting resolver.
    Returns:
        View<list>: fulfilled when all the items are fulfilled, or rejected
            as soon as one of them is rejected. Fulfilled with an empty list
            if there is no item.
    """
    views = _collect(views)
    resolver = Resolver(settings)
    results = [None] * len(views)
    nb_fulfilled = [0]

    if not views:
        resolver.fulfill(results)
        return resolver.view()

    def fulfill_one(index, value):
        results[index] = value
        nb_fulfilled[0] += 1
        if nb_fulfilled[0] == len(views):
            resolver.fulfill(results)

    for index, item in enumerate(views):
        _as_thenable(item, resolver.settings).then(partial(fulfill_one, index),
                                                   resolver.reject)

    return resolver.view()


def race(*views, settings=None):
    """Settle with the first item to be settled, fulfilled or rejected.

    The value (or the reason) of the first settled item is transmitted to the
    resulting View. The settlements of all other items are ignored.

    Args:
        *views: Views (or thenables), or a single list of them.
        settings (Settings, optional): settings of the resulting resolver.
    Returns:
        View: a View following the fastest item. If there is no item, it
            stays pending forever.
    """
    views = _collect(views)
    resolver = Resolver(settings)

    for item in views:
        _as_thenable(item, resolver.settings).then(resolver.fulfill,
                                                   resolver.reject)

    return resolver.view()
