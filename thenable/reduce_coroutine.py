# -*- coding: utf-8 -*-

import functools

from .decorators import safeguard as safeguard_view
from .resolver import Resolver
from .util import is_thenable


def reduce_coroutine(safeguard=False, settings=None):
    """Decorator who converts a coroutine of Views into a single View.

    The greatest interest is the ability to write a function in an
    synchronous-like style, using many asynchronous Views.
    Whatever is the number of Views or async calls used, the result will
    always be an unique View wrapping the whole process.

    Each thenable yielded is waited: its value is sent back to the generator,
    or its rejection reason is raised at the `yield` expression.
    The result is the last value yielded (or the value returned by the
    generator, if any). The first non-thenable value yielded ends the
    coroutine.

    Args:
        safeguard (boolean): if true, use `safeguard()` on the resulting
            View.
        settings (Settings, optional): settings of the resulting View.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            """
            Args:
                *args
                **kwargs
            Returns:
                View<*>
            """
            resolver = Resolver(settings)
            view = resolver.view()
            if safeguard:
                safeguard_view(view)

            try:
                # Create generator; Initialization phase
                gen = func(*args, **kwargs)
            except Exception as error:
                resolver.reject(error)
                return view

            def _call_next_or_set_result(value):
                if is_thenable(value):
                    value.then(iter_next, iter_error)
                else:
                    gen.close()
                    resolver.fulfill(value)

            def iter_next(yielded_value):
                try:
                    next_value = gen.send(yielded_value)
                except StopIteration as stop:
                    if stop.value is not None:
                        yielded_value = stop.value
                    return resolver.fulfill(yielded_value)
                except Exception as error:
                    return resolver.reject(error)
                _call_next_or_set_result(next_value)

            def iter_error(reason):
                if not isinstance(reason, BaseException):
                    # Can't be raised inside the generator.
                    gen.close()
                    return resolver.reject(reason)
                try:
                    next_value = gen.throw(reason)
                except StopIteration as stop:
                    if stop.value is not None:
                        return resolver.fulfill(stop.value)
                    return resolver.reject(reason)
                except Exception as error:
                    return resolver.reject(error)
                _call_next_or_set_result(next_value)

            # Start and resolve loop.
            try:
                first_value = next(gen)
            except StopIteration as stop:
                resolver.fulfill(stop.value)
                return view
            except Exception as error:
                resolver.reject(error)
                return view
            _call_next_or_set_result(first_value)

            return view

        return wrapper
    return decorator
