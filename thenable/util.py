# -*- coding: utf-8 -*-


def is_thenable(value):
    """Check if an object can be chained, like a View, or is a "result".

    The resolver module uses this test to differentiate "chainable" objects
    and direct values, when a callback can return both.

    Note that the resolution procedure does not call this function: it must
    read the `then` attribute exactly once, and so does the check itself.

    Returns:
        boolean: True if the value has an attribute 'then' who is callable.
            False if not.
    """
    return callable(getattr(value, 'then', None))
