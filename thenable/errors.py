# -*- coding: utf-8 -*-


class SelfResolutionError(TypeError):
    """A continuation returned the very View its result was chained into.

    Adopting such a value would wait on itself forever. The derived resolver
    is rejected with this error instead.
    """
    pass
