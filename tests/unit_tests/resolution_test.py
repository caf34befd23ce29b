# -*- coding: utf-8 -*-

import pytest

from thenable import Resolver, is_thenable, resolve_thenable, resolved


class Recorder(object):

    def __init__(self):
        self.calls = []

    def __call__(self, value):
        self.calls.append(value)


class AsyncThenable(object):
    """Thenable settling through the scheduler, like a foreign promise."""

    def __init__(self, scheduler, value):
        self._scheduler = scheduler
        self._value = value

    def then(self, on_fulfilled, on_rejected=None):
        self._scheduler(lambda: on_fulfilled(self._value))


class CountingThenable(object):
    """Count the accesses to the `then` attribute."""

    def __init__(self):
        self.nb_access = 0

    @property
    def then(self):
        self.nb_access += 1

        def _then(on_fulfilled, on_rejected):
            on_fulfilled('counted')
        return _then


class TestResolutionProcedure(object):

    def test_plain_value(self, settings, scheduler):
        r = Resolver(settings)
        resolve_thenable(r, 5)
        assert r.state == Resolver.FULFILLED
        assert r.result == 5

    def test_object_without_then(self, settings):
        value = {'then': 'not an attribute'}
        r = Resolver(settings)
        resolve_thenable(r, value)
        assert r.result is value

    def test_non_callable_then(self, settings):
        class NotThenable(object):
            then = 42

        value = NotThenable()
        r = Resolver(settings)
        resolve_thenable(r, value)
        assert r.state == Resolver.FULFILLED
        assert r.result is value

    def test_nested_thenables_are_flattened(self, settings, scheduler):
        """An async thenable resolving to another one, two levels deep."""
        innermost = AsyncThenable(scheduler, 'innermost')
        middle = AsyncThenable(scheduler, innermost)
        outer = AsyncThenable(scheduler, middle)

        r = Resolver(settings)
        r.adopt(outer)
        assert r.state == Resolver.PENDING
        scheduler.run()
        assert r.state == Resolver.FULFILLED
        assert r.result == 'innermost'

    def test_nested_views_are_flattened(self, settings, scheduler):
        inner = Resolver(settings)
        r = Resolver(settings)
        r.adopt(resolved(inner.view(), settings))
        scheduler.run()
        assert r.state == Resolver.PENDING

        inner.fulfill('deep')
        scheduler.run()
        assert r.result == 'deep'

    def test_then_is_read_once(self, settings):
        value = CountingThenable()
        r = Resolver(settings)
        resolve_thenable(r, value)
        assert value.nb_access == 1
        assert r.result == 'counted'

    def test_only_first_inner_call_counts(self, settings):
        class Thenable(object):
            def then(self, on_fulfilled, on_rejected):
                on_rejected('first')
                on_fulfilled('second')
                on_rejected('third')

        r = Resolver(settings)
        resolve_thenable(r, Thenable())
        assert r.state == Resolver.REJECTED
        assert r.result == 'first'

    def test_then_raising_rejects(self, settings):
        class Err(Exception):
            pass

        error = Err()

        class Thenable(object):
            def then(self, on_fulfilled, on_rejected):
                raise error

        r = Resolver(settings)
        resolve_thenable(r, Thenable())
        assert r.state == Resolver.REJECTED
        assert r.result is error

    def test_then_getter_raising_rejects(self, settings):
        class Thenable(object):
            @property
            def then(self):
                raise ValueError('no access')

        r = Resolver(settings)
        resolve_thenable(r, Thenable())
        assert r.state == Resolver.REJECTED
        assert isinstance(r.result, ValueError)

    def test_exception_after_inner_call_is_ignored(self, settings):
        class Thenable(object):
            def then(self, on_fulfilled, on_rejected):
                on_fulfilled('value')
                raise ValueError()

        r = Resolver(settings)
        resolve_thenable(r, Thenable())
        assert r.state == Resolver.FULFILLED
        assert r.result == 'value'

    def test_exception_propagates_without_capture(self, settings):
        class Thenable(object):
            def then(self, on_fulfilled, on_rejected):
                raise ValueError()

        settings.capture_exceptions = False
        r = Resolver(settings)
        with pytest.raises(ValueError):
            resolve_thenable(r, Thenable())
        assert r.state == Resolver.PENDING

    def test_callback_returning_async_thenable(self, settings, scheduler):
        result = Recorder()
        nested = AsyncThenable(scheduler, AsyncThenable(scheduler, 'end'))
        resolved(None, settings).then(lambda _: nested).then(result)
        scheduler.run()
        assert result.calls == ['end']


class TestAdopt(object):

    def test_fulfill_keeps_thenable_as_is(self, settings, scheduler):
        inner = resolved(3, settings)
        r = Resolver(settings)
        r.fulfill(inner)
        assert r.result is inner

    def test_adopt_follows_thenable(self, settings, scheduler):
        r = Resolver(settings)
        r.adopt(AsyncThenable(scheduler, 'later'))
        assert r.state == Resolver.PENDING
        scheduler.run()
        assert r.state == Resolver.FULFILLED
        assert r.result == 'later'

    def test_adopt_rejected_view(self, settings, scheduler):
        inner = Resolver(settings)
        r = Resolver(settings)
        r.adopt(inner.view())
        inner.reject('reason')
        scheduler.run()
        assert r.state == Resolver.REJECTED
        assert r.result == 'reason'


class TestIsThenable(object):

    @pytest.mark.parametrize('value', [None, 42, 'then', {'then': 1}, []])
    def test_not_thenable(self, value):
        assert not is_thenable(value)

    def test_view_is_thenable(self, settings):
        assert is_thenable(Resolver(settings).view())

    def test_foreign_thenable(self):
        assert is_thenable(CountingThenable())
