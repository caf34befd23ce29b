# -*- coding: utf-8 -*-

import logging

from thenable import Resolver, View, rejected, resolved, safeguard, wrap_view


class Recorder(object):

    def __init__(self):
        self.calls = []

    def __call__(self, value):
        self.calls.append(value)


class TestWrapView(object):

    def test_wrap_sync_function(self, default_settings, scheduler):
        @wrap_view
        def f(x):
            return x * 3

        result = Recorder()
        v = f(30)
        assert isinstance(v, View)
        v.then(result)
        scheduler.run()
        assert result.calls == [90]

    def test_wrap_function_returning_view(self, default_settings, scheduler):
        @wrap_view
        def f(x):
            return resolved(x + 10)

        result = Recorder()
        f(30).then(result)
        scheduler.run()
        assert result.calls == [40]

    def test_wrap_function_with_exception(self, default_settings, scheduler):
        class MyException(Exception):
            pass

        @wrap_view
        def f(x):
            raise MyException()

        errback = Recorder()
        f(30).catch(errback)
        scheduler.run()
        assert isinstance(errback.calls[0], MyException)

    def test_wrapper_keeps_function_name(self):
        @wrap_view
        def my_function():
            pass

        assert my_function.__name__ == 'my_function'

    def test_wrap_with_settings(self, settings, scheduler):
        @wrap_view(settings=settings)
        def f(x):
            return x + 1

        result = Recorder()
        v = f(1)
        assert v._resolver.settings is settings
        v.then(result)
        scheduler.run()
        assert result.calls == [2]


class TestSafeguard(object):

    def test_safeguard_logs_exception(self, settings, scheduler, caplog):
        class Err(Exception):
            pass

        view = rejected(Err('ERROR'), settings)
        safeguard(view)
        with caplog.at_level(logging.ERROR, logger='thenable.decorators'):
            scheduler.run()

        assert '[SAFEGUARD]' in caplog.text
        assert 'Err' in caplog.text
        assert caplog.records[0].exc_info[0] is Err

    def test_safeguard_logs_non_exception_reason(self, settings, scheduler,
                                                 caplog):
        safeguard(rejected('plain reason', settings))
        with caplog.at_level(logging.ERROR, logger='thenable.decorators'):
            scheduler.run()
        assert 'plain reason' in caplog.text

    def test_safeguard_custom_logger(self, settings, scheduler, caplog):
        logger = logging.getLogger('custom.logger')
        safeguard(rejected('x', settings), logger=logger)
        with caplog.at_level(logging.ERROR, logger='custom.logger'):
            scheduler.run()
        assert caplog.records[0].name == 'custom.logger'

    def test_safeguard_ignores_fulfilled_view(self, settings, scheduler,
                                              caplog):
        r = Resolver(settings)
        safeguard(r.view())
        r.fulfill('ok')
        with caplog.at_level(logging.ERROR):
            scheduler.run()
        assert '[SAFEGUARD]' not in caplog.text
