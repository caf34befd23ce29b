# -*- coding: utf-8 -*-

from thenable import ThreadPoolExecutor


class TestThreadPoolExecutor(object):

    def test_small_task(self, settings, scheduler):
        results = []

        def task(arg):
            return 'OK %s' % arg

        with ThreadPoolExecutor(1, settings) as executor:
            v = executor.submit(task, 'ARG')
            v.then(results.append)

        scheduler.run()
        assert results == ['OK ARG']

    def test_task_failure(self, settings, scheduler):
        class MyException(Exception):
            pass

        errors = []

        def task(arg):
            raise MyException

        executor = ThreadPoolExecutor(1, settings)
        executor.submit(task, 'ARG').catch(errors.append)
        executor.shutdown()

        scheduler.run()
        assert len(errors) == 1
        assert isinstance(errors[0], MyException)

    def test_several_tasks(self, settings, scheduler):
        results = []

        with ThreadPoolExecutor(4, settings) as executor:
            for i in range(10):
                executor.submit(lambda x: x * x, i).then(results.append)

        scheduler.run()
        assert sorted(results) == [i * i for i in range(10)]
