# -*- coding: utf-8 -*-

import pytest

from thenable import (QueueScheduler, Settings, get_default_settings,
                      set_default_settings)


@pytest.fixture
def scheduler():
    """Task queue drained explicitly by the test, with ``scheduler.run()``."""
    return QueueScheduler()


@pytest.fixture
def settings(scheduler):
    """Isolated settings: the default settings are never modified."""
    return Settings(scheduler=scheduler)


@pytest.fixture
def default_settings(request, settings):
    """Install the isolated settings as default settings during the test."""
    previous = get_default_settings()
    set_default_settings(settings)
    request.addfinalizer(lambda: set_default_settings(previous))
    return settings
