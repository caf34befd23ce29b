# -*- coding: utf-8 -*-

"""Log level helpers for the python ``logging`` module.

The library itself only creates module loggers, and never installs handlers:
displaying the log entries is up to the application. These helpers tune the
verbosity of the thenable modules, as set in the config file (see
``thenable.Settings.from_config()``).
"""

import logging


def set_logs_level(levels):
    """Configure a fine-grained log levels for the different modules.

    Args:
        levels (dict): A dict associating a module name and a log level. A log
            level can be a number or a str representing one of the logging
            levels (DEBUG, WARNING, ...). The level name will be converted to
            uppercase.
            Invalids values will be ignored.

    Example:

        >>> # Accept DEBUG logs only for the scheduler module
        >>> set_logs_level({'thenable': 'info', 'thenable.scheduler': 'debug'})

        >>> # Accept DEBUG log in general, but only ERROR logs (and above) for
        >>> # the decorators.
        >>> set_logs_level({'thenable': 10, 'thenable.decorators': 40})
    """
    for (module, level) in levels.items():
        try:
            if isinstance(level, str):
                level = level.upper()
                if level.isdigit():
                    level = int(level)
            logging.getLogger(module).setLevel(level)
        except (TypeError, ValueError):
            logger = logging.getLogger(__name__)
            logger.warning('Invalid log level "%s" for logger "%s". '
                           'Will be ignored.',
                           level, module)


def set_debug_mode(debug):
    """Set, or unset the debug log level.

    Note: modules others than thenable.* are not set to DEBUG, even in DEBUG
    mode. If needed, the level log of other modules can be set by
    ``set_logs_level()``.

    Args:
        debug (boolean): if True, the thenable log level will be set to DEBUG.
            If False, it will be set to INFO.
    """
    if debug:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger('thenable').setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.WARNING)
        logging.getLogger('thenable').setLevel(logging.INFO)
