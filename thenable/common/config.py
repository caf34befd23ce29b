# -*- coding: utf-8 -*-

"""Manages settings and config file.

Settings are loaded from a configuration file. If they don't exists, default
values are provided.
When an option is set, the config file is updated.

The file is an INI file, with a single ``[thenable]`` section:

    [thenable]
    capture_exceptions = true
    scheduler = queue
    debug_mode = false
    log_levels = thenable=debug;thenable.scheduler=warning

Runtime settings are built from it with ``thenable.Settings.from_config()``.
"""

import configparser
import logging
import os.path

from . import path as thenable_path

_logger = logging.getLogger(__name__)


# Default config dict. Values not present in this dict are not valid.
# Each entry contains the type expected, and the default value.
_default_config = {
    'capture_exceptions': {'type': bool, 'default': True},
    'scheduler': {'type': str, 'default': 'queue'},
    'debug_mode': {'type': bool, 'default': False},
    'log_levels': {'type': dict, 'default': {}}
}

_SECTION = 'thenable'


def get_config_file_path():
    return os.path.join(thenable_path.get_config_dir(), 'thenable.ini')


class Config(object):
    """Typed access to the entries of a config file.

    Attributes:
        path (str): location of the config file.
    """

    def __init__(self, path=None):
        """
        Args:
            path (str, optional): config file. Default to 'thenable.ini', in
                the user's config directory.
        """
        self.path = path or get_config_file_path()
        self._parser = configparser.ConfigParser()
        self._parser.add_section(_SECTION)

    def load(self):
        """Find and load the config file.

        A missing or unreadable file is not an error: default values are used.

        Returns:
            Config: self
        """
        try:
            read_ok = self._parser.read(self.path)
        except configparser.Error:
            _logger.warning('Unable to parse config file: %s', self.path,
                            exc_info=True)
            return self

        if not read_ok:
            _logger.warning('Unable to load config file: %s', self.path)
        return self

    def get(self, key):
        """Find and return a configuration entry

        If the entry is not specified in the config file, a default value is
        returned.

        Args:
            key (string): the entry key.
        Returns:
            The corresponding value found.
        Raises:
            KeyError: if the config entry doesn't exists.
        """
        if key not in _default_config:
            raise KeyError(key)
        entry_type = _default_config[key]['type']
        try:
            if entry_type is bool:
                return self._parser.getboolean(_SECTION, key)
            elif entry_type is int:
                return self._parser.getint(_SECTION, key)
            elif entry_type is dict:
                # Dict entries are in the form 'key=value;key2=value2'
                dict_str = self._parser.get(_SECTION, key)
                result = {}
                for pair in filter(None, dict_str.split(';')):
                    try:
                        (k, v) = pair.split('=')
                        result[k.strip()] = v.strip()
                    except ValueError:
                        _logger.warning('Unable to parse pair key=value: '
                                        '"%s"', pair)
                return result
            else:
                return self._parser.get(_SECTION, key)
        except configparser.NoOptionError:
            return _copy(_default_config[key]['default'])
        except ValueError:
            _logger.warning('Invalid value for config entry "%s". Default '
                            'value will be used.', key)
            return _copy(_default_config[key]['default'])

    def set(self, key, value):
        """Set a configuration entry.

        Args:
            key (string): the entry key.
            value: the new value to set. It will be converted to string.
        Raises:
            KeyError: if the config entry is not valid.
        """
        if key not in _default_config:
            raise KeyError(key)
        if isinstance(value, dict):
            value = ';'.join('%s=%s' % (k, v) for (k, v) in value.items())
        self._parser.set(_SECTION, key, str(value))
        try:
            with open(self.path, 'w') as config_file:
                self._parser.write(config_file)
            _logger.debug('Config file modified.')
        except IOError:
            _logger.warning('Unable to write in the config file',
                            exc_info=True)


def _copy(value):
    if isinstance(value, dict):
        return dict(value)
    return value
