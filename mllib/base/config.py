# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Configuration registry of mllib"""

__docformat__ = 'restructuredtext'

from configparser import ConfigParser
import io
import os


class ConfigManager(ConfigParser):
    """Settings of mllib read from INI files and the environment

    Sources, each one overriding the previous ones:

    1. ``~/.mllib.cfg``
    2. ``mllib.cfg`` in the current directory
    3. files given to the constructor
    4. ``MLLIB_*`` environment variables

    The name of an environment variable gives the section and the option:
    ``MLLIB_VERBOSE=2`` sets `verbose` in section `general`, while
    ``MLLIB_OBJECTS_NUM_INPUTS=3`` sets `num inputs` in section `objects`.

    Values are stored as strings; the getters taking a `default` return it
    whenever the option is absent.
    """

    # always available
    _DEFAULTS = {'general': {'verbose': '1'},
                 'objects': {'num inputs': '2'}}

    _ENV_PREFIX = 'MLLIB_'


    def __init__(self, filenames=None):
        """
        Parameters
        ----------
        filenames : list of str or None
          Additional configuration files.
        """
        # no interpolation, so format strings survive as values
        ConfigParser.__init__(self, interpolation=None)
        self.__filenames = list(filenames or [])
        for section, options in ConfigManager._DEFAULTS.items():
            self.add_section(section)
            for option, value in options.items():
                self.set(section, option, value)
        self.reload()


    def reload(self):
        """Read all the sources again"""
        self.read([os.path.join(os.path.expanduser('~'), '.mllib.cfg'),
                   'mllib.cfg'] + self.__filenames)

        nprefix = len(self._ENV_PREFIX)
        for var, value in os.environ.items():
            if not var.startswith(self._ENV_PREFIX):
                continue
            name = var[nprefix:].lower()
            if '_' in name:
                section, option = name.split('_', 1)
                option = option.replace('_', ' ')
            else:
                section, option = 'general', name
            if not self.has_section(section):
                self.add_section(section)
            self.set(section, option, value)


    def __repr__(self):
        """Configuration in INI syntax"""
        out = io.StringIO()
        self.write(out)
        return out.getvalue()


    def save(self, filename):
        with open(filename, 'w') as f:
            self.write(f)


    def _failed(self, section, option, e):
        return ValueError("Failed to obtain value from configuration for "
                          "%s.%s. Original exception was: %s"
                          % (section, option, e))


    def get(self, section, option, default=None, **kwargs):
        """Value of an option as a string, or `default` if it is absent"""
        if not self.has_option(section, option):
            return default
        try:
            return ConfigParser.get(self, section, option, **kwargs)
        except ValueError as e:
            raise self._failed(section, option, e)


    def getboolean(self, section, option, default=None, **kwargs):
        """Value of an option as a bool

        `default` might be a bool or one of the strings known to
        ConfigParser (e.g. 'yes', 'off').  Without a usable default an
        absent option raises ValueError.
        """
        if self.has_option(section, option):
            return ConfigParser.getboolean(self, section, option)
        if isinstance(default, bool):
            return default
        if default is None or default.lower() not in self.BOOLEAN_STATES:
            raise ValueError('Not a boolean: %s' % default)
        return self.BOOLEAN_STATES[default.lower()]


    def get_as_dtype(self, section, option, dtype, default=None):
        """Value of an option converted by `dtype`, or `default`"""
        if not self.has_option(section, option):
            return default
        try:
            return dtype(ConfigParser.get(self, section, option))
        except ValueError as e:
            raise self._failed(section, option, e)
