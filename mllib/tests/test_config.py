# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Unit tests for the configuration registry"""

import os
import unittest
from unittest import mock

from mllib.testing import *
from mllib.base.config import ConfigManager


class ConfigTests(unittest.TestCase):

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            cfg = ConfigManager()
        assert_equal(cfg.get('general', 'verbose'), '1')
        assert_equal(cfg.get_as_dtype('objects', 'num inputs', int), 2)
        # absent options give the default
        assert_equal(cfg.get('nonexistent', 'option', default='blah'), 'blah')
        assert_equal(cfg.get_as_dtype('nonexistent', 'option', int,
                                      default=3), 3)
        assert_true(cfg.getboolean('nonexistent', 'option', default=True))
        assert_false(cfg.getboolean('nonexistent', 'option', default='no'))
        assert_raises(ValueError, cfg.getboolean, 'nonexistent', 'option')


    def test_environment(self):
        env = {'MLLIB_VERBOSE': '3',
               'MLLIB_OBJECTS_NUM_INPUTS': '5',
               'MLLIB_OBJECTS_RAISE_ERRORS': 'yes'}
        with mock.patch.dict(os.environ, env):
            cfg = ConfigManager()
        assert_equal(cfg.get_as_dtype('general', 'verbose', int), 3)
        assert_equal(cfg.get_as_dtype('objects', 'num inputs', int), 5)
        assert_true(cfg.getboolean('objects', 'raise errors'))
        assert_raises(ValueError, cfg.get_as_dtype, 'objects',
                      'raise errors', int)


    @with_tempfile(suffix='.cfg')
    def test_file(self, filename):
        with open(filename, 'w') as f:
            f.write("[objects]\nnum inputs = 4\n[console]\nquiet = yes\n")
        cfg = ConfigManager([filename])
        assert_equal(cfg.get_as_dtype('objects', 'num inputs', int), 4)
        assert_true(cfg.getboolean('console', 'quiet', default=False))

        # environment has the last word
        with mock.patch.dict(os.environ, {'MLLIB_OBJECTS_NUM_INPUTS': '7'}):
            cfg.reload()
        assert_equal(cfg.get('objects', 'num inputs'), '7')

        # what we store, we read back
        cfg.set('general', 'seed', '13')
        cfg.save(filename)
        cfg2 = ConfigManager([filename])
        assert_equal(cfg2.get_as_dtype('general', 'seed', int), 13)
        assert_in('[general]', repr(cfg2))


    def test_no_interpolation(self):
        cfg = ConfigManager()
        cfg.set('general', 'format', '%d%%')
        assert_equal(cfg.get('general', 'format'), '%d%%')
