# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Test externals checking"""

import unittest

import numpy as np

from mllib import cfg
from mllib.base import externals
from mllib.testing import *


class TestExternals(unittest.TestCase):

    def setUp(self):
        self.backup = []
        # paranoid check
        self.cfgstr = str(cfg)
        # clean up externals cfg for proper testing
        if cfg.has_section('externals'):
            self.backup = list(cfg.items('externals'))
        cfg.remove_section('externals')


    def tearDown(self):
        # wipe existing one completely
        cfg.remove_section('externals')
        if len(self.backup):
            cfg.add_section('externals')
            for o, v in self.backup:
                cfg.set('externals', o, v)
        # paranoid check
        # since order can't be guaranteed, lets check
        # each item after sorting
        self.assertEqual(sorted(self.cfgstr.split('\n')),
                         sorted(str(cfg).split('\n')))


    def test_externals(self):
        self.assertTrue(externals.exists('numpy'))
        self.assertRaises(ValueError, externals.exists, 'BoGuS')


    def test_required_externals(self):
        for dep in ('numpy', 'scipy', 'skl', 'hmmlearn'):
            self.assertTrue(externals.exists(dep), msg=dep)
        self.assertTrue(externals.exists(['numpy', 'skl']))


    def test_results_are_cached(self):
        self.assertTrue(externals.exists('scipy'))
        self.assertEqual(cfg.get('externals', 'have scipy'), 'yes')
        # pretend that it was not found before
        cfg.set('externals', 'have scipy', 'no')
        self.assertFalse(externals.exists('scipy'))
        self.assertRaises(RuntimeError, externals.exists, 'scipy',
                          raise_='always')
        self.assertTrue(externals.exists('scipy', force=True))


    def test_versions(self):
        self.assertEqual(externals.versions['numpy'], np.__version__)
        self.assertTrue(len(externals.versions['skl']))
