# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
'''Unit tests for basic constraints functionality.'''

import unittest

import numpy as np

from mllib.testing import *
from mllib.base.constraints import *


class SimpleConstraintsTests(unittest.TestCase):

    def test_int(self):
        c = EnsureInt()
        # this should always work
        assert_equal(c(7), 7)
        assert_equal(c(7.0), 7)
        assert_equal(c('7'), 7)
        assert_equal(c([7, 3]), [7, 3])
        # symbols coming from a patch are numbers written as text
        assert_equal(c('17.0'), 17)
        # this should always fail
        assert_raises(ValueError, lambda: c('fail'))
        assert_raises(ValueError, lambda: c([3, 'fail']))

    def test_float(self):
        c = EnsureFloat()
        assert_equal(c(7.0), 7.0)
        assert_equal(c(7), 7.0)
        assert_equal(c('7'), 7.0)
        assert_equal(c([7.0, '3.0']), [7.0, 3.0])
        assert_true(isinstance(c(np.arange(3)), np.ndarray))
        assert_raises(ValueError, lambda: c('fail'))
        assert_raises(ValueError, lambda: c([3.0, 'fail']))

    def test_bool(self):
        c = EnsureBool()
        assert_equal(c(True), True)
        assert_equal(c(False), False)
        # host toggles send plain numbers
        assert_equal(c(1), True)
        assert_equal(c(1.0), True)
        assert_equal(c(0), False)
        for v in ('1', 'yes', 'on', 'enable', 'true'):
            assert_equal(c(v), True)
        for v in ('0', 'no', 'off', 'disable', 'false'):
            assert_equal(c(v), False)
        assert_raises(ValueError, c, 2)
        assert_raises(ValueError, c, 'maybe')

    def test_none(self):
        c = EnsureNone()
        assert_equal(c(None), None)
        assert_raises(ValueError, lambda: c('None'))
        assert_raises(ValueError, lambda: c([]))

    def test_choice(self):
        c = EnsureChoice('choice1', 'choice2', None)
        assert_equal(c('choice1'), 'choice1')
        assert_equal(c(None), None)
        assert_raises(ValueError, c, 'fail')
        assert_in('choice2', c.long_description())

    def test_range(self):
        c = EnsureRange(min=3, max=7)
        assert_equal(c(3.0), 3.0)
        assert_equal(c(7), 7)
        assert_raises(ValueError, c, 2.9)
        assert_raises(ValueError, c, 77)
        assert_equal(c.long_description(), 'value must be in range [3, 7]')
        assert_equal(EnsureRange(min=1).long_description(),
                     'value must be in range [1, inf]')

    def test_listof(self):
        c = EnsureListOf(str)
        assert_equal(c('1:2'), ['1:2'])
        assert_equal(c(['1:2', 3]), ['1:2', '3'])
        assert_equal(c.short_description(), 'list(str)')


class ComplexConstraintsTests(unittest.TestCase):

    def test_constraints(self):
        # this should always work
        c = Constraints(EnsureFloat())
        assert_equal(c(7.0), 7.0)
        c = Constraints(EnsureFloat(), EnsureRange(min=4.0))
        assert_equal(c(7.0), 7.0)
        c = Constraints(EnsureFloat(), EnsureRange(min=4.0), EnsureRange(max=9.0))
        assert_equal(c(7.0), 7.0)
        assert_raises(ValueError, c, 3.9)
        assert_raises(ValueError, c, 9.01)
        # int gets converted before the range checks
        assert_true(isinstance(c(5), float))

    def test_altconstraints(self):
        c = AltConstraints(EnsureFloat())
        assert_equal(c(7.0), 7.0)
        c = AltConstraints(EnsureFloat(), EnsureNone())
        assert_equal(c.short_description(), '(float or None)')
        assert_equal(c(7.0), 7.0)
        assert_equal(c(None), None)
        # None is expanded into EnsureNone
        c = AltConstraints(EnsureInt(), None)
        assert_equal(c(None), None)
        assert_equal(c('3'), 3)
        assert_raises(ValueError, c, 'fail')

    def test_both(self):
        # float between 7.0 and 44.0, or None
        c = AltConstraints(Constraints(EnsureFloat(),
                                       EnsureRange(min=7.0, max=44.0)),
                           EnsureNone())
        assert_equal(c(7.0), 7.0)
        assert_equal(c(None), None)
        assert_raises(ValueError, lambda: c(77.0))
        assert_raises(ValueError, lambda: c(3.0))

    def test_expand_spec(self):
        assert_true(expand_constraint_spec(None) is None)
        assert_true(isinstance(expand_constraint_spec(int), EnsureInt))
        assert_true(isinstance(expand_constraint_spec(float), EnsureFloat))
        assert_true(isinstance(expand_constraint_spec(bool), EnsureBool))
        c = Constraints(EnsureFloat())
        assert_true(expand_constraint_spec(c) is c)
        assert_true(expand_constraint_spec(abs) is abs)
        assert_raises(ValueError, expand_constraint_spec, 'int')
