# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Unit tests for the object warehouse"""

import unittest

from mllib.testing import *
from mllib.objects.base import MLObject
from mllib.objects.warehouse import Warehouse, objwh


class _Red(object):
    __tags__ = ['red', 'round']
    _host_name = 'ml.red'

class _Blue(object):
    __tags__ = ['blue', 'round']
    _host_name = 'ml.blue'

class _Square(object):
    __tags__ = ['blue', 'square']
    _host_name = 'ml.square'


class WarehouseTests(unittest.TestCase):

    def setUp(self):
        self.wh = Warehouse(known_tags=['red', 'blue', 'round', 'square',
                                        'shape'],
                            matches={'shape': ['round', 'square']})
        self.wh += [_Red, _Blue]
        self.wh += _Square


    def test_selection(self):
        wh = self.wh
        assert_equal(wh[:], [_Red, _Blue, _Square])
        assert_equal(wh['round'], [_Red, _Blue])
        assert_equal(wh['blue', 'round'], [_Blue])
        assert_equal(wh['!round'], [_Square])
        assert_equal(wh['blue', '!square'], [_Blue])
        # additional matches
        assert_equal(wh['shape'], [_Red, _Blue, _Square])
        assert_raises(ValueError, wh.__getitem__, 'green')
        assert_raises(ValueError, wh.__getitem__, '!green')


    def test_names(self):
        wh = self.wh
        assert_equal(sorted(wh.names), ['ml.blue', 'ml.red', 'ml.square'])
        assert_true('ml.red' in wh)
        assert_false('ml.green' in wh)
        assert_true(wh.get('ml.square') is _Square)
        assert_equal(wh.get('ml.green'), None)
        assert_equal(wh.tags, set(['red', 'blue', 'round', 'square']))
        assert_equal(wh.listing()[0], ('ml.red', ['red', 'round']))


    def test_registration_failures(self):
        wh = self.wh

        class Again(object):
            __tags__ = ['red']
            _host_name = 'ml.red'

        class Unknown(object):
            __tags__ = ['green']
            _host_name = 'ml.green'

        class Untagged(object):
            __tags__ = []
            _host_name = 'ml.untagged'

        for cls in (Again, Unknown, Untagged, object):
            try:
                wh += cls
            except ValueError:
                pass
            else:
                self.fail("%s got registered" % cls)
        assert_equal(len(wh.items), 3)


    def test_print_registered(self):
        with swallow_outputs() as cmo:
            self.wh.print_registered('blue')
        assert_equal(cmo.lines,
                     ['ml.blue', '    blue, round',
                      'ml.square', '    blue, square'])



class ObjectWarehouseTests(unittest.TestCase):

    def test_registered_objects(self):
        for name in objwh.names:
            cls = objwh.get(name)
            assert_true(issubclass(cls, MLObject))
            assert_equal(cls._host_name, name)
            assert_true(set(cls.__tags__).issubset(objwh.known_tags))


    def test_skl_objects(self):
        skip_if_no_external('skl')
        for name in ('ml.svm', 'ml.knn', 'ml.anbc', 'ml.dtree',
                     'ml.randforest', 'ml.adaboost', 'ml.logreg',
                     'ml.linreg', 'ml.mlp'):
            assert_in(name, objwh)
            assert_in(objwh.get(name), objwh['skl'])


    def test_selection_by_kind(self):
        skip_if_no_external('skl')
        regression = objwh['regression']
        assert_equal(sorted([o._host_name for o in regression]),
                     ['ml.linreg', 'ml.mlp', 'ml.svm'])
        for obj in objwh['classification', '!skl']:
            assert_false('skl' in obj.__tags__)


    def test_hmm_object(self):
        skip_if_no_external('hmmlearn')
        assert_equal([o._host_name for o in objwh['time-series']],
                     ['ml.hmm'])
