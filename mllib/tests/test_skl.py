# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Unit tests for the scikit-learn learners and their objects"""

import unittest

import numpy as np

from mllib.testing import *
skip_if_no_external('skl')

from sklearn.neighbors import KNeighborsClassifier

from mllib.base.learner import DegenerateInputError
from mllib.datasets.base import RegressionData
from mllib.clfs.skl import *
from mllib.objects.base import DataType
from mllib.objects.skl import *
from mllib.objects.messages import MessageRecorder


_CLASSIFIERS = (KNNClassifier, ANBCClassifier, DecisionTreeLearner,
                RandomForestLearner, AdaBoostLearner,
                LogisticRegressionLearner)


class SKLLearnerTests(unittest.TestCase):

    def test_adapter(self):
        clf = SKLLearnerAdapter(KNeighborsClassifier(n_neighbors=1),
                                tags=['knn'])
        assert_in('knn', clf.__tags__)
        assert_not_in('knn', SKLLearnerAdapter.__tags__)
        assert_in('KNeighborsClassifier', repr(clf))
        ds = separable_classification(perlabel=5, nlabels=3)
        clf.train(ds)
        assert_array_equal(clf.predict(ds.samples), ds.targets)
        # template stays untouched, a clone got fitted
        assert_false(hasattr(clf._skl_learner, 'classes_'))
        assert_array_equal(clf.classes, [1, 2, 3])


    @reseed_rng()
    def test_classifiers(self):
        ds = separable_classification(perlabel=10, nlabels=3)
        centers = [[1, 1], [2, 2], [3, 3]]
        for cls in _CLASSIFIERS:
            clf = cls()
            clf.train(ds)
            assert_array_equal(clf.predict(centers), [1, 2, 3],
                               err_msg=cls.__name__)
            clf.ca.enable('probabilities')
            clf.predict(centers)
            assert_equal(clf.ca.probabilities.shape, (3, 3))


    def test_degenerate(self):
        ds = separable_classification(perlabel=3, nlabels=1)
        assert_raises(DegenerateInputError, KNNClassifier().train, ds)


    def test_knn_k(self):
        ds = separable_classification(perlabel=2, nlabels=2)
        clf = KNNClassifier(k=10)
        with swallow_outputs():
            clf.train(ds)
        assert_equal(clf._trained_learner.n_neighbors, 4)
        assert_raises(ValueError, clf.params.__setattr__, 'k', 0)


    def test_params_reach_estimator(self):
        ds = separable_classification(perlabel=10, nlabels=2)
        clf = RandomForestLearner(num_trees=3, max_depth=2)
        clf.train(ds)
        assert_equal(clf._trained_learner.n_estimators, 3)
        assert_equal(clf._trained_learner.max_depth, 2)
        clf = LogisticRegressionLearner(cost=0.5, max_num_iterations=50)
        clf.train(ds)
        assert_equal(clf._trained_learner.C, 0.5)
        assert_equal(clf._trained_learner.max_iter, 50)


    def test_linear_regression(self):
        ds = linear_regression(nsamples=30, noise=0)
        clf = LinearRegressionLearner(scaling=False)
        assert_true(clf.__is_regression__)
        clf.train(ds)
        assert_array_almost_equal(clf.predict([[0.5, 0.5], [0, 0]]),
                                  [2.0, 0.5])

        # multiple targets
        ds = RegressionData(1, 2)
        for x in np.linspace(0, 1, 10):
            ds.add_sample([x], [2 * x, -x + 1])
        clf = LinearRegressionLearner()
        clf.train(ds)
        assert_array_almost_equal(clf.predict([[0.5]]), [[1.0, 0.5]])


    @reseed_rng()
    def test_mlp(self):
        ds = linear_regression(nsamples=40)
        clf = MLPRegressionLearner(num_hidden=4, max_num_iterations=20)
        with swallow_outputs():
            clf.train(ds)
        assert_equal(clf._trained_learner.hidden_layer_sizes, (4,))
        assert_equal(clf.predict([[0.5, 0.5]]).shape, (1,))



class SKLObjectTests(unittest.TestCase):

    def _connect(self, obj):
        results, status = MessageRecorder(), MessageRecorder()
        obj.connect(results, outlet=0)
        obj.connect(status, outlet=1)
        return results, status


    @reseed_rng()
    def test_classification_objects(self):
        ds = separable_classification(perlabel=10, nlabels=2)
        for cls in (MLKNNObject, MLANBCObject, MLDTreeObject,
                    MLRandForestObject, MLAdaBoostObject, MLLogRegObject):
            obj = cls()
            results, status = self._connect(obj)
            assert_equal(obj.data_type, DataType.LABELLED_CLASSIFICATION)
            send_dataset(obj, ds)
            obj.send('train')
            assert_equal(status.last('train'), [1], msg=cls._host_name)
            obj.send('map', 2, 2)
            assert_equal(results.last(), [2], msg=cls._host_name)

            obj.send('probs', 1)
            obj.send('map', 1, 1)
            probs = status.last('probs')
            assert_equal(probs[0::2], [1, 2])
            assert_true(probs[1] >= probs[3], msg=cls._host_name)


    def test_knn_object(self):
        obj = MLKNNObject()
        results, status = self._connect(obj)
        assert_in('k', obj.attribute_names())
        obj.send('k', 1)
        assert_equal(obj.learner.params.k, 1)
        with swallow_outputs() as cmo:
            obj.send('k', 0)
            obj.send('train')
        assert_posted(cmo, "ml.knn: error: unable to set k")
        assert_posted(cmo, "no observations added")
        assert_equal(status.last('train'), [0])

        # a single class
        obj.send('add', 1, 0, 0)
        with swallow_outputs() as cmo:
            obj.send('train')
        assert_posted(cmo, "ml.knn: error: training failed: ")
        assert_equal(status.last('train'), [0])


    def test_linreg_object(self):
        obj = MLLinRegObject()
        results, status = self._connect(obj)
        assert_equal(obj.data_type, DataType.LABELLED_REGRESSION)
        assert_equal(obj.params.num_outputs, 1)
        send_dataset(obj, linear_regression(nsamples=20, noise=0))
        obj.send('train')
        assert_equal(status.last('train'), [1])
        obj.send('map', 0.5, 0.5)
        selector, (value,) = results.messages[-1]
        assert_equal(selector, 'float')
        assert_almost_equal(value, 2.0)

        # two outputs
        obj.send('num_outputs', 2)
        assert_equal(obj.dataset.nsamples, 0)
        assert_equal(obj.dataset.ntargets, 2)
        for x in np.linspace(0, 1, 10):
            obj.send('add', 2 * x, 1 - x, x, 0)
        obj.send('train')
        obj.send('map', 0.5, 0)
        selector, values = results.messages[-1]
        assert_equal(selector, 'list')
        assert_array_almost_equal(values, [1.0, 0.5])

        with swallow_outputs() as cmo:
            obj.send('num_outputs', 0)
        assert_posted(cmo, "ml.linreg: error: unable to set input or target "
                           "dimensions")


    @reseed_rng()
    def test_mlp_object(self):
        obj = MLMLPObject(num_hidden=3)
        results, status = self._connect(obj)
        assert_equal(obj.learner.params.num_hidden, 3)
        send_dataset(obj, linear_regression(nsamples=20))
        obj.send('max_num_iterations', 10)
        with swallow_outputs():
            obj.send('train')
        assert_equal(status.last('train'), [1])
        obj.send('map', 0.5, 0.5)
        assert_equal(results.messages[-1][0], 'float')


    @with_tempfile()
    def test_write_read(self, tfile):
        obj = MLDTreeObject()
        results, status = self._connect(obj)
        send_dataset(obj, separable_classification(perlabel=5, nlabels=2))
        obj.send('train')
        obj.send('write', tfile)
        assert_equal(status.last('write'), [1])

        obj2 = MLDTreeObject()
        results2, status2 = self._connect(obj2)
        obj2.send('read', tfile + '.model')
        assert_equal(status2.last('read'), [1])
        obj2.send('map', 1, 1)
        assert_equal(results2.last(), [1])

        # models of other learners are refused
        obj3 = MLKNNObject()
        results3, status3 = self._connect(obj3)
        with swallow_outputs() as cmo:
            obj3.send('read', tfile + '.model')
        assert_posted(cmo, "unable to read model from path")
        assert_equal(status3.last('read'), [0])
