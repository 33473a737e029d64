# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Objects built upon learners of scikit-learn"""

__docformat__ = 'restructuredtext'

from mllib.clfs.skl import KNNClassifier, ANBCClassifier, \
     DecisionTreeLearner, RandomForestLearner, AdaBoostLearner, \
     LogisticRegressionLearner, LinearRegressionLearner, MLPRegressionLearner
from mllib.objects.classification import MLClassificationObject
from mllib.objects.regression import MLRegressionObject


class MLKNNObject(MLClassificationObject):
    """``ml.knn``: k-nearest neighbours classification"""
    __tags__ = ['classification', 'knn', 'skl']
    _host_name = 'ml.knn'
    _learner_class = KNNClassifier


class MLANBCObject(MLClassificationObject):
    """``ml.anbc``: adaptive naive Bayes classification"""
    __tags__ = ['classification', 'anbc', 'skl']
    _host_name = 'ml.anbc'
    _learner_class = ANBCClassifier


class MLDTreeObject(MLClassificationObject):
    """``ml.dtree``: decision tree classification"""
    __tags__ = ['classification', 'dtree', 'skl']
    _host_name = 'ml.dtree'
    _learner_class = DecisionTreeLearner


class MLRandForestObject(MLClassificationObject):
    """``ml.randforest``: random forest classification"""
    __tags__ = ['classification', 'randforest', 'skl', 'non-deterministic']
    _host_name = 'ml.randforest'
    _learner_class = RandomForestLearner


class MLAdaBoostObject(MLClassificationObject):
    """``ml.adaboost``: AdaBoost classification"""
    __tags__ = ['classification', 'adaboost', 'skl']
    _host_name = 'ml.adaboost'
    _learner_class = AdaBoostLearner


class MLLogRegObject(MLClassificationObject):
    """``ml.logreg``: logistic regression (used for classification)"""
    __tags__ = ['classification', 'logreg', 'linear', 'skl']
    _host_name = 'ml.logreg'
    _learner_class = LogisticRegressionLearner


class MLLinRegObject(MLRegressionObject):
    """``ml.linreg``: linear regression"""
    __tags__ = ['regression', 'linreg', 'linear', 'skl']
    _host_name = 'ml.linreg'
    _learner_class = LinearRegressionLearner


class MLMLPObject(MLRegressionObject):
    """``ml.mlp``: multi-layer perceptron regression"""
    __tags__ = ['regression', 'mlp', 'non-linear', 'skl',
                'non-deterministic']
    _host_name = 'ml.mlp'
    _learner_class = MLPRegressionLearner
