# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Base class of all learners (classifiers and regressions)"""

__docformat__ = 'restructuredtext'

import time

import numpy as np
from sklearn.preprocessing import MinMaxScaler

from mllib.base.learner import Learner, UntrainedError
from mllib.base.state import ConditionalAttribute
from mllib.base.param import Parameter
from mllib.base.constraints import EnsureBool
from mllib.base.dochelpers import _str, _strid
from mllib.datasets.formats import save_model, load_model

if __debug__:
    from mllib.base import debug

__all__ = [ 'Classifier' ]


class Classifier(Learner):
    """Learner mapping samples onto targets

    Derived classes implement ``_train`` and ``_predict``.  Unless
    `scaling` is disabled, every input dimension is mapped into [0, 1]
    with the ranges seen at training time before it reaches them.

    ``__tags__`` lists the traits of a learner, 'regression' among them
    for learners predicting continuous targets.
    """

    predictions = ConditionalAttribute(enabled=True,
        doc="Result of the last predict()")

    estimates = ConditionalAttribute(enabled=True,
        doc="Values the last predictions were decided on, e.g. decision "
            "values or log-likelihoods")

    probabilities = ConditionalAttribute(enabled=False,
        doc="Class probabilities of the last predictions, one column per "
            "trained class")

    predicting_time = ConditionalAttribute(enabled=True,
        doc="Seconds spent in the last predict()")

    __tags__ = []

    scaling = Parameter(True, constraints=EnsureBool(),
        doc="""Whether every input dimension is scaled into [0, 1] using the
        ranges seen at training time.""",
        errmsg="unable to set scaling, hint: should be 0 or 1",
        index=1001)


    def __init__(self, **kwargs):
        Learner.__init__(self, **kwargs)
        self._scaler = None
        # 0 while untrained
        self.__trainednfeatures = 0


    @property
    def __is_regression__(self):
        return 'regression' in self.__tags__


    def __str__(self, *args, **kwargs):
        if __debug__ and 'CLF_' in debug.active:
            return "%s / %s" % (repr(self), super(Classifier, self).__str__())
        return _str(self, *args, **kwargs)


    def _scaling_applicable(self, ds):
        """Whether input scaling makes sense for the data at hand"""
        return True


    def _pretrain(self, dataset):
        # start from scratch
        self.untrain()
        if self.params.scaling and self._scaling_applicable(dataset):
            self._scaler = MinMaxScaler().fit(dataset.samples)
            if __debug__:
                debug('CLF_', "Fitted scaler of %s to ranges [%s, %s]",
                      (self, self._scaler.data_min_, self._scaler.data_max_))


    def _posttrain(self, dataset):
        super(Classifier, self)._posttrain(dataset)
        self.__trainednfeatures = dataset.nfeatures


    def _scale(self, samples):
        if self._scaler is None:
            return samples
        return self._scaler.transform(samples)


    def _get_samples(self, dataset):
        """Samples of a training dataset as the derived learner sees them"""
        return self._scale(dataset.samples)


    def _check_samples(self, samples):
        """2D array of finite values with as many features as trained on,
        scaled"""
        data = np.atleast_2d(np.asarray(samples, dtype=float))
        nfeatures = data.shape[1]
        if nfeatures != self.__trainednfeatures:
            raise ValueError(
                  "Classifier %s was trained on data with %d features, "
                  "thus can't predict for %d features"
                  % (self, self.__trainednfeatures, nfeatures))
        if not np.all(np.isfinite(data)):
            raise ValueError(
                "Some input data for predict is not finite (NaN or Inf)")
        return self._scale(data)


    def _prepredict(self, samples):
        if not self.is_trained:
            raise UntrainedError(
                  "Classifier %s wasn't yet trained, therefore can't "
                  "predict" % self)
        return self._check_samples(samples)


    def _postpredict(self, samples, result):
        self.ca.predictions = result


    def _predict(self, samples):
        raise NotImplementedError


    def predict(self, samples):
        """Predict targets of samples

        Derived classes override ``_predict`` instead.

        Parameters
        ----------
        samples : array-like (nsamples x nfeatures) or dataset
          A single vector is taken as a single sample.
        """
        if hasattr(samples, 'samples'):
            samples = samples.samples
        if __debug__:
            debug("CLF", "Predicting classifier %s on %d samples",
                  (self, len(samples)))

        t0 = time.time()
        ca = self.ca
        # values of a previous prediction must not survive a failing one
        ca.reset(['estimates', 'predictions', 'probabilities'])

        data = self._prepredict(samples)
        result = self._predict(data)
        ca.predicting_time = time.time() - t0
        self._postpredict(data, result)
        return result


    def _untrain(self):
        self._scaler = None
        self.__trainednfeatures = 0


    @property
    def trained_nfeatures(self):
        """Number of features the classifier was trained on"""
        return self.__trainednfeatures


    def save(self, filename, name=None):
        """Store the trained classifier into a model file

        Parameters
        ----------
        filename : str
        name : str or None
          Name of the object the model belongs to.
        """
        if not self.is_trained:
            raise UntrainedError("Classifier %s wasn't yet trained, therefore "
                                 "can't be stored" % self)
        if __debug__:
            debug("CLF", "Storing %s%s into %s", (self, _strid(self), filename))
        save_model(self, filename, name=name)


    @classmethod
    def load(cls, filename):
        """Load a classifier of this class from a model file"""
        return load_model(filename, expected=cls)
