# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Trainable models and the errors they raise"""

__docformat__ = 'restructuredtext'

import time

from mllib.base.state import ClassWithCollections, ConditionalAttribute
from mllib.base.types import is_datasetlike

if __debug__:
    from mllib.base import debug


class LearnerError(Exception):
    """Base of the errors raised by learners"""


class DegenerateInputError(LearnerError):
    """Training data without samples, features or enough classes"""


class FailedToTrainError(LearnerError):
    pass


class FailedToPredictError(LearnerError):
    pass


class UntrainedError(FailedToPredictError):
    """A model is needed (to predict or to store) but none was trained"""



class Learner(ClassWithCollections):
    """Model which has to be trained on a dataset before it can be used

    `train` runs ``_pretrain``, ``_train`` and ``_posttrain`` in turn;
    derived classes override those.  `untrain` drops the model along with
    the values of all conditional attributes.
    """

    training_time = ConditionalAttribute(enabled=True,
        doc="Seconds spent in the last training")

    trained_targets = ConditionalAttribute(enabled=True,
        doc="Unique targets of the last training dataset")

    trained_nsamples = ConditionalAttribute(enabled=True,
        doc="Number of samples of the last training dataset")


    def __init__(self, **kwargs):
        ClassWithCollections.__init__(self, **kwargs)
        self.__is_trained = False


    def train(self, ds):
        """Train the learner on dataset `ds`

        Raises
        ------
        DegenerateInputError
          If the dataset has no samples or no features.
        """
        if is_datasetlike(ds) and (ds.nfeatures == 0 or len(ds) == 0):
            raise DegenerateInputError(
                    "Cannot train learner on degenerate data %s" % ds)
        if __debug__:
            debug("LRN", "Training %s on %s", (self, ds))

        self._pretrain(ds)
        t0 = time.time()
        self._train(ds)
        self.ca.training_time = time.time() - t0
        self._posttrain(ds)
        self.__is_trained = True

        if __debug__:
            debug("LRN", "Trained %s in %.3f sec",
                  (self, self.ca.is_set('training_time')
                   and self.ca.training_time or 0.0))


    def untrain(self):
        """Forget the model trained last"""
        self.__is_trained = False
        self._untrain()
        self.reset()


    def _untrain(self):
        pass


    def _pretrain(self, ds):
        pass


    def _train(self, ds):
        raise NotImplementedError


    def _posttrain(self, ds):
        ca = self.ca
        unique_targets = getattr(ds, 'unique_targets', None)
        if unique_targets is not None:
            ca.trained_targets = unique_targets
        ca.trained_nsamples = len(ds)


    is_trained = property(fget=lambda x: x.__is_trained,
                          doc="Whether the learner holds a trained model")
