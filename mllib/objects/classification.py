# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Objects mapping input vectors onto class labels"""

__docformat__ = 'restructuredtext'

import numpy as np

from mllib.base.learner import LearnerError
from mllib.objects.base import MLObject, DataType

if __debug__:
    from mllib.base import debug


class MLClassificationObject(MLObject):
    """Object trained on labelled vectors, mapping vectors onto labels

    ``train`` emits ``train 1`` (``train 0`` on failure) from the general
    purpose outlet.  ``map`` sends the predicted label from the first
    outlet and, if ``probs`` is set, ``probs <label> <p> <label> <p> ...``
    from the general purpose outlet.
    """

    __tags__ = ['classification']

    _default_data_type = DataType.LABELLED_CLASSIFICATION

    _methods_help = tuple(
        [(name, name == 'map'
                and "give the class of the input feature vector provided as "
                    "a list"
                or doc)
         for name, doc in MLObject._methods_help])


    def _check_trained(self):
        if self._learner is None or not self._learner.is_trained:
            self.error("model not trained, use 'train' to train a model")
            return False
        return True


    def _train_learner(self):
        """Train the learner on the active container

        Returns
        -------
        bool
          Whether training succeeded.  Failures are reported on the
          console.
        """
        ds = self.dataset
        if ds.nsamples == 0:
            self.error("no observations added, use 'add' to add training data")
            return False
        self._configure_learner()
        try:
            self._learner.train(ds)
        except (LearnerError, ValueError) as e:
            if __debug__:
                debug('OBJ', "Training of %s failed: %s", (self, e))
            self.error("training failed: %s" % e)
            return False
        return True


    def _msg_train(self, atoms):
        self._status('train', int(self._train_learner()))


    def _map_inputs(self, atoms):
        """Validate atoms of 'map' against the trained model"""
        if not self._check_trained():
            return None
        values = self._numeric(atoms)
        if values is None:
            return None
        nfeatures = self._learner.trained_nfeatures
        if len(values) != nfeatures:
            self.error("invalid input length, expected %d, got %d"
                       % (nfeatures, len(values)))
            return None
        return np.array([values])


    def _emit_probabilities(self, selector):
        """Send class probabilities of the last prediction"""
        learner = self._learner
        if not learner.ca.is_set('probabilities'):
            self.error("unable to compute probabilities with this model")
            return
        probabilities = learner.ca.probabilities[0]
        atoms = []
        for label, p in zip(learner.classes, probabilities):
            atoms += [int(label), float(p)]
        self._status(selector, *atoms)


    def _msg_map(self, atoms):
        samples = self._map_inputs(atoms)
        if samples is None:
            return
        learner = self._learner
        learner.ca.enable('probabilities', self.params.probs)
        label = learner.predict(samples)[0]
        if self.params.probs:
            self._emit_probabilities('probs')
        self.outlets[0]('float', int(label))
