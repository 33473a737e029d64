# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""``ml.hmm``: Hidden Markov Models for sequences of discrete symbols"""

__docformat__ = 'restructuredtext'

from collections import deque

import numpy as np

from mllib.base.learner import FailedToPredictError
from mllib.clfs.hmm import HMM
from mllib.objects.base import DataType
from mllib.objects.classification import MLClassificationObject

if __debug__:
    from mllib.base import debug


class MLHMMObject(MLClassificationObject):
    """Classifies sequences of symbols with one HMM per class

    Sequences are recorded with ``record 1``, ``add <class> <symbol>``
    ..., ``record 0``.  After training, every ``map <symbol> ...`` appends
    the symbols to a sliding window as long as the mean training sequence
    and sends the class whose model explains the window best.
    """

    __tags__ = ['classification', 'time-series', 'hmm', 'hmmlearn']

    _host_name = 'ml.hmm'

    _learner_class = HMM

    _default_data_type = DataType.LABELLED_TIME_SERIES_CLASSIFICATION

    _default_num_inputs = 1

    _methods_help = (
        ('add', "list comprising a class id followed by a symbol; "
                "<class> <symbol>, only while recording"),
        ('record', "start (1) or stop (0) recording a sequence, a change "
                   "of the class id starts a new sequence"),
        ('write', "write training examples and model, first argument gives "
                  "path to write file"),
        ('read', "read training examples and model, first argument gives "
                 "path to the read location"),
        ('train', "train one model per class on the recorded sequences"),
        ('clear', "clear the stored training data and model"),
        ('map', "append the symbol(s) to the observation window and give "
                "the most likely class"),
        ('help', "post this usage statement to the console"),
        )


    def __init__(self, **kwargs):
        MLClassificationObject.__init__(self, **kwargs)
        self._window = deque(maxlen=1)


    def _reset_window(self):
        length = 1
        if self._learner is not None and self._learner.is_trained:
            length = self._learner.mean_sequence_length
        self._window = deque(maxlen=length)


    def _msg_train(self, atoms):
        success = self._train_learner()
        self._reset_window()
        self._status('train', int(success))


    def _msg_clear(self, atoms):
        MLClassificationObject._msg_clear(self, atoms)
        self._reset_window()


    def _learner_loaded(self, learner):
        MLClassificationObject._learner_loaded(self, learner)
        self._reset_window()


    def _msg_map(self, atoms):
        if not self._check_trained():
            return
        values = self._numeric(atoms)
        if values is None:
            return
        if not len(values):
            self.error("invalid input length, expected at least 1 symbol")
            return
        learner = self._learner
        try:
            symbols = learner.as_symbols(values)[:, 0]
        except ValueError as e:
            self.error(str(e))
            return
        self._window.extend(symbols)
        if __debug__:
            debug('OBJ_', "%s scores window %s", (self, list(self._window)))

        learner.ca.enable('probabilities', self.params.probs)
        try:
            label = learner.predict([np.array(self._window)])[0]
        except FailedToPredictError as e:
            self.error(str(e))
            return
        if self.params.probs:
            self._emit_probabilities('probs')
        self.outlets[0]('float', int(label))
