# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Discrete hidden Markov model classifier for time series of symbols.

One `hmmlearn.hmm.CategoricalHMM` is trained per class with Baum-Welch.
A sequence is assigned to the class whose model yields the highest
log-likelihood.
"""

__docformat__ = 'restructuredtext'

import numpy as np
from scipy.special import logsumexp

from mllib.base import externals, warning
from mllib.base.param import Parameter
from mllib.base.constraints import EnsureInt, EnsureFloat, EnsureRange, \
     Constraints
from mllib.base.learner import DegenerateInputError, FailedToTrainError, \
     FailedToPredictError
from mllib.base.types import is_integral
from mllib.clfs.base import Classifier
from mllib._random import get_random_state

if __debug__:
    from mllib.base import debug

externals.exists('hmmlearn', raise_=True)

from hmmlearn.hmm import CategoricalHMM

__all__ = ['HMM']


class HMM(Classifier):
    """Classifier built from one discrete HMM per class.

    Observations are single integer symbols in ``[0, num_symbols)``, so
    every sequence is a vector (or a single column matrix) of symbols.
    Input scaling does not apply to symbols and is ignored.

    Examples
    --------
    >>> from mllib.clfs.hmm import HMM
    >>> clf = HMM(num_states=3, num_symbols=4, model_type=HMM.ERGODIC)
    """

    ERGODIC, LEFTRIGHT = 0, 1

    # lowest emission probability of a trained model
    MIN_EMISSION = 1e-5

    __tags__ = ['hmm', 'hmmlearn', 'time-series']

    num_states = Parameter(5,
        constraints=Constraints(EnsureInt(), EnsureRange(min=1)),
        doc="Number of hidden states of every class model",
        errmsg="unable to set number of states",
        index=1)

    num_symbols = Parameter(10,
        constraints=Constraints(EnsureInt(), EnsureRange(min=1)),
        doc="Number of distinct observation symbols",
        errmsg="unable to set number of symbols",
        index=2)

    model_type = Parameter(LEFTRIGHT,
        constraints=Constraints(EnsureInt(), EnsureRange(min=0, max=1)),
        doc="""Model topology: 0 ERGODIC (every state reachable from every
        other), 1 LEFTRIGHT (start in the first state, only move forward)""",
        errmsg="unable to set model type",
        index=3)

    delta = Parameter(1,
        constraints=Constraints(EnsureInt(), EnsureRange(min=1)),
        doc="""Maximum number of states a LEFTRIGHT model may move forward
        within one step""",
        errmsg="unable to set delta",
        index=4)

    max_num_iterations = Parameter(100,
        constraints=Constraints(EnsureInt(), EnsureRange(min=1)),
        doc="Maximum number of Baum-Welch iterations",
        errmsg="unable to set max number of iterations",
        index=5)

    num_random_training_iterations = Parameter(10,
        constraints=Constraints(EnsureInt(), EnsureRange(min=1)),
        doc="""Number of random restarts of the training, the best
        model is kept""",
        errmsg="unable to set number of random training iterations",
        index=6)

    min_improvement = Parameter(1e-2,
        constraints=Constraints(EnsureFloat(), EnsureRange(min=0.0)),
        doc="""Minimum gain of the log-likelihood between Baum-Welch
        iterations below which training stops""",
        errmsg="unable to set min improvement",
        index=7)


    def __init__(self, **kwargs):
        Classifier.__init__(self, **kwargs)
        self._models = None
        self._labels = None
        self._mean_sequence_length = 0


    def _scaling_applicable(self, ds):
        return False


    def as_symbols(self, sequence):
        """Convert a sequence into a column of integer symbols"""
        seq = np.asarray(sequence, dtype=float)
        if seq.ndim == 2 and seq.shape[1] == 1:
            seq = seq[:, 0]
        if seq.ndim != 1:
            raise ValueError("Observations must be one dimensional symbols, "
                             "got a sequence of shape %s" % (seq.shape,))
        if len(seq) == 0:
            raise ValueError("Cannot handle empty sequences")
        nsymbols = self.params.num_symbols
        if not np.all([is_integral(x) for x in seq]) \
           or seq.min() < 0 or seq.max() >= nsymbols:
            raise ValueError("Observations must be integer symbols in "
                             "[0, %d), got %s" % (nsymbols, seq))
        return seq.astype(int).reshape((-1, 1))


    def _init_leftright(self, model, rng):
        """Random banded parameters of a left-right model"""
        nstates = self.params.num_states
        delta = self.params.delta
        transmat = np.zeros((nstates, nstates))
        for i in range(nstates):
            upto = min(i + delta, nstates - 1)
            transmat[i, i:upto + 1] = rng.uniform(size=upto - i + 1) + 1e-3
        transmat /= transmat.sum(axis=1)[:, None]
        startprob = np.zeros(nstates)
        startprob[0] = 1.0
        model.startprob_ = startprob
        model.transmat_ = transmat


    def _fix_unvisited_states(self, model):
        """States never visited during training end up with all-zero rows,
        symbols never seen with zero emission probability"""
        transmat = model.transmat_.copy()
        dead = transmat.sum(axis=1) == 0
        if np.any(dead):
            transmat[dead, :] = 0
            transmat[dead, np.where(dead)[0]] = 1.0
            model.transmat_ = transmat
        emission = model.emissionprob_.copy()
        dead = emission.sum(axis=1) == 0
        if np.any(dead):
            emission[dead, :] = 1.0 / emission.shape[1]
        # any sequence of known symbols keeps a finite log-likelihood
        emission = np.maximum(emission, self.MIN_EMISSION)
        model.emissionprob_ = emission / emission.sum(axis=1)[:, None]


    def _train_class_model(self, label, X, lengths, rng):
        """Train models with random restarts and keep the best one"""
        p = self.params
        leftright = p.model_type == self.LEFTRIGHT
        best, best_score = None, -np.inf
        for restart in range(p.num_random_training_iterations):
            model = CategoricalHMM(
                n_components=p.num_states,
                n_features=p.num_symbols,
                n_iter=p.max_num_iterations,
                tol=p.min_improvement,
                init_params=leftright and 'e' or 'ste',
                params=leftright and 'te' or 'ste',
                random_state=rng.randint(2 ** 31 - 1))
            if leftright:
                self._init_leftright(model, rng)
            try:
                model.fit(X, lengths)
                self._fix_unvisited_states(model)
                score = model.score(X, lengths)
            except (ValueError, np.linalg.LinAlgError) as e:
                warning("Training restart %d of the model for class %s "
                        "failed: %s" % (restart, label, e))
                continue
            if __debug__:
                debug('HMM_', "Restart %d of class %s reached log-likelihood "
                      "%g after %d iterations",
                      (restart, label, score, model.monitor_.iter))
            if score > best_score:
                best, best_score = model, score
        if best is None:
            raise FailedToTrainError("Failed to train the model for class %s"
                                     % label)
        if __debug__:
            debug('HMM', "Trained model for class %s with log-likelihood %g",
                  (label, best_score))
        return best


    def _train(self, dataset):
        """Train one model per class
        """
        if dataset.nfeatures != 1:
            raise DegenerateInputError(
                  "%s handles one dimensional symbols only, got %d dimensions"
                  % (self, dataset.nfeatures))
        rng = np.random.RandomState(get_random_state())
        targets = dataset.targets
        sequences = [self.as_symbols(s) for s in dataset.samples]
        labels = np.unique(targets)
        models = []
        for label in labels:
            seqs = [s for s, t in zip(sequences, targets) if t == label]
            X = np.concatenate(seqs)
            lengths = [len(s) for s in seqs]
            models.append(self._train_class_model(label, X, lengths, rng))
        self._labels = labels
        self._models = models
        self._mean_sequence_length = \
            max(1, int(round(np.mean([len(s) for s in sequences]))))


    def _check_samples(self, samples):
        """Convert data given to predict() into a list of symbol columns"""
        if isinstance(samples, np.ndarray) and samples.ndim == 1:
            # single sequence
            samples = [samples]
        return [self.as_symbols(s) for s in samples]


    def _predict(self, sequences):
        """Score every sequence with every class model
        """
        loglik = np.array([[model.score(seq) for model in self._models]
                           for seq in sequences])
        if not np.all(np.any(np.isfinite(loglik), axis=1)):
            raise FailedToPredictError(
                  "None of the class models of %s can explain sequences %s"
                  % (self, [s[:, 0] for s, l in zip(sequences, loglik)
                            if not np.any(np.isfinite(l))]))
        predictions = self._labels[np.argmax(loglik, axis=1)]
        self.ca.estimates = loglik
        if self.ca.is_enabled('probabilities'):
            self.ca.probabilities = \
                np.exp(loglik - logsumexp(loglik, axis=1)[:, None])
        if __debug__:
            debug('HMM_', "Log-likelihoods %s lead to predictions %s",
                  (loglik, predictions))
        return predictions


    def _untrain(self):
        super(HMM, self)._untrain()
        self._models = None
        self._labels = None
        self._mean_sequence_length = 0


    @property
    def models(self):
        """Trained per-class models (`CategoricalHMM`)"""
        return self._models


    @property
    def classes(self):
        """Class labels in the order of the columns of `probabilities`"""
        return self._labels


    @property
    def mean_sequence_length(self):
        """Mean length of the training sequences (0 if untrained)"""
        return self._mean_sequence_length
