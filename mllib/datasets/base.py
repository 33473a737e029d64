# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Containers for training data.

There is one container per data type an object can be trained on:

* `ClassificationData` -- labelled vectors
* `RegressionData` -- input vectors with target vectors
* `TimeSeriesClassificationData` -- labelled sequences of vectors
* `UnlabelledData` -- plain vectors

and `TimeSeries`, the buffer a sequence is recorded into before it gets
stored as a single labelled sample.
"""

__docformat__ = 'restructuredtext'

import numpy as np

from mllib.base.dochelpers import _str, _repr
from mllib.base.types import is_integral

if __debug__:
    from mllib.base import debug


def check_num_dimensions(n, what='dimensions'):
    """Validate a number of dimensions, which must be a positive integer"""
    if isinstance(n, bool) or not is_integral(n) or int(n) < 1:
        raise ValueError("number of %s must be a positive integer, got %r"
                         % (what, n))
    return int(n)


def check_class_label(label):
    """Validate a class label

    Labels are positive integers; 0 is reserved for "no class".
    """
    if not is_integral(label) or float(label) < 0:
        raise ValueError("class label must be a positive integer")
    label = int(label)
    if label == 0:
        raise ValueError("class label must be non-zero")
    return label


def _as_vector(values, ndim, what='input'):
    """Convert `values` into a float vector of length `ndim`"""
    vector = np.asarray(values, dtype=float).ravel()
    if len(vector) != ndim:
        raise ValueError("%s vector has %d dimensions, expected %d"
                         % (what, len(vector), ndim))
    return vector



class DataContainer(object):
    """Common interface of all training data containers
    """

    def __init__(self, nfeatures=1):
        self._nfeatures = check_num_dimensions(nfeatures)
        self.clear()


    def __len__(self):
        return self.nsamples


    def __str__(self):
        return _str(self, 'nsamples=%d' % self.nsamples,
                    'nfeatures=%d' % self.nfeatures)


    def __repr__(self):
        return _repr(self, 'nfeatures=%d' % self.nfeatures)


    def clear(self):
        """Drop all samples but keep the dimensions"""
        raise NotImplementedError


    def set_num_dimensions(self, n):
        """Set the number of input dimensions

        Stored samples are dropped.
        """
        n = check_num_dimensions(n)
        if __debug__:
            debug('DS', "Setting number of dimensions of %s to %d", (self, n))
        self._nfeatures = n
        self.clear()


    @property
    def nfeatures(self):
        return self._nfeatures


    @property
    def nsamples(self):
        raise NotImplementedError


    @property
    def empty(self):
        return self.nsamples == 0



class ClassificationData(DataContainer):
    """Vectors, each labelled with a positive integer class label
    """

    def clear(self):
        self._samples = []
        self._targets = []


    def add_sample(self, label, vector):
        """Append a labelled vector

        Parameters
        ----------
        label : int
          Positive (non-zero) integer class label.
        vector : sequence of float
          Must have `nfeatures` elements.
        """
        label = check_class_label(label)
        vector = _as_vector(vector, self.nfeatures)
        self._samples.append(vector)
        self._targets.append(label)
        if __debug__:
            debug('DS_', "Added sample %s with label %d", (vector, label))


    @property
    def nsamples(self):
        return len(self._samples)


    @property
    def samples(self):
        return np.array(self._samples, dtype=float).reshape(
                   (self.nsamples, self.nfeatures))


    @property
    def targets(self):
        return np.array(self._targets, dtype=int)


    @property
    def unique_targets(self):
        return np.unique(self.targets)


    @property
    def nclasses(self):
        return len(self.unique_targets)


    def class_counts(self):
        """Return a dictionary with the number of samples per class label"""
        counts = {}
        for t in self._targets:
            counts[t] = counts.get(t, 0) + 1
        return counts



class RegressionData(DataContainer):
    """Input vectors, each with a target vector
    """

    def __init__(self, ninputs=1, ntargets=1):
        self._ntargets = check_num_dimensions(ntargets, 'target dimensions')
        DataContainer.__init__(self, nfeatures=ninputs)


    def __repr__(self):
        return _repr(self, 'ninputs=%d' % self.nfeatures,
                     'ntargets=%d' % self.ntargets)


    def clear(self):
        self._samples = []
        self._targets = []


    def set_input_and_target_dimensions(self, ninputs, ntargets):
        """Set the number of input and target dimensions

        Stored samples are dropped.
        """
        ninputs = check_num_dimensions(ninputs, 'input dimensions')
        ntargets = check_num_dimensions(ntargets, 'target dimensions')
        self._nfeatures = ninputs
        self._ntargets = ntargets
        self.clear()


    def set_num_dimensions(self, n):
        self.set_input_and_target_dimensions(n, self.ntargets)


    def add_sample(self, inputs, targets):
        """Append an input vector along with its target vector"""
        inputs = _as_vector(inputs, self.nfeatures)
        targets = _as_vector(targets, self.ntargets, what='target')
        self._samples.append(inputs)
        self._targets.append(targets)


    @property
    def ntargets(self):
        return self._ntargets


    @property
    def nsamples(self):
        return len(self._samples)


    @property
    def samples(self):
        return np.array(self._samples, dtype=float).reshape(
                   (self.nsamples, self.nfeatures))


    @property
    def targets(self):
        return np.array(self._targets, dtype=float).reshape(
                   (self.nsamples, self.ntargets))



class TimeSeriesClassificationData(DataContainer):
    """Sequences of vectors, each sequence labelled with a class label
    """

    def clear(self):
        self._sequences = []


    def add_sample(self, label, sequence):
        """Append a labelled sequence

        Parameters
        ----------
        label : int
          Positive (non-zero) integer class label.
        sequence : array-like (length x nfeatures)
          At least one row.  A flat sequence is taken as a sequence of
          scalars if `nfeatures` is 1.
        """
        label = check_class_label(label)
        sequence = np.array(sequence, dtype=float)
        if sequence.ndim == 1 and self.nfeatures == 1:
            sequence = sequence[:, None]
        if sequence.ndim != 2 or sequence.shape[1] != self.nfeatures:
            raise ValueError("sequence must have %d columns, got shape %s"
                             % (self.nfeatures, sequence.shape))
        if not len(sequence):
            raise ValueError("sequence must contain at least one vector")
        self._sequences.append((label, sequence))
        if __debug__:
            debug('DS_', "Added sequence of length %d with label %d",
                  (len(sequence), label))


    @property
    def nsamples(self):
        return len(self._sequences)


    @property
    def sequences(self):
        """List of (label, sequence) pairs"""
        return list(self._sequences)


    @property
    def samples(self):
        return [s for _, s in self._sequences]


    @property
    def targets(self):
        return np.array([l for l, _ in self._sequences], dtype=int)


    @property
    def unique_targets(self):
        return np.unique(self.targets)


    @property
    def nclasses(self):
        return len(self.unique_targets)


    @property
    def lengths(self):
        return np.array([len(s) for _, s in self._sequences], dtype=int)



class UnlabelledData(DataContainer):
    """Plain vectors without labels
    """

    def clear(self):
        self._samples = []


    def add_sample(self, vector):
        self._samples.append(_as_vector(vector, self.nfeatures))


    @property
    def nsamples(self):
        return len(self._samples)


    @property
    def samples(self):
        return np.array(self._samples, dtype=float).reshape(
                   (self.nsamples, self.nfeatures))



class TimeSeries(object):
    """Buffer a sequence of vectors gets recorded into
    """

    def __init__(self, nfeatures=1):
        self._nfeatures = check_num_dimensions(nfeatures)
        self._rows = []


    def __len__(self):
        return self.nrows


    def __str__(self):
        return _str(self, 'nrows=%d' % self.nrows)


    def append(self, vector):
        vector = np.asarray(vector, dtype=float).ravel()
        if self.nrows and len(vector) != self._nfeatures:
            raise ValueError("vector has %d dimensions, expected %d"
                             % (len(vector), self._nfeatures))
        # an empty buffer takes on the dimensionality of its first row
        self._nfeatures = len(vector)
        self._rows.append(vector)


    def clear(self):
        self._rows = []


    @property
    def nrows(self):
        return len(self._rows)


    @property
    def nfeatures(self):
        return self._nfeatures


    def as_array(self):
        return np.array(self._rows, dtype=float).reshape(
                   (self.nrows, self._nfeatures))
