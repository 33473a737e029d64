# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Things concerned with types and type-checking in mllib"""

__docformat__ = 'restructuredtext'

import numpy as np


def is_datasetlike(obj):
    """Check if an object looks like one of the training data containers."""
    if hasattr(obj, 'samples') and \
       hasattr(obj, 'nfeatures') and \
       hasattr(obj, 'nsamples'):
        return True

    return False


def is_sequence_type(inst):
    """Return True if an instance is of an iterable type

    Verified by wrapping with iter() call
    """
    try:
        _ = iter(inst)
        return True
    except TypeError:
        return False


def is_integral(value):
    """Return True if a (float) value carries no fractional part"""
    try:
        return float(value) == np.floor(float(value))
    except (TypeError, ValueError):
        return False
