# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Helpers to unify/facilitate unittesting within mllib

"""

__docformat__ = 'restructuredtext'

import numpy as np            # we barely can step somewhere without it
from mllib.base import externals

if __debug__:
    from mllib.base import debug
    debug('INIT', 'mllib.testing')

from mllib.testing.tools import *
from mllib.testing.datasets import *

if __debug__:
    debug('INIT', 'mllib.testing end')
