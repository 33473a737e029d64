# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Machine learning objects for real-time patching environments


Package Organization
====================
The mllib package contains the following subpackages and modules:

:group Basic Data Structures: datasets
:group Learners: clfs
:group Host objects: objects
:group Command line interface: cmdline
:group Miscellaneous: base misc
:group Unittests: tests

:license: The MIT License <http://www.opensource.org/licenses/mit-license.php>
"""

__docformat__ = 'restructuredtext'

__version__ = '0.1.0'

import numpy as np
from mllib.base import cfg
from mllib.base import externals

if __debug__:
    from mllib.base import debug
    debug('INIT', 'mllib')


from mllib._random import _random_seed, seed, get_random_seed


externals.exists('numpy', force=True, raise_=True)

if cfg.getboolean('warnings', 'suppress', default=False):
    import warnings
    warnings.simplefilter('ignore')
    # NumPy
    np.seterr(**dict([(x, 'ignore') for x in np.geterr()]))


def wtf(*args, **kwargs):
    """Report summary about mllib and the system (see `mllib.base.info.wtf`)"""
    from mllib.base.info import wtf as _wtf
    return _wtf(*args, **kwargs)


if __debug__:
    debug('INIT', 'mllib end')
