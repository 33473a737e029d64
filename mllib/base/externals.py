# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Presence and versions of the external libraries

Results of the checks are cached in the ``externals`` section of `cfg`
(e.g. ``have skl = yes``), so a check runs once per session unless
forced.
"""

__docformat__ = 'restructuredtext'

import numpy as np

from mllib.base import warning, cfg

if __debug__:
    from mllib.base import debug


class _VersionsChecker(dict):
    """Versions of the externals, checked on first access"""

    def __getitem__(self, key):
        if key not in self:
            exists(key, force=True, raise_='always')
        return dict.__getitem__(self, key)


versions = _VersionsChecker()
"""Versions of available externals, as strings"""


def _check_numpy():
    versions['numpy'] = np.__version__

def _check_scipy():
    import scipy
    versions['scipy'] = scipy.__version__

def _check_skl():
    import sklearn
    versions['skl'] = sklearn.__version__

def _check_hmmlearn():
    import hmmlearn
    # models of discrete emissions
    from hmmlearn.hmm import CategoricalHMM
    versions['hmmlearn'] = hmmlearn.__version__

def _check_pytest():
    import pytest
    versions['pytest'] = pytest.__version__


_KNOWN = {'numpy': _check_numpy,
          'scipy': _check_scipy,
          'skl': _check_skl,
          'hmmlearn': _check_hmmlearn,
          'pytest': _check_pytest,
          }

# failures of a check meaning the external is unusable
_caught_exceptions = (ImportError, AttributeError, RuntimeError)


def exists(dep, force=False, raise_=False, issueWarning=None,
           exception=RuntimeError):
    """Whether a known external is available

    Parameters
    ----------
    dep : str or list of str
      Key(s) of the external(s), see `_KNOWN`.
    force : bool
      Check again even if the result is cached.
    raise_ : bool or 'always'
      Whether a missing external raises `exception`.  True obeys the
      ``raise exception`` setting of the ``externals`` section, 'always'
      raises regardless.
    issueWarning : str or True or None
      Warning to issue if the external is missing, True for the
      standard one.
    exception : type
      Exception to raise.
    """
    if isinstance(dep, (list, tuple)):
        return all([exists(d, force, raise_) for d in dep])

    if isinstance(raise_, str):
        if raise_.lower() != 'always':
            raise ValueError("Unknown value of raise_=%s. "
                             "Must be bool or 'always'" % raise_)
        raise_ = True
    else:
        raise_ = raise_ and cfg.getboolean('externals', 'raise exception',
                                           True)

    cfgid = 'have ' + dep
    if not force and cfg.has_option('externals', cfgid) \
       and not cfg.getboolean('externals', 'retest', default='no'):
        if __debug__:
            debug('EXT', "Skip retesting for '%s'.", (dep,))
        result = cfg.getboolean('externals', cfgid)
        if not result and raise_:
            raise exception("Required external '%s' was not found" % dep)
        return result

    if dep not in _KNOWN:
        raise ValueError("%r is not a known dependency key." % (dep,))

    if __debug__:
        debug('EXT', "Checking for the presence of %s", (dep,))
    result, estr = False, ''
    with np.errstate(all='ignore'):
        try:
            _KNOWN[dep]()
            result = True
        except _caught_exceptions as e:
            estr = ". Caught exception was: %s" % e
    if __debug__:
        debug('EXT', "Presence of %s is%s verified%s",
              (dep, not result and ' NOT' or '', estr))

    if not result:
        if raise_:
            raise exception("Required external '%s' was not found" % dep)
        if issueWarning is not None \
               and cfg.getboolean('externals', 'issue warning', True):
            if issueWarning is True:
                issueWarning = "Required external '%s' was not found" % dep
            warning(issueWarning)

    if not cfg.has_section('externals'):
        cfg.add_section('externals')
    cfg.set('externals', cfgid, result and 'yes' or 'no')
    return result
