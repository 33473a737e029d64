# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Plumbing layer for mllib

Module Organization
===================

mllib.base holds the building blocks used throughout mllib: the
configuration registry `cfg` and the output channels `verbose`,
`warning`, `console` and `debug`, created once on import.

:group Basic: externals, config, verbosity, dochelpers
:group State: collections, attributes, param, constraints, state
"""

__docformat__ = 'restructuredtext'


import sys
import os
import traceback

from mllib.base.config import ConfigManager
from mllib.base.verbosity import LevelLogger, OnceLogger, ConsoleLogger


# configuration first: all the outputs below consult it
_cfgfile = os.environ.get('MLLIBCONFIG', None)
cfg = ConfigManager(_cfgfile and [_cfgfile] or None)


def _handlers(section):
    return cfg.get(section, 'output', default='stdout').split(',')


# Levels of verbose
# 0 -- errors only
# 1 -- top level operations (sessions, reading and writing files)
# 2 -- command line handling
# 3 -- messages dispatched to objects
# 4 -- training and mapping details
verbose = LevelLogger(handlers=_handlers('verbose'))

if cfg.has_option('general', 'verbose'):
    verbose.level = cfg.getint('general', 'verbose')


def error(msg, critical=True):
    """Report an error through `verbose`

    Parameters
    ----------
    msg : str
      Message, gets prefixed with 'ERROR: '
    critical : bool
      If True, exit the process with status 1.
    """
    verbose(0, "ERROR: " + msg)
    if critical:
        sys.exit(1)



class WarningLog(OnceLogger):
    """Warnings printed once per place of the call

    The caller of the warning (file, line) identifies it, so the same
    warning issued from a loop shows up only `maxcount` times.
    """

    def __init__(self, btlevels=0, maxcount=1, *args, **kwargs):
        """
        Parameters
        ----------
        btlevels : int
          Depth of the backtrace to append to each warning, 0 for none.
        maxcount : int
          How many times each warning is printed.
        """
        OnceLogger.__init__(self, *args, **kwargs)
        self.btlevels = btlevels
        self.maxcount = maxcount


    def __call__(self, msg):
        caller = traceback.extract_stack(limit=2)[-2]
        msgid = "%s:%s" % (caller[0], caller[1])
        fullmsg = "WARNING: %s" % msg
        if self.btlevels > 0:
            fullmsg += "\nTop-most backtrace:\n" + ''.join(
                ["\t%s:%d in %s where '%s'\n" % tuple(entry)
                 for entry in traceback.extract_stack(limit=self.btlevels)])
        OnceLogger.__call__(self, msgid, fullmsg, self.maxcount)


warning = WarningLog(
    handlers=not cfg.getboolean('warnings', 'suppress', default=False)
             and _handlers('warnings') or [],
    btlevels=cfg.get_as_dtype('warnings', 'bt', int, default=0),
    maxcount=cfg.get_as_dtype('warnings', 'count', int, default=1))

# objects post their informative messages and report their errors on the
# console of the host environment
console = ConsoleLogger(
    handlers=_handlers('console'),
    quiet=cfg.getboolean('console', 'quiet', default=False))


_debug_ids = [
    ('PY', "No suppression of various warnings (numpy, scipy) etc."),
    ('VERBOSE', "Verbose control debugging"),
    ('DBG', "Debug output itself"),
    ('INIT', "Just sequence of inits"),
    ('RANDOM', "Random number generation"),
    ('EXT', "External dependencies"),
    ('EXT_', "External dependencies (verbose)"),
    ('TEST', "Debug unittests"),
    ('CMDLINE', "Handling of command line parameters"),

    ('COL', "Generic Collectable"),
    ('ST', "State"),
    ('STV', "State Variable"),
    ('COLR', "Collector for ca and learner parameters"),
    ('ENFORCE_CA_ENABLED', "Forcing all ca to be enabled"),

    ('DS', "Data containers"),
    ('DS_', "Data containers (verbose)"),
    ('IOH', "IO Helpers (data and model files)"),

    ('LRN', "Base learners"),
    ('CLF', "Base Classifiers"),
    ('CLF_', "Base Classifiers (verbose)"),
    ('SKL', "scikit-learn adapters"),
    ('SVM', "SVM"),
    ('SVM_', "SVM (verbose)"),
    ('HMM', "HMM"),
    ('HMM_', "HMM (verbose)"),

    ('OBJ', "Host objects"),
    ('OBJ_', "Host objects (verbose)"),
    ('MSG', "Message dispatch and outlets"),
    ('WH', "Object warehouse"),
    ]


if __debug__:
    from mllib.base.verbosity import DebugLogger
    # NOTE: all calls to debug must be preconditioned with
    # if __debug__:
    debug = DebugLogger(handlers=_handlers('debug'))
    for _id, _descr in _debug_ids:
        debug.register(_id, _descr)

    if cfg.has_option('general', 'debug'):
        debug.set_active_from_string(cfg.get('general', 'debug'))
    if cfg.has_option('debug', 'metrics'):
        debug.register_metric(cfg.get('debug', 'metrics').split(","))

    debug('INIT', 'mllib.base end')
else:
    # swallows the calls, so they do not need to be guarded
    from mllib.base.verbosity import BlackHoleLogger
    debug = BlackHoleLogger()
