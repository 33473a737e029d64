# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Command line interface of mllib

Every command lives in a ``cmd_<name>`` module providing ``setup_parser``
and ``run``, and optionally ``parser_args`` for its sub-parser.  The
``mllib`` console script (see `mllib.cmdline.main`) collects them.
"""

__docformat__ = 'restructuredtext'

if __debug__:
    from mllib.base import debug
    debug('INIT', 'mllib.cmdline')
