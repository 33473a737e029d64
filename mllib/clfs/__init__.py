# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Import helper for mllib learners

Module Organization
===================
mllib.clfs module contains the learners the host objects are built upon

:group Base: base
:group External Interfaces: skl
:group Specific Implementations: svm hmm
"""

__docformat__ = 'restructuredtext'

if __debug__:
    from mllib.base import debug
    debug('INIT', 'mllib.clfs')
