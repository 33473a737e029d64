# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Objects a patching environment talks to by messages

Module Organization
===================
mllib.objects module contains the following modules:

:group Base: base messages classification regression
:group Objects: svm hmm skl
:group Selection: warehouse
"""

__docformat__ = 'restructuredtext'

if __debug__:
    from mllib.base import debug
    debug('INIT', 'mllib.objects')
