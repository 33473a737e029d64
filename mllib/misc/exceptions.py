# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Exception classes which are not specific to learners"""

__docformat__ = 'restructuredtext'


class UnknownStateError(Exception):
    """Thrown if the internal state of the class is not yet defined.

    Classes which have conditional attributes (ca) can throw this
    exception when the value of the attribute was not computed (or
    was not enabled) yet.
    """
    pass
