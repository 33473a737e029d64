# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Training data containers and their file formats

.. packagetree::
   :style: UML
"""

__docformat__ = 'restructuredtext'

if __debug__:
    from mllib.base import debug
    debug('INIT', 'mllib.datasets')
