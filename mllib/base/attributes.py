# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Class level attributes collected into the collections of
`ClassWithCollections` instances.
"""

__docformat__ = 'restructuredtext'

from mllib.base.collections import Collectable
from mllib.misc.exceptions import UnknownStateError

if __debug__:
    from mllib.base import debug


class IndexedCollectable(Collectable):
    """Collectable which knows its position among its siblings

    Instances declared in a class body get grouped into per-class
    collection templates by `AttributesCollector`; every instance of the
    class receives its own copy of them.  The index orders listings (e.g.
    the help of an object), and tracks whether a value was assigned.
    """

    _instance_index = 0

    def __init__(self, index=None, *args, **kwargs):
        """
        Parameters
        ----------
        index : int or None
          Position in listings.  If None, order of instantiation decides.
        **kwargs
          Passed to `Collectable`
        """
        if index is None:
            IndexedCollectable._instance_index += 1
            index = IndexedCollectable._instance_index
        self._instance_index = index
        self._isset = False
        self.reset()
        Collectable.__init__(self, *args, **kwargs)


    def __reduce__(self):
        cls, args = Collectable.__reduce__(self)
        return (cls, (self._instance_index,) + args, {'_isset': self._isset})


    def _set(self, val, init=False):
        Collectable._set(self, val)
        self._isset = True


    @property
    def is_set(self):
        return self._isset


    def reset(self):
        """Forget that a value was assigned"""
        self._isset = False


    def __str__(self):
        return "%s%s" % (self.name, self._isset and '*' or '')


    def __repr__(self):
        value = None
        if self._isset:
            value = self.value
        return "%s(value=%r, name=%r, doc=%r, index=%s)" % (
            self.__class__.__name__, value,
            self.name, self.__doc__, self._instance_index)



class ConditionalAttribute(IndexedCollectable):
    """Storage for a result which is only kept while enabled

    Learners store e.g. their predictions in conditional attributes.
    Computing some of them is costly, so they only get computed when the
    attribute is enabled.  Reading an attribute which got no value since
    the last reset raises `UnknownStateError`.
    """

    def __init__(self, enabled=True, *args, **kwargs):
        """
        Parameters
        ----------
        enabled : bool
          Whether assigned values are stored at all.
        **kwargs
          Passed to `IndexedCollectable`
        """
        if __debug__ and 'ENFORCE_CA_ENABLED' in debug.active:
            enabled = True
        self.__enabled = enabled
        self._defaultenabled = enabled
        IndexedCollectable.__init__(self, *args, **kwargs)


    def __reduce__(self):
        cls, args, state = IndexedCollectable.__reduce__(self)
        state.update({'_defaultenabled': self._defaultenabled,
                      '_value': self._value})
        # (enabled, index, value, name, doc); the value travels in the state
        return (cls, (self.__enabled, args[0], None) + args[2:], state)


    def __str__(self):
        return IndexedCollectable.__str__(self) + (self.__enabled and '+' or '')


    def _get(self):
        if not self.is_set:
            raise UnknownStateError("Unknown yet value of %s" % self.name)
        return IndexedCollectable._get(self)


    def _set(self, val, init=False):
        if self.__enabled:
            IndexedCollectable._set(self, val)
        elif __debug__:
            debug("COL", "Not setting disabled %s", (self,))


    def reset(self):
        """Drop the value"""
        IndexedCollectable.reset(self)
        self._value = None


    def _get_enabled(self):
        return self.__enabled


    def _set_enabled(self, value=False):
        if __debug__ and self.__enabled != value:
            debug("STV", "%s %s", (value and 'Enabling' or 'Disabling', self))
        self.__enabled = value


    enabled = property(fget=_get_enabled, fset=_set_enabled)
