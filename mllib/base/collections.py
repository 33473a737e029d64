# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Named value holders (`Collectable`) and the dict-like `Collection`
giving attribute access to their values.
"""

__docformat__ = 'restructuredtext'

import copy, re

from mllib.base.dochelpers import _str
from mllib.base.constraints import unwrap_description

if __debug__:
    from mllib.base import debug


_object_getattribute = dict.__getattribute__
_object_setattr = dict.__setattr__
_object_setitem = dict.__setitem__

# names which would shadow the dict interface
_dict_api = set(dict.__dict__)


class Collectable(object):
    """Named container of a single value, element of a `Collection`"""

    def __init__(self, value=None, name=None, doc=None):
        """
        Parameters
        ----------
        value
          Initial value.
        name : str
          Name under which the item is available in its collection.
        doc : str
          Purpose of the item, whitespace gets collapsed.
        """
        if doc is not None:
            doc = re.sub('[\n ]+', ' ', doc)
        self.__doc__ = doc
        self.__name = None
        self.name = name
        self._value = None
        if value is not None:
            self._set(value)


    def __copy__(self):
        copied = self.__class__(name=self.name, doc=self.__doc__)
        copied.value = copy.copy(self.value)
        return copied


    def __reduce__(self):
        return (self.__class__, (self._value, self.name, self.__doc__))


    def _get(self):
        return self._value


    def _set(self, val):
        if __debug__:
            debug("COL", "Setting %s to %s ", (self, val))
        self._value = val


    def __str__(self):
        return "%s" % self.name


    def __repr__(self):
        return "%s(name=%r, doc=%r, value=%r)" % (
            self.__class__.__name__, self.name, self.__doc__, self.value)


    def _get_name(self):
        return self.__name


    def _set_name(self, name):
        if name is not None:
            if not isinstance(name, str):
                raise ValueError("Collectable attribute name must be a "
                                 "string. Got %r" % (name,))
            if name.startswith('_'):
                raise ValueError("Collectable attribute name must not start "
                                 "with _. Got %s" % name)
        self.__name = name


    # go through the methods, so derived classes only override _get/_set
    value = property(lambda self: self._get(),
                     lambda self, value: self._set(value))
    name = property(_get_name, _set_name)



class Collection(dict):
    """Dictionary of `Collectable` items

    Values of the items are accessible as attributes of the collection::

      params.cost = 10      # same as params['cost'].value = 10
    """

    def __init__(self, items=None):
        dict.__init__(self)
        if items is not None:
            self.update(items)


    def __setitem__(self, key, value):
        """Add an item, wrapping plain values into a `Collectable`"""
        if key in _dict_api:
            raise ValueError(
                  "Cannot add a collectable %r to collection %s since it "
                  "would shadow the dict interface" % (key, self))
        if not isinstance(value, Collectable):
            value = Collectable(value, name=key)
        elif not value.name:
            value.name = key
        elif value.name != key:
            # keep the original untouched
            value = value.__copy__()
            value.name = key
        _object_setitem(self, key, value)


    def update(self, source):
        """Add items from a dict, a list of (name, item) pairs or a list
        of named collectables"""
        if isinstance(source, dict):
            items = list(source.items())
        elif isinstance(source, list):
            items = [isinstance(a, tuple) and a or (a.name, a)
                     for a in source]
        else:
            raise ValueError("Collection.update() cannot handle '%s'."
                             % type(source))
        for name, value in items:
            self[name] = value


    def __getattribute__(self, key):
        try:
            return self[key].value
        except KeyError:
            return _object_getattribute(self, key)


    def __setattr__(self, key, value):
        try:
            item = self[key]
        except KeyError:
            _object_setattr(self, key, value)
            return
        try:
            item.value = value
        except Exception as e:
            errmsg = "parameter '%s' cannot accept value `%r` (%s)" \
                     % (key, value, e)
            constraints = getattr(item, 'constraints', None)
            cdoc = constraints is not None \
                   and unwrap_description(constraints.long_description())
            if cdoc:
                errmsg += " [%s]" % cdoc
            raise ValueError(errmsg)


    def __repr__(self):
        return "%s(items=%r)" % (self.__class__.__name__, list(self.values()))


    def __str__(self):
        return _str(self, ','.join(sorted(self.keys())))
