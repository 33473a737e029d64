# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Classes to control and store state information.

Learners and objects declare their tunable parameters (`Parameter`) and
conditionally stored results (`ConditionalAttribute`) at class level.
The `AttributesCollector` metaclass groups them into collection
templates, and each instance of a `ClassWithCollections` gets its own
copies, available as ``params`` and ``ca``::

  class Gesture(ClassWithCollections):
      threshold = Parameter(0.5, constraints=EnsureFloat())
      distances = ConditionalAttribute(enabled=False)

  g = Gesture(threshold=0.7)
  g.params.threshold          # 0.7
  g.ca.enable('distances')
"""

__docformat__ = 'restructuredtext'

import copy

from mllib.base.types import is_sequence_type

# Although not used here -- included into interface
from mllib.misc.exceptions import UnknownStateError
from mllib.base.attributes import IndexedCollectable, ConditionalAttribute
from mllib.base.dochelpers import _strid, _saferepr

from mllib.base.collections import Collection as BaseCollection

if __debug__:
    from mllib.base import debug


###################################################################
# Collections
#

class Collection(BaseCollection):
    """Named collection of `IndexedCollectable` items of an instance"""

    def __init__(self, items=None, name=None):
        """
        Parameters
        ----------
        items : list or dict of IndexedCollectable
        name : str
          Name of the collection within its owner, e.g. 'ca'.
        """
        self.name = name
        super(Collection, self).__init__(items)


    def __reduce__(self):
        return (self.__class__, (list(self.items()), self.name))


    def __str__(self):
        maxnumber = 4
        if __debug__ and "ST" in debug.active:
            maxnumber = len(self)
        values = [str(v) for v in list(self.values())[:maxnumber]]
        return "%s{%s%s}" % (self.name or '', ' '.join(values),
                             len(self) > maxnumber and '...' or '')


    def __repr__(self):
        # no owner here, it would recurse through its repr
        return "%s(items=%r, name=%r)" % (self.__class__.__name__,
                                          list(self.values()), self.name)


    def _cls_repr(self):
        """Arguments of the owner's __repr__ contributed by the collection"""
        return []


    def _is_initializable(self, key):
        """Whether constructor argument `key` is handled by `_initialize`"""
        return key in self


    def _initialize(self, key, value):
        self[key]._set(value, init=True)


    def is_set(self, key=None):
        """Whether the item `key` (any of the items in a list, or any item
        at all if None) got a value assigned"""
        if key is None:
            keys = list(self.keys())
        elif isinstance(key, str):
            keys = [key]
        else:
            keys = key
        return any([self[k].is_set for k in keys])


    def which_set(self):
        """Names of the items which got a value assigned"""
        return [key for key, v in self.items() if v.is_set]


    def _action(self, key, func, missingok=False, **kwargs):
        """Call `func` on an item, a list of items or 'all' items

        Parameters
        ----------
        key : str or list of str
        func
          Unbound method of the items, called with ``**kwargs``.
        missingok : bool
          If True, unknown keys are silently skipped.
        """
        if isinstance(key, str):
            if key.lower() == 'all':
                keys = list(self.keys())
            else:
                keys = [key]
        elif is_sequence_type(key):
            keys = key
        else:
            raise ValueError("Don't know how to handle items given by %r"
                             % (key,))
        for key_ in keys:
            if key_ not in self:
                if missingok:
                    continue
                raise KeyError("%s has no item %r" % (self.name, key_))
            func(self[key_], **kwargs)


    def reset(self, key=None):
        """Reset the item `key`, or all of them"""
        if key is None:
            key = 'all'
        self._action(key, lambda item: item.reset())



class ParameterCollection(Collection):
    """Parameters of a learner or an object (``params``)"""

    def _cls_repr(self):
        return ["%s=%s" % (k, _saferepr(v.value))
                for k, v in sorted(self.items()) if not v.is_default]



class ConditionalAttributesCollection(Collection):
    """Conditional attributes of a learner (``ca``)

    Only enabled attributes store the values assigned to them.  The set of
    enabled attributes can be stored and restored::

      enabled = clf.ca.enabled
      clf.ca.enable('all')
      ...
      clf.ca.enabled = enabled
    """

    def _cls_repr(self):
        prefixes = []
        for name, invert in (('enable', False), ('disable', True)):
            keys = [k for k in sorted(self.keys())
                    if self[k]._defaultenabled != self[k].enabled
                    and self[k].enabled != invert]
            if len(keys):
                prefixes.append("%s_ca=%s" % (name, keys))
        return prefixes


    def _is_initializable(self, key):
        return key in ('enable_ca', 'disable_ca')


    def _initialize(self, key, value):
        if key == 'enable_ca':
            self.enable(value or [], missingok=True)
        else:
            self.disable(value or [])


    def is_enabled(self, key):
        """Whether `key` is known and enabled"""
        return key in self and self[key].enabled


    def enable(self, key, value=True, missingok=False):
        """Enable (or disable if `value` is False) attribute(s) `key`"""
        self._action(key, ConditionalAttribute._set_enabled,
                     missingok=missingok, value=value)


    def disable(self, key):
        """Disable attribute(s) `key`"""
        self.enable(key, value=False)


    def _get_enabled(self):
        return [k for k in self.keys() if self.is_enabled(k)]


    def _set_enabled(self, keys):
        for key in self.keys():
            self.enable(key, key in keys)


    enabled = property(fget=_get_enabled, fset=_set_enabled,
                       doc="Names of the enabled attributes")


##################################################################
# Base classes (and metaclass) which use collections
#

# collection (and its class) per type of the class level attribute
_known_collections = {
    'ConditionalAttribute': ("ca", ConditionalAttributesCollection),
    'Parameter': ("params", ParameterCollection),
    }

_col2class = dict(_known_collections.values())

_COLLECTIONS_ORDER = ['params', 'ca']


class AttributesCollector(type):
    """Metaclass composing the collection templates of a class

    Class level `IndexedCollectable` attributes are removed from the class
    and placed into the templates, along with the ones inherited from the
    bases.  Attributes redefined in a class take precedence over the
    inherited ones.
    """

    def __init__(cls, name, bases, namespace):
        super(AttributesCollector, cls).__init__(name, bases, namespace)

        collections = {}
        for attr, value in list(namespace.items()):
            if not isinstance(value, IndexedCollectable):
                continue
            col = _known_collections[value.__class__.__name__][0]
            if value.name is None:
                value.name = attr
            collections.setdefault(col, {})[attr] = value
            # the instance's collection takes over
            delattr(cls, attr)

        for base in bases:
            if not isinstance(base, AttributesCollector):
                continue
            for col, super_collection in base._collections_template.items():
                collection = collections.setdefault(col, {})
                for pname, pval in super_collection.items():
                    if pname not in collection:
                        collection[pname] = pval
                    elif __debug__:
                        debug("COLR", "%s overrides %s.%s of %s",
                              (name, col, pname, base.__name__))

        if __debug__:
            debug("COLR", "Collections template of %s: %s",
                  (name, _collections_summary(collections)))

        cls._collections_template = dict(
            [(col, _col2class[col](items=list(items.values())))
             for col, items in collections.items()])

        # listing of the parameters in the order of their declaration
        params = collections.get('params', {})
        cls._paramsdoc = [(p.name, p._paramdoc())
                          for p in sorted(params.values(),
                                          key=lambda p: p._instance_index)]


def _collections_summary(collections):
    return ', '.join(['%s(%s)' % (col, ', '.join(sorted(items)))
                      for col, items in sorted(collections.items())])



class ClassWithCollections(object, metaclass=AttributesCollector):
    """Base class for objects with parameters and conditional attributes

    Values for parameters (and ``enable_ca``/``disable_ca`` lists) can be
    passed to the constructor as keyword arguments.
    """

    def __new__(cls, *args, **kwargs):
        self = super(ClassWithCollections, cls).__new__(cls)

        s__dict__ = self.__dict__
        # multiple inheritance might bring us here twice
        if '_collections' not in s__dict__:
            collections = copy.deepcopy(cls._collections_template)
            s__dict__['_collections'] = collections
            for col, collection in collections.items():
                s__dict__[col] = collection
                collection.name = col
            self.__params_set = False

        if __debug__:
            debug("COL", "Created collections for %s%s",
                  (cls.__name__, _strid(self)))
        return self


    def __init__(self, **kwargs):
        if self.__params_set:
            return
        self.__params_set = True

        collections = list(self._collections.values())
        # disabling comes after enabling
        for arg in sorted(kwargs, key=lambda k: k == 'disable_ca'):
            for collection in collections:
                if collection._is_initializable(arg):
                    collection._initialize(arg, kwargs[arg])
                    break
            else:
                known = sorted(sum([list(c.keys()) for c in collections
                                    if isinstance(c, ParameterCollection)],
                                   []))
                raise TypeError(
                    "Unexpected keyword argument %s=%s for %s."
                    "\n\tValid parameters are: %s"
                    % (arg, kwargs[arg], self.__class__.__name__,
                       ', '.join(known)))


    def reset(self):
        for collection in self._collections.values():
            collection.reset()


    def __str__(self):
        s = "%s:" % self.__class__.__name__
        for col, collection in self._collections.items():
            s += " %d %s:%s" % (len(collection), col, collection)
        return s


    def __repr__(self, prefixes=None):
        """String definition of the object

        Parameters
        ----------
        prefixes : list of str
          Other arguments to list before the ones of the collections
        """
        prefixes = list(prefixes or [])
        for col in _COLLECTIONS_ORDER:
            collection = self._collections.get(col, None)
            if collection is not None:
                prefixes += collection._cls_repr()
        return "%s(%s)" % (self.__class__.__name__, ', '.join(prefixes))
