# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Collection of the available objects, selectable by their tags.
"""

__docformat__ = 'restructuredtext'

import textwrap

from mllib.base import externals
from mllib.base.types import is_sequence_type

if __debug__:
    from mllib.base import debug

_KNOWN_INTERNALS = ['classification', 'regression', 'time-series',
                    'svm', 'libsvm', 'skl', 'hmm', 'hmmlearn',
                    'knn', 'anbc', 'dtree', 'randforest', 'adaboost',
                    'logreg', 'linreg', 'mlp', 'linear', 'non-linear',
                    'non-deterministic']


class Warehouse(object):
    """Class to keep known object classes

    Should provide easy ways to select objects of needed kind:
    objwh['classification', 'skl'] should return all classifying objects
    built upon scikit-learn, objwh['!skl'] all others.
    """

    def __init__(self, known_tags=None, matches=None):
        """Initialize warehouse

        Parameters
        ----------
        known_tags : list of str
          List of known tags
        matches : dict
          Optional dictionary of additional matches. E.g.
          matches={'classification': ['time-series']} would provide
          sequence classifiers also if 'classification' was requested
        """
        self._known_tags = set(known_tags or [])
        self.__items = []
        self.__keys = set()
        if matches is None:
            matches = {}
        self.__matches = matches
        self.__names = {}


    def __getitem__(self, *args):
        if isinstance(args[0], tuple):
            args = args[0]

        # so we explicitely handle [:]
        if args == (slice(None),):
            args = []

        # lets remove optional modifier '!'
        dargs = set([str(x).lstrip('!') for x in args]).difference(
            self._known_tags)

        if len(dargs) > 0:
            raise ValueError("Unknown tags %s requested. Known are %s"
                             % (sorted(dargs), sorted(self._known_tags)))

        result = []
        # check every known item
        for item in self.__items:
            good = True
            # by default each one counts
            for arg in args:
                # check for rejection first
                if arg.startswith('!'):
                    if arg[1:] in item.__tags__:
                        good = False
                        break
                    else:
                        continue
                # check for inclusion
                found = False
                for arg in [arg] + self.__matches.get(arg, []):
                    if arg in item.__tags__:
                        found = True
                        break
                good = found
                if not good:
                    break
            if good:
                result.append(item)
        return result


    def __iadd__(self, item):
        if is_sequence_type(item):
            for item_ in item:
                self.__iadd__(item_)
        else:
            if not hasattr(item, '__tags__'):
                raise ValueError("Cannot register %s which has no __tags__ "
                                 "defined" % item)
            name = item._host_name
            if name in self.__names:
                raise ValueError("Cannot register %s, an item with name '%s' "
                                 "already exists" % (item, name))
            if len(item.__tags__) == 0:
                raise ValueError("Cannot register %s which has empty __tags__"
                                 % item)
            tags = set(item.__tags__)
            if tags.issubset(self._known_tags):
                self.__items.append(item)
                self.__keys |= tags
            else:
                raise ValueError('Unknown tag(s) %s'
                                 % sorted(tags.difference(self._known_tags)))
            if __debug__:
                debug('WH', "Registered %s as %s", (item.__name__, name))
            self.__names[name] = item
        return self


    def get(self, name, default=None):
        """Object class registered under a host name (e.g. ``ml.svm``)"""
        return self.__names.get(name, default)


    def __contains__(self, name):
        return name in self.__names


    @property
    def known_tags(self):
        """Tags objects may be registered with"""
        return self._known_tags


    @property
    def tags(self):
        """Tags of the registered objects
        """
        return self.__keys


    def listing(self):
        """Listing (name + tags) of registered items
        """
        return [(x._host_name, x.__tags__) for x in self.__items]


    def print_registered(self, *args):
        if not len(args):
            args = (slice(None),)
        # sort by name
        for obj in sorted(self.__getitem__(args),
                          key=lambda x: x._host_name.lower()):
            print('%s\n%s' % (
                    obj._host_name,
                    textwrap.fill(', '.join(sorted(set(obj.__tags__))), 70,
                                  initial_indent=' ' * 4,
                                  subsequent_indent=' ' * 4)))


    @property
    def items(self):
        """Registered items
        """
        return self.__items


    @property
    def names(self):
        """Host names of registered items"""
        return list(self.__names.keys())



objwh = Warehouse(known_tags=_KNOWN_INTERNALS) # objects

if externals.exists('skl'):
    from mllib.objects.svm import MLSVMObject
    from mllib.objects.skl import MLKNNObject, MLANBCObject, MLDTreeObject, \
         MLRandForestObject, MLAdaBoostObject, MLLogRegObject, \
         MLLinRegObject, MLMLPObject
    objwh += [MLSVMObject,
              MLKNNObject, MLANBCObject, MLDTreeObject, MLRandForestObject,
              MLAdaBoostObject, MLLogRegObject, MLLinRegObject, MLMLPObject]

if externals.exists('hmmlearn'):
    from mllib.objects.hmm import MLHMMObject
    objwh += [MLHMMObject]
