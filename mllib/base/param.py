# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Tunable parameters of learners and objects"""

__docformat__ = 'restructuredtext'

import re
import textwrap
import numpy as np
from mllib.base.attributes import IndexedCollectable
from mllib.base.constraints import expand_constraint_spec, unwrap_description

if __debug__:
    from mllib.base import debug

_whitespace_re = re.compile(r'\n\s+|^\s+')

__all__ = [ 'Parameter' ]


class Parameter(IndexedCollectable):
    """Parameter with a default value and constraints on its values

    Every value assigned goes through the constraints first, which may
    convert it (e.g. ``'3'`` into ``3``) or reject it with an exception.
    Parameters of an object double as its attributes, settable by a
    message named after the parameter.

    Additional keyword arguments are stored as attributes of the
    parameter.  Known ones:

    errmsg
      Message reported on the host console when a value sent by a patch
      is rejected

    Notes
    -----
    Stored values are assumed to be immutable: changing a value in place
    (e.g. ``params.weights[1] = 2``) goes unnoticed.
    """

    def __init__(self, default, constraints=None, ro=False, index=None,
                 value=None, name=None, doc=None, **kwargs):
        """
        Parameters
        ----------
        default
          Default value, also subject to the constraints.
        constraints : callable or type or None
          Validator returning the (possibly converted) value or raising an
          exception, see `mllib.base.constraints`.
        ro : bool
          If True, the value given to the constructor cannot be changed.
        index : int or None
          Position in listings (help of objects).  If None, order of
          declaration decides.
        value
          Value to start with instead of the default.
        name : str
        doc : str

        Examples
        --------
        >>> from mllib.base.param import Parameter
        >>> from mllib.base.constraints import (EnsureFloat, EnsureRange,
        ...                                     Constraints)
        >>> cost = Parameter(1.0, constraints=Constraints(
        ...                      EnsureFloat(), EnsureRange(min=0.0)))
        """
        self._additional_props = []
        for k, v in kwargs.items():
            setattr(self, k, v)
            self._additional_props.append(k)

        self.__default = default
        self._ro = ro
        self.constraints = expand_constraint_spec(constraints)

        IndexedCollectable.__init__(self, index=index, name=name, doc=doc)
        self._isset = False
        if value is None:
            value = default
        self._set(value, init=True)


    def __reduce__(self):
        cls, args, state = IndexedCollectable.__reduce__(self)
        state.update([(k, getattr(self, k)) for k in self._additional_props])
        state['_additional_props'] = self._additional_props
        return (cls, (self.__default, self.constraints, self._ro) + args,
                state)


    def __str__(self):
        return '%s=%s' % (IndexedCollectable.__str__(self), self.value)


    def __repr__(self):
        s = "%s(%r, name=%r, doc=%r" % (self.__class__.__name__,
                                        self.__default, self.name,
                                        self.__doc__)
        for p in self._additional_props:
            s += ", %s=%r" % (p, getattr(self, p))
        if self._ro:
            s += ', ro=True'
        if not self.is_default:
            s += ', value=%r' % (self.value,)
        return s + ')'


    def _paramdoc(self, indent="  ", width=70):
        """Entry of the parameter in a listing of parameters

        The first line gives the name and the accepted values, the
        description follows indented::

          cost : float, optional
            Cost of the machine. [Default: 1.0]
        """
        header = self.name
        sdoc = None
        if self.constraints is not None:
            sdoc = self.constraints.short_description()
        if sdoc is not None:
            # parameters are always optional
            header += " : %s, optional" % unwrap_description(sdoc)
        lines = [header]

        if self.__doc__:
            doc = self.__doc__.strip()
            if not doc.endswith('.'):
                doc += '.'
            if self.constraints is not None:
                cdoc = unwrap_description(self.constraints.long_description())
                if cdoc:
                    doc += ' Constraints: %s.' % cdoc
            doc = _whitespace_re.sub(' ', doc + " [Default: %r]" % (self.default,))
            lines += [indent + x
                      for x in textwrap.wrap(doc, width=width - len(indent))]
        return '\n'.join(lines)


    def reset_value(self):
        """Reset value to the default"""
        if not self.is_default and not self._ro:
            self._isset = True
            self.value = self.__default


    def _set(self, val, init=False):
        if self.constraints is not None:
            val = self.constraints(val)
        if self._ro and not init:
            raise RuntimeError("Attempt to set read-only parameter %s to %s"
                               % (self.name, val))
        changed = self._value != val
        if isinstance(changed, np.ndarray):
            changed = np.any(changed)
        if changed:
            if __debug__:
                debug("COL", "Parameter: setting %s to %s", (self, val))
            self._value = val
            # initialization does not count as setting
            self._isset = not init
        elif __debug__:
            debug("COL", "Parameter: not setting %s since value is the same",
                  (self,))


    @property
    def is_default(self):
        """Whether the current value is the default one"""
        return self._value is self.__default


    @property
    def equal_default(self):
        """Whether the current value equals the default one"""
        return self._value == self.__default


    default = property(fget=lambda x: x.__default)
    value = property(fget=lambda x: x._value, fset=_set)
