# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Value constraints for parameters (attributes) of learners and objects

A constraint is called with a value and returns it, possibly converted,
or raises ValueError.  Values sent by a patch are numbers or symbols, so
the conversions are lenient: ``EnsureInt()('3')`` gives 3 and
``EnsureBool()(1.0)`` gives True.
"""

__docformat__ = 'restructuredtext'

import numpy as np


class EnsureValue(object):
    """Base of the constraints, accepting any value

    Descriptions end up in the listings of parameters: the short one
    after the name of a parameter, the long one within its description.
    """

    def __call__(self, value):
        return value

    def long_description(self):
        return self.short_description()

    def short_description(self):
        return None



class EnsureDType(EnsureValue):
    """Convert a value (or each element of a sequence) with `dtype`"""

    def __init__(self, dtype):
        self._dtype = dtype

    def __call__(self, value):
        if hasattr(value, '__array__'):
            return np.asanyarray(value, dtype=self._dtype)
        if hasattr(value, '__iter__') and not isinstance(value, str):
            return [self._dtype(v) for v in value]
        return self._dtype(value)

    def short_description(self):
        return getattr(self._dtype, '__name__', str(self._dtype))

    def long_description(self):
        return "value must be convertible to type '%s'" \
               % self.short_description()


class EnsureInt(EnsureDType):
    def __init__(self):
        EnsureDType.__init__(self, int)

    def __call__(self, value):
        # symbols like '3.0'
        if isinstance(value, str):
            value = float(value)
        return EnsureDType.__call__(self, value)


class EnsureFloat(EnsureDType):
    def __init__(self):
        EnsureDType.__init__(self, float)



class EnsureBool(EnsureValue):
    _false = (0, '0', 'no', 'off', 'disable', 'false')
    _true = (1, '1', 'yes', 'on', 'enable', 'true')

    def __call__(self, value):
        if isinstance(value, (bool, np.bool_)):
            return bool(value)
        if value in self._false:
            return False
        if value in self._true:
            return True
        raise ValueError("'%s' cannot be converted into a boolean" % (value,))

    def short_description(self):
        return 'bool'

    def long_description(self):
        return 'value must be convertible to type bool'



class EnsureNone(EnsureValue):
    def __call__(self, value):
        if value is not None:
            raise ValueError("value must be `None`")
        return None

    def short_description(self):
        return 'None'

    def long_description(self):
        return 'value must be `None`'



class EnsureChoice(EnsureValue):
    """Accept only one of the given values"""

    def __init__(self, *args):
        self._allowed = args

    def __call__(self, value):
        if value not in self._allowed:
            raise ValueError("value is not one of %s" % (self._allowed,))
        return value

    def short_description(self):
        return '{%s}' % ', '.join([str(c) for c in self._allowed])

    def long_description(self):
        return 'value must be one of %s' % (self._allowed,)



class EnsureRange(EnsureValue):
    """Accept values within [min, max]; None leaves a side open"""

    def __init__(self, min=None, max=None):
        self._min = min
        self._max = max

    def __call__(self, value):
        if self._min is not None and value < self._min:
            raise ValueError("value must be at least %s" % (self._min,))
        if self._max is not None and value > self._max:
            raise ValueError("value must be at most %s" % (self._max,))
        return value

    def long_description(self):
        return 'value must be in range [%s, %s]' % (
            self._min is None and '-inf' or self._min,
            self._max is None and 'inf' or self._max)



class EnsureListOf(EnsureValue):
    """List of values each converted with `dtype`; a single value gets
    wrapped into a list"""

    def __init__(self, dtype):
        self._dtype = dtype

    def __call__(self, value):
        if isinstance(value, str) or not hasattr(value, '__iter__'):
            value = [value]
        return [self._dtype(v) for v in value]

    def short_description(self):
        return 'list(%s)' % getattr(self._dtype, '__name__', str(self._dtype))

    def long_description(self):
        return "value must be convertible to %s" % self.short_description()



class _CompoundConstraints(object):
    """Constraints made of other constraints; None stands for EnsureNone"""

    _joint = None

    def __init__(self, *args):
        self.constraints = [c is None and EnsureNone() or c for c in args]

    def _describe(self, descriptions, sep):
        descriptions = [d for d in descriptions if d is not None]
        doc = sep.join(descriptions)
        if len(descriptions) > 1:
            return '(%s)' % doc
        return doc

    def short_description(self):
        return self._describe(
            [c.short_description() for c in self.constraints
             if hasattr(c, 'short_description')], ' %s ' % self._joint)

    def long_description(self):
        return self._describe(
            [c.long_description() for c in self.constraints
             if hasattr(c, 'long_description')], ', %s ' % self._joint)



class Constraints(_CompoundConstraints):
    """All constraints in turn, each one getting the output of the
    previous one"""

    _joint = 'and'

    def __call__(self, value):
        for c in self.constraints:
            value = c(value)
        return value



class AltConstraints(_CompoundConstraints):
    """The first of the constraints accepting the value"""

    _joint = 'or'

    def __call__(self, value):
        errors = []
        for c in self.constraints:
            try:
                return c(value)
            except (ValueError, TypeError) as e:
                errors.append(str(e))
        raise ValueError("all alternative constraints violated: %s"
                         % '; '.join(errors))



def expand_constraint_spec(spec):
    """Constraint for a specification given to a `Parameter`

    Parameters
    ----------
    spec : None or callable or type
      None and callables are taken as they are, the types `int`, `float`
      and `bool` give the respective `Ensure*` constraints.
    """
    known = {int: EnsureInt, float: EnsureFloat, bool: EnsureBool}
    if spec in known:
        return known[spec]()
    if spec is None or callable(spec):
        return spec
    raise ValueError("Unknown constraint specification %r" % (spec,))


def unwrap_description(doc):
    """Strip the parentheses enclosing a compound description"""
    if doc and doc[0] == '(' and doc[-1] == ')':
        return doc[1:-1]
    return doc
