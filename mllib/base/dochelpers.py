# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Helpers for uniform __repr__ and __str__ of objects

Lengths of the produced strings are bounded by ``[verbose] truncate repr``
and ``[verbose] truncate str`` of the configuration.
"""

__docformat__ = 'restructuredtext'

import types

from mllib.base import cfg


def _saferepr(f):
    """repr() which does not recurse into the owner of bound methods"""
    if isinstance(f, types.MethodType):
        return "<bound %s.%s>" % (f.__self__.__class__.__name__,
                                  f.__func__.__name__)
    return repr(f)


def _repr_attrs(obj, attrs, default=None, error_value='ERROR'):
    """Formatted ``name=value`` of the attributes differing from `default`
    """
    out = []
    for a in attrs:
        v = getattr(obj, a, error_value)
        if not (v is default or isinstance(v, str) and v == default):
            out.append('%s=%s' % (a, _saferepr(v)))
    return out


def _truncate(s, option, margin):
    truncate = cfg.get_as_dtype('verbose', option, int, default=200)
    if truncate is not None and len(s) > truncate - margin:
        s = s[:max(truncate - margin, 0)] + '...'
    return s


def _repr(obj, *args, **kwargs):
    """Structured __repr__: class name followed by the given items

    Parameters
    ----------
    obj : object
      Typically `self` of the object to represent.
    *args, **kwargs : str
      Items appended comma separated, keyword arguments as ``key=value``.
    """
    cls_name = obj.__class__.__name__
    items = ', '.join(list(args)
                      + ["%s=%s" % (k, v) for k, v in kwargs.items()])
    # -5 to take (...) into account
    return "%s(%s)" % (cls_name,
                       _truncate(items, 'truncate repr', 5 + len(cls_name)))


def _strid(obj):
    """Id of an object for debug messages"""
    return "#%d" % id(obj)


def _str(obj, *args, **kwargs):
    """Structured __str__, e.g. ``<ClassificationData: nsamples=3>``"""
    s = obj.__class__.__name__
    items = ', '.join(list(args)
                      + ["%s=%s" % (k, v) for k, v in kwargs.items()])
    if len(items):
        s += ': ' + items
    # -5 to take <...> into account
    return '<' + _truncate(s, 'truncate str', 5) + '>'
