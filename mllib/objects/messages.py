# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Messages as exchanged with a patching environment, and outlets

A message is a selector followed by a list of atoms.  Atoms are integers,
floats or symbols (strings).  In text form a message occupies a line, its
atoms are separated by whitespace and it may end with a ``;``::

  add 1 0.5 0.25;
  write /tmp/gesture
"""

__docformat__ = 'restructuredtext'

import numpy as np

if __debug__:
    from mllib.base import debug


class IntAtom(int):
    """Integer parsed from text, remembering its token"""

    def __new__(cls, token):
        self = int.__new__(cls, token)
        self.token = token
        return self


class FloatAtom(float):
    """Float parsed from text, remembering its token"""

    def __new__(cls, token):
        self = float.__new__(cls, token)
        self.token = token
        return self


def parse_atom(token):
    """Convert a token into an int, a float, or leave it a symbol

    Numbers keep the text they were parsed from, so a symbol like
    ``1e3`` given as a path is formatted back unchanged.
    """
    for dtype in (IntAtom, FloatAtom):
        try:
            return dtype(token)
        except ValueError:
            pass
    return token


def parse_message(line):
    """Parse a line of text into a ``(selector, atoms)`` tuple

    Returns None for empty and comment (``#``) lines.

    Examples
    --------
    >>> parse_message('add 1 0.5 abc;')
    ('add', [1, 0.5, 'abc'])
    """
    line = line.strip()
    if line.endswith(';'):
        line = line[:-1].rstrip()
    if not line or line.startswith('#'):
        return None
    tokens = line.split()
    return tokens[0], [parse_atom(t) for t in tokens[1:]]


def format_atom(atom):
    """Text representation of a single atom"""
    token = getattr(atom, 'token', None)
    if isinstance(token, str):
        return token
    if isinstance(atom, (bool, np.bool_)):
        return str(int(atom))
    if isinstance(atom, (int, np.integer)):
        return str(int(atom))
    if isinstance(atom, (float, np.floating)):
        return '%g' % atom
    return str(atom)


def format_message(selector, atoms=()):
    """Text representation of a message"""
    return ' '.join([str(selector)] + [format_atom(a) for a in atoms])



class Outlet(object):
    """Output port of an object

    Listeners connected to an outlet are called with the selector and the
    list of atoms of every message passing through it, in the order they
    were connected.
    """

    def __init__(self, index, doc=None):
        self.index = index
        self.__doc__ = doc
        self._listeners = []


    def __repr__(self):
        return "%s(%d)" % (self.__class__.__name__, self.index)


    def connect(self, listener):
        """Connect a callable ``listener(selector, atoms)``"""
        if not callable(listener):
            raise ValueError("Outlet listener must be callable, got %r"
                             % (listener,))
        self._listeners.append(listener)


    def disconnect(self, listener=None):
        """Disconnect a listener, or all of them if `listener` is None"""
        if listener is None:
            self._listeners = []
        else:
            self._listeners.remove(listener)


    def __call__(self, selector, *atoms):
        atoms = list(atoms)
        if __debug__:
            debug('MSG', "Outlet %d: %s",
                  (self.index, format_message(selector, atoms)))
        for listener in self._listeners:
            listener(selector, atoms)


    listeners = property(fget=lambda self: list(self._listeners))



class MessageRecorder(object):
    """Listener collecting every message it receives

    Mostly useful to inspect the output of an object::

      rec = MessageRecorder()
      obj.outlets[-1].connect(rec)
    """

    def __init__(self):
        self.messages = []


    def __call__(self, selector, atoms):
        self.messages.append((selector, list(atoms)))


    def selectors(self):
        return [s for s, _ in self.messages]


    def last(self, selector=None):
        """Atoms of the last message (with the given selector)"""
        for s, atoms in reversed(self.messages):
            if selector is None or s == selector:
                return atoms
        raise KeyError("No message with selector %r was recorded"
                       % (selector,))


    def clear(self):
        self.messages = []
