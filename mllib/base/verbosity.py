# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Verbose output, host console and debugging facility

The loggers defined here get instantiated once in `mllib.base`::

  from mllib.base import verbose, debug, console
  verbose(2, "Reading %s" % path)
  console.error('ml.svm', "path string is empty")
  if __debug__:
      debug('OBJ', "Created %s", (obj,))
"""

__docformat__ = 'restructuredtext'

import re
import sys


class Logger(object):
    """Base class to provide logging

    Handlers are objects with a write() method, file names to write to, or
    'stdout'/'stderr' which get resolved at the time of writing.
    """

    def __init__(self, handlers=None):
        if handlers is None:
            handlers = ['stdout']
        self.__close_handlers = []
        self.__handlers = []
        self._set_handlers(handlers)
        self.__lfprev = True


    def __del__(self):
        self._close_opened_handlers()


    def _set_handlers(self, handlers):
        handlers_ = []
        self._close_opened_handlers()
        for handler in handlers:
            if isinstance(handler, str):
                if handler.lower() in ('stdout', 'stderr'):
                    handler = handler.lower()
                else:
                    try:
                        handler = open(handler, 'w')
                    except IOError:
                        raise RuntimeError(
                              "Cannot open file %s for writing by the logger"
                              % handler)
                    self.__close_handlers.append(handler)
            handlers_.append(handler)
        self.__handlers = handlers_


    def _close_opened_handlers(self):
        for handler in self.__close_handlers:
            handler.close()
        self.__close_handlers = []


    def __call__(self, msg, args=None, lf=True, **kwargs):
        """Write `msg` to each of the handlers

        Parameters
        ----------
        msg : str
        args : tuple or None
          If given, `msg` is formatted with them, so the formatting only
          happens for messages which get written.
        lf : bool
          Whether to terminate the message with a newline.
        """
        if args is not None:
            try:
                msg = msg % args
            except Exception as e:
                msg = "%s [%% FAILED due to %s]" % (msg, e)
        if 'msgargs' in kwargs:
            msg = msg % kwargs['msgargs']
        if lf:
            msg += "\n"

        for handler in self.__handlers:
            if handler == 'stdout':
                handler = sys.stdout
            elif handler == 'stderr':
                handler = sys.stderr
            handler.write(msg)
            if hasattr(handler, 'flush'):
                handler.flush()
        self.__lfprev = lf


    handlers = property(fget=lambda self: self.__handlers,
                        fset=_set_handlers)
    lfprev = property(fget=lambda self: self.__lfprev)



class LevelLogger(Logger):
    """Logger writing only messages up to the active level

    Messages get indented according to their level.
    """

    def __init__(self, level=0, indent=" ", *args, **kwargs):
        Logger.__init__(self, *args, **kwargs)
        self.__level = 0
        self._set_level(level)
        self.indent = indent


    def _set_level(self, level):
        ilevel = int(level)
        if ilevel < 0:
            raise ValueError(
                  "Negative verbosity levels (got %d) are not supported"
                  % ilevel)
        self.__level = ilevel


    def __call__(self, level, msg, *args, **kwargs):
        if level > self.level:
            return
        if self.lfprev and self.indent:
            # continuation of a line stays unindented
            msg = self.indent * level + msg
        Logger.__call__(self, msg, *args, **kwargs)


    level = property(fget=lambda self: self.__level, fset=_set_level)



class OnceLogger(Logger):
    """Logger which writes a message with a given id only `count` times"""

    def __init__(self, *args, **kwargs):
        Logger.__init__(self, *args, **kwargs)
        self._known = {}


    def __call__(self, ident, msg, count=1, *args, **kwargs):
        seen = self._known.get(ident, 0)
        if count < 0 or seen < count:
            self._known[ident] = seen + 1
            Logger.__call__(self, msg, *args, **kwargs)



class ConsoleLogger(Logger):
    """Logger standing in for the console of a host environment.

    Objects `post` informative messages and report errors through it.
    Each line is prefixed with the name of the reporting object, as a
    patching environment would do in its console window.
    """

    def __init__(self, quiet=False, *args, **kwargs):
        """
        Parameters
        ----------
        quiet : bool, optional
          If True, posts are swallowed and only errors are written.
        """
        Logger.__init__(self, *args, **kwargs)
        self.quiet = quiet


    def post(self, name, msg):
        """Write an informative message on behalf of object `name`"""
        if self.quiet:
            return
        for line in msg.rstrip('\n').split('\n'):
            Logger.__call__(self, "%s: %s" % (name, line))


    def error(self, name, msg):
        """Write an error message on behalf of object `name`"""
        Logger.__call__(self, "%s: error: %s" % (name, msg))


    def __call__(self, name, msg, *args, **kwargs):
        self.post(name, msg)



class SetLogger(Logger):
    """Logger writing messages of the active ids among the registered ones
    """

    def __init__(self, register=None, active=None, printsetid=True,
                 *args, **kwargs):
        """
        Parameters
        ----------
        register : dict or None
          Known ids along with their descriptions.
        active : iterable
          Ids (or regular expressions matching them) to activate.
        printsetid : bool, optional
          Whether to prefix each line with the id it was written for.
        """
        Logger.__init__(self, *args, **kwargs)
        self.__registered = register or {}
        self.printsetid = printsetid
        self.__active = []
        self.__maxstrlength = 0
        self._set_active(active or [])


    def _set_active(self, active):
        """Activate ids, each given literally or as a regular expression
        (matching whole ids); 'ALL' activates every registered id"""
        registered = list(self.__registered.keys())
        active_ = set()
        for item in set(active):
            if item == '':
                continue
            if not isinstance(item, str):
                toactivate = [item]
            elif item in ('?', 'list', 'help'):
                self.print_registered(detailed=(item != '?'))
                raise SystemExit(0)
            elif item.upper() == "ALL":
                toactivate = registered
            else:
                try:
                    regexp = re.compile("^%s$" % item)
                except re.error:
                    raise ValueError(
                          "Unable to create regular expression out of %s"
                          % item)
                toactivate = [k for k in registered if regexp.match(k)]
                if not len(toactivate):
                    raise ValueError(
                          "Unknown debug ID '%s' was asked to become active,"
                          " known are: %s" % (item, sorted(registered)))
            unknown = [i for i in toactivate if i not in self.__registered]
            if len(unknown):
                raise ValueError("Unknown debug ID %s was asked to become "
                                 "active" % unknown[0])
            active_.update(toactivate)
        self.__active = list(active_)
        self.__maxstrlength = max([len(str(x)) for x in self.__active] + [0])


    def __call__(self, setid, msg, *args, **kwargs):
        if setid not in self.__active:
            return
        if len(msg) > 0 and self.printsetid:
            msg = "[%%-%ds] " % self.__maxstrlength % setid + msg
        Logger.__call__(self, msg, *args, **kwargs)


    def register(self, setid, description):
        """Make `setid` known"""
        if setid in self.__registered:
            raise ValueError(
                  "Setid %r is already known with description '%s'"
                  % (setid, self.__registered[setid]))
        self.__registered[setid] = description


    def set_active_from_string(self, value):
        """Activate the comma separated ids in `value`"""
        self.active = value.split(",")


    def print_registered(self, detailed=True):
        keys = sorted(self.__registered.keys())
        if not detailed:
            print("Registered debug entries: %s" % ', '.join(keys))
            return
        print("Registered debug entries:")
        maxl = max([len(k) for k in keys] + [0])
        for k in keys:
            print('%%%ds  %%s' % maxl % (k, self.__registered[k]))


    active = property(fget=lambda self: self.__active, fset=_set_active)
    registered = property(fget=lambda self: self.__registered)


if __debug__:

    import time
    import traceback
    from os import getpid


    class RelativeTime(object):
        """Time passed since the previous invocation"""

        def __init__(self, format="%3.3f sec"):
            self.__prev = None
            self.__format = format

        def __call__(self):
            ct = time.time()
            dt = 0.0
            if self.__prev is not None:
                dt = ct - self.__prev
            self.__prev = ct
            return self.__format % dt


    class DebugLogger(SetLogger):
        """Logger for debugging purposes

        Prefixes messages with 'DBG', optionally with the values of some
        metrics about the process (e.g. 'pid' or 'reltime'), and indents
        them by the depth of the call stack.
        """

        _known_metrics = {
            'pid': getpid,
            'asctime': time.asctime,
            }

        def __init__(self, metrics=None, offsetbydepth=True, *args, **kwargs):
            """
            Parameters
            ----------
            metrics : iterable of (func or str) or None
              Metrics to report; strings refer to the known metrics.
            offsetbydepth : bool, optional
              Whether to indent lines by the depth of the call stack.
            """
            SetLogger.__init__(self, *args, **kwargs)
            self.__metrics = []
            self.offsetbydepth = offsetbydepth
            self._known_metrics = dict(DebugLogger._known_metrics)
            self._known_metrics['reltime'] = RelativeTime()
            for metric in metrics or []:
                self.register_metric(metric)


        def register_metric(self, func):
            """Register a metric (a callable or a name of a known one); a
            list replaces all metrics"""
            if isinstance(func, list):
                self.__metrics = []
                for item in func:
                    self.register_metric(item)
                return
            if isinstance(func, str):
                if func.upper() == 'ALL':
                    self.register_metric(list(self._known_metrics.keys()))
                    return
                if not func in self._known_metrics:
                    raise ValueError(
                          "Unknown name %s for metric in DebugLogger."
                          " Known metrics are %s"
                          % (func, sorted(self._known_metrics.keys())))
                func = self._known_metrics[func]
            if not func in self.__metrics:
                self.__metrics.append(func)


        def __call__(self, setid, msg, *args, **kwargs):
            if setid not in self.registered:
                raise ValueError("Not registered debug ID %s" % setid)
            if not setid in self.active:
                # metrics might be stateful, like reltime
                return

            metrics = ' / '.join([str(x()) for x in self.__metrics])
            if len(metrics) > 0:
                metrics = "{%s}" % metrics

            if len(msg) > 0:
                level = 1
                if self.offsetbydepth:
                    level = len(traceback.extract_stack()) - 2
                SetLogger.__call__(self, setid,
                                   "DBG%s:%s%s" % (metrics, " " * level, msg),
                                   *args, **kwargs)
            else:
                Logger.__call__(self, metrics, *args, **kwargs)


        metrics = property(fget=lambda x: x.__metrics, fset=register_metric)

else:

    class BlackHoleLogger(SetLogger):
        """Logger swallowing everything, so debug() calls stay valid with
        optimizations turned on"""

        def __init__(self, metrics=None, offsetbydepth=True, *args, **kwargs):
            SetLogger.__init__(self, *args, **kwargs)

        def __call__(self, setid, msg, *args, **kwargs):
            pass

        def register_metric(self, func):
            pass
