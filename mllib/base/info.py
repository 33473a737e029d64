# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Summary of the mllib installation and the system, e.g. for bug reports
"""

__docformat__ = 'restructuredtext'

import time, sys, os
import platform as pl
from io import StringIO

import mllib
from mllib.base import externals, cfg

__all__ = ['wtf']


class WTF(object):
    """Report about mllib, the system and the externals

    The report consists of sections, each one produced by the method
    ``_acquire_<section>``.
    """

    __knownitems__ = ('sources', 'system', 'externals', 'runtime')

    def __init__(self, include=None, exclude=None):
        """
        Parameters
        ----------
        include : list of str
          Sections to report, all known ones by default.
        exclude : list of str
          Sections not to report.
        """
        for arg in (include, exclude):
            unknown = set(arg or []).difference(self.__knownitems__)
            if len(unknown):
                raise ValueError(
                      "Items %s are not known to WTF. Known are %s"
                      % (sorted(unknown), list(self.__knownitems__)))
        self._report_items = [i for i in self.__knownitems__
                              if (include is None or i in include)
                              and not i in (exclude or [])]
        self._info = self._acquire()


    def _acquire_sources(self, out):
        out.write("mllib:\n")
        out.write(" Version:       %s\n" % mllib.__version__)
        out.write(" Path:          %s\n" % mllib.__file__)


    def _acquire_system(self, out):
        out.write('SYSTEM:\n')
        out.write(' OS:            %s\n'
                  % ' '.join([os.name, pl.system(), pl.release()]).rstrip())
        out.write(' Python:        %s\n' % sys.version.split('\n')[0])


    def _acquire_externals(self, out):
        present, absent = [], []
        for dep in sorted(externals._KNOWN):
            (externals.exists(dep) and present or absent).append(dep)
        out.write('EXTERNALS:\n')
        out.write(' Present:       %s\n' % ', '.join(present))
        out.write(' Absent:        %s\n' % ', '.join(absent))
        out.write(' Versions of critical externals:\n')
        for k, v in sorted(externals.versions.items()):
            out.write('  %-12s: %s\n' % (k, v))


    def _acquire_runtime(self, out):
        out.write("RUNTIME:\n")
        out.write(" mllib Environment Variables:\n")
        for k, v in sorted(os.environ.items()):
            if k.startswith('MLLIB'):
                out.write('  %-20s: "%s"\n' % (k, v))
        out.write(" mllib Runtime Configuration:\n")
        out.write('  ' + str(cfg).replace('\n', '\n  ').rstrip() + '\n')


    def _acquire(self):
        out = StringIO()
        out.write("Current date:   %s\n" % time.strftime("%Y-%m-%d %H:%M"))
        for item in self._report_items:
            getattr(self, '_acquire_' + item)(out)
        return out.getvalue()


    def __str__(self):
        return self._info

    __repr__ = __str__


def wtf(filename=None, **kwargs):
    """Report summary about mllib and the system

    Parameters
    ----------
    filename : None or str
      If provided, the report is written into the file instead of being
      returned.
    **kwargs
      Passed to `WTF`
    """
    info = WTF(**kwargs)
    if filename is None:
        return info
    with open(filename, 'w') as f:
        f.write(str(info))
