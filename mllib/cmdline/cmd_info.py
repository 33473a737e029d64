# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Query various information about a mllib installation.

If no option is given, a  useful subset of the available information is printed.
"""

# magic line for manpage summary
# man: -*- % query various information about a mllib installation

import mllib

__docformat__ = 'restructuredtext'

def setup_parser(parser):
    excl = parser.add_mutually_exclusive_group()
    excl.add_argument('--externals', action='store_true',
                        help='list status of external dependencies')
    if __debug__:
        excl.add_argument('--debug', action='store_true',
                          help='list available debug channels')
    excl.add_argument(
            '--objects', nargs='*', default=False, metavar='TAG',
            help="""list available objects in the object warehouse.
            Optionally, an arbitrary number of tags can be specified to
            constrain the listing to objects with matching tags.""")
    return parser

def run(args):
    if args.externals:
        print(mllib.wtf(include=['externals']))
    elif getattr(args, 'debug', False):
        from mllib.base import debug
        debug.print_registered()
    elif not args.objects is False:
        from mllib.objects.warehouse import objwh
        objwh.print_registered(*args.objects)
    else:
        print(mllib.wtf())
