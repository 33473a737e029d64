# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Entry point of the ``mllib`` command line tool

The tool is a collection of commands, each implemented in a
``mllib.cmdline.cmd_<name>`` module::

  mllib [--verbose LEVEL] [--dbg] <command> [command options]
"""

__docformat__ = 'restructuredtext'

import argparse
import sys
import textwrap

import mllib
from mllib.base import verbose
from mllib.cmdline import helpers

if __debug__:
    from mllib.base import debug

# order of the commands in the help output
_COMMANDS = ('run', 'list', 'info')


def _get_cmd_module(name):
    return __import__('mllib.cmdline.cmd_%s' % name,
                      fromlist=['setup_parser', 'run'])


def _cmd_summary(mod):
    """First line of the module docstring"""
    doc = mod.__doc__ or ''
    return doc.strip().split('\n')[0]


def setup_parser(commands=_COMMANDS):
    """Construct the argument parser with one sub-parser per command"""
    parser = argparse.ArgumentParser(
        prog='mllib',
        description="""Machine learning objects driven by messages, as sent
        by a patch of a real-time multimedia environment.""",
        epilog="""'mllib <command> --help' gives help on a particular
        command.""",
        add_help=False)
    helpers.parser_add_common_opt(parser, 'help')
    helpers.parser_add_common_opt(
        parser, 'version',
        version='mllib %s\n\n%s'
                % (mllib.__version__,
                   textwrap.fill("mllib is distributed under the terms of "
                                 "the MIT license.")))
    parser.add_argument('--verbose', '-v', type=int, metavar='LEVEL',
                        help="""verbosity level of the output (0 for
                        errors only)""")
    if __debug__:
        parser.add_argument('--debug', metavar='IDS', dest='debug_targets',
                            help="""comma separated list of debug
                            targets to enable, 'list' lists them""")
    parser.add_argument('--dbg', action='store_true',
                        help="""do not catch exceptions and show their
                        traceback, for debugging""")

    subparsers = parser.add_subparsers(title='commands', dest='command',
                                       metavar='COMMAND')
    for name in commands:
        mod = _get_cmd_module(name)
        parser_args = dict(getattr(mod, 'parser_args', {}))
        parser_args.setdefault('description', mod.__doc__)
        parser_args.setdefault('formatter_class',
                               argparse.RawDescriptionHelpFormatter)
        subparser = subparsers.add_parser(name, add_help=False,
                                          help=_cmd_summary(mod),
                                          **parser_args)
        helpers.parser_add_common_opt(subparser, 'help')
        mod.setup_parser(subparser)
        subparser.set_defaults(func=mod.run)
    return parser


def main(args=None):
    """Parse `args` (``sys.argv[1:]`` by default) and run the command

    Returns
    -------
    int
      Exit status.
    """
    parser = setup_parser()
    args = parser.parse_args(args)

    if args.verbose is not None:
        verbose.level = args.verbose
    if __debug__ and getattr(args, 'debug_targets', None):
        debug.set_active_from_string(args.debug_targets)
        debug('CMDLINE', "Parsed arguments %s", (args,))

    if getattr(args, 'func', None) is None:
        parser.print_usage(sys.stderr)
        sys.stderr.write("mllib: error: a command is required\n")
        return 2

    if args.dbg:
        args.func(args)
        return 0

    try:
        args.func(args)
    except Exception as e:
        verbose(0, "ERROR: %s" % e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
