# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Send messages to an object, as a patch would do

A new instance of the selected object is created and every line of the
input is sent to it as a message (selector followed by atoms, optionally
terminated by ';'). Empty lines and lines starting with '#' are skipped.
Every message leaving an outlet of the object is printed to STDOUT as::

  <outlet>: <selector> <atoms...>

Messages for the console of the object (informative posts and errors)
are written as configured for the console (STDOUT by default).

Example:

  $ printf 'add 1 0 0\\nadd 2 1 1\\ntrain\\nmap 0.9 0.9\\n' | mllib run ml.svm
"""

# magic line for manpage summary
# man: -*- % send messages to an object

__docformat__ = 'restructuredtext'

import argparse
import sys

from mllib.base import verbose
from mllib.objects.messages import parse_message, format_message
from mllib.cmdline.helpers import parser_add_common_opt, arg2object

if __debug__:
    from mllib.base import debug

parser_args = {
    'formatter_class': argparse.RawDescriptionHelpFormatter,
}


def setup_parser(parser):
    parser.add_argument('object', type=arg2object, metavar='OBJECT',
                        help="""name of the object to create (e.g. ml.svm),
                        see the 'list' command for the available ones""")
    parser_add_common_opt(parser, 'input_file')
    parser_add_common_opt(parser, 'strict')
    parser.add_argument('--name', help="""name of the object to report on
                        the console""")
    return parser


def run_messages(obj, lines, out=None):
    """Send every message found in `lines` to `obj`

    Returns
    -------
    int
      Number of messages sent.
    """
    if out is None:
        out = sys.stdout

    def _print(outlet, selector, atoms):
        out.write('%d: %s\n' % (outlet.index, format_message(selector, atoms)))

    obj.connect(_print)
    nmessages = 0
    for line in lines:
        message = parse_message(line)
        if message is None:
            continue
        selector, atoms = message
        if __debug__:
            debug('CMDLINE', "Sending '%s' to %s",
                  (format_message(selector, atoms), obj))
        obj.send(selector, *atoms)
        nmessages += 1
    return nmessages


def run(args):
    kwargs = {}
    if args.strict:
        kwargs['strict'] = True
    obj = args.object(name=args.name, **kwargs)
    verbose(2, "Created %s" % obj)
    if args.input is None or args.input == '-':
        nmessages = run_messages(obj, sys.stdin)
    else:
        with open(args.input) as input_:
            nmessages = run_messages(obj, input_)
    verbose(1, "Sent %d messages to %s" % (nmessages, obj))
