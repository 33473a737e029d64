# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""List the objects available for the 'run' command

Objects are listed by name along with their tags.  Tags given as arguments
constrain the listing, e.g. 'mllib list classification !skl'.
"""

# magic line for manpage summary
# man: -*- % list available objects

__docformat__ = 'restructuredtext'

from mllib.cmdline.helpers import parser_add_common_opt, arg2tags


def setup_parser(parser):
    parser_add_common_opt(parser, 'tags')
    return parser


def run(args):
    from mllib.objects.warehouse import objwh
    objwh.print_registered(*arg2tags(args.tags))
