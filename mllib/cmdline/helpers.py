# emacs: -*- mode: python; py-indent-offset: 4; indent-tabs-mode: nil -*-
# vi: set ft=python sts=4 ts=4 sw=4 et:
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
#
#   See COPYING file distributed along with the mllib package for the
#   copyright and license terms.
#
### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ### ##
"""Helpers shared by the commands of the ``mllib`` command line tool"""

__docformat__ = 'restructuredtext'

import argparse
import re
import sys


class HelpAction(argparse.Action):
    """'-h' prints the usage only, '--help' the complete help"""

    _heading = re.compile(r'^([a-z])(.*):$', re.MULTILINE)

    def __call__(self, parser, namespace, values, option_string=None):
        if option_string == '-h':
            helpstr = "%s\nUse '--help' to get more comprehensive " \
                      "information." % parser.format_usage()
        else:
            helpstr = parser.format_help()
        # Capitalized headings
        helpstr = self._heading.sub(
            lambda m: '%s%s:' % (m.group(1).upper(), m.group(2)), helpstr)
        print(re.sub(r'^usage:', 'Usage:', helpstr))
        sys.exit(0)


# options shared among the commands: names, add_argument() kwargs
_common_opts = {
    'help': (('-h', '--help'),
             dict(nargs=0, action=HelpAction,
                  help="show this help message and exit")),
    'version': (('--version',),
                dict(action='version',
                     help="show program's version and license information "
                          "and exit")),
    'input_file': (('-i', '--input'),
                   dict(metavar='FILE',
                        help="""file with one message per line to send to
                        the object. Reads from STDIN if not given or
                        '-'.""")),
    'strict': (('--strict',),
               dict(action='store_true',
                    help="""stop at the first message the object fails to
                    handle, instead of reporting the failure on the
                    console""")),
    'tags': (('tags',),
             dict(nargs='*', metavar='TAG',
                  help="""warehouse tags to constrain the listing to
                  objects with matching tags. Prefix a tag with '!' to
                  exclude objects""")),
    }


def parser_add_common_opt(parser, opt, names=None, **kwargs):
    """Add one of the shared options to `parser`

    Parameters
    ----------
    opt : str
      Key of the option in `_common_opts`.
    names : tuple or None
      Names of the option, if different from the usual ones.
    **kwargs
      Override the usual arguments of ``add_argument()``.
    """
    default_names, opt_kwargs = _common_opts[opt]
    opt_kwargs = dict(opt_kwargs, **kwargs)
    parser.add_argument(*(names or default_names), **opt_kwargs)


def arg2bool(arg):
    arg = arg.lower()
    if arg in ('0', 'no', 'off', 'disable', 'false'):
        return False
    if arg in ('1', 'yes', 'on', 'enable', 'true'):
        return True
    raise argparse.ArgumentTypeError(
            "'%s' cannot be converted into a boolean" % (arg,))


def arg2object(arg):
    """Resolve an object class by its host name (e.g. ``ml.svm``)"""
    from mllib.objects.warehouse import objwh
    obj = objwh.get(arg)
    if obj is None and not arg.startswith('ml.'):
        # the common prefix may be left out
        obj = objwh.get('ml.' + arg)
    if obj is None:
        raise argparse.ArgumentTypeError(
            "'%s' is not a known object, known are: %s"
            % (arg, ', '.join(sorted(objwh.names))))
    return obj


def arg2tags(tags):
    """Validate warehouse tags"""
    from mllib.objects.warehouse import objwh
    unknown = [t for t in tags if not t.lstrip('!') in objwh.known_tags]
    if len(unknown):
        raise argparse.ArgumentTypeError(
            "unknown tag(s) %s, known are: %s"
            % (', '.join(unknown), ', '.join(sorted(objwh.known_tags))))
    return tags
