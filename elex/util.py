# License: BSD3

"""
Miscellaneous utility functions
"""

import re


FILEID_FIELDS = ['doc', 'subdir']
"""
String representation of fields recognised in an elex.corpus.FileId
"""


def add_corpus_filters(parser, fields=None):
    """
    For help with script-building:

    Augment an argparser with options to filter a corpus on
    the various attributes in a 'elex.corpus.FileId'
    (eg, document, subdirectory).

    :param fields: which flag names to include (defaults to `FILEID_FIELDS`)
    :type fields: [String]

    Meant to be used in conjunction with `mk_is_interesting`
    """
    fields = FILEID_FIELDS if fields is None else fields
    for field in fields:
        parser.add_argument("--{}".format(field),
                            metavar="PY_REGEX",
                            help="Limit to a particular {}(s)".format(field))


def mk_is_interesting(args):
    """
    Return a function that when given a FileId returns 'True'
    if the FileId would be considered interesting according to
    the arguments passed in.

    Meant to be used in conjunction with `add_corpus_filters`
    """
    def mk_checker(attr):
        """
        Given an attr name, return a function that checks a FileId
        to see if its attribution value matches the requested pattern.
        If the attribute was not requested, we skip the check.
        """
        argval = args.__dict__.get(attr)
        if argval is None:
            return lambda _: True
        regex = re.compile(argval)

        def check(fileid):
            "matching on k value"
            val = fileid.__dict__[attr]
            return False if val is None else bool(regex.match(val))
        return check

    doc_checkers = [mk_checker(attr) for attr in FILEID_FIELDS]
    return lambda k: all(check(k) for check in doc_checkers)


def add_subcommand(subparsers, module):
    '''
    Add a subcommand to an argparser following some conventions:

        - the module can have an optional NAME constant
          (giving the name of the command); otherwise we
          assume it's the unqualified module name
        - the first line of its docstring is its help text
        - subsequent lines (if any) form its epilog

    Returns the resulting subparser for the module
    '''

    if 'NAME' in module.__dict__:
        module_name = module.NAME
    else:
        module_name = module.__name__.split('.')[-1]

    module_help_parts = [x for x in module.__doc__.strip().split('\n', 1)
                         if x]
    if len(module_help_parts) > 1:
        module_help = module_help_parts[0]
        module_epilog = '\n'.join(module_help_parts[1:]).strip()
    else:
        module_help = module.__doc__
        module_epilog = None
    return subparsers.add_parser(module_name,
                                 help=module_help,
                                 epilog=module_epilog)
