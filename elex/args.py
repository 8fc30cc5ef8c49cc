# License: BSD3

"""
Command line options
"""

import os
import sys
import tempfile
import warnings

from elex.corpus import Reader
import elex.util


def add_usual_input_args(parser):
    """Augment a subcommand argparser with typical input arguments:
    the corpus dir, filters on the files to read, and whether to
    distribute parent durations among children.
    Sometimes your subcommand may require slightly different input
    arguments, in which case, just don't call this function.

    Parameters
    ----------
    parser : ArgumentParser
        Argument parser.
    """
    parser.add_argument('corpus', metavar='DIR',
                        help='corpus dir (searched recursively for .eaf)')
    elex.util.add_corpus_filters(parser)
    parser.add_argument('--distribute',
                        action='store_true',
                        help='Share the duration of parent annotations '
                        'evenly among their children on each tier')


def add_usual_output_args(parser):
    """
    Augment a subcommand argparser with typical output arguments,
    Sometimes your subcommand may require slightly different output
    arguments, in which case, just don't call this function.
    """
    parser.add_argument('--output', '-o', metavar='DIR',
                        help='output directory (default mktemp)')


def read_corpus(args, verbose=True):
    """
    Read the section of the corpus specified in the command line arguments.
    """
    if not os.path.isdir(args.corpus):
        sys.exit("No corpus directory {corpus}".format(corpus=args.corpus))
    is_interesting = elex.util.mk_is_interesting(args)
    reader = Reader(args.corpus)
    anno_files = reader.filter(reader.files(), is_interesting)
    if not anno_files:
        warnings.warn("No .eaf files selected in {}".format(args.corpus))
    return reader.slurp(anno_files, verbose=verbose)


def get_output_dir(args):
    """Return the output dir specified or inferred from command
    line args.

    1. If `--output` is given explicitly, we'll just use/create that
    2. OK just make a temporary directory. Later on, you'll probably want
       to call `announce_output_dir`.
    """
    if args.output:
        if os.path.isfile(args.output):
            oops = "Sorry, %s already exists and is not a directory" %\
                args.output
            sys.exit(oops)
        elif not os.path.isdir(args.output):
            os.makedirs(args.output)
        return args.output
    else:
        return tempfile.mkdtemp()


def announce_output_dir(output_dir):
    """
    Tell the user where we saved the output
    """
    print("Output files written to", output_dir, file=sys.stderr)
