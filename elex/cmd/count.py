"""Show number of annotations and durations per tier

With --tier, show how often each annotation value occurs on that
tier instead.
"""

# License: BSD3

from tabulate import tabulate

from ..args import add_usual_input_args, read_corpus
from ..corpus import extract_corpus_annotations
from ..stats import tier_summary, value_counts


def big_banner(string, width=60):
    """
    Convert a string into a large banner ::

       foo
       ========================================

    """
    return "\n".join([string, "=" * width, ""])


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    add_usual_input_args(parser)
    parser.add_argument('--tier', metavar='TIER_ID',
                        help='count annotation values on this tier')
    parser.set_defaults(func=main)


def report(df, tier=None):
    """
    Text report for an annotation table: the tier summary, or the
    value counts for one tier
    """
    if tier is None:
        title = "Tiers"
        table = tier_summary(df)
    else:
        title = "Values on tier {}".format(tier)
        table = value_counts(df, tier)
    return big_banner(title) + tabulate(table, headers='keys',
                                        showindex=False)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    corpus = read_corpus(args, verbose=False)
    df = extract_corpus_annotations(
        corpus, distribute_duration_among_children=args.distribute)
    print(report(df, tier=args.tier))
