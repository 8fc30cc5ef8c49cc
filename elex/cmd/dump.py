"""Dump the annotation table of a corpus to disk

Writes a single file, annotations.csv (or annotations.pkl), with one
row per annotation and a 'doc' column naming its file.
"""

# License: BSD3

import os

from ..args import (add_usual_input_args, add_usual_output_args,
                    announce_output_dir, get_output_dir, read_corpus)
from ..corpus import extract_corpus_annotations

NAME = 'dump'

OUT_BASENAME = 'annotations'


def dump_annotations(df, out_dir, out_fmt='csv'):
    """Write an annotation table into a folder.

    Parameters
    ----------
    df : pandas.DataFrame
        Annotation table

    out_dir : str
        Output folder.

    out_fmt : str, one of {'csv', 'pickle'}
        Output format.

    Returns
    -------
    out_file : str
        Path to the file written
    """
    if out_fmt == 'csv':
        out_file = os.path.join(out_dir, OUT_BASENAME + '.csv')
        df.to_csv(out_file, index=False, encoding='utf-8')
    elif out_fmt == 'pickle':
        out_file = os.path.join(out_dir, OUT_BASENAME + '.pkl')
        df.to_pickle(out_file)
    else:
        raise ValueError('Unknown format: {}'.format(out_fmt))
    return out_file


def config_argparser(parser):
    """
    Subcommand flags.

    You should create and pass in the subparser to which the flags
    are to be added.
    """
    add_usual_input_args(parser)
    add_usual_output_args(parser)
    parser.add_argument('--out_fmt',
                        choices=['csv', 'pickle'],
                        default='csv',
                        help='Output format for the dump')
    parser.set_defaults(func=main)


def main(args):
    """
    Subcommand main.

    You shouldn't need to call this yourself if you're using
    `config_argparser`
    """
    corpus = read_corpus(args, verbose=True)
    df = extract_corpus_annotations(
        corpus, distribute_duration_among_children=args.distribute)
    output_dir = get_output_dir(args)
    dump_annotations(df, output_dir, out_fmt=args.out_fmt)
    announce_output_dir(output_dir)
