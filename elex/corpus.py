# License: BSD3

"""
Corpus management
"""
#
# A corpus here is just a directory tree with .eaf files in it.
# Each file is identified by a FileId (its name without extension,
# and the subdirectory it sits in). Give us a mapping from FileId to
# filepaths and we do the rest.

from collections import OrderedDict
from glob import glob
import os
import sys

import pandas as pd

from elex.eaf import (extract_annotations, read_eaf_file,
                      records_to_dataframe)

EAF_GLOB = '*.eaf'


class FileId(object):
    """
    Information needed to uniquely identify an annotation file.

    :param doc: document name (the file name without its extension)
    :type doc:  string

    :param subdir: directory of the file relative to the corpus root
        (None for files sitting at the root)
    :type subdir: string
    """
    def __init__(self, doc, subdir=None):
        self.doc = doc
        self.subdir = subdir

    def __str__(self):
        return self.mk_global_id()

    def __repr__(self):
        return 'FileId(%r, %r)' % (self.doc, self.subdir)

    def _tuple(self):
        """
        For internal use by __hash__, __eq__, etc
        """
        return (self.subdir or '', self.doc)

    def __hash__(self):
        return hash(self._tuple())

    def __eq__(self, other):
        return self._tuple() == other._tuple()

    def __lt__(self, other):
        return self._tuple() < other._tuple()

    def mk_global_id(self):
        """
        String representation of the id, unique within the corpus:
        the path of the file relative to the corpus root, without
        extension
        """
        parts = [self.subdir, self.doc]
        return "/".join(p for p in parts if p)


class Reader(object):
    """
    `Reader` provides little more than dictionaries from `FileId`
    to data.

    :param rootdir: the top directory of the corpus
    :type rootdir: str

    As with any dictionary, you can take a slice of these before
    reading the files in ::

        reader = Reader(corpus_dir)
        files = reader.files()
        subfiles = reader.filter(files, lambda k: k.subdir == 'pilot')
        corpus = reader.slurp(subfiles)
    """
    def __init__(self, rootdir):
        self.rootdir = rootdir

    def files(self):
        """
        Return an (ordered) dictionary from FileId to the path of each
        .eaf file under the root directory, searched recursively
        """
        corpus = OrderedDict()
        full_glob = os.path.join(self.rootdir, '**', EAF_GLOB)
        for path in sorted(glob(full_glob, recursive=True)):
            relpath = os.path.relpath(path, self.rootdir)
            subdir, filename = os.path.split(relpath)
            doc = os.path.splitext(filename)[0]
            subdir = subdir.replace(os.sep, '/') or None
            corpus[FileId(doc, subdir)] = path
        return corpus

    def slurp(self, cfiles=None, verbose=False):
        """
        Read the entire corpus if `cfiles` is `None` or else the
        subset specified by `cfiles`.

        Return a dictionary from FileId to parsed EAF document
        (`xml.etree.ElementTree.ElementTree`)

        Parameters
        ----------
        cfiles : dict, optional
            Dict of files like what `Reader.files()` would return.

        verbose : boolean, defaults to False
            If True, print what we're reading to stderr.
        """
        if cfiles is None:
            cfiles = self.files()
        corpus = OrderedDict()
        counter = 0
        for k, path in cfiles.items():
            if verbose:
                sys.stderr.write("\rSlurping corpus dir [%d/%d]" %
                                 (counter, len(cfiles)))
            corpus[k] = read_eaf_file(path)
            counter = counter + 1
        if verbose:
            sys.stderr.write("\rSlurping corpus dir [%d/%d done]\n" %
                             (counter, len(cfiles)))
        return corpus

    def filter(self, d, pred):
        """
        Convenience function equivalent to ::

            { k:v for k,v in d.items() if pred(k) }
        """
        return OrderedDict((k, v) for k, v in d.items() if pred(k))


def extract_corpus_annotations(corpus,
                               distribute_duration_among_children=False):
    """
    Annotation table for a whole corpus.

    Parameters
    ----------
    corpus : dict(FileId, ElementTree)
        Parsed documents, eg. from `Reader.slurp`

    distribute_duration_among_children : boolean, defaults to False
        See `elex.eaf.extract_annotations`

    Returns
    -------
    df : pandas.DataFrame
        The per-document tables one after the other, with an extra
        first column `doc` holding the global id of the document
    """
    dfs = []
    for k, doc in corpus.items():
        df = extract_annotations(
            doc,
            distribute_duration_among_children=distribute_duration_among_children)
        df.insert(0, 'doc', k.mk_global_id())
        dfs.append(df)
    if not dfs:
        return _empty_corpus_table()
    return pd.concat(dfs, ignore_index=True)


def _empty_corpus_table():
    "An annotation table (with `doc` column) that has no rows"
    df = records_to_dataframe([])
    df.insert(0, 'doc', pd.Series([], dtype=object))
    return df
