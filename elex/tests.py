# -*- coding: utf-8 -*-
#
# License: BSD3
# pylint: disable=too-many-public-methods, invalid-name

"""
Tests for elex
"""

import argparse
import os
import shutil
import tempfile
import unittest
import xml.etree.ElementTree as ET

import pandas as pd

from elex.annotation import ANNOTATION_COLS, AnnotationRecord, Tier
from elex.corpus import FileId, Reader, extract_corpus_annotations
from elex.eaf import (UNKNOWN_SLOTS, ReferenceCycleError, EafException,
                      build_mappings, calculate_duration, distribute_duration,
                      extract_annotations, find_time_slots,
                      iter_annotation_records, numeric_id, read_eaf_file)
from elex.internalutil import parse_number
from elex.stats import tier_summary, value_counts
from elex.util import mk_is_interesting
from elex.cmd import count as count_cmd
from elex.cmd import dump as dump_cmd


def parse_eaf(string):
    "parse an EAF document from a string"
    return ET.ElementTree(ET.fromstring(string))


# one utterance, translated on a dependent tier
SIMPLE_EAF = """<?xml version="1.0" encoding="UTF-8"?>
<ANNOTATION_DOCUMENT AUTHOR="" FORMAT="3.0" VERSION="3.0">
  <HEADER MEDIA_FILE="" TIME_UNITS="milliseconds"/>
  <TIME_ORDER>
    <TIME_SLOT TIME_SLOT_ID="ts1" TIME_VALUE="1000"/>
    <TIME_SLOT TIME_SLOT_ID="ts2" TIME_VALUE="1500"/>
  </TIME_ORDER>
  <TIER LINGUISTIC_TYPE_REF="utterance" TIER_ID="tx@A" DEFAULT_LOCALE="qu">
    <ANNOTATION>
      <ALIGNABLE_ANNOTATION ANNOTATION_ID="ann1"
                            TIME_SLOT_REF1="ts1" TIME_SLOT_REF2="ts2">
        <ANNOTATION_VALUE>allillanchu</ANNOTATION_VALUE>
      </ALIGNABLE_ANNOTATION>
    </ANNOTATION>
  </TIER>
  <TIER LINGUISTIC_TYPE_REF="translation" PARENT_REF="tx@A" TIER_ID="ft@A">
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann2" ANNOTATION_REF="ann1">
        <ANNOTATION_VALUE>hello</ANNOTATION_VALUE>
      </REF_ANNOTATION>
    </ANNOTATION>
  </TIER>
</ANNOTATION_DOCUMENT>
"""

# an utterance split into three words, each with a gloss; one more
# translation on a separate tier pointing at the utterance
WORDS_EAF = """<?xml version="1.0" encoding="UTF-8"?>
<ANNOTATION_DOCUMENT>
  <TIME_ORDER>
    <TIME_SLOT TIME_SLOT_ID="ts1" TIME_VALUE="0"/>
    <TIME_SLOT TIME_SLOT_ID="ts2" TIME_VALUE="9"/>
    <TIME_SLOT TIME_SLOT_ID="ts3" TIME_VALUE="20"/>
    <TIME_SLOT TIME_SLOT_ID="ts4" TIME_VALUE="26"/>
  </TIME_ORDER>
  <TIER LINGUISTIC_TYPE_REF="utterance" TIER_ID="tx">
    <ANNOTATION>
      <ALIGNABLE_ANNOTATION ANNOTATION_ID="ann1"
                            TIME_SLOT_REF1="ts1" TIME_SLOT_REF2="ts2">
        <ANNOTATION_VALUE>a b c</ANNOTATION_VALUE>
      </ALIGNABLE_ANNOTATION>
    </ANNOTATION>
    <ANNOTATION>
      <ALIGNABLE_ANNOTATION ANNOTATION_ID="ann10"
                            TIME_SLOT_REF1="ts3" TIME_SLOT_REF2="ts4">
        <ANNOTATION_VALUE>d</ANNOTATION_VALUE>
      </ALIGNABLE_ANNOTATION>
    </ANNOTATION>
  </TIER>
  <TIER LINGUISTIC_TYPE_REF="words" PARENT_REF="tx" TIER_ID="wd">
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann2" ANNOTATION_REF="ann1">
        <ANNOTATION_VALUE>a</ANNOTATION_VALUE>
      </REF_ANNOTATION>
    </ANNOTATION>
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann3" ANNOTATION_REF="ann1"
                      PREVIOUS_ANNOTATION="ann2">
        <ANNOTATION_VALUE>b</ANNOTATION_VALUE>
      </REF_ANNOTATION>
    </ANNOTATION>
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann4" ANNOTATION_REF="ann1"
                      PREVIOUS_ANNOTATION="ann3">
        <ANNOTATION_VALUE>c</ANNOTATION_VALUE>
      </REF_ANNOTATION>
    </ANNOTATION>
  </TIER>
  <TIER LINGUISTIC_TYPE_REF="gloss" PARENT_REF="wd" TIER_ID="gl">
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann5" ANNOTATION_REF="ann2">
        <ANNOTATION_VALUE>A</ANNOTATION_VALUE>
      </REF_ANNOTATION>
    </ANNOTATION>
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann6" ANNOTATION_REF="ann3">
        <ANNOTATION_VALUE>B</ANNOTATION_VALUE>
      </REF_ANNOTATION>
    </ANNOTATION>
  </TIER>
  <TIER LINGUISTIC_TYPE_REF="translation" PARENT_REF="tx" TIER_ID="ft">
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann7" ANNOTATION_REF="ann1">
        <ANNOTATION_VALUE>abc</ANNOTATION_VALUE>
      </REF_ANNOTATION>
    </ANNOTATION>
  </TIER>
</ANNOTATION_DOCUMENT>
"""

# all the ways information can go missing
BROKEN_EAF = """<?xml version="1.0" encoding="UTF-8"?>
<ANNOTATION_DOCUMENT>
  <TIME_ORDER>
    <TIME_SLOT TIME_SLOT_ID="ts1" TIME_VALUE="100"/>
    <TIME_SLOT TIME_SLOT_ID="ts2"/>
    <TIME_SLOT TIME_SLOT_ID="ts3" TIME_VALUE="soon"/>
    <TIME_SLOT TIME_SLOT_ID="ts4" TIME_VALUE="400"/>
    <TIME_SLOT TIME_SLOT_ID="ts4" TIME_VALUE="450"/>
  </TIME_ORDER>
  <TIER TIER_ID="main">
    <ANNOTATION>
      <ALIGNABLE_ANNOTATION ANNOTATION_ID="ann1"
                            TIME_SLOT_REF1="ts1" TIME_SLOT_REF2="ts2">
        <ANNOTATION_VALUE>untimed end</ANNOTATION_VALUE>
      </ALIGNABLE_ANNOTATION>
    </ANNOTATION>
    <ANNOTATION>
      <ALIGNABLE_ANNOTATION ANNOTATION_ID="ann2"
                            TIME_SLOT_REF1="ts3" TIME_SLOT_REF2="ts1">
        <ANNOTATION_VALUE>garbled start</ANNOTATION_VALUE>
      </ALIGNABLE_ANNOTATION>
    </ANNOTATION>
    <ANNOTATION>
      <ALIGNABLE_ANNOTATION ANNOTATION_ID="a3"
                            TIME_SLOT_REF1="ts4" TIME_SLOT_REF2="ts1"/>
    </ANNOTATION>
    <ANNOTATION>
      <ALIGNABLE_ANNOTATION ANNOTATION_ID="ann4" TIME_SLOT_REF1="ts1">
        <ANNOTATION_VALUE/>
      </ALIGNABLE_ANNOTATION>
    </ANNOTATION>
  </TIER>
  <TIER TIER_ID="dependent" PARENT_REF="main">
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann5" ANNOTATION_REF="ann99">
        <ANNOTATION_VALUE>dangling</ANNOTATION_VALUE>
      </REF_ANNOTATION>
    </ANNOTATION>
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann6">
        <ANNOTATION_VALUE>no ref</ANNOTATION_VALUE>
      </REF_ANNOTATION>
    </ANNOTATION>
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann7" ANNOTATION_REF="ann6">
        <ANNOTATION_VALUE>points at no ref</ANNOTATION_VALUE>
      </REF_ANNOTATION>
    </ANNOTATION>
  </TIER>
</ANNOTATION_DOCUMENT>
"""

CYCLIC_EAF = """<?xml version="1.0" encoding="UTF-8"?>
<ANNOTATION_DOCUMENT>
  <TIME_ORDER/>
  <TIER TIER_ID="loop">
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann1" ANNOTATION_REF="ann2"/>
    </ANNOTATION>
    <ANNOTATION>
      <REF_ANNOTATION ANNOTATION_ID="ann2" ANNOTATION_REF="ann1"/>
    </ANNOTATION>
  </TIER>
</ANNOTATION_DOCUMENT>
"""

EMPTY_EAF = """<?xml version="1.0" encoding="UTF-8"?>
<ANNOTATION_DOCUMENT>
  <TIME_ORDER/>
  <TIER TIER_ID="empty" LINGUISTIC_TYPE_REF="default-lt"/>
</ANNOTATION_DOCUMENT>
"""


def row(df, anno_id):
    "the (only) row of the table for the given annotation id"
    rows = df[df['ANNOTATION_ID'] == anno_id]
    assert len(rows) == 1, anno_id
    return rows.iloc[0]


# ---------------------------------------------------------------------
# mappings
# ---------------------------------------------------------------------


class MappingTest(unittest.TestCase):
    "tests for elex.eaf.build_mappings"

    def test_simple(self):
        "all three tables on a well-formed document"
        mappings = build_mappings(parse_eaf(SIMPLE_EAF))
        self.assertEqual({'ts1': 1000, 'ts2': 1500},
                         mappings.time_slot_to_value)
        self.assertEqual({'ann1': ('ts1', 'ts2')},
                         mappings.id_to_time_slot)
        self.assertEqual({'ann2': 'ann1'},
                         mappings.id_to_annotation_ref)

    def test_missing_values(self):
        "missing or non-numeric time values are None"
        mappings = build_mappings(parse_eaf(BROKEN_EAF))
        self.assertIsNone(mappings.time_slot_to_value['ts2'])
        self.assertIsNone(mappings.time_slot_to_value['ts3'])
        self.assertEqual(('ts1', None), mappings.id_to_time_slot['ann4'])
        self.assertIsNone(mappings.id_to_annotation_ref['ann6'])

    def test_last_wins(self):
        "duplicate ids: the last one in the document wins"
        mappings = build_mappings(parse_eaf(BROKEN_EAF))
        self.assertEqual(450, mappings.time_slot_to_value['ts4'])

    def test_accepts_element(self):
        "the root element will do as well as the tree"
        mappings = build_mappings(ET.fromstring(SIMPLE_EAF))
        self.assertEqual(['ann1'], list(mappings.id_to_time_slot))

    def test_parse_number(self):
        "time values"
        self.assertEqual(1500, parse_number('1500'))
        self.assertEqual(12.5, parse_number(' 12.5 '))
        self.assertIsNone(parse_number(None))
        self.assertIsNone(parse_number(''))
        self.assertIsNone(parse_number('later'))
        self.assertIsNone(parse_number('nan'))


# ---------------------------------------------------------------------
# chain resolution
# ---------------------------------------------------------------------


class ResolveTest(unittest.TestCase):
    "tests for elex.eaf.find_time_slots"

    def setUp(self):
        self.id_to_time_slot = {'a0': ('ts1', 'ts2'),
                                'b0': ('ts3', 'ts4')}
        self.id_to_annotation_ref = {'a1': 'a0',
                                     'a2': 'a1',
                                     'a3': 'a2',
                                     'd1': 'nowhere',
                                     'n1': None,
                                     'n2': 'n1'}

    def resolve(self, anno_id):
        "time slots for anno_id in the fixture"
        return find_time_slots(anno_id, self.id_to_time_slot,
                               self.id_to_annotation_ref)

    def test_direct(self):
        "alignable annotations give their own slots"
        self.assertEqual(('ts1', 'ts2'), self.resolve('a0'))
        self.assertEqual(('ts3', 'ts4'), self.resolve('b0'))

    def test_chain(self):
        "reference chains of any length end at the alignable annotation"
        for anno_id in ['a1', 'a2', 'a3']:
            self.assertEqual(('ts1', 'ts2'), self.resolve(anno_id))

    def test_unknown(self):
        "ids we know nothing about"
        self.assertEqual(UNKNOWN_SLOTS, self.resolve('zzz'))
        self.assertEqual((None, None), self.resolve(None))

    def test_dangling(self):
        "chains that end on something which is not an annotation"
        self.assertEqual(UNKNOWN_SLOTS, self.resolve('d1'))
        self.assertEqual(UNKNOWN_SLOTS, self.resolve('n1'))
        self.assertEqual(UNKNOWN_SLOTS, self.resolve('n2'))

    def test_cycle(self):
        "loops are reported rather than followed forever"
        refs = {'x': 'y', 'y': 'z', 'z': 'x'}
        with self.assertRaises(ReferenceCycleError) as cm:
            find_time_slots('x', {}, refs)
        self.assertEqual(['x', 'y', 'z', 'x'], cm.exception.chain)
        self.assertTrue(isinstance(cm.exception, EafException))

    def test_self_reference(self):
        "an annotation referring to itself"
        with self.assertRaises(ReferenceCycleError):
            find_time_slots('x', {}, {'x': 'x'})

    def test_cycle_not_on_path(self):
        "a loop elsewhere in the graph does not matter"
        refs = dict(self.id_to_annotation_ref)
        refs.update({'x': 'y', 'y': 'x'})
        self.assertEqual(('ts1', 'ts2'),
                         find_time_slots('a3', self.id_to_time_slot, refs))


# ---------------------------------------------------------------------
# durations
# ---------------------------------------------------------------------


class DurationTest(unittest.TestCase):
    "tests for elex.eaf.calculate_duration"

    values = {'ts1': 1000, 'ts2': 1500, 'ts3': None, 'ts4': 1250.5}

    def test_forward(self):
        "the usual order"
        self.assertEqual(500, calculate_duration('ts1', 'ts2', self.values))

    def test_reversed(self):
        "slots in reverse order give the same duration"
        self.assertEqual(500, calculate_duration('ts2', 'ts1', self.values))
        self.assertEqual(249.5,
                         calculate_duration('ts4', 'ts2', self.values))

    def test_zero(self):
        "both ends on the same slot"
        self.assertEqual(0, calculate_duration('ts1', 'ts1', self.values))

    def test_unknown(self):
        "no value for either end means no duration"
        self.assertIsNone(calculate_duration('ts1', 'ts3', self.values))
        self.assertIsNone(calculate_duration('ts3', 'ts1', self.values))
        self.assertIsNone(calculate_duration('ts1', 'ts9', self.values))
        self.assertIsNone(calculate_duration(None, None, self.values))


# ---------------------------------------------------------------------
# flattening
# ---------------------------------------------------------------------


class ExtractTest(unittest.TestCase):
    "tests for elex.eaf.extract_annotations"

    def test_example(self):
        "an utterance and its translation"
        df = extract_annotations(parse_eaf(SIMPLE_EAF))
        self.assertEqual(ANNOTATION_COLS, list(df.columns))
        self.assertEqual(2, len(df))

        ann1 = row(df, 'ann1')
        self.assertEqual('ts1', ann1['TIME_SLOT_REF1'])
        self.assertEqual('ts2', ann1['TIME_SLOT_REF2'])
        self.assertEqual(1000, ann1['TIME_SLOT_REF1_TIME_VALUE'])
        self.assertEqual(1500, ann1['TIME_SLOT_REF2_TIME_VALUE'])
        self.assertEqual(500, ann1['DURATION'])
        self.assertEqual('allillanchu', ann1['ANNOTATION_VALUE'])
        self.assertEqual('qu', ann1['LANG_REF'])
        self.assertEqual('utterance', ann1['LINGUISTIC_TYPE_REF'])
        self.assertEqual('tx@A', ann1['TIER_ID'])
        self.assertTrue(pd.isna(ann1['PARENT_REF']))
        self.assertTrue(pd.isna(ann1['ANNOTATION_REF']))
        self.assertEqual(1, ann1['anno_ref_numeric'])

        ann2 = row(df, 'ann2')
        self.assertEqual('ts1', ann2['TIME_SLOT_REF1'])
        self.assertEqual('ts2', ann2['TIME_SLOT_REF2'])
        self.assertEqual(500, ann2['DURATION'])
        self.assertEqual('ann1', ann2['ANNOTATION_REF'])
        self.assertEqual('tx@A', ann2['PARENT_REF'])
        self.assertEqual('ft@A', ann2['TIER_ID'])
        self.assertEqual('hello', ann2['ANNOTATION_VALUE'])

    def test_count_and_order(self):
        "one row per annotation, tier by tier in document order"
        df = extract_annotations(parse_eaf(WORDS_EAF))
        self.assertEqual(['ann1', 'ann10',
                          'ann2', 'ann3', 'ann4',
                          'ann5', 'ann6',
                          'ann7'],
                         df['ANNOTATION_ID'].tolist())
        self.assertEqual(['tx', 'tx', 'wd', 'wd', 'wd', 'gl', 'gl', 'ft'],
                         df['TIER_ID'].tolist())

    def test_previous_annotation(self):
        "symbolic subdivisions keep their previous pointers"
        df = extract_annotations(parse_eaf(WORDS_EAF))
        self.assertTrue(pd.isna(row(df, 'ann2')['PREVIOUS_ANNOTATION']))
        self.assertEqual('ann2', row(df, 'ann3')['PREVIOUS_ANNOTATION'])
        self.assertEqual('ann3', row(df, 'ann4')['PREVIOUS_ANNOTATION'])

    def test_two_step_chain(self):
        "glosses inherit the time of the utterance through the words"
        df = extract_annotations(parse_eaf(WORDS_EAF))
        ann6 = row(df, 'ann6')
        self.assertEqual('ts1', ann6['TIME_SLOT_REF1'])
        self.assertEqual('ts2', ann6['TIME_SLOT_REF2'])
        self.assertEqual(9, ann6['DURATION'])
        self.assertEqual(6, row(df, 'ann10')['DURATION'])

    def test_numeric_id(self):
        "only ids of the form annNNN have a numeric version"
        self.assertEqual(10, numeric_id('ann10'))
        self.assertEqual(7, numeric_id('ann007'))
        self.assertIsNone(numeric_id('a3'))
        self.assertIsNone(numeric_id('ann'))
        self.assertIsNone(numeric_id('ann3b'))
        self.assertIsNone(numeric_id(None))

        df = extract_annotations(parse_eaf(BROKEN_EAF))
        self.assertTrue(pd.isna(row(df, 'a3')['anno_ref_numeric']))
        self.assertEqual(4, row(df, 'ann4')['anno_ref_numeric'])

    def test_missing_information(self):
        "gaps in the data show up as missing values, not errors"
        df = extract_annotations(parse_eaf(BROKEN_EAF))
        self.assertEqual(7, len(df))

        ann1 = row(df, 'ann1')
        self.assertEqual(100, ann1['TIME_SLOT_REF1_TIME_VALUE'])
        self.assertTrue(pd.isna(ann1['TIME_SLOT_REF2_TIME_VALUE']))
        self.assertTrue(pd.isna(ann1['DURATION']))

        self.assertTrue(pd.isna(row(df, 'ann2')['DURATION']))
        self.assertTrue(pd.isna(row(df, 'ann4')['DURATION']))
        self.assertTrue(pd.isna(row(df, 'ann4')['TIME_SLOT_REF2']))

        for anno_id in ['ann5', 'ann6', 'ann7']:
            anno = row(df, anno_id)
            self.assertTrue(pd.isna(anno['TIME_SLOT_REF1']))
            self.assertTrue(pd.isna(anno['TIME_SLOT_REF2']))
            self.assertTrue(pd.isna(anno['DURATION']))

    def test_values(self):
        "annotation values: missing, empty, and duplicated slots"
        df = extract_annotations(parse_eaf(BROKEN_EAF))
        self.assertTrue(pd.isna(row(df, 'a3')['ANNOTATION_VALUE']))
        self.assertEqual('', row(df, 'ann4')['ANNOTATION_VALUE'])
        # ts4 appears twice; 450 wins
        self.assertEqual(350, row(df, 'a3')['DURATION'])

    def test_empty(self):
        "no annotations at all"
        df = extract_annotations(parse_eaf(EMPTY_EAF))
        self.assertEqual(0, len(df))
        self.assertEqual(ANNOTATION_COLS, list(df.columns))

    def test_cycle(self):
        "cyclic documents are reported"
        with self.assertRaises(ReferenceCycleError):
            extract_annotations(parse_eaf(CYCLIC_EAF))

    def test_bad_input(self):
        "only parsed documents are accepted"
        for bad in [SIMPLE_EAF, None, 42, {'TIER': []}, ET.ElementTree()]:
            with self.assertRaises(TypeError):
                extract_annotations(bad)

    def test_records(self):
        "the record-level interface agrees with the table"
        records = list(iter_annotation_records(parse_eaf(WORDS_EAF)))
        self.assertEqual(8, len(records))
        ann3 = records[3]
        self.assertEqual('ann3', ann3.anno_id)
        self.assertEqual('wd', ann3.tier.tier_id)
        self.assertEqual('words', ann3.tier.linguistic_type)
        self.assertEqual('tx', ann3.tier.parent)
        self.assertEqual(('ts1', 'ts2'), ann3.time_slots)
        self.assertEqual((0, 9), ann3.time_values)
        self.assertEqual(9, ann3.duration)
        self.assertTrue(ann3.is_reference())
        self.assertFalse(records[0].is_reference())

    def test_to_row(self):
        "records as rows"
        record = AnnotationRecord(Tier('t1'), 'ann3', value='x')
        the_row = record.to_row()
        self.assertEqual(sorted(ANNOTATION_COLS), sorted(the_row))
        self.assertEqual('t1', the_row['TIER_ID'])
        self.assertIsNone(the_row['DURATION'])


# ---------------------------------------------------------------------
# distributing durations
# ---------------------------------------------------------------------


class DistributeTest(unittest.TestCase):
    "tests for elex.eaf.distribute_duration"

    def setUp(self):
        self.doc = parse_eaf(WORDS_EAF)

    def test_siblings(self):
        "three words share the duration of their utterance"
        df = extract_annotations(self.doc,
                                 distribute_duration_among_children=True)
        for anno_id in ['ann2', 'ann3', 'ann4']:
            self.assertEqual(3.0, row(df, anno_id)['DURATION'])

    def test_other_tier(self):
        "a child of the same parent on another tier is its own group"
        df = extract_annotations(self.doc,
                                 distribute_duration_among_children=True)
        self.assertEqual(9.0, row(df, 'ann7')['DURATION'])
        # only children, each of a different word
        self.assertEqual(9.0, row(df, 'ann5')['DURATION'])
        self.assertEqual(9.0, row(df, 'ann6')['DURATION'])

    def test_top_level(self):
        "annotations without a parent keep their duration"
        df = extract_annotations(self.doc,
                                 distribute_duration_among_children=True)
        self.assertEqual(9.0, row(df, 'ann1')['DURATION'])
        self.assertEqual(6.0, row(df, 'ann10')['DURATION'])

    def test_off_by_default(self):
        "without the flag, every word gets the full duration"
        df = extract_annotations(self.doc)
        for anno_id in ['ann2', 'ann3', 'ann4']:
            self.assertEqual(9.0, row(df, anno_id)['DURATION'])

    def test_copy(self):
        "the input table is left alone"
        df = extract_annotations(self.doc)
        distributed = distribute_duration(df)
        self.assertEqual(9.0, row(df, 'ann3')['DURATION'])
        self.assertEqual(3.0, row(distributed, 'ann3')['DURATION'])
        self.assertEqual(len(df), len(distributed))
        self.assertEqual(df['ANNOTATION_ID'].tolist(),
                         distributed['ANNOTATION_ID'].tolist())

    def test_unknown_duration(self):
        "unknown durations stay unknown"
        df = extract_annotations(parse_eaf(BROKEN_EAF),
                                 distribute_duration_among_children=True)
        self.assertTrue(pd.isna(row(df, 'ann5')['DURATION']))
        self.assertEqual(350, row(df, 'a3')['DURATION'])

    def test_no_children(self):
        "nothing to distribute"
        df = extract_annotations(parse_eaf(EMPTY_EAF),
                                 distribute_duration_among_children=True)
        self.assertEqual(0, len(df))


# ---------------------------------------------------------------------
# corpus
# ---------------------------------------------------------------------


class CorpusTest(unittest.TestCase):
    "tests for elex.corpus"

    def setUp(self):
        self.rootdir = tempfile.mkdtemp()
        self.write('simple.eaf', SIMPLE_EAF)
        self.write(os.path.join('season1', 'words.eaf'), WORDS_EAF)
        self.write('notes.txt', 'not an eaf file')

    def tearDown(self):
        shutil.rmtree(self.rootdir)

    def write(self, relpath, contents):
        "write a file into the corpus dir"
        path = os.path.join(self.rootdir, relpath)
        if not os.path.isdir(os.path.dirname(path)):
            os.makedirs(os.path.dirname(path))
        with open(path, 'w', encoding='utf-8') as fout:
            fout.write(contents)

    def test_files(self):
        "eaf files are found recursively"
        files = Reader(self.rootdir).files()
        self.assertEqual([FileId('words', 'season1'), FileId('simple')],
                         list(files))
        self.assertEqual(['season1/words', 'simple'],
                         [k.mk_global_id() for k in files])

    def test_filter(self):
        "slices of the corpus"
        reader = Reader(self.rootdir)
        files = reader.filter(reader.files(), lambda k: k.subdir is None)
        self.assertEqual([FileId('simple')], list(files))

    def test_mk_is_interesting(self):
        "command line filters"
        reader = Reader(self.rootdir)
        args = argparse.Namespace(doc='wor', subdir=None)
        files = reader.filter(reader.files(), mk_is_interesting(args))
        self.assertEqual([FileId('words', 'season1')], list(files))
        args = argparse.Namespace(doc=None, subdir='season')
        files = reader.filter(reader.files(), mk_is_interesting(args))
        self.assertEqual([FileId('words', 'season1')], list(files))

    def test_extract(self):
        "one table for the whole corpus"
        reader = Reader(self.rootdir)
        corpus = reader.slurp()
        df = extract_corpus_annotations(corpus)
        self.assertEqual(['doc'] + ANNOTATION_COLS, list(df.columns))
        self.assertEqual(10, len(df))
        self.assertEqual(['season1/words'] * 8 + ['simple'] * 2,
                         df['doc'].tolist())
        self.assertEqual(list(range(10)), list(df.index))

    def test_extract_distribute(self):
        "the distribution flag is passed on"
        corpus = Reader(self.rootdir).slurp()
        df = extract_corpus_annotations(
            corpus, distribute_duration_among_children=True)
        words = df[df['doc'] == 'season1/words']
        self.assertEqual(3.0, row(words, 'ann3')['DURATION'])

    def test_extract_empty(self):
        "an empty selection gives an empty table"
        df = extract_corpus_annotations({})
        self.assertEqual(0, len(df))
        self.assertEqual(['doc'] + ANNOTATION_COLS, list(df.columns))

    def test_read_file(self):
        "reading a single file"
        doc = read_eaf_file(os.path.join(self.rootdir, 'simple.eaf'))
        self.assertEqual(2, len(extract_annotations(doc)))


# ---------------------------------------------------------------------
# stats and commands
# ---------------------------------------------------------------------


class StatsTest(unittest.TestCase):
    "tests for elex.stats"

    def test_tier_summary(self):
        "per-tier counts and durations"
        df = extract_annotations(parse_eaf(WORDS_EAF))
        summary = tier_summary(df)
        self.assertEqual(['tx', 'wd', 'gl', 'ft'],
                         summary['TIER_ID'].tolist())
        self.assertEqual([2, 3, 2, 1], summary['annotations'].tolist())
        tx = summary[summary['TIER_ID'] == 'tx'].iloc[0]
        self.assertEqual(15, tx['total_duration'])
        self.assertEqual(7.5, tx['mean_duration'])
        self.assertEqual(7.5, tx['median_duration'])

    def test_tier_summary_untimed(self):
        "annotations without duration are counted but not timed"
        df = extract_annotations(parse_eaf(BROKEN_EAF))
        summary = tier_summary(df)
        dep = summary[summary['TIER_ID'] == 'dependent'].iloc[0]
        self.assertEqual(3, dep['annotations'])
        self.assertEqual(0, dep['timed'])
        self.assertTrue(pd.isna(dep['total_duration']))
        main = summary[summary['TIER_ID'] == 'main'].iloc[0]
        self.assertEqual(4, main['annotations'])
        self.assertEqual(1, main['timed'])

    def test_tier_summary_empty(self):
        "no annotations"
        summary = tier_summary(extract_annotations(parse_eaf(EMPTY_EAF)))
        self.assertEqual(0, len(summary))

    def test_value_counts(self):
        "values on a tier"
        df = extract_annotations(parse_eaf(WORDS_EAF))
        counts = value_counts(df, 'wd')
        self.assertEqual(['ANNOTATION_VALUE', 'count'], list(counts.columns))
        self.assertEqual(['a', 'b', 'c'],
                         sorted(counts['ANNOTATION_VALUE'].tolist()))
        self.assertEqual([1, 1, 1], counts['count'].tolist())


class CommandTest(unittest.TestCase):
    "tests for the elex-util subcommands"

    def setUp(self):
        self.rootdir = tempfile.mkdtemp()
        self.outdir = tempfile.mkdtemp()
        with open(os.path.join(self.rootdir, 'words.eaf'), 'w',
                  encoding='utf-8') as fout:
            fout.write(WORDS_EAF)

    def tearDown(self):
        shutil.rmtree(self.rootdir)
        shutil.rmtree(self.outdir)

    def args(self, **kwargs):
        "command line arguments"
        defaults = dict(corpus=self.rootdir, doc=None, subdir=None,
                        distribute=False, output=self.outdir,
                        out_fmt='csv', tier=None)
        defaults.update(kwargs)
        return argparse.Namespace(**defaults)

    def test_dump_csv(self):
        "dump writes one csv for the corpus"
        dump_cmd.main(self.args(distribute=True))
        df = pd.read_csv(os.path.join(self.outdir, 'annotations.csv'))
        self.assertEqual(8, len(df))
        self.assertEqual(3.0, row(df, 'ann3')['DURATION'])

    def test_dump_pickle(self):
        "dump can also pickle"
        dump_cmd.main(self.args(out_fmt='pickle'))
        df = pd.read_pickle(os.path.join(self.outdir, 'annotations.pkl'))
        self.assertEqual(['doc'] + ANNOTATION_COLS, list(df.columns))

    def test_dump_bad_format(self):
        "unknown formats"
        with self.assertRaises(ValueError):
            dump_cmd.dump_annotations(pd.DataFrame(), self.outdir, 'xls')

    def test_count_report(self):
        "count reports on tiers, or on the values of one tier"
        corpus = Reader(self.rootdir).slurp()
        df = extract_corpus_annotations(corpus)
        report = count_cmd.report(df)
        self.assertIn('Tiers', report)
        self.assertIn('total_duration', report)
        report = count_cmd.report(df, tier='gl')
        self.assertIn('Values on tier gl', report)
        self.assertIn('ANNOTATION_VALUE', report)


if __name__ == '__main__':
    unittest.main()
