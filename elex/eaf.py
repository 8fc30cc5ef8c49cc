# License: BSD3

"""
The `ELAN <https://archive.mpi.nl/tla/elan>`__ file format (.eaf)
as a flat annotation table

You're likely most interested in `extract_annotations`, which takes a
parsed EAF document (see `read_eaf_file`) and returns one row per
annotation ::

    doc = read_eaf_file('session1.eaf')
    df = extract_annotations(doc, distribute_duration_among_children=True)

ELAN annotations come in two flavours. An `ALIGNABLE_ANNOTATION` points
at two time slots directly. A `REF_ANNOTATION` only points at another
annotation, which may itself be a reference annotation; its time slots
are those of the first alignable annotation found by following the
chain of references.
"""

import re
import xml.etree.ElementTree as ET

import pandas as pd

from elex.annotation import (ANNOTATION_COLS, NUMERIC_COLS,
                             AnnotationRecord, Tier)
from elex.internalutil import first_text, parse_number


UNKNOWN_SLOTS = (None, None)
"""
Time slot refs for annotations we cannot anchor in time
"""

_NUMERIC_ID_RE = re.compile(r'^ann([0-9]+)$')


# ---------------------------------------------------------------------
# exceptions
# ---------------------------------------------------------------------
class EafException(Exception):
    """
    Something went wrong reading an EAF document
    """
    def __init__(self, *args, **kw):
        Exception.__init__(self, *args, **kw)


class ReferenceCycleError(EafException):
    """
    A chain of `ANNOTATION_REF` links loops back on itself, so the
    annotations on it can never be anchored in time

    :param chain: annotation ids visited, ending with the repeated one
    :type chain: [string]
    """
    def __init__(self, chain):
        self.chain = chain
        EafException.__init__(
            self,
            "Cyclic ANNOTATION_REF chain: %s" % " -> ".join(chain))


# ---------------------------------------------------------------------
# reading
# ---------------------------------------------------------------------
def read_eaf_file(filename):
    """
    Parse an EAF file into an ElementTree
    """
    return ET.parse(filename)


def _document_root(doc):
    """
    Root element of a parsed EAF document, which may be given as an
    `ElementTree` or as an element
    """
    if isinstance(doc, ET.ElementTree):
        root = doc.getroot()
        if root is None:
            raise TypeError("Input ElementTree is empty; expected an "
                            "EAF document parsed with read_eaf_file() "
                            "or xml.etree.ElementTree.parse()")
        return root
    elif ET.iselement(doc):
        return doc
    else:
        raise TypeError("Input must be an XML document (ElementTree or "
                        "Element) as created by read_eaf_file() or "
                        "xml.etree.ElementTree.parse(), not %s" %
                        type(doc).__name__)


class EafMappings(object):
    """
    Lookup tables used to anchor annotations in time.

    All three are plain dictionaries; when the document repeats an id,
    the last occurrence (in document order) wins.

    :param time_slot_to_value: time slot id to time value (None if the
        value is missing or not a number)
    :type time_slot_to_value: dict(string, number)

    :param id_to_time_slot: alignable annotation id to its
        `(TIME_SLOT_REF1, TIME_SLOT_REF2)`
    :type id_to_time_slot: dict(string, (string, string))

    :param id_to_annotation_ref: reference annotation id to the id of the
        annotation it refers to
    :type id_to_annotation_ref: dict(string, string)
    """
    def __init__(self, time_slot_to_value, id_to_time_slot,
                 id_to_annotation_ref):
        self.time_slot_to_value = time_slot_to_value
        self.id_to_time_slot = id_to_time_slot
        self.id_to_annotation_ref = id_to_annotation_ref

    def time_slots(self, anno_id):
        "See `find_time_slots`"
        return find_time_slots(anno_id, self.id_to_time_slot,
                               self.id_to_annotation_ref)

    def time_value(self, time_slot_ref):
        "Numeric value of a time slot, or None"
        return self.time_slot_to_value.get(time_slot_ref)

    def duration(self, time_slot_ref1, time_slot_ref2):
        "See `calculate_duration`"
        return calculate_duration(time_slot_ref1, time_slot_ref2,
                                  self.time_slot_to_value)


def build_mappings(doc):
    """
    Scan a parsed EAF document for time slots, alignable annotations and
    reference annotations.

    Missing attributes are recorded as None; nodes without an id are
    skipped since there would be nothing to look them up by.

    :rtype: `EafMappings`
    """
    root = _document_root(doc)

    time_slot_to_value = {}
    for node in root.iter('TIME_SLOT'):
        ts_id = node.get('TIME_SLOT_ID')
        if ts_id is not None:
            time_slot_to_value[ts_id] = parse_number(node.get('TIME_VALUE'))

    id_to_time_slot = {}
    for node in root.iter('ALIGNABLE_ANNOTATION'):
        anno_id = node.get('ANNOTATION_ID')
        if anno_id is not None:
            id_to_time_slot[anno_id] = (node.get('TIME_SLOT_REF1'),
                                        node.get('TIME_SLOT_REF2'))

    id_to_annotation_ref = {}
    for node in root.iter('REF_ANNOTATION'):
        anno_id = node.get('ANNOTATION_ID')
        if anno_id is not None:
            id_to_annotation_ref[anno_id] = node.get('ANNOTATION_REF')

    return EafMappings(time_slot_to_value, id_to_time_slot,
                       id_to_annotation_ref)


# ---------------------------------------------------------------------
# anchoring
# ---------------------------------------------------------------------
def find_time_slots(anno_id, id_to_time_slot, id_to_annotation_ref):
    """
    Time slot refs `(TIME_SLOT_REF1, TIME_SLOT_REF2)` for an annotation.

    Alignable annotations give their own refs; reference annotations
    give those of the first alignable annotation reached by following
    their `ANNOTATION_REF` links. If the chain ends on an id we know
    nothing about (including a missing one), return `UNKNOWN_SLOTS`.

    :raises ReferenceCycleError: if the chain loops
    """
    chain = []
    visited = set()
    current = anno_id
    while current not in id_to_time_slot:
        if current not in id_to_annotation_ref:
            return UNKNOWN_SLOTS
        if current in visited:
            raise ReferenceCycleError(chain + [current])
        chain.append(current)
        visited.add(current)
        current = id_to_annotation_ref[current]
    return id_to_time_slot[current]


def calculate_duration(time_slot_ref1, time_slot_ref2, time_slot_to_value):
    """
    Absolute difference between the values of two time slots, or None
    if either one has no numeric value.

    Some files store the slots in reverse order, hence the absolute
    value.
    """
    value1 = time_slot_to_value.get(time_slot_ref1)
    value2 = time_slot_to_value.get(time_slot_ref2)
    if value1 is None or value2 is None:
        return None
    return abs(value2 - value1)


def numeric_id(anno_id):
    """
    The number in ids of the usual form `ann42` (here 42), or None for
    ids that do not follow that pattern
    """
    if anno_id is None:
        return None
    match = _NUMERIC_ID_RE.match(anno_id)
    return int(match.group(1)) if match else None


# ---------------------------------------------------------------------
# flattening
# ---------------------------------------------------------------------
def read_tier(node):
    """
    Tier context from a `TIER` element
    """
    return Tier(node.get('TIER_ID'),
                linguistic_type=node.get('LINGUISTIC_TYPE_REF'),
                parent=node.get('PARENT_REF'),
                locale=node.get('DEFAULT_LOCALE'))


def read_annotation(tier, node, mappings):
    """
    Flatten a single `ALIGNABLE_ANNOTATION` or `REF_ANNOTATION` element

    :rtype: `AnnotationRecord`
    """
    anno_id = node.get('ANNOTATION_ID')
    ref1, ref2 = mappings.time_slots(anno_id)
    return AnnotationRecord(
        tier, anno_id,
        anno_ref=node.get('ANNOTATION_REF'),
        previous=node.get('PREVIOUS_ANNOTATION'),
        time_slots=(ref1, ref2),
        time_values=(mappings.time_value(ref1), mappings.time_value(ref2)),
        duration=mappings.duration(ref1, ref2),
        value=first_text(node, 'ANNOTATION_VALUE'),
        numeric_id=numeric_id(anno_id))


def iter_annotation_records(doc, mappings=None):
    """
    Generate an `AnnotationRecord` for every annotation in the document,
    tier by tier, in document order.

    :param mappings: lookup tables for this document; built with
        `build_mappings` if not supplied
    :type mappings: `EafMappings`
    """
    root = _document_root(doc)
    if mappings is None:
        mappings = build_mappings(root)
    for tier_node in root.iter('TIER'):
        tier = read_tier(tier_node)
        # TIER/ANNOTATION/{ALIGNABLE,REF}_ANNOTATION
        for wrapper in tier_node:
            for node in wrapper:
                yield read_annotation(tier, node, mappings)


def records_to_dataframe(records):
    """
    Annotation table from a sequence of `AnnotationRecord`, with the
    columns in `ANNOTATION_COLS`.
    Missing numbers come out as NaN.
    """
    df = pd.DataFrame([r.to_row() for r in records], columns=ANNOTATION_COLS)
    for col in NUMERIC_COLS:
        df[col] = pd.to_numeric(df[col]).astype(float)
    return df


def distribute_duration(df):
    """
    Share the duration of each parent annotation evenly among its
    children.

    Rows with an `ANNOTATION_REF` are grouped by
    `(ANNOTATION_REF, TIER_ID)`; the `DURATION` of each row in a group
    of N rows becomes `DURATION / N`. Rows without an `ANNOTATION_REF`
    keep their duration.

    This is only an approximation, for children that have no time
    alignment of their own.

    Parameters
    ----------
    df : pandas.DataFrame
        Annotation table, as produced by `extract_annotations`

    Returns
    -------
    df : pandas.DataFrame
        Copy of the table with durations adjusted
    """
    df = df.copy()
    has_parent = df['ANNOTATION_REF'].notna()
    if not has_parent.any():
        return df
    children = df.loc[has_parent]
    group_sizes = children.groupby(
        ['ANNOTATION_REF', 'TIER_ID'], sort=False, dropna=False
    )['DURATION'].transform(len)
    shared = children['DURATION'].astype(float) / group_sizes
    df['DURATION'] = df['DURATION'].astype(float)
    df.loc[has_parent, 'DURATION'] = shared.to_numpy()
    return df


def extract_annotations(doc, distribute_duration_among_children=False):
    """
    Flatten the annotations of an EAF document into a table.

    Each row is an annotation (alignable or reference), with the columns
    listed in `elex.annotation.ANNOTATION_COLS`: tier context,
    annotation ids, resolved time slot refs and their values, the
    annotation value and the duration. Rows come in document order,
    tier by tier.

    Missing or unresolvable information never stops the extraction; it
    shows up as missing values in the table instead.

    Parameters
    ----------
    doc : xml.etree.ElementTree.ElementTree or Element
        The parsed EAF document (see `read_eaf_file`)

    distribute_duration_among_children : boolean, defaults to False
        If True, reference annotations sharing a parent on the same tier
        split its duration evenly (see `distribute_duration`)

    Returns
    -------
    df : pandas.DataFrame
        One row per annotation

    Raises
    ------
    TypeError
        If `doc` is not a parsed XML document
    ReferenceCycleError
        If some annotation refers back to itself through a chain of
        references
    """
    root = _document_root(doc)
    mappings = build_mappings(root)
    df = records_to_dataframe(iter_annotation_records(root, mappings))
    if distribute_duration_among_children:
        df = distribute_duration(df)
    return df
