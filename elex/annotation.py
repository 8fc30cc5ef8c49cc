"""
Low-level representation of ELAN annotations, following the EAF
layout fairly closely.

This is low-level in the sense that we make little attempt to interpret
the information stored in the annotations. A reference annotation which
points at another annotation is simply noted as such; resolving the
time slots it inherits is the job of `elex.eaf`.
"""

# License: BSD3

# pylint: disable=too-many-arguments, too-many-instance-attributes
# pylint: disable=too-few-public-methods

ANNOTATION_COLS = [
    # tier context
    'LANG_REF',
    'LINGUISTIC_TYPE_REF',
    'PARENT_REF',
    'TIER_ID',
    # identity
    'ANNOTATION_ID',
    'ANNOTATION_REF',
    'PREVIOUS_ANNOTATION',
    # resolved time slots
    'TIME_SLOT_REF1',
    'TIME_SLOT_REF2',
    # content
    'ANNOTATION_VALUE',
    'anno_ref_numeric',
    # times
    'TIME_SLOT_REF1_TIME_VALUE',
    'TIME_SLOT_REF2_TIME_VALUE',
    'DURATION',
]
"""
Columns of the annotation table, in order
"""

NUMERIC_COLS = [
    'anno_ref_numeric',
    'TIME_SLOT_REF1_TIME_VALUE',
    'TIME_SLOT_REF2_TIME_VALUE',
    'DURATION',
]
"""
Columns of the annotation table that hold numbers (or missing values)
"""


class Tier(object):
    """
    Context shared by all annotations on a tier.

    :param tier_id: name of the tier
    :type tier_id: string

    :param linguistic_type: the `LINGUISTIC_TYPE_REF` of the tier
    :type linguistic_type: string

    :param parent: id of the parent tier (None for top-level tiers)
    :type parent: string

    :param locale: the `DEFAULT_LOCALE` of the tier (often None)
    :type locale: string
    """
    def __init__(self, tier_id, linguistic_type=None, parent=None,
                 locale=None):
        self.tier_id = tier_id
        self.linguistic_type = linguistic_type
        self.parent = parent
        self.locale = locale

    def __str__(self):
        return '%s [%s]' % (self.tier_id, self.linguistic_type)

    def __repr__(self):
        return 'Tier(%r)' % self.tier_id


class AnnotationRecord(object):
    """
    One flattened annotation: a single row of the annotation table.

    Any of the fields may be None if the corresponding information was
    missing from the file or could not be resolved. In particular,
    `time_slots` is `(None, None)` for annotations whose reference chain
    never reaches a time-aligned annotation.

    :param tier: tier the annotation sits on
    :type tier: `Tier`

    :param anno_id: the `ANNOTATION_ID`
    :type anno_id: string

    :param anno_ref: for reference annotations, the id of the annotation
        referred to
    :type anno_ref: string

    :param previous: the `PREVIOUS_ANNOTATION` on the same tier (symbolic
        subdivisions only)
    :type previous: string

    :param time_slots: resolved `(TIME_SLOT_REF1, TIME_SLOT_REF2)`
    :type time_slots: (string, string)

    :param time_values: numeric values of the two time slots
    :type time_values: (number, number)
    """
    def __init__(self, tier, anno_id, anno_ref=None, previous=None,
                 time_slots=(None, None), time_values=(None, None),
                 duration=None, value=None, numeric_id=None):
        self.tier = tier
        self.anno_id = anno_id
        self.anno_ref = anno_ref
        self.previous = previous
        self.time_slots = time_slots
        self.time_values = time_values
        self.duration = duration
        self.value = value
        self.numeric_id = numeric_id

    def __str__(self):
        return '%s %s %s' % (self.anno_id, self.tier.tier_id, self.value)

    def __repr__(self):
        return 'AnnotationRecord(%r, %r)' % (self.tier.tier_id, self.anno_id)

    def is_reference(self):
        """
        True if this annotation points at a parent annotation rather
        than being a top-level one
        """
        return self.anno_ref is not None

    def to_row(self):
        """
        Dictionary from column name (see `ANNOTATION_COLS`) to value
        """
        return {
            'LANG_REF': self.tier.locale,
            'LINGUISTIC_TYPE_REF': self.tier.linguistic_type,
            'PARENT_REF': self.tier.parent,
            'TIER_ID': self.tier.tier_id,
            'ANNOTATION_ID': self.anno_id,
            'ANNOTATION_REF': self.anno_ref,
            'PREVIOUS_ANNOTATION': self.previous,
            'TIME_SLOT_REF1': self.time_slots[0],
            'TIME_SLOT_REF2': self.time_slots[1],
            'ANNOTATION_VALUE': self.value,
            'anno_ref_numeric': self.numeric_id,
            'TIME_SLOT_REF1_TIME_VALUE': self.time_values[0],
            'TIME_SLOT_REF2_TIME_VALUE': self.time_values[1],
            'DURATION': self.duration,
        }
