# License: BSD3

"""
Utility functions which are meant to be used by elex but aren't expected
to be too useful outside of it
"""

import math
import re

_INT_RE = re.compile(r'^[+-]?\d+$')


def first_text(root, name):
    """
    Return

       * None if no descendant of `root` has the given tag
       * the text of the first such node otherwise ('' if it is empty)
    """
    node = root.find('.//' + name)
    if node is None:
        return None
    return node.text if node.text is not None else ''


def parse_number(string):
    """
    Read a time value: int if it looks like one, else float, else None
    (for missing or non-numeric strings)
    """
    if string is None:
        return None
    string = string.strip()
    if _INT_RE.match(string):
        return int(string)
    try:
        value = float(string)
    except ValueError:
        return None
    # 'nan', 'inf' and friends are not times
    return value if math.isfinite(value) else None
