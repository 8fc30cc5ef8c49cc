"""
elex-util subcommands
"""

# License: BSD3

from . import (count,
               dump)

# at the time of this writing argparse doesn't support a way to group
# subcommands into sections, so we abuse the command epilog instead
SUBCOMMAND_SECTIONS = [
    ('Querying', [
        count,
    ]),
    ('Dump', [
        dump,
    ]),
]

SUBCOMMANDS = []
for descr, section in SUBCOMMAND_SECTIONS:
    SUBCOMMANDS.extend(section)
