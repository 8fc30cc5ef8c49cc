"""
The elex library turns ELAN (.eaf) annotation files into flat tables,
one row per annotation, for statistical analysis with pandas.

Layers
~~~~~~
The base layer provides

* annotation (elex.annotation): representation of the tiers and
  flattened annotations, and the column layout of the annotation table

* file management (elex.corpus): a directory of .eaf files seen as a
  corpus, for selecting slices of it and extracting them in one go

Building on the base layer, `elex.eaf` knows about the ELAN file format
itself: how time slots, alignable annotations and reference annotations
fit together, and how to anchor every annotation in time.

Finally, `elex.stats` and the `elex-util` script (`elex.cmd`) offer a
few conveniences for looking at the resulting tables ::

          cmd, stats
              |
              v
             eaf                  [tool layer]
              |
        +-----+------+
        v            v
     corpus -> annotation         [base layer]
"""
