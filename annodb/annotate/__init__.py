"""
Sub-package Documentation
==========================

In-memory model of annotated transcripts


Coordinate Spaces
------------------------

+-------------+--------------------------------------------------------------+
| space       | positions                                                    |
+=============+==============================================================+
| ``genomic`` | position on the slice the transcript is on (1-based)         |
+-------------+--------------------------------------------------------------+
| ``cdna``    | position on the spliced transcript, introns removed (1-based)|
+-------------+--------------------------------------------------------------+
| ``peptide`` | position on the translated amino acid sequence (1-based)     |
+-------------+--------------------------------------------------------------+


Sequence Overview
----------------------

- exon sequences are concatenated in transcript order (spliced sequence)
- rna edit attributes are applied, rightmost first (edited sequence)
- the coding region is extracted (translateable sequence) and translated
- selenocysteine attributes are substituted into the peptide
"""
