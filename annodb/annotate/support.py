from .base import BioInterval
from ..constants import FEATURE_TYPE


class BaseAlignFeature(BioInterval):
    """
    an alignment of an external sequence (the hit) against a slice. Used as the evidence supporting a transcript
    """
    FEATURE_TYPE = None

    def __init__(
            self, slice, start, end, strand,
            hit_name,
            hit_start,
            hit_end,
            hit_strand=1,
            score=None,
            percent_id=None,
            evalue=None,
            cigar_line=None,
            dbid=None,
            adaptor=None):
        """
        Args:
            hit_name (str): the name of the aligned sequence ex. NM_000546.5
            hit_start (int): start of the alignment on the aligned sequence
            hit_end (int): end of the alignment on the aligned sequence
            cigar_line (str): the alignment as a cigar string
        """
        BioInterval.__init__(self, slice, start, end, strand=strand, name=hit_name, dbid=dbid, adaptor=adaptor)
        self.hit_name = hit_name
        self.hit_start = int(hit_start)
        self.hit_end = int(hit_end)
        self.hit_strand = hit_strand
        self.score = score
        self.percent_id = percent_id
        self.evalue = evalue
        self.cigar_line = cigar_line

    def key(self):
        return BioInterval.key(self), self.hit_name, self.hit_start, self.hit_end, self.cigar_line


class DnaAlignFeature(BaseAlignFeature):
    FEATURE_TYPE = FEATURE_TYPE.DNA_ALIGN


class ProteinAlignFeature(BaseAlignFeature):
    FEATURE_TYPE = FEATURE_TYPE.PROTEIN_ALIGN
