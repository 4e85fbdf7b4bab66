from annodb.annotate.base import Slice
from annodb.annotate.genomic import Exon, Transcript
from annodb.annotate.protein import Translation

from .util import get_data

REFERENCE_GENOME_FILE = get_data('mock_reference_genome.fa')
PATCH_DIR = get_data('patches')


def build_coding_transcript(slice=None, stable_id='ENST0001', version=1):
    """
    two exon transcript on the positive strand of a 300bp all-A slice

    exons are 100-150 and 200-260. Translation starts at base 10 of the first exon and ends at base 50 of the second
    (cdna 10 to 101)
    """
    if slice is None:
        slice = Slice('fake', 1, 300, seq='A' * 300)
    exon1 = Exon(100, 150, 1, slice=slice, stable_id='ENSE0001', version=1)
    exon2 = Exon(200, 260, 1, slice=slice, stable_id='ENSE0002', version=1)
    transcript = Transcript([exon1, exon2], stable_id=stable_id, version=version, biotype='protein_coding')
    transcript.translation = Translation(exon1, 10, exon2, 50, stable_id='ENSP0001', version=1)
    return transcript
