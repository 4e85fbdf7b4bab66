"""
module with functions for reading the sequence inputs used to resolve exon sequences
"""
from Bio import SeqIO

from ..util import LOG


def load_reference_genome(*filenames):
    """
    Args:
        filenames (str): the paths to the files containing the input fasta genomes

    Returns:
        :class:`dict` of :class:`Bio.SeqRecord` by :class:`str`: a dictionary representing the sequences in the fasta
        file

    Raises:
        KeyError: if a sequence name is repeated across the input files
    """
    reference_genome = {}
    for filename in filenames:
        LOG('loading:', filename, time_stamp=True)
        with open(filename, 'r') as fh:
            for chrom, seq in SeqIO.to_dict(SeqIO.parse(fh, 'fasta')).items():
                if chrom in reference_genome:
                    raise KeyError('Duplicate chromosome name', chrom, filename)
                reference_genome[chrom] = seq
    return reference_genome
