from copy import copy as _copy
import re

from ..constants import reverse_complement, STRAND
from ..error import NotSpecifiedError
from ..interval import Interval


class ReferenceName(str):
    """
    Class for reference sequence names. Ensures that hg19/hg38 chromosome names match.

    Example:
        >>> ReferenceName('chr1') == ReferenceName('1')
        True
    """
    def __eq__(self, other):
        options = {str(self)}
        if self.startswith('chr'):
            options.add(str(self[3:]))
        else:
            options.add('chr' + str(self))
        return other in options

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(re.sub('^chr', '', str(self)))

    def __lt__(self, other):
        self_std_repr = self if not self.startswith('chr') else self[3:]
        other_std_repr = other if not other.startswith('chr') else other[3:]
        return str.__lt__(self_std_repr, other_std_repr)

    def __gt__(self, other):
        self_std_repr = self if not self.startswith('chr') else self[3:]
        other_std_repr = other if not other.startswith('chr') else other[3:]
        return str.__gt__(self_std_repr, other_std_repr)


class Slice:
    """
    a region of a sequence region (chromosome, contig, etc.) which features are positioned relative to. Position 1
    of a feature is the first base of the slice in the direction of the slice strand
    """

    def __init__(
            self, seq_region_name, start=1, end=None,
            strand=STRAND.POS,
            coord_system='chromosome',
            version=None,
            seq_region_length=None,
            seq=None,
            adaptor=None):
        """
        Args:
            seq_region_name (str): the name of the sequence region (ex. chromosome name)
            start (int): the start of the slice on the sequence region
            end (int): the end of the slice on the sequence region. Defaults to the end of the sequence region
            strand (STRAND): the strand of the slice relative to the sequence region
            coord_system (str): the name of the coordinate system the sequence region belongs to
            version (str): the version of the coordinate system (ex. GRCh38)
            seq_region_length (int): the full length of the sequence region
            seq (str): the sequence of the slice (in the slice orientation)

        Example:
            >>> Slice('1', 1000, 2000)
            Slice(chromosome::1:1000:2000:1)
        """
        if end is None:
            if seq_region_length is None:
                raise NotSpecifiedError('slice end or sequence region length must be given', seq_region_name)
            end = seq_region_length
        self.seq_region_name = ReferenceName(seq_region_name)
        self.position = Interval(start, end)
        self.strand = STRAND.enforce(strand)
        self.coord_system = coord_system
        self.version = version
        self.seq_region_length = seq_region_length if seq_region_length is not None else self.position.end
        self.seq = seq if not seq else str(seq).upper()
        self.adaptor = adaptor

    @property
    def start(self):
        return self.position.start

    @property
    def end(self):
        return self.position.end

    @property
    def name(self):
        """:class:`str`: unique name of the slice ex. chromosome:GRCh38:1:1000:2000:1"""
        return ':'.join([
            str(self.coord_system), self.version or '', str(self.seq_region_name),
            str(self.start), str(self.end), str(self.strand)
        ])

    def __len__(self):
        return len(self.position)

    def length(self):
        return len(self.position)

    def is_whole(self):
        return self.start == 1 and self.end == self.seq_region_length and self.strand == STRAND.POS

    def whole(self):
        """
        Returns:
            Slice: a slice covering the entire sequence region on the forward strand
        """
        return Slice(
            self.seq_region_name, 1, self.seq_region_length, STRAND.POS,
            coord_system=self.coord_system, version=self.version,
            seq_region_length=self.seq_region_length, adaptor=self.adaptor
        )

    def same_region(self, other):
        return self.seq_region_name == other.seq_region_name and self.coord_system == other.coord_system and \
            self.version == other.version

    def __eq__(self, other):
        if not isinstance(other, Slice):
            return False
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return 'Slice({})'.format(self.name)

    def get_seq(self, reference_genome=None):
        return self.sub_seq(1, self.length(), STRAND.POS, reference_genome)

    def sub_seq(self, start, end, strand=STRAND.POS, reference_genome=None):
        """
        get the sequence of a region given in slice relative coordinates

        Args:
            start (int): the start of the region relative to the slice
            end (int): the end of the region relative to the slice
            strand (STRAND): the strand relative to the slice
            reference_genome (:class:`dict` of :class:`Bio.SeqRecord` by :class:`str`): dict of reference sequence by
                sequence region name

        Returns:
            str: the sequence, reverse complemented where the region is on the opposite strand

        Raises:
            NotSpecifiedError: the slice has no sequence and no reference genome was given
            KeyError: the sequence region is not in the reference genome
        """
        if self.seq:
            seq = self.seq[start - 1:end]
        elif reference_genome is None:
            raise NotSpecifiedError('reference genome is required to retrieve the sequence', self.name)
        else:
            if self.strand == STRAND.POS:
                region_start, region_end = self.start + start - 1, self.start + end - 1
            else:
                region_start, region_end = self.end - end + 1, self.end - start + 1
            seq = str(reference_genome[self.seq_region_name].seq[region_start - 1:region_end]).upper()
            if self.strand == STRAND.NEG:
                seq = reverse_complement(seq)
        if strand == STRAND.NEG:
            seq = reverse_complement(seq)
        return seq


class BioInterval:
    """
    a feature positioned on a slice. Positions are relative to the slice and strand is relative to the slice strand
    """

    def __init__(self, slice, start, end=None, strand=None, name=None, seq=None, dbid=None, adaptor=None):
        """
        Args:
            slice (Slice): the slice this feature is positioned on
            start (int): start of the feature (inclusive)
            end (int): end of the feature (inclusive)
            strand (STRAND): the strand relative to the slice
            name: optional
            seq (str): the seq relating to this feature
            dbid (int): the internal identifier if this feature has been stored
            adaptor: the adaptor this feature was stored or fetched with
        """
        self.slice = slice
        self.name = name
        self.position = Interval(start, end) if start is not None else None
        self.strand = STRAND.enforce(strand) if strand is not None else None
        self.seq = seq if not seq else str(seq).upper()
        self.dbid = dbid
        self.adaptor = adaptor

    @property
    def start(self):
        """*int*: the start position"""
        return self.position.start if self.position is not None else None

    @property
    def end(self):
        """*int*: the end position"""
        return self.position.end if self.position is not None else None

    def __len__(self):
        return self.position.length()

    def length(self):
        return len(self)

    def is_stored(self, db):
        """
        Returns:
            bool: True if the feature has an identifier from the given database
        """
        if self.dbid is None or self.adaptor is None:
            return False
        return self.adaptor.db is db

    @property
    def seq_region_name(self):
        return self.slice.seq_region_name if self.slice else None

    @property
    def seq_region_start(self):
        """*int*: the start of the feature on the sequence region rather than the slice"""
        if self.slice.strand == STRAND.POS:
            return self.slice.start + self.start - 1
        return self.slice.end - self.end + 1

    @property
    def seq_region_end(self):
        """*int*: the end of the feature on the sequence region rather than the slice"""
        if self.slice.strand == STRAND.POS:
            return self.slice.start + self.end - 1
        return self.slice.end - self.start + 1

    @property
    def seq_region_strand(self):
        return self.strand * self.slice.strand

    def key(self):
        """:class:`tuple`: a tuple representing the items expected to be unique. for hashing and comparing"""
        return (self.slice.name if self.slice else None, self.position, self.strand, self.name)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def copy(self):
        """
        Returns:
            BioInterval: a shallow copy of the feature with its own position
        """
        new_feature = _copy(self)
        if self.position is not None:
            new_feature.position = Interval(self.start, self.end)
        return new_feature

    def transfer(self, slice):
        """
        moves the feature onto another slice of the same sequence region

        Args:
            slice (Slice): the slice to move to

        Returns:
            BioInterval: a copy of this feature positioned relative to the new slice or None if the slice is on a
            different sequence region

        Raises:
            NotSpecifiedError: if the feature is not currently positioned on a slice
        """
        if self.slice is None:
            raise NotSpecifiedError('cannot transfer a feature without a slice', self)
        if not self.slice.same_region(slice):
            return None
        start, end, strand = self.seq_region_start, self.seq_region_end, self.seq_region_strand
        new_feature = self.copy()
        if slice.strand == STRAND.POS:
            new_feature.position = Interval(start - slice.start + 1, end - slice.start + 1)
            new_feature.strand = strand
        else:
            new_feature.position = Interval(slice.end - end + 1, slice.end - start + 1)
            new_feature.strand = strand * -1
        new_feature.slice = slice
        return new_feature

    def transform(self, assembly_mapper):
        """
        moves the feature onto another coordinate system

        Args:
            assembly_mapper (AssemblyMapper): the mapping from the current sequence region to the target coordinate
                system

        Returns:
            BioInterval: a copy of this feature on a whole-region slice of the target coordinate system or None if the
            feature does not map cleanly (ex. it overlaps a gap or is split across target regions)
        """
        if self.slice is None:
            raise NotSpecifiedError('cannot transform a feature without a slice', self)
        coord = assembly_mapper.fastmap(
            self.seq_region_name, self.seq_region_start, self.seq_region_end, self.seq_region_strand)
        if coord is None:
            return None
        new_feature = self.copy()
        new_feature.position = Interval(coord.start, coord.end)
        new_feature.strand = coord.strand
        new_feature.slice = assembly_mapper.target_slice(coord.id)
        return new_feature

    def get_seq(self, reference_genome=None, ignore_cache=False):
        """
        get the sequence of the feature on its own strand

        Raises:
            NotSpecifiedError: the feature has no cached sequence and no slice
        """
        if self.seq and not ignore_cache:
            return self.seq
        if self.slice is None:
            raise NotSpecifiedError('cannot retrieve the sequence of a feature without a slice', self)
        return self.slice.sub_seq(self.start, self.end, self.strand, reference_genome)

    def to_dict(self):
        """
        creates a dictionary representing the current object

        Returns:
            :class:`dict` by :class:`str`: the dictionary of attribute values
        """
        return {
            'name': self.name,
            'start': self.start,
            'end': self.end,
            'strand': self.strand,
            'type': self.__class__.__name__,
            'slice': self.slice.name if self.slice else None,
            'dbid': self.dbid
        }

    def __repr__(self):
        cls = self.__class__.__name__
        refname = self.slice.seq_region_name if self.slice else None
        return '{}({}:{}-{}{}, name={})'.format(cls, refname, self.start, self.end, self.strand, self.name)
