"""
coordinate conversion between pairs of coordinate spaces. The generic :class:`Mapper` holds a set of aligned,
equal-length regions between two spaces and is used both for the exon structure of a single transcript
(:class:`TranscriptMapper`) and for the assembly of one coordinate system from another (:class:`AssemblyMapper`)
"""
from ..constants import CODON_SIZE, COORD_SPACE, STRAND
from ..interval import Interval


class Coordinate:
    """
    a mapped region in the target space
    """

    def __init__(self, id, start, end, strand=STRAND.POS, space=None):
        self.id = id
        self.start = start
        self.end = end
        self.strand = strand
        self.space = space

    def __len__(self):
        return self.end - self.start + 1

    def length(self):
        return len(self)

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return False
        return (self.id, self.start, self.end, self.strand) == (other.id, other.start, other.end, other.strand)

    def __hash__(self):
        return hash((self.id, self.start, self.end, self.strand))

    def __repr__(self):
        return 'Coordinate({}:{}-{}{})'.format(self.id, self.start, self.end, '+' if self.strand > 0 else '-')


class Gap:
    """
    a region of the query (in the query space) which does not map to the target space
    """

    def __init__(self, start, end):
        self.start = start
        self.end = end

    def __len__(self):
        return self.end - self.start + 1

    def length(self):
        return len(self)

    def __eq__(self, other):
        if not isinstance(other, Gap):
            return False
        return self.start == other.start and self.end == other.end

    def __hash__(self):
        return hash((self.start, self.end))

    def __repr__(self):
        return 'Gap({}-{})'.format(self.start, self.end)


class MapperRegion:

    def __init__(self, id, start, end):
        self.id = id
        self.position = Interval(start, end)

    @property
    def start(self):
        return self.position.start

    @property
    def end(self):
        return self.position.end


class MapperPair:
    """
    two regions of equal length in different spaces, aligned in the same (ori=1) or opposite (ori=-1) direction
    """

    def __init__(self, source, target, ori):
        if len(source.position) != len(target.position):
            raise AttributeError(
                'mapped regions must be the same length', source.position, target.position)
        self.source = source
        self.target = target
        self.ori = STRAND.enforce(ori)


class Mapper:
    """
    Example:
        >>> mapper = Mapper('contig', 'chromosome')
        >>> mapper.add_map_coordinates('ctg1', 1, 100, 1, '1', 1001, 1100)
        >>> mapper.map_coordinates('ctg1', 11, 20, 1, 'contig')
        [Coordinate(1:1011-1020+)]
    """

    def __init__(self, from_space, to_space):
        if from_space == to_space:
            raise AttributeError('cannot map a coordinate space onto itself', from_space)
        self.from_space = from_space
        self.to_space = to_space
        self._pairs_by_source = {}
        self._pairs_by_target = {}
        self._sorted = True

    def __len__(self):
        return sum([len(pairs) for pairs in self._pairs_by_source.values()])

    def add_map_coordinates(self, source_id, source_start, source_end, ori, target_id, target_start, target_end):
        """
        Args:
            source_id: the name of the region in the source space
            source_start (int): start of the region in the source space
            source_end (int): end of the region in the source space
            ori (STRAND): 1 if both regions run in the same direction, -1 otherwise
            target_id: the name of the region in the target space
            target_start (int): start of the region in the target space
            target_end (int): end of the region in the target space

        Raises:
            AttributeError: if the regions are not the same length
        """
        pair = MapperPair(
            MapperRegion(source_id, source_start, source_end),
            MapperRegion(target_id, target_start, target_end),
            ori
        )
        self._pairs_by_source.setdefault(source_id, []).append(pair)
        self._pairs_by_target.setdefault(target_id, []).append(pair)
        self._sorted = False

    def _sort(self):
        for pairs in self._pairs_by_source.values():
            pairs.sort(key=lambda p: p.source.start)
        for pairs in self._pairs_by_target.values():
            pairs.sort(key=lambda p: p.target.start)
        self._sorted = True

    def map_coordinates(self, id, start, end, strand, space):
        """
        map a region from one space to the other

        Args:
            id: the name of the region the query is on
            start (int): start of the query
            end (int): end of the query
            strand (STRAND): strand of the query
            space: the space the query is given in

        Returns:
            :class:`list` of :class:`Coordinate` and :class:`Gap`: the mapped pieces in the order of the query. Parts of
            the query which do not map are returned as gaps in the query space

        Raises:
            AttributeError: if the space is not one of the two spaces of the mapper
        """
        if space == self.from_space:
            pairs_by_id, to_space = self._pairs_by_source, self.to_space

            def ends(pair):
                return pair.source, pair.target
        elif space == self.to_space:
            pairs_by_id, to_space = self._pairs_by_target, self.from_space

            def ends(pair):
                return pair.target, pair.source
        else:
            raise AttributeError('space is not handled by this mapper', space, self.from_space, self.to_space)

        if not self._sorted:
            self._sort()

        result = []
        current = start
        for pair in pairs_by_id.get(id, []):
            src, tgt = ends(pair)
            if src.end < current:
                continue
            if src.start > end:
                break
            if src.start > current:
                result.append(Gap(current, src.start - 1))
                current = src.start
            overlap_end = min(end, src.end)
            if pair.ori == STRAND.POS:
                target_start = tgt.start + (current - src.start)
                target_end = tgt.start + (overlap_end - src.start)
            else:
                target_start = tgt.end - (overlap_end - src.start)
                target_end = tgt.end - (current - src.start)
            result.append(Coordinate(tgt.id, target_start, target_end, pair.ori * strand, space=to_space))
            current = overlap_end + 1
            if current > end:
                break
        if current <= end:
            result.append(Gap(current, end))
        if strand == STRAND.NEG:
            result.reverse()
        return result

    def fastmap(self, id, start, end, strand, space):
        """
        Returns:
            Coordinate: the mapped region or None if the query does not map as a single uninterrupted region
        """
        result = self.map_coordinates(id, start, end, strand, space)
        if len(result) != 1 or not isinstance(result[0], Coordinate):
            return None
        return result[0]


class TranscriptMapper:
    """
    converts positions between the genomic, cdna and peptide coordinate spaces of a single transcript. Built from the
    exons (and coding region) of the transcript at the time of construction
    """
    CDNA_ID = 'cdna'
    GENOMIC_ID = 'genome'

    def __init__(self, transcript):
        """
        Args:
            transcript (Transcript): the transcript to build the exon mapping for
        """
        self.exon_coord_mapper = Mapper(COORD_SPACE.CDNA, COORD_SPACE.GENOMIC)
        exons = transcript.get_all_exons()
        cdna_start = 1
        for exon in exons:
            cdna_end = cdna_start + len(exon) - 1
            self.exon_coord_mapper.add_map_coordinates(
                self.CDNA_ID, cdna_start, cdna_end, exon.strand, self.GENOMIC_ID, exon.start, exon.end)
            cdna_start = cdna_end + 1
        self.cdna_length = cdna_start - 1
        self.genomic_extent = Interval.union(*[(e.start, e.end) for e in exons]) if exons else None
        self.cdna_coding_start = transcript.cdna_coding_start
        self.cdna_coding_end = transcript.cdna_coding_end

    def is_coding(self):
        return self.cdna_coding_start is not None and self.cdna_coding_end is not None

    def genomic_to_cdna(self, start, end, strand):
        """
        Args:
            start (int): genomic start (relative to the transcript slice)
            end (int): genomic end
            strand (STRAND): the strand of the query relative to the transcript slice

        Returns:
            :class:`list` of :class:`Coordinate` and :class:`Gap`: cdna coordinates of the exonic parts of the query,
            intronic parts and flanks are gaps. An empty list if the query is entirely outside of the transcript

        Example:
            >>> mapper.genomic_to_cdna(140, 210, 1)
            [Coordinate(cdna:41-51+), Gap(151-199), Coordinate(cdna:52-62+)]
        """
        if end < start:
            raise AttributeError('start must be less than or equal to end', start, end)
        if self.genomic_extent is None or not Interval.overlaps((start, end), self.genomic_extent):
            return []
        return self.exon_coord_mapper.map_coordinates(self.GENOMIC_ID, start, end, strand, COORD_SPACE.GENOMIC)

    def cdna_to_genomic(self, start, end):
        """
        Returns:
            :class:`list` of :class:`Coordinate` and :class:`Gap`: one genomic coordinate per exon the cdna range
            covers. Positions before 1 or after the end of the transcript are gaps
        """
        if end < start:
            raise AttributeError('start must be less than or equal to end', start, end)
        return self.exon_coord_mapper.map_coordinates(self.CDNA_ID, start, end, STRAND.POS, COORD_SPACE.CDNA)

    def peptide_to_genomic(self, start, end):
        """
        converts a peptide range to the genomic regions covering all of its codons

        Returns:
            :class:`list` of :class:`Coordinate` and :class:`Gap`: the genomic pieces. A single gap for non-coding
            transcripts
        """
        if end < start:
            raise AttributeError('start must be less than or equal to end', start, end)
        if not self.is_coding():
            return [Gap(start, end)]
        cdna_start = start * CODON_SIZE - 2 + self.cdna_coding_start - 1
        cdna_end = end * CODON_SIZE + self.cdna_coding_start - 1
        return self.cdna_to_genomic(cdna_start, cdna_end)

    def genomic_to_peptide(self, start, end, strand):
        """
        converts a genomic range to peptide positions. Untranslated, intronic and opposite strand parts are returned
        as gaps

        Returns:
            :class:`list` of :class:`Coordinate` and :class:`Gap`: peptide coordinates and gaps
        """
        if not self.is_coding():
            return [Gap(start, end)]
        result = []
        for coord in self.genomic_to_cdna(start, end, strand):
            if isinstance(coord, Gap):
                result.append(coord)
                continue
            cds_start, cds_end = self.cdna_coding_start, self.cdna_coding_end
            if coord.strand == STRAND.NEG or coord.end < cds_start or coord.start > cds_end:
                result.append(Gap(coord.start, coord.end))
                continue
            cdna_start, cdna_end = coord.start, coord.end
            if cdna_start < cds_start:
                result.append(Gap(cdna_start, cds_start - 1))
                cdna_start = cds_start
            trailing_gap = None
            if cdna_end > cds_end:
                trailing_gap = Gap(cds_end + 1, cdna_end)
                cdna_end = cds_end
            result.append(Coordinate(
                COORD_SPACE.PEPTIDE,
                int((cdna_start - cds_start + 3) / CODON_SIZE),
                int((cdna_end - cds_start + 3) / CODON_SIZE),
                coord.strand,
                space=COORD_SPACE.PEPTIDE
            ))
            if trailing_gap:
                result.append(trailing_gap)
        return result


class AssemblyMapper:
    """
    maps features from the sequence regions of one coordinate system onto whole-region slices of another
    """

    def __init__(self, source_coord_system, target_coord_system):
        self.mapper = Mapper(source_coord_system, target_coord_system)
        self._target_slices = {}

    @property
    def source_coord_system(self):
        return self.mapper.from_space

    @property
    def target_coord_system(self):
        return self.mapper.to_space

    def add_map_coordinates(self, source_name, source_start, source_end, ori, target_slice, target_start, target_end):
        """
        Args:
            source_name (str): sequence region name in the source coordinate system
            target_slice (Slice): any slice of the target sequence region
        """
        self._target_slices[target_slice.seq_region_name] = target_slice.whole()
        self.mapper.add_map_coordinates(
            source_name, source_start, source_end, ori,
            target_slice.seq_region_name, target_start, target_end
        )

    def target_slice(self, name):
        return self._target_slices[name]

    def map(self, seq_region_name, start, end, strand):
        return self.mapper.map_coordinates(seq_region_name, start, end, strand, self.mapper.from_space)

    def fastmap(self, seq_region_name, start, end, strand):
        return self.mapper.fastmap(seq_region_name, start, end, strand, self.mapper.from_space)
