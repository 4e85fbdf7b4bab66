import itertools

from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from .attribute import apply_seq_edits, Attribute, rna_edits
from .base import BioInterval
from .mapper import TranscriptMapper
from .protein import Translation
from .xref import DBEntry
from ..constants import ATTRIB_CODE, CODON_SIZE, STOP_CODONS, STRAND, translate, TRANSCRIPT_KIND, UNKNOWN_BASE
from ..error import NotLoadedError, NotSpecifiedError, OverlapError, SliceMismatchError
from ..interval import Interval
from ..util import LOG


class Exon(BioInterval):

    def __init__(
            self, start, end, strand,
            slice=None,
            phase=-1,
            end_phase=-1,
            stable_id=None,
            version=None,
            seq=None,
            dbid=None,
            adaptor=None):
        """
        Args:
            start (int): the genomic start position (relative to the slice)
            end (int): the genomic end position (relative to the slice)
            strand (STRAND): the strand relative to the slice
            slice (Slice): the slice the exon is positioned on
            phase (int): the reading frame at the start of the exon. -1 for non-coding starts
            end_phase (int): the reading frame at the end of the exon. -1 for non-coding ends
            stable_id (str): the stable identifier ex. ENSE00001
            version (int): version of the stable identifier

        Raises:
            AttributeError: if the exon start > the exon end

        Example:
            >>> Exon(15, 78, 1)
        """
        BioInterval.__init__(
            self, slice, start, end, strand=strand, name=stable_id, seq=seq, dbid=dbid, adaptor=adaptor)
        self.phase = phase
        self.end_phase = end_phase
        self.stable_id = stable_id
        self.version = version

    def hashkey(self):
        """
        Returns:
            str: a key representing the structure of the exon. Exons with the same key are considered the same exon
            when they are stored
        """
        return '-'.join([
            self.slice.name if self.slice else '', str(self.start), str(self.end), str(self.strand),
            str(self.phase), str(self.end_phase)
        ])

    def key(self):
        return BioInterval.key(self), self.phase, self.end_phase

    def adjust_start_end(self, start_adjust, end_adjust):
        """
        create a copy of the exon with the 5' end moved by start_adjust and the 3' end by end_adjust bases, in the
        direction of the exon strand. The cached sequence is not carried over

        Example:
            >>> Exon(100, 150, -1).adjust_start_end(5, -10)
            Exon(None:110-145-1, name=None)
        """
        new_exon = self.copy()
        new_exon.seq = None
        if self.strand == STRAND.POS:
            new_exon.position.start += start_adjust
            new_exon.position.end += end_adjust
        else:
            new_exon.position.start -= end_adjust
            new_exon.position.end -= start_adjust
        return new_exon

    def get_seq(self, reference_genome=None, ignore_cache=False):
        """
        get the sequence of the exon on its own strand

        Args:
            reference_genome (:class:`dict` of :class:`Bio.SeqRecord` by :class:`str`): dict of reference sequence by
                sequence region name
            ignore_cache (bool): if True then stored sequences will be ignored

        Raises:
            NotSpecifiedError: the sequence cannot be retrieved without a reference genome
        """
        return BioInterval.get_seq(self, reference_genome, ignore_cache)

    def to_dict(self):
        d = BioInterval.to_dict(self)
        d.update({'phase': self.phase, 'end_phase': self.end_phase, 'stable_id': self.stable_id})
        return d


class Intron(BioInterval):
    """
    the region between two consecutive exons of a transcript
    """

    def __init__(self, prev_exon, next_exon):
        """
        Args:
            prev_exon (Exon): the upstream (5') exon
            next_exon (Exon): the downstream (3') exon

        Raises:
            SliceMismatchError: the exons are on different slices or strands
        """
        if prev_exon.slice != next_exon.slice or prev_exon.strand != next_exon.strand:
            raise SliceMismatchError('exons must be on the same slice and strand', prev_exon, next_exon)
        if prev_exon.strand == STRAND.POS:
            start, end = prev_exon.end + 1, next_exon.start - 1
        else:
            start, end = next_exon.end + 1, prev_exon.start - 1
        BioInterval.__init__(self, prev_exon.slice, start, end, strand=prev_exon.strand)
        self.prev_exon = prev_exon
        self.next_exon = next_exon

    @classmethod
    def gap_length(cls, prev_exon, next_exon):
        """
        Returns:
            int: the number of bases between two consecutive exons
        """
        if prev_exon.strand == STRAND.POS:
            return next_exon.start - prev_exon.end - 1
        return prev_exon.start - next_exon.end - 1


class Transcript(BioInterval):
    """
    a spliced transcript. Holds the exons in 5' to 3' order (ascending position for the positive strand and descending
    position for the negative strand) and the optional translation. The genomic extent of the transcript is derived
    from its exons
    """
    KIND = TRANSCRIPT_KIND.REGULAR
    LAZY_COLLECTIONS = ['exons', 'translation', 'attributes', 'dbentries', 'supporting_features']

    def __init__(
            self, exons=None,
            slice=None,
            start=None,
            end=None,
            strand=None,
            translation=None,
            stable_id=None,
            version=None,
            biotype=None,
            confidence=None,
            description=None,
            display_xref=None,
            external_name=None,
            external_db=None,
            external_status=None,
            attributes=None,
            dbentries=None,
            supporting_features=None,
            gene_id=None,
            dbid=None,
            adaptor=None,
            lazy=False):
        """
        Args:
            exons (:class:`list` of :class:`Exon`): the exons of the transcript, in transcript order
            slice (Slice): the slice the transcript is on. Derived from the exons when exons are given
            translation (Translation): the coding region of the transcript
            stable_id (str): the stable identifier ex. ENST00000269305
            version (int): version of the stable identifier
            display_xref (DBEntry): the cross-reference used as the display name of the transcript
            lazy (bool): True when the collections (exons, translation, etc.) are to be fetched from the database
                with :func:`ensure_loaded`

        Example:
            >>> Transcript([Exon(100, 150, 1, slice), Exon(200, 260, 1, slice)], stable_id='ENST0001', version=1)
        """
        BioInterval.__init__(self, slice, start, end, strand=strand, name=stable_id, dbid=dbid, adaptor=adaptor)
        self.stable_id = stable_id
        self.version = version
        self.biotype = biotype
        self.confidence = confidence
        self.description = description
        self.display_xref = display_xref
        self._external_name = external_name
        self._external_db = external_db
        self._external_status = external_status
        self.gene_id = gene_id

        self._exons = []
        self._translation = None
        self._attributes = [] if attributes is None else list(attributes)
        self._dbentries = [] if dbentries is None else list(dbentries)
        self._supporting_features = [] if supporting_features is None else list(supporting_features)
        self.loaded = {c: not lazy for c in self.LAZY_COLLECTIONS}
        self._flush_cache()

        if exons:
            self._exons = list(exons)
            self.loaded['exons'] = True
            self.recalculate_coordinates()
        if translation is not None:
            self.translation = translation
        given = {'attributes': attributes, 'dbentries': dbentries, 'supporting_features': supporting_features}
        for collection, value in given.items():
            if value is not None:
                self.loaded[collection] = True

    @property
    def kind(self):
        return self.KIND

    def _flush_cache(self):
        self._mapper = None
        self._cdna_coding_start = None
        self._cdna_coding_end = None
        self._coding_region_start = None
        self._coding_region_end = None

    def _check_loaded(self, collection):
        if not self.loaded[collection]:
            raise NotLoadedError(
                'the {} of the transcript have not been loaded. use ensure_loaded'.format(collection), self)

    def ensure_loaded(self, db, *collections):
        """
        fetch any of the lazily loaded collections of the transcript which have not been loaded yet. Collections
        are only ever loaded once per transcript

        Args:
            db (DBAdaptor): the database to fetch from
            collections (str): the names of the collections to load (see :attr:`LAZY_COLLECTIONS`). Defaults to all
        """
        collections = collections or self.LAZY_COLLECTIONS
        for collection in collections:
            if collection not in self.loaded:
                raise KeyError('not a lazily loaded collection', collection, self.LAZY_COLLECTIONS)
        if 'translation' in collections and not self.loaded['exons']:
            collections = ['exons'] + list(collections)
        for collection in collections:
            if self.loaded[collection]:
                continue
            if collection == 'exons':
                self._exons = db.exon_adaptor.fetch_all_by_transcript(self)
                self._flush_cache()
            elif collection == 'translation':
                self._translation = db.translation_adaptor.fetch_by_transcript(self)
                self._flush_cache()
            elif collection == 'attributes':
                self._attributes = db.attribute_adaptor.fetch_all_by_transcript(self)
            elif collection == 'dbentries':
                self._dbentries = db.dbentry_adaptor.fetch_all_by_transcript(self)
            else:
                self._supporting_features = db.supporting_feature_adaptor.fetch_all_by_transcript(self)
            self.loaded[collection] = True
        return self

    # exons
    def get_all_exons(self):
        """
        Returns:
            :class:`list` of :class:`Exon`: the exons in transcript (5' to 3') order
        """
        self._check_loaded('exons')
        return list(self._exons)

    @property
    def exons(self):
        return self.get_all_exons()

    def add_exon(self, exon):
        """
        insert an exon at its position in the transcript order

        Args:
            exon (Exon): the exon to add

        Raises:
            TypeError: the input is not an exon
            OverlapError: the exon overlaps or shares a boundary position with an exon already on the transcript
            SliceMismatchError: the exon is on a different slice than the other exons
        """
        if not isinstance(exon, Exon):
            raise TypeError('expected an Exon', exon)
        if not self.loaded['exons']:
            self._exons = []
            self.loaded['exons'] = True
        exons = self._exons
        if exons and exons[0].slice and exon.slice and exons[0].slice.name != exon.slice.name:
            raise SliceMismatchError(
                'exons with different slices not allowed on one transcript', exon.slice, exons[0].slice)

        index = len(exons)
        if exon.strand == STRAND.POS:
            for i, curr in enumerate(exons):
                if exon.end < curr.start:
                    index = i
                    break
            previous_overlaps = index > 0 and exons[index - 1].end >= exon.start
        else:
            for i, curr in enumerate(exons):
                if exon.start > curr.end:
                    index = i
                    break
            previous_overlaps = index > 0 and exons[index - 1].start <= exon.end
        if previous_overlaps:
            raise OverlapError(
                'exon overlaps with other exon in same transcript', exon,
                ['{}-{} ({})'.format(e.start, e.end, e.strand) for e in exons])
        exons.insert(index, exon)
        self.recalculate_coordinates()

    def flush_exons(self):
        """
        remove all exons from the transcript
        """
        self._exons = []
        self.loaded['exons'] = True
        self.position = None
        self.strand = None
        self._flush_cache()

    def swap_exons(self, old_exon, new_exon):
        """
        replace an exon (by identity) with another exon. The translation is retargeted if it starts or ends on the
        replaced exon

        Warning:
            the genomic extent (start, end, strand) of the transcript is not recomputed. Call
            :func:`recalculate_coordinates` after swapping exons with different positions
        """
        self._check_loaded('exons')
        for i, exon in enumerate(self._exons):
            if exon is old_exon:
                self._exons[i] = new_exon
                break
        if self._translation is not None:
            if self._translation.start_exon is old_exon:
                self._translation.start_exon = new_exon
            if self._translation.end_exon is old_exon:
                self._translation.end_exon = new_exon
        self._flush_cache()

    def recalculate_coordinates(self):
        """
        derive the start, end, strand and slice of the transcript from its exons

        Raises:
            SliceMismatchError: if the exons are on different slices
        """
        exons = self._exons
        if not exons:
            return
        slice = exons[0].slice
        strand = exons[0].strand
        start = min([e.start for e in exons])
        end = max([e.end for e in exons])
        transsplicing = False
        for exon in exons:
            if slice and exon.slice and exon.slice.name != slice.name:
                raise SliceMismatchError('exons with different slices not allowed on one transcript', exon.slice, slice)
            if exon.strand != strand:
                transsplicing = True
        if transsplicing:
            LOG.warning('transcript contains a trans splicing event', self.display_id())
        self.slice = slice
        self.position = Interval(start, end)
        self.strand = strand
        self._flush_cache()

    def get_all_introns(self):
        """
        Returns:
            :class:`list` of :class:`Intron`: the introns in transcript order. Adjacent exons (without any bases
            between them) do not produce an intron
        """
        exons = self.get_all_exons()
        introns = []
        for prev_exon, next_exon in zip(exons, exons[1:]):
            if Intron.gap_length(prev_exon, next_exon) > 0:
                introns.append(Intron(prev_exon, next_exon))
        return introns

    def cdna_length(self):
        """
        Returns:
            int: the length of the spliced transcript
        """
        return sum([len(e) for e in self.get_all_exons()])

    # translation
    @property
    def translation(self):
        self._check_loaded('translation')
        return self._translation

    @translation.setter
    def translation(self, translation):
        if translation is not None and not isinstance(translation, Translation):
            raise TypeError('expected a Translation', translation)
        self._translation = translation
        self.loaded['translation'] = True
        self._flush_cache()

    def start_exon(self):
        translation = self.translation
        return translation.start_exon if translation else None

    def end_exon(self):
        translation = self.translation
        return translation.end_exon if translation else None

    def is_coding(self):
        return self.translation is not None

    def _cdna_offset(self, boundary_exon, offset):
        position = 0
        for exon in self.get_all_exons():
            if exon is boundary_exon:
                return position + offset
            position += len(exon)
        return position

    @property
    def cdna_coding_start(self):
        """*int*: position of the first coding base in the spliced transcript (1-based). None for non-coding"""
        if self._cdna_coding_start is None and self.translation is not None:
            self._cdna_coding_start = self._cdna_offset(self.translation.start_exon, self.translation.start)
        return self._cdna_coding_start

    @property
    def cdna_coding_end(self):
        """*int*: position of the last coding base in the spliced transcript (1-based). None for non-coding"""
        if self._cdna_coding_end is None and self.translation is not None:
            self._cdna_coding_end = self._cdna_offset(self.translation.end_exon, self.translation.end)
        return self._cdna_coding_end

    @property
    def coding_region_start(self):
        """*int*: the lowest genomic position of the coding region regardless of strand. None for non-coding"""
        translation = self.translation
        if self._coding_region_start is None and translation is not None:
            if translation.start_exon.strand == STRAND.POS:
                self._coding_region_start = translation.start_exon.start + translation.start - 1
            else:
                self._coding_region_start = translation.end_exon.end - (translation.end - 1)
        return self._coding_region_start

    @property
    def coding_region_end(self):
        """*int*: the highest genomic position of the coding region regardless of strand. None for non-coding"""
        translation = self.translation
        if self._coding_region_end is None and translation is not None:
            if translation.start_exon.strand == STRAND.POS:
                self._coding_region_end = translation.end_exon.start + translation.end - 1
            else:
                self._coding_region_end = translation.start_exon.end - (translation.start - 1)
        return self._coding_region_end

    def get_all_translateable_exons(self):
        """
        Returns:
            :class:`list` of :class:`Exon`: the coding exons. The first and last are copies trimmed to the coding
            region. Empty for non-coding transcripts

        Raises:
            TranslationBoundaryError: if the translation start or end is outside of its exon, either exon is not on
                the transcript or the start exon comes after the end exon
        """
        translation = self.translation
        if translation is None:
            return []
        exons = self.get_all_exons()
        start_index, end_index = translation.exon_indices(exons)
        translateable = []
        for exon in exons[start_index:end_index + 1]:
            adjust_start = translation.start - 1 if exon is translation.start_exon else 0
            adjust_end = translation.end - len(exon) if exon is translation.end_exon else 0
            if adjust_start or adjust_end:
                translateable.append(exon.adjust_start_end(adjust_start, adjust_end))
            else:
                translateable.append(exon)
        return translateable

    # sequence
    def spliced_seq(self, reference_genome=None):
        """
        Args:
            reference_genome (:class:`dict` of :class:`Bio.SeqRecord` by :class:`str`): dict of reference sequence by
                sequence region name

        Returns:
            str: the concatenated exon sequences. Exons whose sequence cannot be retrieved are replaced by N's
        """
        seq = []
        for exon in self.get_all_exons():
            try:
                seq.append(exon.get_seq(reference_genome))
            except (NotSpecifiedError, KeyError):
                LOG.warning('could not obtain seq for exon. transcript sequence may not be correct', exon)
                seq.append(UNKNOWN_BASE * len(exon))
        return ''.join(seq)

    def edited_seq(self, reference_genome=None):
        """
        the spliced sequence with the rna edit attributes applied. The coding boundaries are recomputed from the
        translation and then shifted by the edits

        Returns:
            str: the edited sequence
        """
        self._cdna_coding_start = None
        self._cdna_coding_end = None
        seq = self.spliced_seq(reference_genome)
        coding_start, coding_end = self.cdna_coding_start, self.cdna_coding_end
        edits = rna_edits(self.get_all_attributes(ATTRIB_CODE.RNA_EDIT))
        seq, coding_start, coding_end = apply_seq_edits(seq, edits, coding_start, coding_end)
        if coding_start and coding_end:
            self._cdna_coding_start = coding_start
            self._cdna_coding_end = coding_end
        return seq

    def translateable_seq(self, reference_genome=None):
        """
        Returns:
            str: the coding part of the edited sequence. Empty for non-coding transcripts

        Raises:
            TranslationBoundaryError: the translation is not consistent with the exons of the transcript
        """
        if self.translation is not None:
            self.translation.exon_indices(self.get_all_exons())
        seq = self.edited_seq(reference_genome)
        start, end = self.cdna_coding_start, self.cdna_coding_end
        if not start or not end:
            return ''
        return seq[start - 1:end]

    def translate(self, reference_genome=None):
        """
        Returns:
            str: the amino acid sequence of the translation, without a terminal stop

        Raises:
            NotSpecifiedError: if the transcript has no translation

        Example:
            >>> transcript.translate()
            'MK'
        """
        if self.translation is None:
            raise NotSpecifiedError('cannot translate a transcript without a translation', self)
        mrna = self.translateable_seq(reference_genome)
        if len(mrna) % CODON_SIZE == 0 and mrna[-CODON_SIZE:].upper() in STOP_CODONS:
            mrna = mrna[:-CODON_SIZE]
        return self.translation.modify_translation(translate(mrna))

    def _seq_record(self, seq):
        return SeqRecord(Seq(seq), id=self.display_id(), name=self.display_id(), description='')

    def seq(self, reference_genome=None):
        """
        Returns:
            Bio.SeqRecord.SeqRecord: the spliced sequence of the transcript
        """
        return self._seq_record(self.spliced_seq(reference_genome))

    def five_prime_utr(self, reference_genome=None):
        """
        Returns:
            Bio.SeqRecord.SeqRecord: the sequence before the coding region or None if there is none

        Raises:
            NotSpecifiedError: if the transcript has no translation
        """
        if self.translation is None:
            raise NotSpecifiedError('a translation is required to define the UTR', self)
        seq = self.spliced_seq(reference_genome)[:self.cdna_coding_start - 1]
        return self._seq_record(seq) if seq else None

    def three_prime_utr(self, reference_genome=None):
        """
        Returns:
            Bio.SeqRecord.SeqRecord: the sequence after the coding region or None if there is none
        """
        if self.translation is None:
            raise NotSpecifiedError('a translation is required to define the UTR', self)
        seq = self.spliced_seq(reference_genome)[self.cdna_coding_end:]
        return self._seq_record(seq) if seq else None

    def get_all_peptide_variations(self, snps, reference_genome=None):
        """
        the amino acids which could be produced at each peptide position given a set of single base variants

        Args:
            snps (list): variants in cdna coordinates. Each has a start, end and alleles ('a/g') attribute. Variants
                which are not a single base and alleles which are not a single base (insertions, deletions) are ignored

        Returns:
            :class:`dict` of :class:`list` of :class:`str` by :class:`int`: the possible amino acids by peptide
            position. The reference amino acid is included
        """
        if self.translation is None:
            return {}
        cdna = self.spliced_seq(reference_genome)
        coding_start = self.cdna_coding_start
        variant_alleles = {}
        for snp in snps:
            if snp.start != snp.end:
                continue
            codon_pos = (snp.start - coding_start) % CODON_SIZE
            peptide = (snp.start - coding_start + (CODON_SIZE - codon_pos)) // CODON_SIZE
            codon = cdna[snp.start - codon_pos - 1:snp.start - codon_pos - 1 + CODON_SIZE]
            for allele in snp.alleles.upper().replace('|', '/').split('/'):
                if allele == '-' or len(allele) != 1:
                    continue
                variant_alleles.setdefault(peptide, (codon, [[], [], []]))[1][codon_pos].append(allele)

        result = {}
        for peptide, (codon, alleles) in variant_alleles.items():
            if len(codon) < CODON_SIZE:
                continue
            for i in range(CODON_SIZE):
                alleles[i].append(codon[i])
            amino_acids = set()
            for combination in itertools.product(*alleles):
                amino_acids.add(translate(''.join(combination)))
            result[peptide] = sorted(amino_acids)
        return result

    # coordinate mapping
    def get_transcript_mapper(self):
        """
        Returns:
            TranscriptMapper: the mapper for the current exon structure (cached until the exons change)
        """
        if self._mapper is None:
            self._mapper = TranscriptMapper(self)
        return self._mapper

    def genomic_to_cdna(self, start, end, strand):
        return self.get_transcript_mapper().genomic_to_cdna(start, end, strand)

    def cdna_to_genomic(self, start, end):
        return self.get_transcript_mapper().cdna_to_genomic(start, end)

    def genomic_to_peptide(self, start, end, strand):
        return self.get_transcript_mapper().genomic_to_peptide(start, end, strand)

    def peptide_to_genomic(self, start, end):
        return self.get_transcript_mapper().peptide_to_genomic(start, end)

    # attributes, cross-references and supporting evidence
    def get_all_attributes(self, code=None):
        self._check_loaded('attributes')
        if code is None:
            return list(self._attributes)
        return [a for a in self._attributes if a.code == code]

    def add_attributes(self, *attributes):
        """
        Note:
            adding attributes to a transcript which has not loaded its attributes prevents them from being loaded
        """
        for attribute in attributes:
            if not isinstance(attribute, Attribute):
                raise TypeError('expected an Attribute', attribute)
        self._attributes.extend(attributes)
        self.loaded['attributes'] = True
        self._cdna_coding_start = None
        self._cdna_coding_end = None

    def get_all_dbentries(self):
        """
        Returns:
            :class:`list` of :class:`DBEntry`: the cross-references of the transcript (not its translation)
        """
        self._check_loaded('dbentries')
        return list(self._dbentries)

    def add_dbentry(self, dbentry):
        if not isinstance(dbentry, DBEntry):
            raise TypeError('expected a DBEntry', dbentry)
        self._dbentries.append(dbentry)
        self.loaded['dbentries'] = True

    def get_all_dblinks(self):
        """
        Returns:
            :class:`list` of :class:`DBEntry`: the cross-references of the transcript and its translation
        """
        links = self.get_all_dbentries()
        if self.translation is not None:
            links.extend(self.translation.get_all_dbentries())
        return links

    def get_all_supporting_features(self):
        self._check_loaded('supporting_features')
        return list(self._supporting_features)

    def add_supporting_features(self, *features):
        self._supporting_features.extend(features)
        self.loaded['supporting_features'] = True

    @property
    def external_name(self):
        if self._external_name is not None:
            return self._external_name
        return self.display_xref.display_id if self.display_xref else None

    @external_name.setter
    def external_name(self, value):
        self._external_name = value

    @property
    def external_db(self):
        if self._external_db is not None:
            return self._external_db
        return self.display_xref.dbname if self.display_xref else None

    @external_db.setter
    def external_db(self, value):
        self._external_db = value

    @property
    def external_status(self):
        if self._external_status is not None:
            return self._external_status
        return self.display_xref.status if self.display_xref else None

    @external_status.setter
    def external_status(self, value):
        self._external_status = value

    def is_known(self):
        return self.display_xref is not None

    def display_id(self):
        return self.stable_id or ''

    # moving between coordinate systems
    def _move(self, new_transcript, move_exon):
        if not self.loaded['exons']:
            return new_transcript
        translation = self._translation if self.loaded['translation'] else None
        new_translation = translation.copy() if translation is not None else None
        new_exons = []
        for old_exon in self._exons:
            new_exon = move_exon(old_exon)
            if new_exon is None:
                return None
            if new_translation is not None:
                if new_translation.start_exon is old_exon:
                    new_translation.start_exon = new_exon
                if new_translation.end_exon is old_exon:
                    new_translation.end_exon = new_exon
            new_exons.append(new_exon)
        new_transcript._exons = new_exons
        if translation is not None:
            new_transcript._translation = new_translation
        new_transcript._flush_cache()
        return new_transcript

    def _copy_collections(self, new_transcript):
        new_transcript._exons = list(self._exons)
        new_transcript._attributes = list(self._attributes)
        new_transcript._dbentries = list(self._dbentries)
        new_transcript._supporting_features = list(self._supporting_features)
        new_transcript.loaded = dict(self.loaded)
        return new_transcript

    def transfer(self, slice):
        """
        move the transcript (and its exons) onto another slice of the same sequence region

        Returns:
            Transcript: a new transcript or None if the transcript or any of its exons cannot be moved
        """
        new_transcript = BioInterval.transfer(self, slice)
        if new_transcript is None:
            return None
        self._copy_collections(new_transcript)
        return self._move(new_transcript, lambda exon: exon.transfer(slice))

    def transform(self, assembly_mapper):
        """
        move the transcript (and its exons) onto another coordinate system

        Returns:
            Transcript: a new transcript or None if the transcript or any of its exons does not map cleanly
        """
        new_transcript = BioInterval.transform(self, assembly_mapper)
        if new_transcript is None:
            return None
        self._copy_collections(new_transcript)
        return self._move(new_transcript, lambda exon: exon.transform(assembly_mapper))

    def key(self):
        return BioInterval.key(self), self.stable_id, tuple([e.key() for e in self._exons])

    def to_dict(self):
        d = BioInterval.to_dict(self)
        d.update({
            'stable_id': self.stable_id,
            'version': self.version,
            'biotype': self.biotype,
            'exons': [e.to_dict() for e in self._exons],
            'cdna_coding_start': self.cdna_coding_start if self.loaded['translation'] else None,
            'cdna_coding_end': self.cdna_coding_end if self.loaded['translation'] else None
        })
        return d


class PredictionTranscript(Transcript):
    """
    a transcript produced by an ab initio gene prediction. These are stored separately from regular transcripts and
    are rejected by the transcript adaptor
    """
    KIND = TRANSCRIPT_KIND.PREDICTION
