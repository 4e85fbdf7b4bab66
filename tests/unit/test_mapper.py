import unittest

from annodb.annotate.base import Slice
from annodb.annotate.genomic import Exon, Transcript
from annodb.annotate.mapper import AssemblyMapper, Coordinate, Gap, Mapper, TranscriptMapper
from annodb.annotate.protein import Translation
from annodb.constants import COORD_SPACE

from .. import build_coding_transcript


class TestMapper(unittest.TestCase):

    def setUp(self):
        self.mapper = Mapper('contig', 'chromosome')
        self.mapper.add_map_coordinates('ctg1', 1, 100, 1, '1', 1001, 1100)
        self.mapper.add_map_coordinates('ctg2', 1, 50, -1, '1', 1201, 1250)

    def test_same_space_error(self):
        with self.assertRaises(AttributeError):
            Mapper('contig', 'contig')

    def test_unequal_length_error(self):
        with self.assertRaises(AttributeError):
            self.mapper.add_map_coordinates('ctg3', 1, 10, 1, '1', 1, 20)

    def test_map_forward(self):
        self.assertEqual([Coordinate('1', 1011, 1020, 1)], self.mapper.map_coordinates('ctg1', 11, 20, 1, 'contig'))

    def test_map_reverse_orientation(self):
        result = self.mapper.map_coordinates('ctg2', 1, 10, 1, 'contig')
        self.assertEqual([Coordinate('1', 1241, 1250, -1)], result)

    def test_map_from_target_space(self):
        result = self.mapper.map_coordinates('1', 1091, 1110, 1, 'chromosome')
        self.assertEqual([Coordinate('ctg1', 91, 100, 1), Gap(1101, 1110)], result)

    def test_map_gap_between_regions(self):
        result = self.mapper.map_coordinates('1', 1095, 1205, 1, 'chromosome')
        self.assertEqual([Coordinate('ctg1', 95, 100, 1), Gap(1101, 1200), Coordinate('ctg2', 46, 50, -1)], result)

    def test_map_negative_query_reversed(self):
        result = self.mapper.map_coordinates('1', 1095, 1205, -1, 'chromosome')
        self.assertEqual([Coordinate('ctg2', 46, 50, 1), Gap(1101, 1200), Coordinate('ctg1', 95, 100, -1)], result)

    def test_unknown_region(self):
        self.assertEqual([Gap(1, 10)], self.mapper.map_coordinates('ctg9', 1, 10, 1, 'contig'))

    def test_bad_space(self):
        with self.assertRaises(AttributeError):
            self.mapper.map_coordinates('ctg1', 1, 10, 1, 'peptide')

    def test_fastmap(self):
        self.assertEqual(Coordinate('1', 1011, 1020, 1), self.mapper.fastmap('ctg1', 11, 20, 1, 'contig'))
        self.assertIsNone(self.mapper.fastmap('ctg1', 91, 110, 1, 'contig'))


class TestTranscriptMapperPositive(unittest.TestCase):

    def setUp(self):
        self.transcript = build_coding_transcript()
        self.mapper = self.transcript.get_transcript_mapper()

    def test_cached(self):
        self.assertIs(self.mapper, self.transcript.get_transcript_mapper())

    def test_cdna_length(self):
        self.assertEqual(112, self.mapper.cdna_length)

    def test_genomic_to_cdna_across_intron(self):
        result = self.transcript.genomic_to_cdna(140, 210, 1)
        self.assertEqual([Coordinate('cdna', 41, 51, 1), Gap(151, 199), Coordinate('cdna', 52, 62, 1)], result)

    def test_genomic_to_cdna_outside_transcript(self):
        self.assertEqual([], self.transcript.genomic_to_cdna(1, 50, 1))
        self.assertEqual([], self.transcript.genomic_to_cdna(261, 300, 1))

    def test_genomic_to_cdna_flank(self):
        result = self.transcript.genomic_to_cdna(90, 105, 1)
        self.assertEqual([Gap(90, 99), Coordinate('cdna', 1, 6, 1)], result)

    def test_genomic_to_cdna_opposite_strand(self):
        result = self.transcript.genomic_to_cdna(100, 105, -1)
        self.assertEqual([Coordinate('cdna', 1, 6, -1)], result)

    def test_cdna_to_genomic_across_exons(self):
        result = self.transcript.cdna_to_genomic(50, 53)
        self.assertEqual([Coordinate('genome', 149, 150, 1), Coordinate('genome', 200, 201, 1)], result)

    def test_cdna_to_genomic_past_end(self):
        result = self.transcript.cdna_to_genomic(110, 115)
        self.assertEqual([Coordinate('genome', 258, 260, 1), Gap(113, 115)], result)

    def test_cdna_to_genomic_before_start(self):
        result = self.transcript.cdna_to_genomic(-2, 2)
        self.assertEqual([Gap(-2, 0), Coordinate('genome', 100, 101, 1)], result)

    def test_peptide_to_genomic_first_codon(self):
        self.assertEqual([Coordinate('genome', 109, 111, 1)], self.transcript.peptide_to_genomic(1, 1))

    def test_peptide_to_genomic_split_codon(self):
        # codon 14 is cdna 49-51, codon 15 is cdna 52-54
        result = self.transcript.peptide_to_genomic(14, 15)
        self.assertEqual([Coordinate('genome', 148, 150, 1), Coordinate('genome', 200, 202, 1)], result)

    def test_genomic_to_peptide(self):
        result = self.transcript.genomic_to_peptide(109, 111, 1)
        self.assertEqual([Coordinate(COORD_SPACE.PEPTIDE, 1, 1, 1)], result)

    def test_genomic_to_peptide_utr_is_gap(self):
        result = self.transcript.genomic_to_peptide(100, 114, 1)
        self.assertEqual([Gap(1, 9), Coordinate(COORD_SPACE.PEPTIDE, 1, 2, 1)], result)

    def test_genomic_to_peptide_three_prime_utr_is_gap(self):
        result = self.transcript.genomic_to_peptide(247, 255, 1)
        self.assertEqual([Coordinate(COORD_SPACE.PEPTIDE, 30, 31, 1), Gap(102, 107)], result)

    def test_genomic_to_peptide_opposite_strand_is_gap(self):
        self.assertEqual([Gap(10, 12)], self.transcript.genomic_to_peptide(109, 111, -1))

    def test_start_after_end_error(self):
        with self.assertRaises(AttributeError):
            self.transcript.genomic_to_cdna(10, 5, 1)
        with self.assertRaises(AttributeError):
            self.transcript.cdna_to_genomic(10, 5)
        with self.assertRaises(AttributeError):
            self.transcript.peptide_to_genomic(10, 5)

    def test_mapper_dropped_when_exons_change(self):
        self.transcript.add_exon(Exon(10, 20, 1, slice=self.transcript.slice))
        self.assertIsNot(self.mapper, self.transcript.get_transcript_mapper())
        self.assertEqual(123, self.transcript.get_transcript_mapper().cdna_length)


class TestTranscriptMapperNegative(unittest.TestCase):

    def setUp(self):
        slice = Slice('fake', 1, 300, seq='A' * 300)
        self.transcript = Transcript([Exon(200, 260, -1, slice=slice), Exon(100, 150, -1, slice=slice)])

    def test_cdna_to_genomic(self):
        self.assertEqual([Coordinate('genome', 258, 260, -1)], self.transcript.cdna_to_genomic(1, 3))

    def test_cdna_to_genomic_across_exons(self):
        result = self.transcript.cdna_to_genomic(60, 63)
        self.assertEqual([Coordinate('genome', 200, 201, -1), Coordinate('genome', 149, 150, -1)], result)

    def test_genomic_to_cdna(self):
        self.assertEqual([Coordinate('cdna', 1, 3, 1)], self.transcript.genomic_to_cdna(258, 260, -1))

    def test_genomic_to_cdna_order_follows_query(self):
        result = self.transcript.genomic_to_cdna(149, 201, -1)
        self.assertEqual([Coordinate('cdna', 60, 61, 1), Gap(151, 199), Coordinate('cdna', 62, 63, 1)], result)

    def test_non_coding_peptide_queries(self):
        self.assertEqual([Gap(1, 5)], self.transcript.peptide_to_genomic(1, 5))
        self.assertEqual([Gap(100, 120)], self.transcript.genomic_to_peptide(100, 120, -1))


class TestTranscriptMapperRoundTrip(unittest.TestCase):

    def setUp(self):
        slice = Slice('fake', 1, 300, seq='A' * 300)
        self.transcripts = [
            build_coding_transcript(slice=slice),
            Transcript([Exon(200, 260, -1, slice=slice), Exon(100, 150, -1, slice=slice)])
        ]

    def test_exon_interior_positions(self):
        for transcript in self.transcripts:
            for position in [101, 125, 149, 201, 230, 259]:
                cdna = transcript.genomic_to_cdna(position, position, transcript.strand)
                self.assertEqual(1, len(cdna))
                genomic = transcript.cdna_to_genomic(cdna[0].start, cdna[0].end)
                self.assertEqual(
                    [(position, position, transcript.strand)], [(c.start, c.end, c.strand) for c in genomic])

    def test_exon_ranges(self):
        for transcript in self.transcripts:
            for start, end in [(101, 149), (201, 259)]:
                cdna = transcript.genomic_to_cdna(start, end, transcript.strand)
                genomic = transcript.cdna_to_genomic(cdna[0].start, cdna[0].end)
                self.assertEqual([(start, end)], [(c.start, c.end) for c in genomic])


class TestTranscriptMapperNegativeCoding(unittest.TestCase):

    def setUp(self):
        slice = Slice('fake', 1, 300, seq='A' * 300)
        exon1 = Exon(200, 260, -1, slice=slice)
        exon2 = Exon(100, 150, -1, slice=slice)
        self.transcript = Transcript([exon1, exon2])
        self.transcript.translation = Translation(exon1, 10, exon2, 50)

    def test_coding_positions(self):
        self.assertEqual((10, 111), (self.transcript.cdna_coding_start, self.transcript.cdna_coding_end))

    def test_genomic_to_peptide(self):
        result = self.transcript.genomic_to_peptide(249, 251, -1)
        self.assertEqual([Coordinate(COORD_SPACE.PEPTIDE, 1, 1, 1)], result)

    def test_genomic_to_peptide_opposite_strand_is_gap(self):
        self.assertEqual([Gap(10, 12)], self.transcript.genomic_to_peptide(249, 251, 1))

    def test_strand_required(self):
        with self.assertRaises(TypeError):
            self.transcript.genomic_to_cdna(249, 251)
        with self.assertRaises(TypeError):
            self.transcript.genomic_to_peptide(249, 251)


class TestTranscriptMapperEmpty(unittest.TestCase):

    def test_no_exons(self):
        mapper = TranscriptMapper(Transcript())
        self.assertEqual(0, mapper.cdna_length)
        self.assertEqual([], mapper.genomic_to_cdna(1, 10, 1))
        self.assertEqual([Gap(1, 10)], mapper.cdna_to_genomic(1, 10))


class TestAssemblyMapper(unittest.TestCase):

    def test_fastmap_and_target_slice(self):
        contig = Slice('ctg1', 1, 1000, coord_system='contig')
        mapper = AssemblyMapper('chromosome', 'contig')
        mapper.add_map_coordinates('fake', 1, 300, 1, contig, 501, 800)
        self.assertEqual(Coordinate('ctg1', 600, 650, 1), mapper.fastmap('fake', 100, 150, 1))
        self.assertTrue(mapper.target_slice('ctg1').is_whole())
        self.assertEqual([Coordinate('ctg1', 800, 800, 1), Gap(301, 310)], mapper.map('fake', 300, 310, 1))
