import unittest

from annodb.annotate.attribute import Attribute
from annodb.annotate.base import BioInterval, Slice
from annodb.annotate.genomic import Exon, PredictionTranscript, Transcript
from annodb.annotate.protein import Translation
from annodb.annotate.support import DnaAlignFeature, ProteinAlignFeature
from annodb.annotate.xref import DBEntry
from annodb.config import connect
from annodb.constants import ATTRIB_CODE
from annodb.error import (
    IncompleteRecordError, NotLoadedError, NotSpecifiedError, NotStoredError, TranslationBoundaryError,
    UnsupportedTypeError
)

from .. import build_coding_transcript


class AdaptorTestCase(unittest.TestCase):

    def setUp(self):
        self.db = connect(db_path=':memory:')
        self.db.slice_adaptor.store(Slice('fake', 1, 1000, seq_region_length=1000))
        self.db.dbentry_adaptor.store_external_db('HGNC')
        self.db.dbentry_adaptor.store_external_db('Uniprot/SWISSPROT')
        self.adaptor = self.db.transcript_adaptor

    def tearDown(self):
        self.db.close()

    def count(self, table):
        return self.db.store.fetch_one('SELECT COUNT(*) AS count FROM {}'.format(table))['count']


class TestStore(AdaptorTestCase):

    def test_store_assigns_identities(self):
        transcript = build_coding_transcript()
        dbid = self.adaptor.store(transcript)
        self.assertEqual(dbid, transcript.dbid)
        self.assertTrue(transcript.is_stored(self.db))
        for exon in transcript.exons:
            self.assertTrue(exon.is_stored(self.db))
        self.assertTrue(transcript.translation.is_stored(self.db))
        self.assertEqual(1, self.count('transcript'))
        self.assertEqual(2, self.count('exon'))
        self.assertEqual(2, self.count('exon_transcript'))
        self.assertEqual(1, self.count('translation'))

    def test_store_twice(self):
        transcript = build_coding_transcript()
        dbid = self.adaptor.store(transcript)
        self.assertEqual(dbid, self.adaptor.store(transcript))
        self.assertEqual(1, self.count('transcript'))

    def test_exon_rank(self):
        dbid = self.adaptor.store(build_coding_transcript())
        ranks = self.db.store.fetch_column(
            'SELECT rank FROM exon_transcript WHERE transcript_id = ? ORDER BY exon_id', (dbid, ))
        self.assertEqual([1, 2], ranks)

    def test_translation_exons_resolved_by_structure(self):
        transcript = build_coding_transcript()
        exon1, exon2 = transcript.exons
        copy1 = Exon(100, 150, 1, slice=transcript.slice, stable_id='ENSE0001', version=1)
        transcript.translation = Translation(copy1, 10, exon2, 50, stable_id='ENSP0001', version=1)
        self.adaptor.store(transcript)
        self.assertIs(exon1, transcript.translation.start_exon)
        row = self.db.store.fetch_one('SELECT start_exon_id FROM translation')
        self.assertEqual(exon1.dbid, row['start_exon_id'])

    def test_translation_exon_not_in_transcript_error(self):
        transcript = build_coding_transcript()
        exon2 = transcript.exons[1]
        transcript.translation = Translation(Exon(1, 10, 1, slice=transcript.slice), 1, exon2, 50)
        with self.assertRaises(IncompleteRecordError):
            self.adaptor.store(transcript)
        self.assertEqual(0, self.count('transcript'))
        self.assertEqual(0, self.count('exon'))

    def test_translation_exons_out_of_order_error(self):
        transcript = build_coding_transcript()
        exon1, exon2 = transcript.exons
        transcript.translation = Translation(exon2, 1, exon1, 10)
        with self.assertRaises(TranslationBoundaryError):
            self.adaptor.store(transcript)
        self.assertIsNone(transcript.dbid)
        self.assertEqual(0, self.count('translation'))
        self.assertEqual(0, self.count('transcript'))

    def test_translation_offset_outside_exon_error(self):
        transcript = build_coding_transcript()
        exon1, exon2 = transcript.exons
        transcript.translation = Translation(exon1, 10, exon2, 62)
        with self.assertRaises(TranslationBoundaryError):
            self.adaptor.store(transcript)
        self.assertEqual(0, self.count('translation'))

    def test_missing_version_error(self):
        transcript = build_coding_transcript(version=None)
        with self.assertRaises(IncompleteRecordError):
            self.adaptor.store(transcript)
        self.assertIsNone(transcript.dbid)
        self.assertEqual([None, None], [e.dbid for e in transcript.exons])
        self.assertEqual([], self.db.exon_adaptor.list_dbids())

    def test_no_exons_error(self):
        with self.assertRaises(IncompleteRecordError):
            self.adaptor.store(Transcript(slice=Slice('fake', 1, 300), stable_id='ENST1', version=1))

    def test_unknown_seq_region_error(self):
        transcript = build_coding_transcript(slice=Slice('other', 1, 300))
        with self.assertRaises(NotStoredError):
            self.adaptor.store(transcript)
        self.assertEqual(0, self.count('exon'))

    def test_not_a_transcript_error(self):
        with self.assertRaises(TypeError):
            self.adaptor.store(Exon(1, 10, 1))

    def test_prediction_transcript_error(self):
        slice = Slice('fake', 1, 300)
        transcript = PredictionTranscript([Exon(100, 150, 1, slice=slice)])
        with self.assertRaises(UnsupportedTypeError):
            self.adaptor.store(transcript)
        with self.assertRaises(UnsupportedTypeError):
            self.adaptor.remove(transcript)
        self.assertEqual(0, self.count('exon'))

    def test_unsupported_feature_rolls_back(self):
        transcript = build_coding_transcript()
        transcript.add_dbentry(DBEntry('HGNC:11998', 'HGNC', 'TP53'))
        transcript.add_supporting_features(
            DnaAlignFeature(transcript.slice, 100, 150, 1, 'NM_000546.5', 1, 51),
            BioInterval(transcript.slice, 100, 150, strand=1)
        )
        with self.assertRaises(UnsupportedTypeError):
            self.adaptor.store(transcript)
        for table in ['transcript', 'exon', 'translation', 'xref', 'object_xref', 'dna_align_feature']:
            self.assertEqual(0, self.count(table), table)
        self.assertIsNone(transcript.dbid)
        self.assertIsNone(transcript.translation.dbid)
        self.assertIsNone(transcript.get_all_dbentries()[0].dbid)
        self.assertIsNone(transcript.get_all_supporting_features()[0].dbid)
        self.assertEqual([None, None], [e.dbid for e in transcript.exons])

    def test_unregistered_external_db_error(self):
        transcript = build_coding_transcript()
        transcript.add_dbentry(DBEntry('X1', 'NotADatabase'))
        with self.assertRaises(NotStoredError):
            self.adaptor.store(transcript)
        self.assertEqual([], self.adaptor.list_dbids())

    def test_retry_after_failure(self):
        transcript = build_coding_transcript(version=None)
        with self.assertRaises(IncompleteRecordError):
            self.adaptor.store(transcript)
        transcript.version = 1
        self.adaptor.store(transcript)
        self.assertEqual(1, self.count('transcript'))
        self.assertEqual(2, self.count('exon'))


class TestDisplayXref(AdaptorTestCase):

    def test_stored_display_xref(self):
        transcript = build_coding_transcript()
        xref = DBEntry('HGNC:11998', 'HGNC', 'TP53')
        transcript.add_dbentry(xref)
        transcript.display_xref = xref
        dbid = self.adaptor.store(transcript)
        fetched = self.adaptor.fetch_by_display_label('TP53')
        self.assertEqual(dbid, fetched.dbid)
        self.assertEqual('TP53', fetched.external_name)
        self.assertEqual('HGNC', fetched.external_db)
        self.assertEqual(xref.dbid, fetched.display_xref.dbid)

    def test_display_xref_already_in_database(self):
        xref = DBEntry('HGNC:11998', 'HGNC', 'TP53')
        self.db.dbentry_adaptor.store(xref)
        transcript = build_coding_transcript()
        transcript.display_xref = DBEntry('HGNC:11998', 'HGNC', 'TP53')
        self.adaptor.store(transcript)
        self.assertEqual(xref.dbid, transcript.display_xref.dbid)
        self.assertEqual('TP53', self.adaptor.fetch_by_dbid(transcript.dbid).external_name)

    def test_unstored_display_xref_warning(self):
        transcript = build_coding_transcript()
        transcript.display_xref = DBEntry('HGNC:1', 'HGNC', 'FOO')
        with self.assertLogs(level='WARNING') as log:
            dbid = self.adaptor.store(transcript)
        self.assertIn('is not stored in the database', log.output[0])
        self.assertIsNone(transcript.display_xref.dbid)
        self.assertIsNone(self.adaptor.fetch_by_dbid(dbid).display_xref)
        self.assertIsNone(self.adaptor.fetch_by_display_label('FOO'))


class TestFetch(AdaptorTestCase):

    def setUp(self):
        AdaptorTestCase.setUp(self)
        self.transcript = build_coding_transcript()
        self.transcript.add_dbentry(DBEntry('HGNC:11998', 'HGNC', 'TP53'))
        self.transcript.translation.add_dbentry(DBEntry('P04637', 'Uniprot/SWISSPROT', 'P53_HUMAN'))
        self.transcript.add_attributes(Attribute(ATTRIB_CODE.RNA_EDIT, '5 5 AAA'))
        self.transcript.translation.add_attributes(Attribute(ATTRIB_CODE.SELENOCYSTEINE, '2 2 U'))
        self.transcript.add_supporting_features(
            ProteinAlignFeature(self.transcript.slice, 109, 150, 1, 'P04637', 1, 14),
            DnaAlignFeature(self.transcript.slice, 100, 150, 1, 'NM_000546.5', 1, 51, cigar_line='51M'),
        )
        self.dbid = self.adaptor.store(self.transcript, gene_id=7)

    def test_fetch_by_dbid_is_lazy(self):
        fetched = self.adaptor.fetch_by_dbid(self.dbid)
        self.assertEqual((100, 260, 1), (fetched.start, fetched.end, fetched.strand))
        self.assertEqual(('ENST0001', 1), (fetched.stable_id, fetched.version))
        self.assertEqual('protein_coding', fetched.biotype)
        self.assertEqual(7, fetched.gene_id)
        self.assertTrue(fetched.slice.is_whole())
        with self.assertRaises(NotLoadedError):
            fetched.get_all_exons()

    def test_ensure_loaded(self):
        fetched = self.adaptor.fetch_by_dbid(self.dbid).ensure_loaded(self.db)
        self.assertEqual([(100, 150), (200, 260)], [(e.start, e.end) for e in fetched.exons])
        self.assertEqual(['ENSE0001', 'ENSE0002'], [e.stable_id for e in fetched.exons])
        translation = fetched.translation
        self.assertIs(fetched.exons[0], translation.start_exon)
        self.assertIs(fetched.exons[1], translation.end_exon)
        self.assertEqual((10, 50, 'ENSP0001'), (translation.start, translation.end, translation.stable_id))
        self.assertEqual(self.transcript.get_all_attributes(), fetched.get_all_attributes())
        self.assertEqual(
            [Attribute(ATTRIB_CODE.SELENOCYSTEINE, '2 2 U')], translation.get_all_attributes())
        self.assertEqual(['HGNC:11998', 'P04637'], [d.primary_id for d in fetched.get_all_dblinks()])

    def test_fetched_sequence_methods(self):
        fetched = self.adaptor.fetch_by_dbid(self.dbid).ensure_loaded(self.db)
        fetched.slice.seq = 'A' * 1000
        self.assertEqual(115, len(fetched.edited_seq()))
        self.assertEqual((13, 104), (fetched.cdna_coding_start, fetched.cdna_coding_end))
        self.assertEqual([(109, 150), (200, 249)], [(e.start, e.end) for e in fetched.get_all_translateable_exons()])

    def test_supporting_features(self):
        fetched = self.adaptor.fetch_by_dbid(self.dbid)
        fetched.ensure_loaded(self.db, 'supporting_features')
        features = fetched.get_all_supporting_features()
        self.assertEqual([DnaAlignFeature, ProteinAlignFeature], [type(f) for f in features])
        self.assertEqual('51M', features[0].cigar_line)
        self.assertEqual((109, 150), (features[1].start, features[1].end))

    def test_load_single_collection(self):
        fetched = self.adaptor.fetch_by_dbid(self.dbid)
        fetched.ensure_loaded(self.db, 'translation')
        self.assertTrue(fetched.loaded['exons'])
        self.assertFalse(fetched.loaded['attributes'])
        self.assertEqual(10, fetched.cdna_coding_start)

    def test_fetch_all_by_slice(self):
        transcripts = self.adaptor.fetch_all_by_slice(Slice('fake', 51, 400), load_exons=True)
        self.assertEqual(1, len(transcripts))
        transcript = transcripts[0]
        self.assertEqual((50, 210), (transcript.start, transcript.end))
        self.assertEqual([(50, 100), (150, 210)], [(e.start, e.end) for e in transcript.exons])
        self.assertTrue(transcript.translation.is_stored(self.db))

    def test_fetch_all_by_slice_reverse_strand(self):
        transcript = self.adaptor.fetch_all_by_slice(Slice('fake', 1, 300, strand=-1))[0]
        self.assertEqual((41, 201, -1), (transcript.start, transcript.end, transcript.strand))

    def test_fetch_all_by_slice_no_overlap(self):
        self.assertEqual([], self.adaptor.fetch_all_by_slice(Slice('fake', 300, 400)))

    def test_fetch_all_by_slice_unknown_region(self):
        with self.assertRaises(NotStoredError):
            self.adaptor.fetch_all_by_slice(Slice('other', 1, 100))

    def test_fetch_by_stable_id(self):
        self.assertEqual(self.dbid, self.adaptor.fetch_by_stable_id('ENST0001').dbid)
        self.assertIsNone(self.adaptor.fetch_by_stable_id('ENST9999'))

    def test_fetch_by_stable_id_latest_version(self):
        dbid = self.adaptor.store(build_coding_transcript(version=2))
        fetched = self.adaptor.fetch_by_stable_id('ENST0001')
        self.assertEqual((dbid, 2), (fetched.dbid, fetched.version))

    def test_fetch_by_translation(self):
        translation_id = self.transcript.translation.dbid
        self.assertEqual(self.dbid, self.adaptor.fetch_by_translation_id(translation_id).dbid)
        self.assertEqual(self.dbid, self.adaptor.fetch_by_translation_stable_id('ENSP0001').dbid)
        self.assertIsNone(self.adaptor.fetch_by_translation_stable_id('ENSP9999'))
        with self.assertRaises(NotSpecifiedError):
            self.adaptor.fetch_by_translation_id(None)

    def test_fetch_all_by_gene_id(self):
        self.assertEqual([self.dbid], [t.dbid for t in self.adaptor.fetch_all_by_gene_id(7)])
        self.assertEqual([], self.adaptor.fetch_all_by_gene_id(8))
        transcripts = self.adaptor.fetch_all_by_gene_id(7, Slice('fake', 51, 400))
        self.assertEqual([(50, 210)], [(t.start, t.end) for t in transcripts])
        self.assertEqual([], self.adaptor.fetch_all_by_gene_id(7, Slice('other', 1, 400)))

    def test_fetch_all_by_external_name(self):
        self.assertEqual([self.dbid], [t.dbid for t in self.adaptor.fetch_all_by_external_name('TP53')])
        self.assertEqual([self.dbid], [t.dbid for t in self.adaptor.fetch_all_by_external_name('HGNC:11998')])
        self.assertEqual([], self.adaptor.fetch_all_by_external_name('P04637'))

    def test_fetch_all_by_exon_stable_id(self):
        self.assertEqual([self.dbid], [t.dbid for t in self.adaptor.fetch_all_by_exon_stable_id('ENSE0002')])
        self.assertEqual([], self.adaptor.fetch_all_by_exon_stable_id('ENSE9999'))

    def test_fetch_all_by_dbid_list(self):
        self.assertEqual([self.dbid], [t.dbid for t in self.adaptor.fetch_all_by_dbid_list([self.dbid, 99])])
        self.assertEqual([], self.adaptor.fetch_all_by_dbid_list([]))

    def test_list_ids(self):
        self.assertEqual([self.dbid], self.adaptor.list_dbids())
        self.assertEqual(['ENST0001'], self.adaptor.list_stable_ids())

    def test_update(self):
        fetched = self.adaptor.fetch_by_dbid(self.dbid)
        fetched.biotype = 'nonsense_mediated_decay'
        fetched.description = 'updated'
        self.assertEqual(1, self.adaptor.update(fetched))
        refetched = self.adaptor.fetch_by_dbid(self.dbid)
        self.assertEqual(('nonsense_mediated_decay', 'updated'), (refetched.biotype, refetched.description))

    def test_update_display_xref(self):
        fetched = self.adaptor.fetch_by_dbid(self.dbid).ensure_loaded(self.db, 'dbentries')
        fetched.display_xref = fetched.get_all_dbentries()[0]
        self.adaptor.update(fetched)
        self.assertEqual('TP53', self.adaptor.fetch_by_dbid(self.dbid).external_name)

    def test_update_not_stored_error(self):
        with self.assertRaises(NotStoredError):
            self.adaptor.update(build_coding_transcript())
        with self.assertRaises(TypeError):
            self.adaptor.update(None)


class TestRemove(AdaptorTestCase):

    def test_remove(self):
        transcript = build_coding_transcript()
        transcript.add_dbentry(DBEntry('HGNC:11998', 'HGNC', 'TP53'))
        transcript.add_attributes(Attribute(ATTRIB_CODE.RNA_EDIT, '5 5 AAA'))
        transcript.add_supporting_features(DnaAlignFeature(transcript.slice, 100, 150, 1, 'NM_000546.5', 1, 51))
        self.adaptor.store(transcript)
        self.adaptor.remove(transcript)
        self.assertIsNone(transcript.dbid)
        for table in [
            'transcript', 'transcript_stable_id', 'exon', 'exon_transcript', 'translation', 'object_xref',
            'transcript_attrib', 'transcript_supporting_feature'
        ]:
            self.assertEqual(0, self.count(table), table)
        # the cross-reference and the alignment are kept
        self.assertEqual(1, self.count('xref'))
        self.assertEqual(1, self.count('dna_align_feature'))

    def test_remove_fetched_transcript(self):
        dbid = self.adaptor.store(build_coding_transcript())
        self.adaptor.remove(self.adaptor.fetch_by_dbid(dbid))
        self.assertEqual([], self.adaptor.list_dbids())
        self.assertEqual([], self.db.exon_adaptor.list_dbids())

    def test_shared_exons_kept(self):
        first = build_coding_transcript()
        second = build_coding_transcript(stable_id='ENST0002')
        self.adaptor.store(first)
        self.adaptor.store(second)
        self.assertEqual([e.dbid for e in first.exons], [e.dbid for e in second.exons])
        self.assertEqual(2, self.count('exon'))

        self.adaptor.remove(first)
        self.assertEqual(2, self.count('exon'))
        self.assertEqual(1, self.count('translation'))
        self.assertEqual(
            ['ENSE0001', 'ENSE0002'],
            [e.stable_id for e in self.adaptor.fetch_by_stable_id('ENST0002').ensure_loaded(self.db).exons])

        self.adaptor.remove(second)
        self.assertEqual(0, self.count('exon'))

    def test_remove_not_stored_warning(self):
        with self.assertLogs(level='WARNING') as log:
            self.adaptor.remove(build_coding_transcript())
        self.assertIn('not stored in this database', log.output[0])

    def test_other_database(self):
        other = connect(db_path=':memory:')
        try:
            transcript = build_coding_transcript()
            self.adaptor.store(transcript)
            self.assertFalse(transcript.is_stored(other))
            with self.assertLogs(level='WARNING'):
                other.transcript_adaptor.remove(transcript)
            self.assertEqual(1, self.count('transcript'))
        finally:
            other.close()
