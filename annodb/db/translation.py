from .base import BaseAdaptor
from ..annotate.protein import Translation
from ..constants import OBJECT_TYPE
from ..error import IncompleteRecordError
from ..util import LOG


class TranslationAdaptor(BaseAdaptor):
    """
    stores and fetches the translation of a transcript. The translation is stored after the exons since it refers to
    its start and end exons by id
    """

    def store(self, translation, transcript_id, exons=None):
        """
        store a translation together with its attributes and cross-references

        Args:
            translation (Translation): the translation to store
            transcript_id (int): the id of the stored transcript the translation belongs to
            exons (:class:`list` of :class:`Exon`): the exons of the transcript in transcript order. When given, the
                start and end exons and offsets are checked against them

        Returns:
            int: the translation id

        Raises:
            IncompleteRecordError: the start or end exon has not been stored or there is a stable id without a version
            TranslationBoundaryError: the translation does not fit the exons given
        """
        for exon in [translation.start_exon, translation.end_exon]:
            if not exon.is_stored(self.db):
                raise IncompleteRecordError('the start and end exons must be stored before the translation', exon)
        if exons is not None:
            translation.exon_indices(exons)
        if translation.stable_id and translation.version is None:
            raise IncompleteRecordError('translation stable id requires a version', translation.stable_id)
        dbid = self.dbc.insert(
            'translation', transcript_id=transcript_id, seq_start=translation.start,
            start_exon_id=translation.start_exon.dbid, seq_end=translation.end, end_exon_id=translation.end_exon.dbid)
        if translation.stable_id:
            self.dbc.insert(
                'translation_stable_id', translation_id=dbid, stable_id=translation.stable_id,
                version=translation.version)
        for dbentry in translation.get_all_dbentries():
            self.db.dbentry_adaptor.store(dbentry, dbid, OBJECT_TYPE.TRANSLATION)
        self.db.attribute_adaptor.store_on_translation(dbid, translation.get_all_attributes())
        translation.dbid = dbid
        translation.adaptor = self
        return dbid

    def fetch_by_transcript(self, transcript):
        """
        fetch the translation of a stored transcript. The start and end exons are resolved against the exons of the
        transcript so the translation shares them

        Returns:
            Translation: the translation or None for non-coding transcripts
        """
        row = self.dbc.fetch_one(
            'SELECT t.*, tsi.stable_id, tsi.version FROM translation t '
            'LEFT JOIN translation_stable_id tsi ON tsi.translation_id = t.translation_id '
            'WHERE t.transcript_id = ?', (transcript.dbid, ))
        if not row:
            return None
        exons = {e.dbid: e for e in transcript.get_all_exons()}
        start_exon = exons.get(row['start_exon_id'])
        end_exon = exons.get(row['end_exon_id'])
        if start_exon is None or end_exon is None:
            raise IncompleteRecordError(
                'translation exons are not part of the transcript', row['translation_id'], transcript)
        translation = Translation(
            start_exon, row['seq_start'], end_exon, row['seq_end'],
            stable_id=row['stable_id'],
            version=row['version'],
            dbid=row['translation_id'],
            adaptor=self
        )
        translation.add_attributes(*self.db.attribute_adaptor.fetch_all_by_translation(translation))
        for dbentry in self.db.dbentry_adaptor.fetch_all_by_translation(translation):
            translation.add_dbentry(dbentry)
        return translation

    def remove(self, translation):
        """
        delete a translation with its stable id, attributes and cross-reference links
        """
        if translation.dbid is None:
            return
        LOG('removing translation', translation.dbid, indent_level=1)
        self.db.dbentry_adaptor.remove_object_xrefs(translation.dbid, OBJECT_TYPE.TRANSLATION)
        self.db.attribute_adaptor.remove_from_translation(translation.dbid)
        self.dbc.update('DELETE FROM translation_stable_id WHERE translation_id = ?', (translation.dbid, ))
        self.dbc.update('DELETE FROM translation WHERE translation_id = ?', (translation.dbid, ))
        translation.dbid = None
        translation.adaptor = None
