"""
reading and writing transcripts. Transcripts are fetched lazily: the transcript row is read immediately and the
exons, translation, attributes, cross-references and supporting features are read the first time they are requested
with :func:`~annodb.annotate.genomic.Transcript.ensure_loaded`
"""
from .base import BaseFeatureAdaptor
from ..annotate.genomic import Transcript
from ..annotate.xref import DBEntry
from ..constants import OBJECT_TYPE, TRANSCRIPT_KIND
from ..error import IncompleteRecordError, NotSpecifiedError, NotStoredError, UnsupportedTypeError
from ..util import LOG

COLUMNS = (
    't.transcript_id, t.seq_region_id, t.seq_region_start, t.seq_region_end, t.seq_region_strand, t.gene_id, '
    't.display_xref_id, tsi.stable_id, tsi.version, t.description, t.biotype, t.confidence, '
    'x.dbprimary_acc, x.display_label, x.version AS xref_version, x.description AS xref_description, '
    'exdb.db_name, exdb.db_release, exdb.status'
)
TABLES = (
    'transcript t '
    'LEFT JOIN transcript_stable_id tsi ON tsi.transcript_id = t.transcript_id '
    'LEFT JOIN xref x ON x.xref_id = t.display_xref_id '
    'LEFT JOIN external_db exdb ON exdb.external_db_id = x.external_db_id'
)


def _check_transcript(transcript):
    if not isinstance(transcript, Transcript):
        raise TypeError('expected a Transcript', transcript)
    if transcript.kind != TRANSCRIPT_KIND.REGULAR:
        raise UnsupportedTypeError(
            'the transcript adaptor can only store and remove regular transcripts', transcript.kind, transcript)


class TranscriptAdaptor(BaseFeatureAdaptor):

    def _from_row(self, row, dest_slice=None, cache=None):
        slice, start, end, strand = self._row_slice(row, dest_slice, cache)
        display_xref = None
        if row['display_xref_id'] is not None and row['db_name'] is not None:
            display_xref = DBEntry(
                row['dbprimary_acc'],
                row['db_name'],
                display_id=row['display_label'],
                version=row['xref_version'],
                description=row['xref_description'],
                status=row['status'],
                release=row['db_release'],
                dbid=row['display_xref_id'],
                adaptor=self.db.dbentry_adaptor
            )
        return Transcript(
            slice=slice,
            start=start,
            end=end,
            strand=strand,
            stable_id=row['stable_id'],
            version=row['version'],
            biotype=row['biotype'],
            confidence=row['confidence'],
            description=row['description'],
            display_xref=display_xref,
            gene_id=row['gene_id'],
            dbid=row['transcript_id'],
            adaptor=self,
            lazy=True
        )

    def _fetch_all(self, constraint='', params=(), dest_slice=None):
        sql = 'SELECT {} FROM {}'.format(COLUMNS, TABLES)
        if constraint:
            sql += ' WHERE ' + constraint
        sql += ' ORDER BY t.transcript_id'
        cache = {}
        return [self._from_row(row, dest_slice, cache) for row in self.dbc.fetch_all(sql, params)]

    def _fetch_one(self, constraint, params=()):
        transcripts = self._fetch_all(constraint, params)
        return transcripts[0] if transcripts else None

    # fetching
    def fetch_by_dbid(self, dbid):
        """
        Returns:
            Transcript: the transcript on a slice of its entire sequence region or None if there is no transcript
            with this id
        """
        return self._fetch_one('t.transcript_id = ?', (dbid, ))

    def fetch_all_by_dbid_list(self, dbids):
        """
        Returns:
            :class:`list` of :class:`Transcript`: the transcripts for a list of ids. Ids without a transcript are
            ignored
        """
        dbids = sorted(set(dbids))
        if not dbids:
            return []
        return self._fetch_all('t.transcript_id IN ({})'.format(', '.join(['?' for i in dbids])), dbids)

    def fetch_by_stable_id(self, stable_id):
        """
        Returns:
            Transcript: the latest version of the transcript with the stable id or None
        """
        row = self.dbc.fetch_one(
            'SELECT transcript_id FROM transcript_stable_id WHERE stable_id = ? ORDER BY version DESC',
            (stable_id, ))
        return self.fetch_by_dbid(row['transcript_id']) if row else None

    def fetch_by_translation_stable_id(self, stable_id):
        """
        Returns:
            Transcript: the transcript whose translation has the given stable id or None
        """
        row = self.dbc.fetch_one(
            'SELECT t.transcript_id FROM translation_stable_id tsi '
            'JOIN translation t ON t.translation_id = tsi.translation_id '
            'WHERE tsi.stable_id = ? ORDER BY tsi.version DESC', (stable_id, ))
        return self.fetch_by_dbid(row['transcript_id']) if row else None

    def fetch_by_translation_id(self, translation_id):
        """
        Raises:
            NotSpecifiedError: if no translation id is given
        """
        if not translation_id:
            raise NotSpecifiedError('translation id argument is required', translation_id)
        row = self.dbc.fetch_one('SELECT transcript_id FROM translation WHERE translation_id = ?', (translation_id, ))
        return self.fetch_by_dbid(row['transcript_id']) if row else None

    def fetch_all_by_gene_id(self, gene_id, slice=None):
        """
        Args:
            gene_id (int): the id of the gene the transcripts belong to
            slice (Slice): the slice to return the transcripts on. Defaults to their entire sequence region

        Returns:
            :class:`list` of :class:`Transcript`: the transcripts of the gene. Transcripts which cannot be transferred
            onto the slice are left out
        """
        transcripts = self._fetch_all('t.gene_id = ?', (gene_id, ))
        if slice is None:
            return transcripts
        result = []
        for transcript in transcripts:
            transferred = transcript.transfer(slice)
            if transferred is not None:
                result.append(transferred)
        return result

    def fetch_all_by_slice(self, slice, load_exons=False):
        """
        Args:
            slice (Slice): the region to fetch transcripts from
            load_exons (bool): load the exons and translations immediately rather than lazily

        Returns:
            :class:`list` of :class:`Transcript`: the transcripts overlapping the slice, positioned relative to it
        """
        constraint, params = self._slice_constraint(slice, 't')
        transcripts = [
            t for t in self._fetch_all(constraint, params, dest_slice=slice)
            if self.on_slice(slice, t.start, t.end)
        ]
        if load_exons:
            for transcript in transcripts:
                transcript.ensure_loaded(self.db, 'exons', 'translation')
        return transcripts

    def fetch_all_by_external_name(self, external_name):
        """
        Returns:
            :class:`list` of :class:`Transcript`: the transcripts linked to a cross-reference with the given accession
            or display label
        """
        return self.fetch_all_by_dbid_list(self.db.dbentry_adaptor.list_transcript_ids_by_extids(external_name))

    def fetch_by_display_label(self, label):
        """
        Returns:
            Transcript: the first transcript whose display cross-reference has the label or None
        """
        return self._fetch_one('x.display_label = ?', (label, ))

    def fetch_all_by_exon_stable_id(self, stable_id):
        """
        Returns:
            :class:`list` of :class:`Transcript`: the transcripts containing an exon with the stable id. Empty if there
            are none
        """
        dbids = self.dbc.fetch_column(
            'SELECT DISTINCT et.transcript_id FROM exon_transcript et '
            'JOIN exon_stable_id esi ON esi.exon_id = et.exon_id WHERE esi.stable_id = ?', (stable_id, ))
        return self.fetch_all_by_dbid_list(dbids)

    def list_dbids(self):
        return self.dbc.fetch_column('SELECT transcript_id FROM transcript ORDER BY transcript_id')

    def list_stable_ids(self):
        return self.dbc.fetch_column('SELECT DISTINCT stable_id FROM transcript_stable_id ORDER BY stable_id')

    # writing
    def _snapshot(self, transcript):
        objects = [transcript]
        objects.extend(transcript.get_all_exons())
        objects.extend(transcript.get_all_dbentries())
        objects.extend(transcript.get_all_supporting_features())
        translation = transcript.translation
        if translation is not None:
            objects.append(translation)
            objects.extend(translation.get_all_dbentries())
        if transcript.display_xref is not None:
            objects.append(transcript.display_xref)
        snapshot = [(obj, {'dbid': obj.dbid, 'adaptor': obj.adaptor}) for obj in objects]
        if translation is not None:
            snapshot.append((translation, {'start_exon': translation.start_exon, 'end_exon': translation.end_exon}))
        return snapshot

    @staticmethod
    def _restore(snapshot):
        for obj, values in snapshot:
            for attr, value in values.items():
                setattr(obj, attr, value)

    def _resolve_translation_exon(self, exon, exons, label):
        if exon is None:
            raise IncompleteRecordError('translation does not define a {} exon'.format(label))
        if exon.is_stored(self.db):
            return exon
        for candidate in exons:
            if candidate.hashkey() == exon.hashkey():
                return candidate
        raise IncompleteRecordError(
            'translation {} exon is not one of the exons of its transcript'.format(label), exon)

    def store(self, transcript, gene_id=None):
        """
        store a transcript with its exons, translation, cross-references, supporting features and attributes. The
        store is a single unit of work: if any part fails nothing is written and the identities assigned to the
        transcript and its parts are restored

        Args:
            transcript (Transcript): the transcript to store
            gene_id (int): the id of the gene the transcript belongs to

        Returns:
            int: the transcript id

        Raises:
            TypeError: the input is not a transcript
            UnsupportedTypeError: the transcript is a prediction transcript or has an unsupported supporting feature
            IncompleteRecordError: a stable id without a version or a translation exon which is not part of the
                transcript
            NotStoredError: the sequence region of the transcript is not in the database
        """
        _check_transcript(transcript)
        if transcript.is_stored(self.db):
            return transcript.dbid
        transcript.ensure_loaded(transcript.adaptor.db if transcript.adaptor is not None else self.db)
        if not transcript.get_all_exons():
            raise IncompleteRecordError('cannot store a transcript without exons', transcript)
        transcript.recalculate_coordinates()
        identities = self._snapshot(transcript)
        try:
            with self.dbc.transaction():
                return self._store(transcript, gene_id)
        except Exception:
            self._restore(identities)
            raise

    def _store(self, transcript, gene_id):
        exons = transcript.get_all_exons()
        for exon in exons:
            self.db.exon_adaptor.store(exon)

        if transcript.stable_id and transcript.version is None:
            raise IncompleteRecordError('transcript stable id requires a version', transcript.stable_id)

        seq_region_id, start, end, strand = self._pre_store(transcript)
        dbid = self.dbc.insert(
            'transcript', gene_id=gene_id, seq_region_id=seq_region_id, seq_region_start=start,
            seq_region_end=end, seq_region_strand=strand, biotype=transcript.biotype,
            confidence=transcript.confidence, description=transcript.description)
        LOG('stored transcript', transcript.display_id() or dbid, 'as', dbid, indent_level=1)

        translation = transcript.translation
        if translation is not None:
            translation.start_exon = self._resolve_translation_exon(translation.start_exon, exons, 'start')
            translation.end_exon = self._resolve_translation_exon(translation.end_exon, exons, 'end')
            transcript.translation = translation
            self.db.translation_adaptor.store(translation, dbid, exons)

        for dbentry in transcript.get_all_dbentries():
            self.db.dbentry_adaptor.store(dbentry, dbid, OBJECT_TYPE.TRANSCRIPT)

        display_xref = transcript.display_xref
        if display_xref is not None:
            if display_xref.is_stored(self.db):
                xref_id = display_xref.dbid
            else:
                xref_id = self.db.dbentry_adaptor.exists(display_xref)
            if xref_id is not None:
                self.dbc.update(
                    'UPDATE transcript SET display_xref_id = ? WHERE transcript_id = ?', (xref_id, dbid))
                display_xref.dbid = xref_id
                display_xref.adaptor = self.db.dbentry_adaptor
            else:
                LOG.warning(
                    'display xref {}:{} is not stored in the database. not storing the relationship to this '
                    'transcript'.format(display_xref.dbname, display_xref.display_id))
                display_xref.dbid = None
                display_xref.adaptor = None

        for rank, exon in enumerate(exons, start=1):
            self.dbc.insert('exon_transcript', exon_id=exon.dbid, transcript_id=dbid, rank=rank)

        if transcript.stable_id:
            self.dbc.insert(
                'transcript_stable_id', transcript_id=dbid, stable_id=transcript.stable_id,
                version=transcript.version)

        self.db.supporting_feature_adaptor.store(dbid, transcript.get_all_supporting_features())

        transcript.dbid = dbid
        transcript.adaptor = self
        self.db.attribute_adaptor.store_on_transcript(dbid, transcript.get_all_attributes())
        return dbid

    def remove(self, transcript):
        """
        delete a transcript. Its translation is deleted along with any exons which are not used by another transcript

        Raises:
            TypeError: the input is not a transcript
            UnsupportedTypeError: the transcript is a prediction transcript
        """
        _check_transcript(transcript)
        if not transcript.is_stored(self.db):
            LOG.warning('cannot remove transcript {}. it is not stored in this database'.format(transcript.dbid))
            return
        transcript.ensure_loaded(self.db, 'exons', 'translation')
        dbid = transcript.dbid
        with self.dbc.transaction():
            self.db.dbentry_adaptor.remove_object_xrefs(dbid, OBJECT_TYPE.TRANSCRIPT)
            if transcript.translation is not None:
                self.db.translation_adaptor.remove(transcript.translation)
            for exon in transcript.get_all_exons():
                if exon.dbid is not None and self.db.exon_adaptor.count_transcripts(exon) == 1:
                    self.db.exon_adaptor.remove(exon)
            self.dbc.update('DELETE FROM exon_transcript WHERE transcript_id = ?', (dbid, ))
            self.db.attribute_adaptor.remove_from_transcript(dbid)
            self.db.supporting_feature_adaptor.remove_from_transcript(dbid)
            self.dbc.update('DELETE FROM transcript_stable_id WHERE transcript_id = ?', (dbid, ))
            self.dbc.update('DELETE FROM transcript WHERE transcript_id = ?', (dbid, ))
        LOG('removed transcript', transcript.display_id() or dbid, indent_level=1)
        transcript.dbid = None
        transcript.adaptor = None

    def update(self, transcript):
        """
        rewrite the display cross-reference, description, biotype and confidence of a stored transcript

        Raises:
            NotStoredError: the transcript is not stored in this database
        """
        if not isinstance(transcript, Transcript):
            raise TypeError('expected a Transcript', transcript)
        if not transcript.is_stored(self.db):
            raise NotStoredError('cannot update a transcript which is not stored', transcript)
        display_xref = transcript.display_xref
        display_xref_id = display_xref.dbid if display_xref is not None else None
        return self.dbc.update(
            'UPDATE transcript SET display_xref_id = ?, description = ?, biotype = ?, confidence = ? '
            'WHERE transcript_id = ?',
            (display_xref_id, transcript.description, transcript.biotype, transcript.confidence, transcript.dbid))
