from .base import BaseFeatureAdaptor
from ..annotate.genomic import Exon
from ..error import IncompleteRecordError
from ..util import LOG

COLUMNS = (
    'e.exon_id, e.seq_region_id, e.seq_region_start, e.seq_region_end, e.seq_region_strand, e.phase, e.end_phase, '
    'esi.stable_id, esi.version'
)
TABLES = 'exon e LEFT JOIN exon_stable_id esi ON esi.exon_id = e.exon_id'


class ExonAdaptor(BaseFeatureAdaptor):

    def _from_row(self, row, dest_slice=None, cache=None):
        slice, start, end, strand = self._row_slice(row, dest_slice, cache)
        return Exon(
            start, end, strand,
            slice=slice,
            phase=row['phase'],
            end_phase=row['end_phase'],
            stable_id=row['stable_id'],
            version=row['version'],
            dbid=row['exon_id'],
            adaptor=self
        )

    def fetch_by_dbid(self, dbid):
        """
        Returns:
            Exon: the exon on a slice of its entire sequence region or None if there is no exon with this id
        """
        row = self.dbc.fetch_one('SELECT {} FROM {} WHERE e.exon_id = ?'.format(COLUMNS, TABLES), (dbid, ))
        return self._from_row(row) if row else None

    def fetch_all_by_transcript(self, transcript):
        """
        Returns:
            :class:`list` of :class:`Exon`: the exons of a stored transcript in transcript order (by rank), positioned
            on the slice of the transcript
        """
        rows = self.dbc.fetch_all(
            'SELECT {} FROM {} JOIN exon_transcript et ON et.exon_id = e.exon_id '
            'WHERE et.transcript_id = ? ORDER BY et.rank'.format(COLUMNS, TABLES), (transcript.dbid, ))
        cache = {}
        return [self._from_row(row, transcript.slice, cache) for row in rows]

    def find_existing(self, exon):
        """
        Returns:
            int: the id of a stored exon with the same position, phases and stable id. None if there is none
        """
        seq_region_id, start, end, strand = self._pre_store(exon)
        row = self.dbc.fetch_one(
            'SELECT e.exon_id FROM {} WHERE e.seq_region_id = ? AND e.seq_region_start = ? AND e.seq_region_end = ? '
            'AND e.seq_region_strand = ? AND e.phase = ? AND e.end_phase = ? AND esi.stable_id IS ?'.format(TABLES),
            (seq_region_id, start, end, strand, exon.phase, exon.end_phase, exon.stable_id))
        return row['exon_id'] if row else None

    def store(self, exon):
        """
        store an exon. Exons which are already stored (or identical to a stored exon) are not stored again

        Returns:
            int: the exon id
        """
        if exon.is_stored(self.db):
            return exon.dbid
        dbid = self.find_existing(exon)
        if dbid is None:
            seq_region_id, start, end, strand = self._pre_store(exon)
            dbid = self.dbc.insert(
                'exon', seq_region_id=seq_region_id, seq_region_start=start, seq_region_end=end,
                seq_region_strand=strand, phase=exon.phase, end_phase=exon.end_phase)
            if exon.stable_id:
                self.dbc.insert(
                    'exon_stable_id', exon_id=dbid, stable_id=exon.stable_id,
                    version=exon.version if exon.version is not None else 1)
        exon.dbid = dbid
        exon.adaptor = self
        return dbid

    def count_transcripts(self, exon):
        """
        Returns:
            int: the number of transcripts the exon belongs to
        """
        return self.dbc.fetch_one(
            'SELECT COUNT(DISTINCT transcript_id) AS count FROM exon_transcript WHERE exon_id = ?',
            (exon.dbid, ))['count']

    def remove(self, exon):
        """
        delete an exon. The caller is responsible for checking that no other transcript uses the exon

        Raises:
            IncompleteRecordError: if the exon is not stored
        """
        if not exon.is_stored(self.db):
            raise IncompleteRecordError('cannot remove an exon that is not stored', exon)
        LOG('removing exon', exon.dbid, indent_level=1)
        self.dbc.update('DELETE FROM exon_stable_id WHERE exon_id = ?', (exon.dbid, ))
        self.dbc.update('DELETE FROM exon WHERE exon_id = ?', (exon.dbid, ))
        exon.dbid = None
        exon.adaptor = None

    def list_dbids(self):
        return self.dbc.fetch_column('SELECT exon_id FROM exon ORDER BY exon_id')
