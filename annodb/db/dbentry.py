from .base import BaseAdaptor
from ..annotate.xref import DBEntry
from ..constants import OBJECT_TYPE
from ..error import NotStoredError
from ..util import LOG

COLUMNS = (
    'x.xref_id, x.dbprimary_acc, x.display_label, x.version, x.description, x.info_type, x.info_text, '
    'edb.db_name, edb.db_release, edb.status'
)
TABLES = 'xref x JOIN external_db edb ON edb.external_db_id = x.external_db_id'


class DBEntryAdaptor(BaseAdaptor):
    """
    stores and fetches cross-references (xrefs) and the links between them and transcripts or translations
    """

    def store_external_db(self, name, release=None, status=None):
        """
        register an external database. Cross-references can only be stored against registered external databases

        Returns:
            int: the external database id
        """
        row = self.dbc.fetch_one(
            'SELECT external_db_id FROM external_db WHERE db_name = ? AND db_release IS ?', (name, release))
        if row:
            return row['external_db_id']
        return self.dbc.insert('external_db', db_name=name, db_release=release, status=status)

    def _external_db_id(self, dbentry):
        if dbentry.release is not None:
            row = self.dbc.fetch_one(
                'SELECT external_db_id FROM external_db WHERE db_name = ? AND db_release = ?',
                (dbentry.dbname, dbentry.release))
        else:
            row = self.dbc.fetch_one(
                'SELECT external_db_id FROM external_db WHERE db_name = ? ORDER BY external_db_id', (dbentry.dbname, ))
        if not row:
            raise NotStoredError('external database is not registered', dbentry.dbname, dbentry.release)
        return row['external_db_id']

    def _from_row(self, row):
        return DBEntry(
            row['dbprimary_acc'],
            row['db_name'],
            display_id=row['display_label'],
            version=row['version'],
            description=row['description'],
            status=row['status'],
            release=row['db_release'],
            info_type=row['info_type'],
            info_text=row['info_text'],
            dbid=row['xref_id'],
            adaptor=self
        )

    def exists(self, dbentry):
        """
        Returns:
            int: the id of the stored cross-reference with the same accession, version and external database or None
        """
        row = self.dbc.fetch_one(
            'SELECT x.xref_id FROM {} WHERE x.dbprimary_acc = ? AND x.version = ? AND edb.db_name = ? '
            'ORDER BY x.xref_id'.format(TABLES),
            (dbentry.primary_id, dbentry.version, dbentry.dbname))
        return row['xref_id'] if row else None

    def store(self, dbentry, ensembl_id=None, object_type=OBJECT_TYPE.TRANSCRIPT):
        """
        store a cross-reference (if it is not already stored) and link it to an object

        Args:
            dbentry (DBEntry): the cross-reference
            ensembl_id (int): the id of the object to link to. No link is created when this is None
            object_type (OBJECT_TYPE): the type of the object to link to

        Returns:
            int: the cross-reference id

        Raises:
            NotStoredError: the external database of the cross-reference is not registered
        """
        if dbentry.is_stored(self.db):
            dbid = dbentry.dbid
        else:
            dbid = self.exists(dbentry)
            if dbid is None:
                external_db_id = self._external_db_id(dbentry)
                dbid = self.dbc.insert(
                    'xref', external_db_id=external_db_id, dbprimary_acc=dbentry.primary_id,
                    display_label=dbentry.display_id, version=dbentry.version, description=dbentry.description,
                    info_type=dbentry.info_type, info_text=dbentry.info_text)
            dbentry.dbid = dbid
            dbentry.adaptor = self
        if ensembl_id is not None:
            OBJECT_TYPE.enforce(object_type)
            self.dbc.execute(
                'INSERT OR IGNORE INTO object_xref (ensembl_id, ensembl_object_type, xref_id) VALUES (?, ?, ?)',
                (ensembl_id, object_type, dbid))
        return dbid

    def fetch_by_dbid(self, dbid):
        row = self.dbc.fetch_one('SELECT {} FROM {} WHERE x.xref_id = ?'.format(COLUMNS, TABLES), (dbid, ))
        return self._from_row(row) if row else None

    def _fetch_all_by_object(self, ensembl_id, object_type):
        rows = self.dbc.fetch_all(
            'SELECT {} FROM {} JOIN object_xref ox ON ox.xref_id = x.xref_id '
            'WHERE ox.ensembl_id = ? AND ox.ensembl_object_type = ? ORDER BY ox.object_xref_id'.format(COLUMNS, TABLES),
            (ensembl_id, object_type))
        return [self._from_row(row) for row in rows]

    def fetch_all_by_transcript(self, transcript):
        """
        Returns:
            :class:`list` of :class:`DBEntry`: the cross-references linked to a stored transcript
        """
        return self._fetch_all_by_object(transcript.dbid, OBJECT_TYPE.TRANSCRIPT)

    def fetch_all_by_translation(self, translation):
        return self._fetch_all_by_object(translation.dbid, OBJECT_TYPE.TRANSLATION)

    def list_transcript_ids_by_extids(self, name):
        """
        Returns:
            :class:`list` of :class:`int`: the ids of the transcripts linked to a cross-reference with the given
            accession or display label
        """
        return self.dbc.fetch_column(
            'SELECT DISTINCT ox.ensembl_id FROM object_xref ox JOIN xref x ON x.xref_id = ox.xref_id '
            'WHERE ox.ensembl_object_type = ? AND (x.dbprimary_acc = ? OR x.display_label = ?) '
            'ORDER BY ox.ensembl_id', (OBJECT_TYPE.TRANSCRIPT, name, name))

    def remove_object_xrefs(self, ensembl_id, object_type):
        """
        delete the links between an object and its cross-references. The cross-references themselves are kept

        Returns:
            int: the number of links deleted
        """
        count = self.dbc.update(
            'DELETE FROM object_xref WHERE ensembl_id = ? AND ensembl_object_type = ?', (ensembl_id, object_type))
        LOG('removed', count, 'cross-reference links for', object_type, ensembl_id, indent_level=1)
        return count
