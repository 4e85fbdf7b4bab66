

class DBEntry:
    """
    a cross-reference from an internal object to a record in an external database (ex. HGNC, RefSeq, UniProt)
    """

    def __init__(
            self, primary_id, dbname, display_id=None,
            version='0',
            description=None,
            status=None,
            release=None,
            info_type=None,
            info_text=None,
            dbid=None,
            adaptor=None):
        """
        Args:
            primary_id (str): the accession in the external database
            dbname (str): the name of the external database
            display_id (str): the human readable label. defaults to the primary_id
            version (str): the version of the accession

        Example:
            >>> DBEntry('NM_000546', 'RefSeq_mRNA', 'TP53')
            DBEntry(RefSeq_mRNA:NM_000546, display_id=TP53)
        """
        self.primary_id = primary_id
        self.dbname = dbname
        self.display_id = display_id if display_id is not None else primary_id
        self.version = '0' if version is None else str(version)
        self.description = description
        self.status = status
        self.release = release
        self.info_type = info_type
        self.info_text = info_text
        self.dbid = dbid
        self.adaptor = adaptor

    def is_stored(self, db):
        if self.dbid is None or self.adaptor is None:
            return False
        return self.adaptor.db is db

    def key(self):
        return (self.dbname, self.primary_id, self.version)

    def __eq__(self, other):
        if not isinstance(other, DBEntry):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return 'DBEntry({}:{}, display_id={})'.format(self.dbname, self.primary_id, self.display_id)
