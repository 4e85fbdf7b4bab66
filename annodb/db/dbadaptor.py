from .attribute import AttributeAdaptor
from .dbentry import DBEntryAdaptor
from .exon import ExonAdaptor
from .slice import SliceAdaptor
from .store import RowStore
from .support import SupportingFeatureAdaptor
from .transcript import TranscriptAdaptor
from .translation import TranslationAdaptor


class DBAdaptor:
    """
    holds the connection to an annotation database and one adaptor of each type. Objects fetched or stored through
    any of the adaptors are considered stored in this database

    Example:
        >>> db = DBAdaptor(RowStore(':memory:'))
        >>> db.transcript_adaptor.fetch_by_stable_id('ENST00000269305')
    """

    def __init__(self, store):
        self.store = store
        self.slice_adaptor = SliceAdaptor(self)
        self.exon_adaptor = ExonAdaptor(self)
        self.translation_adaptor = TranslationAdaptor(self)
        self.dbentry_adaptor = DBEntryAdaptor(self)
        self.attribute_adaptor = AttributeAdaptor(self)
        self.supporting_feature_adaptor = SupportingFeatureAdaptor(self)
        self.transcript_adaptor = TranscriptAdaptor(self)

    @classmethod
    def from_path(cls, db_path=':memory:', foreign_keys=False):
        return cls(RowStore(db_path, foreign_keys=foreign_keys))

    def close(self):
        self.store.close()

    def __enter__(self):
        return self

    def __exit__(self, *pos):
        self.close()
