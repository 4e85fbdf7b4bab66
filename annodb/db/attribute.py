from .base import BaseAdaptor
from ..annotate.attribute import Attribute


class AttributeAdaptor(BaseAdaptor):
    """
    stores and fetches the typed attributes of transcripts and translations. Attribute types are registered the first
    time an attribute with a new code is stored
    """

    def _attrib_type_id(self, attribute):
        row = self.dbc.fetch_one('SELECT attrib_type_id FROM attrib_type WHERE code = ?', (attribute.code, ))
        if row:
            return row['attrib_type_id']
        return self.dbc.insert(
            'attrib_type', code=attribute.code, name=attribute.name, description=attribute.description)

    def _store(self, table, id_column, object_id, attributes):
        for attribute in attributes:
            self.dbc.insert(
                table, attrib_type_id=self._attrib_type_id(attribute), value=attribute.value,
                **{id_column: object_id})

    def _fetch_all(self, table, id_column, object_id):
        rows = self.dbc.fetch_all(
            'SELECT at.code, at.name, at.description, a.value FROM {0} a '
            'JOIN attrib_type at ON at.attrib_type_id = a.attrib_type_id '
            'WHERE a.{1} = ? ORDER BY a.rowid'.format(table, id_column), (object_id, ))
        return [Attribute(row['code'], row['value'], name=row['name'], description=row['description']) for row in rows]

    def store_on_transcript(self, transcript_id, attributes):
        self._store('transcript_attrib', 'transcript_id', transcript_id, attributes)

    def store_on_translation(self, translation_id, attributes):
        self._store('translation_attrib', 'translation_id', translation_id, attributes)

    def fetch_all_by_transcript(self, transcript):
        """
        Returns:
            :class:`list` of :class:`Attribute`: the attributes of a stored transcript in the order they were stored
        """
        return self._fetch_all('transcript_attrib', 'transcript_id', transcript.dbid)

    def fetch_all_by_translation(self, translation):
        return self._fetch_all('translation_attrib', 'translation_id', translation.dbid)

    def remove_from_transcript(self, transcript_id):
        return self.dbc.update('DELETE FROM transcript_attrib WHERE transcript_id = ?', (transcript_id, ))

    def remove_from_translation(self, translation_id):
        return self.dbc.update('DELETE FROM translation_attrib WHERE translation_id = ?', (translation_id, ))
