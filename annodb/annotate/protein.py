from copy import copy as _copy

from .attribute import apply_seq_edits, SeqEdit
from .xref import DBEntry
from ..constants import ATTRIB_CODE
from ..error import TranslationBoundaryError


class Translation:
    """
    the coding region of a transcript, defined by the exon (and 1-based position within that exon) where translation
    starts and ends
    """

    def __init__(
            self, start_exon, start, end_exon, end,
            stable_id=None,
            version=None,
            attributes=None,
            dbentries=None,
            dbid=None,
            adaptor=None):
        """
        Args:
            start_exon (Exon): the exon containing the first base of the start codon
            start (int): the position of the first coding base within the start exon (1-based)
            end_exon (Exon): the exon containing the last coding base
            end (int): the position of the last coding base within the end exon (1-based)
            stable_id (str): the stable identifier ex. ENSP00000269305
            version (int): the version of the stable identifier

        Example:
            >>> Translation(exon1, 10, exon2, 50)
        """
        self.start_exon = start_exon
        self.start = int(start)
        self.end_exon = end_exon
        self.end = int(end)
        self.stable_id = stable_id
        self.version = version
        self.attributes = [] if attributes is None else list(attributes)
        self.dbentries = [] if dbentries is None else list(dbentries)
        self.dbid = dbid
        self.adaptor = adaptor

    def is_stored(self, db):
        if self.dbid is None or self.adaptor is None:
            return False
        return self.adaptor.db is db

    def copy(self):
        """
        Returns:
            Translation: a shallow copy. The exons are shared with this translation
        """
        new_translation = _copy(self)
        new_translation.attributes = list(self.attributes)
        new_translation.dbentries = list(self.dbentries)
        return new_translation

    def get_all_attributes(self, code=None):
        if code is None:
            return list(self.attributes)
        return [a for a in self.attributes if a.code == code]

    def add_attributes(self, *attributes):
        self.attributes.extend(attributes)

    def get_all_dbentries(self):
        return list(self.dbentries)

    def add_dbentry(self, dbentry):
        if not isinstance(dbentry, DBEntry):
            raise TypeError('expected a DBEntry', dbentry)
        self.dbentries.append(dbentry)

    def exon_indices(self, exons):
        """
        find the start and end exons among the ordered exons of a transcript and check the offsets against them

        Args:
            exons (:class:`list` of :class:`Exon`): the exons of the transcript, in transcript order

        Returns:
            :class:`tuple` of :class:`int`: the index of the start exon and the index of the end exon

        Raises:
            TranslationBoundaryError: either exon is not one of the exons given, the start exon comes after the end
                exon or an offset is outside of its exon
        """
        indices = []
        for label, exon, offset in [('start', self.start_exon, self.start), ('end', self.end_exon, self.end)]:
            for index, candidate in enumerate(exons):
                if candidate is exon:
                    break
            else:
                raise TranslationBoundaryError(
                    'translation {} exon is not an exon of the transcript'.format(label), exon)
            if offset < 1 or offset > len(exon):
                raise TranslationBoundaryError(
                    'translation {} is outside of the exon'.format(label), offset, exon, len(exon))
            indices.append(index)
        if indices[0] > indices[1]:
            raise TranslationBoundaryError(
                'translation start exon comes after the end exon', self.start_exon, self.end_exon)
        return tuple(indices)

    def get_all_seq_edits(self):
        return [
            SeqEdit.from_attribute(a, one_based=True)
            for a in self.get_all_attributes(ATTRIB_CODE.SELENOCYSTEINE)
        ]

    def modify_translation(self, peptide):
        """
        applies the post-translational substitutions (selenocysteines) to a peptide sequence

        Args:
            peptide (str): the translated amino acid sequence

        Returns:
            str: the modified peptide

        Example:
            >>> translation.add_attributes(Attribute(ATTRIB_CODE.SELENOCYSTEINE, '2 2 U'))
            >>> translation.modify_translation('MCK')
            'MUK'
        """
        peptide, _, _ = apply_seq_edits(str(peptide), self.get_all_seq_edits())
        return peptide

    def display_id(self):
        return self.stable_id or ''

    def __repr__(self):
        return 'Translation({}, start={}, end={})'.format(self.stable_id or self.dbid, self.start, self.end)
