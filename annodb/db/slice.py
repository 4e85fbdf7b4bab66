from .base import BaseAdaptor
from ..annotate.base import Slice
from ..constants import STRAND
from ..error import NotStoredError


class SliceAdaptor(BaseAdaptor):
    """
    registers sequence regions and creates slices of them
    """

    def _coord_system_id(self, name, version, create=False):
        row = self.dbc.fetch_one(
            'SELECT coord_system_id FROM coord_system WHERE name = ? AND version IS ?', (name, version))
        if row:
            return row['coord_system_id']
        if not create:
            return None
        return self.dbc.insert('coord_system', name=name, version=version)

    def store(self, slice):
        """
        register the sequence region of a slice (and its coordinate system). Does nothing if the region is already
        registered

        Returns:
            int: the sequence region id
        """
        with self.dbc.transaction():
            coord_system_id = self._coord_system_id(slice.coord_system, slice.version, create=True)
            row = self.dbc.fetch_one(
                'SELECT seq_region_id FROM seq_region WHERE name = ? AND coord_system_id = ?',
                (str(slice.seq_region_name), coord_system_id))
            if row:
                seq_region_id = row['seq_region_id']
            else:
                seq_region_id = self.dbc.insert(
                    'seq_region', name=str(slice.seq_region_name), coord_system_id=coord_system_id,
                    length=slice.seq_region_length)
        slice.adaptor = self
        return seq_region_id

    def get_seq_region_id(self, slice):
        """
        Raises:
            NotStoredError: if the sequence region of the slice has not been registered
        """
        row = self.dbc.fetch_one(
            'SELECT sr.seq_region_id FROM seq_region sr JOIN coord_system cs USING (coord_system_id) '
            'WHERE sr.name = ? AND cs.name = ? AND cs.version IS ?',
            (str(slice.seq_region_name), slice.coord_system, slice.version))
        if not row:
            raise NotStoredError('sequence region is not in the database', slice.name)
        return row['seq_region_id']

    def _from_row(self, row, start=None, end=None, strand=STRAND.POS):
        return Slice(
            row['name'],
            start if start is not None else 1,
            end if end is not None else row['length'],
            strand,
            coord_system=row['cs_name'],
            version=row['version'],
            seq_region_length=row['length'],
            adaptor=self
        )

    def fetch_by_region(self, seq_region_name, start=None, end=None, strand=STRAND.POS, coord_system='chromosome',
                        version=None):
        """
        Returns:
            Slice: the slice of the region or None if the sequence region is not in the database

        Example:
            >>> db.slice_adaptor.fetch_by_region('1', 1000, 2000)
            Slice(chromosome::1:1000:2000:1)
        """
        row = self.dbc.fetch_one(
            'SELECT sr.name, sr.length, cs.name AS cs_name, cs.version FROM seq_region sr '
            'JOIN coord_system cs USING (coord_system_id) WHERE sr.name = ? AND cs.name = ? AND cs.version IS ?',
            (str(seq_region_name), coord_system, version))
        if not row:
            return None
        return self._from_row(row, start, end, strand)

    def fetch_by_seq_region_id(self, seq_region_id):
        """
        Returns:
            Slice: a slice of the entire sequence region

        Raises:
            NotStoredError: if there is no sequence region with the given id
        """
        row = self.dbc.fetch_one(
            'SELECT sr.name, sr.length, cs.name AS cs_name, cs.version FROM seq_region sr '
            'JOIN coord_system cs USING (coord_system_id) WHERE sr.seq_region_id = ?', (seq_region_id, ))
        if not row:
            raise NotStoredError('no sequence region with the given id', seq_region_id)
        return self._from_row(row)
