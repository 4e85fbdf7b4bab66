from ..constants import STRAND
from ..error import NotSpecifiedError


class BaseAdaptor:
    """
    base class for adaptors. Adaptors are created by (and hold a reference back to) the :class:`DBAdaptor`
    """

    def __init__(self, db):
        self.db = db

    @property
    def dbc(self):
        """:class:`~annodb.db.store.RowStore`: the connection the adaptor reads and writes with"""
        return self.db.store


class BaseFeatureAdaptor(BaseAdaptor):
    """
    base class for the adaptors of features positioned on a sequence region. Features are stored in absolute sequence
    region coordinates and converted to the coordinates of the requested slice when fetched
    """

    def _pre_store(self, feature):
        """
        Returns:
            :class:`tuple` of :class:`int`: the sequence region id, start, end and strand to store the feature with

        Raises:
            NotSpecifiedError: the feature is not positioned on a slice
            NotStoredError: the sequence region of the slice is not in the database
        """
        if feature.slice is None:
            raise NotSpecifiedError('cannot store a feature without a slice', feature)
        seq_region_id = self.db.slice_adaptor.get_seq_region_id(feature.slice)
        return seq_region_id, feature.seq_region_start, feature.seq_region_end, feature.seq_region_strand

    @classmethod
    def to_slice_coordinates(cls, slice, start, end, strand):
        """
        converts sequence region coordinates to be relative to a slice

        Returns:
            :class:`tuple` of :class:`int`: the start, end and strand relative to the slice

        Example:
            >>> BaseFeatureAdaptor.to_slice_coordinates(Slice('1', 101, 200, -1), 111, 120, 1)
            (81, 90, -1)
        """
        if slice.strand == STRAND.POS:
            return start - slice.start + 1, end - slice.start + 1, strand
        return slice.end - end + 1, slice.end - start + 1, strand * -1

    @classmethod
    def on_slice(cls, slice, start, end):
        """
        Returns:
            bool: True if a region (in slice coordinates) overlaps the slice
        """
        return end >= 1 and start <= slice.length()

    def _row_slice(self, row, dest_slice=None, cache=None):
        """
        Returns:
            :class:`tuple`: the slice, start, end and strand of a feature row. None if the feature is not on the
            destination slice
        """
        start, end, strand = row['seq_region_start'], row['seq_region_end'], row['seq_region_strand']
        if dest_slice is None:
            cache = {} if cache is None else cache
            seq_region_id = row['seq_region_id']
            if seq_region_id not in cache:
                cache[seq_region_id] = self.db.slice_adaptor.fetch_by_seq_region_id(seq_region_id)
            return cache[seq_region_id], start, end, strand
        start, end, strand = self.to_slice_coordinates(dest_slice, start, end, strand)
        return dest_slice, start, end, strand

    def _slice_constraint(self, slice, alias=None):
        """
        Returns:
            :class:`tuple` of :class:`str` and :class:`list`: the where clause and parameters selecting features which
            overlap the slice
        """
        seq_region_id = self.db.slice_adaptor.get_seq_region_id(slice)
        prefix = '{}.'.format(alias) if alias else ''
        return (
            '{0}seq_region_id = ? AND {0}seq_region_start <= ? AND {0}seq_region_end >= ?'.format(prefix),
            [seq_region_id, slice.end, slice.start]
        )
