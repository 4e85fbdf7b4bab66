from .base import BaseFeatureAdaptor
from ..annotate.support import DnaAlignFeature, ProteinAlignFeature
from ..constants import FEATURE_TYPE
from ..error import UnsupportedTypeError

FEATURE_CLASSES = {
    FEATURE_TYPE.DNA_ALIGN: DnaAlignFeature,
    FEATURE_TYPE.PROTEIN_ALIGN: ProteinAlignFeature
}


class SupportingFeatureAdaptor(BaseFeatureAdaptor):
    """
    stores the alignments which support a transcript and the links between them and the transcript
    """

    @classmethod
    def feature_type(cls, feature):
        """
        Returns:
            FEATURE_TYPE: the table the feature is stored in

        Raises:
            UnsupportedTypeError: the feature is neither a dna nor a protein alignment
        """
        for feature_type, feature_class in FEATURE_CLASSES.items():
            if isinstance(feature, feature_class):
                return feature_type
        raise UnsupportedTypeError('supporting feature must be a dna or protein alignment feature', feature)

    def _store_feature(self, feature, feature_type):
        if feature.is_stored(self.db):
            return feature.dbid
        seq_region_id, start, end, strand = self._pre_store(feature)
        dbid = self.dbc.insert(
            feature_type, seq_region_id=seq_region_id, seq_region_start=start, seq_region_end=end,
            seq_region_strand=strand, hit_name=feature.hit_name, hit_start=feature.hit_start,
            hit_end=feature.hit_end, hit_strand=feature.hit_strand, score=feature.score, evalue=feature.evalue,
            perc_ident=feature.percent_id, cigar_line=feature.cigar_line)
        feature.dbid = dbid
        feature.adaptor = self
        return dbid

    def store(self, transcript_id, features):
        """
        store the supporting features of a transcript. Features are stored first if they are not already stored

        Args:
            transcript_id (int): the id of the stored transcript
            features (:class:`list` of :class:`BaseAlignFeature`): the supporting features

        Raises:
            UnsupportedTypeError: if any of the features is not a dna or protein alignment. Nothing is stored
        """
        feature_types = [self.feature_type(f) for f in features]
        for feature, feature_type in zip(features, feature_types):
            dbid = self._store_feature(feature, feature_type)
            self.dbc.execute(
                'INSERT OR IGNORE INTO transcript_supporting_feature (transcript_id, feature_type, feature_id) '
                'VALUES (?, ?, ?)', (transcript_id, feature_type, dbid))

    def _from_row(self, row, feature_type, dest_slice=None, cache=None):
        slice, start, end, strand = self._row_slice(row, dest_slice, cache)
        return FEATURE_CLASSES[feature_type](
            slice, start, end, strand,
            hit_name=row['hit_name'],
            hit_start=row['hit_start'],
            hit_end=row['hit_end'],
            hit_strand=row['hit_strand'],
            score=row['score'],
            percent_id=row['perc_ident'],
            evalue=row['evalue'],
            cigar_line=row['cigar_line'],
            dbid=row['feature_id'],
            adaptor=self
        )

    def fetch_all_by_transcript(self, transcript):
        """
        Returns:
            :class:`list` of :class:`BaseAlignFeature`: the features supporting a stored transcript, positioned on
            the slice of the transcript
        """
        features = []
        cache = {}
        for feature_type in sorted(FEATURE_CLASSES):
            rows = self.dbc.fetch_all(
                'SELECT f.*, tsf.feature_id FROM transcript_supporting_feature tsf '
                'JOIN {0} f ON f.{0}_id = tsf.feature_id '
                'WHERE tsf.transcript_id = ? AND tsf.feature_type = ? ORDER BY tsf.rowid'.format(feature_type),
                (transcript.dbid, feature_type))
            features.extend([self._from_row(row, feature_type, transcript.slice, cache) for row in rows])
        return features

    def remove_from_transcript(self, transcript_id):
        """
        delete the links between a transcript and its supporting features. The features themselves are kept
        """
        return self.dbc.update(
            'DELETE FROM transcript_supporting_feature WHERE transcript_id = ?', (transcript_id, ))
