from ..constants import ATTRIB_CODE


class Attribute:
    """
    a typed key-value annotation of a transcript or translation

    Example:
        >>> Attribute(ATTRIB_CODE.RNA_EDIT, '5 5 AAA')
        Attribute(_rna_edit='5 5 AAA')
    """

    def __init__(self, code, value, name=None, description=None):
        self.code = code
        self.value = str(value)
        self.name = name
        self.description = description

    def key(self):
        return (self.code, self.value)

    def __eq__(self, other):
        if not isinstance(other, Attribute):
            return False
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return 'Attribute({}={})'.format(self.code, repr(self.value))

    def to_dict(self):
        return {'code': self.code, 'value': self.value, 'name': self.name, 'description': self.description}


class SeqEdit:
    """
    a replacement of part of a sequence. Positions are the 0-based half-open interval being replaced, so an edit where
    start == end is an insertion and an edit without an alternate sequence is a deletion
    """

    def __init__(self, start, end, alt_seq='', code=None):
        self.start = int(start)
        self.end = int(end)
        if self.start > self.end:
            raise AttributeError('edit start > end is not allowed', self.start, self.end)
        self.alt_seq = alt_seq or ''
        self.code = code

    @classmethod
    def from_attribute(cls, attribute, one_based=False):
        """
        parse an edit from an attribute value of the form 'start end alt_seq'

        Args:
            attribute (Attribute): the attribute to parse
            one_based (bool): the positions are 1-based and inclusive (ex. peptide substitutions)

        Example:
            >>> SeqEdit.from_attribute(Attribute('_rna_edit', '10 12'))
            SeqEdit(10, 12, '')
            >>> SeqEdit.from_attribute(Attribute('_selenocysteine', '5 5 U'), one_based=True)
            SeqEdit(4, 5, 'U')
        """
        parts = attribute.value.split()
        if len(parts) < 2 or len(parts) > 3:
            raise ValueError('expected an edit of the form \'start end [alt_seq]\'', attribute.code, attribute.value)
        start, end = int(parts[0]), int(parts[1])
        alt_seq = parts[2] if len(parts) > 2 else ''
        if one_based:
            start -= 1
        return cls(start, end, alt_seq, code=attribute.code)

    @property
    def length_diff(self):
        """*int*: the change in sequence length caused by applying this edit"""
        return len(self.alt_seq) - (self.end - self.start)

    def apply(self, seq):
        """
        Example:
            >>> SeqEdit(5, 5, 'AAA').apply('CCCCCCCCCC')
            'CCCCCAAACCCCC'
        """
        return seq[:self.start] + self.alt_seq + seq[self.end:]

    def __repr__(self):
        return 'SeqEdit({}, {}, {})'.format(self.start, self.end, repr(self.alt_seq))


def apply_seq_edits(seq, edits, coding_start=None, coding_end=None):
    """
    applies a set of edits to a sequence, rightmost edit first so that the positions of the remaining edits are not
    shifted. The coding boundaries (1-based cdna positions) are shifted by the length change of any edit starting
    at or before the coding end (ends) or strictly before the coding start (starts)

    Args:
        seq (str): the unedited sequence
        edits (:class:`list` of :class:`SeqEdit`): the edits to apply
        coding_start (int): first coding position or None for non-coding sequences
        coding_end (int): last coding position or None for non-coding sequences

    Returns:
        :class:`tuple` of :class:`str`, :class:`int` and :class:`int`: the edited sequence, coding start and coding end

    Example:
        >>> apply_seq_edits('ATGCCCTAA', [SeqEdit(3, 3, 'GGG')], 1, 9)
        ('ATGGGGCCCTAA', 1, 12)
    """
    for edit in sorted(edits, key=lambda e: e.start, reverse=True):
        seq = edit.apply(seq)
        diff = edit.length_diff
        if diff == 0:
            continue
        if coding_end is not None and edit.start + 1 <= coding_end:
            coding_end += diff
        if coding_start is not None and edit.start + 1 < coding_start:
            coding_start += diff
    return seq, coding_start, coding_end


def rna_edits(attributes):
    """
    Returns:
        :class:`list` of :class:`SeqEdit`: the rna edits parsed from a list of attributes
    """
    return [SeqEdit.from_attribute(a) for a in attributes if a.code == ATTRIB_CODE.RNA_EDIT]
