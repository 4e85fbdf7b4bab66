import unittest

from annodb.annotate.attribute import apply_seq_edits, Attribute, rna_edits, SeqEdit
from annodb.constants import ATTRIB_CODE


class TestSeqEdit(unittest.TestCase):

    def test_from_attribute(self):
        edit = SeqEdit.from_attribute(Attribute(ATTRIB_CODE.RNA_EDIT, '10 12 A'))
        self.assertEqual(10, edit.start)
        self.assertEqual(12, edit.end)
        self.assertEqual('A', edit.alt_seq)
        self.assertEqual(-1, edit.length_diff)

    def test_from_attribute_deletion(self):
        edit = SeqEdit.from_attribute(Attribute(ATTRIB_CODE.RNA_EDIT, '10 12'))
        self.assertEqual('', edit.alt_seq)
        self.assertEqual(-2, edit.length_diff)

    def test_from_attribute_one_based(self):
        edit = SeqEdit.from_attribute(Attribute(ATTRIB_CODE.SELENOCYSTEINE, '5 5 U'), one_based=True)
        self.assertEqual(4, edit.start)
        self.assertEqual(5, edit.end)
        self.assertEqual('ACGTUAAA', edit.apply('ACGTGAAA'))

    def test_from_attribute_error(self):
        with self.assertRaises(ValueError):
            SeqEdit.from_attribute(Attribute(ATTRIB_CODE.RNA_EDIT, '10'))
        with self.assertRaises(ValueError):
            SeqEdit.from_attribute(Attribute(ATTRIB_CODE.RNA_EDIT, '10 11 A B'))

    def test_start_after_end_error(self):
        with self.assertRaises(AttributeError):
            SeqEdit(5, 4)

    def test_apply_insertion(self):
        self.assertEqual('CCCCCAAACCCCC', SeqEdit(5, 5, 'AAA').apply('CCCCCCCCCC'))

    def test_apply_substitution(self):
        self.assertEqual('CCGGCCCCCC', SeqEdit(2, 4, 'GG').apply('CCCCCCCCCC'))


class TestApplySeqEdits(unittest.TestCase):

    def test_no_edits(self):
        self.assertEqual(('ACGT', 1, 4), apply_seq_edits('ACGT', [], 1, 4))

    def test_insertion_inside_coding(self):
        self.assertEqual(('ATGGGGCCCTAA', 1, 12), apply_seq_edits('ATGCCCTAA', [SeqEdit(3, 3, 'GGG')], 1, 9))

    def test_insertion_before_coding(self):
        seq, start, end = apply_seq_edits('A' * 20, [SeqEdit(4, 4, 'CCC')], 10, 15)
        self.assertEqual(23, len(seq))
        self.assertEqual((13, 18), (start, end))

    def test_insertion_at_coding_start_shifts_end_only(self):
        # edit.start + 1 == coding start: the start is not moved but the end is
        seq, start, end = apply_seq_edits('A' * 20, [SeqEdit(9, 9, 'CCC')], 10, 15)
        self.assertEqual((10, 18), (start, end))

    def test_insertion_at_coding_end_shifts_end(self):
        seq, start, end = apply_seq_edits('A' * 20, [SeqEdit(14, 14, 'CCC')], 10, 15)
        self.assertEqual((10, 18), (start, end))

    def test_insertion_after_coding(self):
        seq, start, end = apply_seq_edits('A' * 20, [SeqEdit(15, 15, 'CCC')], 10, 15)
        self.assertEqual((10, 15), (start, end))

    def test_substitution_does_not_shift(self):
        seq, start, end = apply_seq_edits('A' * 20, [SeqEdit(2, 3, 'C')], 10, 15)
        self.assertEqual('AAC' + 'A' * 17, seq)
        self.assertEqual((10, 15), (start, end))

    def test_edits_applied_rightmost_first(self):
        edits = [SeqEdit(1, 2, ''), SeqEdit(5, 5, 'GG')]
        seq, start, end = apply_seq_edits('ACGTACGT', edits, None, None)
        self.assertEqual('AGTAGGCGT', seq)
        self.assertIsNone(start)
        self.assertIsNone(end)

    def test_deletion_before_coding(self):
        seq, start, end = apply_seq_edits('A' * 20, [SeqEdit(0, 3)], 10, 15)
        self.assertEqual((7, 12), (start, end))


class TestRnaEdits(unittest.TestCase):

    def test_only_rna_edit_attributes(self):
        attributes = [
            Attribute(ATTRIB_CODE.RNA_EDIT, '1 2 A'),
            Attribute('_other', '1 2 C'),
            Attribute(ATTRIB_CODE.RNA_EDIT, '3 3 GG'),
        ]
        edits = rna_edits(attributes)
        self.assertEqual(2, len(edits))
        self.assertEqual(['A', 'GG'], [e.alt_seq for e in edits])

    def test_attribute_equality(self):
        self.assertEqual(Attribute('_a', 1), Attribute('_a', '1'))
        self.assertNotEqual(Attribute('_a', 1), Attribute('_b', 1))
