import os
from unittest.mock import patch

import pytest

from annodb.constants import ATTRIB_CODE, cast_boolean, Namespace, reverse_complement, STRAND, translate


class TestConstants:
    def test_reverse_complement(self):
        assert reverse_complement('CGAT') == 'ATCG'
        assert reverse_complement('') == ''

    def test_reverse_complement_error(self):
        with pytest.raises(ValueError):
            reverse_complement('AT-G')

    def test_translate(self):
        seq = 'ATG' 'AAT' 'TCT' 'GGA' 'TGA'
        translated_seq = translate(seq, 0)
        assert translated_seq == 'MNSG*'  # ATG AAT TCT GGA TGA
        translated_seq = translate(seq, 1)
        assert translated_seq == '*ILD'  # A TGA ATT CTG GAT GA
        translated_seq = translate(seq, 2)
        assert translated_seq == 'EFWM'  # AT GAA TTC TGG ATG A

    def test_strand_enforce(self):
        assert STRAND.enforce(-1) == -1
        with pytest.raises(KeyError):
            STRAND.enforce(0)

    def test_reverse(self):
        assert ATTRIB_CODE.reverse('_rna_edit') == 'RNA_EDIT'
        with pytest.raises(KeyError):
            ATTRIB_CODE.reverse('_other')

    def test_cast_boolean(self):
        assert cast_boolean('yes')
        assert not cast_boolean('F')
        with pytest.raises(TypeError):
            cast_boolean('maybe')


class TestNamespace:
    def test_get_default(self):
        nspace = Namespace(thing=1)
        assert nspace.get('thing', 2) == 1
        assert nspace.get('other', 2) == 2
        with pytest.raises(AttributeError):
            nspace.get('other')

    def test_cannot_respecify(self):
        with pytest.raises(AttributeError):
            Namespace('thing', thing=1)

    def test_env_name(self):
        nspace = Namespace(db_path=':memory:')
        assert nspace.get_env_name('db_path') == 'ANNODB_DB_PATH'
        nspace = Namespace(db_path=':memory:', _env_prefix='OTHER')
        assert nspace.get_env_name('db_path') == 'OTHER_DB_PATH'

    def test_env_override_only_when_overwritable(self):
        nspace = Namespace()
        nspace.add('limit', 10, env_overwritable=True)
        nspace.add('fixed', 10)
        with patch.dict(os.environ, {'ANNODB_LIMIT': '20', 'ANNODB_FIXED': '20'}):
            assert nspace.limit == 20
            assert nspace.fixed == 10
        assert nspace.limit == 10

    def test_env_listable(self):
        nspace = Namespace()
        nspace.add('sizes', [], cast_type=int, listable=True, nullable=True, env_overwritable=True)
        with patch.dict(os.environ, {'ANNODB_SIZES': '1,2;none'}):
            assert nspace.sizes == [1, 2, None]

    def test_parse_listable_string(self):
        assert Namespace.parse_listable_string('1,2,3', int) == [1, 2, 3]
        assert Namespace.parse_listable_string('', int) == []

    def test_define(self):
        nspace = Namespace()
        nspace.add('limit', 10, defn='the limit')
        assert nspace.define('limit') == 'the limit'
        assert nspace.define('other', None) is None
        with pytest.raises(KeyError):
            nspace.define('other')

    def test_call(self):
        assert STRAND(1) == 1
        with pytest.raises(TypeError):
            STRAND(2)
