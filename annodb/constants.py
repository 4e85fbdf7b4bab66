"""
controlled vocabularies and the small sequence helpers used throughout the annodb package
"""
import os
import re

from Bio.Seq import Seq


PROGNAME = 'annodb'


def cast_boolean(input_value):
    """
    Example:
        >>> cast_boolean('yes')
        True
        >>> cast_boolean('0')
        False
    """
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class Namespace:
    """
    a fixed set of named values. Used for the controlled vocabularies below and, through
    :class:`~annodb.util.WeakNamespace`, for settings which may be given in the environment

    Example:
        >>> nspace = Namespace(POS=1, NEG=-1)
        >>> nspace.NEG
        -1
        >>> nspace.enforce(0)
        Traceback (most recent call last):
        ....
        KeyError: ...
    """
    DELIM = r'[;,\s]+'
    """:class:`str`: separates the items of a listable value given in the environment"""

    def __init__(self, *pos, **kwargs):
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_nullable', set())
        object.__setattr__(self, '_listable', set())
        object.__setattr__(self, '_env_overwritable', set())
        object.__setattr__(self, '_env_prefix', kwargs.pop('_env_prefix', PROGNAME.upper()))

        for attr, value in [(k, k) for k in pos] + sorted(kwargs.items()):
            if attr in self._members:
                raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
            self.add(attr, value)

    def __repr__(self):
        members = sorted(['{}={}'.format(k, repr(v)) for k, v in self.items()])
        return '{}({})'.format(self.__class__.__name__, ', '.join(members))

    def get_env_name(self, attr):
        """
        Example:
            >>> Namespace(db_path=':memory:').get_env_name('db_path')
            'ANNODB_DB_PATH'
        """
        return '{}_{}'.format(self._env_prefix, attr).upper() if self._env_prefix else attr.upper()

    def get_env_var(self, attr):
        """
        the value of an attribute as given by its environment variable, cast to the type of the attribute

        Raises:
            KeyError: the environment variable is not set
        """
        env = os.environ[self.get_env_name(attr)].strip()
        cast_type = self._types.get(attr, str)
        if attr in self._listable:
            return self.parse_listable_string(env, cast_type, attr in self._nullable)
        if attr in self._nullable and env.lower() == 'none':
            return None
        return cast_type(env)

    @classmethod
    def parse_listable_string(cls, string, cast_type=str, nullable=False):
        """
        Example:
            >>> Namespace.parse_listable_string('1;2,None', int, True)
            [1, 2, None]
        """
        string = string.strip()
        if not string:
            return []
        return [
            None if nullable and val.lower() == 'none' else cast_type(val)
            for val in re.split(cls.DELIM, string)
        ]

    def is_env_overwritable(self, attr):
        return attr in self._env_overwritable

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            members = object.__getattribute__(self, '_members')
            if attr not in members:
                raise err
            if self.is_env_overwritable(attr):
                try:
                    return self.get_env_var(attr)
                except KeyError:
                    pass
            return members[attr]

    def __getitem__(self, key):
        return getattr(self, key)

    def __setattr__(self, attr, val):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        self._members[attr] = val

    def keys(self):
        return list(self._members)

    def values(self):
        return [self[k] for k in self._members]

    def items(self):
        return [(k, self[k]) for k in self._members]

    def get(self, key, *pos):
        """
        Example:
            >>> STRAND.get('POS', 0)
            1
            >>> STRAND.get('NS', 0)
            0
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. get takes a single \'default\' value argument')
        try:
            return self[key]
        except AttributeError as err:
            if pos:
                return pos[0]
            raise err

    def enforce(self, value):
        """
        Returns:
            the input value

        Raises:
            KeyError: the value is not a member of the namespace
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def reverse(self, value):
        """
        Raises:
            KeyError: the value is not assigned or is assigned to more than one key

        Example:
            >>> ATTRIB_CODE.reverse('_rna_edit')
            'RNA_EDIT'
        """
        result = [key for key in self._members if self[key] == value]
        if len(result) != 1:
            raise KeyError('could not reverse. value must be assigned to exactly one key', value, result)
        return result[0]

    def define(self, attr, *pos):
        """
        the definition of an attribute or a default (when given) if the attribute has no definition

        Raises:
            KeyError: the attribute has no definition and a default was not given
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. define takes a single \'default\' value argument')
        if attr in self._defns or not pos:
            return self._defns[attr]
        return pos[0]

    def add(self, attr, value, defn=None, cast_type=None, nullable=False, env_overwritable=False, listable=False):
        """
        Args:
            attr (str): name of the attribute being added
            value: the value of the attribute
            defn (str): the definition, used in generating documentation
            cast_type (callable): the function used to cast the environment variable (defaults to the value type)
            nullable (bool): the environment variable may be 'none'
            env_overwritable (bool): the attribute is overridden by its environment variable when it is set
            listable (bool): the environment variable is a delimited list of values
        """
        cast_type = cast_type or type(value)
        self._types[attr] = cast_boolean if cast_type == bool else cast_type
        if defn:
            self._defns[attr] = defn
        if nullable:
            self._nullable.add(attr)
        if env_overwritable:
            self._env_overwritable.add(attr)
        if listable:
            self._listable.add(attr)
        self[attr] = value

    def __setitem__(self, key, val):
        self.__setattr__(key, val)

    def __call__(self, value):
        try:
            return self.enforce(value)
        except KeyError:
            raise TypeError('Invalid value {} for {}. Must be a valid member: {}'.format(
                repr(value), self.__class__.__name__, self.values()))


CODON_SIZE = 3
""":class:`int`: the number of bases making up a codon"""

STOP_CODONS = ['TAG', 'TAA', 'TGA']
""":class:`list` of :class:`str`: the stop codons of the standard genetic code"""

UNKNOWN_BASE = 'N'
""":class:`str`: filler used where the sequence of an exon cannot be resolved"""

STRAND = Namespace(POS=1, NEG=-1)
""":class:`Namespace`: holds controlled vocabulary for allowed strand values

- ``POS``: the forward/positive strand
- ``NEG``: the reverse/negative strand
"""

ATTRIB_CODE = Namespace(RNA_EDIT='_rna_edit', SELENOCYSTEINE='_selenocysteine')
""":class:`Namespace`: attribute type codes with a special meaning to the sequence model

- ``RNA_EDIT``: a post-transcriptional edit of the spliced sequence
- ``SELENOCYSTEINE``: a post-translational substitution of the peptide
"""

FEATURE_TYPE = Namespace(DNA_ALIGN='dna_align_feature', PROTEIN_ALIGN='protein_align_feature')
""":class:`Namespace`: the supporting evidence feature kinds (also the name of the table they are stored in)"""

TRANSCRIPT_KIND = Namespace(REGULAR='regular', PREDICTION='prediction')
""":class:`Namespace`: the variants of transcript. Prediction transcripts are stored separately"""

COORD_SPACE = Namespace(GENOMIC='genomic', CDNA='cdna', PEPTIDE='peptide')
""":class:`Namespace`: the coordinate spaces a transcript can be queried in"""

OBJECT_TYPE = Namespace(TRANSCRIPT='Transcript', TRANSLATION='Translation')
""":class:`Namespace`: the ensembl object types used to link cross-references"""


def reverse_complement(s):
    """
    reverse complement a nucleotide sequence using Bio.Seq

    Raises:
        ValueError: the sequence contains characters other than letters

    Example:
        >>> reverse_complement('ATCCGGT')
        'ACCGGAT'
    """
    input_string = str(s)
    if not re.match('^[A-Za-z]*$', input_string):
        raise ValueError('unexpected sequence format. cannot reverse complement', input_string)
    return str(Seq(input_string).reverse_complement())


def translate(s, reading_frame=0):
    """
    given a DNA sequence, translates it with the standard genetic code and returns the amino acid sequence. Any
    incomplete trailing codon is dropped

    Args:
        s (str): nucleotide sequence
        reading_frame (int): offset (0, 1 or 2) of the first codon

    Returns:
        str: the amino acid sequence

    Example:
        >>> translate('ATGAAA')
        'MK'
    """
    reading_frame = reading_frame % CODON_SIZE
    temp = str(s)[reading_frame:]
    remainder = len(temp) % CODON_SIZE
    if remainder:
        temp = temp[:-remainder]
    return str(Seq(temp).translate())
