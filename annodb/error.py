

class NotSpecifiedError(Exception):
    """
    raised when information is required for a function but has not been given

    for example if a transcript is translated but has no translation attached
    """
    pass


class OverlapError(Exception):
    """
    raised when an exon would overlap (or share a boundary with) an exon already on the transcript
    """
    pass


class TranslationBoundaryError(Exception):
    """
    raised when the translation start or end offset falls outside of the exon it is defined on, or when the start
    exon comes after the end exon
    """
    pass


class SliceMismatchError(Exception):
    pass


class UnsupportedTypeError(Exception):
    """
    raised for objects the adaptor does not know how to store or remove. For example a supporting feature which is
    neither a dna nor a protein alignment, or a prediction transcript given to the transcript adaptor
    """
    pass


class IncompleteRecordError(Exception):
    """
    raised when an object is missing a field that is required to store it
    """
    pass


class NotStoredError(Exception):
    """
    raised when an object the operation depends on (ex. the sequence region of a slice) is not in the database
    """
    pass


class SchemaError(Exception):
    pass


class NotLoadedError(Exception):
    """
    raised when a lazily loaded collection of an object is accessed before it has been loaded from the database
    """
    pass
