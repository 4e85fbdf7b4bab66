"""
data access layer for genome annotation: transcripts, exons and translations and their storage in a relational
database
"""
__version__ = '1.0.0'
