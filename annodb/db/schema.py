"""
the relational schema used by the adaptors and the application of incremental schema patches

Patch files are named ``patch_<from>_<to>_<letter>.sql`` and record themselves in the meta table with the meta key
``patch`` and a value of the form ``patch_39_40_c.sql|title``. A patch which has already been recorded is skipped
"""
import os
import re

from ..error import SchemaError
from ..util import bash_expands, LOG

SCHEMA_VERSION = 40

PATCH_PATTERN = r'^patch_(\d+)_(\d+)_([a-z]+)\.sql$'

SCHEMA = """
CREATE TABLE IF NOT EXISTS meta (
    meta_id INTEGER PRIMARY KEY,
    species_id INTEGER DEFAULT 1,
    meta_key VARCHAR(40) NOT NULL,
    meta_value VARCHAR(255) NOT NULL
);

CREATE TABLE IF NOT EXISTS coord_system (
    coord_system_id INTEGER PRIMARY KEY,
    name VARCHAR(40) NOT NULL,
    version VARCHAR(255),
    rank INTEGER NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS seq_region (
    seq_region_id INTEGER PRIMARY KEY,
    name VARCHAR(40) NOT NULL,
    coord_system_id INTEGER NOT NULL REFERENCES coord_system(coord_system_id),
    length INTEGER NOT NULL,
    UNIQUE (name, coord_system_id)
);

CREATE TABLE IF NOT EXISTS exon (
    exon_id INTEGER PRIMARY KEY,
    seq_region_id INTEGER NOT NULL REFERENCES seq_region(seq_region_id),
    seq_region_start INTEGER NOT NULL,
    seq_region_end INTEGER NOT NULL,
    seq_region_strand TINYINT NOT NULL,
    phase TINYINT NOT NULL,
    end_phase TINYINT NOT NULL
);

CREATE TABLE IF NOT EXISTS exon_stable_id (
    exon_id INTEGER PRIMARY KEY REFERENCES exon(exon_id),
    stable_id VARCHAR(128) NOT NULL,
    version INTEGER NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS transcript (
    transcript_id INTEGER PRIMARY KEY,
    gene_id INTEGER,
    seq_region_id INTEGER NOT NULL REFERENCES seq_region(seq_region_id),
    seq_region_start INTEGER NOT NULL,
    seq_region_end INTEGER NOT NULL,
    seq_region_strand TINYINT NOT NULL,
    display_xref_id INTEGER,
    biotype VARCHAR(40),
    confidence VARCHAR(40),
    description TEXT
);

CREATE TABLE IF NOT EXISTS transcript_stable_id (
    transcript_id INTEGER PRIMARY KEY REFERENCES transcript(transcript_id),
    stable_id VARCHAR(128) NOT NULL,
    version INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS exon_transcript (
    exon_id INTEGER NOT NULL REFERENCES exon(exon_id),
    transcript_id INTEGER NOT NULL REFERENCES transcript(transcript_id),
    rank INTEGER NOT NULL,
    PRIMARY KEY (exon_id, transcript_id, rank)
);

CREATE TABLE IF NOT EXISTS translation (
    translation_id INTEGER PRIMARY KEY,
    transcript_id INTEGER NOT NULL REFERENCES transcript(transcript_id),
    seq_start INTEGER NOT NULL,
    start_exon_id INTEGER NOT NULL REFERENCES exon(exon_id),
    seq_end INTEGER NOT NULL,
    end_exon_id INTEGER NOT NULL REFERENCES exon(exon_id)
);

CREATE TABLE IF NOT EXISTS translation_stable_id (
    translation_id INTEGER PRIMARY KEY REFERENCES translation(translation_id),
    stable_id VARCHAR(128) NOT NULL,
    version INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS external_db (
    external_db_id INTEGER PRIMARY KEY,
    db_name VARCHAR(100) NOT NULL,
    db_release VARCHAR(255),
    status VARCHAR(20),
    UNIQUE (db_name, db_release)
);

CREATE TABLE IF NOT EXISTS xref (
    xref_id INTEGER PRIMARY KEY,
    external_db_id INTEGER NOT NULL REFERENCES external_db(external_db_id),
    dbprimary_acc VARCHAR(40) NOT NULL,
    display_label VARCHAR(128) NOT NULL,
    version VARCHAR(10) NOT NULL DEFAULT '0',
    description TEXT,
    info_type VARCHAR(20),
    info_text VARCHAR(255),
    UNIQUE (dbprimary_acc, external_db_id, info_type, info_text)
);

CREATE TABLE IF NOT EXISTS object_xref (
    object_xref_id INTEGER PRIMARY KEY,
    ensembl_id INTEGER NOT NULL,
    ensembl_object_type VARCHAR(40) NOT NULL,
    xref_id INTEGER NOT NULL REFERENCES xref(xref_id),
    UNIQUE (ensembl_object_type, ensembl_id, xref_id)
);

CREATE TABLE IF NOT EXISTS attrib_type (
    attrib_type_id INTEGER PRIMARY KEY,
    code VARCHAR(15) NOT NULL UNIQUE,
    name VARCHAR(255),
    description TEXT
);

CREATE TABLE IF NOT EXISTS transcript_attrib (
    transcript_id INTEGER NOT NULL REFERENCES transcript(transcript_id),
    attrib_type_id INTEGER NOT NULL REFERENCES attrib_type(attrib_type_id),
    value VARCHAR(255) NOT NULL
);

CREATE TABLE IF NOT EXISTS translation_attrib (
    translation_id INTEGER NOT NULL REFERENCES translation(translation_id),
    attrib_type_id INTEGER NOT NULL REFERENCES attrib_type(attrib_type_id),
    value VARCHAR(255) NOT NULL
);

CREATE TABLE IF NOT EXISTS dna_align_feature (
    dna_align_feature_id INTEGER PRIMARY KEY,
    seq_region_id INTEGER NOT NULL REFERENCES seq_region(seq_region_id),
    seq_region_start INTEGER NOT NULL,
    seq_region_end INTEGER NOT NULL,
    seq_region_strand TINYINT NOT NULL,
    hit_start INTEGER NOT NULL,
    hit_end INTEGER NOT NULL,
    hit_strand TINYINT NOT NULL,
    hit_name VARCHAR(40) NOT NULL,
    score DOUBLE,
    evalue DOUBLE,
    perc_ident FLOAT,
    cigar_line TEXT
);

CREATE TABLE IF NOT EXISTS protein_align_feature (
    protein_align_feature_id INTEGER PRIMARY KEY,
    seq_region_id INTEGER NOT NULL REFERENCES seq_region(seq_region_id),
    seq_region_start INTEGER NOT NULL,
    seq_region_end INTEGER NOT NULL,
    seq_region_strand TINYINT NOT NULL,
    hit_start INTEGER NOT NULL,
    hit_end INTEGER NOT NULL,
    hit_strand TINYINT NOT NULL DEFAULT 1,
    hit_name VARCHAR(40) NOT NULL,
    score DOUBLE,
    evalue DOUBLE,
    perc_ident FLOAT,
    cigar_line TEXT
);

CREATE TABLE IF NOT EXISTS transcript_supporting_feature (
    transcript_id INTEGER NOT NULL REFERENCES transcript(transcript_id),
    feature_type VARCHAR(40) NOT NULL,
    feature_id INTEGER NOT NULL,
    UNIQUE (transcript_id, feature_type, feature_id)
);
"""

REQUIRED_COLUMNS = {
    'transcript': [
        'transcript_id', 'gene_id', 'seq_region_id', 'seq_region_start', 'seq_region_end', 'seq_region_strand',
        'display_xref_id', 'biotype', 'confidence', 'description'
    ],
    'transcript_stable_id': ['transcript_id', 'stable_id', 'version'],
    'exon': [
        'exon_id', 'seq_region_id', 'seq_region_start', 'seq_region_end', 'seq_region_strand', 'phase', 'end_phase'
    ],
    'exon_transcript': ['exon_id', 'transcript_id', 'rank'],
    'translation': ['translation_id', 'transcript_id', 'seq_start', 'start_exon_id', 'seq_end', 'end_exon_id'],
    'xref': ['xref_id', 'external_db_id', 'dbprimary_acc', 'display_label', 'version'],
    'object_xref': ['ensembl_id', 'ensembl_object_type', 'xref_id'],
    'transcript_attrib': ['transcript_id', 'attrib_type_id', 'value'],
    'transcript_supporting_feature': ['transcript_id', 'feature_type', 'feature_id'],
}
""":class:`dict` of :class:`list` of :class:`str` by :class:`str`: the columns the adaptors read and write, by table"""


def create_schema(store):
    """
    create any missing tables and record the schema version
    """
    store.executescript(SCHEMA)
    if schema_version(store) is None:
        store.insert('meta', meta_key='schema_version', meta_value=str(SCHEMA_VERSION))


def schema_version(store):
    """
    Returns:
        int: the schema version recorded in the meta table or None if there is none
    """
    row = store.fetch_one('SELECT meta_value FROM meta WHERE meta_key = ? ORDER BY meta_id DESC', ('schema_version', ))
    return int(row['meta_value']) if row else None


def check_columns(store):
    """
    Raises:
        SchemaError: if any of the columns the adaptors require are missing
    """
    missing = []
    for table, columns in sorted(REQUIRED_COLUMNS.items()):
        existing = set(store.table_columns(table))
        missing.extend(['{}.{}'.format(table, c) for c in columns if c not in existing])
    if missing:
        raise SchemaError('the database is missing required columns', missing)


def parse_patch_name(filename):
    """
    Example:
        >>> parse_patch_name('/path/to/patch_39_40_c.sql')
        (39, 40, 'c')
    """
    match = re.match(PATCH_PATTERN, os.path.basename(filename))
    if not match:
        raise ValueError('not a schema patch file name', filename)
    return int(match.group(1)), int(match.group(2)), match.group(3)


def applied_patches(store):
    """
    Returns:
        :class:`set` of :class:`str`: the file names of the patches recorded in the meta table
    """
    values = store.fetch_column('SELECT meta_value FROM meta WHERE meta_key = ?', ('patch', ))
    return {v.split('|', 1)[0] for v in values}


def apply_patches(store, *expressions):
    """
    apply schema patch files in version order, skipping patches which have already been applied

    Args:
        store (RowStore): the database to patch
        expressions (str): file glob expressions (bash brace expansion allowed) for the patch files

    Returns:
        :class:`list` of :class:`str`: the names of the patches applied

    Raises:
        FileNotFoundError: an expression does not match any files
    """
    filenames = sorted(set(bash_expands(*expressions)), key=parse_patch_name)
    done = applied_patches(store)
    applied = []
    for filename in filenames:
        name = os.path.basename(filename)
        if name in done:
            LOG('skipping patch (already applied):', name)
            continue
        LOG('applying patch:', name, time_stamp=True)
        with open(filename, 'r') as fh:
            store.executescript(fh.read())
        if name not in applied_patches(store):
            store.insert('meta', meta_key='patch', meta_value='{}|'.format(name))
        _, to_version, _ = parse_patch_name(filename)
        if (schema_version(store) or 0) < to_version:
            store.update(
                'UPDATE meta SET meta_value = ? WHERE meta_key = ?', (str(to_version), 'schema_version'))
        applied.append(name)
        done.add(name)
    return applied
