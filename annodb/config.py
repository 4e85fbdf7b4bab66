from .db import schema
from .db.dbadaptor import DBAdaptor
from .db.store import RowStore
from .util import LOG, WeakNamespace

DB_OPTIONS = WeakNamespace()
""":class:`~annodb.util.WeakNamespace`: database connection options. Each can be overridden by its environment
variable equivalent (ex. ``ANNODB_DB_PATH``)

- db_path
- create_schema
- patches
- foreign_keys
"""
DB_OPTIONS.add('db_path', ':memory:', defn='path to the sqlite annotation database or :memory: for a temporary one')
DB_OPTIONS.add('create_schema', True, defn='create any missing tables when connecting')
DB_OPTIONS.add(
    'patches', [], cast_type=str, listable=True,
    defn='glob expressions (bash brace expansion allowed) for the schema patch files to apply when connecting')
DB_OPTIONS.add('foreign_keys', False, defn='enforce foreign key constraints')


def connect(**kwargs):
    """
    connect to an annotation database

    Args:
        kwargs: overrides for any of the :attr:`DB_OPTIONS`

    Returns:
        DBAdaptor: the adaptor registry for the database

    Raises:
        KeyError: an argument is not a database option
        SchemaError: the database is missing columns the adaptors require

    Example:
        >>> db = connect(db_path='annotations.db', patches=['sql/patch_*.sql'])
    """
    options = {}
    for attr in DB_OPTIONS.keys():
        options[attr] = kwargs.pop(attr, DB_OPTIONS[attr])
    if kwargs:
        raise KeyError('unexpected database options', sorted(kwargs.keys()), DB_OPTIONS.keys())

    LOG('connecting to', options['db_path'], time_stamp=True)
    store = RowStore(options['db_path'], foreign_keys=options['foreign_keys'])
    if options['create_schema']:
        schema.create_schema(store)
    if options['patches']:
        for name in schema.apply_patches(store, *options['patches']):
            LOG('applied patch', name, indent_level=1)
    schema.check_columns(store)
    LOG('schema version:', schema.schema_version(store), indent_level=1)
    return DBAdaptor(store)
