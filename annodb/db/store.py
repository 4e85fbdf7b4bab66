"""
thin wrapper around a sqlite3 connection. All statements are parameterized
"""
from contextlib import contextmanager
import sqlite3

from ..util import LOG


class RowStore:
    """
    Example:
        >>> store = RowStore(':memory:')
        >>> store.execute('CREATE TABLE thing (thing_id INTEGER PRIMARY KEY, name TEXT)')
        >>> store.insert('thing', name='a')
        1
        >>> store.fetch_one('SELECT name FROM thing WHERE thing_id = ?', (1, ))['name']
        'a'
    """

    def __init__(self, db_path=':memory:', foreign_keys=False):
        """
        Args:
            db_path (str): path to the sqlite database file or ':memory:'
            foreign_keys (bool): enforce foreign key constraints
        """
        self.db_path = db_path
        # transactions are managed explicitly with savepoints
        self.conn = sqlite3.connect(db_path, isolation_level=None)
        self.conn.row_factory = sqlite3.Row
        if foreign_keys:
            self.conn.execute('PRAGMA foreign_keys = ON')
        self._depth = 0

    def execute(self, sql, params=()):
        return self.conn.execute(sql, tuple(params))

    def executescript(self, script):
        self.conn.executescript(script)

    def fetch_all(self, sql, params=()):
        """
        Returns:
            :class:`list` of :class:`sqlite3.Row`: the result rows
        """
        return self.execute(sql, params).fetchall()

    def fetch_one(self, sql, params=()):
        """
        Returns:
            sqlite3.Row: the first result row or None if there are no results
        """
        return self.execute(sql, params).fetchone()

    def fetch_column(self, sql, params=()):
        """
        Returns:
            list: the first column of all the result rows
        """
        return [row[0] for row in self.fetch_all(sql, params)]

    def insert(self, table, **values):
        """
        Args:
            table (str): the table to insert into
            values: column values by column name

        Returns:
            int: the generated row identifier
        """
        columns = sorted(values.keys())
        sql = 'INSERT INTO {} ({}) VALUES ({})'.format(
            table, ', '.join(columns), ', '.join(['?' for c in columns]))
        return self.execute(sql, [values[c] for c in columns]).lastrowid

    def update(self, sql, params=()):
        """
        Returns:
            int: the number of rows affected by the statement
        """
        return self.execute(sql, params).rowcount

    @contextmanager
    def transaction(self):
        """
        groups statements into a single unit of work. The statements are rolled back if an error is raised within
        the block. Transactions may be nested

        Example:
            >>> with store.transaction():
            ...     store.insert('thing', name='b')
        """
        name = 'sp{}'.format(self._depth)
        self._depth += 1
        self.execute('SAVEPOINT {}'.format(name))
        try:
            yield self
        except Exception:
            LOG('rolling back', name, indent_level=1)
            self.execute('ROLLBACK TO SAVEPOINT {}'.format(name))
            self.execute('RELEASE SAVEPOINT {}'.format(name))
            raise
        else:
            self.execute('RELEASE SAVEPOINT {}'.format(name))
        finally:
            self._depth -= 1

    def table_columns(self, table):
        """
        Returns:
            :class:`list` of :class:`str`: the names of the columns of a table (empty if the table does not exist)
        """
        return [row['name'] for row in self.fetch_all('PRAGMA table_info({})'.format(table))]

    def close(self):
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *pos):
        self.close()
