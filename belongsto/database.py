import asyncio
import contextlib
import logging
import psycopg2
import psycopg2.pool
import psycopg2.extras

import belongsto.errors
import belongsto.query

pool = None

class Pool:
    """PostgreSQL connection pool instance.

    Enables multiple database connections to be defined and used by the application. Queries block, so the async
    row methods run them on a worker thread.
    """

    def __init__(self, name='', pool_size=10, host='localhost', password='', port=5432, user=''):
        self._pool = psycopg2.pool.ThreadedConnectionPool(
            database=name,
            minconn=1,
            maxconn=pool_size,
            host=host,
            password=password,
            port=port,
            user=user
        )

        # enable support for UUID creation at the database level
        self.execute('create extension if not exists "uuid-ossp"')

    @contextlib.contextmanager
    def _cursor(self):
        connection = self._pool.getconn()
        try:
            yield connection.cursor(cursor_factory=psycopg2.extras.DictCursor)
            connection.commit()
        except Exception:
            # connections go back to the pool outside of an aborted transaction
            connection.rollback()
            raise
        finally:
            self._pool.putconn(connection)

    async def _rows(self, model: type, sql: str, args: list):
        rows = await asyncio.to_thread(self.query, sql, args)
        return [belongsto.query.row_to_dict(model, row) for row in rows]

    def execute(self, sql: str, args: tuple = None):
        """Execute a SQL query with no return value."""

        with self._cursor() as cursor:
            logging.debug('Running SQL: ' + str((sql, args)))
            cursor.execute(sql, args)

    def query(self, sql: str, args: tuple = None):
        """Execute a SQL query with a return value."""

        with self._cursor() as cursor:
            logging.debug('Running SQL: ' + str((sql, args)))
            cursor.execute(sql, args)
            return cursor.fetchall()

    async def delete(self, model: type, where: dict):
        return await self._rows(model, *belongsto.query.Query(model, where).delete())

    async def insert(self, model: type, data: dict):
        return await self._rows(model, *belongsto.query.Query(model).insert(data))

    async def select(self, model: type, where: dict):
        return await self._rows(model, *belongsto.query.Query(model, where).select())

    async def update(self, model: type, where: dict, data: dict):
        return await self._rows(model, *belongsto.query.Query(model, where).update(data))

class Memory:
    """In-process database.

    Tables are lists of row dictionaries keyed by `__table__`. Ids are assigned sequentially per table, starting at 1.
    Rows are copied on the way in and out, so callers never share state with the store.
    """

    def __init__(self):
        self.tables = {}
        self._ids = {}

    def _match(self, row: dict, where: dict):
        return all(row.get(column) == value for column, value in where.items())

    def _table(self, model: type):
        return self.tables.setdefault(model.__table__, [])

    async def delete(self, model: type, where: dict):
        rows = self._table(model)
        removed = [row for row in rows if self._match(row, where)]
        self.tables[model.__table__] = [row for row in rows if not self._match(row, where)]
        logging.debug('Deleted from %s: %s' % (model.__table__, removed))
        return removed

    def _insert(self, model: type, data: dict):
        row = dict(data)
        if row.get('id') is None:
            row['id'] = self._ids.get(model.__table__, 0) + 1
        elif any(e['id'] == row['id'] for e in self._table(model)):
            raise belongsto.errors.DuplicateKey('Duplicate id %r in %s' % (row['id'], model.__table__))

        if isinstance(row['id'], int):
            self._ids[model.__table__] = max(row['id'], self._ids.get(model.__table__, 0))

        self._table(model).append(row)
        logging.debug('Inserted into %s: %s' % (model.__table__, row))
        return row

    async def insert(self, model: type, data: dict):
        return [dict(self._insert(model, data))]

    async def select(self, model: type, where: dict):
        return [dict(row) for row in self._table(model) if self._match(row, where)]

    async def update(self, model: type, where: dict, data: dict):
        result = []
        for row in self._table(model):
            if self._match(row, where):
                row.update(data)
                result.append(dict(row))

        logging.debug('Updated %s: %s' % (model.__table__, result))
        return result

    def reset(self, model: type, rows: list = None):
        """Replace a table's contents with `rows`, restarting id assignment."""

        self.tables[model.__table__] = []
        self._ids[model.__table__] = 0
        for row in rows or []:
            self._insert(model, row)

    def rows(self, model: type):
        return [dict(row) for row in self._table(model)]

def initialize(name='', pool_size=10, host='localhost', password='', port=5432, user=''):
    """Initialize a new database connection and return the pool object.

    Saves a reference to that instance in a module-level variable, so applications with only one database
    can just call this function and not worry about pool objects.
    """

    instance = Pool(name=name, pool_size=pool_size, host=host, password=password, port=port, user=user)
    return use(instance)

def use(database):
    """Make `database` (a `Pool` or `Memory`) the default for models without a `__database__`."""

    global pool
    pool = database
    return database
