class Query:
    """Container class for a SQL query against a single model's table.

    `where` is a dictionary of column -> value that is AND-ed together. Each query method returns a tuple of the SQL
    string and its escaped arguments, which can be handed to `belongsto.database.Pool.query`.
    """

    def __init__(self, model: type, where: dict = None):
        self.model = model
        self.where = where or {}

    def _field_aliases(self):
        # return a list of fields with aliases that can be used in a SQL query
        table = self.model.__table__
        return ['"%s"."%s" as "%s.%s"' % (table, field.column, table, field.column) for field in self.model.__fields__]

    def _returning(self):
        return ' returning %s' % ','.join(self._field_aliases())

    def _where_query(self):
        if not self.where:
            return ('', [])

        clauses = []
        values = []
        for column, value in sorted(self.where.items()):
            if value is None:
                clauses.append('"%s"."%s" is null' % (self.model.__table__, column))
            else:
                clauses.append('"%s"."%s" = %%s' % (self.model.__table__, column))
                values.append(value)

        return (' where %s' % ' and '.join(clauses), values)

    def delete(self):
        where_query, where_values = self._where_query()
        return ('delete from "%s"' % self.model.__table__ + where_query + self._returning(), where_values)

    def insert(self, data: dict):
        table = self.model.__table__
        if not data:
            return ('insert into "%s" default values' % table + self._returning(), [])

        # sort columns so generated queries are stable
        columns = sorted(data.keys())
        fields = ' (%s)' % ','.join(columns)
        values = ' values (%s)' % ','.join(['%s'] * len(columns))
        args = [data[column] for column in columns]
        return ('insert into "' + table + '"' + fields + values + self._returning(), args)

    def select(self):
        where_query, where_values = self._where_query()
        query = 'select %s from "%s"' % (','.join(self._field_aliases()), self.model.__table__)
        return (query + where_query, where_values)

    def update(self, data: dict):
        # nothing to set, so just return the matching rows
        if not data:
            return self.select()

        columns = sorted(data.keys())
        query = 'update "%s" set %s' % (self.model.__table__, ','.join([e + ' = %s' for e in columns]))
        values = [data[column] for column in columns]

        where_query, where_values = self._where_query()
        return (query + where_query + self._returning(), values + where_values)

def row_to_dict(model: type, row) -> dict:
    """Extract a model's fields from an aliased result row."""

    table = model.__table__
    return {field.column: row['%s.%s' % (table, field.column)] for field in model.__fields__}
