import datetime
import decimal
import json
import msgpack

import belongsto.database
import belongsto.errors
import belongsto.fields
import belongsto.relation

class ModelType(type):
    """Metaclass for models.

    Attaches a few attributes to field and relation definitions, like the column and model.
    """

    def __new__(cls, name, bases, namespace, **kwargs):
        namespace['__fields__'] = []
        namespace['__relations__'] = []

        class_instance = super().__new__(cls, name, bases, namespace)

        # fields and relations are inherited, so collect them from the whole hierarchy
        for base in reversed(class_instance.__mro__[1:]):
            for attribute in ('__fields__', '__relations__'):
                for field in getattr(base, attribute, []):
                    if field.column not in namespace and field not in namespace[attribute]:
                        namespace[attribute].append(field)

        for column, field in namespace.items():
            if isinstance(field, belongsto.fields.Field):
                # store the lvalue of the field definition in the field itself
                # for example, if we have `id = Integer()`, then we have `id.column == 'id'`
                field.column = column
                field.model = class_instance
                class_instance.__fields__.append(field)

            if isinstance(field, belongsto.relation.Relation):
                # for relations, the lvalue is the name the accessor is read from, and the default foreign key prefix
                field.column = column
                field.model = class_instance
                class_instance.__relations__.append(field)

        return class_instance

class Model(object, metaclass=ModelType):
    """Model definition.

    Each model corresponds to a database table. Records hold their values as plain attributes; declared fields that
    haven't been set read as the field's default.
    """

    __table__ = None
    __database__ = None

    id = belongsto.fields.Integer()

    def __init__(self, *args, **kwargs):
        # set all values given in constructor
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __getattribute__(self, attribute):
        # when accessing fields that haven't been set on instances, return the default rather than a meta object
        result = object.__getattribute__(self, attribute)
        if isinstance(result, belongsto.fields.Field):
            return result.default

        return result

    def __repr__(self):
        return '%s(%s)' % (type(self).__name__, ', '.join('%s=%r' % e for e in self.to_dict().items()))

    def to_dict(self):
        return dict(self.__dict__)

    @classmethod
    def _database(cls):
        db = cls.__database__ or belongsto.database.pool
        if not db:
            raise belongsto.errors.ConfigurationError('No database configured for %s' % cls.__name__)

        return db

    @classmethod
    def build(cls, data: dict = None):
        """Create an unsaved instance."""

        return cls(**(data or {}))

    @classmethod
    async def create(cls, data):
        if isinstance(data, Model):
            data = data.to_dict()

        rows = await cls._database().insert(cls, data)
        return cls(**rows[0])

    @classmethod
    async def find(cls, **where):
        return [cls(**row) for row in await cls._database().select(cls, where)]

    @classmethod
    async def find_by_id(cls, id):
        rows = await cls._database().select(cls, {'id': id})
        if not rows:
            raise belongsto.errors.NotFound()

        return cls(**rows[0])

    @classmethod
    async def find_one(cls, **where):
        result = await cls.find(**where)
        return result[0] if len(result) > 0 else None

    @classmethod
    async def remove_by_id(cls, id):
        """Delete the record with the given id and return it, with its id cleared."""

        item = await cls.find_by_id(id)
        await item.remove()
        return item

    @classmethod
    async def update_by_id(cls, id, changes: dict):
        rows = await cls._database().update(cls, {'id': id}, changes)
        if not rows:
            raise belongsto.errors.NotFound()

        return cls(**rows[0])

    async def remove(self):
        rows = await self._database().delete(type(self), {'id': self.id})
        if not rows:
            raise belongsto.errors.NotFound()

        self.id = None

    async def save(self):
        """Insert the record if it has no id yet, otherwise write all of its values back."""

        data = {k: v for k, v in self.to_dict().items() if k != 'id'}
        if not self.id:
            rows = await self._database().insert(type(self), data)
        else:
            rows = await self._database().update(type(self), {'id': self.id}, data)
            if not rows:
                raise belongsto.errors.NotFound()

        self.__dict__.update(rows[0])
        return self

belongsto.relation.add_belongs_to(Model)

def serialize(data, format: str = 'json', pretty: bool = False):
    """Serialize records (or structures containing records) to a string format."""
    def encode(obj):
        if isinstance(obj, Model):
            return obj.to_dict()
        elif isinstance(obj, datetime.datetime):
            return int(obj.timestamp())
        elif isinstance(obj, datetime.date):
            return obj.isoformat()
        elif isinstance(obj, decimal.Decimal):
            return float(obj)
        elif hasattr(obj, 'serialize'):
            return obj.serialize()

        return obj

    if format == 'msgpack':
        return msgpack.packb(data, default=encode)

    if format == 'json':
        if pretty:
            return json.dumps(data, default=encode, indent=4)
        return json.dumps(data, default=encode)

    return data
