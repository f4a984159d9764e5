class Field:
    """Base class for an object representing a single field on a model.

    Fields correspond to database columns. Unset fields read as `default` on model instances.
    """

    def __init__(self, default=None, column=None, model=None):
        self.default = default
        self.column = column
        self.model = model

class Boolean(Field):
    """BOOLEAN column."""

class Integer(Field):
    """INTEGER column."""

class Text(Field):
    """TEXT column."""

class UUID(Field):
    """UUID column."""
