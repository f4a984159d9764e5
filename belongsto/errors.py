class BelongsToError(Exception):
    """Base class for errors raised by belongsto."""

class ConfigurationError(BelongsToError):
    """A relation or model was declared in a way that can't be used."""

class NotFound(BelongsToError):
    """No record matches the given identity."""

    def __init__(self, message='Record not found'):
        super().__init__(message)

class DuplicateKey(BelongsToError):
    """A record with the same id already exists."""
