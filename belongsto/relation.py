import types

import belongsto.errors
import belongsto.relations

class Relation:
    """Descriptor for a belongs-to relation declared on a model.

    Reading the relation from a model instance returns a new accessor bound to that instance, so nothing is cached
    between reads. Reading it from the model class returns the relation itself.
    The target model can be given within a lambda to avoid issues where classes aren't defined yet.
    """

    def __init__(self, target, foreign_key: str = None, immutable: bool = False):
        if target is None:
            raise belongsto.errors.ConfigurationError('A belongs-to relation needs a target model')

        self.target_lambda = target if isinstance(target, types.FunctionType) else (lambda: target)
        self.foreign_key_name = foreign_key
        self.immutable = immutable

        # set by the model metaclass or by `belongs_to`
        self.column = None
        self.model = None

    def __get__(self, instance, owner=None):
        if instance is None:
            return self

        return self.accessor(instance)

    def accessor(self, instance) -> belongsto.relations.BelongsTo:
        """Build an accessor bound to `instance`."""

        factory = belongsto.relations.BelongsTo if self.immutable else belongsto.relations.BelongsToMutable
        return factory(self.foreign_key(), instance, self.target())

    def foreign_key(self) -> str:
        if self.foreign_key_name:
            return self.foreign_key_name

        if not self.column:
            raise belongsto.errors.ConfigurationError('Relation is not attached to a model')

        return '%s_id' % self.column

    def target(self):
        return self.target_lambda()

def belongs_to(cls, model=None, as_: str = None, foreign_key: str = None, immutable: bool = False) -> Relation:
    """Declare that instances of `cls` belong to a record of `model`.

    Defines an attribute named `as_` (by default the target's `__table__`) on `cls`. The foreign key defaults to
    `<as_>_id`. Immutable relations only expose `get`.
    """

    if model is None:
        raise belongsto.errors.ConfigurationError('belongs_to on %s needs a target model' % cls.__name__)

    if as_ is None:
        target = model() if isinstance(model, types.FunctionType) else model
        as_ = getattr(target, '__table__', None)
        if not as_:
            raise belongsto.errors.ConfigurationError(
                'Cannot name relation from %s to %r without `as_` or a `__table__`' % (cls.__name__, target)
            )

    relation = Relation(model, foreign_key=foreign_key, immutable=immutable)
    relation.column = as_
    relation.model = cls
    setattr(cls, as_, relation)

    # a new list, so bases and sibling classes keep their own relations
    cls.__relations__ = list(getattr(cls, '__relations__', [])) + [relation]
    return relation

def add_belongs_to(base: type) -> type:
    """Install `belongs_to` as a classmethod on a model base class.

    Works with any base whose instances have a `save` coroutine and whose target models follow
    `belongsto.protocols.TargetModel`.
    """

    base.belongs_to = classmethod(belongs_to)
    return base
