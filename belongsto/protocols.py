from typing import Any, Awaitable, Protocol

class Record(Protocol):
    """A persisted (or persistable) row that a relation accessor can be bound to.

    Foreign keys are plain attributes; the accessor writes them in place and calls `save` to persist.
    """

    id: Any

    def save(self) -> Awaitable[Any]:
        ...

class TargetModel(Protocol):
    """Identity-based CRUD that a belongs-to accessor delegates to.

    `find_by_id`, `update_by_id` and `remove_by_id` are expected to raise `belongsto.errors.NotFound` when no
    record has the given identity, including a `None` identity.
    """

    __table__: str

    def build(self, data: dict) -> Record:
        ...

    def find_by_id(self, id) -> Awaitable[Record]:
        ...

    def create(self, data: dict) -> Awaitable[Record]:
        ...

    def update_by_id(self, id, changes: dict) -> Awaitable[Record]:
        ...

    def remove_by_id(self, id) -> Awaitable[Any]:
        ...
