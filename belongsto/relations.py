import logging

import belongsto.protocols

class BelongsTo:
    """Read-only handle on the parent record that `instance` points to through `foreign_key`.

    Accessors are built fresh on every attribute access and hold no state besides the three values they are bound to.
    The bound instance is never copied.
    """

    def __init__(self, foreign_key: str, instance: 'belongsto.protocols.Record',
            model: 'belongsto.protocols.TargetModel'):
        self.foreign_key = foreign_key
        self.instance = instance
        self.model = model

    def _id(self):
        return getattr(self.instance, self.foreign_key, None)

    async def get(self):
        # an absent key is passed through so the model raises its own NotFound
        return await self.model.find_by_id(self._id())

class BelongsToMutable(BelongsTo):
    """Belongs-to handle that can also change which parent the instance points to, and the parent itself.

    Operations that touch both records write them one after the other, never atomically:
    - `create` persists the parent first, then the instance. If saving the instance fails, the new parent is left
      unlinked.
    - `remove` clears and saves the instance first, then deletes the parent. If the delete fails, the instance is
      already detached and the parent remains.
    """

    def build(self, data: dict):
        return self.model.build(data)

    async def set(self, item):
        logging.debug('Linking %s.%s to %s' % (type(self.instance).__name__, self.foreign_key, item.id))
        setattr(self.instance, self.foreign_key, item.id)
        return await self.instance.save()

    async def get_or_create(self, data: dict):
        if self._id():
            return await self.get()

        return await self.create(data)

    async def create(self, data: dict):
        item = await self.model.create(data)
        await self.set(item)
        return item

    async def create_or_update(self, data: dict):
        if self._id():
            return await self.update(data)

        return await self.create(data)

    async def update(self, changes: dict):
        return await self.model.update_by_id(self._id(), changes)

    async def remove(self):
        id = self._id()
        logging.debug('Detaching %s.%s from %s' % (type(self.instance).__name__, self.foreign_key, id))
        setattr(self.instance, self.foreign_key, None)
        await self.instance.save()
        return await self.model.remove_by_id(id)
