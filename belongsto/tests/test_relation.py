import unittest
import unittest.mock

import belongsto.errors
import belongsto.fields
import belongsto.model
import belongsto.relation
import belongsto.relations
import belongsto.tests.base

class Author(belongsto.model.Model):
    __table__ = 'author'

    name = belongsto.fields.Text()

class Book(belongsto.model.Model):
    __table__ = 'book'

    author_id = belongsto.fields.Integer()
    editor_id = belongsto.fields.Integer()

    # declared before the target class exists
    publisher = belongsto.relation.Relation(lambda: Publisher)

class Publisher(belongsto.model.Model):
    __table__ = 'publisher'

Book.belongs_to(model=Author)
Book.belongs_to(model=Author, as_='editor', immutable=True)

class Novel(Book):
    __table__ = 'novel'

class Pamphlet(Book):
    __table__ = 'pamphlet'

    publisher = belongsto.relation.Relation(lambda: Author, foreign_key='author_id')

@belongsto.relation.add_belongs_to
class Plain:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)

    async def save(self):
        return self

class TestRegistration(unittest.TestCase):
    def test_defaults(self):
        relation = Book.author
        self.assertIsInstance(relation, belongsto.relation.Relation)
        self.assertEqual(relation.column, 'author')
        self.assertEqual(relation.foreign_key(), 'author_id')
        self.assertIs(relation.target(), Author)
        self.assertIs(relation.model, Book)
        self.assertFalse(relation.immutable)

    def test_alias(self):
        self.assertEqual(Book.editor.foreign_key(), 'editor_id')
        self.assertIsInstance(Book().editor, belongsto.relations.BelongsTo)
        self.assertNotIsInstance(Book().editor, belongsto.relations.BelongsToMutable)

    def test_declared(self):
        self.assertEqual(Book.publisher.column, 'publisher')
        self.assertEqual(Book.publisher.foreign_key(), 'publisher_id')
        self.assertIs(Book.publisher.target(), Publisher)
        self.assertEqual(Book.__relations__, [Book.publisher, Book.author, Book.editor])

    def test_relations_not_shared(self):
        self.assertEqual(Author.__relations__, [])
        self.assertEqual(belongsto.model.Model.__relations__, [])

    def test_inherited(self):
        self.assertEqual(Novel.__relations__, [Book.publisher, Book.author, Book.editor])
        self.assertEqual(Novel.__relations__[0].model, Book)
        self.assertIsInstance(Novel().author, belongsto.relations.BelongsToMutable)

    def test_overridden(self):
        self.assertEqual(Pamphlet.__relations__, [Book.author, Book.editor, Pamphlet.publisher])
        self.assertIs(Pamphlet.publisher.target(), Author)
        self.assertEqual(Pamphlet.publisher.foreign_key(), 'author_id')

    def test_accessor_per_access(self):
        book = Book(author_id=3)
        first = book.author
        second = book.author
        self.assertIsInstance(first, belongsto.relations.BelongsToMutable)
        self.assertIsNot(first, second)
        self.assertIs(first.instance, book)
        self.assertIs(first.model, Author)
        self.assertEqual(first.foreign_key, 'author_id')

    def test_accessor_factory(self):
        book = Book()
        accessor = Book.author.accessor(book)
        self.assertIsInstance(accessor, belongsto.relations.BelongsToMutable)
        self.assertIs(accessor.instance, book)

    def test_missing_model(self):
        with self.assertRaises(belongsto.errors.ConfigurationError):
            Book.belongs_to()

        with self.assertRaises(belongsto.errors.ConfigurationError):
            belongsto.relation.Relation(None)

    def test_missing_name(self):
        class Unnamed(belongsto.model.Model):
            pass

        with self.assertRaises(belongsto.errors.ConfigurationError):
            Book.belongs_to(model=Unnamed)

    def test_unattached(self):
        with self.assertRaises(belongsto.errors.ConfigurationError):
            belongsto.relation.Relation(Author).foreign_key()

class TestPlugin(unittest.IsolatedAsyncioTestCase):
    async def test_plain_class(self):
        model = unittest.mock.Mock()
        model.update_by_id = unittest.mock.AsyncMock(return_value='updated')
        Plain.belongs_to(model=model, as_='thing')

        plain = Plain(thing_id=3)
        self.assertIs(plain.thing.model, model)
        self.assertEqual(await plain.thing.update({'a': 1}), 'updated')
        model.update_by_id.assert_awaited_once_with(3, {'a': 1})

class TestPersisted(belongsto.tests.base.Base):
    tables = {
        Author: [{'name': 'writer'}, {'name': 'reader'}],
        Book: [{'author_id': 1, 'editor_id': 2}],
    }

    async def test_two_relations_same_model(self):
        book = await Book.find_by_id(1)
        self.assertEqual((await book.author.get()).name, 'writer')
        self.assertEqual((await book.editor.get()).name, 'reader')
