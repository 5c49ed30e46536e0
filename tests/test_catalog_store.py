"""Unit tests for catalog/store.py -- AuthorRepository and BookRepository.

Covers:
- create() assigns ids and reports success
- find_all() / find_by_id() / is_exists()
- update() and delete() report False for unknown ids
- book reads embed the author through the LEFT JOIN
- the author_id foreign key is enforced and cleared on author delete
"""

import pytest
from sqlalchemy.exc import IntegrityError

from catalog.models import Author, Book
from catalog.store import CatalogStore


@pytest.fixture
def store():
    s = CatalogStore("sqlite:///:memory:")
    yield s
    s.close()


class TestAuthorRepository:
    def test_create_assigns_id(self, store: CatalogStore) -> None:
        author = Author(firstname="Octavia", lastname="Butler")
        assert store.authors.create(author) is True
        assert author.id is not None
        assert store.authors.is_exists(author.id)

    def test_find_by_id(self, store: CatalogStore) -> None:
        author = Author(firstname="Octavia", lastname="Butler", bio="Kindred")
        store.authors.create(author)
        found = store.authors.find_by_id(author.id)
        assert found == author

    def test_find_by_id_missing(self, store: CatalogStore) -> None:
        assert store.authors.find_by_id(123) is None
        assert store.authors.is_exists(123) is False

    def test_id_beyond_integer_column_is_absent(self, store: CatalogStore) -> None:
        assert store.authors.find_by_id(2**63) is None
        assert store.authors.is_exists(2**63) is False
        assert store.books.find_by_id(2**63) is None
        assert store.books.is_exists(2**63) is False

    def test_find_all_ordered_by_id(self, store: CatalogStore) -> None:
        a = Author(firstname="A", lastname="One")
        b = Author(firstname="B", lastname="Two")
        store.authors.create(a)
        store.authors.create(b)
        assert [x.id for x in store.authors.find_all()] == [a.id, b.id]

    def test_update(self, store: CatalogStore) -> None:
        author = Author(firstname="Old", lastname="Name")
        store.authors.create(author)
        author.firstname = "New"
        assert store.authors.update(author) is True
        assert store.authors.find_by_id(author.id).firstname == "New"

    def test_update_unknown_is_false(self, store: CatalogStore) -> None:
        assert store.authors.update(Author(id=999, firstname="X", lastname="Y")) is False

    def test_delete(self, store: CatalogStore) -> None:
        author = Author(firstname="Gone", lastname="Soon")
        store.authors.create(author)
        assert store.authors.delete(author) is True
        assert store.authors.is_exists(author.id) is False

    def test_delete_unknown_is_false(self, store: CatalogStore) -> None:
        assert store.authors.delete(Author(id=999, firstname="X", lastname="Y")) is False


class TestBookRepository:
    def test_create_and_find_without_author(self, store: CatalogStore) -> None:
        book = Book(title="Solaris", isbn="978-0156027601", year=1961)
        assert store.books.create(book) is True
        found = store.books.find_by_id(book.id)
        assert found.title == "Solaris"
        assert found.author is None

    def test_find_embeds_author(self, store: CatalogStore) -> None:
        author = Author(firstname="Stanislaw", lastname="Lem")
        store.authors.create(author)
        book = Book(title="Solaris", isbn="978-0156027601", author_id=author.id)
        store.books.create(book)

        found = store.books.find_by_id(book.id)
        assert found.author == author
        assert store.books.find_all()[0].author == author

    def test_unknown_author_rejected(self, store: CatalogStore) -> None:
        with pytest.raises(IntegrityError):
            store.books.create(Book(title="Orphan", isbn="0", author_id=4242))

    def test_author_delete_clears_reference(self, store: CatalogStore) -> None:
        author = Author(firstname="Temp", lastname="Author")
        store.authors.create(author)
        book = Book(title="Kept", isbn="1", author_id=author.id)
        store.books.create(book)

        store.authors.delete(author)
        found = store.books.find_by_id(book.id)
        assert found is not None
        assert found.author_id is None

    def test_update_and_delete(self, store: CatalogStore) -> None:
        book = Book(title="Draft", isbn="2")
        store.books.create(book)
        book.title = "Final"
        assert store.books.update(book) is True
        assert store.books.find_by_id(book.id).title == "Final"
        assert store.books.delete(book) is True
        assert store.books.is_exists(book.id) is False
