"""
catalog/store.py -- SQLAlchemy-backed persistence layer for the bookstore catalog.

Uses SQLAlchemy Core (not ORM) so the dataclasses in catalog/models.py remain
the authoritative domain representation. Swapping SQLite for PostgreSQL is a
connection string change.

Pattern: Repository + Data Mapper. AuthorRepository and BookRepository each
implement the Repository protocol (one interface per entity). The _row_to_*
functions translate raw rows into dataclasses. Route handlers never touch SQL.

Write methods report success as a bool instead of raising for "nothing was
written". Driver errors (integrity violations, lost connections) propagate;
the handler layer turns both into the same failure outcome.

Usage:
    store = CatalogStore("sqlite:///bookstore.db")
    author = Author(firstname="Jane", lastname="Doe")
    store.authors.create(author)        # True, author.id is now set
    store.books.find_all()
    store.close()
"""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar

from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table, Text, select
from sqlalchemy.engine import Engine

from catalog.models import Author, Book
from core.db import make_engine

E = TypeVar("E")

# SQLite INTEGER is a signed 64-bit value; larger ids can never be stored.
_MAX_ID = 2**63 - 1

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_authors = Table(
    "authors",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("firstname", String(100), nullable=False),
    Column("lastname", String(100), nullable=False),
    Column("bio", Text),
)

_books = Table(
    "books",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("year", Integer),
    Column("isbn", String(32), nullable=False),
    Column("summary", Text),
    Column("image", String(500)),
    Column("author_id", Integer, ForeignKey("authors.id", ondelete="SET NULL")),
)


# ---------------------------------------------------------------------------
# Repository interface
# ---------------------------------------------------------------------------


class Repository(Protocol[E]):
    """CRUD capability set shared by every catalog entity."""

    def find_all(self) -> list[E]: ...

    def find_by_id(self, entity_id: int) -> Optional[E]: ...

    def create(self, entity: E) -> bool: ...

    def update(self, entity: E) -> bool: ...

    def delete(self, entity: E) -> bool: ...

    def is_exists(self, entity_id: int) -> bool: ...


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class AuthorRepository:
    """Repository for Author rows."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def find_all(self) -> list[Author]:
        with self.engine.connect() as conn:
            rows = conn.execute(_authors.select().order_by(_authors.c.id)).fetchall()
        return [_row_to_author(r) for r in rows]

    def find_by_id(self, entity_id: int) -> Optional[Author]:
        if entity_id > _MAX_ID:
            return None
        with self.engine.connect() as conn:
            row = conn.execute(_authors.select().where(_authors.c.id == entity_id)).fetchone()
        return _row_to_author(row) if row is not None else None

    def create(self, entity: Author) -> bool:
        """Insert the author and assign its new id. Returns True on success."""
        with self.engine.connect() as conn:
            result = conn.execute(
                _authors.insert().values(firstname=entity.firstname, lastname=entity.lastname, bio=entity.bio)
            )
            conn.commit()
        entity.id = result.inserted_primary_key[0]
        return entity.id is not None

    def update(self, entity: Author) -> bool:
        """Overwrite every mutable column. Returns False if the id is unknown."""
        with self.engine.connect() as conn:
            result = conn.execute(
                _authors.update()
                .where(_authors.c.id == entity.id)
                .values(firstname=entity.firstname, lastname=entity.lastname, bio=entity.bio)
            )
            conn.commit()
        return result.rowcount > 0

    def delete(self, entity: Author) -> bool:
        """Delete the author. Its books stay in the catalog with author_id cleared."""
        with self.engine.connect() as conn:
            result = conn.execute(_authors.delete().where(_authors.c.id == entity.id))
            conn.commit()
        return result.rowcount > 0

    def is_exists(self, entity_id: int) -> bool:
        if entity_id > _MAX_ID:
            return False
        with self.engine.connect() as conn:
            row = conn.execute(select(_authors.c.id).where(_authors.c.id == entity_id)).fetchone()
        return row is not None


class BookRepository:
    """Repository for Book rows.

    Reads LEFT JOIN the authors table so the returned Book carries its Author.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def _select_with_author(self):
        return select(
            _books,
            _authors.c.firstname.label("author_firstname"),
            _authors.c.lastname.label("author_lastname"),
            _authors.c.bio.label("author_bio"),
        ).select_from(_books.outerjoin(_authors, _books.c.author_id == _authors.c.id))

    def find_all(self) -> list[Book]:
        with self.engine.connect() as conn:
            rows = conn.execute(self._select_with_author().order_by(_books.c.id)).fetchall()
        return [_row_to_book(r) for r in rows]

    def find_by_id(self, entity_id: int) -> Optional[Book]:
        if entity_id > _MAX_ID:
            return None
        with self.engine.connect() as conn:
            row = conn.execute(self._select_with_author().where(_books.c.id == entity_id)).fetchone()
        return _row_to_book(row) if row is not None else None

    def create(self, entity: Book) -> bool:
        """Insert the book and assign its new id.

        Raises sqlalchemy.exc.IntegrityError if author_id does not reference
        an existing author.
        """
        with self.engine.connect() as conn:
            result = conn.execute(_books.insert().values(**_book_values(entity)))
            conn.commit()
        entity.id = result.inserted_primary_key[0]
        return entity.id is not None

    def update(self, entity: Book) -> bool:
        with self.engine.connect() as conn:
            result = conn.execute(_books.update().where(_books.c.id == entity.id).values(**_book_values(entity)))
            conn.commit()
        return result.rowcount > 0

    def delete(self, entity: Book) -> bool:
        with self.engine.connect() as conn:
            result = conn.execute(_books.delete().where(_books.c.id == entity.id))
            conn.commit()
        return result.rowcount > 0

    def is_exists(self, entity_id: int) -> bool:
        if entity_id > _MAX_ID:
            return False
        with self.engine.connect() as conn:
            row = conn.execute(select(_books.c.id).where(_books.c.id == entity_id)).fetchone()
        return row is not None


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class CatalogStore:
    """Owns the engine and schema; exposes one repository per entity."""

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        metadata.create_all(self.engine)
        self.authors = AuthorRepository(self.engine)
        self.books = BookRepository(self.engine)

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _book_values(entity: Book) -> dict:
    return {
        "title": entity.title,
        "year": entity.year,
        "isbn": entity.isbn,
        "summary": entity.summary,
        "image": entity.image,
        "author_id": entity.author_id,
    }


def _row_to_author(row) -> Author:
    return Author(id=row.id, firstname=row.firstname, lastname=row.lastname, bio=row.bio)


def _row_to_book(row) -> Book:
    author = None
    # author_firstname is NOT NULL in the table, so NULL here means no join match.
    if row.author_id is not None and row.author_firstname is not None:
        author = Author(
            id=row.author_id,
            firstname=row.author_firstname,
            lastname=row.author_lastname,
            bio=row.author_bio,
        )
    return Book(
        id=row.id,
        title=row.title,
        year=row.year,
        isbn=row.isbn,
        summary=row.summary,
        image=row.image,
        author_id=row.author_id,
        author=author,
    )
