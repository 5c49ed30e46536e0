"""
catalog/models.py -- Domain dataclasses for the bookstore catalog.

Pure data containers with zero logic. Persistence lives in catalog/store.py,
wire shapes live in api/models.py. Neither layer leaks into these classes.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Author:
    """A book author.

    id is None before the record is written to the database.
    """

    firstname: str
    lastname: str
    bio: Optional[str] = None
    id: Optional[int] = None


@dataclass
class Book:
    """A catalog entry.

    author is populated by the store on reads when author_id references an
    existing row; writes only look at author_id.
    """

    title: str
    isbn: str
    year: Optional[int] = None
    summary: Optional[str] = None
    image: Optional[str] = None
    author_id: Optional[int] = None
    id: Optional[int] = None
    author: Optional[Author] = None
