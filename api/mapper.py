"""
api/mapper.py -- Conversion between wire DTOs (api/models.py) and catalog entities.

One mapper per resource. Each names its Create/Update DTO classes so the
generic handler can validate raw payloads without knowing the resource.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, Union

from pydantic import BaseModel

from api.models import AuthorCreate, AuthorRead, AuthorUpdate, BookCreate, BookRead, BookUpdate
from catalog.models import Author, Book

E = TypeVar("E")


class Mapper(Protocol[E]):
    create_model: type[BaseModel]
    update_model: type[BaseModel]

    def to_entity(self, dto: BaseModel) -> E: ...

    def to_dto(self, entity: E) -> BaseModel: ...


class AuthorMapper:
    create_model = AuthorCreate
    update_model = AuthorUpdate

    def to_entity(self, dto: Union[AuthorCreate, AuthorUpdate]) -> Author:
        return Author(
            id=getattr(dto, "id", None),
            firstname=dto.first_name,
            lastname=dto.last_name,
            bio=dto.bio,
        )

    def to_dto(self, entity: Author) -> AuthorRead:
        return AuthorRead(id=entity.id, first_name=entity.firstname, last_name=entity.lastname, bio=entity.bio)


class BookMapper:
    create_model = BookCreate
    update_model = BookUpdate

    def __init__(self) -> None:
        self._authors = AuthorMapper()

    def to_entity(self, dto: Union[BookCreate, BookUpdate]) -> Book:
        return Book(
            id=getattr(dto, "id", None),
            title=dto.title,
            isbn=dto.isbn,
            year=dto.year,
            summary=dto.summary,
            image=dto.image,
            author_id=dto.author_id,
        )

    def to_dto(self, entity: Book) -> BookRead:
        return BookRead(
            id=entity.id,
            title=entity.title,
            isbn=entity.isbn,
            year=entity.year,
            summary=entity.summary,
            image=entity.image,
            author_id=entity.author_id,
            author=self._authors.to_dto(entity.author) if entity.author is not None else None,
        )
