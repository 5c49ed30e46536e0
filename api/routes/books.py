"""
api/routes/books.py -- Book CRUD routes.

Same shape as api/routes/authors.py. Book reads embed the author; writes only
take authorId, which must reference an existing author (enforced by the DB).
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request, Response

from api.handlers import ResourceHandler
from api.responses import to_response
from auth.dependencies import require_roles
from catalog.models import Book

router = APIRouter()


def _handler(request: Request) -> ResourceHandler[Book]:
    return request.app.state.book_handler


@router.get("/books", dependencies=[Depends(require_roles("books", "list"))])
def list_books(request: Request) -> Response:
    return to_response(_handler(request).list())


@router.get("/books/{book_id}", dependencies=[Depends(require_roles("books", "get"))])
def get_book(request: Request, book_id: int) -> Response:
    return to_response(_handler(request).get(book_id))


@router.post("/books", status_code=201, dependencies=[Depends(require_roles("books", "create"))])
def create_book(request: Request, payload: Optional[dict[str, Any]] = Body(default=None)) -> Response:
    return to_response(_handler(request).create(payload))


@router.put("/books/{book_id}", status_code=204, dependencies=[Depends(require_roles("books", "update"))])
def update_book(
    request: Request,
    book_id: int,
    payload: Optional[dict[str, Any]] = Body(default=None),
) -> Response:
    return to_response(_handler(request).update(book_id, payload))


@router.delete("/books/{book_id}", status_code=204, dependencies=[Depends(require_roles("books", "delete"))])
def delete_book(request: Request, book_id: int) -> Response:
    return to_response(_handler(request).delete(book_id))
