"""
api/routes/authors.py -- Author CRUD routes.

Routes:
  GET    /authors          -- list all authors
  GET    /authors/{id}     -- author detail
  POST   /authors          -- create (201 with the new author)
  PUT    /authors/{id}     -- replace (204); body id must equal path id
  DELETE /authors/{id}     -- delete (204); the author's books keep existing

Role requirements come from auth/policy.py, not from this module.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Request, Response

from api.handlers import ResourceHandler
from api.responses import to_response
from auth.dependencies import require_roles
from catalog.models import Author

router = APIRouter()


def _handler(request: Request) -> ResourceHandler[Author]:
    return request.app.state.author_handler


@router.get("/authors", dependencies=[Depends(require_roles("authors", "list"))])
def list_authors(request: Request) -> Response:
    return to_response(_handler(request).list())


@router.get("/authors/{author_id}", dependencies=[Depends(require_roles("authors", "get"))])
def get_author(request: Request, author_id: int) -> Response:
    return to_response(_handler(request).get(author_id))


@router.post("/authors", status_code=201, dependencies=[Depends(require_roles("authors", "create"))])
def create_author(request: Request, payload: Optional[dict[str, Any]] = Body(default=None)) -> Response:
    return to_response(_handler(request).create(payload))


@router.put("/authors/{author_id}", status_code=204, dependencies=[Depends(require_roles("authors", "update"))])
def update_author(
    request: Request,
    author_id: int,
    payload: Optional[dict[str, Any]] = Body(default=None),
) -> Response:
    return to_response(_handler(request).update(author_id, payload))


@router.delete("/authors/{author_id}", status_code=204, dependencies=[Depends(require_roles("authors", "delete"))])
def delete_author(request: Request, author_id: int) -> Response:
    return to_response(_handler(request).delete(author_id))
