"""
API request and response models for the Bookstore REST endpoints.

These Pydantic v2 models define the HTTP transport contract. They are
intentionally separate from the dataclasses in catalog/models.py, which own
the internal domain representation. api/mapper.py converts between the two.

JSON keys are camelCase (firstName, authorId); snake_case names are accepted
on input as well.

Create/Update/Read variants differ only in which fields are required:
  *Create -- no id
  *Update -- id required; must equal the path id (checked by the handler)
  *Read   -- id always present
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# ---------------------------------------------------------------------------
# Authors
# ---------------------------------------------------------------------------


class AuthorCreate(_WireModel):
    """Request body for POST /api/authors."""

    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=4000)


class AuthorUpdate(AuthorCreate):
    """Request body for PUT /api/authors/{id}."""

    id: int = Field(ge=1)


class AuthorRead(_WireModel):
    model_config = ConfigDict(frozen=True)

    id: int
    first_name: str
    last_name: str
    bio: Optional[str] = None


# ---------------------------------------------------------------------------
# Books
# ---------------------------------------------------------------------------


class BookCreate(_WireModel):
    """Request body for POST /api/books."""

    title: str = Field(min_length=1, max_length=255)
    isbn: str = Field(min_length=1, max_length=32)
    year: Optional[int] = Field(default=None, ge=0, le=9999)
    summary: Optional[str] = Field(default=None, max_length=4000)
    image: Optional[str] = Field(default=None, max_length=500)
    author_id: Optional[int] = Field(default=None, ge=1)


class BookUpdate(BookCreate):
    """Request body for PUT /api/books/{id}."""

    id: int = Field(ge=1)


class BookRead(_WireModel):
    """A book with its author embedded (null when author_id is unset)."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    isbn: str
    year: Optional[int] = None
    summary: Optional[str] = None
    image: Optional[str] = None
    author_id: Optional[int] = None
    author: Optional[AuthorRead] = None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for POST /api/users."""

    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)


class LoginResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str


# ---------------------------------------------------------------------------
# Errors and health
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
