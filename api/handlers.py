"""
api/handlers.py -- The request-handling pattern shared by Books and Authors.

ResourceHandler is generic over the entity type. It is built with an explicit
repository, mapper and logger (see api/main.py attach_stores), never looked up
from a container. Every public operation returns an api.results.Result.

Order of checks per operation:
  list    -- fetch all, map
  get     -- fetch; missing -> NOT_FOUND
  create  -- null payload -> INVALID; field validation -> INVALID; persist
  update  -- id < 1 / null payload / embedded id != path id -> INVALID;
             missing -> NOT_FOUND; field validation -> INVALID; persist
  delete  -- id < 1 -> INVALID; missing -> NOT_FOUND; fetch, delete

Payloads arrive as raw dicts so the id checks and the existence check run
before field validation.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError

from api.mapper import Mapper
from api.responses import format_errors
from api.results import Result
from catalog.store import Repository

E = TypeVar("E")


def _guarded(method):
    """Turn any exception escaping a handler operation into Result.failed().

    The traceback (including chained causes) goes to the handler's logger;
    the caller only ever sees the generic failure.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs) -> Result:
        try:
            return method(self, *args, **kwargs)
        except Exception:
            self.logger.exception("Error during %s %s", self.name, method.__name__)
            return Result.failed()

    return wrapper


def _embedded_id(payload: Mapping[str, Any]) -> Optional[int]:
    value = payload.get("id")
    # bool is an int subclass; {"id": true} is not an id.
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


class ResourceHandler(Generic[E]):
    """CRUD operations for one resource.

    Args:
        name:       Singular display name used in log lines ("Author").
        repository: Anything implementing catalog.store.Repository[E].
        mapper:     Converts DTOs to E and back.
        logger:     Defaults to bookstore.handlers.<name lowercased>.
    """

    def __init__(
        self,
        name: str,
        repository: Repository[E],
        mapper: Mapper[E],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.name = name
        self.repository = repository
        self.mapper = mapper
        self.logger = logger or logging.getLogger(f"bookstore.handlers.{name.lower()}")

    @_guarded
    def list(self) -> Result:
        entities = self.repository.find_all()
        return Result.ok([self.mapper.to_dto(e) for e in entities])

    @_guarded
    def get(self, entity_id: int) -> Result:
        entity = self.repository.find_by_id(entity_id)
        if entity is None:
            self.logger.warning("%s not found - Id: %s", self.name, entity_id)
            return Result.not_found(f"{self.name} {entity_id} not found.")
        return Result.ok(self.mapper.to_dto(entity))

    @_guarded
    def create(self, payload: Optional[Mapping[str, Any]]) -> Result:
        if payload is None:
            self.logger.warning("Empty %s was submitted.", self.name)
            return Result.invalid(f"{self.name} data is required.")

        try:
            dto = self.mapper.create_model.model_validate(payload)
        except ValidationError as exc:
            self.logger.warning("%s data was incomplete.", self.name)
            return Result.invalid(f"{self.name} data is invalid.", format_errors(exc.errors()))

        entity = self.mapper.to_entity(dto)
        if not self.repository.create(entity):
            self.logger.error("%s creation failed.", self.name)
            return Result.failed()
        # Re-read so relations resolved by the store (a book's author) are included.
        stored = self.repository.find_by_id(entity.id) or entity
        return Result.created(self.mapper.to_dto(stored))

    @_guarded
    def update(self, entity_id: int, payload: Optional[Mapping[str, Any]]) -> Result:
        if entity_id < 1 or payload is None or _embedded_id(payload) != entity_id:
            self.logger.warning("Empty %s was submitted or id is invalid.", self.name)
            return Result.invalid(f"{self.name} id is invalid or does not match the request path.")

        if not self.repository.is_exists(entity_id):
            self.logger.warning("%s was not found - Id: %s", self.name, entity_id)
            return Result.not_found(f"{self.name} {entity_id} not found.")

        try:
            dto = self.mapper.update_model.model_validate(payload)
        except ValidationError as exc:
            self.logger.warning("%s data was incomplete.", self.name)
            return Result.invalid(f"{self.name} data is invalid.", format_errors(exc.errors()))

        if not self.repository.update(self.mapper.to_entity(dto)):
            self.logger.error("%s update failed.", self.name)
            return Result.failed()
        return Result.no_content()

    @_guarded
    def delete(self, entity_id: int) -> Result:
        if entity_id < 1:
            self.logger.warning("Invalid %s Id: %s", self.name, entity_id)
            return Result.invalid(f"{self.name} id must be a positive integer.")

        if not self.repository.is_exists(entity_id):
            self.logger.warning("%s was not found - Id: %s", self.name, entity_id)
            return Result.not_found(f"{self.name} {entity_id} not found.")

        entity = self.repository.find_by_id(entity_id)
        if entity is None or not self.repository.delete(entity):
            self.logger.error("%s delete failed.", self.name)
            return Result.failed()
        return Result.no_content()
