"""Unit tests for api/handlers.py -- ResourceHandler outcomes.

Uses an in-memory fake repository so each failure mode can be forced
directly: a store that reports False, a store that raises, and the ordering
of the id / existence / validation checks. No FastAPI, no DB.
"""

from __future__ import annotations

import logging
from typing import Optional

import pytest

from api.handlers import ResourceHandler
from api.mapper import AuthorMapper
from api.models import AuthorRead
from api.results import Outcome
from catalog.models import Author


class FakeAuthorRepository:
    """Dict-backed Repository[Author]. Flags force store-reported failures."""

    def __init__(self) -> None:
        self.rows: dict[int, Author] = {}
        self.next_id = 1
        self.fail_writes = False
        self.raise_on_read: Optional[Exception] = None

    def find_all(self) -> list[Author]:
        if self.raise_on_read:
            raise self.raise_on_read
        return list(self.rows.values())

    def find_by_id(self, entity_id: int) -> Optional[Author]:
        if self.raise_on_read:
            raise self.raise_on_read
        return self.rows.get(entity_id)

    def create(self, entity: Author) -> bool:
        if self.fail_writes:
            return False
        entity.id = self.next_id
        self.next_id += 1
        self.rows[entity.id] = entity
        return True

    def update(self, entity: Author) -> bool:
        if self.fail_writes or entity.id not in self.rows:
            return False
        self.rows[entity.id] = entity
        return True

    def delete(self, entity: Author) -> bool:
        if self.fail_writes:
            return False
        return self.rows.pop(entity.id, None) is not None

    def is_exists(self, entity_id: int) -> bool:
        return entity_id in self.rows


@pytest.fixture
def repo() -> FakeAuthorRepository:
    return FakeAuthorRepository()


@pytest.fixture
def handler(repo: FakeAuthorRepository) -> ResourceHandler[Author]:
    return ResourceHandler("Author", repo, AuthorMapper())


def _seed(repo: FakeAuthorRepository, **fields) -> Author:
    author = Author(firstname=fields.get("firstname", "Ada"), lastname=fields.get("lastname", "Lovelace"))
    repo.create(author)
    return author


class TestReads:
    def test_list_maps_to_dtos(self, handler, repo) -> None:
        author = _seed(repo)
        result = handler.list()
        assert result.outcome is Outcome.OK
        assert result.value == [AuthorRead(id=author.id, first_name="Ada", last_name="Lovelace")]

    def test_get_missing_logs_warning(self, handler, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="bookstore.handlers.author"):
            result = handler.get(5)
        assert result.outcome is Outcome.NOT_FOUND
        assert "Author not found - Id: 5" in caplog.text

    def test_read_exception_becomes_failed(self, handler, repo, caplog) -> None:
        repo.raise_on_read = RuntimeError("connection reset")
        with caplog.at_level(logging.ERROR, logger="bookstore.handlers.author"):
            result = handler.list()
        assert result.outcome is Outcome.FAILED
        assert result.message == ""
        assert "connection reset" in caplog.text


class TestCreate:
    def test_created_carries_new_id(self, handler) -> None:
        result = handler.create({"firstName": "Grace", "lastName": "Hopper"})
        assert result.outcome is Outcome.CREATED
        assert result.value.id == 1
        assert result.value.first_name == "Grace"

    def test_null_payload(self, handler) -> None:
        assert handler.create(None).outcome is Outcome.INVALID

    def test_validation_errors_listed(self, handler) -> None:
        result = handler.create({"firstName": "Grace"})
        assert result.outcome is Outcome.INVALID
        assert any(e.startswith("lastName") for e in result.errors)

    def test_store_reported_failure(self, handler, repo) -> None:
        repo.fail_writes = True
        assert handler.create({"firstName": "Grace", "lastName": "Hopper"}).outcome is Outcome.FAILED


class TestUpdate:
    @pytest.mark.parametrize(
        "path_id,payload",
        [
            (0, {"id": 0, "firstName": "A", "lastName": "B"}),
            (1, None),
            (1, {"id": 2, "firstName": "A", "lastName": "B"}),
            (1, {"id": "1", "firstName": "A", "lastName": "B"}),
            (1, {"id": True, "firstName": "A", "lastName": "B"}),
        ],
    )
    def test_id_rules_checked_before_store(self, handler, repo, path_id, payload) -> None:
        _seed(repo)
        assert handler.update(path_id, payload).outcome is Outcome.INVALID

    def test_missing_entity(self, handler) -> None:
        assert handler.update(9, {"id": 9, "firstName": "A", "lastName": "B"}).outcome is Outcome.NOT_FOUND

    def test_invalid_fields_after_existence(self, handler, repo) -> None:
        author = _seed(repo)
        result = handler.update(author.id, {"id": author.id, "firstName": ""})
        assert result.outcome is Outcome.INVALID
        assert result.errors

    def test_success(self, handler, repo) -> None:
        author = _seed(repo)
        result = handler.update(author.id, {"id": author.id, "firstName": "Augusta", "lastName": "King"})
        assert result.outcome is Outcome.NO_CONTENT
        assert repo.rows[author.id].firstname == "Augusta"

    def test_store_reported_failure(self, handler, repo) -> None:
        author = _seed(repo)
        repo.fail_writes = True
        result = handler.update(author.id, {"id": author.id, "firstName": "A", "lastName": "B"})
        assert result.outcome is Outcome.FAILED


class TestDelete:
    def test_invalid_id(self, handler) -> None:
        assert handler.delete(-3).outcome is Outcome.INVALID

    def test_missing(self, handler) -> None:
        assert handler.delete(3).outcome is Outcome.NOT_FOUND

    def test_success(self, handler, repo) -> None:
        author = _seed(repo)
        assert handler.delete(author.id).outcome is Outcome.NO_CONTENT
        assert author.id not in repo.rows

    def test_store_reported_failure(self, handler, repo, caplog) -> None:
        author = _seed(repo)
        repo.fail_writes = True
        with caplog.at_level(logging.ERROR, logger="bookstore.handlers.author"):
            result = handler.delete(author.id)
        assert result.outcome is Outcome.FAILED
        assert "Author delete failed." in caplog.text

    def test_exception_during_fetch(self, handler, repo) -> None:
        author = _seed(repo)
        repo.raise_on_read = ValueError("corrupt row")
        assert handler.delete(author.id).outcome is Outcome.FAILED
