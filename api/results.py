"""
api/results.py -- Explicit outcome of a resource handler operation.

Handlers never raise to signal a client or store problem; they return a
Result and api/responses.py picks the status code. A store that reports
"not written" and a store that raises both come back as Outcome.FAILED.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Outcome(str, Enum):
    OK = "ok"
    CREATED = "created"
    NO_CONTENT = "no_content"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    FAILED = "failed"


@dataclass(frozen=True)
class Result:
    outcome: Outcome
    value: Any = None
    message: str = ""
    errors: tuple[str, ...] = ()

    @property
    def is_success(self) -> bool:
        return self.outcome in (Outcome.OK, Outcome.CREATED, Outcome.NO_CONTENT)

    @classmethod
    def ok(cls, value: Any) -> Result:
        return cls(Outcome.OK, value=value)

    @classmethod
    def created(cls, value: Any) -> Result:
        return cls(Outcome.CREATED, value=value)

    @classmethod
    def no_content(cls) -> Result:
        return cls(Outcome.NO_CONTENT)

    @classmethod
    def not_found(cls, message: str) -> Result:
        return cls(Outcome.NOT_FOUND, message=message)

    @classmethod
    def invalid(cls, message: str, errors: tuple[str, ...] = ()) -> Result:
        return cls(Outcome.INVALID, message=message, errors=errors)

    @classmethod
    def failed(cls) -> Result:
        # Deliberately carries no message: internal detail stays in the log.
        return cls(Outcome.FAILED)
