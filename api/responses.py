"""
api/responses.py -- Map handler Results onto HTTP responses.

The only place that knows which status code belongs to which Outcome.
Error bodies use the same ErrorResponse envelope as the exception handlers
in api/main.py.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from api.models import ErrorDetail, ErrorResponse
from api.results import Outcome, Result

GENERIC_FAILURE = "Something went wrong. Please contact the Administrator."

_STATUS: dict[Outcome, int] = {
    Outcome.OK: 200,
    Outcome.CREATED: 201,
    Outcome.NO_CONTENT: 204,
    Outcome.NOT_FOUND: 404,
    Outcome.INVALID: 400,
    Outcome.FAILED: 500,
}

_ERROR_CODES: dict[Outcome, str] = {
    Outcome.NOT_FOUND: "not_found",
    Outcome.INVALID: "invalid_request",
    Outcome.FAILED: "internal_error",
}


def format_errors(errors: Iterable[Mapping[str, Any]]) -> tuple[str, ...]:
    """Render validation errors as "field: message" lines.

    Only loc and msg are used. The submitted input is never copied into a
    response, so a rejected login body cannot echo its password.
    """
    lines = []
    for err in errors:
        loc = ".".join(str(part) for part in err.get("loc", ())) or "body"
        lines.append(f"{loc}: {err.get('msg', 'invalid')}")
    return tuple(lines)


def error_response(status_code: int, code: str, message: str, detail: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail)).model_dump(),
    )


def to_response(result: Result) -> Response:
    status_code = _STATUS[result.outcome]

    if result.outcome is Outcome.NO_CONTENT:
        return Response(status_code=status_code)

    if result.is_success:
        return JSONResponse(status_code=status_code, content=jsonable_encoder(result.value, by_alias=True))

    if result.outcome is Outcome.FAILED:
        return error_response(status_code, _ERROR_CODES[result.outcome], GENERIC_FAILURE)

    detail = "; ".join(result.errors) if result.errors else None
    return error_response(status_code, _ERROR_CODES[result.outcome], result.message, detail)
