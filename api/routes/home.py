"""
api/routes/home.py -- Diagnostic endpoints, unauthenticated.

Each verb writes one log line at a different level so an operator can check
that the logging pipeline is wired end to end.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Response

logger = logging.getLogger("bookstore.home")

router = APIRouter()


@router.get("/home")
def list_values() -> list[str]:
    logger.info("Accessed Home Controller")
    return ["value1", "value2"]


@router.get("/home/{item_id}")
def get_value(item_id: int) -> str:
    logger.debug("Got a value")
    return "value"


@router.post("/home")
def post_value(value: Optional[str] = Body(default=None)) -> Response:
    logger.error("This is an error!")
    return Response(status_code=200)


@router.put("/home/{item_id}")
def put_value(item_id: int, value: Optional[str] = Body(default=None)) -> Response:
    logger.warning("This is a warning!")
    return Response(status_code=200)


@router.delete("/home/{item_id}")
def delete_value(item_id: int) -> Response:
    return Response(status_code=200)
