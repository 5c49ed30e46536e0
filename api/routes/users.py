"""
api/routes/users.py -- Login endpoint.

Routes:
  POST /users -- exchange username + password for a signed JWT (anonymous)

Security:
  POST /users is rate-limited per client IP (Settings.login_rate_limit).
  authenticate_user() provides timing equalization -- use it, never inline
  get_by_username() + verify_password().
  Failed logins get one generic error; the submitted credentials are never
  echoed back.
  Cache-Control: no-store on every response carrying or refusing a token.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import LoginRequest, LoginResponse
from api.responses import error_response, to_response
from api.results import Result
from auth.store import UserStore
from auth.tokens import authenticate_user, create_access_token
from core.config import get_settings

logger = logging.getLogger("bookstore.api.users")

router = APIRouter()


# SlowAPIMiddleware finds this limit by the endpoint's qualified name.
@limiter.limit(get_settings().login_rate_limit)
@router.post("/users", response_model=LoginResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with username and password; return a bearer token."""
    user_store: UserStore = request.app.state.user_store
    try:
        logger.info("User %s is trying to log on.", body.username)
        user = authenticate_user(user_store, body.username, body.password)
        if user is None:
            logger.info("User %s not authenticated.", body.username)
            resp = error_response(401, "bad_credentials", "Invalid username or password.")
        else:
            logger.info("User %s logged on successfully.", body.username)
            token = create_access_token(user.id, user.email, user.roles)
            resp = JSONResponse(status_code=200, content=LoginResponse(token=token).model_dump())
    except Exception:
        logger.exception("Error when trying to log on user %s", body.username)
        resp = to_response(Result.failed())
    resp.headers["Cache-Control"] = "no-store"
    return resp
