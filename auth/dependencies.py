"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

Clients authenticate with an "Authorization: Bearer <token>" header carrying
a JWT issued by POST /api/users.

try_get_current_user() is the soft variant (returns None on failure).
get_current_user() wraps it and raises HTTP 401 if unauthenticated.
require_roles(resource, action) builds a dependency that enforces the entry
in auth/policy.py, raising 403 when the token lacks every allowed role.

Layer rule: no imports from catalog/.
  auth/dependencies.py may import from fastapi (for HTTPException/Request)
  because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import HTTPException, Request

from auth.models import User
from auth.policy import is_allowed, required_roles
from auth.tokens import decode_access_token


def try_get_current_user(request: Request) -> User | None:
    """Authenticate the request from its Bearer token.

    Returns the User on success, None on any failure. The role list on the
    returned User is the one carried by the token (the role claims), not a
    fresh DB read.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    payload = decode_access_token(auth_header[7:])
    if payload is None:
        return None
    user = request.app.state.user_store.get_by_id(payload["user_id"])
    if user is None or not user.is_active:
        return None
    user.roles = [str(r) for r in payload["roles"]]
    return user


def get_current_user(request: Request) -> User:
    """Require authentication. Raises HTTP 401 if the request is not authenticated."""
    user = try_get_current_user(request)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail={"code": "unauthorized", "message": "Authentication required."},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_roles(resource: str, action: str) -> Callable[[Request], User | None]:
    """Build a dependency enforcing the policy entry for (resource, action).

    Anonymous entries short-circuit without touching the token, so a stale
    Authorization header never breaks a public endpoint.

    Use as a FastAPI dependency:
        @router.post("/authors", dependencies=[Depends(require_roles("authors", "create"))])
    """
    # Resolve at build time so a missing policy entry fails on import.
    needed = required_roles(resource, action)

    def dependency(request: Request) -> User | None:
        if not needed:
            return None
        user = get_current_user(request)
        if not is_allowed(user.roles, resource, action):
            raise HTTPException(
                status_code=403,
                detail={
                    "code": "forbidden",
                    "message": f"Requires one of: {', '.join(sorted(needed))}.",
                },
            )
        return user

    return dependency
