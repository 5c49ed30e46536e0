"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in catalog/models.py -- dataclasses own domain shape; stores and routes do
the work.

Layer rule: no imports from api/ or catalog/.
"""

from __future__ import annotations

from dataclasses import dataclass, field

ADMINISTRATOR = "Administrator"
CUSTOMER = "Customer"


@dataclass
class User:
    """An account that can log in to the bookstore.

    email is the token subject; username is what the login form submits.
    roles is filled by the store on reads. It is never written through
    create_user() -- memberships go through UserStore.add_to_role().
    """

    username: str
    email: str
    id: int | None = None
    hashed_password: str | None = None
    roles: list[str] = field(default_factory=list)
    created_at: str | None = None
    is_active: bool = True


@dataclass
class Role:
    """A named role. Role names are unique."""

    name: str
    id: int | None = None
