"""
auth/store.py -- SQLAlchemy Core persistence layer for users and roles.

Pattern: Repository + Data Mapper (same as catalog/store.py).
UserStore is the repository; _row_to_user / _row_to_role are the mappers.
Route and dependency code never touches SQL directly.

Schema:
  users       -- one row per account; username and email are UNIQUE
  roles       -- one row per role name; name is UNIQUE
  user_roles  -- many-to-many membership, composite primary key

Security:
  All queries use bound parameters. No f-strings in SQL.

Layer rule: no imports from api/ or catalog/. Import from core/ is allowed.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table, Text, func, select
from sqlalchemy.engine import Engine

from auth.models import Role, User
from core.db import make_engine

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "users",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("hashed_password", Text),
    Column("created_at", String(32), nullable=False),
    Column("is_active", Integer, nullable=False, server_default="1"),
)

_roles = Table(
    "roles",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(64), nullable=False, unique=True),
)

_user_roles = Table(
    "user_roles",
    _metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User and Role entities.

    Usage:
        store = UserStore("sqlite:///bookstore.db")
        store.create_role("Administrator")
        uid = store.create_user(User(username="admin", email="admin@bookstore.com", hashed_password=...))
        store.add_to_role(uid, "Administrator")
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        _metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, user: User) -> int:
        """Insert a new user and return its assigned database ID.

        Raises sqlalchemy.exc.IntegrityError if the username or email already
        exists.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _users.insert().values(
                    username=user.username,
                    email=user.email,
                    hashed_password=user.hashed_password,
                    created_at=_now_iso(),
                    is_active=1 if user.is_active else 0,
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def get_by_username(self, username: str) -> User | None:
        """Look up a user by exact username (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.username == username)).fetchone()
            if row is None:
                return None
            return _row_to_user(row, self._role_names(conn, row.id))

    def get_by_id(self, user_id: int) -> User | None:
        """Look up a user by primary key. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.id == user_id)).fetchone()
            if row is None:
                return None
            return _row_to_user(row, self._role_names(conn, row.id))

    def count_users(self) -> int:
        with self.engine.connect() as conn:
            result = conn.execute(select(func.count()).select_from(_users)).scalar()
        return result or 0

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    def role_exists(self, name: str) -> bool:
        with self.engine.connect() as conn:
            row = conn.execute(select(_roles.c.id).where(_roles.c.name == name)).fetchone()
        return row is not None

    def create_role(self, name: str) -> int:
        """Insert a role and return its ID. Raises IntegrityError on a duplicate name."""
        with self.engine.connect() as conn:
            result = conn.execute(_roles.insert().values(name=name))
            conn.commit()
            return result.inserted_primary_key[0]

    def list_roles(self) -> list[Role]:
        with self.engine.connect() as conn:
            rows = conn.execute(_roles.select().order_by(_roles.c.name)).fetchall()
        return [_row_to_role(r) for r in rows]

    def add_to_role(self, user_id: int, role_name: str) -> bool:
        """Grant role_name to the user. Returns False if the role does not exist."""
        with self.engine.connect() as conn:
            role_id = conn.execute(select(_roles.c.id).where(_roles.c.name == role_name)).scalar()
            if role_id is None:
                return False
            conn.execute(_user_roles.insert().values(user_id=user_id, role_id=role_id))
            conn.commit()
        return True

    def _role_names(self, conn, user_id: int) -> list[str]:
        rows = conn.execute(
            select(_roles.c.name)
            .select_from(_user_roles.join(_roles, _user_roles.c.role_id == _roles.c.id))
            .where(_user_roles.c.user_id == user_id)
            .order_by(_roles.c.name)
        ).fetchall()
        return [r.name for r in rows]

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row, roles: list[str]) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        hashed_password=row.hashed_password,
        roles=roles,
        created_at=row.created_at,
        is_active=bool(row.is_active),
    )


def _row_to_role(row) -> Role:
    return Role(id=row.id, name=row.name)
