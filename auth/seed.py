"""
auth/seed.py -- Idempotent creation of the baseline roles and users.

Every record is guarded by an existence lookup (role by name, user by
username), so running the seed on an already-seeded store is a no-op. The
check-then-create is not transactional; two processes seeding an empty DB at
the same instant can collide on the UNIQUE constraints, which surfaces as an
IntegrityError rather than a duplicate row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from auth.models import ADMINISTRATOR, CUSTOMER, User
from auth.store import UserStore
from auth.tokens import hash_password

logger = logging.getLogger("bookstore.seed")

SEED_ROLES: tuple[str, ...] = (ADMINISTRATOR, CUSTOMER)

# (username, email, role)
SEED_USERS: tuple[tuple[str, str, str], ...] = (
    ("admin", "admin@bookstore.com", ADMINISTRATOR),
    ("eduardo", "eduardo@bookstore.com", CUSTOMER),
    ("pamela", "pamela@bookstore.com", CUSTOMER),
)


@dataclass
class SeedReport:
    roles_created: int = 0
    users_created: int = 0


def seed_identity(store: UserStore, password: str) -> SeedReport:
    """Ensure the seed roles and users exist. Returns what was created."""
    report = SeedReport()

    for name in SEED_ROLES:
        if not store.role_exists(name):
            store.create_role(name)
            report.roles_created += 1
            logger.info("Seeded role %s", name)

    for username, email, role in SEED_USERS:
        if store.get_by_username(username) is not None:
            continue
        user_id = store.create_user(User(username=username, email=email, hashed_password=hash_password(password)))
        # Only newly created users get a role; existing memberships are left alone.
        store.add_to_role(user_id, role)
        report.users_created += 1
        logger.info("Seeded user %s (%s)", username, role)

    return report
