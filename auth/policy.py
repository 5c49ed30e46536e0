"""
auth/policy.py -- Role requirements for every protected endpoint, in one table.

Routes look up their requirement here instead of declaring roles inline, so
the whole access policy can be reviewed at a glance. An empty frozenset means
the endpoint is anonymous.

Layer rule: no imports outside auth/.
"""

from __future__ import annotations

from auth.models import ADMINISTRATOR, CUSTOMER

ANONYMOUS: frozenset[str] = frozenset()

ROLE_REQUIREMENTS: dict[tuple[str, str], frozenset[str]] = {
    ("authors", "list"): ANONYMOUS,
    ("authors", "get"): ANONYMOUS,
    ("authors", "create"): frozenset({ADMINISTRATOR}),
    ("authors", "update"): frozenset({ADMINISTRATOR, CUSTOMER}),
    ("authors", "delete"): frozenset({ADMINISTRATOR}),
    ("books", "list"): ANONYMOUS,
    ("books", "get"): ANONYMOUS,
    ("books", "create"): ANONYMOUS,
    ("books", "update"): ANONYMOUS,
    ("books", "delete"): ANONYMOUS,
}


def required_roles(resource: str, action: str) -> frozenset[str]:
    """Return the roles allowed to perform action on resource.

    Raises KeyError for a pair missing from the table, so a new route cannot
    silently ship without a policy entry.
    """
    return ROLE_REQUIREMENTS[(resource, action)]


def is_allowed(roles: list[str], resource: str, action: str) -> bool:
    """True if any of roles satisfies the requirement (always True when anonymous)."""
    needed = required_roles(resource, action)
    if not needed:
        return True
    return bool(needed.intersection(roles))
