"""Role hierarchy and the assertion-style gate used by every mutating action."""

from __future__ import annotations

ROLE_HIERARCHY = {
    "ADMIN": 3,
    "EDITOR": 2,
    "VIEWER": 1,
}


class AccessDenied(Exception):
    """Base class for role gate failures."""

    default_message = "Access denied"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(AccessDenied):
    """No usable session: missing, unresolvable or deactivated user."""

    default_message = "Unauthorized"


class Forbidden(AccessDenied):
    """Session is valid but its role is below the required level."""

    default_message = "Forbidden: insufficient permissions"


def role_level(role) -> int:
    """Numeric level of *role*; unknown roles are 0."""
    return ROLE_HIERARCHY.get(str(role or ""), 0)


def has_role(user, min_role: str) -> bool:
    try:
        require_role(user, min_role)
    except AccessDenied:
        return False
    return True


def require_role(user, min_role: str):
    """Raise unless *user* is an active account with at least *min_role*.

    *user* is whatever session resolution produced: ``None``, an anonymous
    user, or a ``User`` instance. Returns the user on success.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        raise Unauthorized()
    if not user.is_active:
        raise Unauthorized("Account is deactivated")
    if role_level(user.role) < role_level(min_role):
        raise Forbidden()
    return user
