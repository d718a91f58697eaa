"""DRF permissions backed by the dashboard role hierarchy.

Each class delegates to :func:`accounts.permissions.require_role`, so a
failed check raises ``Unauthorized`` / ``Forbidden`` and the exception
handler turns it into a ``{"success": false}`` body.
"""
from rest_framework.permissions import BasePermission

from accounts.models import User
from accounts.permissions import require_role


class RolePermission(BasePermission):
    min_role = User.Role.VIEWER

    def has_permission(self, request, view):
        require_role(request.user, self.min_role)
        return True


class IsViewer(RolePermission):
    min_role = User.Role.VIEWER


class IsEditor(RolePermission):
    min_role = User.Role.EDITOR


class IsAdminRole(RolePermission):
    min_role = User.Role.ADMIN


class HasActionRole(BasePermission):
    """Per-action minimum role taken from ``view.action_roles``.

    Actions missing from the mapping fall back to ``view.default_role``
    (VIEWER when unset).
    """

    def has_permission(self, request, view):
        roles = getattr(view, "action_roles", {}) or {}
        default = getattr(view, "default_role", User.Role.VIEWER)
        require_role(request.user, roles.get(getattr(view, "action", None), default))
        return True
