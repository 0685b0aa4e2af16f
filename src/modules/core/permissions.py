"""Role-based DRF permissions.

``ADMIN_ROLE`` users may mutate the catalog.  A Django user qualifies
through ``is_staff`` or membership in a group of that name; an Auth0
user through its roles/permissions claim.
"""

from __future__ import annotations

import structlog
from rest_framework.permissions import SAFE_METHODS, BasePermission

logger = structlog.get_logger(__name__)

ADMIN_ROLE = "Admin"


def user_has_admin_role(user) -> bool:
    if not user or not getattr(user, "is_authenticated", False):
        return False
    if getattr(user, "is_staff", False):
        return True
    has_role = getattr(user, "has_role", None)
    if callable(has_role):
        return has_role(ADMIN_ROLE)
    groups = getattr(user, "groups", None)
    if groups is not None:
        return groups.filter(name=ADMIN_ROLE).exists()
    return False


class IsAdminRole(BasePermission):
    """Grant access only to users holding the Admin role."""

    message = "Admin role required."

    def has_permission(self, request, view) -> bool:
        allowed = user_has_admin_role(request.user)
        if not allowed and request.user and request.user.is_authenticated:
            logger.warning(
                "admin_role_denied",
                user=str(request.user),
                method=request.method,
                path=request.path,
            )
        return allowed
