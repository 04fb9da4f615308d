"""
Role based permission classes.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

from intercambio.models import Usuario


class IsAdminOrReadOnly(BasePermission):
    """Anyone authenticated may read; only administrators may write."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        return request.method in SAFE_METHODS or getattr(user, "rol", None) == Usuario.ROL_ADMIN
