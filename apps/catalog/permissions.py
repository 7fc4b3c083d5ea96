"""Permission classes for catalog and admin endpoints."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_admin(user) -> bool:
    if not getattr(user, "is_authenticated", False):
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_admin") and user.is_admin()


class IsAdmin(permissions.BasePermission):
    """Only event administrators (staff or role=admin)."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_admin(request.user)


class IsAdminOrReadOnly(permissions.BasePermission):
    """Authenticated users can read, administrators can write."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_admin(user)
