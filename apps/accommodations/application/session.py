"""
Session collaborators

The engine only needs to know who is calling. Authentication itself is
done by DRF (JWT or session); these helpers turn the authenticated user
into a plain identity.
"""

from dataclasses import dataclass
from typing import Optional

from django.contrib.auth import get_user_model

from apps.accommodations.domain.errors import AuthenticationRequiredError


@dataclass(frozen=True)
class UserIdentity:
    user_id: int
    email: str
    is_admin: bool = False


def resolve_user(user) -> Optional[UserIdentity]:
    """Identity of an authenticated user, None for anonymous requests"""
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    is_admin = bool(
        getattr(user, 'is_staff', False)
        or getattr(user, 'is_superuser', False)
        or (hasattr(user, 'is_admin') and user.is_admin())
    )
    return UserIdentity(user_id=user.pk, email=user.email, is_admin=is_admin)


def require_user(user) -> UserIdentity:
    identity = resolve_user(user)
    if identity is None:
        raise AuthenticationRequiredError()
    return identity


def lookup_user_id(email: str) -> Optional[int]:
    """User id for an email (case-insensitive), None when unknown"""
    if not email:
        return None
    User = get_user_model()
    return (
        User.objects.filter(email__iexact=email.strip())
        .values_list('pk', flat=True)
        .first()
    )
