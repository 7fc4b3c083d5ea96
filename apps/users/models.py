"""User models for the event accommodation platform.

Participants log in with their email. The profile fields below are the
same guest details an accommodation booking captures, so the booking form
can be pre-filled from them; the booking keeps its own copy.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Invalid phone number. Use digits only, optionally prefixed with +."),
)


class CustomUserManager(BaseUserManager):
    """Manager that uses email as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("Email is required to create a user.")
        email = self.normalize_email(email)

        for field in ("mobile_number", "whatsapp_number"):
            if extra_fields.get(field):
                extra_fields[field] = self.normalize_phone(extra_fields[field])

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.PARTICIPANT)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone: str) -> str:
        return phone.replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Platform user: an event participant or an administrator."""

    class RoleChoices(models.TextChoices):
        PARTICIPANT = "participant", _("Participant")
        ADMIN = "admin", _("Administrator")

    username = models.CharField(_("Display name"), max_length=150, blank=True)
    email = models.EmailField(_("Email"), unique=True)
    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.PARTICIPANT,
    )
    name = models.CharField(_("Full name"), max_length=255, blank=True)
    mobile_number = models.CharField(
        _("Mobile number"), max_length=20, blank=True, validators=[PHONE_VALIDATOR]
    )
    whatsapp_number = models.CharField(
        _("WhatsApp number"), max_length=20, blank=True, validators=[PHONE_VALIDATOR]
    )
    state = models.CharField(_("State"), max_length=100, blank=True)
    district = models.CharField(_("District"), max_length=100, blank=True)
    college_name = models.CharField(_("Institution name"), max_length=255, blank=True)
    college_address = models.CharField(_("Institution address"), max_length=500, blank=True)
    failed_login_attempts = models.PositiveIntegerField(default=0)
    locked_until = models.DateTimeField(_("Locked until"), null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: list[str] = []

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    def is_admin(self) -> bool:
        return self.role == self.RoleChoices.ADMIN or self.is_superuser

    @property
    def is_locked(self) -> bool:
        return bool(self.locked_until and self.locked_until > timezone.now())

    def lock(self, minutes: int = 15) -> None:
        self.locked_until = timezone.now() + timedelta(minutes=minutes)
        self.failed_login_attempts = 0
        self.save(update_fields=["locked_until", "failed_login_attempts"])

    def unlock(self) -> None:
        self.locked_until = None
        self.failed_login_attempts = 0
        self.save(update_fields=["locked_until", "failed_login_attempts"])

    def register_failed_attempt(self, threshold: int = 5) -> None:
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= threshold:
            self.lock()
            return
        self.save(update_fields=["failed_login_attempts"])


User = CustomUser
