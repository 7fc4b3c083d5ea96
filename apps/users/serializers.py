"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "role",
            "mobile_number",
            "whatsapp_number",
            "state",
            "district",
            "college_name",
            "college_address",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "email", "role", "created_at", "updated_at"]


class PhoneNumberField(serializers.CharField):
    """Strips spaces and dashes before the format check."""

    def to_internal_value(self, data):  # type: ignore
        value = super().to_internal_value(data)
        return User.objects.normalize_phone(value)


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Profile fields a participant edits before booking accommodation."""

    name = serializers.CharField(max_length=255)
    mobile_number = PhoneNumberField(max_length=20, validators=[PHONE_VALIDATOR])
    whatsapp_number = PhoneNumberField(
        max_length=20, validators=[PHONE_VALIDATOR], required=False, allow_blank=True
    )
    state = serializers.CharField(max_length=100)
    district = serializers.CharField(max_length=100)
    college_name = serializers.CharField(max_length=255)
    college_address = serializers.CharField(max_length=500)

    class Meta:
        model = User
        fields = [
            "name",
            "mobile_number",
            "whatsapp_number",
            "state",
            "district",
            "college_name",
            "college_address",
        ]

