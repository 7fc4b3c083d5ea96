"""Serializers for authentication flows (register, login)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore


User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    password_confirm = serializers.CharField(min_length=8, write_only=True)
    name = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs.get("password") != attrs.get("password_confirm"):
            raise serializers.ValidationError({"password_confirm": "Passwords do not match."})
        if User.objects.filter(email__iexact=attrs.get("email")).exists():
            raise serializers.ValidationError({"email": "A user with this email already exists."})
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        validated_data.pop("password_confirm", None)
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs.get("email", ""))
        except User.DoesNotExist:
            raise serializers.ValidationError({"email": "Invalid email or password."})

        if user.is_locked:
            raise serializers.ValidationError(
                {"non_field_errors": ["Account temporarily locked. Try again later."]}
            )

        if not user.check_password(attrs.get("password", "")):
            user.register_failed_attempt(threshold=5)
            raise serializers.ValidationError({"email": "Invalid email or password."})

        if user.failed_login_attempts or user.locked_until:
            user.unlock()

        attrs["user"] = user
        return attrs
