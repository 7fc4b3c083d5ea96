"""Tests for the tagged error envelope and storage error wrapping."""

from __future__ import annotations

import pytest
from django.db import DatabaseError, IntegrityError
from rest_framework import exceptions

from shared.domain.errors import DomainError, StorageUnavailableError
from shared.infrastructure.api import success, tagged_exception_handler
from shared.infrastructure.db import storage_guard


class OutOfRooms(DomainError):
    code = "out_of_rooms"
    status_code = 409
    default_message = "No rooms left"


def test_domain_error_envelope():
    response = tagged_exception_handler(OutOfRooms(details={"stay": "A"}), {})

    assert response.status_code == 409
    assert response.data == {
        "status": "error",
        "code": "out_of_rooms",
        "message": "No rooms left",
        "details": {"stay": "A"},
    }


def test_database_error_is_reported_as_unavailable():
    response = tagged_exception_handler(DatabaseError("connection lost"), {"view": None})

    assert response.status_code == 503
    assert response.data["code"] == "storage_unavailable"
    assert "connection lost" not in response.data["message"]


def test_drf_validation_error_keeps_field_details():
    exc = exceptions.ValidationError({"email": ["Enter a valid email address."]})

    response = tagged_exception_handler(exc, {"view": None, "request": None})

    assert response.status_code == 400
    assert response.data["code"] == "validation_error"
    assert response.data["message"] == "Enter a valid email address."
    assert "email" in response.data["details"]


def test_unexpected_error_is_hidden():
    response = tagged_exception_handler(KeyError("secret"), {"view": None, "request": None})

    assert response.status_code == 500
    assert response.data["code"] == "internal_error"
    assert "secret" not in response.data["message"]


def test_success_envelope():
    response = success({"id": 1}, "Saved", 201)
    assert response.status_code == 201
    assert response.data == {"status": "success", "data": {"id": 1}, "message": "Saved"}


def test_storage_guard_wraps_database_errors_only():
    with pytest.raises(StorageUnavailableError):
        with storage_guard():
            raise IntegrityError("constraint")

    with pytest.raises(OutOfRooms):
        with storage_guard():
            raise OutOfRooms()
