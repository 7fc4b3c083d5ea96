"""Tagged success/failure envelopes for the REST API.

Successful responses look like ``{"status": "success", "data": ...}`` and every
failure, whichever layer raised it, is rendered as
``{"status": "error", "code": ..., "message": ...}``.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import DatabaseError  # type: ignore
from django.http import Http404  # type: ignore
from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.errors import DomainError, StorageUnavailableError

logger = logging.getLogger(__name__)

_DRF_CODES = {
    exceptions.NotAuthenticated: "authentication_required",
    exceptions.AuthenticationFailed: "authentication_failed",
    exceptions.PermissionDenied: "permission_denied",
    exceptions.NotFound: "not_found",
    exceptions.MethodNotAllowed: "method_not_allowed",
    exceptions.ParseError: "parse_error",
    exceptions.UnsupportedMediaType: "unsupported_media_type",
    exceptions.Throttled: "throttled",
    exceptions.ValidationError: "validation_error",
}


def success(data: Any = None, message: str | None = None, status_code: int = status.HTTP_200_OK) -> Response:
    payload: dict[str, Any] = {"status": "success", "data": data}
    if message:
        payload["message"] = message
    return Response(payload, status=status_code)


def _error(code: str, message: str, status_code: int, details: Any = None) -> Response:
    payload: dict[str, Any] = {"status": "error", "code": code, "message": message}
    if details:
        payload["details"] = details
    return Response(payload, status=status_code)


def _first_message(detail: Any) -> str:
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return "Invalid input."
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else "Invalid input."
    return str(detail)


def tagged_exception_handler(exc: Exception, context: dict) -> Response:
    """DRF EXCEPTION_HANDLER rendering every failure as a tagged envelope."""

    if isinstance(exc, DomainError):
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, DatabaseError):
        logger.error(f"Database error in {context.get('view').__class__.__name__}: {exc}", exc_info=True)
        wrapped = StorageUnavailableError()
        return Response(wrapped.to_dict(), status=wrapped.status_code)

    response = exception_handler(exc, context)
    if response is None:
        logger.error(f"Unhandled error: {exc.__class__.__name__}: {exc}", exc_info=True)
        return _error("internal_error", "Something went wrong. Please try again later.", 500)

    if isinstance(exc, Http404):
        return _error("not_found", "Not found.", response.status_code)

    code = next(
        (value for klass, value in _DRF_CODES.items() if isinstance(exc, klass)),
        "request_error",
    )
    if isinstance(exc, exceptions.ValidationError):
        return _error(code, _first_message(exc.detail), response.status_code, details=exc.detail)
    return _error(code, _first_message(getattr(exc, "detail", exc)), response.status_code)
