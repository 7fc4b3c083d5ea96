"""Database helpers shared by the repositories."""

from __future__ import annotations

import logging
from contextlib import contextmanager

from django.db import DatabaseError, transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from shared.domain.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


def lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


@contextmanager
def storage_guard():
    """Surface any record store failure as StorageUnavailableError."""

    try:
        yield
    except StorageUnavailableError:
        raise
    except DatabaseError as exc:
        logger.error(f"Record store failure: {exc.__class__.__name__}: {exc}", exc_info=True)
        raise StorageUnavailableError() from exc
