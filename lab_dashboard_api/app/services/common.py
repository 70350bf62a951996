"""Helpers shared by the resource services."""

from typing import Any, Dict

from lab_dashboard_api.app.core.errors import NotFoundError
from lab_dashboard_api.app.core.store import EntityStore


def require(store: EntityStore, record_id: str, message: str) -> Dict[str, Any]:
    """Return the record with ``record_id`` or raise :class:`NotFoundError`."""
    record = store.get(record_id) if record_id else None
    if record is None:
        raise NotFoundError(message)
    return record


def require_child(
    store: EntityStore,
    record_id: str,
    parent_field: str,
    parent_id: str,
    message: str,
) -> Dict[str, Any]:
    """Like :func:`require` but the record must also belong to ``parent_id``."""
    record = require(store, record_id, message)
    if record.get(parent_field) != parent_id:
        raise NotFoundError(message)
    return record
