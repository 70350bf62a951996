"""
Process-wide registry of entity stores.

``Database`` creates one :class:`EntityStore` per entity kind and wires
the ownership relations between them:

* laboratories own machines (``labId``) and inventory items (``labId``);
* machines own test records (``machineId``);
* clients own client tests (``clientId``).

Assignments, users and activities are independent top-level
collections.  Activities are kept newest first, bounded by
``settings.activity_retention`` and always read in descending
timestamp order.  Chat state lives in :class:`ChatStorage`, which is
optionally persisted to a JSON snapshot.

Services obtain the registry through :func:`get_db`; the application
calls :func:`init_db` at start-up and tests call
``init_db(reset=True)`` to start from a clean, freshly seeded state.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import Dict, Optional

from . import seed
from .chat_storage import ChatStorage
from .config import settings
from .security import hash_password
from .store import EntityStore

logger = logging.getLogger(__name__)


class Database:
    """Holds every store of the application."""

    def __init__(self, chat_path: Optional[str] = None, activity_retention: Optional[int] = None) -> None:
        self.laboratories = EntityStore("laboratories", "lab")
        self.machines = EntityStore("machines", "machine")
        self.records = EntityStore("test records", "record")
        self.inventory = EntityStore("inventory", "inv")
        self.clients = EntityStore("clients", "client")
        self.client_tests = EntityStore("client tests", "ct")
        self.assignments = EntityStore("assignments", "assignment", order_by="assignedDate")
        self.users = EntityStore("users", "user")
        self.activities = EntityStore(
            "activities",
            "activity",
            retention=activity_retention or settings.activity_retention,
            newest_first=True,
            order_by="timestamp",
        )

        self.laboratories.add_child(self.machines, "labId")
        self.laboratories.add_child(self.inventory, "labId")
        self.machines.add_child(self.records, "machineId")
        self.clients.add_child(self.client_tests, "clientId")

        self.chat = ChatStorage(chat_path, initial=seed.chat_snapshot if settings.seed_data else None)

    def stores(self) -> Dict[str, EntityStore]:
        return {
            "laboratories": self.laboratories,
            "machines": self.machines,
            "records": self.records,
            "inventory": self.inventory,
            "clients": self.clients,
            "clientTests": self.client_tests,
            "assignments": self.assignments,
            "users": self.users,
            "activities": self.activities,
            "chatChannels": self.chat.channels,
            "chatMessages": self.chat.messages,
        }

    def seed(self) -> None:
        """Load the demo records into every non-chat store."""
        self.laboratories.load(seed.laboratories())
        self.machines.load(seed.machines())
        self.records.load(seed.machine_records())
        self.inventory.load(seed.inventory())
        self.clients.load(seed.clients())
        self.client_tests.load(seed.client_tests())
        self.assignments.load(seed.assignments())
        self.activities.load(seed.activities())
        self.users.load(seed.users(_seed_password_hash))


@lru_cache(maxsize=None)
def _seed_password_hash(password: str) -> str:
    # PBKDF2 is deliberately slow; seed accounts are hashed once per process.
    return hash_password(password)


_db: Optional[Database] = None
_db_lock = threading.Lock()


def resolve_chat_path() -> Optional[str]:
    if not settings.chat_persistence:
        return None
    return settings.chat_data_path


def init_db(reset: bool = False, chat_path: Optional[str] = None) -> Database:
    """Create (or with ``reset`` recreate) the registry and seed it.

    ``chat_path`` overrides the configured chat snapshot location; pass
    ``None`` to use ``settings`` (persistence may be disabled there).
    """
    global _db
    with _db_lock:
        if _db is not None and not reset:
            return _db
        path = chat_path if chat_path is not None else resolve_chat_path()
        db = Database(chat_path=path)
        if settings.seed_data:
            db.seed()
        _db = db
        logger.info(
            "Database initialised (%d laboratories, %d clients, %d users; chat %s)",
            db.laboratories.count(),
            db.clients.count(),
            db.users.count(),
            path or "in memory",
        )
        return db


def get_db() -> Database:
    """Return the registry, initialising it on first use."""
    if _db is None:
        return init_db()
    return _db
