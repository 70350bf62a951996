"""
Service layer for clients and their ordered tests.

Clients are listed with their tests nested under ``tests``; deleting a
client removes its tests.  A test's ``clientId`` is always the client it
was created under, whatever the request body says.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from lab_dashboard_api.app.core.db import get_db
from lab_dashboard_api.app.core.errors import NotFoundError
from lab_dashboard_api.app.schemas.client import (
    ClientCreate,
    ClientTestCreate,
    ClientTestUpdate,
    ClientUpdate,
)
from lab_dashboard_api.app.services.common import require, require_child

logger = logging.getLogger(__name__)

CLIENT_NOT_FOUND = "Cliente no encontrado"
CLIENT_TEST_NOT_FOUND = "Prueba no encontrada"


class ClientService:
    """CRUD over clients."""

    @classmethod
    def _with_tests(cls, client: Dict[str, Any]) -> Dict[str, Any]:
        client["tests"] = get_db().client_tests.list(clientId=client["id"])
        return client

    @classmethod
    async def list_clients(cls) -> List[Dict[str, Any]]:
        return [cls._with_tests(client) for client in get_db().clients.list()]

    @classmethod
    async def get_client(cls, client_id: str) -> Dict[str, Any]:
        return cls._with_tests(require(get_db().clients, client_id, CLIENT_NOT_FOUND))

    @classmethod
    async def create_client(cls, data: ClientCreate) -> Dict[str, Any]:
        client = get_db().clients.create(data.to_record())
        logger.info("Created client %s (%s)", client["id"], client["name"])
        return cls._with_tests(client)

    @classmethod
    async def update_client(cls, client_id: str, data: ClientUpdate) -> Dict[str, Any]:
        db = get_db()
        require(db.clients, client_id, CLIENT_NOT_FOUND)
        client = db.clients.update(client_id, data.changes())
        logger.info("Updated client %s", client_id)
        return cls._with_tests(client)

    @classmethod
    async def delete_client(cls, client_id: str) -> None:
        if not get_db().clients.delete(client_id):
            raise NotFoundError(CLIENT_NOT_FOUND)
        logger.info("Deleted client %s", client_id)


class ClientTestService:
    """CRUD over the tests ordered for one client."""

    @classmethod
    async def list_tests(cls, client_id: str) -> List[Dict[str, Any]]:
        db = get_db()
        require(db.clients, client_id, CLIENT_NOT_FOUND)
        return db.client_tests.list(clientId=client_id)

    @classmethod
    async def add_test(cls, client_id: str, data: ClientTestCreate) -> Dict[str, Any]:
        db = get_db()
        require(db.clients, client_id, CLIENT_NOT_FOUND)
        record = db.client_tests.create(data.to_record(), clientId=client_id)
        logger.info("Ordered test %s (%s) for client %s", record["id"], record["testName"], client_id)
        return record

    @classmethod
    async def update_test(cls, client_id: str, test_id: str, data: ClientTestUpdate) -> Dict[str, Any]:
        db = get_db()
        require(db.clients, client_id, CLIENT_NOT_FOUND)
        require_child(db.client_tests, test_id, "clientId", client_id, CLIENT_TEST_NOT_FOUND)
        changes = data.changes()
        changes.pop("clientId", None)
        record = db.client_tests.update(test_id, changes)
        logger.info("Updated client test %s", test_id)
        return record

    @classmethod
    async def delete_test(cls, client_id: str, test_id: str) -> None:
        db = get_db()
        require(db.clients, client_id, CLIENT_NOT_FOUND)
        require_child(db.client_tests, test_id, "clientId", client_id, CLIENT_TEST_NOT_FOUND)
        db.client_tests.delete(test_id)
        logger.info("Deleted client test %s", test_id)
