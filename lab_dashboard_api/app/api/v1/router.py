"""
Top-level router for version 1 of the API.

This router aggregates the resource routers (laboratories, inventory,
clients, chat...) under a unified prefix.  When a new resource is
added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import (
    activities,
    assignments,
    auth,
    chat,
    client_tests,
    clients,
    health,
    inventory,
    laboratories,
    machines,
    records,
    users,
)

router = APIRouter()

router.include_router(laboratories.router, prefix="/laboratories", tags=["laboratories"])
# Machines and their records live under the owning laboratory; the path
# parameters in these prefixes are passed through to every handler.
router.include_router(machines.router, prefix="/laboratories/{lab_id}/machines", tags=["machines"])
router.include_router(
    records.router,
    prefix="/laboratories/{lab_id}/machines/{machine_id}/records",
    tags=["records"],
)
router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
router.include_router(clients.router, prefix="/clients", tags=["clients"])
router.include_router(client_tests.router, prefix="/clients/{client_id}/tests", tags=["clients"])
router.include_router(assignments.router, prefix="/assignments", tags=["assignments"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(chat.router, prefix="/chat", tags=["chat"])
router.include_router(activities.router, prefix="/activities", tags=["activities"])
router.include_router(health.router, prefix="/health", tags=["health"])
