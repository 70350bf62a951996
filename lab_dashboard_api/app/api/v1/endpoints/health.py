"""Liveness endpoint reporting the size of each store."""

from fastapi import APIRouter

from lab_dashboard_api.app.core.config import settings
from lab_dashboard_api.app.core.db import get_db
from lab_dashboard_api.app.core.errors import success

router = APIRouter()


@router.get("")
async def health() -> dict:
    db = get_db()
    counts = {name: store.count() for name, store in db.stores().items()}
    return success(
        {
            "status": "ok",
            "version": settings.api_version,
            "chatPersistence": db.chat.path is not None,
            "counts": counts,
        }
    )
