"""
Activity log endpoints for API v1.

Clients record what their users did as a follow-up call after each
business operation; the server does not emit activities on its own.
Listing is paginated and newest first.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from lab_dashboard_api.app.core.errors import success
from lab_dashboard_api.app.schemas.activity import ActivityCategory, ActivityCreate
from lab_dashboard_api.app.services.activity_service import ActivityService

router = APIRouter()


@router.get("")
async def list_activities(
    user_id: Optional[str] = Query(None, alias="userId"),
    category: Optional[ActivityCategory] = Query(None),
    limit: int = Query(50, ge=0),
    offset: int = Query(0, ge=0),
) -> dict:
    """One page of activities plus ``pagination {total, limit, offset, hasMore}``."""
    page, pagination = await ActivityService.list_activities(
        user_id=user_id,
        category=category,
        limit=limit,
        offset=offset,
    )
    return success(page, pagination=pagination)


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_activity(activity: ActivityCreate) -> dict:
    created = await ActivityService.log_activity(activity)
    return success(created, "Actividad registrada exitosamente")


@router.delete("")
async def purge_activities(days: int = Query(30, ge=0)) -> dict:
    deleted = await ActivityService.purge_older_than(days)
    return success(
        message=f"Se eliminaron {deleted} actividades anteriores a {days} días",
        deletedCount=deleted,
    )
