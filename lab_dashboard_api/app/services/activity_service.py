"""
Service layer for the activity log.

The log is append-only from the API's point of view: entries are
recorded, listed with pagination and purged by age, never edited.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from lab_dashboard_api.app.core.db import get_db
from lab_dashboard_api.app.core.seed import parse_timestamp, utcnow_iso
from lab_dashboard_api.app.schemas.activity import ActivityCreate

logger = logging.getLogger(__name__)


class ActivityService:
    @classmethod
    async def list_activities(
        cls,
        user_id: Optional[str] = None,
        category: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """Return one page of activities (newest first) and its pagination block."""
        matched = get_db().activities.list(userId=user_id, category=category)
        page = matched[offset:offset + limit]
        pagination = {
            "total": len(matched),
            "limit": limit,
            "offset": offset,
            "hasMore": offset + limit < len(matched),
        }
        return page, pagination

    @classmethod
    async def log_activity(cls, data: ActivityCreate) -> Dict[str, Any]:
        activity = get_db().activities.create(data.to_record(), timestamp=utcnow_iso())
        logger.debug("Recorded activity %s (%s by %s)", activity["id"], activity["action"], activity["userId"])
        return activity

    @classmethod
    async def purge_older_than(cls, days: int = 30) -> int:
        """Delete activities older than ``days`` days and return how many went."""
        cutoff = datetime.now(timezone.utc) - timedelta(days=days)

        def expired(activity: Dict[str, Any]) -> bool:
            recorded = parse_timestamp(activity.get("timestamp"))
            return recorded is None or recorded <= cutoff

        deleted = get_db().activities.delete_where(expired)
        logger.info("Purged %d activities older than %d days", deleted, days)
        return deleted
