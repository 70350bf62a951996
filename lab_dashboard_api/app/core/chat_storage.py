"""
Chat storage with optional JSON-file persistence.

``ChatStorage`` keeps the chat channels, their messages and the chat
presence roster in three :class:`EntityStore` instances (messages are
owned by channels through ``channelId``).  When constructed with a
``path`` it behaves as a snapshot-backed store:

* on construction the parent directory is created and the snapshot
  ``{"messages": [...], "channels": [...], "users": [...]}`` is loaded;
  if the file does not exist the seed snapshot is written instead;
* after every mutation the entire state is serialized and the file is
  replaced (written to a sibling temp file first, then moved over the
  old one);
* read and write failures are logged and swallowed.  A failed load
  leaves empty collections, a failed save leaves the previous file on
  disk while the in-memory mutation stands.

With ``path=None`` the same API works purely in memory.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from . import seed
from .store import EntityStore, Record

logger = logging.getLogger(__name__)


class ChatStorage:
    """Channels, messages and roster with whole-state snapshot persistence."""

    def __init__(
        self,
        path: Optional[str] = None,
        *,
        initial: Optional[Callable[[], Dict[str, List[Record]]]] = seed.chat_snapshot,
    ) -> None:
        self.path: Optional[Path] = Path(path).resolve() if path else None
        self.channels = EntityStore("chat channels", "channel")
        self.messages = EntityStore("chat messages", "msg")
        self.users = EntityStore("chat users", "user")
        self.channels.add_child(self.messages, "channelId")
        self._initial = initial
        self._load()

    # ------------------------------------------------------------------
    # Snapshot handling
    # ------------------------------------------------------------------
    def snapshot(self) -> Dict[str, List[Record]]:
        return {
            "messages": self.messages.dump(),
            "channels": self.channels.dump(),
            "users": self.users.dump(),
        }

    def _apply(self, data: Dict[str, List[Record]]) -> None:
        self.channels.load(data.get("channels") or [])
        self.messages.load(data.get("messages") or [])
        self.users.load(data.get("users") or [])

    def _load(self) -> None:
        if self.path is None:
            self._apply(self._initial() if self._initial else {})
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.path.exists():
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("chat snapshot must be a JSON object")
                self._apply(data)
                logger.info(
                    "Loaded chat snapshot %s (%d channels, %d messages)",
                    self.path,
                    self.channels.count(),
                    self.messages.count(),
                )
            else:
                self._apply(self._initial() if self._initial else {})
                self._save()
                logger.info("Created initial chat snapshot %s", self.path)
        except (OSError, ValueError) as exc:
            # json.JSONDecodeError is a ValueError.
            logger.error("Error loading chat data from %s: %s", self.path, exc)
            self._apply({})

    def _write_json(self, target: Path, data: Dict[str, List[Record]]) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=str(target.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, target)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    def _save(self) -> bool:
        if self.path is None:
            return True
        try:
            self._write_json(self.path, self.snapshot())
            logger.debug("Chat data saved to %s", self.path)
            return True
        except (OSError, TypeError, ValueError):
            logger.exception("Error saving chat data to %s", self.path)
            return False

    def backup(self) -> str:
        """Write a timestamp-named copy of the full state.

        Returns the backup path, or ``""`` when persistence is disabled
        or the write fails.
        """
        if self.path is None:
            return ""
        target = self.path.parent / f"chat-backup-{int(time.time() * 1000)}.json"
        try:
            self._write_json(target, self.snapshot())
        except (OSError, TypeError, ValueError):
            logger.exception("Error creating chat backup %s", target)
            return ""
        logger.info("Chat backup written to %s", target)
        return str(target)

    # ------------------------------------------------------------------
    # Channels
    # ------------------------------------------------------------------
    def get_channels(self) -> List[Record]:
        return self.channels.list()

    def get_channel(self, channel_id: str) -> Optional[Record]:
        return self.channels.get(channel_id)

    def add_channel(self, fields: Record, created_by: str = "system") -> Record:
        channel = self.channels.create(fields, createdAt=seed.utcnow_iso(), createdBy=created_by)
        self._save()
        return channel

    def delete_channel(self, channel_id: str) -> bool:
        """Remove a channel and every message posted to it."""
        deleted = self.channels.delete(channel_id)
        if deleted:
            self._save()
        return deleted

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def get_messages(self, channel_id: Optional[str] = None) -> List[Record]:
        return self.messages.list(channelId=channel_id)

    def add_message(self, fields: Record) -> Record:
        """Append a message and refresh its channel's ``lastMessage``."""
        message = self.messages.create(fields, timestamp=seed.utcnow_iso())
        self.channels.update(message["channelId"], {"lastMessage": message})
        self._save()
        return message

    def cleanup_old_messages(self, max_age_days: int = 30) -> int:
        """Drop messages older than ``max_age_days``; returns how many went."""
        cutoff = datetime.now(timezone.utc) - timedelta(days=max_age_days)

        def expired(message: Record) -> bool:
            sent = seed.parse_timestamp(message.get("timestamp"))
            return sent is None or sent <= cutoff

        removed = self.messages.delete_where(expired)
        self._save()
        return removed

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------
    def get_users(self) -> List[Record]:
        return self.users.list()

    def ensure_roster_entry(self, user: Record) -> Record:
        """Add ``user`` to the roster if absent and return the roster entry."""
        existing = self.users.get(user["id"])
        if existing is not None:
            return existing
        entry = {
            "name": user.get("name"),
            "role": user.get("role"),
            "email": user.get("email"),
            "isOnline": bool(user.get("isOnline", False)),
            "labId": user.get("labId"),
            "lastSeen": seed.utcnow_iso(),
        }
        created = self.users.create(entry, id=user["id"])
        self._save()
        return created

    def update_user_status(self, user_id: str, is_online: bool) -> Optional[Record]:
        updated = self.users.update(user_id, {"isOnline": is_online, "lastSeen": seed.utcnow_iso()})
        if updated is not None:
            self._save()
        return updated

    def stats(self) -> Dict[str, Any]:
        messages = self.messages.dump()
        return {
            "totalMessages": len(messages),
            "totalChannels": self.channels.count(),
            "totalUsers": self.users.count(),
            "onlineUsers": self.users.count(lambda user: bool(user.get("isOnline"))),
            "lastActivity": messages[-1]["timestamp"] if messages else None,
        }
