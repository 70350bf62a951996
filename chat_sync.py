"""Polling chat synchronisation for the lab dashboard.

:class:`ChatSyncLoop` keeps a local copy of the chat state of one
logged-in user: the messages of the selected channel, the presence
roster and the channel list.  While the user is authenticated and a
channel is selected, a background thread re-fetches all three every
``interval`` seconds (two by default) and replaces each local list
wholesale with what the server returned.  There is no diffing: the
last successful fetch wins, and a failed fetch leaves that list as it
was.

Messages sent through :meth:`ChatSyncLoop.send_message` appear locally
at once under a temporary ``temp-`` id.  When the server confirms the
send, the stored message takes the temporary one's place; when the
send fails, the temporary message is removed again.

Running this module starts a console follower driven by environment
variables:

``LAB_DASHBOARD_BASE_URL``
    Server root, e.g. ``http://localhost:8000``.  Required.

``LAB_DASHBOARD_EMAIL`` / ``LAB_DASHBOARD_PASSWORD``
    Credentials to log in with.  Required.

``LAB_DASHBOARD_CHANNEL``
    Channel to follow.  Defaults to ``general``.

Lines typed on standard input are sent to the channel; Ctrl+C (or end
of input) marks the user offline, logs out and exits.
"""

from __future__ import annotations

import itertools
import logging
import os
import sys
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from lab_dashboard_client import LabDashboardAPI

logger = logging.getLogger(__name__)

TEMP_PREFIX = "temp-"


class ChatSyncLoop:
    """Fixed-interval poller that mirrors one chat channel locally."""

    def __init__(
        self,
        api: LabDashboardAPI,
        channel_id: Optional[str] = None,
        interval: float = 2.0,
        on_sync: Optional[Callable[["ChatSyncLoop"], None]] = None,
    ) -> None:
        self.api = api
        self.channel_id = channel_id
        self.interval = interval
        self.on_sync = on_sync
        self.messages: List[Dict[str, Any]] = []
        self.users: List[Dict[str, Any]] = []
        self.channels: List[Dict[str, Any]] = []
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._temp_ids = itertools.count(1)

    @property
    def active(self) -> bool:
        return self.api.is_authenticated and bool(self.channel_id)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def select_channel(self, channel_id: Optional[str]) -> None:
        """Switch the followed channel; local messages are cleared until the next fetch."""
        with self._lock:
            self.channel_id = channel_id
            self.messages = []

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------
    def sync_once(self) -> bool:
        """Fetch messages, users and channels once.

        Returns ``True`` when all three fetches succeeded.
        """
        channel_id = self.channel_id
        ok = True
        if channel_id:
            messages, error = self.api.get_chat_messages(channel_id)
            if error:
                logger.warning("Could not refresh messages of %s: %s", channel_id, error["message"])
                ok = False
            else:
                with self._lock:
                    if self.channel_id == channel_id:
                        self.messages = messages
        users, error = self.api.get_chat_users()
        if error:
            logger.warning("Could not refresh chat users: %s", error["message"])
            ok = False
        else:
            with self._lock:
                self.users = users
        channels, error = self.api.get_chat_channels()
        if error:
            logger.warning("Could not refresh chat channels: %s", error["message"])
            ok = False
        else:
            with self._lock:
                self.channels = channels
        return ok

    def start(self) -> bool:
        """Start the background poller.

        Does nothing and returns ``False`` unless the client is logged in
        and a channel is selected.
        """
        if not self.active:
            logger.info("Chat sync not started: login and a selected channel are required")
            return False
        if self.running:
            return True
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="chat-sync", daemon=True)
        self._thread.start()
        logger.info("Chat sync started for channel %s every %.1fs", self.channel_id, self.interval)
        return True

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.is_set() and self.active:
            try:
                self.sync_once()
                if self.on_sync is not None:
                    self.on_sync(self)
            except Exception:
                logger.exception("Chat sync iteration failed; retrying in %.1fs", self.interval)
            self._stop.wait(self.interval)
        logger.info("Chat sync stopped")

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------
    def send_message(self, content: str, message_type: str = "message") -> Optional[Dict[str, Any]]:
        """Send ``content`` to the selected channel as the logged-in user.

        Returns the stored message, or ``None`` when the send failed (the
        optimistic copy is then removed).
        """
        user = self.api.current_user
        if not user or not self.channel_id:
            logger.warning("Cannot send a chat message without a user and a channel")
            return None
        payload = {
            "channelId": self.channel_id,
            "userId": user["id"],
            "userName": user["name"],
            "userRole": user["role"],
            "content": content,
            "type": message_type,
        }
        temp_id = f"{TEMP_PREFIX}{int(time.time() * 1000)}-{next(self._temp_ids)}"
        provisional = dict(payload, id=temp_id, timestamp=time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()))
        with self._lock:
            self.messages.append(provisional)

        stored, error = self.api.send_chat_message(payload)
        with self._lock:
            index = next((i for i, m in enumerate(self.messages) if m.get("id") == temp_id), None)
            if error or not stored:
                if index is not None:
                    del self.messages[index]
                logger.error("Message not sent: %s", error["message"] if error else "empty response")
                return None
            if index is not None:
                self.messages[index] = stored
            elif not any(m.get("id") == stored.get("id") for m in self.messages):
                # A refresh replaced the list while the send was in flight.
                self.messages.append(stored)
        return stored


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    base_url = os.getenv("LAB_DASHBOARD_BASE_URL")
    email = os.getenv("LAB_DASHBOARD_EMAIL")
    password = os.getenv("LAB_DASHBOARD_PASSWORD")
    if not base_url or not email or not password:
        logger.error("LAB_DASHBOARD_BASE_URL, LAB_DASHBOARD_EMAIL and LAB_DASHBOARD_PASSWORD must be set")
        sys.exit(1)

    api = LabDashboardAPI(base_url)
    user, error = api.login(email, password)
    if error:
        logger.error("Login failed: %s", error["message"])
        sys.exit(1)
    api.update_chat_status(user["id"], True)

    seen = set()

    def print_new(loop: ChatSyncLoop) -> None:
        for message in list(loop.messages):
            if message["id"] not in seen and not message["id"].startswith(TEMP_PREFIX):
                seen.add(message["id"])
                print(f"[{message.get('timestamp', '')}] {message['userName']}: {message['content']}")

    loop = ChatSyncLoop(api, os.getenv("LAB_DASHBOARD_CHANNEL", "general"), on_sync=print_new)
    loop.start()
    try:
        for line in sys.stdin:
            text = line.strip()
            if text:
                loop.send_message(text)
    except KeyboardInterrupt:
        logger.info("Chat follower stopped by user.")
    finally:
        loop.stop(timeout=loop.interval * 2)
        api.update_chat_status(user["id"], False)
        api.logout()


if __name__ == "__main__":
    main()
