"""Lab dashboard API client.

This module defines a thin client wrapper around the Lab Dashboard REST
API.  It uses the ``requests`` library internally and exposes one
method per resource operation:

* laboratories, their machines and the machines' test records;
* inventory per laboratory;
* clients and the tests ordered for them;
* technician assignments;
* users, login and logout;
* the activity log;
* the internal chat (channels, messages, presence, backups).

Every method returns a tuple ``(result, error)``.  ``result`` is the
``data`` member of the success envelope (an empty list for failed list
calls, ``None`` otherwise) and ``error`` is ``None`` on success or a
dictionary with ``status_code``, ``message`` and ``details`` taken
from the error envelope.  The client never raises for HTTP or
transport failures, which lets callers such as the chat sync loop
treat a failed fetch as "keep the previous state".
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

Error = Dict[str, Any]
Result = Tuple[Optional[Any], Optional[Error]]


class LabDashboardAPI:
    """Client for the laboratory dashboard API.

    The client remembers the user returned by :meth:`login` in
    :attr:`current_user`; the API itself keeps no session, so this is
    only used by callers that need the sender identity (e.g. chat).
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_prefix: str = "/api/v1",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8000``.
            api_prefix: Path prefix of the versioned API.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + "/" + api_prefix.strip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.current_user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the API prefix (e.g. ``/laboratories``).
            params: Query parameters; ``None`` values are dropped.
            json_body: JSON body to send with the request (for POST/PUT).
        Returns:
            A tuple ``(envelope, error)``.  ``envelope`` is the parsed
            success body; on failure it is ``None`` and ``error``
            describes the issue.
        """
        url = f"{self.base_url}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None} or None
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=query,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return {}, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            details = None
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                    details = err_json.get("details")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message, "details": details}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "details": None}

    def _data(self, method: str, path: str, **kwargs: Any) -> Result:
        envelope, error = self._request(method, path, **kwargs)
        if error:
            return None, error
        return envelope.get("data"), None

    def _list(self, path: str, params: Optional[Dict[str, Any]] = None) -> Tuple[List[Any], Optional[Error]]:
        data, error = self._data("GET", path, params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def _delete(self, path: str, params: Dict[str, Any]) -> Tuple[bool, Optional[Error]]:
        envelope, error = self._request("DELETE", path, params=params)
        if error:
            return False, error
        return bool(envelope.get("success")), None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def login(self, email: str, password: str) -> Result:
        """Authenticate and remember the returned user."""
        envelope, error = self._request("POST", "/auth", json_body={"email": email, "password": password})
        if error:
            self.current_user = None
            return None, error
        self.current_user = envelope.get("data") or envelope.get("user")
        return self.current_user, None

    def logout(self) -> Tuple[bool, Optional[Error]]:
        envelope, error = self._request("DELETE", "/auth")
        self.current_user = None
        if error:
            return False, error
        return bool(envelope.get("success")), None

    # ------------------------------------------------------------------
    # Laboratories, machines and test records
    # ------------------------------------------------------------------
    def list_laboratories(self) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/laboratories")

    def get_laboratory(self, lab_id: str) -> Result:
        return self._data("GET", f"/laboratories/{lab_id}")

    def create_laboratory(self, payload: Dict[str, Any]) -> Result:
        return self._data("POST", "/laboratories", json_body=payload)

    def update_laboratory(self, lab_id: str, changes: Dict[str, Any]) -> Result:
        return self._data("PUT", "/laboratories", json_body={**changes, "id": lab_id})

    def delete_laboratory(self, lab_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete("/laboratories", {"id": lab_id})

    def list_machines(self, lab_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list(f"/laboratories/{lab_id}/machines")

    def create_machine(self, lab_id: str, payload: Dict[str, Any]) -> Result:
        return self._data("POST", f"/laboratories/{lab_id}/machines", json_body=payload)

    def update_machine(self, lab_id: str, machine_id: str, changes: Dict[str, Any]) -> Result:
        return self._data(
            "PUT",
            f"/laboratories/{lab_id}/machines",
            json_body={**changes, "machineId": machine_id},
        )

    def delete_machine(self, lab_id: str, machine_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/laboratories/{lab_id}/machines", {"machineId": machine_id})

    def list_records(self, lab_id: str, machine_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list(f"/laboratories/{lab_id}/machines/{machine_id}/records")

    def create_record(self, lab_id: str, machine_id: str, payload: Dict[str, Any]) -> Result:
        return self._data("POST", f"/laboratories/{lab_id}/machines/{machine_id}/records", json_body=payload)

    def update_record(self, lab_id: str, machine_id: str, record_id: str, changes: Dict[str, Any]) -> Result:
        return self._data(
            "PUT",
            f"/laboratories/{lab_id}/machines/{machine_id}/records",
            json_body={**changes, "recordId": record_id},
        )

    def delete_record(self, lab_id: str, machine_id: str, record_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/laboratories/{lab_id}/machines/{machine_id}/records", {"recordId": record_id})

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------
    def list_inventory(self, lab_id: Optional[str] = None) -> Tuple[List[Any], Optional[Error]]:
        """Items of one laboratory, or every laboratory's items grouped by lab."""
        return self._list("/inventory", {"labId": lab_id})

    def add_inventory_item(self, lab_id: str, payload: Dict[str, Any]) -> Result:
        return self._data("POST", "/inventory", json_body={**payload, "labId": lab_id})

    def update_inventory_item(self, lab_id: str, item_id: str, changes: Dict[str, Any]) -> Result:
        return self._data("PUT", "/inventory", json_body={**changes, "labId": lab_id, "itemId": item_id})

    def delete_inventory_item(self, lab_id: str, item_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete("/inventory", {"labId": lab_id, "itemId": item_id})

    # ------------------------------------------------------------------
    # Clients and client tests
    # ------------------------------------------------------------------
    def list_clients(self) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/clients")

    def create_client(self, payload: Dict[str, Any]) -> Result:
        return self._data("POST", "/clients", json_body=payload)

    def update_client(self, client_id: str, changes: Dict[str, Any]) -> Result:
        return self._data("PUT", "/clients", json_body={**changes, "id": client_id})

    def delete_client(self, client_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete("/clients", {"id": client_id})

    def list_client_tests(self, client_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list(f"/clients/{client_id}/tests")

    def add_client_test(self, client_id: str, payload: Dict[str, Any]) -> Result:
        return self._data("POST", f"/clients/{client_id}/tests", json_body=payload)

    def update_client_test(self, client_id: str, test_id: str, changes: Dict[str, Any]) -> Result:
        return self._data("PUT", f"/clients/{client_id}/tests", json_body={**changes, "testId": test_id})

    def delete_client_test(self, client_id: str, test_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete(f"/clients/{client_id}/tests", {"testId": test_id})

    # ------------------------------------------------------------------
    # Assignments
    # ------------------------------------------------------------------
    def list_assignments(
        self,
        technician_id: Optional[str] = None,
        status: Optional[str] = None,
        test_id: Optional[str] = None,
    ) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/assignments", {"technicianId": technician_id, "status": status, "testId": test_id})

    def create_assignment(self, payload: Dict[str, Any]) -> Result:
        return self._data("POST", "/assignments", json_body=payload)

    def update_assignment(self, assignment_id: str, changes: Dict[str, Any]) -> Result:
        return self._data("PUT", "/assignments", json_body={**changes, "id": assignment_id})

    def delete_assignment(self, assignment_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete("/assignments", {"id": assignment_id})

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def list_users(
        self,
        role: Optional[str] = None,
        lab_id: Optional[str] = None,
        online_only: bool = False,
    ) -> Tuple[List[Any], Optional[Error]]:
        params = {"role": role, "labId": lab_id, "onlineOnly": "true" if online_only else None}
        return self._list("/users", params)

    def create_user(self, payload: Dict[str, Any]) -> Result:
        return self._data("POST", "/users", json_body=payload)

    def update_user(self, user_id: str, changes: Dict[str, Any]) -> Result:
        return self._data("PUT", "/users", json_body={**changes, "id": user_id})

    def delete_user(self, user_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete("/users", {"id": user_id})

    # ------------------------------------------------------------------
    # Activities
    # ------------------------------------------------------------------
    def list_activities(
        self,
        user_id: Optional[str] = None,
        category: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Return ``{"items": [...], "pagination": {...}}`` for one page."""
        envelope, error = self._request(
            "GET",
            "/activities",
            params={"userId": user_id, "category": category, "limit": limit, "offset": offset},
        )
        if error:
            return None, error
        return {"items": envelope.get("data") or [], "pagination": envelope.get("pagination") or {}}, None

    def log_activity(self, payload: Dict[str, Any]) -> Result:
        return self._data("POST", "/activities", json_body=payload)

    def purge_activities(self, days: int = 30) -> Tuple[int, Optional[Error]]:
        envelope, error = self._request("DELETE", "/activities", params={"days": days})
        if error:
            return 0, error
        return int(envelope.get("deletedCount") or 0), None

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------
    def get_chat_channels(self) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/chat", {"type": "channels"})

    def get_chat_users(self) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/chat", {"type": "users"})

    def get_chat_stats(self) -> Result:
        return self._data("GET", "/chat", params={"type": "stats"})

    def get_chat_messages(self, channel_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/chat", {"channelId": channel_id})

    def send_chat_message(self, payload: Dict[str, Any]) -> Result:
        return self._data("POST", "/chat", json_body=payload)

    def create_chat_channel(self, payload: Dict[str, Any]) -> Result:
        return self._data("PUT", "/chat", json_body={**payload, "action": "create_channel"})

    def update_chat_status(self, user_id: str, is_online: bool) -> Result:
        return self._data(
            "PUT",
            "/chat",
            json_body={"action": "update_user_status", "userId": user_id, "isOnline": is_online},
        )

    def backup_chat(self) -> Result:
        return self._data("PUT", "/chat", json_body={"action": "backup"})

    def delete_chat_channel(self, channel_id: str) -> Tuple[bool, Optional[Error]]:
        return self._delete("/chat", {"channelId": channel_id})

    def cleanup_chat_messages(self) -> Tuple[int, Optional[Error]]:
        envelope, error = self._request("DELETE", "/chat", params={"action": "cleanup_messages"})
        if error:
            return 0, error
        return int(envelope.get("deletedCount") or 0), None
