import json

API = "/api/v1"
CHAT = f"{API}/chat"


def message(channel_id="general", **overrides):
    payload = {
        "channelId": channel_id,
        "userId": "jefe-1",
        "userName": "Dr. Carlos Mendez",
        "userRole": "Jefe de Lab",
        "content": "Buenos días",
        "type": "message",
    }
    payload.update(overrides)
    return payload


def create_channel(client, name="Lab Norte"):
    response = client.put(
        CHAT,
        json={"action": "create_channel", "name": name, "type": "laboratory", "labId": "1", "participants": ["jefe-1"]},
    )
    assert response.status_code == 200
    return response.json()["data"]


def test_get_everything(client):
    data = client.get(CHAT).json()["data"]
    assert set(data) == {"channels", "messages", "users"}
    assert [m["id"] for m in data["messages"]] == ["msg1"]


def test_get_slices(client):
    channels = client.get(CHAT, params={"type": "channels"}).json()["data"]
    assert [c["id"] for c in channels] == ["general", "inter-lab"]
    users = client.get(CHAT, params={"type": "users"}).json()["data"]
    assert len(users) == 4
    stats = client.get(CHAT, params={"type": "stats"}).json()["data"]
    assert stats["totalChannels"] == 2
    assert stats["onlineUsers"] == 3


def test_send_message_updates_last_message_and_snapshot(client, chat_path):
    response = client.post(CHAT, json=message())
    assert response.status_code == 201
    sent = response.json()["data"]
    assert response.json()["message"] == "Mensaje enviado exitosamente"

    general = next(c for c in client.get(CHAT, params={"type": "channels"}).json()["data"] if c["id"] == "general")
    assert general["lastMessage"]["id"] == sent["id"]

    with open(chat_path, encoding="utf-8") as f:
        stored = json.load(f)
    assert sent["id"] in [m["id"] for m in stored["messages"]]


def test_messages_by_channel(client):
    client.post(CHAT, json=message("inter-lab", content="¿Tienen reactivo?"))
    messages = client.get(CHAT, params={"channelId": "inter-lab"}).json()["data"]
    assert [m["content"] for m in messages] == ["¿Tienen reactivo?"]


def test_lab_request_requires_payload(client):
    response = client.post(CHAT, json=message(type="lab-request"))
    assert response.status_code == 400

    lab_request = {
        "fromLabId": "1",
        "toLabId": "2",
        "fromLabName": "Lab Central Norte",
        "toLabName": "Lab Sur",
        "testType": "Biopsia",
        "clientName": "Juan Pérez",
        "priority": "urgent",
        "status": "pending",
        "requestedBy": "jefe-1",
        "notes": "",
    }
    response = client.post(CHAT, json=message("inter-lab", type="lab-request", labRequest=lab_request))
    assert response.status_code == 201
    assert response.json()["data"]["labRequest"]["priority"] == "urgent"


def test_empty_content_is_rejected(client, db):
    before = db.chat.snapshot()
    response = client.post(CHAT, json=message(content=""))
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "content"
    assert db.chat.snapshot() == before


def test_create_channel(client):
    channel = create_channel(client)
    assert channel["createdBy"] == "system"
    assert channel["labId"] == "1"
    assert channel["id"] in [c["id"] for c in client.get(CHAT, params={"type": "channels"}).json()["data"]]


def test_unknown_action_is_400(client):
    response = client.put(CHAT, json={"action": "explode"})
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "action"


def test_update_user_status(client):
    response = client.put(CHAT, json={"action": "update_user_status", "userId": "patologa-1", "isOnline": True})
    assert response.status_code == 200
    assert response.json()["data"]["isOnline"] is True
    users = client.get(CHAT, params={"type": "users"}).json()["data"]
    assert next(u for u in users if u["id"] == "patologa-1")["isOnline"] is True


def test_update_status_of_new_user_adds_roster_entry(client):
    created = client.post(
        f"{API}/users",
        json={"name": "Nuevo", "role": "Técnico", "email": "nuevo@alquimist.com", "password": "abcdef"},
    ).json()["data"]
    response = client.put(CHAT, json={"action": "update_user_status", "userId": created["id"], "isOnline": True})
    assert response.status_code == 200
    assert len(client.get(CHAT, params={"type": "users"}).json()["data"]) == 5


def test_update_status_of_unknown_user_is_404(client):
    response = client.put(CHAT, json={"action": "update_user_status", "userId": "ghost", "isOnline": True})
    assert response.status_code == 404


def test_backup(client, chat_path):
    response = client.put(CHAT, json={"action": "backup"})
    assert response.status_code == 200
    assert "chat-backup-" in response.json()["data"]["backupPath"]


def test_protected_channels_cannot_be_deleted(client, db):
    for channel_id in ("general", "inter-lab"):
        response = client.delete(CHAT, params={"channelId": channel_id})
        assert response.status_code == 403
        assert response.json()["error"] == "No se puede eliminar un canal del sistema"
    assert db.chat.channels.count() == 2


def test_delete_channel_removes_messages(client, db):
    channel = create_channel(client)
    client.post(CHAT, json=message(channel["id"]))
    client.post(CHAT, json=message("general"))

    assert client.delete(CHAT, params={"channelId": channel["id"]}).status_code == 200
    assert db.chat.get_messages(channel["id"]) == []
    assert len(db.chat.get_messages("general")) == 2

    missing = client.delete(CHAT, params={"channelId": channel["id"]})
    assert missing.status_code == 404
    assert missing.json()["error"] == "Canal no encontrado"


def test_cleanup_messages_reports_count(client):
    response = client.delete(CHAT, params={"action": "cleanup_messages"})
    assert response.status_code == 200
    assert response.json()["deletedCount"] == 0


def test_delete_without_selector_is_400(client):
    assert client.delete(CHAT).status_code == 400
