import json
import os
from datetime import timedelta

from lab_dashboard_api.app.core import seed
from lab_dashboard_api.app.core.chat_storage import ChatStorage


def message(channel_id="general", content="hola"):
    return {
        "channelId": channel_id,
        "userId": "admin-1",
        "userName": "Dr. Ana García",
        "userRole": "Admin",
        "content": content,
        "type": "message",
    }


def test_missing_file_is_created_with_seed(tmp_path):
    path = tmp_path / "nested" / "chat.json"
    storage = ChatStorage(str(path))
    assert path.exists()
    data = json.loads(path.read_text(encoding="utf-8"))
    assert set(data) == {"messages", "channels", "users"}
    assert {c["id"] for c in data["channels"]} == {"general", "inter-lab"}
    assert storage.stats()["totalMessages"] == 1


def test_state_survives_reload(tmp_path):
    path = str(tmp_path / "chat.json")
    storage = ChatStorage(path)
    channel = storage.add_channel({"name": "Lab 1", "type": "laboratory", "participants": ["admin-1"]})
    sent = storage.add_message(message(channel["id"], "muestra lista"))

    reloaded = ChatStorage(path)
    assert reloaded.get_channel(channel["id"])["lastMessage"]["id"] == sent["id"]
    assert [m["content"] for m in reloaded.get_messages(channel["id"])] == ["muestra lista"]


def test_add_message_updates_last_message(tmp_path):
    storage = ChatStorage(str(tmp_path / "chat.json"))
    sent = storage.add_message(message("inter-lab", "urgente"))
    assert sent["id"].startswith("msg-")
    assert sent["timestamp"].endswith("Z")
    assert storage.get_channel("inter-lab")["lastMessage"] == sent


def test_delete_channel_removes_its_messages(tmp_path):
    storage = ChatStorage(str(tmp_path / "chat.json"))
    channel = storage.add_channel({"name": "tmp", "type": "direct", "participants": []})
    storage.add_message(message(channel["id"]))
    storage.add_message(message("general"))
    assert storage.delete_channel(channel["id"]) is True
    assert storage.get_messages(channel["id"]) == []
    assert len(storage.get_messages("general")) == 2
    assert storage.delete_channel(channel["id"]) is False


def test_corrupt_file_loads_empty(tmp_path):
    path = tmp_path / "chat.json"
    path.write_text("{not json", encoding="utf-8")
    storage = ChatStorage(str(path))
    assert storage.get_channels() == []
    assert storage.get_messages() == []


def test_failed_save_keeps_memory_state(tmp_path, monkeypatch):
    path = tmp_path / "chat.json"
    storage = ChatStorage(str(path))
    before = path.read_text(encoding="utf-8")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)
    sent = storage.add_message(message(content="no persistido"))

    assert any(m["id"] == sent["id"] for m in storage.get_messages())
    assert path.read_text(encoding="utf-8") == before
    assert [p.name for p in tmp_path.iterdir()] == ["chat.json"]


def test_backup_writes_timestamped_copy(tmp_path):
    storage = ChatStorage(str(tmp_path / "chat.json"))
    backup = storage.backup()
    assert os.path.basename(backup).startswith("chat-backup-")
    with open(backup, encoding="utf-8") as f:
        assert json.load(f) == storage.snapshot()


def test_backup_without_persistence_returns_empty():
    assert ChatStorage(None).backup() == ""


def test_cleanup_old_messages(tmp_path):
    storage = ChatStorage(str(tmp_path / "chat.json"))
    old = storage.add_message(message(content="viejo"))
    storage.messages.update(old["id"], {"timestamp": seed.utcnow_iso(-timedelta(days=45))})
    storage.add_message(message(content="nuevo"))

    assert storage.cleanup_old_messages(30) == 1
    assert "viejo" not in [m["content"] for m in storage.get_messages()]


def test_roster_entry_and_status(tmp_path):
    storage = ChatStorage(str(tmp_path / "chat.json"))
    assert storage.update_user_status("nobody", True) is None
    storage.ensure_roster_entry({"id": "u-9", "name": "Nuevo", "role": "Técnico", "email": "n@x.com"})
    entry = storage.update_user_status("u-9", True)
    assert entry["isOnline"] is True
    assert storage.stats()["totalUsers"] == 5
