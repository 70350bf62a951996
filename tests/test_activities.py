from datetime import timedelta

from lab_dashboard_api.app.core.seed import utcnow_iso

API = "/api/v1"
ACTIVITIES = f"{API}/activities"


def activity(**overrides):
    payload = {
        "userId": "admin-1",
        "userName": "Dr. Ana García",
        "userRole": "Admin",
        "action": "create_lab",
        "description": "Creó un laboratorio",
        "category": "lab_management",
    }
    payload.update(overrides)
    return payload


def test_pagination(client):
    first = client.get(ACTIVITIES, params={"limit": 2, "offset": 0}).json()
    assert len(first["data"]) == 2
    assert first["pagination"] == {"total": 5, "limit": 2, "offset": 0, "hasMore": True}

    last = client.get(ACTIVITIES, params={"limit": 2, "offset": 4}).json()
    assert len(last["data"]) == 1
    assert last["pagination"]["hasMore"] is False


def test_newest_first(client):
    ids = [a["id"] for a in client.get(ACTIVITIES).json()["data"]]
    assert ids == ["activity-1", "activity-2", "activity-3", "activity-4", "activity-5"]
    created = client.post(ACTIVITIES, json=activity()).json()["data"]
    assert client.get(ACTIVITIES).json()["data"][0]["id"] == created["id"]


def test_filters(client):
    by_user = client.get(ACTIVITIES, params={"userId": "jefe-1"}).json()
    assert by_user["pagination"]["total"] == 2
    by_category = client.get(ACTIVITIES, params={"category": "inventory"}).json()["data"]
    assert [a["id"] for a in by_category] == ["activity-4"]


def test_retention_keeps_latest_thousand(client, db):
    for i in range(1050):
        response = client.post(ACTIVITIES, json=activity(description=f"evento {i}"))
        assert response.status_code == 201
    assert db.activities.count() == 1000
    descriptions = {a["description"] for a in db.activities.dump()}
    assert descriptions == {f"evento {i}" for i in range(50, 1050)}


def test_metadata_is_kept(client):
    created = client.post(ACTIVITIES, json=activity(metadata={"old": 1, "new": 2})).json()["data"]
    assert created["metadata"] == {"old": 1, "new": 2}


def test_invalid_category_is_rejected(client):
    response = client.post(ACTIVITIES, json=activity(category="misc"))
    assert response.status_code == 400


def test_purge_by_age(client, db):
    db.activities.update("activity-5", {"timestamp": utcnow_iso(-timedelta(days=40))})
    response = client.delete(ACTIVITIES, params={"days": 30})
    assert response.status_code == 200
    body = response.json()
    assert body["deletedCount"] == 1
    assert "activity-5" not in [a["id"] for a in db.activities.list()]
    assert client.delete(ACTIVITIES).json()["deletedCount"] == 0
