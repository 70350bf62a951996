API = "/api/v1"
ASSIGNMENTS = f"{API}/assignments"

PAYLOAD = {
    "testId": "t3",
    "technicianId": "tecnico-1",
    "technicianName": "María López",
    "assignedBy": "Dr. Carlos Mendez",
    "status": "asignada",
}


def test_newest_assignment_first(client):
    created = client.post(ASSIGNMENTS, json=PAYLOAD)
    assert created.status_code == 201
    assignment = created.json()["data"]
    assert assignment["assignedDate"].endswith("Z")

    ids = [a["id"] for a in client.get(ASSIGNMENTS).json()["data"]]
    assert ids == [assignment["id"], "assignment-2", "assignment-1"]


def test_filters(client):
    assert [a["id"] for a in client.get(ASSIGNMENTS, params={"status": "completada"}).json()["data"]] == ["assignment-1"]
    assert [a["id"] for a in client.get(ASSIGNMENTS, params={"testId": "t2"}).json()["data"]] == ["assignment-2"]
    assert client.get(ASSIGNMENTS, params={"technicianId": "other"}).json()["data"] == []


def test_update_and_delete(client):
    updated = client.put(ASSIGNMENTS, json={"id": "assignment-2", "status": "completada"})
    assert updated.json()["data"]["status"] == "completada"
    assert updated.json()["data"]["notes"] == "Prueba en proceso de análisis"

    assert client.delete(ASSIGNMENTS, params={"id": "assignment-2"}).status_code == 200
    missing = client.delete(ASSIGNMENTS, params={"id": "assignment-2"})
    assert missing.status_code == 404
    assert missing.json()["error"] == "Asignación no encontrada"


def test_references_are_not_checked(client):
    response = client.post(ASSIGNMENTS, json={**PAYLOAD, "clientTestId": "does-not-exist"})
    assert response.status_code == 201


def test_invalid_status_is_rejected(client):
    response = client.post(ASSIGNMENTS, json={**PAYLOAD, "status": "pendiente"})
    assert response.status_code == 400


def test_null_status_is_rejected(client):
    response = client.put(ASSIGNMENTS, json={"id": "assignment-1", "status": None})
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "status"
