API = "/api/v1"

LABS = f"{API}/laboratories"


def test_list_laboratories_nests_children(client):
    response = client.get(LABS)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    lab = next(l for l in body["data"] if l["id"] == "1")
    assert [m["id"] for m in lab["machines"]] == ["1-1"]
    assert lab["machines"][0]["records"][0]["testName"] == "Hemograma Completo"
    assert {i["id"] for i in lab["inventory"]} == {"inv-1", "inv-2", "inv-3"}


def test_create_then_get_round_trips(client):
    response = client.post(LABS, json={"name": "Lab Este", "address": "Calle 9"})
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Laboratorio creado exitosamente"
    lab = body["data"]
    assert lab["id"]
    fetched = client.get(f"{LABS}/{lab['id']}").json()["data"]
    assert fetched == {"id": lab["id"], "name": "Lab Este", "address": "Calle 9", "machines": [], "inventory": []}


def test_partial_update_keeps_other_fields(client):
    response = client.put(LABS, json={"id": "2", "name": "Lab Sur Renovado"})
    assert response.status_code == 200
    lab = response.json()["data"]
    assert lab["name"] == "Lab Sur Renovado"
    assert lab["address"] == "Calle Sur 456, Ciudad"


def test_update_requires_id(client):
    response = client.put(LABS, json={"name": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "ID de laboratorio requerido"}


def test_update_missing_lab_is_404(client):
    response = client.put(LABS, json={"id": "nope", "name": "x"})
    assert response.status_code == 404
    assert response.json()["error"] == "Laboratorio no encontrado"


def test_delete_cascades_to_machines_records_and_inventory(client, db):
    response = client.delete(LABS, params={"id": "1"})
    assert response.status_code == 200
    assert response.json()["success"] is True

    assert "1" not in [l["id"] for l in client.get(LABS).json()["data"]]
    assert db.machines.list(labId="1") == []
    assert db.records.list(machineId="1-1") == []
    assert db.inventory.list(labId="1") == []
    assert [i["id"] for i in db.inventory.list()] == ["inv-4"]


def test_delete_twice_is_404_second_time(client, db):
    assert client.delete(LABS, params={"id": "2"}).status_code == 200
    remaining = db.laboratories.dump()
    response = client.delete(LABS, params={"id": "2"})
    assert response.status_code == 404
    assert db.laboratories.dump() == remaining


def test_delete_requires_id(client):
    assert client.delete(LABS).status_code == 400


def test_machine_crud(client):
    machines = f"{LABS}/2/machines"
    created = client.post(machines, json={"name": "Centrífuga", "type": "General", "status": "operativa"})
    assert created.status_code == 201
    machine = created.json()["data"]
    assert machine["labId"] == "2"
    assert machine["records"] == []

    updated = client.put(machines, json={"machineId": machine["id"], "status": "no_disponible"})
    assert updated.json()["data"]["status"] == "no_disponible"
    assert updated.json()["data"]["name"] == "Centrífuga"

    assert [m["id"] for m in client.get(machines).json()["data"]] == [machine["id"]]
    assert client.delete(machines, params={"machineId": machine["id"]}).status_code == 200
    assert client.get(machines).json()["data"] == []


def test_machine_routes_404_for_missing_lab(client):
    response = client.get(f"{LABS}/missing/machines")
    assert response.status_code == 404
    assert response.json()["error"] == "Laboratorio no encontrado"


def test_machine_of_other_lab_is_not_found(client):
    response = client.put(f"{LABS}/2/machines", json={"machineId": "1-1", "name": "x"})
    assert response.status_code == 404
    assert response.json()["error"] == "Máquina no encontrada"


def test_machine_status_must_be_known(client):
    response = client.post(f"{LABS}/1/machines", json={"name": "X", "type": "Y", "status": "rota"})
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "status"


def test_record_crud(client):
    records = f"{LABS}/1/machines/1-1/records"
    payload = {
        "testName": "Glucosa",
        "date": "2024-02-01",
        "status": "ordenada",
        "parameters": [
            {
                "name": "Glucosa",
                "value": "95",
                "unit": "mg/dL",
                "referenceMin": 70,
                "referenceMax": 110,
                "status": "normal",
            }
        ],
    }
    created = client.post(records, json=payload)
    assert created.status_code == 201
    record = created.json()["data"]
    assert record["machineId"] == "1-1"

    updated = client.put(records, json={"recordId": record["id"], "status": "completada"})
    assert updated.json()["data"]["parameters"][0]["value"] == "95"
    assert updated.json()["data"]["status"] == "completada"

    assert len(client.get(records).json()["data"]) == 2
    assert client.delete(records, params={"recordId": record["id"]}).status_code == 200
    assert client.delete(records, params={"recordId": record["id"]}).status_code == 404


def test_explicit_null_in_update_is_rejected(client):
    response = client.put(LABS, json={"id": "1", "name": None})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Datos inválidos"
    assert [d["field"] for d in body["details"]] == ["name"]
    assert client.get(f"{LABS}/1").json()["data"]["name"] == "Lab Central Norte"
