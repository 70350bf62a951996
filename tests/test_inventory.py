API = "/api/v1"
INVENTORY = f"{API}/inventory"

ITEM = {
    "name": "Pipetas",
    "category": "Material de laboratorio",
    "quantity": 40,
    "unit": "unidades",
    "minStock": 10,
    "expirationDate": "2027-01-01",
    "supplier": "LabSupply Co.",
    "status": "disponible",
}


def test_list_all_groups_by_lab(client):
    groups = client.get(INVENTORY).json()["data"]
    assert [(g["labId"], g["labName"]) for g in groups] == [("1", "Lab Central Norte"), ("2", "Lab Sur")]
    assert [i["id"] for i in groups[1]["inventory"]] == ["inv-4"]


def test_list_one_lab(client):
    items = client.get(INVENTORY, params={"labId": "1"}).json()["data"]
    assert [i["id"] for i in items] == ["inv-1", "inv-2", "inv-3"]


def test_list_unknown_lab_is_404(client):
    response = client.get(INVENTORY, params={"labId": "zzz"})
    assert response.status_code == 404
    assert response.json()["error"] == "Laboratorio no encontrado"


def test_add_update_delete_item(client):
    created = client.post(INVENTORY, json={**ITEM, "labId": "2"})
    assert created.status_code == 201
    item = created.json()["data"]
    assert item["labId"] == "2"
    assert item["quantity"] == 40

    updated = client.put(INVENTORY, json={"labId": "2", "itemId": item["id"], "quantity": 5, "status": "bajo_stock"})
    assert updated.status_code == 200
    assert updated.json()["data"]["quantity"] == 5
    assert updated.json()["data"]["supplier"] == "LabSupply Co."

    deleted = client.delete(INVENTORY, params={"labId": "2", "itemId": item["id"]})
    assert deleted.json() == {"success": True, "message": "Item eliminado exitosamente"}
    assert [i["id"] for i in client.get(INVENTORY, params={"labId": "2"}).json()["data"]] == ["inv-4"]


def test_add_requires_lab_id(client):
    response = client.post(INVENTORY, json=ITEM)
    assert response.status_code == 400
    assert response.json()["error"] == "ID de laboratorio requerido"


def test_update_item_in_wrong_lab_is_404(client):
    response = client.put(INVENTORY, json={"labId": "2", "itemId": "inv-1", "quantity": 1})
    assert response.status_code == 404
    assert response.json()["error"] == "Item no encontrado"


def test_delete_requires_both_ids(client):
    response = client.delete(INVENTORY, params={"labId": "1"})
    assert response.status_code == 400
    assert response.json()["error"] == "ID de laboratorio e item requeridos"


def test_negative_quantity_is_rejected(client, db):
    before = db.inventory.dump()
    response = client.post(INVENTORY, json={**ITEM, "labId": "1", "quantity": -1})
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "quantity"
    assert db.inventory.dump() == before


def test_null_fields_in_update_are_rejected(client):
    response = client.put(
        INVENTORY, json={"labId": "1", "itemId": "inv-1", "quantity": None, "status": None}
    )
    assert response.status_code == 400
    fields = {d["field"] for d in response.json()["details"]}
    assert fields == {"quantity", "status"}
