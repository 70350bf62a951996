from lab_dashboard_api.app.core.errors import field_errors, success
from lab_dashboard_api.app.services.laboratory_service import LaboratoryService

API = "/api/v1"


def test_success_envelope_omits_none():
    assert success() == {"success": True}
    assert success([], "ok", deletedCount=3) == {"success": True, "data": [], "message": "ok", "deletedCount": 3}


def test_field_errors_strip_location_prefix():
    details = field_errors(
        [{"loc": ("body", "results", 0, "status"), "msg": "bad", "type": "literal_error"}]
    )
    assert details == [{"field": "results.0.status", "message": "bad", "type": "literal_error"}]


def test_validation_reports_every_field(client, db):
    before = db.laboratories.dump()
    response = client.post(f"{API}/laboratories", json={"name": ""})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Datos inválidos"
    assert sorted(d["field"] for d in body["details"]) == ["address", "name"]
    assert db.laboratories.dump() == before


def test_malformed_json_is_400(client):
    response = client.post(
        f"{API}/laboratories",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Datos inválidos"


def test_unknown_route_uses_error_envelope(client):
    response = client.get(f"{API}/nothing-here")
    assert response.status_code == 404
    assert "error" in response.json()


def test_unexpected_failure_is_generic_500(lenient_client, monkeypatch):
    async def boom(cls):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(LaboratoryService, "list_laboratories", classmethod(boom))
    response = lenient_client.get(f"{API}/laboratories")
    assert response.status_code == 500
    assert response.json() == {"error": "Error interno del servidor"}


def test_health_reports_counts(client):
    body = client.get(f"{API}/health").json()
    assert body["data"]["status"] == "ok"
    assert body["data"]["counts"]["laboratories"] == 2
    assert body["data"]["chatPersistence"] is True
