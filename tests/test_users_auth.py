from lab_dashboard_api.app.core.security import hash_password, verify_password
from lab_dashboard_api.app.core.seed import ROLE_PERMISSIONS

API = "/api/v1"
USERS = f"{API}/users"
AUTH = f"{API}/auth"


def new_user(**overrides):
    payload = {"name": "Pedro Ruiz", "role": "Técnico", "email": "pedro@alquimist.com", "password": "secreto1"}
    payload.update(overrides)
    return payload


def test_login_returns_user_without_password(client):
    response = client.post(AUTH, json={"email": "admin@alquimist.com", "password": "admin123"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Login exitoso"
    assert body["user"]["role"] == "Admin"
    assert body["data"] == body["user"]
    assert "password" not in body["user"]


def test_login_with_wrong_password_is_401(client):
    response = client.post(AUTH, json={"email": "admin@alquimist.com", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"error": "Credenciales inválidas"}


def test_login_with_unknown_email_is_401(client):
    response = client.post(AUTH, json={"email": "ghost@alquimist.com", "password": "admin123"})
    assert response.status_code == 401


def test_logout_acknowledges(client):
    assert client.delete(AUTH).json() == {"success": True, "message": "Logout exitoso"}


def test_list_users_never_exposes_passwords(client):
    users = client.get(USERS).json()["data"]
    assert len(users) == 4
    assert all("password" not in u for u in users)


def test_list_users_filters(client):
    assert [u["id"] for u in client.get(USERS, params={"role": "Patóloga"}).json()["data"]] == ["patologa-1"]
    assert len(client.get(USERS, params={"labId": "lab-1"}).json()["data"]) == 3
    online = client.get(USERS, params={"onlineOnly": "true"}).json()["data"]
    assert "patologa-1" not in [u["id"] for u in online]


def test_create_user_derives_permissions_and_can_log_in(client, db):
    response = client.post(USERS, json=new_user())
    assert response.status_code == 201
    user = response.json()["data"]
    assert user["permissions"] == ROLE_PERMISSIONS["Técnico"]
    assert user["isOnline"] is False
    assert "password" not in user
    assert db.users.get(user["id"])["password"] != "secreto1"

    login = client.post(AUTH, json={"email": "pedro@alquimist.com", "password": "secreto1"})
    assert login.status_code == 200
    assert login.json()["user"]["id"] == user["id"]


def test_unknown_role_gets_no_permissions(client):
    user = client.post(USERS, json=new_user(role="Recepción")).json()["data"]
    assert user["permissions"] == []


def test_duplicate_email_is_rejected(client):
    response = client.post(USERS, json=new_user(email="admin@alquimist.com"))
    assert response.status_code == 400
    assert response.json()["error"] == "El email ya está registrado"


def test_update_email_conflict_only_against_other_users(client):
    same = client.put(USERS, json={"id": "jefe-1", "email": "jefe@alquimist.com"})
    assert same.status_code == 200
    taken = client.put(USERS, json={"id": "jefe-1", "email": "admin@alquimist.com"})
    assert taken.status_code == 400


def test_role_change_rederives_permissions(client):
    user = client.put(USERS, json={"id": "tecnico-1", "role": "Jefe de Lab"}).json()["data"]
    assert user["permissions"] == ROLE_PERMISSIONS["Jefe de Lab"]

    explicit = client.put(USERS, json={"id": "tecnico-1", "role": "Admin", "permissions": ["view_all", "view_all"]})
    assert explicit.json()["data"]["permissions"] == ["view_all"]


def test_update_cannot_change_password(client):
    client.put(USERS, json={"id": "admin-1", "password": "hacked123"})
    ok = client.post(AUTH, json={"email": "admin@alquimist.com", "password": "admin123"})
    assert ok.status_code == 200


def test_short_password_is_rejected(client):
    response = client.post(USERS, json=new_user(password="123"))
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "password"


def test_delete_user(client):
    assert client.delete(USERS, params={"id": "patologa-1"}).status_code == 200
    response = client.delete(USERS, params={"id": "patologa-1"})
    assert response.status_code == 404
    assert response.json()["error"] == "Usuario no encontrado"


def test_password_hash_carries_its_iteration_count():
    hashed = hash_password("secreto1", iterations=1000)
    rounds, salt_hex, hash_hex = hashed.split("$")
    assert rounds == "1000"
    assert verify_password("secreto1", hashed)
    assert not verify_password("otro", hashed)
    # Without the iteration count the hash is malformed.
    assert not verify_password("secreto1", f"{salt_hex}${hash_hex}")
    assert not verify_password("secreto1", "")
