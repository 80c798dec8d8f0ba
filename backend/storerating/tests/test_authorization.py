from storerating.core.security import create_access_token
from storerating.services.bootstrap import ensure_admin

from conftest import auth_header, login, register


def test_health_is_public(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_missing_token_is_401(client):
    r = client.get("/users/profile")
    assert r.status_code == 401
    assert r.json()["code"] == "auth_missing"
    assert "error" in r.json()


def test_non_bearer_scheme_is_401(client):
    r = client.get("/users/profile", headers={"Authorization": "Basic abc"})
    assert r.status_code == 401


def test_invalid_token_is_403(client):
    r = client.get("/users/profile", headers=auth_header("not.a.token"))
    assert r.status_code == 403
    assert r.json()["code"] == "auth_invalid"


def test_expired_token_is_403(client):
    body = register(client, "jq@ex.com")
    token = create_access_token(body["user"]["id"], "normal_user", expires_minutes=-5)
    r = client.get("/users/profile", headers=auth_header(token))
    assert r.status_code == 403
    assert r.json()["code"] == "auth_invalid"


def test_wrong_role_is_forbidden(client, admin_token):
    token = register(client, "jq@ex.com")["token"]

    r = client.get("/admin/dashboard", headers=auth_header(token))
    assert r.status_code == 403
    assert r.json()["code"] == "forbidden"

    r = client.post("/ratings", json={"storeId": 1, "rating": 3}, headers=auth_header(admin_token))
    assert r.status_code == 403

    r = client.get("/store-owner/dashboard", headers=auth_header(token))
    assert r.status_code == 403

    r = client.post("/users/claim-store-owner", headers=auth_header(admin_token))
    assert r.status_code == 403


def test_profile_projection_by_population(client, admin_token):
    r = client.get("/users/profile", headers=auth_header(admin_token))
    assert r.status_code == 200
    profile = r.json()
    assert profile["role"] == "admin"
    assert profile["email"] == "admin@storerating.com"
    assert profile["claim_status"] == "none"
    assert "hashed_password" not in profile


def test_bootstrap_admin_created_once(client, admin_token, db):
    assert ensure_admin(db) is None
    r = client.get("/admin/users", headers=auth_header(admin_token))
    admins = [u for u in r.json() if u["role"] == "admin"]
    assert len(admins) == 1
    assert login(client, "admin@storerating.com", "Admin123!")
