import pytest
from fastapi import HTTPException

from app.modules.auth.service import AuthService, clear_auth_cache


@pytest.fixture(autouse=True)
def _clear_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


def test_register_creates_subcontractor_profile(client, fake_supabase):
    resp = client.post("/api/v1/auth/register", json={
        "email": "new@example.com",
        "password": "hunter22",
        "company_name": "Northside Plumbing",
        "phone_number": "",
    })

    assert resp.status_code == 201
    body = resp.json()
    assert body["profile_created"] is True
    profile = fake_supabase.profile(body["user_id"])
    assert profile["role"] == "subcontractor"
    assert profile["company_name"] == "Northside Plumbing"
    assert profile["phone_number"] is None


def test_register_never_grants_admin_even_to_designated_email(client, fake_supabase):
    resp = client.post("/api/v1/auth/register", json={
        "email": "admin@example.com",
        "password": "hunter22",
        "company_name": "Head Office",
    })

    assert resp.status_code == 201
    assert fake_supabase.profile(resp.json()["user_id"])["role"] == "subcontractor"


def test_register_duplicate_is_400(client, fake_supabase):
    fake_supabase.add_user("1", "taken@example.com")

    resp = client.post("/api/v1/auth/register", json={
        "email": "taken@example.com", "password": "hunter22", "company_name": "Dup Co",
    })

    assert resp.status_code == 400
    assert resp.json()["detail"] == "User already exists"


def test_register_profile_failure_is_not_fatal(client, fake_supabase):
    fake_supabase.failures[("profiles", "insert")] = "duplicate key"

    resp = client.post("/api/v1/auth/register", json={
        "email": "new@example.com", "password": "hunter22", "company_name": "Northside Plumbing",
    })

    assert resp.status_code == 201
    assert resp.json()["profile_created"] is False


def test_get_current_user_from_token(fake_supabase):
    fake_supabase.add_user("5", "crew@example.com")

    user = AuthService(fake_supabase).get_current_user("token-5")

    assert user["id"] == "5"
    assert user["email"] == "crew@example.com"


def test_get_current_user_invalid_token(fake_supabase):
    with pytest.raises(HTTPException) as exc:
        AuthService(fake_supabase).get_current_user("garbage")
    assert exc.value.status_code == 401


def test_me_includes_profile_role(client, fake_supabase, current_user):
    fake_supabase.add_profile(current_user["id"], role="admin")

    resp = client.get("/api/v1/auth/me")

    assert resp.status_code == 200
    assert resp.json()["role"] == "admin"
    assert resp.json()["is_admin"] is True
    assert resp.json()["is_designated_admin"] is False
