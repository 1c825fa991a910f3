"""
tests/test_auth_routes.py -- Integration tests for POST /jwt and the auth guards.

Covers:
  - POST /jwt issues a credential that protected routes accept
  - Protected routes reject missing, malformed, invalid and expired credentials (401)
  - GET /user/admin/{email}: self-only (403 on path mismatch), admin role required (403),
    role read live from the store on every request

Fixtures used (from conftest.py):
  - api_client with admin@oyou.test (admin) and reader@oyou.test (user)
"""

from __future__ import annotations

import pytest

ADMIN_EMAIL = "admin@oyou.test"
READER_EMAIL = "reader@oyou.test"

PROTECTED = [("GET", "/user"), ("GET", f"/user/admin/{ADMIN_EMAIL}")]


class TestIssueToken:
    def test_issue_token(self, api_client) -> None:
        resp = api_client.client.post("/jwt", json={"email": READER_EMAIL})
        assert resp.status_code == 200, resp.text
        token = resp.json()["token"]
        listed = api_client.client.get("/user", headers={"Authorization": f"Bearer {token}"})
        assert listed.status_code == 200

    def test_issued_token_with_audience_and_numeric_sub_is_accepted(self, api_client) -> None:
        body = {"email": READER_EMAIL, "aud": "oyou-client", "sub": 42}
        token = api_client.client.post("/jwt", json=body).json()["token"]
        resp = api_client.client.get("/user", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200, resp.text

    def test_issue_token_rejects_non_object(self, api_client) -> None:
        resp = api_client.client.post("/jwt", json=["not", "an", "object"])
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "validation_error"


class TestTokenVerifier:
    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_missing_credential(self, api_client, method: str, path: str) -> None:
        resp = api_client.client.request(method, path)
        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "unauthorized"

    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_expired_credential(self, api_client, method: str, path: str) -> None:
        headers = api_client.bearer(ADMIN_EMAIL, expire_seconds=-3600)
        resp = api_client.client.request(method, path, headers=headers)
        assert resp.status_code == 401
        assert resp.json()["error"]["message"] == "Credential expired."

    @pytest.mark.parametrize("method,path", PROTECTED)
    def test_invalid_credential(self, api_client, method: str, path: str) -> None:
        resp = api_client.client.request(method, path, headers={"Authorization": "Bearer not.a.jwt"})
        assert resp.status_code == 401

    def test_non_bearer_scheme(self, api_client) -> None:
        token = api_client.token_for(ADMIN_EMAIL)
        resp = api_client.client.get("/user", headers={"Authorization": f"Token {token}"})
        assert resp.status_code == 401

    def test_valid_credential_lists_users(self, api_client) -> None:
        resp = api_client.client.get("/user", headers=api_client.bearer(READER_EMAIL))
        assert resp.status_code == 200
        emails = {u["email"] for u in resp.json()}
        assert {ADMIN_EMAIL, READER_EMAIL} <= emails


class TestAdminStatus:
    def test_admin_querying_self(self, api_client) -> None:
        resp = api_client.client.get(f"/user/admin/{ADMIN_EMAIL}", headers=api_client.bearer(ADMIN_EMAIL))
        assert resp.status_code == 200
        assert resp.json() == {"admin": True}

    def test_admin_querying_someone_else(self, api_client) -> None:
        resp = api_client.client.get(f"/user/admin/{READER_EMAIL}", headers=api_client.bearer(ADMIN_EMAIL))
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "forbidden"

    def test_ordinary_user_querying_self(self, api_client) -> None:
        resp = api_client.client.get(f"/user/admin/{READER_EMAIL}", headers=api_client.bearer(READER_EMAIL))
        assert resp.status_code == 403

    def test_ordinary_user_querying_admin(self, api_client) -> None:
        resp = api_client.client.get(f"/user/admin/{ADMIN_EMAIL}", headers=api_client.bearer(READER_EMAIL))
        assert resp.status_code == 403

    def test_unregistered_caller(self, api_client) -> None:
        email = "ghost@oyou.test"
        resp = api_client.client.get(f"/user/admin/{email}", headers=api_client.bearer(email))
        assert resp.status_code == 403

    def test_role_is_read_live(self, api_client) -> None:
        """The same credential flips from 403 to 200 once the stored role changes."""
        email = "promoted@oyou.test"
        users = api_client.ctx.store.users
        user_id = users.insert_one({"email": email, "role": "user"}).inserted_id
        headers = api_client.bearer(email)

        assert api_client.client.get(f"/user/admin/{email}", headers=headers).status_code == 403

        users.delete_one(user_id)
        users.insert_one({"email": email, "role": "admin"})

        resp = api_client.client.get(f"/user/admin/{email}", headers=headers)
        assert resp.status_code == 200
        assert resp.json() == {"admin": True}
