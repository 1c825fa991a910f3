"""
tests/test_view_routes.py -- Integration tests for the /view endpoints.

Covers:
  - POST /view then GET /view/{email} returns an array containing the document
  - GET /view lists every view; unknown email gives []
  - DELETE /view/{id} reports deletedCount 1 / 0
"""

from __future__ import annotations

from store.documents import new_document_id


def test_insert_then_list_by_email(api_client) -> None:
    resp = api_client.client.post("/view", json={"email": "a@b.com", "page": "home"})
    assert resp.status_code == 200, resp.text
    view_id = resp.json()["insertedId"]

    listed = api_client.client.get("/view/a@b.com")
    assert listed.status_code == 200
    assert {"_id": view_id, "email": "a@b.com", "page": "home"} in listed.json()


def test_list_all_views(api_client) -> None:
    api_client.client.post("/view", json={"email": "c@d.com", "page": "pricing"})
    resp = api_client.client.get("/view")
    assert resp.status_code == 200
    assert any(v["page"] == "pricing" for v in resp.json())


def test_unknown_email_returns_empty_list(api_client) -> None:
    resp = api_client.client.get("/view/nobody@oyou.test")
    assert resp.status_code == 200
    assert resp.json() == []


def test_view_requires_email(api_client) -> None:
    resp = api_client.client.post("/view", json={"page": "home"})
    assert resp.status_code == 422


def test_delete_view(api_client) -> None:
    view_id = api_client.client.post("/view", json={"email": "e@f.com", "page": "x"}).json()["insertedId"]
    assert api_client.client.delete(f"/view/{view_id}").json() == {"acknowledged": True, "deletedCount": 1}
    assert api_client.client.delete(f"/view/{view_id}").json() == {"acknowledged": True, "deletedCount": 0}
    assert api_client.client.get("/view/e@f.com").json() == []


def test_delete_unknown_view(api_client) -> None:
    resp = api_client.client.delete(f"/view/{new_document_id()}")
    assert resp.json()["deletedCount"] == 0
