"""
Notebox Backend — Notes Endpoint Tests
========================================

What:  HTTP-level tests for /create, /get, /view, /update, /delete and /health.
How:   HTTPX AsyncClient over ASGITransport; stores and verifier are the
       in-memory fakes injected by the `test_client` fixture.
"""

from unittest.mock import AsyncMock, patch

import pytest

from conftest import FIXED_TIMESTAMP

ALICE = {"Authorization": "token-alice"}
BOB = {"Authorization": "Bearer token-bob"}
GHOST = {"Authorization": "token-ghost"}


async def _create(client, headers=ALICE, **body):
    payload = {"title": "A", "visibility": "private", "folder": "root"}
    payload.update(body)
    response = await client.post("/create", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_returns_stored_note(self, test_client, folder_store):
        note = await _create(test_client)
        assert note["title"] == "A"
        assert note["visibility"] == "private"
        assert note["folder"] == "F1"
        assert note["owner"] == "alice"
        assert note["timestamp"] == FIXED_TIMESTAMP
        assert len(note["id"]) == 40
        assert "content" not in note
        assert folder_store.folders["F1"] == [note["id"]]

    @pytest.mark.asyncio
    async def test_create_malformed_body(self, test_client, note_store):
        response = await test_client.post("/create", json={"title": "A"}, headers=ALICE)
        assert response.status_code == 500
        assert response.json() == {"reason": "Internal server error"}
        assert note_store.notes == []


class TestAuthentication:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,url,body",
        [
            ("POST", "/create", {"title": "A", "visibility": "private", "folder": "root"}),
            ("GET", "/get/root", None),
            ("GET", "/view/abc", None),
            ("PUT", "/update", {"id": "abc", "title": "t", "content": "c"}),
            ("DELETE", "/delete", {"id": "abc", "folder": "F1"}),
        ],
    )
    async def test_unknown_user_is_400(self, test_client, method, url, body):
        response = await test_client.request(method, url, json=body, headers=GHOST)
        assert response.status_code == 400
        assert response.json() == {"reason": "User does not exist"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,url,body",
        [
            ("POST", "/create", {"title": "A", "visibility": "private", "folder": "root"}),
            ("GET", "/get/root", None),
            ("GET", "/view/abc", None),
            ("PUT", "/update", {"id": "abc", "title": "t", "content": "c"}),
            ("DELETE", "/delete", {"id": "abc", "folder": "F1"}),
        ],
    )
    async def test_missing_token_is_rejected(self, test_client, method, url, body):
        response = await test_client.request(method, url, json=body)
        assert response.status_code == 500
        assert response.json() == {"reason": "Internal server error"}

    @pytest.mark.asyncio
    async def test_invalid_token_has_no_side_effects(self, test_client, note_store, folder_store):
        response = await test_client.post(
            "/create",
            json={"title": "A", "visibility": "private", "folder": "F1"},
            headers={"Authorization": "forged"},
        )
        assert response.status_code == 500
        assert "reason" in response.json()
        assert note_store.notes == []
        assert folder_store.folders["F1"] == []


class TestListAndView:

    @pytest.mark.asyncio
    async def test_list_root_and_by_id(self, test_client, clock):
        first = await _create(test_client)
        clock.now += 1
        second = await _create(test_client, title="B")

        by_sentinel = (await test_client.get("/get/root", headers=ALICE)).json()
        by_id = (await test_client.get("/get/F1", headers=ALICE)).json()
        assert by_sentinel == by_id == [first, second]

    @pytest.mark.asyncio
    async def test_list_excludes_other_owner(self, test_client):
        await _create(test_client, folder="F3")
        response = await test_client.get("/get/F3", headers=BOB)
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_view(self, test_client):
        note = await _create(test_client)
        response = await test_client.get(f"/view/{note['id']}", headers=ALICE)
        assert response.status_code == 200
        assert response.json() == note

    @pytest.mark.asyncio
    async def test_view_other_owner_is_null(self, test_client):
        note = await _create(test_client)
        response = await test_client.get(f"/view/{note['id']}", headers=BOB)
        assert response.status_code == 200
        assert response.json() is None


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_returns_prev(self, test_client):
        note = await _create(test_client)

        response = await test_client.put(
            "/update",
            json={"id": note["id"], "title": "A2", "content": "hello"},
            headers=ALICE,
        )
        assert response.status_code == 200
        assert response.json() == {"prev": note}

        viewed = (await test_client.get(f"/view/{note['id']}", headers=ALICE)).json()
        assert viewed["title"] == "A2"
        assert viewed["content"] == "hello"
        assert viewed["owner"] == note["owner"]
        assert viewed["folder"] == note["folder"]
        assert viewed["id"] == note["id"]

    @pytest.mark.asyncio
    async def test_update_missing_note(self, test_client):
        response = await test_client.put(
            "/update", json={"id": "missing", "title": "x", "content": "y"}, headers=ALICE
        )
        assert response.status_code == 200
        assert response.json() == {"prev": None}


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client, folder_store):
        note = await _create(test_client)
        body = {"id": note["id"], "folder": "F1"}

        first = await test_client.request("DELETE", "/delete", json=body, headers=ALICE)
        assert first.status_code == 200
        assert first.json() == {"reason": "Success! 1 documents deleted", "n": 1}
        assert folder_store.folders["F1"] == []

        viewed = await test_client.get(f"/view/{note['id']}", headers=ALICE)
        assert viewed.json() is None

        second = await test_client.request("DELETE", "/delete", json=body, headers=ALICE)
        assert second.status_code == 200
        assert second.json() == {"reason": "Success! 0 documents deleted", "n": 0}

    @pytest.mark.asyncio
    async def test_unacknowledged_delete_is_500(self, test_client, note_store):
        note = await _create(test_client)
        note_store.acknowledge_deletes = False
        response = await test_client.request(
            "DELETE", "/delete", json={"id": note["id"], "folder": "F1"}, headers=ALICE
        )
        assert response.status_code == 500
        assert response.json() == {"reason": "Internal server error"}

    @pytest.mark.asyncio
    async def test_store_failure_is_500(self, test_client, note_store):
        note_store.fail_with = RuntimeError("disk full")
        response = await test_client.get("/get/root", headers=ALICE)
        assert response.status_code == 500
        assert response.json() == {"reason": "Internal server error"}


class TestAmbient:

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/get/root", headers={**ALICE, "X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/get/root", headers=ALICE)
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_health_healthy(self, test_client):
        with patch("notebox.routes.health.database.ping", new=AsyncMock(return_value=True)):
            response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_database_down(self, test_client):
        with patch(
            "notebox.routes.health.database.ping",
            new=AsyncMock(side_effect=ConnectionError("refused")),
        ):
            response = await test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"
