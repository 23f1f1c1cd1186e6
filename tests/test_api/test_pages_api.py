"""Page API integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.conftest import login

if TYPE_CHECKING:
    from httpx import AsyncClient


async def _page_ids(client: AsyncClient) -> list[str]:
    resp = await client.get("/api/pages")
    assert resp.status_code == 200
    return resp.json()["pages"]


class TestReadEndpoints:
    async def test_fresh_store_lists_default_page(self, client: AsyncClient) -> None:
        assert await _page_ids(client) == ["page1"]

    async def test_unknown_page_reads_empty(self, client: AsyncClient) -> None:
        resp = await client.get("/api/page/page_404")
        assert resp.status_code == 200
        assert resp.json() == {"content": ""}

    async def test_invalid_page_id(self, client: AsyncClient) -> None:
        resp = await client.get("/api/page/bad.id")
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Invalid page ID"}

    async def test_public_page_shows_welcome_on_fresh_store(self, client: AsyncClient) -> None:
        resp = await client.get("/")
        assert resp.status_code == 200
        assert "Welcome to Edge Notes" in resp.text
        assert 'data-page-id="page1"' in resp.text

    async def test_public_page_escapes_content(
        self, client: AsyncClient, auth_cookie: str
    ) -> None:
        await client.post(
            "/api/save",
            json={"pageId": "page1", "content": "<script>alert(1)</script>"},
            headers={"Cookie": auth_cookie},
        )
        resp = await client.get("/")
        assert "<script>alert(1)</script>" not in resp.text
        assert "&lt;script&gt;" in resp.text


class TestMutationsRequireSession:
    @pytest.mark.parametrize(
        ("path", "kwargs"),
        [
            ("/api/pages", {"json": {"name": "Diary"}}),
            ("/api/save", {"json": {"pageId": "page1", "content": "x"}}),
            ("/api/delete/page_1", {}),
            ("/api/save-bg", {"json": {"key": "bg:pc", "url": "https://e.com/a.png"}}),
            ("/api/save-opacity", {"json": {"key": "card", "value": "0.5"}}),
        ],
    )
    async def test_forbidden_without_cookie(
        self, client: AsyncClient, path: str, kwargs: dict[str, object]
    ) -> None:
        resp = await client.post(path, **kwargs)
        assert resp.status_code == 403
        assert resp.json() == {"detail": "Forbidden"}

    async def test_forbidden_with_wrong_token(self, client: AsyncClient) -> None:
        resp = await client.post(
            "/api/pages",
            json={"name": "Diary"},
            headers={"Cookie": "edgenote=deadbeef"},
        )
        assert resp.status_code == 403
        assert await _page_ids(client) == ["page1"]

    async def test_forbidden_save_leaves_content(self, client: AsyncClient) -> None:
        resp = await client.post("/api/save", content="overwrite", headers={"Cookie": "x=y"})
        assert resp.status_code == 403
        assert (await client.get("/api/page/page1")).json() == {"content": ""}


class TestCreatePage:
    async def test_create_json(self, client: AsyncClient, auth_cookie: str) -> None:
        resp = await client.post(
            "/api/pages", json={"name": "My Notes"}, headers={"Cookie": auth_cookie}
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["id"].startswith("page_")
        assert body["title"] == "My Notes"

        assert await _page_ids(client) == ["page1", body["id"]]
        assert (await client.get(f"/api/page/{body['id']}")).json() == {"content": ""}

    async def test_create_form(self, client: AsyncClient, auth_cookie: str) -> None:
        resp = await client.post(
            "/api/pages", data={"name": "Groceries"}, headers={"Cookie": auth_cookie}
        )
        assert resp.status_code == 201
        assert resp.json()["title"] == "Groceries"

    async def test_whitespace_name_rejected(self, client: AsyncClient, auth_cookie: str) -> None:
        resp = await client.post("/api/pages", json={"name": "   "}, headers={"Cookie": auth_cookie})
        assert resp.status_code == 400
        assert await _page_ids(client) == ["page1"]

    async def test_missing_name_rejected(self, client: AsyncClient, auth_cookie: str) -> None:
        resp = await client.post("/api/pages", json={}, headers={"Cookie": auth_cookie})
        assert resp.status_code == 400

    async def test_long_name_truncated(self, client: AsyncClient, auth_cookie: str) -> None:
        resp = await client.post(
            "/api/pages", json={"name": "n" * 50}, headers={"Cookie": auth_cookie}
        )
        assert resp.json()["title"] == "n" * 20


class TestSavePage:
    async def test_save_json(self, client: AsyncClient, auth_cookie: str) -> None:
        resp = await client.post(
            "/api/save",
            json={"pageId": "page1", "content": "hello"},
            headers={"Cookie": auth_cookie},
        )
        assert resp.status_code == 204
        assert (await client.get("/api/page/page1")).json() == {"content": "hello"}

    async def test_save_form(self, client: AsyncClient, auth_cookie: str) -> None:
        resp = await client.post(
            "/api/save",
            data={"pageId": "page_7", "content": "from a form"},
            headers={"Cookie": auth_cookie},
        )
        assert resp.status_code == 204
        assert (await client.get("/api/page/page_7")).json() == {"content": "from a form"}
        # Saving does not list the page.
        assert await _page_ids(client) == ["page1"]

    async def test_save_raw_text_goes_to_default_page(
        self, client: AsyncClient, auth_cookie: str
    ) -> None:
        resp = await client.post(
            "/api/save",
            content="line one\nline two",
            headers={"Cookie": auth_cookie, "Content-Type": "text/plain"},
        )
        assert resp.status_code == 204
        assert (await client.get("/api/page/page1")).json() == {"content": "line one\nline two"}

    async def test_save_defaults_page_id(self, client: AsyncClient, auth_cookie: str) -> None:
        await client.post("/api/save", json={"content": "default"}, headers={"Cookie": auth_cookie})
        assert (await client.get("/api/page/page1")).json() == {"content": "default"}

    async def test_save_invalid_page_id(self, client: AsyncClient, auth_cookie: str) -> None:
        resp = await client.post(
            "/api/save",
            json={"pageId": "title:page1", "content": "x"},
            headers={"Cookie": auth_cookie},
        )
        assert resp.status_code == 400

    async def test_save_non_text_content(self, client: AsyncClient, auth_cookie: str) -> None:
        resp = await client.post(
            "/api/save",
            json={"pageId": "page1", "content": {"nested": True}},
            headers={"Cookie": auth_cookie},
        )
        assert resp.status_code == 400


class TestDeletePage:
    async def test_delete_default_page_rejected(
        self, client: AsyncClient, auth_cookie: str
    ) -> None:
        resp = await client.post("/api/delete/page1", headers={"Cookie": auth_cookie})
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Cannot delete default page"}
        assert await _page_ids(client) == ["page1"]

    async def test_delete_unknown_page_is_noop(self, client: AsyncClient, auth_cookie: str) -> None:
        resp = await client.post("/api/delete/page_missing", headers={"Cookie": auth_cookie})
        assert resp.status_code == 204

    async def test_delete_removes_content_and_title(
        self, client: AsyncClient, auth_cookie: str
    ) -> None:
        created = await client.post(
            "/api/pages", json={"name": "Scratch"}, headers={"Cookie": auth_cookie}
        )
        page_id = created.json()["id"]
        await client.post(
            "/api/save",
            json={"pageId": page_id, "content": "temporary"},
            headers={"Cookie": auth_cookie},
        )

        resp = await client.post(f"/api/delete/{page_id}", headers={"Cookie": auth_cookie})

        assert resp.status_code == 204
        assert await _page_ids(client) == ["page1"]
        assert (await client.get(f"/api/page/{page_id}")).json() == {"content": ""}


class TestEndToEnd:
    async def test_login_create_delete_cycle(self, client: AsyncClient) -> None:
        assert await _page_ids(client) == ["page1"]

        cookie = await login(client)
        admin = await client.get("/admin", headers={"Cookie": cookie})
        assert 'id="content"' in admin.text

        created = await client.post(
            "/api/pages", json={"name": "Diary"}, headers={"Cookie": cookie}
        )
        assert created.status_code == 201
        diary_id = created.json()["id"]
        assert await _page_ids(client) == ["page1", diary_id]

        deleted = await client.post(f"/api/delete/{diary_id}", headers={"Cookie": cookie})
        assert deleted.status_code == 204
        assert await _page_ids(client) == ["page1"]

        await client.post("/api/logout")
        forbidden = await client.post(
            "/api/pages", json={"name": "After logout"}, headers={"Cookie": "edgenote="}
        )
        assert forbidden.status_code == 403
