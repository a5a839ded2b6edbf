"""
Tests for the page HTTP endpoints

Exercises the CMS and public routers end to end against the in-memory
database, including the JSON error envelope.
"""

import uuid

from fastapi import status

BASE = "/api/v1/cms/landing-pages"


def landing_body(url: str = "/about", **overrides) -> dict:
    data = {
        "title": "About us",
        "language": "en",
        "html_input": "<p>About</p>",
        "url": url,
        "url_alias": f"/alias{url}",
        "components": [{"type": "hero", "props": {"heading": "Hi"}}],
        "revision": {"author": "alice", "message": "first"},
    }
    data.update(overrides)
    return data


async def create_page(client, **overrides) -> dict:
    response = await client.post(BASE, json={"contents": [landing_body(**overrides)]})
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


class TestCmsPageEndpoints:
    """Test the CMS endpoints for landing pages"""

    async def test_create_page(self, client):
        page = await create_page(client)

        content = page["contents"][0]
        assert content["url"] == "/about"
        assert content["mode"] == "Draft"
        assert content["revision"]["author"] == "alice"
        assert content["components"][0]["position"] == 0

    async def test_create_duplicate_url_conflict(self, client):
        await create_page(client)

        response = await client.post(BASE, json={"contents": [landing_body(url_alias="/other")]})

        assert response.status_code == status.HTTP_409_CONFLICT
        error = response.json()["error"]
        assert error["type"] == "Conflict"
        assert error["error_code"] == "DUPLICATE_URL"
        assert error["details"]["field"] == "url"
        assert error["path"] == BASE

    async def test_create_without_contents(self, client):
        response = await client.post(BASE, json={"contents": []})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["details"]["field"] == "contents"

    async def test_invalid_body_uses_error_envelope(self, client):
        response = await client.post(BASE, json={"contents": [{"title": "No language"}]})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        error = response.json()["error"]
        assert error["message"] == "Validation error"
        assert error["error_code"] == "REQUEST_VALIDATION"
        assert any("language" in item["field"] for item in error["details"]["validation_errors"])

    async def test_list_and_get(self, client):
        page = await create_page(client)
        await create_page(client, url="/pricing", title="Pricing")

        listing = await client.get(BASE, params={"title": "pric", "limit": 10})
        single = await client.get(f"{BASE}/{page['id']}")

        assert listing.status_code == status.HTTP_200_OK
        assert listing.json()["total"] == 1
        assert listing.json()["items"][0]["contents"][0]["title"] == "Pricing"
        assert single.json()["id"] == page["id"]

    async def test_get_unknown_page(self, client):
        response = await client.get(f"{BASE}/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error"]["type"] == "Not Found"

    async def test_update_then_revert(self, client):
        page = await create_page(client)
        original = page["contents"][0]

        updated = await client.put(
            f"{BASE}/contents/{original['id']}", json=landing_body(title="About v2")
        )
        assert updated.status_code == status.HTTP_200_OK
        assert updated.json()["title"] == "About v2"

        reverted = await client.post(
            f"{BASE}/revisions/{original['revision']['id']}/revert",
            json={"revision": {"author": "bob", "message": "revert"}},
        )

        assert reverted.status_code == status.HTTP_201_CREATED
        assert reverted.json()["title"] == "About us"
        assert reverted.json()["mode"] == "Draft"
        history = await client.get(f"{BASE}/{page['id']}/revisions", params={"language": "en"})
        assert [item["message"] for item in history.json()] == ["revert", "first", "first"]

    async def test_preview_returns_url(self, client):
        page = await create_page(client)

        response = await client.post(f"{BASE}/{page['id']}/preview", json=landing_body(html_input="draft"))

        assert response.status_code == status.HTTP_200_OK
        assert "/preview/en/landing?id=" in response.json()["preview_url"]

    async def test_duplicate_page(self, client):
        page = await create_page(client)

        response = await client.post(f"{BASE}/{page['id']}/duplicate")

        assert response.status_code == status.HTTP_201_CREATED
        copy = response.json()
        assert copy["id"] != page["id"]
        assert copy["contents"][0]["url"].startswith("/about-")

    async def test_duplicate_language(self, client):
        page = await create_page(client)

        response = await client.post(
            f"{BASE}/contents/{page['contents'][0]['id']}/duplicate-language",
            json={"revision": {"author": "alice", "message": "translate"}},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["language"] == "th"

    async def test_duplicate_language_requires_revision(self, client):
        page = await create_page(client)

        response = await client.post(f"{BASE}/contents/{page['contents'][0]['id']}/duplicate-language", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["details"]["field"] == "revision"
        assert response.json()["error"]["error_code"] == "NO_REVISION_FOUND"

    async def test_delete_page(self, client):
        page = await create_page(client)

        response = await client.delete(f"{BASE}/{page['id']}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert (await client.get(f"{BASE}/{page['id']}")).status_code == status.HTTP_404_NOT_FOUND


class TestPublicEndpoints:
    """Test the read-only endpoints used by the public site"""

    async def test_published_content_by_url(self, client):
        page = await create_page(client, url="/live", mode="Published", workflow_status="Published")

        response = await client.get("/api/v1/app/landing-pages", params={"url": "/live", "language": "en"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == page["contents"][0]["id"]

    async def test_draft_content_is_not_public(self, client):
        await create_page(client)

        response = await client.get("/api/v1/app/landing-pages", params={"url": "/about", "language": "en"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_other_kinds_are_routed(self, client):
        response = await client.post(
            "/api/v1/cms/faq-pages",
            json={"contents": [{"title": "Billing", "language": "en", "url": "/faq/billing", "revision": {}}]},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["contents"][0]["url"] == "/faq/billing"
