"""Integration tests for newsroom and brand stylesheet endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import BrandStylesheet, Newsroom

pytestmark = pytest.mark.asyncio


STYLESHEET_BODY = {
    "name": "Gala Season",
    "tone": "Celebratory",
    "voice": "Host",
    "key_messages": ["Thank you"],
    "materials": {
        "brand_foundation": {"style_guide": {"text": "Short sentences."}},
        "performance_data": {"campaign_metrics": {"file_url": "/objects/uploads/m.pdf"}},
    },
}


class TestNewsrooms:
    async def test_get_own_newsroom(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        response = await async_client.get(f"/api/v1/newsrooms/{newsroom.id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["slug"] == "riverside-ledger"

    async def test_get_other_newsroom_forbidden(
        self, async_client: AsyncClient, other_newsroom: Newsroom, auth_headers: dict
    ):
        response = await async_client.get(
            f"/api/v1/newsrooms/{other_newsroom.id}", headers=auth_headers
        )
        assert response.status_code == 403

    async def test_get_by_slug(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        response = await async_client.get(
            "/api/v1/newsrooms/slug/riverside-ledger", headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["id"] == newsroom.id

    async def test_unknown_slug_is_404(self, async_client: AsyncClient, super_admin_headers: dict):
        response = await async_client.get(
            "/api/v1/newsrooms/slug/no-such-paper", headers=super_admin_headers
        )
        assert response.status_code == 404

    async def test_super_admin_reads_any_newsroom(
        self, async_client: AsyncClient, other_newsroom: Newsroom, super_admin_headers: dict
    ):
        response = await async_client.get(
            f"/api/v1/newsrooms/{other_newsroom.id}", headers=super_admin_headers
        )
        assert response.status_code == 200


class TestStylesheets:
    async def test_create_and_list(
        self,
        async_client: AsyncClient,
        newsroom: Newsroom,
        stylesheet: BrandStylesheet,
        auth_headers: dict,
    ):
        response = await async_client.post(
            f"/api/v1/newsrooms/{newsroom.id}/stylesheets",
            json=STYLESHEET_BODY,
            headers=auth_headers,
        )

        assert response.status_code == 201
        created = response.json()
        assert created["newsroom_id"] == newsroom.id
        assert created["is_default"] is False
        assert created["materials"] == {
            "brand_foundation": {"style_guide": {"text": "Short sentences.", "file_url": ""}},
            "performance_data": {
                "campaign_metrics": {"text": "", "file_url": "/objects/uploads/m.pdf"}
            },
        }

        listing = await async_client.get(
            f"/api/v1/newsrooms/{newsroom.id}/stylesheets", headers=auth_headers
        )
        assert listing.status_code == 200
        assert {s["id"] for s in listing.json()} == {stylesheet.id, created["id"]}

    async def test_invalid_body_is_400(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        response = await async_client.post(
            f"/api/v1/newsrooms/{newsroom.id}/stylesheets",
            json={"name": "Broken", "tone": 42, "voice": "Host"},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid data"

    async def test_new_default_replaces_old(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        newsroom: Newsroom,
        stylesheet: BrandStylesheet,
        auth_headers: dict,
    ):
        response = await async_client.post(
            f"/api/v1/newsrooms/{newsroom.id}/stylesheets",
            json={**STYLESHEET_BODY, "is_default": True},
            headers=auth_headers,
        )
        assert response.status_code == 201

        await db_session.refresh(stylesheet)
        assert stylesheet.is_default is False

    async def test_create_in_other_newsroom_forbidden(
        self, async_client: AsyncClient, other_newsroom: Newsroom, auth_headers: dict
    ):
        response = await async_client.post(
            f"/api/v1/newsrooms/{other_newsroom.id}/stylesheets",
            json=STYLESHEET_BODY,
            headers=auth_headers,
        )
        assert response.status_code == 403

    async def test_update_is_partial(
        self, async_client: AsyncClient, stylesheet: BrandStylesheet, auth_headers: dict
    ):
        response = await async_client.put(
            f"/api/v1/stylesheets/{stylesheet.id}",
            json={"tone": "Urgent"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["tone"] == "Urgent"
        assert data["voice"] == "Neighbourly"
        assert data["materials"] == {"brand_foundation": {"about_us": {"text": "Founded in 2012."}}}

    async def test_null_for_required_field_is_400(
        self, async_client: AsyncClient, stylesheet: BrandStylesheet, auth_headers: dict
    ):
        response = await async_client.put(
            f"/api/v1/stylesheets/{stylesheet.id}",
            json={"tone": None},
            headers=auth_headers,
        )
        assert response.status_code == 400

        unchanged = await async_client.get(
            f"/api/v1/stylesheets/{stylesheet.id}", headers=auth_headers
        )
        assert unchanged.json()["tone"] == "Warm and direct"

    async def test_null_for_optional_field_clears_it(
        self, async_client: AsyncClient, stylesheet: BrandStylesheet, auth_headers: dict
    ):
        response = await async_client.put(
            f"/api/v1/stylesheets/{stylesheet.id}",
            json={"guidelines": None},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["guidelines"] is None

    async def test_delete_then_404(
        self, async_client: AsyncClient, stylesheet: BrandStylesheet, auth_headers: dict
    ):
        response = await async_client.delete(
            f"/api/v1/stylesheets/{stylesheet.id}", headers=auth_headers
        )
        assert response.status_code == 204

        response = await async_client.get(
            f"/api/v1/stylesheets/{stylesheet.id}", headers=auth_headers
        )
        assert response.status_code == 404

    async def test_other_tenant_cannot_read(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        other_newsroom: Newsroom,
        auth_headers: dict,
    ):
        foreign = BrandStylesheet(
            newsroom_id=other_newsroom.id, name="Theirs", tone="t", voice="v"
        )
        db_session.add(foreign)
        await db_session.commit()

        response = await async_client.get(f"/api/v1/stylesheets/{foreign.id}", headers=auth_headers)
        assert response.status_code == 403
