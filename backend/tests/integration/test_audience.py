"""Integration tests for audience segments and story summaries."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from core.exceptions import StorageError
from infrastructure.database.models import Newsroom

pytestmark = pytest.mark.asyncio


class TestSegments:
    async def test_create_list_update_delete(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        created = await async_client.post(
            f"/api/v1/newsrooms/{newsroom.id}/segments",
            json={"name": "Lapsed donors", "description": "Gave last year, not this year"},
            headers=auth_headers,
        )
        assert created.status_code == 201
        segment_id = created.json()["id"]

        patched = await async_client.patch(
            f"/api/v1/segments/{segment_id}",
            json={"name": "Lapsed members"},
            headers=auth_headers,
        )
        assert patched.status_code == 200
        assert patched.json()["name"] == "Lapsed members"
        assert patched.json()["description"] == "Gave last year, not this year"

        listing = await async_client.get(
            f"/api/v1/newsrooms/{newsroom.id}/segments", headers=auth_headers
        )
        assert [s["id"] for s in listing.json()] == [segment_id]

        deleted = await async_client.delete(f"/api/v1/segments/{segment_id}", headers=auth_headers)
        assert deleted.status_code == 204
        listing = await async_client.get(
            f"/api/v1/newsrooms/{newsroom.id}/segments", headers=auth_headers
        )
        assert listing.json() == []

    async def test_segments_are_tenant_scoped(
        self, async_client: AsyncClient, other_newsroom: Newsroom, auth_headers: dict
    ):
        response = await async_client.post(
            f"/api/v1/newsrooms/{other_newsroom.id}/segments",
            json={"name": "Students"},
            headers=auth_headers,
        )
        assert response.status_code == 403


class TestStorySummaries:
    @pytest.fixture(autouse=True)
    def public_dns(self):
        with patch(
            "api.routes.audience._resolve_addresses",
            new=AsyncMock(return_value=["93.184.216.34"]),
        ) as resolve:
            yield resolve

    async def test_supplied_summary_is_stored_verbatim(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        with patch(
            "api.routes.audience.campaign_ai_service.summarize_story", new=AsyncMock()
        ) as summarize:
            response = await async_client.post(
                f"/api/v1/newsrooms/{newsroom.id}/story-summaries",
                json={"title": "Flood recovery", "summary": "Town rebuilds the bridge."},
                headers=auth_headers,
            )

        assert response.status_code == 201
        assert response.json()["summary"] == "Town rebuilds the bridge."
        summarize.assert_not_called()

    async def test_summary_generated_from_fetched_page(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        page = "<html><body><script>x()</script><p>The council voted 5-2.</p></body></html>"
        with patch(
            "api.routes.audience.download_page", new=AsyncMock(return_value=page)
        ), patch(
            "api.routes.audience.campaign_ai_service.summarize_story",
            new=AsyncMock(return_value="Council approves budget."),
        ) as summarize:
            response = await async_client.post(
                f"/api/v1/newsrooms/{newsroom.id}/story-summaries",
                json={"title": "Budget vote", "original_url": "https://example.com/budget"},
                headers=auth_headers,
            )

        assert response.status_code == 201
        data = response.json()
        assert data["summary"] == "Council approves budget."
        assert "The council voted 5-2." in data["original_text"]
        assert "x()" not in data["original_text"]
        assert summarize.await_args.kwargs["newsroom_name"] == "Riverside Ledger"

    async def test_unfetchable_url_is_400(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        with patch(
            "api.routes.audience.download_page",
            new=AsyncMock(side_effect=StorageError("HTTP 404")),
        ):
            response = await async_client.post(
                f"/api/v1/newsrooms/{newsroom.id}/story-summaries",
                json={"title": "Gone", "original_url": "https://example.com/gone"},
                headers=auth_headers,
            )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Could not fetch story")

    async def test_requires_some_source(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        response = await async_client.post(
            f"/api/v1/newsrooms/{newsroom.id}/story-summaries",
            json={"title": "Empty"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    async def test_delete(self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict):
        created = await async_client.post(
            f"/api/v1/newsrooms/{newsroom.id}/story-summaries",
            json={"title": "Parade", "summary": "Annual parade returns."},
            headers=auth_headers,
        )
        summary_id = created.json()["id"]

        response = await async_client.delete(
            f"/api/v1/story-summaries/{summary_id}", headers=auth_headers
        )
        assert response.status_code == 204
        listing = await async_client.get(
            f"/api/v1/newsrooms/{newsroom.id}/story-summaries", headers=auth_headers
        )
        assert listing.json() == []


class TestStoryUrlGuard:
    @pytest.mark.parametrize(
        "url",
        [
            "http://127.0.0.1/latest/meta-data",
            "http://169.254.169.254/latest/meta-data/iam",
            "http://localhost:8000/api/v1/admin/users",
            "http://[::1]/",
            "http://10.0.0.8/internal",
            "file:///etc/passwd",
        ],
    )
    async def test_internal_urls_are_rejected(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict, url: str
    ):
        with patch("api.routes.audience.download_page", new=AsyncMock()) as download:
            response = await async_client.post(
                f"/api/v1/newsrooms/{newsroom.id}/story-summaries",
                json={"title": "Sneaky", "original_url": url},
                headers=auth_headers,
            )

        assert response.status_code == 400
        download.assert_not_called()

    async def test_hostname_resolving_to_private_network_is_rejected(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        with patch(
            "api.routes.audience._resolve_addresses",
            new=AsyncMock(return_value=["192.168.1.20"]),
        ), patch("api.routes.audience.download_page", new=AsyncMock()) as download:
            response = await async_client.post(
                f"/api/v1/newsrooms/{newsroom.id}/story-summaries",
                json={"title": "Intranet", "original_url": "https://intranet.example.com/"},
                headers=auth_headers,
            )

        assert response.status_code == 400
        assert response.json()["detail"] == "Story URL cannot point to a private network"
        download.assert_not_called()

    async def test_unresolvable_host_is_rejected(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        with patch(
            "api.routes.audience._resolve_addresses",
            new=AsyncMock(side_effect=OSError("Name or service not known")),
        ):
            response = await async_client.post(
                f"/api/v1/newsrooms/{newsroom.id}/story-summaries",
                json={"title": "Nowhere", "original_url": "https://no-such-host.invalid/"},
                headers=auth_headers,
            )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Could not resolve story host")
