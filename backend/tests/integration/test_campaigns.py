"""Integration tests for campaign CRUD and AI endpoints."""

import json

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import AIProviderError
from infrastructure.database.models import BrandStylesheet, Campaign, Newsroom

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def campaign(db_session: AsyncSession, newsroom: Newsroom) -> Campaign:
    campaign = Campaign(
        newsroom_id=newsroom.id,
        title="Spring Drive",
        type="email",
        objective="donation",
        ai_model="gpt-4o",
        status="draft",
    )
    db_session.add(campaign)
    await db_session.commit()
    await db_session.refresh(campaign)
    return campaign


class TestCampaignCrud:
    async def test_create_and_list(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        response = await async_client.post(
            f"/api/v1/newsrooms/{newsroom.id}/campaigns",
            json={
                "title": "Membership push",
                "type": "social",
                "objective": "membership",
                "ai_model": "gpt-4o",
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["status"] == "draft"

        listing = await async_client.get(
            f"/api/v1/newsrooms/{newsroom.id}/campaigns", headers=auth_headers
        )
        assert [c["title"] for c in listing.json()] == ["Membership push"]

    async def test_status_filter(
        self, async_client: AsyncClient, newsroom: Newsroom, campaign: Campaign, auth_headers: dict
    ):
        response = await async_client.get(
            f"/api/v1/newsrooms/{newsroom.id}/campaigns?status=active", headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json() == []

    async def test_invalid_objective_is_400(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict
    ):
        response = await async_client.post(
            f"/api/v1/newsrooms/{newsroom.id}/campaigns",
            json={"title": "X", "type": "email", "objective": "fame", "ai_model": "gpt-4o"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    async def test_update(self, async_client: AsyncClient, campaign: Campaign, auth_headers: dict):
        response = await async_client.put(
            f"/api/v1/campaigns/{campaign.id}",
            json={"status": "active"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "active"
        assert response.json()["title"] == "Spring Drive"

    async def test_null_title_is_400(
        self, async_client: AsyncClient, campaign: Campaign, auth_headers: dict
    ):
        response = await async_client.put(
            f"/api/v1/campaigns/{campaign.id}",
            json={"title": None},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid data"

    async def test_delete_removes_from_list(
        self, async_client: AsyncClient, newsroom: Newsroom, campaign: Campaign, auth_headers: dict
    ):
        response = await async_client.delete(
            f"/api/v1/campaigns/{campaign.id}", headers=auth_headers
        )
        assert response.status_code == 204

        listing = await async_client.get(
            f"/api/v1/newsrooms/{newsroom.id}/campaigns", headers=auth_headers
        )
        assert listing.json() == []
        missing = await async_client.get(f"/api/v1/campaigns/{campaign.id}", headers=auth_headers)
        assert missing.status_code == 404

    async def test_other_tenant_forbidden(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        other_newsroom: Newsroom,
        auth_headers: dict,
    ):
        foreign = Campaign(
            newsroom_id=other_newsroom.id,
            title="Theirs",
            type="web",
            objective="engagement",
            ai_model="gpt-4o",
        )
        db_session.add(foreign)
        await db_session.commit()

        response = await async_client.get(f"/api/v1/campaigns/{foreign.id}", headers=auth_headers)
        assert response.status_code == 403
        response = await async_client.get(
            f"/api/v1/newsrooms/{other_newsroom.id}/campaigns", headers=auth_headers
        )
        assert response.status_code == 403


class TestGenerate:
    async def test_generate_saves_draft(
        self,
        async_client: AsyncClient,
        newsroom: Newsroom,
        stylesheet: BrandStylesheet,
        auth_headers: dict,
        openai_provider,
    ):
        openai_provider.answer = json.dumps(
            {
                "subject": "Keep the Ledger local",
                "previewText": "A note from our editor",
                "content": "Dear reader...",
                "cta": "Give today",
                "insights": ["Lead with the flood coverage"],
            }
        )

        response = await async_client.post(
            "/api/v1/campaigns/generate",
            json={
                "newsroom_id": newsroom.id,
                "type": "email",
                "objective": "donation",
                "context": "Year-end drive",
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["generated"]["preview_text"] == "A note from our editor"
        assert data["campaign"]["title"] == "Keep the Ledger local"
        assert data["campaign"]["status"] == "draft"
        assert data["campaign"]["brand_stylesheet_id"] == stylesheet.id

        prompt = openai_provider.prompts[0]
        assert "Warm and direct" in prompt
        assert "Founded in 2012." in prompt

    async def test_generate_without_key_uses_mock(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict, openai_provider
    ):
        openai_provider._configured = False

        response = await async_client.post(
            "/api/v1/campaigns/generate",
            json={
                "newsroom_id": newsroom.id,
                "title": "Mocked",
                "type": "web",
                "objective": "subscription",
                "context": "Paywall launch",
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["campaign"]["title"] == "Mocked"
        assert response.json()["generated"]["cta"]
        assert openai_provider.prompts == []

    async def test_unknown_model_is_400(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict, openai_provider
    ):
        response = await async_client.post(
            "/api/v1/campaigns/generate",
            json={
                "newsroom_id": newsroom.id,
                "type": "email",
                "objective": "donation",
                "context": "Drive",
                "ai_model": "gpt-5",
            },
            headers=auth_headers,
        )
        assert response.status_code == 400

    async def test_provider_failure_is_502(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict, openai_provider
    ):
        openai_provider.error = AIProviderError("OpenAI", "timeout")

        response = await async_client.post(
            "/api/v1/campaigns/generate",
            json={
                "newsroom_id": newsroom.id,
                "type": "email",
                "objective": "donation",
                "context": "Drive",
            },
            headers=auth_headers,
        )
        assert response.status_code == 502

    async def test_generate_for_other_newsroom_forbidden(
        self,
        async_client: AsyncClient,
        other_newsroom: Newsroom,
        auth_headers: dict,
        openai_provider,
    ):
        response = await async_client.post(
            "/api/v1/campaigns/generate",
            json={
                "newsroom_id": other_newsroom.id,
                "type": "email",
                "objective": "donation",
                "context": "Drive",
            },
            headers=auth_headers,
        )
        assert response.status_code == 403


class TestEvaluateAndRewrite:
    async def test_evaluate_stores_result(
        self,
        async_client: AsyncClient,
        newsroom: Newsroom,
        campaign: Campaign,
        auth_headers: dict,
        openai_provider,
    ):
        openai_provider.answer = json.dumps(
            {
                "overallScore": 81,
                "categoryScores": {"Clarity": 90, "Urgency": 72},
                "recommendations": ["Name the reporter"],
            }
        )

        response = await async_client.post(
            "/api/v1/campaigns/evaluate",
            json={
                "newsroom_id": newsroom.id,
                "campaign_id": campaign.id,
                "campaign_content": "Please give.",
                "campaign_type": "email",
                "framework": "bluelena",
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["overall_score"] == 81
        assert data["recommendations"] == ["Name the reporter"]

        listing = await async_client.get(
            f"/api/v1/newsrooms/{newsroom.id}/evaluations", headers=auth_headers
        )
        assert [e["id"] for e in listing.json()] == [data["id"]]

    async def test_evaluate_unknown_framework_is_400(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict, openai_provider
    ):
        response = await async_client.post(
            "/api/v1/campaigns/evaluate",
            json={
                "newsroom_id": newsroom.id,
                "campaign_content": "Please give.",
                "campaign_type": "email",
                "framework": "vibes",
            },
            headers=auth_headers,
        )
        assert response.status_code == 400

    async def test_rewrite(
        self,
        async_client: AsyncClient,
        newsroom: Newsroom,
        auth_headers: dict,
        openai_provider,
    ):
        openai_provider.answer = json.dumps({"rewrittenContent": "Please give today."})

        response = await async_client.post(
            "/api/v1/campaigns/ai-rewrite",
            json={
                "newsroom_id": newsroom.id,
                "original_content": "Please give.",
                "recommendations": ["Add urgency"],
                "campaign_type": "email",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"rewritten_content": "Please give today."}
        assert "Add urgency" in openai_provider.prompts[0]
