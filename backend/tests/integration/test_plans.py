"""Integration tests for the campaign planner."""

import json

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import CampaignPlan, Newsroom

pytestmark = pytest.mark.asyncio

PLAN_MARKDOWN = """# Spring Member Drive

## 4. Phases, dates, and touchplan

- Launch (Mar 3 - Mar 9)
  - March 3 (Monday): Announce the drive with the council story
  - March 6 (Thursday): Reader testimonial from a longtime member

## 5. Success metrics

- 400 new members
"""


@pytest.fixture
async def plan(db_session: AsyncSession, newsroom: Newsroom) -> CampaignPlan:
    plan = CampaignPlan(
        newsroom_id=newsroom.id,
        title="Spring Member Drive",
        inputs={"campaign_goal": "400 new members"},
        generated_plan=PLAN_MARKDOWN,
        ai_model="gpt-4o",
    )
    db_session.add(plan)
    await db_session.commit()
    await db_session.refresh(plan)
    return plan


class TestCreatePlan:
    async def test_mock_plan_is_saved_with_emails(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict, openai_provider
    ):
        openai_provider._configured = False

        response = await async_client.post(
            "/api/v1/campaign-plans",
            json={
                "newsroom_id": newsroom.id,
                "title": "Spring drive",
                "inputs": {"campaign_goal": "400 new members"},
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Spring drive"
        assert data["inputs"]["campaign_goal"] == "400 new members"
        assert len(data["emails"]) == 4
        assert data["emails"][0]["index"] == 0

    async def test_provider_plan_is_stored(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict, openai_provider
    ):
        openai_provider.answer = json.dumps({"plan": PLAN_MARKDOWN})

        response = await async_client.post(
            "/api/v1/campaign-plans",
            json={"newsroom_id": newsroom.id, "inputs": {"start_date": "2026-03-03"}},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json()["title"] == "Campaign Plan"
        assert response.json()["generated_plan"] == PLAN_MARKDOWN
        assert "2026-03-03" in openai_provider.prompts[0]

    async def test_empty_plan_from_provider_is_502(
        self, async_client: AsyncClient, newsroom: Newsroom, auth_headers: dict, openai_provider
    ):
        openai_provider.answer = json.dumps({"plan": ""})

        response = await async_client.post(
            "/api/v1/campaign-plans",
            json={"newsroom_id": newsroom.id},
            headers=auth_headers,
        )

        assert response.status_code == 502

    async def test_other_newsroom_forbidden(
        self,
        async_client: AsyncClient,
        other_newsroom: Newsroom,
        auth_headers: dict,
        openai_provider,
    ):
        response = await async_client.post(
            "/api/v1/campaign-plans",
            json={"newsroom_id": other_newsroom.id},
            headers=auth_headers,
        )

        assert response.status_code == 403
        assert openai_provider.prompts == []


class TestPlanCrud:
    async def test_list_and_get(
        self, async_client: AsyncClient, newsroom: Newsroom, plan: CampaignPlan, auth_headers: dict
    ):
        listing = await async_client.get(
            f"/api/v1/newsrooms/{newsroom.id}/campaign-plans", headers=auth_headers
        )
        assert [p["id"] for p in listing.json()] == [plan.id]

        response = await async_client.get(f"/api/v1/campaign-plans/{plan.id}", headers=auth_headers)
        assert response.status_code == 200
        assert [e["date"] for e in response.json()["emails"]] == ["March 3", "March 6"]

    async def test_delete(
        self, async_client: AsyncClient, plan: CampaignPlan, auth_headers: dict
    ):
        response = await async_client.delete(
            f"/api/v1/campaign-plans/{plan.id}", headers=auth_headers
        )
        assert response.status_code == 204

        missing = await async_client.get(f"/api/v1/campaign-plans/{plan.id}", headers=auth_headers)
        assert missing.status_code == 404

    async def test_other_tenant_forbidden(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        other_newsroom: Newsroom,
        auth_headers: dict,
    ):
        foreign = CampaignPlan(
            newsroom_id=other_newsroom.id,
            title="Theirs",
            inputs={},
            generated_plan=PLAN_MARKDOWN,
            ai_model="gpt-4o",
        )
        db_session.add(foreign)
        await db_session.commit()

        response = await async_client.get(
            f"/api/v1/campaign-plans/{foreign.id}", headers=auth_headers
        )
        assert response.status_code == 403
        response = await async_client.delete(
            f"/api/v1/campaign-plans/{foreign.id}", headers=auth_headers
        )
        assert response.status_code == 403


class TestNextEmail:
    async def test_first_pending_email(
        self, async_client: AsyncClient, plan: CampaignPlan, auth_headers: dict
    ):
        response = await async_client.post(
            f"/api/v1/campaign-plans/{plan.id}/next-email",
            json={"generated": ["Announce the drive"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["email"]["date"] == "March 6"
        assert data["remaining"] == 1
        assert "Reader testimonial" in data["suggestion"]

    async def test_all_generated(
        self, async_client: AsyncClient, plan: CampaignPlan, auth_headers: dict
    ):
        response = await async_client.post(
            f"/api/v1/campaign-plans/{plan.id}/next-email",
            json={
                "generated": [
                    "Announce the drive with the council story",
                    "Reader testimonial from a longtime member",
                ]
            },
            headers=auth_headers,
        )

        assert response.json() == {"email": None, "suggestion": None, "remaining": 0}
