"""
Tests for CampaignAIService dispatch, mock mode and normalization.
"""

import json

import pytest

from adapters.ai.campaign_ai_service import BrandVoice, CampaignAIService, CampaignRequest
from adapters.ai.providers import AIProvider
from core.exceptions import AIProviderError, AIResponseParseError, UnsupportedModelError
from services.prompt_service import PromptCache, PromptService


class FakeProvider(AIProvider):
    def __init__(self, name: str, answer: str = "{}", configured: bool = True, error=None):
        self.name = name
        self.display_name = name.title()
        self._configured = configured
        self.answer = answer
        self.error = error
        self.calls = []

    @property
    def is_configured(self) -> bool:
        return self._configured

    async def complete(self, prompt, model, system=None, max_tokens=None, temperature=None):
        self.calls.append({"prompt": prompt, "model": model, "system": system})
        if self.error:
            raise self.error
        return self.answer


def _providers(**overrides):
    providers = {
        "openai": FakeProvider("openai"),
        "anthropic": FakeProvider("anthropic"),
        "gemini": FakeProvider("gemini"),
    }
    providers.update(overrides)
    return providers


@pytest.fixture
def prompts(db_session):
    return PromptService(db_session, PromptCache())


@pytest.fixture
def campaign_request():
    return CampaignRequest(
        type="email",
        objective="donation",
        context="Year-end giving drive",
        newsroom_name="Riverside Ledger",
        brand=BrandVoice(tone="Warm", voice="Neighbourly", key_messages=["Reader-funded"]),
        reference_materials="## About Us\nFounded in 2012.",
        segments=["Lapsed donors"],
    )


class TestGenerateCampaign:
    async def test_routes_to_provider_and_normalizes(self, prompts, campaign_request):
        answer = json.dumps(
            {
                "subject": "S" * 70,
                "previewText": "Preview",
                "content": "Body",
                "cta": "Give",
                "insights": ["One"],
            }
        )
        anthropic = FakeProvider("anthropic", answer=answer)
        service = CampaignAIService(providers=_providers(anthropic=anthropic))

        result = await service.generate_campaign(campaign_request, "claude-sonnet-4", prompts)

        assert len(result["subject"]) == 50
        assert result["preview_text"] == "Preview"
        assert result["metrics"]["estimated_open_rate"] == 25
        call = anthropic.calls[0]
        assert call["model"] == "claude-sonnet-4-20250514"
        assert "Riverside Ledger" in call["prompt"]
        assert "Founded in 2012." in call["prompt"]
        assert "Lapsed donors" in call["prompt"]
        assert "Reader-funded" in call["prompt"]

    async def test_unconfigured_provider_returns_mock(self, prompts, campaign_request):
        openai = FakeProvider("openai", configured=False)
        service = CampaignAIService(providers=_providers(openai=openai))

        result = await service.generate_campaign(campaign_request, "gpt-4o", prompts)

        assert openai.calls == []
        assert result["subject"].startswith("Riverside Ledger")
        assert len(result["subject"]) <= 50
        assert "Year-end giving drive" in result["content"]

    async def test_unknown_model_rejected_before_dispatch(self, prompts, campaign_request):
        service = CampaignAIService(providers=_providers())
        with pytest.raises(UnsupportedModelError):
            await service.generate_campaign(campaign_request, "gpt-5", prompts)

    async def test_provider_error_propagates(self, prompts, campaign_request):
        gemini = FakeProvider("gemini", error=AIProviderError("Gemini", "quota"))
        service = CampaignAIService(providers=_providers(gemini=gemini))

        with pytest.raises(AIProviderError, match="Gemini API error"):
            await service.generate_campaign(campaign_request, "gemini-2.5-flash", prompts)

    async def test_invalid_json_raises_parse_error(self, prompts, campaign_request):
        openai = FakeProvider("openai", answer="Sorry, no JSON today")
        service = CampaignAIService(providers=_providers(openai=openai))

        with pytest.raises(AIResponseParseError):
            await service.generate_campaign(campaign_request, "gpt-4o", prompts)


class TestEvaluateRewriteSummarize:
    async def test_evaluate_clamps_scores(self, prompts):
        answer = json.dumps(
            {"overall_score": 120, "category_scores": {"clarity": 50}, "recommendations": ["x"]}
        )
        openai = FakeProvider("openai", answer=answer)
        service = CampaignAIService(providers=_providers(openai=openai))

        result = await service.evaluate_campaign(
            content="Copy",
            campaign_type="email",
            framework="bluelena",
            newsroom_name="Riverside Ledger",
            model="gpt-4o",
            prompts=prompts,
        )

        assert result["overall_score"] == 100
        assert result["category_scores"] == {"clarity": 50}
        assert "Copy" in openai.calls[0]["prompt"]

    async def test_evaluate_mock_scores_every_criterion(self, prompts):
        service = CampaignAIService(providers=_providers(openai=FakeProvider("openai", configured=False)))

        result = await service.evaluate_campaign(
            content="Copy",
            campaign_type="social",
            framework="audience_value_prop",
            newsroom_name="Riverside Ledger",
            model="gpt-4o",
            prompts=prompts,
        )

        assert result["overall_score"] == 70
        assert result["category_scores"]
        assert all(score == 70 for score in result["category_scores"].values())

    async def test_rewrite_accepts_camel_case(self, prompts):
        openai = FakeProvider("openai", answer='{"rewrittenContent": "Better copy"}')
        service = CampaignAIService(providers=_providers(openai=openai))

        rewritten = await service.rewrite_campaign(
            original_content="Copy",
            recommendations=["Be specific"],
            campaign_type="email",
            newsroom_name="Riverside Ledger",
            model="gpt-4o",
            prompts=prompts,
        )

        assert rewritten == "Better copy"
        assert "- Be specific" in openai.calls[0]["prompt"]

    async def test_rewrite_mock_returns_original(self, prompts):
        service = CampaignAIService(providers=_providers(openai=FakeProvider("openai", configured=False)))
        rewritten = await service.rewrite_campaign(
            "Copy", ["Tip"], "email", "Riverside Ledger", "gpt-4o", prompts
        )
        assert rewritten == "Copy"

    async def test_summarize_story(self, prompts):
        gemini = FakeProvider("gemini", answer='{"summary": "Short version."}')
        service = CampaignAIService(providers=_providers(gemini=gemini))

        summary = await service.summarize_story(
            "Flood coverage", "Long text", "Riverside Ledger", "gemini-2.5-flash", prompts
        )

        assert summary == "Short version."
        assert "Flood coverage" in gemini.calls[0]["prompt"]

    def test_provider_status(self):
        service = CampaignAIService(
            providers=_providers(gemini=FakeProvider("gemini", configured=False))
        )
        assert service.provider_status() == {"openai": True, "anthropic": True, "gemini": False}


class TestPlanAndQuickStart:
    async def test_campaign_plan_prompt_carries_inputs(self, prompts):
        openai = FakeProvider("openai", answer='{"plan": "# Plan\\n\\nPhases, dates, and touchplan"}')
        service = CampaignAIService(providers=_providers(openai=openai))

        plan = await service.generate_campaign_plan(
            "Spring drive",
            {"campaign_goal": "400 new members", "start_date": "2026-03-03"},
            "Riverside Ledger",
            "gpt-4o",
            prompts,
        )

        assert plan.startswith("# Plan")
        prompt = openai.calls[0]["prompt"]
        assert "400 new members" in prompt
        assert "Constraints: Not specified" in prompt

    async def test_mock_plan_has_parseable_touchplan(self, prompts):
        from services.campaign_plan_parser import parse_campaign_plan_emails

        service = CampaignAIService(
            providers=_providers(openai=FakeProvider("openai", configured=False))
        )
        plan = await service.generate_campaign_plan(
            "Spring drive", {}, "Riverside Ledger", "gpt-4o", prompts
        )

        emails = parse_campaign_plan_emails(plan)
        assert len(emails) == 4
        assert emails[0].phase == "Launch"

    async def test_rapid_response_includes_headline_and_urgency(self, prompts, campaign_request):
        answer = json.dumps({"subject": "Bridge closed", "content": "Body", "cta": "Give"})
        openai = FakeProvider("openai", answer=answer)
        service = CampaignAIService(providers=_providers(openai=openai))

        result = await service.generate_rapid_response(
            campaign_request, "Main Street bridge closes", "critical", "gpt-4o", prompts
        )

        assert result["subject"] == "Bridge closed"
        assert result["metrics"]["estimated_open_rate"] == 25
        prompt = openai.calls[0]["prompt"]
        assert "Main Street bridge closes" in prompt
        assert "Urgency: critical" in prompt

    async def test_segment_rewrite_names_segment(self, prompts):
        openai = FakeProvider("openai", answer='{"content": "For students"}')
        service = CampaignAIService(providers=_providers(openai=openai))

        result = await service.rewrite_for_segment(
            "Original body", "email", "Riverside Ledger", "Students", "Under 25", "gpt-4o", prompts
        )

        assert result["content"] == "For students"
        assert "Segment: Students" in openai.calls[0]["prompt"]

    async def test_subject_lines_capped_to_count_and_length(self, prompts):
        answer = json.dumps({"subjectLines": ["A" * 60, "Second", "Third"]})
        service = CampaignAIService(
            providers=_providers(openai=FakeProvider("openai", answer=answer))
        )

        lines = await service.suggest_subject_lines(
            "Budget story", "email", "donation", 2, "Riverside Ledger",
            BrandVoice(tone="Warm", voice="Neighbourly"), "gpt-4o", prompts,
        )

        assert lines == ["A" * 50, "Second"]

    async def test_cta_mock_respects_count(self, prompts):
        service = CampaignAIService(
            providers=_providers(openai=FakeProvider("openai", configured=False))
        )

        buttons = await service.suggest_cta_buttons(
            "Budget story", "email", "membership", 3, "Riverside Ledger",
            BrandVoice(tone="Warm", voice="Neighbourly"), "gpt-4o", prompts,
        )

        assert len(buttons) == 3

    async def test_grounding_library_requires_tone(self, prompts):
        service = CampaignAIService(
            providers=_providers(openai=FakeProvider("openai", answer='{"voice": "Calm"}'))
        )

        with pytest.raises(AIResponseParseError):
            await service.build_grounding_library(
                "We cover the valley", "", "Riverside Ledger", "gpt-4o", prompts
            )

    async def test_email_optimizer_uses_content_label(self, prompts):
        answer = json.dumps({"options": [{"text": "Read this first", "score": 88}]})
        openai = FakeProvider("openai", answer=answer)
        service = CampaignAIService(providers=_providers(openai=openai))

        options = await service.optimize_email_content(
            "preheader", "Spring member drive", "Lapsed members", "Win back members", "",
            "Riverside Ledger", BrandVoice(tone="Warm", voice="Neighbourly"), "gpt-4o", prompts,
        )

        assert options[0]["score"] == 88
        assert "optimized preheader text options" in openai.calls[0]["prompt"]
