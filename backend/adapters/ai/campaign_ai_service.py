"""
Campaign generation, evaluation, rewriting and story summarization.

Builds the prompt for each task through ``PromptService``, dispatches it
to the vendor that serves the requested model, and normalizes the JSON
answer. Without an API key for the selected vendor a deterministic mock
answer is returned so the product stays usable in development.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from adapters.ai.providers import AIProvider, build_default_providers, resolve_model
from adapters.ai.response_parser import (
    SUBJECT_MAX_LENGTH,
    format_brand_profile,
    format_campaign_response,
    format_evaluation_response,
    format_optimizer_options,
    format_plan_response,
    format_suggestions,
    parse_json_response,
)
from services.prompt_catalog import (
    CAMPAIGN_EVALUATE,
    CAMPAIGN_GENERATE,
    CAMPAIGN_PLAN,
    CAMPAIGN_REWRITE,
    CTA_BUTTONS,
    EMAIL_OPTIMIZER,
    EVALUATION_FRAMEWORKS,
    GROUNDING_LIBRARY,
    OBJECTIVE_FOCUS,
    OPTIMIZER_CONTENT_TYPES,
    PLAN_INPUT_FIELDS,
    RAPID_RESPONSE,
    SEGMENT_REWRITE,
    STORY_SUMMARY,
    SUBJECT_LINES,
)
from services.prompt_service import PromptService, RenderedPrompt

logger = logging.getLogger(__name__)


@dataclass
class BrandVoice:
    tone: str
    voice: str
    key_messages: list[str] = field(default_factory=list)
    guidelines: str = ""

    @classmethod
    def from_stylesheet(cls, stylesheet) -> "BrandVoice":
        """Voice of a brand stylesheet row; a generic newsroom voice when there is none."""
        if stylesheet is None:
            return FALLBACK_BRAND
        return cls(
            tone=stylesheet.tone,
            voice=stylesheet.voice,
            key_messages=list(stylesheet.key_messages or []),
            guidelines=stylesheet.guidelines or "",
        )


# Used when a newsroom has no stylesheet at all
FALLBACK_BRAND = BrandVoice(
    tone="Warm, direct and community-minded",
    voice="Trusted local newsroom speaking to its readers",
    key_messages=["Independent local journalism depends on reader support"],
)


@dataclass
class CampaignRequest:
    """Everything the model needs to write a campaign."""

    type: str
    objective: str
    context: str
    newsroom_name: str
    brand: BrandVoice
    reference_materials: str = ""
    segments: list[str] = field(default_factory=list)

    def prompt_variables(self) -> dict[str, Any]:
        return {
            "campaign_type": self.type,
            "objective": self.objective,
            "objective_focus": OBJECTIVE_FOCUS.get(self.objective, self.objective),
            "context": self.context,
            "newsroom_name": self.newsroom_name,
            "tone": self.brand.tone,
            "voice": self.brand.voice,
            "key_messages": self.brand.key_messages,
            "guidelines": self.brand.guidelines,
            "segments": self.segments or "General audience",
            "reference_materials": self.reference_materials or "None provided",
            "content_requirements": (
                "subject line, preview text and email" if self.type == "email" else self.type
            ),
        }


class CampaignAIService:
    """AI provider service for newsroom campaigns."""

    def __init__(self, providers: Optional[dict[str, AIProvider]] = None):
        self._providers = providers if providers is not None else build_default_providers()

    def provider_status(self) -> dict[str, bool]:
        return {name: p.is_configured for name, p in self._providers.items()}

    async def _complete_json(
        self,
        model: str,
        prompt: RenderedPrompt,
        mock: dict[str, Any],
    ) -> dict[str, Any]:
        route = resolve_model(model)
        provider = self._providers[route.provider]

        if not provider.is_configured:
            logger.warning(
                "%s is not configured; returning mock response for '%s'",
                provider.display_name,
                prompt.key,
            )
            return mock

        text = await provider.complete(
            prompt.text,
            model=route.vendor_model,
            system=prompt.system_message,
        )
        logger.debug("%s answered '%s' (%d chars)", provider.display_name, prompt.key, len(text))
        return parse_json_response(text)

    async def generate_campaign(
        self,
        request: CampaignRequest,
        model: str,
        prompts: PromptService,
    ) -> dict[str, Any]:
        """
        Generate campaign copy.

        Returns:
            Normalized campaign dict (subject, preview_text, content, cta,
            insights, metrics)

        Raises:
            UnsupportedModelError: Unknown model identifier
            AIProviderError: Vendor call failed
            AIResponseParseError: Vendor answered with invalid JSON
        """
        resolve_model(model)
        prompt = await prompts.get_prompt(CAMPAIGN_GENERATE, request.prompt_variables())
        raw = await self._complete_json(model, prompt, self._mock_campaign(request))
        return format_campaign_response(raw)

    async def evaluate_campaign(
        self,
        content: str,
        campaign_type: str,
        framework: str,
        newsroom_name: str,
        model: str,
        prompts: PromptService,
    ) -> dict[str, Any]:
        """Score campaign copy against one of the evaluation frameworks."""
        resolve_model(model)
        framework_name, criteria = EVALUATION_FRAMEWORKS[framework]
        prompt = await prompts.get_prompt(
            CAMPAIGN_EVALUATE,
            {
                "campaign_type": campaign_type,
                "newsroom_name": newsroom_name,
                "framework_name": framework_name,
                "framework_criteria": "\n".join(f"- {c}" for c in criteria),
                "campaign_content": content,
            },
        )
        raw = await self._complete_json(model, prompt, self._mock_evaluation(criteria))
        return format_evaluation_response(raw)

    async def rewrite_campaign(
        self,
        original_content: str,
        recommendations: list[str],
        campaign_type: str,
        newsroom_name: str,
        model: str,
        prompts: PromptService,
    ) -> str:
        resolve_model(model)
        prompt = await prompts.get_prompt(
            CAMPAIGN_REWRITE,
            {
                "campaign_type": campaign_type,
                "newsroom_name": newsroom_name,
                "recommendations": "\n".join(f"- {r}" for r in recommendations),
                "original_content": original_content,
            },
        )
        raw = await self._complete_json(
            model, prompt, {"rewritten_content": original_content}
        )
        rewritten = raw.get("rewritten_content") or raw.get("rewrittenContent") or raw.get("content")
        return str(rewritten or "")

    async def summarize_story(
        self,
        title: str,
        original_text: str,
        newsroom_name: str,
        model: str,
        prompts: PromptService,
    ) -> str:
        resolve_model(model)
        prompt = await prompts.get_prompt(
            STORY_SUMMARY,
            {"newsroom_name": newsroom_name, "title": title, "original_text": original_text},
        )
        mock_summary = " ".join(original_text.split()[:60])
        raw = await self._complete_json(model, prompt, {"summary": mock_summary})
        return str(raw.get("summary") or "")

    async def generate_campaign_plan(
        self,
        title: str,
        inputs: dict[str, Any],
        newsroom_name: str,
        model: str,
        prompts: PromptService,
    ) -> str:
        """
        Write a markdown campaign plan.

        ``inputs`` holds the planner form (organization_profile,
        campaign_goal, start_date, ...); blank entries render as
        "Not specified".
        """
        resolve_model(model)
        variables = {name: inputs.get(name) or "Not specified" for name in PLAN_INPUT_FIELDS}
        variables.update(newsroom_name=newsroom_name, title=title)
        prompt = await prompts.get_prompt(CAMPAIGN_PLAN, variables)
        raw = await self._complete_json(
            model, prompt, {"plan": self._mock_plan(title, newsroom_name, inputs)}
        )
        return format_plan_response(raw)

    async def generate_rapid_response(
        self,
        request: CampaignRequest,
        headline: str,
        urgency: str,
        model: str,
        prompts: PromptService,
    ) -> dict[str, Any]:
        """Campaign copy tying a breaking headline to reader support."""
        resolve_model(model)
        variables = request.prompt_variables()
        variables.update(headline=headline, urgency=urgency)
        prompt = await prompts.get_prompt(RAPID_RESPONSE, variables)

        mock = self._mock_campaign(request)
        mock["subject"] = f"Breaking: {headline}"
        raw = await self._complete_json(model, prompt, mock)
        return format_campaign_response(raw)

    async def rewrite_for_segment(
        self,
        original_content: str,
        campaign_type: str,
        newsroom_name: str,
        segment_name: str,
        segment_description: str,
        model: str,
        prompts: PromptService,
    ) -> dict[str, Any]:
        resolve_model(model)
        prompt = await prompts.get_prompt(
            SEGMENT_REWRITE,
            {
                "campaign_type": campaign_type,
                "newsroom_name": newsroom_name,
                "segment_name": segment_name,
                "segment_description": segment_description,
                "original_content": original_content,
            },
        )
        mock = {
            "subject": f"For our {segment_name} readers",
            "content": original_content,
            "insights": [f"Mock adaptation for {segment_name}. Configure an AI provider key."],
        }
        raw = await self._complete_json(model, prompt, mock)
        return format_campaign_response(raw)

    def _suggestion_variables(
        self,
        context: str,
        campaign_type: str,
        objective: str,
        count: int,
        newsroom_name: str,
        brand: BrandVoice,
    ) -> dict[str, Any]:
        return {
            "count": count,
            "campaign_type": campaign_type,
            "newsroom_name": newsroom_name,
            "objective_focus": OBJECTIVE_FOCUS.get(objective, objective),
            "context": context,
            "tone": brand.tone,
            "voice": brand.voice,
        }

    async def suggest_subject_lines(
        self,
        context: str,
        campaign_type: str,
        objective: str,
        count: int,
        newsroom_name: str,
        brand: BrandVoice,
        model: str,
        prompts: PromptService,
    ) -> list[str]:
        resolve_model(model)
        prompt = await prompts.get_prompt(
            SUBJECT_LINES,
            self._suggestion_variables(context, campaign_type, objective, count, newsroom_name, brand),
        )
        mock = {
            "subject_lines": [
                f"{newsroom_name} needs you today",
                "Local news is worth keeping",
                "Your neighbors are counting on you",
                "Keep the newsroom in your town",
                "One minute to back local reporting",
            ][:count]
        }
        raw = await self._complete_json(model, prompt, mock)
        return format_suggestions(
            raw, ("subject_lines", "subjectLines"), count, max_length=SUBJECT_MAX_LENGTH
        )

    async def suggest_cta_buttons(
        self,
        context: str,
        campaign_type: str,
        objective: str,
        count: int,
        newsroom_name: str,
        brand: BrandVoice,
        model: str,
        prompts: PromptService,
    ) -> list[str]:
        resolve_model(model)
        prompt = await prompts.get_prompt(
            CTA_BUTTONS,
            self._suggestion_variables(context, campaign_type, objective, count, newsroom_name, brand),
        )
        mock = {
            "cta_buttons": [
                "Support local news",
                "Become a member",
                "Give today",
                "Join your neighbors",
                "Keep reporting local",
            ][:count]
        }
        raw = await self._complete_json(model, prompt, mock)
        return format_suggestions(raw, ("cta_buttons", "ctaButtons"), count, max_length=40)

    async def build_grounding_library(
        self,
        newsroom_info: str,
        existing_content: str,
        newsroom_name: str,
        model: str,
        prompts: PromptService,
    ) -> dict[str, Any]:
        """
        Draft brand guidelines from a newsroom description and sample copy.

        Raises:
            AIResponseParseError: The answer lacks tone or voice
        """
        resolve_model(model)
        prompt = await prompts.get_prompt(
            GROUNDING_LIBRARY,
            {
                "newsroom_name": newsroom_name,
                "newsroom_info": newsroom_info,
                "existing_content": existing_content or "None provided",
            },
        )
        mock = {
            "name": f"{newsroom_name} brand guidelines",
            "tone": "Warm, direct and community-minded",
            "voice": f"{newsroom_name} speaking as a trusted neighbor",
            "key_messages": ["Independent local journalism depends on reader support"],
            "guidelines": newsroom_info,
        }
        raw = await self._complete_json(model, prompt, mock)
        return format_brand_profile(raw)

    async def optimize_email_content(
        self,
        content_type: str,
        campaign_context: str,
        target_audience: str,
        main_goal: str,
        existing_text: str,
        newsroom_name: str,
        brand: BrandVoice,
        model: str,
        prompts: PromptService,
    ) -> list[dict[str, Any]]:
        """Scored subject line, preheader or button text options, best first."""
        resolve_model(model)
        label = OPTIMIZER_CONTENT_TYPES[content_type]
        prompt = await prompts.get_prompt(
            EMAIL_OPTIMIZER,
            {
                "content_label": label,
                "newsroom_name": newsroom_name,
                "campaign_context": campaign_context,
                "target_audience": target_audience,
                "main_goal": main_goal,
                "existing_text": existing_text or "None",
                "tone": brand.tone,
                "voice": brand.voice,
            },
        )
        mock = {
            "options": [
                {
                    "text": existing_text or f"{newsroom_name}: {main_goal}"[:SUBJECT_MAX_LENGTH],
                    "reasoning": f"Mock {label}. Configure an AI provider key for real options.",
                    "score": 70,
                    "category": "general",
                }
            ]
        }
        raw = await self._complete_json(model, prompt, mock)
        return format_optimizer_options(raw)

    @staticmethod
    def _mock_campaign(request: CampaignRequest) -> dict[str, Any]:
        focus = OBJECTIVE_FOCUS.get(request.objective, request.objective)
        return {
            "subject": f"{request.newsroom_name}: your community needs you",
            "preview_text": f"Help {request.newsroom_name} keep local journalism strong.",
            "content": (
                f"Dear reader,\n\n{request.context}\n\n"
                f"{request.newsroom_name} depends on readers like you. "
                + " ".join(request.brand.key_messages)
            ).strip(),
            "cta": "Support local news today",
            "insights": [
                f"Mock response focused on {focus}. Configure an AI provider key for real copy.",
                "Lead with a concrete local story to raise engagement.",
                "Keep a single call-to-action above the fold.",
            ],
            "metrics": {
                "estimated_open_rate": 25,
                "estimated_click_rate": 4,
                "estimated_conversion": 1,
            },
        }

    @staticmethod
    def _mock_plan(title: str, newsroom_name: str, inputs: dict[str, Any]) -> str:
        goal = inputs.get("campaign_goal") or "grow reader support"
        return (
            f"# {title}\n\n"
            "Strategy summary\n\n"
            f"Mock plan for {newsroom_name} to {goal}. "
            "Configure an AI provider key for a real plan.\n\n"
            "Phases, dates, and touchplan\n"
            "- Launch (Week 1)\n"
            "  - Day 1 (Monday): Announce the campaign with the lead story\n"
            "  - Day 4 (Thursday): Share a reader testimonial\n"
            "- Final push (Week 2)\n"
            "  - Day 8 (Monday): Progress update toward the goal\n"
            "  - Day 12 (Friday): Last-chance reminder\n\n"
            "Success metrics\n\n"
            "Track opens, clicks and gifts per email."
        )

    @staticmethod
    def _mock_evaluation(criteria: list[str]) -> dict[str, Any]:
        names = [c.split(":", 1)[0] for c in criteria]
        return {
            "overall_score": 70,
            "category_scores": {name: 70 for name in names},
            "recommendations": [
                "Mock evaluation. Configure an AI provider key for a real review.",
            ],
        }


# Singleton instance
campaign_ai_service = CampaignAIService()
