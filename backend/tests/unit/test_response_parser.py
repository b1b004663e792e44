"""
Tests for parsing and normalizing model answers.
"""

import pytest

from adapters.ai.response_parser import (
    format_brand_profile,
    format_campaign_response,
    format_evaluation_response,
    format_optimizer_options,
    format_plan_response,
    format_suggestions,
    parse_json_response,
    strip_code_fences,
)
from core.exceptions import AIResponseParseError


class TestParseJsonResponse:
    def test_plain_json(self):
        assert parse_json_response('{"subject": "Hi"}') == {"subject": "Hi"}

    def test_strips_markdown_fence(self):
        text = 'Here you go:\n```json\n{"subject": "Hi"}\n```\nThanks'
        assert parse_json_response(text) == {"subject": "Hi"}

    def test_recovers_object_from_surrounding_prose(self):
        text = 'Sure! {"overall_score": 80} Let me know if you need more.'
        assert parse_json_response(text) == {"overall_score": 80}

    def test_empty_text_raises(self):
        with pytest.raises(AIResponseParseError):
            parse_json_response("   ")

    def test_garbage_raises(self):
        with pytest.raises(AIResponseParseError):
            parse_json_response("I cannot help with that.")

    def test_non_object_json_raises(self):
        with pytest.raises(AIResponseParseError):
            parse_json_response("[1, 2, 3]")

    def test_parse_error_maps_to_bad_gateway(self):
        assert AIResponseParseError.status_code == 502

    def test_strip_code_fences_without_fence(self):
        assert strip_code_fences("  {}  ") == "{}"


class TestFormatCampaignResponse:
    def test_subject_truncated_to_50(self):
        result = format_campaign_response({"subject": "x" * 80})
        assert result["subject"] == "x" * 50

    def test_preview_truncated_with_ellipsis(self):
        result = format_campaign_response({"preview_text": "y" * 120})
        assert len(result["preview_text"]) == 90
        assert result["preview_text"].endswith("...")

    def test_short_preview_untouched(self):
        result = format_campaign_response({"preview_text": "Short preview"})
        assert result["preview_text"] == "Short preview"

    def test_accepts_camel_case_keys(self):
        result = format_campaign_response(
            {
                "subjectLine": "Support us",
                "previewText": "Every dollar counts",
                "callToAction": "Give now",
                "metrics": {"estimatedOpenRate": 31, "estimatedClickRate": 5.5},
            }
        )
        assert result["subject"] == "Support us"
        assert result["preview_text"] == "Every dollar counts"
        assert result["cta"] == "Give now"
        assert result["metrics"]["estimated_open_rate"] == 31
        assert result["metrics"]["estimated_click_rate"] == 5.5
        assert result["metrics"]["estimated_conversion"] == 1

    def test_metric_defaults(self):
        result = format_campaign_response({"content": "Body"})
        assert result["metrics"] == {
            "estimated_open_rate": 25,
            "estimated_click_rate": 4,
            "estimated_conversion": 1,
        }
        assert result["insights"] == []
        assert result["cta"] == ""

    def test_non_numeric_metrics_fall_back(self):
        result = format_campaign_response(
            {"metrics": {"estimated_open_rate": "high", "estimated_click_rate": True}}
        )
        assert result["metrics"]["estimated_open_rate"] == 25
        assert result["metrics"]["estimated_click_rate"] == 4

    def test_non_finite_metrics_fall_back(self):
        raw = parse_json_response(
            '{"metrics": {"estimated_open_rate": NaN, "estimated_click_rate": Infinity}}'
        )
        result = format_campaign_response(raw)
        assert result["metrics"]["estimated_open_rate"] == 25
        assert result["metrics"]["estimated_click_rate"] == 4

    def test_missing_subject_stays_none(self):
        result = format_campaign_response({"content": "Social post"})
        assert result["subject"] is None
        assert result["preview_text"] is None


class TestFormatEvaluationResponse:
    def test_scores_clamped(self):
        result = format_evaluation_response(
            {
                "overall_score": 140,
                "category_scores": {"clarity": -5, "urgency": 88.6},
                "recommendations": ["Shorter subject"],
            }
        )
        assert result["overall_score"] == 100
        assert result["category_scores"] == {"clarity": 0, "urgency": 89}
        assert result["recommendations"] == ["Shorter subject"]

    def test_invalid_entries_dropped(self):
        result = format_evaluation_response(
            {"overallScore": "great", "categoryScores": {"tone": "n/a", "focus": 70}}
        )
        assert result["overall_score"] == 0
        assert result["category_scores"] == {"focus": 70}
        assert result["recommendations"] == []

    def test_non_finite_scores_dropped(self):
        raw = parse_json_response(
            '{"overall_score": NaN, "category_scores": {"a": Infinity, "b": -Infinity, "c": 55}}'
        )
        result = format_evaluation_response(raw)
        assert result["overall_score"] == 0
        assert result["category_scores"] == {"c": 55}


class TestFormatSuggestions:
    def test_dedupes_trims_and_caps(self):
        raw = {"subjectLines": ["  Keep it local ", "keep it local", "", None, 42, "Third", "Fourth"]}
        result = format_suggestions(raw, ("subject_lines", "subjectLines"), count=3)
        assert result == ["Keep it local", "42", "Third"]

    def test_truncates_to_max_length(self):
        raw = {"subject_lines": ["x" * 80]}
        result = format_suggestions(raw, ("subject_lines",), count=5, max_length=50)
        assert result == ["x" * 50]

    def test_missing_list_gives_empty(self):
        assert format_suggestions({"subject_lines": "one line"}, ("subject_lines",), 5) == []


class TestFormatBrandProfile:
    def test_normalizes_keys(self):
        result = format_brand_profile(
            {
                "name": " Ledger voice ",
                "tone": "Warm",
                "voice": "Neighbourly",
                "keyMessages": ["Reader-funded", " "],
            }
        )
        assert result == {
            "name": "Ledger voice",
            "tone": "Warm",
            "voice": "Neighbourly",
            "key_messages": ["Reader-funded"],
            "guidelines": None,
        }

    def test_missing_voice_is_parse_error(self):
        with pytest.raises(AIResponseParseError):
            format_brand_profile({"tone": "Warm", "voice": "  "})


class TestFormatOptimizerOptions:
    def test_sorted_by_score_and_clamped(self):
        result = format_optimizer_options(
            {
                "options": [
                    {"text": "Low", "score": 40},
                    {"text": "High", "score": 140, "reasoning": "Urgent", "category": "urgency"},
                    {"text": "", "score": 99},
                    "not an option",
                    {"text": "Unscored", "score": "n/a"},
                ]
            }
        )
        assert [o["text"] for o in result] == ["High", "Low", "Unscored"]
        assert result[0] == {
            "text": "High",
            "reasoning": "Urgent",
            "score": 100,
            "category": "urgency",
        }
        assert result[2]["score"] == 0
        assert result[1]["category"] == "general"


class TestFormatPlanResponse:
    def test_accepts_camel_case(self):
        assert format_plan_response({"generatedPlan": "  # Plan\n"}) == "# Plan"

    def test_empty_plan_is_parse_error(self):
        with pytest.raises(AIResponseParseError):
            format_plan_response({"plan": ""})
